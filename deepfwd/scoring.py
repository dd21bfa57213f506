"""
Confidence scoring
==================

Audits a detected forward depth against the body it came from. Each
forward level usually contributes about two bracketed addresses (sender
and recipient); large deviations, more sender headers than levels, or
deeper ``>`` quoting than levels all hint at a missed or a spurious
boundary.

The score starts at 100 and every triggered signal adds its delta; the
result is clamped to 0..100.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List

from deepfwd.email.config import (
    BLOCK_SPLIT_RE,
    BRACKETED_EMAIL_RE,
    HIGH_DENSITY_RATIO,
    INCONSISTENT_RATIO_MIN,
    LEADING_QUOTES_RE,
    PARTIAL_RATIO_MAX,
    RECIPIENT_KEYWORDS,
    SCORE_CONTEXT_WINDOW,
    SENDER_KEYWORDS,
    TRAILING_SENDER_KEYWORDS,
    VALIDATED_EXPLAINED_SHARE,
)
from deepfwd.ir import ConfidenceResult


def _keyword_alternation(words: Iterable[str]) -> str:
    unique = sorted(set(words), key=len, reverse=True)
    return "|".join(re.escape(w) for w in unique)


_PREFIX = r"[*_>]*\s*(?<!\w)"
_SUFFIX = r"\s*[*_]*\s*"

# any header keyword followed by a colon
HEADER_CONTEXT_RE = re.compile(
    rf"{_PREFIX}(?:{_keyword_alternation(SENDER_KEYWORDS + RECIPIENT_KEYWORDS)}){_SUFFIX}:",
    re.IGNORECASE,
)
# a sender keyword whose value runs (over at most one line break) up to the address
SENDER_HEADER_RE = re.compile(
    rf"{_PREFIX}(?:{_keyword_alternation(SENDER_KEYWORDS)}){_SUFFIX}:\s*(?:[^:\n]*\n\s*)?[^:\n]*\Z",
    re.IGNORECASE,
)
# "<addr> wrote:" and its translations right after the address
TRAILING_SENDER_RE = re.compile(
    rf"^\s*[*_>]*\s*(?:{_keyword_alternation(TRAILING_SENDER_KEYWORDS)})\s*:?",
    re.IGNORECASE,
)


class ConfidenceScorer:
    """Stateless scorer; see module docstring."""

    @classmethod
    def score(cls, full_body: str, depth: int) -> ConfidenceResult:
        if depth <= 0:
            return ConfidenceResult(
                score=100,
                description="N/A (No depth detected)",
                reasons=["No depth detected"],
            )

        full_body = full_body or ""
        quote_depth = cls.max_quote_depth(full_body)

        matches = list(BRACKETED_EMAIL_RE.finditer(full_body))
        email_count = len(matches)
        ratio = email_count / depth

        explained = 0
        senders = 0
        for m in matches:
            pre_text = full_body[max(0, m.start() - SCORE_CONTEXT_WINDOW): m.start()]
            post_text = full_body[m.end():]
            current_block = BLOCK_SPLIT_RE.split(pre_text)[-1]
            if HEADER_CONTEXT_RE.search(current_block):
                explained += 1
            if SENDER_HEADER_RE.search(pre_text) or TRAILING_SENDER_RE.match(post_text):
                senders += 1

        signals: Dict[str, int] = {}
        reasons: List[str] = []

        # -- density -----------------------------------------------------------
        if email_count == 0:
            signals["penalty_ghost"] = -100
            reasons.append("Ghost Forward: 0 emails found in the body")
        elif ratio < INCONSISTENT_RATIO_MIN:
            signals["penalty_inconsistent"] = -100
            reasons.append(
                f"Inconsistent Density: Ratio {ratio:.2f} is too low (expected >= {INCONSISTENT_RATIO_MIN})"
            )
        elif ratio <= PARTIAL_RATIO_MAX:
            signals["adjustment_partial"] = -50
            reasons.append(f"Partial Chain: Ratio {ratio:.2f} suggests ~1 email per detected level")
        elif ratio > HIGH_DENSITY_RATIO:
            signals["adjustment_high_density"] = -75
            reasons.append(f"High Density: Ratio {ratio:.2f} is high (many emails per level)")
            share = explained / email_count
            if share >= VALIDATED_EXPLAINED_SHARE:
                signals["bonus_validated_density"] = 75
                reasons.append(f"Validated Density: {_percent(share)}% of emails are preceded by headers")
            else:
                reasons.append(
                    f"Unvalidated Density: Suspect, only {_percent(share)}% of emails have header context"
                )
        else:
            reasons.append(f"Standard Density: Ratio {ratio:.2f} is optimal (~2 emails per level)")

        # -- coherence -----------------------------------------------------------
        if senders > depth:
            signals["penalty_sender_mismatch"] = -75
            reasons.append(f"Sender Mismatch: Detected {senders} senders but only {depth} forward levels")
        if quote_depth > depth:
            signals["penalty_quote_mismatch"] = -75
            reasons.append(f"Quote Mismatch: Max quote nesting {quote_depth} exceeds detected depth {depth}")

        score = max(0, min(100, 100 + sum(signals.values())))
        return ConfidenceResult(
            score=score,
            description=f"{_band(score)}: {'; '.join(reasons)}",
            ratio=ratio,
            email_count=email_count,
            sender_count=senders,
            quote_depth=quote_depth,
            signals=signals,
            reasons=reasons,
        )

    @staticmethod
    def max_quote_depth(text: str) -> int:
        deepest = 0
        for line in text.split("\n"):
            m = LEADING_QUOTES_RE.match(line)
            if m:
                deepest = max(deepest, m.group(0).count(">"))
        return deepest


def _band(score: int) -> str:
    if score == 100:
        return "High Confidence"
    if score >= 50:
        return "Medium Confidence"
    return "Low Confidence"


def _percent(share: float) -> int:
    return int(share * 100 + 0.5)
