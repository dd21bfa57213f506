"""
Quoted replies introduced by an attribution line, e.g.::

    On Mon, 26 Jan 2026 at 10:00, Alice Martin <alice@example.com> wrote:
    > quoted text

Localised forms: ``Le … a écrit :``, ``Am … schrieb …:``, ``El … escribió:``,
``Il … ha scritto:``, ``Op … schreef …:`` / ``Op … geschreven:``. Clients
wrap long attributions, so a line joined with its successor is tried too.
"""

from typing import Optional, Tuple

from deepfwd.detectors import header_block as hb
from deepfwd.detectors.base import ForwardDetector, not_found
from deepfwd.detectors.config import (
    ATTRIBUTION_ADDRESS_RE,
    ATTRIBUTION_DUTCH_HEEFT_RE,
    ATTRIBUTION_LEADING_VERB_RE,
    ATTRIBUTION_TIME_RE,
    ATTRIBUTION_TRAILING_VERB_RE,
    PRIORITY_REPLY,
)
from deepfwd.email.content_cleaner import ContentCleaner
from deepfwd.ir import Address, DetectionResult, ForwardedEmail


class ReplyDetector(ForwardDetector):
    name = "reply"
    priority = PRIORITY_REPLY

    def detect(self, text: str) -> DetectionResult:
        lines = hb.split_lines(text)

        for i, line in enumerate(lines):
            if not line.strip() or ContentCleaner.is_quoted(line):
                continue
            parsed = self.parse_attribution(line)
            last = i
            if parsed is None and i + 1 < len(lines):
                parsed = self.parse_attribution(f"{line} {lines[i + 1].strip()}")
                last = i + 1
            if parsed is None:
                continue

            quoted = self._quoted_block(lines, last + 1)
            if quoted is None:
                continue

            date_raw, sender = parsed
            return DetectionResult(
                found=True,
                email=ForwardedEmail(from_=sender, date=date_raw, body=quoted),
                message=hb.message_before(lines, i),
                confidence="medium",
            )

        return not_found()

    # ------------------------------------------------------------------
    # Attribution parsing
    # ------------------------------------------------------------------

    @classmethod
    def parse_attribution(cls, line: str) -> Optional[Tuple[Optional[str], Address]]:
        """``(date, sender)`` of an attribution line, ``None`` when *line* is not one.

        The sender must carry an email address.
        """
        line = line.replace("< ", "<").replace(" >", ">")

        leading = ATTRIBUTION_LEADING_VERB_RE.match(line)
        if leading:
            sender = cls._sender(leading.group("who"))
            if sender is None:
                return None
            return leading.group("date").strip(" ,") or None, sender

        trailing = ATTRIBUTION_TRAILING_VERB_RE.match(line)
        if not trailing:
            return None
        rest = trailing.group("rest")
        addresses = list(ATTRIBUTION_ADDRESS_RE.finditer(rest))
        if not addresses:
            return None
        address = addresses[-1]
        before = rest[: address.start()].strip(" ,")

        heeft = ATTRIBUTION_DUTCH_HEEFT_RE.search(before)
        if heeft:
            date_raw, name = before[: heeft.start()], before[heeft.end():]
        else:
            date_raw, name = cls._split_date_name(before)
        name = (name or "").strip(" ,\"'") or None
        return (date_raw or "").strip(" ,") or None, Address(name=name, address=address.group(1))

    @staticmethod
    def _split_date_name(text: str) -> Tuple[str, str]:
        """Split ``<date>[,] <name>`` after the time of day, else at the last comma."""
        times = list(ATTRIBUTION_TIME_RE.finditer(text))
        if times:
            cut = times[-1].end()
            return text[:cut], text[cut:]
        date_raw, _, name = text.rpartition(",")
        if not date_raw:
            return text, ""
        return date_raw, name

    @staticmethod
    def _sender(who: str) -> Optional[Address]:
        match = ATTRIBUTION_ADDRESS_RE.search(who)
        if not match:
            return None
        name = who[: match.start()].strip(" ,\"'") or None
        return Address(name=name, address=match.group(1))

    # ------------------------------------------------------------------
    # Quoted block
    # ------------------------------------------------------------------

    @staticmethod
    def _quoted_block(lines, start: int) -> Optional[str]:
        """Quoted lines following an attribution, one quote level removed.

        ``None`` when the next non-blank line is not quoted.
        """
        idx = start
        while idx < len(lines) and not lines[idx].strip():
            idx += 1
        if idx >= len(lines) or not ContentCleaner.is_quoted(lines[idx]):
            return None

        block = []
        while idx < len(lines) and (ContentCleaner.is_quoted(lines[idx]) or not lines[idx].strip()):
            block.append(lines[idx])
            idx += 1
        return ContentCleaner.strip_quotes("\n".join(block))
