"""
Inline unwrap engine.

Repeatedly asks the detector registry for the next forward boundary in
the working text, records one history entry per level and continues with
the forwarded body, until nothing more is found or the depth ceiling is
reached.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from deepfwd.detectors.registry import DetectorRegistry
from deepfwd.email.address import AddressNormalizer
from deepfwd.email.attachment_handler import AttachmentHandler
from deepfwd.email.content_cleaner import ContentCleaner
from deepfwd.email.date_parser import DateParser
from deepfwd.ir import DetectionResult, Diagnostics, HistoryEntry, InlineResult
from deepfwd.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_RECURSIVE_DEPTH = 15
NO_FORWARD_WARNING = "No forwarded content detected"


class InlineUnwrapper:
    """
    Bounded detection loop over forwarded text.

    History is built shallow to deep and returned deepest first. Each
    entry's ``text`` holds only the content exclusive to its level.
    """

    def __init__(
        self,
        registry: Optional[DetectorRegistry] = None,
        custom_detectors: Iterable = (),
        max_recursive_depth: int = DEFAULT_MAX_RECURSIVE_DEPTH,
    ):
        self.registry = registry or DetectorRegistry(custom_detectors)
        self.max_recursive_depth = max_recursive_depth

    def run(
        self,
        text: str,
        depth: int = 0,
        base_history: Optional[List[HistoryEntry]] = None,
    ) -> InlineResult:
        """Unwrap *text* starting at *depth*.

        Args:
            text: working text of the starting level
            depth: starting depth (MIME levels already unwrapped)
            base_history: entries recorded by the MIME stage, shallow to deep
        """
        history: List[HistoryEntry] = [e.model_copy(deep=True) for e in base_history or []]
        warnings: List[str] = []
        if not history:
            history.append(HistoryEntry(depth=depth, text="", flags=["level:root", "trust:medium_inline"]))

        current = (text or "").strip()
        start_depth = depth
        current_depth = depth

        while current_depth < self.max_recursive_depth:
            result = self.registry.detect(current)
            if not result.found or result.email is None:
                self._finalize(history[-1], current, mark_silent=False)
                break

            logger.debug("Level %d: forward found by %s", current_depth + 1, result.detector)
            self._finalize(history[-1], result.message or "")
            history.append(self._new_entry(result, current_depth + 1, warnings))
            current = (result.email.body or "").strip()
            current_depth += 1
        else:
            logger.info("Inline unwrap stopped at depth ceiling %d", self.max_recursive_depth)

        iterations = current_depth - start_depth
        deepest = history[-1]
        if iterations > 0:
            deepest.add_flag("level:deepest")
            diagnostics = Diagnostics(
                method=deepest.method() or "inline",
                depth=iterations,
                parsed_ok=True,
                warnings=warnings,
            )
        else:
            diagnostics = Diagnostics(
                method="fallback",
                depth=0,
                parsed_ok=False,
                warnings=warnings + [NO_FORWARD_WARNING],
            )

        return InlineResult(
            history=list(reversed(history)),
            attachments=list(deepest.attachments),
            diagnostics=diagnostics,
        )

    # ------------------------------------------------------------------
    # Level transitions
    # ------------------------------------------------------------------

    @staticmethod
    def _finalize(entry: HistoryEntry, text: str, mark_silent: bool = True) -> None:
        """Set a level's exclusive text and pick up its attachment markers."""
        entry.text = ContentCleaner.clean_text(text) or ""
        if mark_silent and not entry.text:
            entry.add_flag("content:silent_forward")
        entry.attachments = AttachmentHandler.merge(
            entry.attachments, AttachmentHandler.extract_inline(entry.text)
        )

    @staticmethod
    def _new_entry(result: DetectionResult, depth: int, warnings: List[str]) -> HistoryEntry:
        email = result.email
        body = ContentCleaner.clean_text(email.body or "") or ""

        entry = HistoryEntry(
            from_=AddressNormalizer.coerce(email.from_),
            to=AddressNormalizer.coerce(email.to),
            subject=email.subject or None,
            date_raw=email.date or None,
            depth=depth,
            text=body,
            flags=[f"method:{result.detector or 'unknown'}", "trust:medium_inline"],
            attachments=AttachmentHandler.extract_inline(body),
        )
        if not body:
            entry.add_flag("content:silent_forward")

        if email.date:
            entry.date_iso = DateParser.to_iso(email.date)
            if entry.date_iso is None:
                warnings.append(f'Could not normalize date: "{email.date}"')
                entry.add_flag("date:unparseable")
        return entry
