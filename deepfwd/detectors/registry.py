"""
Detector registry
=================

Holds every forward detector sorted by priority and picks, for one text,
the detection whose forward block starts earliest.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from deepfwd.detectors.base import not_found
from deepfwd.detectors.generic import GenericDetector
from deepfwd.detectors.outlook_empty_header import OutlookEmptyHeaderDetector
from deepfwd.detectors.outlook_fr import OutlookFrDetector
from deepfwd.detectors.outlook_reverse_fr import OutlookReverseFrDetector
from deepfwd.detectors.plain_header import PlainHeaderDetector
from deepfwd.detectors.reply import ReplyDetector
from deepfwd.ir import DetectionResult
from deepfwd.logger import get_logger

logger = get_logger(__name__)


def default_detectors() -> List[Any]:
    return [
        OutlookEmptyHeaderDetector(),
        OutlookReverseFrDetector(),
        PlainHeaderDetector(),
        OutlookFrDetector(),
        ReplyDetector(),
        GenericDetector(),
    ]


class DetectorRegistry:
    """
    Priority-ordered collection of detectors.

    Built-ins are registered on construction, caller-supplied detectors
    after them; any object with ``name``, ``priority`` and ``detect(text)``
    is accepted.
    """

    def __init__(self, custom_detectors: Iterable[Any] = ()):
        self._detectors: List[Any] = []
        for detector in default_detectors():
            self.register(detector)
        for detector in custom_detectors or ():
            self.register(detector)

    # -- public API ----------------------------------------------------------

    def register(self, detector: Any) -> None:
        """Add *detector*; the list stays sorted by ascending priority (stable)."""
        self._detectors.append(detector)
        self._detectors.sort(key=lambda d: d.priority)

    def detector_names(self) -> List[str]:
        return [d.name for d in self._detectors]

    def detect(self, text: str) -> DetectionResult:
        """Run every detector and keep the earliest valid forward boundary.

        Results without a usable sender are ignored. Equal boundary offsets
        go to the detector that ran first (lowest priority value).
        """
        best: Optional[DetectionResult] = None
        best_offset: Optional[int] = None

        for detector in self._detectors:
            result = self._run(detector, text)
            if result is None or not result.has_usable_sender():
                continue
            offset = result.boundary_offset
            logger.debug("Detector %s matched at offset %d", detector.name, offset)
            if best_offset is None or offset < best_offset:
                best_offset = offset
                best = result.model_copy(update={"detector": detector.name})

        return best if best is not None else not_found()

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def _run(detector: Any, text: str) -> Optional[DetectionResult]:
        try:
            result = detector.detect(text)
        except Exception as e:
            logger.warning("Detector %s failed: %s", getattr(detector, "name", detector), e)
            return None
        if isinstance(result, DetectionResult):
            return result
        if isinstance(result, dict):
            try:
                return DetectionResult.model_validate(result)
            except ValidationError as e:
                logger.warning("Detector %s returned an invalid result: %s", detector.name, e)
                return None
        return None
