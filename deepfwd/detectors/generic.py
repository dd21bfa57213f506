"""
Universal fallback detector built on ``ForwardParser``.
"""

from deepfwd.detectors.base import ForwardDetector, not_found
from deepfwd.detectors.config import PRIORITY_GENERIC
from deepfwd.detectors.forward_parser import ForwardParser
from deepfwd.ir import DetectionResult


class GenericDetector(ForwardDetector):
    name = "generic"
    priority = PRIORITY_GENERIC

    def __init__(self, parser: ForwardParser = None):
        self.parser = parser or ForwardParser()

    def detect(self, text: str) -> DetectionResult:
        parsed = self.parser.read(text)
        if not parsed.forwarded or parsed.email is None:
            return not_found()
        return DetectionResult(
            found=True,
            email=parsed.email,
            message=parsed.message,
            confidence="high",
        )
