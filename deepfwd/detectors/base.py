"""
Detector base class
===================

Common interface of every forward detector.

A detector is any object with a ``name``, a ``priority`` and a
``detect(text)`` method; subclassing ``ForwardDetector`` is optional for
caller-supplied detectors.
"""

from abc import ABC, abstractmethod

from deepfwd.ir import DetectionResult


def not_found() -> DetectionResult:
    """The "no forward here" result."""
    return DetectionResult(found=False, confidence="low")


class ForwardDetector(ABC):
    """
    Abstract base of all detectors.

    Attributes:
        name: identifier recorded in ``method:<name>`` history flags
        priority: lower runs first and wins exact boundary ties

    ``detect`` must be pure and must not raise for content problems; a
    mismatch is reported with ``not_found()``.
    """

    name: str = ""
    priority: int = 0

    @abstractmethod
    def detect(self, text: str) -> DetectionResult:
        """
        Look for one forward boundary in *text*.

        Args:
            text: text of the current level

        Returns:
            DetectionResult; ``message`` is the text strictly before the
            forward block and ``email.body`` the text after its headers
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, priority={self.priority})"
