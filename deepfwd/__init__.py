"""
deepfwd: extract the deepest message from a chain of forwarded or replied emails.

    from deepfwd import extract

    result = extract(raw_eml_bytes)
    result.from_.address, result.subject, result.history[0].text
"""

from deepfwd.detectors import DetectorRegistry, ForwardDetector
from deepfwd.ir import (
    Address,
    Attachment,
    ConfidenceResult,
    DetectionResult,
    Diagnostics,
    ForwardedEmail,
    HistoryEntry,
    ResultObject,
)
from deepfwd.pipeline import ExtractOptions, extract
from deepfwd.scoring import ConfidenceScorer
from deepfwd.unwrap import InvalidInputError

__version__ = "0.1.0"

__all__ = [
    "Address",
    "Attachment",
    "ConfidenceResult",
    "ConfidenceScorer",
    "DetectionResult",
    "DetectorRegistry",
    "Diagnostics",
    "ExtractOptions",
    "ForwardDetector",
    "ForwardedEmail",
    "HistoryEntry",
    "InvalidInputError",
    "ResultObject",
    "extract",
]
