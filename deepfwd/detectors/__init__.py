"""
Forward detectors.

Public API:
- ``ForwardDetector`` : detector interface
- ``DetectorRegistry``: priority-ordered detector collection
- the built-in variants and the generic ``ForwardParser``
"""

from deepfwd.detectors.base import ForwardDetector, not_found
from deepfwd.detectors.forward_parser import ForwardParse, ForwardParser
from deepfwd.detectors.generic import GenericDetector
from deepfwd.detectors.outlook_empty_header import OutlookEmptyHeaderDetector
from deepfwd.detectors.outlook_fr import OutlookFrDetector
from deepfwd.detectors.outlook_reverse_fr import OutlookReverseFrDetector
from deepfwd.detectors.plain_header import PlainHeaderDetector
from deepfwd.detectors.registry import DetectorRegistry
from deepfwd.detectors.reply import ReplyDetector

__all__ = [
    "DetectorRegistry",
    "ForwardDetector",
    "ForwardParse",
    "ForwardParser",
    "GenericDetector",
    "OutlookEmptyHeaderDetector",
    "OutlookFrDetector",
    "OutlookReverseFrDetector",
    "PlainHeaderDetector",
    "ReplyDetector",
    "not_found",
]
