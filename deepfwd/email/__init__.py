"""
Email normalisation subpackage.

Public API:
- ``AddressNormalizer``: header values → clean Address
- ``DateParser``       : staged date parsing to ISO-8601 UTC
- ``ContentCleaner``   : text cleanup, HTML→text, header-block slicing
- ``AttachmentHandler``: inline attachment markers, MIME attachment metadata
- ``EmailParser``      : MIME parsing and header decoding
"""

from deepfwd.email.address import AddressNormalizer
from deepfwd.email.attachment_handler import AttachmentHandler
from deepfwd.email.content_cleaner import ContentCleaner
from deepfwd.email.date_parser import DateParser
from deepfwd.email.email_parser import EmailParser

__all__ = [
    "AddressNormalizer",
    "AttachmentHandler",
    "ContentCleaner",
    "DateParser",
    "EmailParser",
]
