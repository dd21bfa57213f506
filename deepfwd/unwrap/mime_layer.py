"""
MIME unwrap stage.

Descends through messages attached as ``message/rfc822`` parts, one
history entry per level, and hands the deepest level's text body to the
inline engine as a ``MimeResult`` seed.
"""

from __future__ import annotations

from email.errors import MessageError
from email.message import Message
from typing import List, Union

from deepfwd.email.content_cleaner import ContentCleaner
from deepfwd.email.date_parser import DateParser
from deepfwd.email.email_parser import EmailParser
from deepfwd.ir import Attachment, HistoryEntry, MimeMetadata, MimeResult
from deepfwd.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 15


class InvalidInputError(ValueError):
    """Raised when the input is neither text nor bytes."""


def as_text(raw: Union[str, bytes]) -> str:
    """Decode bytes as UTF-8 (lossy); text passes through."""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


class MimeUnwrapper:
    """Walk nested ``message/rfc822`` layers of a raw message."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth

    def run(self, raw: Union[str, bytes]) -> MimeResult:
        if not isinstance(raw, (str, bytes)):
            raise InvalidInputError("MIME parser input must be str or bytes")

        try:
            msg = EmailParser.parse(raw)
        except (MessageError, ValueError, LookupError) as e:
            logger.warning("MIME parse failed, treating input as plain text: %s", e)
            return MimeResult(raw_body=as_text(raw))

        if not EmailParser.has_headers(msg):
            logger.debug("No message headers; input treated as plain text")
            return MimeResult(raw_body=as_text(raw))

        history: List[HistoryEntry] = []
        depth = 0
        is_rfc822 = False
        raw_body = as_text(raw)
        attachments: List[Attachment] = []
        metadata = None

        while True:
            try:
                bodies, attachments, nested = EmailParser.walk_level(msg)
                entry, metadata = self._record_level(msg, bodies, attachments, depth)
            except (MessageError, ValueError, LookupError, TypeError) as e:
                logger.warning("MIME level %d unreadable, stopping descent: %s", depth, e)
                break

            history.append(entry)
            raw_body = entry.text or ""

            if not nested or depth + 1 >= self.max_depth:
                break
            msg = nested[-1]
            depth += 1
            is_rfc822 = True

        logger.debug("MIME unwrap: %d level(s), rfc822=%s", len(history), is_rfc822)
        return MimeResult(
            raw_body=raw_body,
            depth=depth,
            last_attachments=attachments,
            is_rfc822=is_rfc822,
            history=history,
            metadata=metadata,
        )

    @staticmethod
    def _record_level(msg: Message, bodies: dict, attachments: List[Attachment], depth: int):
        sender = EmailParser.header_address(msg, "From")
        recipient = EmailParser.header_address(msg, "To")
        subject = EmailParser.header_text(msg, "Subject")
        date_raw, date = EmailParser.header_date(msg)
        text = EmailParser.body_text(bodies)

        entry = HistoryEntry(
            from_=sender,
            to=recipient,
            subject=subject,
            date_raw=date_raw,
            date_iso=DateParser.format_iso(date) if date else None,
            text=ContentCleaner.clean_text(text) if text else "",
            depth=depth,
            flags=["trust:high_mime"],
            attachments=list(attachments),
        )
        metadata = MimeMetadata(from_=sender, to=recipient, subject=subject, date=date)
        return entry, metadata
