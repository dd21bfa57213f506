"""
Low-level MIME parsing: RFC-2822 parsing of str/bytes input, header
decoding, text-body selection and part traversal.
"""

from __future__ import annotations

from datetime import datetime
from email import policy
from email.header import decode_header
from email.message import Message
from email.parser import BytesParser, Parser
from email.utils import getaddresses, parsedate_to_datetime
from typing import List, Optional, Tuple, Union

from deepfwd.email.attachment_handler import AttachmentHandler
from deepfwd.email.content_cleaner import ContentCleaner
from deepfwd.ir import Address, Attachment
from deepfwd.logger import get_logger

logger = get_logger(__name__)

# at least one of these must be present for input to count as a MIME message
KNOWN_HEADERS = (
    "from", "to", "subject", "date", "message-id", "mime-version", "content-type", "received",
)

ENCODED_TRANSFER_ENCODINGS = ("base64", "quoted-printable", "x-uuencode", "uuencode", "uue", "x-uue")


def _has_surrogates(text: str) -> bool:
    """Whether *text* carries surrogate-escaped bytes from a binary parse."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return True
    return False


class EmailParser:
    """Parse raw messages and read headers, bodies and parts from them."""

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @staticmethod
    def parse(raw: Union[str, bytes]) -> Message:
        """Parse *raw* with the modern ``email`` policy."""
        if isinstance(raw, bytes):
            return BytesParser(policy=policy.default).parsebytes(raw)
        return Parser(policy=policy.default).parsestr(raw)

    @staticmethod
    def has_headers(msg: Message) -> bool:
        return any(key.lower() in KNOWN_HEADERS for key in msg.keys())

    # ------------------------------------------------------------------
    # Header decoding
    # ------------------------------------------------------------------

    @staticmethod
    def decode_mime_header(header_value: Optional[str]) -> str:
        """Decode a MIME header value into a plain string."""
        if not header_value:
            return ""
        decoded_parts = decode_header(str(header_value))
        decoded_string = ""
        for part, encoding in decoded_parts:
            if isinstance(part, bytes):
                try:
                    decoded_string += part.decode(encoding if encoding else "utf-8", errors="ignore")
                except LookupError:
                    decoded_string += part.decode("utf-8", errors="ignore")
            else:
                decoded_string += part
        return decoded_string

    @classmethod
    def header_address(cls, msg: Message, name: str) -> Optional[Address]:
        """First mailbox of an address header, or ``None``."""
        try:
            value = cls.decode_mime_header(msg.get(name, ""))
        except (TypeError, ValueError, IndexError) as e:
            logger.debug("Unreadable %s header: %s", name, e)
            return None
        if not value:
            return None
        pairs = getaddresses([value])
        if not pairs:
            return None
        display_name, addr = pairs[0]
        if not display_name and not addr:
            return None
        return Address(name=display_name or None, address=addr or None)

    @classmethod
    def header_text(cls, msg: Message, name: str) -> Optional[str]:
        try:
            value = cls.decode_mime_header(msg.get(name, ""))
        except (TypeError, ValueError, IndexError):
            return None
        return value.strip() or None

    @classmethod
    def header_date(cls, msg: Message) -> Tuple[Optional[str], Optional[datetime]]:
        """Raw ``Date`` header and its parsed value (``None`` when unparseable)."""
        raw = cls.header_text(msg, "Date")
        if not raw:
            return None, None
        try:
            return raw, parsedate_to_datetime(raw)
        except (TypeError, ValueError, IndexError):
            return raw, None

    # ------------------------------------------------------------------
    # Part traversal
    # ------------------------------------------------------------------

    @staticmethod
    def _decode_payload(part: Message) -> Optional[str]:
        cte = str(part.get("Content-Transfer-Encoding", "") or "").strip().lower()
        raw = part.get_payload()
        if isinstance(raw, str) and cte not in ENCODED_TRANSFER_ENCODINGS and not _has_surrogates(raw):
            # parsed from text: already decoded
            return raw

        payload = part.get_payload(decode=True)
        if not payload:
            return None
        charset = part.get_content_charset() or "utf-8"
        try:
            return payload.decode(charset, errors="ignore")
        except LookupError:
            return payload.decode("utf-8", errors="ignore")

    @classmethod
    def walk_level(cls, msg: Message) -> Tuple[dict, List[Attachment], List[Message]]:
        """Collect the text bodies, attachments and nested messages of one level.

        Nested ``message/rfc822`` parts are reported but never entered, so
        the bodies belong to this level only.

        Returns ``({"text", "html"}, attachments, nested_messages)``.
        """
        bodies: dict = {"text": None, "html": None}
        attachments: List[Attachment] = []
        nested: List[Message] = []

        def _process_part(part: Message) -> None:
            content_type = part.get_content_type()

            if content_type == "message/rfc822":
                attachments.append(AttachmentHandler.from_mime_part(part))
                inner = part.get_payload()
                if isinstance(inner, list) and inner:
                    nested.append(inner[0])
                elif isinstance(inner, Message):
                    nested.append(inner)
                return

            if part.is_multipart():
                for subpart in part.iter_parts():
                    _process_part(subpart)
                return

            if AttachmentHandler.is_attachment_part(part):
                attachments.append(AttachmentHandler.from_mime_part(part))
                return

            if content_type == "text/plain" and bodies["text"] is None:
                bodies["text"] = cls._decode_payload(part)
            elif content_type == "text/html" and bodies["html"] is None:
                bodies["html"] = cls._decode_payload(part)

        _process_part(msg)
        return bodies, attachments, nested

    @staticmethod
    def body_text(bodies: dict) -> Optional[str]:
        """``text/plain`` body, else the ``text/html`` body as text."""
        if bodies.get("text"):
            return bodies["text"]
        if bodies.get("html"):
            return ContentCleaner.html_to_text(bodies["html"])
        return None
