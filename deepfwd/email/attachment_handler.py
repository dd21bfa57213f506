"""
Attachment metadata for forwarded levels.

Responsibilities:
- Spot attachment markers that mail clients leave in forwarded text
  (``<report.pdf>``, ``[scan.png]``, ``[image: logo.png]``).
- Describe real MIME attachment parts (filename, content type, size).
- Merge attachment lists without duplicate filenames.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from deepfwd.email.config import (
    DEFAULT_CONTENT_TYPE,
    EXTENSION_CONTENT_TYPES,
    INLINE_ATTACHMENT_RE,
)
from deepfwd.ir import Attachment


class AttachmentHandler:
    """Stateless helpers building ``Attachment`` records."""

    # ------------------------------------------------------------------
    # Inline markers
    # ------------------------------------------------------------------

    @staticmethod
    def extract_inline(text: Optional[str]) -> List[Attachment]:
        """Attachment markers found in *text*, one per filename.

        Only extensions from the known extension table count; anything
        else in angle brackets is more likely a URL or a host name.
        """
        if not isinstance(text, str):
            return []

        attachments: List[Attachment] = []
        seen = set()
        for match in INLINE_ATTACHMENT_RE.finditer(text):
            filename = match.group(1).strip()
            ext = match.group(2).lower()
            content_type = EXTENSION_CONTENT_TYPES.get(ext)
            if content_type is None or filename in seen:
                continue
            seen.add(filename)
            attachments.append(Attachment(filename=filename, content_type=content_type, size=0))
        return attachments

    # ------------------------------------------------------------------
    # MIME parts
    # ------------------------------------------------------------------

    @staticmethod
    def sanitize_filename(filename: Optional[str]) -> Optional[str]:
        """Drop directory parts and null bytes; ``None`` for special names."""
        if not filename:
            return None
        name = Path(filename.replace("\\", "/")).name
        name = name.replace("\x00", "").strip()
        if name in ("", ".", ".."):
            return None
        return name

    @classmethod
    def from_mime_part(cls, part) -> Attachment:
        """Metadata for one attachment part of an ``email.message`` tree."""
        content_type = part.get_content_type() or DEFAULT_CONTENT_TYPE
        if part.is_multipart() or content_type == "message/rfc822":
            payload = part.as_bytes()
        else:
            payload = part.get_payload(decode=True)
        return Attachment(
            filename=cls.sanitize_filename(part.get_filename()),
            content_type=content_type,
            size=len(payload) if payload else 0,
        )

    @staticmethod
    def is_attachment_part(part) -> bool:
        """Whether a leaf MIME part is an attachment rather than a body."""
        disposition = (part.get_content_disposition() or "").lower()
        content_type = part.get_content_type()
        if disposition == "attachment":
            return True
        if part.get_filename():
            return True
        if content_type in ("text/plain", "text/html"):
            return False
        return not content_type.startswith("multipart/")

    # ------------------------------------------------------------------
    # Merging
    # ------------------------------------------------------------------

    @staticmethod
    def merge(existing: Iterable[Attachment], extra: Iterable[Attachment]) -> List[Attachment]:
        """*existing* followed by every *extra* whose filename is new."""
        merged = list(existing)
        names = {att.filename for att in merged}
        for att in extra:
            if att.filename not in names:
                merged.append(att)
                names.add(att.filename)
        return merged
