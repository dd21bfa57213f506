"""
Separator-driven forward parser.

Recognises the forward separators written by the common clients and
locales::

    ---------- Forwarded message ---------      (Gmail)
    Begin forwarded message:                    (Apple Mail)
    -----Original Message-----                  (Outlook)
    -------- Message transféré --------         (Thunderbird, fr)
    ________________________________            (Outlook rule, headers below)

then reads the header block that follows it and the body after that block.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from deepfwd.detectors import header_block as hb
from deepfwd.detectors.config import (
    BANNER_SEPARATOR_RE,
    INTRO_SEPARATOR_RE,
    LABEL_PATTERNS,
    RECIPIENT_SPLIT_RE,
    RULE_SEPARATOR_RE,
)
from deepfwd.email.address import AddressNormalizer
from deepfwd.email.content_cleaner import ContentCleaner
from deepfwd.ir import ForwardedEmail

# first matching family wins
FIELD_ORDER = ("from", "date", "subject", "to", "cc")


@dataclass
class ForwardParse:
    """
    Result of ``ForwardParser.read``.

    Attributes:
        forwarded: whether a separator followed by a header block was found
        message: text before the separator (``None`` when empty)
        email: fields of the forwarded message
    """
    forwarded: bool = False
    message: Optional[str] = None
    email: Optional[ForwardedEmail] = None


class ForwardParser:
    """Find the first forward separator in a text and parse the block below it."""

    def read(self, text: str) -> ForwardParse:
        lines = hb.split_lines(text)

        for i, line in enumerate(lines):
            if not self.is_separator(lines, i):
                continue
            headers, last_index = self._read_headers(lines, i + 1)
            if "from" not in headers:
                continue

            body = hb.block_body(lines, last_index, quoted=ContentCleaner.is_quoted(line))
            return ForwardParse(
                forwarded=True,
                message=hb.message_before(lines, i) or None,
                email=ForwardedEmail(
                    from_=AddressNormalizer.parse(headers["from"]),
                    to=self.first_recipient(headers.get("to")),
                    subject=headers.get("subject"),
                    date=headers.get("date"),
                    body=body,
                ),
            )

        return ForwardParse()

    # ------------------------------------------------------------------
    # Separators
    # ------------------------------------------------------------------

    @staticmethod
    def is_separator(lines: List[str], index: int) -> bool:
        """Banner and intro lines always count; an underscore rule only before a From header."""
        line = lines[index]
        if BANNER_SEPARATOR_RE.match(line) or INTRO_SEPARATOR_RE.match(line):
            return True
        if RULE_SEPARATOR_RE.match(line):
            following = next((ln for ln in lines[index + 1:] if ln.strip()), "")
            return bool(LABEL_PATTERNS["from"].match(following))
        return False

    # ------------------------------------------------------------------
    # Header block
    # ------------------------------------------------------------------

    @staticmethod
    def header_field(line: str) -> Optional[str]:
        for field in FIELD_ORDER:
            if LABEL_PATTERNS[field].match(line):
                return field
        return None

    @classmethod
    def _read_headers(cls, lines: List[str], start: int):
        """Header values below a separator and the index of the last header line.

        Leading blank lines are skipped; the block ends at the first blank
        line or the first line that is neither a header nor a folded
        continuation of one.
        """
        idx = start
        while idx < len(lines) and ContentCleaner.is_blank(lines[idx]):
            idx += 1

        headers: Dict[str, str] = {}
        last_index = start - 1
        current: Optional[str] = None
        in_header = False
        while idx < len(lines) and not ContentCleaner.is_blank(lines[idx]):
            line = lines[idx]
            field = cls.header_field(line)
            if field is not None:
                # repeated family: its continuation lines are dropped with it
                current = field if field not in headers else None
                in_header = True
                headers.setdefault(field, hb.header_value(line))
            elif in_header and line[:1] in (" ", "\t"):
                if current is not None:
                    headers[current] = f"{headers[current]} {line.strip()}".strip()
            else:
                break
            last_index = idx
            idx += 1
        return headers, last_index

    @staticmethod
    def first_recipient(value: Optional[str]) -> Optional[str]:
        """First entry of a recipient list (commas inside ``<>``/``[]`` kept)."""
        if not value:
            return None
        first = RECIPIENT_SPLIT_RE.split(value)[0].strip()
        return first or None
