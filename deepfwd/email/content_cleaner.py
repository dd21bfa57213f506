"""
Content cleaning and normalisation for email bodies.

Responsibilities:
- Normalise line endings and invisible characters before detection.
- Strip HTML to plain text when a message has no ``text/plain`` part.
- Slice header blocks: body after the last header, quote stripping,
  separator recognition for the text preceding a forward.
"""

from __future__ import annotations

import html as _html
import re
from typing import List, Optional

from deepfwd.email.config import (
    NBSP_RE,
    QUOTE_LEVEL_RE,
    QUOTE_ONLY_RE,
    SEPARATOR_DASHES_RE,
    SEPARATOR_UNDERSCORES_RE,
    TRAILING_WS_RE,
    ZERO_WIDTH_RE,
)


class ContentCleaner:
    """Stateless utilities for cleaning / normalising email body text."""

    # ------------------------------------------------------------------
    # Whitespace and line endings
    # ------------------------------------------------------------------

    @staticmethod
    def clean_text(text: Optional[str]) -> Optional[str]:
        """CRLF → LF, strip trailing blanks on every line, trim.

        Returns ``None`` for anything that is not a string.
        """
        if not isinstance(text, str):
            return None
        text = text.replace("\r\n", "\n")
        text = TRAILING_WS_RE.sub("", text)
        return text.strip()

    @staticmethod
    def normalize(text: Optional[str]) -> str:
        """Prepare text for detection: unify newlines, NBSP → space, drop zero-width chars."""
        if not text:
            return ""
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        text = NBSP_RE.sub(" ", text)
        return ZERO_WIDTH_RE.sub("", text)

    # ------------------------------------------------------------------
    # HTML → text
    # ------------------------------------------------------------------

    @classmethod
    def html_to_text(cls, html_text: Optional[str]) -> Optional[str]:
        """Convert HTML to plain text, keeping block structure as newlines."""
        if not isinstance(html_text, str):
            return None
        text = html_text
        text = re.sub(r"<\s*style[^>]*>[\s\S]*?<\s*/\s*style\s*>", "", text, flags=re.IGNORECASE)
        text = re.sub(r"<\s*script[^>]*>[\s\S]*?<\s*/\s*script\s*>", "", text, flags=re.IGNORECASE)
        text = re.sub(r"(?i)<\s*br\s*/?\s*>", "\n", text)
        text = re.sub(r"(?i)</\s*p\s*>", "\n\n", text)
        text = re.sub(r"(?i)</\s*div\s*>", "\n", text)
        text = re.sub(r"<[^>]+>", "", text)
        text = _html.unescape(text)
        text = NBSP_RE.sub(" ", text)
        return cls.clean_text(text)

    # ------------------------------------------------------------------
    # Header-block slicing
    # ------------------------------------------------------------------

    @staticmethod
    def extract_body(lines: List[str], last_header_index: int) -> str:
        """Text after the header block, leading blank lines skipped."""
        start = last_header_index + 1
        while start < len(lines) and not lines[start].strip():
            start += 1
        return "\n".join(lines[start:]).strip()

    @staticmethod
    def strip_quotes(text: str) -> str:
        """Remove one ``>`` quote level from every line."""
        if not text:
            return ""
        return "\n".join(QUOTE_LEVEL_RE.sub(r"\1", line, count=1) for line in text.split("\n")).strip()

    @staticmethod
    def is_quoted(line: str) -> bool:
        return line.lstrip(" \t").startswith(">")

    @staticmethod
    def is_blank(line: str) -> bool:
        """Empty, whitespace-only, or a bare quote marker (``>``, ``> >``)."""
        return not line.strip() or bool(QUOTE_ONLY_RE.match(line))

    @staticmethod
    def is_separator(line: str) -> bool:
        """``---- Forwarded message ----`` style rows and ``_____`` rules."""
        stripped = line.strip()
        return bool(SEPARATOR_DASHES_RE.match(stripped) or SEPARATOR_UNDERSCORES_RE.match(stripped))
