"""
Date normalisation for header dates found in forwarded blocks.

Turns heterogeneous date strings into one canonical UTC instant
(``YYYY-MM-DDTHH:MM:SS.mmmZ``) through a staged fallback chain:

1. Direct parse: ISO-8601, then RFC-2822.
2. Locale-tolerant parse through ``dateutil``.
3. Token-stripped retry: weekday names, ``à``/``at`` and commas removed,
   French month names mapped to English, then stages 1 and 2 again.
"""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Union

from dateutil import parser as dateutil_parser

from deepfwd.email.config import (
    DATE_FILLER_RE,
    DAY_TOKENS_RE,
    FRENCH_MONTH_RES,
    ISO_OUTPUT_FORMAT,
)


class DateParser:
    """Stateless helper bundling every date-parsing strategy."""

    # ------------------------------------------------------------------
    # Public entry point
    # ------------------------------------------------------------------

    @classmethod
    def to_iso(cls, raw: Union[str, datetime, None]) -> Optional[str]:
        """Normalise *raw* to an ISO-8601 UTC string, or ``None`` if unparseable.

        Never raises.
        """
        parsed = cls.parse(raw)
        return cls.format_iso(parsed) if parsed else None

    @classmethod
    def parse(cls, raw: Union[str, datetime, None]) -> Optional[datetime]:
        """Run the staged chain and return an aware datetime, or ``None``."""
        if raw is None:
            return None
        if isinstance(raw, datetime):
            return cls._as_utc(raw)

        text = str(raw).strip()
        if not text:
            return None

        parsed = cls.parse_direct(text) or cls.parse_locale(text)
        if parsed:
            return parsed

        cleaned = cls.strip_tokens(text)
        if cleaned and cleaned != text:
            return cls.parse_direct(cleaned) or cls.parse_locale(cleaned)
        return None

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    @classmethod
    def parse_direct(cls, text: str) -> Optional[datetime]:
        """ISO-8601 (``Z`` suffix accepted), then RFC-2822."""
        iso_candidate = text[:-1] + "+00:00" if text.endswith("Z") else text
        try:
            return cls._as_utc(datetime.fromisoformat(iso_candidate))
        except ValueError:
            pass

        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            parsed = None
        return cls._as_utc(parsed) if parsed else None

    @classmethod
    def parse_locale(cls, text: str) -> Optional[datetime]:
        """Last-resort parse through ``dateutil`` (strict, not fuzzy)."""
        try:
            return cls._as_utc(dateutil_parser.parse(text))
        except (ValueError, OverflowError, TypeError):
            return None

    @staticmethod
    def strip_tokens(text: str) -> str:
        """Remove weekday/filler tokens and map French months to English."""
        cleaned = DAY_TOKENS_RE.sub(" ", text)
        cleaned = DATE_FILLER_RE.sub(" ", cleaned)
        cleaned = cleaned.replace(",", " ")
        for pattern, english in FRENCH_MONTH_RES:
            cleaned = pattern.sub(english, cleaned)
        return " ".join(cleaned.split())

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    @staticmethod
    def _as_utc(value: datetime) -> datetime:
        # naive values are taken as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @classmethod
    def format_iso(cls, value: datetime) -> str:
        """``2026-01-26T14:00:00.000Z``"""
        value = cls._as_utc(value)
        return f"{value.strftime(ISO_OUTPUT_FORMAT)}.{value.microsecond // 1000:03d}Z"
