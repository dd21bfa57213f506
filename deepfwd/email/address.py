"""
Address normalisation for header values pulled out of forwarded blocks.

Handles the ragged shapes mail clients leave behind when a message is
forwarded as text:

- ``"Name" <addr<mailto:addr>>`` (Outlook mailto residue)
- ``addr [addr]`` duplicates (Gmail / Outlook plain text)
- a whole ``Name <addr>`` stuffed into the address field
- bold / underline decoration around names
"""

from __future__ import annotations

from typing import Optional, Union

from deepfwd.email.config import (
    ADDRESS_DECORATION_RE,
    BRACKET_CHARS_RE,
    EMAIL_DUPLICATE_RE,
    EMAIL_STRICT_RE,
    EMAIL_TOKEN_RE,
    HEADER_VALUE_SPLIT_RE,
    MAILTO_RESIDUE_RE,
    NAME_BRACKETED_ADDRESS_RE,
    NAME_DECORATION_RE,
)
from deepfwd.ir import Address


class AddressNormalizer:
    """Stateless helpers turning raw header values into clean ``Address`` objects."""

    # ------------------------------------------------------------------
    # Raw header value → Address
    # ------------------------------------------------------------------

    @staticmethod
    def parse(value: Optional[str]) -> Optional[Address]:
        """Split a raw ``From:``/``To:`` value into name and address.

        A bracketed part (``<addr>`` or ``[addr]``) becomes the address and
        the remaining text the name. Without brackets the value is an
        address only if it contains ``@``; otherwise it is a display name.
        """
        if not value or not value.strip():
            return None
        value = value.strip()
        match = HEADER_VALUE_SPLIT_RE.match(value)
        name = (match.group(1) or "").strip() if match else value
        bracketed = (match.group(2) or "").strip() if match else ""
        name = name.replace('"', "").replace("'", "").strip()

        if bracketed and "@" in bracketed:
            return Address(name=name if name and name != bracketed else None, address=bracketed)
        if bracketed and not name:
            name = bracketed
        if "@" in name:
            # normalize() peels "Name <addr>" and mailto residue out of it later
            return Address(address=name)
        return Address(name=name or None)

    @classmethod
    def coerce(cls, value: Union[Address, str, dict, None]) -> Optional[Address]:
        """Accept whatever a detector produced and return a normalised Address."""
        if value is None:
            return None
        if isinstance(value, Address):
            return cls.normalize(value.model_copy())
        if isinstance(value, dict):
            return cls.normalize(Address(name=value.get("name"), address=value.get("address")))
        if isinstance(value, str):
            return cls.normalize(cls.parse(value))
        return None

    # ------------------------------------------------------------------
    # Address → Address
    # ------------------------------------------------------------------

    @classmethod
    def normalize(cls, address: Optional[Address]) -> Optional[Address]:
        """Clean an Address; returns ``None`` when neither field survives.

        Idempotent: a normalised Address comes back unchanged.
        """
        if address is None:
            return None

        name = address.name
        cleaned = address.address

        if cleaned:
            cleaned = MAILTO_RESIDUE_RE.sub("", cleaned)

            match = NAME_BRACKETED_ADDRESS_RE.match(cleaned.strip())
            if match:
                extracted_name = match.group(1) or match.group(2)
                extracted_email = match.group(3).strip()
                if EMAIL_STRICT_RE.match(extracted_email):
                    return cls.normalize(
                        Address(
                            name=(extracted_name or "").strip() or name,
                            address=extracted_email,
                        )
                    )

            if "[" in cleaned:
                duplicate = EMAIL_DUPLICATE_RE.match(cleaned.strip())
                if duplicate and duplicate.group(1) == duplicate.group(2):
                    cleaned = duplicate.group(1)

            cleaned = BRACKET_CHARS_RE.sub("", cleaned).strip()

        if not cleaned and name and "@" in name:
            duplicate = EMAIL_DUPLICATE_RE.match(name.strip())
            if duplicate and duplicate.group(1) == duplicate.group(2):
                return Address(address=duplicate.group(1))
            token = EMAIL_TOKEN_RE.search(name)
            if token:
                return Address(address=token.group(1))

        if name:
            name = NAME_DECORATION_RE.sub("", name)
            name = BRACKET_CHARS_RE.sub("", name).replace('"', "").strip()
        if cleaned:
            cleaned = ADDRESS_DECORATION_RE.sub("", cleaned).strip()

        if not cleaned and not name:
            return None
        return Address(name=name or None, address=cleaned or None)
