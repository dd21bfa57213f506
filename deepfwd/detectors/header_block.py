"""
Shared header-window helpers for the line-based detectors.

A forwarded block is located by an anchor header line; the other headers
are searched in a bounded window around it that ends at the first blank
line after the anchor. The text preceding the block becomes the
``message`` of the detection and the text after the last header its body.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from deepfwd.detectors.config import (
    BRACKETED_ADDRESS_RE,
    BRACKETED_PART_RE,
    HEADER_WINDOW_LINES,
    MESSAGE_WALKBACK,
    NAME_ADDRESS_SPLIT_RE,
    WINDOW_LOOKBEHIND,
)
from deepfwd.email.content_cleaner import ContentCleaner
from deepfwd.ir import Address


@dataclass
class HeaderHit:
    """A header line found at ``index`` in the analysed lines."""
    index: int
    line: str

    @property
    def value(self) -> str:
        return header_value(self.line)


def split_lines(text: str) -> List[str]:
    """Normalised text split into lines, trailing blanks removed."""
    return [line.rstrip() for line in ContentCleaner.normalize(text).split("\n")]


def header_value(line: str) -> str:
    """Everything after the first colon, trimmed of blanks and ``**`` decoration."""
    _, sep, value = line.partition(":")
    return value.strip().lstrip("*_").strip() if sep else ""


def find_header(lines: List[str], pattern: re.Pattern, offset: int = 0) -> Optional[HeaderHit]:
    """First line matching *pattern*; ``offset`` maps window indexes back to text lines."""
    for i, line in enumerate(lines):
        if pattern.match(line):
            return HeaderHit(index=offset + i, line=line)
    return None


def header_window(
    lines: List[str],
    anchor: int,
    lookbehind: int = WINDOW_LOOKBEHIND,
    limit: int = HEADER_WINDOW_LINES,
) -> Tuple[int, List[str]]:
    """Lines around *anchor*: from ``anchor - lookbehind`` to ``anchor + limit``.

    The window stops at the first blank (or quote-only) line after the
    anchor. Returns ``(start_index, window_lines)``.
    """
    start = max(0, anchor - lookbehind)
    window: List[str] = []
    for i in range(start, min(len(lines), anchor + limit)):
        if i > anchor and ContentCleaner.is_blank(lines[i]):
            break
        window.append(lines[i])
    return start, window


def message_end(lines: List[str], first_header_index: int) -> int:
    """Index where the preceding message ends.

    Walks back over blank lines; a separator line within reach moves the
    end up to that separator, any other content stops the walk.
    """
    end = first_header_index
    for k in range(1, MESSAGE_WALKBACK + 1):
        idx = first_header_index - k
        if idx < 0:
            break
        prev = lines[idx].strip()
        if ContentCleaner.is_separator(prev):
            end = idx
            break
        if not prev:
            continue
        break
    return end


def message_before(lines: List[str], end: int) -> Optional[str]:
    if end <= 0:
        return None
    return "\n".join(lines[:end]).strip()


def block_body(lines: List[str], last_header_index: int, quoted: bool) -> str:
    body = ContentCleaner.extract_body(lines, last_header_index)
    return ContentCleaner.strip_quotes(body) if quoted else body


def split_name_address(value: str) -> Address:
    """``Name <addr>`` / ``Name [addr]`` / bare value → Address.

    A bare value is an address only when it contains ``@``.
    """
    match = NAME_ADDRESS_SPLIT_RE.match(value)
    name = match.group(1).strip().replace('"', "").replace("'", "") if match else value
    email = match.group(2).strip() if match and match.group(2) else ""
    if not email and "@" in name:
        email = name
    if "@" in email:
        return Address(name=name if name and name != email else None, address=email)
    return Address(name=name or None)


def plain_sender(value: str):
    """Sender of a plain header line: Address when an address is found, else the bare name."""
    match = BRACKETED_ADDRESS_RE.search(value)
    address = match.group(1).strip() if match else (value if "@" in value else "")
    name = BRACKETED_PART_RE.sub("", value).strip() or address
    if address:
        name = name.replace('"', "").replace("'", "").strip()
        return Address(name=name if name and name != address else None, address=address)
    return name
