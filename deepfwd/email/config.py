"""
Centralised configuration for the normalizers and the confidence scorer.

All regex patterns, keyword lists, lookup tables and magic-number
thresholds live here.
"""

from __future__ import annotations

import re
from typing import Dict, List, Tuple

# ---------------------------------------------------------------------------
# Text normalisation
# ---------------------------------------------------------------------------

ZERO_WIDTH_RE = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")
NBSP_RE = re.compile("[\u00a0\u202f]")
TRAILING_WS_RE = re.compile(r"[ \t]+$", re.MULTILINE)

SEPARATOR_DASHES_RE = re.compile(r"^-{2,}.*-{2,}$")
SEPARATOR_UNDERSCORES_RE = re.compile(r"^_{3,}$")

QUOTE_LEVEL_RE = re.compile(r"^([ \t]*)>[ \t]?")
QUOTE_ONLY_RE = re.compile(r"^[ \t]*(?:>[ \t]*)+$")

# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------

MAILTO_RESIDUE_RE = re.compile(r"<mailto:[^>\s]+>?", re.IGNORECASE)
NAME_BRACKETED_ADDRESS_RE = re.compile(r'^(?:"([^"]+)"|([^<]+?))\s*<([^>]+)>$')
EMAIL_STRICT_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@,]+$")
EMAIL_DUPLICATE_RE = re.compile(r"^([^\s@]+@[^\s@]+\.[^\s@,]+)\s*\[([^\]]+)\]$")
EMAIL_TOKEN_RE = re.compile(r"(?<![^\s<>\[\]\"'])([^\s@<>\[\]\"']+@[^\s@<>\[\]\"',]+\.[^\s@<>\[\]\"',;]+)")
BRACKET_CHARS_RE = re.compile(r"[<>\[\]]")
NAME_DECORATION_RE = re.compile(r"^[*_>]+|[*_>]+$")
ADDRESS_DECORATION_RE = re.compile(r"^[*_]+|[*_]+$")

# "Name <addr>", "Name [addr]", "<mailto:addr>" inside a raw header value
HEADER_VALUE_SPLIT_RE = re.compile(r"^(.*?)(?:\s*[<\[](?:mailto:)?([^>\]]*)[>\]])?\s*$", re.IGNORECASE)

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

DAY_TOKENS_RE = re.compile(
    r"(?<!\w)(?:lundi|mardi|mercredi|jeudi|vendredi|samedi|dimanche|"
    r"monday|tuesday|wednesday|thursday|friday|saturday|sunday|"
    r"lun|mer|jeu|ven|sam|dim|mon|tue|wed|thu|fri|sat|sun)(?!\w)\.?"
    r"|(?<!\w)mar\.",
    re.IGNORECASE,
)
DATE_FILLER_RE = re.compile(r"(?<!\w)(?:à|at|le)(?!\w)", re.IGNORECASE)

# (pattern, English abbreviation); order matters: full names before prefixes
FRENCH_MONTHS: List[Tuple[str, str]] = [
    (r"janvier|janv\.?", "Jan"),
    (r"février|fevrier|févr\.?|fevr\.?|fév\.?", "Feb"),
    (r"mars", "Mar"),
    (r"avril|avr\.?", "Apr"),
    (r"mai", "May"),
    (r"juin", "Jun"),
    (r"juillet|juil\.?", "Jul"),
    (r"août|aout", "Aug"),
    (r"septembre|sept\.?", "Sep"),
    (r"octobre|oct\.?", "Oct"),
    (r"novembre|nov\.?", "Nov"),
    (r"décembre|decembre|déc\.?|dec\.?", "Dec"),
]
FRENCH_MONTH_RES: List[Tuple[re.Pattern, str]] = [
    (re.compile(rf"(?<!\w)(?:{pattern})(?!\w)", re.IGNORECASE), english)
    for pattern, english in FRENCH_MONTHS
]

ISO_OUTPUT_FORMAT = "%Y-%m-%dT%H:%M:%S"

# ---------------------------------------------------------------------------
# Inline attachment markers
# ---------------------------------------------------------------------------

INLINE_ATTACHMENT_RE = re.compile(
    r"(?:<|\[(?:image:\s*)?)([-a-zA-Z0-9._ ]+\.([a-zA-Z0-9]+))(?:>|\])"
)

EXTENSION_CONTENT_TYPES: Dict[str, str] = {
    "pdf": "application/pdf",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "zip": "application/zip",
    "rar": "application/x-rar-compressed",
    "7z": "application/x-7z-compressed",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "txt": "text/plain",
    "csv": "text/csv",
    "html": "text/html",
    "xml": "application/xml",
    "json": "application/json",
}

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# ---------------------------------------------------------------------------
# Confidence scoring
# ---------------------------------------------------------------------------

SCORE_CONTEXT_WINDOW = 150

BRACKETED_EMAIL_RE = re.compile(r"<[\s\r\n]*([^\s<>@]+@[^\s<>@]+)[\s\r\n]*>")
LEADING_QUOTES_RE = re.compile(r"^(?:\s*>)+")
BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")

SENDER_KEYWORDS: List[str] = [
    "From", "Od", "Fra", "Von", "De", "Lähettäjä", "Šalje", "Feladó", "Da", "Van", "Expeditorul",
    "Отправитель", "Från", "Kimden", "Від кого", "Saatja", "De la", "Gönderen", "От", "Від",
    "Mittente", "Nadawca", "送信元",
]

RECIPIENT_KEYWORDS: List[str] = [
    "To", "Komu", "Til", "An", "Para", "Vastaanottaja", "À", "Prima", "Címzett", "A", "Aan", "Do",
    "Destinatarul", "Кому", "Pre", "Till", "Kime", "Pour", "Adresat", "送信先",
    "Cc", "CC", "Kopie", "Kopio", "Másolat", "Kopi", "Dw", "Копия", "Kopia", "Bilgi", "Копія",
    "Másolatot kap", "Kópia", "Copie à",
    "Reply-To", "Odgovori na", "Odpověď na", "Svar til", "Antwoord aan", "Vastaus", "Répondre à",
    "Antwort an", "Válaszcím", "Rispondi a", "Odpowiedź-do", "Responder A", "Responder a",
    "Răspuns către", "Ответ-Кому", "Odpovedať-Pre", "Svara till", "Yanıt Adresi", "Кому відповісти",
]

TRAILING_SENDER_KEYWORDS: List[str] = [
    "wrote", "escribió", "a écrit", "kirjoitti", "ezt írta", "ha scritto", "geschreven", "skrev",
    "napisał", "escreveu", "написал", "napísal", "följande", "tarihinde şunu yazdı", "napsal",
]

HIGH_DENSITY_RATIO = 2.4
PARTIAL_RATIO_MAX = 1.5
INCONSISTENT_RATIO_MIN = 0.5
VALIDATED_EXPLAINED_SHARE = 0.6
