"""
Centralised configuration for the forward detectors.

Localised header keywords, separator banners, attribution patterns,
detector priorities and header-window limits live here.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List

# ---------------------------------------------------------------------------
# Priorities (lower runs first and wins exact ties)
# ---------------------------------------------------------------------------

PRIORITY_OUTLOOK_EMPTY_HEADER = -50
PRIORITY_OUTLOOK_REVERSE_FR = -45
PRIORITY_PLAIN_HEADER = -40
PRIORITY_OUTLOOK_FR = -30
PRIORITY_REPLY = -10
PRIORITY_GENERIC = 100

# ---------------------------------------------------------------------------
# Header window
# ---------------------------------------------------------------------------

HEADER_WINDOW_LINES = 15
WINDOW_LOOKBEHIND = 2
MESSAGE_WALKBACK = 5

# ---------------------------------------------------------------------------
# Localised header labels
# ---------------------------------------------------------------------------

HEADER_LABELS: Dict[str, List[str]] = {
    "from": [
        "From", "De", "Von", "Da", "Od", "Fra", "Kimden", "Van", "Från", "Lähettäjä", "Feladó", "От",
    ],
    "date": [
        "Date", "Sent", "Envoyé", "Gesendet", "Inviato", "Enviado", "Data", "Sendt", "Lähetetty",
        "Skickat", "Datum", "Dátum", "Päivämäärä", "Tarih", "Дата",
    ],
    "subject": [
        "Subject", "Objet", "Betreff", "Oggetto", "Assunto", "Asunto", "Emne", "Aihe", "Ämne",
        "Předmět", "Predmet", "Tárgy", "Temat", "Тема", "Konu", "Onderwerp",
    ],
    "to": [
        "To", "À", "A", "An", "Para", "Til", "Vastaanottaja", "Till", "Pro", "Za", "Címzett", "Do",
        "Кому", "Kime", "Aan",
    ],
    "cc": ["Cc", "Kopie", "Copie à", "Copia", "Kopio", "Kopi", "Másolat", "Dw", "Копия"],
}


def header_line_pattern(keys: Iterable[str], quoted: bool = True) -> re.Pattern:
    """``Key:`` at line start, optional ``*``/``_`` decoration and ``>`` quote prefix."""
    alternation = "|".join(re.escape(k) for k in sorted(keys, key=len, reverse=True))
    prefix = r"(?:>[ \t]*)*" if quoted else ""
    return re.compile(rf"^\s*{prefix}[*_]*(?:{alternation})[*_]*\s*:", re.IGNORECASE)


LABEL_PATTERNS: Dict[str, re.Pattern] = {
    field: header_line_pattern(keys) for field, keys in HEADER_LABELS.items()
}

# ---------------------------------------------------------------------------
# French Outlook headers
# ---------------------------------------------------------------------------

FR_DE_RE = re.compile(r"^[ \t]*De\s*:", re.IGNORECASE)
FR_OBJET_RE = re.compile(r"^[ \t]*Objet\s*:", re.IGNORECASE)
FR_ENVOYE_RE = re.compile(r"^[ \t]*Envoy(?:é|=E9|e)?\s*:", re.IGNORECASE)
FR_A_RE = re.compile(r"^[ \t]*(?:À|A|=C0)\s*:", re.IGNORECASE)
FR_DATE_RE = re.compile(r"^[ \t]*Date\s*:", re.IGNORECASE)

# Envoyé anchor of the reversed layout; the value may not span lines
FR_ENVOYE_ANCHOR_RE = re.compile(r"^[ \t]*Envoy(?:é|=E9|e)?[ \t]*:[ \t]*(.*?)[ \t]*$", re.MULTILINE)

# De / Envoyé (possibly empty) / À / Objet on consecutive lines
EMPTY_HEADER_BLOCK_RE = re.compile(
    r"^(?:_{30,}[ \t]*)?\n*"
    r"De[ \t]*:[ \t]*([^\n]+)\n"
    r"Envoy(?:é|e|=E9)[ \t]*:[ \t]*(.*)\n"
    r"(?:À|A|=C0)[ \t]*:[ \t]*([^\n]+)\n"
    r"Objet[ \t]*:[ \t]*([^\n]+)",
    re.IGNORECASE | re.MULTILINE,
)

# "Name <addr>" / "Name [addr]" split of a De: value
NAME_ADDRESS_SPLIT_RE = re.compile(r"(.+?)(?:\s*[<\[](.+?)[>\]])?\s*$")
BRACKETED_ADDRESS_RE = re.compile(r"[<\[](?:mailto:)?(.*?)[>\]]", re.IGNORECASE)
BRACKETED_PART_RE = re.compile(r"[<\[].*?[>\]]")

# ---------------------------------------------------------------------------
# Forward separators
# ---------------------------------------------------------------------------

FORWARD_BANNERS = [
    "Forwarded message", "Forwarded Message", "Original Message", "Message transféré",
    "Message d'origine", "Weitergeleitete Nachricht", "Ursprüngliche Nachricht",
    "Mensaje reenviado", "Mensaje original", "Messaggio inoltrato", "Messaggio originale",
    "Doorgestuurd bericht", "Oorspronkelijk bericht", "Mensagem encaminhada", "Mensagem original",
]

FORWARD_INTROS = [
    "Begin forwarded message", "Début du message réexpédié", "Anfang der weitergeleiteten Nachricht",
    "Inicio del mensaje reenviado", "Inizio messaggio inoltrato", "Begin doorgestuurd bericht",
    "Início da mensagem reencaminhada",
]

QUOTE_PREFIX = r"(?:>[ \t]*)*"

BANNER_SEPARATOR_RE = re.compile(
    rf"^[ \t]*{QUOTE_PREFIX}-{{2,}}[ \t]*(?:{'|'.join(re.escape(b) for b in FORWARD_BANNERS)})[ \t]*-{{2,}}[ \t]*$",
    re.IGNORECASE,
)
INTRO_SEPARATOR_RE = re.compile(
    rf"^[ \t]*{QUOTE_PREFIX}(?:{'|'.join(re.escape(b) for b in FORWARD_INTROS)})[ \t]*:[ \t]*$",
    re.IGNORECASE,
)
# only a separator when a From-family header follows
RULE_SEPARATOR_RE = re.compile(rf"^[ \t]*{QUOTE_PREFIX}_{{10,}}[ \t]*$")

RECIPIENT_SPLIT_RE = re.compile(r"[,;](?![^<\[]*[>\]])")

# ---------------------------------------------------------------------------
# Reply attributions
# ---------------------------------------------------------------------------

# "<lead> <date>, <name> <addr> <verb>:"
ATTRIBUTION_TRAILING_VERB_RE = re.compile(
    r"^[ \t]*(?:On|Le|El|Il giorno|Il|Op)\s+(?P<rest>.+?)\s*"
    r"(?:wrote|a écrit|escribió|ha scritto|het volgende geschreven|geschreven)\s*:\s*$",
    re.IGNORECASE,
)
# "<lead> <date> <verb> <name> <addr>:"
ATTRIBUTION_LEADING_VERB_RE = re.compile(
    r"^[ \t]*(?:Am|Op)\s+(?P<date>.+?)\s+(?:schrieb|schreef)\s+(?P<who>.+?)\s*:\s*$",
    re.IGNORECASE,
)
ATTRIBUTION_ADDRESS_RE = re.compile(r"<?\s*([^\s<>()\"',;]+@[^\s<>()\"',;]+\.[^\s<>()\"',;:]+)\s*>?")
# Dutch "heeft <name> ..." before the verb
ATTRIBUTION_DUTCH_HEEFT_RE = re.compile(r"\s+heeft\s+", re.IGNORECASE)
ATTRIBUTION_TIME_RE = re.compile(r"\d{1,2}[:.h]\d{2}(?::\d{2})?(?:\s*[AaPp]\.?[Mm]\.?(?!\w))?")
