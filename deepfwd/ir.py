"""
Intermediate representation
===========================

Value objects exchanged between the detectors, the unwrap layers, the scorer
and callers: Address, DetectionResult, HistoryEntry, ConfidenceResult,
ResultObject and the MIME seed (MimeResult).

Every object is created and owned by one extraction call.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

Confidence = Literal["high", "medium", "low"]


class Address(BaseModel):
    """
    Mailbox as found in a header line.

    Attributes:
        name: display name, if any
        address: mailbox address, if any
    """
    name: Optional[str] = None
    address: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.name or "").strip() and not (self.address or "").strip()


class Attachment(BaseModel):
    filename: Optional[str] = None
    content_type: str = "application/octet-stream"
    size: int = 0


class ForwardedEmail(BaseModel):
    """
    Header and body fields a detector read from one forwarded block.

    ``from_`` is exposed as ``from`` when dumped by alias; it may be a raw
    header string or an already split Address.
    """
    from_: Union[Address, str, None] = Field(default=None, alias="from")
    to: Union[Address, str, None] = None
    subject: Optional[str] = None
    date: Optional[str] = None
    body: Optional[str] = None

    class Config:
        populate_by_name = True


class DetectionResult(BaseModel):
    """
    Outcome of one ``detect(text)`` call.

    Attributes:
        found: whether a forward boundary was found
        email: fields of the forwarded message
        message: text strictly preceding the forward block
        detector: name of the variant that produced the result
        confidence: coarse reliability of the detection
    """
    found: bool = False
    email: Optional[ForwardedEmail] = None
    message: Optional[str] = None
    detector: Optional[str] = None
    confidence: Confidence = "low"

    @property
    def boundary_offset(self) -> int:
        """Character offset of the forward block inside the analysed text."""
        return len(self.message or "")

    def has_usable_sender(self) -> bool:
        """True when the result carries a non-blank sender string or address/name."""
        if not self.found or self.email is None:
            return False
        sender = self.email.from_
        if isinstance(sender, str):
            return bool(sender.strip())
        if isinstance(sender, Address):
            return not sender.is_empty()
        return False


class HistoryEntry(BaseModel):
    """
    One unwrapping level.

    ``text`` holds only the content exclusive to this level; content of
    deeper forwarded levels is never included.
    """
    from_: Optional[Address] = Field(default=None, alias="from")
    to: Optional[Address] = None
    subject: Optional[str] = None
    date_raw: Optional[str] = None
    date_iso: Optional[str] = None
    text: Optional[str] = None
    depth: int = 0
    flags: List[str] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    def add_flag(self, flag: str) -> None:
        """Add *flag* once; flags behave as an ordered set."""
        if flag not in self.flags:
            self.flags.append(flag)

    def has_flag(self, flag: str) -> bool:
        return flag in self.flags

    def method(self) -> Optional[str]:
        """Detector name recorded in the first ``method:`` flag, if any."""
        for flag in self.flags:
            if flag.startswith("method:"):
                return flag[len("method:"):]
        return None


class Diagnostics(BaseModel):
    method: str = "fallback"
    depth: int = 0
    parsed_ok: bool = False
    warnings: List[str] = Field(default_factory=list)


class ConfidenceResult(BaseModel):
    """
    Plausibility audit of a detected depth.

    Attributes:
        score: 0..100
        description: band label followed by every triggered reason
        ratio: bracketed address count divided by depth
        email_count: bracketed addresses found in the body
        sender_count: addresses attributable to a sender header or "wrote:" line
        quote_depth: deepest run of leading ``>`` markers
        signals: named point deltas applied to the base score of 100
        reasons: human readable explanation of each signal
    """
    score: int = 100
    description: str = ""
    ratio: float = 0.0
    email_count: int = 0
    sender_count: int = 0
    quote_depth: int = 0
    signals: Dict[str, int] = Field(default_factory=dict)
    reasons: List[str] = Field(default_factory=list)


class MimeMetadata(BaseModel):
    from_: Optional[Address] = Field(default=None, alias="from")
    to: Optional[Address] = None
    subject: Optional[str] = None
    date: Optional[datetime] = None

    class Config:
        populate_by_name = True


class MimeResult(BaseModel):
    """
    Seed handed from the MIME decoding stage to the inline engine.

    Attributes:
        raw_body: flattened text body of the deepest MIME level
        depth: number of ``message/rfc822`` layers descended
        last_attachments: attachments of the deepest MIME level
        is_rfc822: whether at least one nested message was unwrapped
        history: one entry per MIME level, shallow to deep
        metadata: headers of the deepest MIME level
    """
    raw_body: str = ""
    depth: int = 0
    last_attachments: List[Attachment] = Field(default_factory=list)
    is_rfc822: bool = False
    history: List[HistoryEntry] = Field(default_factory=list)
    metadata: Optional[MimeMetadata] = None


class InlineResult(BaseModel):
    history: List[HistoryEntry] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)
    diagnostics: Diagnostics = Field(default_factory=Diagnostics)


class ResultObject(BaseModel):
    """
    Caller-facing result of ``deepfwd.extract``.

    ``history`` is deepest-first: ``history[0]`` is the original message,
    the last entry is the outermost envelope.
    """
    from_: Optional[Address] = Field(default=None, alias="from")
    to: Optional[Address] = None
    subject: Optional[str] = None
    date_raw: Optional[str] = None
    date_iso: Optional[str] = None
    text: Optional[str] = None
    full_body: str = ""
    attachments: List[Attachment] = Field(default_factory=list)
    history: List[HistoryEntry] = Field(default_factory=list)
    diagnostics: Diagnostics = Field(default_factory=Diagnostics)
    confidence: ConfidenceResult = Field(default_factory=ConfidenceResult)

    class Config:
        populate_by_name = True

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict, with ``from`` keys instead of ``from_``."""
        return self.model_dump(by_alias=True, mode="json")
