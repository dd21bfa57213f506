"""
Extraction pipeline
===================

Entry point that chains the stages for one raw message:

    MIME unwrap (bounded by a timeout) -> inline unwrap -> result assembly -> confidence score

Any unexpected error is turned into a fallback result; ``extract`` never
raises for bad input.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Union

from deepfwd.config import get_settings
from deepfwd.email.address import AddressNormalizer
from deepfwd.email.attachment_handler import AttachmentHandler
from deepfwd.email.content_cleaner import ContentCleaner
from deepfwd.email.date_parser import DateParser
from deepfwd.ir import Diagnostics, MimeResult, ResultObject
from deepfwd.logger import get_logger
from deepfwd.scoring import ConfidenceScorer
from deepfwd.unwrap.inline_layer import NO_FORWARD_WARNING, InlineUnwrapper
from deepfwd.unwrap.mime_layer import InvalidInputError, MimeUnwrapper, as_text

logger = get_logger(__name__)


@dataclass
class ExtractOptions:
    """
    Options of one ``extract`` call; ``None`` fields take their value from Settings.

    Attributes:
        max_depth: ceiling of nested ``message/rfc822`` layers
        timeout_ms: budget of the MIME stage before falling back to plain text
        skip_mime_layer: treat the input as already decoded text
        custom_detectors: extra detectors merged into the registry by priority
    """
    max_depth: Optional[int] = None
    timeout_ms: Optional[int] = None
    skip_mime_layer: bool = False
    custom_detectors: List[Any] = field(default_factory=list)

    def resolved(self) -> "ExtractOptions":
        settings = get_settings()
        return replace(
            self,
            max_depth=self.max_depth if self.max_depth is not None else settings.MIME_MAX_DEPTH,
            timeout_ms=self.timeout_ms if self.timeout_ms is not None else settings.TIMEOUT_MS,
        )


def extract(raw: Union[str, bytes], options: Optional[ExtractOptions] = None, **overrides: Any) -> ResultObject:
    """
    Extract the deepest forwarded message of *raw*.

    Args:
        raw: raw message (RFC-2822 text or bytes) or plain forwarded text
        options: extraction options; keyword *overrides* replace single fields

    Returns:
        ResultObject whose ``history[0]`` is the deepest level
    """
    logger.info(
        "Extract: start (%d %s)",
        len(raw) if isinstance(raw, (str, bytes)) else 0,
        "bytes" if isinstance(raw, bytes) else "chars",
    )

    try:
        opts = replace(options or ExtractOptions(), **overrides).resolved()
        logger.debug("Extract: options %s", opts)
        result = _extract(raw, opts)
    except Exception as e:
        logger.error("Extract failed: %s", e, exc_info=True)
        return _fallback_result(raw, e)

    logger.info(
        "Extract: done (method=%s, depth=%d, score=%d)",
        result.diagnostics.method,
        result.diagnostics.depth,
        result.confidence.score,
    )
    return result


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------

def _extract(raw: Union[str, bytes], opts: ExtractOptions) -> ResultObject:
    if not isinstance(raw, (str, bytes)):
        raise InvalidInputError(f"expected str or bytes, got {type(raw).__name__}")

    timeout_warnings: List[str] = []
    if opts.skip_mime_layer:
        mime = MimeResult(raw_body=as_text(raw))
    else:
        mime = _run_mime_with_timeout(raw, opts, timeout_warnings)

    inline = InlineUnwrapper(
        custom_detectors=opts.custom_detectors,
        max_recursive_depth=get_settings().INLINE_MAX_DEPTH,
    ).run(mime.raw_body, depth=mime.depth, base_history=mime.history)

    deepest = inline.history[0] if inline.history else None
    metadata = mime.metadata

    sender = AddressNormalizer.normalize(
        (deepest.from_ if deepest else None) or (metadata.from_ if metadata else None)
    )
    subject = (deepest.subject if deepest else None) or (metadata.subject if metadata else None)
    date_raw = deepest.date_raw if deepest else None
    date_iso = deepest.date_iso if deepest else None
    if metadata is not None and metadata.date is not None:
        date_raw = date_raw or metadata.date.isoformat()
        date_iso = date_iso or DateParser.format_iso(metadata.date)

    attachments = AttachmentHandler.merge(mime.last_attachments, inline.attachments)

    merged_warnings: List[str] = []
    leading = [NO_FORWARD_WARNING] if len(inline.history) <= 1 and not mime.is_rfc822 else []
    for warning in timeout_warnings + leading + inline.diagnostics.warnings:
        if warning not in merged_warnings:
            merged_warnings.append(warning)

    method = inline.diagnostics.method
    if method == "fallback" and mime.is_rfc822:
        method = "rfc822"

    diagnostics = Diagnostics(
        method=method,
        depth=mime.depth + inline.diagnostics.depth,
        parsed_ok=bool(sender and (subject or len(inline.history) > 1)),
        warnings=merged_warnings,
    )
    full_body = ContentCleaner.clean_text(mime.raw_body) or ""

    return ResultObject(
        from_=sender,
        to=deepest.to if deepest else None,
        subject=subject,
        date_raw=date_raw,
        date_iso=date_iso,
        text=ContentCleaner.clean_text(deepest.text) if deepest else None,
        full_body=full_body,
        attachments=attachments,
        history=inline.history,
        diagnostics=diagnostics,
        confidence=ConfidenceScorer.score(full_body, diagnostics.depth),
    )


def _run_mime_with_timeout(raw: Union[str, bytes], opts: ExtractOptions, warnings: List[str]) -> MimeResult:
    """Run the MIME stage in a worker; past ``timeout_ms`` fall back to plain text."""
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="deepfwd-mime")
    future = executor.submit(MimeUnwrapper(max_depth=opts.max_depth).run, raw)
    try:
        return future.result(timeout=opts.timeout_ms / 1000.0)
    except FutureTimeoutError:
        future.cancel()
        logger.warning("MIME parsing timeout after %d ms; falling back to plain text", opts.timeout_ms)
        warnings.append(f"MIME parsing timeout after {opts.timeout_ms} ms; treated input as plain text")
        return MimeResult(raw_body=as_text(raw))
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


def _fallback_result(raw: Any, error: Exception) -> ResultObject:
    text = as_text(raw) if isinstance(raw, (str, bytes)) else ""
    cleaned = ContentCleaner.clean_text(text)
    return ResultObject(
        text=cleaned,
        full_body=cleaned or "",
        diagnostics=Diagnostics(
            method="fallback",
            depth=0,
            parsed_ok=False,
            warnings=[f"Fatal error: {error}"],
        ),
    )
