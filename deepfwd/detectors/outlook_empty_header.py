"""
Outlook header block whose ``Envoyé :`` (sent date) line is present but empty::

    ________________________________
    De: Florian M.
    Envoyé:
    À: Flo M.
    Objet: RE: ...
"""

from deepfwd.detectors.base import ForwardDetector, not_found
from deepfwd.detectors.config import EMPTY_HEADER_BLOCK_RE, PRIORITY_OUTLOOK_EMPTY_HEADER
from deepfwd.email.content_cleaner import ContentCleaner
from deepfwd.ir import DetectionResult, ForwardedEmail


class OutlookEmptyHeaderDetector(ForwardDetector):
    name = "outlook_empty_header"
    priority = PRIORITY_OUTLOOK_EMPTY_HEADER

    def detect(self, text: str) -> DetectionResult:
        normalized = ContentCleaner.normalize(text)
        match = EMPTY_HEADER_BLOCK_RE.search(normalized)
        if match is None:
            return not_found()

        sender = match.group(1).strip()
        if not sender:
            return not_found()

        lines = normalized.split("\n")
        last_index = normalized.count("\n", 0, match.end())
        body = ContentCleaner.extract_body(lines, last_index)
        message = normalized[: match.start()].strip()

        return DetectionResult(
            found=True,
            email=ForwardedEmail(
                from_=sender,
                to=match.group(3).strip(),
                subject=match.group(4).strip(),
                date=match.group(2).strip() or None,
                body=body,
            ),
            message=message or None,
            confidence="high",
        )
