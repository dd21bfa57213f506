"""
Plain localized header block: ``From:`` / ``Date:`` / ``Subject:`` / ``To:``
(and their translations), as written by New Outlook, Outlook 2013 and
most mobile clients.
"""

from deepfwd.detectors import header_block as hb
from deepfwd.detectors.base import ForwardDetector, not_found
from deepfwd.detectors.config import LABEL_PATTERNS, PRIORITY_PLAIN_HEADER
from deepfwd.email.content_cleaner import ContentCleaner
from deepfwd.ir import DetectionResult, ForwardedEmail


class PlainHeaderDetector(ForwardDetector):
    name = "plain_header"
    priority = PRIORITY_PLAIN_HEADER

    def detect(self, text: str) -> DetectionResult:
        lines = hb.split_lines(text)

        sender = hb.find_header(lines, LABEL_PATTERNS["from"])
        if sender is None:
            return not_found()

        start, window = hb.header_window(lines, sender.index)
        subject = hb.find_header(window, LABEL_PATTERNS["subject"], offset=start)
        if subject is None:
            return not_found()
        date = hb.find_header(window, LABEL_PATTERNS["date"], offset=start)
        to = hb.find_header(window, LABEL_PATTERNS["to"], offset=start)

        last_index = max(hit.index for hit in (sender, subject, date, to) if hit is not None)
        body = hb.block_body(lines, last_index, quoted=ContentCleaner.is_quoted(sender.line))
        end = hb.message_end(lines, sender.index)

        return DetectionResult(
            found=True,
            email=ForwardedEmail(
                from_=hb.plain_sender(sender.value),
                to=to.value if to else None,
                subject=subject.value,
                date=date.value if date else None,
                body=body,
            ),
            message=hb.message_before(lines, end),
            confidence="medium",
        )
