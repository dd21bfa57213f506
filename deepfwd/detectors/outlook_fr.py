"""
French Outlook header block: ``De :`` / ``Envoyé :`` / ``À :`` / ``Objet :``
in any order.
"""

from deepfwd.detectors import header_block as hb
from deepfwd.detectors.base import ForwardDetector, not_found
from deepfwd.detectors.config import (
    FR_A_RE,
    FR_DATE_RE,
    FR_DE_RE,
    FR_ENVOYE_RE,
    FR_OBJET_RE,
    PRIORITY_OUTLOOK_FR,
)
from deepfwd.email.content_cleaner import ContentCleaner
from deepfwd.ir import DetectionResult, ForwardedEmail


class OutlookFrDetector(ForwardDetector):
    name = "outlook_fr"
    priority = PRIORITY_OUTLOOK_FR

    def detect(self, text: str) -> DetectionResult:
        lines = hb.split_lines(text)

        anchor = next(
            (i for i, line in enumerate(lines) if FR_DE_RE.match(line) or FR_OBJET_RE.match(line)),
            None,
        )
        if anchor is None:
            return not_found()

        start, window = hb.header_window(lines, anchor)
        de = hb.find_header(window, FR_DE_RE, offset=start)
        objet = hb.find_header(window, FR_OBJET_RE, offset=start)
        if de is None or objet is None:
            return not_found()

        envoye = hb.find_header(window, FR_ENVOYE_RE, offset=start)
        date = hb.find_header(window, FR_DATE_RE, offset=start)
        a = hb.find_header(window, FR_A_RE, offset=start)

        found = [hit for hit in (de, objet, envoye, date, a) if hit is not None]
        first_index = min(hit.index for hit in found)
        last_index = max(hit.index for hit in found)

        body = hb.block_body(lines, last_index, quoted=ContentCleaner.is_quoted(lines[first_index]))
        date_raw = envoye.value if envoye else (date.value if date else None)
        end = hb.message_end(lines, first_index)

        return DetectionResult(
            found=True,
            email=ForwardedEmail(
                from_=hb.split_name_address(de.value),
                to=a.value if a else None,
                subject=objet.value,
                date=date_raw,
                body=body,
            ),
            message=hb.message_before(lines, end),
            confidence="high",
        )
