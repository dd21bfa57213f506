"""
French Outlook header block where ``Envoyé :`` comes before ``De :``.
"""

from deepfwd.detectors import header_block as hb
from deepfwd.detectors.base import ForwardDetector, not_found
from deepfwd.detectors.config import (
    FR_A_RE,
    FR_DE_RE,
    FR_ENVOYE_ANCHOR_RE,
    FR_OBJET_RE,
    PRIORITY_OUTLOOK_REVERSE_FR,
)
from deepfwd.email.content_cleaner import ContentCleaner
from deepfwd.ir import DetectionResult, ForwardedEmail


class OutlookReverseFrDetector(ForwardDetector):
    name = "outlook_reverse_fr"
    priority = PRIORITY_OUTLOOK_REVERSE_FR

    def detect(self, text: str) -> DetectionResult:
        normalized = ContentCleaner.normalize(text)
        match = FR_ENVOYE_ANCHOR_RE.search(normalized)
        if match is None:
            return not_found()

        lines = [line.rstrip() for line in normalized.split("\n")]
        envoye_index = normalized.count("\n", 0, match.start())

        # window runs forward only
        _, window = hb.header_window(lines, envoye_index, lookbehind=0)
        de = hb.find_header(window, FR_DE_RE, offset=envoye_index)
        if de is None:
            return not_found()
        a = hb.find_header(window, FR_A_RE, offset=envoye_index)
        objet = hb.find_header(window, FR_OBJET_RE, offset=envoye_index)

        found = [envoye_index] + [hit.index for hit in (de, a, objet) if hit is not None]
        first_index = min(found)
        last_index = max(found)

        body = hb.block_body(lines, last_index, quoted=ContentCleaner.is_quoted(lines[first_index]))

        return DetectionResult(
            found=True,
            email=ForwardedEmail(
                from_=hb.split_name_address(de.value),
                to=a.value if a else None,
                subject=objet.value if objet else "",
                date=match.group(1).strip() or None,
                body=body,
            ),
            message=hb.message_before(lines, first_index),
            confidence="high",
        )
