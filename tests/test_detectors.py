"""
Unit tests for the individual forward detectors.

Each detector is called directly; arbitration between them is covered
in test_registry.py.
"""
import pytest

from deepfwd.detectors import (
    GenericDetector,
    OutlookEmptyHeaderDetector,
    OutlookFrDetector,
    OutlookReverseFrDetector,
    PlainHeaderDetector,
    ReplyDetector,
)
from deepfwd.detectors.forward_parser import ForwardParser
from deepfwd.detectors import header_block as hb
from deepfwd.ir import Address


APPLE_MAIL_FORWARD = (
    "Begin forwarded message:\n"
    "\n"
    "From: Alice Martin <alice@example.com>\n"
    "Subject: Hi\n"
    "Date: 26 January 2026 at 10:00:00\n"
    "To: Bob Stone <bob@example.com>\n"
    "\n"
    "Hello"
)

REVERSE_FR_FORWARD = (
    "Envoyé : mercredi 29 janvier 2026 10:00\n"
    "De : Alice <alice@example.com>\n"
    "À : Bob <bob@example.com>\n"
    "Objet : Test Reverse\n"
    "\n"
    "Hello Bob!"
)

EMPTY_HEADER_FORWARD = (
    "________________________________\n"
    "De: Alice M.\n"
    "Envoyé: \n"
    "À: Bob M. <bob@example.com>\n"
    "Objet: RE: Test\n"
    "\n"
    "Hello Bob!"
)


class TestPlainHeaderDetector:
    """From / Date / Subject / To blocks and their translations."""

    def test_gmail_forward(self, gmail_forward):
        result = PlainHeaderDetector().detect(gmail_forward)
        assert result.found
        assert result.confidence == "medium"
        assert result.message == "Please see below."
        assert result.email.from_ == Address(name="Alice Martin", address="alice@example.com")
        assert result.email.to == "Bob Stone <bob@example.com>"
        assert result.email.subject == "Quarterly report"
        assert result.email.date == "Mon, 26 Jan 2026 14:00:00 +0000"
        assert result.email.body == "Hi Bob,\nThe report is attached <report.pdf>."

    def test_bold_labels(self):
        text = "**From:** Alice <alice@example.com>\n**Subject:** Hello\n\nBody"
        result = PlainHeaderDetector().detect(text)
        assert result.found
        assert result.email.subject == "Hello"
        assert result.email.body == "Body"
        assert result.message is None

    def test_german_labels(self):
        text = (
            "Von: Anna Schmidt <anna@example.de>\n"
            "Gesendet: Montag, 26. Januar 2026 10:00\n"
            "An: Bob <bob@example.com>\n"
            "Betreff: Termin\n"
            "\n"
            "Hallo Bob"
        )
        result = PlainHeaderDetector().detect(text)
        assert result.found
        assert result.email.from_.address == "anna@example.de"
        assert result.email.subject == "Termin"
        assert result.email.to == "Bob <bob@example.com>"
        assert result.email.body == "Hallo Bob"

    def test_quoted_block_is_unquoted(self):
        text = (
            "> From: Alice <alice@example.com>\n"
            "> Subject: Quoted\n"
            ">\n"
            "> Inner line\n"
        )
        result = PlainHeaderDetector().detect(text)
        assert result.found
        assert result.email.subject == "Quoted"
        assert result.email.body == "Inner line"

    def test_window_stops_at_blank_line(self):
        """A Subject line after the header block belongs to the body."""
        text = "From: Alice <alice@example.com>\n\nSubject: not a header"
        assert not PlainHeaderDetector().detect(text).found

    def test_name_only_sender(self):
        text = "From: Alice Martin\nSubject: Hi\n\nBody"
        result = PlainHeaderDetector().detect(text)
        assert result.email.from_ == "Alice Martin"

    def test_no_headers(self):
        assert not PlainHeaderDetector().detect("Just a note.").found


class TestOutlookFrDetector:
    """De / Envoyé / À / Objet in any order."""

    def test_outlook_fr_forward(self, outlook_fr_forward):
        result = OutlookFrDetector().detect(outlook_fr_forward)
        assert result.found
        assert result.confidence == "high"
        assert result.message == "Bonjour,\n\nPour info."
        assert result.email.from_ == Address(name="Claire Dupont", address="claire.dupont@example.fr")
        assert result.email.to == "Marc Petit <marc.petit@example.fr>"
        assert result.email.subject == "Planning"
        assert result.email.date == "lundi 26 janvier 2026 14:00"
        assert result.email.body == "Voici le planning de la semaine."

    def test_objet_first(self):
        text = (
            "FYI\n"
            "\n"
            "Objet : Planning\n"
            "De : Claire <claire@example.fr>\n"
            "Envoyé : lundi 26 janvier 2026 14:00\n"
            "\n"
            "Body"
        )
        result = OutlookFrDetector().detect(text)
        assert result.found
        assert result.message == "FYI"
        assert result.email.body == "Body"

    def test_requires_objet(self):
        assert not OutlookFrDetector().detect("De : Claire <claire@example.fr>\n\nBody").found


class TestOutlookReverseFrDetector:
    """Envoyé line above De."""

    def test_reverse_layout(self):
        result = OutlookReverseFrDetector().detect(REVERSE_FR_FORWARD)
        assert result.found
        assert result.message is None
        assert result.email.from_ == Address(name="Alice", address="alice@example.com")
        assert result.email.to == "Bob <bob@example.com>"
        assert result.email.subject == "Test Reverse"
        assert result.email.date == "mercredi 29 janvier 2026 10:00"
        assert result.email.body == "Hello Bob!"

    def test_de_above_envoye_is_ignored(self, outlook_fr_forward):
        assert not OutlookReverseFrDetector().detect(outlook_fr_forward).found


class TestOutlookEmptyHeaderDetector:
    """Outlook block with an empty Envoyé line."""

    def test_empty_sent_line(self):
        result = OutlookEmptyHeaderDetector().detect(EMPTY_HEADER_FORWARD)
        assert result.found
        assert result.message is None
        assert result.email.from_ == "Alice M."
        assert result.email.to == "Bob M. <bob@example.com>"
        assert result.email.subject == "RE: Test"
        assert result.email.date is None
        assert result.email.body == "Hello Bob!"

    def test_text_before_block(self, outlook_fr_forward):
        result = OutlookEmptyHeaderDetector().detect(outlook_fr_forward)
        assert result.found
        assert result.message == "Bonjour,\n\nPour info."
        assert result.email.date == "lundi 26 janvier 2026 14:00"

    def test_wrong_order(self):
        assert not OutlookEmptyHeaderDetector().detect(REVERSE_FR_FORWARD).found


class TestReplyDetector:
    """Attribution lines followed by quoted text."""

    def test_english_attribution(self, reply_chain):
        result = ReplyDetector().detect(reply_chain)
        assert result.found
        assert result.confidence == "medium"
        assert result.message == "Sounds good, thanks!"
        assert result.email.from_ == Address(name="Alice Martin", address="alice@example.com")
        assert result.email.date == "Mon, 26 Jan 2026 at 10:00"
        assert result.email.subject is None
        assert result.email.body == "Can we meet tomorrow?\n\nAlice"

    def test_wrapped_attribution(self):
        text = (
            "On Mon, 26 Jan 2026 at 10:00, Alice Martin <\n"
            "alice@example.com> wrote:\n"
            "> Quoted\n"
        )
        result = ReplyDetector().detect(text)
        assert result.found
        assert result.email.from_.address == "alice@example.com"
        assert result.email.body == "Quoted"
        assert result.message is None

    def test_requires_quoted_text(self):
        text = "On Mon, 26 Jan 2026 at 10:00, Alice <alice@example.com> wrote:\nNot quoted"
        assert not ReplyDetector().detect(text).found

    @pytest.mark.parametrize(
        "line, date, name, address",
        [
            (
                "Le lun. 26 janv. 2026 à 10:00, Alice Martin <alice@example.com> a écrit :",
                "lun. 26 janv. 2026 à 10:00",
                "Alice Martin",
                "alice@example.com",
            ),
            (
                "Am 26.01.2026 um 10:00 schrieb Anna Schmidt <anna@example.de>:",
                "26.01.2026 um 10:00",
                "Anna Schmidt",
                "anna@example.de",
            ),
            (
                "On Jan 26, 2026, at 10:00 AM, Amy Pond <amy@example.com> wrote:",
                "Jan 26, 2026, at 10:00 AM",
                "Amy Pond",
                "amy@example.com",
            ),
            (
                "On Jan 26, 2026 at 10:00 Amy Pond <amy@example.com> wrote:",
                "Jan 26, 2026 at 10:00",
                "Amy Pond",
                "amy@example.com",
            ),
        ],
    )
    def test_parse_attribution(self, line, date, name, address):
        parsed_date, sender = ReplyDetector.parse_attribution(line)
        assert parsed_date == date
        assert sender == Address(name=name, address=address)

    def test_attribution_without_address(self):
        assert ReplyDetector.parse_attribution("On Monday, Alice wrote:") is None


class TestGenericDetector:
    """Separator-driven fallback."""

    def test_gmail_forward(self, gmail_forward):
        result = GenericDetector().detect(gmail_forward)
        assert result.found
        assert result.confidence == "high"
        assert result.message == "Please see below."
        assert result.email.from_ == Address(name="Alice Martin", address="alice@example.com")
        assert result.email.to == "Bob Stone <bob@example.com>"
        assert result.email.body == "Hi Bob,\nThe report is attached <report.pdf>."

    def test_apple_mail_intro(self):
        result = GenericDetector().detect(APPLE_MAIL_FORWARD)
        assert result.found
        assert result.message is None
        assert result.email.subject == "Hi"
        assert result.email.date == "26 January 2026 at 10:00:00"
        assert result.email.body == "Hello"

    def test_outlook_original_message(self):
        text = (
            "Reply above\n"
            "-----Original Message-----\n"
            "From: Alice\n"
            "Sent: Monday, January 26, 2026 10:00 AM\n"
            "To: Bob <bob@example.com>; Carol <carol@example.com>\n"
            "Subject: Status\n"
            "\n"
            "Original body"
        )
        result = GenericDetector().detect(text)
        assert result.found
        assert result.message == "Reply above"
        assert result.email.from_ == Address(name="Alice")
        assert result.email.to == "Bob <bob@example.com>"
        assert result.email.date == "Monday, January 26, 2026 10:00 AM"
        assert result.email.body == "Original body"

    def test_underscore_rule_needs_from_header(self):
        text = "Signature\n____________________\nNot a header\n\nText"
        assert not GenericDetector().detect(text).found

    def test_folded_header(self):
        text = (
            "---------- Forwarded message ---------\n"
            "From: Alice <alice@example.com>\n"
            "Subject: A very long\n"
            "  subject line\n"
            "\n"
            "Body"
        )
        result = GenericDetector().detect(text)
        assert result.email.subject == "A very long subject line"
        assert result.email.body == "Body"

    def test_repeated_header_keeps_first_value(self):
        """Folded lines of a repeated header are not appended to the first one."""
        text = (
            "---------- Forwarded message ---------\n"
            "From: Alice <alice@example.com>\n"
            "To: Bob <bob@example.com>\n"
            "To: Carol <carol@example.com>,\n"
            "  Dan <dan@example.com>\n"
            "Subject: Hi\n"
            "\n"
            "Body"
        )
        result = GenericDetector().detect(text)
        assert result.email.to == "Bob <bob@example.com>"
        assert result.email.subject == "Hi"
        assert result.email.body == "Body"


class TestHeaderBlockHelpers:
    """Shared header-window helpers."""

    def test_header_value(self):
        assert hb.header_value("**Subject:** Hello: world") == "Hello: world"
        assert hb.header_value("no colon") == ""

    def test_header_window_limit(self):
        lines = [f"Line{i}: x" for i in range(30)]
        start, window = hb.header_window(lines, 5)
        assert start == 3
        assert len(window) == 20 - 3

    def test_message_end_walks_back_to_separator(self):
        lines = ["Hi", "", "-----Original Message-----", "", "From: a@b.com"]
        assert hb.message_end(lines, 4) == 2
        assert hb.message_before(lines, 2) == "Hi"

    def test_split_name_address(self):
        assert hb.split_name_address("Claire <c@example.fr>") == Address(name="Claire", address="c@example.fr")
        assert hb.split_name_address("c@example.fr") == Address(address="c@example.fr")
        assert hb.split_name_address("Claire") == Address(name="Claire")

    def test_first_recipient(self):
        assert ForwardParser.first_recipient("Bob <bob@x.com>, Carol <carol@x.com>") == "Bob <bob@x.com>"
        assert ForwardParser.first_recipient(None) is None
