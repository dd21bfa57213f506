"""
Tests for deepfwd.detectors.registry: priority order, earliest-boundary
arbitration, tie-breaking and containment of caller-supplied detectors.
"""
from deepfwd.detectors import DetectorRegistry, ForwardDetector
from deepfwd.ir import DetectionResult, ForwardedEmail


class MarkerDetector(ForwardDetector):
    """Splits on a ``### FORWARD ###`` marker line."""

    name = "custom_marker"
    priority = -100

    def detect(self, text):
        before, sep, after = text.partition("### FORWARD ###")
        if not sep:
            return DetectionResult(found=False)
        return DetectionResult(
            found=True,
            email=ForwardedEmail(from_="custom@example.com", subject="Marked", body=after.strip()),
            message=before.strip() or None,
            confidence="high",
        )


class FixedMessageDetector:
    """Duck-typed detector that always reports the same boundary."""

    def __init__(self, name, priority, message):
        self.name = name
        self.priority = priority
        self.message = message

    def detect(self, text):
        return DetectionResult(
            found=True,
            email=ForwardedEmail(from_="fixed@example.com", body="fixed body"),
            message=self.message,
        )


class RaisingDetector:
    name = "raising"
    priority = -200

    def detect(self, text):
        raise RuntimeError("boom")


class DictDetector:
    name = "dict_result"
    priority = -100

    def detect(self, text):
        return {"found": True, "email": {"from": "dict@example.com", "body": "from a dict"}, "message": ""}


class BlankSenderDetector:
    name = "blank_sender"
    priority = -100

    def detect(self, text):
        return {"found": True, "email": {"from": "   ", "body": "x"}, "message": None}


class TestRegistryOrder:
    """Detectors are kept sorted by priority."""

    def test_builtin_order(self):
        assert DetectorRegistry().detector_names() == [
            "outlook_empty_header",
            "outlook_reverse_fr",
            "plain_header",
            "outlook_fr",
            "reply",
            "generic",
        ]

    def test_custom_detector_sorted_in(self):
        registry = DetectorRegistry([MarkerDetector()])
        assert registry.detector_names()[0] == "custom_marker"

    def test_register_is_stable_for_equal_priorities(self):
        registry = DetectorRegistry()
        registry.register(FixedMessageDetector("late_plain", -40, None))
        names = registry.detector_names()
        assert names.index("late_plain") == names.index("plain_header") + 1


class TestRegistryDetect:
    """Arbitration between matching detectors."""

    def test_no_match(self):
        result = DetectorRegistry().detect("Just a note, nothing forwarded.")
        assert not result.found
        assert result.confidence == "low"

    def test_tie_goes_to_lower_priority(self, gmail_forward):
        """plain_header and generic both start at the separator."""
        result = DetectorRegistry().detect(gmail_forward)
        assert result.detector == "plain_header"
        assert result.message == "Please see below."

    def test_earliest_boundary_wins_over_priority(self):
        """The Apple Mail intro line is only a separator for generic."""
        text = (
            "Begin forwarded message:\n"
            "\n"
            "From: Alice <alice@example.com>\n"
            "Subject: Hi\n"
            "\n"
            "Hello"
        )
        result = DetectorRegistry().detect(text)
        assert result.detector == "generic"
        assert result.message is None

    def test_reverse_fr_wins_tie_with_outlook_fr(self):
        text = (
            "Envoyé : mercredi 29 janvier 2026 10:00\n"
            "De : Alice <alice@example.com>\n"
            "À : Bob <bob@example.com>\n"
            "Objet : Test Reverse\n"
            "\n"
            "Hello Bob!"
        )
        result = DetectorRegistry().detect(text)
        assert result.detector == "outlook_reverse_fr"

    def test_outlook_fr_wins_when_objet_comes_first(self):
        text = (
            "FYI\n"
            "\n"
            "Objet : Planning\n"
            "De : Claire <claire@example.fr>\n"
            "Envoyé : lundi 26 janvier 2026 14:00\n"
            "À : Marc <marc@example.fr>\n"
            "\n"
            "Body"
        )
        result = DetectorRegistry().detect(text)
        assert result.detector == "outlook_fr"
        assert result.message == "FYI"

    def test_custom_detector_with_earlier_boundary(self, gmail_forward):
        text = "Intro\n### FORWARD ###\n" + gmail_forward
        result = DetectorRegistry([MarkerDetector()]).detect(text)
        assert result.detector == "custom_marker"
        assert result.message == "Intro"
        assert result.email.subject == "Marked"

    def test_custom_detector_tie(self, gmail_forward):
        low = FixedMessageDetector("fixed_low", -100, "Please see below.")
        high = FixedMessageDetector("fixed_high", 200, "Please see below.")
        assert DetectorRegistry([low]).detect(gmail_forward).detector == "fixed_low"
        assert DetectorRegistry([high]).detect(gmail_forward).detector == "plain_header"

    def test_raising_detector_is_contained(self, gmail_forward):
        result = DetectorRegistry([RaisingDetector()]).detect(gmail_forward)
        assert result.found
        assert result.detector == "plain_header"

    def test_dict_result_is_validated(self):
        result = DetectorRegistry([DictDetector()]).detect("anything")
        assert result.found
        assert result.detector == "dict_result"
        assert result.email.from_ == "dict@example.com"
        assert result.email.body == "from a dict"

    def test_result_without_sender_is_ignored(self):
        result = DetectorRegistry([BlankSenderDetector()]).detect("Just a note.")
        assert not result.found

    def test_winner_is_a_copy(self):
        """The stored result of a detector is never stamped in place."""
        shared = DetectionResult(found=True, email=ForwardedEmail(from_="a@example.com"), message=None)

        class SharedResultDetector:
            name = "shared"
            priority = -100

            def detect(self, text):
                return shared

        result = DetectorRegistry([SharedResultDetector()]).detect("text")
        assert result.detector == "shared"
        assert shared.detector is None
