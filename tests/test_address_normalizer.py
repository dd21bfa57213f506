"""
Unit tests for deepfwd.email.address.

Covers splitting raw header values and cleaning the shapes mail clients
leave behind when forwarding as text:
- "Name <addr>" / "Name [addr]" splitting
- Outlook mailto residue
- addr [addr] duplicates
- bold / underline decoration
"""
import time

import pytest

from deepfwd.email.address import AddressNormalizer
from deepfwd.ir import Address


class TestParse:
    """Tests for AddressNormalizer.parse."""

    def test_name_and_angle_address(self):
        result = AddressNormalizer.parse("Alice Martin <alice@example.com>")
        assert result == Address(name="Alice Martin", address="alice@example.com")

    def test_square_bracket_address(self):
        result = AddressNormalizer.parse("Bob [bob@example.com]")
        assert result.name == "Bob"
        assert result.address == "bob@example.com"

    def test_bare_address(self):
        result = AddressNormalizer.parse("bob@example.com")
        assert result.name is None
        assert result.address == "bob@example.com"

    def test_name_only(self):
        """Without @ the value is a display name."""
        result = AddressNormalizer.parse("Bob Stone")
        assert result == Address(name="Bob Stone")

    def test_quotes_removed_from_name(self):
        result = AddressNormalizer.parse('"Martin, Alice" <alice@example.com>')
        assert result.name == "Martin, Alice"
        assert result.address == "alice@example.com"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_values(self, value):
        assert AddressNormalizer.parse(value) is None


class TestNormalize:
    """Tests for AddressNormalizer.normalize."""

    def test_none(self):
        assert AddressNormalizer.normalize(None) is None

    def test_outlook_mailto_residue(self):
        raw = Address(address='"Alice" <alice@example.com<mailto:alice@example.com>>')
        result = AddressNormalizer.normalize(raw)
        assert result == Address(name="Alice", address="alice@example.com")

    def test_duplicate_in_address(self):
        raw = Address(address="john.doe@example.com [john.doe@example.com]")
        result = AddressNormalizer.normalize(raw)
        assert result.address == "john.doe@example.com"
        assert result.name is None

    def test_duplicate_in_name(self):
        raw = Address(name="john@example.com [john@example.com]")
        result = AddressNormalizer.normalize(raw)
        assert result == Address(address="john@example.com")

    def test_address_hidden_in_name(self):
        result = AddressNormalizer.normalize(Address(name="Reach me at john@example.com"))
        assert result.address == "john@example.com"

    def test_decoration_stripped(self):
        raw = Address(name="**Alice**", address="_alice@example.com_")
        result = AddressNormalizer.normalize(raw)
        assert result == Address(name="Alice", address="alice@example.com")

    def test_empty_address_becomes_none(self):
        assert AddressNormalizer.normalize(Address(name="  ", address="")) is None

    @pytest.mark.parametrize(
        "raw",
        [
            Address(name="Alice", address="alice@example.com"),
            Address(address='"Alice" <alice@example.com<mailto:alice@example.com>>'),
            Address(address="john.doe@example.com [john.doe@example.com]"),
            Address(name="**Bob Stone**"),
            Address(name="john@example.com [john@example.com]"),
        ],
    )
    def test_idempotent(self, raw):
        once = AddressNormalizer.normalize(raw)
        assert AddressNormalizer.normalize(once) == once

    def test_long_name_without_address(self):
        """Names tens of thousands of characters long normalise in linear time."""
        name = "a" * 50000
        start = time.perf_counter()
        result = AddressNormalizer.normalize(Address(name=name))
        assert time.perf_counter() - start < 1.0
        assert result == Address(name=name)

    def test_address_token_after_long_run(self):
        result = AddressNormalizer.normalize(Address(name="x" * 50000 + " bob@example.com"))
        assert result == Address(address="bob@example.com")


class TestCoerce:
    """Tests for AddressNormalizer.coerce."""

    def test_string(self):
        result = AddressNormalizer.coerce("Bob [bob@example.com]")
        assert result == Address(name="Bob", address="bob@example.com")

    def test_dict(self):
        result = AddressNormalizer.coerce({"name": "Bob", "address": "bob@example.com"})
        assert result == Address(name="Bob", address="bob@example.com")

    def test_address_is_not_mutated(self):
        original = Address(name="**Bob**", address="bob@example.com")
        AddressNormalizer.coerce(original)
        assert original.name == "**Bob**"

    def test_unsupported_type(self):
        assert AddressNormalizer.coerce(42) is None
