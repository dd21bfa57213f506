"""
Pytest configuration and shared fixtures.
"""
import os
import sys
import pytest

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)


@pytest.fixture
def gmail_forward():
    """Single Gmail-style forward with a short comment above it."""
    return (
        "Please see below.\n"
        "\n"
        "---------- Forwarded message ---------\n"
        "From: Alice Martin <alice@example.com>\n"
        "Date: Mon, 26 Jan 2026 14:00:00 +0000\n"
        "Subject: Quarterly report\n"
        "To: Bob Stone <bob@example.com>\n"
        "\n"
        "Hi Bob,\n"
        "The report is attached <report.pdf>.\n"
    )


@pytest.fixture
def three_level_chain():
    """Raw message whose body carries two nested forwards."""
    return (
        "From: root@test.com\n"
        "Subject: Root\n"
        "\n"
        "Comment A\n"
        "\n"
        "---------- Forwarded message ---------\n"
        "From: <inter@x.com>\n"
        "Date: Tue, 27 Jan 2026 09:30:00 +0100\n"
        "Subject: Inter\n"
        "\n"
        "Comment B\n"
        "\n"
        "---------- Forwarded message ---------\n"
        "From: <orig@x.com>\n"
        "Date: Mon, 26 Jan 2026 08:15:00 +0100\n"
        "Subject: Orig\n"
        "\n"
        "Content"
    )


@pytest.fixture
def outlook_fr_forward():
    """French Outlook forward with the De/Envoyé/À/Objet block."""
    return (
        "Bonjour,\n"
        "\n"
        "Pour info.\n"
        "\n"
        "________________________________\n"
        "De : Claire Dupont <claire.dupont@example.fr>\n"
        "Envoyé : lundi 26 janvier 2026 14:00\n"
        "À : Marc Petit <marc.petit@example.fr>\n"
        "Objet : Planning\n"
        "\n"
        "Voici le planning de la semaine.\n"
    )


@pytest.fixture
def reply_chain():
    """Gmail-style reply with a quoted original."""
    return (
        "Sounds good, thanks!\n"
        "\n"
        "On Mon, 26 Jan 2026 at 10:00, Alice Martin <alice@example.com> wrote:\n"
        "> Can we meet tomorrow?\n"
        ">\n"
        "> Alice\n"
    )


@pytest.fixture
def fresh_settings():
    """Drop cached settings around a test that changes DEEPFWD_* variables."""
    from deepfwd.config import reset_settings

    reset_settings()
    yield
    reset_settings()
