"""Pytest configuration and shared fixtures for neticheck tests."""

import sys
from pathlib import Path

import pytest

# Make the neticheck package importable without installing it
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from neticheck.message import MessageView  # noqa: E402

CRLF = "\r\n"

CLEAN_BODY = (
    "Hello,\r\n"
    "\r\n"
    "Is the deadline for the second project still on Friday?\r\n"
    "\r\n"
    "-- \r\n"
    "John Doe\r\n"
    "EPITA 2025\r\n"
)


def build_eml(headers=None, body=CLEAN_BODY, content_type="text/plain; charset=utf-8"):
    """Build raw .eml bytes with CRLF line endings.

    ``headers`` is a list of (name, value) pairs; From and Subject default to
    values that pass every check. Pass ``content_type=None`` to leave the
    Content-Type header out.
    """
    if headers is None:
        headers = [
            ("From", "John Doe <john.doe@epita.fr>"),
            ("Subject", "[PROJ][ASK] Deadline of second project"),
        ]
    lines = [f"{name}: {value}" for name, value in headers]
    if content_type is not None:
        lines.append(f"Content-Type: {content_type}")
    return (CRLF.join(lines) + CRLF + CRLF + body).encode("utf-8")


@pytest.fixture
def make_message():
    """Factory building a MessageView from headers and a body."""
    def _make(*args, **kwargs):
        return MessageView.from_bytes(build_eml(*args, **kwargs))
    return _make


@pytest.fixture
def clean_eml(tmp_path):
    """Path to an .eml file with no Netiquette issue."""
    path = tmp_path / "clean.eml"
    path.write_bytes(build_eml())
    return path


@pytest.fixture
def bad_eml(tmp_path):
    """Path to an .eml file with several issues."""
    path = tmp_path / "bad.eml"
    path.write_bytes(build_eml(
        headers=[
            ("From", "someone@gmail.com"),
            ("Subject", "question about the project"),
            ("Cc", "friend@epita.fr"),
        ],
        body="This line is much too long for the Netiquette, " * 2 + "\r\n",
    ))
    return path
