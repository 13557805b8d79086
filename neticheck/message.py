"""Read-only view over a parsed email message.

Wraps the standard library's ``email`` parser so the checks only see the
few things they need: header values, MIME type, and body text.
"""

import logging
import re
from email import policy
from email.header import decode_header, make_header
from email.message import EmailMessage
from email.parser import BytesParser
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

FOLDING = re.compile(r"\r?\n(?=[ \t])")


def decode_raw_header(value: str) -> str:
    """Unfold a raw header value and decode its RFC 2047 encoded words."""
    # Undecodable bytes come back from the parser as surrogates
    value = value.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
    value = FOLDING.sub("", value)
    if "=?" not in value:
        return value
    return str(make_header(decode_header(value)))


class MessageView:
    """A message (or one MIME part of a message) as seen by the checks."""

    def __init__(self, message: EmailMessage):
        self._message = message

    @classmethod
    def from_bytes(cls, data: bytes) -> "MessageView":
        return cls(BytesParser(policy=policy.default).parsebytes(data))

    @classmethod
    def from_file(cls, path: Path) -> "MessageView":
        with open(path, "rb") as f:
            message = BytesParser(policy=policy.default).parse(f)
        if message.defects:
            logger.debug("%s: parser reported defects %s", path, message.defects)
        return cls(message)

    def has_header(self, name: str) -> bool:
        return name in self._message

    def get_header(self, name: str) -> list[str]:
        """All values of a header as sent, in order. Empty if the header is absent.

        Values are not run through the structured header parsers, so a
        malformed address is still returned as written.
        """
        name = name.lower()
        return [decode_raw_header(v) for k, v in self._message.raw_items() if k.lower() == name]

    @property
    def subject(self) -> Optional[str]:
        values = self.get_header("Subject")
        return values[0] if values else None

    @property
    def mime_type(self) -> str:
        # Defaults to text/plain when Content-Type is missing or unparsable
        return self._message.get_content_type()

    @property
    def is_multipart(self) -> bool:
        return self._message.is_multipart()

    def text(self) -> str:
        """Decoded text content. Line separators are kept as sent."""
        return self._message.get_content()

    def parts(self) -> list["MessageView"]:
        if not self.is_multipart:
            return []
        return [MessageView(p) for p in self._message.iter_parts()]
