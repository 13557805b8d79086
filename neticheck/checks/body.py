"""Body and signature checks (Netiquette 2.2.2 and 2.3).

Bodies are expected to use CRLF line separators, as they appear on the
wire. The signature is whatever follows the first blank line + ``-- ``
separator line.
"""

import re

from neticheck.hints import Hint, HintType

# --- Constants ---

LINE_SEPARATOR = "\r\n"
SIGNATURE_DELIMITER = "\r\n\r\n-- \r\n"
SIGNATURE_SEPARATOR_LINE = "-- "

MAX_LINE_LENGTH = 80
MAX_MESSAGE_LINE_LENGTH = 72
MAX_SIGNATURE_LINES = 4
QUOTE_MARKER = ">"

TRAILING_WHITESPACE = re.compile(r".*\s", re.DOTALL)
MISSING_SEPARATOR_SPACE = "\r\n--\r\n"
MISSING_BLANK_BEFORE_SIGNATURE = re.compile(r"[^\r][^\n]\r\n-- ?\r\n")


def check_signature(signature: str, hints: list[Hint]) -> None:
    lines = signature.split(LINE_SEPARATOR)

    for line in lines:
        if len(line) > MAX_LINE_LENGTH:
            hints.append(HintType.ERROR.with_message(
                "Signature line is too long (> 80)").ref("2.3").ctx(line))

    if len(lines) > MAX_SIGNATURE_LINES:
        hints.append(HintType.ERROR.with_message(
            "Signature size is too long (> 4)").ref("2.3"))

    if not signature:
        hints.append(HintType.ERROR.with_message("Signature is empty").ref("2.3"))
    elif not lines[0].strip():
        hints.append(HintType.ERROR.with_message(
            "First line of signature is empty").ref("2.3"))


def check_body_lines(text: str, hints: list[Hint]) -> None:
    lines = text.split(LINE_SEPARATOR)

    for line in lines:
        if len(line) > MAX_LINE_LENGTH:
            hints.append(HintType.ERROR.with_message(
                "Body line is too long (> 80)").ref("2.2.2.1").ctx(line))

    for line in lines:
        if len(line) > MAX_MESSAGE_LINE_LENGTH and not line.startswith(QUOTE_MARKER):
            hints.append(HintType.ERROR.with_message(
                "Message line is too long (> 72)").ref("2.2.2.1").ctx(line))

    for line in lines:
        if TRAILING_WHITESPACE.fullmatch(line) and line != SIGNATURE_SEPARATOR_LINE:
            hints.append(HintType.ERROR.with_message(
                "Body line has a trailing whitespace").ref("2.2.2.5").ctx(line))


def check_body(body: str, hints: list[Hint]) -> None:
    """Check the text body of a message, signature included.

    When the signature delimiter shows up more than once, only the text
    before the first occurrence is checked.
    """
    pieces = body.split(SIGNATURE_DELIMITER)

    if len(pieces) < 2:
        hints.append(HintType.ERROR.with_message("No signature detected").ref("2.3"))
    elif len(pieces) > 2:
        hints.append(HintType.ERROR.with_message(
            "Too many signatures, make sure the string "
            "'\\r\\n\\r\\n-- \\r\\n' only appears once").ref("2.3"))
    else:
        check_signature(pieces[1], hints)

    check_body_lines(pieces[0], hints)

    # Heuristics on the raw text
    if MISSING_SEPARATOR_SPACE in body:
        hints.append(HintType.WARNING.with_message(
            "Possibly missing space at end of signature separator").ref("2.3"))

    if MISSING_BLANK_BEFORE_SIGNATURE.search(body):
        hints.append(HintType.WARNING.with_message(
            "Possibly missing newline before signature").ref("2.3"))
