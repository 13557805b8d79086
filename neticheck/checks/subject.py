"""Subject line checks (Netiquette 2.1.1).

The subject must start with a tag block such as ``[TAG1][TAG2]`` (optionally
preceded by a single ``Re: ``), be at most 80 characters, and avoid English
determiners.
"""

import re

from neticheck.hints import Hint, HintType

# --- Constants ---

MAX_SUBJECT_LENGTH = 80

ENGLISH_DETERMINERS = (
    "the", "a", "an", "this", "that", "these", "those", "my", "your", "his",
    "her", "its", "our", "their", "much", "many", "most", "some", "any",
    "enough",
)

REPLY_PREFIX = re.compile(r"(Re: ?)*")
TAGS_PATTERN = re.compile(r"(Re: )?(\[[A-Z\d\-_+/]+\]){2}")
TOO_MANY_RES = re.compile(r"(Re: ?){2,}")
DISALLOWED_TAG_CHAR = re.compile(r"\[[^\]]*?[^A-Z\d\-_+/\]][^\]]*?\]")


def contains_word(text: str, word: str) -> bool:
    """True if ``word`` is one of the space-separated tokens of ``text`` (case-insensitive)."""
    word = word.lower()
    return any(token.lower() == word for token in text.split(" "))


def check_subject_tags(tags: str, hints: list[Hint]) -> None:
    """Check the tag block at the start of a subject."""
    if not TAGS_PATTERN.fullmatch(tags):
        hints.append(HintType.WARNING.with_message(
            "Tags mismatch, too many tags or no tags detected").ref("2.1.1").ctx(tags))
        if TOO_MANY_RES.search(tags):
            hints.append(HintType.ERROR.with_message("Too many Re: ").ref("2.1.1.3").ctx(tags))
        if DISALLOWED_TAG_CHAR.search(tags):
            hints.append(HintType.ERROR.with_message(
                "Disallowed character in tags").ref("2.1.1.1").ctx(tags))

    if "[misc]" in tags.lower():
        hints.append(HintType.INFO.with_message(
            "MISC tag use is discouraged").ref("2.1.1.1").ctx(tags))


def check_subject(subject: str, hints: list[Hint]) -> None:
    """Check a subject line for potential breaches of the Netiquette.

    Args:
        subject: The decoded Subject header value.
        hints: List receiving the hints found.
    """
    if len(subject) > MAX_SUBJECT_LENGTH:
        hints.append(HintType.ERROR.with_message(
            "Subject is too long (> 80 chars)").ref("2.1.1.2"))

    if len(subject.split(" ", 1)) == 1:
        hints.append(HintType.ERROR.with_message("Malformed subject").ref("2.1.1"))

    # Leading "Re: " markers belong to the tag block
    prefix = REPLY_PREFIX.match(subject).group(0)
    check_subject_tags(prefix + subject[len(prefix):].split(" ", 1)[0], hints)

    if any(contains_word(subject, d) for d in ENGLISH_DETERMINERS):
        hints.append(HintType.WARNING.with_message(
            "Determiners should be removed").ref("2.1.1.2").ctx(subject))
