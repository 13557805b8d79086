"""Header checks (Netiquette 2.1.2 and 2.1.3).

These are advisory: they point at headers worth double-checking before
sending rather than at outright violations.
"""

import re

from neticheck.hints import Hint, HintType
from neticheck.message import MessageView

# --- Constants ---

RESTRICTED_NEWSGROUPS = frozenset({
    "announcement.ing1",
    "announcement.ing2",
    "announcement.ing3",
    "announcement.sup",
    "announcement.spe",
    "announcement.vie-etudiante",
    "assistants.apprentis.news",
    "assistants.news",
    "cri.news",
})

NEWSGROUP_SEPARATORS = re.compile(r"[,\s]+")

SCHOOL_DOMAIN = "@epita.fr"


def split_newsgroups(value: str) -> list[str]:
    return [g for g in NEWSGROUP_SEPARATORS.split(value) if g]


def check_meta(msg: MessageView, hints: list[Hint]) -> None:
    """Check the headers of a message for potential issues."""
    for value in msg.get_header("Newsgroups"):
        for group in split_newsgroups(value):
            if group in RESTRICTED_NEWSGROUPS:
                hints.append(HintType.WARNING.with_message(
                    "This message is bound for a restricted newsgroup, "
                    "are you sure that you are allowed to do that?").ctx(group))

    cc = msg.get_header("Cc")
    if cc:
        hints.append(HintType.INFO.with_message(
            "This message has a Cc field: check the recipients carefully"
        ).ref("2.1.2").ctx(cc[0]))

    reply_to = msg.get_header("Reply-To")
    if reply_to:
        hints.append(HintType.INFO.with_message(
            "This message has a Reply-To field: check the address carefully"
        ).ref("2.1.2").ctx(reply_to[0]))

    in_reply_to = msg.get_header("In-Reply-To")
    if in_reply_to:
        hints.append(HintType.INFO.with_message(
            "This message has an In-Reply-To field: "
            "check that the original message's id is correct"
        ).ref("2.1.2").ctx(in_reply_to[0]))

    # No From header at all: nothing to compare against
    senders = msg.get_header("From")
    if senders and not any(SCHOOL_DOMAIN in s for s in senders):
        hints.append(HintType.WARNING.with_message(
            "The From field does not contain an address with the epita.fr domain, "
            "make sure to include your login or your surname and first name"
        ).ref("2.1.3").ctx(senders[0]))
