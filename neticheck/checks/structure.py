"""Message structure checks (Netiquette 2.2.2.2) and the per-message entry point."""

import logging
from typing import Optional

from neticheck.checks.body import check_body
from neticheck.checks.headers import check_meta
from neticheck.checks.subject import check_subject
from neticheck.hints import Hint, HintType
from neticheck.message import MessageView

logger = logging.getLogger(__name__)


def extract_body(msg: MessageView, hints: list[Hint]) -> Optional[str]:
    """Return the plain text body to lint, or None if there is none to check."""
    if not msg.has_header("Content-Type"):
        hints.append(HintType.ERROR.with_message(
            "No Content-Type specified: assuming text/plain").ref("2.2.2.2"))

    content_type = msg.mime_type.lower()

    if content_type == "text/plain":
        return msg.text()

    if content_type == "multipart/mixed":
        for i, part in enumerate(msg.parts()):
            if part.mime_type.lower().startswith("text/plain"):
                if i != 0:
                    hints.append(HintType.ERROR.with_message(
                        "Body is not first part in multipart").ref("2.2.2.2"))
                logger.debug("Using multipart part %d as body", i)
                return part.text()
        hints.append(HintType.ERROR.with_message(
            "No message body in multipart").ref("2.2.2.2"))
        return None

    if content_type == "application/pgp-signature":
        hints.append(HintType.INFO.with_message(
            "Cannot lint message: PGP Signatures are not supported"))
        return None

    hints.append(HintType.ERROR.with_message("Invalid Content-Type").ref("2.2.2.2"))
    return None


def check_eml(msg: MessageView, hints: list[Hint]) -> list[Hint]:
    """
    Check an email for potential breaches of the Netiquette.

    Args:
        msg: The parsed message
        hints: The list that will receive all of the hints found

    Returns:
        ``hints``, for convenience
    """
    check_meta(msg, hints)

    body = extract_body(msg, hints)

    subject = msg.subject
    if subject is not None:
        check_subject(subject, hints)
    else:
        hints.append(HintType.ERROR.with_message("No subject"))

    if body is not None:
        check_body(body, hints)
    else:
        logger.debug("No body extracted, skipping body checks")

    return hints
