"""Netiquette checks, one module per part of the message."""

from neticheck.checks.body import check_body
from neticheck.checks.headers import check_meta
from neticheck.checks.structure import check_eml
from neticheck.checks.subject import check_subject, check_subject_tags

__all__ = ["check_body", "check_eml", "check_meta", "check_subject", "check_subject_tags"]
