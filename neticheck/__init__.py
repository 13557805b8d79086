"""Neticheck: Netiquette checks for emails."""

__version__ = "1.0.0"
