"""Fluent Gmail message composition with threaded reply support."""

from mailer.email.builder import MessageBuilder
from mailer.email.client import GmailClient
from mailer.email.models import Address, SentMessage

__all__ = [
    "Address",
    "GmailClient",
    "MessageBuilder",
    "SentMessage",
]
