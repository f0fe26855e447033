"""Email domain: address normalization, message building, and Gmail transport."""

from mailer.email.addresses import normalize_addresses
from mailer.email.builder import MessageBuilder
from mailer.email.client import GmailClient
from mailer.email.context import GmailReplyContext, ReplyContext
from mailer.email.encoding import encode_raw
from mailer.email.models import (
    Address,
    CanonicalMessage,
    ReplyTarget,
    SentMessage,
    SourceMessage,
)
from mailer.email.serializer import MimeSerializer
from mailer.email.transport import GmailTransport, Transport
from mailer.email.views import JinjaViewRenderer

__all__ = [
    "Address",
    "CanonicalMessage",
    "GmailClient",
    "GmailReplyContext",
    "GmailTransport",
    "JinjaViewRenderer",
    "MessageBuilder",
    "MimeSerializer",
    "ReplyContext",
    "ReplyTarget",
    "SentMessage",
    "SourceMessage",
    "Transport",
    "encode_raw",
    "normalize_addresses",
]
