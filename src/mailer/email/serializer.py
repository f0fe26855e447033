"""Serialization of a resolved message into RFC 2822 bytes.

Uses the standard library ``email`` package to produce the MIME structure.
The builder only depends on the ``MessageSerializer`` protocol, so tests
and callers can swap in another implementation.
"""

from __future__ import annotations

import mimetypes
from email.headerregistry import Address as HeaderAddress
from email.message import EmailMessage
from typing import Protocol

from mailer.domain.errors import AttachmentNotFoundError, MessageValidationError
from mailer.email.models import Address, CanonicalMessage

# X-Priority values as written by common mail clients.
PRIORITY_LABELS: dict[int, str] = {
    1: "Highest",
    2: "High",
    3: "Normal",
    4: "Low",
    5: "Lowest",
}


class MessageSerializer(Protocol):
    def serialize(self, message: CanonicalMessage) -> bytes: ...


def format_priority(priority: int) -> str:
    """Render an ``X-Priority`` value; out-of-range numbers pass through bare."""
    label = PRIORITY_LABELS.get(priority)
    if label is None:
        return str(priority)
    return f"{priority} ({label})"


def _header_addresses(addresses: list[Address]) -> list[HeaderAddress]:
    try:
        return [HeaderAddress(display_name=a.name, addr_spec=a.email) for a in addresses]
    except ValueError as exc:
        raise MessageValidationError(f"Invalid email address: {exc}") from exc


class MimeSerializer:
    """Builds an ``EmailMessage`` with an HTML body and file attachments."""

    def serialize(self, message: CanonicalMessage) -> bytes:
        """Serialize ``message`` to bytes.

        Cc, Bcc and Reply-To are only written when they have entries.
        Custom headers keep their order, and a name given twice produces
        two header lines.  Attachment files are read here, in order.

        Raises:
            MessageValidationError: If ``to`` is empty, an address cannot
                be parsed, or a custom header repeats one that may appear
                only once.
            AttachmentNotFoundError: If an attachment file is gone.
        """
        if not message.to:
            raise MessageValidationError("At least one recipient is required in 'to'")

        mime = EmailMessage()
        mime["Subject"] = message.subject
        if message.sender is not None:
            mime["From"] = _header_addresses([message.sender])
        mime["To"] = _header_addresses(message.to)
        if message.cc:
            mime["Cc"] = _header_addresses(message.cc)
        if message.bcc:
            mime["Bcc"] = _header_addresses(message.bcc)
        if message.reply_to:
            mime["Reply-To"] = _header_addresses(message.reply_to)

        for name, value in message.headers:
            try:
                mime[name] = value
            except ValueError as exc:
                raise MessageValidationError(f"Invalid header {name!r}: {exc}") from exc

        mime["X-Priority"] = format_priority(message.priority)
        mime.set_content(message.html_body, subtype="html")

        for path in message.attachments:
            try:
                data = path.read_bytes()
            except FileNotFoundError as exc:
                raise AttachmentNotFoundError(path) from exc

            content_type, _ = mimetypes.guess_type(path.name)
            if content_type is None:
                content_type = "application/octet-stream"
            maintype, subtype = content_type.split("/", 1)
            mime.add_attachment(data, maintype=maintype, subtype=subtype, filename=path.name)

        return mime.as_bytes()
