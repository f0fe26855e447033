"""Error taxonomy for the mailer."""

from mailer.domain.errors import (
    AttachmentNotFoundError,
    CredentialsError,
    InvalidOperationError,
    InvalidStateError,
    MailerError,
    MessageValidationError,
    TransportError,
)

__all__ = [
    "AttachmentNotFoundError",
    "CredentialsError",
    "InvalidOperationError",
    "InvalidStateError",
    "MailerError",
    "MessageValidationError",
    "TransportError",
]
