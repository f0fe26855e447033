"""Domain-specific exception classes for the mailer."""

from __future__ import annotations

from pathlib import Path


class MailerError(Exception):
    """Base class for all errors raised while composing or sending mail."""


class MessageValidationError(MailerError):
    """Raised when a message is missing a required field before transport."""


class AttachmentNotFoundError(MessageValidationError):
    """Raised when an attachment path does not point to an existing file.

    Attributes:
        path: The missing file path.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Attachment file not found: {self.path}")


class InvalidOperationError(MailerError):
    """Raised when an operation is not valid for the draft's current mode."""


class InvalidStateError(MailerError):
    """Raised when a reply cannot resolve a required field from its context."""


class CredentialsError(MailerError):
    """Raised when no usable Gmail token can be loaded.

    Attributes:
        path: The token file that was tried.
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"{reason}: {self.path}")


class TransportError(MailerError):
    """Raised when the Gmail API rejects or fails to deliver a message.

    Attributes:
        status_code: HTTP status returned by the provider, if known.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
