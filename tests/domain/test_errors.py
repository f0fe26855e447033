"""Tests for the mailer error taxonomy."""

from __future__ import annotations

from pathlib import Path

import pytest

from mailer.domain.errors import (
    AttachmentNotFoundError,
    CredentialsError,
    InvalidOperationError,
    InvalidStateError,
    MailerError,
    MessageValidationError,
    TransportError,
)


@pytest.mark.parametrize(
    "error_cls",
    [
        MessageValidationError,
        InvalidOperationError,
        InvalidStateError,
        CredentialsError,
        TransportError,
    ],
)
def test_all_errors_share_base(error_cls: type[Exception]) -> None:
    assert issubclass(error_cls, MailerError)


def test_attachment_not_found_is_validation_error() -> None:
    error = AttachmentNotFoundError("reports/q3.pdf")

    assert isinstance(error, MessageValidationError)
    assert error.path == Path("reports/q3.pdf")
    assert "reports/q3.pdf" in str(error)


def test_transport_error_status_code() -> None:
    error = TransportError("Gmail send failed", status_code=429)

    assert error.status_code == 429
    assert str(error) == "Gmail send failed"


def test_transport_error_without_status() -> None:
    assert TransportError("boom").status_code is None


def test_credentials_error_names_token_file() -> None:
    error = CredentialsError("secrets/token.json", "Gmail token file not found")

    assert error.path == Path("secrets/token.json")
    assert str(error) == "Gmail token file not found: secrets/token.json"
