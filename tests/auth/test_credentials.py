"""Tests for loading Gmail credentials from the cached token.

Uses unittest.mock so no real Google API credentials are needed.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from google.auth.exceptions import RefreshError

from mailer.auth.credentials import (
    DEFAULT_GMAIL_SCOPES,
    get_gmail_credentials,
    get_gmail_service,
)
from mailer.domain.errors import CredentialsError


@pytest.fixture
def token_path(tmp_path: Path) -> Path:
    path = tmp_path / "token.json"
    path.write_text("{}")
    return path


class TestGetGmailCredentials:
    """Tests for get_gmail_credentials."""

    @patch("mailer.auth.credentials.Credentials.from_authorized_user_file")
    def test_valid_token_used_as_is(self, mock_from_file: MagicMock, token_path: Path):
        cached = MagicMock(valid=True)
        mock_from_file.return_value = cached

        result = get_gmail_credentials(token_path)

        mock_from_file.assert_called_once_with(str(token_path), DEFAULT_GMAIL_SCOPES)
        assert result is cached
        cached.refresh.assert_not_called()
        assert token_path.read_text() == "{}"

    @patch("mailer.auth.credentials.Credentials.from_authorized_user_file")
    def test_expired_token_is_refreshed_and_saved(
        self, mock_from_file: MagicMock, token_path: Path
    ):
        stale = MagicMock(valid=False, expired=True, refresh_token="r-token")
        stale.to_json.return_value = '{"refreshed": true}'
        mock_from_file.return_value = stale

        result = get_gmail_credentials(token_path)

        stale.refresh.assert_called_once()
        assert result is stale
        assert token_path.read_text() == '{"refreshed": true}'

    def test_missing_token_file(self, tmp_path: Path):
        missing = tmp_path / "token.json"

        with pytest.raises(CredentialsError) as excinfo:
            get_gmail_credentials(missing)

        assert excinfo.value.path == missing
        assert not missing.exists()

    @patch("mailer.auth.credentials.Credentials.from_authorized_user_file")
    def test_expired_without_refresh_token(self, mock_from_file: MagicMock, token_path: Path):
        mock_from_file.return_value = MagicMock(valid=False, expired=True, refresh_token=None)

        with pytest.raises(CredentialsError, match="no refresh token"):
            get_gmail_credentials(token_path)

        assert token_path.read_text() == "{}"

    @patch("mailer.auth.credentials.Credentials.from_authorized_user_file")
    def test_revoked_refresh_token(self, mock_from_file: MagicMock, token_path: Path):
        stale = MagicMock(valid=False, expired=True, refresh_token="revoked")
        stale.refresh.side_effect = RefreshError("invalid_grant")
        mock_from_file.return_value = stale

        with pytest.raises(CredentialsError) as excinfo:
            get_gmail_credentials(token_path)

        assert isinstance(excinfo.value.__cause__, RefreshError)
        assert token_path.read_text() == "{}"

    @patch("mailer.auth.credentials.Credentials.from_authorized_user_file")
    def test_custom_scopes(self, mock_from_file: MagicMock, token_path: Path):
        mock_from_file.return_value = MagicMock(valid=True)
        scopes = ["https://www.googleapis.com/auth/gmail.send"]

        get_gmail_credentials(token_path, scopes=scopes)

        mock_from_file.assert_called_once_with(str(token_path), scopes)

    def test_default_scopes_cover_send_and_read(self):
        assert any(s.endswith("gmail.send") for s in DEFAULT_GMAIL_SCOPES)
        assert any(s.endswith("gmail.readonly") for s in DEFAULT_GMAIL_SCOPES)


class TestGetGmailService:
    """Tests for get_gmail_service."""

    @patch("mailer.auth.credentials.build")
    def test_builds_gmail_v1(self, mock_build: MagicMock):
        creds = MagicMock()

        result = get_gmail_service(creds)

        mock_build.assert_called_once_with("gmail", "v1", credentials=creds)
        assert result is mock_build.return_value
