"""Gmail API access from a cached OAuth token.

The mailer never runs an authorization flow.  It expects an authorized-user
token file (``token.json``) created out of band, refreshes it when the
access token has expired, and writes the refreshed token back.
"""

from __future__ import annotations

from pathlib import Path

import google.auth.transport.requests
import structlog
from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import Resource, build

from mailer.domain.errors import CredentialsError

logger = structlog.get_logger()

# gmail.send for dispatch; gmail.readonly for reply metadata and users.getProfile.
DEFAULT_GMAIL_SCOPES: list[str] = [
    "https://www.googleapis.com/auth/gmail.send",
    "https://www.googleapis.com/auth/gmail.readonly",
]


def get_gmail_credentials(
    token_path: str | Path,
    scopes: list[str] | None = None,
) -> Credentials:
    """Load the cached Gmail token, refreshing it if it has expired.

    Args:
        token_path: Authorized-user token file.
        scopes: Scopes the token must carry.  Defaults to
            ``DEFAULT_GMAIL_SCOPES``.

    Returns:
        Credentials ready for API calls.

    Raises:
        CredentialsError: If the file is missing, or the token is invalid
            and cannot be refreshed.
    """
    token_path = Path(token_path)
    if not token_path.is_file():
        raise CredentialsError(token_path, "Gmail token file not found")

    creds = Credentials.from_authorized_user_file(  # type: ignore[no-untyped-call]
        str(token_path), scopes or DEFAULT_GMAIL_SCOPES
    )
    if creds.valid:
        return creds

    if not (creds.expired and creds.refresh_token):
        raise CredentialsError(token_path, "Gmail token is invalid and has no refresh token")

    try:
        creds.refresh(google.auth.transport.requests.Request())
    except RefreshError as exc:
        logger.error("gmail_token_refresh_failed", token_path=str(token_path), error=str(exc))
        raise CredentialsError(token_path, "Gmail token could not be refreshed") from exc

    token_path.write_text(creds.to_json())
    logger.info("gmail_token_refreshed", token_path=str(token_path))
    return creds


def get_gmail_service(credentials: Credentials) -> Resource:
    """Build a Gmail API v1 service resource for ``credentials``."""
    return build("gmail", "v1", credentials=credentials)
