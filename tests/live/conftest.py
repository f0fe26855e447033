"""Shared fixtures for live Gmail integration tests.

Each fixture skips the test when the required credentials or settings are
not available.
"""

from __future__ import annotations

import pytest

from mailer.config import Settings


@pytest.fixture(scope="session")
def _live_settings() -> Settings:
    """Load application settings from environment for live tests."""
    return Settings()


@pytest.fixture(scope="session")
def own_address(_live_settings: Settings) -> str:
    """Return the configured sender address, skip if not set."""
    if not _live_settings.mail_from_address:
        pytest.skip("MAIL_FROM_ADDRESS not configured")
    return _live_settings.mail_from_address


@pytest.fixture(scope="session")
def gmail_client(_live_settings: Settings):
    """Create a real GmailClient using the cached OAuth2 token.

    Skips if the Gmail token file does not exist.
    """
    if not _live_settings.gmail_token_path.exists():
        pytest.skip("Gmail token not available")

    from mailer.email.client import GmailClient

    return GmailClient.from_settings(_live_settings)
