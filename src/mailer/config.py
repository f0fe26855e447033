"""Centralized, typed configuration using pydantic-settings.

Provides a single ``Settings`` class backed by ``.env`` file and environment
variables, a cached ``get_settings()`` accessor, and a ``validate_credentials()``
startup gate that enforces the Gmail token in production mode.

This module has no imports from the rest of the ``mailer`` package so it can
be loaded first by any entry point.
"""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path

import structlog
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Mailer settings loaded from environment variables and ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- General ---------------------------------------------------------------
    production: bool = False

    # -- Gmail -----------------------------------------------------------------
    gmail_token_path: Path = Path("token.json")

    # -- Composition defaults --------------------------------------------------
    mail_from_address: str = ""
    mail_from_name: str = ""
    default_priority: int = 2
    templates_dir: Path = Path("templates")


@lru_cache
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance.

    Call ``get_settings.cache_clear()`` in tests to reset.

    Returns:
        The application ``Settings``.
    """
    try:
        return Settings()
    except ValidationError as exc:
        logger.error("settings_validation_failed", errors=exc.errors())
        sys.exit(1)


def validate_credentials(settings: Settings) -> None:
    """Check that the Gmail OAuth token is present.

    In **production** mode the process exits with an error block when the
    token is missing.  In development mode the problem is logged as a
    warning and startup continues; building the client then fails with
    ``CredentialsError``.

    Args:
        settings: The loaded application settings.
    """
    errors: list[str] = []

    if not settings.gmail_token_path.exists():
        errors.append(f"Gmail token file not found: {settings.gmail_token_path}")

    if not errors:
        logger.info("credential_validation_passed")
        return

    if settings.production:
        for err in errors:
            logger.error("credential_missing", detail=err)
        print("\n=== STARTUP FAILED ===", file=sys.stderr)
        print("Missing required credentials for production mode:", file=sys.stderr)
        for err in errors:
            print(f"  - {err}", file=sys.stderr)
        print("======================\n", file=sys.stderr)
        sys.exit(1)
    else:
        for err in errors:
            logger.warning("credential_missing_dev", detail=err)
