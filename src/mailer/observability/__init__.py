"""Logging setup for the mailer."""

from mailer.observability.logging_config import configure_logging

__all__ = ["configure_logging"]
