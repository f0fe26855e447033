"""Authentication module for Gmail API credential management."""

from mailer.auth.credentials import get_gmail_credentials, get_gmail_service

__all__ = [
    "get_gmail_credentials",
    "get_gmail_service",
]
