"""Gmail API client for composing new messages and threaded replies.

Provides the ``GmailClient`` class, which wires a Gmail API service
resource into ``MessageBuilder`` instances: ``compose()`` starts a new
message and ``reply_to()`` starts a reply to an existing message with
its thread context already fetched.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from mailer.auth.credentials import get_gmail_credentials, get_gmail_service
from mailer.config import Settings
from mailer.email.builder import MessageBuilder
from mailer.email.context import (
    GmailReplyContext,
    fetch_authenticated_address,
    fetch_source_message,
)
from mailer.email.models import SourceMessage
from mailer.email.transport import GmailTransport
from mailer.email.views import JinjaViewRenderer, ViewRenderer

logger = structlog.get_logger()


class GmailClient:
    """Factory for message builders bound to one Gmail account.

    All network traffic goes through the provided Gmail API service
    resource (obtained via ``get_gmail_service``).

    Args:
        service: An authenticated Gmail API v1 service resource.
        from_email: Sender applied to new messages and replies.  When
            empty, new messages leave ``From`` to Gmail and replies use
            the authenticated account.
        from_name: Display name for ``from_email``.
        default_priority: Priority preset on every builder.
        templates_dir: Directory of Jinja2 templates for ``view()``.
    """

    def __init__(
        self,
        service: Any,
        from_email: str = "",
        from_name: str = "",
        default_priority: int = 2,
        templates_dir: str | Path | None = None,
    ) -> None:
        self._service = service
        self._from_email = from_email
        self._from_name = from_name
        self._default_priority = default_priority
        self._transport = GmailTransport(service)
        self._renderer: ViewRenderer | None = (
            JinjaViewRenderer(templates_dir) if templates_dir is not None else None
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> GmailClient:
        """Build a client from the cached token and composition defaults.

        Raises:
            CredentialsError: If the token file is missing or unusable.
        """
        credentials = get_gmail_credentials(settings.gmail_token_path)
        return cls(
            get_gmail_service(credentials),
            from_email=settings.mail_from_address,
            from_name=settings.mail_from_name,
            default_priority=settings.default_priority,
            templates_dir=settings.templates_dir,
        )

    def compose(self) -> MessageBuilder:
        """Start a new message."""
        return self._prepare(MessageBuilder(self._transport, renderer=self._renderer))

    def reply_to(self, message_id: str) -> MessageBuilder:
        """Start a reply to an existing Gmail message.

        Fetches the message's threading metadata immediately; the sender's
        profile address is fetched only if the reply needs it.

        Args:
            message_id: The Gmail message ID being answered.

        Returns:
            A builder whose ``reply()`` threads onto ``message_id``.
        """
        source = self.get_source_message(message_id)
        logger.debug("reply_source_loaded", message_id=source.id, thread_id=source.thread_id)
        context = GmailReplyContext(source, self._service)
        return self._prepare(
            MessageBuilder(self._transport, reply_context=context, renderer=self._renderer)
        )

    def get_source_message(self, message_id: str) -> SourceMessage:
        return fetch_source_message(self._service, message_id)

    def get_authenticated_address(self) -> str | None:
        return fetch_authenticated_address(self._service)

    def _prepare(self, builder: MessageBuilder) -> MessageBuilder:
        builder.priority(self._default_priority)
        if self._from_email:
            builder.from_(self._from_email, self._from_name or None)
        return builder
