"""Reply context: what a reply needs to know about the message it answers.

Provides:
- ``ReplyContext``, the protocol the builder consults when replying
- ``GmailReplyContext``, an implementation backed by fetched Gmail metadata
- ``fetch_source_message`` to load that metadata from the Gmail API
"""

from __future__ import annotations

from email.utils import getaddresses
from typing import Any, Protocol

import structlog

from mailer.email.models import ReplyTarget, SourceMessage

logger = structlog.get_logger()

SOURCE_METADATA_HEADERS: list[str] = [
    "Message-ID",
    "In-Reply-To",
    "References",
    "Subject",
    "From",
    "Reply-To",
]


class ReplyContext(Protocol):
    def get_id(self) -> str | None: ...

    def get_thread_id(self) -> str | None: ...

    def get_header(self, name: str) -> str | None: ...

    def get_subject(self) -> str | None: ...

    def get_reply_to(self) -> ReplyTarget: ...

    def get_user(self) -> str | None: ...


def fetch_source_message(service: Any, message_id: str) -> SourceMessage:
    """Fetch header metadata for a Gmail message.

    Calls ``users.messages.get`` with ``format="metadata"`` so no body
    content is transferred.

    Args:
        service: An authenticated Gmail API service resource.
        message_id: The Gmail message ID to look up.

    Returns:
        The message's id, thread id, and threading headers.
    """
    message: dict[str, Any] = (
        service.users()
        .messages()
        .get(
            userId="me",
            id=message_id,
            format="metadata",
            metadataHeaders=SOURCE_METADATA_HEADERS,
        )
        .execute()
    )
    return SourceMessage.from_api(message)


def fetch_authenticated_address(service: Any) -> str | None:
    """Return the email address of the authenticated Gmail account."""
    profile: dict[str, Any] = service.users().getProfile(userId="me").execute()
    return profile.get("emailAddress") or None


def _first_mailbox(raw: str | None) -> ReplyTarget | None:
    if not raw:
        return None
    mailboxes = [(name, email) for name, email in getaddresses([raw]) if email]
    if not mailboxes:
        return None
    if len(mailboxes) > 1:
        logger.debug("reply_target_extra_mailboxes_ignored", ignored=len(mailboxes) - 1)
    name, email = mailboxes[0]
    return ReplyTarget(email=email, name=name)


class GmailReplyContext:
    """Reply context for one fetched Gmail message.

    The authenticated address is looked up lazily through
    ``users.getProfile`` and cached, since a reply that sets ``from``
    explicitly never needs it.

    Args:
        source: Metadata of the message being replied to.
        service: An authenticated Gmail API service resource.
    """

    def __init__(self, source: SourceMessage, service: Any) -> None:
        self._source = source
        self._service = service
        self._user: str | None = None
        self._user_loaded = False

    def get_id(self) -> str | None:
        return self._source.id

    def get_thread_id(self) -> str | None:
        return self._source.thread_id

    def get_header(self, name: str) -> str | None:
        return self._source.header(name)

    def get_subject(self) -> str | None:
        return self._source.subject

    def get_reply_to(self) -> ReplyTarget:
        """Return the reply target, preferring ``Reply-To`` over ``From``.

        Either header may list several mailboxes; the first one with an
        address is used.  A ``Reply-To`` that yields no address falls back
        to ``From``.
        """
        for header in ("Reply-To", "From"):
            target = _first_mailbox(self._source.header(header))
            if target is not None:
                return target
        return ReplyTarget(email="", name="")

    def get_user(self) -> str | None:
        if not self._user_loaded:
            self._user = fetch_authenticated_address(self._service)
            self._user_loaded = True
            logger.debug("authenticated_address_loaded", found=self._user is not None)
        return self._user
