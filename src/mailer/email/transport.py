"""Gmail transport: hands an encoded message to ``users.messages.send``."""

from __future__ import annotations

from typing import Any, Protocol

import structlog
from googleapiclient.errors import HttpError

from mailer.domain.errors import TransportError

logger = structlog.get_logger()


class Transport(Protocol):
    def send_raw(
        self, user_id: str, payload: dict[str, Any], params: dict[str, str]
    ) -> dict[str, Any]: ...


class GmailTransport:
    """Sends raw messages through the Gmail API.

    No retries are attempted.  ``HttpError`` from the API client is
    re-raised as ``TransportError`` with the status code attached; any
    other exception propagates as-is.

    Args:
        service: An authenticated Gmail API v1 service resource.
    """

    def __init__(self, service: Any) -> None:
        self._service = service

    def send_raw(
        self, user_id: str, payload: dict[str, Any], params: dict[str, str]
    ) -> dict[str, Any]:
        """Call ``users.messages.send``.

        Args:
            user_id: The mailbox to send from, normally ``"me"``.
            payload: The request body: ``raw`` plus optional ``threadId``.
            params: Extra query parameters passed through unchanged.

        Returns:
            The Gmail API response dict (contains ``id``, ``threadId``,
            ``labelIds``).

        Raises:
            TransportError: If the API responds with an error status.
        """
        try:
            result: dict[str, Any] = (
                self._service.users()
                .messages()
                .send(userId=user_id, body=payload, **params)
                .execute()
            )
        except HttpError as exc:
            status = exc.resp.status if exc.resp is not None else None
            logger.error("gmail_send_failed", status=status, thread_id=payload.get("threadId"))
            raise TransportError(f"Gmail send failed: {exc}", status_code=status) from exc
        return result
