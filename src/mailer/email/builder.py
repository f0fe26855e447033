"""Fluent message builder with new-message and threaded-reply flows.

A ``MessageBuilder`` holds one draft.  Setters return the builder so calls
can be chained, and the draft is consumed by a single successful
``send()`` or ``reply()``::

    result = (
        MessageBuilder(transport)
        .to("jane@example.com", "Jane")
        .subject("Quarterly report")
        .body("<p>Attached.</p>")
        .attach("report.pdf")
        .send()
    )

Replies need a ``ReplyContext`` describing the message being answered.
Fields the caller leaves unset are filled from it: threading headers,
subject, recipient, and sender, in that order.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from mailer.domain.errors import (
    AttachmentNotFoundError,
    InvalidOperationError,
    InvalidStateError,
    MessageValidationError,
)
from mailer.email.addresses import AddressInput, normalize_addresses
from mailer.email.context import ReplyContext
from mailer.email.encoding import encode_raw
from mailer.email.models import Address, CanonicalMessage, SentMessage
from mailer.email.serializer import MessageSerializer, MimeSerializer
from mailer.email.transport import Transport
from mailer.email.views import ViewRenderer

logger = structlog.get_logger()

# Copied from the source message when replying inside a thread.
THREAD_HEADERS: tuple[str, ...] = ("In-Reply-To", "References", "Message-ID")

DEFAULT_PRIORITY = 2


class MessageBuilder:
    """Collects the parts of one email and hands it to a transport.

    Args:
        transport: Sends the encoded message.
        serializer: Turns the resolved message into bytes.  Defaults to
            ``MimeSerializer``.
        reply_context: The message being replied to.  Required by
            ``reply()``; ignored by ``send()``.
        renderer: Template renderer used by ``view()``.
        user_id: Gmail mailbox passed to the transport.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        serializer: MessageSerializer | None = None,
        reply_context: ReplyContext | None = None,
        renderer: ViewRenderer | None = None,
        user_id: str = "me",
    ) -> None:
        self._transport = transport
        self._serializer: MessageSerializer = serializer or MimeSerializer()
        self._reply_context = reply_context
        self._renderer = renderer
        self._user_id = user_id

        self._from: Address | None = None
        self._to: list[Address] = []
        self._cc: list[Address] = []
        self._bcc: list[Address] = []
        self._reply_to: list[Address] = []
        self._subject: str | None = None
        self._body: str | None = None
        self._priority = DEFAULT_PRIORITY
        self._attachments: list[Path] = []
        self._headers: list[tuple[str, str]] = []
        self._thread_headers: list[tuple[str, str]] = []
        self._parameters: dict[str, str] = {}
        self._sent = False

    # -- Recipients ------------------------------------------------------------

    def to(self, value: AddressInput, name: str | None = None) -> MessageBuilder:
        self._to = normalize_addresses(value, name)
        return self

    def from_(self, value: AddressInput, name: str | None = None) -> MessageBuilder:
        """Set the sender.  Only the first address of a list is used."""
        addresses = normalize_addresses(value, name)
        self._from = addresses[0] if addresses else None
        return self

    def cc(self, value: AddressInput, name: str | None = None) -> MessageBuilder:
        self._cc = normalize_addresses(value, name)
        return self

    def bcc(self, value: AddressInput, name: str | None = None) -> MessageBuilder:
        self._bcc = normalize_addresses(value, name)
        return self

    def reply_to_addresses(self, value: AddressInput, name: str | None = None) -> MessageBuilder:
        """Set the ``Reply-To`` header of the outgoing message."""
        self._reply_to = normalize_addresses(value, name)
        return self

    # -- Content ---------------------------------------------------------------

    def subject(self, text: str) -> MessageBuilder:
        self._subject = text
        return self

    def body(self, html: str) -> MessageBuilder:
        self._body = html
        return self

    def view(self, template: str, data: dict[str, Any] | None = None) -> MessageBuilder:
        """Render ``template`` and use the result as the HTML body.

        Raises:
            InvalidOperationError: If the builder has no renderer.
        """
        if self._renderer is None:
            raise InvalidOperationError("No view renderer configured for this message")
        self._body = self._renderer.render(template, data or {})
        return self

    def priority(self, value: int) -> MessageBuilder:
        """Set the priority, 1 (highest) to 5 (lowest).  Not range-checked."""
        self._priority = value
        return self

    def optional_parameters(self, parameters: dict[str, str]) -> MessageBuilder:
        """Set extra parameters passed unchanged to the transport."""
        self._parameters = dict(parameters)
        return self

    def attach(self, *paths: str | Path) -> MessageBuilder:
        """Queue files to attach.

        Every path is checked before any is queued, so a missing file
        leaves the attachment list untouched.  File contents are read
        when the message is sent.

        Raises:
            AttachmentNotFoundError: On the first path that is not a file.
        """
        resolved = [Path(p) for p in paths]
        for path in resolved:
            if not path.is_file():
                raise AttachmentNotFoundError(path)
        self._attachments.extend(resolved)
        return self

    def set_header(self, name: str, value: str) -> MessageBuilder:
        """Add a header line.  Repeating a name adds another line."""
        self._headers.append((name, value))
        return self

    @property
    def attachments(self) -> list[Path]:
        return list(self._attachments)

    @property
    def headers(self) -> list[tuple[str, str]]:
        return [*self._headers, *self._thread_headers]

    # -- Dispatch --------------------------------------------------------------

    def send(self) -> SentMessage:
        """Send the draft as a new message.

        Returns:
            The provider's id and thread id for the sent message.

        Raises:
            InvalidOperationError: If the draft was already sent.
            MessageValidationError: If ``to`` is empty or an attachment is
                missing.  Raised before the transport is called.
            TransportError: If the Gmail API rejects the message.
        """
        self._ensure_not_sent()
        payload = {"raw": self._encoded_message()}

        result = self._dispatch(payload)
        logger.info("message_sent", message_id=result.id, thread_id=result.thread_id)
        return result

    def reply(self) -> SentMessage:
        """Send the draft as a reply to the context message.

        Fills unset fields from the reply context before assembling:
        threading headers (only when the source is in a thread), subject,
        ``to`` from the source's reply target, and ``from`` from the
        authenticated account.

        Raises:
            InvalidOperationError: If there is no source message, or the
                draft was already sent.
            InvalidStateError: If no sender can be resolved.
            MessageValidationError: If ``to`` is still empty or an
                attachment is missing.
            TransportError: If the Gmail API rejects the message.
        """
        self._ensure_not_sent()
        context = self._reply_context
        if context is None or not context.get_id():
            raise InvalidOperationError("This is a new email. Use send().")

        thread_id = context.get_thread_id()
        self._set_reply_thread(context, thread_id)
        self._set_reply_subject(context)
        self._set_reply_to(context)
        self._set_reply_from(context)

        payload = {"raw": self._encoded_message()}
        if thread_id:
            payload["threadId"] = thread_id

        result = self._dispatch(payload)
        logger.info(
            "reply_sent",
            message_id=result.id,
            thread_id=result.thread_id,
            source_message_id=context.get_id(),
        )
        return result

    def build_message(self) -> CanonicalMessage:
        """Resolve the draft into the message handed to the serializer.

        Raises:
            MessageValidationError: If ``to`` is empty.
        """
        if not self._to:
            raise MessageValidationError("At least one recipient is required in 'to'")
        return CanonicalMessage(
            subject=self._subject or "",
            sender=self._from,
            to=self._to,
            cc=self._cc,
            bcc=self._bcc,
            reply_to=self._reply_to,
            html_body=self._body or "",
            priority=self._priority,
            attachments=self._attachments,
            headers=self.headers,
        )

    # -- Internals -------------------------------------------------------------

    def _ensure_not_sent(self) -> None:
        if self._sent:
            raise InvalidOperationError("This message has already been sent")

    def _set_reply_thread(self, context: ReplyContext, thread_id: str | None) -> None:
        if not thread_id:
            return
        thread_headers: list[tuple[str, str]] = []
        for name in THREAD_HEADERS:
            value = context.get_header(name)
            if value:
                thread_headers.append((name, value))
        self._thread_headers = thread_headers
        logger.debug("reply_thread_headers", thread_id=thread_id, count=len(thread_headers))

    def _set_reply_subject(self, context: ReplyContext) -> None:
        if self._subject is None:
            self._subject = context.get_subject()

    def _set_reply_to(self, context: ReplyContext) -> None:
        if self._to:
            return
        target = context.get_reply_to()
        if target.email:
            self._to = normalize_addresses(target.email, target.name)

    def _set_reply_from(self, context: ReplyContext) -> None:
        if self._from is not None:
            return
        user = context.get_user()
        if not user:
            raise InvalidStateError("Reply from is not defined")
        self._from = Address(email=user)

    def _encoded_message(self) -> str:
        return encode_raw(self._serializer.serialize(self.build_message()))

    def _dispatch(self, payload: dict[str, str]) -> SentMessage:
        response = self._transport.send_raw(self._user_id, payload, self._parameters)
        self._sent = True
        return SentMessage.from_api(response)
