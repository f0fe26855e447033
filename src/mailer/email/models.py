"""Pydantic v2 models for the email domain.

Provides frozen (immutable) models for addresses, the fully resolved
message handed to the serializer, fetched source-message metadata, and
the wrapped Gmail send response.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Address(BaseModel):
    """A single mailbox: an email address plus an optional display name.

    Two addresses are equal when their email values are equal; the display
    name does not take part in comparison or hashing.
    """

    model_config = ConfigDict(frozen=True)

    email: str
    name: str = ""

    @field_validator("email")
    @classmethod
    def email_must_not_be_empty(cls, v: str) -> str:
        """Strip surrounding whitespace and reject empty addresses."""
        v = v.strip()
        if not v:
            raise ValueError("email must not be empty")
        return v

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self.email == other.email

    def __hash__(self) -> int:
        return hash(self.email)

    def formatted(self) -> str:
        """Render as ``Name <email>``, or the bare email without a name."""
        if not self.name:
            return self.email
        return f"{self.name} <{self.email}>"


class ReplyTarget(BaseModel):
    """Who a reply should go to, derived from the source message."""

    model_config = ConfigDict(frozen=True)

    email: str
    name: str = ""


class CanonicalMessage(BaseModel):
    """A fully resolved message, ready for serialization.

    ``sender`` may be ``None`` for new messages, in which case Gmail fills
    in the authenticated account.  ``cc``, ``bcc`` and ``reply_to`` are
    emitted only when non-empty.
    """

    model_config = ConfigDict(frozen=True)

    subject: str = ""
    sender: Address | None = None
    to: list[Address]
    cc: list[Address] = Field(default_factory=list)
    bcc: list[Address] = Field(default_factory=list)
    reply_to: list[Address] = Field(default_factory=list)
    html_body: str = ""
    priority: int = 2
    attachments: list[Path] = Field(default_factory=list)
    headers: list[tuple[str, str]] = Field(default_factory=list)


class SourceMessage(BaseModel):
    """Metadata of an existing Gmail message that is being replied to."""

    model_config = ConfigDict(frozen=True)

    id: str
    thread_id: str | None = None
    headers: list[tuple[str, str]] = Field(default_factory=list)

    @classmethod
    def from_api(cls, message: dict[str, Any]) -> SourceMessage:
        """Build from a ``users.messages.get`` response (any format).

        Args:
            message: The Gmail API message resource.

        Returns:
            A ``SourceMessage`` with headers in their original order.
        """
        raw_headers = message.get("payload", {}).get("headers", [])
        return cls(
            id=message["id"],
            thread_id=message.get("threadId") or None,
            headers=[(h["name"], h["value"]) for h in raw_headers],
        )

    def header(self, name: str) -> str | None:
        """Return the first header value matching ``name`` (case-insensitive)."""
        wanted = name.lower()
        for header_name, value in self.headers:
            if header_name.lower() == wanted:
                return value
        return None

    @property
    def subject(self) -> str | None:
        return self.header("Subject")


class SentMessage(BaseModel):
    """The Gmail API response for a sent message."""

    model_config = ConfigDict(frozen=True)

    id: str
    thread_id: str
    label_ids: list[str] = Field(default_factory=list)

    @classmethod
    def from_api(cls, response: dict[str, Any]) -> SentMessage:
        """Wrap a ``users.messages.send`` response dict."""
        return cls(
            id=response["id"],
            thread_id=response.get("threadId", ""),
            label_ids=list(response.get("labelIds", [])),
        )
