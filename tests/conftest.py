"""Shared pytest fixtures for the mailer test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from mailer.email.models import CanonicalMessage, ReplyTarget


class RecordingTransport:
    """Transport double that records every call and returns a canned response."""

    def __init__(self, response: dict[str, Any] | None = None) -> None:
        self.calls: list[tuple[str, dict[str, Any], dict[str, str]]] = []
        self.response = response or {"id": "sent_1", "threadId": "thread_1", "labelIds": ["SENT"]}

    def send_raw(
        self, user_id: str, payload: dict[str, Any], params: dict[str, str]
    ) -> dict[str, Any]:
        self.calls.append((user_id, payload, params))
        return self.response


class RecordingSerializer:
    """Serializer double that keeps the last resolved message."""

    def __init__(self) -> None:
        self.messages: list[CanonicalMessage] = []

    def serialize(self, message: CanonicalMessage) -> bytes:
        self.messages.append(message)
        return b"serialized"

    @property
    def last(self) -> CanonicalMessage:
        return self.messages[-1]


class StaticReplyContext:
    """Reply context with fixed answers."""

    def __init__(
        self,
        *,
        message_id: str | None = "m1",
        thread_id: str | None = "T123",
        headers: dict[str, str] | None = None,
        subject: str | None = "Hi",
        reply_to: ReplyTarget | None = None,
        user: str | None = "me@co.com",
    ) -> None:
        self.message_id = message_id
        self.thread_id = thread_id
        self.headers = (
            headers if headers is not None else {"Message-ID": "<m1>", "References": "<m0>"}
        )
        self.subject = subject
        self.reply_to = reply_to or ReplyTarget(email="a@b.com", name="A")
        self.user = user
        self.user_calls = 0

    def get_id(self) -> str | None:
        return self.message_id

    def get_thread_id(self) -> str | None:
        return self.thread_id

    def get_header(self, name: str) -> str | None:
        return self.headers.get(name)

    def get_subject(self) -> str | None:
        return self.subject

    def get_reply_to(self) -> ReplyTarget:
        return self.reply_to

    def get_user(self) -> str | None:
        self.user_calls += 1
        return self.user


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def serializer() -> RecordingSerializer:
    return RecordingSerializer()


@pytest.fixture
def reply_context() -> StaticReplyContext:
    return StaticReplyContext()


@pytest.fixture
def attachment(tmp_path: Path) -> Path:
    """A small text file to attach."""
    path = tmp_path / "notes.txt"
    path.write_text("quarterly numbers")
    return path


@pytest.fixture
def make_reply_context() -> type[StaticReplyContext]:
    """The reply context class, for tests that need non-default answers."""
    return StaticReplyContext
