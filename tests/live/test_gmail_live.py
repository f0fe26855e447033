"""Live integration tests against the Gmail API.

These send real emails to the configured address.  They need a valid
token.json and MAIL_FROM_ADDRESS in the environment.

Run with: pytest -m live
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest


@pytest.mark.live
def test_send_then_reply_in_thread(gmail_client, own_address, tmp_path: Path):
    """Send to self with an attachment, then reply inside the same thread."""
    attachment = tmp_path / "live-test.txt"
    attachment.write_text("live test attachment")
    subject = f"[LIVE TEST] mailer {datetime.now(tz=UTC).isoformat()}"

    sent = (
        gmail_client.compose()
        .to(own_address)
        .subject(subject)
        .body("<p>Automated live test email. Safe to delete.</p>")
        .attach(attachment)
        .send()
    )

    assert sent.id
    assert sent.thread_id

    reply = gmail_client.reply_to(sent.id).body("<p>Automated live reply.</p>").reply()

    assert reply.thread_id == sent.thread_id
