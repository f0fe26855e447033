"""Raw message encoding for the Gmail ``raw`` field."""

from __future__ import annotations

import base64


def encode_raw(data: bytes) -> str:
    """Encode serialized message bytes as unpadded base64url text.

    Standard base64 with ``+`` replaced by ``-``, ``/`` by ``_``, and any
    trailing ``=`` padding removed.

    Args:
        data: The serialized RFC 2822 message.

    Returns:
        The ASCII text to place in the Gmail ``raw`` field.
    """
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")
