"""Recipient normalization.

Every address-bearing setter on the builder accepts a loose input shape
(nothing, a bare email string, an ``Address``, or a sequence mixing the
two) and stores the canonical ``list[Address]`` produced here.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeAlias

from pydantic import ValidationError

from mailer.domain.errors import MessageValidationError
from mailer.email.models import Address

AddressInput: TypeAlias = str | Address | Sequence[str | Address] | None


def _coerce(item: str | Address, name: str) -> Address:
    if isinstance(item, Address):
        return item
    if isinstance(item, str):
        try:
            return Address(email=item, name=name)
        except ValidationError as exc:
            raise MessageValidationError(f"Invalid email address: {item!r}") from exc
    raise TypeError(f"Cannot build an address from {type(item).__name__}")


def normalize_addresses(value: AddressInput, default_name: str | None = None) -> list[Address]:
    """Convert a recipient input into an ordered list of addresses.

    ``default_name`` is used as the display name of a single string input.
    Strings inside a sequence get an empty display name.  No display name
    is ever derived from the local part of the address.

    Args:
        value: ``None``, an email string, an ``Address``, or a sequence of
            either.
        default_name: Display name for a single string input.

    Returns:
        A new list of ``Address`` in input order.  Duplicates are kept.

    Raises:
        TypeError: If ``value`` (or a sequence entry) has another type.
        MessageValidationError: If a string entry is empty or blank.
    """
    if value is None:
        return []
    if isinstance(value, (str, Address)):
        return [_coerce(value, default_name or "")]
    if isinstance(value, Sequence):
        return [_coerce(item, "") for item in value]
    raise TypeError(f"Cannot build addresses from {type(value).__name__}")
