"""Cursor pagination shared by list endpoints."""

import base64
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of results, newest first.

    ``next_cursor`` is opaque; clients pass it back unchanged.
    """

    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Cursor for the next page. None on the last page.",
    )
    has_more: bool = False


def encode_cursor(value: str) -> str:
    return base64.urlsafe_b64encode(value.encode()).decode()


def decode_cursor(cursor: str) -> str:
    """Decode a cursor produced by ``encode_cursor``.

    Raises:
        ValueError: If cursor is not valid base64 text
    """
    try:
        return base64.urlsafe_b64decode(cursor.encode()).decode()
    except Exception as e:
        raise ValueError("Invalid cursor") from e
