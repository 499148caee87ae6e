"""Envelopes wrapped around every listing response."""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ListResponse(BaseModel, Generic[T]):
    """Successful listing: the records plus their count."""

    success: Literal[True] = True
    count: int
    data: list[T]

    @classmethod
    def of(cls, records: list[T]) -> "ListResponse[T]":
        """Wrap records, deriving ``count`` from them.

        Args:
            records: Records returned by the data access layer.

        Returns:
            A populated envelope.
        """
        return cls(count=len(records), data=records)


class ErrorResponse(BaseModel):
    """Failure body shared by every error path."""

    success: Literal[False] = False
    error: str
