"""Typed failure results returned by constructing operations.

INVARIANT: Bad user input never raises. ``validate``, ``parse_*``,
``lookup`` and ``ZonedClock.of`` return a :class:`Result` whose ``error``
is one of the two :class:`CalendarError` kinds.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

INVALID_DATE = "INVALID_DATE"
UNKNOWN_ZONE_ID = "UNKNOWN_ZONE_ID"


class CalendarError(BaseModel):
    """Structured error payload within a Result."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class InvalidDate(CalendarError):
    """A calendar or clock field is out of range."""

    code: str = INVALID_DATE


class UnknownZoneId(CalendarError):
    """The zone identifier is absent from the registry."""

    code: str = UNKNOWN_ZONE_ID


class Result(BaseModel, Generic[T]):
    """Outcome of a fallible constructing operation.

    Attributes:
        value: The constructed value when the operation succeeded.
        error: The failure when it did not.
    """

    model_config = {"frozen": True}

    value: T | None = None
    error: CalendarError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def success(value: T) -> Result[T]:
    return Result(value=value)


def failure(error: CalendarError) -> Result[Any]:
    return Result(error=error)
