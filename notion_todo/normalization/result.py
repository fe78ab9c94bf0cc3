"""Typed outcome of date processing.

``DateError`` is a closed union of two cases:

* ``InvalidFormat(message)`` — input was given but no rule understood it.
* ``EmptyDate`` — no input, and the caller opted out of defaulting to today.

Both are ordinary return values, not exceptions.  ``DateResult`` holds
exactly one of a normalized date string or a ``DateError``.
"""
from __future__ import annotations

from dataclasses import dataclass

_EMPTY_DATE_MESSAGES: dict[str, str] = {
    "ja": "エラー: 日付が指定されていません",
    "en": "Error: no date was given",
}


@dataclass(frozen=True)
class InvalidFormat:
    message: str


@dataclass(frozen=True)
class EmptyDate:
    pass


DateError = InvalidFormat | EmptyDate


def describe_error(error: DateError, language: str = "ja") -> str:
    """Render *error* as a user-facing message."""
    if isinstance(error, InvalidFormat):
        return error.message
    if isinstance(error, EmptyDate):
        return _EMPTY_DATE_MESSAGES.get(language, _EMPTY_DATE_MESSAGES["ja"])
    raise TypeError(f"not a DateError: {error!r}")


@dataclass(frozen=True)
class DateResult:
    """Either a normalized ``YYYY-MM-DD`` string or a ``DateError``."""

    value: str | None = None
    error: DateError | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("DateResult needs exactly one of value or error")

    @classmethod
    def success(cls, value: str) -> DateResult:
        return cls(value=value)

    @classmethod
    def failure(cls, error: DateError) -> DateResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
