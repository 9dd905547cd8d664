"""Errors raised when the API reports a failure."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Sequence


@dataclass
class Rate:
    """Last known rate-limit state of a client."""

    remaining: int = 0
    used: int = 0
    reset: datetime | None = None


class RedditError(Exception):
    """Base class for errors reported by the API."""


def _request_line(response: Any) -> str:
    request = response.request
    return f"{request.method} {request.url}: {response.status_code}"


def _format_duration(seconds: int) -> str:
    if seconds == 0:
        return "0s"
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"


class APIError(RedditError):
    """A single error entry returned in a JSON error response."""

    def __init__(self, label: str = "", reason: str = "", field: str = "") -> None:
        super().__init__(label, reason, field)
        self.label = label
        self.reason = reason
        self.field = field

    def __str__(self) -> str:
        quoted = json.dumps(self.field, ensure_ascii=False)
        return f"field {quoted} caused {self.label}: {self.reason}"

    @classmethod
    def from_json(cls, data: Any) -> "APIError":
        """Build an error from its ``[label, reason, field]`` JSON form."""
        if not isinstance(data, (list, tuple)):
            raise ValueError(f"cannot decode API error from {data!r}")
        values = [None if item is None else item for item in list(data)[:3]]
        values += [None] * (3 - len(values))
        if not all(item is None or isinstance(item, str) for item in values):
            raise ValueError(f"cannot decode API error from {data!r}")
        label, reason, field = (item or "" for item in values)
        return cls(label, reason, field)


class ErrorResponse(RedditError):
    """An API request that failed with a non-success status code."""

    def __init__(self, response: Any, message: str = "") -> None:
        super().__init__(message)
        self.response = response
        self.message = message

    def __str__(self) -> str:
        return f"{_request_line(self.response)} {self.message}"


class JSONErrorResponse(RedditError):
    """Errors reported inside a JSON body, sometimes with a 200 status."""

    def __init__(self, response: Any, errors: Sequence[APIError] = ()) -> None:
        super().__init__(list(errors))
        self.response = response
        self.errors = list(errors)

    def __str__(self) -> str:
        joined = ";".join(str(error) for error in self.errors)
        return f"{_request_line(self.response)} {joined}"


class RateLimitError(RedditError):
    """Too many requests were sent in the current time frame."""

    def __init__(self, rate: Rate, response: Any, message: str = "") -> None:
        super().__init__(message)
        self.rate = rate
        self.response = response
        self.message = message

    def __str__(self) -> str:
        return f"{_request_line(self.response)} {self.message} {self.format_rate_reset()}"

    def format_rate_reset(self, now: datetime | None = None) -> str:
        """Describe when the rate limit resets relative to ``now``."""
        if now is None:
            now = datetime.now(timezone.utc)
        reset = self.rate.reset if self.rate.reset is not None else now
        delta: timedelta = reset - now
        micros = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
        seconds = (abs(micros) + 500_000) // 1_000_000
        if micros < 0 and seconds:
            return f"[rate limit was reset {_format_duration(seconds)} ago]"
        return f"[rate limit will reset in {_format_duration(seconds)}]"