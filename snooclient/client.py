"""HTTP client shared by all API services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping
from urllib.parse import urljoin

import requests

from .errors import APIError, ErrorResponse, JSONErrorResponse, Rate, RateLimitError

DEFAULT_BASE_URL = "https://oauth.reddit.com/"
DEFAULT_USER_AGENT = "snooclient"


@dataclass
class Response:
    """The outcome of an API request, with its decoded JSON body."""

    http_response: requests.Response
    data: Any = None
    rate: Rate = field(default_factory=Rate)
    after: str = ""
    before: str = ""

    @property
    def status_code(self) -> int:
        return self.http_response.status_code


@dataclass
class ListOptions:
    """Paging options for listing endpoints."""

    limit: int = 0
    after: str = ""
    before: str = ""

    def to_params(self) -> dict[str, Any]:
        """Return the non-empty options as query parameters."""
        params: dict[str, Any] = {}
        if self.limit:
            params["limit"] = self.limit
        if self.after:
            params["after"] = self.after
        if self.before:
            params["before"] = self.before
        return params


def parse_timestamp(value: Any) -> datetime | None:
    """Convert an epoch-seconds value to an aware UTC datetime.

    ``False`` (used for "never edited") maps to the zero time.
    """
    if value is None:
        return None
    if value is False:
        return datetime(1, 1, 1, tzinfo=timezone.utc)
    if isinstance(value, str):
        value = float(value)
    return datetime.fromtimestamp(value, timezone.utc)


def _decode(response: requests.Response) -> Any:
    if not response.content.strip():
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _parse_rate(headers: Mapping[str, str], now: datetime | None = None) -> Rate:
    rate = Rate()
    if "x-ratelimit-remaining" in headers:
        rate.remaining = int(float(headers["x-ratelimit-remaining"]))
    if "x-ratelimit-used" in headers:
        rate.used = int(float(headers["x-ratelimit-used"]))
    if "x-ratelimit-reset" in headers:
        now = now or datetime.now(timezone.utc)
        rate.reset = now + timedelta(seconds=float(headers["x-ratelimit-reset"]))
    return rate


def check_response(response: requests.Response) -> None:
    """Raise the matching error if the response reports a failure."""
    payload = _decode(response)
    if 200 <= response.status_code < 300:
        if isinstance(payload, dict) and isinstance(payload.get("json"), dict):
            errors = payload["json"].get("errors") or []
            if errors:
                raise JSONErrorResponse(response, [APIError.from_json(e) for e in errors])
        return
    if isinstance(payload, dict) and "message" in payload:
        message = str(payload["message"])
    else:
        message = response.text
    if response.status_code == 429:
        raise RateLimitError(_parse_rate(response.headers), response, message)
    raise ErrorResponse(response, message)


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_encode_value(item) for item in value)
    return str(value)


def _encode_values(values: Mapping[str, Any]) -> dict[str, str]:
    return {key: _encode_value(value) for key, value in values.items() if value is not None}


class Client:
    """Sends requests to the API and decodes their responses."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        username: str = "",
        session: requests.Session | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.username = username
        self.session = session or requests.Session()
        self.user_agent = user_agent

    def request(
        self,
        method: str,
        path: str,
        form: Mapping[str, Any] | None = None,
        json_body: Any = None,
        params: Mapping[str, Any] | ListOptions | None = None,
    ) -> Response:
        """Send a request and return the decoded response, raising on failure."""
        kwargs: dict[str, Any] = {}
        if isinstance(params, ListOptions):
            params = params.to_params()
        if params:
            kwargs["params"] = _encode_values(params)
        if form is not None:
            kwargs["data"] = _encode_values(form)
        if json_body is not None:
            kwargs["json"] = json_body
        http_response = self.session.request(
            method,
            urljoin(self.base_url, path),
            headers={"User-Agent": self.user_agent},
            **kwargs,
        )
        check_response(http_response)
        return Response(
            http_response=http_response,
            data=_decode(http_response),
            rate=_parse_rate(http_response.headers),
        )

    def get_thing(
        self, path: str, params: Mapping[str, Any] | ListOptions | None = None
    ) -> tuple[dict[str, Any] | None, Response]:
        """Fetch a single ``{"kind", "data"}`` thing; ``None`` if the body is empty."""
        response = self.request("GET", path, params=params)
        thing = response.data if isinstance(response.data, dict) else None
        return thing, response

    def get_listing(
        self, path: str, params: Mapping[str, Any] | ListOptions | None = None
    ) -> tuple[list[dict[str, Any]], Response]:
        """Fetch a listing and return its child things."""
        response = self.request("GET", path, params=params)
        root = response.data if isinstance(response.data, dict) else {}
        listing = root.get("data") or {}
        response.after = listing.get("after") or ""
        response.before = listing.get("before") or ""
        return list(listing.get("children") or []), response