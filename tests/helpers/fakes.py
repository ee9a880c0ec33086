"""Hermetic stand-ins for the upstream: nothing here opens a socket."""

from __future__ import annotations

from typing import Any, Callable

import requests

from cerebro_mcp.errors import HttpRequestError


class RecordingFetcher:
    """Fetcher that records every URL and answers from a callable or a fixed body."""

    def __init__(self, body: str | Callable[[str], str] = '[{"Name": "Iron Man"}]') -> None:
        self.body = body
        self.urls: list[str] = []

    async def fetch_text(self, url: str) -> str:
        self.urls.append(url)
        if callable(self.body):
            return self.body(url)
        return self.body


class FailOnceFetcher(RecordingFetcher):
    """First call fails like a refused connection; later calls succeed."""

    def __init__(self, body: str = "[]") -> None:
        super().__init__(body)
        self.failed = False

    async def fetch_text(self, url: str) -> str:
        self.urls.append(url)
        if not self.failed:
            self.failed = True
            raise HttpRequestError("Connection refused")
        return str(self.body)


class FakeResponse:
    def __init__(
        self,
        text: str = "",
        *,
        status_code: int = 200,
        url: str = "https://example.test/",
        body_error: Exception | None = None,
    ) -> None:
        self._text = text
        self.status_code = status_code
        self.url = url
        self.body_error = body_error
        self.closed = False

    @property
    def text(self) -> str:
        if self.body_error is not None:
            raise self.body_error
        return self._text

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Minimal `requests.Session` replacement recording GET calls."""

    def __init__(self, response: FakeResponse | None = None, *, error: Exception | None = None) -> None:
        self.response = response or FakeResponse()
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self) -> None:
        self.closed = True


def connection_refused() -> requests.ConnectionError:
    return requests.ConnectionError("[Errno 111] Connection refused")
