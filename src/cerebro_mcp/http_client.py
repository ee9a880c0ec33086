"""
Shared HTTP client for the Cerebro upstream.

- One `requests.Session` per process, built at construction and never mutated
  afterwards, so concurrent tool calls can share its connection pool.
- Exactly one GET per call: no retries, no caching, no status-code branching.
- Blocking I/O is pushed to worker threads so the MCP session loop keeps
  serving other requests while one call waits on the network.

Accepted risks: response bodies are read without a size limit, and a call in
flight is not cancelled when the MCP client goes away. Worker threads come
from the bounded default executor, so with no timeout configured enough hung
upstream calls will occupy every thread and stall all later calls.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

import requests
from requests import Response
from requests.adapters import HTTPAdapter

from cerebro_config.settings import env_float
from cerebro_mcp.errors import HttpRequestError, ResponseBodyError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://cerebro-beta-bot.herokuapp.com/"


@dataclass(frozen=True)
class HttpClientConfig:
    # None means no timeout at all; a slow upstream only stalls its own call.
    timeout: float | None = None
    pool_maxsize: int = 10

    @classmethod
    def from_env(cls) -> "HttpClientConfig":
        return cls(timeout=env_float("CEREBRO_HTTP_TIMEOUT"))


class HttpClient:
    """A small wrapper around `requests.Session` returning upstream bodies as text."""

    def __init__(self, *, config: HttpClientConfig | None = None, session: requests.Session | None = None) -> None:
        self.config = config or HttpClientConfig()
        self.session = session or self._build_session(self.config)

    @staticmethod
    def _build_session(config: HttpClientConfig) -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(max_retries=0, pool_connections=config.pool_maxsize, pool_maxsize=config.pool_maxsize)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    def _send(self, url: str) -> Response:
        t0 = time.perf_counter()
        try:
            resp = self.session.get(url, timeout=self.config.timeout, stream=True)
        except requests.RequestException as e:
            ms = int((time.perf_counter() - t0) * 1000)
            logger.warning("HTTP GET %s failed (ms=%s): %s", url, ms, e)
            raise HttpRequestError(str(e)) from e
        ms = int((time.perf_counter() - t0) * 1000)
        logger.debug("HTTP GET %s -> %s (ms=%s)", url, resp.status_code, ms)
        return resp

    @staticmethod
    def _read_text(resp: Response) -> str:
        try:
            return resp.text
        except requests.RequestException as e:
            logger.warning("Reading body of %s failed: %s", resp.url, e)
            raise ResponseBodyError(str(e)) from e
        finally:
            resp.close()

    async def fetch_text(self, url: str) -> str:
        """GET `url` and return the whole body as text, whatever the status code."""
        logger.info("URL: %s", url)
        resp = await asyncio.to_thread(self._send, url)
        try:
            return await asyncio.to_thread(self._read_text, resp)
        except BaseException:
            # a cancelled await may never have run _read_text; close() is idempotent
            resp.close()
            raise

    def close(self) -> None:
        self.session.close()
