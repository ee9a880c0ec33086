from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from cerebro_common.tooling import InstrumentConfig, instrument_async_tool
from cerebro_mcp.encoding import build_url, encode_query
from cerebro_mcp.errors import CerebroError, UnknownToolError
from cerebro_mcp.http_client import DEFAULT_BASE_URL
from cerebro_mcp.schema import CARDS_SCHEMA, PACKS_SCHEMA, SETS_SCHEMA, ToolSchema

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    async def fetch_text(self, url: str) -> str: ...


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    schema: ToolSchema
    path: str


@dataclass(frozen=True)
class ToolResult:
    text: str | None = None
    message: str | None = None

    @property
    def is_error(self) -> bool:
        return self.message is not None

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(text=text)

    @classmethod
    def failure(cls, err: CerebroError | str) -> "ToolResult":
        return cls(message=str(err))


TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    ToolDefinition("get_cards", "Fetch a list of Marvel Champions card data", CARDS_SCHEMA, "cards"),
    ToolDefinition("get_packs", "Fetch a list of Marvel Champions pack data", PACKS_SCHEMA, "packs"),
    ToolDefinition("get_sets", "Fetch a list of Marvel Champions set data", SETS_SCHEMA, "sets"),
)


class Dispatcher:
    """
    Routes tool calls: lookup -> validate -> encode -> fetch.

    Holds only immutable state, so concurrent calls never interfere.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        definitions: tuple[ToolDefinition, ...] = TOOL_DEFINITIONS,
        *,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._fetcher = fetcher
        self._definitions = tuple(definitions)
        self._by_name = {d.name: d for d in self._definitions}
        self._base_url = base_url

    def list_tools(self) -> tuple[ToolDefinition, ...]:
        return self._definitions

    def request_url(self, name: str, arguments: Mapping[str, Any] | None) -> str:
        """Validate and encode a call without performing it."""
        definition = self._by_name.get(name)
        if definition is None:
            raise UnknownToolError(name)
        request = definition.schema.validate(name, arguments)
        return build_url(self._base_url, definition.path, encode_query(definition.schema, request))

    @instrument_async_tool(InstrumentConfig(kind="tool"))
    async def call(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        try:
            url = self.request_url(name, arguments)
            text = await self._fetcher.fetch_text(url)
        except CerebroError as e:
            logger.info("%s failed: %s", name, e)
            return ToolResult.failure(e)
        return ToolResult.success(text)
