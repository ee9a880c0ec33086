from __future__ import annotations

import asyncio
import logging
import os
import sys
from typing import Any, NoReturn

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from cerebro_config.settings import init_runtime
from cerebro_mcp import __version__
from cerebro_mcp.dispatcher import Dispatcher, ToolDefinition
from cerebro_mcp.http_client import HttpClient, HttpClientConfig

logger = logging.getLogger(__name__)

SERVER_NAME = "cerebro"
SERVER_INSTRUCTIONS = "Cerebro API"
SESSION_FAILURE_EXIT_CODE = 1


class ToolCallFailed(Exception):
    """Raised inside the call_tool handler; the SDK renders it as an isError result carrying the message."""


def _tool(definition: ToolDefinition) -> types.Tool:
    return types.Tool(
        name=definition.name,
        description=definition.description,
        inputSchema=definition.schema.input_schema(),
    )


def build_server(dispatcher: Dispatcher) -> Server:
    server = Server(SERVER_NAME, version=__version__, instructions=SERVER_INSTRUCTIONS)
    tools = [_tool(d) for d in dispatcher.list_tools()]

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return tools

    # Arguments are validated by the dispatcher against its own tables.
    @server.call_tool(validate_input=False)
    async def _call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        result = await dispatcher.call(name, arguments)
        if result.is_error:
            raise ToolCallFailed(result.message)
        return [types.TextContent(type="text", text=result.text or "")]

    return server


async def serve(dispatcher: Dispatcher) -> None:
    """Serve one MCP session over stdin/stdout until the stream closes.

    If the session loop fails (for example on a malformed message), the process
    exits with SESSION_FAILURE_EXIT_CODE without waiting for stdin to close.
    """
    server = build_server(dispatcher)
    async with stdio_server() as (read_stream, write_stream):
        try:
            # raise_exceptions: a framing violation on the stream ends the session.
            # Tool failures never get here, they are already error results.
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
                raise_exceptions=True,
            )
        except Exception:
            logger.exception("MCP session failed; shutting down")
            _terminate(SESSION_FAILURE_EXIT_CODE)


def _terminate(code: int) -> NoReturn:
    # The stdin reader thread is blocked in a read that cannot be cancelled, so
    # leaving stdio_server() normally would hang until the client closes stdin.
    logging.shutdown()
    sys.stderr.flush()
    os._exit(code)


def main() -> None:
    # Entry points (console_scripts) call main() directly, so we must perform
    # runtime initialization here (dotenv + logging).
    init_runtime()
    logger.info("Starting Cerebro MCP server...")

    client = HttpClient(config=HttpClientConfig.from_env())
    try:
        asyncio.run(serve(Dispatcher(client)))
    finally:
        client.close()
    logger.info("Cerebro MCP server stopped.")


if __name__ == "__main__":
    main()
