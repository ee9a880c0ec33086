"""
Domain errors raised while translating a tool call into an upstream request.

Each kind renders its own human-readable message through ``str()``. At the
protocol boundary every kind becomes the same MCP error result (one text
block holding the message, no error code), so callers can only tell them
apart by the message text.
"""

from __future__ import annotations


class CerebroError(Exception):
    """Base class for errors local to a single tool invocation."""


class SerializationError(CerebroError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to serialize request: {detail}")
        self.detail = detail


class HttpRequestError(CerebroError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"HTTP request failed: {detail}")
        self.detail = detail


class ResponseBodyError(CerebroError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to read response body: {detail}")
        self.detail = detail


class SchemaValidationError(CerebroError):
    def __init__(self, tool: str, detail: str) -> None:
        super().__init__(f"Invalid arguments for {tool}: {detail}")
        self.tool = tool
        self.detail = detail


class UnknownToolError(CerebroError):
    def __init__(self, tool: str) -> None:
        super().__init__(f"Unknown tool: {tool}")
        self.tool = tool
