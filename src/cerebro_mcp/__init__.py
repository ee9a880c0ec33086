"""MCP tools for the Cerebro Marvel Champions card database."""

__version__ = "0.1.0"
