"""MCP server: tool argument models, tool router and process entry point."""

from prsight.server.handler import TOOL_DEFINITIONS, ToolDefinition, ToolHandler, ToolResult

__all__ = ["ToolHandler", "ToolResult", "ToolDefinition", "TOOL_DEFINITIONS"]
