"""Steam ID parsing, formatting and lookup, with an MCP tool server."""

__version__ = "0.1.0"
