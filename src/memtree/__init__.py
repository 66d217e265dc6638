"""memtree - in-memory hierarchical file store with an MCP server."""

__version__ = "0.1.0"
