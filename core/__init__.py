# =============================================================================
# core/__init__.py
# =============================================================================
# All knowledge-base logic: configuration, the HTTP client, the parse step,
# the HTML sanitizer, both backend variants and the tool dispatcher.
#
# Nothing in this package imports FastMCP.  The dispatcher returns plain
# ToolResult values; tools/ is what puts them on the MCP wire.
# =============================================================================
