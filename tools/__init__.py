# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP binding for the knowledge-base tools.
#
# tools/ only translates between MCP and core.dispatcher: it registers the
# tool signatures, logs traffic to stderr and turns error results into
# ToolError.  Formatting and backend access live in core/.
# =============================================================================
