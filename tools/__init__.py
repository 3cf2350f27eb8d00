# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between MCP and core/.  It:
#     1. Declares each tool's name, typed parameters and docstring
#     2. Forwards the call to core.dispatch.Dispatcher
#     3. Logs requests and responses to stderr
#     4. Converts dispatcher error results into MCP error results
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build queries or resolve sectors (that's in core/)
#   - They do NOT talk to GOV.UK directly
# =============================================================================
