# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL business logic for the regulatory intelligence
# server: the sector registry, the GOV.UK search gateway, the data models,
# the error taxonomy, configuration and the tool dispatcher.
#
# Nothing in this package imports FastMCP.  The tools/ layer wires these
# pieces into an MCP server; everything here can be driven directly from a
# test or a REPL with a fake gateway.
# =============================================================================
