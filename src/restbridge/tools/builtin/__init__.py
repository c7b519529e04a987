"""Built-in tools."""

from restbridge.tools.builtin.rest import build_rest_tool, register_rest_tools

__all__ = ["build_rest_tool", "register_rest_tools"]
