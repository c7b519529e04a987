"""Tool framework exposed to the calling agent."""

from restbridge.tools.base import Tool, ToolParameter
from restbridge.tools.executor import ToolExecutor
from restbridge.tools.parser import ToolCall, ToolParser
from restbridge.tools.registry import ToolRegistry

__all__ = ["Tool", "ToolParameter", "ToolCall", "ToolParser", "ToolRegistry", "ToolExecutor"]
