"""Tool registry for managing available tools."""

from restbridge.core.logging import get_logger
from restbridge.core.typing import ToolSpec
from restbridge.tools.base import Tool

logger = get_logger("tools.registry")


class ToolRegistry:
    """Registry of the tools exposed to the agent."""

    def __init__(self):
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool."""
        if tool.name in self._tools:
            logger.warning(f"Tool {tool.name} already registered, overwriting")
        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    def get(self, name: str) -> Tool | None:
        """Get tool by name."""
        return self._tools.get(name)

    def get_context_string(self) -> str:
        """Plain-text definitions of all tools."""
        if not self._tools:
            return "No tools available."

        lines = ["# AVAILABLE TOOLS\n"]
        for tool in self._tools.values():
            lines.append(tool.to_context_string())
            lines.append("")
        return "\n".join(lines)

    def to_openai_tools(self) -> list[ToolSpec]:
        return [tool.to_openai_function() for tool in self._tools.values()]

    def to_anthropic_tools(self) -> list[ToolSpec]:
        return [tool.to_anthropic_tool() for tool in self._tools.values()]
