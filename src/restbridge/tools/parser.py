"""Parse tool calls from bridge input lines."""

import json
from dataclasses import dataclass
from typing import Any

from restbridge.core.logging import get_logger

logger = get_logger("tools.parser")


@dataclass
class ToolCall:
    """A parsed tool call."""

    tool_name: str
    arguments: dict[str, Any]
    raw_json: str


class ToolParser:
    """Turn one JSON object into a ToolCall."""

    @staticmethod
    def from_dict(data: Any, raw_json: str = "") -> ToolCall | None:
        """
        Build a ToolCall from a decoded JSON object.

        Accepts both shapes:
        - {"tool": "name", "args": {...}}
        - {"name": "name", "arguments": {...}} (arguments may be a JSON string)

        Returns:
            ToolCall or None if the object is not a tool call
        """
        if not isinstance(data, dict):
            return None

        if "tool" in data:
            tool_name, arguments = data["tool"], data.get("args", {})
        elif "name" in data:
            tool_name, arguments = data["name"], data.get("arguments", {})
        else:
            return None

        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments)
            except json.JSONDecodeError:
                logger.warning(f"Tool call {tool_name!r} has unparseable arguments string")
                return None

        if not isinstance(tool_name, str) or not isinstance(arguments, dict):
            logger.warning(f"Tool call has invalid shape: tool={tool_name!r}, args={type(arguments)}")
            return None

        return ToolCall(tool_name=tool_name, arguments=arguments, raw_json=raw_json)
