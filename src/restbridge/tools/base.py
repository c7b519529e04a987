"""Base tool definitions."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from restbridge.core.types import ActionResult, RiskLevel
from restbridge.core.typing import JSONDict, ToolSpec


@dataclass
class ToolParameter:
    """Definition of a tool parameter."""

    name: str
    type: str | None  # "string", "number", "boolean", "object", "array"; None = any JSON value
    description: str
    required: bool = True
    default: Any = None
    enum: list[str] | None = None

    def to_schema(self) -> JSONDict:
        """JSON schema fragment for this parameter."""
        schema: JSONDict = {"description": self.description}
        if self.type is not None:
            schema["type"] = self.type
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.default is not None:
            schema["default"] = self.default
        return schema


@dataclass
class Tool:
    """Definition of a callable tool."""

    name: str
    description: str
    parameters: list[ToolParameter]
    executor: Callable[..., Awaitable[ActionResult]]
    risk_level: RiskLevel = RiskLevel.LOW
    examples: list[str] = field(default_factory=list)

    def to_context_string(self) -> str:
        """Format tool as plain text for an agent's context."""
        params_str = ", ".join(
            f"{p.name}: {p.type or 'any'}" + ("" if p.required else " (optional)")
            for p in self.parameters
        )

        lines = [f"{self.name}({params_str})"]
        lines.append(f"  {self.description}")
        lines.append(f"  Risk: {self.risk_level.value}")

        if self.parameters:
            lines.append("  Parameters:")
            for p in self.parameters:
                req = "required" if p.required else "optional"
                lines.append(f"    - {p.name} ({p.type or 'any'}, {req}): {p.description}")
                if p.enum:
                    lines.append(f"      one of: {', '.join(p.enum)}")

        if self.examples:
            lines.append("  Examples:")
            for ex in self.examples:
                lines.append(f"    {ex}")

        return "\n".join(lines)

    def validate_args(self, args: dict[str, Any]) -> tuple[bool, str | None]:
        """
        Check argument names against the declared parameters.

        Value validation is left to the tool itself.

        Returns:
            (valid, error_message)
        """
        required_params = {p.name for p in self.parameters if p.required}
        missing = required_params - set(args.keys())
        if missing:
            return False, f"Missing required parameters: {', '.join(sorted(missing))}"

        valid_params = {p.name for p in self.parameters}
        unknown = set(args.keys()) - valid_params
        if unknown:
            return False, f"Unknown parameters: {', '.join(sorted(unknown))}"

        return True, None

    def _input_schema(self) -> JSONDict:
        return {
            "type": "object",
            "properties": {p.name: p.to_schema() for p in self.parameters},
            "required": [p.name for p in self.parameters if p.required],
        }

    def to_openai_function(self) -> ToolSpec:
        """Convert to OpenAI function calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self._input_schema(),
            },
        }

    def to_anthropic_tool(self) -> ToolSpec:
        """Convert to Anthropic tool use format."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self._input_schema(),
        }
