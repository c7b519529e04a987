"""Execute parsed tool calls."""

from restbridge.core.logging import get_logger
from restbridge.core.types import ActionResult
from restbridge.tools.parser import ToolCall
from restbridge.tools.registry import ToolRegistry

logger = get_logger("tools.executor")

# Maximum length for logged content (characters)
MAX_LOG_LENGTH = 500


def _truncate_for_logging(result: ActionResult, max_len: int = MAX_LOG_LENGTH) -> str:
    """
    Create a truncated string representation of ActionResult for logging.

    Nested dicts (request/response sections) are walked so long bodies are
    clipped wherever they sit.
    """
    if not result.success:
        return repr(result)

    if not result.data:
        return "ActionResult(success=True, data=None)"

    def clip(value: object) -> object:
        if isinstance(value, str) and len(value) > max_len:
            return f"{value[:max_len]}... [truncated, {len(value)} chars total]"
        if isinstance(value, dict):
            return {k: clip(v) for k, v in value.items()}
        return value

    return f"ActionResult(success=True, data={clip(result.data)})"


class ToolExecutor:
    """Executes tool calls with validation."""

    def __init__(self, registry: ToolRegistry) -> None:
        self.registry = registry

    async def execute(self, tool_call: ToolCall) -> ActionResult:
        """
        Execute a single tool call.

        Args:
            tool_call: Parsed tool call

        Returns:
            ActionResult with success/error and data
        """
        tool = self.registry.get(tool_call.tool_name)
        if not tool:
            return ActionResult(
                success=False,
                error=f"Tool not found: {tool_call.tool_name}",
            )

        valid, error = tool.validate_args(tool_call.arguments)
        if not valid:
            return ActionResult(success=False, error=f"Invalid arguments: {error}")

        try:
            logger.info(f"Executing tool: {tool_call.tool_name}")
            result = await tool.executor(**tool_call.arguments)
            logger.debug(f"Tool {tool_call.tool_name} result: {_truncate_for_logging(result)}")
            return result
        except TypeError as e:
            return ActionResult(
                success=False,
                error=f"Tool execution failed: Invalid arguments - {e}",
            )
        except Exception as e:
            logger.error(f"Tool {tool_call.tool_name} failed: {e}", exc_info=True)
            return ActionResult(success=False, error=f"Tool execution failed: {e}")
