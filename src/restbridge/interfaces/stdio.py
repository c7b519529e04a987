"""
JSON-lines bridge over stdin/stdout.

Each input line is one JSON object:
- {"tool": "test_request", "args": {...}, "id": 1}   run a tool
- {"op": "list_tools", "format": "openai", "id": 2}  describe tools ("anthropic" also accepted)

Each output line is {"id", "success", "data", "error"}. Lines are handled
concurrently, so responses may come back out of order; "id" is echoed to
match them up.
"""

import asyncio
import json
import sys
from dataclasses import asdict
from typing import Any, TextIO

from restbridge.core.logging import get_logger
from restbridge.core.types import ActionResult
from restbridge.core.typing import JSONDict
from restbridge.tools.executor import ToolExecutor
from restbridge.tools.parser import ToolParser
from restbridge.tools.registry import ToolRegistry

logger = get_logger("interfaces.stdio")


class StdioBridge:
    """Reads tool calls line by line and writes one result per line."""

    def __init__(self, registry: ToolRegistry) -> None:
        self.registry = registry
        self.executor = ToolExecutor(registry)
        self._write_lock = asyncio.Lock()

    async def handle_line(self, line: str) -> JSONDict:
        """Process one input line into a response object."""
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            return self._response(None, ActionResult(success=False, error=f"Invalid JSON: {e}"))

        request_id = data.get("id") if isinstance(data, dict) else None

        if isinstance(data, dict) and data.get("op") == "list_tools":
            fmt = data.get("format", "openai")
            if fmt == "anthropic":
                tools = self.registry.to_anthropic_tools()
            elif fmt == "openai":
                tools = self.registry.to_openai_tools()
            else:
                return self._response(
                    request_id, ActionResult(success=False, error=f"Unknown format: {fmt}")
                )
            return self._response(request_id, ActionResult(success=True, data={"tools": tools}))

        call = ToolParser.from_dict(data, raw_json=line)
        if call is None:
            return self._response(
                request_id,
                ActionResult(success=False, error='Expected {"tool": ..., "args": {...}} or {"op": "list_tools"}'),
            )

        result = await self.executor.execute(call)
        return self._response(request_id, result)

    @staticmethod
    def _response(request_id: Any, result: ActionResult) -> JSONDict:
        return {"id": request_id, **asdict(result)}

    async def _process(self, line: str, output: TextIO) -> None:
        response = await self.handle_line(line)
        async with self._write_lock:
            output.write(json.dumps(response, default=str) + "\n")
            output.flush()

    async def run(self, reader: TextIO | None = None, writer: TextIO | None = None) -> None:
        """Serve until EOF on reader. Pending calls are finished before returning."""
        reader = reader or sys.stdin
        writer = writer or sys.stdout
        pending: set[asyncio.Task] = set()

        logger.info("Bridge ready, reading tool calls from stdin")
        while True:
            line = await asyncio.to_thread(reader.readline)
            if not line:
                break
            if not line.strip():
                continue
            task = asyncio.create_task(self._process(line.strip(), writer))
            pending.add(task)
            task.add_done_callback(pending.discard)

        if pending:
            await asyncio.gather(*pending)
        logger.info("Input closed, bridge stopped")
