"""
CLI entry point.

Commands:
- serve: Run the JSON-lines bridge on stdin/stdout
- describe: Print the tool definition and active authentication
- request <METHOD> <ENDPOINT> [BODY]: Send one request and print the result

Flags:
- --debug: Enable debug logging (stderr)
- --log-file PATH: Also write logs to PATH
"""

import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from restbridge.core.config import Config, load_config
from restbridge.core.errors import ConfigurationError
from restbridge.core.logging import get_logger, setup_logging
from restbridge.pipeline.auth import describe_auth
from restbridge.tools.builtin.rest import build_rest_tool, register_rest_tools

USAGE = """Usage: restbridge [--debug] [--log-file PATH] <command>
Commands: serve, describe, request <METHOD> <ENDPOINT> [BODY]
Flags: --debug (enable debug logging on stderr), --log-file PATH (also log to a file)"""

# Exit status when configuration is missing or invalid
EXIT_CONFIG_ERROR = 2


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = list(sys.argv[1:] if argv is None else argv)

    debug_mode = "--debug" in args
    if debug_mode:
        args.remove("--debug")

    log_file = None
    if "--log-file" in args:
        index = args.index("--log-file")
        if index + 1 >= len(args):
            print("--log-file requires a path", file=sys.stderr)
            return 1
        log_file = Path(args[index + 1])
        del args[index : index + 2]

    setup_logging(level=logging.DEBUG if debug_mode else logging.INFO, log_file=log_file)
    logger = get_logger("cli")

    if not args:
        print(USAGE, file=sys.stderr)
        return 1

    command = args[0]
    if command not in ("serve", "describe", "request"):
        print(f"Unknown command: {command}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if command == "describe":
        return _describe(config)

    if command == "request":
        return asyncio.run(_request(config, args[1:]))

    logger.info(f"Serving {config.base_url} ({describe_auth(config)})")
    return asyncio.run(_serve(config))


def _describe(config: Config) -> int:
    """Print tool definitions."""
    print(register_rest_tools(config).get_context_string())
    print(f"Auth: {describe_auth(config)}")
    return 0


def _parse_body(raw: str) -> Any:
    """JSON if it parses, raw text otherwise."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


async def _request(config: Config, args: list[str]) -> int:
    """Run one request through the tool and print the result."""
    if len(args) not in (2, 3):
        print("Usage: restbridge request <METHOD> <ENDPOINT> [BODY]", file=sys.stderr)
        return 1

    call_args: dict[str, Any] = {"method": args[0].upper(), "endpoint": args[1]}
    if len(args) == 3:
        call_args["body"] = _parse_body(args[2])

    tool = build_rest_tool(config)
    result = await tool.executor(**call_args)
    print(json.dumps(asdict(result), indent=2, default=str))
    return 0 if result.success else 1


async def _serve(config: Config) -> int:
    """Run the stdio bridge until EOF."""
    from restbridge.interfaces.stdio import StdioBridge

    bridge = StdioBridge(register_rest_tools(config))
    await bridge.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
