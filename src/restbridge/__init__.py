"""
restbridge - single-tool bridge from an agent to one REST API.

Package structure:
- core: Config, errors, logging, shared types
- pipeline: Request construction and response sanitization
- tools: Tool definitions, registry and executor
- interfaces: Protocol adapters (stdio JSON lines)
"""

__version__ = "0.1.0"
