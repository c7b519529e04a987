"""
Interfaces module - protocol adapters for the calling agent.

Adapters:
- stdio: JSON lines over stdin/stdout
"""

from restbridge.interfaces.stdio import StdioBridge

__all__ = ["StdioBridge"]
