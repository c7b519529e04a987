"""
Core module - configuration, errors, shared types.

Components:
- config: Environment configuration via pydantic-settings
- errors: Error taxonomy shared by the pipeline and the tool layer
- types: Shared data structures (descriptors, ActionResult)
- logging: Logging setup
"""

from restbridge.core.config import Config, load_config
from restbridge.core.types import HttpMethod, RequestDescriptor, ResponseDescriptor

__all__ = ["Config", "load_config", "HttpMethod", "RequestDescriptor", "ResponseDescriptor"]
