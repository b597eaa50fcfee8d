"""MCP endpoint modules.

Each endpoint module groups related tools on a BaseEndpoint subclass.
"""

from .base import BaseEndpoint, endpoint, EndpointRegistry

__all__ = ["BaseEndpoint", "endpoint", "EndpointRegistry"]
