"""Lookup-service adapter and HTTP client."""

from .adapter import (
    LookupProfile,
    OnlineState,
    build_lookup_request,
    parse_lookup_profile,
    parse_lookup_response,
)
from .client import LookupClient

__all__ = [
    "LookupClient",
    "LookupProfile",
    "OnlineState",
    "build_lookup_request",
    "parse_lookup_profile",
    "parse_lookup_response",
]
