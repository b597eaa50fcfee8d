"""Exceptions raised while parsing, rendering or looking up Steam IDs.

Every exception keeps the offending input on ``value`` so callers can show
it back to the user verbatim.
"""

from typing import Any


class SteamIDError(Exception):
    """Base exception for all Steam ID failures."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class MalformedInputError(SteamIDError):
    """Raised when text does not match a format's grammar."""

    pass


class UnsupportedFormatError(SteamIDError):
    """Raised when input matched none of the known formats."""

    pass


class NumericOverflowError(SteamIDError):
    """Raised when a numeric component exceeds its field's range."""

    pass


class UnknownAccountTypeError(SteamIDError):
    """Raised for a Steam3 type letter outside the known table."""

    pass


class FieldOutOfRangeError(SteamIDError):
    """Raised when direct field construction violates the bit layout."""

    def __init__(self, field: str, value: Any, limit: str):
        super().__init__(f"{field} out of range ({limit}): {value!r}", value)
        self.field = field


class NotRepresentableError(SteamIDError):
    """Raised when a Steam ID cannot be rendered in the requested format."""

    pass


class SteamLookupError(SteamIDError):
    """Base exception for lookup-service failures."""

    pass


class ServiceError(SteamLookupError):
    """Raised when the lookup service reports a failure or no match."""

    pass


class MalformedResponseError(SteamLookupError):
    """Raised when a lookup payload does not have the expected structure."""

    pass


class LookupTransportError(SteamLookupError):
    """Raised when the lookup service cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
