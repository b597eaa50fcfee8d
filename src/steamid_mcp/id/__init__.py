"""SteamID model, bit codec, parsers and renderers."""

from .codec import AccountType, Universe, pack, unpack
from .errors import (
    FieldOutOfRangeError,
    MalformedInputError,
    MalformedResponseError,
    NotRepresentableError,
    NumericOverflowError,
    ServiceError,
    SteamIDError,
    SteamLookupError,
    UnknownAccountTypeError,
    UnsupportedFormatError,
)
from .parsers import SteamIDFormat, parse
from .renderers import render, render_all
from .steam_id import SteamID

__all__ = [
    "AccountType",
    "Universe",
    "pack",
    "unpack",
    "SteamID",
    "SteamIDFormat",
    "parse",
    "render",
    "render_all",
    "SteamIDError",
    "MalformedInputError",
    "UnsupportedFormatError",
    "NumericOverflowError",
    "UnknownAccountTypeError",
    "FieldOutOfRangeError",
    "NotRepresentableError",
    "SteamLookupError",
    "ServiceError",
    "MalformedResponseError",
]
