"""Parsers for the textual Steam ID formats.

Steam has accumulated several ways of writing the same ID:
- SteamID64: 76561197960265751
- SteamID32 (account number, "friend code"): 23
- SteamID: STEAM_0:1:11
- SteamID3: [U:1:23]

Each parser only accepts its own grammar. ``parse`` tries them in a fixed
order and returns the first match.
"""

import logging
import re
from enum import Enum

from steamid_mcp.id import codec
from steamid_mcp.id.codec import AccountType, Universe
from steamid_mcp.id.errors import (
    MalformedInputError,
    NumericOverflowError,
    SteamIDError,
    UnknownAccountTypeError,
    UnsupportedFormatError,
)
from steamid_mcp.id.steam_id import SteamID


logger = logging.getLogger(__name__)


class SteamIDFormat(Enum):
    """The supported textual formats."""

    STEAM64 = "steam64"
    STEAM32 = "steam32"
    STEAM2 = "steam2"
    STEAM3 = "steam3"


# Matched with fullmatch; [0-9] keeps non-ASCII digits out.
# The universe is a single digit in both bracketed and STEAM_ forms.
DIGITS_PATTERN = re.compile(r"[0-9]+")
STEAMID_PATTERN = re.compile(r"STEAM_([0-9]):([01]):([0-9]+)", re.IGNORECASE)
STEAMID3_PATTERN = re.compile(r"\[([A-Za-z]):([0-9]):([0-9]+)(?::([0-9]+))?\]")

# Steam3 type letter -> (account type, default instance)
STEAM3_LETTERS: dict[str, tuple[AccountType, int]] = {
    "I": (AccountType.INVALID, 0),
    "U": (AccountType.INDIVIDUAL, codec.DESKTOP_INSTANCE),
    "M": (AccountType.MULTISEAT, 0),
    "G": (AccountType.GAME_SERVER, 0),
    "A": (AccountType.ANON_GAME_SERVER, 0),
    "P": (AccountType.PENDING, 0),
    "C": (AccountType.CONTENT_SERVER, 0),
    "g": (AccountType.CLAN, 0),
    "T": (AccountType.CHAT, 0),
    "c": (AccountType.CHAT, codec.CLAN_CHAT_FLAG),
    "L": (AccountType.CHAT, codec.LOBBY_CHAT_FLAG),
    "a": (AccountType.ANON_USER, 0),
    # Types without a letter of their own render as "i"
    "i": (AccountType.P2P_SUPER_SEEDER, 0),
}


def _to_universe(raw: str, text: str) -> Universe:
    number = int(raw)
    try:
        return Universe(number)
    except ValueError:
        raise NumericOverflowError(
            f"Universe {number} out of range in Steam ID: {text}", text
        ) from None


def _check_range(number: int, limit: int, field: str, text: str) -> int:
    if number > limit:
        raise NumericOverflowError(
            f"{field} {number} exceeds {limit} in Steam ID: {text}", text
        )
    return number


def parse_steam64(text: str) -> SteamID:
    """Parse a decimal SteamID64; any unsigned 64-bit value is accepted."""
    if not DIGITS_PATTERN.fullmatch(text):
        raise MalformedInputError(f"Not a decimal SteamID64: {text}", text)

    value = _check_range(int(text), codec.MAX_U64, "SteamID64", text)
    return SteamID.from_u64(value)


def _is_short_number(text: str) -> bool:
    if not DIGITS_PATTERN.fullmatch(text):
        return False
    return int(text) <= codec.MAX_ACCOUNT_NUMBER


def parse_steam32(text: str) -> SteamID:
    """Parse a decimal account number as a public individual account."""
    if not DIGITS_PATTERN.fullmatch(text):
        raise MalformedInputError(f"Not a decimal SteamID32: {text}", text)

    account_number = _check_range(
        int(text), codec.MAX_ACCOUNT_NUMBER, "SteamID32", text
    )
    return SteamID.from_fields(account_number)


def parse_steam2(text: str) -> SteamID:
    """
    Parse the legacy STEAM_X:Y:Z format.

    Universe 0 is read as Public: older Source engine games print
    STEAM_0 for public accounts.
    """
    match = STEAMID_PATTERN.fullmatch(text)
    if not match:
        raise MalformedInputError(f"Invalid STEAM_X:Y:Z format: {text}", text)

    universe = _to_universe(match.group(1), text)
    if universe == Universe.INVALID:
        universe = Universe.PUBLIC

    auth_server = int(match.group(2))
    account_id = int(match.group(3))
    account_number = _check_range(
        account_id * 2 + auth_server, codec.MAX_ACCOUNT_NUMBER, "Account number", text
    )
    return SteamID.from_fields(account_number, universe=universe)


def parse_steam3(text: str) -> SteamID:
    """Parse the bracketed [T:U:A] or [T:U:A:I] format."""
    match = STEAMID3_PATTERN.fullmatch(text)
    if not match:
        raise MalformedInputError(f"Invalid [T:U:A] format: {text}", text)

    letter, universe_raw, account_raw, instance_raw = match.groups()
    if letter not in STEAM3_LETTERS:
        raise UnknownAccountTypeError(
            f"Unknown account type letter '{letter}' in Steam ID: {text}", text
        )
    account_type, instance = STEAM3_LETTERS[letter]

    universe = _to_universe(universe_raw, text)
    account_number = _check_range(
        int(account_raw), codec.MAX_ACCOUNT_NUMBER, "Account number", text
    )
    if instance_raw is not None:
        instance = _check_range(
            int(instance_raw), codec.MAX_INSTANCE, "Instance", text
        )

    return SteamID.from_fields(account_number, instance, account_type, universe)


PARSERS = {
    SteamIDFormat.STEAM64: parse_steam64,
    SteamIDFormat.STEAM32: parse_steam32,
    SteamIDFormat.STEAM2: parse_steam2,
    SteamIDFormat.STEAM3: parse_steam3,
}

# Order matters: SteamID64 must be tried before SteamID32
PARSE_ORDER = (
    SteamIDFormat.STEAM64,
    SteamIDFormat.STEAM32,
    SteamIDFormat.STEAM2,
    SteamIDFormat.STEAM3,
)


def parse(text: str, fmt: SteamIDFormat | None = None) -> SteamID:
    """
    Parse a Steam ID from any supported format.

    Decimal values that fit in 32 bits carry no universe or account type,
    so without ``fmt`` they are read as SteamID32 rather than SteamID64.

    Args:
        text: Steam ID text; surrounding whitespace is ignored
        fmt: Only try this format

    Returns:
        The parsed SteamID

    Raises:
        NumericOverflowError: A format matched but a value was out of range
        UnknownAccountTypeError: A Steam3 ID used an unknown type letter
        UnsupportedFormatError: No format matched
        MalformedInputError: ``fmt`` was given and the text does not match it
    """
    text = text.strip()

    if fmt is not None:
        return PARSERS[fmt](text)

    value_error: SteamIDError | None = None
    for candidate in PARSE_ORDER:
        if candidate is SteamIDFormat.STEAM64 and _is_short_number(text):
            continue
        try:
            return PARSERS[candidate](text)
        except MalformedInputError:
            logger.debug(f"'{text}' is not a {candidate.value} Steam ID")
        except (NumericOverflowError, UnknownAccountTypeError) as e:
            logger.debug(f"'{text}' matched {candidate.value} but failed: {e}")
            if value_error is None:
                value_error = e

    if value_error is not None:
        raise value_error

    raise UnsupportedFormatError(
        f"Unable to parse Steam ID: '{text}'. "
        "Accepted formats: SteamID64, SteamID32, STEAM_X:Y:Z, [T:U:A].",
        text,
    )
