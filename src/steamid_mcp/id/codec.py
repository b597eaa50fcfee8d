"""Bit-level packing of the 64-bit Steam ID.

Layout, most significant bits first:

    universe      8 bits   (56-63)
    account type  4 bits   (52-55)
    instance     20 bits   (32-51)
    account      32 bits   (0-31, bit 0 is the legacy "auth server" bit)

Reference: https://developer.valvesoftware.com/wiki/SteamID
"""

from enum import IntEnum
from typing import NamedTuple

from steamid_mcp.id.errors import FieldOutOfRangeError, NumericOverflowError


MAX_U64 = 0xFFFFFFFFFFFFFFFF
MAX_ACCOUNT_NUMBER = 0xFFFFFFFF
MAX_INSTANCE = 0xFFFFF

ACCOUNT_NUMBER_MASK = 0xFFFFFFFF
INSTANCE_SHIFT = 32
INSTANCE_MASK = 0xFFFFF
ACCOUNT_TYPE_SHIFT = 52
ACCOUNT_TYPE_MASK = 0xF
UNIVERSE_SHIFT = 56
UNIVERSE_MASK = 0xFF

DESKTOP_INSTANCE = 1

# Chat instance flags occupy the top bits of the instance field
CLAN_CHAT_FLAG = (MAX_INSTANCE + 1) >> 1
LOBBY_CHAT_FLAG = (MAX_INSTANCE + 1) >> 2
MMS_LOBBY_CHAT_FLAG = (MAX_INSTANCE + 1) >> 3


class Universe(IntEnum):
    """Top-level namespace of a Steam ID."""

    INVALID = 0
    PUBLIC = 1
    BETA = 2
    INTERNAL = 3
    DEV = 4
    RC = 5

    @property
    def display_name(self) -> str:
        return _UNIVERSE_NAMES[self]


class AccountType(IntEnum):
    """Category of the entity a Steam ID identifies."""

    INVALID = 0
    INDIVIDUAL = 1
    MULTISEAT = 2
    GAME_SERVER = 3
    ANON_GAME_SERVER = 4
    PENDING = 5
    CONTENT_SERVER = 6
    CLAN = 7
    CHAT = 8
    P2P_SUPER_SEEDER = 9
    ANON_USER = 10

    @property
    def display_name(self) -> str:
        return _ACCOUNT_TYPE_NAMES[self]


_UNIVERSE_NAMES = {
    Universe.INVALID: "Invalid",
    Universe.PUBLIC: "Public",
    Universe.BETA: "Beta",
    Universe.INTERNAL: "Internal",
    Universe.DEV: "Developer",
    Universe.RC: "RC",
}

_ACCOUNT_TYPE_NAMES = {
    AccountType.INVALID: "Invalid",
    AccountType.INDIVIDUAL: "Individual",
    AccountType.MULTISEAT: "Multiseat",
    AccountType.GAME_SERVER: "Game server",
    AccountType.ANON_GAME_SERVER: "Anonymous game server",
    AccountType.PENDING: "Pending",
    AccountType.CONTENT_SERVER: "Content server",
    AccountType.CLAN: "Clan",
    AccountType.CHAT: "Chat",
    AccountType.P2P_SUPER_SEEDER: "Peer to peer superseeder",
    AccountType.ANON_USER: "Anonymous user",
}

_UNIVERSE_VALUES = frozenset(int(u) for u in Universe)
_ACCOUNT_TYPE_VALUES = frozenset(int(t) for t in AccountType)


class SteamIDFields(NamedTuple):
    """The four logical fields of a Steam ID."""

    account_number: int
    instance: int
    account_type: AccountType
    universe: Universe


def to_universe(value: int) -> Universe:
    """Map a raw universe number to ``Universe``, unknown values to INVALID."""
    return Universe(value) if value in _UNIVERSE_VALUES else Universe.INVALID


def to_account_type(value: int) -> AccountType:
    """Map a raw type number to ``AccountType``, unknown values to INVALID."""
    if value in _ACCOUNT_TYPE_VALUES:
        return AccountType(value)
    return AccountType.INVALID


def pack(
    account_number: int,
    instance: int,
    account_type: AccountType | int,
    universe: Universe | int,
) -> int:
    """
    Pack the four fields into a 64-bit Steam ID.

    Raises:
        FieldOutOfRangeError: If a field does not fit its bit width or the
            account type/universe is not a known enumerant.
    """
    if not 0 <= account_number <= MAX_ACCOUNT_NUMBER:
        raise FieldOutOfRangeError(
            "account_number", account_number, f"0..{MAX_ACCOUNT_NUMBER}"
        )
    if not 0 <= instance <= MAX_INSTANCE:
        raise FieldOutOfRangeError("instance", instance, f"0..{MAX_INSTANCE}")
    if int(account_type) not in _ACCOUNT_TYPE_VALUES:
        raise FieldOutOfRangeError(
            "account_type", account_type, "known AccountType value"
        )
    if int(universe) not in _UNIVERSE_VALUES:
        raise FieldOutOfRangeError("universe", universe, "known Universe value")

    return (
        (int(universe) << UNIVERSE_SHIFT)
        | (int(account_type) << ACCOUNT_TYPE_SHIFT)
        | (instance << INSTANCE_SHIFT)
        | account_number
    )


def split(value: int) -> tuple[int, int, int, int]:
    """
    Split a 64-bit Steam ID into raw field integers.

    Returns:
        Tuple of (account_number, instance, account_type, universe) as ints,
        with no mapping of unknown values.

    Raises:
        NumericOverflowError: If value is not an unsigned 64-bit integer.
    """
    if not 0 <= value <= MAX_U64:
        raise NumericOverflowError(
            f"Steam ID does not fit in 64 unsigned bits: {value}", value
        )
    return (
        value & ACCOUNT_NUMBER_MASK,
        (value >> INSTANCE_SHIFT) & INSTANCE_MASK,
        (value >> ACCOUNT_TYPE_SHIFT) & ACCOUNT_TYPE_MASK,
        (value >> UNIVERSE_SHIFT) & UNIVERSE_MASK,
    )


def unpack(value: int) -> SteamIDFields:
    """Unpack a 64-bit Steam ID. Never fails for values in the u64 range."""
    account_number, instance, account_type, universe = split(value)
    return SteamIDFields(
        account_number,
        instance,
        to_account_type(account_type),
        to_universe(universe),
    )
