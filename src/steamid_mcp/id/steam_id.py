"""The SteamID value type.

A SteamID stores only its packed 64-bit integer. Every field is read back
from that integer, so the fields and the integer can never disagree.
"""

from dataclasses import dataclass
from typing import Any

from steamid_mcp.id import codec
from steamid_mcp.id.codec import AccountType, Universe


@dataclass(frozen=True, order=True)
class SteamID:
    """Immutable Steam ID; equality and ordering follow the packed integer."""

    value: int

    def __post_init__(self) -> None:
        # Validates the u64 range
        codec.split(self.value)

    @classmethod
    def from_u64(cls, value: int) -> "SteamID":
        """Build a SteamID from its 64-bit form."""
        return cls(value)

    @classmethod
    def from_fields(
        cls,
        account_number: int,
        instance: int = codec.DESKTOP_INSTANCE,
        account_type: AccountType | int = AccountType.INDIVIDUAL,
        universe: Universe | int = Universe.PUBLIC,
    ) -> "SteamID":
        """
        Build a SteamID from its logical fields.

        Raises:
            FieldOutOfRangeError: If a field violates the bit layout.
        """
        return cls(codec.pack(account_number, instance, account_type, universe))

    def to_u64(self) -> int:
        return self.value

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        from steamid_mcp.id.renderers import render_steam3

        return render_steam3(self)

    @property
    def account_number(self) -> int:
        return self.value & codec.ACCOUNT_NUMBER_MASK

    @property
    def auth_server(self) -> int:
        """Low bit of the account number (Y in STEAM_X:Y:Z)."""
        return self.account_number & 1

    @property
    def account_id(self) -> int:
        """Account number without the auth server bit (Z in STEAM_X:Y:Z)."""
        return self.account_number >> 1

    @property
    def instance(self) -> int:
        return (self.value >> codec.INSTANCE_SHIFT) & codec.INSTANCE_MASK

    @property
    def account_type(self) -> AccountType:
        return codec.to_account_type(self.raw_account_type)

    @property
    def universe(self) -> Universe:
        return codec.to_universe(self.raw_universe)

    @property
    def raw_account_type(self) -> int:
        return (self.value >> codec.ACCOUNT_TYPE_SHIFT) & codec.ACCOUNT_TYPE_MASK

    @property
    def raw_universe(self) -> int:
        return (self.value >> codec.UNIVERSE_SHIFT) & codec.UNIVERSE_MASK

    def fields(self) -> codec.SteamIDFields:
        return codec.unpack(self.value)

    def is_valid(self) -> bool:
        """
        Format-level validity check.

        Account number 0 is the unset placeholder and is never valid.
        """
        return (
            self.account_type != AccountType.INVALID
            and self.universe != Universe.INVALID
            and self.account_number > 0
        )

    def replace(self, **changes: Any) -> "SteamID":
        """
        Return a new SteamID with some fields changed.

        Accepts account_number, instance, account_type and universe.
        """
        current = self.fields()._asdict()
        unknown = set(changes) - set(current)
        if unknown:
            raise TypeError(f"Unknown SteamID fields: {', '.join(sorted(unknown))}")
        current.update(changes)
        return SteamID.from_fields(**current)
