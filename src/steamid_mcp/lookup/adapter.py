"""Request/response shapes for SteamID lookup services.

Builds query parameters for the steamid.co profile API and the Steam Web API
``ISteamUser/ResolveVanityURL`` method, and turns their JSON payloads back
into SteamIDs. Nothing here touches the network.

steamid.co profile payload (abridged):

    {
      "steamID64": "76561197992396121",
      "steamID": "Z U L U A",
      "onlineState": "offline",
      "stateMessage": "Last Online 8 hrs, 59 mins ago",
      "vacBanned": "0",
      "customURL": "ZuluaQC",
      "memberSince": "September 7th, 2007"
    }

ResolveVanityURL payload:

    {"response": {"success": 1, "steamid": "76561197960287930"}}
    {"response": {"success": 42, "message": "No match"}}
"""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from steamid_mcp.id import codec
from steamid_mcp.id.errors import (
    MalformedInputError,
    MalformedResponseError,
    NumericOverflowError,
    ServiceError,
    UnknownAccountTypeError,
    UnsupportedFormatError,
)
from steamid_mcp.id.parsers import DIGITS_PATTERN, parse, parse_steam64
from steamid_mcp.id.steam_id import SteamID


ACTION_STEAMID64 = "steamID64"
ACTION_VANITY = "customURL"

VANITY_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

# ResolveVanityURL reports success == 1; anything else is a failure
STEAM_API_SUCCESS = 1


class OnlineState(Enum):
    """Online status reported by the lookup service."""

    OFFLINE = "offline"
    ONLINE = "online"
    IN_GAME = "in-game"
    OTHER = "other"

    @classmethod
    def from_payload(cls, value: Any) -> "OnlineState":
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.OTHER

    @property
    def display_name(self) -> str:
        return {
            OnlineState.OFFLINE: "Offline",
            OnlineState.ONLINE: "Online",
            OnlineState.IN_GAME: "In game",
            OnlineState.OTHER: "Other",
        }[self]


@dataclass(frozen=True)
class LookupProfile:
    """Profile fields returned by the lookup service."""

    steam_id: SteamID
    name: str = ""
    member_since: str = ""
    online_state: OnlineState = OnlineState.OTHER
    vac_banned: bool = False
    state_message: str = ""
    custom_url: str = ""
    privacy_state: str = ""
    limited_account: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "steam_id": str(self.steam_id.to_u64()),
            "name": self.name,
            "member_since": self.member_since,
            "online_state": self.online_state.value,
            "vac_banned": self.vac_banned,
            "state_message": self.state_message,
            "custom_url": self.custom_url,
            "privacy_state": self.privacy_state,
            "limited_account": self.limited_account,
        }


def _bool_from_anything(value: Any) -> bool:
    """Read the service's loose booleans ("0", "1", "true", 1, True...)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return False


def _text(value: Any) -> str:
    # The service sends {} for empty text fields
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


def validate_vanity_name(name: str) -> str:
    """
    Check that a vanity name can be sent to the lookup service.

    Raises:
        MalformedInputError: If the name is empty or has invalid characters
    """
    name = name.strip()
    if not VANITY_NAME_PATTERN.fullmatch(name):
        raise MalformedInputError(f"Invalid vanity name: '{name}'", name)
    return name


def build_lookup_request(identifier: str) -> dict[str, str]:
    """
    Build lookup-service query parameters for an ID or vanity name.

    Args:
        identifier: Steam ID in any supported format, or a vanity name

    Returns:
        Parameter mapping ready to be sent as a query string

    Raises:
        MalformedInputError: The input is neither a Steam ID nor a vanity name
        NumericOverflowError: The input looked like a Steam ID but was out of range
        UnknownAccountTypeError: A Steam3 ID used an unknown type letter
    """
    try:
        steam_id = parse(identifier)
    except UnsupportedFormatError:
        return build_vanity_lookup_request(identifier)

    return {"action": ACTION_STEAMID64, "id": str(steam_id.to_u64())}


def build_vanity_lookup_request(vanity_name: str) -> dict[str, str]:
    """Build lookup-service parameters that always treat the input as a vanity name."""
    return {"action": ACTION_VANITY, "id": validate_vanity_name(vanity_name)}


def build_vanity_request(vanity_name: str) -> dict[str, str]:
    """Build ``ISteamUser/ResolveVanityURL`` query parameters."""
    return {"vanityurl": validate_vanity_name(vanity_name)}


def _load_payload(raw: str | bytes | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedResponseError(
                f"Lookup response is not valid JSON: {e}", raw
            ) from e

    if not isinstance(raw, Mapping):
        raise MalformedResponseError(
            f"Lookup response is not a JSON object: {raw!r}", raw
        )
    return raw


def _extract_id_field(payload: Mapping[str, Any]) -> Any:
    """Find the resolved ID in either supported payload shape."""
    error = payload.get("error")
    if error:
        raise ServiceError(f"Lookup service error: {_text(error)}", payload)

    envelope = payload.get("response")
    if isinstance(envelope, Mapping):
        if envelope.get("success") != STEAM_API_SUCCESS:
            message = _text(envelope.get("message")) or "no match"
            raise ServiceError(f"Vanity URL not resolved: {message}", payload)
        return envelope.get("steamid")

    return payload.get("steamID64")


def _steam_id_from_field(value: Any, payload: Mapping[str, Any]) -> SteamID:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise MalformedResponseError(
            f"Lookup response has no usable steam ID field: {value!r}", payload
        )

    if isinstance(value, int):
        if not 0 <= value <= codec.MAX_U64:
            raise NumericOverflowError(
                f"Lookup response steam ID does not fit in 64 bits: {value}", payload
            )
        return SteamID.from_u64(value)

    text = value.strip()
    # Decimal IDs in a payload are always 64-bit, however small
    if DIGITS_PATTERN.fullmatch(text):
        return parse_steam64(text)
    try:
        return parse(text)
    except (UnsupportedFormatError, UnknownAccountTypeError) as e:
        raise MalformedResponseError(
            f"Lookup response steam ID is not a Steam ID: '{text}'", payload
        ) from e


def parse_lookup_response(raw: str | bytes | Mapping[str, Any]) -> SteamID:
    """
    Extract the resolved SteamID from a lookup payload.

    Raises:
        ServiceError: The service reported a failure or no match
        MalformedResponseError: The payload does not have the expected shape
        NumericOverflowError: The resolved ID does not fit in 64 bits
    """
    payload = _load_payload(raw)
    return _steam_id_from_field(_extract_id_field(payload), payload)


def parse_lookup_profile(raw: str | bytes | Mapping[str, Any]) -> LookupProfile:
    """Parse a steamid.co profile payload into a ``LookupProfile``."""
    payload = _load_payload(raw)
    steam_id = _steam_id_from_field(_extract_id_field(payload), payload)

    return LookupProfile(
        steam_id=steam_id,
        name=_text(payload.get("steamID")),
        member_since=_text(payload.get("memberSince")),
        online_state=OnlineState.from_payload(payload.get("onlineState")),
        vac_banned=_bool_from_anything(payload.get("vacBanned")),
        state_message=_text(payload.get("stateMessage")),
        custom_url=_text(payload.get("customURL")),
        privacy_state=_text(payload.get("privacyState")),
        limited_account=_bool_from_anything(payload.get("isLimitedAccount")),
    )
