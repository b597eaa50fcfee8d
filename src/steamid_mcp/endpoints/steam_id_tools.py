"""Steam ID conversion and lookup tools.

Reference: https://developer.valvesoftware.com/wiki/SteamID
"""

import json
from typing import Any

from steamid_mcp.endpoints.base import BaseEndpoint, endpoint
from steamid_mcp.id import SteamID, SteamIDError, render_all
from steamid_mcp.id.parsers import SteamIDFormat

STEAM_ID_PARAM = {
    "type": "string",
    "description": (
        "Steam ID in any format: SteamID64 (76561197960265751), "
        "SteamID32 (23), STEAM_0:1:11, [U:1:23], or a vanity name."
    ),
    "required": True,
}

FORMAT_LABELS = {
    SteamIDFormat.STEAM64.value: "SteamID64",
    SteamIDFormat.STEAM32.value: "SteamID32",
    SteamIDFormat.STEAM2.value: "SteamID",
    SteamIDFormat.STEAM3.value: "SteamID3",
}


def _error_text(steam_id: str, error: SteamIDError) -> str:
    return f"Error ({type(error).__name__}) for '{steam_id}': {error}"


def _error_json(steam_id: str, error: SteamIDError) -> str:
    return json.dumps(
        {"error": str(error), "kind": type(error).__name__, "input": steam_id}
    )


def describe_steam_id(steam_id: SteamID) -> dict[str, Any]:
    """Decoded fields and every representable rendering."""
    return {
        "formats": render_all(steam_id),
        "account_number": steam_id.account_number,
        "instance": steam_id.instance,
        "account_type": steam_id.account_type.display_name,
        "universe": steam_id.universe.display_name,
        "valid": steam_id.is_valid(),
    }


class SteamIDTools(BaseEndpoint):
    """Tools for converting and looking up Steam IDs."""

    @endpoint(
        name="convert_steam_id",
        description=(
            "Convert a Steam ID between SteamID64, SteamID32, STEAM_X:Y:Z and "
            "[T:U:A] formats, and decode its account type, universe and instance. "
            "Vanity names are resolved first."
        ),
        supports_json=True,
        params={"steam_id": STEAM_ID_PARAM},
    )
    async def convert_steam_id(self, steam_id: str, format: str = "text") -> str:
        """Show every representation of a Steam ID."""
        try:
            resolved = await self.client.resolve(steam_id)
        except SteamIDError as e:
            if format == "json":
                return _error_json(steam_id, e)
            return _error_text(steam_id, e)

        details = describe_steam_id(resolved)
        if format == "json":
            return json.dumps({"input": steam_id, **details}, indent=2)

        lines = [f"Steam ID: {steam_id}"]
        for key, text in details["formats"].items():
            lines.append(f"  {FORMAT_LABELS[key]}: {text}")
        lines.extend(
            [
                f"  Account type: {details['account_type']}",
                f"  Universe: {details['universe']}",
                f"  Instance: {details['instance']}",
                f"  Account number: {details['account_number']}",
                f"  Valid: {'yes' if details['valid'] else 'no'}",
            ]
        )
        return "\n".join(lines)

    @endpoint(
        name="resolve_steam_id",
        description=(
            "Resolve any Steam ID format or vanity name to a SteamID64. "
            "Known formats are converted locally; vanity names are looked up."
        ),
        params={"steam_id": STEAM_ID_PARAM},
    )
    async def resolve_steam_id(self, steam_id: str) -> str:
        try:
            resolved = await self.client.resolve(steam_id)
        except SteamIDError as e:
            return _error_text(steam_id, e)
        return str(resolved.to_u64())

    @endpoint(
        name="get_steam_id_profile",
        description=(
            "Look up the public profile for a Steam ID or vanity name: display "
            "name, online state, VAC ban flag, custom URL and member-since date."
        ),
        supports_json=True,
        params={"steam_id": STEAM_ID_PARAM},
    )
    async def get_steam_id_profile(self, steam_id: str, format: str = "text") -> str:
        try:
            profile = await self.client.lookup_profile(steam_id)
        except SteamIDError as e:
            if format == "json":
                return _error_json(steam_id, e)
            return _error_text(steam_id, e)

        if format == "json":
            return json.dumps(profile.to_dict(), indent=2)

        lines = [
            f"Profile: {profile.name or 'Unknown'}",
            f"  SteamID64: {profile.steam_id.to_u64()}",
            f"  Online state: {profile.online_state.display_name}",
            f"  VAC banned: {'yes' if profile.vac_banned else 'no'}",
        ]
        if profile.custom_url:
            lines.append(f"  Custom URL: {profile.custom_url}")
        if profile.member_since:
            lines.append(f"  Member since: {profile.member_since}")
        if profile.state_message:
            lines.append(f"  Status: {profile.state_message}")
        return "\n".join(lines)
