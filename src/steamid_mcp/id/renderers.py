"""Render a SteamID back to each textual format.

Renderers work from the raw packed fields, so large or unknown universe and
type values are written out in full rather than truncated.
"""

from steamid_mcp.id import codec
from steamid_mcp.id.codec import AccountType, Universe
from steamid_mcp.id.errors import NotRepresentableError
from steamid_mcp.id.parsers import SteamIDFormat
from steamid_mcp.id.steam_id import SteamID


# Account type -> Steam3 letter; chat letters depend on instance flags
TYPE_LETTERS: dict[AccountType, str] = {
    AccountType.INVALID: "I",
    AccountType.INDIVIDUAL: "U",
    AccountType.MULTISEAT: "M",
    AccountType.GAME_SERVER: "G",
    AccountType.ANON_GAME_SERVER: "A",
    AccountType.PENDING: "P",
    AccountType.CONTENT_SERVER: "C",
    AccountType.CLAN: "g",
    AccountType.CHAT: "T",
    AccountType.ANON_USER: "a",
}
UNKNOWN_TYPE_LETTER = "i"


def _steam3_letter(steam_id: SteamID) -> tuple[str, int]:
    """Return the Steam3 letter and the instance it implies."""
    if steam_id.raw_account_type == AccountType.CHAT:
        if steam_id.instance & codec.CLAN_CHAT_FLAG:
            return "c", codec.CLAN_CHAT_FLAG
        if steam_id.instance & codec.LOBBY_CHAT_FLAG:
            return "L", codec.LOBBY_CHAT_FLAG
        return "T", 0

    if steam_id.raw_account_type == AccountType.INDIVIDUAL:
        return "U", codec.DESKTOP_INSTANCE

    # Raw value 0 is INVALID; unknown raw values must not be read as "I"
    if steam_id.raw_account_type == AccountType.INVALID:
        return "I", 0
    account_type = steam_id.account_type
    if account_type == AccountType.INVALID:
        return UNKNOWN_TYPE_LETTER, 0
    return TYPE_LETTERS.get(account_type, UNKNOWN_TYPE_LETTER), 0


def render_steam64(steam_id: SteamID) -> str:
    return str(steam_id.to_u64())


def render_steam32(steam_id: SteamID) -> str:
    """Render the bare account number of a public desktop individual account."""
    if (
        steam_id.raw_account_type != AccountType.INDIVIDUAL
        or steam_id.raw_universe != Universe.PUBLIC
        or steam_id.instance != codec.DESKTOP_INSTANCE
    ):
        raise NotRepresentableError(
            f"SteamID32 only represents public individual accounts: {steam_id}",
            steam_id,
        )
    return str(steam_id.account_number)


def render_steam2(steam_id: SteamID) -> str:
    if (
        steam_id.raw_account_type != AccountType.INDIVIDUAL
        or steam_id.instance != codec.DESKTOP_INSTANCE
    ):
        raise NotRepresentableError(
            f"STEAM_X:Y:Z only represents individual accounts: {steam_id}",
            steam_id,
        )
    return (
        f"STEAM_{steam_id.raw_universe}:"
        f"{steam_id.auth_server}:{steam_id.account_id}"
    )


def render_steam3(steam_id: SteamID) -> str:
    """Render [T:U:A], adding :I when the instance is not the letter's default."""
    letter, default_instance = _steam3_letter(steam_id)
    text = f"[{letter}:{steam_id.raw_universe}:{steam_id.account_number}"
    if steam_id.instance != default_instance:
        text += f":{steam_id.instance}"
    return text + "]"


RENDERERS = {
    SteamIDFormat.STEAM64: render_steam64,
    SteamIDFormat.STEAM32: render_steam32,
    SteamIDFormat.STEAM2: render_steam2,
    SteamIDFormat.STEAM3: render_steam3,
}


def render(steam_id: SteamID, fmt: SteamIDFormat) -> str:
    """
    Render a SteamID in the given format.

    Raises:
        NotRepresentableError: If the ID cannot be written in that format
    """
    return RENDERERS[fmt](steam_id)


def render_all(steam_id: SteamID) -> dict[str, str]:
    """Render a SteamID in every format that can represent it."""
    rendered = {}
    for fmt, renderer in RENDERERS.items():
        try:
            rendered[fmt.value] = renderer(steam_id)
        except NotRepresentableError:
            continue
    return rendered
