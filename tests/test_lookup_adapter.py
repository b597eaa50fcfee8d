"""Tests for lookup request builders and response parsers."""

import json

import pytest

from steamid_mcp.id.errors import (
    MalformedInputError,
    MalformedResponseError,
    NumericOverflowError,
    ServiceError,
    UnknownAccountTypeError,
)
from steamid_mcp.id.steam_id import SteamID
from steamid_mcp.lookup.adapter import (
    LookupProfile,
    OnlineState,
    build_lookup_request,
    build_vanity_lookup_request,
    build_vanity_request,
    parse_lookup_profile,
    parse_lookup_response,
    validate_vanity_name,
)


PROFILE_PAYLOAD = {
    "steamID64": "76561197960287930",
    "steamID": "Rabscuttle",
    "onlineState": "in-game",
    "stateMessage": "In-Game<br/>Half-Life 2",
    "privacyState": "public",
    "vacBanned": "0",
    "isLimitedAccount": "1",
    "customURL": "gabelogannewell",
    "memberSince": "September 12, 2003",
}


class TestBuildLookupRequest:
    """Tests for build_lookup_request."""

    def test_steam64_passes_through(self):
        assert build_lookup_request("76561197960287930") == {
            "action": "steamID64",
            "id": "76561197960287930",
        }

    def test_steam2_is_converted(self):
        assert build_lookup_request("STEAM_0:1:11") == {
            "action": "steamID64",
            "id": "76561197960265751",
        }

    def test_steam3_is_converted(self):
        params = build_lookup_request("[U:1:23]")
        assert params["id"] == "76561197960265751"

    def test_short_number_is_steam32(self):
        params = build_lookup_request("23")
        assert params == {"action": "steamID64", "id": "76561197960265751"}

    def test_vanity_name(self):
        assert build_lookup_request("gabelogannewell") == {
            "action": "customURL",
            "id": "gabelogannewell",
        }

    def test_strips_whitespace(self):
        assert build_lookup_request("  gabe_n  ")["id"] == "gabe_n"

    def test_invalid_input(self):
        with pytest.raises(MalformedInputError):
            build_lookup_request("not a name!")

    def test_empty_input(self):
        with pytest.raises(MalformedInputError):
            build_lookup_request("   ")

    def test_overflow_propagates(self):
        with pytest.raises(NumericOverflowError):
            build_lookup_request("99999999999999999999")

    def test_unknown_letter_propagates(self):
        with pytest.raises(UnknownAccountTypeError):
            build_lookup_request("[X:1:5]")


class TestVanityRequests:
    """Tests for vanity name request builders."""

    def test_vanity_lookup_request_treats_digits_as_name(self):
        assert build_vanity_lookup_request("1234") == {"action": "customURL", "id": "1234"}

    def test_resolve_vanity_request(self):
        assert build_vanity_request("gabe") == {"vanityurl": "gabe"}

    @pytest.mark.parametrize("name", ["gabe", "Gabe-N", "gabe_2003"])
    def test_valid_names(self, name):
        assert validate_vanity_name(name) == name

    @pytest.mark.parametrize("name", ["", "gabe newell", "gabe/../x", "gäbe"])
    def test_invalid_names(self, name):
        with pytest.raises(MalformedInputError):
            validate_vanity_name(name)


class TestParseLookupResponse:
    """Tests for parse_lookup_response."""

    def test_profile_payload(self):
        steam_id = parse_lookup_response(PROFILE_PAYLOAD)
        assert steam_id == SteamID.from_u64(76561197960287930)

    def test_accepts_json_text(self):
        assert parse_lookup_response(json.dumps(PROFILE_PAYLOAD)).account_number == 22202

    def test_accepts_bytes(self):
        raw = json.dumps(PROFILE_PAYLOAD).encode()
        assert parse_lookup_response(raw).account_number == 22202

    def test_accepts_integer_id(self):
        steam_id = parse_lookup_response({"steamID64": 76561197960265751})
        assert steam_id.account_number == 23

    @pytest.mark.parametrize("value", ["STEAM_0:1:11", "[U:1:23]", " [U:1:23] "])
    def test_accepts_any_steam_id_format(self, value):
        assert parse_lookup_response({"steamID64": value}) == SteamID.from_fields(23)

    def test_short_decimal_is_still_64_bit(self):
        assert parse_lookup_response({"steamID64": "23"}) == SteamID.from_u64(23)

    def test_unknown_type_letter_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            parse_lookup_response({"steamID64": "[X:1:5]"})

    def test_resolve_vanity_success(self):
        payload = {"response": {"success": 1, "steamid": "76561197960287930"}}
        assert parse_lookup_response(payload).account_number == 22202

    def test_resolve_vanity_no_match(self):
        payload = {"response": {"success": 42, "message": "No match"}}

        with pytest.raises(ServiceError) as exc_info:
            parse_lookup_response(payload)
        assert "No match" in str(exc_info.value)

    def test_service_error_field(self):
        with pytest.raises(ServiceError) as exc_info:
            parse_lookup_response({"error": "Profile not found"})
        assert "Profile not found" in str(exc_info.value)

    def test_invalid_json(self):
        with pytest.raises(MalformedResponseError):
            parse_lookup_response("<html>nope</html>")

    def test_non_object_payload(self):
        with pytest.raises(MalformedResponseError):
            parse_lookup_response("[1, 2, 3]")

    def test_missing_id_field(self):
        with pytest.raises(MalformedResponseError):
            parse_lookup_response({"steamID": "Rabscuttle"})

    @pytest.mark.parametrize("value", ["abc", "7656119796028793x", "", True, 1.5, None])
    def test_non_numeric_id(self, value):
        with pytest.raises(MalformedResponseError):
            parse_lookup_response({"steamID64": value})

    def test_id_overflow(self):
        with pytest.raises(NumericOverflowError):
            parse_lookup_response({"steamID64": "18446744073709551616"})

    def test_service_error_is_not_malformed(self):
        with pytest.raises(ServiceError):
            parse_lookup_response({"error": "rate limited", "steamID64": "1"})


class TestParseLookupProfile:
    """Tests for parse_lookup_profile."""

    def test_full_profile(self):
        profile = parse_lookup_profile(PROFILE_PAYLOAD)

        assert profile.steam_id.account_number == 22202
        assert profile.name == "Rabscuttle"
        assert profile.online_state is OnlineState.IN_GAME
        assert profile.vac_banned is False
        assert profile.limited_account is True
        assert profile.custom_url == "gabelogannewell"
        assert profile.member_since == "September 12, 2003"
        assert profile.privacy_state == "public"

    def test_minimal_profile(self):
        profile = parse_lookup_profile({"steamID64": "76561197960265751"})

        assert profile == LookupProfile(steam_id=SteamID.from_fields(23))

    def test_empty_objects_become_empty_text(self):
        payload = dict(PROFILE_PAYLOAD, customURL={}, stateMessage=None)
        profile = parse_lookup_profile(payload)

        assert profile.custom_url == ""
        assert profile.state_message == ""

    def test_unknown_online_state(self):
        profile = parse_lookup_profile(dict(PROFILE_PAYLOAD, onlineState="snooze"))
        assert profile.online_state is OnlineState.OTHER

    @pytest.mark.parametrize("flag,expected", [("1", True), (1, True), ("true", True), ("0", False), (0, False)])
    def test_vac_flag(self, flag, expected):
        profile = parse_lookup_profile(dict(PROFILE_PAYLOAD, vacBanned=flag))
        assert profile.vac_banned is expected

    def test_to_dict(self):
        data = parse_lookup_profile(PROFILE_PAYLOAD).to_dict()

        assert data["steam_id"] == "76561197960287930"
        assert data["online_state"] == "in-game"
        assert data["vac_banned"] is False
        json.dumps(data)

    def test_error_payload(self):
        with pytest.raises(ServiceError):
            parse_lookup_profile({"error": "Invalid ID"})


class TestOnlineState:
    """Tests for OnlineState."""

    def test_case_insensitive(self):
        assert OnlineState.from_payload("Online") is OnlineState.ONLINE

    def test_missing(self):
        assert OnlineState.from_payload(None) is OnlineState.OTHER

    def test_display_name(self):
        assert OnlineState.IN_GAME.display_name == "In game"
