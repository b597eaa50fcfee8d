"""Tests for Steam ID text parsers."""

import pytest

from steamid_mcp.id import codec
from steamid_mcp.id.codec import AccountType, Universe
from steamid_mcp.id.errors import (
    MalformedInputError,
    NumericOverflowError,
    UnknownAccountTypeError,
    UnsupportedFormatError,
)
from steamid_mcp.id.parsers import (
    SteamIDFormat,
    parse,
    parse_steam2,
    parse_steam3,
    parse_steam32,
    parse_steam64,
)
from steamid_mcp.id.steam_id import SteamID


class TestParseSteam64:
    """Tests for decimal SteamID64 parsing."""

    def test_parses_account_one(self):
        steam_id = parse_steam64("76561197960265729")

        assert steam_id.account_number == 1
        assert steam_id.universe is Universe.PUBLIC
        assert steam_id.account_type is AccountType.INDIVIDUAL
        assert steam_id.instance == 1

    def test_parses_known_profile(self):
        steam_id = parse_steam64("76561197960287930")

        assert steam_id.account_number == 22202
        assert steam_id.universe is Universe.PUBLIC
        assert steam_id.account_type is AccountType.INDIVIDUAL
        assert steam_id.instance == 1

    def test_parses_clan(self):
        steam_id = parse_steam64("103582791429521412")

        assert steam_id.account_type is AccountType.CLAN
        assert steam_id.account_number == 4

    def test_parses_max_u64(self):
        assert parse_steam64("18446744073709551615").to_u64() == codec.MAX_U64

    def test_overflow(self):
        with pytest.raises(NumericOverflowError) as exc_info:
            parse_steam64("18446744073709551616")
        assert exc_info.value.value == "18446744073709551616"

    def test_accepts_values_below_32_bits(self):
        assert parse_steam64("23") == SteamID.from_u64(23)
        assert parse_steam64("0") == SteamID.from_u64(0)

    @pytest.mark.parametrize("text", ["", "7656119796026572a", "-1", "+5", "1 2", "١٢٣"])
    def test_rejects_non_digits(self, text):
        with pytest.raises(MalformedInputError):
            parse_steam64(text)


class TestParseSteam32:
    """Tests for bare account number parsing."""

    def test_parses_account_number(self):
        assert parse_steam32("23") == SteamID.from_fields(23)

    def test_parses_max(self):
        assert parse_steam32("4294967295").account_number == codec.MAX_ACCOUNT_NUMBER

    def test_overflow(self):
        with pytest.raises(NumericOverflowError):
            parse_steam32("4294967296")

    def test_rejects_text(self):
        with pytest.raises(MalformedInputError):
            parse_steam32("STEAM_0:1:11")


class TestParseSteam2:
    """Tests for STEAM_X:Y:Z parsing."""

    def test_parses_universe_zero_as_public(self):
        steam_id = parse_steam2("STEAM_0:1:11")

        assert steam_id.account_number == 23
        assert steam_id.universe is Universe.PUBLIC
        assert steam_id.account_type is AccountType.INDIVIDUAL
        assert steam_id.instance == 1

    def test_parses_universe_one(self):
        assert parse_steam2("STEAM_1:0:5").account_number == 10

    def test_keeps_other_universes(self):
        assert parse_steam2("STEAM_2:1:5").universe is Universe.BETA

    def test_case_insensitive_prefix(self):
        assert parse_steam2("steam_0:1:11") == parse_steam2("STEAM_0:1:11")

    def test_largest_account(self):
        assert parse_steam2("STEAM_0:1:2147483647").account_number == codec.MAX_ACCOUNT_NUMBER

    def test_account_overflow(self):
        with pytest.raises(NumericOverflowError):
            parse_steam2("STEAM_0:0:2147483648")

    def test_unknown_universe(self):
        with pytest.raises(NumericOverflowError):
            parse_steam2("STEAM_9:0:1")

    @pytest.mark.parametrize(
        "text", ["STEAM_0:2:1", "STEAM_0:1", "STEAM_:1:1", "STEAM_0:1:1:1", "STEAM_invalid", "STEAM_10:0:1"]
    )
    def test_rejects_bad_grammar(self, text):
        with pytest.raises(MalformedInputError):
            parse_steam2(text)


class TestParseSteam3:
    """Tests for [T:U:A(:I)] parsing."""

    def test_parses_individual_with_default_instance(self):
        steam_id = parse_steam3("[U:1:23]")

        assert steam_id.account_type is AccountType.INDIVIDUAL
        assert steam_id.universe is Universe.PUBLIC
        assert steam_id.account_number == 23
        assert steam_id.instance == 1

    def test_game_server_default_instance_is_zero(self):
        steam_id = parse_steam3("[G:1:123]")

        assert steam_id.account_type is AccountType.GAME_SERVER
        assert steam_id.instance == 0

    def test_explicit_instance(self):
        assert parse_steam3("[U:1:23:2]").instance == 2

    def test_clan(self):
        assert parse_steam3("[g:1:4]") == SteamID.from_u64(103582791429521412)

    def test_clan_chat_sets_flag(self):
        steam_id = parse_steam3("[c:1:5]")

        assert steam_id.account_type is AccountType.CHAT
        assert steam_id.instance == codec.CLAN_CHAT_FLAG

    def test_lobby_chat_sets_flag(self):
        steam_id = parse_steam3("[L:1:5]")

        assert steam_id.account_type is AccountType.CHAT
        assert steam_id.instance == codec.LOBBY_CHAT_FLAG

    @pytest.mark.parametrize(
        "letter,account_type",
        [
            ("I", AccountType.INVALID),
            ("M", AccountType.MULTISEAT),
            ("A", AccountType.ANON_GAME_SERVER),
            ("P", AccountType.PENDING),
            ("C", AccountType.CONTENT_SERVER),
            ("T", AccountType.CHAT),
            ("a", AccountType.ANON_USER),
            ("i", AccountType.P2P_SUPER_SEEDER),
        ],
    )
    def test_letter_table(self, letter, account_type):
        assert parse_steam3(f"[{letter}:1:5]").account_type is account_type

    def test_universe_taken_verbatim(self):
        assert parse_steam3("[U:0:23]").universe is Universe.INVALID

    def test_unknown_letter(self):
        with pytest.raises(UnknownAccountTypeError) as exc_info:
            parse_steam3("[X:1:5]")
        assert exc_info.value.value == "[X:1:5]"

    @pytest.mark.parametrize("text", ["[U:1:4294967296]", "[U:1:23:1048576]", "[U:7:1]"])
    def test_overflow(self, text):
        with pytest.raises(NumericOverflowError):
            parse_steam3(text)

    @pytest.mark.parametrize("text", ["U:1:23", "[U:1]", "[U:1:23", "[UU:1:23]", "[U:1:23:]", "[U:10:1]"])
    def test_rejects_bad_grammar(self, text):
        with pytest.raises(MalformedInputError):
            parse_steam3(text)


class TestParse:
    """Tests for the ordered-fallback entry point."""

    def test_steam64(self):
        steam_id = parse("76561197960287930")

        assert steam_id.account_number == 22202
        assert steam_id.account_type is AccountType.INDIVIDUAL

    def test_steam2_and_steam3_agree(self):
        assert parse("STEAM_0:1:11") == parse("[U:1:23]")

    def test_short_numbers_are_steam32(self):
        assert parse("23") == parse("[U:1:23]")

    def test_strips_whitespace(self):
        assert parse("  [U:1:23]\n") == SteamID.from_fields(23)

    def test_unsupported(self):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            parse("not-a-steamid")
        assert exc_info.value.value == "not-a-steamid"
        assert "not-a-steamid" in str(exc_info.value)

    def test_empty_is_unsupported(self):
        with pytest.raises(UnsupportedFormatError):
            parse("")

    def test_overflow_is_not_unsupported(self):
        with pytest.raises(NumericOverflowError):
            parse("99999999999999999999")

    def test_unknown_letter_is_not_unsupported(self):
        with pytest.raises(UnknownAccountTypeError):
            parse("[X:1:5]")

    def test_explicit_format(self):
        assert parse("23", SteamIDFormat.STEAM32) == SteamID.from_fields(23)

    def test_explicit_steam64_keeps_short_values(self):
        assert parse("23", SteamIDFormat.STEAM64) == SteamID.from_u64(23)

    def test_explicit_format_does_not_fall_back(self):
        with pytest.raises(MalformedInputError):
            parse("STEAM_0:1:11", SteamIDFormat.STEAM3)

    def test_multi_digit_universe_is_unsupported(self):
        with pytest.raises(UnsupportedFormatError):
            parse("STEAM_10:0:1")

    def test_parsers_are_independent(self):
        with pytest.raises(MalformedInputError):
            parse_steam2("[U:1:23]")
        with pytest.raises(MalformedInputError):
            parse_steam3("STEAM_0:1:11")
