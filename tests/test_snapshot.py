"""Tests for game snapshots and loading them from mappings."""

import pytest

from pokerdecide.action import ActionCapabilities, ActionKind
from pokerdecide.snapshot import ActingContext, GameSnapshot, Street, parse_card_strings

# What a table reader hands over: camelCase keys and a raw bitmask.
TABLE_READER_STATE = {
    "isHeroTurn": True,
    "currentAct": {
        "optAction": (1 << 2) | (1 << 4) | (1 << 5),
        "optCoin": 10,
        "minBetCoin": 20,
        "maxBetCoin": 480,
        "deskCoin": 480,
    },
    "holeCardStrings": ["As", "Kh"],
    "boardCardStrings": ["Qs", "7d", "2c"],
    "totalPot": 35,
    "bb": 10,
    "activeSeatCount": 4,
}


class TestParseCards:
    def test_space_separated(self):
        assert parse_card_strings("As Kh") == ("As", "Kh")

    def test_comma_separated(self):
        assert parse_card_strings("As,Kh, 2c") == ("As", "Kh", "2c")

    def test_sequence(self):
        assert parse_card_strings(["Td", "9d"]) == ("Td", "9d")

    def test_none(self):
        assert parse_card_strings(None) == ()


class TestStreet:
    @pytest.mark.parametrize(
        "board, street",
        [
            ((), Street.PREFLOP),
            (("Qs", "7d", "2c"), Street.FLOP),
            (("Qs", "7d", "2c", "9h"), Street.TURN),
            (("Qs", "7d", "2c", "9h", "Jc"), Street.RIVER),
            (("Qs",), None),
        ],
    )
    def test_street_from_board(self, board, street):
        assert GameSnapshot(is_hero_turn=True, board_cards=board).street == street

    def test_num_opponents_never_below_one(self):
        assert GameSnapshot(is_hero_turn=True, active_seat_count=1).num_opponents == 1
        assert GameSnapshot(is_hero_turn=True, active_seat_count=6).num_opponents == 5


class TestActingContext:
    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError, match="stack"):
            ActingContext(capabilities=ActionCapabilities(), stack=-1)

    def test_raw_mask_is_coerced(self):
        act = ActingContext(capabilities=(1 << 2) | (1 << 4) | (1 << 5), call_amount=10)
        assert act.capabilities == ActionCapabilities.of(
            ActionKind.CALL, ActionKind.FOLD, ActionKind.RAISE
        )
        assert act.capabilities.allows(ActionKind.RAISE)

    def test_names_are_coerced(self):
        act = ActingContext(capabilities="check,bet")
        assert act.capabilities.kinds == (ActionKind.CHECK, ActionKind.BET)

    def test_from_dict_with_names(self):
        act = ActingContext.from_dict(
            {"capabilities": ["call", "fold"], "call_amount": 5, "stack": 50}
        )
        assert act.capabilities.kinds == (ActionKind.CALL, ActionKind.FOLD)
        assert act.call_amount == 5.0
        assert act.min_bet == 0.0

    def test_from_dict_with_string_capabilities(self):
        act = ActingContext.from_dict({"capabilities": "check,bet"})
        assert act.capabilities.kinds == (ActionKind.CHECK, ActionKind.BET)

    def test_missing_capabilities(self):
        with pytest.raises(ValueError, match="capabilities"):
            ActingContext.from_dict({"call_amount": 5})

    def test_bad_number(self):
        with pytest.raises(ValueError, match="call_amount"):
            ActingContext.from_dict({"capabilities": 2, "call_amount": "lots"})


class TestFromDict:
    def test_table_reader_aliases(self):
        snapshot = GameSnapshot.from_dict(TABLE_READER_STATE)
        assert snapshot.is_hero_turn
        assert snapshot.hole_cards == ("As", "Kh")
        assert snapshot.board_cards == ("Qs", "7d", "2c")
        assert snapshot.total_pot == 35.0
        assert snapshot.big_blind == 10.0
        assert snapshot.active_seat_count == 4
        act = snapshot.acting
        assert act is not None
        assert act.capabilities.kinds == (ActionKind.CALL, ActionKind.FOLD, ActionKind.RAISE)
        assert (act.call_amount, act.min_bet, act.max_bet, act.stack) == (10, 20, 480, 480)

    def test_canonical_keys(self):
        snapshot = GameSnapshot.from_dict(
            {
                "is_hero_turn": True,
                "acting": {"capabilities": ["check", "bet"], "stack": 100},
                "hole_cards": "Jh Jd",
                "total_pot": 3,
            }
        )
        assert snapshot.hole_cards == ("Jh", "Jd")
        assert snapshot.board_cards == ()
        assert snapshot.active_seat_count == 2
        assert snapshot.street == Street.PREFLOP

    def test_canonical_key_wins_over_alias(self):
        snapshot = GameSnapshot.from_dict(
            {"is_hero_turn": True, "total_pot": 50, "totalPot": 10, "activePlayers": 6,
             "activeSeatCount": 3}
        )
        assert snapshot.total_pot == 50.0
        assert snapshot.active_seat_count == 3

    def test_alias_order(self):
        snapshot = GameSnapshot.from_dict(
            {"isHeroTurn": True, "holeCardStrings": ["As", "Ad"], "holeCards": ["2c", "7d"]}
        )
        assert snapshot.hole_cards == ("As", "Ad")

    def test_explicit_false_turn(self):
        snapshot = GameSnapshot.from_dict({"isHeroTurn": False, "is_hero_turn": None})
        assert snapshot.is_hero_turn is False

    @pytest.mark.parametrize("turn", ["false", 1, "yes"])
    def test_non_bool_turn_rejected(self, turn):
        with pytest.raises(ValueError, match="is_hero_turn"):
            GameSnapshot.from_dict({"isHeroTurn": turn})

    def test_missing_acting_context(self):
        assert GameSnapshot.from_dict({"isHeroTurn": True}).acting is None

    def test_bad_board_size(self):
        with pytest.raises(ValueError, match="Board"):
            GameSnapshot.from_dict({"isHeroTurn": True, "boardCards": ["Qs", "7d"]})

    def test_negative_pot(self):
        with pytest.raises(ValueError, match="total_pot"):
            GameSnapshot.from_dict({"isHeroTurn": True, "totalPot": -5})

    @pytest.mark.parametrize("seats", [0, "three", True])
    def test_bad_seat_count(self, seats):
        with pytest.raises(ValueError, match="active_seat_count"):
            GameSnapshot.from_dict({"isHeroTurn": True, "activeSeatCount": seats})

    def test_acting_must_be_mapping(self):
        with pytest.raises(ValueError, match="mapping"):
            GameSnapshot.from_dict({"isHeroTurn": True, "currentAct": 7})
