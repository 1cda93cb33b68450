"""Tests for action kinds, capability masks and decisions."""

import pytest

from pokerdecide.action import ActionCapabilities, ActionKind, Decision, allows


class TestActionKind:
    def test_codes_are_stable(self):
        assert [k.value for k in ActionKind] == [0, 1, 2, 3, 4, 5, 6]
        assert ActionKind.RAISE == 5

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("fold", ActionKind.FOLD),
            ("CHECK", ActionKind.CHECK),
            (" Raise ", ActionKind.RAISE),
            ("all-in", ActionKind.ALL_IN),
            ("all_in", ActionKind.ALL_IN),
            ("allin", ActionKind.ALL_IN),
        ],
    )
    def test_parse(self, text, expected):
        assert ActionKind.parse(text) == expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown action"):
            ActionKind.parse("muck")

    def test_label(self):
        assert ActionKind.ALL_IN.label == "All-in"
        assert ActionKind.CALL.label == "Call"


class TestCapabilities:
    def test_allows_reads_bit(self):
        mask = (1 << 1) | (1 << 4)
        assert allows(mask, ActionKind.CHECK)
        assert allows(mask, ActionKind.FOLD)
        assert not allows(mask, ActionKind.CALL)
        assert not allows(0, ActionKind.NONE)

    def test_of_builds_mask(self):
        caps = ActionCapabilities.of(ActionKind.CALL, ActionKind.RAISE)
        assert int(caps) == (1 << 2) | (1 << 5)
        assert caps.kinds == (ActionKind.CALL, ActionKind.RAISE)

    def test_parse(self):
        caps = ActionCapabilities.parse("check, bet fold")
        assert caps == ActionCapabilities.of(ActionKind.CHECK, ActionKind.BET, ActionKind.FOLD)

    def test_membership(self):
        caps = ActionCapabilities.of(ActionKind.FOLD)
        assert ActionKind.FOLD in caps
        assert ActionKind.CALL not in caps
        assert "fold" not in caps
        assert 42 not in caps

    def test_str(self):
        assert str(ActionCapabilities.of(ActionKind.FOLD, ActionKind.CHECK)) == "check,fold"
        assert str(ActionCapabilities()) == "none"

    def test_negative_mask_rejected(self):
        with pytest.raises(ValueError):
            ActionCapabilities(-1)


class TestDecision:
    def _decision(self, action: ActionKind, amount: float = 0.0) -> Decision:
        return Decision(
            action=action,
            amount=amount,
            name=action.name,
            reason="because",
            equity=0.75,
            confidence=0.5,
            hand_label="Two Pair",
        )

    def test_str(self):
        assert str(self._decision(ActionKind.RAISE, 12.5)) == "Raise 12.50"
        assert str(self._decision(ActionKind.FOLD)) == "Fold"
        assert str(self._decision(ActionKind.NONE)) == "Wait"

    def test_to_dict(self):
        data = self._decision(ActionKind.CALL, 10).to_dict()
        assert data == {
            "action": "CALL",
            "amount": 10,
            "name": "CALL",
            "reason": "because",
            "equity": 0.75,
            "confidence": 0.5,
            "hand_label": "Two Pair",
        }
