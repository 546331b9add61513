"""Tests for game_handler.py."""

import pytest

import game_handler
from answer_session import Signal
from game_handler import GameContext, get_render, restore_game, start_game


def _solve(ctx):
    for ch in ctx.session.target:
        ctx.dispatch("type", {"value": ch})
    return ctx.dispatch("submit")


class TestSelect:
    def test_start_game_first_clue(self, clues):
        ctx = start_game(clues)
        assert ctx.index == 0
        assert ctx.session.target == "CATNAP"
        assert ctx.session.letters == [""] * 6
        assert ctx.annotation.type_key == "charade"

    def test_out_of_range_falls_back_to_first(self, clues):
        ctx = start_game(clues, 17)
        assert ctx.index == 0

    def test_select_replaces_session(self, clues):
        ctx = start_game(clues)
        ctx.dispatch("type", {"value": "c"})
        first_session = ctx.session
        ctx.dispatch("select", {"index": 0})
        assert ctx.session is not first_session
        assert ctx.session.letters == [""] * 6

    def test_empty_clue_list(self):
        ctx = start_game([])
        assert ctx.session.letters == []
        assert ctx.is_last()


class TestNavigation:
    def test_submit_after_solve_advances(self, clues):
        ctx = start_game(clues)
        assert _solve(ctx) is Signal.SUCCESS
        assert ctx.dispatch("submit") is Signal.ADVANCE
        assert ctx.index == 1
        assert not ctx.session.solved

    def test_give_up_twice_advances(self, clues):
        ctx = start_game(clues)
        assert ctx.dispatch("give_up") is Signal.NONE
        assert ctx.session.solved
        assert ctx.dispatch("give_up") is Signal.ADVANCE
        assert ctx.index == 1

    def test_last_clue_finishes(self, clues):
        ctx = start_game(clues, 2)
        _solve(ctx)
        assert ctx.dispatch("submit") is Signal.FINISH
        assert ctx.finished
        assert ctx.index == 2

    def test_finished_game_ignores_actions(self, clues):
        ctx = start_game(clues, 2)
        ctx.dispatch("give_up")
        ctx.dispatch("give_up")
        assert ctx.dispatch("reveal_letter") is Signal.NONE
        assert ctx.dispatch("submit") is Signal.NONE
        assert ctx.finished

    def test_select_restarts_finished_game(self, clues):
        ctx = start_game(clues, 2)
        ctx.dispatch("give_up")
        ctx.dispatch("give_up")
        ctx.dispatch("select", {"index": 0})
        assert not ctx.finished
        assert ctx.index == 0

    def test_skip(self, clues):
        ctx = start_game(clues)
        ctx.dispatch("type", {"value": "c"})
        assert ctx.dispatch("skip") is Signal.ADVANCE
        assert ctx.index == 1
        assert ctx.session.letters == [""] * 6

    def test_skip_on_last_clue_is_noop(self, clues):
        ctx = start_game(clues, 2)
        assert ctx.dispatch("skip") is Signal.NONE
        assert ctx.index == 2
        assert not ctx.finished

    def test_wrong_submit_stays(self, clues):
        ctx = start_game(clues)
        ctx.dispatch("type", {"value": "x"})
        assert ctx.dispatch("submit") is Signal.ERROR
        assert ctx.index == 0

    def test_unknown_action(self, clues):
        ctx = start_game(clues)
        with pytest.raises(ValueError, match="Unknown action"):
            ctx.dispatch("teleport")


class TestSignedState:
    def test_round_trip(self, clues):
        ctx = start_game(clues, 1)
        ctx.dispatch("type", {"value": "l"})
        ctx.dispatch("reveal_structure")
        restored = restore_game(clues, game_handler.dump_state(ctx))
        assert restored.index == 1
        assert restored.session.to_dict() == ctx.session.to_dict()
        assert not restored.finished

    def test_tampered_data_rejected(self, clues):
        signed = game_handler.dump_state(start_game(clues))
        signed["data"]["clue_index"] = 2
        with pytest.raises(ValueError, match="signature invalid"):
            restore_game(clues, signed)

    @pytest.mark.parametrize("signed", [None, {}, {"data": {}}, {"data": {}, "sig": 3}])
    def test_malformed_rejected(self, clues, signed):
        with pytest.raises(ValueError):
            restore_game(clues, signed)

    def test_stale_index_rejected(self, clues):
        signed = game_handler.dump_state(start_game(clues, 2))
        with pytest.raises(ValueError, match="out of range"):
            restore_game(clues[:1], signed)


class TestRender:
    def test_initial_render(self, clues):
        render = get_render(start_game(clues))
        assert render["clueIndex"] == 0
        assert render["clueCount"] == 3
        assert render["clueType"] == "charade"
        assert render["answerGroups"] == [3, 3]
        assert render["letters"] == [""] * 6
        assert render["controlLabel"] == "Submit"
        assert render["signal"] == "none"
        assert render["actions"] == {
            "revealDefinition": True,
            "revealLetter": True,
            "revealStructure": True,
            "giveUp": True,
            "skip": True,
        }
        assert not render["complete"]
        assert "answer" not in render
        assert '<span class="def"' in render["clueHtml"]

    def test_render_after_reveals(self, clues):
        ctx = start_game(clues)
        ctx.dispatch("reveal_definition")
        ctx.dispatch("reveal_structure")
        signal = ctx.dispatch("give_up")
        render = get_render(ctx, signal)
        assert render["helpOn"]
        assert render["annotOn"]
        assert render["solved"]
        assert render["gaveUp"]
        assert render["controlLabel"] == "Next"
        assert render["actions"]["revealDefinition"] is False
        assert render["actions"]["revealLetter"] is False
        assert render["actions"]["revealStructure"] is False

    def test_render_carries_signal(self, clues):
        ctx = GameContext(clues)
        ctx.select(2)
        signal = _solve(ctx)
        assert get_render(ctx, signal)["signal"] == "success"
