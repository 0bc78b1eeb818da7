"""对局状态测试"""
import numpy as np
import pytest

from core.arrows import Arrows, Direction
from core.board import Board
from core.cards import Card, CardClass, Color, OwnedCard
from core.config import GameConfig
from core.state import GameState, Move, Phase


def plain(color: Color, n: int):
    return [OwnedCard(Card(i, CardClass.PHYSICAL, 0, 0), color) for i in range(n)]


def open_board() -> Board:
    return Board.from_layout(["....", "....", "....", "...."])


class TestGameConfig:

    def test_defaults(self):
        config = GameConfig()
        assert (config.max_blocks, config.block_odds, config.hand_size) == (6, 4, 5)

    def test_from_dict_ignores_unknown(self):
        config = GameConfig.from_dict({"hand_size": 3, "unknown": 1})
        assert config.hand_size == 3

    def test_invalid(self):
        with pytest.raises(ValueError):
            GameConfig(block_odds=0)
        with pytest.raises(ValueError):
            GameConfig(max_battle_passes=0)


class TestInitial:

    def test_seeded(self):
        a = GameState.initial(seed=42)
        b = GameState.initial(seed=42)
        assert a.board.snapshot() == b.board.snapshot()
        assert [str(c) for c in a.get_hand(Color.RED)] == [str(c) for c in b.get_hand(Color.RED)]
        assert a.current_player is b.current_player

    def test_hands(self):
        state = GameState.initial(seed=1)
        assert len(state.get_hand(Color.BLUE)) == 5
        assert all(c.color is Color.RED for c in state.get_hand(Color.RED))
        assert state.phase == Phase.PLAYING

    def test_coin_flip(self, scripted_rng):
        state = GameState.initial(
            rng=scripted_rng([1]),
            board=open_board(),
            hands={Color.BLUE: plain(Color.BLUE, 1), Color.RED: plain(Color.RED, 1)},
        )
        assert state.current_player is Color.RED


class TestPlay:

    def _state(self, blue=2, red=2, board=None):
        return GameState.initial(
            seed=0,
            board=board or open_board(),
            hands={Color.BLUE: plain(Color.BLUE, blue), Color.RED: plain(Color.RED, red)},
            first_player=Color.BLUE,
        )

    def test_legal_actions(self):
        state = self._state()
        actions = state.get_legal_actions()
        assert len(actions) == 2 * 16
        assert Move(1, 4, 4) in actions

    def test_play_switches_player(self):
        state = self._state()
        state.play(Move(0, 1, 1))
        assert state.current_player is Color.RED
        assert len(state.get_hand(Color.BLUE)) == 1
        assert state.board.card_at(1, 1).color is Color.BLUE
        assert state.step_count == 1

    def test_illegal_moves(self):
        state = self._state(board=Board.from_layout(["X...", "....", "....", "...."]))
        with pytest.raises(ValueError):
            state.play(Move(0, 1, 1))
        with pytest.raises(ValueError):
            state.play(Move(5, 2, 2))
        with pytest.raises(ValueError):
            state.play(Move(0, 0, 2))
        state.play(Move(0, 2, 2))
        with pytest.raises(ValueError):
            state.play(Move(0, 2, 2))

    def test_player_keeps_turn_when_opponent_empty(self):
        state = self._state(blue=3, red=1)
        state.play(Move(0, 1, 1))
        state.play(Move(0, 4, 4))
        assert state.current_player is Color.BLUE
        state.play(Move(0, 1, 3))
        assert state.current_player is Color.BLUE
        state.play(Move(0, 3, 1))
        assert state.is_finished
        with pytest.raises(ValueError):
            state.play(Move(0, 2, 2))

    def test_capture_and_winner(self):
        state = self._state(blue=1, red=1)
        state.play(Move(0, 2, 2))
        taker = OwnedCard(
            Card(1, CardClass.MAGICAL, 0, 0, Arrows.from_directions([Direction.EAST])),
            Color.RED,
        )
        state.hands[Color.RED] = [taker]
        report = state.play(Move(0, 2, 1))
        assert report.flips
        assert state.is_finished
        assert state.score() == {Color.BLUE: 0, Color.RED: 2}
        assert state.winner is Color.RED

    def test_draw_game(self):
        state = self._state(blue=1, red=1)
        state.play(Move(0, 1, 1))
        state.play(Move(0, 4, 4))
        assert state.winner is None
        assert state.is_finished

    def test_random_game_completes(self):
        rng = np.random.default_rng(5)
        for seed in range(10):
            state = GameState.initial(seed=seed)
            while not state.is_finished:
                actions = state.get_legal_actions()
                state.play(actions[int(rng.integers(len(actions)))])
            score = state.score()
            assert score[Color.BLUE] + score[Color.RED] == 10
            assert len(state.history) == 10

    def test_render(self):
        text = self._state().render()
        assert "Score: blue 0 - red 0" in text
