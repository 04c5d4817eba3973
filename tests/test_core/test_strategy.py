"""
Tests for the house decision policy.
"""

import pytest
from wagerpoker.core.card import Card, Rank, Suit, parse_cards
from wagerpoker.core.errors import HandNotInProgress, NotYourTurn
from wagerpoker.core.game import ActionType, new_game
from wagerpoker.core.rules import GamePhase
from wagerpoker.core.strategy import (
    DecisionPolicy, StrategyConfig, choose_action,
    preflop_strength, postflop_strength,
)


AGGRESSION = {
    ActionType.FOLD: 0,
    ActionType.CHECK: 1,
    ActionType.CALL: 1,
    ActionType.RAISE: 2,
}


class TestPreflopStrength:
    """Tests for the two-card heuristic."""

    def test_pocket_aces(self):
        assert preflop_strength(parse_cards("As Ah")) == pytest.approx(0.95)

    def test_pocket_twos(self):
        assert preflop_strength(parse_cards("2s 2h")) == pytest.approx(0.5)

    def test_pairs_increase_with_rank(self):
        strengths = [
            preflop_strength([Card(rank, Suit.SPADES), Card(rank, Suit.HEARTS)])
            for rank in Rank
        ]
        assert strengths == sorted(strengths)
        assert len(set(strengths)) == len(strengths)

    def test_unpaired_capped_below_aces(self):
        ak_suited = preflop_strength(parse_cards("As Ks"))
        assert ak_suited == pytest.approx(0.9)
        assert ak_suited < preflop_strength(parse_cards("As Ah"))

    def test_trash(self):
        assert preflop_strength(parse_cards("7c 2d")) == pytest.approx(0.2)

    def test_suited_beats_offsuit(self):
        assert preflop_strength(parse_cards("Jh Th")) > preflop_strength(parse_cards("Jh Tc"))

    def test_needs_two_cards(self):
        with pytest.raises(ValueError):
            preflop_strength(parse_cards("As"))


class TestPostflopStrength:
    """Tests for made-hand strength."""

    def test_royal_flush_on_river(self):
        strength = postflop_strength(
            parse_cards("As Ks"), parse_cards("Qs Js Ts 2c 3d"), GamePhase.RIVER,
        )
        assert strength == pytest.approx(1.0)

    def test_flop_discount(self):
        hole, board = parse_cards("As Ks"), parse_cards("Qs Js Ts")
        assert postflop_strength(hole, board, GamePhase.FLOP) == pytest.approx(0.85)

    def test_better_category_is_stronger(self):
        board = parse_cards("Kd 9s 5h 4c 2d")
        pair = postflop_strength(parse_cards("Kc 7d"), board, GamePhase.RIVER)
        trips = postflop_strength(parse_cards("Kc Kh"), board, GamePhase.RIVER)
        assert trips > pair

    def test_pair_band(self):
        strength = postflop_strength(
            parse_cards("Ac 7d"), parse_cards("As 9h 5d 3c 2h"), GamePhase.RIVER,
        )
        assert strength == pytest.approx(0.2 + 0.1)


class TestChooseAction:
    """Tests for the threshold ladder."""

    @pytest.mark.parametrize("strength,expected", [
        (0.9, (ActionType.RAISE, 10)),
        (0.5, (ActionType.RAISE, 10)),
        (0.2, (ActionType.CHECK, 0)),
    ])
    def test_nothing_to_call(self, strength, expected):
        assert choose_action(strength, to_call=0, pot=20, min_bet=10, stack=500) == expected

    def test_strong_open_sizes_with_pot(self):
        action, amount = choose_action(0.9, to_call=0, pot=200, min_bet=10, stack=500)
        assert action == ActionType.RAISE
        assert amount == int(200 * 0.5 * 0.9)

    @pytest.mark.parametrize("strength,expected", [
        (0.9, (ActionType.RAISE, 20)),
        (0.7, (ActionType.RAISE, 10)),
        (0.5, (ActionType.CALL, 0)),
        (0.35, (ActionType.FOLD, 0)),
        (0.1, (ActionType.FOLD, 0)),
    ])
    def test_facing_bet(self, strength, expected):
        assert choose_action(strength, to_call=10, pot=30, min_bet=10, stack=500) == expected

    def test_looser_preflop_call(self):
        action, _ = choose_action(0.35, to_call=10, pot=30, min_bet=10, stack=500, preflop=True)
        assert action == ActionType.CALL

    def test_empty_stack_checks(self):
        assert choose_action(0.99, to_call=10, pot=30, min_bet=10, stack=0) == (ActionType.CHECK, 0)

    @pytest.mark.parametrize("to_call", [0, 10])
    def test_monotonic(self, to_call):
        """A stronger hand never plays less aggressively."""
        levels = [
            AGGRESSION[choose_action(s / 100, to_call=to_call, pot=40, min_bet=10, stack=500)[0]]
            for s in range(0, 121)
        ]
        assert levels == sorted(levels)


class TestStrategyConfig:
    """Tests for threshold validation."""

    def test_defaults_valid(self):
        StrategyConfig()

    @pytest.mark.parametrize("overrides", [
        {"call_threshold": 0.9},
        {"min_raise_threshold": 0.8},
        {"preflop_call_threshold": 0.5},
        {"bluff_max": 0.0},
        {"small_raise_pot_fraction": 1.0},
        {"unpaired_cap": 0.99},
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ValueError):
            StrategyConfig(**overrides)

    def test_custom_thresholds_used(self):
        config = StrategyConfig(call_threshold=0.1, preflop_call_threshold=0.1)
        action, _ = choose_action(0.2, to_call=10, pot=30, min_bet=10, stack=500, config=config)
        assert action == ActionType.CALL


class TestDecisionPolicy:
    """Tests for the policy against a live game."""

    def test_bluff_range(self):
        assert DecisionPolicy(random_source=lambda: 0.0).bluff() == pytest.approx(0.2)
        tiny = DecisionPolicy(random_source=lambda: 0.999999).bluff()
        assert 0 < tiny < 0.001

    def test_bluff_never_zero(self):
        policy = DecisionPolicy()
        for _ in range(200):
            assert 0 < policy.bluff() <= 0.2

    def test_aces_raise(self, quiet_house_game, rig):
        game = quiet_house_game
        game.start_hand()
        rig(game, "7c 2d", "As Ah", "Kd 9s 5h 4c Jc")
        game.take_action(ActionType.CALL)

        decision = game.ai_decide()
        assert decision.strength == pytest.approx(0.95)
        assert decision.effective_strength > 0.85
        assert decision.action == ActionType.RAISE

        result = game.play_ai_turn()
        assert result.action_type == ActionType.RAISE
        assert game.current_bet == 20
        assert game.current_player.player_id == "player"

    def test_trash_folds_to_big_raise(self, quiet_house_game, rig):
        game = quiet_house_game
        game.start_hand()
        rig(game, "As Ah", "7c 2d", "Kd 9s 5h 4c Jc")
        game.take_action(ActionType.RAISE, 100)

        assert game.ai_decide().action == ActionType.FOLD
        results = game.play_ai_turns()
        assert len(results) == 1
        assert not game.is_hand_running()

    def test_decide_has_no_side_effects(self, quiet_house_game):
        game = quiet_house_game
        game.start_hand()
        game.take_action(ActionType.CALL)
        before = (game.pot, game.current_player_index, [p.stack for p in game.players])
        game.ai_decide()
        assert (game.pot, game.current_player_index, [p.stack for p in game.players]) == before

    def test_ai_decide_on_human_turn(self, game):
        game.start_hand()
        with pytest.raises(NotYourTurn):
            game.ai_decide()

    def test_ai_decide_without_hand(self, game):
        with pytest.raises(HandNotInProgress):
            game.ai_decide()

    def test_play_ai_turns_stops_for_human(self):
        game = new_game(1000, 1000)
        game.start_hand()
        game.take_action(ActionType.FOLD)
        game.start_hand()

        # The house has the button and acts first
        assert game.current_player.is_ai
        game.play_ai_turns()
        assert not game.is_hand_running() or not game.current_player.is_ai
