"""
Tests for programmatic agents and the agent runner.
"""

import pytest
from wagerpoker.agents import (
    BaseAgent, RandomAgent, CallAgent, HouseAgent, play_hand, play_session,
)
from wagerpoker.agents.base import find_action
from wagerpoker.core.game import HeadsUpGame
from wagerpoker.core.strategy import DecisionPolicy


def make_game(stacks=(1000, 1000)):
    return HeadsUpGame(
        stacks=stacks, player_ids=("alice", "bob"),
        names=("Alice", "Bob"), ai_seats=(),
    )


class RecordingAgent(CallAgent):
    """Call agent that remembers the hooks it received."""

    def __init__(self, player_id):
        super().__init__(player_id)
        self.started = []
        self.results = []

    def on_hand_start(self, hand_number):
        self.started.append(hand_number)

    def on_hand_end(self, result):
        self.results.append(result)


class TestBaseAgent:
    """Tests for the agent interface."""

    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseAgent("alice")

    def test_default_name(self):
        assert CallAgent("alice").name == "Caller-alice"
        assert "CallAgent" in repr(CallAgent("alice"))

    def test_find_action(self):
        actions = [{"type": "FOLD"}, {"type": "CALL", "amount": 5}]
        assert find_action(actions, "CALL")["amount"] == 5
        assert find_action(actions, "RAISE") is None


class TestRandomAgent:
    """Tests for the random baseline."""

    def test_returns_legal_action(self):
        game = make_game()
        game.start_hand()
        agent = RandomAgent("alice", seed=7)
        state = game.get_state(for_player_id="alice")
        legal = {a["type"] for a in state["private_info"]["available_moves"]}

        for _ in range(50):
            assert agent.get_action_for_game(state)["action"] in legal

    def test_seed_is_reproducible(self):
        game = make_game()
        game.start_hand()
        state = game.get_state(for_player_id="alice")
        a = RandomAgent("alice", seed=3)
        b = RandomAgent("alice", seed=3)
        assert [a.get_action_for_game(state) for _ in range(20)] == [
            b.get_action_for_game(state) for _ in range(20)
        ]

    def test_no_moves_folds(self):
        assert RandomAgent("alice").act({}, []) == {"action": "FOLD", "amount": 0}


class TestHouseAgent:
    """Tests for the snapshot-driven house agent."""

    def test_acts_from_snapshot(self):
        game = make_game()
        game.start_hand()
        agent = HouseAgent("alice", policy=DecisionPolicy(random_source=lambda: 0.5))
        action = agent.get_action_for_game(game.get_state(for_player_id="alice"))

        assert action["action"] in {"FOLD", "CALL", "RAISE"}
        assert 0.2 <= agent.last_strength <= 0.95


class TestRunner:
    """Tests for play_hand and play_session."""

    def test_play_hand(self):
        game = make_game()
        alice, bob = RecordingAgent("alice"), RecordingAgent("bob")
        winners = play_hand(game, {"alice": alice, "bob": bob})

        assert winners
        assert not game.is_hand_running()
        assert alice.started == [1]
        assert bob.results[0]["winners"] == winners
        assert len(bob.results[0]["board"]) == 5
        assert sum(bob.results[0]["stacks"].values()) == 2000

    def test_play_hand_busted(self):
        game = make_game(stacks=(1000, 0))
        assert play_hand(game, {"alice": CallAgent("alice"), "bob": CallAgent("bob")}) == []

    def test_random_session_conserves_chips(self):
        game = make_game()
        agents = {
            "alice": RandomAgent("alice", seed=1),
            "bob": RandomAgent("bob", seed=2, raise_probability=0.5),
        }
        played = play_session(game, agents, max_hands=200)

        assert 1 <= played <= 200
        assert game.pot == 0
        assert sum(p.stack for p in game.players) == 2000
        assert all(p.stack >= 0 for p in game.players)

    def test_house_against_random(self):
        game = make_game()
        agents = {
            "alice": HouseAgent("alice"),
            "bob": RandomAgent("bob", seed=5),
        }
        play_session(game, agents, max_hands=50)
        assert sum(p.stack for p in game.players) == 2000
