"""
Baseline agents.

Simple agents that make random or passive legal moves. Useful for driving
the engine in tests and as a baseline for the house policy.
"""

import random
from typing import Dict, List, Any, Optional

from wagerpoker.agents.base import BaseAgent, find_action


class RandomAgent(BaseAgent):
    """
    An agent that selects random legal actions.

    The agent has configurable tendencies:
    - fold_probability: How likely to fold when facing a bet
    - raise_probability: How likely to raise vs call/check
    - all_in_probability: How likely to shove
    """

    def __init__(
        self,
        player_id: str,
        name: Optional[str] = None,
        fold_probability: float = 0.1,
        raise_probability: float = 0.3,
        all_in_probability: float = 0.05,
        seed: Optional[int] = None,
    ):
        super().__init__(player_id, name or f"Random-{player_id}")
        self.fold_probability = fold_probability
        self.raise_probability = raise_probability
        self.all_in_probability = all_in_probability
        self.rng = random.Random(seed)

    def observe(self, game_state: Dict[str, Any]) -> None:
        """Random agent doesn't need to observe state."""

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Select a random legal action, biased by the configured probabilities."""
        if not legal_actions:
            return {"action": "FOLD", "amount": 0}

        roll = self.rng.random()
        call_action = find_action(legal_actions, "CALL")

        if call_action and roll < self.fold_probability:
            return {"action": "FOLD", "amount": 0}
        roll -= self.fold_probability

        if find_action(legal_actions, "ALL_IN") and roll < self.all_in_probability:
            return {"action": "ALL_IN", "amount": 0}
        roll -= self.all_in_probability

        raise_action = find_action(legal_actions, "RAISE")
        if raise_action and roll < self.raise_probability:
            amount = self.rng.randint(raise_action["min"], raise_action["max"])
            return {"action": "RAISE", "amount": amount}

        if find_action(legal_actions, "CHECK"):
            return {"action": "CHECK", "amount": 0}

        return {"action": "CALL", "amount": 0}


class CallAgent(BaseAgent):
    """An agent that always checks or calls."""

    def __init__(self, player_id: str, name: Optional[str] = None):
        super().__init__(player_id, name or f"Caller-{player_id}")

    def observe(self, game_state: Dict[str, Any]) -> None:
        pass

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        if find_action(legal_actions, "CHECK"):
            return {"action": "CHECK", "amount": 0}
        if find_action(legal_actions, "CALL"):
            return {"action": "CALL", "amount": 0}
        return {"action": "FOLD", "amount": 0}
