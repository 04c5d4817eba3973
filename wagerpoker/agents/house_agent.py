"""
House Agent.

Plays the house policy from a game snapshot instead of the engine object,
so it can sit behind the same interface as any other agent.
"""

from typing import Dict, List, Any, Optional

from wagerpoker.agents.base import BaseAgent
from wagerpoker.core.card import Card
from wagerpoker.core.rules import GamePhase
from wagerpoker.core.strategy import DecisionPolicy, choose_action


class HouseAgent(BaseAgent):
    """Agent wrapper around `DecisionPolicy`."""

    def __init__(
        self,
        player_id: str,
        name: Optional[str] = None,
        policy: Optional[DecisionPolicy] = None,
    ):
        super().__init__(player_id, name or f"House-{player_id}")
        self.policy = policy or DecisionPolicy()
        self.last_strength: Optional[float] = None

    def observe(self, game_state: Dict[str, Any]) -> None:
        pass

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        private = game_state["private_info"]
        hole_cards = [Card.from_string(c["text"]) for c in private["hand"]]
        board = [Card.from_string(c["text"]) for c in game_state["board"]]
        phase = GamePhase(game_state["stage"])

        strength = self.policy.hand_strength(hole_cards, board, phase)
        self.last_strength = strength

        action, amount = choose_action(
            strength + self.policy.bluff(),
            to_call=private["chips_to_call"],
            pot=game_state["pot"],
            min_bet=game_state["min_bet"],
            stack=private["stack"],
            preflop=phase == GamePhase.PREFLOP,
            config=self.policy.config,
        )
        return {"action": action.value, "amount": amount}
