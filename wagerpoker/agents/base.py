"""
Base Agent Interface for WagerPoker.

An agent turns a game snapshot (`HeadsUpGame.get_state(for_player_id=...)`)
into an action. Agents never touch the engine directly; the runner in
`wagerpoker.agents.runner` applies what they return.

Usage:
    class MyAgent(BaseAgent):
        def observe(self, game_state):
            pass

        def act(self, game_state, legal_actions):
            return {"action": "CALL", "amount": 0}
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional


class BaseAgent(ABC):
    """
    Abstract base class for poker agents.

    Attributes:
        player_id: The seat this agent plays
        name: Human-readable name
    """

    def __init__(self, player_id: str, name: Optional[str] = None):
        self.player_id = player_id
        self.name = name or f"Agent-{player_id}"

    @abstractmethod
    def observe(self, game_state: Dict[str, Any]) -> None:
        """
        Observe the current game state.

        Args:
            game_state: Snapshot containing the public table state and a
                "private_info" block with:
                    - hand: Agent's hole cards
                    - available_moves: List of legal action dicts
                    - chips_to_call: Amount needed to call
                    - stack: Agent's remaining chips
        """

    @abstractmethod
    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Choose an action given the current game state.

        Args:
            game_state: Current game state dictionary
            legal_actions: List of legal action dicts, each containing:
                - type: FOLD, CHECK, CALL, RAISE or ALL_IN
                - amount: Chips required (CALL, ALL_IN)
                - min/max: Raise increment range (RAISE)

        Returns:
            {"action": "RAISE", "amount": 20}; amount is the raise increment
        """

    def on_hand_start(self, hand_number: int) -> None:
        """Called when a new hand starts."""

    def on_hand_end(self, result: Dict[str, Any]) -> None:
        """
        Called when a hand ends.

        Args:
            result: Dictionary containing:
                - winners: List of winner info
                - board: Community cards
                - stacks: Stack per player after settlement
        """

    def get_action_for_game(self, game_state: Dict[str, Any]) -> Dict[str, Any]:
        """Convenience method that combines observe and act."""
        self.observe(game_state)
        legal_actions = game_state.get("private_info", {}).get("available_moves", [])
        return self.act(game_state, legal_actions)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.player_id}, {self.name})"


def find_action(legal_actions: List[Dict[str, Any]], action_type: str) -> Optional[Dict[str, Any]]:
    """Return the legal action dict of the given type, if present."""
    return next((a for a in legal_actions if a["type"] == action_type), None)
