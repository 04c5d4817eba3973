"""
Drive a game with agents.

Agents only see snapshots; the runner asks the agent for the player to act,
applies the answer, and repeats until the hand is over.
"""

from typing import Dict, List, Any
import logging

from wagerpoker.agents.base import BaseAgent
from wagerpoker.core.game import HeadsUpGame


logger = logging.getLogger(__name__)


def play_hand(game: HeadsUpGame, agents: Dict[str, BaseAgent]) -> List[Dict[str, Any]]:
    """
    Play one full hand.

    Args:
        game: Game with no hand in progress
        agents: Agent per player ID

    Returns:
        Winner records, or an empty list if the hand could not start
    """
    if not game.start_hand():
        return []

    for agent in agents.values():
        agent.on_hand_start(game.hand_number)

    while game.is_hand_running():
        player = game.current_player
        agent = agents[player.player_id]
        action = agent.get_action_for_game(game.get_state(for_player_id=player.player_id))
        game.take_action(action["action"], action.get("amount", 0), player_id=player.player_id)

    result = {
        "winners": game.get_winners(),
        "board": [str(c) for c in game.community_cards],
        "stacks": {p.player_id: p.stack for p in game.players},
    }
    for agent in agents.values():
        agent.on_hand_end(result)

    return result["winners"]


def play_session(
    game: HeadsUpGame,
    agents: Dict[str, BaseAgent],
    max_hands: int = 100,
) -> int:
    """Play hands until someone is broke or `max_hands` is reached; returns hands played."""
    played = 0
    while played < max_hands and game.is_game_running():
        play_hand(game, agents)
        played += 1
    logger.info("Session over after %d hands: %s", played, [p.stack for p in game.players])
    return played
