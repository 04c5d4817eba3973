"""
WagerPoker Agents - programmatic players

Agents decide from game snapshots; the runner applies their actions to an
engine instance. Useful for self-play, stress tests and baselines.
"""

from wagerpoker.agents.base import BaseAgent
from wagerpoker.agents.random_agent import RandomAgent, CallAgent
from wagerpoker.agents.house_agent import HouseAgent
from wagerpoker.agents.runner import play_hand, play_session

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "CallAgent",
    "HouseAgent",
    "play_hand",
    "play_session",
]
