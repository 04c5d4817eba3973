"""
Per-session game registry.

Every session gets its own `HeadsUpGame`; the engine is single-writer, so
each session also gets an asyncio lock and requests against one game are
processed one at a time.
"""

from __future__ import annotations
from typing import Dict, Optional
from dataclasses import dataclass, field
import asyncio
import logging
import uuid

from wagerpoker.core.game import HeadsUpGame, new_game


logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """A game instance and the lock serialising access to it."""
    game_id: str
    game: HeadsUpGame
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class GameRegistry:
    """
    Holds the live game sessions of one server process.

    Usage:
        registry = GameRegistry()
        session = registry.create(initial_chips_a=1000, initial_chips_b=1000)
        async with session.lock:
            session.game.start_hand()
        registry.remove(session.game_id)
    """

    def __init__(self):
        self.sessions: Dict[str, GameSession] = {}

    def create(self, **game_kwargs) -> GameSession:
        """Create a new session with its own game."""
        game_id = uuid.uuid4().hex
        session = GameSession(game_id=game_id, game=new_game(**game_kwargs))
        self.sessions[game_id] = session
        logger.info("Created game %s", game_id)
        return session

    def get(self, game_id: str) -> Optional[GameSession]:
        return self.sessions.get(game_id)

    def remove(self, game_id: str) -> bool:
        removed = self.sessions.pop(game_id, None) is not None
        if removed:
            logger.info("Removed game %s", game_id)
        return removed

    def __len__(self) -> int:
        return len(self.sessions)
