"""
WagerPoker - Heads-up Texas Hold'em against the house

A poker engine for one player against a rule-based house opponent:
- Pure Python game core (secure shuffle, hand evaluation, betting state machine)
- Rule-based house policy with tunable thresholds
- FastAPI adapter exposing the engine to a web client

Usage:
    from wagerpoker import new_game, ActionType
    game = new_game(1000, 1000)
    game.start_hand()
"""

__version__ = "0.1.0"

from wagerpoker.core.card import Card, Deck
from wagerpoker.core.errors import PokerError, IllegalAction, NotYourTurn, HandNotInProgress
from wagerpoker.core.player import Player
from wagerpoker.core.game import HeadsUpGame, new_game
from wagerpoker.core.hand import HandRank, HandEvaluation, evaluate_hand
from wagerpoker.core.rules import ActionType, GamePhase

__all__ = [
    "Card",
    "Deck",
    "PokerError",
    "IllegalAction",
    "NotYourTurn",
    "HandNotInProgress",
    "Player",
    "HeadsUpGame",
    "new_game",
    "HandRank",
    "HandEvaluation",
    "evaluate_hand",
    "ActionType",
    "GamePhase",
    "__version__",
]
