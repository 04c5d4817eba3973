"""
WagerPoker Core - Pure Python heads-up Texas Hold'em logic

This module contains all game logic without any network dependencies.
"""

from wagerpoker.core.card import Card, Deck, Rank, Suit, parse_cards, secure_random
from wagerpoker.core.errors import (
    PokerError, IllegalAction, NotYourTurn, HandNotInProgress, DeckExhausted,
)
from wagerpoker.core.player import Player, PlayerState
from wagerpoker.core.hand import HandRank, HandEvaluation, evaluate_hand, compare_hands
from wagerpoker.core.rules import GamePhase, ActionType, BlindStructure
from wagerpoker.core.strategy import Decision, DecisionPolicy, StrategyConfig
from wagerpoker.core.game import HeadsUpGame, ActionResult, new_game

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "parse_cards",
    "secure_random",
    "PokerError",
    "IllegalAction",
    "NotYourTurn",
    "HandNotInProgress",
    "DeckExhausted",
    "Player",
    "PlayerState",
    "HandRank",
    "HandEvaluation",
    "evaluate_hand",
    "compare_hands",
    "GamePhase",
    "ActionType",
    "BlindStructure",
    "Decision",
    "DecisionPolicy",
    "StrategyConfig",
    "HeadsUpGame",
    "ActionResult",
    "new_game",
]
