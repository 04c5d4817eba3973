"""
Heads-up Texas Hold'em Rules and Constants.

Key rules:

1. Heads-up (2 players): the button posts the small blind, the other player
   posts the big blind. Preflop the button acts first (the seat after the big
   blind); postflop the non-button player acts first (the seat after the
   button).

2. Raises are expressed as an increment over the current table bet and are
   clamped up to the minimum bet (the big blind). A raise the player cannot
   afford becomes an all-in.

3. There is a single pot. Whatever part of a bet the opponent does not
   match is returned before the pot is awarded, so no side pots are needed
   with two players.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Tuple


class GamePhase(Enum):
    """Betting stages of a hand."""
    PREFLOP = "preflop"     # After hole cards dealt, before flop
    FLOP = "flop"           # After 3 community cards
    TURN = "turn"           # After 4th community card
    RIVER = "river"         # After 5th community card
    SHOWDOWN = "showdown"   # Hands revealed and compared


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"
    ALL_IN = "ALL_IN"


@dataclass
class BlindStructure:
    """Blind structure for a game."""
    small_blind: int
    big_blind: int

    def __post_init__(self) -> None:
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ValueError("Blinds must be positive")
        if self.small_blind > self.big_blind:
            raise ValueError("Small blind cannot exceed big blind")


# Default game settings
DEFAULT_SMALL_BLIND = 5
DEFAULT_BIG_BLIND = 10
DEFAULT_BUY_IN = 1000
NUM_PLAYERS = 2

# Cards per phase
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

NEXT_PHASE = {
    GamePhase.PREFLOP: GamePhase.FLOP,
    GamePhase.FLOP: GamePhase.TURN,
    GamePhase.TURN: GamePhase.RIVER,
    GamePhase.RIVER: GamePhase.SHOWDOWN,
}


def get_blind_positions(num_players: int, dealer_position: int) -> Tuple[int, int]:
    """
    Calculate small blind and big blind positions.

    Heads-up the dealer posts the small blind; otherwise the small blind is
    left of the dealer and the big blind left of the small blind.

    Returns:
        Tuple of (small_blind_position, big_blind_position)
    """
    if num_players < 2:
        raise ValueError("Need at least 2 players")

    if num_players == 2:
        sb_pos = dealer_position
        bb_pos = (dealer_position + 1) % num_players
    else:
        sb_pos = (dealer_position + 1) % num_players
        bb_pos = (dealer_position + 2) % num_players

    return sb_pos, bb_pos


def get_first_to_act_preflop(num_players: int, big_blind_position: int) -> int:
    """The seat after the big blind acts first preflop (the dealer, heads-up)."""
    return (big_blind_position + 1) % num_players


def get_first_to_act_postflop(num_players: int, dealer_position: int) -> int:
    """The seat after the dealer acts first on every later street."""
    return (dealer_position + 1) % num_players


def raise_target(current_bet: int, increment: int, min_bet: int) -> int:
    """
    Total bet a raise aims for, before capping at the player's stack.

    The increment is clamped up to the minimum bet.
    """
    return current_bet + max(increment, min_bet)
