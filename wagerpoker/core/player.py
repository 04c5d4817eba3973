"""
Player class for heads-up Texas Hold'em.

Manages player state including:
- Stack (chip count)
- Hole cards and whether they are shown face-down
- Current bet in the betting round and total bet in the hand
- Player state (active, folded, all-in, out)
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field
from enum import Enum, auto

from wagerpoker.core.card import Card
from wagerpoker.core.hand import HandEvaluation


class PlayerState(Enum):
    """Player states during a hand."""
    ACTIVE = auto()       # Still in the hand, can act
    FOLDED = auto()       # Has folded
    ALL_IN = auto()       # All-in, no more actions
    OUT = auto()          # No chips at the start of the hand


@dataclass
class Player:
    """
    A player in the game.

    Attributes:
        player_id: Unique identifier for the player
        name: Display name
        stack: Current chip count (never negative)
        is_ai: Whether the house policy controls this seat
        seat: Seat position at the table (0-indexed)
        hole_cards: The player's private cards (2 cards)
        cards_hidden: Render hole cards face-down (display only)
        current_bet: Amount bet in the current betting round
        total_bet: Total amount put in the pot this hand
        state: Current player state
        hand_evaluation: Best hand, set at showdown
    """
    player_id: str
    stack: int
    name: str = ""
    is_ai: bool = False
    seat: int = 0
    hole_cards: List[Card] = field(default_factory=list)
    cards_hidden: bool = False
    current_bet: int = 0
    total_bet: int = 0
    state: PlayerState = PlayerState.ACTIVE
    hand_evaluation: Optional[HandEvaluation] = None

    # Whether the player has acted since the last raise in this round
    has_acted: bool = False
    last_action: Optional[str] = None

    def __post_init__(self) -> None:
        if self.stack < 0:
            raise ValueError("Stack cannot be negative")
        if not self.name:
            self.name = self.player_id

    def reset_for_new_hand(self) -> None:
        """Reset player state for a new hand."""
        self.hole_cards = []
        self.cards_hidden = False
        self.current_bet = 0
        self.total_bet = 0
        self.has_acted = False
        self.last_action = None
        self.hand_evaluation = None
        self.state = PlayerState.ACTIVE if self.stack > 0 else PlayerState.OUT

    def reset_for_new_round(self) -> None:
        """Reset per-stage betting for the flop, turn and river."""
        self.current_bet = 0
        self.has_acted = False

    def deal_cards(self, cards: List[Card], hidden: bool = False) -> None:
        """Deal hole cards to the player."""
        self.hole_cards = list(cards)
        self.cards_hidden = hidden

    def reveal(self) -> None:
        self.cards_hidden = False

    def bet(self, amount: int) -> int:
        """
        Move chips from the stack into the pot.

        Returns:
            Actual amount bet (less than asked when the stack runs out)
        """
        if amount <= 0:
            return 0

        actual_amount = min(amount, self.stack)

        self.stack -= actual_amount
        self.current_bet += actual_amount
        self.total_bet += actual_amount

        if self.stack == 0:
            self.state = PlayerState.ALL_IN

        return actual_amount

    def refund(self, amount: int) -> None:
        """Return an uncalled part of this player's bet."""
        self.stack += amount
        self.total_bet -= amount
        self.current_bet = max(0, self.current_bet - amount)
        if self.stack > 0 and self.state == PlayerState.ALL_IN:
            self.state = PlayerState.ACTIVE

    def fold(self) -> None:
        self.state = PlayerState.FOLDED
        self.has_acted = True
        self.last_action = "FOLD"

    def check(self) -> None:
        self.has_acted = True
        self.last_action = "CHECK"

    def call(self, amount_to_call: int) -> int:
        """Call the current bet; a short stack calls all-in."""
        actual = self.bet(amount_to_call)
        self.has_acted = True
        self.last_action = f"CALL {actual}"
        return actual

    def raise_to(self, total_amount: int) -> int:
        """
        Raise to a total amount for this round.

        Returns:
            Actual amount added to the pot
        """
        actual = self.bet(total_amount - self.current_bet)
        self.has_acted = True

        if self.state == PlayerState.ALL_IN:
            self.last_action = f"ALL-IN {self.current_bet}"
        else:
            self.last_action = f"RAISE {self.current_bet}"

        return actual

    def go_all_in(self) -> int:
        """Put the entire remaining stack in; returns the amount added."""
        actual = self.bet(self.stack)
        self.has_acted = True
        self.last_action = f"ALL-IN {self.current_bet}"
        return actual

    @property
    def folded(self) -> bool:
        return self.state == PlayerState.FOLDED

    @property
    def is_active(self) -> bool:
        """Check if player can still act."""
        return self.state == PlayerState.ACTIVE

    @property
    def is_in_hand(self) -> bool:
        """Check if player is still in the hand (not folded, not out)."""
        return self.state in (PlayerState.ACTIVE, PlayerState.ALL_IN)

    @property
    def can_act(self) -> bool:
        return self.state == PlayerState.ACTIVE and self.stack > 0

    def to_dict(self, reveal: bool = False) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Hidden hole cards are rendered face-down unless `reveal` is set.
        """
        hidden = self.cards_hidden and not reveal
        return {
            "id": self.player_id,
            "name": self.name,
            "is_ai": self.is_ai,
            "seat": self.seat,
            "stack": self.stack,
            "bet": self.current_bet,
            "total_bet": self.total_bet,
            "state": self.state.name,
            "folded": self.folded,
            "last_action": self.last_action,
            "cards": [card.to_dict(hidden=hidden) for card in self.hole_cards],
            "hand": (
                self.hand_evaluation.description
                if self.hand_evaluation and not hidden else None
            ),
        }

    def __repr__(self) -> str:
        return (
            f"Player({self.player_id}, stack={self.stack}, "
            f"bet={self.current_bet}, state={self.state.name})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"Player {self.name} [{cards_str}] {self.stack}"
