"""
Card and Deck classes for Texas Hold'em.

Ranks are the plain integers 2-14 (11=Jack, 12=Queen, 13=King, 14=Ace), so the
Ace is always high; the A-2-3-4-5 wheel is special-cased by the evaluator.

Shuffling uses a cryptographically secure source (the `secrets` module), never
the `random` module's Mersenne Twister.
"""

from __future__ import annotations
import secrets
from typing import Callable, List
from enum import IntEnum

from wagerpoker.core.errors import DeckExhausted


class Suit(IntEnum):
    """Card suits with integer values for fast comparison."""
    CLUBS = 0     # ♣
    DIAMONDS = 1  # ♦
    HEARTS = 2    # ♥
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks from 2 (lowest) to Ace (14, highest)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.CLUBS: "c",
    Suit.DIAMONDS: "d",
    Suit.HEARTS: "h",
    Suit.SPADES: "s",
}

SUIT_NAMES = {
    Suit.CLUBS: "clubs",
    Suit.DIAMONDS: "diamonds",
    Suit.HEARTS: "hearts",
    Suit.SPADES: "spades",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}

DECK_SIZE = 52

# Face-down placeholder used when rendering hidden cards
HIDDEN_CARD = {"rank": None, "suit": None, "text": "??", "color": None, "hidden": True}


def secure_random() -> float:
    """
    Return a cryptographically secure float in [0, 1).

    Four random bytes are read as a big-endian unsigned integer and divided
    by 2**32, giving a granularity of 1/2**32.
    """
    return int.from_bytes(secrets.token_bytes(4), "big") / 2 ** 32


class Card:
    """
    An immutable playing card represented as (rank, suit).

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As") or Card.from_string("A♠")
    - Integer (0-51): Card.from_int(51) = Ace of Spades

    The integer encoding is: card_int = (rank - 2) * 4 + suit

    Whether a card is shown face-down is a display concern and is not part
    of its identity; see `to_dict(hidden=True)`.
    """

    __slots__ = ("rank", "suit", "_int")

    def __init__(self, rank: int, suit: int):
        object.__setattr__(self, "rank", Rank(rank))
        object.__setattr__(self, "suit", Suit(suit))
        object.__setattr__(self, "_int", (int(self.rank) - 2) * 4 + int(self.suit))

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "As", "Kh", "Td", "2c" (rank + suit char)
        - "A♠", "K♥", "10♦", "2♣" (rank + suit symbol)
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        if s.startswith("10"):
            rank_char, suit_part = "T", s[2:]
        else:
            rank_char, suit_part = s[0].upper(), s[1:]

        if rank_char not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_char}")
        rank = CHAR_TO_RANK[rank_char]

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(rank, suit)

    @classmethod
    def from_int(cls, card_int: int) -> Card:
        """Create a card from integer (0-51)."""
        if not 0 <= card_int < DECK_SIZE:
            raise ValueError(f"Card int must be 0-51, got {card_int}")
        return cls(card_int // 4 + 2, card_int % 4)

    def to_int(self) -> int:
        """Return the integer representation (0-51)."""
        return self._int

    def __int__(self) -> int:
        return self._int

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self._int == other._int
        return NotImplemented

    def __hash__(self) -> int:
        return self._int

    def __lt__(self, other: Card) -> bool:
        """Compare by rank only (for sorting)."""
        return self.rank < other.rank

    def __repr__(self) -> str:
        return f"Card({RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Kh'."""
        return f"{RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self.suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self, hidden: bool = False) -> dict:
        """Convert to dictionary for JSON serialization, face-down if hidden."""
        if hidden:
            return dict(HIDDEN_CARD)
        return {
            "rank": int(self.rank),
            "suit": SUIT_NAMES[self.suit],
            "text": str(self),
            "color": self.color,
            "hidden": False,
        }


class Deck:
    """
    A standard 52-card deck.

    Usage:
        deck = Deck()
        hole_cards = deck.deal(2)
        deck.burn()
        flop = deck.deal(3)

    `random_source` must return floats in [0, 1); it defaults to the secure
    source and is only overridden in tests.
    """

    def __init__(
        self,
        shuffle: bool = True,
        random_source: Callable[[], float] = secure_random,
    ):
        self.random_source = random_source
        self.reset()
        if shuffle:
            self.shuffle()

    def reset(self) -> None:
        """Reset the deck to a full 52 cards in order."""
        self._cards: List[Card] = [
            Card(rank, suit)
            for rank in Rank
            for suit in Suit
        ]
        self._dealt: List[Card] = []

    def shuffle(self) -> None:
        """Fisher-Yates shuffle of the remaining cards."""
        cards = self._cards
        for i in range(len(cards) - 1, 0, -1):
            j = int(self.random_source() * (i + 1))
            cards[i], cards[j] = cards[j], cards[i]

    def deal(self, n: int = 1) -> List[Card]:
        """
        Deal n cards from the top of the deck.

        Raises:
            DeckExhausted: If not enough cards remain.
        """
        if n > len(self._cards):
            raise DeckExhausted(f"Cannot deal {n} cards, only {len(self._cards)} remain")

        dealt = self._cards[:n]
        del self._cards[:n]
        self._dealt.extend(dealt)
        return dealt

    def draw(self) -> Card:
        """Deal a single card."""
        return self.deal(1)[0]

    deal_one = draw

    def burn(self) -> Card:
        """Burn (discard face-down) the top card."""
        return self.draw()

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    @property
    def dealt_cards(self) -> List[Card]:
        """List of cards that have been dealt (including burns)."""
        return self._dealt.copy()

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts formats:
    - "As Kh Td" (space-separated)
    - "AsKhTd" (no separator, 2 chars each)
    - "A♠ K♥ T♦" (with symbols)
    """
    cards_str = cards_str.strip()

    if " " in cards_str:
        return [Card.from_string(s) for s in cards_str.split()]

    result = []
    i = 0
    while i < len(cards_str):
        if i + 1 < len(cards_str) and (
            cards_str[i + 1] in SYMBOL_TO_SUIT
            or cards_str[i + 1].lower() in CHAR_TO_SUIT
        ):
            result.append(Card.from_string(cards_str[i:i + 2]))
            i += 2
        else:
            raise ValueError(f"Cannot parse card at position {i}: {cards_str[i:]}")

    return result
