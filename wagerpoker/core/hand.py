"""
Hand Evaluation for Texas Hold'em.

This module evaluates 5-7 cards and returns the best 5-card hand.
Every hand gets an exact integer `value`; a higher value is a better hand
and equal values are true ties.

Value layout (base 16, one hex digit per component, ranks are 2-14):

    category * 16**5 + slot0 * 16**4 + slot1 * 16**3 + ... + slot4

The category (1-10) dominates; the slots hold the deciding ranks followed by
the kickers in descending order, padded with zeros.

Hand Rankings (best to worst):
10. Royal Flush: A♠ K♠ Q♠ J♠ T♠
9. Straight Flush: 5 consecutive cards of same suit
8. Four of a Kind: 4 cards of same rank
7. Full House: 3 of a kind + pair
6. Flush: 5 cards of same suit
5. Straight: 5 consecutive cards
4. Three of a Kind: 3 cards of same rank
3. Two Pair: 2 different pairs
2. One Pair: 2 cards of same rank
1. High Card: No made hand

Note: Ace can be low only in the A-2-3-4-5 straight (wheel).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
from itertools import combinations
from enum import IntEnum
from collections import Counter

from wagerpoker.core.card import Card, Rank


class HandRank(IntEnum):
    """Hand categories from worst (1) to best (10)."""
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10


HAND_RANK_NAMES = {
    HandRank.ROYAL_FLUSH: "Royal Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.HIGH_CARD: "High Card",
}

RANK_NAMES = {
    Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
    Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
    Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
    Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
    Rank.ACE: "Ace",
}

RANK_PLURALS = {
    Rank.TWO: "Twos", Rank.THREE: "Threes", Rank.FOUR: "Fours",
    Rank.FIVE: "Fives", Rank.SIX: "Sixes", Rank.SEVEN: "Sevens",
    Rank.EIGHT: "Eights", Rank.NINE: "Nines", Rank.TEN: "Tens",
    Rank.JACK: "Jacks", Rank.QUEEN: "Queens", Rank.KING: "Kings",
    Rank.ACE: "Aces",
}

HAND_SIZE = 5
MAX_CARDS = 7

# One hex digit per rank component; ranks never exceed 14
SLOT_BASE = 16
SLOT_COUNT = 5

WHEEL_RANKS = [Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO]


@dataclass(frozen=True)
class HandEvaluation:
    """
    Result of evaluating a hand.

    Attributes:
        rank: Hand category
        best_five: The five cards forming the hand, in display order
        description: Human-readable name, e.g. "Full House, Kings over Fours"
        value: Exact comparable strength; higher is better
        kickers: Tie-break ranks (deciding ranks first, then kickers)
    """
    rank: HandRank
    best_five: Tuple[Card, ...]
    description: str
    value: int
    kickers: Tuple[int, ...]

    @property
    def name(self) -> str:
        return HAND_RANK_NAMES[self.rank]

    @property
    def primary_rank(self) -> int:
        """The rank that decides the hand (top card, pair rank, trip rank...)."""
        return self.kickers[0]

    def to_dict(self) -> Dict[str, object]:
        return {
            "rank": self.rank.name,
            "rank_value": int(self.rank),
            "name": self.name,
            "description": self.description,
            "value": self.value,
            "cards": [c.to_dict() for c in self.best_five],
        }


def evaluate_hand(cards: Sequence[Card]) -> HandEvaluation:
    """
    Evaluate a poker hand (5-7 cards).

    With 6 or 7 cards every 5-card combination (at most 21) is evaluated and
    the best one kept.

    Raises:
        ValueError: If not 5-7 cards provided, or cards are duplicated
    """
    if len(cards) < HAND_SIZE or len(cards) > MAX_CARDS:
        raise ValueError(f"Need 5-7 cards, got {len(cards)}")
    if len(set(cards)) != len(cards):
        raise ValueError("Duplicate cards in hand")

    if len(cards) == HAND_SIZE:
        return _evaluate_5_cards(list(cards))

    best: Optional[HandEvaluation] = None
    for combo in combinations(cards, HAND_SIZE):
        evaluation = _evaluate_5_cards(list(combo))
        if best is None or evaluation.value > best.value:
            best = evaluation

    return best


def _evaluate_5_cards(cards: List[Card]) -> HandEvaluation:
    """Evaluate exactly 5 cards."""
    sorted_cards = sorted(cards, key=lambda c: (c.rank, c.suit), reverse=True)
    ranks = [c.rank for c in sorted_cards]

    is_flush = len({c.suit for c in sorted_cards}) == 1
    straight_high = _straight_high(ranks)

    rank_counts = Counter(ranks)
    counts = sorted(rank_counts.values(), reverse=True)
    # Ranks ordered by (count, rank), e.g. full house -> [trips, pair]
    grouped = sorted(rank_counts, key=lambda r: (rank_counts[r], r), reverse=True)

    if straight_high is not None and is_flush:
        hand_type = HandRank.ROYAL_FLUSH if straight_high == Rank.ACE else HandRank.STRAIGHT_FLUSH
        return _build(hand_type, [straight_high], _straight_order(sorted_cards, straight_high))

    if counts == [4, 1]:
        return _build(HandRank.FOUR_OF_A_KIND, grouped, _sort_by_count(sorted_cards, rank_counts))

    if counts == [3, 2]:
        return _build(HandRank.FULL_HOUSE, grouped, _sort_by_count(sorted_cards, rank_counts))

    if is_flush:
        return _build(HandRank.FLUSH, ranks, sorted_cards)

    if straight_high is not None:
        return _build(HandRank.STRAIGHT, [straight_high], _straight_order(sorted_cards, straight_high))

    if counts == [3, 1, 1]:
        return _build(HandRank.THREE_OF_A_KIND, grouped, _sort_by_count(sorted_cards, rank_counts))

    if counts == [2, 2, 1]:
        return _build(HandRank.TWO_PAIR, grouped, _sort_by_count(sorted_cards, rank_counts))

    if counts == [2, 1, 1, 1]:
        return _build(HandRank.ONE_PAIR, grouped, _sort_by_count(sorted_cards, rank_counts))

    return _build(HandRank.HIGH_CARD, ranks, sorted_cards)


def _build(hand_type: HandRank, kickers: List[int], ordered: List[Card]) -> HandEvaluation:
    kickers = tuple(int(k) for k in kickers)
    return HandEvaluation(
        rank=hand_type,
        best_five=tuple(ordered),
        description=_describe(hand_type, kickers),
        value=hand_value(hand_type, kickers),
        kickers=kickers,
    )


def hand_value(hand_type: HandRank, kickers: Sequence[int]) -> int:
    """
    Pack a category and up to five tie-break ranks into one integer.

    Each component gets its own base-16 digit, so two hands compare equal
    only when the category and every tie-break rank are equal.
    """
    if len(kickers) > SLOT_COUNT:
        raise ValueError(f"At most {SLOT_COUNT} tie-break ranks, got {len(kickers)}")
    value = int(hand_type)
    for i in range(SLOT_COUNT):
        value = value * SLOT_BASE + (int(kickers[i]) if i < len(kickers) else 0)
    return value


def _straight_high(ranks: List[Rank]) -> Optional[int]:
    """Return the top card of a straight (5 for the wheel), or None."""
    unique_ranks = sorted(set(ranks), reverse=True)
    if len(unique_ranks) != HAND_SIZE:
        return None

    if unique_ranks[0] - unique_ranks[4] == 4:
        return unique_ranks[0]

    if unique_ranks == WHEEL_RANKS:
        return Rank.FIVE

    return None


def _sort_by_count(cards: List[Card], rank_counts: Counter) -> List[Card]:
    """Sort cards by count (descending), then by rank (descending)."""
    return sorted(cards, key=lambda c: (rank_counts[c.rank], c.rank, c.suit), reverse=True)


def _straight_order(cards: List[Card], straight_high: int) -> List[Card]:
    """Order a straight from its top card down (5-4-3-2-A for the wheel)."""
    if straight_high == Rank.FIVE:
        ace = [c for c in cards if c.rank == Rank.ACE]
        return [c for c in cards if c.rank != Rank.ACE] + ace
    return cards


def _describe(hand_type: HandRank, kickers: Tuple[int, ...]) -> str:
    top = Rank(kickers[0])
    if hand_type == HandRank.ROYAL_FLUSH:
        return "Royal Flush"
    if hand_type == HandRank.STRAIGHT_FLUSH:
        return f"Straight Flush, {RANK_NAMES[top]} high"
    if hand_type == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {RANK_PLURALS[top]}"
    if hand_type == HandRank.FULL_HOUSE:
        return f"Full House, {RANK_PLURALS[top]} over {RANK_PLURALS[Rank(kickers[1])]}"
    if hand_type == HandRank.FLUSH:
        return f"Flush, {RANK_NAMES[top]} high"
    if hand_type == HandRank.STRAIGHT:
        return f"Straight, {RANK_NAMES[top]} high"
    if hand_type == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {RANK_PLURALS[top]}"
    if hand_type == HandRank.TWO_PAIR:
        return f"Two Pair, {RANK_PLURALS[top]} and {RANK_PLURALS[Rank(kickers[1])]}"
    if hand_type == HandRank.ONE_PAIR:
        return f"Pair of {RANK_PLURALS[top]}"
    return f"High Card, {RANK_NAMES[top]}"


def compare_hands(cards1: Sequence[Card], cards2: Sequence[Card]) -> int:
    """
    Compare two hands.

    Returns:
        1 if cards1 wins, -1 if cards2 wins, 0 if tie
    """
    value1 = evaluate_hand(cards1).value
    value2 = evaluate_hand(cards2).value

    if value1 > value2:
        return 1
    elif value1 < value2:
        return -1
    return 0


def get_hand_description(cards: Sequence[Card]) -> str:
    """Get a human-readable description of the best hand in `cards`."""
    if len(cards) < HAND_SIZE:
        return "Incomplete hand"
    return evaluate_hand(cards).description
