"""
Pytest configuration and shared fixtures for WagerPoker tests.
"""

import pytest
from wagerpoker.core.card import Card, Deck, Rank, Suit, parse_cards
from wagerpoker.core.player import Player
from wagerpoker.core.game import HeadsUpGame, new_game
from wagerpoker.core.strategy import DecisionPolicy


# Always picks the last index, so Fisher-Yates leaves the deck in order
def no_shuffle() -> float:
    return 0.999999


def no_bluff() -> float:
    return 0.999999


def rig_hand(game: HeadsUpGame, seat0: str, seat1: str, board: str) -> None:
    """
    Replace the hole cards of a freshly started hand and stack the deck so
    that `board` comes out as flop, turn and river.
    """
    hole0, hole1, board_cards = parse_cards(seat0), parse_cards(seat1), parse_cards(board)
    used = set(hole0 + hole1 + board_cards)
    spare = [c for c in Deck(shuffle=False).deal(52) if c not in used]

    game.players[0].hole_cards = hole0
    game.players[1].hole_cards = hole1
    game.deck._cards = (
        [spare[0]] + board_cards[:3]
        + [spare[1]] + board_cards[3:4]
        + [spare[2]] + board_cards[4:5]
    )


@pytest.fixture
def rig():
    """The `rig_hand` helper."""
    return rig_hand


@pytest.fixture
def deck():
    """Create a fresh shuffled deck."""
    return Deck(shuffle=True)


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def sample_player():
    """Create a sample player with 1000 chips."""
    return Player(player_id="test_player", stack=1000, seat=0)


@pytest.fixture
def game():
    """Human vs house, 1000 each, blinds 5/10."""
    return new_game(1000, 1000, small_blind=5, big_blind=10)


@pytest.fixture
def quiet_house_game():
    """A game whose house never bluffs and whose deck is never shuffled."""
    return new_game(
        1000, 1000,
        policy=DecisionPolicy(random_source=no_bluff),
        random_source=no_shuffle,
    )


@pytest.fixture
def two_human_game():
    """Both seats driven by the test, no house policy involved."""
    return HeadsUpGame(
        stacks=(1000, 1000),
        small_blind=5,
        big_blind=10,
        player_ids=("alice", "bob"),
        names=("Alice", "Bob"),
        ai_seats=(),
    )


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return [
        Card(Rank.NINE, Suit.HEARTS),
        Card(Rank.EIGHT, Suit.HEARTS),
        Card(Rank.SEVEN, Suit.HEARTS),
        Card(Rank.SIX, Suit.HEARTS),
        Card(Rank.FIVE, Suit.HEARTS),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
