"""
Engine error taxonomy.

All engine errors are raised synchronously, before any state is mutated,
so a rejected action can simply be re-submitted with corrected parameters.
Running short of chips is never an error: it becomes an implicit all-in.
"""


class PokerError(Exception):
    """Base class for all engine errors."""


class IllegalAction(PokerError):
    """The action is not legal in the current state (e.g. check facing a bet)."""


class NotYourTurn(IllegalAction):
    """A player tried to act while another player is to act."""


class HandNotInProgress(PokerError):
    """An action was submitted while no hand is running."""


class DeckExhausted(PokerError):
    """A card was drawn from an empty deck. Should never happen heads-up."""
