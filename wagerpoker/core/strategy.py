"""
Rule-based decision policy for the house player.

The policy estimates hand strength on a 0-1 scale, adds a small random
"bluff" term drawn from the secure random source, and maps the resulting
effective strength to an action through a ladder of thresholds:

    nothing to call:  check < min raise < pot-sized raise
    facing a bet:     fold < call < small raise < big raise

All thresholds live in `StrategyConfig`. Whatever their values, a higher
effective strength never produces a less aggressive action.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional, Sequence, Tuple
import logging

from wagerpoker.core.card import Card, Rank, secure_random
from wagerpoker.core.hand import HandRank, evaluate_hand
from wagerpoker.core.rules import ActionType, GamePhase

if TYPE_CHECKING:
    from wagerpoker.core.game import HeadsUpGame
    from wagerpoker.core.player import Player


logger = logging.getLogger(__name__)


def _default_stage_confidence() -> Dict[GamePhase, float]:
    return {
        GamePhase.FLOP: 0.85,
        GamePhase.TURN: 0.95,
        GamePhase.RIVER: 1.0,
    }


@dataclass
class StrategyConfig:
    """Tunable constants for the house policy."""

    # Preflop heuristic
    base_strength: float = 0.2
    pair_floor: float = 0.5        # pair of twos
    pair_ceiling: float = 0.95     # pair of aces
    ace_bonus: float = 0.15
    king_bonus: float = 0.1
    queen_bonus: float = 0.05
    jack_bonus: float = 0.03
    suited_bonus: float = 0.1
    connected_bonus: float = 0.1
    near_connected_bonus: float = 0.05
    near_connected_gap: int = 3
    ace_king_bonus: float = 0.1
    premium_bonus: float = 0.1     # suited connectors with an ace or king
    unpaired_cap: float = 0.9

    # Postflop: each category owns a band of width `category_band`
    category_band: float = 0.1
    stage_confidence: Dict[GamePhase, float] = field(default_factory=_default_stage_confidence)

    # Random perturbation, drawn from (0, bluff_max]
    bluff_max: float = 0.2

    # Nothing to call
    open_raise_threshold: float = 0.7
    min_raise_threshold: float = 0.3
    open_raise_pot_fraction: float = 0.5

    # Facing a bet
    big_raise_threshold: float = 0.8
    small_raise_threshold: float = 0.6
    call_threshold: float = 0.4
    preflop_call_threshold: float = 0.3
    big_raise_pot_fraction: float = 0.75
    small_raise_pot_fraction: float = 0.3

    def __post_init__(self) -> None:
        if not self.min_raise_threshold < self.open_raise_threshold:
            raise ValueError("min_raise_threshold must be below open_raise_threshold")
        if not (self.preflop_call_threshold <= self.call_threshold
                < self.small_raise_threshold < self.big_raise_threshold):
            raise ValueError(
                "Thresholds must satisfy preflop_call <= call < small_raise < big_raise"
            )
        if self.small_raise_pot_fraction > self.big_raise_pot_fraction:
            raise ValueError("small_raise_pot_fraction cannot exceed big_raise_pot_fraction")
        if self.bluff_max <= 0:
            raise ValueError("bluff_max must be positive")
        if self.unpaired_cap >= self.pair_ceiling:
            raise ValueError("unpaired_cap must stay below pair_ceiling")


DEFAULT_CONFIG = StrategyConfig()


@dataclass(frozen=True)
class Decision:
    """An action chosen by the policy, with the strengths behind it."""
    action: ActionType
    amount: int = 0
    strength: float = 0.0
    effective_strength: float = 0.0


def preflop_strength(hole_cards: Sequence[Card], config: StrategyConfig = DEFAULT_CONFIG) -> float:
    """Heuristic strength of two hole cards, before any board is dealt."""
    if len(hole_cards) != 2:
        raise ValueError(f"Need 2 hole cards, got {len(hole_cards)}")

    first, second = hole_cards
    ranks = {first.rank, second.rank}

    if first.rank == second.rank:
        scale = (first.rank - Rank.TWO) / (Rank.ACE - Rank.TWO)
        return config.pair_floor + scale * (config.pair_ceiling - config.pair_floor)

    suited = first.suit == second.suit
    gap = abs(first.rank - second.rank)
    connected = gap == 1
    has_ace = Rank.ACE in ranks
    has_king = Rank.KING in ranks

    strength = config.base_strength
    if has_ace:
        strength += config.ace_bonus
    if has_king:
        strength += config.king_bonus
    if Rank.QUEEN in ranks:
        strength += config.queen_bonus
    if Rank.JACK in ranks:
        strength += config.jack_bonus
    if suited:
        strength += config.suited_bonus
    if connected:
        strength += config.connected_bonus
    elif gap <= config.near_connected_gap:
        strength += config.near_connected_bonus
    if has_ace and has_king:
        strength += config.ace_king_bonus
    if suited and connected and (has_ace or has_king):
        strength += config.premium_bonus

    return min(config.unpaired_cap, strength)


def postflop_strength(
    hole_cards: Sequence[Card],
    board: Sequence[Card],
    phase: GamePhase,
    config: StrategyConfig = DEFAULT_CONFIG,
) -> float:
    """
    Strength of the best made hand, discounted for cards still to come.

    Category c (1-9) maps to [c * band, (c + 1) * band], positioned inside the
    band by the deciding rank; a royal flush is 1.0.
    """
    evaluation = evaluate_hand(list(hole_cards) + list(board))

    if evaluation.rank == HandRank.ROYAL_FLUSH:
        strength = 1.0
    else:
        band = config.category_band
        strength = band * int(evaluation.rank) + band * evaluation.primary_rank / Rank.ACE

    return strength * config.stage_confidence.get(phase, 1.0)


def choose_action(
    effective_strength: float,
    to_call: int,
    pot: int,
    min_bet: int,
    stack: int,
    preflop: bool = False,
    config: StrategyConfig = DEFAULT_CONFIG,
) -> Tuple[ActionType, int]:
    """
    Map an effective strength to (action, raise increment).

    Raise amounts are increments over the current table bet; the engine
    turns a raise the stack cannot cover into an all-in.
    """
    s = effective_strength

    if stack == 0:
        return ActionType.CHECK, 0

    if to_call <= 0:
        if s > config.open_raise_threshold:
            return ActionType.RAISE, max(min_bet, int(pot * config.open_raise_pot_fraction * s))
        if s > config.min_raise_threshold:
            return ActionType.RAISE, min_bet
        return ActionType.CHECK, 0

    if s > config.big_raise_threshold:
        return ActionType.RAISE, max(min_bet, int(pot * config.big_raise_pot_fraction * s))
    if s > config.small_raise_threshold:
        return ActionType.RAISE, max(min_bet, int(pot * config.small_raise_pot_fraction * s))
    if s > config.call_threshold or (preflop and s > config.preflop_call_threshold):
        return ActionType.CALL, 0
    return ActionType.FOLD, 0


class DecisionPolicy:
    """
    The house's decision policy.

    `decide()` is synchronous and has no side effects on the game; any
    "thinking" delay belongs to the caller.
    """

    def __init__(
        self,
        config: Optional[StrategyConfig] = None,
        random_source: Callable[[], float] = secure_random,
    ):
        self.config = config or StrategyConfig()
        self.random_source = random_source

    def hand_strength(
        self,
        hole_cards: Sequence[Card],
        board: Sequence[Card],
        phase: GamePhase,
    ) -> float:
        if phase == GamePhase.PREFLOP or len(board) < 3:
            return preflop_strength(hole_cards, self.config)
        return postflop_strength(hole_cards, board, phase, self.config)

    def bluff(self) -> float:
        """Random perturbation in (0, bluff_max]."""
        return self.config.bluff_max * (1.0 - self.random_source())

    def decide(self, game: HeadsUpGame, player: Optional[Player] = None) -> Decision:
        """Choose an action for `player` (default: the player to act)."""
        player = player or game.current_player
        if player is None:
            raise ValueError("No player to decide for")

        if player.stack == 0:
            return Decision(ActionType.CHECK, 0)

        strength = self.hand_strength(player.hole_cards, game.community_cards, game.phase)
        effective = strength + self.bluff()
        action, amount = choose_action(
            effective,
            to_call=max(0, game.current_bet - player.current_bet),
            pot=game.pot,
            min_bet=game.min_bet,
            stack=player.stack,
            preflop=game.phase == GamePhase.PREFLOP,
            config=self.config,
        )
        logger.debug(
            "%s strength=%.3f effective=%.3f -> %s %d",
            player.player_id, strength, effective, action.value, amount,
        )
        return Decision(action, amount, strength, effective)
