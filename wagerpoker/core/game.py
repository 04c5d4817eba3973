"""
Heads-up Texas Hold'em Game Engine - State Machine Implementation.

This module implements the core game logic for a human playing the house.
It handles:
- Game state management (stages: preflop, flop, turn, river, showdown)
- Player actions (fold, check, call, raise, all-in)
- Blind posting and dealer button rotation
- Showdown evaluation and pot settlement (split pots, odd chips,
  uncalled bets)

One `HeadsUpGame` owns its whole state and is mutated in place by each call.
It is not thread-safe: give every concurrent game its own instance and never
call into one instance concurrently.
"""

from __future__ import annotations
from typing import List, Dict, Optional, Sequence, Any, Callable, Union
from dataclasses import dataclass
import logging

from wagerpoker.core.card import Card, Deck, secure_random
from wagerpoker.core.errors import HandNotInProgress, IllegalAction, NotYourTurn
from wagerpoker.core.hand import HandEvaluation, evaluate_hand
from wagerpoker.core.player import Player
from wagerpoker.core.rules import (
    GamePhase, ActionType, BlindStructure, NEXT_PHASE,
    get_blind_positions, get_first_to_act_preflop, get_first_to_act_postflop,
    raise_target,
    DEFAULT_BIG_BLIND, DEFAULT_SMALL_BLIND, DEFAULT_BUY_IN, NUM_PLAYERS,
    HOLE_CARDS, FLOP_CARDS, TURN_CARDS, RIVER_CARDS, TOTAL_COMMUNITY_CARDS,
)
from wagerpoker.core.strategy import Decision, DecisionPolicy


logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Result of a player action."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0


class HeadsUpGame:
    """
    Heads-up Texas Hold'em engine implementing a state machine.

    Seat 0 is the human, seat 1 the house (AI) by default.

    Usage:
        game = new_game(1000, 1000)
        game.start_hand()

        while game.is_hand_running():
            if game.current_player.is_ai:
                game.play_ai_turn()
            else:
                game.take_action(ActionType.CALL)

        winners = game.get_winners()
    """

    def __init__(
        self,
        stacks: Sequence[int] = (DEFAULT_BUY_IN, DEFAULT_BUY_IN),
        small_blind: int = DEFAULT_SMALL_BLIND,
        big_blind: int = DEFAULT_BIG_BLIND,
        player_ids: Sequence[str] = ("player", "house"),
        names: Sequence[str] = ("You", "House"),
        ai_seats: Sequence[int] = (1,),
        policy: Optional[DecisionPolicy] = None,
        random_source: Callable[[], float] = secure_random,
    ):
        """
        Initialize a new game.

        Args:
            stacks: Starting chips for each of the two seats
            small_blind: Small blind amount
            big_blind: Big blind amount (also the minimum bet)
            player_ids: Unique IDs for the two seats
            names: Display names for the two seats
            ai_seats: Seats driven by the house policy
            policy: Decision policy for AI seats
            random_source: Uniform [0, 1) source used for shuffling
        """
        if len(stacks) != NUM_PLAYERS or len(player_ids) != NUM_PLAYERS:
            raise ValueError("A heads-up game needs exactly 2 players")
        if len(set(player_ids)) != NUM_PLAYERS:
            raise ValueError("Player IDs must be unique")

        self.blinds = BlindStructure(small_blind=small_blind, big_blind=big_blind)
        self.players: List[Player] = [
            Player(player_id=pid, stack=stack, name=name, is_ai=seat in ai_seats, seat=seat)
            for seat, (pid, stack, name) in enumerate(zip(player_ids, stacks, names))
        ]
        self.policy = policy or DecisionPolicy()
        self.random_source = random_source

        # Game state
        self.deck = Deck(shuffle=False, random_source=random_source)
        self.community_cards: List[Card] = []
        self.phase = GamePhase.PREFLOP
        self.hand_number = 0
        self.round_over = True

        # Position tracking; the first hand puts the button on seat 0
        self.dealer_position = NUM_PLAYERS - 1
        self.small_blind_position = 0
        self.big_blind_position = 0
        self.current_player_index = 0

        # Betting state
        self.current_bet = 0
        self.min_bet = big_blind
        self.pot = 0

        self.winners: List[Dict[str, Any]] = []
        self.log: List[str] = []

    @property
    def small_blind(self) -> int:
        return self.blinds.small_blind

    @property
    def big_blind(self) -> int:
        return self.blinds.big_blind

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def num_active_players(self) -> int:
        """Number of players still in the hand."""
        return sum(1 for p in self.players if p.is_in_hand)

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if not self.is_hand_running():
            return None
        return self.players[self.current_player_index]

    def is_game_running(self) -> bool:
        """Both players still have chips, so another hand can be dealt."""
        return all(p.stack > 0 for p in self.players)

    def is_hand_running(self) -> bool:
        return not self.round_over

    # ------------------------------------------------------------------
    # Hand setup
    # ------------------------------------------------------------------

    def start_hand(self) -> bool:
        """
        Start a new hand.

        Returns:
            True if the hand started, False if a player has no chips left

        Raises:
            IllegalAction: If a hand is already in progress
        """
        if self.is_hand_running():
            raise IllegalAction("A hand is already in progress")

        if not self.is_game_running():
            logger.warning("Cannot start hand: a player has no chips")
            return False

        self.hand_number += 1

        self.deck = Deck(shuffle=True, random_source=self.random_source)
        self.community_cards = []
        self.phase = GamePhase.PREFLOP
        self.round_over = False
        self.pot = 0
        self.current_bet = 0
        self.min_bet = self.big_blind
        self.winners = []
        self.log = [f"Hand #{self.hand_number} started"]

        for player in self.players:
            player.reset_for_new_hand()

        self.dealer_position = (self.dealer_position + 1) % self.num_players
        self.small_blind_position, self.big_blind_position = get_blind_positions(
            self.num_players, self.dealer_position
        )
        logger.info(
            "Starting hand #%d, dealer=%s",
            self.hand_number, self.players[self.dealer_position].player_id,
        )

        sb_amount = self._post_blind(self.small_blind_position, self.small_blind, "small blind")
        bb_amount = self._post_blind(self.big_blind_position, self.big_blind, "big blind")
        self.current_bet = max(sb_amount, bb_amount)

        self._deal_hole_cards()

        self._begin_betting_round(
            get_first_to_act_preflop(self.num_players, self.big_blind_position)
        )
        return True

    def _post_blind(self, position: int, amount: int, label: str) -> int:
        """Post a blind, capped at the player's stack."""
        player = self.players[position]
        posted = player.bet(amount)
        self.pot += posted
        player.last_action = f"{label.upper()} {posted}"

        message = f"{player.name} posts {label} {posted}"
        if not player.stack:
            message += " and is all-in"
        self._record(message)
        return posted

    def _deal_hole_cards(self) -> None:
        """Deal 2 hole cards to each player, starting left of the button."""
        for i in range(self.num_players):
            player = self.players[(self.dealer_position + 1 + i) % self.num_players]
            player.deal_cards(self.deck.deal(HOLE_CARDS), hidden=player.is_ai)
        self._record("Hole cards dealt")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def take_action(
        self,
        action_type: Union[ActionType, str],
        amount: int = 0,
        player_id: Optional[str] = None,
    ) -> ActionResult:
        """
        Process an action by the player to act.

        Args:
            action_type: FOLD, CHECK, CALL, RAISE or ALL_IN
            amount: For RAISE, the increment over the current bet
            player_id: If given, must be the player to act

        Raises:
            HandNotInProgress: No hand is running
            NotYourTurn: `player_id` is not the player to act
            IllegalAction: The action is not legal now

        State is left untouched whenever an error is raised.
        """
        if not self.is_hand_running():
            raise HandNotInProgress("No hand in progress")

        if isinstance(action_type, str):
            action_type = ActionType(action_type.upper())
        player = self.players[self.current_player_index]

        if player_id is not None and player_id != player.player_id:
            other = self._get_player_by_id(player_id)
            if other is None:
                raise IllegalAction(f"Unknown player: {player_id}")
            if other.folded:
                raise IllegalAction(f"{other.name} has folded")
            raise NotYourTurn(f"It is {player.name}'s turn")

        result = self._execute_action(player, action_type, amount)
        self._record(result.message)

        self._advance_to_next_player()
        return result

    def _execute_action(self, player: Player, action_type: ActionType, amount: int) -> ActionResult:
        """Validate and apply one action. Raises before mutating anything."""
        chips_to_call = self.current_bet - player.current_bet

        if action_type == ActionType.FOLD:
            player.fold()
            return ActionResult(True, f"{player.name} folds", ActionType.FOLD, 0)

        if action_type == ActionType.CHECK:
            if chips_to_call > 0:
                raise IllegalAction(f"Cannot check, must call {chips_to_call}")
            player.check()
            return ActionResult(True, f"{player.name} checks", ActionType.CHECK, 0)

        if action_type == ActionType.CALL:
            if chips_to_call <= 0:
                raise IllegalAction("Nothing to call, use CHECK")
            actual = player.call(chips_to_call)
            self.pot += actual
            message = f"{player.name} calls {actual}"
            if not player.stack:
                message += " and is all-in"
            return ActionResult(True, message, ActionType.CALL, actual)

        if action_type == ActionType.RAISE:
            if amount < 0:
                raise IllegalAction("Raise amount cannot be negative")
            target = raise_target(self.current_bet, amount, self.min_bet)
            actual = player.raise_to(target)
            self.pot += actual
            self._update_current_bet(player)
            if player.stack:
                message = f"{player.name} raises to {player.current_bet}"
            else:
                message = f"{player.name} raises all-in to {player.current_bet}"
            return ActionResult(True, message, ActionType.RAISE, actual)

        if action_type == ActionType.ALL_IN:
            if player.stack == 0:
                raise IllegalAction("Already all-in")
            actual = player.go_all_in()
            self.pot += actual
            self._update_current_bet(player)
            return ActionResult(
                True, f"{player.name} goes all-in with {actual}", ActionType.ALL_IN, actual
            )

        raise IllegalAction(f"Unknown action: {action_type}")

    def _update_current_bet(self, player: Player) -> None:
        """Raise the table bet if `player` bet more; that re-opens the action."""
        if player.current_bet > self.current_bet:
            self.current_bet = player.current_bet
            for other in self.players:
                if other is not player and other.is_active:
                    other.has_acted = False

    # ------------------------------------------------------------------
    # Turn order and stage transitions
    # ------------------------------------------------------------------

    def _advance_to_next_player(self) -> None:
        """Move to the next player, closing the round or the hand when due."""
        remaining = [p for p in self.players if p.is_in_hand]
        if len(remaining) == 1:
            self._end_hand_early(remaining[0])
            return

        if self._is_betting_round_complete():
            self._end_betting_round()
            return

        for offset in range(1, self.num_players + 1):
            index = (self.current_player_index + offset) % self.num_players
            if self.players[index].can_act:
                self.current_player_index = index
                return

        self._end_betting_round()

    def _is_betting_round_complete(self) -> bool:
        """
        Every player who can still bet has matched the current bet, and has
        either acted since the last raise or is the only one left able to act.
        """
        actors = [p for p in self.players if p.can_act]
        if any(p.current_bet < self.current_bet for p in actors):
            return False
        if len(actors) <= 1:
            return True
        return all(p.has_acted for p in actors)

    def _begin_betting_round(self, first_index: int) -> None:
        """Hand the action to the first player able to act from `first_index`."""
        if self._is_betting_round_complete():
            self._end_betting_round()
            return

        for offset in range(self.num_players):
            index = (first_index + offset) % self.num_players
            if self.players[index].can_act:
                self.current_player_index = index
                return

        self._end_betting_round()

    def _end_betting_round(self) -> None:
        """Advance to the next stage, or straight to showdown."""
        if self.phase == GamePhase.RIVER:
            self._go_to_showdown()
            return

        if sum(1 for p in self.players if p.can_act) < 2:
            # Nobody can bet any more: run out the board
            self._deal_remaining_cards()
            self._go_to_showdown()
            return

        self._deal_next_street()

        for player in self.players:
            player.reset_for_new_round()
        self.current_bet = 0

        self._begin_betting_round(
            get_first_to_act_postflop(self.num_players, self.dealer_position)
        )

    def _deal_next_street(self) -> None:
        """Burn one card, then deal the flop, turn or river."""
        next_phase = NEXT_PHASE[self.phase]
        count = FLOP_CARDS if next_phase == GamePhase.FLOP else (
            TURN_CARDS if next_phase == GamePhase.TURN else RIVER_CARDS
        )
        self.deck.burn()
        dealt = self.deck.deal(count)
        self.community_cards.extend(dealt)
        self.phase = next_phase
        self._record(
            f"{next_phase.value.capitalize()} dealt: {' '.join(str(c) for c in dealt)}"
        )

    def _deal_remaining_cards(self) -> None:
        """Deal remaining community cards when no more betting is possible."""
        while len(self.community_cards) < TOTAL_COMMUNITY_CARDS:
            self._deal_next_street()

    # ------------------------------------------------------------------
    # Hand end
    # ------------------------------------------------------------------

    def _go_to_showdown(self) -> None:
        """Reveal, evaluate and award the pot to the best hand(s)."""
        self.phase = GamePhase.SHOWDOWN
        self._return_uncalled_bet()

        contenders = [p for p in self.players if p.is_in_hand]
        for player in self.players:
            player.reveal()

        for player in contenders:
            player.hand_evaluation = evaluate_hand(player.hole_cards + self.community_cards)
            self._record(
                f"{player.name} shows {' '.join(str(c) for c in player.hole_cards)}"
                f" ({player.hand_evaluation.description})"
            )

        best_value = max(p.hand_evaluation.value for p in contenders)
        # Seat order, so the odd chip goes to the lowest seat among the winners
        winners = [p for p in contenders if p.hand_evaluation.value == best_value]
        self._award_pot(winners)

    def _end_hand_early(self, winner: Player) -> None:
        """End the hand when everyone else has folded."""
        self._return_uncalled_bet()

        for player in self.players:
            player.reveal()
        cards = winner.hole_cards + self.community_cards
        if len(cards) >= 5:
            winner.hand_evaluation = evaluate_hand(cards)

        self.phase = GamePhase.SHOWDOWN
        self._award_pot([winner], by_fold=True)

    def _return_uncalled_bet(self) -> None:
        """Give back whatever part of the largest contribution was never matched."""
        top, other = sorted(self.players, key=lambda p: p.total_bet, reverse=True)
        excess = top.total_bet - other.total_bet
        if excess > 0:
            top.refund(excess)
            self.pot -= excess
            self._record(f"Uncalled {excess} returned to {top.name}")

    def _award_pot(self, winners: List[Player], by_fold: bool = False) -> None:
        """
        Split the pot evenly between `winners`.

        The odd-chip remainder goes to the first winner in seat order.
        """
        share, remainder = divmod(self.pot, len(winners))

        self.winners = []
        for i, player in enumerate(winners):
            won = share + (remainder if i == 0 else 0)
            player.stack += won
            evaluation = player.hand_evaluation
            self.winners.append(_winner_record(player, won, evaluation, by_fold))

        if len(winners) == 1:
            how = "" if by_fold else f" with {winners[0].hand_evaluation.description}"
            self._record(f"{winners[0].name} wins {self.pot}{how}")
        else:
            names = ", ".join(p.name for p in winners)
            self._record(f"Pot of {self.pot} split between {names}")

        logger.info(
            "Hand #%d over: %s",
            self.hand_number,
            ", ".join(f"{w['player_id']} +{w['amount']}" for w in self.winners),
        )

        self.pot = 0
        self.current_bet = 0
        self.round_over = True

    # ------------------------------------------------------------------
    # House player
    # ------------------------------------------------------------------

    def ai_decide(self) -> Decision:
        """
        Ask the policy what the house would do now, without applying it.

        Raises:
            HandNotInProgress: No hand is running
            NotYourTurn: The player to act is not AI-controlled
        """
        if not self.is_hand_running():
            raise HandNotInProgress("No hand in progress")
        player = self.players[self.current_player_index]
        if not player.is_ai:
            raise NotYourTurn(f"It is {player.name}'s turn, not the house's")
        return self.policy.decide(self, player)

    def play_ai_turn(self) -> ActionResult:
        """Let the house policy act for the current (AI) player."""
        decision = self.ai_decide()
        player = self.players[self.current_player_index]
        return self.take_action(decision.action, decision.amount, player_id=player.player_id)

    def play_ai_turns(self) -> List[ActionResult]:
        """Play house turns until a human must act or the hand is over."""
        results = []
        while self.is_hand_running() and self.players[self.current_player_index].is_ai:
            results.append(self.play_ai_turn())
        return results

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def best_hand(self, player_id: str) -> Optional[HandEvaluation]:
        """A player's current best hand, once at least 5 cards are available."""
        player = self._get_player_by_id(player_id)
        if player is None:
            raise ValueError(f"Unknown player: {player_id}")
        cards = player.hole_cards + self.community_cards
        if len(cards) < 5:
            return None
        return evaluate_hand(cards)

    def get_legal_actions(self, player: Optional[Player] = None) -> List[Dict[str, Any]]:
        """
        Legal actions for the specified player (or current player).

        RAISE min/max are increments over the current bet.
        """
        if player is None:
            player = self.current_player

        if player is None or not player.can_act or player is not self.current_player:
            return []

        chips_to_call = max(0, self.current_bet - player.current_bet)
        actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD.value}]

        if chips_to_call == 0:
            actions.append({"type": ActionType.CHECK.value})
        else:
            actions.append({
                "type": ActionType.CALL.value,
                "amount": min(chips_to_call, player.stack),
            })

        if player.stack > chips_to_call:
            max_raise = player.stack - chips_to_call
            actions.append({
                "type": ActionType.RAISE.value,
                "min": min(self.min_bet, max_raise),
                "max": max_raise,
            })

        actions.append({
            "type": ActionType.ALL_IN.value,
            "amount": player.stack,
        })
        return actions

    def get_state(
        self,
        reveal: bool = False,
        for_player_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Snapshot of the game for display or transport.

        Args:
            reveal: Show hidden hole cards face-up
            for_player_id: Add a "private_info" block with that player's own
                cards and options
        """
        current = self.current_player
        state = {
            "hand_number": self.hand_number,
            "stage": self.phase.value,
            "round_over": self.round_over,
            "pot": self.pot,
            "current_bet": self.current_bet,
            "min_bet": self.min_bet,
            "small_blind": self.small_blind,
            "big_blind": self.big_blind,
            "dealer_position": self.dealer_position,
            "current_player": current.player_id if current else None,
            "board": [c.to_dict() for c in self.community_cards],
            "players": [p.to_dict(reveal=reveal) for p in self.players],
            "winners": list(self.winners),
            "log": list(self.log),
        }

        if for_player_id is not None:
            player = self._get_player_by_id(for_player_id)
            if player is None:
                raise ValueError(f"Unknown player: {for_player_id}")
            state["private_info"] = {
                "player_id": player.player_id,
                "hand": [c.to_dict() for c in player.hole_cards],
                "stack": player.stack,
                "current_bet": player.current_bet,
                "chips_to_call": max(0, self.current_bet - player.current_bet),
                "available_moves": self.get_legal_actions(player),
            }

        return state

    def get_winners(self) -> List[Dict[str, Any]]:
        """Winner information after the hand is complete."""
        if not self.round_over:
            return []
        return list(self.winners)

    def _get_player_by_id(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def _record(self, message: str) -> None:
        """Append to the human-readable hand log."""
        self.log.append(message)
        logger.debug(message)


def _winner_record(
    player: Player,
    amount: int,
    evaluation: Optional[HandEvaluation],
    by_fold: bool,
) -> Dict[str, Any]:
    if by_fold:
        description = "Opponent folded"
    else:
        description = evaluation.description
    return {
        "player_id": player.player_id,
        "name": player.name,
        "amount": amount,
        "hand_rank": evaluation.rank.name if evaluation else None,
        "description": description,
        "cards": [str(c) for c in evaluation.best_five] if evaluation else [],
    }


def new_game(
    initial_chips_a: int = DEFAULT_BUY_IN,
    initial_chips_b: int = DEFAULT_BUY_IN,
    small_blind: int = DEFAULT_SMALL_BLIND,
    big_blind: int = DEFAULT_BIG_BLIND,
    **kwargs: Any,
) -> HeadsUpGame:
    """Create a game between a human (seat 0) and the house (seat 1)."""
    return HeadsUpGame(
        stacks=(initial_chips_a, initial_chips_b),
        small_blind=small_blind,
        big_blind=big_blind,
        **kwargs,
    )
