"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from wagerpoker.core.rules import DEFAULT_BIG_BLIND, DEFAULT_BUY_IN, DEFAULT_SMALL_BLIND


# ============= Request Schemas =============

class CreateGameRequest(BaseModel):
    """Request to create a new heads-up game."""
    initial_chips_a: int = Field(gt=0, default=DEFAULT_BUY_IN, description="Human starting stack")
    initial_chips_b: int = Field(gt=0, default=DEFAULT_BUY_IN, description="House starting stack")
    small_blind: int = Field(gt=0, default=DEFAULT_SMALL_BLIND)
    big_blind: int = Field(gt=0, default=DEFAULT_BIG_BLIND)


class ActionRequest(BaseModel):
    """Request to take a game action."""
    action_type: str = Field(..., description="Action type: FOLD, CHECK, CALL, RAISE, ALL_IN")
    amount: Optional[int] = Field(default=0, ge=0, description="Raise increment for RAISE")


class EvaluateRequest(BaseModel):
    """Cards to evaluate, e.g. ["As", "Kh", "Qd", "Jc", "Ts"]."""
    cards: List[str] = Field(..., min_length=5, max_length=7)


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation; rank/suit are null for a face-down card."""
    rank: Optional[int] = None
    suit: Optional[str] = None
    text: str
    color: Optional[str] = None
    hidden: bool = False


class PlayerSchema(BaseModel):
    """Player information as visible to the human."""
    id: str
    name: str
    is_ai: bool
    seat: int
    stack: int
    bet: int
    total_bet: int
    state: str
    folded: bool
    last_action: Optional[str] = None
    cards: List[CardSchema] = []
    hand: Optional[str] = None


class WinnerSchema(BaseModel):
    """Winner information."""
    player_id: str
    name: str
    amount: int
    hand_rank: Optional[str] = None
    description: str
    cards: List[str] = []


class LegalActionSchema(BaseModel):
    """Available action."""
    type: str
    amount: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None


class GameStateSchema(BaseModel):
    """Observable game state."""
    hand_number: int
    stage: str
    round_over: bool
    pot: int
    current_bet: int
    min_bet: int
    small_blind: int
    big_blind: int
    dealer_position: int
    current_player: Optional[str] = None
    board: List[CardSchema]
    players: List[PlayerSchema]
    winners: List[WinnerSchema]
    log: List[str]


class CreateGameResponse(BaseModel):
    game_id: str
    state: GameStateSchema


class ActionResultSchema(BaseModel):
    """Result of the human's action and the house's replies."""
    message: str
    action_type: str
    amount: int = 0
    house_actions: List[str] = []
    state: GameStateSchema


class LegalActionsResponse(BaseModel):
    actions: List[LegalActionSchema]
    message: Optional[str] = None


class HandEvaluationSchema(BaseModel):
    """Result of evaluating a set of cards."""
    rank: str
    rank_value: int
    name: str
    description: str
    value: int
    cards: List[CardSchema]


class ErrorSchema(BaseModel):
    """Error response."""
    detail: str

