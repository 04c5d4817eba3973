"""
HTTP API Routes for WagerPoker.

A thin transport over the engine: every route looks up one session, takes
its lock, calls the engine and returns the snapshot. Authentication and
balance persistence are the caller's concern.
"""

from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request

from wagerpoker.core.card import Card
from wagerpoker.core.errors import PokerError
from wagerpoker.core.hand import evaluate_hand
from wagerpoker.server.schemas import (
    ActionRequest, ActionResultSchema, CreateGameRequest, CreateGameResponse,
    ErrorSchema, EvaluateRequest, GameStateSchema, HandEvaluationSchema,
    LegalActionsResponse,
)
from wagerpoker.server.sessions import GameRegistry, GameSession

router = APIRouter()

ENGINE_ERRORS = {404: {"model": ErrorSchema}, 409: {"model": ErrorSchema}}


def get_registry(request: Request) -> GameRegistry:
    return request.app.state.registry


def get_session(request: Request, game_id: str) -> GameSession:
    """Look up a session or fail with 404."""
    session = get_registry(request).get(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Game not found: {game_id}")
    return session


def _human_id(session: GameSession) -> str:
    return next(p.player_id for p in session.game.players if not p.is_ai)


@router.post("/games", response_model=CreateGameResponse)
async def create_game(req: CreateGameRequest, request: Request) -> Dict[str, Any]:
    """Create a new game between the human and the house."""
    try:
        session = get_registry(request).create(
            initial_chips_a=req.initial_chips_a,
            initial_chips_b=req.initial_chips_b,
            small_blind=req.small_blind,
            big_blind=req.big_blind,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"game_id": session.game_id, "state": session.game.get_state()}


@router.get("/games/{game_id}", response_model=GameStateSchema)
async def get_game_state(game_id: str, request: Request) -> Dict[str, Any]:
    """Current snapshot, with the house's cards face-down until revealed."""
    session = get_session(request, game_id)
    return session.game.get_state()


@router.post("/games/{game_id}/hands", response_model=GameStateSchema, responses=ENGINE_ERRORS)
async def start_hand(game_id: str, request: Request) -> Dict[str, Any]:
    """
    Deal a new hand.

    If the house acts first it plays straight away, so the returned state
    always waits on the human (or the hand is already over).
    """
    session = get_session(request, game_id)
    async with session.lock:
        game = session.game
        try:
            started = game.start_hand()
        except PokerError as e:
            raise HTTPException(status_code=409, detail=str(e))
        if not started:
            raise HTTPException(status_code=409, detail="Game over: a player has no chips")
        game.play_ai_turns()
        return game.get_state()


@router.post(
    "/games/{game_id}/actions", response_model=ActionResultSchema, responses=ENGINE_ERRORS,
)
async def take_action(game_id: str, req: ActionRequest, request: Request) -> Dict[str, Any]:
    """Apply the human's action, then let the house reply."""
    session = get_session(request, game_id)
    async with session.lock:
        game = session.game
        try:
            result = game.take_action(req.action_type, req.amount or 0, player_id=_human_id(session))
            house_results = game.play_ai_turns()
        except PokerError as e:
            raise HTTPException(status_code=409, detail=str(e))
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid action type: {req.action_type}")

        return {
            "message": result.message,
            "action_type": result.action_type.value,
            "amount": result.amount,
            "house_actions": [r.message for r in house_results],
            "state": game.get_state(),
        }


@router.get("/games/{game_id}/legal_actions", response_model=LegalActionsResponse)
async def get_legal_actions(game_id: str, request: Request) -> Dict[str, Any]:
    """Legal actions for the human, empty when it is not their turn."""
    session = get_session(request, game_id)
    game = session.game

    if not game.is_hand_running():
        return {"actions": [], "message": "No hand in progress"}

    human = game._get_player_by_id(_human_id(session))
    return {"actions": game.get_legal_actions(human)}


@router.get("/games/{game_id}/best_hand")
async def get_best_hand(game_id: str, request: Request) -> Dict[str, Any]:
    """The human's current best hand, once the flop is out."""
    session = get_session(request, game_id)
    evaluation = session.game.best_hand(_human_id(session))
    return {"hand": evaluation.to_dict() if evaluation else None}


@router.delete("/games/{game_id}")
async def delete_game(game_id: str, request: Request) -> Dict[str, Any]:
    """Discard a game session."""
    if not get_registry(request).remove(game_id):
        raise HTTPException(status_code=404, detail=f"Game not found: {game_id}")
    return {"success": True, "message": "Game removed"}


@router.post("/evaluate", response_model=HandEvaluationSchema)
async def evaluate(req: EvaluateRequest) -> Dict[str, Any]:
    """Evaluate 5-7 cards given in short notation."""
    try:
        cards = [Card.from_string(s) for s in req.cards]
        return evaluate_hand(cards).to_dict()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
