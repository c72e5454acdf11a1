"""
Game router - sesja bitwy (nowa gra, stan, akcje).
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel
from typing import List, Dict, Any, Optional

from tactics.battle.state import ActionCommand
from tactics.core.position import GridPosition
from tactics.service import GameServiceError, GameSession
from tactics.service.errors import NEW_GAME_FAILED
from tactics.units.party import Party, PartyMember


router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════

class MemberPlacement(BaseModel):
    """Członek drużyny z opcjonalną pozycją."""
    template_id: str
    position: Optional[List[int]] = None  # [row, col]


class PartyRequest(BaseModel):
    """Skład drużyny."""
    name: Optional[str] = None
    members: List[MemberPlacement]


class NewGameRequest(BaseModel):
    """Request nowej gry (brak drużyny = domyślna)."""
    player: Optional[PartyRequest] = None
    enemy: Optional[PartyRequest] = None


class ActionRequest(BaseModel):
    """Komenda akcji."""
    skill: str
    targets: List[str] = []


# ═══════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════

def _session(request: Request) -> GameSession:
    return request.app.state.session


def _to_party(data: Optional[PartyRequest], default_name: str) -> Optional[Party]:
    if data is None:
        return None
    try:
        members = tuple(
            PartyMember(
                template_id=m.template_id,
                position=GridPosition.from_sequence(m.position) if m.position is not None else None,
            )
            for m in data.members
        )
    except ValueError as exc:
        raise GameServiceError(f"Failed to create new game: {exc}", NEW_GAME_FAILED) from exc
    return Party(name=data.name or default_name, members=members)


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.post("/game/new")
async def new_game(request: Request, body: Optional[NewGameRequest] = None) -> Dict[str, Any]:
    """
    Tworzy nową bitwę.

    Args:
        body.player / body.enemy: Opcjonalne drużyny

    Returns:
        Dict: Snapshot stanu (BattleState.to_dict)
    """
    body = body or NewGameRequest()
    session = _session(request)
    state = session.new_game(
        _to_party(body.player, "Heroes"),
        _to_party(body.enemy, "Enemies"),
    )
    return state.to_dict()


@router.get("/game/state")
async def get_state(request: Request) -> Dict[str, Any]:
    """Bieżący stan bitwy."""
    return _session(request).get_state().to_dict()


@router.post("/game/action")
async def perform_action(request: Request, body: ActionRequest) -> Dict[str, Any]:
    """
    Wykonuje komendę aktywnej jednostki gracza (i tury AI po niej).

    Errors:
        400 INVALID_SKILL / INVALID_TARGETS / ACTION_FAILED
    """
    command = ActionCommand.create(body.skill, body.targets)
    return _session(request).perform_action(command).to_dict()
