"""
Catalog router - szablony postaci, umiejętności i konfiguracja siatki.
"""

from fastapi import APIRouter, Request
from typing import List, Dict, Any, Optional

from tactics.core.position import Team, home_columns
from tactics.units.party import load_templates


router = APIRouter()


@router.get("/templates")
async def get_templates(request: Request, kind: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Zwraca listę szablonów postaci.

    Args:
        kind: Opcjonalny filtr ("class" / "monster")

    Returns:
        Lista szablonów (statystyki + unikalne umiejętności)
    """
    loader = request.app.state.session.loader
    templates = load_templates(loader)
    return [templates[tid].to_dict() for tid in loader.get_character_ids(kind)]


@router.get("/skills")
async def get_skills(request: Request) -> List[Dict[str, Any]]:
    """Katalog umiejętności."""
    return [skill.to_dict() for skill in request.app.state.session.catalog]


@router.get("/grid-config")
async def get_grid_config(request: Request) -> Dict[str, Any]:
    """Wymiary siatki, kolumny drużyn i opcje bitwy."""
    config = request.app.state.session.config
    return {
        "rows": config.grid_rows,
        "cols": config.grid_cols,
        "player_columns": home_columns(Team.PLAYER, config.grid_cols),
        "enemy_columns": home_columns(Team.ENEMY, config.grid_cols),
        "turn_order": config.turn_order.value,
        "enforce_melee_range": config.enforce_melee_range,
    }
