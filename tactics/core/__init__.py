"""
Core module - podstawowe komponenty silnika.

Zawiera:
- GridPosition, Team: Pozycje i podział planszy na połowy drużyn
- BattleGrid: Niemutowalna siatka z magazynem jednostek
- GameRNG: Deterministyczny generator losowości
- ConfigLoader: Wczytywanie konfiguracji z defaults
"""

from .position import GridPosition, Team, home_team_for_column, home_columns
from .grid import (
    BattleGrid,
    GridCell,
    create_empty_grid,
    place_unit,
    swap_units,
    update_unit,
    get_unit,
    get_unit_at,
    get_team_units,
    get_all_units,
    get_living_units,
    front_column,
)
from .rng import GameRNG
from .config_loader import ConfigLoader

__all__ = [
    "GridPosition", "Team", "home_team_for_column", "home_columns",
    "BattleGrid", "GridCell", "create_empty_grid", "place_unit", "swap_units",
    "update_unit", "get_unit", "get_unit_at", "get_team_units", "get_all_units",
    "get_living_units", "front_column", "GameRNG", "ConfigLoader",
]
