"""
Testy dla siatki i magazynu jednostek.

Testuje:
- Podział kolumn na połowy drużyn
- place_unit / swap_units / update_unit (kopie, nie mutacje)
- Zapytania o jednostki
- Kolumnę frontową
"""

import pytest

from tactics.core.grid import (
    create_empty_grid, place_unit, swap_units, update_unit,
    get_unit, get_unit_at, get_team_units, get_all_units, front_column,
)
from tactics.core.position import GridPosition, Team, home_team_for_column, home_columns
from tactics.units.unit import Unit


def create_unit(unit_id: str, team: Team, row: int = 0, col: int = 0, health: int = 50) -> Unit:
    """Helper do tworzenia jednostek testowych."""
    return Unit(
        id=unit_id,
        name=unit_id.title(),
        health=health,
        max_health=50,
        power=10,
        magic=0,
        defense=2,
        initiative=5,
        position=GridPosition(row, col),
        team=team,
    )


@pytest.fixture
def grid():
    return create_empty_grid()


# ═══════════════════════════════════════════════════════════════════════════
# TEST: TWORZENIE
# ═══════════════════════════════════════════════════════════════════════════

def test_empty_grid_is_4x4(grid):
    assert grid.rows == 4
    assert grid.cols == 4
    assert len(grid.cells) == 4
    assert all(len(row) == 4 for row in grid.cells)
    assert grid.units == {}


def test_cells_have_home_team_by_column(grid):
    """Lewa połowa = gracz, prawa = wróg."""
    for row in grid.cells:
        assert [c.team for c in row] == [Team.PLAYER, Team.PLAYER, Team.ENEMY, Team.ENEMY]


def test_odd_column_count_rejected():
    with pytest.raises(ValueError):
        create_empty_grid(4, 3)


def test_home_team_for_column():
    assert home_team_for_column(1, 4) is Team.PLAYER
    assert home_team_for_column(2, 4) is Team.ENEMY


def test_home_columns_back_to_front():
    assert home_columns(Team.PLAYER, 4) == [0, 1]
    assert home_columns(Team.ENEMY, 4) == [3, 2]


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PLACE / SWAP / UPDATE
# ═══════════════════════════════════════════════════════════════════════════

def test_place_unit_sets_cell_and_store(grid):
    unit = create_unit("a", Team.PLAYER)
    new_grid = place_unit(grid, unit, GridPosition(1, 1))

    assert get_unit_at(new_grid, GridPosition(1, 1)).id == "a"
    assert get_unit(new_grid, "a").position == GridPosition(1, 1)


def test_place_unit_does_not_mutate_input(grid):
    unit = create_unit("a", Team.PLAYER)
    place_unit(grid, unit, GridPosition(0, 0))

    assert grid.units == {}
    assert grid.cell(GridPosition(0, 0)).unit_id is None


def test_place_unit_moves_and_clears_old_cell(grid):
    unit = create_unit("a", Team.PLAYER)
    grid = place_unit(grid, unit, GridPosition(0, 0))
    grid = place_unit(grid, get_unit(grid, "a"), GridPosition(2, 1))

    assert grid.cell(GridPosition(0, 0)).unit_id is None
    assert grid.cell(GridPosition(2, 1)).unit_id == "a"


def test_place_unit_outside_grid_raises(grid):
    with pytest.raises(ValueError):
        place_unit(grid, create_unit("a", Team.PLAYER), GridPosition(4, 0))


def test_place_unit_on_occupied_cell_raises(grid):
    grid = place_unit(grid, create_unit("a", Team.PLAYER), GridPosition(0, 0))
    with pytest.raises(ValueError):
        place_unit(grid, create_unit("b", Team.PLAYER), GridPosition(0, 0))


def test_swap_units(grid):
    grid = place_unit(grid, create_unit("a", Team.PLAYER), GridPosition(0, 0))
    grid = place_unit(grid, create_unit("b", Team.PLAYER), GridPosition(1, 1))

    swapped = swap_units(grid, "a", "b")

    assert get_unit(swapped, "a").position == GridPosition(1, 1)
    assert get_unit(swapped, "b").position == GridPosition(0, 0)
    assert swapped.cell(GridPosition(0, 0)).unit_id == "b"
    # oryginał bez zmian
    assert get_unit(grid, "a").position == GridPosition(0, 0)


def test_update_unit_copies_store(grid):
    grid = place_unit(grid, create_unit("a", Team.PLAYER), GridPosition(0, 0))
    updated = update_unit(grid, "a", health=10)

    assert get_unit(updated, "a").health == 10
    assert get_unit(grid, "a").health == 50


def test_update_unit_missing_is_noop(grid):
    assert update_unit(grid, "ghost", health=1) is grid


def test_update_unit_rejects_position(grid):
    grid = place_unit(grid, create_unit("a", Team.PLAYER), GridPosition(0, 0))
    with pytest.raises(ValueError):
        update_unit(grid, "a", position=GridPosition(1, 1))


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ZAPYTANIA
# ═══════════════════════════════════════════════════════════════════════════

def test_team_units_excludes_defeated(grid):
    grid = place_unit(grid, create_unit("a", Team.PLAYER), GridPosition(0, 0))
    grid = place_unit(grid, create_unit("b", Team.PLAYER, health=0), GridPosition(1, 0))
    grid = place_unit(grid, create_unit("e", Team.ENEMY), GridPosition(0, 2))

    assert [u.id for u in get_team_units(grid, Team.PLAYER)] == ["a"]
    assert len(get_all_units(grid)) == 3


def test_front_column_moves_back(grid):
    grid = place_unit(grid, create_unit("e1", Team.ENEMY), GridPosition(0, 2))
    grid = place_unit(grid, create_unit("e2", Team.ENEMY), GridPosition(1, 3))

    assert front_column(grid, Team.ENEMY) == 2

    grid = update_unit(grid, "e1", health=0)
    assert front_column(grid, Team.ENEMY) == 3


def test_front_column_none_when_team_dead(grid):
    assert front_column(grid, Team.PLAYER) is None
