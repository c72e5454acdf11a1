"""
Siatka bitwy (BattleGrid) i magazyn jednostek.

BattleGrid przechowuje:
- Stałą macierz komórek rows x cols (domyślnie 4x4)
- Mapę unit_id -> Unit (magazyn jednostek)

Każda komórka ma drużynę "domową" wyznaczoną przez kolumnę
(lewa połowa = PLAYER, prawa = ENEMY) i co najwyżej jedną jednostkę.

NIEZMIENNIKI:
═══════════════════════════════════════════════════════════════════

    - unit_id występuje w co najwyżej jednej komórce
    - cell.unit_id == unit.id  <=>  unit.position == cell.position
    - jednostki z health == 0 zostają w magazynie (i w komórce)

AKTUALIZACJE (copy-on-write):
═══════════════════════════════════════════════════════════════════

    Wszystkie funkcje zwracają NOWĄ siatkę. Kopiowane są tylko
    kontenery najwyższego poziomu (krotka wierszy, zmieniony wiersz,
    słownik jednostek) oraz dotknięte jednostki. Poprzedni snapshot
    pozostaje ważny i niezmieniony.

Przykład użycia:
    >>> grid = create_empty_grid()
    >>> grid = place_unit(grid, warrior, GridPosition(0, 1))
    >>> get_unit_at(grid, GridPosition(0, 1)).name
    'Warrior'
    >>> grid = update_unit(grid, warrior.id, health=10)
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from .position import GridPosition, Team, home_team_for_column, distance_to_center

if TYPE_CHECKING:
    from ..units.unit import Unit


DEFAULT_ROWS = 4
DEFAULT_COLS = 4


@dataclass(frozen=True)
class GridCell:
    """
    Pojedyncza komórka siatki.

    Attributes:
        position (GridPosition): Pozycja komórki
        team (Team): Drużyna domowa (z kolumny)
        unit_id (Optional[str]): ID jednostki stojącej na polu
    """
    position: GridPosition
    team: Team
    unit_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position.to_list(),
            "team": self.team.value,
            "unit_id": self.unit_id,
        }


@dataclass(frozen=True)
class BattleGrid:
    """
    Niemutowalna siatka z magazynem jednostek.

    Attributes:
        rows (int): Liczba wierszy
        cols (int): Liczba kolumn
        cells (Tuple[Tuple[GridCell, ...], ...]): Komórki [row][col]
        units (Dict[str, Unit]): Magazyn jednostek (kolejność wstawiania)

    Note:
        `units` jest zwykłym słownikiem, ale NIGDY nie jest modyfikowany
        w miejscu - funkcje modułu zawsze tworzą nowy słownik.
    """
    rows: int
    cols: int
    cells: Tuple[Tuple[GridCell, ...], ...]
    units: Dict[str, "Unit"] = field(default_factory=dict)

    # ─────────────────────────────────────────────────────────────────────────
    # WALIDACJA POZYCJI
    # ─────────────────────────────────────────────────────────────────────────

    def is_valid(self, pos: GridPosition) -> bool:
        """Sprawdza czy pozycja jest w granicach siatki."""
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols

    def cell(self, pos: GridPosition) -> GridCell:
        """
        Zwraca komórkę na pozycji.

        Raises:
            ValueError: Jeśli pozycja jest poza siatką
        """
        if not self.is_valid(pos):
            raise ValueError(f"Position {pos} is outside grid bounds")
        return self.cells[pos.row][pos.col]

    def is_occupied(self, pos: GridPosition) -> bool:
        return self.cell(pos).unit_id is not None

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "cells": [[c.to_dict() for c in row] for row in self.cells],
            "units": [u.to_dict() for u in self.units.values()],
        }

    def debug_print(self) -> str:
        """
        Tekstowa reprezentacja siatki do debugowania.

        Legenda:
            .  = puste pole
            P/E = żywa jednostka gracza / wroga
            x  = pokonana jednostka
        """
        lines = []
        for row in self.cells:
            marks = []
            for c in row:
                unit = self.units.get(c.unit_id) if c.unit_id else None
                if unit is None:
                    marks.append(".")
                elif not unit.is_alive():
                    marks.append("x")
                else:
                    marks.append("P" if unit.team is Team.PLAYER else "E")
            lines.append(" ".join(marks))
        return "\n".join(lines)


# ═══════════════════════════════════════════════════════════════════════════
# TWORZENIE
# ═══════════════════════════════════════════════════════════════════════════

def create_empty_grid(rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> BattleGrid:
    """
    Tworzy pustą siatkę.

    Args:
        rows: Liczba wierszy
        cols: Liczba kolumn (parzysta - dzielona po połowie między drużyny)

    Returns:
        BattleGrid: Siatka bez jednostek
    """
    if rows <= 0 or cols <= 0 or cols % 2 != 0:
        raise ValueError(f"Invalid grid size {rows}x{cols} (cols must be even)")

    cells = tuple(
        tuple(
            GridCell(position=GridPosition(r, c), team=home_team_for_column(c, cols))
            for c in range(cols)
        )
        for r in range(rows)
    )
    return BattleGrid(rows=rows, cols=cols, cells=cells, units={})


# ═══════════════════════════════════════════════════════════════════════════
# MODYFIKACJE
# ═══════════════════════════════════════════════════════════════════════════

def _set_cell(
    cells: List[List[GridCell]],
    pos: GridPosition,
    unit_id: Optional[str],
) -> None:
    cells[pos.row][pos.col] = replace(cells[pos.row][pos.col], unit_id=unit_id)


def _freeze(cells: List[List[GridCell]]) -> Tuple[Tuple[GridCell, ...], ...]:
    return tuple(tuple(row) for row in cells)


def place_unit(grid: BattleGrid, unit: "Unit", position: GridPosition) -> BattleGrid:
    """
    Umieszcza (lub przesuwa) jednostkę na siatce.

    Jeśli jednostka już jest w magazynie, jej poprzednia komórka jest
    czyszczona. Pole `position` jednostki jest aktualizowane.

    Args:
        grid: Siatka wejściowa (nie jest modyfikowana)
        unit: Jednostka do umieszczenia
        position: Docelowa pozycja

    Returns:
        BattleGrid: Nowa siatka

    Raises:
        ValueError: Jeśli pozycja jest poza siatką lub zajęta przez
            inną jednostkę
    """
    target = grid.cell(position)
    if target.unit_id is not None and target.unit_id != unit.id:
        raise ValueError(f"Position {position} is occupied by '{target.unit_id}'")

    cells = [list(row) for row in grid.cells]

    previous = grid.units.get(unit.id)
    if previous is not None and grid.is_valid(previous.position):
        _set_cell(cells, previous.position, None)

    _set_cell(cells, position, unit.id)

    units = dict(grid.units)
    units[unit.id] = replace(unit, position=position)

    return replace(grid, cells=_freeze(cells), units=units)


def swap_units(grid: BattleGrid, first_id: str, second_id: str) -> BattleGrid:
    """
    Zamienia miejscami dwie jednostki.

    No-op jeśli któregoś ID nie ma w magazynie lub ID są równe.
    """
    first = grid.units.get(first_id)
    second = grid.units.get(second_id)
    if first is None or second is None or first_id == second_id:
        return grid

    cells = [list(row) for row in grid.cells]
    _set_cell(cells, first.position, second_id)
    _set_cell(cells, second.position, first_id)

    units = dict(grid.units)
    units[first_id] = replace(first, position=second.position)
    units[second_id] = replace(second, position=first.position)

    return replace(grid, cells=_freeze(cells), units=units)


def update_unit(grid: BattleGrid, unit_id: str, **changes: Any) -> BattleGrid:
    """
    Nadpisuje pola jednostki.

    Args:
        grid: Siatka wejściowa
        unit_id: ID jednostki
        **changes: Pola do zmiany (np. health=10)

    Returns:
        BattleGrid: Nowa siatka lub ta sama, jeśli ID nie istnieje

    Note:
        Zmiana pozycji musi iść przez place_unit() - tutaj jest odrzucana.
    """
    unit = grid.units.get(unit_id)
    if unit is None:
        return grid
    if "position" in changes:
        raise ValueError("Use place_unit() to move units")
    return set_unit(grid, replace(unit, **changes))


def set_unit(grid: BattleGrid, unit: "Unit") -> BattleGrid:
    """
    Zapisuje nową wersję jednostki do magazynu (po id).

    No-op jeśli jednostki nie ma w magazynie.
    """
    if unit.id not in grid.units:
        return grid
    units = dict(grid.units)
    units[unit.id] = unit
    return replace(grid, units=units)


# ═══════════════════════════════════════════════════════════════════════════
# ZAPYTANIA
# ═══════════════════════════════════════════════════════════════════════════

def get_unit(grid: BattleGrid, unit_id: str) -> Optional["Unit"]:
    """Jednostka po ID (również pokonana) lub None."""
    return grid.units.get(unit_id)


def get_unit_at(grid: BattleGrid, position: GridPosition) -> Optional["Unit"]:
    """Jednostka stojąca na pozycji lub None."""
    unit_id = grid.cell(position).unit_id
    return grid.units.get(unit_id) if unit_id else None


def get_team_units(grid: BattleGrid, team: Team) -> List["Unit"]:
    """Żywe jednostki drużyny (kolejność magazynu)."""
    return [u for u in grid.units.values() if u.team is team and u.is_alive()]


def get_all_units(grid: BattleGrid) -> List["Unit"]:
    """Wszystkie jednostki - również pokonane."""
    return list(grid.units.values())


def get_living_units(grid: BattleGrid) -> List["Unit"]:
    return [u for u in grid.units.values() if u.is_alive()]


def front_column(grid: BattleGrid, team: Team) -> Optional[int]:
    """
    Najbardziej wysunięta kolumna zajęta przez żywe jednostki drużyny.

    Front przesuwa się do tyłu, gdy cała kolumna frontowa zostanie
    pokonana.

    Returns:
        Optional[int]: Indeks kolumny lub None, jeśli drużyna nie żyje
    """
    columns = [u.position.col for u in get_team_units(grid, team)]
    if not columns:
        return None
    return min(columns, key=lambda c: distance_to_center(team, c, grid.cols))
