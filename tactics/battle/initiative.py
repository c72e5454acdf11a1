"""
Kolejka inicjatywy (Turn Order).

Kolejka to stała sekwencja ID jednostek wyznaczana raz na początku
bitwy. W trakcie bitwy zmieniają się tylko: indeks aktywnej jednostki,
numer rundy i zbiór jednostek, które już działały w tej rundzie.

POLITYKI KOLEJNOŚCI:
═══════════════════════════════════════════════════════════════════

    TEAM_BLOCK (domyślna)
    ─────────────────────────────────────────────────────────────
    Wszystkie jednostki gracza, potem wszystkie jednostki wroga.
    W obrębie bloku - kolejność magazynu jednostek.

    INITIATIVE
    ─────────────────────────────────────────────────────────────
    Malejąco po efektywnej inicjatywie (z HASTE).
    Remis: blok drużyny (gracz pierwszy), potem kolejność magazynu.

ADVANCE:
═══════════════════════════════════════════════════════════════════

    1. Aktywna jednostka -> acted_this_round
    2. index += 1, pomijaj pokonanych
    3. Koniec sekwencji:
       - index = 0, round += 1, acted_this_round = {}
       - pomijaj pokonanych od początku
    4. Brak żywych -> NoLivingUnitsError (nigdy pętla)

Przykład użycia:
    >>> order = create_turn_order(grid)
    >>> get_active_unit(order)
    'player-warrior-0'
    >>> order = advance_turn(order, grid)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Any, Dict, FrozenSet, List, Optional, Set, Tuple

from ..core.grid import BattleGrid, get_living_units
from ..core.position import Team
from ..effects.buff import get_effective_initiative
from ..errors import NoLivingUnitsError


class TurnOrderPolicy(Enum):
    """Sposób budowania kolejki."""
    TEAM_BLOCK = "team_block"
    INITIATIVE = "initiative"


@dataclass(frozen=True)
class TurnOrder:
    """
    Harmonogram tur.

    Attributes:
        round_number (int): Numer rundy (od 1)
        unit_order (Tuple[str, ...]): Stała sekwencja ID jednostek
        current_index (int): Indeks aktywnej jednostki
        acted_this_round (FrozenSet[str]): Kto już działał w tej rundzie
    """
    round_number: int
    unit_order: Tuple[str, ...]
    current_index: int = 0
    acted_this_round: FrozenSet[str] = field(default_factory=frozenset)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "unit_order": list(self.unit_order),
            "current_index": self.current_index,
            "active_unit": get_active_unit(self),
            "acted_this_round": sorted(self.acted_this_round),
        }


_TEAM_RANK = {Team.PLAYER: 0, Team.ENEMY: 1}


def create_turn_order(
    grid: BattleGrid,
    policy: TurnOrderPolicy = TurnOrderPolicy.TEAM_BLOCK,
) -> TurnOrder:
    """
    Buduje kolejkę z żywych jednostek.

    Args:
        grid: Siatka z jednostkami
        policy: Polityka kolejności

    Returns:
        TurnOrder: Runda 1, indeks 0, pusty acted_this_round
    """
    living = get_living_units(grid)
    store_index = {u.id: i for i, u in enumerate(living)}

    if policy is TurnOrderPolicy.INITIATIVE:
        ordered = sorted(
            living,
            key=lambda u: (-get_effective_initiative(u), _TEAM_RANK[u.team], store_index[u.id]),
        )
    else:
        ordered = sorted(living, key=lambda u: (_TEAM_RANK[u.team], store_index[u.id]))

    return TurnOrder(
        round_number=1,
        unit_order=tuple(u.id for u in ordered),
        current_index=0,
        acted_this_round=frozenset(),
    )


def get_active_unit(turn_order: TurnOrder) -> Optional[str]:
    """ID aktywnej jednostki (None dla pustej kolejki)."""
    if not 0 <= turn_order.current_index < len(turn_order.unit_order):
        return None
    return turn_order.unit_order[turn_order.current_index]


def _next_living_index(order: Tuple[str, ...], start: int, alive: Set[str]) -> int:
    index = start
    while index < len(order) and order[index] not in alive:
        index += 1
    return index


def advance_turn(turn_order: TurnOrder, grid: BattleGrid) -> TurnOrder:
    """
    Przechodzi do następnej żywej jednostki.

    Args:
        turn_order: Aktualna kolejka
        grid: Siatka (do sprawdzenia kto żyje)

    Returns:
        TurnOrder: Nowa kolejka (unit_order bez zmian)

    Raises:
        NoLivingUnitsError: Jeśli w kolejce nie ma już żadnej żywej jednostki
    """
    order = turn_order.unit_order
    alive = {u.id for u in get_living_units(grid)}
    if not any(unit_id in alive for unit_id in order):
        raise NoLivingUnitsError("No living unit left in the turn order")

    acted = set(turn_order.acted_this_round)
    active = get_active_unit(turn_order)
    if active is not None:
        acted.add(active)

    round_number = turn_order.round_number
    index = _next_living_index(order, turn_order.current_index + 1, alive)

    # Koniec rundy - zawijamy
    if index >= len(order):
        round_number += 1
        acted.clear()
        index = _next_living_index(order, 0, alive)

    return TurnOrder(
        round_number=round_number,
        unit_order=order,
        current_index=index,
        acted_this_round=frozenset(acted),
    )


def is_player_controlled(unit_id: Optional[str], controlled: AbstractSet[str]) -> bool:
    """Czy jednostką steruje gracz."""
    return unit_id in controlled


def units_in_order(turn_order: TurnOrder, grid: BattleGrid) -> List[str]:
    """Żywe jednostki w kolejności kolejki, zaczynając od aktywnej."""
    alive = {u.id for u in get_living_units(grid)}
    order = turn_order.unit_order
    start = turn_order.current_index
    rotated = order[start:] + order[:start]
    return [unit_id for unit_id in rotated if unit_id in alive]
