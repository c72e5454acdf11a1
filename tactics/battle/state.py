"""
Stan bitwy i komenda akcji.

BattleState jest NIEMUTOWALNY. Każda akcja produkuje nowy stan
(kopia strukturalna z punktowymi zmianami) - referencja wywołującego
nigdy nie jest modyfikowana.

    state_0 --execute_action(cmd)--> state_1 --execute_action(cmd)--> state_2
       |                                |
       (nadal ważny)                    (nadal ważny)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Sequence, Tuple

from ..core.grid import BattleGrid
from ..core.position import Team
from ..events.event_logger import GameEvent
from .initiative import TurnOrder, get_active_unit, units_in_order


@dataclass(frozen=True)
class ActionCommand:
    """
    Komenda akcji: umiejętność + uporządkowana lista celów.

    Attributes:
        skill (str): ID umiejętności
        targets (Tuple[str, ...]): ID celów (w kolejności wymagań)
    """
    skill: str
    targets: Tuple[str, ...] = ()

    @classmethod
    def create(cls, skill: str, targets: Sequence[str] = ()) -> "ActionCommand":
        return cls(skill=skill, targets=tuple(targets))

    def to_dict(self) -> Dict[str, Any]:
        return {"skill": self.skill, "targets": list(self.targets)}


@dataclass(frozen=True)
class BattleState:
    """
    Pełny snapshot bitwy.

    Attributes:
        grid (BattleGrid): Siatka z magazynem jednostek
        turn_order (TurnOrder): Kolejka inicjatywy
        player_controlled (FrozenSet[str]): Jednostki sterowane przez gracza
        game_over (bool): Czy bitwa się zakończyła
        winner (Optional[Team]): Zwycięzca (None = trwa lub remis)
        log (Tuple[str, ...]): Log tekstowy (append-only)
        events (Tuple[GameEvent, ...]): Log strukturalny (append-only)
    """
    grid: BattleGrid
    turn_order: TurnOrder
    player_controlled: FrozenSet[str] = field(default_factory=frozenset)
    game_over: bool = False
    winner: Optional[Team] = None
    log: Tuple[str, ...] = ()
    events: Tuple[GameEvent, ...] = ()

    @property
    def active_unit_id(self) -> Optional[str]:
        return get_active_unit(self.turn_order)

    @property
    def round_number(self) -> int:
        return self.turn_order.round_number

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot dla UI / API."""
        upcoming = [] if self.game_over else units_in_order(self.turn_order, self.grid)
        return {
            "grid": self.grid.to_dict(),
            "turn_order": self.turn_order.to_dict(),
            "upcoming": upcoming,
            "player_controlled": sorted(self.player_controlled),
            "game_over": self.game_over,
            "winner": self.winner.value if self.winner else None,
            "log": list(self.log),
        }
