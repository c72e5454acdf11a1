"""
System logowania zdarzeń bitwy do formatu JSON dla replay.

Silnik dopisuje do stanu bitwy DWA równoległe logi:
- `log`    - linie tekstowe dla gracza ("Warrior attacks Skeleton for 22 damage!")
- `events` - strukturalne GameEvent z pełnym kontekstem

EventLogger zbiera zdarzenia z kolejnych snapshotów stanu
i zapisuje je jako dokument replay.

TYPY ZDARZEŃ:
═══════════════════════════════════════════════════════════════════

    BATTLE_START    - początek bitwy (data: units)
    BATTLE_END      - koniec bitwy (data: winner)
    TURN_START      - jednostka rozpoczyna turę
    SKILL_USE       - użycie umiejętności (data: skill, targets)
    UNIT_DAMAGE     - obrażenia (data: damage, hp_after, defended)
    UNIT_HEAL       - leczenie (data: amount, hp_after, source)
    UNIT_DEATH      - jednostka pokonana
    UNIT_MOVE       - zmiana pozycji (data: from, to)
    BUFF_APPLY      - nałożenie buffa (data: buff, duration, magnitude)
    BUFF_EXPIRE     - wygaśnięcie buffa
    BUFF_CONSUMED   - zużycie postawy obronnej przy trafieniu

FORMAT LOGU:
═══════════════════════════════════════════════════════════════════

{
    "metadata": {
        "version": "1.0",
        "seed": 12345,
        "grid": {"rows": 4, "cols": 4},
        "timestamp": "2024-01-01T12:00:00"
    },
    "initial_state": {"units": [...]},
    "events": [
        {"round": 1, "type": "SKILL_USE", "unit_id": "player-warrior-0", "data": {...}},
        ...
    ],
    "final_state": {
        "winner": "player",
        "rounds": 7,
        "survivors": [...],
        "log": [...]
    }
}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Union, TYPE_CHECKING
from datetime import datetime
import json
from pathlib import Path

if TYPE_CHECKING:
    from ..battle.state import BattleState


class EventType(Enum):
    """Typ zdarzenia w bitwie."""

    # Bitwa
    BATTLE_START = auto()
    BATTLE_END = auto()
    TURN_START = auto()

    # Jednostki
    SKILL_USE = auto()
    UNIT_DAMAGE = auto()
    UNIT_HEAL = auto()
    UNIT_DEATH = auto()
    UNIT_MOVE = auto()

    # Buffy
    BUFF_APPLY = auto()
    BUFF_EXPIRE = auto()
    BUFF_CONSUMED = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Pojedyncze zdarzenie bitwy.

    Attributes:
        round (int): Numer rundy
        event_type (EventType): Typ zdarzenia
        unit_id (Optional[str]): ID jednostki (jeśli dotyczy)
        target_id (Optional[str]): ID celu (jeśli dotyczy)
        data (Dict): Dodatkowe dane specyficzne dla typu
    """
    round: int
    event_type: EventType
    unit_id: Optional[str] = None
    target_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje zdarzenie do słownika."""
        result: Dict[str, Any] = {
            "round": self.round,
            "type": self.event_type.name,
        }

        if self.unit_id:
            result["unit_id"] = self.unit_id
        if self.target_id:
            result["target_id"] = self.target_id
        if self.data:
            result["data"] = self.data

        return result


class EventLogger:
    """
    Zbiera zdarzenia bitwy i zapisuje je jako replay JSON.

    Attributes:
        events (List[GameEvent]): Zebrane zdarzenia
        metadata (Dict): Metadane bitwy
        initial_state (Dict): Stan początkowy
        final_state (Dict): Stan końcowy

    Example:
        >>> logger = EventLogger(seed=12345)
        >>> logger.start(state)
        >>> state = orchestrator.run_auto_battle(state)
        >>> logger.record(state)
        >>> logger.save("output/battle_12345.json")
    """

    def __init__(self, seed: Optional[int] = None, rows: int = 4, cols: int = 4):
        self.events: List[GameEvent] = []
        self.metadata: Dict[str, Any] = {
            "version": "1.0",
            "seed": seed,
            "grid": {"rows": rows, "cols": cols},
            "timestamp": datetime.now().isoformat(),
        }
        self.initial_state: Dict[str, Any] = {}
        self.final_state: Dict[str, Any] = {}
        self._seen = 0

    # ─────────────────────────────────────────────────────────────────────────
    # ZBIERANIE
    # ─────────────────────────────────────────────────────────────────────────

    def start(self, state: "BattleState") -> None:
        """Zapisuje stan początkowy i zdarzenia otwarcia."""
        self.initial_state = {"units": [u.to_dict() for u in state.grid.units.values()]}
        self.events = []
        self._seen = 0
        self.record(state)

    def record(self, state: "BattleState") -> None:
        """
        Dopisuje nowe zdarzenia ze snapshotu.

        Zdarzenia w stanie są append-only, więc wystarczy wziąć
        wszystko za ostatnio widzianym indeksem.
        """
        new_events = state.events[self._seen:]
        self.events.extend(new_events)
        self._seen = len(state.events)
        self.final_state = {
            "game_over": state.game_over,
            "winner": state.winner.value if state.winner else None,
            "rounds": state.turn_order.round_number,
            "survivors": [u.to_dict() for u in state.grid.units.values() if u.is_alive()],
            "log": list(state.log),
        }

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """Cały log w formacie dla JSON."""
        return {
            "metadata": self.metadata,
            "initial_state": self.initial_state,
            "events": [e.to_dict() for e in self.events],
            "final_state": self.final_state,
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, filepath: Union[str, Path]) -> Path:
        """Zapisuje replay do pliku JSON (brakujące katalogi są tworzone)."""
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")
        return path

    # ─────────────────────────────────────────────────────────────────────────
    # FILTRY
    # ─────────────────────────────────────────────────────────────────────────

    def get_event_count(self) -> int:
        return len(self.events)

    def filter_events(
        self,
        event_type: Optional[EventType] = None,
        unit_id: Optional[str] = None,
        round_number: Optional[int] = None,
    ) -> List[GameEvent]:
        """Zdarzenia spełniające wszystkie podane kryteria (None = dowolne)."""
        return [
            e for e in self.events
            if (event_type is None or e.event_type is event_type)
            and (unit_id is None or e.unit_id == unit_id)
            and (round_number is None or e.round == round_number)
        ]

    def get_events_by_type(self, event_type: EventType) -> List[GameEvent]:
        return self.filter_events(event_type=event_type)

    def get_events_for_unit(self, unit_id: str) -> List[GameEvent]:
        return self.filter_events(unit_id=unit_id)

    def get_events_in_round(self, round_number: int) -> List[GameEvent]:
        return self.filter_events(round_number=round_number)
