"""
Unit - jednostka na polu bitwy.

Jednostka jest NIEMUTOWALNA (frozen dataclass). Każda zmiana
(obrażenia, leczenie, buff, ruch) tworzy nową instancję przez
dataclasses.replace(). Dzięki temu poprzedni snapshot stanu bitwy
pozostaje nienaruszony.

Cykl życia jednostki:
═══════════════════════════════════════════════════════════════════

    1. TWORZENIE
       - Z szablonu postaci (CharacterTemplate) + pozycja startowa
       - health = max_health, brak buffów

    2. WALKA
       - Silnik zastępuje jednostkę w magazynie nową wersją
         po każdym zastosowaniu umiejętności

    3. POKONANIE
       - health == 0 -> jednostka jest wyłączona z walki
       - NIE jest usuwana ze stanu (potrzebna do renderowania i logu)

Identyfikacja:
    Format id: "{team}-{template_id}-{index}" np. "player-warrior-0"
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

from ..core.position import GridPosition, Team

if TYPE_CHECKING:
    from ..effects.buff import Buff


@dataclass(frozen=True)
class Unit:
    """
    Reprezentuje jednostkę na polu bitwy.

    Attributes:
        id (str): Unikalny identyfikator
        name (str): Nazwa wyświetlana
        health (int): Aktualne HP (0 <= health <= max_health)
        max_health (int): Maksymalne HP
        power (int): Siła fizyczna (bazowa, bez buffów)
        magic (int): Moc magiczna
        defense (int): Obrona
        initiative (int): Inicjatywa (bazowa, bez buffów)
        position (GridPosition): Pozycja na siatce
        team (Team): Drużyna
        skills (Tuple[str, ...]): ID dostępnych umiejętności
        buffs (Tuple[Buff, ...]): Aktywne buffy
        template_id (Optional[str]): ID szablonu postaci

    Note:
        Pozycja musi być zgodna z komórką siatki - pilnuje tego
        place_unit() w core.grid.
    """
    id: str
    name: str
    health: int
    max_health: int
    power: int
    magic: int
    defense: int
    initiative: int
    position: GridPosition
    team: Team
    skills: Tuple[str, ...] = ()
    buffs: Tuple["Buff", ...] = field(default=(), repr=False)
    template_id: Optional[str] = None

    def __post_init__(self):
        if self.max_health <= 0:
            raise ValueError(f"Unit '{self.id}' must have positive max_health")
        if not 0 <= self.health <= self.max_health:
            raise ValueError(
                f"Unit '{self.id}' health {self.health} outside [0, {self.max_health}]"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # STAN
    # ─────────────────────────────────────────────────────────────────────────

    def is_alive(self) -> bool:
        """Czy jednostka może działać (health > 0)."""
        return self.health > 0

    def missing_health(self) -> int:
        """Brakujące HP do maksimum."""
        return self.max_health - self.health

    def with_health(self, health: int) -> "Unit":
        """Zwraca kopię z HP przyciętym do [0, max_health]."""
        return replace(self, health=max(0, min(self.max_health, health)))

    def take_damage(self, amount: int) -> "Unit":
        """Zwraca kopię po otrzymaniu obrażeń."""
        return self.with_health(self.health - amount)

    def heal(self, amount: int) -> Tuple["Unit", int]:
        """
        Leczy jednostkę, nie przekraczając max_health.

        Returns:
            Tuple[Unit, int]: Nowa jednostka i faktycznie wyleczone HP
        """
        actual = max(0, min(amount, self.missing_health()))
        if actual == 0:
            return self, 0
        return replace(self, health=self.health + actual), actual

    def has_skill(self, skill_id: str) -> bool:
        return skill_id in self.skills

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje jednostkę (snapshot dla UI / replay)."""
        return {
            "id": self.id,
            "name": self.name,
            "team": self.team.value,
            "health": self.health,
            "max_health": self.max_health,
            "power": self.power,
            "magic": self.magic,
            "defense": self.defense,
            "initiative": self.initiative,
            "position": self.position.to_list(),
            "skills": list(self.skills),
            "buffs": [b.to_dict() for b in self.buffs],
            "template_id": self.template_id,
        }

    def __repr__(self) -> str:
        return f"Unit({self.id}, {self.health}/{self.max_health} HP, {self.team.value})"
