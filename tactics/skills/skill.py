"""
Skill - definicje umiejętności i katalog.

Umiejętność to NIEMUTOWALNY wpis katalogu. Łączy:
- Targeting (ile i jakich celów wymaga)
- Effect (który handler ją rozstrzyga)
- Parametry liczbowe (mnożnik obrażeń, leczenie, buff)

YAML FORMAT:
═══════════════════════════════════════════════════════════════════

    leech:
      name: "Leech"
      effect: drain
      range: ranged
      damage_multiplier: 0.7
      drain_fraction: 0.5
      targeting:
        - {category: enemy-any, count: 1}

KATEGORIE CELÓW:
═══════════════════════════════════════════════════════════════════

    enemy       - żywy przeciwnik (opcjonalnie ograniczony range: melee)
    enemy-any   - żywy przeciwnik, bez ograniczeń zasięgu
    ally        - żywy sojusznik (łącznie z casterem)
    ally-any    - żywy sojusznik, bez ograniczeń zasięgu
    self        - sam caster
    none        - brak jawnego celu

Wymagania są konsumowane PO KOLEI: pierwsze wymaganie bierze
pierwsze `count` ID z komendy, drugie kolejne itd.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from ..core.config_loader import ConfigLoader
from ..effects.buff import BuffKind
from ..errors import UnknownSkillError


# ═══════════════════════════════════════════════════════════════════════════
# ENUMS
# ═══════════════════════════════════════════════════════════════════════════

class TargetCategory(Enum):
    """Kategoria celu wymagania."""
    ENEMY = "enemy"
    ENEMY_ANY = "enemy-any"
    ALLY = "ally"
    ALLY_ANY = "ally-any"
    SELF = "self"
    NONE = "none"

    @property
    def is_opposing(self) -> bool:
        return self in (TargetCategory.ENEMY, TargetCategory.ENEMY_ANY)

    @property
    def is_same_team(self) -> bool:
        return self in (TargetCategory.ALLY, TargetCategory.ALLY_ANY)


class RangeType(Enum):
    """Zasięg: melee = tylko front przeciwnika, ranged = dowolny rząd."""
    MELEE = "melee"
    RANGED = "ranged"


class SkillEffect(Enum):
    """Wariant umiejętności - klucz tablicy handlerów."""
    STRIKE = "strike"
    RANGED_STRIKE = "ranged_strike"
    DRAIN = "drain"
    STANCE = "stance"
    HEAL = "heal"
    BUFF = "buff"
    PASS = "pass"
    MOVE = "move"


# ═══════════════════════════════════════════════════════════════════════════
# TARGET REQUIREMENT
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TargetRequirement:
    """
    Pojedyncze wymaganie targetingu.

    Attributes:
        category: Kategoria celu
        count: Liczba celów do wskazania
        range: Opcjonalne ograniczenie zasięgu
    """
    category: TargetCategory
    count: int = 1
    range: Optional[RangeType] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TargetRequirement":
        range_value = data.get("range")
        return cls(
            category=TargetCategory(data["category"]),
            count=int(data.get("count", 1)),
            range=RangeType(range_value) if range_value else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {"category": self.category.value, "count": self.count}
        if self.range is not None:
            result["range"] = self.range.value
        return result


# ═══════════════════════════════════════════════════════════════════════════
# SKILL
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Skill:
    """
    Wpis katalogu umiejętności.

    Attributes:
        id: Identyfikator (klucz YAML)
        name: Nazwa wyświetlana
        effect: Wariant rozstrzygania
        targeting: Wymagania targetingu (w kolejności konsumpcji)
        description: Opis dla UI
        range: Zasięg umiejętności (informacyjnie)
        damage_multiplier: Mnożnik po odjęciu obrony
        heal_amount: Stałe leczenie
        magic_scaling: Dodatkowe leczenie = magic * magic_scaling
        drain_fraction: Część zadanych obrażeń leczących castera
        buff_kind / buff_duration / buff_magnitude: Parametry buffa
    """
    id: str
    name: str
    effect: SkillEffect
    targeting: Tuple[TargetRequirement, ...] = ()
    description: str = ""
    range: Optional[RangeType] = None
    damage_multiplier: float = 1.0
    heal_amount: int = 0
    magic_scaling: float = 0.0
    drain_fraction: float = 0.0
    buff_kind: Optional[BuffKind] = None
    buff_duration: int = 0
    buff_magnitude: int = 0

    @property
    def target_count(self) -> int:
        """Łączna liczba celów wymagana przez umiejętność."""
        return sum(req.count for req in self.targeting)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Skill":
        """
        Tworzy umiejętność ze słownika (np. z YAML).

        Raises:
            ValueError: Nieznany effect / category / buff_kind
        """
        range_value = data.get("range")
        buff_value = data.get("buff_kind")
        return cls(
            id=data["id"],
            name=data.get("name", data["id"].title()),
            effect=SkillEffect(data["effect"]),
            targeting=tuple(
                TargetRequirement.from_dict(req) for req in data.get("targeting", [])
            ),
            description=data.get("description", ""),
            range=RangeType(range_value) if range_value else None,
            damage_multiplier=float(data.get("damage_multiplier", 1.0)),
            heal_amount=int(data.get("heal_amount", 0)),
            magic_scaling=float(data.get("magic_scaling", 0.0)),
            drain_fraction=float(data.get("drain_fraction", 0.0)),
            buff_kind=BuffKind(buff_value) if buff_value else None,
            buff_duration=int(data.get("buff_duration", 0)),
            buff_magnitude=int(data.get("buff_magnitude", 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje umiejętność (dla UI / API)."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "effect": self.effect.value,
            "range": self.range.value if self.range else None,
            "targeting": [req.to_dict() for req in self.targeting],
            "damage_multiplier": self.damage_multiplier,
            "heal_amount": self.heal_amount,
            "buff_kind": self.buff_kind.value if self.buff_kind else None,
            "buff_duration": self.buff_duration,
            "buff_magnitude": self.buff_magnitude,
        }


# ═══════════════════════════════════════════════════════════════════════════
# KATALOG
# ═══════════════════════════════════════════════════════════════════════════

class SkillCatalog:
    """
    Statyczny katalog skill_id -> Skill.

    Nie ma stanu mutowalnego po utworzeniu.

    Example:
        >>> catalog = get_skill_catalog()
        >>> catalog.get("bolt").damage_multiplier
        0.8
        >>> [s.id for s in catalog.get_skills(["attack", "defend"])]
        ['attack', 'defend']
    """

    def __init__(self, skills: Iterable[Skill]):
        self._skills: Dict[str, Skill] = {s.id: s for s in skills}

    @classmethod
    def from_config(cls, loader: Optional[ConfigLoader] = None) -> "SkillCatalog":
        loader = loader or ConfigLoader()
        return cls(Skill.from_dict(data) for data in loader.load_all_skills().values())

    def get(self, skill_id: str) -> Skill:
        """
        Raises:
            UnknownSkillError: Jeśli ID nie ma w katalogu
        """
        try:
            return self._skills[skill_id]
        except KeyError:
            raise UnknownSkillError(skill_id) from None

    def get_skills(self, skill_ids: Iterable[str]) -> List[Skill]:
        """Wiele wpisów, z zachowaniem kolejności."""
        return [self.get(skill_id) for skill_id in skill_ids]

    def ids(self) -> List[str]:
        return list(self._skills.keys())

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._skills

    def __iter__(self) -> Iterator[Skill]:
        return iter(self._skills.values())

    def __len__(self) -> int:
        return len(self._skills)


_default_catalog: Optional[SkillCatalog] = None


def get_skill_catalog() -> SkillCatalog:
    """Domyślny katalog z tactics/data/skills.yaml (wczytywany raz)."""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = SkillCatalog.from_config()
    return _default_catalog


def get_skill(skill_id: str) -> Skill:
    return get_skill_catalog().get(skill_id)


def get_skills(skill_ids: Iterable[str]) -> List[Skill]:
    return get_skill_catalog().get_skills(skill_ids)
