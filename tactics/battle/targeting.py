"""
System targetingu - legalni kandydaci i walidacja komend.

KANDYDACI WG KATEGORII:
═══════════════════════════════════════════════════════════════════

    enemy / enemy-any   - żywe jednostki drużyny przeciwnej
    ally / ally-any     - żywe jednostki drużyny castera (z casterem)
    self                - caster (jeśli żyje)
    none                - pusty zbiór

    Kolejność kandydatów = kolejność magazynu jednostek (stabilna).
    AI rozstrzyga remisy właśnie tą kolejnością.

ZASIĘG MELEE (opcja enforce_melee_range):
═══════════════════════════════════════════════════════════════════

    Wymaganie `enemy` z range: melee może celować tylko w jednostki
    stojące we frontowej kolumnie przeciwnika - najbliższej środka
    spośród kolumn zajętych przez jego żywe jednostki:

        col:    0     1   |   2     3
               [P]   [P]  |  [E]   [ ]     front wroga = kolumna 2
               [ ]   [P]  |  [ ]   [E]     (E w kolumnie 3 poza zasięgiem)

    Gdy kolumna 2 zostanie wybita, front cofa się do kolumny 3.
    `enemy-any` ignoruje ograniczenie.

WALIDACJA:
═══════════════════════════════════════════════════════════════════

    1. len(targets) == suma count wszystkich wymagań
    2. Wymagania konsumują ID po kolei (pierwsze wymaganie
       bierze pierwsze `count` ID itd.)
    3. Każde ID musi należeć do zbioru kandydatów wymagania

    validate_targets() NIGDY nie rzuca - zwraca ValidationResult.

Przykład użycia:
    >>> skill = get_skill("attack")
    >>> result = validate_targets(skill, ["enemy-skeleton-0"], state, "player-warrior-0")
    >>> result.valid
    True
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, TYPE_CHECKING

from ..core.grid import front_column, get_living_units
from ..skills.skill import RangeType, Skill, TargetCategory, TargetRequirement

if TYPE_CHECKING:
    from ..units.unit import Unit
    from .state import BattleState


@dataclass(frozen=True)
class ValidationResult:
    """
    Wynik walidacji celów.

    Attributes:
        valid: Czy cele są poprawne
        error: Opis błędu (None gdy valid)
    """
    valid: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid


def get_valid_targets(
    state: "BattleState",
    caster_id: str,
    requirement: TargetRequirement,
    enforce_melee_range: bool = False,
) -> List["Unit"]:
    """
    Zwraca legalnych kandydatów dla wymagania.

    Args:
        state: Stan bitwy
        caster_id: ID jednostki używającej umiejętności
        requirement: Wymaganie targetingu
        enforce_melee_range: Czy filtrować melee do frontu przeciwnika

    Returns:
        List[Unit]: Kandydaci w kolejności magazynu (pusta lista,
            gdy caster nie istnieje)
    """
    grid = state.grid
    caster = grid.units.get(caster_id)
    if caster is None:
        return []

    category = requirement.category
    living = get_living_units(grid)

    if category.is_opposing:
        candidates = [u for u in living if u.team is not caster.team]
        if (
            enforce_melee_range
            and category is TargetCategory.ENEMY
            and requirement.range is RangeType.MELEE
        ):
            front = front_column(grid, caster.team.opponent)
            candidates = [u for u in candidates if u.position.col == front]
        return candidates

    if category.is_same_team:
        return [u for u in living if u.team is caster.team]

    if category is TargetCategory.SELF:
        return [caster] if caster.is_alive() else []

    return []


def validate_targets(
    skill: Skill,
    target_ids: Sequence[str],
    state: "BattleState",
    caster_id: str,
    enforce_melee_range: bool = False,
) -> ValidationResult:
    """
    Sprawdza czy cele komendy spełniają wymagania umiejętności.

    Args:
        skill: Umiejętność
        target_ids: Proponowane ID celów
        state: Stan bitwy
        caster_id: ID castera
        enforce_melee_range: Patrz get_valid_targets()

    Returns:
        ValidationResult: valid=True lub opis pierwszego błędu
    """
    expected = skill.target_count
    if len(target_ids) != expected:
        return ValidationResult(
            valid=False,
            error=f"Expected {expected} target(s), but got {len(target_ids)}",
        )

    index = 0
    for requirement in skill.targeting:
        valid_ids = {
            u.id for u in get_valid_targets(state, caster_id, requirement, enforce_melee_range)
        }
        for target_id in target_ids[index:index + requirement.count]:
            if target_id not in valid_ids:
                return ValidationResult(
                    valid=False,
                    error=(
                        f"Invalid target: {target_id} is not a valid "
                        f"{requirement.category.value} target"
                    ),
                )
        index += requirement.count

    return ValidationResult(valid=True)


def has_valid_targets(
    skill: Skill,
    state: "BattleState",
    caster_id: str,
    enforce_melee_range: bool = False,
) -> bool:
    """Czy każde wymaganie umiejętności ma wystarczająco kandydatów."""
    return all(
        len(get_valid_targets(state, caster_id, req, enforce_melee_range)) >= req.count
        for req in skill.targeting
    )
