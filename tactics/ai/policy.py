"""
Polityka decyzyjna jednostek sterowanych przez AI.

WYBÓR UMIEJĘTNOŚCI:
═══════════════════════════════════════════════════════════════════

    1. Umiejętności jednostki bez efektów pass i move (brak efektu bojowego)
    2. Odrzuć te, których wymagania nie mają kandydatów
    3. Losuj jednostajnie (GameRNG - seed daje powtarzalność)
    4. Nic nie zostało -> `skip` bez celów

WYBÓR CELÓW (po jednym na wymaganie):
═══════════════════════════════════════════════════════════════════

    enemy / enemy-any   -> highest_hp  (najtrwalszy / najgroźniejszy)
    ally / ally-any     -> lowest_hp   (najbardziej potrzebujący)
    self                -> caster

    Remis: pierwszy kandydat w kolejności resolvera (sort stabilny).

Przykład użycia:
    >>> rng = GameRNG(seed=42)
    >>> command = choose_action(state, "enemy-skeleton-0", rng=rng)
    >>> command.skill
    'attack'
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..battle.config import BattleConfig
from ..battle.state import ActionCommand, BattleState
from ..battle.targeting import get_valid_targets, has_valid_targets
from ..core.rng import GameRNG
from ..errors import UnknownSkillError
from ..skills.skill import Skill, SkillCatalog, SkillEffect, TargetCategory, get_skill_catalog
from ..units.unit import Unit

PASS_SKILL = "skip"

# Efekty bez skutku bojowego - AI ich nie wybiera
EXCLUDED_EFFECTS = frozenset({SkillEffect.PASS, SkillEffect.MOVE})


# ═══════════════════════════════════════════════════════════════════════════
# SELEKTORY
# ═══════════════════════════════════════════════════════════════════════════

def select_highest_hp(caster: Unit, candidates: List[Unit]) -> Optional[Unit]:
    if not candidates:
        return None
    return sorted(candidates, key=lambda u: -u.health)[0]


def select_lowest_hp(caster: Unit, candidates: List[Unit]) -> Optional[Unit]:
    if not candidates:
        return None
    return sorted(candidates, key=lambda u: u.health)[0]


def select_self(caster: Unit, candidates: List[Unit]) -> Optional[Unit]:
    return caster


def select_first(caster: Unit, candidates: List[Unit]) -> Optional[Unit]:
    return candidates[0] if candidates else None


TargetSelector = Callable[[Unit, List[Unit]], Optional[Unit]]

SELECTOR_REGISTRY: Dict[TargetCategory, TargetSelector] = {
    TargetCategory.ENEMY: select_highest_hp,
    TargetCategory.ENEMY_ANY: select_highest_hp,
    TargetCategory.ALLY: select_lowest_hp,
    TargetCategory.ALLY_ANY: select_lowest_hp,
    TargetCategory.SELF: select_self,
}


def get_selector(category: TargetCategory) -> TargetSelector:
    return SELECTOR_REGISTRY.get(category, select_first)


# ═══════════════════════════════════════════════════════════════════════════
# POLITYKA
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class PolicyContext:
    """Wspólne zależności jednej decyzji."""
    catalog: SkillCatalog
    config: BattleConfig
    rng: GameRNG


def choose_action(
    state: BattleState,
    unit_id: str,
    rng: Optional[GameRNG] = None,
    catalog: Optional[SkillCatalog] = None,
    config: Optional[BattleConfig] = None,
) -> ActionCommand:
    """
    Wybiera komendę dla jednostki AI.

    Args:
        state: Aktualny stan bitwy
        unit_id: ID działającej jednostki
        rng: Generator losowości (None = losowy seed)
        catalog: Katalog umiejętności
        config: Konfiguracja (enforce_melee_range wpływa na kandydatów)

    Returns:
        ActionCommand: Komenda (fail-safe: `skip` bez celów)
    """
    ctx = PolicyContext(
        catalog=catalog or get_skill_catalog(),
        config=config or BattleConfig(),
        rng=rng or GameRNG(),
    )

    unit = state.grid.units.get(unit_id)
    if unit is None:
        return ActionCommand.create(PASS_SKILL)

    usable = usable_skills(state, unit, ctx)
    if not usable:
        return ActionCommand.create(PASS_SKILL)

    skill = ctx.rng.choice(usable)
    return ActionCommand.create(skill.id, select_targets(state, unit, skill, ctx))


def usable_skills(state: BattleState, unit: Unit, ctx: PolicyContext) -> List[Skill]:
    """Umiejętności jednostki, które AI może sensownie użyć teraz."""
    skills: List[Skill] = []
    for skill_id in unit.skills:
        try:
            skill = ctx.catalog.get(skill_id)
        except UnknownSkillError:
            continue
        if skill.effect in EXCLUDED_EFFECTS:
            continue
        if has_valid_targets(skill, state, unit.id, ctx.config.enforce_melee_range):
            skills.append(skill)
    return skills


def select_targets(
    state: BattleState,
    unit: Unit,
    skill: Skill,
    ctx: PolicyContext,
) -> List[str]:
    """Jeden cel na każde wymaganie (count razy), wg SELECTOR_REGISTRY."""
    targets: List[str] = []
    for requirement in skill.targeting:
        candidates = get_valid_targets(
            state, unit.id, requirement, ctx.config.enforce_melee_range
        )
        selector = get_selector(requirement.category)
        for _ in range(requirement.count):
            picked = selector(unit, candidates)
            if picked is None:
                break
            targets.append(picked.id)
            candidates = [c for c in candidates if c.id != picked.id]
    return targets
