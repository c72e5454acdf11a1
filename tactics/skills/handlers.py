"""
Rozstrzyganie umiejętności - jeden handler na SkillEffect.

Silnik wybiera handler z SKILL_HANDLERS po `skill.effect`. Dodanie
nowej umiejętności tego samego typu to tylko wpis w skills.yaml;
nowy typ efektu = nowa funkcja + wpis w tabeli.

    ┌──────────────┬──────────────────────────────────────────────┐
    │ SkillEffect  │ Działanie                                    │
    ├──────────────┼──────────────────────────────────────────────┤
    │ STRIKE       │ cios wręcz, postawa połowi i jest zużywana   │
    │ RANGED_STRIKE│ cios x multiplier, zużywa postawę            │
    │ DRAIN        │ cios dystansowy + leczenie castera           │
    │ STANCE       │ postawa obronna na siebie                    │
    │ HEAL         │ leczenie sojusznika (max brakujące HP)       │
    │ BUFF         │ czasowy buff na sojusznika                   │
    │ PASS         │ pominięcie tury, zdejmuje własną postawę     │
    │ MOVE         │ zamiana miejscami z sojusznikiem             │
    └──────────────┴──────────────────────────────────────────────┘

Handler dostaje TurnContext - roboczą kopię siatki na czas jednej
akcji. Zmiany są zbierane w kontekście i dopiero silnik składa z nich
nowy BattleState (stan wejściowy nigdy nie jest modyfikowany).

Brakujący lub pokonany cel = handler nic nie robi (brak logu).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from math import floor
from typing import Callable, Dict, List, Optional, Sequence

from ..combat.damage import (
    DamageResult,
    calculate_drain_heal,
    calculate_ranged_damage,
    calculate_strike_damage,
)
from ..core.grid import BattleGrid, set_unit, swap_units
from ..effects.buff import BuffKind, apply_buff, is_defending, remove_buff
from ..events.event_logger import EventType, GameEvent
from ..units.unit import Unit
from .skill import Skill, SkillEffect


@dataclass
class TurnContext:
    """
    Robocze dane jednej akcji.

    Attributes:
        grid (BattleGrid): Aktualna (niemutowalna) siatka - podmieniana
            przy każdej zmianie jednostki
        round (int): Numer rundy dla zdarzeń
        log (List[str]): Nowe linie logu tekstowego
        events (List[GameEvent]): Nowe zdarzenia strukturalne
    """
    grid: BattleGrid
    round: int
    log: List[str] = field(default_factory=list)
    events: List[GameEvent] = field(default_factory=list)

    def unit(self, unit_id: Optional[str]) -> Optional[Unit]:
        """Jednostka z magazynu (również pokonana)."""
        if unit_id is None:
            return None
        return self.grid.units.get(unit_id)

    def living(self, unit_id: Optional[str]) -> Optional[Unit]:
        """Żywa jednostka albo None."""
        unit = self.unit(unit_id)
        return unit if unit is not None and unit.is_alive() else None

    def put(self, unit: Unit) -> None:
        self.grid = set_unit(self.grid, unit)

    def say(self, line: str) -> None:
        self.log.append(line)

    def emit(
        self,
        event_type: EventType,
        unit_id: Optional[str] = None,
        target_id: Optional[str] = None,
        **data,
    ) -> None:
        self.events.append(GameEvent(
            round=self.round,
            event_type=event_type,
            unit_id=unit_id,
            target_id=target_id,
            data=data,
        ))


SkillHandler = Callable[[TurnContext, Unit, Skill, Sequence[str]], None]


# ═══════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════

def _first_target(ctx: TurnContext, target_ids: Sequence[str]) -> Optional[Unit]:
    if not target_ids:
        return None
    return ctx.living(target_ids[0])


def _hit(
    ctx: TurnContext,
    attacker: Unit,
    target: Unit,
    result: DamageResult,
) -> Unit:
    """
    Zadaje obrażenia, zużywa postawę i zapisuje cel.

    Returns:
        Unit: Cel po trafieniu
    """
    target = target.take_damage(result.final_damage)
    if result.defended:
        target = remove_buff(target, BuffKind.DEFENDING)
        ctx.emit(EventType.BUFF_CONSUMED, target.id, attacker.id, buff=BuffKind.DEFENDING.value)
    ctx.put(target)
    ctx.emit(
        EventType.UNIT_DAMAGE,
        attacker.id,
        target.id,
        damage=result.final_damage,
        hp_after=target.health,
        defended=result.defended,
    )
    return target


def _check_defeat(ctx: TurnContext, attacker: Unit, target: Unit) -> None:
    if not target.is_alive():
        ctx.say(f"{target.name} has been defeated!")
        ctx.emit(EventType.UNIT_DEATH, target.id, attacker.id)


# ═══════════════════════════════════════════════════════════════════════════
# HANDLERS
# ═══════════════════════════════════════════════════════════════════════════

def resolve_strike(ctx: TurnContext, caster: Unit, skill: Skill, target_ids: Sequence[str]) -> None:
    """Cios wręcz."""
    target = _first_target(ctx, target_ids)
    if target is None:
        return

    result = calculate_strike_damage(caster, target)
    target = _hit(ctx, caster, target, result)

    if result.defended:
        ctx.say(f"{caster.name} attacks! {target.name} defends and takes {result.final_damage} damage.")
    else:
        ctx.say(f"{caster.name} attacks {target.name} for {result.final_damage} damage!")
    _check_defeat(ctx, caster, target)


def resolve_ranged_strike(ctx: TurnContext, caster: Unit, skill: Skill, target_ids: Sequence[str]) -> None:
    """Cios dystansowy (np. Bolt)."""
    target = _first_target(ctx, target_ids)
    if target is None:
        return

    result = calculate_ranged_damage(caster, target, skill.damage_multiplier)
    target = _hit(ctx, caster, target, result)

    ctx.say(f"{caster.name} casts {skill.name} at {target.name} for {result.final_damage} damage!")
    _check_defeat(ctx, caster, target)


def resolve_drain(ctx: TurnContext, caster: Unit, skill: Skill, target_ids: Sequence[str]) -> None:
    """Cios dystansowy, część obrażeń leczy castera."""
    target = _first_target(ctx, target_ids)
    if target is None:
        return

    result = calculate_ranged_damage(caster, target, skill.damage_multiplier)
    target = _hit(ctx, caster, target, result)

    # Caster mógł się zmienić w magazynie (np. regen na starcie tury)
    caster = ctx.unit(caster.id) or caster
    healed = calculate_drain_heal(caster, result.final_damage, skill.drain_fraction)
    if healed > 0:
        caster, healed = caster.heal(healed)
        ctx.put(caster)
        ctx.emit(EventType.UNIT_HEAL, caster.id, caster.id, amount=healed, hp_after=caster.health, source=skill.id)

    ctx.say(
        f"{caster.name} leeches {target.name} for {result.final_damage} damage "
        f"and heals {healed} HP!"
    )
    _check_defeat(ctx, caster, target)


def resolve_stance(ctx: TurnContext, caster: Unit, skill: Skill, target_ids: Sequence[str]) -> None:
    """Postawa obronna na siebie (do następnej tury castera)."""
    kind = skill.buff_kind or BuffKind.DEFENDING
    duration = skill.buff_duration or 1
    caster = apply_buff(caster, kind, duration, skill.buff_magnitude, source=caster.id)
    ctx.put(caster)
    ctx.emit(EventType.BUFF_APPLY, caster.id, caster.id, buff=kind.value, duration=duration, magnitude=skill.buff_magnitude)
    ctx.say(f"{caster.name} takes a defensive stance.")


def resolve_heal(ctx: TurnContext, caster: Unit, skill: Skill, target_ids: Sequence[str]) -> None:
    """Leczenie sojusznika: heal_amount + magic * magic_scaling."""
    target = _first_target(ctx, target_ids)
    if target is None:
        return

    amount = skill.heal_amount + floor(caster.magic * skill.magic_scaling)
    target, healed = target.heal(amount)
    ctx.put(target)
    ctx.emit(EventType.UNIT_HEAL, caster.id, target.id, amount=healed, hp_after=target.health, source=skill.id)
    ctx.say(f"{caster.name} heals {target.name} for {healed} HP!")


def resolve_buff(ctx: TurnContext, caster: Unit, skill: Skill, target_ids: Sequence[str]) -> None:
    """Czasowy buff (haste / bless / regen) na sojusznika."""
    target = _first_target(ctx, target_ids)
    if target is None or skill.buff_kind is None:
        return

    target = apply_buff(
        target,
        skill.buff_kind,
        skill.buff_duration,
        skill.buff_magnitude,
        source=caster.id,
    )
    ctx.put(target)
    ctx.emit(
        EventType.BUFF_APPLY,
        caster.id,
        target.id,
        buff=skill.buff_kind.value,
        duration=skill.buff_duration,
        magnitude=skill.buff_magnitude,
    )
    ctx.say(f"{caster.name} casts {skill.name} on {target.name}!")


def resolve_pass(ctx: TurnContext, caster: Unit, skill: Skill, target_ids: Sequence[str]) -> None:
    """Pominięcie tury - zdejmuje własną postawę obronną."""
    if is_defending(caster):
        caster = remove_buff(caster, BuffKind.DEFENDING)
        ctx.put(caster)
    ctx.say(f"{caster.name} skips their turn.")


def resolve_move(ctx: TurnContext, caster: Unit, skill: Skill, target_ids: Sequence[str]) -> None:
    """Zamiana miejscami z żywym sojusznikiem."""
    target = _first_target(ctx, target_ids)
    if target is None or target.id == caster.id:
        return

    before = caster.position
    ctx.grid = swap_units(ctx.grid, caster.id, target.id)
    ctx.emit(
        EventType.UNIT_MOVE,
        caster.id,
        target.id,
        **{"from": before.to_list(), "to": target.position.to_list()},
    )
    ctx.say(f"{caster.name} swaps places with {target.name}.")


SKILL_HANDLERS: Dict[SkillEffect, SkillHandler] = {
    SkillEffect.STRIKE: resolve_strike,
    SkillEffect.RANGED_STRIKE: resolve_ranged_strike,
    SkillEffect.DRAIN: resolve_drain,
    SkillEffect.STANCE: resolve_stance,
    SkillEffect.HEAL: resolve_heal,
    SkillEffect.BUFF: resolve_buff,
    SkillEffect.PASS: resolve_pass,
    SkillEffect.MOVE: resolve_move,
}


def get_handler(effect: SkillEffect) -> SkillHandler:
    return SKILL_HANDLERS[effect]
