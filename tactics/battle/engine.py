"""
Silnik rozstrzygania akcji - maszyna stanów bitwy.

STANY:
═══════════════════════════════════════════════════════════════════

    IN_PROGRESS --(jedna drużyna bez żywych)--> OVER(winner)
    OVER        --(dowolna akcja)------------> OVER (bez zmian)

EXECUTE_ACTION:
═══════════════════════════════════════════════════════════════════

    1. game_over           -> zwróć stan bez zmian
    2. brak aktywnej       -> zwróć stan bez zmian
    3. start tury aktywnej jednostki:
         a) regen (log gdy wyleczono > 0)
         b) dekrementacja buffów (wygasłe znikają)
         c) zapis jednostki do magazynu
    4. dispatch: get_handler(skill.effect)
         - nieznana umiejętność -> brak efektu i brak logu
         - brak celu w magazynie -> gałąź nic nie robi
    5. warunek zwycięstwa (gracz sprawdzany pierwszy):
         - wrogowie wybici  -> winner = PLAYER
         - gracz wybity     -> winner = ENEMY
         - obie drużyny     -> remis (winner = None)
    6. gra trwa -> advance_turn()
    7. nowy BattleState (log i events tylko dopisywane)

Silnik UFA komendzie - nie sprawdza legalności celów. Walidacja
(battle.targeting.validate_targets) należy do warstwy wywołującej.
Z `strict_commands` nieznana umiejętność i cel spoza magazynu
dają InvalidCommandError zamiast cichego no-op.

Przykład użycia:
    >>> state = execute_action(state, ActionCommand.create("attack", ["enemy-skeleton-0"]))
    >>> state.log[-1]
    'Warrior attacks Skeleton for 22 damage!'
"""

from __future__ import annotations
from dataclasses import replace
from typing import Optional

from ..core.grid import get_team_units, set_unit
from ..core.position import Team
from ..effects.buff import apply_regen_healing, decrement_durations
from ..errors import InvalidCommandError, UnknownSkillError
from ..events.event_logger import EventType
from ..skills.handlers import TurnContext, get_handler
from ..skills.skill import Skill, SkillCatalog, get_skill_catalog
from .config import BattleConfig
from .initiative import advance_turn
from .state import ActionCommand, BattleState


def execute_action(
    state: BattleState,
    command: ActionCommand,
    config: Optional[BattleConfig] = None,
    catalog: Optional[SkillCatalog] = None,
) -> BattleState:
    """
    Rozstrzyga jedną akcję aktywnej jednostki.

    Args:
        state: Stan wejściowy (nie jest modyfikowany)
        command: Umiejętność + cele
        config: Konfiguracja bitwy (domyślnie BattleConfig())
        catalog: Katalog umiejętności (domyślnie z skills.yaml)

    Returns:
        BattleState: Nowy stan (lub ten sam obiekt dla no-op)

    Raises:
        InvalidCommandError: Tylko z config.strict_commands - nieznana
            umiejętność lub cel spoza magazynu
    """
    if state.game_over:
        return state

    active_id = state.active_unit_id
    if active_id is None or active_id not in state.grid.units:
        return state

    config = config or BattleConfig()
    catalog = catalog or get_skill_catalog()

    skill = _resolve_skill(command, catalog, config)
    if config.strict_commands:
        missing = [t for t in command.targets if t not in state.grid.units]
        if missing:
            raise InvalidCommandError(f"Unknown target(s): {', '.join(missing)}")

    ctx = TurnContext(grid=state.grid, round=state.round_number)

    # 3. Start tury
    caster = _start_turn(ctx, active_id)

    # 4. Dispatch
    if skill is not None:
        ctx.emit(
            EventType.SKILL_USE,
            caster.id,
            command.targets[0] if command.targets else None,
            skill=skill.id,
            targets=list(command.targets),
        )
        get_handler(skill.effect)(ctx, caster, skill, command.targets)

    # 5. Warunek zwycięstwa
    game_over, winner = _check_victory(ctx)
    if game_over:
        if winner is Team.PLAYER:
            ctx.say("Game Over! Player team wins!")
        elif winner is Team.ENEMY:
            ctx.say("Game Over! Enemy team wins!")
        else:
            ctx.say("Game Over! Draw!")
        ctx.emit(EventType.BATTLE_END, winner=winner.value if winner else None)

    # 6. Następna jednostka
    turn_order = state.turn_order
    if not game_over:
        turn_order = advance_turn(turn_order, ctx.grid)

    return replace(
        state,
        grid=ctx.grid,
        turn_order=turn_order,
        game_over=game_over,
        winner=winner,
        log=state.log + tuple(ctx.log),
        events=state.events + tuple(ctx.events),
    )


def _resolve_skill(
    command: ActionCommand,
    catalog: SkillCatalog,
    config: BattleConfig,
) -> Optional[Skill]:
    try:
        return catalog.get(command.skill)
    except UnknownSkillError as exc:
        if config.strict_commands:
            raise InvalidCommandError(str(exc)) from exc
        return None


def _start_turn(ctx: TurnContext, unit_id: str):
    """Regen, potem dekrementacja buffów. Zwraca zaktualizowaną jednostkę."""
    unit = ctx.grid.units[unit_id]
    ctx.emit(EventType.TURN_START, unit.id)

    unit, healed = apply_regen_healing(unit)
    if healed > 0:
        ctx.say(f"{unit.name} regenerates {healed} HP.")
        ctx.emit(EventType.UNIT_HEAL, unit.id, unit.id, amount=healed, hp_after=unit.health, source="regen")

    unit, expired = decrement_durations(unit)
    for buff in expired:
        ctx.emit(EventType.BUFF_EXPIRE, unit.id, buff=buff.kind.value)

    ctx.grid = set_unit(ctx.grid, unit)
    return unit


def _check_victory(ctx: TurnContext):
    """
    Returns:
        Tuple[bool, Optional[Team]]: (game_over, winner); remis = (True, None)
    """
    players_alive = bool(get_team_units(ctx.grid, Team.PLAYER))
    enemies_alive = bool(get_team_units(ctx.grid, Team.ENEMY))

    if players_alive and enemies_alive:
        return False, None
    if players_alive:
        return True, Team.PLAYER
    if enemies_alive:
        return True, Team.ENEMY
    return True, None
