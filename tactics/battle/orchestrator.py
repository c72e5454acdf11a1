"""
Orkiestrator bitwy - tworzenie gry i pętla tur AI.

PRZEPŁYW:
═══════════════════════════════════════════════════════════════════

    create_game()
        │  drużyny -> jednostki -> siatka -> kolejka
        │  log: "Battle begins! Heroes (2) vs Enemies (2)!"
        ▼
    execute_action(state, command)
        │  1. komenda gracza -> engine.execute_action()
        │  2. dopóki aktywna jednostka nie jest gracza i gra trwa:
        │        strategy(state, unit_id) -> engine.execute_action()
        ▼
    stan z aktywną jednostką gracza (albo game_over)

Pętla AI jest ograniczona przez max_auto_turns (BattleConfig).

run_auto_battle() gra WSZYSTKIMI jednostkami przez politykę - dla CLI
i testów.
"""

from __future__ import annotations
from dataclasses import replace
from functools import partial
from typing import Callable, Optional

from ..ai.policy import choose_action
from ..core.config_loader import ConfigLoader
from ..core.grid import create_empty_grid, place_unit
from ..core.position import Team
from ..core.rng import GameRNG
from ..events.event_logger import EventType, GameEvent
from ..skills.skill import SkillCatalog, get_skill_catalog
from ..units.party import Party, create_units_from_party, default_party
from . import engine
from .config import BattleConfig
from .initiative import create_turn_order, is_player_controlled
from .state import ActionCommand, BattleState

# (state, unit_id) -> komenda
ActionStrategy = Callable[[BattleState, str], ActionCommand]


def create_game(
    player_party: Optional[Party] = None,
    enemy_party: Optional[Party] = None,
    config: Optional[BattleConfig] = None,
    loader: Optional[ConfigLoader] = None,
) -> BattleState:
    """
    Tworzy nową bitwę.

    Args:
        player_party: Drużyna gracza (domyślnie z defaults.yaml)
        enemy_party: Drużyna wroga (domyślnie z defaults.yaml)
        config: Konfiguracja bitwy
        loader: Źródło danych YAML

    Returns:
        BattleState: Stan początkowy (runda 1, log otwarcia)

    Raises:
        PartyError: Niepoprawna drużyna
    """
    loader = loader or ConfigLoader()
    config = config or BattleConfig.load(loader)
    player_party = player_party or default_party(Team.PLAYER, loader)
    enemy_party = enemy_party or default_party(Team.ENEMY, loader)

    rows, cols = config.grid_rows, config.grid_cols
    player_units = create_units_from_party(player_party, Team.PLAYER, rows, cols, loader)
    enemy_units = create_units_from_party(enemy_party, Team.ENEMY, rows, cols, loader)

    grid = create_empty_grid(rows, cols)
    for unit in player_units + enemy_units:
        grid = place_unit(grid, unit, unit.position)

    opening = GameEvent(
        round=1,
        event_type=EventType.BATTLE_START,
        data={
            "player": {"name": player_party.name, "units": [u.id for u in player_units]},
            "enemy": {"name": enemy_party.name, "units": [u.id for u in enemy_units]},
            "turn_order": config.turn_order.value,
        },
    )

    return BattleState(
        grid=grid,
        turn_order=create_turn_order(grid, config.turn_order),
        player_controlled=frozenset(u.id for u in player_units),
        log=(
            f"Battle begins! {player_party.name} ({len(player_units)}) "
            f"vs {enemy_party.name} ({len(enemy_units)})!",
        ),
        events=(opening,),
    )


def default_strategy(
    rng: Optional[GameRNG] = None,
    config: Optional[BattleConfig] = None,
    catalog: Optional[SkillCatalog] = None,
) -> ActionStrategy:
    """Polityka AI z podpiętym RNG i konfiguracją."""
    return partial(choose_action, rng=rng or GameRNG(), catalog=catalog, config=config)


def run_ai_turns(
    state: BattleState,
    strategy: Optional[ActionStrategy] = None,
    config: Optional[BattleConfig] = None,
    catalog: Optional[SkillCatalog] = None,
) -> BattleState:
    """
    Wykonuje tury AI aż do jednostki gracza lub końca bitwy.

    Przerywa po config.max_auto_turns turach.
    """
    config = config or BattleConfig()
    catalog = catalog or get_skill_catalog()
    strategy = strategy or default_strategy(config=config, catalog=catalog)

    for _ in range(config.max_auto_turns):
        if state.game_over:
            break
        active_id = state.active_unit_id
        if active_id is None or is_player_controlled(active_id, state.player_controlled):
            break
        state = engine.execute_action(state, strategy(state, active_id), config, catalog)

    return state


def execute_action(
    state: BattleState,
    command: ActionCommand,
    strategy: Optional[ActionStrategy] = None,
    config: Optional[BattleConfig] = None,
    catalog: Optional[SkillCatalog] = None,
) -> BattleState:
    """
    Komenda gracza, a potem tury AI do następnej jednostki gracza.

    Args:
        state: Stan bitwy
        command: Komenda aktywnej jednostki (już zwalidowana)
        strategy: Strategia dla jednostek AI (domyślnie choose_action)
        config: Konfiguracja bitwy
        catalog: Katalog umiejętności

    Returns:
        BattleState: Nowy stan
    """
    config = config or BattleConfig()
    catalog = catalog or get_skill_catalog()

    state = engine.execute_action(state, command, config, catalog)
    return run_ai_turns(state, strategy, config, catalog)


def run_auto_battle(
    state: BattleState,
    strategy: Optional[ActionStrategy] = None,
    config: Optional[BattleConfig] = None,
    catalog: Optional[SkillCatalog] = None,
) -> BattleState:
    """
    Gra wszystkimi jednostkami przez strategię aż do końca bitwy.

    Returns:
        BattleState: Stan końcowy (game_over) lub stan po
            max_auto_turns turach
    """
    result = run_ai_turns(replace(state, player_controlled=frozenset()), strategy, config, catalog)
    return replace(result, player_controlled=state.player_controlled)
