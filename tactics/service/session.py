"""
Sesja gry - jawny obiekt trzymający bieżącą bitwę.

Brak globalnego stanu: każdy klient (API, CLI, test) tworzy własną
sesję. "New game" podmienia stan w całości.

    session = GameSession(seed=42)
    state = session.get_state()            # gra domyślna już utworzona
    state = session.perform_action(ActionCommand.create("attack", [...]))
    state = session.new_game()

perform_action() waliduje komendę ZANIM trafi do silnika:
    1. umiejętność istnieje i aktywna jednostka ją ma   -> INVALID_SKILL
       aktywna jednostka nie należy do gracza           -> ACTION_FAILED
    2. validate_targets()                               -> INVALID_TARGETS
    3. orchestrator.execute_action() (gracz + tury AI)
       wyjątek                                          -> ACTION_FAILED
"""

from __future__ import annotations
from typing import Optional

from ..battle import orchestrator
from ..battle.config import BattleConfig
from ..battle.initiative import is_player_controlled
from ..battle.state import ActionCommand, BattleState
from ..battle.targeting import validate_targets
from ..core.config_loader import ConfigLoader
from ..core.rng import GameRNG
from ..errors import TacticsError, UnknownSkillError
from ..skills.skill import SkillCatalog
from ..units.party import Party
from .errors import (
    ACTION_FAILED,
    INVALID_SKILL,
    INVALID_TARGETS,
    NEW_GAME_FAILED,
    GameServiceError,
)


class GameSession:
    """
    Bieżąca bitwa jednego klienta.

    Attributes:
        config (BattleConfig): Konfiguracja bitwy
        seed (int): Ziarno RNG polityki AI (nowy GameRNG przy new_game)
        catalog (SkillCatalog): Katalog umiejętności
    """

    def __init__(
        self,
        config: Optional[BattleConfig] = None,
        seed: Optional[int] = None,
        loader: Optional[ConfigLoader] = None,
    ):
        self.loader = loader or ConfigLoader()
        self.config = config or BattleConfig.load(self.loader)
        self.catalog = SkillCatalog.from_config(self.loader)
        self.rng = GameRNG(seed)
        self.seed = self.rng.seed
        self._player_party: Optional[Party] = None
        self._enemy_party: Optional[Party] = None
        self._state = self._create_state(None, None)

    # ─────────────────────────────────────────────────────────────────────────
    # API
    # ─────────────────────────────────────────────────────────────────────────

    def get_state(self) -> BattleState:
        return self._state

    def set_parties(self, player: Optional[Party], enemy: Optional[Party]) -> None:
        """Drużyny dla kolejnych new_game() (None = domyślna)."""
        self._player_party = player
        self._enemy_party = enemy

    def new_game(
        self,
        player: Optional[Party] = None,
        enemy: Optional[Party] = None,
    ) -> BattleState:
        """
        Tworzy nową bitwę i podmienia stan sesji.

        Args:
            player: Drużyna gracza (None = ustawiona przez set_parties
                albo domyślna)
            enemy: Drużyna wroga (j.w.)

        Raises:
            GameServiceError: NEW_GAME_FAILED
        """
        if player is None and enemy is None:
            player, enemy = self._player_party, self._enemy_party

        # Odrzucona drużyna nie zmienia sesji
        self._state = self._create_state(player, enemy)
        self.set_parties(player, enemy)
        return self._state

    def perform_action(self, command: ActionCommand) -> BattleState:
        """
        Waliduje i wykonuje komendę aktywnej jednostki gracza.

        Raises:
            GameServiceError: INVALID_SKILL / INVALID_TARGETS / ACTION_FAILED
        """
        state = self._state
        if state.game_over:
            return state

        try:
            skill = self.catalog.get(command.skill)
        except UnknownSkillError:
            raise GameServiceError(f"Invalid skill: '{command.skill}'", INVALID_SKILL) from None

        active_id = state.active_unit_id
        active = state.grid.units.get(active_id) if active_id else None
        if active is None or not active.has_skill(skill.id):
            raise GameServiceError(
                f"Unit {active_id} cannot use skill '{skill.id}'", INVALID_SKILL
            )
        if not is_player_controlled(active.id, state.player_controlled):
            raise GameServiceError(f"Unit {active.id} is not player controlled", ACTION_FAILED)

        validation = validate_targets(
            skill,
            command.targets,
            state,
            active.id,
            self.config.enforce_melee_range,
        )
        if not validation.valid:
            raise GameServiceError(validation.error or "Invalid targets", INVALID_TARGETS)

        try:
            self._state = orchestrator.execute_action(
                state,
                command,
                strategy=self._strategy(),
                config=self.config,
                catalog=self.catalog,
            )
        except (TacticsError, ValueError, KeyError) as exc:
            raise GameServiceError(f"Failed to perform action: {exc}", ACTION_FAILED) from exc
        return self._state

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    def _strategy(self) -> orchestrator.ActionStrategy:
        return orchestrator.default_strategy(self.rng, self.config, self.catalog)

    def _create_state(self, player: Optional[Party], enemy: Optional[Party]) -> BattleState:
        """
        Nowa bitwa + tury AI, jeśli wróg zaczyna.

        RNG wraca do seeda dopiero po udanym create_game().
        """
        try:
            state = orchestrator.create_game(
                player,
                enemy,
                config=self.config,
                loader=self.loader,
            )
        except (TacticsError, ValueError, KeyError) as exc:
            raise GameServiceError(f"Failed to create new game: {exc}", NEW_GAME_FAILED) from exc
        self.rng.reset()
        return orchestrator.run_ai_turns(state, self._strategy(), self.config, self.catalog)
