"""
Testy dla sesji gry.

Testuje:
- Grę domyślną (Warrior + Cleric vs 2x Skeleton)
- Walidację komend i kody błędów
- Tury AI po akcji gracza
- new_game z własnymi drużynami
"""

import pytest

from tactics.battle import orchestrator
from tactics.battle.config import BattleConfig
from tactics.battle.initiative import TurnOrderPolicy
from tactics.battle.state import ActionCommand
from tactics.core.position import GridPosition, Team
from tactics.service import GameServiceError, GameSession
from tactics.errors import InvalidCommandError
from tactics.service.errors import ACTION_FAILED, INVALID_SKILL, INVALID_TARGETS, NEW_GAME_FAILED
from tactics.units.party import Party, PartyMember


@pytest.fixture
def session():
    return GameSession(seed=12345)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: STAN POCZĄTKOWY
# ═══════════════════════════════════════════════════════════════════════════

def test_default_game(session):
    state = session.get_state()

    assert state.log[0] == "Battle begins! Heroes (2) vs Enemies (2)!"
    assert set(state.grid.units) == {
        "player-warrior-0", "player-cleric-1", "enemy-skeleton-0", "enemy-skeleton-1",
    }
    assert state.active_unit_id == "player-warrior-0"
    assert state.player_controlled == frozenset({"player-warrior-0", "player-cleric-1"})


def test_sessions_are_independent():
    first, second = GameSession(seed=1), GameSession(seed=1)
    first.perform_action(ActionCommand.create("defend"))

    assert len(second.get_state().log) == 1


# ═══════════════════════════════════════════════════════════════════════════
# TEST: AKCJE
# ═══════════════════════════════════════════════════════════════════════════

def test_attack_damages_skeleton(session):
    state = session.perform_action(ActionCommand.create("attack", ["enemy-skeleton-0"]))

    # Warrior power 25 vs Skeleton defense 3
    assert state.log[1] == "Warrior attacks Skeleton for 22 damage!"
    assert state.active_unit_id == "player-cleric-1"


def test_ai_turns_run_after_last_player_unit(session):
    session.perform_action(ActionCommand.create("defend"))
    state = session.perform_action(ActionCommand.create("defend"))

    # Oba szkielety zagrały, wraca Warrior w rundzie 2
    assert state.round_number == 2
    assert state.active_unit_id == "player-warrior-0"


def test_unknown_skill(session):
    with pytest.raises(GameServiceError) as exc_info:
        session.perform_action(ActionCommand.create("fireball"))
    assert exc_info.value.code == INVALID_SKILL


def test_skill_unit_does_not_have(session):
    # Warrior nie ma "heal"
    with pytest.raises(GameServiceError) as exc_info:
        session.perform_action(ActionCommand.create("heal", ["player-warrior-0"]))
    assert exc_info.value.code == INVALID_SKILL


def test_invalid_targets(session):
    with pytest.raises(GameServiceError) as exc_info:
        session.perform_action(ActionCommand.create("attack", ["player-cleric-1"]))

    assert exc_info.value.code == INVALID_TARGETS
    assert "not a valid enemy target" in exc_info.value.message


def test_rejected_action_keeps_state(session):
    before = session.get_state()
    with pytest.raises(GameServiceError):
        session.perform_action(ActionCommand.create("attack", []))
    assert session.get_state() is before


def test_ai_unit_cannot_be_commanded():
    """Pętla AI przerwana limitem - aktywny jest szkielet, nie jednostka gracza."""
    session = GameSession(config=BattleConfig(max_auto_turns=1), seed=12345)
    session.perform_action(ActionCommand.create("skip"))
    before = session.perform_action(ActionCommand.create("skip"))
    assert before.active_unit_id == "enemy-skeleton-1"

    with pytest.raises(GameServiceError) as exc_info:
        session.perform_action(ActionCommand.create("attack", ["player-warrior-0"]))

    assert exc_info.value.code == ACTION_FAILED
    assert session.get_state() is before


def test_engine_failure_wrapped_as_action_failed(session, monkeypatch):
    def broken(*args, **kwargs):
        raise InvalidCommandError("engine exploded")

    monkeypatch.setattr(orchestrator, "execute_action", broken)
    before = session.get_state()

    with pytest.raises(GameServiceError) as exc_info:
        session.perform_action(ActionCommand.create("defend"))

    assert exc_info.value.code == ACTION_FAILED
    assert "engine exploded" in exc_info.value.message
    assert session.get_state() is before


# ═══════════════════════════════════════════════════════════════════════════
# TEST: NOWA GRA
# ═══════════════════════════════════════════════════════════════════════════

def test_new_game_resets(session):
    session.perform_action(ActionCommand.create("defend"))
    state = session.new_game()

    assert len(state.log) == 1
    assert state.active_unit_id == "player-warrior-0"


def test_new_game_with_custom_parties(session):
    player = Party("Solo", (PartyMember("mage", GridPosition(2, 1)),))
    enemy = Party.from_template_ids("Horde", ["orc", "orc", "skeleton"])
    state = session.new_game(player, enemy)

    assert state.log[0] == "Battle begins! Solo (1) vs Horde (3)!"
    assert state.grid.units["player-mage-0"].position == GridPosition(2, 1)


def test_new_game_invalid_party(session):
    with pytest.raises(GameServiceError) as exc_info:
        session.new_game(Party.from_template_ids("Too many", ["warrior"] * 5))
    assert exc_info.value.code == NEW_GAME_FAILED


def test_rejected_party_not_kept(session):
    before = session.get_state()
    with pytest.raises(GameServiceError):
        session.new_game(Party.from_template_ids("Bad", ["dragon"]))
    assert session.get_state() is before

    state = session.new_game()
    assert state.log[0] == "Battle begins! Heroes (2) vs Enemies (2)!"


def test_new_game_reuses_accepted_parties(session):
    session.new_game(Party.from_template_ids("Solo", ["archer"]))
    state = session.new_game()

    assert state.log[0] == "Battle begins! Solo (1) vs Enemies (2)!"


def test_enemy_first_under_initiative_policy():
    """Wróg zaczyna - tury AI wykonane od razu przy tworzeniu gry."""
    config = BattleConfig(turn_order=TurnOrderPolicy.INITIATIVE)
    session = GameSession(config=config, seed=3)
    session.set_parties(
        Party.from_template_ids("H", ["paladin"]),     # initiative 6
        Party.from_template_ids("E", ["skeleton"]),    # initiative 8
    )
    state = session.new_game()

    assert state.active_unit_id == "player-paladin-0"
    assert len(state.log) > 1


def test_same_seed_same_battle():
    a, b = GameSession(seed=99), GameSession(seed=99)
    for s in (a, b):
        s.perform_action(ActionCommand.create("attack", ["enemy-skeleton-0"]))
        s.perform_action(ActionCommand.create("heal", ["player-warrior-0"]))

    assert a.get_state().log == b.get_state().log
