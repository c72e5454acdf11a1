"""
Testy dla polityki AI.

Testuje:
- Fail-safe dla nieznanej jednostki
- Heurystyki celów (max HP wroga, min HP sojusznika)
- Remisy rozstrzygane kolejnością kandydatów
- Wykluczanie skip/move i umiejętności bez celów
- Powtarzalność przy tym samym seedzie
"""

import pytest

from tactics.ai.policy import choose_action, get_selector, select_highest_hp, select_lowest_hp
from tactics.battle.initiative import create_turn_order
from tactics.battle.state import BattleState
from tactics.core.grid import create_empty_grid, place_unit, update_unit
from tactics.core.position import GridPosition, Team
from tactics.core.rng import GameRNG
from tactics.skills.skill import Skill, SkillCatalog, SkillEffect, TargetCategory, get_skill
from tactics.units.unit import Unit


def create_unit(unit_id, team, row, health=50, skills=("attack", "defend", "skip", "move")):
    """Helper do tworzenia jednostek testowych."""
    return Unit(
        id=unit_id,
        name=unit_id,
        health=health,
        max_health=100,
        power=10,
        magic=0,
        defense=2,
        initiative=5,
        position=GridPosition(row, 1 if team is Team.PLAYER else 2),
        team=team,
        skills=tuple(skills),
    )


def build_state(*units):
    grid = create_empty_grid()
    for unit in units:
        grid = place_unit(grid, unit, unit.position)
    return BattleState(grid=grid, turn_order=create_turn_order(grid))


@pytest.fixture
def rng():
    return GameRNG(seed=12345)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: FAIL-SAFE
# ═══════════════════════════════════════════════════════════════════════════

def test_unknown_unit_skips(rng):
    state = build_state(create_unit("p", Team.PLAYER, 0), create_unit("e", Team.ENEMY, 0))
    command = choose_action(state, "ghost", rng=rng)

    assert command.skill == "skip"
    assert command.targets == ()


def test_only_skip_and_move_means_skip(rng):
    state = build_state(
        create_unit("p", Team.PLAYER, 0),
        create_unit("e", Team.ENEMY, 0, skills=("skip", "move")),
    )
    assert choose_action(state, "e", rng=rng).skill == "skip"


def test_skill_without_candidates_not_chosen(rng):
    state = build_state(
        create_unit("p", Team.PLAYER, 0),
        create_unit("e", Team.ENEMY, 0, skills=("attack", "skip")),
    )
    state = BattleState(grid=update_unit(state.grid, "p", health=0), turn_order=state.turn_order)

    assert choose_action(state, "e", rng=rng).skill == "skip"


def test_never_picks_skip_or_move(rng):
    state = build_state(create_unit("p", Team.PLAYER, 0), create_unit("e", Team.ENEMY, 0))
    picks = {choose_action(state, "e", rng=rng).skill for _ in range(50)}

    assert picks <= {"attack", "defend"}


def test_pass_and_move_effects_excluded_regardless_of_id(rng):
    catalog = SkillCatalog([
        get_skill("attack"),
        Skill(id="wait", name="Wait", effect=SkillEffect.PASS),
        Skill(id="shuffle", name="Shuffle", effect=SkillEffect.MOVE, targeting=get_skill("move").targeting),
    ])
    state = build_state(
        create_unit("p", Team.PLAYER, 0),
        create_unit("e", Team.ENEMY, 0, skills=("wait", "shuffle", "attack")),
    )
    picks = {choose_action(state, "e", rng=rng, catalog=catalog).skill for _ in range(30)}

    assert picks == {"attack"}


# ═══════════════════════════════════════════════════════════════════════════
# TEST: HEURYSTYKI CELÓW
# ═══════════════════════════════════════════════════════════════════════════

def test_attack_targets_highest_health_enemy(rng):
    state = build_state(
        create_unit("p1", Team.PLAYER, 0, health=40),
        create_unit("p2", Team.PLAYER, 1, health=90),
        create_unit("e", Team.ENEMY, 0, skills=("attack",)),
    )
    command = choose_action(state, "e", rng=rng)

    assert command.skill == "attack"
    assert command.targets == ("p2",)


def test_heal_targets_lowest_health_ally(rng):
    state = build_state(
        create_unit("p", Team.PLAYER, 0),
        create_unit("e1", Team.ENEMY, 0, health=80, skills=("heal",)),
        create_unit("e2", Team.ENEMY, 1, health=30),
    )
    command = choose_action(state, "e1", rng=rng)

    assert command.skill == "heal"
    assert command.targets == ("e2",)


def test_tie_goes_to_first_candidate(rng):
    state = build_state(
        create_unit("p1", Team.PLAYER, 0, health=70),
        create_unit("p2", Team.PLAYER, 1, health=70),
        create_unit("e", Team.ENEMY, 0, skills=("attack",)),
    )
    assert choose_action(state, "e", rng=rng).targets == ("p1",)


def test_defend_has_no_targets(rng):
    state = build_state(
        create_unit("p", Team.PLAYER, 0),
        create_unit("e", Team.ENEMY, 0, skills=("defend",)),
    )
    command = choose_action(state, "e", rng=rng)

    assert command.skill == "defend"
    assert command.targets == ()


def test_selector_registry():
    assert get_selector(TargetCategory.ENEMY) is select_highest_hp
    assert get_selector(TargetCategory.ALLY_ANY) is select_lowest_hp


# ═══════════════════════════════════════════════════════════════════════════
# TEST: DETERMINIZM
# ═══════════════════════════════════════════════════════════════════════════

def test_same_seed_same_choices():
    state = build_state(
        create_unit("p", Team.PLAYER, 0),
        create_unit("e", Team.ENEMY, 0, skills=("attack", "defend", "bolt", "leech")),
    )
    rng1, rng2 = GameRNG(7), GameRNG(7)

    first = [choose_action(state, "e", rng=rng1) for _ in range(20)]
    second = [choose_action(state, "e", rng=rng2) for _ in range(20)]

    assert first == second


def test_rng_reset_replays_choices():
    rng = GameRNG(3)
    first = [rng.choice("abcdef") for _ in range(10)]
    rng.reset()
    assert [rng.choice("abcdef") for _ in range(10)] == first
