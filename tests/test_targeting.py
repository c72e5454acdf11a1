"""
Testy dla resolvera celów.

Testuje:
- Kandydatów dla każdej kategorii
- Pomijanie pokonanych jednostek
- Opcjonalne ograniczenie melee do frontu
- validate_targets (liczba celów, przynależność) - bez wyjątków
"""

import pytest

from tactics.battle.initiative import create_turn_order
from tactics.battle.state import BattleState
from tactics.battle.targeting import get_valid_targets, validate_targets, has_valid_targets
from tactics.core.grid import create_empty_grid, place_unit, update_unit
from tactics.core.position import GridPosition, Team
from tactics.skills.skill import RangeType, TargetCategory, TargetRequirement, get_skill
from tactics.units.unit import Unit


def create_unit(unit_id: str, team: Team, row: int, col: int, health: int = 50) -> Unit:
    """Helper do tworzenia jednostek testowych."""
    return Unit(
        id=unit_id,
        name=unit_id.title(),
        health=health,
        max_health=50,
        power=10,
        magic=0,
        defense=2,
        initiative=5,
        position=GridPosition(row, col),
        team=team,
    )


@pytest.fixture
def state():
    """
    col:    0     1   |   2     3
    row 0  [p1]  [p2] |  [e1]  [  ]
    row 1  [  ]  [  ] |  [  ]  [e2]
    """
    grid = create_empty_grid()
    for unit in (
        create_unit("p1", Team.PLAYER, 0, 0),
        create_unit("p2", Team.PLAYER, 0, 1),
        create_unit("e1", Team.ENEMY, 0, 2),
        create_unit("e2", Team.ENEMY, 1, 3),
    ):
        grid = place_unit(grid, unit, unit.position)
    return BattleState(grid=grid, turn_order=create_turn_order(grid))


def ids(units):
    return [u.id for u in units]


# ═══════════════════════════════════════════════════════════════════════════
# TEST: KANDYDACI
# ═══════════════════════════════════════════════════════════════════════════

def test_enemy_candidates_in_store_order(state):
    req = TargetRequirement(TargetCategory.ENEMY_ANY)
    assert ids(get_valid_targets(state, "p1", req)) == ["e1", "e2"]


def test_ally_candidates_include_caster(state):
    req = TargetRequirement(TargetCategory.ALLY_ANY)
    assert ids(get_valid_targets(state, "p2", req)) == ["p1", "p2"]


def test_self_candidate(state):
    req = TargetRequirement(TargetCategory.SELF)
    assert ids(get_valid_targets(state, "p2", req)) == ["p2"]


def test_none_category_has_no_candidates(state):
    assert get_valid_targets(state, "p1", TargetRequirement(TargetCategory.NONE)) == []


def test_unknown_caster_has_no_candidates(state):
    assert get_valid_targets(state, "ghost", TargetRequirement(TargetCategory.ENEMY)) == []


def test_defeated_units_excluded(state):
    state = BattleState(grid=update_unit(state.grid, "e1", health=0), turn_order=state.turn_order)
    req = TargetRequirement(TargetCategory.ENEMY)
    assert ids(get_valid_targets(state, "p1", req)) == ["e2"]


def test_enemy_perspective_flips_sides(state):
    req = TargetRequirement(TargetCategory.ENEMY)
    assert ids(get_valid_targets(state, "e2", req)) == ["p1", "p2"]


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ZASIĘG MELEE
# ═══════════════════════════════════════════════════════════════════════════

def test_melee_unrestricted_by_default(state):
    req = TargetRequirement(TargetCategory.ENEMY, range=RangeType.MELEE)
    assert ids(get_valid_targets(state, "p1", req)) == ["e1", "e2"]


def test_melee_restricted_to_front_column(state):
    req = TargetRequirement(TargetCategory.ENEMY, range=RangeType.MELEE)
    assert ids(get_valid_targets(state, "p1", req, enforce_melee_range=True)) == ["e1"]


def test_melee_front_falls_back_when_column_cleared(state):
    state = BattleState(grid=update_unit(state.grid, "e1", health=0), turn_order=state.turn_order)
    req = TargetRequirement(TargetCategory.ENEMY, range=RangeType.MELEE)
    assert ids(get_valid_targets(state, "p1", req, enforce_melee_range=True)) == ["e2"]


def test_enemy_any_ignores_melee_restriction(state):
    req = TargetRequirement(TargetCategory.ENEMY_ANY, range=RangeType.MELEE)
    assert ids(get_valid_targets(state, "p1", req, enforce_melee_range=True)) == ["e1", "e2"]


# ═══════════════════════════════════════════════════════════════════════════
# TEST: WALIDACJA
# ═══════════════════════════════════════════════════════════════════════════

def test_validate_accepts_legal_target(state):
    result = validate_targets(get_skill("attack"), ["e2"], state, "p1")
    assert result.valid
    assert result.error is None


def test_validate_rejects_wrong_count(state):
    result = validate_targets(get_skill("attack"), [], state, "p1")
    assert not result.valid
    assert result.error == "Expected 1 target(s), but got 0"


def test_validate_rejects_too_many_for_targetless_skill(state):
    result = validate_targets(get_skill("defend"), ["p1"], state, "p1")
    assert not result.valid
    assert result.error == "Expected 0 target(s), but got 1"


def test_validate_rejects_ally_for_enemy_skill(state):
    result = validate_targets(get_skill("attack"), ["p2"], state, "p1")
    assert not result.valid
    assert result.error == "Invalid target: p2 is not a valid enemy target"


def test_validate_rejects_unknown_id_without_raising(state):
    result = validate_targets(get_skill("heal"), ["ghost"], state, "p1")
    assert not result.valid
    assert "ghost" in result.error


def test_validate_melee_option(state):
    skill = get_skill("attack")
    assert validate_targets(skill, ["e2"], state, "p1").valid
    assert not validate_targets(skill, ["e2"], state, "p1", enforce_melee_range=True).valid


def test_has_valid_targets(state):
    assert has_valid_targets(get_skill("attack"), state, "p1")
    assert has_valid_targets(get_skill("skip"), state, "p1")
