"""
Testy dla wzorów obrażeń.
"""

from tactics.combat.damage import (
    base_damage, calculate_strike_damage, calculate_ranged_damage, calculate_drain_heal,
)
from tactics.core.position import GridPosition, Team
from tactics.effects.buff import BuffKind, apply_buff
from tactics.units.unit import Unit


def create_unit(power=20, defense=3, health=80, max_health=80):
    """Helper do tworzenia jednostek testowych."""
    return Unit(
        id="test",
        name="Test",
        health=health,
        max_health=max_health,
        power=power,
        magic=0,
        defense=defense,
        initiative=5,
        position=GridPosition(0, 0),
        team=Team.PLAYER,
    )


def test_base_damage_never_below_one():
    assert base_damage(20, 3) == 17
    assert base_damage(3, 20) == 1
    assert base_damage(5, 5) == 1


def test_strike_without_stance():
    result = calculate_strike_damage(create_unit(power=20), create_unit(defense=3))
    assert result.final_damage == 17
    assert not result.defended


def test_strike_into_stance_rounds_up():
    defender = apply_buff(create_unit(defense=3), BuffKind.DEFENDING, 1)
    result = calculate_strike_damage(create_unit(power=20), defender)

    assert result.final_damage == 9
    assert result.defended


def test_strike_into_stance_minimum_one():
    defender = apply_buff(create_unit(defense=50), BuffKind.DEFENDING, 1)
    assert calculate_strike_damage(create_unit(power=1), defender).final_damage == 1


def test_ranged_floors_and_ignores_stance():
    defender = apply_buff(create_unit(defense=3), BuffKind.DEFENDING, 1)
    result = calculate_ranged_damage(create_unit(power=20), defender, 0.8)

    assert result.final_damage == 13
    assert result.defended


def test_drain_heal_capped():
    assert calculate_drain_heal(create_unit(health=50), 11, 0.5) == 5
    assert calculate_drain_heal(create_unit(health=79), 11, 0.5) == 1
    assert calculate_drain_heal(create_unit(health=80), 11, 0.5) == 0
