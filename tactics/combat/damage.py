"""
Obliczanie obrażeń ciosów.

WZÓR BAZOWY:
═══════════════════════════════════════════════════════════════════

    base = max(1, effective_power - defense)

    effective_power = power + BLESS (patrz effects.buff)
    Obrażenia NIGDY nie spadają poniżej 1.

CIOS WRĘCZ (strike)
─────────────────────────────────────────────────────────────
    damage = base                 (cel bez postawy)
    damage = ceil(base / 2)       (cel w postawie obronnej)

    Przykład (power 20 vs defense 3):
        bez postawy:  17
        w postawie:   ceil(17 / 2) = 9

CIOS DYSTANSOWY / DRENAŻ (ranged_strike, drain)
─────────────────────────────────────────────────────────────
    damage = floor(base * multiplier)

    Postawa NIE zmniejsza obrażeń, ale i tak zostaje zużyta.
    Mnożnik < 1.0 może dać 0 przy bardzo niskim base.

    Przykład (bolt x0.8, power 20 vs defense 3):
        floor(17 * 0.8) = 13

DRENAŻ - leczenie castera
─────────────────────────────────────────────────────────────
    heal = floor(damage * drain_fraction), max do brakującego HP
"""

from __future__ import annotations
from dataclasses import dataclass
from math import ceil, floor
from typing import Any, Dict, TYPE_CHECKING

from ..effects.buff import get_effective_power, is_defending

if TYPE_CHECKING:
    from ..units.unit import Unit


@dataclass(frozen=True)
class DamageResult:
    """
    Wynik obliczenia obrażeń.

    Attributes:
        base_damage (int): max(1, power - defense) przed mnożnikiem
        final_damage (int): Obrażenia faktycznie zadane
        defended (bool): Czy cel stał w postawie obronnej
    """
    base_damage: int
    final_damage: int
    defended: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_damage": self.base_damage,
            "final_damage": self.final_damage,
            "defended": self.defended,
        }


def base_damage(power: int, defense: int) -> int:
    """max(1, power - defense)."""
    return max(1, power - defense)


def calculate_strike_damage(attacker: "Unit", defender: "Unit") -> DamageResult:
    """
    Obrażenia ciosu wręcz (postawa obronna połowi, zaokrąglając w górę).

    Examples:
        >>> calculate_strike_damage(a, b).final_damage    # power 20, defense 3
        17
    """
    base = base_damage(get_effective_power(attacker), defender.defense)
    defended = is_defending(defender)
    final = ceil(base / 2) if defended else base
    return DamageResult(base_damage=base, final_damage=final, defended=defended)


def calculate_ranged_damage(
    attacker: "Unit",
    defender: "Unit",
    multiplier: float,
) -> DamageResult:
    """Obrażenia ciosu dystansowego: floor(base * multiplier), bez połowienia."""
    base = base_damage(get_effective_power(attacker), defender.defense)
    return DamageResult(
        base_damage=base,
        final_damage=floor(base * multiplier),
        defended=is_defending(defender),
    )


def calculate_drain_heal(caster: "Unit", damage: int, fraction: float) -> int:
    """Leczenie castera z drenażu, ograniczone brakującym HP."""
    return max(0, min(floor(damage * fraction), caster.missing_health()))
