"""
System buffów (ledger statusów jednostki).

Buffy to czasowe modyfikatory przypięte do jednostki.
Czas trwania liczony jest w TURACH WŁAŚCICIELA, nie w rundach.

RODZAJE BUFFÓW:
═══════════════════════════════════════════════════════════════════

    DEFENDING (postawa obronna)
    ─────────────────────────────────────────────────────────────
    Połowa obrażeń od ataku wręcz (zaokrąglone w górę).
    Zużywana przy pierwszym trafieniu właściciela.

    HASTE (przyspieszenie)
    ─────────────────────────────────────────────────────────────
    effective_initiative = initiative + magnitude

    BLESS (błogosławieństwo)
    ─────────────────────────────────────────────────────────────
    effective_power = power + magnitude

    REGEN (regeneracja)
    ─────────────────────────────────────────────────────────────
    Na początku tury właściciela leczy `magnitude` HP
    (nie więcej niż brakujące HP).

STACKOWANIE (merge-by-max):
═══════════════════════════════════════════════════════════════════

    Co najwyżej JEDEN buff danego rodzaju na jednostkę.
    Ponowne nałożenie odświeża istniejący wpis:

        duration  = max(stary, nowy)
        magnitude = max(stary, nowy)
        source    = nowe źródło

    Efekty NIE sumują się addytywnie.

CYKL ŻYCIA:
═══════════════════════════════════════════════════════════════════

    1. APPLY  - nałożenie przez umiejętność
    2. TICK   - na START tury właściciela (przed akcją):
                najpierw regen, potem decrement_durations()
    3. EXPIRE - duration <= 0 -> buff usuwany

Wszystkie funkcje są czyste - zwracają nową jednostkę.

Przykład użycia:
    >>> unit = apply_buff(unit, BuffKind.BLESS, duration=5, magnitude=10)
    >>> get_effective_power(unit)  # power + 10
    35
    >>> unit, expired = decrement_durations(unit)
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..units.unit import Unit


class BuffKind(Enum):
    """Rodzaj buffa."""

    DEFENDING = "defending"
    HASTE = "haste"
    BLESS = "bless"
    REGEN = "regen"


@dataclass(frozen=True)
class Buff:
    """
    Buff nałożony na jednostkę.

    Attributes:
        kind (BuffKind): Rodzaj buffa
        duration (int): Pozostałe tury właściciela (> 0 dopóki aktywny)
        magnitude (int): Siła efektu (+power, +initiative, HP/turę)
        source_id (Optional[str]): ID jednostki, która nałożyła buff
    """
    kind: BuffKind
    duration: int
    magnitude: int = 0
    source_id: Optional[str] = None

    def is_expired(self) -> bool:
        return self.duration <= 0

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje buff."""
        return {
            "kind": self.kind.value,
            "duration": self.duration,
            "magnitude": self.magnitude,
            "source_id": self.source_id,
        }

    def __repr__(self) -> str:
        return f"Buff({self.kind.value}, {self.duration}t, {self.magnitude})"


# ─────────────────────────────────────────────────────────────────────────────
# APLIKACJA / USUWANIE
# ─────────────────────────────────────────────────────────────────────────────

def apply_buff(
    unit: "Unit",
    kind: BuffKind,
    duration: int,
    magnitude: int = 0,
    source: Optional[str] = None,
) -> "Unit":
    """
    Nakłada buff na jednostkę (merge-by-max przy istniejącym rodzaju).

    Args:
        unit: Jednostka
        kind: Rodzaj buffa
        duration: Czas trwania w turach właściciela
        magnitude: Siła efektu
        source: ID jednostki nakładającej

    Returns:
        Unit: Nowa jednostka z buffem
    """
    buffs = list(unit.buffs)
    for index, existing in enumerate(buffs):
        if existing.kind is kind:
            buffs[index] = Buff(
                kind=kind,
                duration=max(existing.duration, duration),
                magnitude=max(existing.magnitude, magnitude),
                source_id=source,
            )
            return replace(unit, buffs=tuple(buffs))

    buffs.append(Buff(kind=kind, duration=duration, magnitude=magnitude, source_id=source))
    return replace(unit, buffs=tuple(buffs))


def remove_buff(unit: "Unit", kind: BuffKind) -> "Unit":
    """Usuwa wszystkie wpisy danego rodzaju."""
    if not has_buff(unit, kind):
        return unit
    return replace(unit, buffs=tuple(b for b in unit.buffs if b.kind is not kind))


def decrement_durations(unit: "Unit") -> Tuple["Unit", List[Buff]]:
    """
    Zmniejsza czas trwania wszystkich buffów o 1 i usuwa wygasłe.

    Wywoływane dokładnie raz, na początku tury właściciela.

    Returns:
        Tuple[Unit, List[Buff]]: Nowa jednostka i lista wygasłych buffów
            (z duration po dekrementacji)
    """
    if not unit.buffs:
        return unit, []

    kept: List[Buff] = []
    expired: List[Buff] = []
    for buff in unit.buffs:
        ticked = replace(buff, duration=buff.duration - 1)
        if ticked.is_expired():
            expired.append(ticked)
        else:
            kept.append(ticked)

    return replace(unit, buffs=tuple(kept)), expired


# ─────────────────────────────────────────────────────────────────────────────
# ZAPYTANIA
# ─────────────────────────────────────────────────────────────────────────────

def get_buff_magnitude(unit: "Unit", kind: BuffKind) -> int:
    """Suma magnitude wszystkich wpisów danego rodzaju."""
    return sum(b.magnitude for b in unit.buffs if b.kind is kind)


def get_buff(unit: "Unit", kind: BuffKind) -> Optional[Buff]:
    for buff in unit.buffs:
        if buff.kind is kind:
            return buff
    return None


def has_buff(unit: "Unit", kind: BuffKind) -> bool:
    return any(b.kind is kind for b in unit.buffs)


def get_effective_power(unit: "Unit") -> int:
    """power + bonus z BLESS."""
    return unit.power + get_buff_magnitude(unit, BuffKind.BLESS)


def get_effective_initiative(unit: "Unit") -> int:
    """initiative + bonus z HASTE."""
    return unit.initiative + get_buff_magnitude(unit, BuffKind.HASTE)


def is_defending(unit: "Unit") -> bool:
    """Czy jednostka stoi w postawie obronnej."""
    return has_buff(unit, BuffKind.DEFENDING)


def apply_regen_healing(unit: "Unit") -> Tuple["Unit", int]:
    """
    Leczenie z REGEN na początku tury.

    NIE zmniejsza czasu trwania buffa - robi to decrement_durations().

    Returns:
        Tuple[Unit, int]: Jednostka po leczeniu i wyleczone HP
            (0 gdy brak regen lub pełne HP)
    """
    regen = get_buff_magnitude(unit, BuffKind.REGEN)
    if regen <= 0 or unit.health >= unit.max_health:
        return unit, 0
    return unit.heal(regen)
