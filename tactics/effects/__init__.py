"""
Effects module - buffy i statusy jednostek.

Zawiera:
- Buff, BuffKind: Czasowe modyfikatory (postawa, haste, bless, regen)
- apply_buff / decrement_durations: Cykl życia buffa
"""

from .buff import (
    Buff,
    BuffKind,
    apply_buff,
    remove_buff,
    decrement_durations,
    get_buff_magnitude,
    has_buff,
    get_effective_power,
    get_effective_initiative,
    is_defending,
    apply_regen_healing,
)

__all__ = [
    "Buff", "BuffKind", "apply_buff", "remove_buff", "decrement_durations",
    "get_buff_magnitude", "has_buff", "get_effective_power",
    "get_effective_initiative", "is_defending", "apply_regen_healing",
]
