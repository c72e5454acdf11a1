"""
Combat module - wzory obrażeń.
"""

from .damage import DamageResult, calculate_strike_damage, calculate_ranged_damage

__all__ = ["DamageResult", "calculate_strike_damage", "calculate_ranged_damage"]
