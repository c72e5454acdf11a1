"""
Wyjątki silnika.

Walidacja targetów NIE rzuca wyjątków (zwraca ValidationResult).
Wyjątki oznaczają błąd wywołującego albo stan, który nie powinien
nigdy dotrzeć do danej warstwy.
"""

from __future__ import annotations


class TacticsError(Exception):
    """Bazowa klasa wyjątków pakietu."""


class UnknownSkillError(TacticsError, KeyError):
    """Nieznany identyfikator umiejętności."""

    def __init__(self, skill_id: str):
        self.skill_id = skill_id
        super().__init__(f"Unknown skill: '{skill_id}'")

    def __str__(self) -> str:
        return self.args[0]


class InvalidCommandError(TacticsError):
    """Komenda odrzucona przez silnik w trybie strict_commands."""


class NoLivingUnitsError(TacticsError):
    """Kolejka inicjatywy nie ma żadnej żywej jednostki do aktywowania."""


class PartyError(TacticsError, ValueError):
    """Niepoprawny skład drużyny lub rozstawienie."""
