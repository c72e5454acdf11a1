"""
Konfiguracja bitwy.

Wartości domyślne pochodzą z tactics/data/defaults.yaml (sekcja `battle`).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.config_loader import ConfigLoader
from .initiative import TurnOrderPolicy


@dataclass(frozen=True)
class BattleConfig:
    """
    Konfiguracja bitwy.

    Attributes:
        grid_rows (int): Liczba wierszy siatki
        grid_cols (int): Liczba kolumn siatki (parzysta)
        turn_order (TurnOrderPolicy): Polityka kolejki inicjatywy
        enforce_melee_range (bool): Czy melee celuje tylko we front
        strict_commands (bool): Czy silnik rzuca wyjątek dla nieznanych
            umiejętności i brakujących celów (zamiast cichego no-op)
        max_auto_turns (int): Limit tur AI w jednym wywołaniu orkiestratora
    """
    grid_rows: int = 4
    grid_cols: int = 4
    turn_order: TurnOrderPolicy = TurnOrderPolicy.TEAM_BLOCK
    enforce_melee_range: bool = False
    strict_commands: bool = False
    max_auto_turns: int = 500

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BattleConfig":
        """Tworzy konfigurację ze słownika (brakujące klucze = defaults)."""
        default = cls()
        return cls(
            grid_rows=int(data.get("grid_rows", default.grid_rows)),
            grid_cols=int(data.get("grid_cols", default.grid_cols)),
            turn_order=TurnOrderPolicy(data.get("turn_order", default.turn_order.value)),
            enforce_melee_range=bool(data.get("enforce_melee_range", default.enforce_melee_range)),
            strict_commands=bool(data.get("strict_commands", default.strict_commands)),
            max_auto_turns=int(data.get("max_auto_turns", default.max_auto_turns)),
        )

    @classmethod
    def load(cls, loader: Optional[ConfigLoader] = None) -> "BattleConfig":
        """Konfiguracja z defaults.yaml."""
        loader = loader or ConfigLoader()
        return cls.from_dict(loader.get_battle_settings())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid_rows": self.grid_rows,
            "grid_cols": self.grid_cols,
            "turn_order": self.turn_order.value,
            "enforce_melee_range": self.enforce_melee_range,
            "strict_commands": self.strict_commands,
            "max_auto_turns": self.max_auto_turns,
        }
