"""
Battle module - przebieg bitwy.

Zawiera:
- BattleState, ActionCommand: Niemutowalny stan i komenda
- targeting: Kandydaci na cele i walidacja komend
- initiative: Kolejka tur
- engine: Rozstrzyganie pojedynczej akcji

Orkiestrator (battle.orchestrator) importowany osobno - zależy od ai.
"""

from .config import BattleConfig
from .initiative import TurnOrder, TurnOrderPolicy, create_turn_order, advance_turn, get_active_unit
from .state import ActionCommand, BattleState
from .targeting import ValidationResult, get_valid_targets, validate_targets
from .engine import execute_action

__all__ = [
    "BattleConfig", "TurnOrder", "TurnOrderPolicy", "create_turn_order",
    "advance_turn", "get_active_unit", "ActionCommand", "BattleState",
    "ValidationResult", "get_valid_targets", "validate_targets", "execute_action",
]
