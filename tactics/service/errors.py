"""
Błędy warstwy sesji.

Każdy błąd niesie kod maszynowy (dla UI / HTTP) i komunikat dla człowieka:

    INVALID_SKILL    - nieznana umiejętność lub jednostka jej nie ma
    INVALID_TARGETS  - cele odrzucone przez validate_targets()
    ACTION_FAILED    - nieoczekiwany błąd podczas rozstrzygania akcji
    NEW_GAME_FAILED  - nie udało się utworzyć bitwy (np. zła drużyna)
"""

from __future__ import annotations
from typing import Any, Dict

from ..errors import TacticsError

INVALID_SKILL = "INVALID_SKILL"
INVALID_TARGETS = "INVALID_TARGETS"
ACTION_FAILED = "ACTION_FAILED"
NEW_GAME_FAILED = "NEW_GAME_FAILED"


class GameServiceError(TacticsError):
    """
    Błąd sesji z kodem.

    Attributes:
        message (str): Opis dla człowieka
        code (str): Jeden z kodów modułu
    """

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.message = message
        self.code = code

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}

    def __repr__(self) -> str:
        return f"GameServiceError({self.code}: {self.message})"
