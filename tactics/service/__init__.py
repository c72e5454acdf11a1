"""
Service module - sesja gry dla API i CLI.
"""

from .errors import GameServiceError
from .session import GameSession

__all__ = ["GameServiceError", "GameSession"]
