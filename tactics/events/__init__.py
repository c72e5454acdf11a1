"""
Events module - log zdarzeń bitwy i replay JSON.
"""

from .event_logger import EventLogger, EventType, GameEvent

__all__ = ["EventLogger", "EventType", "GameEvent"]
