"""
AI module - decyzje jednostek sterowanych przez komputer.
"""

from .policy import choose_action, SELECTOR_REGISTRY

__all__ = ["choose_action", "SELECTOR_REGISTRY"]
