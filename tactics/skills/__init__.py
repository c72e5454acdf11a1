"""
Skills module - katalog umiejętności i ich rozstrzyganie.
"""

from .skill import (
    Skill,
    SkillCatalog,
    SkillEffect,
    TargetCategory,
    TargetRequirement,
    RangeType,
    get_skill,
    get_skills,
    get_skill_catalog,
)
from .handlers import SKILL_HANDLERS, TurnContext, get_handler

__all__ = [
    "Skill", "SkillCatalog", "SkillEffect", "TargetCategory", "TargetRequirement",
    "RangeType", "get_skill", "get_skills", "get_skill_catalog",
    "SKILL_HANDLERS", "TurnContext", "get_handler",
]
