"""
Units module - jednostki i drużyny.

Zawiera:
- Unit: Niemutowalna jednostka na polu bitwy
- CharacterTemplate: Blok statystyk z characters.yaml
- Party, PartyMember: Skład drużyny i rozstawienie
"""

from .unit import Unit
from .party import (
    CharacterTemplate,
    Party,
    PartyMember,
    load_templates,
    create_unit_from_template,
    create_units_from_party,
    validate_party,
)

__all__ = [
    "Unit", "CharacterTemplate", "Party", "PartyMember", "load_templates",
    "create_unit_from_template", "create_units_from_party", "validate_party",
]
