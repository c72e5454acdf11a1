"""
Testy dla szablonów postaci i składania drużyn.

Testuje:
- Wczytywanie szablonów z characters.yaml
- Rozstawienie domyślne i jawne
- Walidację drużyn (rozmiar, strona, kolizje)
"""

import pytest

from tactics.core.position import GridPosition, Team
from tactics.errors import PartyError
from tactics.units.party import (
    Party, PartyMember, load_templates, create_units_from_party,
    validate_party, default_party,
)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: SZABLONY
# ═══════════════════════════════════════════════════════════════════════════

def test_templates_loaded():
    templates = load_templates()

    assert set(templates) >= {"warrior", "archer", "cleric", "mage", "paladin", "necromancer", "skeleton", "orc"}
    warrior = templates["warrior"]
    assert (warrior.max_health, warrior.power, warrior.defense) == (120, 25, 8)
    assert templates["skeleton"].kind == "monster"


def test_template_skills():
    templates = load_templates()
    assert templates["cleric"].skills == ("heal", "bless", "regen")
    assert templates["warrior"].skills == ()


# ═══════════════════════════════════════════════════════════════════════════
# TEST: JEDNOSTKI
# ═══════════════════════════════════════════════════════════════════════════

def test_default_placement_player():
    party = Party.from_template_ids("Heroes", ["warrior", "cleric", "archer"])
    units = create_units_from_party(party, Team.PLAYER)

    assert [u.id for u in units] == ["player-warrior-0", "player-cleric-1", "player-archer-2"]
    assert [u.position for u in units] == [GridPosition(0, 0), GridPosition(0, 1), GridPosition(1, 0)]


def test_default_placement_enemy():
    party = Party.from_template_ids("Enemies", ["skeleton", "skeleton"])
    units = create_units_from_party(party, Team.ENEMY)

    assert [u.position for u in units] == [GridPosition(0, 2), GridPosition(0, 3)]
    assert all(u.team is Team.ENEMY for u in units)


def test_units_get_default_then_unique_skills():
    units = create_units_from_party(Party.from_template_ids("H", ["mage"]), Team.PLAYER)
    assert units[0].skills == ("attack", "defend", "skip", "move", "bolt", "leech", "haste")


def test_units_start_at_full_health():
    unit = create_units_from_party(Party.from_template_ids("H", ["paladin"]), Team.PLAYER)[0]
    assert unit.health == unit.max_health == 150
    assert unit.template_id == "paladin"


def test_explicit_positions():
    party = Party("H", (PartyMember("warrior", GridPosition(3, 1)),))
    assert create_units_from_party(party, Team.PLAYER)[0].position == GridPosition(3, 1)


def test_default_parties():
    assert [m.template_id for m in default_party(Team.PLAYER).members] == ["warrior", "cleric"]
    assert default_party(Team.ENEMY).name == "Enemies"


# ═══════════════════════════════════════════════════════════════════════════
# TEST: WALIDACJA
# ═══════════════════════════════════════════════════════════════════════════

def test_empty_party_rejected():
    valid, error = validate_party(Party("H", ()), Team.PLAYER)
    assert not valid
    assert error == "Party must have at least one character"


def test_oversized_party_rejected():
    party = Party.from_template_ids("H", ["warrior"] * 5)
    valid, error = validate_party(party, Team.PLAYER)
    assert not valid
    assert "more than 4" in error


def test_position_on_enemy_side_rejected():
    party = Party("H", (PartyMember("warrior", GridPosition(0, 2)),))
    valid, error = validate_party(party, Team.PLAYER)
    assert not valid
    assert "player side" in error


def test_colliding_positions_rejected():
    party = Party("H", (
        PartyMember("warrior", GridPosition(1, 1)),
        PartyMember("cleric", GridPosition(1, 1)),
    ))
    assert not validate_party(party, Team.PLAYER)[0]


def test_unknown_template_raises_party_error():
    with pytest.raises(PartyError):
        create_units_from_party(Party.from_template_ids("H", ["dragon"]), Team.PLAYER)
