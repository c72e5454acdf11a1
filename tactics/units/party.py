"""
Szablony postaci i składanie drużyn.

Szablon (characters.yaml) = statystyki + unikalne umiejętności.
Każda jednostka dostaje też umiejętności domyślne (defaults.yaml,
party.default_skills) - przed unikalnymi z szablonu.

ROZSTAWIENIE DOMYŚLNE (dwie jednostki na wiersz, od wiersza 0):
═══════════════════════════════════════════════════════════════════

    col:    0     1   |   2     3
    row 0  [P0]  [P1] |  [E0]  [E1]
    row 1  [P2]  [P3] |  [E2]  [E3]

    gracz:  col = index % 2
    wróg:   col = cols // 2 + index % 2
    oba:    row = index // 2

Jawne pozycje muszą leżeć w kolumnach drużyny i nie mogą się
pokrywać. ID jednostki: "{team}-{template_id}-{index}".

Przykład użycia:
    >>> party = Party.from_template_ids("Heroes", ["warrior", "cleric"])
    >>> units = create_units_from_party(party, Team.PLAYER)
    >>> [u.id for u in units]
    ['player-warrior-0', 'player-cleric-1']
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.config_loader import ConfigLoader
from ..core.grid import DEFAULT_COLS, DEFAULT_ROWS
from ..core.position import GridPosition, Team, home_team_for_column
from ..errors import PartyError
from .unit import Unit


@dataclass(frozen=True)
class CharacterTemplate:
    """
    Blok statystyk postaci.

    Attributes:
        id (str): ID szablonu (klucz w characters.yaml)
        name (str): Nazwa wyświetlana
        kind (str): "class" (postać gracza) lub "monster"
        description (str): Opis dla UI
        max_health / power / magic / defense / initiative (int): Statystyki
        skills (Tuple[str, ...]): Unikalne umiejętności szablonu
    """
    id: str
    name: str
    max_health: int
    power: int
    magic: int
    defense: int
    initiative: int
    kind: str = "class"
    description: str = ""
    skills: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CharacterTemplate":
        template_id = data["id"]
        return cls(
            id=template_id,
            name=data.get("name", template_id.title()),
            max_health=int(data["max_health"]),
            power=int(data["power"]),
            magic=int(data.get("magic", 0)),
            defense=int(data["defense"]),
            initiative=int(data["initiative"]),
            kind=data.get("kind", "class"),
            description=data.get("description", ""),
            skills=tuple(data.get("skills") or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind,
            "description": self.description,
            "max_health": self.max_health,
            "power": self.power,
            "magic": self.magic,
            "defense": self.defense,
            "initiative": self.initiative,
            "skills": list(self.skills),
        }


def load_templates(loader: Optional[ConfigLoader] = None) -> Dict[str, CharacterTemplate]:
    """Wszystkie szablony z characters.yaml."""
    loader = loader or ConfigLoader()
    return {
        template_id: CharacterTemplate.from_dict(data)
        for template_id, data in loader.load_all_characters().items()
    }


def load_template(template_id: str, loader: Optional[ConfigLoader] = None) -> CharacterTemplate:
    """
    Raises:
        PartyError: Nieznany szablon
    """
    loader = loader or ConfigLoader()
    try:
        return CharacterTemplate.from_dict(loader.load_character(template_id))
    except KeyError:
        raise PartyError(f"Unknown character template: '{template_id}'") from None


# ═══════════════════════════════════════════════════════════════════════════
# DRUŻYNA
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PartyMember:
    """Szablon + opcjonalna jawna pozycja."""
    template_id: str
    position: Optional[GridPosition] = None


@dataclass(frozen=True)
class Party:
    """
    Uporządkowana lista członków drużyny.

    Attributes:
        name (str): Nazwa drużyny (log otwarcia bitwy)
        members (Tuple[PartyMember, ...]): Członkowie w kolejności
    """
    name: str
    members: Tuple[PartyMember, ...] = field(default_factory=tuple)

    @classmethod
    def from_template_ids(cls, name: str, template_ids: Iterable[str]) -> "Party":
        return cls(name=name, members=tuple(PartyMember(t) for t in template_ids))

    def __len__(self) -> int:
        return len(self.members)


def default_party(team: Team, loader: Optional[ConfigLoader] = None) -> Party:
    """Drużyna domyślna z defaults.yaml (Warrior + Cleric vs 2x Skeleton)."""
    loader = loader or ConfigLoader()
    settings = loader.get_party_settings()
    if team is Team.PLAYER:
        return Party.from_template_ids(
            settings.get("player_name", "Heroes"),
            settings.get("default_player", ["warrior", "cleric"]),
        )
    return Party.from_template_ids(
        settings.get("enemy_name", "Enemies"),
        settings.get("default_enemy", ["skeleton", "skeleton"]),
    )


def default_position(index: int, team: Team, cols: int = DEFAULT_COLS) -> GridPosition:
    """Pozycja domyślna członka o danym indeksie."""
    col = index % 2
    if team is Team.ENEMY:
        col += cols // 2
    return GridPosition(index // 2, col)


def validate_party(
    party: Party,
    team: Team,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
    loader: Optional[ConfigLoader] = None,
) -> Tuple[bool, Optional[str]]:
    """
    Sprawdza skład i rozstawienie drużyny.

    Returns:
        Tuple[bool, Optional[str]]: (poprawna, komunikat błędu)
    """
    loader = loader or ConfigLoader()
    settings = loader.get_party_settings()
    min_size = int(settings.get("min_size", 1))
    max_size = int(settings.get("max_size", 4))

    if len(party) < min_size:
        return False, "Party must have at least one character"
    if len(party) > max_size:
        return False, f"Party cannot have more than {max_size} characters"

    known = set(loader.load_all_characters().keys())
    taken = set()
    for index, member in enumerate(party.members):
        if member.template_id.lower() not in known:
            return False, f"Unknown character template: '{member.template_id}'"

        position = member.position or default_position(index, team, cols)
        if not (0 <= position.row < rows and 0 <= position.col < cols):
            return False, f"Position {position.to_list()} is outside the grid"
        if home_team_for_column(position.col, cols) is not team:
            return False, f"Position {position.to_list()} is not on the {team.value} side"
        if position in taken:
            return False, f"Position {position.to_list()} is used more than once"
        taken.add(position)

    return True, None


# ═══════════════════════════════════════════════════════════════════════════
# TWORZENIE JEDNOSTEK
# ═══════════════════════════════════════════════════════════════════════════

def create_unit_from_template(
    template: CharacterTemplate,
    unit_id: str,
    position: GridPosition,
    team: Team,
    default_skills: Sequence[str] = (),
) -> Unit:
    """Jednostka z pełnym HP; umiejętności = domyślne + unikalne (bez duplikatów)."""
    skills: List[str] = []
    for skill_id in list(default_skills) + list(template.skills):
        if skill_id not in skills:
            skills.append(skill_id)

    return Unit(
        id=unit_id,
        name=template.name,
        health=template.max_health,
        max_health=template.max_health,
        power=template.power,
        magic=template.magic,
        defense=template.defense,
        initiative=template.initiative,
        position=position,
        team=team,
        skills=tuple(skills),
        template_id=template.id,
    )


def create_units_from_party(
    party: Party,
    team: Team,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
    loader: Optional[ConfigLoader] = None,
) -> List[Unit]:
    """
    Tworzy jednostki drużyny.

    Raises:
        PartyError: Jeśli validate_party() odrzuca drużynę
    """
    loader = loader or ConfigLoader()
    valid, error = validate_party(party, team, rows, cols, loader)
    if not valid:
        raise PartyError(error)

    default_skills = loader.get_party_settings().get("default_skills", [])
    units = []
    for index, member in enumerate(party.members):
        template = load_template(member.template_id, loader)
        position = member.position or default_position(index, team, cols)
        unit_id = f"{team.value}-{template.id}-{index}"
        units.append(create_unit_from_template(template, unit_id, position, team, default_skills))
    return units
