"""
Testy dla ConfigLoader (YAML + uzupełnianie defaults).
"""

import pytest

from tactics.battle.config import BattleConfig
from tactics.battle.initiative import TurnOrderPolicy
from tactics.core.config_loader import ConfigLoader


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "defaults.yaml").write_text(
        "battle:\n"
        "  turn_order: initiative\n"
        "  max_auto_turns: 10\n"
        "party:\n"
        "  default_skills: [attack]\n",
        encoding="utf-8",
    )
    (tmp_path / "characters.yaml").write_text(
        "character_defaults:\n"
        "  kind: class\n"
        "  max_health: 50\n"
        "  power: 10\n"
        "  defense: 2\n"
        "  initiative: 5\n"
        "characters:\n"
        "  knight:\n"
        "    name: Knight\n"
        "    power: 30\n"
        "  imp:\n"
        "    kind: monster\n",
        encoding="utf-8",
    )
    (tmp_path / "skills.yaml").write_text(
        "skills:\n"
        "  attack:\n"
        "    effect: strike\n",
        encoding="utf-8",
    )
    return tmp_path


def test_character_defaults_merged(data_dir):
    knight = ConfigLoader(data_dir).load_character("Knight")

    assert knight["power"] == 30
    assert knight["max_health"] == 50
    assert knight["id"] == "knight"


def test_unknown_character_raises(data_dir):
    with pytest.raises(KeyError):
        ConfigLoader(data_dir).load_character("dragon")


def test_character_ids_by_kind(data_dir):
    loader = ConfigLoader(data_dir)

    assert loader.get_character_ids("monster") == ["imp"]
    assert len(loader.get_character_ids()) == 2


def test_skills_get_ids(data_dir):
    skills = ConfigLoader(data_dir).load_all_skills()
    assert skills == {"attack": {"effect": "strike", "id": "attack"}}


def test_battle_config_from_yaml(data_dir):
    config = BattleConfig.load(ConfigLoader(data_dir))

    assert config.turn_order is TurnOrderPolicy.INITIATIVE
    assert config.max_auto_turns == 10
    assert config.grid_rows == 4


def test_bundled_defaults():
    config = BattleConfig.load()
    assert config.turn_order is TurnOrderPolicy.TEAM_BLOCK
    assert not config.enforce_melee_range
