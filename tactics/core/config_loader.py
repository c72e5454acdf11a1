"""
Loader konfiguracji z automatycznym uzupełnianiem wartości domyślnych.

Dane gry trzymane są w plikach YAML (tactics/data/):
- defaults.yaml: ustawienia bitwy i drużyn
- characters.yaml: szablony postaci (statystyki + umiejętności)
- skills.yaml: katalog umiejętności

Logika merge (uzupełniania defaults):
    1. Wczytaj character_defaults z characters.yaml
    2. Wczytaj konkretny szablon (np. "warrior")
    3. Brakujące klucze uzupełnij wartościami domyślnymi
    4. Szablon może nadpisać defaults

Przykład:
    characters.yaml:
        character_defaults:
            max_health: 100
            magic: 0
        characters:
            warrior:
                max_health: 120   # nadpisuje default
                # magic nie podane -> 0 z defaults

Użycie:
    >>> loader = ConfigLoader()
    >>> warrior = loader.load_character("warrior")
    >>> warrior["max_health"]
    120
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
import yaml
import copy


DATA_PATH = Path(__file__).parent.parent / "data"


class ConfigLoader:
    """
    Ładuje konfigurację z plików YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Ścieżka do folderu z danymi
        _defaults (Dict): Cache defaults.yaml
        _characters (Dict): Cache characters.yaml
        _skills (Dict): Cache skills.yaml
    """

    def __init__(self, data_path: Union[str, Path, None] = None):
        """
        Args:
            data_path: Ścieżka do folderu z plikami YAML
                (domyślnie tactics/data)
        """
        self.data_path = Path(data_path) if data_path is not None else DATA_PATH
        self._defaults: Optional[Dict] = None
        self._characters: Optional[Dict] = None
        self._skills: Optional[Dict] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> Dict:
        """
        Wczytuje plik YAML.

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
        """
        filepath = self.data_path / filename
        with open(filepath, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_defaults(self) -> Dict:
        """Zawartość defaults.yaml (cache'owana)."""
        if self._defaults is None:
            self._defaults = self._load_yaml("defaults.yaml")
        return self._defaults

    def get_battle_settings(self) -> Dict:
        """Sekcja `battle` z defaults.yaml."""
        return self.get_defaults().get("battle", {})

    def get_party_settings(self) -> Dict:
        """Sekcja `party` z defaults.yaml."""
        return self.get_defaults().get("party", {})

    # ─────────────────────────────────────────────────────────────────────────
    # SZABLONY POSTACI
    # ─────────────────────────────────────────────────────────────────────────

    def _get_characters_file(self) -> Dict:
        if self._characters is None:
            self._characters = self._load_yaml("characters.yaml")
        return self._characters

    def load_character(self, template_id: str) -> Dict:
        """
        Wczytuje szablon postaci z uzupełnionymi defaults.

        Args:
            template_id: ID szablonu (klucz w characters.yaml,
                wielkość liter nie ma znaczenia)

        Returns:
            Dict: Pełna definicja szablonu

        Raises:
            KeyError: Jeśli szablon nie istnieje
        """
        data = self._get_characters_file()
        characters = data.get("characters", {})
        key = template_id.lower()

        if key not in characters:
            raise KeyError(f"Character '{template_id}' not found in characters.yaml")

        result = self._deep_merge(data.get("character_defaults", {}), characters[key])
        result["id"] = key
        return result

    def load_all_characters(self) -> Dict[str, Dict]:
        """Mapa template_id -> definicja."""
        characters = self._get_characters_file().get("characters", {})
        return {cid: self.load_character(cid) for cid in characters.keys()}

    def get_character_ids(self, kind: Optional[str] = None) -> List[str]:
        """
        Lista ID szablonów.

        Args:
            kind: Opcjonalny filtr ("class" / "monster")
        """
        characters = self.load_all_characters()
        return [
            cid for cid, data in characters.items()
            if kind is None or data.get("kind") == kind
        ]

    # ─────────────────────────────────────────────────────────────────────────
    # UMIEJĘTNOŚCI
    # ─────────────────────────────────────────────────────────────────────────

    def load_all_skills(self) -> Dict[str, Dict]:
        """
        Surowe definicje umiejętności.

        Returns:
            Dict[str, Dict]: Mapa skill_id -> definicja (kopia)
        """
        if self._skills is None:
            self._skills = self._load_yaml("skills.yaml").get("skills", {})

        result = {}
        for skill_id, data in self._skills.items():
            entry = copy.deepcopy(data)
            entry["id"] = skill_id
            result[skill_id] = entry
        return result

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Głęboko łączy dwa słowniki.

        Override nadpisuje wartości w base.
        Nested dicts są merge'owane rekurencyjnie.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result
