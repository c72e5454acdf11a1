"""
Grid Tactics - turowy symulator walki drużyn na siatce.

Pakiety:
- core: siatka i pozycje, RNG, ładowanie konfiguracji
- effects: buffy i statusy
- units: jednostki, szablony postaci, kompozycja drużyn
- skills: katalog umiejętności i ich handlery
- battle: targeting, kolejka inicjatywy, silnik rozstrzygania akcji, orkiestrator
- combat: wzory obrażeń
- ai: polityka decyzji jednostek sterowanych przez komputer
- events: log zdarzeń / replay
- service: sesja gry (new_game / get_state / perform_action)
"""

__version__ = "1.0.0"
