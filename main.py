#!/usr/bin/env python3
"""
Grid Tactics - Entry Point
═══════════════════════════════════════════════════════════════════════════

Rozgrywa bitwę AI vs AI (obie drużyny sterowane przez politykę).

Użycie:
    python main.py                                 # Domyślne drużyny
    python main.py --seed 12345                    # Konkretny seed
    python main.py --player warrior mage --enemy orc skeleton skeleton
    python main.py --turn-order initiative         # Kolejka wg inicjatywy
    python main.py --melee-range                   # Melee tylko we front
    python main.py --verbose                       # Statystyki zdarzeń

Wynik:
    - Wypisuje log bitwy na konsolę
    - Zapisuje replay do output/battle_{seed}.json
"""

import argparse
import sys
from dataclasses import replace

from tactics.battle.config import BattleConfig
from tactics.battle.initiative import TurnOrderPolicy
from tactics.battle.orchestrator import create_game, default_strategy, run_auto_battle
from tactics.core.config_loader import ConfigLoader
from tactics.core.rng import GameRNG
from tactics.errors import PartyError
from tactics.events.event_logger import EventLogger, EventType
from tactics.units.party import Party


def main():
    """Główna funkcja."""
    parser = argparse.ArgumentParser(
        description="Grid Tactics - turn-based battle simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=12345,
        help="Ziarno losowości (domyślnie: 12345)"
    )
    parser.add_argument(
        "--player",
        nargs="+",
        metavar="TEMPLATE",
        help="Szablony drużyny gracza (np. warrior cleric)"
    )
    parser.add_argument(
        "--enemy",
        nargs="+",
        metavar="TEMPLATE",
        help="Szablony drużyny wroga (np. skeleton orc)"
    )
    parser.add_argument(
        "--turn-order",
        choices=[p.value for p in TurnOrderPolicy],
        help="Polityka kolejki (domyślnie z defaults.yaml)"
    )
    parser.add_argument(
        "--melee-range",
        action="store_true",
        help="Attack może celować tylko we frontową kolumnę wroga"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Szczegółowy output"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Nie zapisuj logu do pliku"
    )

    args = parser.parse_args()

    print("=" * 60)
    print("GRID TACTICS")
    print("=" * 60)
    print(f"Seed: {args.seed}")
    print()

    # Załaduj konfigurację
    loader = ConfigLoader()
    config = BattleConfig.load(loader)
    if args.turn_order:
        config = replace(config, turn_order=TurnOrderPolicy(args.turn_order))
    if args.melee_range:
        config = replace(config, enforce_melee_range=True)

    party_settings = loader.get_party_settings()
    player = Party.from_template_ids(party_settings.get("player_name", "Heroes"), args.player) if args.player else None
    enemy = Party.from_template_ids(party_settings.get("enemy_name", "Enemies"), args.enemy) if args.enemy else None

    try:
        state = create_game(player, enemy, config=config, loader=loader)
    except PartyError as exc:
        print(f"❌ {exc}")
        return 1

    print("Drużyny:")
    for unit in state.grid.units.values():
        print(f"  - [{unit.team.value}] {unit.name} @ {unit.position.to_list()} ({unit.health} HP)")
    print()
    print(state.grid.debug_print())
    print()
    print("-" * 60)
    print("ROZPOCZYNAM WALKĘ...")
    print("-" * 60)
    print()

    logger = EventLogger(seed=args.seed, rows=config.grid_rows, cols=config.grid_cols)
    logger.start(state)

    strategy = default_strategy(GameRNG(args.seed), config)
    state = run_auto_battle(state, strategy, config)
    logger.record(state)

    for line in state.log:
        print(line)

    # Wyniki
    print()
    print("=" * 60)
    print("WYNIKI")
    print("=" * 60)

    if state.winner is not None:
        print(f"🏆 ZWYCIĘZCA: {state.winner.value}")
    elif state.game_over:
        print("🤝 REMIS!")
    else:
        print(f"⏱️  Przerwano po {config.max_auto_turns} turach")

    print(f"Rundy: {state.round_number}")
    print()

    print("Ocaleni:")
    for survivor in state.grid.units.values():
        if not survivor.is_alive():
            continue
        hp_percent = (survivor.health / survivor.max_health) * 100
        print(f"  - {survivor.name} ({survivor.team.value}): {survivor.health}/{survivor.max_health} HP ({hp_percent:.0f}%)")

    # Zapisz log
    if not args.no_save:
        output_path = f"output/battle_{args.seed}.json"
        logger.save(output_path)
        print()
        print(f"📄 Log zapisany: {output_path}")

    # Verbose: pokaż statystyki
    if args.verbose:
        print()
        print("-" * 60)
        print("STATYSTYKI ZDARZEŃ")
        print("-" * 60)

        for event_type in EventType:
            count = len(logger.get_events_by_type(event_type))
            if count > 0:
                print(f"  {event_type.name}: {count}")

    print()
    print("Symulacja zakończona!")

    return 0


if __name__ == "__main__":
    sys.exit(main())
