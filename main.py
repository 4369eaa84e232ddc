#!/usr/bin/env python3

import argparse
import sys

from tactics.core.config import BattleConfigLoader
from tactics.core.data import Team
from tactics.core.events import EventManager
from tactics.core.exceptions import GridConfigurationError
from tactics.game.controller import BattleController
from tactics.game.log_manager import LogManager, LogLevel
from tactics.game.map import GameMap
from tactics.game.scenario_loader import ScenarioLoader


def render_map(game_map: GameMap) -> str:
    """ASCII view: unit initials, highlighted tiles as '*', otherwise heights."""
    heights = game_map.get_height_map()
    walkable = game_map.get_walkable_mask()
    occupied = game_map.get_occupied_mask()
    players = game_map.get_team_mask(Team.PLAYER)

    rows = []
    for y in range(game_map.height):
        cells = []
        for x in range(game_map.width):
            tile = game_map.tile_at((y, x))
            if occupied[y, x]:
                initial = tile.occupying_unit.name[0]
                cells.append(initial.upper() if players[y, x] else initial.lower())
            elif not walkable[y, x]:
                cells.append(tile.symbol if tile.symbol.strip() else "#")
            elif tile.highlight:
                cells.append("*")
            else:
                cells.append(str(heights[y, x]))
        rows.append(" ".join(cells))
    return "\n".join(rows)


def main():
    parser = argparse.ArgumentParser(description="Run a tactics battle scenario in the terminal")
    parser.add_argument("scenario", nargs="?", default="assets/scenarios/cliff_skirmish.yaml")
    parser.add_argument("--config", default=None, help="Battle config YAML")
    parser.add_argument("--debug", action="store_true", help="Show debug log messages")
    args = parser.parse_args()

    config_loader = BattleConfigLoader(args.config)
    config = config_loader.load()
    event_manager = EventManager(enable_debug_logging=config.debug_logging,
                                 history_size=config.event_history_size)
    log_manager = LogManager(event_manager, max_messages=config.max_log_messages,
                             default_level=LogLevel.DEBUG if args.debug else LogLevel.INFO)
    event_manager.set_debug_callback(log_manager.debug)
    for warning in config_loader.warnings:
        log_manager.warning(warning)

    try:
        scenario = ScenarioLoader(config).load_from_file(args.scenario)
    except GridConfigurationError as e:
        log_manager.error(f"Could not load scenario: {e}")
        print(f"\nError: {e}")
        sys.exit(1)

    controller = BattleController(scenario.game_map, event_manager, config)

    try:
        controller.start_battle(scenario.starting_team)
        print(f"== {scenario.name} ==")

        for unit in controller.ready_units():
            controller.select_unit(unit)
            paths = unit.available_paths
            controller.game_map.reset_all_tiles()
            for tile in paths:
                tile.illuminate("reachable")
            print(f"\n{unit.name} can reach {len(paths)} tiles:")
            print(render_map(controller.game_map))
        controller.game_map.reset_all_tiles()
        controller.clear_selection()

        for unit in controller.ready_units():
            unit.end_turn()
        controller.end_turn()
        controller.flush_events()
        controller.run_until_player_turn()

        print("\nAfter the enemy turn:")
        print(render_map(controller.game_map))
    except KeyboardInterrupt:
        print("\n\nBattle interrupted by user")
    finally:
        print("\nBattle log:")
        for line in log_manager.get_formatted_messages(count=30):
            print(f"  {line}")

        stats = event_manager.get_statistics()
        print(f"\n{stats['events_processed']} events processed")
        if args.debug:
            for event in event_manager.get_recent_events():
                print(f"  turn {event['turn']}: {event['event_type']} from {event['source']}")
        event_manager.shutdown()


if __name__ == "__main__":
    main()
