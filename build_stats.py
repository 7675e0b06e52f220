#!/usr/bin/env python3
"""
Cricket statistics CLI

Builds and queries scorecards, player profiles and innings statistics from a
Cricsheet-style dataset. Directories come from data/stats_config.json (or the
file named by --config / $CRICSTATS_CONFIG).

Usage:
    python build_stats.py warm tests t20s
    python build_stats.py scorecard tests 1000851
    python build_stats.py profile "V Kohli"
    python build_stats.py innings --summary
    python build_stats.py players
    python build_stats.py validate odis
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

import polars as pl

from cricstats import Competition, CricstatsError, summarize_innings, validate_scorecard
from cricstats.config import CONFIG_ENV_VAR, clear_config_cache, get_config
from cricstats.corpus import CorpusWalker
from cricstats.logging_config import setup_logging
from cricstats.service import StatsService, status_for_error
from cricstats.store import MatchStore


def print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def parse_competitions(values: list[str]) -> list[Competition]:
    if not values:
        return list(Competition.corpus())
    competitions = [Competition.parse(v) for v in values]
    if Competition.ALL in competitions:
        return list(Competition.corpus())
    return competitions


def cmd_scorecard(args, service: StatsService) -> int:
    store = service.walker.store.for_gender(args.gender or service.walker.store.gender)
    card = store.get_or_build(Competition.parse(args.competition), args.match_id)
    print_json(card.model_dump())
    return 0


def cmd_warm(args, service: StatsService) -> int:
    walker = service.walker.for_gender(args.gender or service.walker.store.gender)
    for competition in parse_competitions(args.competitions):
        count = walker.for_each_match(competition, lambda card: None)
        print(f'{competition.value}: {count} scorecards ready')
    return 0


def cmd_profile(args, service: StatsService) -> int:
    print_json(service.get_player_profile(args.name, args.gender))
    return 0


def cmd_innings(args, service: StatsService) -> int:
    report = service.innings.get_innings_stats()
    if args.summary:
        with pl.Config(tbl_rows=-1, tbl_cols=-1):
            print(summarize_innings(report))
    else:
        print_json(report.model_dump())
    return 0


def cmd_players(args, service: StatsService) -> int:
    names = service.registry.refresh() if args.refresh else service.get_all_player_names()
    print_json(names)
    return 0


def cmd_validate(args, service: StatsService) -> int:
    walker = service.walker.for_gender(args.gender or service.walker.store.gender)
    store = walker.store
    problems = 0
    for competition in parse_competitions(args.competitions):
        for match_id in store.match_ids(competition):
            card = store.get_or_build(competition, match_id)
            for error in validate_scorecard(card):
                problems += 1
                print(f'{competition.value}/{match_id}: {error}')
    print(f'{problems} problem(s) found')
    return 1 if problems else 0


def main():
    parser = argparse.ArgumentParser(description="Cricket scorecard and player statistics builder")
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to a stats config JSON file (default: data/stats_config.json)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Also write logs to a timestamped file in ./logs",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("scorecard", help="Print the scorecard of one match")
    p.add_argument("competition", help="tests, t20s, odis or ipl")
    p.add_argument("match_id")
    p.add_argument("--gender", "-g", default=None)
    p.set_defaults(func=cmd_scorecard)

    p = sub.add_parser("warm", help="Build and cache every scorecard of the given competitions")
    p.add_argument("competitions", nargs="*", help="Competitions to process (default: all)")
    p.add_argument("--gender", "-g", default=None)
    p.set_defaults(func=cmd_warm)

    p = sub.add_parser("profile", help="Print a player's profile")
    p.add_argument("name", help="Player name as it appears in the match data")
    p.add_argument("--gender", "-g", default=None)
    p.set_defaults(func=cmd_profile)

    p = sub.add_parser("innings", help="Print innings statistics")
    p.add_argument("--summary", "-s", action="store_true", help="Print a per-competition summary table")
    p.set_defaults(func=cmd_innings)

    p = sub.add_parser("players", help="Print every distinct player name")
    p.add_argument("--refresh", action="store_true", help="Rebuild the persisted registry")
    p.set_defaults(func=cmd_players)

    p = sub.add_parser("validate", help="Check scorecards for internal consistency")
    p.add_argument("competitions", nargs="*", help="Competitions to check (default: all)")
    p.add_argument("--gender", "-g", default=None)
    p.set_defaults(func=cmd_validate)

    args = parser.parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        os.environ[CONFIG_ENV_VAR] = str(config_path)
        clear_config_cache()

    logger = setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=args.log_file,
    )

    config = get_config()
    walker = CorpusWalker(MatchStore.from_config(), skip_errors=config.skip_unreadable_matches)
    service = StatsService(walker, genders=config.genders)

    try:
        sys.exit(args.func(args, service))
    except (CricstatsError, ValueError) as e:
        logger.error(str(e))
        sys.exit(2 if status_for_error(e) == 404 else 1)


if __name__ == "__main__":
    main()
