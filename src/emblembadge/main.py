#!/usr/bin/env python3
"""Main entry point for the contribution badge generator."""

import argparse
import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import requests
from dotenv import load_dotenv

from emblembadge.bungie import EmblemFetcher
from emblembadge.config import DEFAULT_CONFIG_PATH, Config, ConfigError, load_config
from emblembadge.errors import BadgeError
from emblembadge.github_stats import GitHubStats, StatsSnapshot
from emblembadge.readme import inject
from emblembadge.renderer import BadgeRenderer
from emblembadge.selector import FALLBACK_EMBLEM, select_emblem


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="emblembadge",
        description="Generate a Destiny-style badge from GitHub contribution stats.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to the YAML configuration file (default: config.yaml)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("fetch-stats", help="Fetch GitHub stats via GraphQL and write stats.json")
    sub.add_parser("select-emblem", help="Print this week's emblem hash")
    fetch = sub.add_parser("fetch-emblem", help="Download emblem artwork from the Bungie API")
    fetch.add_argument("emblem_hash", nargs="?", help="Emblem hash (default: this week's emblem)")
    sub.add_parser("generate", help="Render the badge from stats.json and the emblem image")
    sub.add_parser("update-readme", help="Update the README badge block and timestamp")
    sub.add_parser("run", help="Run the full pipeline")
    return parser.parse_args(argv)


def load_settings(config_path: Path) -> Config:
    """Load config.yaml, falling back to environment variables when it is missing."""
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        print(f"Note: {e}; using environment variables", file=sys.stderr)
        return Config(username=os.environ.get("GITHUB_ACTOR", ""))


def fetch_stats(config: Config) -> StatsSnapshot:
    stats = GitHubStats(config.username or None).get_year_stats()
    path = config.paths.stats
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(stats.to_dict(), f, indent=2)
    return stats


def read_stats(config: Config) -> StatsSnapshot:
    with open(config.paths.stats, "r") as f:
        return StatsSnapshot.from_dict(json.load(f))


def choose_emblem(config: Config) -> str:
    return select_emblem(list(config.rotation), config.fallback or FALLBACK_EMBLEM)


def fetch_emblem(config: Config, emblem_hash: str) -> Path:
    fetcher = EmblemFetcher(manifest_cache=config.paths.manifest)
    return fetcher.fetch_emblem(emblem_hash, config.paths.emblem)


def generate(config: Config, stats: StatsSnapshot) -> Path:
    renderer = BadgeRenderer(theme=config.theme, layout=config.layout)
    return renderer.render(config.paths.emblem, stats.to_record(config.badge_name), config.paths.badge)


def update_readme(config: Config) -> bool:
    return inject(config.paths.readme, config.paths.badge.as_posix(), datetime.now(timezone.utc))


def print_stats(stats: StatsSnapshot) -> None:
    print(f"  Commits: {stats.commits:,}")
    print(f"  Pull requests: {stats.pull_requests:,}")
    print(f"  Issues: {stats.issues:,}")
    print(f"  Reviews: {stats.reviews:,}")
    print(f"  Stars received: {stats.stars_received:,}")


def run_pipeline(config: Config) -> None:
    print("=" * 50)
    print("Contribution Badge Generator")
    print("=" * 50)

    print("\n[1/5] Fetching GitHub stats...")
    stats = fetch_stats(config)
    print_stats(stats)
    print(f"  Saved to {config.paths.stats}")

    print("\n[2/5] Selecting weekly emblem...")
    emblem_hash = choose_emblem(config)
    print(f"  Selected emblem: {emblem_hash}")

    print("\n[3/5] Fetching emblem from Bungie API...")
    fetch_emblem(config, emblem_hash)
    print(f"  Downloaded to {config.paths.emblem}")

    print("\n[4/5] Rendering badge...")
    output = generate(config, stats)
    print(f"  Output: {output}")

    print("\n[5/5] Updating README...")
    changed = update_readme(config)
    print("  README updated" if changed else "  README already current")

    print("\n" + "=" * 50)
    print("✓ Pipeline complete!")
    print("=" * 50)


def main(argv: list[str] | None = None) -> int:
    """Run one CLI command."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    # Load environment variables from .env file if it exists
    load_dotenv()

    try:
        config = load_settings(args.config)

        if args.command == "fetch-stats":
            print(json.dumps(fetch_stats(config).to_dict(), indent=2))
        elif args.command == "select-emblem":
            print(choose_emblem(config))
        elif args.command == "fetch-emblem":
            fetch_emblem(config, args.emblem_hash or choose_emblem(config))
        elif args.command == "generate":
            output = generate(config, read_stats(config))
            print(f"✓ Badge generated: {output}")
        elif args.command == "update-readme":
            changed = update_readme(config)
            print("✓ README updated" if changed else "✓ README already current")
        elif args.command == "run":
            run_pipeline(config)
    except requests.exceptions.RequestException as e:
        print(f"Error: request failed: {e}", file=sys.stderr)
        return 1
    except (ConfigError, BadgeError, ValueError, RuntimeError, KeyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
