#!/usr/bin/env python3
"""
Resolve a viewer configuration and print it as JSON.

Examples:
  Inline configuration:
    python cli.py --config '{"layout": {"title": "Granpa"}}'

  Per-language files next to the working directory:
    python cli.py --config 'config.$LANG.json' --langs '["en", "fr"]' --lang fr-CA

  Per-language files served over HTTP:
    python cli.py --config 'config.$LANG.json' --base-url https://example.org/viewer/

Declarations are taken from the flags, then RV_CONFIG / RV_LANGS, then the
``viewer`` section of the settings file.
"""

import argparse
import asyncio
import json
import sys
from typing import Any

from dotenv import load_dotenv

from config.attributes import DeclaredAttributes
from config.config_loader import ConfigLoader
from services.service_container import ServiceContainer
from utils.logging import get_logger, setup_logging, shutdown_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resolve and print the viewer configuration.")
    parser.add_argument("--config", help="Inline JSON, a URL template with $LANG, or a global name")
    parser.add_argument("--langs", help='JSON array of language codes, e.g. \'["en", "fr"]\'')
    parser.add_argument("--lang", help="Language to print (defaults to the current language)")
    parser.add_argument("--base-url", help="Base URL relative config paths are fetched from")
    parser.add_argument("--settings", help="Path to the settings YAML file")
    parser.add_argument("--log-file", default="logs/loader.log", help="Log file path")
    return parser


def resolve_attributes(args: argparse.Namespace, settings: dict[str, Any]) -> DeclaredAttributes:
    """Combine settings, environment and flags; later sources win."""
    return (
        DeclaredAttributes.from_settings(settings)
        .overlay(DeclaredAttributes.from_env())
        .overlay(DeclaredAttributes(config=args.config, langs=args.langs))
    )


async def run(args: argparse.Namespace, settings: dict[str, Any]) -> int:
    """Run the container once and print the selected configuration."""
    settings = dict(settings)
    if args.base_url:
        settings["http"] = {**(settings.get("http") or {}), "base_url": args.base_url}

    container = ServiceContainer(settings=settings, attributes=resolve_attributes(args, settings))
    try:
        if not await container.initialize():
            print("Configuration failed to load; see log for details.", file=sys.stderr)
            return 1

        if args.lang:
            container.language.use(args.lang)

        current = container.config.get_current()
        if current is None:
            print(f"No configuration available for '{args.lang}'.", file=sys.stderr)
            return 1

        print(json.dumps(current, indent=2, ensure_ascii=False))
        return 0
    finally:
        await container.cleanup()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    load_dotenv()
    settings = ConfigLoader.load_config(args.settings)
    setup_logging(args.log_file)
    try:
        return asyncio.run(run(args, settings))
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
