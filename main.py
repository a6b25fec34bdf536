"""Greeter command-line entry point.

CLI mode prints a time-of-day greeting for one recipient, translated when a non-default language
is requested:

    python main.py Alice ja

Server mode serves the HTTP API and the frontend:

    python main.py --server --port 8080

Both modes need GOOGLE_CLOUD_PROJECT_ID and GOOGLE_APPLICATION_CREDENTIALS (or the matching
[TRANSLATION] settings in greeter.ini).
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

from config.loader import Config, ConfigLoader, ConfigLoaderError
from core.errors import ConfigurationError, TranslationError
from core.shared_data import SharedData
from handlers.api import run_server
from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Sequence

    from models.stats_models import Stats


def check_python_version() -> None:
    """Check if Python version is 3.12 or later.

    Raises:
        RuntimeError: If Python version is below 3.12.
    """
    if sys.version_info < (3, 12):
        msg = "Python 3.12 or later is required"
        raise RuntimeError(msg)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(2)


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = _ArgumentParser(
        description="Time-of-day greeting, translated with Google Cloud Translation",
        epilog="Example: python main.py Alice ja  |  python main.py --server --port 8080",
    )
    parser.add_argument("recipient", nargs="?", help="Name to greet")
    parser.add_argument("language", nargs="?", help="Target language code, e.g. 'ja'")
    parser.add_argument("--server", action="store_true", help="Run the HTTP API instead of greeting once")
    parser.add_argument("--port", type=int, metavar="PORT", help="Port for server mode (default 8080)")
    parser.add_argument("--config", dest="config", metavar="FILE", help="Configuration file (default greeter.ini)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args: argparse.Namespace = parser.parse_args(argv)

    if not args.server and (not args.recipient or not args.language):
        parser.error("Usage: main.py <recipient> <language-code>")
    return args


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file (if any) and apply CLI overrides.

    Raises:
        ConfigLoaderError: If the configuration file cannot be loaded.
    """
    script_name: str = Path(sys.argv[0]).stem
    config_filename: str | None = args.config or ConfigLoader.find_default()
    return ConfigLoader(
        config_filename=config_filename,
        script_name=script_name,
        port=args.port,
        debug=args.debug,
    ).config


def setup_logging(config: Config) -> None:
    log_file: str = config.GENERAL.LOG_FILE
    logger_utils = LoggerUtils(str(FileUtils.resolve_path(log_file)) if log_file else "")
    if config.GENERAL.DEBUG:
        logger_utils.set_level("DEBUG")


async def greet_once(config: Config, recipient: str, language: str) -> tuple[str, Stats]:
    """Build the shared collaborators, produce one greeting and release them.

    Raises:
        ConfigurationError: If the configuration is incomplete.
        TranslationError: If translation fails.
    """
    shared = SharedData(config)
    await shared.async_init()
    try:
        return await shared.new_engine().greet(recipient, language)
    finally:
        await shared.close()


def print_statistics(stats: Stats) -> None:
    """Print the statistics block, only when the provider was called."""
    if stats.api_calls == 0:
        return
    print("\nTranslation Statistics:")
    print(f"From cache: {stats.api_calls == 0}")
    print(f"Characters Translated: {stats.chars_sent}")
    print(f"Estimated Cost: ${stats.cost_estimate:.5f}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the greeter.

    Returns:
        int: Process exit status.
    """
    check_python_version()
    args: argparse.Namespace = parse_arguments(argv)

    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print("Error: Failed to load configuration.", file=sys.stderr)
        print(f"Details: {err}", file=sys.stderr)
        return 1

    setup_logging(config)

    if args.server:
        try:
            run_server(config)
        except ConfigurationError as err:
            print(f"Failed to create greeter: {err}", file=sys.stderr)
            return 1
        return 0

    try:
        greeting, stats = asyncio.run(greet_once(config, args.recipient, args.language))
    except ConfigurationError as err:
        print(f"Failed to create greeter: {err}", file=sys.stderr)
        return 1
    except TranslationError as err:
        print(f"Error greeting in {args.language}: {err}", file=sys.stderr)
        return 1

    print(greeting)
    print_statistics(stats)
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
