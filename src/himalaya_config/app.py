# =============================================================================
# Himalaya-Config Command Line
# =============================================================================
# Entry point of the `himalaya-config` command.
#
# The command:
#   - Loads the accounts declaration
#   - Generates the Himalaya config and the watcher unit
#   - Writes them below the XDG config directory (or prints them with
#     --dry-run)
# =============================================================================

import argparse
import logging
import sys
from pathlib import Path

from himalaya_config import __version__, __app_name__
from himalaya_config.config import ConfigError, Declaration, get_xdg_config_home, print_paths
from himalaya_config.generator import GenerationError, generate, write_outputs

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="Generate Himalaya CLI configuration from an accounts declaration",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--paths",
        action="store_true",
        help="Print declaration and output paths and exit",
    )

    parser.add_argument(
        "--input",
        type=Path,
        help="Path to the accounts declaration (default: XDG config location)",
    )

    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory to write into instead of $XDG_CONFIG_HOME",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated files instead of writing them",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    return parser.parse_args(argv)


def setup_logging(debug: bool) -> None:
    """Configure root logging for the command."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for himalaya-config.

    This function:
        1. Parses command-line arguments
        2. Handles special commands (--paths, --version)
        3. Loads the declaration
        4. Generates and writes (or prints) the files

    Returns:
        Exit code (0 for success, 1 for errors).
    """
    args = parse_args(argv)
    setup_logging(args.debug)

    config_home = args.output_dir or get_xdg_config_home()

    # Handle --paths flag
    if args.paths:
        print_paths(config_home)
        return 0

    try:
        declaration = Declaration.load(args.input)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    result = generate(declaration)

    if args.dry_run:
        if not result.enabled:
            print("# Himalaya is not enabled, nothing would be written")
            return 0
        print(result.config_text(), end="")
        unit_text = result.unit_text()
        if unit_text is not None:
            print()
            print(unit_text, end="")
        return 0

    try:
        written = write_outputs(result, config_home)
    except GenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for path in written:
        print(f"Wrote {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
