"""
deckhand CLI - Entry point

Starts the full-screen player, optionally opening a file or directory
right away, or lists what a path would play.
"""

import argparse
import sys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deckhand",
        description="deckhand - terminal audio player",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "path",
        nargs="?",
        help="Audio file or directory to open on startup",
    )
    parser.add_argument(
        "--volume",
        type=int,
        help="Startup volume 0-100 (overrides config)",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        help="Path to config.toml (skips the normal lookup)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the playlist for PATH and exit instead of playing",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the deckhand command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        if not args.path:
            parser.error("--list requires PATH")
        from .main import list_playlist

        sys.exit(list_playlist(args.path, args.config_path, args.log_level))

    from .main import interactive_mode

    sys.exit(
        interactive_mode(
            initial_path=args.path,
            config_path=args.config_path,
            volume=args.volume,
            log_level=args.log_level,
        )
    )


if __name__ == "__main__":
    main()
