"""CLI entry point: mercy <command> (or python -m mercy_kit <command>)."""

from __future__ import annotations

import argparse
import sys

COMMANDS = {
    "init": "Initialize a new integration in a new directory",
    "validate": "Validate the integration in the current directory",
}

_EPILOG = "commands:\n" + "\n".join(
    f"  {name:<10}{description}" for name, description in COMMANDS.items()
) + "\n\nconfiguration: MERCY_POLICY_FILE, MERCY_CODE_STYLE, MERCY_REPORT_FORMAT, MERCY_LOG_LEVEL"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mercy",
        description="M.E.R.C.Y Integration Kit",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("command", nargs="?", help="init | validate")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    # parse_args would exit 2 on unknown flags; commands take no flags.
    args, extras = parser.parse_known_args(argv)

    if args.command not in COMMANDS or extras:
        parser.print_help()
        return

    from mercy_kit.config import KitConfig, configure_logging

    try:
        config = KitConfig.from_env()
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    configure_logging(config.log_level)

    if args.command == "init":
        from mercy_kit.cli.init import run_init
        run_init(config)
    else:
        from mercy_kit.cli.validate import run_validate
        run_validate(config)


if __name__ == "__main__":
    main()
