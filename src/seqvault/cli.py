"""CLI for seqvault - convert Logseq pages into Obsidian notes."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .convert import convert_page, extract_ids, write_result
from .runtime import build_runtime


def cmd_extract(args: argparse.Namespace, rt: Any) -> int:
    """Register block ids of every page and persist the registry."""
    count = extract_ids(args.pages_dirs, rt)
    if not args.quiet:
        print(f"Pages: {count}")
        print(f"Ids: {len(rt.registry)}")
        print(f"Registry: {rt.store.path}")
    return 0


def cmd_convert(args: argparse.Namespace, rt: Any) -> int:
    """Convert pages into notes in the output vault."""
    for path in args.pages:
        result = convert_page(path, rt, out_vault=args.vault)

        if args.dry_run:
            print(f"[DRY RUN] Would write: {result.out_file}")
            print(result.text, end="")
            for copy in result.copies:
                print(f"[DRY RUN] Would copy: {copy.src} -> {result.out_file.parent / copy.dest}")
            continue

        write_result(result)
        if not args.quiet:
            print(result.out_file)
    return 0


def _log_level(args: argparse.Namespace, default: str) -> int:
    if args.verbose:
        return logging.DEBUG
    if args.quiet:
        return logging.WARNING
    return getattr(logging, default, logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seqvault", description="Convert Logseq pages into Obsidian notes"
    )
    parser.add_argument(
        "--version", action="version", version=f"seqvault {__version__}"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/seqvault.toml, vault/seqvault.toml)",
    )
    parser.add_argument(
        "--registry",
        type=Path,
        default=None,
        help="Path to the block id registry (overrides config, default: ids.json)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # extract command
    parser_extract = subparsers.add_parser(
        "extract", help="Collect block ids from Logseq page directories"
    )
    parser_extract.add_argument(
        "pages_dirs", type=Path, nargs="+", help="Directories holding Logseq pages"
    )

    # convert command
    parser_convert = subparsers.add_parser(
        "convert", help="Convert Logseq pages into Obsidian notes"
    )
    parser_convert.add_argument("pages", type=Path, nargs="+", help="Logseq page files")
    parser_convert.add_argument(
        "--vault",
        type=Path,
        default=None,
        help="Output Obsidian vault (overrides config)",
    )
    parser_convert.add_argument(
        "--dry-run", action="store_true",
        help="Print the rendered notes and planned copies without writing"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    handlers = {
        "extract": cmd_extract,
        "convert": cmd_convert,
    }
    handler = handlers.get(args.cmd)
    if handler is None:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=_log_level(args, "INFO"),
        format="%(levelname)s %(message)s",
    )
    try:
        rt = build_runtime(
            vault_path=getattr(args, "vault", None),
            registry_path=args.registry,
            config_path=args.config,
        )
        logging.getLogger().setLevel(_log_level(args, rt.config.log.level))
        exit_code = handler(args, rt)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
