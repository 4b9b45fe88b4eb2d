"""Command line entry point: ``inherit-profile sync|remove``."""

import argparse
import logging
import sys
from pathlib import Path

from .discovery import StorageProfileRegistry
from .exceptions import InheritProfileError
from .extensions import CodeCommandHost
from .jsonc import write_raw_text
from .report import render_markdown
from .settings import remove_inherited_settings
from .sync import load_inheritance_config
from .sync import update_profile_inheritance
from .watch import DEFAULT_INTERVAL
from .watch import watch_profile_changes

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="inherit-profile", description="Inherit settings between editor profiles.")
    parser.add_argument("--user-dir", type=Path, required=True, help="Editor user directory (contains globalStorage/)")
    parser.add_argument("--profile", help="Profile to update instead of the one marked current")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Inherit settings and files from parent profiles")
    sync.add_argument("--parent", action="append", dest="parents", help="Parent profile (repeatable, base first)")
    sync.add_argument("--summary", type=Path, help="Write a markdown summary to this path")
    sync.add_argument("--code", help="Editor executable used to install extensions")
    sync.add_argument("--extensions-dir", type=Path, help="Global extensions directory of the Default profile")

    subparsers.add_parser("remove", help="Remove inherited settings from the profile")

    watch = subparsers.add_parser("watch", help="Sync again whenever the editor switches profiles")
    watch.add_argument("--interval", type=float, default=DEFAULT_INTERVAL, help="Seconds between checks")
    watch.add_argument("--code", help="Editor executable used to install extensions")
    watch.add_argument("--extensions-dir", type=Path, help="Global extensions directory of the Default profile")
    watch.set_defaults(parents=None, summary=None)
    return parser


def run_sync(args: argparse.Namespace, registry: StorageProfileRegistry) -> int:
    config = load_inheritance_config(registry)
    if args.parents:
        config = config.model_copy(update={"parents": args.parents})

    host = None
    if args.code:
        host = CodeCommandHost(registry.current_profile_name(), args.code, args.extensions_dir)

    report = update_profile_inheritance(registry, config, host)

    if args.summary is not None:
        write_raw_text(args.summary, render_markdown(report))
        logger.info("Wrote summary to %s", args.summary)
    elif config.show_summary:
        print(render_markdown(report))

    return 1 if report.errors else 0


def run_watch(args: argparse.Namespace, registry: StorageProfileRegistry) -> int:
    def on_change(name: str) -> None:
        try:
            run_sync(args, registry)
        except InheritProfileError as e:
            logger.error("Failed to update profile '%s': %s", name, e.message)

    try:
        watch_profile_changes(registry, on_change, args.interval)
    except KeyboardInterrupt:
        logger.info("Stopped watching for profile changes")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s %(asctime)s] [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    registry = StorageProfileRegistry(args.user_dir, current_profile=args.profile)
    try:
        if args.command == "watch":
            if args.profile:
                logger.error("--profile pins the current profile and cannot be combined with watch")
                return 2
            return run_watch(args, registry)
        if args.command == "remove":
            changed = remove_inherited_settings(registry)
            logger.info("Inherited settings removed" if changed else "No inherited settings to remove")
            return 0
        return run_sync(args, registry)
    except InheritProfileError as e:
        logger.error("%s", e.message)
        return 2


if __name__ == "__main__":
    sys.exit(main())
