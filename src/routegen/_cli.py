"""Routegen CLI — routegen / routegen version.

Entry point for the ``routegen`` command-line interface.  Without a
subcommand it runs the generator once, or keeps watching with ``--watch``.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from routegen.config import GeneratorConfig, WatchOptions
    from routegen.observability import EventLog
    from routegen.version import BuildInfo


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the routegen CLI."""
    parser = argparse.ArgumentParser(
        prog="routegen",
        description="Generate a template registry from compiled template modules.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    parser.add_argument("--scan-path", default=None, help="Directory to scan for templates")
    parser.add_argument("--module-name", default=None, help="Import prefix of the project")
    parser.add_argument(
        "--output", dest="output_dir", default=None, help="Directory for registry.py",
    )
    parser.add_argument(
        "--package", dest="package_name", default=None, help="Generated package name",
    )
    parser.add_argument(
        "--stable-keys",
        action="store_true",
        default=None,
        help="Derive template keys from import path and function name",
    )
    parser.add_argument(
        "--watch", action="store_true", default=None, help="Regenerate on file changes",
    )
    parser.add_argument(
        "--watch-extensions",
        default=None,
        help="Comma-separated file endings that trigger regeneration",
    )
    parser.add_argument("--config", type=Path, default=None, help="Config file to load")
    parser.add_argument("--verbose", action="store_true", help="Print stage timings")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # routegen version
    subparsers.add_parser("version", help="Print build information")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from routegen import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    from routegen._errors import RoutegenError
    from routegen.config_loader import load_config
    from routegen.observability import EventLog
    from routegen.report import print_error, print_header
    from routegen.version import get_build_info

    build_info = get_build_info()

    if args.command == "version":
        print(build_info)
        return

    try:
        config, watch = load_config(
            config_file=args.config,
            scan_path=args.scan_path,
            module_name=args.module_name,
            output_dir=args.output_dir,
            package_name=args.package_name,
            stable_keys=args.stable_keys,
            watch=args.watch,
            watch_extensions=args.watch_extensions,
        )
    except RoutegenError as exc:
        print_error(exc)
        sys.exit(1)

    print_header(config, build_info, "watch" if watch.enabled else "generate")

    log = EventLog()
    ok = _generate_once(config, build_info, log, verbose=args.verbose)
    if not watch.enabled:
        if not ok:
            sys.exit(1)
        return

    _watch(config, watch, build_info, log, verbose=args.verbose)


def _generate_once(
    config: GeneratorConfig,
    build_info: BuildInfo,
    log: EventLog,
    *,
    trigger_path: str = "",
    verbose: bool = False,
) -> bool:
    """Run the pipeline and report.  Returns False on a reported failure.

    With *verbose*, the event counts of the whole session follow the result.
    """
    from routegen._errors import RoutegenError
    from routegen.generate.emitter import RegistryEmitter
    from routegen.pipeline import run_generation
    from routegen.report import print_error, print_event_stats, print_result

    try:
        result = run_generation(
            config,
            emitter=RegistryEmitter(config, build_info=build_info),
            log=log,
            trigger_path=trigger_path,
            verbose=verbose,
        )
    except RoutegenError as exc:
        print_error(exc)
        return False
    print_result(result)
    if verbose:
        print_event_stats(log.stats())
    return True


def _watch(
    config: GeneratorConfig,
    options: WatchOptions,
    build_info: BuildInfo,
    log: EventLog,
    *,
    verbose: bool = False,
) -> None:
    from routegen.report import print_change
    from routegen.watch import ChangeEvent, RegistryWatcher

    def on_change(event: ChangeEvent) -> None:
        print_change(str(event.path))
        _generate_once(config, build_info, log, trigger_path=str(event.path), verbose=verbose)

    watcher = RegistryWatcher(config, on_change, extensions=options.extensions)
    try:
        watcher.run()
    except KeyboardInterrupt:
        watcher.stop()


if __name__ == "__main__":
    main()
