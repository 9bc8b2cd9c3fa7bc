"""Run reporting — status output for generator runs.

Prints a header, the discovered routes, naming warnings and the outcome of
each run to stderr.  Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from routegen.config import GeneratorConfig
    from routegen.pipeline import GenerationResult
    from routegen.version import BuildInfo


# ---------------------------------------------------------------------------
# ANSI helpers, respecting NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""
_RED = "\033[31m" if _COLOR else ""


_MODE_STYLES: dict[str, tuple[str, str]] = {
    "generate": (_GREEN, "generate"),
    "watch": (_CYAN, "watch"),
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def _emit(lines: Sequence[str]) -> None:
    print("\n".join(lines), file=sys.stderr)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_header(config: GeneratorConfig, build_info: BuildInfo, mode: str) -> None:
    """Print the run header: version, scan path and output directory."""
    _emit([
        "",
        f"  {_BOLD}routegen{_RESET} {_DIM}{build_info.short()}{_RESET}  {_mode_badge(mode)}",
        f"  {_DIM}{'─' * 43}{_RESET}",
        f"  {_DIM}├─{_RESET} scan:   {_DIM}{config.scan_path}{_RESET}",
        f"  {_DIM}├─{_RESET} module: {config.module_name}",
        f"  {_DIM}└─{_RESET} output: {_DIM}{config.registry_path}{_RESET}",
        "",
    ])


def print_result(result: GenerationResult) -> None:
    """Print discovered routes, skipped components, warnings and the output path."""
    count = len(result.entries)
    label = "template" if count == 1 else "templates"
    lines: list[str] = [f"  Found {count} {label}"]
    lines.extend(
        f"  {_DIM}├─{_RESET} {entry.route_pattern} -> "
        f"{entry.function_name} {_DIM}({entry.human_name}){_RESET}"
        for entry in sorted(result.entries, key=lambda e: e.route_pattern)
    )

    if result.skipped:
        lines.append("")
        lines.append(f"  {_DIM}Skipped {len(result.skipped)} parametrized:{_RESET}")
        lines.extend(
            f"  {_DIM}├─{_RESET} {event.detail} {_DIM}({Path(event.path).name}){_RESET}"
            for event in result.skipped
        )

    if result.warnings:
        lines.append("")
        lines.extend(format_warnings(result.warnings))

    lines.append("")
    lines.append(f"  {_GREEN}✓{_RESET} wrote {_DIM}{result.output_path}{_RESET}")
    lines.append("")
    _emit(lines)


def format_warnings(warnings: Sequence[str]) -> list[str]:
    """Format naming warnings, one per line."""
    return [f"  {_YELLOW}!{_RESET} {w}" for w in warnings]


def print_error(error: Exception) -> None:
    """Print a failed run."""
    _emit([f"  {_RED}error:{_RESET} {error}"])


def print_change(path: str) -> None:
    """Print the file change that triggered a regeneration."""
    _emit([f"  {_DIM}changed:{_RESET} {path}"])


def print_event_stats(stats: Mapping[str, int]) -> None:
    """Print event counts of the session, as returned by ``EventLog.stats()``."""
    counts = ", ".join(f"{name}={count}" for name, count in stats.items() if name != "total")
    _emit([f"  {_DIM}events: {stats.get('total', 0)} ({counts}){_RESET}"])
