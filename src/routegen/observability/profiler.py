"""Generation profiler — measures per-stage latency of a generator run.

Records timing for the scan, validate, allocate and emit stages of one run
and appends a ``GenerationProfile`` event to the ``EventLog``.

"""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from routegen.observability.events import GenerationProfile, now_ns

if TYPE_CHECKING:
    from routegen.observability.log import EventLog

STAGES: tuple[str, ...] = ("scan", "validate", "allocate", "emit")


@dataclass(slots=True)
class _Timer:
    """Accumulates timing for a named pipeline stage."""

    name: str
    _start: float = 0.0
    elapsed_ms: float = 0.0

    def start(self) -> None:
        self._start = time.perf_counter()

    def stop(self) -> None:
        if self._start > 0:
            self.elapsed_ms = (time.perf_counter() - self._start) * 1000
            self._start = 0.0


class GenerationProfiler:
    """Records per-stage timing for a single generator run.

    Usage::

        profiler = GenerationProfiler(event_log)

        profiler.begin("app/page_templ.py")
        profiler.start("scan")
        # ... scan ...
        profiler.stop("scan")
        profiler.finish(templates=12, warnings=1)

    After ``finish()``, a ``GenerationProfile`` event is appended to the log
    and, when verbose, a one-line summary is printed to stderr.

    """

    __slots__ = ("_log", "_t0", "_timers", "_trigger_path", "_verbose")

    def __init__(self, log: EventLog, *, verbose: bool = True) -> None:
        self._log = log
        self._verbose = verbose
        self._trigger_path = ""
        self._t0 = 0.0
        self._timers: dict[str, _Timer] = {name: _Timer(name=name) for name in STAGES}

    def begin(self, trigger_path: str = "") -> None:
        """Start profiling a new run."""
        self._trigger_path = trigger_path
        self._t0 = time.perf_counter()
        for timer in self._timers.values():
            timer.elapsed_ms = 0.0

    def start(self, stage: str) -> None:
        """Start timing a named stage."""
        timer = self._timers.get(stage)
        if timer is not None:
            timer.start()

    def stop(self, stage: str) -> None:
        """Stop timing a named stage."""
        timer = self._timers.get(stage)
        if timer is not None:
            timer.stop()

    def finish(self, *, templates: int = 0, warnings: int = 0) -> GenerationProfile:
        """Finish profiling and emit the ``GenerationProfile`` event.

        Returns the profile for testing / inspection.

        """
        total_ms = (time.perf_counter() - self._t0) * 1000 if self._t0 > 0 else 0.0

        profile = GenerationProfile(
            trigger_path=self._trigger_path,
            templates=templates,
            warnings=warnings,
            scan_ms=self._timers["scan"].elapsed_ms,
            validate_ms=self._timers["validate"].elapsed_ms,
            allocate_ms=self._timers["allocate"].elapsed_ms,
            emit_ms=self._timers["emit"].elapsed_ms,
            total_ms=total_ms,
            timestamp_ns=now_ns(),
        )

        self._log.append(profile)

        if self._verbose:
            self._print_summary(profile)

        return profile

    def _print_summary(self, p: GenerationProfile) -> None:
        """Print a one-line timing summary to stderr."""
        label = "template" if p.templates == 1 else "templates"
        stages = ", ".join(
            f"{name}: {getattr(p, f'{name}_ms'):.0f}ms" for name in STAGES
        )
        trigger = ""
        if p.trigger_path:
            trigger = " " + p.trigger_path.replace("\\", "/").rsplit("/", 1)[-1] + " ->"
        print(
            f"  [{p.total_ms:.0f}ms]{trigger} {p.templates} {label} registered ({stages})",
            file=sys.stderr,
        )
