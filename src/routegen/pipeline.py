"""Generation pipeline — scan, allocate, validate, emit.

One call to :func:`run_generation` is one complete, synchronous run:

    config check -> scan -> alias allocation -> validation -> emit

Any error before emission leaves the previous registry untouched.  Naming
warnings never stop a run; they are returned for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from routegen.config import validate_config
from routegen.generate.aliases import allocate_aliases
from routegen.generate.emitter import RegistryEmitter
from routegen.generate.validation import validate_entries, validate_imports
from routegen.observability.events import RegistryWritten, now_ns
from routegen.observability.log import EventLog
from routegen.observability.profiler import GenerationProfiler
from routegen.scan.dataservice import detect_data_service
from routegen.scan.scanner import Scanner, filter_package
from routegen.symbols import AstSymbolSource

if TYPE_CHECKING:
    from pathlib import Path

    from routegen._types import DataServiceDetector, KeyFactory
    from routegen.config import GeneratorConfig
    from routegen.generate.aliases import ImportGroup
    from routegen.observability.events import FunctionSkipped, GenerationProfile
    from routegen.scan.scanner import TemplateEntry
    from routegen.symbols import SymbolSource


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Outcome of a successful run.

    Attributes:
        entries: Registered entries carrying their final aliases.
        imports: Import groups, sorted by path.
        warnings: Naming violations reported during the scan.
        output_path: Path of the written registry module.
        profile: Per-stage timing of the run.
        skipped: Parametrized components this run left out, in scan order.

    """

    entries: tuple[TemplateEntry, ...]
    imports: tuple[ImportGroup, ...]
    warnings: tuple[str, ...]
    output_path: Path
    profile: GenerationProfile
    skipped: tuple[FunctionSkipped, ...] = ()


def run_generation(
    config: GeneratorConfig,
    *,
    source: SymbolSource | None = None,
    package: str | None = None,
    key_factory: KeyFactory | None = None,
    detector: DataServiceDetector = detect_data_service,
    emitter: RegistryEmitter | None = None,
    log: EventLog | None = None,
    trigger_path: str = "",
    verbose: bool = False,
) -> GenerationResult:
    """Run the full pipeline once and write the registry.

    Args:
        config: Generator configuration.
        source: Symbol snapshot provider.  Defaults to an
            :class:`~routegen.symbols.AstSymbolSource` over the scan path.
        package: Only register entries of this package.
        key_factory: Overrides template key generation.
        detector: Overrides data service detection.
        emitter: Overrides the registry writer.
        log: Event log receiving scan and emission events.  Pass the same
            log to every run to keep the history of a watch session.
        trigger_path: File change that triggered the run, for the profile.
        verbose: Print the one-line timing summary to stderr.

    Raises:
        ConfigError: On invalid configuration or a template outside the root.
        SourceError: If the symbol source cannot be loaded.
        ValidationError: If the discovered set violates a registry invariant.
        EmitError: If the registry cannot be written.

    """
    validate_config(config)

    log = log if log is not None else EventLog()
    run_start = now_ns()
    profiler = GenerationProfiler(log, verbose=verbose)
    profiler.begin(trigger_path)

    if source is None:
        source = AstSymbolSource(config.scan_path)
    scanner = Scanner(config, source, key_factory=key_factory, detector=detector, log=log)

    profiler.start("scan")
    result = scanner.scan()
    if package is not None:
        result = filter_package(result, package)
    profiler.stop("scan")

    profiler.start("allocate")
    entries, imports = allocate_aliases(result.entries)
    profiler.stop("allocate")

    profiler.start("validate")
    validate_entries(entries)
    validate_imports(imports)
    profiler.stop("validate")

    emitter = emitter or RegistryEmitter(config)
    profiler.start("emit")
    output_path = emitter.emit(entries, imports)
    profiler.stop("emit")

    log.append(RegistryWritten(
        path=str(output_path),
        templates=len(entries),
        imports=len(imports),
        timestamp_ns=now_ns(),
    ))
    profile = profiler.finish(templates=len(entries), warnings=len(result.warnings))

    return GenerationResult(
        entries=tuple(entries),
        imports=tuple(imports),
        warnings=result.warnings,
        output_path=output_path,
        profile=profile,
        skipped=tuple(log.skipped(since_ns=run_start, reason="parameters")),
    )

