"""Template scanner — turn a symbol snapshot into registry entries.

For every template module under the scan root, each module-level function
is checked against the naming rules and the parameter policy:

    def Page(): ...                     -> included
    def Page(data: UserData): ...       -> included, data service inferred
    def Navbar(): ...                   -> included (component)
    def Button(text: str): ...          -> skipped (parametrized component)
    def AdminPage(): ...                -> skipped with a naming warning

Naming violations never abort a scan; they are collected as warnings.  A
template module outside the scan root aborts the whole run.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from routegen._errors import NamingError
from routegen.config import TEMPLATE_SUFFIX
from routegen.observability.events import FileScanned, FunctionSkipped, now_ns
from routegen.scan.dataservice import DataServiceInfo, detect_data_service
from routegen.scan.naming import validate_function_naming, validate_template_path
from routegen.scan.packages import create_human_name, resolve_package
from routegen.scan.routes import RESERVED_NAMES, create_route_pattern

if TYPE_CHECKING:
    from routegen._types import DataServiceDetector, KeyFactory
    from routegen.config import GeneratorConfig
    from routegen.observability.log import EventLog
    from routegen.symbols import FileSymbols, FunctionSymbol, SymbolSource

# Namespace for keys derived from (import path, function name)
_STABLE_KEY_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "routegen:template-key")


@dataclass(frozen=True, slots=True)
class TemplateEntry:
    """A discovered template function ready for registration.

    Attributes:
        file_path: Absolute path to the template module.
        function_name: Name of the template function.
        source_module: Module file stem (``page_templ``).
        package_name: Identifier-safe package name.
        package_alias: Import alias in the generated registry.  Starts as the
            package name and is finalized by the alias allocator.
        import_path: Dotted import path of the package.
        template_key: Opaque key identifying the function in the registry.
        route_pattern: URL pattern (``/users/{id}``).
        human_name: Readable name (``users.Page``).
        data_service: Inferred data dependency, if any.

    """

    file_path: Path
    function_name: str
    source_module: str
    package_name: str
    package_alias: str
    import_path: str
    template_key: str
    route_pattern: str
    human_name: str
    data_service: DataServiceInfo | None = None

    @property
    def requires_data_service(self) -> bool:
        return self.data_service is not None and self.data_service.requires_data_service

    def with_alias(self, alias: str) -> TemplateEntry:
        """Return a copy annotated with the final import alias."""
        return replace(self, package_alias=alias)


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Entries and naming warnings collected by one scan."""

    entries: tuple[TemplateEntry, ...] = ()
    warnings: tuple[str, ...] = ()


def random_template_key(import_path: str, function_name: str) -> str:  # noqa: ARG001
    """Mint a fresh random key (differs on every run)."""
    return str(uuid.uuid4())


def stable_template_key(import_path: str, function_name: str) -> str:
    """Derive a key that stays the same across runs for the same function."""
    return str(uuid.uuid5(_STABLE_KEY_NAMESPACE, f"{import_path}:{function_name}"))


class Scanner:
    """Scan a symbol snapshot for template functions.

    Args:
        config: Generator configuration.
        source: Supplies the symbol snapshot.
        key_factory: Builds template keys.  Defaults to random UUIDs, or to
            :func:`stable_template_key` when ``config.stable_keys`` is set.
        detector: Infers data services for parametrized reserved functions.
        log: Optional event log receiving scan events.
        suffix: File-name suffix of template modules.

    """

    __slots__ = ("_config", "_detector", "_key_factory", "_log", "_source", "_suffix")

    def __init__(
        self,
        config: GeneratorConfig,
        source: SymbolSource,
        *,
        key_factory: KeyFactory | None = None,
        detector: DataServiceDetector = detect_data_service,
        log: EventLog | None = None,
        suffix: str = TEMPLATE_SUFFIX,
    ) -> None:
        if key_factory is None:
            key_factory = stable_template_key if config.stable_keys else random_template_key
        self._config = config
        self._source = source
        self._key_factory = key_factory
        self._detector = detector
        self._log = log
        self._suffix = suffix

    def scan(self) -> ScanResult:
        """Scan every template module in the snapshot.

        Raises:
            SourceError: If the symbol source cannot be loaded.
            ConfigError: If a template module lies outside the scan root.

        """
        entries: list[TemplateEntry] = []
        warnings: list[str] = []

        for file in self._source.load():
            if not Path(file.path).name.endswith(self._suffix):
                continue
            validate_template_path(Path(file.path), self._config.scan_path)
            entries.extend(self._scan_file(file, warnings))

        return ScanResult(entries=tuple(entries), warnings=tuple(warnings))

    def _scan_file(self, file: FileSymbols, warnings: list[str]) -> list[TemplateEntry]:
        file_path = Path(file.path).resolve()
        entries: list[TemplateEntry] = []

        for function in file.functions:
            try:
                validate_function_naming(function.name, file_path, suffix=self._suffix)
            except NamingError as exc:
                warnings.append(str(exc))
                self._record_skip(file_path, function.name, "naming", str(exc))
                continue

            if function.parameter_count and function.name not in RESERVED_NAMES:
                self._record_skip(
                    file_path,
                    function.name,
                    "parameters",
                    f"{function.name} takes {function.parameter_count} parameter(s)",
                )
                continue

            entries.append(self._build_entry(file, file_path, function))

        if self._log is not None:
            self._log.append(FileScanned(
                path=str(file_path),
                functions_found=len(file.functions),
                templates_included=len(entries),
                timestamp_ns=now_ns(),
            ))
        return entries

    def _build_entry(
        self,
        file: FileSymbols,
        file_path: Path,
        function: FunctionSymbol,
    ) -> TemplateEntry:
        root_name = self._config.root_name
        package = resolve_package(file_path, file.package, self._config.module_name, root_name)

        data_service = None
        if function.parameters:
            data_service = self._detector(function.parameters[0])

        return TemplateEntry(
            file_path=file_path,
            function_name=function.name,
            source_module=file_path.name.removesuffix(".py"),
            package_name=package.package_name,
            package_alias=package.package_name,
            import_path=package.import_path,
            template_key=self._key_factory(package.import_path, function.name),
            route_pattern=create_route_pattern(file_path, function.name, root_name),
            human_name=create_human_name(file_path, function.name, root_name),
            data_service=data_service,
        )

    def _record_skip(
        self,
        file_path: Path,
        name: str,
        reason: Literal["naming", "parameters"],
        detail: str,
    ) -> None:
        if self._log is None:
            return
        self._log.append(FunctionSkipped(
            path=str(file_path),
            function_name=name,
            reason=reason,
            detail=detail,
            timestamp_ns=now_ns(),
        ))


def scan_templates(
    config: GeneratorConfig,
    source: SymbolSource,
    **options: object,
) -> ScanResult:
    """Scan every template package under the scan root."""
    return Scanner(config, source, **options).scan()  # type: ignore[arg-type]


def scan_package(
    config: GeneratorConfig,
    source: SymbolSource,
    package_name: str,
    **options: object,
) -> ScanResult:
    """Scan the whole tree, keeping only entries of *package_name*.

    Warnings are reported for the whole tree, since naming rules do not
    depend on the package filter.
    """
    return filter_package(scan_templates(config, source, **options), package_name)


def filter_package(result: ScanResult, package_name: str) -> ScanResult:
    """Keep only the entries of *package_name*; warnings are kept as-is."""
    entries = tuple(e for e in result.entries if e.package_name == package_name)
    return ScanResult(entries=entries, warnings=result.warnings)
