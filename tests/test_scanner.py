"""Tests for routegen.scan.scanner — from symbol snapshots to registry entries."""

from __future__ import annotations

import uuid
from dataclasses import replace
from pathlib import Path

import pytest

from conftest import write_template
from routegen._errors import ConfigError, SourceError
from routegen.config import GeneratorConfig
from routegen.observability import EventLog, FileScanned, FunctionSkipped
from routegen.scan.dataservice import DataServiceInfo
from routegen.scan.scanner import (
    Scanner,
    ScanResult,
    TemplateEntry,
    filter_package,
    random_template_key,
    scan_package,
    scan_templates,
    stable_template_key,
)
from routegen.symbols import AstSymbolSource, FileSymbols, FunctionSymbol, Parameter


class _StaticSource:
    """In-memory symbol source."""

    def __init__(self, *files: FileSymbols) -> None:
        self._files = files

    def load(self) -> tuple[FileSymbols, ...]:
        return self._files


def _by_route(entries: tuple[TemplateEntry, ...]) -> dict[str, TemplateEntry]:
    return {entry.route_pattern: entry for entry in entries}


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------


class TestTemplateKeys:
    def test_random_keys_differ(self) -> None:
        assert random_template_key("m.app", "Page") != random_template_key("m.app", "Page")

    def test_random_key_is_uuid(self) -> None:
        uuid.UUID(random_template_key("m.app", "Page"))

    def test_stable_key_repeatable(self) -> None:
        assert stable_template_key("m.app", "Page") == stable_template_key("m.app", "Page")

    def test_stable_key_distinguishes_functions(self) -> None:
        assert stable_template_key("m.app", "Page") != stable_template_key("m.app", "Layout")
        assert stable_template_key("m.app", "Page") != stable_template_key("m.app.admin", "Page")


# ---------------------------------------------------------------------------
# Scanning a real tree
# ---------------------------------------------------------------------------


class TestScanTree:
    """Scanner over the shared ``app_root`` fixture tree."""

    @pytest.fixture
    def result(self, config: GeneratorConfig) -> ScanResult:
        return scan_templates(config, AstSymbolSource(config.scan_path))

    def test_routes(self, result: ScanResult) -> None:
        assert sorted(_by_route(result.entries)) == [
            "/",
            "/admin",
            "/error-demo",
            "/layout",
            "/nav_bar",
            "/users/{id}",
            "/users/{id}/error",
        ]

    def test_parametrized_component_skipped(self, result: ScanResult) -> None:
        names = {entry.function_name for entry in result.entries}
        assert "Button" not in names
        assert "NavBar" in names

    def test_parametrized_page_included(self, result: ScanResult) -> None:
        entry = _by_route(result.entries)["/users/{id}"]
        assert entry.function_name == "Page"
        assert entry.requires_data_service
        assert entry.data_service == DataServiceInfo(
            requires_data_service=True,
            interface="dataservices.UserDataService",
            parameter_type="myproject.dataservices.UserData",
        )

    def test_naming_violation_is_warning(self, result: ScanResult) -> None:
        assert len(result.warnings) == 1
        assert "AdminPage" in result.warnings[0]
        assert "AdminPage" not in {entry.function_name for entry in result.entries}

    def test_package_resolution(self, result: ScanResult) -> None:
        routes = _by_route(result.entries)
        assert routes["/"].import_path == "myproject.app"
        assert routes["/"].package_name == "app"
        assert routes["/admin"].import_path == "myproject.app.admin"
        assert routes["/error-demo"].package_name == "errordemo"
        assert routes["/error-demo"].import_path == "myproject.app.error-demo"
        assert routes["/users/{id}"].import_path == "myproject.app.users.id_"

    def test_human_names(self, result: ScanResult) -> None:
        routes = _by_route(result.entries)
        assert routes["/"].human_name == "Page"
        assert routes["/admin"].human_name == "admin.Page"
        assert routes["/"].package_name == "web"
        assert routes["/users/{id}/error"].human_name == "users.Error"

    def test_entry_fields(self, result: ScanResult) -> None:
        entry = _by_route(result.entries)["/nav_bar"]
        assert entry.source_module == "navbar_templ"
        assert entry.file_path.is_absolute()
        assert entry.package_alias == entry.package_name
        assert entry.data_service is None
        assert not entry.requires_data_service

    def test_stable_keys_used(self, result: ScanResult) -> None:
        entry = _by_route(result.entries)["/"]
        assert entry.template_key == stable_template_key("myproject.app", "Page")

    def test_keys_unique(self, result: ScanResult) -> None:
        keys = [entry.template_key for entry in result.entries]
        assert len(keys) == len(set(keys))

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        config = GeneratorConfig(scan_path=tmp_path / "missing", module_name="m")
        with pytest.raises(SourceError):
            scan_templates(config, AstSymbolSource(config.scan_path))


class TestScannerOptions:
    def test_random_keys_by_default(self, config: GeneratorConfig) -> None:
        config = replace(config, stable_keys=False)
        first = scan_templates(config, AstSymbolSource(config.scan_path))
        second = scan_templates(config, AstSymbolSource(config.scan_path))
        assert {e.template_key for e in first.entries}.isdisjoint(
            {e.template_key for e in second.entries}
        )

    def test_custom_key_factory(self, config: GeneratorConfig) -> None:
        scanner = Scanner(
            config,
            AstSymbolSource(config.scan_path),
            key_factory=lambda path, name: f"{path}:{name}",
        )
        keys = {entry.template_key for entry in scanner.scan().entries}
        assert "myproject.app:Page" in keys

    def test_custom_detector(self, config: GeneratorConfig) -> None:
        seen: list[Parameter] = []

        def detector(parameter: Parameter) -> DataServiceInfo | None:
            seen.append(parameter)
            return None

        result = Scanner(config, AstSymbolSource(config.scan_path), detector=detector).scan()
        assert [p.name for p in seen] == ["data"]
        assert not any(entry.requires_data_service for entry in result.entries)

    def test_file_outside_root_aborts(self, tmp_path: Path) -> None:
        config = GeneratorConfig(scan_path=tmp_path / "app", module_name="m")
        stray = FileSymbols(
            path=tmp_path / "other" / "page_templ.py",
            package="other",
            functions=(FunctionSymbol("Page"),),
        )
        with pytest.raises(ConfigError, match="is not in the"):
            Scanner(config, _StaticSource(stray)).scan()

    def test_non_template_files_ignored(self, tmp_path: Path) -> None:
        config = GeneratorConfig(scan_path=tmp_path / "app", module_name="m")
        helper = FileSymbols(
            path=tmp_path / "app" / "helpers.py",
            package="app",
            functions=(FunctionSymbol("Page"),),
        )
        assert Scanner(config, _StaticSource(helper)).scan().entries == ()

    def test_reserved_with_many_parameters_included(self, tmp_path: Path) -> None:
        config = GeneratorConfig(scan_path=tmp_path / "app", module_name="m")
        layout = FileSymbols(
            path=tmp_path / "app" / "layout_templ.py",
            package="app",
            functions=(FunctionSymbol("Layout", (Parameter("title", "str"), Parameter("body"))),),
        )
        (entry,) = Scanner(config, _StaticSource(layout)).scan().entries
        assert entry.route_pattern == "/layout"
        assert entry.data_service is None

    def test_parent_relative_scan_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        web = tmp_path / "web"
        write_template(web, "page_templ.py", "def Page(): pass\n")
        write_template(web, "admin/page_templ.py", "def Page(): pass\n")
        (web / "app").mkdir()
        monkeypatch.chdir(web / "app")

        config = GeneratorConfig(scan_path=Path(".."), module_name="m")
        result = Scanner(config, AstSymbolSource(config.scan_path)).scan()

        routes = _by_route(result.entries)
        assert set(routes) == {"/", "/admin"}
        assert routes["/admin"].import_path == "m.web.admin"
        assert routes["/admin"].human_name == "admin.Page"
        for entry in result.entries:
            assert ".." not in entry.file_path.parts


class TestScanEvents:
    def test_events_recorded(self, config: GeneratorConfig) -> None:
        log = EventLog()
        Scanner(config, AstSymbolSource(config.scan_path), log=log).scan()

        scanned = log.query(event_type=FileScanned)
        assert len(scanned) == 7

        skipped = {e.function_name: e for e in log.query(event_type=FunctionSkipped)}
        assert skipped["Button"].reason == "parameters"
        assert skipped["AdminPage"].reason == "naming"


class TestPackageFilter:
    def test_scan_package(self, config: GeneratorConfig) -> None:
        result = scan_package(config, AstSymbolSource(config.scan_path), "admin")
        assert [entry.route_pattern for entry in result.entries] == ["/admin"]
        # Warnings cover the whole tree
        assert len(result.warnings) == 1

    def test_filter_unknown_package(self, config: GeneratorConfig) -> None:
        result = scan_templates(config, AstSymbolSource(config.scan_path))
        assert filter_package(result, "nope").entries == ()
