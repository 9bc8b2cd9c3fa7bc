"""Tests for routegen.config_loader — file, environment and override precedence."""

from __future__ import annotations

from pathlib import Path

import pytest

from routegen._errors import ConfigError
from routegen.config import validate_config
from routegen.config_loader import (
    find_config_file,
    load_config,
    read_config_file,
    read_environment,
)


class TestFindConfigFile:
    def test_none_when_missing(self, tmp_path: Path) -> None:
        assert find_config_file(tmp_path) is None

    def test_yaml_preferred_over_toml(self, tmp_path: Path) -> None:
        (tmp_path / "routegen.toml").write_text("module_name = 'a'\n")
        (tmp_path / "routegen.yaml").write_text("module_name: b\n")
        assert find_config_file(tmp_path) == tmp_path / "routegen.yaml"

    def test_yml_found(self, tmp_path: Path) -> None:
        (tmp_path / "routegen.yml").write_text("module_name: b\n")
        assert find_config_file(tmp_path) == tmp_path / "routegen.yml"


class TestReadConfigFile:
    def test_yaml_section(self, tmp_path: Path) -> None:
        path = tmp_path / "routegen.yaml"
        path.write_text("routegen:\n  module-name: myproject\n  stable_keys: true\n")
        assert read_config_file(path) == {"module_name": "myproject", "stable_keys": True}

    def test_toml_top_level(self, tmp_path: Path) -> None:
        path = tmp_path / "routegen.toml"
        path.write_text('scan_path = "web/app"\npackage_name = "views"\n')
        assert read_config_file(path) == {"scan_path": "web/app", "package_name": "views"}

    def test_empty_yaml_is_empty_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "routegen.yaml"
        path.write_text("")
        assert read_config_file(path) == {}

    def test_malformed_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "routegen.yaml"
        path.write_text("routegen: [unclosed\n")
        with pytest.raises(ConfigError, match="Failed to parse"):
            read_config_file(path)

    def test_malformed_toml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "routegen.toml"
        path.write_text("scan_path = \n")
        with pytest.raises(ConfigError, match="Failed to parse"):
            read_config_file(path)

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "routegen.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            read_config_file(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Failed to read"):
            read_config_file(tmp_path / "nope.yaml")


class TestReadEnvironment:
    def test_only_set_variables(self) -> None:
        env = {"ROUTEGEN_MODULE_NAME": "myproject", "HOME": "/root"}
        assert read_environment(env) == {"module_name": "myproject"}


class TestLoadConfig:
    """load_config — precedence CLI > environment > file > defaults."""

    def test_overrides_only(self, tmp_path: Path) -> None:
        config, watch = load_config(
            tmp_path, environ={}, scan_path="web/app", module_name="myproject",
        )
        assert config.scan_path == Path("web/app")
        assert config.module_name == "myproject"
        assert config.package_name == "templates"
        assert watch.enabled is False

    def test_file_paths_anchored_to_file_directory(self, tmp_path: Path) -> None:
        (tmp_path / "routegen.yaml").write_text(
            "scan_path: web/app\nmodule_name: myproject\noutput_dir: gen\n"
        )
        config, _ = load_config(tmp_path, environ={})
        assert config.scan_path == tmp_path / "web/app"
        assert config.output_dir == tmp_path / "gen"

    def test_environment_beats_file(self, tmp_path: Path) -> None:
        (tmp_path / "routegen.yaml").write_text("scan_path: web/app\nmodule_name: fromfile\n")
        config, _ = load_config(tmp_path, environ={"ROUTEGEN_MODULE_NAME": "fromenv"})
        assert config.module_name == "fromenv"

    def test_override_beats_environment(self, tmp_path: Path) -> None:
        config, _ = load_config(
            tmp_path,
            environ={"ROUTEGEN_MODULE_NAME": "fromenv", "ROUTEGEN_SCAN_PATH": "app"},
            module_name="fromcli",
        )
        assert config.module_name == "fromcli"
        assert config.scan_path == Path("app")

    def test_none_override_is_unset(self, tmp_path: Path) -> None:
        config, _ = load_config(
            tmp_path,
            environ={"ROUTEGEN_MODULE_NAME": "fromenv", "ROUTEGEN_SCAN_PATH": "app"},
            module_name=None,
        )
        assert config.module_name == "fromenv"

    def test_explicit_config_file(self, tmp_path: Path) -> None:
        other = tmp_path / "conf" / "custom.toml"
        other.parent.mkdir()
        other.write_text('[routegen]\nscan_path = "app"\nmodule_name = "m"\n')
        config, _ = load_config(tmp_path, config_file=other, environ={})
        assert config.scan_path == other.parent / "app"

    def test_environment_booleans(self, tmp_path: Path) -> None:
        config, watch = load_config(
            tmp_path,
            environ={
                "ROUTEGEN_SCAN_PATH": "app",
                "ROUTEGEN_MODULE_NAME": "m",
                "ROUTEGEN_STABLE_KEYS": "yes",
                "ROUTEGEN_WATCH": "1",
            },
        )
        assert config.stable_keys is True
        assert watch.enabled is True

    def test_bad_boolean_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="boolean"):
            load_config(
                tmp_path,
                environ={"ROUTEGEN_WATCH": "sometimes"},
                scan_path="app",
                module_name="m",
            )

    def test_watch_extensions_string(self, tmp_path: Path) -> None:
        _, watch = load_config(
            tmp_path, environ={}, scan_path="app", module_name="m", watch_extensions="py, yaml",
        )
        assert watch.extensions == (".py", ".yaml")

    def test_watch_extensions_list_in_file(self, tmp_path: Path) -> None:
        (tmp_path / "routegen.yaml").write_text(
            "scan_path: app\nmodule_name: m\nwatch_extensions: [.py, .yml]\n"
        )
        _, watch = load_config(tmp_path, environ={})
        assert watch.extensions == (".py", ".yml")

    def test_missing_scan_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="scan path is required"):
            load_config(tmp_path, environ={}, module_name="m")

    def test_blank_scan_path_is_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="scan path is required"):
            load_config(tmp_path, environ={"ROUTEGEN_SCAN_PATH": ""}, module_name="m")
        with pytest.raises(ConfigError, match="scan path is required"):
            load_config(tmp_path, environ={}, scan_path="", module_name="m")

    def test_missing_module_name(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="ROUTEGEN_MODULE_NAME"):
            load_config(tmp_path, environ={}, scan_path="app")

    def test_unknown_key(self, tmp_path: Path) -> None:
        (tmp_path / "routegen.yaml").write_text("scan_path: app\nmodule_name: m\nport: 3\n")
        with pytest.raises(ConfigError, match="unknown configuration keys: port"):
            load_config(tmp_path, environ={})


class TestNonStringValues:
    """Numbers in a config file surface as ConfigError, not TypeError."""

    @pytest.mark.parametrize(
        ("line", "match"),
        [
            ("package_name: 2024", "package name must be a string"),
            ("module_name: 123", "module name must be a string"),
            ("output_dir: 7", "output directory must be a path"),
        ],
    )
    def test_rejected_by_validation(self, tmp_path: Path, line: str, match: str) -> None:
        base = {"scan_path": "scan_path: app", "module_name": "module_name: m"}
        key = line.split(":", 1)[0]
        base[key] = line
        (tmp_path / "routegen.yaml").write_text("\n".join(base.values()) + "\n")
        config, _ = load_config(tmp_path, environ={})
        with pytest.raises(ConfigError, match=match):
            validate_config(config)

    def test_numeric_scan_path(self, tmp_path: Path) -> None:
        (tmp_path / "routegen.toml").write_text("scan_path = 5\nmodule_name = 'm'\n")
        config, _ = load_config(tmp_path, environ={})
        with pytest.raises(ConfigError, match="scan path must be a path"):
            validate_config(config)
