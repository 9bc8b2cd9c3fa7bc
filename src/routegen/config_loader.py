"""Load GeneratorConfig from routegen.yaml / routegen.toml and the environment.

Precedence, highest first: explicit overrides (CLI) > ``ROUTEGEN_*``
environment variables > config file > defaults.  The scan path and module
name have no defaults; every project has to name its own.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from routegen._errors import ConfigError
from routegen.config import GeneratorConfig, WatchOptions
from routegen.watch.watcher import parse_extensions

if TYPE_CHECKING:
    from collections.abc import Mapping

CONFIG_FILENAMES: tuple[str, ...] = ("routegen.yaml", "routegen.yml", "routegen.toml")

_KEYS: frozenset[str] = frozenset({
    "scan_path",
    "module_name",
    "output_dir",
    "package_name",
    "stable_keys",
    "watch",
    "watch_extensions",
})

ENV_VARS: dict[str, str] = {
    "ROUTEGEN_SCAN_PATH": "scan_path",
    "ROUTEGEN_MODULE_NAME": "module_name",
    "ROUTEGEN_OUTPUT_DIR": "output_dir",
    "ROUTEGEN_PACKAGE_NAME": "package_name",
    "ROUTEGEN_STABLE_KEYS": "stable_keys",
    "ROUTEGEN_WATCH": "watch",
    "ROUTEGEN_WATCH_EXTENSIONS": "watch_extensions",
}

_BOOL_KEYS: frozenset[str] = frozenset({"stable_keys", "watch"})
_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def load_config(
    root: Path | None = None,
    *,
    config_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
    **overrides: object,
) -> tuple[GeneratorConfig, WatchOptions]:
    """Resolve the generator and watch configuration.

    Args:
        root: Directory searched for a config file (defaults to the cwd).
        config_file: Explicit config file; skips the search.
        environ: Environment to read ``ROUTEGEN_*`` variables from.
        **overrides: Values from the command line.  ``None`` means unset.

    Raises:
        ConfigError: On a malformed config file, an unknown key, a bad
            boolean, or a missing scan path or module name.

    """
    root = root or Path.cwd()
    environ = os.environ if environ is None else environ

    path = config_file or find_config_file(root)
    file_config = read_config_file(path) if path is not None else {}
    if path is not None:
        _anchor_paths(file_config, path.parent)

    merged: dict[str, object] = {
        **file_config,
        **read_environment(environ),
        **{k: v for k, v in overrides.items() if v is not None},
    }

    unknown = set(merged) - _KEYS
    if unknown:
        msg = f"unknown configuration keys: {', '.join(sorted(unknown))}"
        raise ConfigError(msg)

    for key in ("scan_path", "module_name"):
        if not merged.get(key):
            msg = f"{key.replace('_', ' ')} is required (--{key.replace('_', '-')} or {_env_name(key)})"
            raise ConfigError(msg)

    for key in _BOOL_KEYS & set(merged):
        merged[key] = _to_bool(key, merged[key])

    extensions = merged.pop("watch_extensions", None)
    watch = WatchOptions(enabled=bool(merged.pop("watch", False)))
    if extensions is not None:
        if isinstance(extensions, str):
            parsed = parse_extensions(extensions)
        else:
            parsed = parse_extensions(",".join(str(e) for e in extensions))  # type: ignore[union-attr]
        watch = WatchOptions(enabled=watch.enabled, extensions=parsed)

    return GeneratorConfig(**merged), watch  # type: ignore[arg-type]


def find_config_file(root: Path) -> Path | None:
    """Return the first config file present in *root*."""
    for name in CONFIG_FILENAMES:
        path = root / name
        if path.is_file():
            return path
    return None


def read_config_file(path: Path) -> dict[str, object]:
    """Parse a YAML or TOML config file.

    Raises:
        ConfigError: If the file cannot be read or parsed.

    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Failed to read config file {path}: {exc}"
        raise ConfigError(msg) from exc

    try:
        if path.suffix == ".toml":
            data = tomllib.loads(text)
        else:
            data = yaml.safe_load(text) or {}
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        msg = f"Failed to parse config file {path}: {exc}"
        raise ConfigError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Config file {path} must contain a mapping"
        raise ConfigError(msg)
    return _flatten_section(data)


def read_environment(environ: Mapping[str, str]) -> dict[str, object]:
    """Collect ``ROUTEGEN_*`` variables that are set."""
    return {key: environ[name] for name, key in ENV_VARS.items() if name in environ}


def _flatten_section(data: dict[str, object]) -> dict[str, object]:
    """Accept keys at top level or under a ``routegen:`` section."""
    result = {k: v for k, v in data.items() if k != "routegen"}
    section = data.get("routegen")
    if isinstance(section, dict):
        result.update(section)
    return {k.replace("-", "_"): v for k, v in result.items()}


def _anchor_paths(config: dict[str, object], base: Path) -> None:
    for key in ("scan_path", "output_dir"):
        value = config.get(key)
        if isinstance(value, str) and value and not Path(value).is_absolute():
            config[key] = base / value


def _to_bool(key: str, value: object) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    msg = f"{key} must be a boolean, got {value!r}"
    raise ConfigError(msg)


def _env_name(key: str) -> str:
    return next(name for name, k in ENV_VARS.items() if k == key)
