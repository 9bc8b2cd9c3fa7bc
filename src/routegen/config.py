"""Routegen configuration.

GeneratorConfig is the central configuration object, frozen after creation.
"""

import keyword
from dataclasses import dataclass, field
from pathlib import Path

from routegen._errors import ConfigError

# Suffix of compiled template modules eligible for scanning
TEMPLATE_SUFFIX = "_templ.py"

# Name of the generated artifact inside output_dir
REGISTRY_FILENAME = "registry.py"

DEFAULT_OUTPUT_DIR = "generated/templates"
DEFAULT_PACKAGE_NAME = "templates"
DEFAULT_WATCH_EXTENSIONS: tuple[str, ...] = (".py", ".yaml", ".yml")


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Configuration for a single generator run.

    Attributes:
        scan_path: Directory to scan for compiled templates.  Its last path
            component is the scan-root name that anchors route, import-path
            and human-name derivation.
        module_name: Import prefix of the project (e.g. ``myproject``).
        output_dir: Directory the registry module is written to.
        package_name: Name of the generated package.
        stable_keys: Derive template keys from (import path, function name)
            instead of minting a random UUID per run.

    """

    scan_path: Path
    module_name: str
    output_dir: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))
    package_name: str = DEFAULT_PACKAGE_NAME
    stable_keys: bool = False

    def __post_init__(self) -> None:
        # Path("") would silently become Path("."); leave blanks for
        # validate_config() to reject.
        for attr in ("scan_path", "output_dir"):
            value = getattr(self, attr)
            if isinstance(value, str) and value.strip():
                object.__setattr__(self, attr, Path(value))

    @property
    def root_name(self) -> str:
        """Final component of the scan path (``app`` for ``web/app``)."""
        name = self.scan_path.name
        if name in ("", ".."):
            name = self.scan_path.resolve().name
        return name

    @property
    def registry_path(self) -> Path:
        """Path of the generated registry module."""
        return self.output_dir / REGISTRY_FILENAME


@dataclass(frozen=True, slots=True)
class WatchOptions:
    """Settings for watch mode.

    Attributes:
        enabled: Keep running and regenerate on changes.
        extensions: File-name endings whose changes trigger a run.

    """

    enabled: bool = False
    extensions: tuple[str, ...] = DEFAULT_WATCH_EXTENSIONS


def validate_config(config: GeneratorConfig) -> None:
    """Fail fast on configuration that would make scanning meaningless.

    Raises:
        ConfigError: On a value of the wrong type (config files can hold
            numbers), an empty scan path or output dir, a blank module
            name, or a package name that is not a usable identifier.

    """
    for label, value in (("scan path", config.scan_path), ("output directory", config.output_dir)):
        if not isinstance(value, (str, Path)):
            msg = f"{label} must be a path, got {value!r}"
            raise ConfigError(msg)

    if not str(config.scan_path).strip():
        msg = "scan path cannot be empty"
        raise ConfigError(msg)

    if not str(config.output_dir).strip():
        msg = "output directory cannot be empty"
        raise ConfigError(msg)

    if not isinstance(config.module_name, str):
        msg = f"module name must be a string, got {config.module_name!r}"
        raise ConfigError(msg)
    if not config.module_name:
        msg = "module name cannot be empty"
        raise ConfigError(msg)
    if any(ch.isspace() for ch in config.module_name):
        msg = f"module name {config.module_name!r} contains whitespace"
        raise ConfigError(msg)

    name = config.package_name
    if not isinstance(name, str):
        msg = f"package name must be a string, got {name!r}"
        raise ConfigError(msg)
    if not name:
        msg = "package name cannot be empty"
        raise ConfigError(msg)
    if "-" in name:
        msg = f"package name {name!r} contains hyphens"
        raise ConfigError(msg)
    if any(ch.isspace() for ch in name):
        msg = f"package name {name!r} contains whitespace"
        raise ConfigError(msg)
    if name[0].isdigit():
        msg = f"package name {name!r} cannot start with a number"
        raise ConfigError(msg)
    if not name.isidentifier() or keyword.iskeyword(name):
        msg = f"package name {name!r} is not a valid identifier"
        raise ConfigError(msg)
