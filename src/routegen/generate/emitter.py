"""Registry emitter — render and write ``registry.py``.

The artifact is rendered from ``templates/registry.py.j2`` with Jinja2.  It
contains provenance comments, an aliased import block, and the
``new_registry()`` constructor assembling two lookup tables:

    TEMPLATES  opaque key    -> template function
    ROUTES     route pattern -> opaque key

Rendering is pure.  Writing removes any existing registry first and then
writes the new one; it is not an atomic replace.
"""

from __future__ import annotations

import json
import keyword
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from routegen._errors import EmitError
from routegen.version import get_build_info

if TYPE_CHECKING:
    from collections.abc import Sequence

    from routegen.config import GeneratorConfig
    from routegen.generate.aliases import ImportGroup
    from routegen.scan.scanner import TemplateEntry
    from routegen.version import BuildInfo

TEMPLATES_DIR = Path(__file__).with_name("templates")
REGISTRY_TEMPLATE = "registry.py.j2"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %Z"


def _pystr(value: object) -> str:
    """Render *value* as a double-quoted Python string literal."""
    return json.dumps(str(value), ensure_ascii=False)


def _create_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["pystr"] = _pystr
    return env


def function_reference(entry: TemplateEntry) -> str:
    """Expression referencing *entry*'s function through its import alias."""
    module = entry.source_module
    if module.isidentifier() and not keyword.iskeyword(module):
        return f"{entry.package_alias}.{module}.{entry.function_name}"
    return f"getattr({entry.package_alias}, {_pystr(module)}).{entry.function_name}"


def render_registry(
    *,
    package_name: str,
    module_name: str,
    imports: Sequence[ImportGroup],
    entries: Sequence[TemplateEntry],
    generator_version: str,
    generated_at: str,
) -> str:
    """Render the registry module source.

    Raises:
        EmitError: If the bundled template cannot be loaded or rendered.

    """
    context: dict[str, Any] = {
        "package_name": package_name,
        "module_name": module_name,
        "generator_version": generator_version,
        "generated_at": generated_at,
        "imports": list(imports),
        "entries": [
            {
                "template_key": entry.template_key,
                "route_pattern": entry.route_pattern,
                "human_name": entry.human_name,
                "reference": function_reference(entry),
                "data_service": entry.data_service,
            }
            for entry in entries
        ],
    }
    try:
        template = _create_environment().get_template(REGISTRY_TEMPLATE)
        return template.render(context)
    except TemplateError as exc:
        msg = f"Failed to render {REGISTRY_TEMPLATE}: {exc}"
        raise EmitError(msg) from exc


class RegistryEmitter:
    """Write the generated registry for a configuration.

    Args:
        config: Generator configuration (output dir, package, module).
        build_info: Version metadata for the provenance header.
        clock: Returns the generation time; defaults to the current UTC time.

    """

    __slots__ = ("_build_info", "_clock", "_config")

    def __init__(
        self,
        config: GeneratorConfig,
        *,
        build_info: BuildInfo | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config
        self._build_info = build_info
        self._clock = clock or (lambda: datetime.now(UTC))

    @property
    def output_path(self) -> Path:
        return self._config.registry_path

    def render(self, entries: Sequence[TemplateEntry], imports: Sequence[ImportGroup]) -> str:
        """Render the registry source without touching the file system."""
        build_info = self._build_info or get_build_info()
        return render_registry(
            package_name=self._config.package_name,
            module_name=self._config.module_name,
            imports=imports,
            entries=entries,
            generator_version=build_info.short(),
            generated_at=self._clock().strftime(TIMESTAMP_FORMAT),
        )

    def emit(self, entries: Sequence[TemplateEntry], imports: Sequence[ImportGroup]) -> Path:
        """Render and write the registry, replacing any previous one.

        Returns:
            Path of the written registry module.

        Raises:
            EmitError: If the output directory or file cannot be written.

        """
        source = self.render(entries, imports)
        output_dir = self._config.output_dir
        path = self.output_path

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Failed to create output directory {output_dir}: {exc}"
            raise EmitError(msg) from exc

        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            msg = f"Failed to remove existing registry {path}: {exc}"
            raise EmitError(msg) from exc

        try:
            path.write_text(source, encoding="utf-8")
        except OSError as exc:
            msg = f"Failed to write registry {path}: {exc}"
            raise EmitError(msg) from exc

        return path
