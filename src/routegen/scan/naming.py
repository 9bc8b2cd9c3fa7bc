"""Naming rules — which functions may live in which template files.

Rules, checked against the function name and the module's base name
(``page`` for ``page_templ.py``):

- ``Page``, ``Layout`` and ``Error`` only live in ``page``, ``layout`` and
  ``error`` modules respectively.
- Any other function ending in ``Page`` is rejected; the suffix is reserved.
- A sidecar ``<base>.templ.yaml`` below a ``locale_/`` directory must not
  redeclare the inherited ``locale`` parameter.
- A ``page`` module declares only ``Page``; an ``error`` module only
  ``Error``.  ``layout`` modules and component modules are unconstrained.
"""

from pathlib import Path

import yaml

from routegen._errors import ConfigError, NamingError
from routegen.config import TEMPLATE_SUFFIX
from routegen.scan.routes import DYNAMIC_MARKER

# Directory name that makes "locale" an inherited dynamic parameter
LOCALE_DIRECTORY = "locale" + DYNAMIC_MARKER

_SIDECAR_SUFFIXES: tuple[str, ...] = (".templ.yaml", ".templ.yml")

_RESERVED_FILES: dict[str, str] = {
    "Page": "page",
    "Layout": "layout",
    "Error": "error",
}


def template_base_name(file_path: Path, suffix: str = TEMPLATE_SUFFIX) -> str:
    """``page_templ.py`` -> ``page``."""
    name = file_path.name
    return name[: -len(suffix)] if name.endswith(suffix) else file_path.stem


def validate_template_path(file_path: Path, scan_path: Path) -> None:
    """Ensure *file_path* lies inside the scan root.

    Raises:
        ConfigError: If the file is outside *scan_path*.

    """
    if not file_path.resolve().is_relative_to(scan_path.resolve()):
        msg = f"template file {file_path} is not in the {scan_path} directory"
        raise ConfigError(msg)


def validate_function_naming(
    function_name: str,
    file_path: Path,
    *,
    suffix: str = TEMPLATE_SUFFIX,
) -> None:
    """Check *function_name* against the naming rules for *file_path*.

    Raises:
        NamingError: Describing the first rule that is violated.

    """
    base = template_base_name(file_path, suffix)

    expected_file = _RESERVED_FILES.get(function_name)
    if expected_file is not None:
        if base != expected_file:
            msg = (
                f"function {function_name!r} found in {base!r} "
                f"but should only be in {expected_file!r}"
            )
            raise NamingError(msg)
        return

    if function_name.endswith("Page"):
        msg = (
            f"function {function_name!r} has the reserved 'Page' suffix "
            f"but is not in 'page' - components cannot use the 'Page' suffix"
        )
        raise NamingError(msg)

    check_locale_parameter(file_path, suffix=suffix)

    if base == "page":
        msg = f"function {function_name!r} found in 'page' but should be 'Page'"
        raise NamingError(msg)
    if base == "error":
        msg = f"function {function_name!r} found in 'error' but should be 'Error'"
        raise NamingError(msg)


def sidecar_path(file_path: Path, suffix: str = TEMPLATE_SUFFIX) -> Path | None:
    """Return the metadata sidecar next to *file_path*, if one exists."""
    base = template_base_name(file_path, suffix)
    for ext in _SIDECAR_SUFFIXES:
        candidate = file_path.with_name(base + ext)
        if candidate.is_file():
            return candidate
    return None


def check_locale_parameter(file_path: Path, *, suffix: str = TEMPLATE_SUFFIX) -> None:
    """Reject a sidecar that shadows the ``locale`` parameter of a ``locale_/`` parent.

    Unreadable or malformed sidecars are ignored.

    Raises:
        NamingError: On a shadowing conflict.

    """
    if LOCALE_DIRECTORY not in file_path.parent.parts:
        return

    sidecar = sidecar_path(file_path, suffix)
    if sidecar is None:
        return

    try:
        data = yaml.safe_load(sidecar.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return

    if not isinstance(data, dict):
        return
    dynamic = data.get("dynamic")
    if not isinstance(dynamic, dict):
        return
    parameters = dynamic.get("parameters")
    if isinstance(parameters, dict) and "locale" in parameters:
        msg = (
            f"parameter conflict: 'locale' declared in {sidecar} but locale is "
            f"already inherited from the parent '{LOCALE_DIRECTORY}/' directory"
        )
        raise NamingError(msg)
