"""Package resolution — import paths, package names and human names.

Every template package is imported by the generated registry under a
dotted path built from the module name and the directory layout below the
scan root:

    myproject + app/page_templ.py            -> myproject.app            (app)
    myproject + app/error-demo/page_templ.py -> myproject.app.error-demo (errordemo)

Directory names are not always identifiers, so the package name of any
package below the scan root is sanitized from its directory name.
"""

import re
from dataclasses import dataclass
from pathlib import PurePath

from routegen.scan.routes import is_dynamic_segment, path_segments, root_anchor

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")

# Fallback identifier for names with no usable characters
_FALLBACK_NAME = "pkg"


@dataclass(frozen=True, slots=True)
class PackageInfo:
    """Where a template function is imported from.

    Attributes:
        package_name: Identifier-safe package name.
        import_path: Dotted import path of the package.

    """

    package_name: str
    import_path: str


def sanitize_package_name(name: str) -> str:
    """Convert an arbitrary directory name into a valid identifier.

    ``error-demo`` -> ``errordemo``, ``v1.2`` -> ``v12``, ``2fa`` -> ``pkg2fa``,
    ``""`` -> ``pkg``.  Sanitizing an already-sanitized name is a no-op.
    """
    cleaned = name.replace("-", "").replace(".", "")
    cleaned = _INVALID_CHARS.sub("", cleaned)
    if not cleaned:
        return _FALLBACK_NAME
    if cleaned[0].isdigit():
        return _FALLBACK_NAME + cleaned
    return cleaned


def resolve_package(
    file_path: PurePath | str,
    declared_package: str,
    module_name: str,
    root_name: str,
) -> PackageInfo:
    """Derive the import path and package name for a template module.

    Args:
        file_path: Path to the template module.
        declared_package: Package identifier declared by the module.
        module_name: Import prefix of the project.
        root_name: Final component of the scan path.

    """
    parts = path_segments(PurePath(file_path).parent)
    anchor = root_anchor(parts, root_name)
    base = f"{module_name}.{root_name}"

    if anchor == -1 or anchor == len(parts) - 1:
        return PackageInfo(package_name=declared_package or root_name, import_path=base)

    sub = parts[anchor + 1 :]
    return PackageInfo(
        package_name=sanitize_package_name(parts[-1]),
        import_path=base + "." + ".".join(sub),
    )


def create_human_name(file_path: PurePath | str, function_name: str, root_name: str) -> str:
    """Build a readable name such as ``dashboard.Page`` for reports and comments.

    Root-level functions, and functions below only dynamic directories,
    report the bare function name.
    """
    parts = path_segments(PurePath(file_path).parent)
    anchor = root_anchor(parts, root_name)
    if anchor == -1:
        return function_name

    named = [p for p in parts[anchor + 1 :] if not is_dynamic_segment(p)]
    if not named:
        return function_name
    return f"{named[-1]}.{function_name}"
