"""Import alias allocation.

Entries are grouped by import path and every group gets one alias for the
generated import block.  The alias starts as the group's package name; if a
different import path already claimed it, a numeric suffix is appended in
first-seen order until the alias is free:

    myproject.app.admin        -> admin
    myproject.app.admin_.admin -> admin2
"""

from __future__ import annotations

import builtins
import keyword
from dataclasses import dataclass
from typing import TYPE_CHECKING

from routegen.scan.packages import sanitize_package_name

if TYPE_CHECKING:
    from collections.abc import Sequence

    from routegen.scan.scanner import TemplateEntry

# Names the generated registry module binds itself
GENERATED_NAMES: frozenset[str] = frozenset({
    "Any",
    "Callable",
    "DATA_SERVICES",
    "MODULE",
    "ModuleType",
    "PACKAGE",
    "ROUTES",
    "TEMPLATES",
    "TemplateRegistry",
    "_load",
    "annotations",
    "importlib",
    "new_registry",
    "registry",
})


@dataclass(frozen=True, slots=True)
class ImportGroup:
    """One aliased import in the generated registry.

    Attributes:
        alias: Identifier bound to the imported package.
        path: Dotted import path of the package.
        modules: Template modules of the package used by the registry.

    """

    alias: str
    path: str
    modules: tuple[str, ...] = ()


def claim_alias(candidate: str, claimed: set[str]) -> str:
    """Return *candidate*, or ``candidate2``, ``candidate3``... if taken."""
    if candidate not in claimed:
        return candidate
    counter = 2
    while f"{candidate}{counter}" in claimed:
        counter += 1
    return f"{candidate}{counter}"


def allocate_aliases(
    entries: Sequence[TemplateEntry],
) -> tuple[list[TemplateEntry], list[ImportGroup]]:
    """Assign a collision-free alias to every import path.

    Returns:
        The entries in their original order, each carrying its group's
        final alias, and the import groups sorted by path.

    """
    aliases: dict[str, str] = {}
    modules: dict[str, set[str]] = {}
    # Builtins too: the registry calls sorted(), bool() and getattr()
    claimed: set[str] = set(keyword.kwlist) | set(dir(builtins)) | GENERATED_NAMES

    for entry in entries:
        modules.setdefault(entry.import_path, set()).add(entry.source_module)
        if entry.import_path in aliases:
            continue
        alias = claim_alias(sanitize_package_name(entry.package_name), claimed)
        claimed.add(alias)
        aliases[entry.import_path] = alias

    imports = sorted(
        (
            ImportGroup(alias=alias, path=path, modules=tuple(sorted(modules[path])))
            for path, alias in aliases.items()
        ),
        key=lambda group: group.path,
    )
    annotated = [entry.with_alias(aliases[entry.import_path]) for entry in entries]
    return annotated, imports
