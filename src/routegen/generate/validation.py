"""Registry invariants checked after the scan and before writing.

Runs after alias allocation and before emission, so a registry that would
map two functions to one key or route is never written.
"""

from __future__ import annotations

import keyword
from typing import TYPE_CHECKING

from routegen._errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from routegen.generate.aliases import ImportGroup
    from routegen.scan.scanner import TemplateEntry


def is_valid_alias(alias: str) -> bool:
    return alias.isidentifier() and not keyword.iskeyword(alias)


def validate_entries(entries: Sequence[TemplateEntry]) -> None:
    """Check key, route and alias invariants across all entries.

    Raises:
        ValidationError: On an empty function name or key, a duplicate key,
            a duplicate route, or an alias that is not an identifier.

    """
    keys: dict[str, TemplateEntry] = {}
    routes: dict[str, TemplateEntry] = {}

    for entry in entries:
        if not entry.function_name:
            msg = f"function name cannot be empty ({entry.file_path})"
            raise ValidationError(msg)

        if not entry.template_key:
            msg = f"template key cannot be empty for {entry.human_name}"
            raise ValidationError(msg)

        if entry.template_key in keys:
            msg = (
                f"duplicate template key {entry.template_key!r}: "
                f"{keys[entry.template_key].human_name} and {entry.human_name}"
            )
            raise ValidationError(msg)
        keys[entry.template_key] = entry

        if entry.route_pattern in routes:
            other = routes[entry.route_pattern]
            msg = (
                f"duplicate route pattern {entry.route_pattern!r}: "
                f"{other.function_name} in {other.file_path} and "
                f"{entry.function_name} in {entry.file_path}"
            )
            raise ValidationError(msg)
        routes[entry.route_pattern] = entry

        if not is_valid_alias(entry.package_alias):
            msg = f"invalid package alias {entry.package_alias!r} for {entry.import_path}"
            raise ValidationError(msg)


def validate_imports(imports: Sequence[ImportGroup]) -> None:
    """Ensure no two import paths share an alias.

    Raises:
        ValidationError: On a shared or invalid alias.

    """
    seen: dict[str, str] = {}
    for group in imports:
        if not is_valid_alias(group.alias):
            msg = f"invalid package alias {group.alias!r} for {group.path}"
            raise ValidationError(msg)
        if group.alias in seen and seen[group.alias] != group.path:
            msg = (
                f"alias {group.alias!r} used for both "
                f"{seen[group.alias]} and {group.path}"
            )
            raise ValidationError(msg)
        seen[group.alias] = group.path
