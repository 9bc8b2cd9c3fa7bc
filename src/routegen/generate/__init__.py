"""Registry generation — alias allocation, validation and emission.

Public API::

    from routegen.generate import RegistryEmitter, allocate_aliases, validate_entries

    entries, imports = allocate_aliases(result.entries)
    validate_entries(entries)
    RegistryEmitter(config).emit(entries, imports)
"""

from routegen.generate.aliases import ImportGroup, allocate_aliases, claim_alias
from routegen.generate.emitter import RegistryEmitter, render_registry
from routegen.generate.validation import validate_entries, validate_imports

__all__ = [
    "ImportGroup",
    "RegistryEmitter",
    "allocate_aliases",
    "claim_alias",
    "render_registry",
    "validate_entries",
    "validate_imports",
]
