"""Symbol snapshots of what each template module declares.

Public API::

    from routegen.symbols import AstSymbolSource

    source = AstSymbolSource(Path("web/app"))
    for file in source.load():
        print(file.path, [fn.name for fn in file.functions])
"""

from routegen.symbols.source import (
    AstSymbolSource,
    FileSymbols,
    FunctionSymbol,
    Parameter,
    SymbolSource,
)

__all__ = [
    "AstSymbolSource",
    "FileSymbols",
    "FunctionSymbol",
    "Parameter",
    "SymbolSource",
]
