"""Shared type definitions for routegen."""

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from routegen.scan.dataservice import DataServiceInfo
    from routegen.symbols import Parameter

# Opaque registry key identifying one discovered function
TemplateKey: TypeAlias = str

# Dotted import path of a template package (e.g., "myproject.app.admin")
ImportPath: TypeAlias = str

# Builds a template key from (import path, function name)
KeyFactory: TypeAlias = Callable[[ImportPath, str], TemplateKey]

# Inspects the first parameter of a reserved function
DataServiceDetector: TypeAlias = Callable[["Parameter"], "DataServiceInfo | None"]
