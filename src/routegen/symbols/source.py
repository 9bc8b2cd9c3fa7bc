"""Symbol snapshot — declared top-level callables per template module.

The scanner never imports user code.  It consumes an immutable snapshot of
what each compiled template module declares, supplied by a ``SymbolSource``.
``AstSymbolSource`` builds that snapshot statically with :mod:`ast`:

    app/page_templ.py            -> Page()
    app/users/id_/page_templ.py  -> Page(data: UserData)

Annotations are resolved through the module's own import statements, so
``data: UserData`` after ``from myproject.dataservices import UserData``
is reported as ``myproject.dataservices.UserData``.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from routegen._errors import SourceError
from routegen.config import TEMPLATE_SUFFIX

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True, slots=True)
class Parameter:
    """A single declared parameter.

    Attributes:
        name: Parameter name as written.
        annotation: Resolved dotted type name, or ``""`` when unannotated.

    """

    name: str
    annotation: str = ""

    @property
    def type_name(self) -> str:
        """Unqualified type name (``UserData`` for ``pkg.dataservices.UserData``)."""
        return self.annotation.rsplit(".", 1)[-1]

    @property
    def type_module(self) -> str:
        """Module part of the annotation, ``""`` for bare names."""
        module, _, _ = self.annotation.rpartition(".")
        return module


@dataclass(frozen=True, slots=True)
class FunctionSymbol:
    """A module-level function declared by a template module."""

    name: str
    parameters: tuple[Parameter, ...] = ()

    @property
    def parameter_count(self) -> int:
        return len(self.parameters)


@dataclass(frozen=True, slots=True)
class FileSymbols:
    """Everything the scanner needs to know about one template module.

    Attributes:
        path: Path to the module file.
        package: Declared package identifier.  For Python sources this is
            the name of the directory holding the module.
        functions: Module-level functions in declaration order.

    """

    path: Path
    package: str
    functions: tuple[FunctionSymbol, ...] = ()


class SymbolSource(Protocol):
    """Supplies the symbol snapshot consumed by the scanner."""

    def load(self) -> Iterable[FileSymbols]:
        """Return symbols for every eligible file.

        Raises:
            SourceError: If the underlying tree cannot be read.

        """
        ...


class AstSymbolSource:
    """Build the symbol snapshot by statically parsing template modules.

    Args:
        root: Directory to walk recursively.
        suffix: File-name suffix of compiled template modules.

    """

    __slots__ = ("_root", "_suffix")

    def __init__(self, root: Path, *, suffix: str = TEMPLATE_SUFFIX) -> None:
        self._root = Path(root)
        self._suffix = suffix

    @property
    def root(self) -> Path:
        return self._root

    def load(self) -> tuple[FileSymbols, ...]:
        """Parse every template module under the root.

        Raises:
            SourceError: If the root is missing or a module cannot be read
                or parsed.

        """
        if not self._root.is_dir():
            msg = f"scan path {self._root} does not exist or is not a directory"
            raise SourceError(msg)

        return tuple(self._parse_file(path) for path in self._iter_files())

    def _iter_files(self) -> Iterator[Path]:
        for path in sorted(self._root.rglob(f"*{self._suffix}")):
            relative = path.relative_to(self._root)
            # Skip caches and hidden directories (.venv, .git, ...)
            if any(part == "__pycache__" or part.startswith(".") for part in relative.parts[:-1]):
                continue
            if path.is_file():
                yield path

    def _parse_file(self, path: Path) -> FileSymbols:
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Failed to read template module {path}: {exc}"
            raise SourceError(msg) from exc

        try:
            tree = ast.parse(source, filename=str(path))
        except SyntaxError as exc:
            msg = f"Failed to parse template module {path}: {exc}"
            raise SourceError(msg) from exc

        imports = _collect_imports(tree)
        functions = tuple(
            FunctionSymbol(name=node.name, parameters=_parameters(node.args, imports))
            for node in tree.body
            if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef))
        )
        return FileSymbols(path=path, package=path.resolve().parent.name, functions=functions)


def _collect_imports(tree: ast.Module) -> dict[str, str]:
    """Map local names bound by module-level imports to dotted targets.

    Relative imports lose their leading dots: ``from ..models import User``
    binds ``User`` to ``models.User``.
    """
    names: dict[str, str] = {}
    for node in tree.body:
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.asname:
                    names[alias.asname] = alias.name
                else:
                    head = alias.name.split(".", 1)[0]
                    names[head] = head
        elif isinstance(node, ast.ImportFrom):
            base = node.module or ""
            for alias in node.names:
                if alias.name == "*":
                    continue
                target = f"{base}.{alias.name}" if base else alias.name
                names[alias.asname or alias.name] = target
    return names


def _parameters(args: ast.arguments, imports: dict[str, str]) -> tuple[Parameter, ...]:
    declared: list[ast.arg] = [*args.posonlyargs, *args.args]
    if args.vararg is not None:
        declared.append(args.vararg)
    declared.extend(args.kwonlyargs)
    if args.kwarg is not None:
        declared.append(args.kwarg)
    return tuple(
        Parameter(name=arg.arg, annotation=_resolve_annotation(arg.annotation, imports))
        for arg in declared
    )


def _resolve_annotation(node: ast.expr | None, imports: dict[str, str]) -> str:
    """Resolve an annotation expression to a dotted type name."""
    if node is None:
        return ""

    if isinstance(node, ast.Name):
        return imports.get(node.id, node.id)

    if isinstance(node, ast.Attribute):
        resolved = _resolve_annotation(node.value, imports)
        return f"{resolved}.{node.attr}" if resolved else node.attr

    if isinstance(node, ast.Constant):
        if isinstance(node.value, str):
            # Forward reference: "UserData"
            try:
                inner = ast.parse(node.value, mode="eval").body
            except SyntaxError:
                return node.value
            return _resolve_annotation(inner, imports)
        return ""

    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        # UserData | None -> UserData
        for side in (node.left, node.right):
            if not (isinstance(side, ast.Constant) and side.value is None):
                return _resolve_annotation(side, imports)
        return ""

    if isinstance(node, ast.Subscript):
        container = _resolve_annotation(node.value, imports)
        if container in ("Optional", "typing.Optional"):
            return _resolve_annotation(node.slice, imports)
        return ast.unparse(node)

    return ast.unparse(node)
