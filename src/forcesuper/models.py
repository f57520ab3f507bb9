"""Data models for forcesuper.

Syntax trees handed to the checker are built from a closed set of node
variants. Language front-ends (see ``semantic.java_parser``) lower their
concrete trees into these, and every traversal goes through ``child_nodes``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union


@dataclass(frozen=True)
class ClassIdentity:
    """Globally unique key of a class declaration: (declaring file, name).

    An empty path marks a best-effort identity built from the literal text of
    an unresolved type reference.
    """

    path: str
    name: str

    def __str__(self) -> str:
        if not self.path:
            return self.name
        return f"{self.path}:{self.name}"


@dataclass(frozen=True)
class TypeReference:
    """A type named in an ``extends`` clause."""

    text: str  # "Base" | "com.example.Base"
    name: str  # simple name, generic arguments stripped

    @classmethod
    def from_text(cls, text: str) -> "TypeReference":
        base = text.split("<", 1)[0].strip()
        return cls(text=base, name=base.rsplit(".", 1)[-1])


@dataclass(frozen=True)
class ImportedName:
    """One name bound by an import declaration."""

    name: str
    alias: str | None = None

    @property
    def local_name(self) -> str:
        return self.alias or self.name


@dataclass(frozen=True)
class ImportDeclaration:
    """An import of one or more names from a module.

    ``module`` is either a relative path ("./base") or a dotted module name
    ("com.example.Base").
    """

    module: str
    names: tuple[ImportedName, ...] = ()
    line: int = 0

    def find(self, local_name: str) -> ImportedName | None:
        for imported in self.names:
            if imported.local_name == local_name:
                return imported
        return None


@dataclass(frozen=True)
class SuperReference:
    """The implicit superclass receiver (``super``)."""


@dataclass(frozen=True)
class CallExpression:
    """A call; ``receiver`` is None for unqualified calls."""

    name: str
    receiver: "Node | None" = None
    arguments: tuple["Node", ...] = ()


@dataclass(frozen=True)
class SyntaxNode:
    """Any construct the checker does not reason about directly."""

    kind: str
    children: tuple["Node", ...] = ()


@dataclass(frozen=True)
class MethodDeclaration:
    """A method declaration. Several may share a name (an overload group)."""

    name: str
    tags: frozenset[str] = frozenset()
    body: "Node | None" = None
    line: int = 0


@dataclass(frozen=True)
class ClassDeclaration:
    """A class declaration as registered in a build pass."""

    name: str
    path: str
    qualname: str = ""
    extends: tuple[TypeReference, ...] = ()
    members: tuple["Node", ...] = ()
    tags: frozenset[str] = frozenset()
    ignore_ancestor: bool = False
    line: int = 0

    def __post_init__(self) -> None:
        if not self.qualname:
            object.__setattr__(self, "qualname", self.name)

    @property
    def identity(self) -> ClassIdentity:
        return ClassIdentity(self.path, self.qualname)

    @property
    def methods(self) -> tuple[MethodDeclaration, ...]:
        return tuple(m for m in self.members if isinstance(m, MethodDeclaration))

    def method_names(self) -> list[str]:
        """Declared method names, first occurrence order, without duplicates."""
        names: list[str] = []
        for method in self.methods:
            if method.name not in names:
                names.append(method.name)
        return names

    def overloads(self, name: str) -> tuple[MethodDeclaration, ...]:
        return tuple(m for m in self.methods if m.name == name)


Node = Union[
    ClassDeclaration,
    MethodDeclaration,
    CallExpression,
    SuperReference,
    ImportDeclaration,
    SyntaxNode,
]


def child_nodes(node: Node) -> tuple[Node, ...]:
    """Direct children of a node, in source order."""
    if isinstance(node, ClassDeclaration):
        return node.members
    if isinstance(node, MethodDeclaration):
        return (node.body,) if node.body is not None else ()
    if isinstance(node, CallExpression):
        receiver = (node.receiver,) if node.receiver is not None else ()
        return receiver + node.arguments
    if isinstance(node, SyntaxNode):
        return node.children
    if isinstance(node, (SuperReference, ImportDeclaration)):
        return ()
    raise TypeError(f"Unknown syntax node: {type(node).__name__}")


def walk(node: Node) -> Iterator[Node]:
    """Pre-order traversal in document order. Lazy, so callers can stop early."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(child_nodes(current)))


@dataclass(frozen=True)
class SourceFile:
    """The syntax tree of one source file."""

    path: str  # project-relative, POSIX-style
    language: str = "java"
    package: str | None = None
    nodes: tuple[Node, ...] = ()
    has_parse_error: bool = False

    @property
    def imports(self) -> tuple[ImportDeclaration, ...]:
        return tuple(n for n in self.nodes if isinstance(n, ImportDeclaration))

    def iter_classes(self) -> Iterator[ClassDeclaration]:
        """Every class declaration in the file, nested and local ones included."""
        for top in self.nodes:
            for node in walk(top):
                if isinstance(node, ClassDeclaration):
                    yield node


@dataclass(frozen=True)
class Symbol:
    """Declaring symbol of a type reference, as found by a SymbolResolver.

    ``via_import`` is set when the symbol was reached through an import of the
    referencing file. ``declaring_imports`` are the imports of the file that
    declares the symbol, when known.
    """

    name: str
    qualified_name: str
    declaring_path: str
    declaring_package: str | None = None
    via_import: ImportDeclaration | None = None
    declaring_imports: tuple[ImportDeclaration, ...] = field(default=(), repr=False)
