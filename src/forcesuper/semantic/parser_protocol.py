"""Protocol definitions for language front-ends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..models import SourceFile, Symbol, TypeReference


class SourceParser(Protocol):
    """Protocol for language-specific source parsers.

    Implementations turn one source file into the checker's syntax tree
    (see ``forcesuper.models``): imports, class declarations with their
    tags and ``extends`` references, and method bodies lowered far enough
    to spot super calls.
    """

    def parse(self, source: str, path: str) -> SourceFile:
        """Parse a source file.

        Args:
            source: The complete source code content.
            path: Project-relative file path (becomes part of class identities).

        Returns:
            The file's syntax tree.
        """
        ...


class SymbolResolver(Protocol):
    """Protocol for mapping type references to their declaring symbols.

    This is the type-resolution half of a compiler front-end. It never loads
    files; it only names where a referenced type is declared.
    """

    source_extension: str

    def resolve_symbol(self, type_ref: TypeReference, source: SourceFile) -> Symbol | None:
        """Find the symbol a type reference in ``source`` denotes.

        Args:
            type_ref: Reference taken from a class's extends clause.
            source: The file the reference appears in.

        Returns:
            The declaring symbol, or None if it cannot be found.
        """
        ...
