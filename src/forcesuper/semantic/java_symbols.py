"""Type-reference resolution for Java sources."""

from __future__ import annotations

from collections.abc import Iterable

from ..models import ImportDeclaration, ImportedName, SourceFile, Symbol, TypeReference
from .locator import module_source_path, normalize_path


class JavaSymbolResolver:
    """Finds where a type named in an extends clause is declared.

    Java name lookup, restricted to what matters for class hierarchies:
    1. a class declared in the same file (qualified name, or unique simple name)
    2. a single-type import (import com.example.Base;)
    3. a dotted reference (extends com.example.Base, extends Outer.Inner)
    4. a class in the same package, i.e. a sibling file Base.java

    A dotted type path names a file plus classes nested inside it:
    a.Outer.Inner is Outer.Inner declared in a/Outer.java. With
    ``known_paths`` the longest prefix naming a known file wins. Without
    them, the first capitalized segment is taken as the top-level class.

    Same-package lookup is limited to ``known_paths`` when given, so that
    java.lang types and other externals stay unresolved instead of being
    guessed into a sibling file that doesn't exist.
    """

    source_extension = ".java"

    def __init__(self, known_paths: Iterable[str] | None = None):
        self.known_paths = (
            {normalize_path(p) for p in known_paths} if known_paths is not None else None
        )

    def resolve_symbol(self, type_ref: TypeReference, source: SourceFile) -> Symbol | None:
        local = self._find_local(type_ref, source)
        if local is not None:
            return Symbol(
                name=type_ref.name,
                qualified_name=local,
                declaring_path=source.path,
                declaring_package=source.package,
                declaring_imports=source.imports,
            )

        for declaration in source.imports:
            imported = declaration.find(type_ref.text)
            if imported is not None:
                nested = self._split_type_path(declaration.module, source, same_package=False)
                if nested is not None:
                    return nested
                return Symbol(
                    name=imported.local_name,
                    qualified_name=imported.name,
                    declaring_path=source.path,
                    declaring_package=source.package,
                    via_import=declaration,
                )

        if "." in type_ref.text:
            return self._dotted(type_ref, source)

        # Same package: the sibling lives next to the referencing file
        candidate = module_source_path(
            source.path, f"./{type_ref.text}", self.source_extension
        )
        if self.known_paths is not None and candidate not in self.known_paths:
            return None
        return Symbol(
            name=type_ref.name,
            qualified_name=type_ref.name,
            declaring_path=candidate,
            declaring_package=source.package,
        )

    def _find_local(self, type_ref: TypeReference, source: SourceFile) -> str | None:
        """Qualified name of a class declared in ``source`` that the reference names."""
        classes = list(source.iter_classes())
        if any(c.qualname == type_ref.text for c in classes):
            return type_ref.text

        matches = [c.qualname for c in classes if c.name == type_ref.text]
        if len(matches) == 1:
            return matches[0]
        return None

    def _dotted(self, type_ref: TypeReference, source: SourceFile) -> Symbol:
        """extends a.b.Base or Outer.Inner, with or without an import of the head."""
        head, _, rest = type_ref.text.partition(".")
        for declaration in source.imports:
            imported = declaration.find(head)
            if imported is None:
                continue
            nested = self._split_type_path(
                f"{declaration.module}.{rest}", source, same_package=False
            )
            if nested is not None:
                return nested

        nested = self._split_type_path(type_ref.text, source, same_package=True)
        if nested is not None:
            return nested

        # Nothing known: treat it like importing the full path
        declaration = ImportDeclaration(
            module=type_ref.text,
            names=(ImportedName(type_ref.name),),
        )
        return Symbol(
            name=type_ref.name,
            qualified_name=type_ref.name,
            declaring_path=source.path,
            declaring_package=source.package,
            via_import=declaration,
        )

    def _split_type_path(
        self, dotted: str, source: SourceFile, same_package: bool
    ) -> Symbol | None:
        """Declaring file and nested qualified name of a dotted type path.

        ``same_package`` also tries the head as a sibling class of ``source``,
        as in extends Outer.Inner.
        """
        parts = dotted.split(".")
        if self.known_paths is None:
            capitalized = [i for i, part in enumerate(parts) if part[:1].isupper()]
            if not capitalized:
                return None
            end = capitalized[0] + 1
            sibling = same_package and end == 1
            path = self._candidates(parts[:end], source, sibling, not sibling)[0]
            return self._nested_symbol(parts, end, path)

        for end in range(len(parts), 0, -1):
            for path in self._candidates(parts[:end], source, same_package, True):
                if path in self.known_paths:
                    return self._nested_symbol(parts, end, path)
        return None

    def _candidates(
        self, prefix: list[str], source: SourceFile, sibling: bool, rooted: bool
    ) -> list[str]:
        candidates = []
        if sibling:
            candidates.append(
                module_source_path(source.path, "./" + "/".join(prefix), self.source_extension)
            )
        if rooted:
            candidates.append(
                module_source_path(
                    source.path, ".".join(prefix), self.source_extension, package=source.package
                )
            )
        return candidates

    def _nested_symbol(self, parts: list[str], end: int, path: str) -> Symbol:
        return Symbol(
            name=parts[-1],
            qualified_name=".".join(parts[end - 1:]),
            declaring_path=path,
        )
