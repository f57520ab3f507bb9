"""Superclass identity resolution across files."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..models import ClassDeclaration, ClassIdentity, ImportDeclaration, SourceFile, Symbol
from .locator import class_identity, module_source_path

if TYPE_CHECKING:
    from .build_pass import BuildPass
    from .parser_protocol import SymbolResolver

logger = logging.getLogger(__name__)


class SuperclassResolver:
    """Computes the identity of a class's superclass.

    Resolution is a naming computation only: the identity it returns may or
    may not be registered yet, and nothing here loads new files. Lookups
    against the registry go through ``find_parent``.
    """

    def __init__(self, symbols: SymbolResolver):
        self.symbols = symbols

    def has_ancestor(self, class_decl: ClassDeclaration) -> bool:
        """Whether the class has an ancestor relation to resolve at all."""
        if not class_decl.extends:
            return False
        if class_decl.ignore_ancestor:
            logger.debug("skipping parent lookup for %s", class_decl.qualname)
            return False
        return True

    def resolve(self, class_decl: ClassDeclaration, source: SourceFile) -> ClassIdentity | None:
        """
        Identity of the class's superclass.

        Returns None when the class has no ancestor relation, or when the
        extends clause is ambiguous (more than one type). An unresolvable
        symbol falls back to the literal reference text as identity.
        """
        if not self.has_ancestor(class_decl):
            return None

        if len(class_decl.extends) != 1:
            logger.warning(
                "error parsing extends expression of %s: %s",
                class_decl.identity,
                ", ".join(ref.text for ref in class_decl.extends),
            )
            return None

        type_ref = class_decl.extends[0]
        symbol = self.symbols.resolve_symbol(type_ref, source)
        if symbol is None:
            logger.debug(
                "no symbol for %s (extended by %s), using literal name",
                type_ref.text,
                class_decl.identity,
            )
            return ClassIdentity("", type_ref.text)

        if symbol.via_import is not None:
            return self._identity_from_import(symbol, symbol.via_import, source.path, source.package)

        # Declared without an import in the referencing file: the declaring
        # file may still import it under this name.
        for declaration in symbol.declaring_imports:
            if declaration.find(symbol.name) is None:
                continue
            return self._identity_from_import(
                symbol, declaration, symbol.declaring_path, symbol.declaring_package
            )

        return class_identity(symbol.declaring_path, symbol.qualified_name)

    def find_parent(
        self, build_pass: BuildPass, class_decl: ClassDeclaration
    ) -> ClassDeclaration | None:
        """Registered declaration of the class's superclass, if present."""
        identity = self.resolve(class_decl, build_pass.registry.source_for(class_decl))
        if identity is None:
            return None

        parent = build_pass.registry.get(identity)
        if parent is None:
            # Expected until the ancestor's file is visited
            logger.debug("ancestor not registered: %s", identity)
        return parent

    def _identity_from_import(
        self,
        symbol: Symbol,
        declaration: ImportDeclaration,
        from_path: str,
        package: str | None,
    ) -> ClassIdentity:
        path = module_source_path(
            from_path, declaration.module, self.symbols.source_extension, package=package
        )
        return class_identity(path, symbol.qualified_name)
