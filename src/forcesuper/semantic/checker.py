"""Verification that overrides of tagged methods call super."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import CyclicAncestorError, MissingSuperCallError
from ..models import ClassDeclaration
from .scanner import has_super_call
from .tags import method_has_tag

if TYPE_CHECKING:
    from .build_pass import BuildPass

logger = logging.getLogger(__name__)


class OverrideChecker:
    """Checks one class whose ancestor chain is fully registered.

    A method requires a super call when the nearest tagged declaration of
    its name is on an ancestor. Tagging a method in the class itself sets
    the contract for its subclasses, not for itself.
    """

    def __init__(self, required_tag: str):
        self.required_tag = required_tag

    def check(self, build_pass: BuildPass, class_decl: ClassDeclaration) -> None:
        """
        Raises:
            MissingSuperCallError: If a required super call is absent. The
                pass is marked failed first.
        """
        for name in class_decl.method_names():
            if not self.requires_super_call(build_pass, class_decl, name):
                continue

            overloads = class_decl.overloads(name)
            if any(has_super_call(m.body) for m in overloads):
                continue

            build_pass.failed = True
            raise MissingSuperCallError(
                name, class_decl.name, path=class_decl.path, line=overloads[0].line
            )

        logger.debug("checked %s", class_decl.identity)

    def requires_super_call(
        self, build_pass: BuildPass, class_decl: ClassDeclaration, method_name: str
    ) -> bool:
        if method_has_tag(class_decl, method_name, self.required_tag):
            return False

        resolver = build_pass.resolver
        seen = [class_decl.identity]
        current = class_decl
        while True:
            current = resolver.find_parent(build_pass, current)
            if current is None:
                return False
            if current.identity in seen:
                build_pass.failed = True
                raise CyclicAncestorError(seen + [current.identity])
            seen.append(current.identity)

            if method_has_tag(current, method_name, self.required_tag):
                return True
