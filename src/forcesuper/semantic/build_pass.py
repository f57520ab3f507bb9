"""Build-pass state: the class registry and the pending-resolution queue.

Classes are registered as files are visited, in whatever order the host
compiler visits them. A class whose ancestor chain is not fully registered
stays pending and is retried after every later registration, so a subclass
may safely be seen before its superclass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from ..errors import CyclicAncestorError, DuplicateClassError
from ..models import ClassDeclaration, ClassIdentity, SourceFile

if TYPE_CHECKING:
    from .checker import OverrideChecker
    from .resolver import SuperclassResolver

logger = logging.getLogger(__name__)


class ClassRegistry:
    """Every class seen in the current pass, keyed by identity.

    Entries are never removed or replaced; a new pass starts from a new
    registry.
    """

    def __init__(self) -> None:
        self._classes: dict[ClassIdentity, ClassDeclaration] = {}
        self._files: dict[str, SourceFile] = {}

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, identity: object) -> bool:
        return identity in self._classes

    def __iter__(self) -> Iterator[ClassIdentity]:
        return iter(self._classes)

    def add_file(self, source: SourceFile) -> None:
        self._files[source.path] = source

    def add(self, class_decl: ClassDeclaration) -> None:
        """
        Register a class.

        Raises:
            DuplicateClassError: If the identity is already registered.
        """
        identity = class_decl.identity
        if identity in self._classes:
            raise DuplicateClassError(identity)
        self._classes[identity] = class_decl

    def get(self, identity: ClassIdentity) -> ClassDeclaration | None:
        return self._classes.get(identity)

    def source_for(self, class_decl: ClassDeclaration) -> SourceFile:
        """The file a registered class was declared in."""
        source = self._files.get(class_decl.path)
        if source is None:
            # Registered without its file (hand-built trees): an empty file
            # with the right path is all resolution needs.
            source = SourceFile(path=class_decl.path)
            self._files[class_decl.path] = source
        return source


class PendingResolutionQueue:
    """Registered classes whose ancestor chain is not yet fully registered."""

    def __init__(self) -> None:
        self._classes: dict[ClassIdentity, ClassDeclaration] = {}
        self._reasons: dict[ClassIdentity, str] = {}

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, identity: object) -> bool:
        return identity in self._classes

    def add(self, class_decl: ClassDeclaration) -> None:
        self._classes[class_decl.identity] = class_decl
        self._reasons[class_decl.identity] = "not yet reconciled"

    def discard(self, identity: ClassIdentity) -> None:
        self._classes.pop(identity, None)
        self._reasons.pop(identity, None)

    def note(self, identity: ClassIdentity, reason: str) -> None:
        """Record why a pending class could not be resolved (last one wins)."""
        if identity in self._classes:
            self._reasons[identity] = reason

    def reasons(self) -> dict[ClassIdentity, str]:
        return dict(self._reasons)

    def register(self, build_pass: BuildPass, class_decl: ClassDeclaration) -> None:
        """Add a class to the registry and the queue, then reconcile."""
        try:
            build_pass.registry.add(class_decl)
        except DuplicateClassError:
            build_pass.failed = True
            raise
        self.add(class_decl)
        self.reconcile(build_pass)

    def reconcile(self, build_pass: BuildPass) -> None:
        """
        Check every pending class whose ancestor chain is now complete.

        Classes without an ancestor relation leave the queue immediately.
        Classes with a missing link stay pending for the next registration.

        Raises:
            CyclicAncestorError: If a chain loops back on itself.
            MissingSuperCallError: From the override check.
        """
        resolver = build_pass.resolver
        for identity, class_decl in list(self._classes.items()):
            if not resolver.has_ancestor(class_decl):
                self.discard(identity)
                continue

            if not self._chain_complete(build_pass, class_decl):
                continue

            build_pass.checker.check(build_pass, class_decl)
            self.discard(identity)

    def _chain_complete(self, build_pass: BuildPass, class_decl: ClassDeclaration) -> bool:
        resolver = build_pass.resolver
        chain = [class_decl.identity]
        current = class_decl
        while resolver.has_ancestor(current):
            identity = resolver.resolve(current, build_pass.registry.source_for(current))
            if identity is None:
                self.note(
                    class_decl.identity,
                    f"extends clause of {current.identity} could not be resolved",
                )
                return False
            parent = build_pass.registry.get(identity)
            if parent is None:
                logger.debug("ancestor not registered: %s", identity)
                self.note(class_decl.identity, f"ancestor {identity} is not registered")
                return False
            if parent.identity in chain:
                build_pass.failed = True
                raise CyclicAncestorError(chain + [parent.identity])
            chain.append(parent.identity)
            current = parent
        return True


@dataclass
class BuildPass:
    """Mutable state of one build pass.

    Owned by the driver (see ``ForceSuperTransformer``), which replaces it
    wholesale between passes.
    """

    resolver: SuperclassResolver
    checker: OverrideChecker
    registry: ClassRegistry = field(default_factory=ClassRegistry)
    pending: PendingResolutionQueue = field(default_factory=PendingResolutionQueue)
    failed: bool = False

    def add_file(self, source: SourceFile) -> None:
        self.registry.add_file(source)

    def register(self, class_decl: ClassDeclaration) -> None:
        self.pending.register(self, class_decl)
