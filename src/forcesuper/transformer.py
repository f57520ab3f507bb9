"""Per-file entry point driven by the host build."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from .config import DEFAULT_REQUIRED_TAG
from .errors import InconsistentRenewStateError
from .models import ClassIdentity, SourceFile
from .semantic.build_pass import BuildPass
from .semantic.checker import OverrideChecker
from .semantic.parser_protocol import SymbolResolver
from .semantic.resolver import SuperclassResolver

logger = logging.getLogger(__name__)


class ForceSuperTransformer:
    """Receives one syntax tree per source file and checks class hierarchies.

    Trees are returned unchanged. The only effects are a raised
    ForceSuperError for a violation and log output. After the first fatal
    error every further ``visit`` is a pass-through until ``renew``.
    """

    def __init__(
        self,
        symbols: SymbolResolver,
        required_tag: str = DEFAULT_REQUIRED_TAG,
        debug: bool = False,
    ):
        self.symbols = symbols
        self.required_tag = required_tag
        self.debug = debug
        self._resolver = SuperclassResolver(symbols)
        self._checker = OverrideChecker(required_tag)
        self._pass = self._new_pass()

    @contextmanager
    def logging_scope(self) -> Iterator[None]:
        """Log the package at DEBUG inside the block when ``debug`` is set."""
        package_logger = logging.getLogger("forcesuper")
        previous = package_logger.level
        if self.debug:
            package_logger.setLevel(logging.DEBUG)
        try:
            yield
        finally:
            package_logger.setLevel(previous)

    def _new_pass(self) -> BuildPass:
        return BuildPass(resolver=self._resolver, checker=self._checker)

    @property
    def failed(self) -> bool:
        return self._pass.failed

    @property
    def registered(self) -> list[ClassIdentity]:
        return list(self._pass.registry)

    @property
    def pending(self) -> dict[ClassIdentity, str]:
        """Pending classes mapped to the last reason they couldn't be resolved."""
        return self._pass.pending.reasons()

    @property
    def resolver(self) -> SuperclassResolver:
        return self._resolver

    def visit(self, source: SourceFile) -> SourceFile:
        """
        Register every class of a file and check whatever became resolvable.

        Raises:
            MissingSuperCallError: If an override lacks a required super call.
            CyclicAncestorError: If a class is its own ancestor.
        """
        if self._pass.failed:
            return source

        self._pass.add_file(source)
        for class_decl in source.iter_classes():
            self._pass.register(class_decl)

        return source

    def renew(self) -> None:
        """
        Reset all state for the next build pass.

        The state is cleared even when this raises.

        Raises:
            InconsistentRenewStateError: If the finished pass had not failed
                but left classes pending.
        """
        previous = self._pass
        self._pass = self._new_pass()

        if previous.failed or not len(previous.pending):
            return

        logger.warning("failed to process all class nodes")
        logger.warning("registered classes: %s", ", ".join(str(i) for i in previous.registry))
        stalled = previous.pending.reasons()
        logger.warning("pending classes: %s", ", ".join(str(i) for i in stalled))
        raise InconsistentRenewStateError(stalled, registered=len(previous.registry))


class TransformerSet:
    """All transformers created for one host build, renewed together."""

    def __init__(self) -> None:
        self._transformers: list[ForceSuperTransformer] = []

    def __len__(self) -> int:
        return len(self._transformers)

    def create(
        self,
        symbols: SymbolResolver,
        required_tag: str = DEFAULT_REQUIRED_TAG,
        debug: bool = False,
    ) -> ForceSuperTransformer:
        transformer = ForceSuperTransformer(symbols, required_tag=required_tag, debug=debug)
        self._transformers.append(transformer)
        return transformer

    def renew_all(self) -> None:
        """
        Renew every transformer.

        Raises:
            InconsistentRenewStateError: The first one raised, after all
                transformers have been reset.
        """
        first_error: InconsistentRenewStateError | None = None
        for transformer in self._transformers:
            try:
                transformer.renew()
            except InconsistentRenewStateError as e:
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error
