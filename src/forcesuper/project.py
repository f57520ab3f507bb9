"""Build passes over a source tree or a set of in-memory files."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .config import CheckerConfig
from .errors import SourceReadError
from .models import SourceFile
from .semantic import parser_for_path, supported_extensions
from .semantic.java_symbols import JavaSymbolResolver
from .semantic.locator import normalize_path
from .semantic.resolver import SuperclassResolver
from .semantic.tags import tagged_methods
from .transformer import ForceSuperTransformer

logger = logging.getLogger(__name__)


@dataclass
class CheckReport:
    """Outcome of a build pass that raised no error."""

    files: int = 0
    classes: int = 0
    parse_errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": self.files,
            "classes": self.classes,
            "parse_errors": list(self.parse_errors),
        }


@dataclass
class ClassSummary:
    """One class as seen by the resolver, for listings."""

    identity: str
    line: int
    parent: str | None
    ignore_ancestor: bool
    tagged_methods: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "identity": self.identity,
            "line": self.line,
            "parent": self.parent,
            "ignore_ancestor": self.ignore_ancestor,
            "tagged_methods": self.tagged_methods,
        }


def parse_source(path: str, source: str) -> SourceFile:
    """Parse a file with the parser registered for its extension."""
    return parser_for_path(path).parse(source, path)


def run_pass(
    transformer: ForceSuperTransformer,
    files: Iterable[tuple[str, str]],
) -> CheckReport:
    """
    Visit every (path, source) pair in order, then renew the transformer.

    Raises:
        MissingSuperCallError: On the first override without a required super call.
        CyclicAncestorError: On a class that is its own ancestor.
        InconsistentRenewStateError: If classes never resolved their ancestors.
    """
    report = CheckReport()
    with transformer.logging_scope():
        for path, source in files:
            tree = parse_source(path, source)
            if tree.has_parse_error:
                logger.warning("%s has syntax errors; results may be incomplete", tree.path)
                report.parse_errors.append(tree.path)
            transformer.visit(tree)
            report.files += 1

        report.classes = len(transformer.registered)
        transformer.renew()
    return report


def check_sources(
    files: list[tuple[str, str]],
    config: CheckerConfig | None = None,
) -> CheckReport:
    """Check in-memory sources as one build pass."""
    config = config or CheckerConfig()
    normalized = [(normalize_path(path), source) for path, source in files]
    symbols = JavaSymbolResolver(known_paths=[path for path, _ in normalized])
    transformer = ForceSuperTransformer(
        symbols, required_tag=config.required_tag, debug=config.debug
    )
    return run_pass(transformer, normalized)


class ProjectChecker:
    """Runs build passes over the source files under a project root."""

    def __init__(self, root: Path, config: CheckerConfig | None = None):
        self.root = Path(root)
        self.config = config or CheckerConfig()
        self._symbols = JavaSymbolResolver(known_paths=[])
        self._transformer: ForceSuperTransformer | None = None

    def discover_files(self) -> list[str]:
        """Project-relative paths of all parseable files, sorted."""
        extensions = set(supported_extensions())
        excluded = set(self.config.exclude)
        found: list[str] = []

        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = sorted(
                d for d in dirnames if d not in excluded and not d.startswith(".")
            )
            for filename in filenames:
                if Path(filename).suffix.lower() not in extensions:
                    continue
                full = Path(dirpath) / filename
                found.append(full.relative_to(self.root).as_posix())

        return sorted(found)

    def read_source(self, path: str) -> str:
        """
        Read a project file.

        Raises:
            SourceReadError: If the file can't be read or decoded.
        """
        try:
            return (self.root / path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(path, str(e)) from e

    def transformer(self, known_paths: list[str]) -> ForceSuperTransformer:
        """The transformer for this project, reused across passes."""
        self._symbols.known_paths = set(known_paths)
        if self._transformer is None:
            self._transformer = ForceSuperTransformer(
                self._symbols,
                required_tag=self.config.required_tag,
                debug=self.config.debug,
            )
        return self._transformer

    def run(self, paths: list[str] | None = None, reverse: bool = False) -> CheckReport:
        """
        Run one build pass.

        Args:
            paths: Files to visit (default: all discovered files).
            reverse: Visit in reverse order. Outcomes must not depend on it.

        Raises:
            ForceSuperError: On any violation (see ``run_pass``).
        """
        if paths is None:
            paths = self.discover_files()
        paths = [normalize_path(p) for p in paths]
        ordered = list(reversed(paths)) if reverse else list(paths)

        transformer = self.transformer(paths)
        try:
            return run_pass(transformer, ((p, self.read_source(p)) for p in ordered))
        except Exception:
            # The pass is over either way; start the next one from scratch
            self._transformer = None
            raise

    def describe_classes(self, paths: list[str] | None = None) -> list[ClassSummary]:
        """Every class with the identity its superclass resolves to."""
        if paths is None:
            paths = self.discover_files()
        symbols = JavaSymbolResolver(known_paths=paths)
        resolver = SuperclassResolver(symbols)

        summaries: list[ClassSummary] = []
        for path in paths:
            tree = parse_source(path, self.read_source(path))
            for class_decl in tree.iter_classes():
                parent = resolver.resolve(class_decl, tree)
                summaries.append(
                    ClassSummary(
                        identity=str(class_decl.identity),
                        line=class_decl.line,
                        parent=str(parent) if parent is not None else None,
                        ignore_ancestor=class_decl.ignore_ancestor,
                        tagged_methods=tagged_methods(class_decl, self.config.required_tag),
                    )
                )
        return summaries
