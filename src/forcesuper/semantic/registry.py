"""Source parsers by file extension."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Callable

from ..errors import UnsupportedLanguageError

if TYPE_CHECKING:
    from .parser_protocol import SourceParser


@dataclass
class _ParserEntry:
    language: str
    factory: Callable[[], SourceParser]
    instance: SourceParser | None = field(default=None, repr=False)

    def parser(self) -> SourceParser:
        # Created on first use and shared by every extension of the language
        if self.instance is None:
            self.instance = self.factory()
        return self.instance


_entries: dict[str, _ParserEntry] = {}


def register_parser(
    language: str,
    extensions: list[str],
    factory: Callable[[], SourceParser],
) -> None:
    """Route files with the given extensions to a parser for ``language``."""
    entry = _ParserEntry(language, factory)
    for ext in extensions:
        _entries[ext.lower()] = entry


def parser_for_path(path: str) -> SourceParser:
    """
    Parser for a source file, chosen by its extension.

    Raises:
        UnsupportedLanguageError: If no parser handles the extension.
    """
    ext = PurePosixPath(path).suffix.lower()
    entry = _entries.get(ext)
    if entry is None:
        raise UnsupportedLanguageError(
            language=ext or "<no extension>",
            supported=supported_languages(),
            hint=f"File '{path}' has no registered parser.",
        )
    return entry.parser()


def supported_languages() -> list[str]:
    return sorted({entry.language for entry in _entries.values()})


def supported_extensions() -> list[str]:
    return sorted(_entries)
