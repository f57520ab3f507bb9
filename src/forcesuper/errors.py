"""Custom exceptions for forcesuper."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ClassIdentity


class ForceSuperError(Exception):
    """Base exception for all forcesuper errors."""

    pass


class MissingSuperCallError(ForceSuperError):
    """Raised when an override of a tagged method doesn't call super."""

    def __init__(
        self,
        method_name: str,
        class_name: str,
        path: str | None = None,
        line: int | None = None,
    ):
        self.method_name = method_name
        self.class_name = class_name
        self.path = path
        self.line = line
        msg = (
            f"Method {method_name} in class {class_name} requires a super call "
            "but doesn't contain one."
        )
        if path:
            location = f"{path}:{line}" if line else path
            msg = f"{msg} ({location})"
        super().__init__(msg)


class CyclicAncestorError(ForceSuperError):
    """Raised when a class appears twice in its own ancestor chain."""

    def __init__(self, chain: list[ClassIdentity]):
        self.chain = chain
        rendered = " -> ".join(str(identity) for identity in chain)
        super().__init__(f"Cyclic inheritance: {rendered}")


class InconsistentRenewStateError(ForceSuperError):
    """Raised when a build pass ends with classes whose ancestors never resolved."""

    def __init__(self, stalled: dict[ClassIdentity, str], registered: int = 0):
        self.stalled = stalled
        self.registered = registered
        lines = [f"{len(stalled)} items left in pending queue"]
        for identity, reason in stalled.items():
            lines.append(f"  {identity}: {reason}")
        super().__init__("\n".join(lines))


class DuplicateClassError(ForceSuperError):
    """Raised when a class identity is registered twice in one build pass."""

    def __init__(self, identity: ClassIdentity):
        self.identity = identity
        super().__init__(f"Class already registered in this pass: {identity}")


class UnsupportedLanguageError(ForceSuperError):
    """Raised when no parser is registered for a file's language."""

    def __init__(self, language: str, supported: list[str], hint: str | None = None):
        self.language = language
        self.supported = supported
        self.hint = hint
        msg = f"Unsupported language: {language}. Supported: {', '.join(supported) or 'none'}"
        if hint:
            msg = f"{msg}. {hint}"
        super().__init__(msg)


class ConfigError(ForceSuperError):
    """Raised when the project configuration file is malformed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid config at {path}: {reason}")


class SourceReadError(ForceSuperError):
    """Raised when a source file cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read source file '{path}': {reason}")
