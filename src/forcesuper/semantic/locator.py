"""Identities for class and method declarations."""

from __future__ import annotations

import posixpath
from pathlib import PurePosixPath

from ..models import ClassIdentity


def class_identity(path: str, qualname: str) -> ClassIdentity:
    """Identity of a class declared in ``path``."""
    return ClassIdentity(normalize_path(path), qualname)


def method_identity(owner: ClassIdentity, method_name: str) -> str:
    """Identity of a method (all overloads share it): ``path:Class.method``."""
    return f"{owner}.{method_name}"


def normalize_path(path: str) -> str:
    """Project-relative POSIX form of a path."""
    normalized = posixpath.normpath(path.replace("\\", "/"))
    return "" if normalized == "." else normalized


def source_root(path: str, package: str | None) -> PurePosixPath:
    """Directory the file's package is rooted in.

    For ``src/com/example/User.java`` in package ``com.example`` this is
    ``src``. When the directory layout does not mirror the package, the
    file's own directory is used.
    """
    directory = PurePosixPath(normalize_path(path)).parent
    if not package:
        return directory

    parts = package.split(".")
    if len(directory.parts) >= len(parts) and list(directory.parts[-len(parts):]) == parts:
        return PurePosixPath(*directory.parts[: -len(parts)])
    return directory


def module_source_path(
    from_path: str,
    module: str,
    extension: str,
    package: str | None = None,
) -> str:
    """Resolve an import's module to the source file that declares it.

    Relative modules ("./base", "../shared/base") are joined to the importing
    file's directory; dotted modules ("com.example.Base") to its source root.
    The result always carries ``extension`` exactly once.

    Args:
        from_path: Path of the importing file.
        module: Module text as written in the import.
        extension: Canonical source extension (e.g. ".java").
        package: Package declared by the importing file, if any.

    Returns:
        Project-relative POSIX path.
    """
    if module.startswith("."):
        target = PurePosixPath(normalize_path(from_path)).parent / module
    else:
        if module.endswith(extension):
            module = module[: -len(extension)]
        target = source_root(from_path, package) / module.replace(".", "/")

    resolved = normalize_path(str(target))
    if resolved.endswith(extension):
        resolved = resolved[: -len(extension)]
    return resolved + extension
