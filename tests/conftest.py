"""Pytest fixtures for forcesuper tests."""

import tempfile
from pathlib import Path

import pytest

from forcesuper.models import (
    CallExpression,
    ClassDeclaration,
    MethodDeclaration,
    SourceFile,
    SuperReference,
    SyntaxNode,
    TypeReference,
)
from forcesuper.semantic.java_symbols import JavaSymbolResolver
from forcesuper.transformer import ForceSuperTransformer

TAG = "ForceSuperCall"


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def transformer():
    """Transformer with Java name lookup and no path universe."""
    return ForceSuperTransformer(JavaSymbolResolver())


@pytest.fixture
def java_project(temp_dir):
    """A project with a cross-package hierarchy that passes the check."""
    root = temp_dir / "project"
    write_java(
        root,
        "src/com/example/ui/Widget.java",
        """package com.example.ui;

public class Widget {
    @ForceSuperCall
    public void dispose() {
        release();
    }

    private void release() {}
}
""",
    )
    write_java(
        root,
        "src/com/example/app/Button.java",
        """package com.example.app;

import com.example.ui.Widget;

public class Button extends Widget {
    @Override
    public void dispose() {
        super.dispose();
    }
}
""",
    )
    yield root


def write_java(root: Path, rel_path: str, content: str) -> Path:
    """Write a source file under root, creating directories."""
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def super_call(name: str) -> CallExpression:
    return CallExpression(name=name, receiver=SuperReference())


def method(
    name: str,
    *tags: str,
    calls_super: bool = False,
    line: int = 0,
) -> MethodDeclaration:
    """Hand-built method; its body optionally contains super.name()."""
    statements = []
    if calls_super:
        statements.append(SyntaxNode("expression_statement", (super_call(name),)))
    return MethodDeclaration(
        name=name,
        tags=frozenset(tags),
        body=SyntaxNode("block", tuple(statements)),
        line=line,
    )


def klass(
    name: str,
    extends: str | None = None,
    methods: tuple = (),
    tags: tuple = (),
    path: str | None = None,
    ignore_ancestor: bool = False,
) -> ClassDeclaration:
    """Hand-built class declared in <name>.java unless a path is given."""
    return ClassDeclaration(
        name=name,
        path=path or f"{name}.java",
        extends=(TypeReference.from_text(extends),) if extends else (),
        members=tuple(methods),
        tags=frozenset(tags),
        ignore_ancestor=ignore_ancestor,
    )


def source_of(*classes: ClassDeclaration, path: str | None = None) -> SourceFile:
    """Wrap classes in a SourceFile (path defaults to the first class's)."""
    return SourceFile(path=path or classes[0].path, nodes=tuple(classes))
