"""Tag (annotation) lookups on declarations."""

from __future__ import annotations

from ..models import ClassDeclaration, MethodDeclaration


def has_tag(declaration: ClassDeclaration | MethodDeclaration, tag: str) -> bool:
    return tag in declaration.tags


def method_has_tag(class_decl: ClassDeclaration, method_name: str, tag: str) -> bool:
    """Whether any declaration in the method's overload group carries ``tag``."""
    return any(has_tag(m, tag) for m in class_decl.overloads(method_name))


def tagged_methods(class_decl: ClassDeclaration, tag: str) -> list[str]:
    """Names of the methods on ``class_decl`` that carry ``tag``."""
    return [name for name in class_decl.method_names() if method_has_tag(class_decl, name, tag)]
