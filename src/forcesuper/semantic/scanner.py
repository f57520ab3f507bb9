"""Detection of calls through the superclass reference."""

from __future__ import annotations

from ..models import CallExpression, Node, SuperReference, walk


def is_super_call(node: Node) -> bool:
    """True for ``super.name(...)``."""
    return isinstance(node, CallExpression) and isinstance(node.receiver, SuperReference)


def has_super_call(node: Node | None) -> bool:
    """Whether a method body contains a super call anywhere, at any depth."""
    if node is None:
        return False
    return any(is_super_call(n) for n in walk(node))


def find_super_calls(node: Node | None) -> list[CallExpression]:
    """All super calls in a subtree, in document order."""
    if node is None:
        return []
    return [n for n in walk(node) if is_super_call(n)]
