"""Java front-end using Tree-sitter."""

from __future__ import annotations

from dataclasses import replace

import tree_sitter
import tree_sitter_java as tsjava

from ..config import IGNORE_ANCESTOR_TAG
from ..models import (
    CallExpression,
    ClassDeclaration,
    ImportDeclaration,
    ImportedName,
    MethodDeclaration,
    Node,
    SourceFile,
    SuperReference,
    SyntaxNode,
    TypeReference,
)
from .locator import normalize_path
from .tags import has_tag

_TYPE_NODES = ("type_identifier", "scoped_type_identifier", "generic_type")


class JavaParser:
    """Builds checker syntax trees from Java source code.

    Extracts:
    - package and single-type imports (static and wildcard imports skipped)
    - every class declaration, including member classes (Outer.Inner) and
      local classes, numbered per name like javac binary names (Outer$1Helper)
    - annotations as tags, by simple name: @com.acme.ForceSuperCall -> ForceSuperCall
    - methods with their bodies; constructors are not methods
    - super.name(...) calls inside bodies, at any depth
    """

    def __init__(self) -> None:
        self._language = tree_sitter.Language(tsjava.language())
        self._parser = tree_sitter.Parser(self._language)
        # (enclosing qualname, simple name) -> last ordinal, per parsed file
        self._local_ordinals: dict[tuple[str, str], int] = {}

    def parse(self, source: str, path: str) -> SourceFile:
        source_bytes = source.encode()
        tree = self._parser.parse(source_bytes)
        path = normalize_path(path)
        self._local_ordinals = {}

        package: str | None = None
        nodes: list[Node] = []
        for child in tree.root_node.children:
            if child.type == "package_declaration":
                package = self._package_name(child, source_bytes)
            elif child.type == "import_declaration":
                imported = self._extract_import(child, source_bytes)
                if imported:
                    nodes.append(imported)
            elif child.type == "class_declaration":
                class_decl = self._extract_class(child, source_bytes, path, [])
                if class_decl:
                    nodes.append(class_decl)
            elif child.is_named:
                nodes.append(self._lower(child, source_bytes, path, []))

        return SourceFile(
            path=path,
            language="java",
            package=package,
            nodes=tuple(nodes),
            has_parse_error=self._has_errors(tree.root_node),
        )

    def _has_errors(self, node: tree_sitter.Node) -> bool:
        """Check if tree contains ERROR or MISSING nodes."""
        if node.type == "ERROR" or node.is_missing:
            return True
        return any(self._has_errors(child) for child in node.children)

    def _package_name(self, node: tree_sitter.Node, source_bytes: bytes) -> str | None:
        for child in node.children:
            if child.type in ("scoped_identifier", "identifier"):
                return self._node_text(child, source_bytes)
        return None

    def _extract_import(
        self, node: tree_sitter.Node, source_bytes: bytes
    ) -> ImportDeclaration | None:
        """Single-type import: import com.example.User; -> module com.example.User, name User."""
        for part in node.children:
            # Static members and wildcards don't name a class
            if part.type in ("static", "asterisk"):
                return None

        for part in node.children:
            if part.type in ("scoped_identifier", "identifier"):
                full_path = self._node_text(part, source_bytes)
                simple_name = full_path.split(".")[-1]
                return ImportDeclaration(
                    module=full_path,
                    names=(ImportedName(simple_name),),
                    line=node.start_point[0] + 1,
                )
        return None

    def _extract_class(
        self,
        node: tree_sitter.Node,
        source_bytes: bytes,
        path: str,
        scope: list[str],
        local: bool = False,
    ) -> ClassDeclaration | None:
        name = self._get_name(node)
        if not name:
            return None

        tags = frozenset(self._get_annotations(node, source_bytes))
        if local and scope:
            new_scope = scope[:-1] + [self._local_segment(scope, name)]
        else:
            new_scope = scope + [name]

        members: list[Node] = []
        body = node.child_by_field_name("body")
        if body:
            for child in body.children:
                if child.type == "method_declaration":
                    members.append(self._extract_method(child, source_bytes, path, new_scope))
                elif child.type == "class_declaration":
                    nested = self._extract_class(child, source_bytes, path, new_scope)
                    if nested:
                        members.append(nested)
                elif child.is_named:
                    members.append(self._lower(child, source_bytes, path, new_scope))

        class_decl = ClassDeclaration(
            name=name,
            path=path,
            qualname=".".join(new_scope),
            extends=self._extract_superclass(node.child_by_field_name("superclass"), source_bytes),
            members=tuple(members),
            tags=tags,
            line=node.start_point[0] + 1,
        )
        if has_tag(class_decl, IGNORE_ANCESTOR_TAG):
            class_decl = replace(class_decl, ignore_ancestor=True)
        return class_decl

    def _local_segment(self, scope: list[str], name: str) -> str:
        """Scope segment for a local class: Outer -> Outer$1Helper, Outer$2Helper, ..."""
        key = (".".join(scope), name)
        ordinal = self._local_ordinals.get(key, 0) + 1
        self._local_ordinals[key] = ordinal
        return f"{scope[-1]}${ordinal}{name}"

    def _extract_superclass(
        self, superclass_node: tree_sitter.Node | None, source_bytes: bytes
    ) -> tuple[TypeReference, ...]:
        """Types named after extends.

        Handles:
        - extends Base
        - extends Base<T>  (generic) -> "Base"
        - extends com.example.Base
        """
        if superclass_node is None:
            return ()

        refs: list[TypeReference] = []
        for child in superclass_node.children:
            if child.type not in _TYPE_NODES:
                continue
            if child.type == "generic_type":
                for sub in child.children:
                    if sub.type in ("type_identifier", "scoped_type_identifier"):
                        refs.append(TypeReference.from_text(self._node_text(sub, source_bytes)))
                        break
            else:
                refs.append(TypeReference.from_text(self._node_text(child, source_bytes)))
        return tuple(refs)

    def _extract_method(
        self,
        node: tree_sitter.Node,
        source_bytes: bytes,
        path: str,
        scope: list[str],
    ) -> MethodDeclaration:
        body_node = node.child_by_field_name("body")
        body = self._lower(body_node, source_bytes, path, scope) if body_node else None
        return MethodDeclaration(
            name=self._get_name(node) or "",
            tags=frozenset(self._get_annotations(node, source_bytes)),
            body=body,
            line=node.start_point[0] + 1,
        )

    def _lower(
        self,
        node: tree_sitter.Node,
        source_bytes: bytes,
        path: str,
        scope: list[str],
    ) -> Node:
        """Convert a Tree-sitter subtree into checker nodes."""
        if node.type == "super":
            return SuperReference()

        if node.type in ("class_declaration", "local_class_declaration"):
            local = self._extract_class(node, source_bytes, path, scope, local=True)
            if local:
                return local

        if node.type == "method_invocation":
            receiver_node = node.child_by_field_name("object")
            arguments_node = node.child_by_field_name("arguments")
            name_node = node.child_by_field_name("name")
            receiver = None
            if receiver_node is not None:
                receiver = self._lower(receiver_node, source_bytes, path, scope)
            arguments: tuple[Node, ...] = ()
            if arguments_node is not None:
                arguments = tuple(
                    self._lower(arg, source_bytes, path, scope)
                    for arg in arguments_node.named_children
                )
            return CallExpression(
                name=self._node_text(name_node, source_bytes) if name_node else "",
                receiver=receiver,
                arguments=arguments,
            )

        return SyntaxNode(
            kind=node.type,
            children=tuple(
                self._lower(child, source_bytes, path, scope) for child in node.named_children
            ),
        )

    def _get_annotations(self, node: tree_sitter.Node, source_bytes: bytes) -> list[str]:
        """Simple names of the annotations on a declaration."""
        annotations: list[str] = []

        # Look for annotations as direct children or inside modifiers node
        candidates = []
        for child in node.children:
            if child.type in ("marker_annotation", "annotation"):
                candidates.append(child)
            elif child.type == "modifiers":
                candidates.extend(
                    mod for mod in child.children
                    if mod.type in ("marker_annotation", "annotation")
                )

        for annotation in candidates:
            name_node = annotation.child_by_field_name("name")
            if name_node is None:
                continue
            annotations.append(self._node_text(name_node, source_bytes).split(".")[-1])

        return annotations

    def _get_name(self, node: tree_sitter.Node) -> str | None:
        """Get name from a declaration node."""
        name_node = node.child_by_field_name("name")
        if name_node and name_node.text:
            return name_node.text.decode()
        return None

    def _node_text(self, node: tree_sitter.Node, source_bytes: bytes) -> str:
        """Get text content of a node."""
        return source_bytes[node.start_byte:node.end_byte].decode()
