"""Class-hierarchy analysis for forcesuper."""

from .build_pass import BuildPass, ClassRegistry, PendingResolutionQueue
from .checker import OverrideChecker
from .java_parser import JavaParser
from .java_symbols import JavaSymbolResolver
from .locator import class_identity, method_identity, module_source_path, source_root
from .registry import parser_for_path, register_parser, supported_extensions, supported_languages
from .resolver import SuperclassResolver
from .scanner import find_super_calls, has_super_call
from .tags import has_tag, method_has_tag, tagged_methods

# Register built-in parsers
register_parser("java", [".java"], JavaParser)

__all__ = [
    # Build-pass state
    "BuildPass",
    "ClassRegistry",
    "PendingResolutionQueue",
    # Analysis
    "OverrideChecker",
    "SuperclassResolver",
    "has_super_call",
    "find_super_calls",
    "has_tag",
    "method_has_tag",
    "tagged_methods",
    # Identities
    "class_identity",
    "method_identity",
    "module_source_path",
    "source_root",
    # Java front-end
    "JavaParser",
    "JavaSymbolResolver",
    # Registry functions
    "register_parser",
    "parser_for_path",
    "supported_languages",
    "supported_extensions",
]
