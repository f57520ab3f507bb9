"""Tests for class identities and module path resolution."""

from pathlib import PurePosixPath

from forcesuper.models import ClassIdentity
from forcesuper.semantic.locator import (
    class_identity,
    method_identity,
    module_source_path,
    normalize_path,
    source_root,
)


class TestIdentities:
    def test_class_identity_normalizes_path(self):
        assert class_identity("src/./app/../ui/Widget.java", "Widget") == ClassIdentity(
            "src/ui/Widget.java", "Widget"
        )

    def test_method_identity(self):
        owner = ClassIdentity("src/Button.java", "Button")
        assert method_identity(owner, "dispose") == "src/Button.java:Button.dispose"

    def test_normalize_windows_separators(self):
        assert normalize_path("src\\ui\\Widget.java") == "src/ui/Widget.java"


class TestSourceRoot:
    def test_package_matches_directories(self):
        assert source_root("src/main/java/com/example/User.java", "com.example") == PurePosixPath(
            "src/main/java"
        )

    def test_package_at_project_root(self):
        assert source_root("com/example/User.java", "com.example") == PurePosixPath(".")

    def test_mismatched_layout_uses_file_directory(self):
        assert source_root("lib/User.java", "com.example") == PurePosixPath("lib")

    def test_default_package(self):
        assert source_root("lib/User.java", None) == PurePosixPath("lib")


class TestModuleSourcePath:
    def test_dotted_module_from_source_root(self):
        path = module_source_path(
            "src/com/example/app/Button.java",
            "com.example.ui.Widget",
            ".java",
            package="com.example.app",
        )
        assert path == "src/com/example/ui/Widget.java"

    def test_relative_module(self):
        assert module_source_path("src/app/button.ts", "./widget", ".ts") == "src/app/widget.ts"

    def test_relative_parent_module(self):
        assert module_source_path("src/app/button.ts", "../ui/widget", ".ts") == "src/ui/widget.ts"

    def test_extension_not_duplicated(self):
        assert module_source_path("src/app/button.ts", "./widget.ts", ".ts") == "src/app/widget.ts"

    def test_dotted_module_at_project_root(self):
        assert module_source_path("Button.java", "Widget", ".java") == "Widget.java"
