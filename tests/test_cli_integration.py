"""Integration tests for CLI."""

import json
import os
import subprocess
import sys
from pathlib import Path

from .conftest import write_java

SRC_DIR = Path(__file__).resolve().parent.parent / "src"


def run_forcesuper(args: list[str], cwd: Path) -> subprocess.CompletedProcess:
    """Run forcesuper CLI command."""
    env = dict(os.environ)
    env.pop("FORCESUPER_REQUIRED_TAG", None)
    env.pop("FORCESUPER_DEBUG", None)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), env.get("PYTHONPATH")) if p
    )
    return subprocess.run(
        [sys.executable, "-m", "forcesuper.cli"] + args,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
    )


def break_button(root: Path) -> None:
    write_java(
        root,
        "src/com/example/app/Button.java",
        """package com.example.app;

import com.example.ui.Widget;

public class Button extends Widget {
    public void dispose() {}
}
""",
    )


class TestCheckCommand:
    """Integration tests for the check command."""

    def test_check_passes(self, java_project):
        result = run_forcesuper(["check"], java_project)

        assert result.returncode == 0
        assert "Checked 2 class(es) in 2 file(s)" in result.stdout

    def test_check_explicit_root(self, java_project):
        result = run_forcesuper(["check", str(java_project)], java_project.parent)
        assert result.returncode == 0

    def test_check_reverse_order(self, java_project):
        result = run_forcesuper(["check", "--reverse"], java_project)
        assert result.returncode == 0

    def test_check_json(self, java_project):
        result = run_forcesuper(["check", "--json"], java_project)

        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert data == {"status": "ok", "files": 2, "classes": 2, "parse_errors": []}

    def test_missing_super_call(self, java_project):
        break_button(java_project)
        result = run_forcesuper(["check"], java_project)

        assert result.returncode == 1
        assert "Method dispose in class Button requires a super call" in result.stderr

    def test_missing_super_call_json(self, java_project):
        break_button(java_project)
        result = run_forcesuper(["check", "--json"], java_project)

        assert result.returncode == 1
        data = json.loads(result.stdout)
        assert data["status"] == "error"
        assert data["error_type"] == "MissingSuperCallError"
        assert data["method"] == "dispose"
        assert data["class_name"] == "Button"
        assert data["path"] == "src/com/example/app/Button.java"
        assert data["line"] == 6

    def test_tag_option(self, java_project):
        break_button(java_project)
        result = run_forcesuper(["check", "--tag", "@MustCallSuper"], java_project)
        assert result.returncode == 0

    def test_stalled_classes(self, java_project):
        write_java(
            java_project,
            "src/com/example/app/Worker.java",
            "package com.example.app;\n\npublic class Worker extends Thread {}\n",
        )
        result = run_forcesuper(["check"], java_project)

        assert result.returncode == 1
        assert "1 items left in pending queue" in result.stderr
        assert "src/com/example/app/Worker.java:Worker" in result.stderr

    def test_debug_logs_skipped_lookup(self, java_project):
        write_java(
            java_project,
            "src/com/example/app/Worker.java",
            "package com.example.app;\n\n@ForceSuperIgnoreParent\npublic class Worker extends Thread {}\n",
        )
        result = run_forcesuper(["check", "--debug"], java_project)

        assert result.returncode == 0
        assert "skipping parent lookup for Worker" in result.stderr

    def test_config_file(self, java_project):
        break_button(java_project)
        (java_project / ".forcesuper.json").write_text(
            json.dumps({"schema_version": 1, "required_tag": "MustCallSuper"})
        )
        result = run_forcesuper(["check"], java_project)
        assert result.returncode == 0

    def test_invalid_config_file(self, java_project):
        (java_project / ".forcesuper.json").write_text("{")
        result = run_forcesuper(["check"], java_project)

        assert result.returncode == 1
        assert "Invalid config" in result.stderr


class TestClassesCommand:
    """Integration tests for the classes command."""

    def test_lists_hierarchy(self, java_project):
        result = run_forcesuper(["classes"], java_project)

        assert result.returncode == 0
        assert (
            "src/com/example/app/Button.java:Button  extends src/com/example/ui/Widget.java:Widget"
            in result.stdout
        )
        assert "src/com/example/ui/Widget.java:Widget  extends -" in result.stdout
        assert "    @ForceSuperCall dispose" in result.stdout

    def test_classes_json(self, java_project):
        result = run_forcesuper(["classes", "--json"], java_project)

        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert [c["identity"] for c in data] == [
            "src/com/example/app/Button.java:Button",
            "src/com/example/ui/Widget.java:Widget",
        ]

    def test_no_classes(self, temp_dir):
        result = run_forcesuper(["classes"], temp_dir)

        assert result.returncode == 0
        assert "No classes found." in result.stdout


class TestMisc:
    def test_no_command_prints_help(self, temp_dir):
        result = run_forcesuper([], temp_dir)

        assert result.returncode == 0
        assert "usage: forcesuper" in result.stdout

    def test_version(self, temp_dir):
        result = run_forcesuper(["--version"], temp_dir)

        assert result.returncode == 0
        assert "forcesuper" in result.stdout


class TestServeCommand:
    def test_serve_runs_app(self, monkeypatch):
        from forcesuper import cli
        from forcesuper.api import app

        calls = []
        monkeypatch.setattr(
            cli.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs))
        )

        args = cli.create_parser().parse_args(["serve", "--port", "9000"])
        assert cli.cmd_serve(args) == 0
        assert calls == [(app, {"host": "127.0.0.1", "port": 9000, "reload": False, "workers": 1})]

    def test_serve_reload_uses_import_string(self, monkeypatch):
        from forcesuper import cli

        calls = []
        monkeypatch.setattr(cli.uvicorn, "run", lambda target, **kwargs: calls.append(target))

        args = cli.create_parser().parse_args(["serve", "--reload"])
        assert cli.cmd_serve(args) == 0
        assert calls == ["forcesuper.api:app"]
