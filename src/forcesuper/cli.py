"""Command-line interface for forcesuper."""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

import uvicorn

from . import __version__
from .config import load_config
from .errors import ForceSuperError, MissingSuperCallError
from .project import ProjectChecker


def configure_logging(debug: bool) -> None:
    """Send log output to stderr; --debug shows unresolved ancestor lookups."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def get_checker(args: argparse.Namespace) -> ProjectChecker:
    """Build a ProjectChecker from the project config plus CLI overrides."""
    root = Path(args.root).resolve()
    config = load_config(root)
    if getattr(args, "tag", None):
        config = replace(config, required_tag=args.tag.lstrip("@"))
    if getattr(args, "debug", False):
        config = replace(config, debug=True)
    configure_logging(config.debug)
    return ProjectChecker(root, config)


def cmd_check(args: argparse.Namespace) -> int:
    """Check every class hierarchy under the project root."""
    try:
        checker = get_checker(args)
        report = checker.run(reverse=args.reverse)

        if args.json:
            print(json.dumps({"status": "ok", **report.to_dict()}, indent=2))
        else:
            print(f"Checked {report.classes} class(es) in {report.files} file(s)")
            for path in report.parse_errors:
                print(f"  warning: {path} has syntax errors")
        return 0

    except ForceSuperError as e:
        if args.json:
            payload = {"status": "error", "error_type": type(e).__name__, "detail": str(e)}
            if isinstance(e, MissingSuperCallError):
                payload.update(
                    method=e.method_name, class_name=e.class_name, path=e.path, line=e.line
                )
            print(json.dumps(payload, indent=2))
        else:
            print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_classes(args: argparse.Namespace) -> int:
    """List classes with the ancestor identity each resolves to."""
    try:
        checker = get_checker(args)
        summaries = checker.describe_classes()

        if args.json:
            print(json.dumps([s.to_dict() for s in summaries], indent=2))
            return 0

        if not summaries:
            print("No classes found.")
            return 0

        for summary in summaries:
            if summary.ignore_ancestor:
                parent = "(ignored)"
            else:
                parent = summary.parent or "-"
            print(f"{summary.identity}  extends {parent}")
            for method in summary.tagged_methods:
                print(f"    @{checker.config.required_tag} {method}")
        return 0

    except ForceSuperError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the API server."""
    print("Starting forcesuper API server...")
    print(f"API docs: http://{args.host}:{args.port}/docs")
    print()

    # When reload is enabled, uvicorn requires the app as an import string
    app_target = "forcesuper.api:app" if args.reload else None
    if app_target is None:
        from .api import app
        app_target = app

    uvicorn.run(
        app_target,
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=1,
    )
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="forcesuper",
        description="Verify that overrides of tagged methods call super",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # check
    check_parser = subparsers.add_parser(
        "check", help="Check all class hierarchies under a project root"
    )
    check_parser.add_argument("root", nargs="?", default=".", help="Project root (default: .)")
    check_parser.add_argument(
        "--tag", "-t", help="Annotation that requires super calls (default: ForceSuperCall)"
    )
    check_parser.add_argument(
        "--debug", action="store_true", help="Log unresolved ancestor identities"
    )
    check_parser.add_argument("--json", action="store_true", help="Output as JSON")
    check_parser.add_argument(
        "--reverse", action="store_true", help="Visit files in reverse order"
    )

    # classes
    classes_parser = subparsers.add_parser(
        "classes", help="List classes and the superclass identity each resolves to"
    )
    classes_parser.add_argument("root", nargs="?", default=".", help="Project root (default: .)")
    classes_parser.add_argument(
        "--tag", "-t", help="Annotation that requires super calls (default: ForceSuperCall)"
    )
    classes_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument(
        "--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)"
    )
    serve_parser.add_argument(
        "--port", "-p", type=int, default=8000, help="Port to bind to (default: 8000)"
    )
    serve_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    return parser


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "check": cmd_check,
        "classes": cmd_classes,
        "serve": cmd_serve,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        return cmd_func(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
