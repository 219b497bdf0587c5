"""CLI entry point for blogpipe.

Like the rest of the project this sticks to argparse; task output goes through
logging, summaries are printed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from . import __version__

SHORTCUTS = {
    "styles": "Compile Sass into CSS",
    "scripts": "Concatenate and minify scripts",
    "images": "Optimize images",
    "build": "Build all assets and the site once",
    "serve": "Build the site and serve it with live reload",
    "watch": "Re-run tasks when sources change",
}


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="blogpipe",
        description="Asset pipeline for statically generated blogs.",
    )
    parser.add_argument("--version", action="version", version=f"blogpipe {__version__}")
    parser.add_argument("--root", "-C", type=Path, default=Path("."), help="Project root")
    parser.add_argument("--config", type=Path, default=None, help="Project file (default: blogpipe.json)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only log warnings and errors")

    sub = parser.add_subparsers(dest="cmd")

    p_run = sub.add_parser("run", help="Run tasks (default: the 'default' task)")
    p_run.add_argument("tasks", nargs="*", help="Task names")

    sub.add_parser("tasks", help="List available tasks")

    p_init = sub.add_parser("init", help="Write theme scripts, starter styles and blogpipe.json")
    p_init.add_argument("--force", action="store_true", help="Overwrite existing files")

    for name, help_text in SHORTCUTS.items():
        sub.add_parser(name, help=help_text)

    args = parser.parse_args(argv)
    _setup_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    if args.cmd == "init":
        return _cmd_init(args)
    if args.cmd == "tasks":
        return _cmd_tasks(args)
    if args.cmd == "run":
        return _cmd_run(args, list(args.tasks))
    if args.cmd in SHORTCUTS:
        return _cmd_run(args, [args.cmd])
    if args.cmd is None:
        return _cmd_run(args, [])

    parser.print_help()
    return 2


def _setup_logging(verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )


def _load(args: Any):
    from .settings import ConfigError, load_config

    try:
        return load_config(args.root, args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None


def _cmd_run(args: Any, tasks: list[str]) -> int:
    from .pipeline import Pipeline
    from .tasks.runner import TaskError, TaskNotFound

    config = _load(args)
    if config is None:
        return 2

    pipeline = Pipeline(config)
    try:
        results = pipeline.run(*tasks)
        if pipeline.server is not None:
            print(f"Serving {pipeline.server.root} at {pipeline.server.url} (Ctrl+C to stop)")
            pipeline.wait()
    except KeyboardInterrupt:
        print("\nStopped")
        return 130
    except TaskNotFound as e:
        print(f"Error: {e.message}", file=sys.stderr)
        print("Run 'blogpipe tasks' to list tasks.", file=sys.stderr)
        return 2
    except TaskError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        pipeline.close()

    warnings = [w for r in results for w in r.warnings]
    outputs = sum(len(r.outputs) for r in results)
    print(f"✓ {', '.join(r.name for r in results)}")
    print(f"  Files written: {outputs}")
    if warnings:
        print(f"\nWarnings ({len(warnings)}):")
        for w in warnings[:10]:
            print(f"  - {w}")
        if len(warnings) > 10:
            print(f"  ... and {len(warnings) - 10} more")
    return 0


def _cmd_tasks(args: Any) -> int:
    from .pipeline import Pipeline

    config = _load(args)
    if config is None:
        return 2

    runner = Pipeline(config).runner
    for name, description in runner.names():
        deps = runner.tasks[name].deps
        suffix = f"  (after: {', '.join(deps)})" if deps else ""
        print(f"  {name:10} {description}{suffix}")
    return 0


def _cmd_init(args: Any) -> int:
    from .theme.scaffold import init_project

    config = _load(args)
    if config is None:
        return 2

    try:
        report = init_project(args.root, config, force=bool(args.force))
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    root = args.root.resolve()
    print("✓ Project initialized")
    for p in report.written:
        print(f"  wrote   {p.relative_to(root).as_posix()}")
    for p in report.skipped:
        print(f"  kept    {p.relative_to(root).as_posix()}")
    if report.skipped and not args.force:
        print("\nUse --force to overwrite existing files.")
    return 0


if __name__ == "__main__":
    app()
