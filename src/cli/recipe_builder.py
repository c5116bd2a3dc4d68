# src/cli/recipe_builder.py
"""
Command line front-end for the recipe builder.

    recipe-builder adapters
    recipe-builder scaffold create.mixing > mixing.yaml
    recipe-builder commit project.yaml create.mixing mixing.yaml --id brass_mix
    recipe-builder validate project.yaml
    recipe-builder compile project.yaml -o kubejs/server_scripts/recipes.js

Tables go through rich; generated scripts and YAML are written verbatim so
they can be piped.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from adapters.base import TAG_FIELD
from adapters.registry import PLUGINS, get_adapter
from adapters.schema import has_errors
from project.config import BuilderConfig, load_builder_config
from project.loader import load_project, save_project, scaffold_payload
from project.logging_config import configure_logging
from project.project import CommitError, RecipeProject

logger = logging.getLogger(__name__)

console = Console()


def _load_config(args: argparse.Namespace) -> BuilderConfig:
    if args.config is not None:
        return load_builder_config(Path(args.config))
    try:
        return load_builder_config()
    except FileNotFoundError:
        logger.info("No builder.yaml found; using built-in defaults")
        return BuilderConfig()


def _cmd_adapters(args: argparse.Namespace) -> int:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Family", style="bold")
    table.add_column("Adapter ID")
    table.add_column("Title")
    for plugin in PLUGINS:
        for adapter in plugin.adapters:
            table.add_row(plugin.title, adapter.id, adapter.title)
    console.print(Panel(table, title="Recipe Adapters", border_style="cyan"))
    return 0


def _cmd_scaffold(args: argparse.Namespace) -> int:
    adapter = get_adapter(args.adapter_id)
    if adapter is None:
        console.print(f"[bold red]Unknown adapter:[/bold red] {args.adapter_id}")
        return 2
    sys.stdout.write(yaml.safe_dump(scaffold_payload(adapter), sort_keys=False))
    return 0


def _cmd_commit(args: argparse.Namespace) -> int:
    if get_adapter(args.adapter_id) is None:
        console.print(f"[bold red]Unknown adapter:[/bold red] {args.adapter_id}")
        return 2

    config = _load_config(args)
    project_path = Path(args.project)
    if project_path.exists():
        project = load_project(project_path)
    else:
        project = RecipeProject(namespace=config.namespace, meta=config.meta())

    with Path(args.payload).open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    # payload files written by hand may omit the tag
    if isinstance(raw, dict):
        raw.setdefault(TAG_FIELD, args.adapter_id)

    try:
        entry = project.commit(args.adapter_id, raw, args.recipe_id)
    except CommitError as exc:
        for msg in exc.messages:
            console.print(f"[bold red]error:[/bold red] {msg.message}")
        return 1

    save_project(project, project_path)
    console.print(f"[bold green]Committed[/bold green] {entry.payload.recipe_id} ({entry.entry_id})")
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    project = load_project(Path(args.project))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Entry", style="bold")
    table.add_column("Adapter")
    table.add_column("Level")
    table.add_column("Message")

    failed = False
    for entry in project.entries:
        adapter = get_adapter(entry.adapter_id)
        if adapter is None:
            continue
        messages = adapter.validate(entry.payload)
        failed = failed or has_errors(messages)
        for msg in messages:
            style = "red" if msg.is_error else "yellow"
            table.add_row(entry.entry_id, entry.adapter_id, f"[{style}]{msg.level}[/{style}]", msg.message)

    if table.row_count:
        console.print(table)
    else:
        console.print(f"[bold green]{len(project)} entries, no findings.[/bold green]")
    return 1 if failed else 0


def _cmd_compile(args: argparse.Namespace) -> int:
    project = load_project(Path(args.project))
    script = project.compile()
    if args.output is None:
        sys.stdout.write(script)
        return 0

    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(script, encoding="utf-8")
    console.print(f"[bold green]Wrote[/bold green] {out} ({len(project)} entries)")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recipe-builder",
        description="Compile KubeJS server recipe scripts from recipe payload files.",
    )
    parser.add_argument("--config", default=None, help="Path to builder.yaml (default: config/builder.yaml).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("adapters", help="List every registered recipe adapter.")
    p_list.set_defaults(func=_cmd_adapters)

    p_scaffold = sub.add_parser("scaffold", help="Print an adapter's default payload as YAML.")
    p_scaffold.add_argument("adapter_id", help="Adapter id, e.g. create.mixing")
    p_scaffold.set_defaults(func=_cmd_scaffold)

    p_commit = sub.add_parser("commit", help="Validate a payload file and append it to a project.")
    p_commit.add_argument("project", help="Project YAML file (created if missing).")
    p_commit.add_argument("adapter_id", help="Adapter id, e.g. vanilla.shaped")
    p_commit.add_argument("payload", help="Payload YAML file (see `scaffold`).")
    p_commit.add_argument("--id", dest="recipe_id", required=True, help="Recipe id suffix.")
    p_commit.set_defaults(func=_cmd_commit)

    p_validate = sub.add_parser("validate", help="Show validation findings for every entry.")
    p_validate.add_argument("project", help="Project YAML file.")
    p_validate.set_defaults(func=_cmd_validate)

    p_compile = sub.add_parser("compile", help="Generate the KubeJS server script.")
    p_compile.add_argument("project", help="Project YAML file.")
    p_compile.add_argument("-o", "--output", default=None, help="Write to this file instead of stdout.")
    p_compile.set_defaults(func=_cmd_compile)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.INFO if args.verbose else logging.WARNING, stream=sys.stderr)
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 1
    return func(args)


if __name__ == "__main__":
    sys.exit(main())
