from __future__ import annotations

import importlib
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import RuntimeSettings, load_runtime_settings, load_settings
from .errors import SchemaError
from .json_utils import parse_reply
from .prompts import build_prompt
from .telemetry import est_tokens
from .types import Schema


app = typer.Typer(help="structlm schema tools")
_err_console = Console(stderr=True)


@app.callback()
def _root_callback():
    """structlm CLI root."""
    pass


def _settings(config: Optional[Path]) -> RuntimeSettings:
    load_dotenv()
    settings = load_settings(config) if config else load_runtime_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )
    return settings


def _load_schema(target: str) -> Schema[Any]:
    """Resolve ``package.module:attribute`` to a Schema instance."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise typer.BadParameter("target must look like 'package.module:attribute'")
    # console scripts do not put the working directory on sys.path
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise typer.BadParameter(f"cannot import module '{module_name}': {exc}") from exc
    obj: Any = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise typer.BadParameter(f"'{module_name}' has no attribute '{attr}'") from exc
    if not isinstance(obj, Schema):
        raise typer.BadParameter(f"'{target}' is a {type(obj).__name__}, not a Schema")
    return obj


def _read_text(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


@app.command("describe")
def cmd_describe(
    target: str = typer.Argument(..., help="Schema to render, as package.module:attribute"),
    plain: bool = typer.Option(False, help="Omit validation/optional hint comments"),
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Settings YAML/JSON"),
):
    """Print the compact notation of a schema."""
    _settings(config)
    schema = _load_schema(target)
    typer.echo(str(schema) if plain else schema.stringify())


@app.command("check")
def cmd_check(
    target: str = typer.Argument(..., help="Schema to validate against, as package.module:attribute"),
    document: Path = typer.Argument(..., help="JSON document to parse ('-' for stdin)"),
    repair: Optional[bool] = typer.Option(None, "--repair/--no-repair", help="Strip Markdown fences before giving up"),
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Settings YAML/JSON"),
):
    """Parse a JSON document against a schema and print the validated value."""
    settings = _settings(config)
    schema = _load_schema(target)
    text = _read_text(document)
    effective_repair = settings.repair_replies if repair is None else repair
    try:
        value, warnings = parse_reply(text, schema, repair=effective_repair)
    except SchemaError as exc:
        path = "".join(f"[{p}]" if isinstance(p, int) else f".{p}" for p in exc.path) or "<root>"
        _err_console.print(f"[bold red]invalid[/] at {escape(path)}: {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(1)
    for warning in warnings:
        _err_console.print(f"[yellow]warning[/] {warning}", soft_wrap=True)
    typer.echo(json.dumps(value, indent=2, ensure_ascii=False))


@app.command("prompt")
def cmd_prompt(
    target: str = typer.Argument(..., help="Schema to describe, as package.module:attribute"),
    text: Optional[str] = typer.Option(None, help="Input text to embed in the prompt"),
    input_file: Optional[Path] = typer.Option(None, "--input", exists=True, dir_okay=False, help="Read input text from a file"),
    task: Optional[str] = typer.Option(None, help="Override the task instruction line"),
    hints: bool = typer.Option(True, "--hints/--no-hints", help="Include validation/optional hints"),
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Settings YAML/JSON"),
):
    """Print the system and user prompt for extracting data into a schema."""
    _settings(config)
    if (text is None) == (input_file is None):
        typer.echo("ERROR: pass exactly one of --text or --input", err=True)
        raise typer.Exit(1)
    schema = _load_schema(target)
    input_text = text if text is not None else _read_text(input_file)
    parts = build_prompt(schema, input_text, task=task, hints=hints)
    typer.echo(parts.system)
    typer.echo("")
    typer.echo(parts.user)
    _err_console.print(f"~{est_tokens(parts.char_count)} prompt tokens ({parts.char_count} chars)")


if __name__ == "__main__":
    # Allow module execution via: python -m structlm.cli
    app()
