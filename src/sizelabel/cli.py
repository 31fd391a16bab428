"""size-label CLI — Typer application with run, check, and init commands."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from sizelabel import __version__

app = typer.Typer(
    name="size-label",
    help="Label pull requests by the amount of translated text they add.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

_FORMATS = ("terminal", "json")


def _configure_logging(debug: bool, fmt: str) -> None:
    """Route package logs through Rich on stderr."""
    if debug:
        level = logging.DEBUG
    elif fmt == "json":
        level = logging.WARNING  # keep stdout/stderr parseable
    else:
        level = logging.INFO

    logger = logging.getLogger("sizelabel")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = RichHandler(console=console, show_time=False, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)


def _check_format(fmt: str) -> None:
    if fmt not in _FORMATS:
        console.print(f"[bold red]Invalid format:[/bold red] {escape(fmt)}")
        raise typer.Exit(code=2)


def _report(run, fmt: str) -> None:
    from sizelabel.output import json_report, terminal

    if fmt == "json":
        print(json_report.render(run))
    else:
        terminal.render(run, console=console)


def _fail(exc: Exception) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    return typer.Exit(code=1)


# ── run ───────────────────────────────────────────────────────────────────────


@app.command()
def run(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .size-label.toml"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Compute labels without changing them"),
    debug: bool = typer.Option(False, "--debug", help="Debug output (same as DEBUG_ACTION)"),
) -> None:
    """Label the pull request described by GITHUB_EVENT_PATH."""
    from sizelabel.config.loader import ConfigError, load_config, require_github
    from sizelabel.git.diff_parser import ParseError
    from sizelabel.github.client import GitHubClient, UpstreamError
    from sizelabel.github.event import load_event
    from sizelabel.labeling.patterns import PatternError
    from sizelabel.runner import run_labeler

    _check_format(format)
    try:
        cfg = load_config(Path.cwd(), config, os.environ)
        _configure_logging(debug or cfg.debug, format)
        logging.getLogger(__name__).debug("Running size-label %s", __version__)

        token, event_path = require_github(cfg)
        event = load_event(event_path)
        client = GitHubClient(token, cfg.github.api_url)
        result = run_labeler(cfg, event, client, dry_run=dry_run)
    except (ConfigError, PatternError, ParseError, UpstreamError) as exc:
        raise _fail(exc) from exc

    _report(result, format)
    raise typer.Exit(code=0)


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    diff_file: str = typer.Argument(..., help="Unified diff to analyse ('-' reads stdin)"),
    label: Optional[List[str]] = typer.Option(None, "--label", "-l", help="Label currently on the PR (repeatable)"),
    ignore: Optional[List[str]] = typer.Option(None, "--ignore", "-i", help="Extra ignore pattern (repeatable)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .size-label.toml"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Show the labels a local diff would receive, without calling GitHub."""
    from sizelabel.config.loader import ConfigError, load_config
    from sizelabel.git.diff_parser import ParseError
    from sizelabel.labeling.patterns import PatternError
    from sizelabel.runner import plan_labels

    _check_format(format)
    try:
        cfg = load_config(Path.cwd(), config, os.environ)
        _configure_logging(debug or cfg.debug, format)
        cfg.ignore.patterns.extend(ignore or [])

        if diff_file == "-":
            diff_text = sys.stdin.read()
        else:
            try:
                diff_text = Path(diff_file).read_text(encoding="utf-8")
            except OSError as exc:
                raise ConfigError(f"Cannot read diff file {diff_file}: {exc}") from exc

        result = plan_labels(diff_text, cfg, label or [])
    except (ConfigError, PatternError, ParseError) as exc:
        raise _fail(exc) from exc

    _report(result, format)
    raise typer.Exit(code=0)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .size-label.toml in the current directory."""
    from sizelabel.config.defaults import DEFAULT_TOML
    from sizelabel.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"size-label {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """size-label — label pull requests by translated-text size."""
