"""rulebook CLI — Typer application with check, count, types, and init commands."""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from rich.console import Console

from rulebook import __version__

app = typer.Typer(
    name="rulebook",
    help="Evaluate composable rules against values.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _load_config(config: Optional[str]):
    from rulebook.config.loader import ConfigError, load_config

    try:
        return load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _build_engine(cfg):
    from rulebook.config.loader import ConfigError
    from rulebook.rules.engine import Engine
    from rulebook.rules.registry import build_registry

    try:
        registry = build_registry(cfg)
    except ConfigError as exc:
        console.print(f"[bold red]Rule type error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    return Engine(registry, coercion=cfg.engine.coercion)


def _load_rule(target: str) -> Any:
    from rulebook.config.loader import ConfigError, resolve_import_path

    try:
        return resolve_import_path(target)
    except ConfigError as exc:
        console.print(f"[bold red]Cannot load rule:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _parse_value(text: Optional[str]) -> Any:
    """Parse the input value as YAML; ``-`` reads it from stdin."""
    if text is None:
        return None
    if text == "-":
        text = sys.stdin.read()
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        console.print(f"[bold red]Invalid value:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    target: str = typer.Argument(..., help="Rule to evaluate, as module:attribute"),
    value: Optional[str] = typer.Option(None, "--value", "-i", help="Input value as YAML ('-' reads stdin)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .rulebook.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
) -> None:
    """Evaluate a rule against a value. Exits 1 when the rule fails."""
    from rulebook.operators.aggregatable import UnsupportedCapabilityError
    from rulebook.output import json_report, terminal
    from rulebook.rules.engine import InvalidRuleError, NonBooleanOutcomeError

    cfg = _load_config(config)

    if format:
        if format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    engine = _build_engine(cfg)
    rule = _load_rule(target)
    input_value = _parse_value(value)

    if verbose or debug:
        console.print(f"[dim]Rule types: {', '.join(t.name for t in engine.registry)}[/dim]")
        console.print(f"[dim]Coercion: {engine.coercion}[/dim]")
        rule_type = engine.rule_type(rule)
        console.print(f"[dim]Rule type: {rule_type.name if rule_type else 'none'}[/dim]")

    start = time.perf_counter()
    try:
        traced = engine.trace(rule, input_value)
    except (InvalidRuleError, NonBooleanOutcomeError, UnsupportedCapabilityError) as exc:
        console.print(f"[bold red]Evaluation error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    duration_ms = (time.perf_counter() - start) * 1000

    if debug:
        console.print(f"[dim]Evaluation duration: {duration_ms:.2f}ms[/dim]")

    if cfg.output.format == "json":
        print(json_report.render(traced, engine=engine, show_values=cfg.output.show_values))
    else:
        terminal.render(traced, engine=engine, show_values=cfg.output.show_values)

    raise typer.Exit(code=0 if traced.passed else 1)


# ── count ─────────────────────────────────────────────────────────────────────


@app.command()
def count(
    target: str = typer.Argument(..., help="Rule (or list of rules) as module:attribute"),
) -> None:
    """Print the number of leaf clauses in a rule tree."""
    from rulebook.rules.engine import number_of_clauses

    print(number_of_clauses(_load_rule(target)))


# ── types ─────────────────────────────────────────────────────────────────────


@app.command()
def types(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .rulebook.toml"),
) -> None:
    """List registered rule types in priority order."""
    from rulebook.output import terminal

    engine = _build_engine(_load_config(config))
    terminal.render_types(engine.registry, console=console)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .rulebook.toml in the current directory."""
    from rulebook.config.defaults import DEFAULT_TOML
    from rulebook.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"rulebook {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """rulebook — Evaluate composable rules against values."""
