"""Rich terminal reporter — result trees and the rule type table."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from rulebook.operators.aggregatable import rule_label
from rulebook.rules.engine import Engine
from rulebook.rules.models import Result
from rulebook.rules.registry import RuleTypeRegistry

_PASS = Text(" PASS ", style="bold white on green")
_FAIL = Text(" FAIL ", style="bold white on red")


def _node_label(result: Result, engine: Optional[Engine]) -> Text:
    label = Text()
    label.append_text(_PASS if result.passed else _FAIL)
    label.append(" ")
    label.append(rule_label(result.rule), style="cyan")
    if engine is not None:
        rule_type = engine.rule_type(result.rule)
        if rule_type is not None:
            label.append(f" [{rule_type.name}]", style="dim")
    if not isinstance(result.evaluation, bool):
        label.append(f" → {result.evaluation!r}", style="yellow")
    return label


def _add_children(tree: Tree, result: Result, engine: Optional[Engine]) -> None:
    for child in result.clauses:
        branch = tree.add(_node_label(child, engine))
        _add_children(branch, child, engine)


def build_tree(result: Result, engine: Optional[Engine] = None) -> Tree:
    tree = Tree(_node_label(result, engine), guide_style="dim")
    _add_children(tree, result, engine)
    return tree


def render(
    result: Result,
    *,
    engine: Optional[Engine] = None,
    show_values: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print a traced result to the terminal using Rich."""
    console = console or Console(stderr=True)

    console.print()
    if show_values:
        console.print(f"[dim]Value:[/dim] {escape(repr(result.value))}", highlight=False)
    console.print(build_tree(result, engine))

    console.print()
    if result.passed:
        console.print("[bold green]✅ Rule passed.[/bold green]")
    else:
        failed = len(result.failed_clauses)
        detail = f" ({failed} failing clause(s))" if failed else ""
        console.print(f"[bold red]❌ Rule failed{detail}.[/bold red]")


def render_types(registry: RuleTypeRegistry, *, console: Optional[Console] = None) -> None:
    """Print the registry's rule types in priority order."""
    console = console or Console(stderr=True)
    table = Table(title="Rule types", title_style="bold", border_style="dim")
    table.add_column("Priority", justify="right", style="green")
    table.add_column("Name", style="cyan")
    table.add_column("Class", style="magenta")
    for priority, rule_type in enumerate(registry, start=1):
        cls = type(rule_type)
        table.add_row(str(priority), rule_type.name, f"{cls.__module__}.{cls.__qualname__}")
    console.print(table)
