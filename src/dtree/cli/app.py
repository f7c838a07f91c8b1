"""
Decision tree CLI: evaluate expected values and show optimal decisions.

- example: evaluate the bundled example trees
- evaluate: load a YAML tree definition and print the optimal tree
- validate: check the probability distributions of a YAML tree definition
"""

from __future__ import annotations

import typer
from rich.console import Console

from dtree.cli.formatters import build_distribution_table, build_node_tree, format_number
from dtree.cli.load_helpers import load_or_exit
from dtree.core.examples import big_example_tree, example_tree
from dtree.core.tree import Tree
from dtree.utils.logging import configure_logging

app = typer.Typer(help="Decision tree CLI: evaluate expected values and show optimal decisions.")
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    """Expected-value analysis of decision trees."""
    try:
        configure_logging(log_level)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2)


def _render_optimal(tree: Tree, as_json: bool) -> None:
    data = tree.optimal_snapshot()
    if as_json:
        console.print_json(data.model_dump_json(exclude_none=True))
        return
    console.print(build_node_tree(data))
    console.print(f"\n[bold]Expected value:[/bold] {format_number(data.expected_value)}")
    best = [child.label or f"#{child.id}" for child in data.children if child.is_optimal_branch]
    if best:
        console.print(f"[bold]Best choice:[/bold] {', '.join(best)}")


def _render_invalid(tree: Tree) -> None:
    console.print("[red]Tree is invalid:[/red] chance node probabilities must lie in [0, 1] and sum to 1")
    console.print(build_distribution_table(tree))


@app.command()
def example(
    big: bool = typer.Option(False, "--big", help="Use the wide random example instead"),
    seed: int | None = typer.Option(None, "--seed", help="Random seed for --big"),
    as_json: bool = typer.Option(False, "--json", help="Print the optimal snapshot as JSON"),
) -> None:
    """Evaluate a bundled example tree."""
    tree = big_example_tree(seed) if big else example_tree()
    _render_optimal(tree, as_json)


@app.command()
def evaluate(
    path: str = typer.Argument(..., help="Path to a YAML tree definition"),
    as_json: bool = typer.Option(False, "--json", help="Print the optimal snapshot as JSON"),
    verbose: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Compute expected values and mark the optimal decisions."""
    tree = load_or_exit(path, console=console, verbose_errors=verbose)
    if not tree.is_valid():
        _render_invalid(tree)
        raise typer.Exit(code=1)
    _render_optimal(tree, as_json)


@app.command()
def validate(
    path: str = typer.Argument(..., help="Path to a YAML tree definition"),
    verbose: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Check the probability distribution of every chance node."""
    tree = load_or_exit(path, console=console, verbose_errors=verbose)
    if not tree.is_valid():
        _render_invalid(tree)
        raise typer.Exit(code=1)
    console.print("[green]OK[/green] All chance node distributions are valid")


if __name__ == "__main__":
    app()
