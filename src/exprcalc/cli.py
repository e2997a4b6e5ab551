"""
exprcalc CLI - Entry point.

Commands:
  eval     Evaluate an expression and print the result
  tokens   Show the tokens an expression lexes into
  tree     Show the parsed expression tree
"""

from __future__ import annotations

import logging
import sys
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from exprcalc import get_version
from exprcalc.core.config import EvaluatorConfig, load_config
from exprcalc.core.errors import DepthLimitError, ExprCalcError
from exprcalc.core.expression_lang import evaluate, parse, tokenize
from exprcalc.core.ir.expressions import BinaryExpr, CallExpr, Expr, NumberLiteral

app = typer.Typer(
    help="exprcalc - evaluate arithmetic expressions",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

StrictOption = Annotated[
    bool | None,
    typer.Option(
        "--strict/--lenient",
        help="Reject tokens left over after a complete expression. "
        "Defaults to EXPRCALC_STRICT.",
    ),
]
MaxDepthOption = Annotated[
    int | None,
    typer.Option(
        "--max-depth",
        min=1,
        help="Maximum nesting of parentheses and calls. Defaults to EXPRCALC_MAX_DEPTH.",
    ),
]
ExpressionArgument = Annotated[str, typer.Argument(help="Expression to process, e.g. '1 + 2 * 3'")]


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"exprcalc version {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version information",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log tokens, trees and results"),
    ] = False,
) -> None:
    """exprcalc CLI main callback for global options."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _build_config(strict: bool | None, max_depth: int | None) -> EvaluatorConfig:
    config = load_config()
    update: dict[str, object] = {}
    if strict is not None:
        update["strict"] = strict
    if max_depth is not None:
        update["max_depth"] = max_depth
    return config.model_copy(update=update) if update else config


def _fail(error: ExprCalcError) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(str(error))}", soft_wrap=True)
    return typer.Exit(code=1)


@app.command(name="eval")
def eval_command(
    expression: ExpressionArgument,
    strict: StrictOption = None,
    max_depth: MaxDepthOption = None,
) -> None:
    """Evaluate an expression and print the result."""
    config = _build_config(strict, max_depth)
    try:
        result = evaluate(expression, config)
    except ExprCalcError as e:
        raise _fail(e) from e
    typer.echo(str(result))


@app.command(name="tokens")
def tokens_command(expression: ExpressionArgument) -> None:
    """Show the tokens an expression lexes into."""
    table = Table(title="Tokens")
    table.add_column("Kind", style="cyan")
    table.add_column("Text")
    table.add_column("Position", justify="right")
    for tok in tokenize(expression):
        table.add_row(tok.kind.name, escape(tok.value), str(tok.pos))
    console.print(table)


@app.command(name="tree")
def tree_command(
    expression: ExpressionArgument,
    strict: StrictOption = None,
    max_depth: MaxDepthOption = None,
) -> None:
    """Show the parsed expression tree."""
    config = _build_config(strict, max_depth)
    try:
        expr = parse(expression, config)
        root = Tree(escape(str(expr)))
        _add_node(root, expr)
    except ExprCalcError as e:
        raise _fail(e) from e
    console.print(root)


# Each Rich tree level indents by four cells; past this the output is unreadable
MAX_TREE_DISPLAY_DEPTH = 200


def _add_node(root: Tree, expr: Expr) -> None:
    # Explicit stack: operator chains produce trees deeper than the interpreter stack
    pending: list[tuple[Tree, Expr, int]] = [(root, expr, 1)]
    while pending:
        branch, node, depth = pending.pop()
        if depth > MAX_TREE_DISPLAY_DEPTH:
            raise DepthLimitError("display")
        if isinstance(node, NumberLiteral):
            branch.add(f"[green]{node.value}[/green]")
        elif isinstance(node, BinaryExpr):
            child = branch.add(f"[bold]{escape(node.op.value)}[/bold]")
            # Right pushed first so the left operand is added first
            pending.append((child, node.right, depth + 1))
            pending.append((child, node.left, depth + 1))
        elif isinstance(node, CallExpr):
            child = branch.add(f"[magenta]{escape(node.name)}()[/magenta]")
            pending.append((child, node.argument, depth + 1))


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
