"""
Rich terminal display utilities for CLI.

Provides formatted output using the Rich library for:
- AST trees
- Syntax-highlighted JSON
- Error messages
- Success/failure indicators
"""

import json
import logging
from typing import Any, List, Optional, Set

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.tree import Tree

from schema_ast.schema.recursion import recursion_headroom
from schema_ast.schema.types import (
    ArrayType,
    ASTNode,
    EnumType,
    InterfaceType,
    IntersectionType,
    LiteralType,
    TupleType,
    UnionType,
    count_nodes,
)


console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through Rich; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def print_header(title: str) -> None:
    """Print a formatted header."""
    console.print()
    console.print(f"[bold cyan]{title}[/bold cyan]")
    console.print("=" * len(title))
    console.print()


def print_success(message: str) -> None:
    """Print a success message with checkmark."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message with X mark."""
    console.print(f"[red]✗[/red] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def print_json(data: Any, title: Optional[str] = None) -> None:
    """
    Print JSON data with syntax highlighting.

    Args:
        data: JSON-serializable data or JSON string
        title: Optional title for the panel
    """
    if isinstance(data, str):
        json_str = data
    else:
        json_str = json.dumps(data, indent=2)

    syntax = Syntax(json_str, "json", theme="monokai", line_numbers=False)

    if title:
        panel = Panel(syntax, title=f"[bold]{title}[/bold]", border_style="cyan")
        console.print(panel)
    else:
        console.print(syntax)


def print_validation_errors(errors: List[str]) -> None:
    """
    Print validation errors in a formatted list.

    Args:
        errors: List of validation error messages
    """
    if not errors:
        return

    console.print()
    console.print("[bold red]Validation Errors:[/bold red]")
    for error in errors:
        console.print(f"  [red]•[/red] {error}")
    console.print()


def _node_label(ast: ASTNode, prefix: str = "") -> str:
    """Build the one-line label shown for a node in the tree."""
    label = f"{prefix}[cyan]{ast.kind}[/cyan]"
    if ast.standalone_name:
        label += f" [bold]{escape(ast.standalone_name)}[/bold]"
    if isinstance(ast, LiteralType):
        label += f" [yellow]{escape(json.dumps(ast.value))}[/yellow]"
    if ast.comment:
        first_line = ast.comment.splitlines()[0]
        label += f" [dim]# {escape(first_line)}[/dim]"
    return label


def build_ast_tree(ast: ASTNode) -> Tree:
    """
    Build a Rich tree for an AST.

    Named nodes are expanded once; later occurrences (shared subtrees and
    recursive references) are shown as a reference to the name.

    Args:
        ast: Root node

    Returns:
        Tree: Renderable tree
    """
    expanded: Set[int] = set()

    def add(parent: Tree, node: ASTNode, prefix: str = "") -> None:
        if id(node) in expanded:
            target = escape(node.standalone_name or "(cycle)")
            parent.add(f"{prefix}[magenta]→ {target}[/magenta]")
            return
        expanded.add(id(node))
        branch = parent.add(_node_label(node, prefix))
        add_children(branch, node)

    def add_children(branch: Tree, node: ASTNode) -> None:
        if isinstance(node, InterfaceType):
            for super_type in node.super_types:
                add(branch, super_type, "[green]extends[/green] ")
            for param in node.properties:
                marker = "" if param.is_required else "?"
                flags = []
                if param.is_pattern_property:
                    flags.append("pattern")
                if param.is_unreachable_definition:
                    flags.append("definition")
                suffix = f" [dim]({', '.join(flags)})[/dim]" if flags else ""
                add(branch, param.ast, f"{escape(param.key_name)}{marker}{suffix}: ")
        elif isinstance(node, EnumType):
            for member in node.members:
                add(branch, member.ast, f"{escape(str(member.label))} = ")
        elif isinstance(node, (UnionType, IntersectionType)):
            for member in node.members:
                add(branch, member)
        elif isinstance(node, TupleType):
            for i, element in enumerate(node.elements):
                add(branch, element, f"\\[{i}] ")
        elif isinstance(node, ArrayType) and node.element is not None:
            add(branch, node.element, "\\[] ")

    root = Tree(_node_label(ast))
    expanded.add(id(ast))
    with recursion_headroom(count_nodes(ast)):
        add_children(root, ast)
    return root


def print_ast(ast: ASTNode, title: str = "AST") -> None:
    """Print an AST as a tree inside a panel."""
    console.print(Panel(build_ast_tree(ast), title=f"[bold]{title}[/bold]", border_style="cyan"))


def print_separator() -> None:
    """Print a visual separator line."""
    console.print("[dim]" + "─" * 70 + "[/dim]")
