"""
Main CLI entry point using Typer.

This module defines the command-line interface for schema-ast using Typer.
It provides two commands: parse and validate.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from typing_extensions import Annotated

from .commands import parse_command, validate_command
from .display import print_error, setup_logging


app = typer.Typer(
    name="schema-ast",
    help="schema-ast - Turn JSON Schema documents into a typed AST",
    add_completion=False,
    rich_markup_mode="rich"
)


@app.command("parse")
def parse(
    schema: Annotated[
        Path,
        typer.Option("--schema", "-s", help="Path to JSON schema file", exists=True, file_okay=True, dir_okay=False)
    ],
    unreachable_definitions: Annotated[
        bool,
        typer.Option("--unreachable-definitions", "-u", help="Emit nested definitions nothing references")
    ] = False,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: tree or json")
    ] = "tree",
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Path to save the AST as JSON")
    ] = None,
    skip_validation: Annotated[
        bool,
        typer.Option("--skip-validation", help="Parse even if the schema fails meta-schema validation")
    ] = False,
) -> None:
    """
    Parse a JSON schema file and display its AST.

    Example:
        schema-ast parse \\
            --schema person.json \\
            --unreachable-definitions \\
            --format json \\
            --output person.ast.json
    """
    if output_format not in ("tree", "json"):
        print_error(f"Unknown format: {escape(output_format)} (expected tree or json)")
        raise typer.Exit(code=1)

    try:
        parse_command(
            schema_path=schema,
            unreachable_definitions=unreachable_definitions,
            output_format=output_format,
            output_path=output,
            skip_validation=skip_validation
        )
    except Exception as e:
        print_error(f"Command failed: {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command("validate")
def validate(
    schema: Annotated[
        Path,
        typer.Option("--schema", "-s", help="Path to JSON schema file", exists=True, file_okay=True, dir_okay=False)
    ],
) -> None:
    """
    Check that a JSON schema file is well-formed.

    Example:
        schema-ast validate --schema person.json
    """
    try:
        validate_command(schema_path=schema)
    except Exception as e:
        print_error(f"Command failed: {escape(str(e))}")
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", "-V", help="Show version and exit")
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """
    schema-ast - Turn JSON Schema documents into a typed AST.

    Resolves $ref pointers, then builds named interfaces, unions, enums and
    tuples ready for a declaration renderer.
    """
    if version:
        from schema_ast import __version__
        typer.echo(f"schema-ast version {__version__}")
        raise typer.Exit()

    setup_logging(verbose)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def cli() -> None:
    """CLI entry point for the console script."""
    app()


if __name__ == "__main__":
    cli()
