import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ast_annotate.config import AnnotatorConfig
from ast_annotate.core.annotate import annotate as annotate_source
from ast_annotate.core.brackets import is_surrounded_by
from ast_annotate.core.errors import AnnotationError, BracketMatchError
from ast_annotate.core.languages import resolve_language, supported_languages
from ast_annotate.core.ports.parser import SourceParser
from ast_annotate.core.positions import LineAndColumnMap
from ast_annotate.core.traverse import child_nodes, count_nodes
from ast_annotate.models import Node
from ast_annotate.parsers.external import ExternalCommandParser, load_ast_file
from ast_annotate.parsers.treesitter import TreeSitterParser

console = Console()

_MAX_RAW_WIDTH = 40


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _preview(raw: str | None) -> str:
    if raw is None:
        return "-"
    text = raw.replace("\n", "\\n")
    if len(text) > _MAX_RAW_WIDTH:
        return text[: _MAX_RAW_WIDTH - 3] + "..."
    return text


def _render_table(ast: Node, source: str) -> None:
    table = Table(show_lines=False)
    line_map = LineAndColumnMap(source)
    for header in ("type", "range", "start", "reported", "parent", "parens", "raw"):
        table.add_column(header)

    def _add(node: Node, depth: int) -> None:
        span = "-"
        start = "-"
        if node.range is not None:
            span = f"{node.range[0]}-{node.range[1]}"
            line, column = line_map.get_location(node.range[0])
            start = f"{line + 1}:{column + 1}"
        position = f"{node.line}:{node.column}" if node.line is not None else "-"
        parent = node.parent.type if node.parent is not None else "-"
        try:
            parens = "yes" if is_surrounded_by(node, "(", source) else ""
        except BracketMatchError:
            parens = "unbalanced"
        table.add_row("  " * depth + node.type, span, start, position, parent, parens, escape(_preview(node.raw)))
        for child in child_nodes(node):
            _add(child, depth + 1)

    _add(ast, 0)
    console.print(table)
    console.print(f"({count_nodes(ast)} nodes)")


def _select_parser(path: Path, parser_command: str | None, language: str | None) -> SourceParser:
    if parser_command is not None:
        return ExternalCommandParser(parser_command)
    return TreeSitterParser(resolve_language(language, path))


def annotate(
    path: Annotated[Path, typer.Argument(help="Path to the source file.")],
    ast: Annotated[Path | None, typer.Option(help="JSON file with the raw AST for the source.")] = None,
    parser_command: Annotated[
        str | None, typer.Option(help="Command that reads source on stdin and prints a JSON AST.")
    ] = None,
    language: Annotated[str | None, typer.Option(help="tree-sitter language used when no AST is given.")] = None,
    search_window: Annotated[
        int | None, typer.Option(min=1, help="Offsets searched before a reported position.")
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the annotated tree as JSON.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log skipped and corrected nodes.")] = False,
) -> None:
    """Annotate a source file's AST with parents, scopes and exact ranges."""
    _configure_logging(verbose)
    config = AnnotatorConfig.from_env()
    if search_window is not None:
        config = config.model_copy(update={"search_window": search_window})

    try:
        source = path.read_text(encoding="utf-8")
        if ast is not None:
            raw_ast = load_ast_file(str(ast))
        else:
            raw_ast = _select_parser(path, parser_command, language).parse(source)
        annotated = annotate_source(source, raw_ast, config)
    except (AnnotationError, FileNotFoundError, ValueError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps(annotated.model_dump(mode="json", exclude_none=True), indent=2))
    else:
        _render_table(annotated, source)


def languages() -> None:
    """List languages available for tree-sitter parsing."""
    for name in supported_languages():
        console.print(name)
