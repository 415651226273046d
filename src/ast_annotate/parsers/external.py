import logging
import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from ast_annotate.core.errors import ParserError
from ast_annotate.models import Node

logger = logging.getLogger(__name__)


def load_ast(text: str) -> Node:
    """Validate a JSON-encoded raw AST into a ``Node`` tree."""
    try:
        return Node.model_validate_json(text)
    except ValidationError as exc:
        raise ParserError(f"Parser output is not a valid AST: {exc}") from exc


def load_ast_file(path: str) -> Node:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"AST file not found: {path}") from None
    return load_ast(text)


class ExternalCommandParser:
    """Runs a parser executable that reads source on stdin and prints a JSON AST."""

    def __init__(self, command: str | Sequence[str]) -> None:
        self.command = shlex.split(command) if isinstance(command, str) else list(command)
        if not self.command:
            raise ValueError("Parser command must not be empty.")

    def parse(self, source: str) -> Node:
        logger.debug("Running parser command %s", self.command)
        try:
            result = subprocess.run(
                self.command,
                input=source,
                check=False,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            raise ParserError(f"Parser command not found: {self.command[0]}") from None
        if result.returncode != 0:
            raise ParserError(
                f"Parser command exited with status {result.returncode}: {result.stderr.strip()}"
            )
        return load_ast(result.stdout)
