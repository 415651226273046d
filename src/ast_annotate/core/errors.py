class AnnotationError(Exception):
    """Base class for failures of the annotation pass."""


class UnrecoverableGapError(AnnotationError):
    """The upstream AST has a node no reconciliation rule can place in the source."""

    def __init__(self, message: str, node_type: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.node_type = node_type
        self.line = line
        self.column = column


class BracketMatchError(AnnotationError):
    """No closing counterpart was found for an opening grouping character."""

    def __init__(self, opening: str, start: int) -> None:
        super().__init__(f"BUG! No counterpart found for '{opening}' starting at offset {start}")
        self.opening = opening
        self.start = start


class ParserError(AnnotationError):
    """The external parser failed or produced output that is not an AST."""
