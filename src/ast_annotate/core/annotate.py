import logging

from ast_annotate.config import AnnotatorConfig
from ast_annotate.core.ports.parser import SourceParser
from ast_annotate.core.positions import LineAndColumnMap
from ast_annotate.core.ranges import RangeReconciler
from ast_annotate.core.scope import FUNCTION_TYPES, Scope
from ast_annotate.core.traverse import traverse
from ast_annotate.models import Node

logger = logging.getLogger(__name__)


def parse(source: str, parser: SourceParser, config: AnnotatorConfig | None = None) -> Node:
    """Parse ``source`` and return its AST annotated with ``parent``, ``scope`` and ranges."""
    return annotate(source, parser.parse(source), config)


def annotate(source: str, ast: Node, config: AnnotatorConfig | None = None) -> Node:
    """Attach scopes and byte-exact ranges to every node of ``ast`` in place.

    Either the whole tree is annotated or an ``AnnotationError`` propagates.
    """
    resolved_config = config if config is not None else AnnotatorConfig()
    reconciler = RangeReconciler(
        source,
        LineAndColumnMap(source),
        search_window=resolved_config.search_window,
    )
    visited = 0

    def _visit(node: Node) -> None:
        nonlocal visited
        attach_scope(node)
        reconciler.fix_range(node)
        visited += 1

    traverse(ast, _visit)
    logger.info("Annotated %d nodes", visited)
    return ast


def attach_scope(node: Node) -> None:
    parent_scope = node.parent.scope if node.parent is not None else None
    if node.type == "Program" or node.parent is None:
        node.scope = Scope()
    elif node.type in FUNCTION_TYPES:
        node.scope = Scope(parent_scope)
    else:
        node.scope = parent_scope

    node.scope.process_node(node)
