from typing import cast

from tree_sitter import Node as TSNode
from tree_sitter_language_pack import SupportedLanguage, get_parser

from ast_annotate.core.languages import normalize_language
from ast_annotate.models import Node


def extract_ast_from_source(source: str, language: str) -> Node:
    """Parse ``source`` with tree-sitter into a raw ``Node`` tree.

    Only named nodes are kept; their children go under ``children``. Columns
    are converted from tree-sitter's byte columns to character columns.
    """
    parser = get_parser(cast(SupportedLanguage, language))
    source_bytes = source.encode("utf-8")
    tree = parser.parse(source_bytes)

    def node_to_model(ts_node: TSNode) -> Node:
        row, byte_column = ts_node.start_point
        line_start = ts_node.start_byte - byte_column
        column = len(source_bytes[line_start : ts_node.start_byte].decode("utf-8"))
        return Node(
            type=ts_node.type,
            raw=source_bytes[ts_node.start_byte : ts_node.end_byte].decode("utf-8"),
            line=row + 1,
            column=column + 1,
            children=[node_to_model(child) for child in ts_node.named_children],
        )

    return node_to_model(tree.root_node)


class TreeSitterParser:
    def __init__(self, language: str) -> None:
        self.language = normalize_language(language)

    def parse(self, source: str) -> Node:
        return extract_ast_from_source(source, self.language)
