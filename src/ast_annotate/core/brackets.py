from ast_annotate.core.errors import BracketMatchError
from ast_annotate.models import Node

COUNTERPARTS = {
    "(": ")",
    "[": "]",
    "{": "}",
}


def find_counterpart_character(opening: str, text: str, start: int = 0) -> int:
    """Return the offset of the character closing the group opened at ``start``.

    Nesting of the same pair is tracked with a depth counter. Running off the
    end of ``text`` raises ``BracketMatchError``.
    """
    closing = COUNTERPARTS.get(opening)
    if closing is None:
        raise ValueError(f"Unsupported grouping character '{opening}'. Supported: {sorted(COUNTERPARTS)}")

    depth = 0
    for index in range(start, len(text)):
        char = text[index]
        if char == opening:
            depth += 1
        elif char == closing:
            depth -= 1
            if depth == 0:
                return index

    raise BracketMatchError(opening, start)


def is_surrounded_by(node: Node, opening: str, source: str) -> bool:
    """Whether ``node`` is wrapped exactly by ``opening`` and its counterpart."""
    if node.range is None:
        return False
    before = node.range[0] - 1
    if before < 0 or source[before] != opening:
        return False
    return find_counterpart_character(opening, source, before) == node.range[1]
