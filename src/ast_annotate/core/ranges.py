"""Byte-exact range recovery for nodes whose parser positions are unreliable.

The upstream parser reports ``raw`` text and a 1-based ``line``/``column`` for
most nodes, but the position is sometimes a few characters late and some node
shapes arrive with no text at all. ``RangeReconciler`` rebuilds the missing
text from children, searches a small window around the reported position for
an exact match, and strips redundant parentheses the parser folded into a
node's text.
"""

import logging

from ast_annotate.core.brackets import find_counterpart_character
from ast_annotate.core.errors import UnrecoverableGapError
from ast_annotate.core.positions import LineAndColumnMap
from ast_annotate.models import Node

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_WINDOW = 3


class RangeReconciler:
    def __init__(
        self,
        source: str,
        line_map: LineAndColumnMap | None = None,
        search_window: int = DEFAULT_SEARCH_WINDOW,
    ) -> None:
        if search_window < 1:
            raise ValueError(f"search_window must be at least 1, got {search_window}")
        self.source = source
        self.line_map = line_map if line_map is not None else LineAndColumnMap(source)
        self.search_window = search_window
        self._resolved: set[Node] = set()

    def fix_range(self, node: Node) -> None:
        """Give ``node`` a ``range`` such that ``source[start:end] == raw``.

        Each node is processed once; later calls for the same node are no-ops.
        """
        if node in self._resolved:
            return
        self._resolved.add(node)
        self._fix(node)

    def _fix(self, node: Node) -> None:
        if node.range is None and node.type == "ConcatOp":
            logger.debug("Skipping implicit ConcatOp without range")
            return

        parent = node.parent
        if node.raw is None:
            if parent is not None and parent.type == "While" and parent.child("condition") is node:
                logger.debug("Skipping while condition without raw at line %s", node.line)
                return
            if (
                node.type == "LogicalNotOp"
                and parent is not None
                and parent.type == "Conditional"
                and parent.child("condition") is node
            ):
                expression = self._resolved_child(node, "expression")
                if expression.raw is None:
                    raise UnrecoverableGapError(
                        f"BUG! Could not fix range for {node.type} because its operand has no raw value",
                        node.type,
                        node.line,
                        node.column,
                    )
                node.raw = expression.raw
                node.range = expression.range
                node.line = expression.line
                node.column = expression.column
            elif node.child("left") is not None and node.child("right") is not None:
                self._fix_left_spine(node)
                left = self._resolved_child(node, "left")
                right = self._resolved_child(node, "right")
                if left.range is None or right.range is None:
                    raise UnrecoverableGapError(
                        f"BUG! Could not fix range for {node.type} because an operand has no range",
                        node.type,
                        node.line,
                        node.column,
                    )
                node.raw = self.source[left.range[0] : right.range[1]]
                node.range = (left.range[0], right.range[1])
                node.line = left.line
                node.column = left.column
            else:
                raise UnrecoverableGapError(
                    f"BUG! Could not fix range for {node.type} because it has no raw value",
                    node.type,
                    node.line,
                    node.column,
                )

        self._search_position(node)

        if node.range is None or self.source[node.range[0] : node.range[1]] != node.raw:
            if parent is not None and parent.child("step") is node:
                # step values are auto-generated when omitted
                logger.debug("Ignoring invalid step at line %s, column %s", node.line, node.column)
                return
            if self.shrink_past_parentheses(node, adjust_position=False):
                return
            raise UnrecoverableGapError(
                f"BUG! Could not fix range for {node.type} at line {node.line}, column {node.column}",
                node.type,
                node.line,
                node.column,
            )

        self.shrink_past_parentheses(node, adjust_position=True)

    def _search_position(self, node: Node) -> None:
        raw = node.raw
        if raw is None:
            return
        if node.range is not None and self.source[node.range[0] : node.range[1]] == raw:
            return
        if node.line is None or node.column is None:
            return
        fixed = self.line_map.get_offset(node.line - 1, node.column - 1)
        for slide in range(self.search_window):
            start = fixed - slide
            if start < 0:
                break
            if self.source[start : start + len(raw)] == raw:
                node.range = (start, start + len(raw))
                return

    def _fix_left_spine(self, node: Node) -> None:
        """Resolve the operators without raw text down ``node``'s ``left`` chain, deepest first.

        A chain like ``a + b + c + ...`` nests one operator per operand; the
        spine is collected into a list and fixed bottom up without recursing.
        """
        spine: list[Node] = []
        current = node
        while True:
            left = current.child("left")
            if left is None or left.raw is not None or left in self._resolved or left.child("right") is None:
                break
            if left.parent is None:
                left.parent = current
            spine.append(left)
            current = left
        for operator in reversed(spine):
            self.fix_range(operator)

    def _resolved_child(self, node: Node, name: str) -> Node:
        child = node.child(name)
        assert child is not None
        if child.parent is None:
            child.parent = node
        self.fix_range(child)
        return child

    def shrink_past_parentheses(self, node: Node, adjust_position: bool) -> bool:
        """Strip one pair of parentheses wrapping all of ``node.raw``.

        Some nodes come back with parentheses that belong to the surrounding
        code, e.g. the assignment in ``if (ref = a) then b`` has a raw value
        of ``(ref = a)``. Returns whether a pair was removed; the node is then
        fixed again from scratch.
        """
        raw = node.raw
        if not raw or raw[0] != "(":
            return False
        if find_counterpart_character("(", raw) != len(raw) - 1:
            return False

        node.raw = raw[1:-1]
        if adjust_position and node.range is not None:
            node.range = (node.range[0] + 1, node.range[1] - 1)
            if node.column is not None:
                node.column -= 1
        logger.debug("Shrunk %s past parentheses to %r", node.type, node.raw)
        self._fix(node)
        return True
