"""Unit tests for bracket matching and the grouping-surround check."""

import pytest

from ast_annotate.core.brackets import find_counterpart_character, is_surrounded_by
from ast_annotate.core.errors import BracketMatchError
from ast_annotate.models import Node


def _spanning(start: int, end: int) -> Node:
    return Node(type="Identifier", range=(start, end))


class TestFindCounterpartCharacter:
    def test_matches_through_nesting(self) -> None:
        assert find_counterpart_character("(", "(a(b)c)") == 6

    def test_matches_inner_group_from_start_offset(self) -> None:
        assert find_counterpart_character("(", "(a(b)c)", 2) == 4

    def test_matches_square_and_curly_brackets(self) -> None:
        assert find_counterpart_character("[", "[a[b]]") == 5
        assert find_counterpart_character("{", "x = {a: {b}}", 4) == 11

    def test_ignores_other_bracket_kinds(self) -> None:
        assert find_counterpart_character("(", "([)]") == 2

    def test_unbalanced_input_raises(self) -> None:
        with pytest.raises(BracketMatchError) as exc_info:
            find_counterpart_character("(", "(a(b)")
        assert exc_info.value.opening == "("
        assert exc_info.value.start == 0

    def test_unsupported_character_raises(self) -> None:
        with pytest.raises(ValueError, match="Unsupported grouping character"):
            find_counterpart_character("<", "<a>")


class TestIsSurroundedBy:
    def test_true_when_wrapped_exactly(self) -> None:
        assert is_surrounded_by(_spanning(3, 4), "(", "f((a))")

    def test_false_when_closing_is_elsewhere(self) -> None:
        source = "(a) + (b)"
        assert not is_surrounded_by(_spanning(1, 8), "(", source)

    def test_false_when_preceded_by_other_character(self) -> None:
        assert not is_surrounded_by(_spanning(4, 5), "(", "x = a")

    def test_false_at_start_of_source(self) -> None:
        assert not is_surrounded_by(_spanning(0, 1), "(", "a)")

    def test_false_without_range(self) -> None:
        assert not is_surrounded_by(Node(type="Identifier"), "(", "(a)")

    def test_square_brackets(self) -> None:
        assert is_surrounded_by(_spanning(1, 4), "[", "[a,b]")
