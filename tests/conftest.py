"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

from ast_annotate.models import Node

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def function_source() -> str:
    return "f = (a) -> b = a"


@pytest.fixture
def function_ast(function_source: str) -> Node:
    """Raw CoffeeScriptRedux-shaped AST for ``function_source``."""
    return Node.model_validate(
        {
            "type": "Program",
            "raw": function_source,
            "line": 1,
            "column": 1,
            "body": {
                "type": "Block",
                "raw": function_source,
                "line": 1,
                "column": 1,
                "statements": [
                    {
                        "type": "AssignOp",
                        "raw": function_source,
                        "line": 1,
                        "column": 1,
                        "assignee": {"type": "Identifier", "data": "f", "raw": "f", "line": 1, "column": 1},
                        "expression": {
                            "type": "Function",
                            "raw": "(a) -> b = a",
                            "line": 1,
                            "column": 5,
                            "parameters": [
                                {"type": "Identifier", "data": "a", "raw": "a", "line": 1, "column": 6},
                            ],
                            "body": {
                                "type": "Block",
                                "raw": "b = a",
                                "line": 1,
                                "column": 12,
                                "statements": [
                                    {
                                        "type": "AssignOp",
                                        "raw": "b = a",
                                        "line": 1,
                                        "column": 12,
                                        "assignee": {
                                            "type": "Identifier",
                                            "data": "b",
                                            "raw": "b",
                                            "line": 1,
                                            "column": 12,
                                        },
                                        "expression": {
                                            "type": "Identifier",
                                            "data": "a",
                                            "raw": "a",
                                            "line": 1,
                                            "column": 16,
                                        },
                                    }
                                ],
                            },
                        },
                    }
                ],
            },
        }
    )
