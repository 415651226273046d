from collections.abc import Callable, Iterator

from ast_annotate.models import Node

_BINARY = ("left", "right")
_UNARY = ("expression",)

# Ordered child fields of the CoffeeScriptRedux node kinds. Kinds missing from
# this table are walked in the order their fields arrived from the parser.
CHILD_FIELDS: dict[str, tuple[str, ...]] = {
    "Program": ("body",),
    "Block": ("statements",),
    "Conditional": ("condition", "consequent", "alternate"),
    "While": ("condition", "body"),
    "ForIn": ("valAssignee", "keyAssignee", "target", "step", "filter", "body"),
    "ForOf": ("keyAssignee", "valAssignee", "target", "filter", "body"),
    "Switch": ("expression", "cases", "alternate"),
    "SwitchCase": ("conditions", "consequent"),
    "Try": ("body", "catchAssignee", "catchBody", "finallyBody"),
    "Function": ("parameters", "body"),
    "BoundFunction": ("parameters", "body"),
    "DefaultParam": ("param", "default"),
    "Class": ("nameAssignee", "superclass", "ctor", "body", "boundMembers"),
    "Constructor": _UNARY,
    "ClassProtoAssignOp": ("assignee", "expression"),
    "AssignOp": ("assignee", "expression"),
    "CompoundAssignOp": ("assignee", "expression"),
    "ExistsAssignOp": ("assignee", "expression"),
    "FunctionApplication": ("function", "arguments"),
    "SoakedFunctionApplication": ("function", "arguments"),
    "NewOp": ("ctor", "arguments"),
    "Super": ("arguments",),
    "MemberAccessOp": _UNARY,
    "SoakedMemberAccessOp": _UNARY,
    "ProtoMemberAccessOp": _UNARY,
    "SoakedProtoMemberAccessOp": _UNARY,
    "DynamicMemberAccessOp": ("expression", "indexingExpr"),
    "SoakedDynamicMemberAccessOp": ("expression", "indexingExpr"),
    "DynamicProtoMemberAccessOp": ("expression", "indexingExpr"),
    "Slice": ("expression", "left", "right"),
    "ArrayInitialiser": ("members",),
    "ObjectInitialiser": ("members",),
    "ObjectInitialiserMember": ("key", "expression"),
    "Range": _BINARY,
    "ChainedComparisonOp": _UNARY,
    "Return": _UNARY,
    "Throw": _UNARY,
    "Rest": _UNARY,
    "Spread": _UNARY,
    "HeregExp": _UNARY,
    "LogicalNotOp": _UNARY,
    "BitNotOp": _UNARY,
    "TypeofOp": _UNARY,
    "UnaryExistsOp": _UNARY,
    "UnaryNegateOp": _UNARY,
    "UnaryPlusOp": _UNARY,
    "DoOp": _UNARY,
    "PreIncrementOp": _UNARY,
    "PreDecrementOp": _UNARY,
    "PostIncrementOp": _UNARY,
    "PostDecrementOp": _UNARY,
    "DeleteOp": _UNARY,
    "ConcatOp": _BINARY,
    "SeqOp": _BINARY,
    "PlusOp": _BINARY,
    "SubtractOp": _BINARY,
    "MultiplyOp": _BINARY,
    "DivideOp": _BINARY,
    "RemOp": _BINARY,
    "ExpOp": _BINARY,
    "LogicalAndOp": _BINARY,
    "LogicalOrOp": _BINARY,
    "ExistsOp": _BINARY,
    "EQOp": _BINARY,
    "NEQOp": _BINARY,
    "LTOp": _BINARY,
    "LTEOp": _BINARY,
    "GTOp": _BINARY,
    "GTEOp": _BINARY,
    "InOp": _BINARY,
    "OfOp": _BINARY,
    "InstanceofOp": _BINARY,
    "BitAndOp": _BINARY,
    "BitOrOp": _BINARY,
    "BitXorOp": _BINARY,
    "LeftShiftOp": _BINARY,
    "SignedRightShiftOp": _BINARY,
    "UnsignedRightShiftOp": _BINARY,
    "Identifier": (),
    "String": (),
    "Int": (),
    "Float": (),
    "Bool": (),
    "Null": (),
    "Undefined": (),
    "This": (),
    "JavaScript": (),
    "RegExp": (),
}


def child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct children of ``node`` in left-to-right structural order."""
    names = CHILD_FIELDS.get(node.type)
    if names is None:
        names = tuple(node.field_names())
    for name in names:
        yield from _nodes_in(node.field(name))


def _nodes_in(value: object) -> Iterator[Node]:
    if isinstance(value, Node):
        yield value
    elif isinstance(value, list):
        for item in value:
            yield from _nodes_in(item)


def traverse(node: Node, visit: Callable[[Node], bool | None], parent: Node | None = None) -> None:
    """Walk ``node`` pre-order, setting ``parent`` on each node before visiting it.

    Returning ``False`` from ``visit`` skips the children of that node.
    """
    node.parent = parent
    if visit(node) is False:
        return
    for child in child_nodes(node):
        traverse(child, visit, node)


def count_nodes(node: Node) -> int:
    return 1 + sum(count_nodes(child) for child in child_nodes(node))
