from ast_annotate.models import Node

FUNCTION_TYPES = frozenset({"Function", "BoundFunction"})


class Scope:
    """Names bound in one lexical environment, chained to the enclosing one."""

    def __init__(self, parent: "Scope | None" = None) -> None:
        self.parent = parent
        self.bindings: dict[str, Node] = {}

    def __repr__(self) -> str:
        depth = 0
        scope = self.parent
        while scope is not None:
            depth += 1
            scope = scope.parent
        return f"Scope(depth={depth}, bindings={sorted(self.bindings)})"

    def declares(self, name: str, node: Node) -> None:
        self.bindings[name] = node

    def assigns(self, name: str, node: Node) -> None:
        """Bind ``name`` here unless an enclosing scope already binds it."""
        if not self.has_binding(name):
            self.declares(name, node)

    def get_binding(self, name: str) -> Node | None:
        scope: Scope | None = self
        while scope is not None:
            if name in scope.bindings:
                return scope.bindings[name]
            scope = scope.parent
        return None

    def has_binding(self, name: str) -> bool:
        return self.get_binding(name) is not None

    def has_own_binding(self, name: str) -> bool:
        return name in self.bindings

    def claim_free_binding(self, node: Node, name: str = "ref") -> str:
        """Declare and return the first of ``name``, ``name1``, ... not bound in the chain."""
        binding = name
        counter = 0
        while self.has_binding(binding):
            counter += 1
            binding = f"{name}{counter}"
        self.declares(binding, node)
        return binding

    def process_node(self, node: Node) -> None:
        """Record any binding ``node`` introduces."""
        node_type = node.type
        if node_type == "AssignOp":
            for identifier in left_hand_identifiers(node.child("assignee")):
                self.assigns(identifier_name(identifier), identifier)
        elif node_type in ("CompoundAssignOp", "ExistsAssignOp"):
            assignee = node.child("assignee")
            if assignee is not None and assignee.type == "Identifier":
                self.assigns(identifier_name(assignee), assignee)
        elif node_type in FUNCTION_TYPES:
            for parameter in node.field("parameters") or []:
                for identifier in left_hand_identifiers(parameter):
                    self.declares(identifier_name(identifier), identifier)
        elif node_type in ("ForIn", "ForOf"):
            for field in ("keyAssignee", "valAssignee"):
                for identifier in left_hand_identifiers(node.child(field)):
                    self.assigns(identifier_name(identifier), identifier)
        elif node_type == "Class":
            name_assignee = node.child("nameAssignee")
            if name_assignee is not None and name_assignee.type == "Identifier":
                self.assigns(identifier_name(name_assignee), name_assignee)
        elif node_type == "Try":
            for identifier in left_hand_identifiers(node.child("catchAssignee")):
                self.assigns(identifier_name(identifier), identifier)


def identifier_name(node: Node) -> str:
    return str(node.field("data"))


def left_hand_identifiers(node: Node | None) -> list[Node]:
    """Identifiers bound by an assignment target or parameter pattern."""
    if node is None:
        return []
    if node.type == "Identifier":
        return [node]
    if node.type == "ArrayInitialiser":
        return [identifier for member in node.field("members") or [] for identifier in left_hand_identifiers(member)]
    if node.type == "ObjectInitialiser":
        return [
            identifier
            for member in node.field("members") or []
            for identifier in left_hand_identifiers(member.child("expression"))
        ]
    if node.type in ("Rest", "Spread"):
        return left_hand_identifiers(node.child("expression"))
    if node.type == "DefaultParam":
        return left_hand_identifiers(node.child("param"))
    return []
