from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Node(BaseModel):
    """A raw AST node as produced by the upstream parser.

    Type-specific children (``left``, ``right``, ``condition``, ``body``, ...)
    live in pydantic's extra attributes. ``parent`` and ``scope`` are filled in
    by the annotation pass and never serialized.
    """

    model_config = ConfigDict(extra="allow")

    type: str
    raw: str | None = None
    range: tuple[int, int] | None = None
    line: int | None = None
    column: int | None = None
    parent: "Node | None" = Field(default=None, exclude=True, repr=False)
    scope: Any = Field(default=None, exclude=True, repr=False)

    @model_validator(mode="before")
    @classmethod
    def _rename_superclass(cls, data: Any) -> Any:
        # CoffeeScriptRedux stores a class's superclass under "parent"
        if isinstance(data, dict) and isinstance(data.get("parent"), dict):
            data = dict(data)
            data["superclass"] = data.pop("parent")
        return data

    def model_post_init(self, __context: Any) -> None:
        extra = self.__pydantic_extra__
        if not extra:
            return
        for key, value in extra.items():
            extra[key] = _as_child(value)

    # parent links make the graph cyclic, so field-wise equality would recurse
    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def child(self, name: str) -> "Node | None":
        value = (self.__pydantic_extra__ or {}).get(name)
        return value if isinstance(value, Node) else None

    def field_names(self) -> list[str]:
        return list(self.__pydantic_extra__ or {})

    def field(self, name: str) -> Any:
        return (self.__pydantic_extra__ or {}).get(name)


Node.model_rebuild()  # necessary for recursive types


def _as_child(value: Any) -> Any:
    if isinstance(value, dict) and isinstance(value.get("type"), str):
        return Node.model_validate(value)
    if isinstance(value, list):
        return [_as_child(item) for item in value]
    return value
