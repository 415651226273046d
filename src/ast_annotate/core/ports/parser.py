from typing import Protocol

from ast_annotate.models import Node


class SourceParser(Protocol):
    def parse(self, source: str) -> Node: ...
