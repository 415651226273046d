import os

from pydantic import BaseModel, Field

from ast_annotate.core.ranges import DEFAULT_SEARCH_WINDOW

SEARCH_WINDOW_ENV = "AST_ANNOTATE_SEARCH_WINDOW"


class AnnotatorConfig(BaseModel):
    search_window: int = Field(default=DEFAULT_SEARCH_WINDOW, ge=1)

    @classmethod
    def from_env(cls) -> "AnnotatorConfig":
        window = os.getenv(SEARCH_WINDOW_ENV)
        if window is None or not window.strip():
            return cls()
        return cls(search_window=int(window))
