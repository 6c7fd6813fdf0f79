"""Tracker configuration."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

# Column far past any realistic line end; result markers are pinned there
LINE_END_COLUMN = 9999


def describe_errors(error: ValidationError) -> str:
    """Flatten a pydantic error into one ``location: message`` line per problem."""
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        parts.append(f"{location}: {detail['msg']}" if location else detail["msg"])
    return "; ".join(parts)


class TrackerConfig(BaseModel):
    """Rendering settings shared by every anchor."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    line_end_column: int = Field(default=LINE_END_COLUMN, gt=0)
    result_background: str = "editorWidget.background"
    result_foreground: str = "editor.foreground"
    result_margin: str = "0 0 0 10px"
    error_background: str = "inputValidation.errorBackground"
    error_border: str = "inputValidation.errorBorder"

    @classmethod
    def from_dict(cls, data: Any) -> "TrackerConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ValueError(describe_errors(e)) from None

    @classmethod
    def load(cls, path: str | Path) -> "TrackerConfig":
        """Load a config from a JSON file."""
        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"{path}: {e}") from None
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()
