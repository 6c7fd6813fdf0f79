"""JSON replay scripts driving a tracker against the in-memory editor.

A script looks like::

    {
        "documents": {"main.jl": "x = 1\\ny = x + 1\\n"},
        "visible": ["main.jl"],
        "steps": [
            {"op": "add_result", "path": "main.jl", "range": [1, 0, 1, 9], "text": "2"},
            {"op": "edit", "path": "main.jl", "edits": [{"range": [0, 0, 0, 0], "text": "\\n"}]},
            {"op": "stack_trace", "error": "boom", "frames": [{"path": "main.jl", "line": 1}]},
            {"op": "clear", "path": "main.jl"}
        ]
    }

``visible`` defaults to every document. Each step is selected by its ``op``.
"""

import json
from pathlib import Path
from typing import Any, Union, Literal, Annotated
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from anchorage import Tracker
from anchorage.config import describe_errors
from anchorage.text.positions import Range
from anchorage.host.bridge import bind
from anchorage.host.memory import MemoryEditor, MemoryDocument
from anchorage.host.protocols import TextEdit
from anchorage.annotations.content import Content
from anchorage.annotations.diagnostics import StackFrame


class ScriptError(ValueError):
    """Raised for malformed replay scripts."""


# [start_line, start_char, end_line, end_char]
RangeSpec = tuple[int, int, int, int]


def parse_range(value: RangeSpec) -> Range:
    return Range.of(*value)


class ScriptModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class EditSpec(ScriptModel):
    range: RangeSpec
    text: str = ""


class FrameSpec(ScriptModel):
    path: str
    line: int


class AddResultStep(ScriptModel):
    """Annotate a range with a text or icon result."""

    op: Literal["add_result"]
    path: str
    range: RangeSpec
    text: str = ""
    icon: str | None = None
    hover: str = ""

    def content(self) -> Content:
        if self.icon is not None:
            return Content.icon(self.icon, self.hover)
        return Content.text(self.text, self.hover)


class EditStep(ScriptModel):
    """Apply one batch of edits to a document."""

    op: Literal["edit"]
    path: str
    edits: list[EditSpec]


class StackTraceStep(ScriptModel):
    """Replace the error highlights with a new stack trace."""

    op: Literal["stack_trace"]
    error: str
    frames: list[FrameSpec]


class ClearStep(ScriptModel):
    """Remove results from one document, or from all of them without a path."""

    op: Literal["clear"]
    path: str | None = None


class ClearAtStep(ScriptModel):
    """Remove results under the given selections."""

    op: Literal["clear_at"]
    path: str
    selections: list[RangeSpec]


class ShowStep(ScriptModel):
    op: Literal["show"]
    path: str


class HideStep(ScriptModel):
    op: Literal["hide"]
    path: str


Step = Annotated[
    Union[
        AddResultStep,
        EditStep,
        StackTraceStep,
        ClearStep,
        ClearAtStep,
        ShowStep,
        HideStep,
    ],
    Field(discriminator="op"),
]


def describe_step(step: Step) -> str:
    target = getattr(step, "path", None)
    return f"{step.op} {target}" if target else step.op


class ReplayScript(ScriptModel):
    """Documents, initially visible paths and the steps to replay."""

    documents: dict[str, str] = Field(default_factory=dict)
    visible: list[str] | None = None
    steps: list[Step] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_visible(self) -> "ReplayScript":
        if self.visible is None:
            self.visible = list(self.documents)
        unknown = [path for path in self.visible if path not in self.documents]
        if unknown:
            raise ValueError(f"Visible paths without documents: {', '.join(unknown)}")
        return self

    @classmethod
    def from_dict(cls, data: Any) -> "ReplayScript":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ScriptError(describe_errors(e)) from None

    @classmethod
    def load(cls, path: str | Path) -> "ReplayScript":
        """Load a script from a JSON file."""
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ScriptError(f"{path}: {e}") from None
        return cls.from_dict(data)

    def setup(self, editor: MemoryEditor) -> None:
        """Open the script's documents and views in ``editor``."""
        for path, text in self.documents.items():
            editor.open_document(path, text)
        for path in self.visible:
            editor.show(editor.document(path), view_id=path)

    def run(
        self,
        tracker: Tracker,
        editor: MemoryEditor,
        on_step: Callable[[int, Step], None] | None = None,
    ) -> None:
        """Execute every step in order with ``tracker`` listening to ``editor``."""
        subscription = bind(tracker, editor)
        try:
            for index, step in enumerate(self.steps):
                self._run_step(tracker, editor, step)
                if on_step is not None:
                    on_step(index, step)
        finally:
            subscription.dispose()

    def _run_step(self, tracker: Tracker, editor: MemoryEditor, step: Step) -> None:
        path = getattr(step, "path", None)
        document = _document(editor, path) if path is not None else None

        if isinstance(step, AddResultStep):
            tracker.add_result(document, parse_range(step.range), step.content())
        elif isinstance(step, EditStep):
            edits = [TextEdit(parse_range(e.range), e.text) for e in step.edits]
            editor.edit(document, edits)
        elif isinstance(step, StackTraceStep):
            frames = [StackFrame(f.path, f.line) for f in step.frames]
            tracker.set_stack_trace(step.error, frames)
        elif isinstance(step, ClearStep):
            tracker.remove_all(document)
        elif isinstance(step, ClearAtStep):
            selections = [parse_range(s) for s in step.selections]
            tracker.remove_at_selections(document, selections)
        elif isinstance(step, ShowStep):
            editor.show(document, view_id=step.path)
        elif isinstance(step, HideStep):
            editor.hide(step.path)


def _document(editor: MemoryEditor, path: str) -> MemoryDocument:
    try:
        return editor.document(path)
    except KeyError as e:
        raise ScriptError(e.args[0]) from None
