"""Tracer wire schema: pydantic models for the JSON the tracer emits."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .snapshot_types import Frame
from .trace_types import Step, Trace


class FrameSchema(BaseModel):
    name: str = ""
    variables: dict[str, Any] = {}

    def to_frame(self) -> Frame:
        return Frame(name=self.name, variables=dict(self.variables))


class StepSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    frames: list[FrameSchema] = []
    # List of {id, type, value} or mapping id -> {type, value}; normalized later
    objects: list[Any] | dict[str, Any] = []
    output: str | None = ""
    current_line: int = Field(default=0, alias="currentLine")
    executed_lines: list[int] = Field(default=[], alias="executedLines")

    def to_step(self) -> Step:
        return Step(
            frames=[f.to_frame() for f in self.frames],
            objects=self.objects,
            output=self.output or "",
            current_line=self.current_line,
            executed_lines=frozenset(self.executed_lines),
        )


class TraceSchema(BaseModel):
    steps: list[StepSchema] = []

    def to_trace(self) -> Trace:
        return Trace(steps=[s.to_step() for s in self.steps])
