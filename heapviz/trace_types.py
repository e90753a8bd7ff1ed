"""Trace data types for step-by-step execution replay."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .snapshot_types import Frame


@dataclass(frozen=True)
class Step:
    """A single snapshot emitted by the tracer for one executed line.

    Captures the call stack (outermost frame first), the heap objects, and
    the program output so far. ``objects`` is either a list of heap objects
    or a mapping of id to payload; the router normalizes it before any
    analysis.
    """

    frames: list[Frame] = field(default_factory=list)
    objects: Any = field(default_factory=list)
    output: str = ""
    current_line: int = 0
    executed_lines: frozenset[int] = field(default_factory=frozenset)

    @property
    def active_frame(self) -> Frame | None:
        return self.frames[-1] if self.frames else None


@dataclass(frozen=True)
class Trace:
    """Complete trace of a program run, one Step per executed line."""

    steps: list[Step] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.steps)
