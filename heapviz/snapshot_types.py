"""Snapshot data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from . import constants


class ObjectKind(str, Enum):
    ARRAY = "array"
    LIST = "list"
    TUPLE = "tuple"
    SET = "set"
    DICT = "dict"
    INSTANCE = "instance"
    CLASS = "class"
    MODULE = "module"
    VARIABLE_MIRROR = "variable-mirror"


@dataclass(frozen=True)
class HeapObject:
    """One heap object of a snapshot.

    ``type`` is kept as the raw tracer string: tracers emit user class names
    (``"Node"``, ``"TreeNode"``) for instances, which ``kind`` folds into
    ``ObjectKind.INSTANCE``.
    """

    id: str
    type: str = ObjectKind.INSTANCE.value
    value: Any = None
    label: str | None = None  # variable name, mirrors only

    @property
    def kind(self) -> ObjectKind:
        lowered = (self.type or "").lower()
        if lowered == "vector":
            return ObjectKind.ARRAY
        try:
            return ObjectKind(lowered)
        except ValueError:
            return ObjectKind.INSTANCE

    @property
    def is_mirror(self) -> bool:
        return self.type == ObjectKind.VARIABLE_MIRROR.value

    @property
    def has_sequence_type(self) -> bool:
        return (self.type or "").lower() in constants.SEQUENCE_TYPE_NAMES

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"id": self.id, "type": self.type, "value": self.value}
        if self.label is not None:
            d["label"] = self.label
        return d


@dataclass(frozen=True)
class Frame:
    name: str
    variables: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"name": self.name, "variables": dict(self.variables)}
