"""LayoutBuilder: shape-agnostic base for the per-shape layout builders."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..config import LayoutConfig
from ..heap import MalformedObjectError, index_objects
from ..snapshot_types import Frame, HeapObject


class LayoutBuilder(ABC):
    """Turns a classified snapshot into a render model.

    Builders read their inputs and never mutate them. A payload that does
    not fit the shape raises ``MalformedObjectError``; the router recovers
    from it by falling back to the generic heap view.
    """

    @abstractmethod
    def build(
        self,
        objects: list[HeapObject],
        root_id: str | None,
        frames: list[Frame],
        config: LayoutConfig,
    ) -> Any:
        ...

    @staticmethod
    def _require_root(objects: list[HeapObject], root_id: str | None) -> HeapObject:
        root = index_objects(objects).get(root_id) if root_id else None
        if root is None:
            raise MalformedObjectError(str(root_id), "root object not found")
        return root
