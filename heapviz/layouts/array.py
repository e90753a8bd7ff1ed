"""Array layout: one fixed-width cell per element, left to right."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .. import constants
from ..config import LayoutConfig
from ..heap import MalformedObjectError, index_objects, is_reference
from ..layout_types import ArrayCell, ArrayLayout
from ..snapshot_types import Frame, HeapObject
from ._base import LayoutBuilder


def _cell(index: int, value: Any, known_ids: set[str]) -> ArrayCell:
    x = constants.ARRAY_ORIGIN_X + index * constants.ARRAY_CELL_WIDTH
    if is_reference(value) and value not in known_ids:
        return ArrayCell(
            index=index,
            value=constants.MISSING_LABEL,
            x=x,
            y=constants.ARRAY_ORIGIN_Y,
            is_missing=True,
        )
    return ArrayCell(index=index, value=value, x=x, y=constants.ARRAY_ORIGIN_Y)


class ArrayLayoutBuilder(LayoutBuilder):
    def build(
        self,
        objects: list[HeapObject],
        root_id: str | None,
        frames: list[Frame],
        config: LayoutConfig,
    ) -> ArrayLayout:
        root = self._require_root(objects, root_id)
        values = root.value

        if values is None or (not isinstance(values, Mapping) and not values):
            placeholder = ArrayCell(
                index=0,
                value=constants.EMPTY_LABEL,
                x=constants.ARRAY_ORIGIN_X,
                y=constants.ARRAY_ORIGIN_Y,
                is_placeholder=True,
            )
            return ArrayLayout(root_id=root.id, cells=[placeholder])

        if not isinstance(values, (list, tuple, set, frozenset)):
            raise MalformedObjectError(root.id, f"{root.type} payload is not a sequence")

        known_ids = set(index_objects(objects))
        return ArrayLayout(
            root_id=root.id,
            cells=[_cell(i, v, known_ids) for i, v in enumerate(values)],
        )
