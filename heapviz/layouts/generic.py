"""Generic heap view: per-object boxes stacked vertically.

Used when no structure is detected, and as the fallback for any snapshot a
specialised builder rejects as malformed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from .. import constants
from ..config import LayoutConfig
from ..heap import index_objects, is_reference, is_sequence
from ..layout_types import (
    BoxEntry,
    BoxKind,
    GenericLayout,
    HeapBox,
    RenderedValue,
    ValueKind,
)
from ..reachability import partition_reachable
from ..snapshot_types import Frame, HeapObject, ObjectKind
from ._base import LayoutBuilder

logger = logging.getLogger(__name__)


def render_value(value: Any, known_ids: set[str]) -> RenderedValue:
    if is_reference(value):
        if value in known_ids:
            return RenderedValue(ValueKind.REFERENCE, constants.REFERENCE_MARKER, target=value)
        return RenderedValue(ValueKind.MISSING, constants.MISSING_LABEL, target=value)
    return RenderedValue(ValueKind.PRIMITIVE, str(value))


def _box_kind(obj: HeapObject) -> BoxKind:
    if obj.is_mirror:
        return BoxKind.VARIABLE
    if obj.has_sequence_type and (obj.value is None or is_sequence(obj.value)):
        return BoxKind.SEQUENCE
    if obj.kind == ObjectKind.DICT and isinstance(obj.value, Mapping):
        return BoxKind.KEY_VALUE
    return BoxKind.ATTRIBUTES


def _entries(obj: HeapObject, kind: BoxKind, known_ids: set[str]) -> list[BoxEntry]:
    payload = obj.value
    if kind == BoxKind.VARIABLE:
        return [BoxEntry(key=obj.label or obj.id, value=render_value(payload, known_ids))]
    if kind == BoxKind.SEQUENCE:
        return [
            BoxEntry(key=str(i), value=render_value(item, known_ids))
            for i, item in enumerate(payload or [])
        ]
    if isinstance(payload, Mapping):
        return [
            BoxEntry(key=str(k), value=render_value(v, known_ids))
            for k, v in payload.items()
        ]
    if is_sequence(payload):
        return [
            BoxEntry(key=str(i), value=render_value(item, known_ids))
            for i, item in enumerate(payload)
        ]
    # Scalar or missing payload under a structured type
    logger.warning("Object %s (%s) has an unstructured payload", obj.id, obj.type)
    return [BoxEntry(key="value", value=render_value(payload, known_ids))]


def build_box(obj: HeapObject, known_ids: set[str]) -> HeapBox:
    kind = _box_kind(obj)
    return HeapBox(
        id=obj.id,
        type=obj.type,
        kind=kind,
        entries=_entries(obj, kind, known_ids),
        label=obj.label,
    )


def _box_height(box: HeapBox) -> float:
    rows = 1 if box.kind == BoxKind.SEQUENCE else max(len(box.entries), 1)
    return constants.GENERIC_HEADER_HEIGHT + rows * constants.GENERIC_ROW_HEIGHT


def stack_boxes(boxes: list[HeapBox]) -> list[HeapBox]:
    """Assign top-to-bottom ``y`` offsets; returns new boxes."""
    stacked: list[HeapBox] = []
    y = 0.0
    for box in boxes:
        stacked.append(replace(box, y=y))
        y += _box_height(box) + constants.GENERIC_BOX_SPACING_Y
    return stacked


def reveal_hidden(layout: GenericLayout) -> GenericLayout:
    """Copy of *layout* with the hidden boxes appended to the visible stack."""
    return GenericLayout(visible=stack_boxes(layout.visible + layout.hidden), hidden=[])


class GenericLayoutBuilder(LayoutBuilder):
    def build(
        self,
        objects: list[HeapObject],
        root_id: str | None,
        frames: list[Frame],
        config: LayoutConfig,
    ) -> GenericLayout:
        known_ids = set(index_objects(objects))
        visible, hidden = partition_reachable(frames, objects)
        return GenericLayout(
            visible=stack_boxes([build_box(o, known_ids) for o in visible]),
            hidden=stack_boxes([build_box(o, known_ids) for o in hidden]),
        )
