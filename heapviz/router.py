"""Visualization router: one Step in, one render model out.

Stages run in a fixed order for every call: normalize the heap, mirror the
active frame's variables, classify, then dispatch to the matching layout
builder. Nothing is retained between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from . import constants
from .classifier import Classification, Shape, classify
from .config import DEFAULT_CONFIG, LayoutConfig
from .heap import MalformedObjectError
from .layouts import get_layout_builder
from .snapshot_types import Frame, HeapObject, ObjectKind
from .trace_types import Step

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Visualization:
    """Render model for one Step.

    ``fallback_reason`` is set when a specialised builder rejected the
    snapshot and the generic heap view was rendered instead.
    """

    shape: Shape
    root_id: str | None
    layout: Any
    mirrors: list[HeapObject] = field(default_factory=list)
    fallback_reason: str = ""

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "shape": self.shape.value,
            "rootId": self.root_id,
            "layout": self.layout.to_dict(),
            "mirrors": [m.to_dict() for m in self.mirrors],
        }
        if self.fallback_reason:
            d["fallbackReason"] = self.fallback_reason
        return d


def _object_from_dict(obj_id: Any, data: Mapping) -> HeapObject:
    return HeapObject(
        id=str(obj_id),
        type=str(data.get("type") or ObjectKind.INSTANCE.value),
        value=data.get("value"),
        label=data.get("label"),
    )


def normalize_objects(raw: Any) -> list[HeapObject]:
    """Accept a list of objects/dicts or a mapping id -> payload.

    Entries that cannot carry an id are skipped with a warning.
    """
    if raw is None:
        return []
    if isinstance(raw, Mapping):
        return [
            _object_from_dict(obj_id, data)
            if isinstance(data, Mapping)
            else HeapObject(id=str(obj_id), value=data)
            for obj_id, data in raw.items()
        ]

    objects: list[HeapObject] = []
    for item in raw:
        if isinstance(item, HeapObject):
            objects.append(item)
        elif isinstance(item, Mapping) and item.get("id") is not None:
            objects.append(_object_from_dict(item["id"], item))
        else:
            logger.warning("Skipping heap entry without an id: %r", item)
    return objects


def mirror_variables(frames: list[Frame]) -> list[HeapObject]:
    """One variable-mirror object per innermost-frame program variable."""
    if not frames:
        return []
    return [
        HeapObject(
            id=f"{constants.MIRROR_ID_PREFIX}{name}",
            type=ObjectKind.VARIABLE_MIRROR.value,
            value=value,
            label=name,
        )
        for name, value in frames[-1].variables.items()
        if name not in constants.RESERVED_TRACER_NAMES
    ]


def render(
    classification: Classification,
    objects: list[HeapObject],
    frames: list[Frame],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> Visualization:
    """Dispatch to the layout builder for *classification*, with fallback."""
    mirrors = mirror_variables(frames)
    with_mirrors = mirrors + objects
    builder = get_layout_builder(classification.shape)
    try:
        layout = builder.build(with_mirrors, classification.root_id, frames, config)
    except MalformedObjectError as e:
        logger.warning("%s layout failed, falling back to generic view: %s", classification.shape.value, e)
        generic = get_layout_builder(Shape.GENERIC)
        return Visualization(
            shape=Shape.GENERIC,
            root_id=None,
            layout=generic.build(with_mirrors, None, frames, config),
            mirrors=mirrors,
            fallback_reason=str(e),
        )
    return Visualization(
        shape=classification.shape,
        root_id=classification.root_id,
        layout=layout,
        mirrors=mirrors,
    )


def visualize(step: Step, config: LayoutConfig = DEFAULT_CONFIG) -> Visualization:
    """Classify and lay out a single Step. Never raises for bad snapshots."""
    frames = list(step.frames or [])
    objects = normalize_objects(step.objects)
    classification = classify(objects, frames)
    logger.debug(
        "Step line %d: %d objects, shape=%s root=%s",
        step.current_line,
        len(objects),
        classification.shape.value,
        classification.root_id,
    )
    return render(classification, objects, frames, config)
