"""Reachability analysis: which heap objects the active frame can still see."""

from __future__ import annotations

import logging
from collections import deque

from .heap import active_frame_references, index_objects, iter_references
from .snapshot_types import Frame, HeapObject

logger = logging.getLogger(__name__)


def reachable(frames: list[Frame], objects: list[HeapObject]) -> set[str]:
    """Breadth-first closure of heap ids reachable from the innermost frame.

    Roots are the reference-valued variables of the last frame. Dangling
    references are dropped without being expanded, and the shared
    ``visited`` set guarantees termination on cyclic heaps.

    Returns:
        The set of reachable object ids; always a subset of the ids in
        *objects*.
    """
    if not frames or not objects:
        return set()

    by_id = index_objects(objects)
    worklist: deque[str] = deque(active_frame_references(frames))
    visited: set[str] = set()
    found: set[str] = set()

    while worklist:
        obj_id = worklist.popleft()
        if obj_id in visited:
            continue
        visited.add(obj_id)

        obj = by_id.get(obj_id)
        if obj is None:
            logger.debug("Dangling reference %s not expanded", obj_id)
            continue
        found.add(obj_id)
        worklist.extend(ref for ref in iter_references(obj.value) if ref not in visited)

    logger.debug("Reachable: %d of %d objects", len(found), len(objects))
    return found


def partition_reachable(
    frames: list[Frame], objects: list[HeapObject]
) -> tuple[list[HeapObject], list[HeapObject]]:
    """Split *objects* into (visible, hidden), preserving order.

    Variable mirrors are always visible. Nothing is dropped: hidden objects
    stay inspectable, they are only deprioritized for display.
    """
    reachable_ids = reachable(frames, objects)
    visible = [o for o in objects if o.is_mirror or o.id in reachable_ids]
    hidden = [o for o in objects if not (o.is_mirror or o.id in reachable_ids)]
    return visible, hidden
