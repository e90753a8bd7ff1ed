"""Structure classifier: ordered heuristics over the active frame's roots.

Each heuristic is tried against every candidate root before the next,
weaker heuristic is considered, so an Array candidate anywhere beats a Tree
candidate anywhere, and so on down to Generic.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from . import constants
from .heap import (
    active_frame_references,
    find_alias,
    first_truthy_alias_value,
    index_objects,
    is_null_marker,
    is_reference,
    is_sequence,
)
from .snapshot_types import Frame, HeapObject, ObjectKind

logger = logging.getLogger(__name__)


class Shape(str, Enum):
    ARRAY = "ARRAY"
    TREE = "TREE"
    LINKED_LIST = "LINKED_LIST"
    GRAPH = "GRAPH"
    GENERIC = "GENERIC"


@dataclass(frozen=True)
class Classification:
    shape: Shape
    root_id: str | None = None

    @classmethod
    def generic(cls) -> Classification:
        return cls(shape=Shape.GENERIC)


def find_candidates(objects: dict[str, HeapObject], frames: list[Frame]) -> list[str]:
    """Distinct innermost-frame references that resolve, in discovery order."""
    return [ref for ref in active_frame_references(frames) if ref in objects]


def is_array(root_id: str, objects: dict[str, HeapObject]) -> bool:
    obj = objects.get(root_id)
    if obj is None:
        return False
    return obj.has_sequence_type or is_sequence(obj.value)


def is_tree(root_id: str, objects: dict[str, HeapObject]) -> bool:
    """Binary-pointer root and an acyclic left/right walk.

    ``visited`` is shared across the whole walk, so two paths converging on
    one node fail the check just like a true cycle does.
    """
    root = objects.get(root_id)
    if root is None or not isinstance(root.value, Mapping):
        return False
    has_left = find_alias(root.value, constants.LEFT_ALIASES) is not None
    has_right = find_alias(root.value, constants.RIGHT_ALIASES) is not None
    if not has_left and not has_right:
        return False

    stack = [root_id]
    visited: set[str] = set()
    node_count = 0

    while stack:
        current_id = stack.pop()
        if current_id in visited:
            return False
        visited.add(current_id)
        node_count += 1

        node = objects.get(current_id)
        if node is None or not isinstance(node.value, Mapping):
            continue

        left = first_truthy_alias_value(node.value, constants.LEFT_ALIASES)
        right = first_truthy_alias_value(node.value, constants.RIGHT_ALIASES)
        if is_reference(left):
            stack.append(left)
        if is_reference(right):
            stack.append(right)

    return node_count >= 1


def is_linked_list(root_id: str, objects: dict[str, HeapObject]) -> bool:
    """Forward-pointer chain without tree pointers; circular lists qualify."""
    current = objects.get(root_id)
    visited: set[str] = set()

    while current is not None:
        if current.id in visited:
            return True
        visited.add(current.id)

        if not isinstance(current.value, Mapping):
            return False
        next_field = find_alias(current.value, constants.NEXT_ALIASES)
        if next_field is None:
            return False
        if find_alias(current.value, constants.TREE_ALIASES) is not None:
            return False

        next_id = current.value[next_field]
        if is_null_marker(next_id):
            return True
        if not is_reference(next_id):
            return False
        current = objects.get(next_id)

    return len(visited) > 0


def _all_references(items: object) -> bool:
    return is_sequence(items) and all(is_reference(item) for item in items)


def _is_adjacency_value(value: object, objects: dict[str, HeapObject]) -> bool:
    """An inline sequence of references, or a reference to one."""
    if is_sequence(value):
        return _all_references(value)
    target = objects.get(value) if is_reference(value) else None
    return target is not None and _all_references(target.value)


def is_graph(root_id: str, objects: dict[str, HeapObject]) -> bool:
    obj = objects.get(root_id)
    if obj is None or not isinstance(obj.value, Mapping) or not obj.value:
        return False

    # Adjacency list: a dict whose every value lists neighbour references
    if obj.kind == ObjectKind.DICT and all(
        _is_adjacency_value(v, objects) for v in obj.value.values()
    ):
        return True

    return any(f in obj.value for f in constants.GRAPH_FIELDS)


_HEURISTICS: tuple[tuple[Shape, Callable[[str, dict[str, HeapObject]], bool]], ...] = (
    (Shape.ARRAY, is_array),
    (Shape.TREE, is_tree),
    (Shape.LINKED_LIST, is_linked_list),
    (Shape.GRAPH, is_graph),
)


def classify(objects: list[HeapObject], frames: list[Frame]) -> Classification:
    """Pick the single best shape and its root for one snapshot.

    Args:
        objects: Tracer-supplied heap objects (no variable mirrors).
        frames: Call stack, outermost first.

    Returns:
        A Classification; ``Shape.GENERIC`` with no root when nothing matches
        or when the active frame holds no references.
    """
    by_id = index_objects(objects)
    candidates = find_candidates(by_id, frames)
    if not candidates:
        return Classification.generic()

    for shape, predicate in _HEURISTICS:
        root_id = next((c for c in candidates if predicate(c, by_id)), None)
        if root_id is not None:
            logger.debug("Classified %s rooted at %s", shape.value, root_id)
            return Classification(shape=shape, root_id=root_id)

    return Classification.generic()
