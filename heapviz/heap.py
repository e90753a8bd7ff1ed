"""Heap helpers: value predicates, object indexing, and field alias lookup."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from . import constants
from .snapshot_types import Frame, HeapObject


class MalformedObjectError(ValueError):
    """A heap object's payload does not match the shape its type declares."""

    def __init__(self, obj_id: str, reason: str):
        super().__init__(f"Malformed object {obj_id}: {reason}")
        self.obj_id = obj_id
        self.reason = reason


def is_reference(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(constants.REF_PREFIX)


def is_null_marker(value: Any) -> bool:
    return value is None or (
        isinstance(value, str) and value in constants.NULL_MARKERS
    )


def is_sequence(value: Any) -> bool:
    """True for literal ordered payloads (lists and tuples), never strings."""
    return isinstance(value, (list, tuple))


def index_objects(objects: list[HeapObject]) -> dict[str, HeapObject]:
    """Map id -> object. The first object wins when a tracer repeats an id."""
    index: dict[str, HeapObject] = {}
    for obj in objects:
        index.setdefault(obj.id, obj)
    return index


def find_alias(payload: Any, aliases: tuple[str, ...]) -> str | None:
    """Return the first alias present as a key of *payload*, if any."""
    if not isinstance(payload, Mapping):
        return None
    return next((alias for alias in aliases if alias in payload), None)


def first_truthy_alias_value(payload: Any, aliases: tuple[str, ...]) -> Any:
    """Value of the first alias whose value is truthy (``a || b || c``)."""
    if not isinstance(payload, Mapping):
        return None
    return next((payload[a] for a in aliases if payload.get(a)), None)


def iter_references(payload: Any) -> Iterator[str]:
    """Yield every Reference held by *payload*.

    Sequence items and mapping values are inspected, descending one level
    into inline sequences (adjacency lists). Mapping keys are yielded only
    when the key is itself a Reference.
    """
    if isinstance(payload, Mapping):
        for key, item in payload.items():
            if is_reference(key):
                yield key
            yield from _references_one_level(item)
    elif is_sequence(payload) or isinstance(payload, (set, frozenset)):
        for item in payload:
            yield from _references_one_level(item)


def _references_one_level(item: Any) -> Iterator[str]:
    if is_reference(item):
        yield item
    elif is_sequence(item):
        yield from (inner for inner in item if is_reference(inner))


def active_frame_references(frames: list[Frame]) -> list[str]:
    """Distinct references held by innermost-frame variables, in frame order."""
    if not frames:
        return []
    seen: dict[str, None] = {}
    for value in frames[-1].variables.values():
        if is_reference(value):
            seen.setdefault(value, None)
    return list(seen)


def pointer_names_by_target(frames: list[Frame]) -> dict[str, list[str]]:
    """Map object id -> innermost-frame variable names pointing at it."""
    result: dict[str, list[str]] = {}
    if not frames:
        return result
    for name, value in frames[-1].variables.items():
        if is_reference(value):
            result.setdefault(value, []).append(name)
    return result


def short_id(obj_id: str) -> str:
    return obj_id.removeprefix(constants.REF_PREFIX)


def display_value(obj: HeapObject, default: Any = None) -> Any:
    """Payload value shown inside a node: ``val``, ``value`` or ``data``.

    Falls back to *default*, or to the object id without its reference
    prefix when no default is given.
    """
    payload = obj.value
    if isinstance(payload, Mapping):
        key = find_alias(payload, constants.VALUE_FIELDS)
        if key is not None and payload[key] is not None:
            return payload[key]
    return short_id(obj.id) if default is None else default
