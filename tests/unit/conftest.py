"""Shared snapshot builders for the heapviz unit tests."""

from heapviz.snapshot_types import Frame, HeapObject
from heapviz.trace_types import Step


def make_obj(obj_id: str, value, type_: str = "instance") -> HeapObject:
    return HeapObject(id=obj_id, type=type_, value=value)


def make_frames(**variables) -> list[Frame]:
    """A single-frame stack holding *variables*."""
    return [Frame(name="<module>", variables=dict(variables))]


def make_step(objects, **variables) -> Step:
    return Step(frames=make_frames(**variables), objects=objects)


def linked_chain(*values, prefix: str = "obj") -> list[HeapObject]:
    """Singly-linked nodes obj1 -> obj2 -> ... -> None."""
    ids = [f"{prefix}{i}" for i in range(1, len(values) + 1)]
    return [
        make_obj(obj_id, {"val": val, "next": ids[i + 1] if i + 1 < len(ids) else None})
        for i, (obj_id, val) in enumerate(zip(ids, values))
    ]
