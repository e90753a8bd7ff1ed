"""Render model data types (pure data, no business logic).

Every layout serializes through ``to_dict()`` into the camelCase wire format
the front-end renderer consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# ── Array ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ArrayCell:
    index: int
    value: Any
    x: float
    y: float
    is_placeholder: bool = False
    is_missing: bool = False  # element is a dangling reference

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "value": self.value,
            "x": self.x,
            "y": self.y,
            "isPlaceholder": self.is_placeholder,
            "isMissing": self.is_missing,
        }


@dataclass(frozen=True)
class ArrayLayout:
    root_id: str
    cells: list[ArrayCell] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"rootId": self.root_id, "cells": [c.to_dict() for c in self.cells]}


# ── Linked list ──────────────────────────────────────────────────


@dataclass(frozen=True)
class ListNode:
    id: str
    value: Any
    x: float
    y: float
    pointer_labels: list[str] = field(default_factory=list)
    is_null: bool = False
    is_missing: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "value": self.value,
            "x": self.x,
            "y": self.y,
            "pointerLabels": list(self.pointer_labels),
            "isNull": self.is_null,
            "isMissing": self.is_missing,
        }


@dataclass(frozen=True)
class ListEdge:
    source: str
    target: str
    is_cycle: bool = False

    def to_dict(self) -> dict:
        return {"from": self.source, "to": self.target, "isCycle": self.is_cycle}


@dataclass(frozen=True)
class LinkedListLayout:
    root_id: str
    nodes: list[ListNode] = field(default_factory=list)
    edges: list[ListEdge] = field(default_factory=list)

    @property
    def data_nodes(self) -> list[ListNode]:
        return [n for n in self.nodes if not (n.is_null or n.is_missing)]

    def to_dict(self) -> dict:
        return {
            "rootId": self.root_id,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


# ── Tree ─────────────────────────────────────────────────────────


class TreeNodeKind(str, Enum):
    NODE = "node"
    CYCLE = "cycle"
    MISSING = "missing"
    TRUNCATED = "truncated"


@dataclass
class TreeNode:
    name: str
    id: str
    kind: TreeNodeKind = TreeNodeKind.NODE
    children: list[TreeNode] = field(default_factory=list)
    x: float = 0.0
    y: float = 0.0

    def walk(self):
        """Pre-order iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "id": self.id,
            "kind": self.kind.value,
            "x": self.x,
            "y": self.y,
            "children": [c.to_dict() for c in self.children],
        }


@dataclass
class TreeLayout:
    root: TreeNode | None = None

    def to_dict(self) -> dict:
        return {"root": self.root.to_dict() if self.root is not None else None}


# ── Graph ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GraphNode:
    id: str
    value: Any
    x: float
    y: float
    is_missing: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "value": self.value,
            "x": self.x,
            "y": self.y,
            "isMissing": self.is_missing,
        }


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def length(self) -> float:
        return ((self.x2 - self.x1) ** 2 + (self.y2 - self.y1) ** 2) ** 0.5

    def to_dict(self) -> dict:
        return {
            "from": self.source,
            "to": self.target,
            "x1": self.x1,
            "y1": self.y1,
            "x2": self.x2,
            "y2": self.y2,
        }


@dataclass(frozen=True)
class GraphLayout:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


# ── Generic heap view ────────────────────────────────────────────


class BoxKind(str, Enum):
    VARIABLE = "variable"
    SEQUENCE = "sequence"
    KEY_VALUE = "key_value"
    ATTRIBUTES = "attributes"


class ValueKind(str, Enum):
    PRIMITIVE = "primitive"
    REFERENCE = "reference"
    MISSING = "missing"


@dataclass(frozen=True)
class RenderedValue:
    kind: ValueKind
    text: str
    target: str | None = None  # referenced object id

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"kind": self.kind.value, "text": self.text}
        if self.target is not None:
            d["target"] = self.target
        return d


@dataclass(frozen=True)
class BoxEntry:
    key: str
    value: RenderedValue

    def to_dict(self) -> dict:
        return {"key": self.key, "value": self.value.to_dict()}


@dataclass(frozen=True)
class HeapBox:
    id: str
    type: str
    kind: BoxKind
    entries: list[BoxEntry] = field(default_factory=list)
    label: str | None = None
    y: float = 0.0

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "kind": self.kind.value,
            "y": self.y,
            "entries": [e.to_dict() for e in self.entries],
        }
        if self.label is not None:
            d["label"] = self.label
        return d


@dataclass(frozen=True)
class GenericLayout:
    visible: list[HeapBox] = field(default_factory=list)
    hidden: list[HeapBox] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "visible": [b.to_dict() for b in self.visible],
            "hidden": [b.to_dict() for b in self.hidden],
        }
