"""Linked-list layout: forward walk with cycle and terminus handling."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .. import constants
from ..config import LayoutConfig
from ..heap import (
    MalformedObjectError,
    display_value,
    find_alias,
    index_objects,
    is_reference,
    pointer_names_by_target,
)
from ..layout_types import LinkedListLayout, ListEdge, ListNode
from ..snapshot_types import Frame, HeapObject
from ._base import LayoutBuilder

logger = logging.getLogger(__name__)

_STRIDE = constants.LIST_NODE_WIDTH + constants.LIST_NODE_GAP


def pointer_label_anchor(node: ListNode, slot: int) -> tuple[float, float]:
    """Top-centre anchor of the *slot*-th stack pointer arrow above *node*."""
    return (
        node.x + constants.LIST_NODE_WIDTH / 2,
        node.y - (slot + 1) * constants.POINTER_LABEL_STEP,
    )


class LinkedListLayoutBuilder(LayoutBuilder):
    """Places list nodes left to right at a fixed stride.

    The walk stops at the first repeated node, emitting a single back-edge
    to its first occurrence, or at a terminus, emitting a ``NULL`` sentinel
    (or a ``missing`` sentinel for a dangling pointer).
    """

    def build(
        self,
        objects: list[HeapObject],
        root_id: str | None,
        frames: list[Frame],
        config: LayoutConfig,
    ) -> LinkedListLayout:
        root = self._require_root(objects, root_id)
        by_id = index_objects(objects)
        pointers = pointer_names_by_target(frames)

        nodes: list[ListNode] = []
        edges: list[ListEdge] = []
        visited: set[str] = set()
        x = constants.LIST_ORIGIN_X
        y = constants.LIST_ORIGIN_Y
        current: HeapObject | None = root

        while current is not None:
            if not isinstance(current.value, Mapping):
                raise MalformedObjectError(current.id, "list node payload is not a mapping")
            visited.add(current.id)
            nodes.append(
                ListNode(
                    id=current.id,
                    value=display_value(current, constants.UNKNOWN_VALUE_LABEL),
                    x=x,
                    y=y,
                    pointer_labels=list(pointers.get(current.id, [])),
                )
            )

            next_field = find_alias(current.value, constants.NEXT_ALIASES)
            next_id = current.value[next_field] if next_field is not None else None

            if not is_reference(next_id):
                nodes.append(self._sentinel(current.id, x + _STRIDE, y, is_null=True))
                edges.append(ListEdge(source=current.id, target=nodes[-1].id))
                break
            if next_id in visited:
                logger.debug("Cycle back-edge %s -> %s", current.id, next_id)
                edges.append(ListEdge(source=current.id, target=next_id, is_cycle=True))
                break
            if next_id not in by_id:
                nodes.append(self._sentinel(next_id, x + _STRIDE, y, is_null=False))
                edges.append(ListEdge(source=current.id, target=nodes[-1].id))
                break

            edges.append(ListEdge(source=current.id, target=next_id))
            x += _STRIDE
            current = by_id[next_id]

        return LinkedListLayout(root_id=root.id, nodes=nodes, edges=edges)

    @staticmethod
    def _sentinel(anchor_id: str, x: float, y: float, is_null: bool) -> ListNode:
        if is_null:
            return ListNode(
                id=f"{constants.NULL_NODE_ID_PREFIX}{anchor_id}",
                value=constants.NULL_LABEL,
                x=x,
                y=y,
                is_null=True,
            )
        return ListNode(
            id=f"{constants.MISSING_NODE_ID_PREFIX}{anchor_id}",
            value=constants.MISSING_LABEL,
            x=x,
            y=y,
            is_missing=True,
        )
