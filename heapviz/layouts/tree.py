"""Tree layout: recursive structure build plus tidy node placement."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .. import constants
from ..config import LayoutConfig
from ..heap import (
    display_value,
    first_truthy_alias_value,
    index_objects,
    is_null_marker,
    is_reference,
    short_id,
)
from ..layout_types import TreeLayout, TreeNode, TreeNodeKind
from ..snapshot_types import Frame, HeapObject
from ._base import LayoutBuilder

logger = logging.getLogger(__name__)


def _child_refs(payload: Mapping) -> list:
    """Left, right, then any ``children`` entries, skipping null markers.

    Left and right take the first non-null alias, matching the walk the
    classifier performs.
    """
    refs = [
        first_truthy_alias_value(payload, constants.LEFT_ALIASES),
        first_truthy_alias_value(payload, constants.RIGHT_ALIASES),
    ]
    children = payload.get(constants.CHILDREN_FIELD)
    if isinstance(children, (list, tuple)):
        refs.extend(children)
    return [r for r in refs if r and not is_null_marker(r)]


def assign_positions(root: TreeNode) -> None:
    """Tidy placement: leaves take consecutive slots, parents centre above.

    Runs iteratively so deep degenerate trees do not hit the recursion limit.
    """
    next_slot = 0
    stack: list[tuple[TreeNode, int, bool]] = [(root, 0, False)]
    while stack:
        node, depth, expanded = stack.pop()
        node.y = constants.TREE_ORIGIN_Y + depth * constants.TREE_LEVEL_SPACING_Y
        if not node.children:
            node.x = next_slot * constants.TREE_NODE_SPACING_X
            next_slot += 1
        elif expanded:
            node.x = (node.children[0].x + node.children[-1].x) / 2
        else:
            stack.append((node, depth, True))
            stack.extend((child, depth + 1, False) for child in reversed(node.children))


def _truncated(obj_id: str) -> TreeNode:
    return TreeNode(name=constants.TRUNCATED_LABEL, id=short_id(obj_id), kind=TreeNodeKind.TRUNCATED)


class TreeLayoutBuilder(LayoutBuilder):
    """Builds the rendered tree from the classified root.

    ``visited`` is cloned for every branch rather than shared: a subtree
    reachable along two branches renders under both, while a branch that
    loops back to one of its own ancestors ends in a ``Cycle`` leaf.
    Rendering stops at ``max_tree_depth`` levels or ``max_tree_nodes``
    nodes, whichever comes first, with a truncation leaf in place of the
    rest.
    """

    def build(
        self,
        objects: list[HeapObject],
        root_id: str | None,
        frames: list[Frame],
        config: LayoutConfig,
    ) -> TreeLayout:
        root = self._require_root(objects, root_id)
        by_id = index_objects(objects)
        self._remaining = config.max_tree_nodes
        self._over_budget = False
        tree = self._build_node(root.id, by_id, frozenset(), 0, config.max_tree_depth)
        if self._over_budget:
            logger.warning("Tree under %s exceeds %d nodes, truncated", root.id, config.max_tree_nodes)
        assign_positions(tree)
        return TreeLayout(root=tree)

    def _build_node(
        self,
        obj_id: str,
        by_id: dict[str, HeapObject],
        visited: frozenset[str],
        depth: int,
        max_depth: int,
    ) -> TreeNode:
        if obj_id in visited:
            return TreeNode(name=constants.CYCLE_LABEL, id=short_id(obj_id), kind=TreeNodeKind.CYCLE)
        obj = by_id.get(obj_id)
        if obj is None:
            return TreeNode(name=constants.MISSING_LABEL, id=short_id(obj_id), kind=TreeNodeKind.MISSING)
        if depth >= max_depth:
            logger.warning("Tree deeper than %d levels, truncating at %s", max_depth, obj_id)
            return _truncated(obj_id)
        if self._remaining <= 0:
            self._over_budget = True
            return _truncated(obj_id)
        self._remaining -= 1

        node = TreeNode(name=str(display_value(obj, obj.id)), id=short_id(obj_id))
        if not isinstance(obj.value, Mapping):
            return node

        branch_visited = visited | {obj_id}
        node.children = [
            self._build_node(ref, by_id, branch_visited, depth + 1, max_depth)
            for ref in _child_refs(obj.value)
            if is_reference(ref)
        ]
        return node
