"""Graph layout: force-directed node placement.

A Fruchterman-Reingold style simulation: pairwise inverse-square
repulsion, spring attraction along edges towards an optimal length,
a weak pull to the canvas centre, and damped velocity integration.
Initial positions are random, so two runs produce structurally similar
but not identical layouts unless ``LayoutConfig.seed`` is set.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .. import constants
from ..config import LayoutConfig
from ..heap import display_value, index_objects, is_sequence, iter_references
from ..layout_types import GraphEdge, GraphLayout, GraphNode
from ..snapshot_types import Frame, HeapObject
from ._base import LayoutBuilder

logger = logging.getLogger(__name__)


@dataclass
class _Body:
    """Mutable simulation state for one node."""

    id: str
    value: Any
    x: float
    y: float
    is_missing: bool = False
    vx: float = 0.0
    vy: float = 0.0


def graph_nodes(objects: list[HeapObject]) -> list[HeapObject]:
    """Non-mirror objects whose payload is object-shaped."""
    return [
        o
        for o in objects
        if not o.is_mirror
        and (isinstance(o.value, Mapping) or is_sequence(o.value))
    ]


def missing_node_id(ref: str) -> str:
    return f"{constants.MISSING_NODE_ID_PREFIX}{ref}"


def graph_edges(nodes: list[HeapObject], known_ids: set[str]) -> list[tuple[str, str]]:
    """(source, target) pairs; self-loops and duplicates are kept.

    A reference outside *known_ids* targets a missing sentinel instead.
    References to known objects that are not graph nodes are dropped.
    """
    node_ids = {n.id for n in nodes}
    edges: list[tuple[str, str]] = []
    for n in nodes:
        for ref in iter_references(n.value):
            if ref in node_ids:
                edges.append((n.id, ref))
            elif ref not in known_ids:
                edges.append((n.id, missing_node_id(ref)))
    return edges


def _repulse(bodies: list[_Body], config: LayoutConfig) -> None:
    for i, a in enumerate(bodies):
        for b in bodies[i + 1 :]:
            dx = a.x - b.x
            dy = a.y - b.y
            dist_sq = dx * dx + dy * dy or constants.FORCE_EPSILON
            dist = math.sqrt(dist_sq)
            force = config.repulsion / dist_sq
            fx = dx / dist * force
            fy = dy / dist * force
            a.vx += fx
            a.vy += fy
            b.vx -= fx
            b.vy -= fy


def _attract(edges: list[tuple[_Body, _Body]], config: LayoutConfig) -> None:
    for source, target in edges:
        dx = target.x - source.x
        dy = target.y - source.y
        dist = math.sqrt(dx * dx + dy * dy) or constants.FORCE_EPSILON
        force = (dist - config.optimal_distance) * config.attraction
        fx = dx / dist * force
        fy = dy / dist * force
        source.vx += fx
        source.vy += fy
        target.vx -= fx
        target.vy -= fy


def _center_and_integrate(bodies: list[_Body], config: LayoutConfig) -> None:
    cx, cy = config.center
    for body in bodies:
        body.vx += (cx - body.x) * config.center_gravity
        body.vy += (cy - body.y) * config.center_gravity
        body.vx *= config.damping
        body.vy *= config.damping
        body.x += body.vx
        body.y += body.vy


class GraphLayoutBuilder(LayoutBuilder):
    def build(
        self,
        objects: list[HeapObject],
        root_id: str | None,
        frames: list[Frame],
        config: LayoutConfig,
    ) -> GraphLayout:
        nodes = graph_nodes(objects)
        if not nodes:
            return GraphLayout()

        rng = random.Random(config.seed)
        cx, cy = config.center

        def place(node_id: str, value: Any, is_missing: bool = False) -> _Body:
            return _Body(
                id=node_id,
                value=value,
                x=cx + (rng.random() - 0.5) * config.spread,
                y=cy + (rng.random() - 0.5) * config.spread,
                is_missing=is_missing,
            )

        bodies = {n.id: place(n.id, display_value(n)) for n in nodes}
        edge_ids = graph_edges(nodes, set(index_objects(objects)))
        for _, target in edge_ids:
            if target not in bodies:
                bodies[target] = place(target, constants.MISSING_LABEL, is_missing=True)
        edge_bodies = [(bodies[s], bodies[t]) for s, t in edge_ids]
        body_list = list(bodies.values())

        for _ in range(config.iterations):
            _repulse(body_list, config)
            _attract(edge_bodies, config)
            _center_and_integrate(body_list, config)

        logger.debug(
            "Force layout: %d nodes, %d edges, %d iterations",
            len(body_list),
            len(edge_ids),
            config.iterations,
        )
        return GraphLayout(
            nodes=[
                GraphNode(id=b.id, value=b.value, x=b.x, y=b.y, is_missing=b.is_missing)
                for b in body_list
            ],
            edges=[
                GraphEdge(
                    source=s,
                    target=t,
                    x1=bodies[s].x,
                    y1=bodies[s].y,
                    x2=bodies[t].x,
                    y2=bodies[t].y,
                )
                for s, t in edge_ids
            ],
        )
