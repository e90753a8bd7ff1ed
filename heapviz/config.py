"""Layout configuration (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass

from . import constants


@dataclass(frozen=True)
class LayoutConfig:
    """Groups layout tuning knobs.

    ``seed`` of ``None`` leaves the graph layout's initial placement
    nondeterministic; any integer makes it reproducible.
    """

    iterations: int = constants.FORCE_ITERATIONS
    seed: int | None = None
    canvas_width: int = constants.CANVAS_WIDTH
    canvas_height: int = constants.CANVAS_HEIGHT
    spread: float = constants.FORCE_INITIAL_SPREAD
    optimal_distance: float = constants.FORCE_OPTIMAL_DISTANCE
    repulsion: float = constants.FORCE_REPULSION
    attraction: float = constants.FORCE_ATTRACTION
    center_gravity: float = constants.FORCE_CENTER_GRAVITY
    damping: float = constants.FORCE_DAMPING
    max_tree_depth: int = constants.TREE_MAX_DEPTH
    max_tree_nodes: int = constants.TREE_MAX_NODES

    @property
    def center(self) -> tuple[float, float]:
        return self.canvas_width / 2, self.canvas_height / 2


DEFAULT_CONFIG = LayoutConfig()
