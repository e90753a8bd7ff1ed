"""Step-by-step replay over a Trace."""

from __future__ import annotations

import logging

from .config import DEFAULT_CONFIG, LayoutConfig
from .router import Visualization, visualize
from .trace_types import Step, Trace

logger = logging.getLogger(__name__)


class ReplaySession:
    """Cursor over a trace's steps, with the most recent render buffered.

    Navigation clamps to the first and last step. ``last_rendered`` is the
    only state carried between renders; hosts can show it while the next
    step's layout is being computed.
    """

    def __init__(self, trace: Trace, config: LayoutConfig = DEFAULT_CONFIG):
        if not trace.steps:
            raise ValueError("Cannot replay an empty trace")
        self._trace = trace
        self._config = config
        self._index = 0
        self.last_rendered: Visualization | None = None

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def total_steps(self) -> int:
        return len(self._trace.steps)

    @property
    def current_step(self) -> Step:
        return self._trace.steps[self._index]

    def go_to(self, index: int) -> Step:
        self._index = max(0, min(index, self.total_steps - 1))
        return self.current_step

    def first(self) -> Step:
        return self.go_to(0)

    def previous(self) -> Step:
        return self.go_to(self._index - 1)

    def next(self) -> Step:
        return self.go_to(self._index + 1)

    def last(self) -> Step:
        return self.go_to(self.total_steps - 1)

    def render(self) -> Visualization:
        logger.debug("Rendering step %d/%d", self._index + 1, self.total_steps)
        self.last_rendered = visualize(self.current_step, self._config)
        return self.last_rendered
