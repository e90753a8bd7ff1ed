"""Pure functions for computing statistics over traces."""

from __future__ import annotations

from collections import Counter

from heapviz.classifier import classify
from heapviz.router import normalize_objects
from heapviz.trace_types import Trace


def count_shapes(trace: Trace) -> dict[str, int]:
    """Return a frequency map of classified shape names across the trace.

    Args:
        trace: A trace of tracer snapshots.

    Returns:
        A dict mapping shape name strings to the number of steps classified
        as that shape. Empty dict for an empty trace.
    """
    return dict(
        Counter(
            classify(normalize_objects(step.objects), list(step.frames)).shape.value
            for step in trace.steps
        )
    )
