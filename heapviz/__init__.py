"""Heap visualizer: reachability, structure classification, and layout."""

from .router import visualize  # noqa: F401
from .api import (  # noqa: F401
    load_trace,
    load_trace_file,
    visualize_step,
    visualize_trace,
    dump_visualization,
)
