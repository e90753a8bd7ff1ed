"""Composable API functions for the heap visualizer.

Each function corresponds to a CLI workflow but is callable
programmatically without argparse.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from .config import DEFAULT_CONFIG, LayoutConfig
from .router import Visualization, visualize
from .schema import TraceSchema
from .trace_types import Step, Trace

logger = logging.getLogger(__name__)


def load_trace(text: str) -> Trace:
    """Parse tracer JSON into a Trace.

    Args:
        text: Either ``{"steps": [...]}`` or a bare JSON list of steps.

    Returns:
        A Trace with one Step per tracer snapshot.

    Raises:
        ValueError: If *text* is not JSON or does not match the tracer schema.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Trace is not valid JSON: {e}") from e

    if isinstance(data, list):
        data = {"steps": data}
    if not isinstance(data, dict):
        raise ValueError(f"Trace must be a JSON object or list, got {type(data).__name__}")
    try:
        trace = TraceSchema(**data).to_trace()
    except ValidationError as e:
        raise ValueError(f"Trace does not match the tracer schema: {e}") from e

    logger.info("Loaded trace with %d steps", len(trace.steps))
    return trace


def load_trace_file(path: str | Path) -> Trace:
    """Read and parse a tracer JSON file. See ``load_trace``."""
    logger.info("Loading trace from %s", path)
    return load_trace(Path(path).read_text(encoding="utf-8"))


def visualize_step(step: Step, config: LayoutConfig | None = None) -> Visualization:
    """Classify and lay out one Step."""
    return visualize(step, config or DEFAULT_CONFIG)


def visualize_trace(
    trace: Trace, config: LayoutConfig | None = None
) -> list[Visualization]:
    """Visualize every Step of *trace*, independently and in order."""
    logger.info("Visualizing %d steps", len(trace.steps))
    return [visualize(step, config or DEFAULT_CONFIG) for step in trace.steps]


def dump_visualization(step: Step, config: LayoutConfig | None = None) -> str:
    """Visualize one Step and return its render model as indented JSON."""
    return json.dumps(visualize_step(step, config).to_dict(), indent=2, default=str)
