"""Per-shape layout builders."""

from __future__ import annotations

import importlib

from ..classifier import Shape
from ._base import LayoutBuilder
from .generic import GenericLayoutBuilder

# module.Class, imported on first lookup
_BUILDER_CLASSES: dict[Shape, str] = {
    Shape.ARRAY: "array.ArrayLayoutBuilder",
    Shape.LINKED_LIST: "linked_list.LinkedListLayoutBuilder",
    Shape.TREE: "tree.TreeLayoutBuilder",
    Shape.GRAPH: "graph.GraphLayoutBuilder",
    Shape.GENERIC: "generic.GenericLayoutBuilder",
}


def get_layout_builder(shape: Shape) -> LayoutBuilder:
    """Instantiate the layout builder for *shape*.

    Raises ``ValueError`` if *shape* has no registered builder.
    """
    dotted = _BUILDER_CLASSES.get(shape)
    if dotted is None:
        raise ValueError(f"No layout builder for shape: {shape}")
    module_name, class_name = dotted.split(".")
    mod = importlib.import_module(f".{module_name}", package=__package__)
    cls = getattr(mod, class_name)
    return cls()


SUPPORTED_SHAPES: tuple[Shape, ...] = tuple(_BUILDER_CLASSES.keys())

__all__ = [
    "LayoutBuilder",
    "GenericLayoutBuilder",
    "get_layout_builder",
    "SUPPORTED_SHAPES",
]
