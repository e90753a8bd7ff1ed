"""Named constants for heap ids, field aliases, labels and layout geometry."""

from __future__ import annotations

REF_PREFIX = "obj"
MIRROR_ID_PREFIX = "var_"
NULL_NODE_ID_PREFIX = "null-"
MISSING_NODE_ID_PREFIX = "missing-"

NULL_MARKERS: frozenset[str] = frozenset({"null", "None"})

# Control-message channels the tracer multiplexes into frame variables
RESERVED_TRACER_NAMES: frozenset[str] = frozenset(
    {"Status", "Note", "Message", "Error", "Exception"}
)

# ── Object kinds ─────────────────────────────────────────────────

SEQUENCE_TYPE_NAMES: frozenset[str] = frozenset(
    {"array", "list", "tuple", "set", "vector"}
)

# ── Field alias tables ───────────────────────────────────────────

LEFT_ALIASES: tuple[str, ...] = ("left", "leftPtr", "pLeft")
RIGHT_ALIASES: tuple[str, ...] = ("right", "rightPtr", "pRight")
TREE_ALIASES: tuple[str, ...] = LEFT_ALIASES + RIGHT_ALIASES
NEXT_ALIASES: tuple[str, ...] = ("next", "nxt", "link", "ptr", "forward", "pNext", "_next")
CHILDREN_FIELD = "children"
GRAPH_FIELDS: tuple[str, ...] = (
    "neighbors",
    "adj",
    "children",
    "adjList",
    "edges",
    "links",
)
VALUE_FIELDS: tuple[str, ...] = ("val", "value", "data")

# ── Labels ───────────────────────────────────────────────────────

NULL_LABEL = "NULL"
MISSING_LABEL = "Missing"
CYCLE_LABEL = "Cycle"
TRUNCATED_LABEL = "..."
EMPTY_LABEL = "empty"
UNKNOWN_VALUE_LABEL = "?"
REFERENCE_MARKER = "●"

# ── Layout geometry ──────────────────────────────────────────────

ARRAY_ORIGIN_X = 20
ARRAY_ORIGIN_Y = 40
ARRAY_CELL_WIDTH = 70

LIST_ORIGIN_X = 50
LIST_ORIGIN_Y = 80
LIST_NODE_WIDTH = 120
LIST_NODE_HEIGHT = 60
LIST_NODE_GAP = 60
POINTER_LABEL_STEP = 25

TREE_NODE_SPACING_X = 100
TREE_LEVEL_SPACING_Y = 100
TREE_ORIGIN_Y = 50
TREE_MAX_DEPTH = 200
TREE_MAX_NODES = 2000

GENERIC_BOX_SPACING_Y = 16
GENERIC_ROW_HEIGHT = 24
GENERIC_HEADER_HEIGHT = 28

# ── Force-directed layout ────────────────────────────────────────

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600
FORCE_ITERATIONS = 100
FORCE_INITIAL_SPREAD = 200.0
FORCE_OPTIMAL_DISTANCE = 200.0
FORCE_REPULSION = 50000.0
FORCE_ATTRACTION = 0.05
FORCE_CENTER_GRAVITY = 0.02
FORCE_DAMPING = 0.6
FORCE_EPSILON = 0.1
