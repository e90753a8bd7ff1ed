"""Tests for the array, linked-list and tree layout builders."""

import pytest

from heapviz import constants
from heapviz.classifier import Shape
from heapviz.config import LayoutConfig
from heapviz.heap import MalformedObjectError
from heapviz.layout_types import TreeNodeKind
from heapviz.layouts import SUPPORTED_SHAPES, get_layout_builder
from heapviz.layouts.array import ArrayLayoutBuilder
from heapviz.layouts.linked_list import LinkedListLayoutBuilder, pointer_label_anchor
from heapviz.layouts.tree import TreeLayoutBuilder
from tests.unit.conftest import linked_chain, make_frames, make_obj

CONFIG = LayoutConfig()


class TestRegistry:
    def test_every_shape_has_a_builder(self):
        assert set(SUPPORTED_SHAPES) == set(Shape)
        for shape in Shape:
            assert get_layout_builder(shape) is not None

    def test_unknown_shape_raises(self):
        with pytest.raises(ValueError):
            get_layout_builder("HEXAGON")


class TestArrayLayout:
    def test_cells_follow_payload_order(self):
        objects = [make_obj("obj1", [1, 2, 3], type_="list")]
        layout = ArrayLayoutBuilder().build(objects, "obj1", make_frames(xs="obj1"), CONFIG)
        assert [(c.index, c.value) for c in layout.cells] == [(0, 1), (1, 2), (2, 3)]

    def test_fixed_spacing(self):
        objects = [make_obj("obj1", ["a", "b"], type_="list")]
        layout = ArrayLayoutBuilder().build(objects, "obj1", [], CONFIG)
        xs = [c.x for c in layout.cells]
        assert xs[1] - xs[0] == constants.ARRAY_CELL_WIDTH
        assert len({c.y for c in layout.cells}) == 1

    @pytest.mark.parametrize("payload", [[], None])
    def test_empty_payload_renders_placeholder(self, payload):
        objects = [make_obj("obj1", payload, type_="list")]
        layout = ArrayLayoutBuilder().build(objects, "obj1", [], CONFIG)
        assert len(layout.cells) == 1
        assert layout.cells[0].is_placeholder

    def test_mapping_payload_is_malformed(self):
        objects = [make_obj("obj1", {"next": None}, type_="list")]
        with pytest.raises(MalformedObjectError):
            ArrayLayoutBuilder().build(objects, "obj1", [], CONFIG)

    def test_missing_root_is_malformed(self):
        with pytest.raises(MalformedObjectError):
            ArrayLayoutBuilder().build([], "obj1", [], CONFIG)

    def test_to_dict(self):
        objects = [make_obj("obj1", [7], type_="tuple")]
        d = ArrayLayoutBuilder().build(objects, "obj1", [], CONFIG).to_dict()
        assert d["cells"][0]["index"] == 0
        assert d["cells"][0]["value"] == 7
        assert d["cells"][0]["isMissing"] is False

    def test_dangling_reference_cell_is_missing(self):
        objects = [
            make_obj("obj1", ["obj2", "obj404", 3], type_="list"),
            make_obj("obj2", {"val": 1}),
        ]
        cells = ArrayLayoutBuilder().build(objects, "obj1", [], CONFIG).cells
        assert [(c.value, c.is_missing) for c in cells] == [
            ("obj2", False),
            (constants.MISSING_LABEL, True),
            (3, False),
        ]


class TestLinkedListLayout:
    def test_null_terminated_list(self):
        objects = linked_chain(5, 10)
        layout = LinkedListLayoutBuilder().build(objects, "obj1", make_frames(head="obj1"), CONFIG)

        assert [n.id for n in layout.data_nodes] == ["obj1", "obj2"]
        assert layout.nodes[-1].is_null
        assert layout.nodes[-1].value == constants.NULL_LABEL
        assert [(e.source, e.target, e.is_cycle) for e in layout.edges] == [
            ("obj1", "obj2", False),
            ("obj2", "null-obj2", False),
        ]

    def test_nodes_placed_left_to_right(self):
        layout = LinkedListLayoutBuilder().build(linked_chain(1, 2, 3), "obj1", [], CONFIG)
        xs = [n.x for n in layout.nodes]
        assert xs == sorted(xs)
        assert len(set(xs)) == len(xs)

    def test_circular_list_emits_single_back_edge(self):
        objects = [
            make_obj("obj1", {"val": 1, "next": "obj2"}),
            make_obj("obj2", {"val": 2, "next": "obj1"}),
        ]
        layout = LinkedListLayoutBuilder().build(objects, "obj1", [], CONFIG)

        assert [n.id for n in layout.nodes] == ["obj1", "obj2"]
        cycles = [e for e in layout.edges if e.is_cycle]
        assert len(cycles) == 1
        assert (cycles[0].source, cycles[0].target) == ("obj2", "obj1")

    def test_self_loop(self):
        objects = [make_obj("obj1", {"val": 1, "next": "obj1"})]
        layout = LinkedListLayoutBuilder().build(objects, "obj1", [], CONFIG)
        assert len(layout.nodes) == 1
        assert [(e.source, e.target, e.is_cycle) for e in layout.edges] == [("obj1", "obj1", True)]

    def test_dangling_next_renders_missing_marker(self):
        objects = [make_obj("obj1", {"val": 1, "next": "obj404"})]
        layout = LinkedListLayoutBuilder().build(objects, "obj1", [], CONFIG)
        assert layout.nodes[-1].is_missing
        assert layout.edges[-1].target == layout.nodes[-1].id

    def test_pointer_labels_collect_aliases(self):
        frames = make_frames(head="obj1", cur="obj2", prev="obj1", n=3)
        layout = LinkedListLayoutBuilder().build(linked_chain(1, 2), "obj1", frames, CONFIG)
        labels = {n.id: n.pointer_labels for n in layout.nodes}
        assert labels["obj1"] == ["head", "prev"]
        assert labels["obj2"] == ["cur"]
        assert labels["null-obj2"] == []

    def test_pointer_labels_stack_vertically(self):
        layout = LinkedListLayoutBuilder().build(linked_chain(1), "obj1", [], CONFIG)
        node = layout.nodes[0]
        _, y0 = pointer_label_anchor(node, 0)
        _, y1 = pointer_label_anchor(node, 1)
        assert y1 == y0 - constants.POINTER_LABEL_STEP

    def test_zero_value_is_shown(self):
        layout = LinkedListLayoutBuilder().build(linked_chain(0), "obj1", [], CONFIG)
        assert layout.nodes[0].value == 0

    def test_scalar_node_is_malformed(self):
        objects = [make_obj("obj1", {"val": 1, "next": "obj2"}), make_obj("obj2", 5)]
        with pytest.raises(MalformedObjectError):
            LinkedListLayoutBuilder().build(objects, "obj1", [], CONFIG)


class TestTreeLayout:
    def _tree(self):
        return [
            make_obj("obj1", {"val": 2, "left": "obj2", "right": "obj3"}),
            make_obj("obj2", {"val": 1, "left": None, "right": None}),
            make_obj("obj3", {"val": 3, "left": "None", "right": "null"}),
        ]

    def test_binary_structure(self):
        layout = TreeLayoutBuilder().build(self._tree(), "obj1", [], CONFIG)
        root = layout.root
        assert root.name == "2"
        assert [c.name for c in root.children] == ["1", "3"]
        assert all(not c.children for c in root.children)

    def test_parent_centred_over_children(self):
        root = TreeLayoutBuilder().build(self._tree(), "obj1", [], CONFIG).root
        left, right = root.children
        assert left.x < right.x
        assert root.x == (left.x + right.x) / 2
        assert left.y == right.y > root.y

    def test_nary_children(self):
        objects = [
            make_obj("obj1", {"val": "r", "children": ["obj2", "obj3", None]}),
            make_obj("obj2", {"val": "a", "children": []}),
            make_obj("obj3", {"val": "b", "children": []}),
        ]
        root = TreeLayoutBuilder().build(objects, "obj1", [], CONFIG).root
        assert [c.name for c in root.children] == ["a", "b"]

    def test_shared_subtree_renders_twice(self):
        objects = [
            make_obj("obj1", {"val": 1, "left": "obj2", "right": "obj2"}),
            make_obj("obj2", {"val": 9, "left": None, "right": None}),
        ]
        root = TreeLayoutBuilder().build(objects, "obj1", [], CONFIG).root
        assert [c.name for c in root.children] == ["9", "9"]
        assert all(c.kind == TreeNodeKind.NODE for c in root.children)

    def test_ancestor_revisit_renders_cycle_leaf(self):
        objects = [
            make_obj("obj1", {"val": 1, "left": "obj2"}),
            make_obj("obj2", {"val": 2, "right": "obj1"}),
        ]
        root = TreeLayoutBuilder().build(objects, "obj1", [], CONFIG).root
        leaf = root.children[0].children[0]
        assert leaf.kind == TreeNodeKind.CYCLE
        assert leaf.name == constants.CYCLE_LABEL
        assert not leaf.children

    def test_first_non_null_alias_is_followed(self):
        objects = [
            make_obj("obj1", {"val": 1, "left": None, "leftPtr": "obj2"}),
            make_obj("obj2", {"val": 2, "left": None, "right": None}),
        ]
        root = TreeLayoutBuilder().build(objects, "obj1", [], CONFIG).root
        assert [c.name for c in root.children] == ["2"]

    def test_dangling_child_renders_missing_leaf(self):
        objects = [make_obj("obj1", {"val": 1, "left": "obj404"})]
        root = TreeLayoutBuilder().build(objects, "obj1", [], CONFIG).root
        assert root.children[0].kind == TreeNodeKind.MISSING

    def test_depth_limit_truncates(self):
        objects = [
            make_obj(f"obj{i}", {"val": i, "left": f"obj{i + 1}" if i < 10 else None})
            for i in range(1, 11)
        ]
        layout = TreeLayoutBuilder().build(objects, "obj1", [], LayoutConfig(max_tree_depth=3))
        kinds = [n.kind for n in layout.root.walk()]
        assert kinds[-1] == TreeNodeKind.TRUNCATED
        assert len(kinds) == 4

    def test_node_budget_truncates_shared_children(self):
        # Each level points twice at the next, doubling the paths per level
        objects = [
            make_obj(f"obj{i}", {"val": i, "children": [f"obj{i + 1}", f"obj{i + 1}"] if i < 18 else []})
            for i in range(1, 19)
        ]
        layout = TreeLayoutBuilder().build(objects, "obj1", [], LayoutConfig(max_tree_nodes=50))
        kinds = [n.kind for n in layout.root.walk()]
        assert kinds.count(TreeNodeKind.NODE) == 50
        assert TreeNodeKind.TRUNCATED in kinds
        assert len(kinds) < 200

    def test_deep_chain_positions_without_recursion_error(self):
        objects = [
            make_obj(f"obj{i}", {"val": i, "right": f"obj{i + 1}" if i < 150 else None})
            for i in range(1, 151)
        ]
        layout = TreeLayoutBuilder().build(objects, "obj1", [], CONFIG)
        assert sum(1 for _ in layout.root.walk()) == 150

    def test_to_dict_is_recursive(self):
        d = TreeLayoutBuilder().build(self._tree(), "obj1", [], CONFIG).to_dict()
        assert d["root"]["id"] == "1"
        assert [c["name"] for c in d["root"]["children"]] == ["1", "3"]
