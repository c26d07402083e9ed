"""
Tests for the Tree Loader.

These tests verify:
1. Structural dispatch (children → Node, name → Leaf)
2. Length defaults and type checks
3. Malformed input is rejected with ParseError
4. No partial tree is ever returned
"""

import json

import pytest

from fairshare.domain import Leaf, Node, ParseError, ScoringError
from fairshare.loader import (
    DEFAULT_LENGTH,
    ROOT_KEY,
    build_node,
    build_tree,
    parse_tree,
)


def doc(root) -> str:
    """Helper to wrap a node in a root document."""
    return json.dumps({ROOT_KEY: root})


# =============================================================================
# VARIANT DISPATCH
# =============================================================================

class TestVariantDispatch:
    """Test that nodes and leaves are told apart by their fields."""

    def test_leaf_root(self):
        """A root with a name is a Leaf."""
        tree = parse_tree(doc({"name": "A", "length": 1.5}))

        assert tree == Leaf(name="A", length=1.5)

    def test_internal_node(self):
        """A root with children is a Node holding them in order."""
        tree = parse_tree(doc({
            "length": 3,
            "children": [{"name": "A"}, {"name": "B"}],
        }))

        assert isinstance(tree, Node)
        assert tree.length == 3.0
        assert [child.name for child in tree.children] == ["A", "B"]

    def test_children_take_precedence_over_name(self):
        """An object with both fields is read as a Node."""
        tree = parse_tree(doc({"name": "X", "children": [{"name": "A"}]}))

        assert isinstance(tree, Node)

    def test_bad_children_not_retried_as_leaf(self):
        """A "children" field commits the object to the Node shape."""
        with pytest.raises(ParseError) as exc_info:
            parse_tree(doc({"children": 5, "name": "A"}))

        assert exc_info.value.path == "root.children"

    def test_empty_children_is_a_node(self):
        """A childless node is accepted by the loader."""
        tree = parse_tree(doc({"children": []}))

        assert tree == Node(children=())
        assert tree.children == ()

    def test_unknown_fields_are_ignored(self):
        """Extra keys on nodes and at top level do not matter."""
        text = json.dumps({
            "root": {"name": "A", "colour": "red"},
            "comment": "ignored",
        })

        assert parse_tree(text) == Leaf(name="A")

    def test_nested_structure(self):
        """Deeply nested nodes are built recursively."""
        tree = parse_tree(doc({
            "children": [
                {"children": [{"name": "A"}, {"name": "B"}]},
                {"name": "C"},
            ],
        }))

        assert isinstance(tree.children[0], Node)
        assert tree.children[0].children[1] == Leaf(name="B")
        assert tree.children[1] == Leaf(name="C")

    def test_tree_is_immutable(self):
        """Loaded trees cannot be modified."""
        tree = parse_tree(doc({"name": "A"}))

        with pytest.raises(AttributeError):
            tree.length = 5.0


# =============================================================================
# LENGTH HANDLING
# =============================================================================

class TestLength:
    """Test the optional length field."""

    def test_length_defaults_on_leaf(self):
        """Missing length on a leaf is 0.0."""
        assert parse_tree(doc({"name": "A"})).length == DEFAULT_LENGTH

    def test_length_defaults_on_node(self):
        """Missing length on a node is 0.0."""
        assert parse_tree(doc({"children": []})).length == DEFAULT_LENGTH

    def test_integer_length_becomes_float(self):
        """Integer lengths are stored as floats."""
        length = parse_tree(doc({"name": "A", "length": 4})).length

        assert isinstance(length, float)
        assert length == 4.0

    def test_negative_length_accepted(self):
        """Negative lengths are taken as supplied, not clamped."""
        assert parse_tree(doc({"name": "A", "length": -2.5})).length == -2.5

    def test_overflowing_length_is_infinite(self):
        """A number too large for a double decodes to infinity."""
        tree = parse_tree('{"root": {"name": "A", "length": 1e400}}')

        assert tree.length == float("inf")

    def test_overflowing_integer_length_is_infinite(self):
        """An integer literal too large for a double behaves like 1e400."""
        tree = parse_tree('{"root": {"name": "A", "length": 1' + "0" * 400 + "}}")

        assert tree.length == float("inf")

    def test_negative_overflowing_integer_length(self):
        """A huge negative integer literal decodes to -inf."""
        tree = parse_tree('{"root": {"name": "A", "length": -1' + "0" * 400 + "}}")

        assert tree.length == float("-inf")

    @pytest.mark.parametrize("bad", ["1", None, True, [1], {"v": 1}])
    def test_non_numeric_length_rejected(self, bad):
        """Length must be a JSON number."""
        with pytest.raises(ParseError) as exc_info:
            parse_tree(doc({"name": "A", "length": bad}))

        assert exc_info.value.path == "root.length"


# =============================================================================
# MALFORMED INPUT
# =============================================================================

class TestMalformedInput:
    """Test that anything off-shape fails with ParseError."""

    @pytest.mark.parametrize("text", [
        "{}",
        "not json",
        '{"root": 5}',
        "",
        "[]",
        '{"root": {}}',
        '{"root": {"length": 1}}',
        '{"root": {"children": 5}}',
        '{"root": {"name": 7}}',
        '{"root": {"children": [1]}}',
    ])
    def test_rejected(self, text):
        """Each of these documents is refused."""
        with pytest.raises(ParseError):
            parse_tree(text)

    def test_integer_beyond_digit_limit_is_not_an_error(self):
        """Integer literals longer than the int conversion limit still load."""
        text = '{"root": {"name": "A", "length": 9' + "9" * 5000 + "}}"

        assert parse_tree(text).length == float("inf")

    def test_child_integer_kept_as_float(self):
        """Small integer literals anywhere in the tree load as floats."""
        tree = parse_tree(doc({"length": 2, "children": [{"name": "A", "length": 3}]}))

        assert tree.children[0].length == 3.0
        assert isinstance(tree.children[0].length, float)

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_literals_rejected(self, literal):
        """JSON has no NaN or Infinity literals."""
        with pytest.raises(ParseError):
            parse_tree('{"root": {"name": "A", "length": %s}}' % literal)

    def test_missing_root_message(self):
        """The error names the missing field."""
        with pytest.raises(ParseError) as exc_info:
            parse_tree("{}")

        assert "root" in str(exc_info.value)

    def test_nested_error_reports_path(self):
        """Errors deep in the tree point at the offending node."""
        with pytest.raises(ParseError) as exc_info:
            parse_tree(doc({
                "children": [{"name": "A"}, {"children": [{"length": 2}]}],
            }))

        assert exc_info.value.path == "root.children[1].children[0]"
        assert "root.children[1].children[0]" in str(exc_info.value)

    def test_invalid_json_carries_parser_message(self):
        """The decoder's description is kept in the error."""
        with pytest.raises(ParseError) as exc_info:
            parse_tree('{"root": ')

        assert exc_info.value.reason
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_parse_error_is_scoring_error(self):
        """Callers can catch every failure through the base class."""
        with pytest.raises(ScoringError):
            parse_tree("not json")


# =============================================================================
# DECODED DOCUMENTS
# =============================================================================

class TestBuildFromDecoded:
    """Test building from already-decoded JSON values."""

    def test_build_tree(self):
        """build_tree accepts a dict document."""
        tree = build_tree({"root": {"children": [{"name": "A", "length": 1}]}})

        assert tree == Node(children=(Leaf(name="A", length=1.0),))

    def test_build_tree_rejects_non_object(self):
        """The top level must be an object."""
        with pytest.raises(ParseError):
            build_tree([{"root": {"name": "A"}}])

    def test_build_tree_out_of_range_integer(self):
        """A decoded int too large for a double is a ParseError with its path."""
        with pytest.raises(ParseError) as exc_info:
            build_tree({"root": {"name": "A", "length": 10 ** 400}})

        assert exc_info.value.path == "root.length"

    def test_build_node_custom_path(self):
        """The path argument is used in error messages."""
        with pytest.raises(ParseError) as exc_info:
            build_node("leaf", path="subtree")

        assert exc_info.value.path == "subtree"
