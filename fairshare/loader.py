"""
Tree Loader.

Turns a JSON document of the form

    { "root": <node> }
    node := { "length"?: number, "children": [node, ...] }
          | { "length"?: number, "name": string }

into an immutable Tree. Variants are distinguished structurally: an object
with "children" is a Node (checked first), otherwise an object with "name"
is a Leaf. Unknown keys are ignored.

Dispatch is decided by field presence alone: an object with "children"
is always read as a Node, so {"children": 5, "name": "A"} is rejected
rather than retried as a Leaf.

JSON integers are decoded as floats, so an integer too large for a double
becomes infinity exactly like 1e400 does.

Any mismatch raises ParseError. There is no partial result.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .domain import Leaf, Node, ParseError, Tree


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

ROOT_KEY = "root"
DEFAULT_LENGTH = 0.0


# =============================================================================
# FIELD VALIDATION
# =============================================================================

def _reject_constant(literal: str) -> float:
    # json accepts NaN and Infinity literals by default; JSON proper does not
    raise ParseError(f"invalid JSON literal '{literal}'")


def validate_length(raw: dict, path: str) -> float:
    """
    Read the optional "length" field of a node.

    Raises:
        ParseError: If length is present but not a JSON number
    """
    if "length" not in raw:
        return DEFAULT_LENGTH

    value = raw["length"]
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(
            f"invalid type: expected a number for length, got {type(value).__name__}",
            f"{path}.length",
        )
    try:
        return float(value)
    except OverflowError as e:
        # only reachable through build_tree() with an already-decoded int
        raise ParseError(f"length {value} is out of range", f"{path}.length") from e


def validate_name(raw: dict, path: str) -> str:
    """
    Read the "name" field of a leaf.

    Raises:
        ParseError: If name is not a string
    """
    value = raw["name"]
    if not isinstance(value, str):
        raise ParseError(
            f"invalid type: expected a string for name, got {type(value).__name__}",
            f"{path}.name",
        )
    return value


# =============================================================================
# TREE CONSTRUCTION
# =============================================================================

def build_node(raw: Any, path: str = ROOT_KEY) -> Tree:
    """
    Build a Node or Leaf from a decoded JSON value.

    Args:
        raw: Decoded JSON value for this node
        path: Dotted location of the node, used in error messages

    Raises:
        ParseError: If raw matches neither the node nor the leaf shape
    """
    if not isinstance(raw, dict):
        raise ParseError(
            f"data did not match any variant of tree: expected an object, "
            f"got {type(raw).__name__}",
            path,
        )

    if "children" in raw:
        children = raw["children"]
        if not isinstance(children, list):
            raise ParseError(
                f"invalid type: expected an array for children, "
                f"got {type(children).__name__}",
                f"{path}.children",
            )
        return Node(
            children=tuple(
                build_node(child, f"{path}.children[{i}]")
                for i, child in enumerate(children)
            ),
            length=validate_length(raw, path),
        )

    if "name" in raw:
        return Leaf(
            name=validate_name(raw, path),
            length=validate_length(raw, path),
        )

    raise ParseError(
        "data did not match any variant of tree: "
        "expected a 'children' or 'name' field",
        path,
    )


def build_tree(document: Any) -> Tree:
    """
    Build a Tree from an already-decoded JSON document.

    Raises:
        ParseError: If the document is not an object holding the root key
    """
    if not isinstance(document, dict):
        raise ParseError(
            f"invalid type: expected an object at top level, "
            f"got {type(document).__name__}"
        )
    if ROOT_KEY not in document:
        raise ParseError(f"missing field '{ROOT_KEY}'")

    return build_node(document[ROOT_KEY], ROOT_KEY)


def parse_tree(json_text: str) -> Tree:
    """
    Parse JSON text into a Tree.

    This is the entry point of the Tree Loader.

    Raises:
        ParseError: If the text is not valid JSON or has the wrong shape
    """
    try:
        document = json.loads(
            json_text,
            parse_int=float,
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as e:
        raise ParseError(str(e)) from e
    except RecursionError as e:
        raise ParseError("recursion limit exceeded while decoding") from e

    tree = build_tree(document)
    logger.debug("Loaded tree rooted at %s", type(tree).__name__)
    return tree
