#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for capture bag extraction."""

import re

import pytest

from rxmd.transforms.captures import NamedCaptures, PositionalCaptures, extract_captures


@pytest.mark.unit
class TestNamedCaptures:
    """Capture bags for patterns with named groups."""

    def test_named_access(self):
        """Named groups are reachable by name."""
        bag = extract_captures(re.search(r"(?P<key>\w+)=(?P<value>\w+)", "a key=val"))

        assert isinstance(bag, NamedCaptures)
        assert bag.kind == "named"
        assert bag["key"] == "key"
        assert bag["value"] == "val"

    def test_absent_optional_group_is_empty_string(self):
        """Groups that did not participate are reported as ''."""
        bag = extract_captures(re.search(r"(?P<lang>\w+)?:(?P<code>.*)", ":x"))
        assert bag["lang"] == ""
        assert bag.groups == ("", "x")

    def test_mapping_protocol(self):
        """Iteration and len cover named groups only."""
        bag = extract_captures(re.search(r"(?P<a>x)(y)(?P<b>z)", "xyz"))
        assert list(bag) == ["a", "b"]
        assert len(bag) == 2
        assert bag.as_dict() == {"a": "x", "b": "z"}
        assert dict(bag) == {"a": "x", "b": "z"}

    def test_integer_access(self):
        """Integer keys reach the full match and numbered groups."""
        bag = extract_captures(re.search(r"(?P<a>x)(y)", "-xy-"))
        assert bag[0] == "xy"
        assert bag[2] == "y"
        assert bag.match == "xy"
        assert bag.span == (1, 3)

    def test_unknown_name(self):
        """Unknown names raise KeyError; get returns the default."""
        bag = extract_captures(re.search(r"(?P<a>x)", "x"))
        with pytest.raises(KeyError, match="no group named"):
            bag["missing"]
        assert bag.get("missing") == ""
        assert bag.get("missing", None) is None


@pytest.mark.unit
class TestPositionalCaptures:
    """Capture bags for patterns without named groups."""

    def test_positional_access(self):
        """Index 0 is the full match, 1..n the groups."""
        bag = extract_captures(re.search(r"(\d+)-(\d+)", "pages 3-7"))

        assert isinstance(bag, PositionalCaptures)
        assert bag.kind == "positional"
        assert (bag[0], bag[1], bag[2]) == ("3-7", "3", "7")
        assert len(bag) == 3

    def test_slicing_and_iteration(self):
        """The bag behaves like a sequence."""
        bag = extract_captures(re.search(r"(a)(b)?", "a"))
        assert bag[1:] == ("a", "")
        assert list(bag) == ["a", "a", ""]

    def test_out_of_range(self):
        """Indexing past the last group raises IndexError; get returns the default."""
        bag = extract_captures(re.search(r"x", "x"))
        with pytest.raises(IndexError):
            bag[1]
        assert bag.get(5) == ""

    def test_name_lookup(self):
        """String keys have nothing to find."""
        bag = extract_captures(re.search(r"(x)", "x"))
        with pytest.raises(KeyError):
            bag["x"]
        assert bag.get("x", "default") == "default"


@pytest.mark.unit
def test_bags_are_rebuilt_per_match():
    """Each match gets its own bag."""
    bags = [extract_captures(m) for m in re.finditer(r"(?P<n>\d)", "1 2 3")]
    assert [bag["n"] for bag in bags] == ["1", "2", "3"]
    assert len({id(bag) for bag in bags}) == 3
