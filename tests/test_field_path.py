"""Tests for FieldPath parsing and owner resolution."""

from dataclasses import dataclass, field
from typing import List, Optional

import pytest

from pyqt_polyform.core.exceptions import OwnerResolutionError
from pyqt_polyform.core.field_path import (
    FieldPath, IndexSegment, NameSegment, resolve_owner, resolve_value,
)


@dataclass
class Leaf:
    c: int = 0


@dataclass
class Middle:
    b: List[Leaf] = field(default_factory=lambda: [Leaf(1), Leaf(2), Leaf(3)])


@dataclass
class Root:
    a: Optional[Middle] = field(default_factory=Middle)
    name: str = "root"


class SlottedBase:
    __slots__ = ("inner",)

    def __init__(self):
        self.inner = Leaf(7)


class SlottedChild(SlottedBase):
    __slots__ = ()


class Flaky:
    @property
    def broken(self):
        raise RuntimeError("getter blew up")


def test_parse_segments():
    path = FieldPath.parse("a.b[2].c")
    assert path.segments == (NameSegment("a"), NameSegment("b"), IndexSegment(2), NameSegment("c"))
    assert str(path) == "a.b[2].c"


def test_parse_legacy_array_form():
    assert FieldPath.parse("a.b.Array.data[2].c") == FieldPath.parse("a.b[2].c")


def test_parse_rejects_malformed_text():
    with pytest.raises(ValueError):
        FieldPath.parse("a.b[x]")


def test_compose_paths():
    path = (FieldPath.root() / "a" / "b").index(2) / "c"
    assert path == FieldPath.parse("a.b[2].c")
    assert path.parent == FieldPath.parse("a.b[2]")
    assert path.leaf == NameSegment("c")
    assert FieldPath.root().is_root


def test_resolve_owner_through_sequence():
    root = Root()
    assert resolve_owner(root, "a.b[2].c") is root.a.b[2]
    assert resolve_value(root, "a.b[2].c") == 3


def test_single_segment_owner_is_root():
    root = Root()
    assert resolve_owner(root, "name") is root
    assert FieldPath.parse("name").resolve_owner(root) is root


def test_out_of_range_index_fails():
    with pytest.raises(OwnerResolutionError) as exc_info:
        resolve_owner(Root(), "a.b[9].c")
    assert exc_info.value.segment == IndexSegment(9)


def test_none_intermediate_fails():
    with pytest.raises(OwnerResolutionError, match="None"):
        resolve_owner(Root(a=None), "a.b[0].c")


def test_missing_member_fails():
    with pytest.raises(OwnerResolutionError) as exc_info:
        resolve_owner(Root(), "a.missing[0].c")
    assert exc_info.value.segment == NameSegment("missing")


def test_error_is_lookup_error():
    with pytest.raises(LookupError):
        resolve_owner(Root(), "nothing.c")


def test_member_declared_on_base_class():
    holder = SlottedChild()
    assert resolve_owner(holder, "inner.c") is holder.inner


def test_index_into_non_sequence_fails():
    with pytest.raises(OwnerResolutionError, match="not an ordered sequence"):
        resolve_owner(Root(), "name[0].c")


def test_none_owner_fails():
    with pytest.raises(OwnerResolutionError, match="owner is None") as exc_info:
        resolve_owner(Root(a=None), "a.c")
    assert exc_info.value.segment == NameSegment("a")


def test_raising_getter_becomes_resolution_error():
    with pytest.raises(OwnerResolutionError, match="getter blew up") as exc_info:
        resolve_owner(Flaky(), "broken.c")
    assert isinstance(exc_info.value.__cause__, RuntimeError)
