"""Tests for the staging object-graph store."""

from dataclasses import dataclass, field
from typing import List

import pytest

from pyqt_polyform.core.exceptions import FieldAssignmentError, OwnerResolutionError
from pyqt_polyform.core.field_path import FieldPath
from pyqt_polyform.forms.field_state import (
    CompositeFieldState, PolymorphicFieldState, SequenceFieldState, ValueFieldState,
)
from pyqt_polyform.services.object_graph_store import ObjectGraphStore
from inspector_models import Node, Player, School, Student


@dataclass
class Track:
    coords: tuple = (1, 2, 3)
    tags: List[str] = field(default_factory=lambda: ["a", "b"])

    @property
    def total(self) -> int:
        return sum(self.coords)


def test_edits_are_staged_until_commit():
    player = Player()
    store = ObjectGraphStore(player)
    store.set_value(FieldPath.parse("health"), 30)

    assert store.has_pending
    assert player.health == 0
    assert store.commit() == 1
    assert player.health == 30
    assert not store.has_pending


def test_commit_notifies_listeners():
    committed = []
    store = ObjectGraphStore(Player())
    store.add_commit_listener(lambda path, value: committed.append((str(path), value)))
    store.set_value(FieldPath.parse("health"), 5)
    store.set_value(FieldPath.parse("armor"), 2)
    store.commit()
    assert committed == [("health", 5), ("armor", 2)]


def test_discard_drops_edits():
    player = Player()
    store = ObjectGraphStore(player)
    store.set_value(FieldPath.parse("health"), 30)
    store.discard()
    assert store.commit() == 0
    assert player.health == 0


def test_assign_list_element():
    track = Track()
    store = ObjectGraphStore(track)
    store.set_value(FieldPath.parse("tags[1]"), "z")
    store.commit()
    assert track.tags == ["a", "z"]


def test_assign_tuple_element_rebuilds_tuple():
    track = Track()
    store = ObjectGraphStore(track)
    store.set_value(FieldPath.parse("coords[1]"), 9)
    store.commit()
    assert track.coords == (1, 9, 3)


def test_assign_read_only_property_fails():
    store = ObjectGraphStore(Track())
    store.set_value(FieldPath.parse("total"), 3)
    with pytest.raises(FieldAssignmentError):
        store.commit()


def test_assign_through_missing_owner_fails():
    store = ObjectGraphStore(School())
    store.set_value(FieldPath.parse("principal.name"), "x")
    with pytest.raises(OwnerResolutionError):
        store.commit()


def test_iter_fields_classifies_members():
    states = {state.name: state for state in ObjectGraphStore(Player()).iter_fields(FieldPath.root(), 0)}

    assert list(states) == ["health", "armor", "person", "locked", "settings"]
    assert isinstance(states["health"], ValueFieldState)
    assert states["health"].config.proxy_accessor_name == "hp"
    assert isinstance(states["person"], PolymorphicFieldState)
    assert isinstance(states["settings"], CompositeFieldState)
    assert states["settings"].config.display_name == "Options"
    assert all(state.depth == 0 for state in states.values())


def test_sequence_children_are_elements():
    school = School(people=[Student(), None])
    store = ObjectGraphStore(school)
    people = next(s for s in store.iter_fields(FieldPath.root(), 0) if s.name == "people")
    assert isinstance(people, SequenceFieldState)

    children = list(store.iter_descendants(people))
    assert [str(child.path) for child in children] == ["people[0]", "people[1]"]
    assert all(isinstance(child, PolymorphicFieldState) for child in children)
    assert all(child.depth == 1 for child in children)


def test_descendants_follow_expanded_state():
    school = School(principal=Student(name="Ada"))
    store = ObjectGraphStore(school)
    principal = next(store.iter_fields(FieldPath.root(), 0))

    assert [child.name for child in store.iter_descendants(principal)] == ["student_count", "name"]


def test_descendant_walk_stops_at_cycles():
    node = Node(value=1)
    node.next = node
    store = ObjectGraphStore(node)
    store.set_expanded(FieldPath.parse("next"), True)
    store.set_expanded(FieldPath.parse("next.next"), True)

    next_state = [s for s in store.iter_fields(FieldPath.root(), 0) if s.name == "next"][0]
    paths = [str(child.path) for child in store.iter_descendants(next_state)]
    assert paths == ["next.value", "next.next"]


def test_expanded_state_persists():
    store = ObjectGraphStore(Player())
    path = FieldPath.parse("settings")
    assert not store.is_expanded(path)
    store.set_expanded(path, True)
    assert store.is_expanded(path)


def test_missing_owner_is_a_resolution_error():
    store = ObjectGraphStore(School())
    with pytest.raises(OwnerResolutionError, match="owner is None"):
        store.resolve_owner(FieldPath.parse("principal.name"))
