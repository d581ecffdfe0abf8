"""Tests for render passes of the polymorphic field controller."""

import logging
from abc import ABC
from dataclasses import dataclass
from typing import Annotated, Optional

import pytest

from pyqt_polyform.core.exceptions import OwnerResolutionError
from pyqt_polyform.core.field_path import FieldPath
from pyqt_polyform.core.type_catalog import RegistryTypeProvider, TypeCatalog
from pyqt_polyform.forms.field_config import FieldConfig
from pyqt_polyform.forms.polymorphic_field_controller import PolymorphicFieldController
from pyqt_polyform.protocols.inspector_config import InspectorConfig
from pyqt_polyform.services.object_graph_store import ObjectGraphStore
from inspector_models import IPerson, Node, Player, School, Student, Teacher


class IMachinePart(ABC):
    pass


class FaultyPart(IMachinePart):
    def __init__(self):
        raise RuntimeError("part failed to assemble")


@dataclass
class Machine:
    part: Optional[IMachinePart] = None
    speed: int = 3


@dataclass
class Thermostat:
    level: Annotated[int, FieldConfig(proxy_accessor_name="checked")] = 0
    after: int = 0

    @property
    def checked(self) -> int:
        return self.level

    @checked.setter
    def checked(self, value: int) -> None:
        if value > 10:
            raise ValueError("level too high")
        self.level = value


class RelocatingStore(ObjectGraphStore):
    """Store whose owner lookup fails for one path."""

    def __init__(self, root, lost_path):
        super().__init__(root)
        self.lost_path = lost_path

    def resolve_owner(self, path):
        if str(path) == self.lost_path:
            raise OwnerResolutionError(path, path.leaf, "owner moved")
        return super().resolve_owner(path)


@pytest.fixture
def people_catalog():
    registry = RegistryTypeProvider()
    registry.register(Student)
    registry.register(Teacher)
    return TypeCatalog(provider=registry)


def make_controller(root, surface, catalog=None, config=None):
    store = ObjectGraphStore(root)
    return store, PolymorphicFieldController(store, surface, catalog=catalog, config=config)


def test_selector_lists_unset_option_then_variants(surface, people_catalog):
    _, controller = make_controller(School(), surface, people_catalog)
    controller.render()

    row = surface.row("principal")
    assert row.kind == "popup"
    assert row.options == ["None (null)", "Student", "Teacher"]
    assert row.value == 0
    assert row.text == "Principal"


def test_selector_index_tracks_runtime_type(surface, people_catalog):
    _, controller = make_controller(School(principal=Teacher(1, "Art")), surface, people_catalog)
    controller.render()
    assert surface.row("principal").value == 2


def test_switch_constructs_with_zero_arg_constructor(surface, people_catalog):
    school = School()
    _, controller = make_controller(school, surface, people_catalog)
    surface.inputs["principal"] = 1
    controller.render()

    assert isinstance(school.principal, Student)


def test_switch_falls_back_without_constructor(surface, people_catalog):
    school = School()
    _, controller = make_controller(school, surface, people_catalog)
    surface.inputs["principal"] = 2
    controller.render()

    assert isinstance(school.principal, Teacher)
    assert school.principal.teach_id == 0
    assert school.principal.subject is None


def test_selecting_unset_clears_field(surface, people_catalog):
    school = School(principal=Student())
    _, controller = make_controller(school, surface, people_catalog)
    surface.inputs["principal"] = 0
    controller.render()

    assert school.principal is None


def test_switch_is_visible_to_nested_reads_in_same_pass(surface, people_catalog):
    school = School()
    store, controller = make_controller(school, surface, people_catalog)
    store.set_expanded(FieldPath.parse("principal"), True)
    surface.inputs["principal"] = 1
    controller.render()

    assert surface.keys == ["principal", "principal.student_count", "principal.name", "people"]
    assert surface.row("principal.student_count").depth == 1


def test_uses_loaded_classes_by_default(surface):
    _, controller = make_controller(School(), surface)
    controller.render()
    assert set(surface.row("principal").options[1:]) == {"Student", "Teacher"}


def test_custom_unset_label(surface, people_catalog):
    config = InspectorConfig(unset_option_label="(none)")
    _, controller = make_controller(School(), surface, people_catalog, config)
    controller.render()
    assert surface.row("principal").options[0] == "(none)"


def test_sequence_elements_get_selectors(surface, people_catalog):
    school = School(people=[Student(), Teacher(2, "Bio")])
    store, controller = make_controller(school, surface, people_catalog)
    store.set_expanded(FieldPath.parse("people"), True)
    surface.inputs["people[1]"] = 0
    controller.render()

    assert surface.row("people").kind == "label"
    assert surface.row("people[0]").text == "Element 0"
    assert surface.row("people[0]").value == 1
    assert school.people[1] is None


def test_collapsed_field_hides_members(surface, people_catalog):
    _, controller = make_controller(School(principal=Student()), surface, people_catalog)
    controller.render()
    assert "principal.name" not in surface.keys


def test_foldout_toggle_persists(surface, people_catalog):
    store, controller = make_controller(School(principal=Student()), surface, people_catalog)
    surface.toggles["principal"] = True
    controller.render()

    assert store.is_expanded(FieldPath.parse("principal"))
    assert "principal.name" in surface.keys
    controller.render()
    assert "principal.name" in surface.keys


def test_value_edit_is_committed(surface):
    player = Player()
    _, controller = make_controller(player, surface)
    surface.inputs["health"] = 40
    controller.render()
    assert player.health == 40


def test_proxy_setter_normalizes_edit(surface):
    player = Player()
    _, controller = make_controller(player, surface)
    surface.inputs["health"] = 150
    controller.render()

    assert player.health == 100
    assert player.hp == 100


def test_read_only_proxy_is_pulled_every_pass(surface):
    player = Player()
    _, controller = make_controller(player, surface)
    controller.render()
    assert player.armor == 7

    player.armor = 1
    controller.render()
    assert player.armor == 7


def test_read_only_field_ignores_input(surface, people_catalog):
    player = Player()
    _, controller = make_controller(player, surface, people_catalog)
    surface.inputs["locked"] = 1
    controller.render()

    assert surface.row("locked").enabled is False
    assert player.locked is None


def test_read_only_parent_disables_subtree(surface):
    player = Player()
    store, controller = make_controller(player, surface)
    store.set_expanded(FieldPath.parse("settings"), True)
    surface.inputs["settings.volume"] = 11
    controller.render()

    assert surface.row("settings").text == "Options"
    assert surface.row("settings.volume").enabled is False
    assert surface.row("settings.muted").enabled is False
    assert surface.row("health").enabled is True
    assert player.settings.volume == 5


def test_scopes_are_balanced_after_pass(surface):
    _, controller = make_controller(Player(), surface)
    controller.render()
    assert len(controller.writability) == 0


def test_self_referential_graph_renders_only_opened_levels(surface):
    node = Node(value=1)
    node.next = node
    store, controller = make_controller(node, surface)
    store.set_expanded(FieldPath.parse("next"), True)
    store.set_expanded(FieldPath.parse("next.next"), True)
    controller.render()

    assert surface.keys == [
        "value", "next", "next.value", "next.next", "next.next.value", "next.next.next",
    ]
    assert [surface.row(key).depth for key in surface.keys] == [0, 0, 1, 1, 2, 2]


def test_failing_field_does_not_abort_pass(surface, caplog):
    registry = RegistryTypeProvider()
    registry.register(FaultyPart)
    machine = Machine()
    _, controller = make_controller(machine, surface, TypeCatalog(provider=registry))
    surface.inputs["part"] = 1
    surface.inputs["speed"] = 9

    with caplog.at_level(logging.ERROR):
        controller.render()

    assert machine.part is None
    assert machine.speed == 9
    assert "speed" in surface.keys
    assert "part failed to assemble" in caplog.text


def test_out_of_range_selection_is_ignored(surface, people_catalog):
    school = School()
    _, controller = make_controller(school, surface, people_catalog)
    surface.inputs["principal"] = 7
    controller.render()
    assert school.principal is None


def test_variant_switch_locked_by_config(surface, people_catalog):
    @dataclass
    class Classroom:
        teacher: Annotated[Optional[IPerson], FieldConfig(can_switch_variant=False)] = None

    room = Classroom()
    _, controller = make_controller(room, surface, people_catalog)
    surface.inputs["teacher"] = 1
    controller.render()

    assert surface.row("teacher").enabled is False
    assert room.teacher is None


def test_raising_proxy_accessor_does_not_abort_pass(surface, caplog):
    thermostat = Thermostat()
    _, controller = make_controller(thermostat, surface)
    surface.inputs["level"] = 50
    surface.inputs["after"] = 3

    with caplog.at_level(logging.ERROR):
        controller.render()

    assert thermostat.level == 50
    assert thermostat.after == 3
    assert "after" in surface.keys
    assert "level too high" in caplog.text


def test_owner_lookup_failure_is_confined_to_field(surface, caplog):
    player = Player()
    store = RelocatingStore(player, "health")
    controller = PolymorphicFieldController(store, surface)
    surface.inputs["health"] = 150

    with caplog.at_level(logging.ERROR):
        controller.render()

    # Edit committed, clamp skipped
    assert player.health == 150
    assert player.armor == 7
    assert surface.keys == ["health", "armor", "person", "locked", "settings"]
    assert "owner moved" in caplog.text


def test_disabled_selector_never_switches(surface, people_catalog):
    player = Player()
    _, controller = make_controller(player, surface, people_catalog)
    # Host reports a new choice even for disabled selectors
    surface.popup = lambda key, label, depth, index, options, enabled: 1
    controller.render()

    assert player.locked is None
    assert isinstance(player.person, Student)
