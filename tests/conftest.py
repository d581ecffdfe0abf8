"""pytest configuration and fixtures for pyqt-polyform tests."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from collections import namedtuple

import pytest
from PyQt6.QtWidgets import QApplication

from pyqt_polyform.core.type_catalog import reset_type_catalog
from pyqt_polyform.protocols.host_surface import HostSurface
from pyqt_polyform.protocols.inspector_config import set_inspector_config


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def reset_globals():
    """Each test starts with default config and an empty variant catalog."""
    set_inspector_config(None)
    reset_type_catalog()
    yield
    set_inspector_config(None)
    reset_type_catalog()


Row = namedtuple("Row", "kind key text depth enabled value options")


class ScriptedSurface(HostSurface):
    """
    Headless surface recording every drawn row.

    ``inputs`` and ``toggles`` play the user: each entry is consumed by the
    next pass that draws its key. Input to a disabled row is dropped.
    """

    def __init__(self):
        self.rows = []
        self.inputs = {}
        self.toggles = {}
        self.passes = 0

    def begin_pass(self):
        self.rows = []
        self.passes += 1

    def end_pass(self):
        pass

    def label(self, key, label, depth):
        self.rows.append(Row("label", key, label.text, depth, None, None, None))

    def popup(self, key, label, depth, index, options, enabled):
        self.rows.append(Row("popup", key, label.text, depth, enabled, index, list(options)))
        if key in self.inputs:
            chosen = self.inputs.pop(key)
            if enabled:
                return chosen
        return index

    def value_field(self, key, label, depth, value, value_type, enabled):
        self.rows.append(Row("value", key, label.text, depth, enabled, value, None))
        if key in self.inputs:
            edited = self.inputs.pop(key)
            if enabled:
                return edited
        return value

    def foldout(self, key, expanded):
        return self.toggles.pop(key, expanded)

    @property
    def keys(self):
        return [row.key for row in self.rows]

    def row(self, key):
        matches = [row for row in self.rows if row.key == key]
        assert matches, f"row '{key}' was not drawn; drawn: {self.keys}"
        return matches[-1]


@pytest.fixture
def surface():
    return ScriptedSurface()
