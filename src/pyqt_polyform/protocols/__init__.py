"""
Protocol definitions for the inspector.

ABC contracts between the controller and the object graph it edits, the
surface it draws on, and the editor widgets of that surface. Also holds the
global inspector configuration.
"""

from .widget_protocols import ValueGettable, ValueSettable, ChangeSignalEmitter
from .object_graph import ObjectGraphView
from .host_surface import FieldLabel, HostSurface
from .inspector_config import InspectorConfig, set_inspector_config, get_inspector_config

__all__ = [
    "ValueGettable",
    "ValueSettable",
    "ChangeSignalEmitter",
    "ObjectGraphView",
    "FieldLabel",
    "HostSurface",
    "InspectorConfig",
    "set_inspector_config",
    "get_inspector_config",
]
