"""
Field states and the polymorphic field controller.

Per-pass field states classify each member of the inspected graph; the
controller renders them onto a host surface.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .field_config import FieldConfig, inspector_field, get_field_config
    from .field_state import FieldState, FieldStateBase, create_field_state
    from .polymorphic_field_controller import PolymorphicFieldController

_EXPORTS = {
    "FieldConfig": ("pyqt_polyform.forms.field_config", "FieldConfig"),
    "DEFAULT_FIELD_CONFIG": ("pyqt_polyform.forms.field_config", "DEFAULT_FIELD_CONFIG"),
    "inspector_field": ("pyqt_polyform.forms.field_config", "inspector_field"),
    "get_field_config": ("pyqt_polyform.forms.field_config", "get_field_config"),
    "FieldState": ("pyqt_polyform.forms.field_state", "FieldState"),
    "FieldStateBase": ("pyqt_polyform.forms.field_state", "FieldStateBase"),
    "FieldStateMeta": ("pyqt_polyform.forms.field_state", "FieldStateMeta"),
    "PolymorphicFieldState": ("pyqt_polyform.forms.field_state", "PolymorphicFieldState"),
    "SequenceFieldState": ("pyqt_polyform.forms.field_state", "SequenceFieldState"),
    "CompositeFieldState": ("pyqt_polyform.forms.field_state", "CompositeFieldState"),
    "ValueFieldState": ("pyqt_polyform.forms.field_state", "ValueFieldState"),
    "create_field_state": ("pyqt_polyform.forms.field_state", "create_field_state"),
    "PolymorphicFieldController": ("pyqt_polyform.forms.polymorphic_field_controller", "PolymorphicFieldController"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
