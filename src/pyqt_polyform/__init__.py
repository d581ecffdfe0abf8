"""
pyqt-polyform: reflective polymorphic field inspector for PyQt6.

Draws editable inspectors for arbitrary Python object graphs. Fields declared
with an abstract type get a variant selector listing every concrete subtype,
and switching variants constructs and commits the new value in place.

Architecture:
- Tier 1 (Core): Type catalog, field paths, writability scopes, type utils
- Tier 2 (Protocols): Object graph and host surface contracts, global config
- Tier 3 (Services): Object graph store, variant factory, proxy synchronizer
- Tier 4 (Forms): Field states and the polymorphic field controller
- Tier 5 (Widgets): Qt editors, the Qt host surface and InspectorWidget

Key Features:
- Variant discovery over loaded subclasses with a bounded FIFO cache
- Dotted/indexed path resolution (``a.b[2].c``) over live objects
- Property-backed proxy accessors that clamp or normalize field values
- Nested read-only scopes that force whole subtrees read-only
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from .core.type_catalog import TypeCatalog, get_type_catalog
    from .core.field_path import FieldPath, resolve_owner
    from .core.writability import WritabilityScopeStack
    from .forms.field_config import FieldConfig, inspector_field
    from .forms.polymorphic_field_controller import PolymorphicFieldController
    from .services.object_graph_store import ObjectGraphStore
    from .services.proxy_synchronizer import ProxySynchronizer, SyncAction
    from .widgets.inspector_widget import InspectorWidget

_EXPORTS = {
    "TypeCatalog": ("pyqt_polyform.core.type_catalog", "TypeCatalog"),
    "get_type_catalog": ("pyqt_polyform.core.type_catalog", "get_type_catalog"),
    "FieldPath": ("pyqt_polyform.core.field_path", "FieldPath"),
    "resolve_owner": ("pyqt_polyform.core.field_path", "resolve_owner"),
    "WritabilityScopeStack": ("pyqt_polyform.core.writability", "WritabilityScopeStack"),
    "InspectorError": ("pyqt_polyform.core.exceptions", "InspectorError"),
    "InspectorConfig": ("pyqt_polyform.protocols.inspector_config", "InspectorConfig"),
    "set_inspector_config": ("pyqt_polyform.protocols.inspector_config", "set_inspector_config"),
    "get_inspector_config": ("pyqt_polyform.protocols.inspector_config", "get_inspector_config"),
    "FieldConfig": ("pyqt_polyform.forms.field_config", "FieldConfig"),
    "inspector_field": ("pyqt_polyform.forms.field_config", "inspector_field"),
    "PolymorphicFieldController": ("pyqt_polyform.forms.polymorphic_field_controller", "PolymorphicFieldController"),
    "ObjectGraphStore": ("pyqt_polyform.services.object_graph_store", "ObjectGraphStore"),
    "ProxySynchronizer": ("pyqt_polyform.services.proxy_synchronizer", "ProxySynchronizer"),
    "SyncAction": ("pyqt_polyform.services.proxy_synchronizer", "SyncAction"),
    "VariantFactory": ("pyqt_polyform.services.variant_factory", "VariantFactory"),
    "InspectorWidget": ("pyqt_polyform.widgets.inspector_widget", "InspectorWidget"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["__version__", *_EXPORTS.keys()]
