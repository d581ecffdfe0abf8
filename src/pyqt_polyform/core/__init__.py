"""
Core inspector utilities.

Type discovery, field paths, writability scopes and type introspection.
Everything except DebounceTimer is free of Qt.
"""

from .exceptions import (
    InspectorError,
    OwnerResolutionError,
    FieldAssignmentError,
    ProxyBindingError,
    VariantConstructionError,
)
from .type_utils import FieldTypeUtils
from .type_catalog import (
    TypeProvider,
    LoadedTypeProvider,
    ModuleTypeProvider,
    RegistryTypeProvider,
    TypeCatalog,
    get_type_catalog,
    set_type_catalog,
    reset_type_catalog,
    register_variant,
)
from .field_path import FieldPath, NameSegment, IndexSegment, resolve_owner, resolve_value
from .writability import WritabilityScopeStack
from .debounce_timer import DebounceTimer

__all__ = [
    "InspectorError",
    "OwnerResolutionError",
    "FieldAssignmentError",
    "ProxyBindingError",
    "VariantConstructionError",
    "FieldTypeUtils",
    "TypeProvider",
    "LoadedTypeProvider",
    "ModuleTypeProvider",
    "RegistryTypeProvider",
    "TypeCatalog",
    "get_type_catalog",
    "set_type_catalog",
    "reset_type_catalog",
    "register_variant",
    "FieldPath",
    "NameSegment",
    "IndexSegment",
    "resolve_owner",
    "resolve_value",
    "WritabilityScopeStack",
    "DebounceTimer",
]
