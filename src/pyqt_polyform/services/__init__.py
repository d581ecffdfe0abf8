"""
Service layer for the inspector.

Object graph storage with staged edits, variant construction and proxy
accessor synchronization.
"""

from .object_graph_store import ObjectGraphStore
from .variant_factory import VariantFactory
from .proxy_synchronizer import ProxySynchronizer, ProxyBinding, SyncAction

__all__ = [
    "ObjectGraphStore",
    "VariantFactory",
    "ProxySynchronizer",
    "ProxyBinding",
    "SyncAction",
]
