"""Structure model and configuration.

This module provides the in-memory tree of required directories and
files, the configuration schema it is built from, and structure file
loading.
"""

from structman.structure.build import build
from structman.structure.loader import (
    StructureNotFoundError,
    StructureParseError,
    load_structure,
    save_structure,
)
from structman.structure.models import (
    ConfigError,
    Node,
    NodeKind,
    NodeOptions,
    StructureError,
    Tree,
    children_of,
)
from structman.structure.schema import StructureConfig, StructureItem, StructureItemOptions

__all__ = [
    "ConfigError",
    "Node",
    "NodeKind",
    "NodeOptions",
    "StructureConfig",
    "StructureError",
    "StructureItem",
    "StructureItemOptions",
    "StructureNotFoundError",
    "StructureParseError",
    "Tree",
    "build",
    "children_of",
    "load_structure",
    "save_structure",
]
