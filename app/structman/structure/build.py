"""Build structure trees from parsed configuration.

Converts a validated StructureItem (or a plain nested mapping) into the
immutable Node tree walked by the reconciler. All configuration problems
surface here as ConfigError, before any filesystem access.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from structman.structure.models import ConfigError, Node, NodeKind, NodeOptions, Tree
from structman.structure.schema import StructureItem


def build(spec: StructureItem | Mapping[str, Any]) -> Tree:
    """Build a tree from a structure specification.

    Args:
        spec: A StructureItem, or a nested mapping of the form
            ``{"options": {...}, "files": [...], "dirs": {name: {...}}}``.

    Returns:
        Root directory node of the tree.

    Raises:
        ConfigError: If the specification is malformed, declares a name
            twice among siblings, or contains an invalid entry name.
    """
    if isinstance(spec, StructureItem):
        item = spec
    else:
        try:
            item = StructureItem.model_validate(spec)
        except ValidationError as e:
            raise ConfigError(f"Invalid structure specification: {e}") from e

    return _build_dir("", item)


def _build_dir(name: str, item: StructureItem) -> Node:
    """Recursively convert a StructureItem into a directory node."""
    children: list[Node] = [Node(name=file, kind=NodeKind.FILE) for file in item.files]
    children.extend(_build_dir(dir_name, sub) for dir_name, sub in item.dirs.items())
    return Node(
        name=name,
        kind=NodeKind.DIRECTORY,
        options=NodeOptions(repair=item.options.repair),
        children=tuple(children),
    )
