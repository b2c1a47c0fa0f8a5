"""In-memory structure model.

This module defines the tree of required directories and files that
the reconciler walks. The model is pure data: building and inspecting
a tree never touches the filesystem.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class StructureError(Exception):
    """Base exception for structure-related errors."""


class ConfigError(StructureError):
    """Raised when a structure specification is malformed or contradictory."""


class NodeKind(str, Enum):
    """Kind of filesystem entry a node requires.

    Attributes:
        DIRECTORY: A directory that may declare children.
        FILE: A regular file. Files never have children.
    """

    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True, slots=True)
class NodeOptions:
    """Per-node policy flags.

    Options apply to the declaring node only; children never
    inherit them.

    Attributes:
        repair: Replace the entry when it exists with the wrong kind.
    """

    repair: bool = False


@dataclass(frozen=True, slots=True)
class Node:
    """One required filesystem entry.

    Directory nodes own their children outright. The root node of a
    tree carries the empty name and maps directly to the root path.

    Attributes:
        name: Path segment relative to the parent ("" for the root).
        kind: Whether the entry is a directory or a file.
        options: Policy flags for this node.
        children: Child nodes, in stable declaration order.
    """

    name: str
    kind: NodeKind
    options: NodeOptions = field(default_factory=NodeOptions)
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        """Validate node shape after initialization."""
        if self.name:
            validate_entry_name(self.name)

        if self.kind == NodeKind.FILE and self.children:
            msg = f"File '{self.name}' cannot declare children"
            raise ConfigError(msg)

        seen: set[str] = set()
        for child in self.children:
            if not child.name:
                msg = f"Child of '{self.name or '<root>'}' has an empty name"
                raise ConfigError(msg)
            if child.name in seen:
                msg = f"Duplicate entry '{child.name}' in '{self.name or '<root>'}'"
                raise ConfigError(msg)
            seen.add(child.name)

    @property
    def is_dir(self) -> bool:
        """Check if this node requires a directory."""
        return self.kind == NodeKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        """Check if this node requires a regular file."""
        return self.kind == NodeKind.FILE

    def iter_nodes(self, prefix: str = "") -> Iterator[tuple[str, Node]]:
        """Iterate over this node and its descendants in pre-order.

        Args:
            prefix: Relative path of this node's parent.

        Yields:
            Tuples of (relative path, node). The root yields ".".
        """
        rel = f"{prefix}/{self.name}" if prefix else self.name or "."
        yield rel, self
        base = "" if rel == "." else rel
        for child in children_of(self):
            yield from child.iter_nodes(base)

    def count(self) -> int:
        """Count this node and all of its descendants."""
        return 1 + sum(child.count() for child in self.children)


# The root Directory node of a structure
Tree = Node


def children_of(node: Node) -> tuple[Node, ...]:
    """Return the children of a node in stable order.

    Files come first in the order they were declared, followed by
    directories in mapping order. Repeated calls on the same tree
    always return the same sequence.

    Args:
        node: Node to inspect.

    Returns:
        Tuple of child nodes (empty for files).
    """
    return node.children


def validate_entry_name(name: str) -> None:
    """Reject names that are not a single path segment.

    Raises:
        ConfigError: If the name is reserved or contains a separator.
    """
    if name in (".", ".."):
        msg = f"Invalid entry name '{name}'"
        raise ConfigError(msg)
    if "/" in name or "\\" in name or "\0" in name:
        msg = f"Entry name '{name}' must be a single path segment"
        raise ConfigError(msg)
