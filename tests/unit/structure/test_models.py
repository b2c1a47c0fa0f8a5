"""Tests for the in-memory structure model."""

import pytest
from structman.structure.models import (
    ConfigError,
    Node,
    NodeKind,
    NodeOptions,
    StructureError,
    children_of,
)


def _dir(name: str, *children: Node, repair: bool = False) -> Node:
    """Create a directory node."""
    return Node(
        name=name,
        kind=NodeKind.DIRECTORY,
        options=NodeOptions(repair=repair),
        children=children,
    )


def _file(name: str) -> Node:
    """Create a file node."""
    return Node(name=name, kind=NodeKind.FILE)


class TestNodeKind:
    """Tests for NodeKind enum."""

    def test_node_kind_values(self) -> None:
        """NodeKind has exactly the directory and file variants."""
        assert NodeKind.DIRECTORY == "directory"
        assert NodeKind.FILE == "file"
        assert len(NodeKind) == 2


class TestNodeOptions:
    """Tests for NodeOptions."""

    def test_repair_defaults_to_false(self) -> None:
        """Options default to no repair."""
        assert NodeOptions().repair is False

    def test_options_are_frozen(self) -> None:
        """Options cannot be mutated after creation."""
        options = NodeOptions(repair=True)
        with pytest.raises(AttributeError):
            options.repair = False  # type: ignore[misc]


class TestNode:
    """Tests for Node construction and validation."""

    def test_directory_with_children(self) -> None:
        """A directory keeps its children in declaration order."""
        node = _dir("", _file("a.txt"), _dir("sub"))

        assert node.is_dir
        assert [c.name for c in node.children] == ["a.txt", "sub"]

    def test_file_node_defaults(self) -> None:
        """A file node has default options and no children."""
        node = _file("notes.md")

        assert node.is_file
        assert not node.is_dir
        assert node.options == NodeOptions()
        assert node.children == ()

    def test_file_with_children_rejected(self) -> None:
        """A file declaring children raises ConfigError."""
        with pytest.raises(ConfigError, match="cannot declare children"):
            Node(name="data.db", kind=NodeKind.FILE, children=(_file("x"),))

    def test_duplicate_sibling_directories_rejected(self) -> None:
        """Two sibling directories with the same name raise ConfigError."""
        with pytest.raises(ConfigError, match="Duplicate entry 'projects'"):
            _dir("", _dir("projects"), _dir("projects"))

    def test_file_and_directory_name_collision_rejected(self) -> None:
        """A file and a directory with the same name collide."""
        with pytest.raises(ConfigError, match="Duplicate entry"):
            _dir("", _file("cache"), _dir("cache"))

    def test_same_name_in_different_parents_allowed(self) -> None:
        """Names only need to be unique among siblings."""
        node = _dir("", _dir("a", _dir("logs")), _dir("b", _dir("logs")))

        assert node.count() == 5

    @pytest.mark.parametrize("name", [".", "..", "a/b", "a\\b"])
    def test_invalid_names_rejected(self, name: str) -> None:
        """Names must be a single, non-reserved path segment."""
        with pytest.raises(ConfigError):
            _dir(name)

    def test_empty_child_name_rejected(self) -> None:
        """Only the root may have an empty name."""
        with pytest.raises(ConfigError, match="empty name"):
            _dir("", _dir(""))

    def test_config_error_is_structure_error(self) -> None:
        """ConfigError belongs to the StructureError hierarchy."""
        assert issubclass(ConfigError, StructureError)


class TestTraversal:
    """Tests for children_of and iter_nodes."""

    def test_children_of_is_stable(self) -> None:
        """Repeated calls return the same sequence."""
        node = _dir("", _file("b"), _file("a"), _dir("c"))

        assert children_of(node) == children_of(node)
        assert [c.name for c in children_of(node)] == ["b", "a", "c"]

    def test_children_of_file_is_empty(self) -> None:
        """Files have no children."""
        assert children_of(_file("x")) == ()

    def test_iter_nodes_pre_order(self) -> None:
        """iter_nodes yields parents before children with relative paths."""
        tree = _dir("", _file("settings.json"), _dir("projects", _dir("archive")), _dir("logs"))

        paths = [path for path, _ in tree.iter_nodes()]

        assert paths == [
            ".",
            "settings.json",
            "projects",
            "projects/archive",
            "logs",
        ]

    def test_count(self) -> None:
        """count includes the node itself and all descendants."""
        tree = _dir("", _file("a"), _dir("b", _file("c")))

        assert tree.count() == 4
