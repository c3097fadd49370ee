import logging
from typing import Iterable

from stowtrack.models.location import Location, Root

logger = logging.getLogger(__name__)


class LocationTreeNode:
    """A location and its ordered children. Built per request, never stored."""

    __slots__ = ("location", "children")

    def __init__(self, location: Location) -> None:
        self.location = location
        self.children: list[LocationTreeNode] = []

    def __repr__(self) -> str:
        return f"LocationTreeNode({self.location.id!r}, children={len(self.children)})"


def _sort_key(node: LocationTreeNode) -> tuple[str, str]:
    return node.location.name, node.location.id


def _sort_recursively(nodes: list[LocationTreeNode]) -> None:
    nodes.sort(key=_sort_key)
    for node in nodes:
        _sort_recursively(node.children)


def build_tree(locations: Iterable[Location]) -> list[LocationTreeNode]:
    """Turn flat location rows into a forest ordered by name, then id.

    Rows whose parent is not in the input are left out of the tree.
    """
    nodes = {location.id: LocationTreeNode(location) for location in locations}
    roots: list[LocationTreeNode] = []
    for node in nodes.values():
        parent = node.location.parent
        if isinstance(parent, Root):
            roots.append(node)
        elif parent.location_id in nodes:
            nodes[parent.location_id].children.append(node)
        else:
            logger.debug("Dropping %s from tree, parent %s missing", node.location.id, parent.location_id)
    _sort_recursively(roots)
    return roots
