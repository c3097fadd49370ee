from stowtrack.models.location import Location, Root, ChildOf, ParentRef, parent_ref
from stowtrack.models.item import Item

__all__ = ["Location", "Root", "ChildOf", "ParentRef", "parent_ref", "Item"]
