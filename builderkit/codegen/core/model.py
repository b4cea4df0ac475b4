"""
Type model extraction for builder generation.

Walks host metadata, finds candidate types and resolves their writable
public properties into the normalized descriptors the generators use.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Hashable, Iterable, Iterator, List, Optional, TypeVar

from .metadata import NamespaceSymbol, PropertySymbol, TypeRef, TypeSymbol

T = TypeVar("T")


class CollectionKind(Enum):
    """Container shapes recognised as collection properties."""

    LIST = "list"  # growable ordered list
    MUTABLE_SEQUENCE = "mutable_sequence"  # read/write list capability
    COLLECTION = "collection"  # collection capability


# (module, name) of the declared type -> recognised shape.
COLLECTION_SHAPES: Dict[tuple, CollectionKind] = {
    ("builtins", "list"): CollectionKind.LIST,
    ("typing", "List"): CollectionKind.LIST,
    ("collections.abc", "MutableSequence"): CollectionKind.MUTABLE_SEQUENCE,
    ("typing", "MutableSequence"): CollectionKind.MUTABLE_SEQUENCE,
    ("collections.abc", "Collection"): CollectionKind.COLLECTION,
    ("typing", "Collection"): CollectionKind.COLLECTION,
}


@dataclass
class PropertyDescriptor:
    """An eligible property of a discovered type."""

    name: str
    type_name: str
    type_ref: TypeRef
    is_collection: bool = False
    collection_kind: Optional[CollectionKind] = None
    element_type: Optional[str] = None

    @property
    def type_argument_count(self) -> int:
        return len(self.type_ref.args)


@dataclass
class TypeDescriptor:
    """A discovered domain type and its eligible properties."""

    name: str
    namespace: str
    properties: List[PropertyDescriptor] = field(default_factory=list)

    @property
    def qualified_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    @property
    def scalar_properties(self) -> List[PropertyDescriptor]:
        return [p for p in self.properties if not p.is_collection]

    @property
    def collection_properties(self) -> List[PropertyDescriptor]:
        return [p for p in self.properties if p.is_collection]


def distinct_by(source: Iterable[T], key: Callable[[T], Hashable]) -> Iterator[T]:
    """Yield items whose key was not seen before, keeping first-seen order."""
    seen = set()
    for item in source:
        item_key = key(item)
        if item_key not in seen:
            seen.add(item_key)
            yield item


def find_types(namespace: NamespaceSymbol, included_namespace: str) -> List[TypeSymbol]:
    """
    Recursively collect non-static classes under matching namespaces.

    The filter is a case-insensitive prefix match applied to every
    namespace independently; recursion always continues into children.

    Args:
        namespace: Namespace to start from (usually the global namespace)
        included_namespace: Namespace prefix filter

    Returns:
        Matching types in walk order (may contain repeats)
    """
    found: List[TypeSymbol] = []

    if namespace.name.lower().startswith(included_namespace.lower()):
        for type_symbol in namespace.types:
            if type_symbol.kind == "class" and not type_symbol.is_static:
                found.append(type_symbol)

    for child in namespace.children:
        found.extend(find_types(child, included_namespace))

    return found


def is_eligible(prop: PropertySymbol) -> bool:
    """Publicly readable, publicly writable and not read-only."""
    return prop.is_public and prop.has_public_setter and not prop.is_read_only


def find_type_properties(type_symbol: TypeSymbol) -> List[PropertySymbol]:
    """Eligible properties of a type and its ancestors, derived declarations first."""
    members: List[PropertySymbol] = [m for m in type_symbol.members if is_eligible(m)]

    for ancestor in type_symbol.ancestors():
        members.extend(m for m in ancestor.members if is_eligible(m))

    return list(distinct_by(members, lambda m: m.name))


def collection_kind(type_ref: TypeRef) -> Optional[CollectionKind]:
    """Classify a declared type; None means scalar."""
    return COLLECTION_SHAPES.get((type_ref.module or "builtins", type_ref.name))


def is_collection(prop: PropertySymbol) -> bool:
    return collection_kind(prop.type) is not None


def describe_property(prop: PropertySymbol) -> PropertyDescriptor:
    kind = collection_kind(prop.type)
    element_type = None
    if kind is not None and len(prop.type.args) == 1:
        element_type = prop.type.args[0].qualified_name

    return PropertyDescriptor(
        name=prop.name,
        type_name=prop.type.qualified_name,
        type_ref=prop.type,
        is_collection=kind is not None,
        collection_kind=kind,
        element_type=element_type,
    )


def find_properties(type_symbol: TypeSymbol) -> List[PropertyDescriptor]:
    """Resolve the property descriptors of a type."""
    return [describe_property(p) for p in find_type_properties(type_symbol)]


def describe_type(type_symbol: TypeSymbol) -> TypeDescriptor:
    return TypeDescriptor(
        name=type_symbol.name,
        namespace=type_symbol.namespace,
        properties=find_properties(type_symbol),
    )


def extract_type_model(
    namespace: NamespaceSymbol, included_namespace: str
) -> List[TypeDescriptor]:
    """
    Build the deduplicated type model for a namespace tree.

    Types are deduplicated by qualified name, keeping the first sighting.
    """
    candidates = find_types(namespace, included_namespace)
    return [
        describe_type(t) for t in distinct_by(candidates, lambda t: t.qualified_name)
    ]
