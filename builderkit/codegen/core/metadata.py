"""
Read-only view of the host's type graph and additional text resources.

The generators never look at live Python objects directly. The host (or
the reflection adapter in reflection.py) describes a compilation snapshot
with these plain value types and hands it to a generation pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

BUILTINS_MODULE = "builtins"


@dataclass(frozen=True)
class TypeRef:
    """A declared type, possibly generic."""

    name: str
    module: Optional[str] = None
    args: Tuple["TypeRef", ...] = ()

    @property
    def qualified_name(self) -> str:
        """Render the type the way generated code refers to it."""
        if self.module and self.module != BUILTINS_MODULE:
            base = f"{self.module}.{self.name}"
        else:
            base = self.name

        if self.args:
            return f"{base}[{', '.join(arg.qualified_name for arg in self.args)}]"
        return base

    def __str__(self) -> str:
        return self.qualified_name


@dataclass(frozen=True)
class PropertySymbol:
    """A property (annotated attribute or `property`) declared on a type."""

    name: str
    type: TypeRef
    is_public: bool = True
    has_public_setter: bool = True
    is_read_only: bool = False


@dataclass
class TypeSymbol:
    """A type declared in a namespace, with its own members and its base."""

    name: str
    namespace: str
    kind: str = "class"
    is_static: bool = False
    members: List[PropertySymbol] = field(default_factory=list)
    base: Optional["TypeSymbol"] = None

    @property
    def qualified_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    def ancestors(self) -> Iterator["TypeSymbol"]:
        """Walk the base chain outward, nearest ancestor first."""
        base = self.base
        while base is not None:
            yield base
            base = base.base

    def __str__(self) -> str:
        return self.qualified_name


@dataclass
class NamespaceSymbol:
    """A namespace holding types and child namespaces."""

    name: str
    types: List[TypeSymbol] = field(default_factory=list)
    children: List["NamespaceSymbol"] = field(default_factory=list)

    def __str__(self) -> str:
        return self.name


@dataclass
class Compilation:
    """One snapshot of host metadata; a builder pass runs against one of these."""

    assembly_name: str
    global_namespace: NamespaceSymbol = field(
        default_factory=lambda: NamespaceSymbol(name="")
    )


@dataclass(frozen=True)
class AdditionalText:
    """A non-code resource supplied by the host. `text` is None when unreadable."""

    path: str
    text: Optional[str] = None
