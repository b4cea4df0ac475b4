"""
Host-side adapter that describes live Python packages as metadata.

Modules become namespaces, classes defined in a module become types and
annotated attributes (plus `property` objects) become properties.
"""

from __future__ import annotations

import dataclasses
import enum
import importlib
import inspect
import pkgutil
import types
import typing
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from .metadata import Compilation, NamespaceSymbol, PropertySymbol, TypeRef, TypeSymbol

logger = get_logger(__name__)


def type_ref_from_annotation(annotation: Any) -> TypeRef:
    """Convert a type annotation into a TypeRef."""
    if annotation is None or annotation is type(None):
        return TypeRef("None")
    if isinstance(annotation, str):
        return TypeRef(annotation)
    if isinstance(annotation, typing.ForwardRef):
        return TypeRef(annotation.__forward_arg__)

    origin = typing.get_origin(annotation)
    if origin is not None:
        args = typing.get_args(annotation)
        if origin is typing.Literal:
            return TypeRef("Literal", "typing", tuple(TypeRef(repr(a)) for a in args))
        if origin is typing.Union or origin is types.UnionType:
            return TypeRef(
                "Union", "typing", tuple(type_ref_from_annotation(a) for a in args)
            )
        return TypeRef(
            getattr(origin, "__qualname__", repr(origin)),
            getattr(origin, "__module__", None),
            tuple(type_ref_from_annotation(a) for a in args),
        )

    if isinstance(annotation, type):
        return TypeRef(annotation.__qualname__, annotation.__module__)

    return TypeRef(repr(annotation))


def _unwrap_qualifier(annotation: Any) -> tuple[Any, bool]:
    """Strip ClassVar/Final, reporting whether the attribute is read-only."""
    if annotation is typing.ClassVar or annotation is typing.Final:
        return Any, True

    origin = typing.get_origin(annotation)
    if origin is typing.ClassVar or origin is typing.Final:
        args = typing.get_args(annotation)
        return (args[0] if args else Any), True

    return annotation, False


def _own_annotations(obj: Any) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(obj, eval_str=True))
    except (NameError, SyntaxError, TypeError) as e:
        logger.debug("Falling back to raw annotations for %r: %s", obj, e)
        return dict(inspect.get_annotations(obj))


def _is_frozen_dataclass(cls: type) -> bool:
    params = cls.__dict__.get("__dataclass_params__")
    return dataclasses.is_dataclass(cls) and params is not None and params.frozen


def _is_static(cls: type) -> bool:
    """Types that cannot be default-constructed as plain classes."""
    return (
        inspect.isabstract(cls)
        or issubclass(cls, enum.Enum)
        or bool(getattr(cls, "_is_protocol", False))
    )


def properties_from_class(cls: type) -> List[PropertySymbol]:
    """Describe the properties a class declares itself (not inherited ones)."""
    frozen = _is_frozen_dataclass(cls)
    members: List[PropertySymbol] = []

    for name, annotation in _own_annotations(cls).items():
        annotation, qualified_read_only = _unwrap_qualifier(annotation)
        read_only = qualified_read_only or frozen
        members.append(
            PropertySymbol(
                name=name,
                type=type_ref_from_annotation(annotation),
                is_public=not name.startswith("_"),
                has_public_setter=not read_only,
                is_read_only=read_only,
            )
        )

    for name, value in cls.__dict__.items():
        if not isinstance(value, property):
            continue
        getter_type = Any
        if value.fget is not None:
            getter_type = _own_annotations(value.fget).get("return", Any)
        members.append(
            PropertySymbol(
                name=name,
                type=type_ref_from_annotation(getter_type),
                is_public=not name.startswith("_") and value.fget is not None,
                has_public_setter=value.fset is not None,
                is_read_only=value.fset is None,
            )
        )

    return members


class _SymbolTable:
    """Caches one TypeSymbol per class so base chains share symbols."""

    def __init__(self):
        self._symbols: Dict[type, TypeSymbol] = {}

    def symbol_for(self, cls: type) -> TypeSymbol:
        if cls in self._symbols:
            return self._symbols[cls]

        symbol = TypeSymbol(
            name=cls.__qualname__,
            namespace=cls.__module__,
            kind="class",
            is_static=_is_static(cls),
        )
        self._symbols[cls] = symbol
        symbol.members = properties_from_class(cls)

        # Next class in the MRO, so the chain follows single inheritance.
        mro = cls.__mro__
        if len(mro) > 1 and mro[1] is not object:
            symbol.base = self.symbol_for(mro[1])

        return symbol


def namespace_from_module(
    module: types.ModuleType, table: Optional[_SymbolTable] = None
) -> NamespaceSymbol:
    """Describe a module (and, for packages, its submodules) as a namespace."""
    table = table or _SymbolTable()
    namespace = NamespaceSymbol(name=module.__name__)

    for value in vars(module).values():
        if inspect.isclass(value) and value.__module__ == module.__name__:
            namespace.types.append(table.symbol_for(value))

    if hasattr(module, "__path__"):
        for info in pkgutil.iter_modules(module.__path__, module.__name__ + "."):
            child = importlib.import_module(info.name)
            namespace.children.append(namespace_from_module(child, table))

    logger.debug(
        "Namespace %s: %d types, %d children",
        namespace.name,
        len(namespace.types),
        len(namespace.children),
    )
    return namespace


def compilation_from_package(
    package_name: str, assembly_name: Optional[str] = None
) -> Compilation:
    """
    Import a package and snapshot it as a Compilation.

    Args:
        package_name: Importable package or module name
        assembly_name: Assembly name to report; defaults to the top-level package

    Returns:
        Compilation whose global namespace contains the package tree
    """
    module = importlib.import_module(package_name)
    root = NamespaceSymbol(name="", children=[namespace_from_module(module)])
    return Compilation(
        assembly_name=assembly_name or package_name.split(".")[0],
        global_namespace=root,
    )
