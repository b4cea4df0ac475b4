"""
Shared discovery for the builder generators.

Both builder flavours gate on the target assembly and consume the same
type model; only the way they produce text differs.
"""

from abc import abstractmethod
from typing import Dict, List, Optional

from ...logging_config import get_logger
from ..core.generator import GeneratorContext, MetadataShapeError, SourceGenerator
from ..core.model import PropertyDescriptor, TypeDescriptor, extract_type_model
from ..core.naming import add_item_method_name, clear_method_name, with_method_name

logger = get_logger(__name__)


def require_element_type(type_desc: TypeDescriptor, prop: PropertyDescriptor) -> str:
    """Element type of a collection property, which must have one type argument."""
    if prop.element_type is None:
        raise MetadataShapeError(
            f"Collection property {type_desc.qualified_name}.{prop.name} "
            f"must declare exactly one type argument, got "
            f"{prop.type_argument_count} ({prop.type_name})"
        )
    return prop.element_type


def builder_method_names(prop: PropertyDescriptor) -> List[str]:
    """Fluent method names a builder declares for one property."""
    if prop.is_collection:
        return [
            with_method_name(prop.name),
            add_item_method_name(prop.name),
            clear_method_name(prop.name),
        ]
    return [with_method_name(prop.name)]


def check_type_names(types: List[TypeDescriptor]):
    """
    Reject types whose builders would share a class name.

    All builders land in one module, so two types with the same simple
    name in different namespaces would silently replace each other.
    """
    seen: Dict[str, TypeDescriptor] = {}
    for type_desc in types:
        other = seen.setdefault(type_desc.name, type_desc)
        if other is not type_desc:
            raise MetadataShapeError(
                f"Types {other.qualified_name} and {type_desc.qualified_name} "
                f"would generate builders with the same name"
            )


def check_method_names(type_desc: TypeDescriptor):
    """Reject properties whose fluent methods would share a name."""
    owners: Dict[str, str] = {}
    for prop in type_desc.properties:
        for method in builder_method_names(prop):
            owner = owners.setdefault(method, prop.name)
            if owner != prop.name:
                raise MetadataShapeError(
                    f"Properties {owner!r} and {prop.name!r} of "
                    f"{type_desc.qualified_name} both map to builder method {method}()"
                )


def module_imports(types: List[TypeDescriptor]) -> List[str]:
    """Namespaces the generated build() methods reference, in first-seen order."""
    modules: List[str] = []
    for type_desc in types:
        if type_desc.namespace and type_desc.namespace not in modules:
            modules.append(type_desc.namespace)
    return modules


class DomainModelGenerator(SourceGenerator):
    """Base for generators that emit one builder per discovered domain type."""

    def discover(self, context: GeneratorContext) -> Optional[List[TypeDescriptor]]:
        """Type model for this pass, or None when the pass does not apply."""
        compilation = context.compilation
        if compilation is None or compilation.assembly_name != self.config.target_assembly:
            logger.debug(
                "%s skipped: assembly %r is not %r",
                self.name,
                getattr(compilation, "assembly_name", None),
                self.config.target_assembly,
            )
            return None

        types = extract_type_model(
            compilation.global_namespace, self.config.target_namespace
        )
        check_type_names(types)
        for type_desc in types:
            check_method_names(type_desc)

        logger.info(
            "%s discovered %d types under %r",
            self.name,
            len(types),
            self.config.target_namespace,
        )
        return types

    def generate(self, context: GeneratorContext) -> Optional[str]:
        types = self.discover(context)
        if types is None:
            return None
        return self.render(types)

    @abstractmethod
    def render(self, types: List[TypeDescriptor]) -> str:
        """Render the builders for the discovered types."""
        pass
