"""
Builder generator driven by the source object model.

Emits one `{Type}Builder` class per domain type. Each builder has a
`with_*` method per property, `add_*_item`/`clear_*` for collection
properties and a `build()` that creates and populates the target.
"""

from typing import List

from ...logging_config import get_logger
from ..core.model import PropertyDescriptor, TypeDescriptor
from ..core.naming import (
    add_item_method_name,
    builder_class_name,
    clear_method_name,
    parameter_name,
    protected_name,
    with_method_name,
)
from ..core.source import ClassBuilder, SourceBuilder
from .base import DomainModelGenerator, module_imports, require_element_type

logger = get_logger(__name__)


class BuilderGenerator(DomainModelGenerator):
    """Generates builders through SourceBuilder."""

    @property
    def name(self) -> str:
        return "builder"

    @property
    def diagnostic_id(self) -> str:
        return "BUILDER_ERROR"

    @property
    def artifact_name(self) -> str:
        return self.config.builder_artifact

    def render(self, types: List[TypeDescriptor]) -> str:
        source = SourceBuilder(self.config.indent_size)
        source.with_import("__future__", "annotations")
        source.with_import("typing", "final")
        for module in module_imports(types):
            source.with_import(module)

        for type_desc in types:
            class_name = builder_class_name(type_desc.name, self.config.builder_suffix)
            class_builder = source.with_namespace(type_desc.namespace).with_partial_class(
                class_name
            )
            self._add_members(class_builder, type_desc)
            self._add_build_method(class_builder, type_desc)
            logger.debug(
                "Built %s with %d properties", class_name, len(type_desc.properties)
            )

        return source.build()

    def _add_members(self, class_builder: ClassBuilder, type_desc: TypeDescriptor):
        for prop in type_desc.properties:
            if prop.is_collection:
                require_element_type(type_desc, prop)
                class_builder.with_protected_property(
                    prop.type_name, prop.name
                ).with_initializer("[]")
            else:
                class_builder.with_protected_property(prop.type_name, prop.name)

        for prop in type_desc.properties:
            if prop.is_collection:
                self._add_collection_methods(class_builder, type_desc, prop)
            else:
                self._add_scalar_method(class_builder, prop)

    def _add_scalar_method(self, class_builder: ClassBuilder, prop: PropertyDescriptor):
        member = protected_name(prop.name)
        param = parameter_name(prop.name)

        (class_builder.with_method(class_builder.name, with_method_name(prop.name))
            .with_parameter(prop.type_name, param)
            .with_statement(f"self.{member} = {param}")
            .with_statement("return self"))

    def _add_collection_methods(
        self,
        class_builder: ClassBuilder,
        type_desc: TypeDescriptor,
        prop: PropertyDescriptor,
    ):
        element_type = require_element_type(type_desc, prop)
        member = protected_name(prop.name)
        param = parameter_name(prop.name)

        (class_builder.with_method(class_builder.name, with_method_name(prop.name))
            .with_params(element_type, param)
            .with_statement(f"self.{member} = list({param})")
            .with_statement("return self"))

        (class_builder.with_virtual_method(class_builder.name, add_item_method_name(prop.name))
            .with_parameter(element_type, "item")
            .with_block_statement(f"if self.{member} is None")
                .with_statement(f"self.{member} = []")
                .end()
            .with_empty_statement()
            .with_statement(f"self.{member}.append(item)")
            .with_statement("return self"))

        (class_builder.with_virtual_method(class_builder.name, clear_method_name(prop.name))
            .with_block_statement(f"if self.{member} is None")
                .with_statement(f"self.{member} = []")
                .end()
            .with_empty_statement()
            .with_statement(f"self.{member}.clear()")
            .with_statement("return self"))

    def _add_build_method(self, class_builder: ClassBuilder, type_desc: TypeDescriptor):
        target = type_desc.qualified_name
        method_builder = class_builder.with_method(target, "build").with_statement(
            f"item = {target}()"
        )

        for prop in type_desc.properties:
            method_builder.with_statement(
                f"item.{prop.name} = self.{protected_name(prop.name)}"
            )

        method_builder.with_statement("return item")
