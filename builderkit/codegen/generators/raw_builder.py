"""
Builder generator driven by Jinja2 templates.

Produces the same builders as BuilderGenerator (under the `RawBuilder`
suffix) by rendering fixed templates instead of going through the source
object model.
"""

from typing import Any, Dict, List

from ...logging_config import get_logger
from ..core.model import PropertyDescriptor, TypeDescriptor
from ..core.naming import parameter_name
from ..core.templates import TemplateEngine, create_template_engine
from .base import DomainModelGenerator, module_imports, require_element_type

logger = get_logger(__name__)


RAW_PROPERTY_TEMPLATE = """\
{% if prop.is_collection %}
{{ unit }}@final
{{ unit }}def with_{{ prop.name | snake_case }}(self, *{{ prop.param }}: {{ prop.element_type }}) -> {{ builder_name }}:
{{ unit * 2 }}self._{{ prop.name }} = list({{ prop.param }})
{{ unit * 2 }}return self

{{ unit }}def add_{{ prop.name | snake_case }}_item(self, item: {{ prop.element_type }}) -> {{ builder_name }}:
{{ unit * 2 }}if self._{{ prop.name }} is None:
{{ unit * 3 }}self._{{ prop.name }} = []

{{ unit * 2 }}self._{{ prop.name }}.append(item)
{{ unit * 2 }}return self

{{ unit }}def clear_{{ prop.name | snake_case }}(self) -> {{ builder_name }}:
{{ unit * 2 }}if self._{{ prop.name }} is None:
{{ unit * 3 }}self._{{ prop.name }} = []

{{ unit * 2 }}self._{{ prop.name }}.clear()
{{ unit * 2 }}return self
{% else %}
{{ unit }}@final
{{ unit }}def with_{{ prop.name | snake_case }}(self, {{ prop.param }}: {{ prop.type_name }}) -> {{ builder_name }}:
{{ unit * 2 }}self._{{ prop.name }} = {{ prop.param }}
{{ unit * 2 }}return self
{% endif %}
"""

RAW_MODULE_TEMPLATE = """\
from __future__ import annotations

from typing import final
{% for module in modules %}
import {{ module }}
{% endfor %}
{% for builder in builders %}


# region {{ builder.namespace }}


class {{ builder.class_name }}:
{% if builder.members %}
{{ unit }}def __init__(self) -> None:
{% for member in builder.members %}
{{ unit * 2 }}self._{{ member.name }}: {{ member.annotation }} = {{ member.initializer }}
{% endfor %}

{% endif %}
{% for chunk in builder.methods %}
{{ chunk }}
{% endfor %}
{{ unit }}@final
{{ unit }}def build(self) -> {{ builder.target }}:
{{ unit * 2 }}item = {{ builder.target }}()
{% for member in builder.members %}
{{ unit * 2 }}item.{{ member.name }} = self._{{ member.name }}
{% endfor %}
{{ unit * 2 }}return item


# endregion {{ builder.namespace }}
{% endfor %}
"""


class RawBuilderGenerator(DomainModelGenerator):
    """Generates builders by direct template interpolation."""

    def __init__(self, config=None):
        super().__init__(config)
        self.template_engine: TemplateEngine = create_template_engine(
            indent_size=self.config.indent_size
        )
        self.template_engine.add_template("raw_property.py.j2", RAW_PROPERTY_TEMPLATE)
        self.template_engine.add_template("raw_module.py.j2", RAW_MODULE_TEMPLATE)

    @property
    def name(self) -> str:
        return "raw-builder"

    @property
    def diagnostic_id(self) -> str:
        return "RAW_BUILDER_ERROR"

    @property
    def artifact_name(self) -> str:
        return self.config.raw_builder_artifact

    def render(self, types: List[TypeDescriptor]) -> str:
        builders = [self._builder_data(type_desc) for type_desc in types]
        return self.template_engine.render_template(
            "raw_module.py.j2",
            {"modules": module_imports(types), "builders": builders},
        )

    def _builder_data(self, type_desc: TypeDescriptor) -> Dict[str, Any]:
        class_name = f"{type_desc.name}{self.config.raw_builder_suffix}"

        members = []
        methods = []
        for prop in type_desc.properties:
            prop_data = self._property_data(type_desc, prop)
            members.append(
                {
                    "name": prop.name,
                    "annotation": prop.type_name
                    if prop.is_collection
                    else f"{prop.type_name} | None",
                    "initializer": "[]" if prop.is_collection else "None",
                }
            )
            methods.append(
                self.template_engine.render_template(
                    "raw_property.py.j2",
                    {"prop": prop_data, "builder_name": class_name},
                )
            )

        logger.debug("Rendered %s with %d properties", class_name, len(members))
        return {
            "namespace": type_desc.namespace,
            "class_name": class_name,
            "target": type_desc.qualified_name,
            "members": members,
            "methods": methods,
        }

    def _property_data(
        self, type_desc: TypeDescriptor, prop: PropertyDescriptor
    ) -> Dict[str, Any]:
        return {
            "name": prop.name,
            "param": parameter_name(prop.name),
            "type_name": prop.type_name,
            "is_collection": prop.is_collection,
            "element_type": require_element_type(type_desc, prop)
            if prop.is_collection
            else None,
        }
