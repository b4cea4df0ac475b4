"""
Translation constants generator.

Reads flat JSON resources (`{"key": "text"}`) and emits one sealed class
per resource with a `Final[str]` constant per key. Values are quoted as
they are, without escaping.
"""

import json
from typing import Dict, List, Optional

from ...logging_config import get_logger
from ..core.generator import GeneratorContext, ResourceParseError, SourceGenerator
from ..core.metadata import AdditionalText
from ..core.naming import resource_class_name
from ..core.source import SourceBuilder

logger = get_logger(__name__)


def translation_text(value) -> str:
    """Text of a scalar JSON value: null is empty, booleans are True/False."""
    if value is None:
        return ""
    return str(value)


def parse_translations(resource: AdditionalText) -> Dict[str, str]:
    """
    Parse a resource as a flat string-keyed mapping.

    Scalar values are converted to text; nested objects and arrays are
    rejected.
    """
    try:
        data = json.loads(resource.text)
    except json.JSONDecodeError as e:
        raise ResourceParseError(f"Invalid JSON in {resource.path}: {e}") from e

    if not isinstance(data, dict):
        raise ResourceParseError(
            f"{resource.path} must contain a JSON object, got {type(data).__name__}"
        )

    translations = {}
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            raise ResourceParseError(
                f"{resource.path}: value of {key!r} must be a scalar, "
                f"got {type(value).__name__}"
            )
        translations[key] = translation_text(value)

    return translations


class TranslationsGenerator(SourceGenerator):
    """Generates translation constant classes from JSON resources."""

    @property
    def name(self) -> str:
        return "translations"

    @property
    def diagnostic_id(self) -> str:
        return "TRANSLATIONS_ERROR"

    @property
    def artifact_name(self) -> str:
        return self.config.translations_artifact

    def select_resources(self, texts) -> List[AdditionalText]:
        """Resources with the configured extension whose text is available."""
        extension = self.config.resource_extension.lower()
        return [
            text
            for text in texts
            if text.path.lower().endswith(extension) and text.text is not None
        ]

    def generate(self, context: GeneratorContext) -> Optional[str]:
        resources = self.select_resources(context.additional_texts)
        if not resources:
            return None

        source = SourceBuilder(self.config.indent_size)
        source.with_import("typing", "Final", "final")
        namespace_builder = source.with_namespace(self.config.translations_namespace)

        for resource in resources:
            if len(resource.text) == 0:
                logger.debug("Skipping empty resource %s", resource.path)
                continue

            class_name = resource_class_name(resource.path, self.config.resource_extension)
            class_builder = namespace_builder.with_sealed_class(class_name)

            translations = parse_translations(resource)
            for key, value in translations.items():
                (class_builder.with_public_property("str", key)
                    .with_const()
                    .with_field()
                    .with_initializer(f'"{value}"'))

            logger.debug("%s: %d translations", class_name, len(translations))

        return source.build()
