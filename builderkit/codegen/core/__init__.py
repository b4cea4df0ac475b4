"""
Core source generation components.

Provides the type model, the source object model and the base classes
used by all generators.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .generator import (
    Diagnostic,
    DiagnosticSeverity,
    GeneratedArtifact,
    GenerationResult,
    GeneratorContext,
    GeneratorError,
    MetadataShapeError,
    ResourceParseError,
    SourceGenerator,
    run_generation_pass,
)
from .metadata import (
    AdditionalText,
    Compilation,
    NamespaceSymbol,
    PropertySymbol,
    TypeRef,
    TypeSymbol,
)
from .model import (
    CollectionKind,
    PropertyDescriptor,
    TypeDescriptor,
    extract_type_model,
    find_properties,
    find_types,
    is_collection,
)
from .naming import NameSanitizer
from .source import SourceBuilder
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "SourceGenerator",
    "GeneratorContext",
    "GenerationResult",
    "GeneratedArtifact",
    "Diagnostic",
    "DiagnosticSeverity",
    "run_generation_pass",
    "GeneratorError",
    "MetadataShapeError",
    "ResourceParseError",
    # Host metadata
    "AdditionalText",
    "Compilation",
    "NamespaceSymbol",
    "PropertySymbol",
    "TypeRef",
    "TypeSymbol",
    # Type model
    "CollectionKind",
    "PropertyDescriptor",
    "TypeDescriptor",
    "extract_type_model",
    "find_properties",
    "find_types",
    "is_collection",
    # Source object model
    "SourceBuilder",
    # Naming utilities
    "NameSanitizer",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
