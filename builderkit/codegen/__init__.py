"""
builderkit code generation module

Generates fluent builders for domain types and constant classes for
translation resources.
"""

from typing import Dict, Iterable, Optional

from .core.config import GeneratorConfig, load_config
from .core.generator import GenerationResult, GeneratorContext, SourceGenerator
from .core.metadata import AdditionalText, Compilation
from .registry import GeneratorRegistry, get_generator, get_registry, list_generators


def run_generators(
    compilation: Optional[Compilation] = None,
    additional_texts: Iterable[AdditionalText] = (),
    names: Optional[Iterable[str]] = None,
    config: Optional[GeneratorConfig] = None,
) -> Dict[str, GenerationResult]:
    """
    Run generator passes against one host snapshot.

    Each pass is independent: a failure in one never affects another.

    Args:
        compilation: Type metadata snapshot
        additional_texts: Text resources supplied by the host
        names: Generators to run (default: all registered)
        config: Shared generator configuration

    Returns:
        Dict mapping generator name to its result
    """
    context = GeneratorContext(
        compilation=compilation, additional_texts=tuple(additional_texts)
    )
    config = config or load_config()

    results = {}
    for name in names or list_generators():
        generator = get_generator(name, config)
        results[generator.name] = generator.execute(context)
    return results


__all__ = [
    "GeneratorRegistry",
    "SourceGenerator",
    "GenerationResult",
    "GeneratorContext",
    "GeneratorConfig",
    "get_generator",
    "get_registry",
    "list_generators",
    "run_generators",
]
