"""
Generator registry system for managing available source generators.

Provides registration and instantiation of generators by name or alias.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import GeneratorConfig, load_config
from .core.generator import SourceGenerator


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry for managing available source generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[SourceGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        name: str,
        generator_class: Type[SourceGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator.

        Args:
            name: Primary generator name (e.g., 'builder', 'translations')
            generator_class: Generator class implementing SourceGenerator
            aliases: Alternative names for this generator
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or conflicts exist
        """
        if not (isinstance(generator_class, type) and issubclass(generator_class, SourceGenerator)):
            raise RegistryError("Generator class must inherit from SourceGenerator")

        key = name.lower()

        # Already registered, skip silently
        if key in self._generators and not replace:
            return

        self._generators[key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()

            if alias_key == key:
                continue

            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing generator name"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = key

    def get_generator_class(self, name: str) -> Type[SourceGenerator]:
        """
        Get generator class by name or alias.

        Raises:
            RegistryError: If the name is not registered
        """
        key = name.lower()

        if key in self._generators:
            return self._generators[key]

        if key in self._aliases:
            return self._generators[self._aliases[key]]

        raise RegistryError(
            f"No generator registered as: {name}. "
            f"Available: {', '.join(self.list_generators())}"
        )

    def create_generator(
        self,
        name: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    ) -> SourceGenerator:
        """
        Create generator instance.

        Args:
            name: Generator name or alias
            config: Configuration as GeneratorConfig, dict, or file path

        Returns:
            Configured generator instance

        Raises:
            RegistryError: If generator creation fails
        """
        generator_class = self.get_generator_class(name)

        try:
            if isinstance(config, GeneratorConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(config_file=config)
            elif isinstance(config, dict):
                final_config = load_config(custom_config=config)
            elif config is None:
                final_config = load_config()
            else:
                raise RegistryError(f"Invalid config type: {type(config)}")

            return generator_class(final_config)

        except RegistryError:
            raise
        except Exception as e:
            raise RegistryError(f"Failed to create {name} generator: {e}") from e

    def list_generators(self) -> List[str]:
        """Get list of registered primary generator names."""
        return sorted(self._generators.keys())

    def get_aliases(self, name: str) -> List[str]:
        key = name.lower()
        return sorted(alias for alias, target in self._aliases.items() if target == key)

    def get_generator_info(self, name: str) -> Dict[str, Any]:
        """
        Get information about a registered generator.

        Raises:
            RegistryError: If the name is not registered
        """
        generator_class = self.get_generator_class(name)
        generator = generator_class(GeneratorConfig())

        return {
            "name": generator.name,
            "class": generator_class.__name__,
            "artifact": generator.artifact_name,
            "diagnostic_id": generator.diagnostic_id,
            "aliases": self.get_aliases(generator.name),
            "module": generator_class.__module__,
        }


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """Register the built-in generators with their aliases."""
    from .generators.builder import BuilderGenerator
    from .generators.raw_builder import RawBuilderGenerator
    from .generators.translations import TranslationsGenerator

    registry.register("builder", BuilderGenerator, aliases=["ir"])
    registry.register("raw-builder", RawBuilderGenerator, aliases=["raw"])
    registry.register("translations", TranslationsGenerator, aliases=["i18n"])


def get_generator(
    name: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> SourceGenerator:
    """Get generator instance from the global registry."""
    return get_registry().create_generator(name, config)


def list_generators() -> List[str]:
    """List all generators in the global registry."""
    return get_registry().list_generators()
