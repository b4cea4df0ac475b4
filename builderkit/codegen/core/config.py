"""
Configuration management for source generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class GeneratorConfig:
    """Settings shared by all generators."""

    # Builder pass gating
    target_assembly: str = "domain"
    target_namespace: str = "domain"

    # Builder naming
    builder_suffix: str = "Builder"
    raw_builder_suffix: str = "RawBuilder"

    # Artifact names
    builder_artifact: str = "domain_model_builder.py"
    raw_builder_artifact: str = "raw_domain_model_builder.py"
    translations_artifact: str = "translations.py"

    # Translations
    translations_namespace: str = "translations"
    resource_extension: str = ".json"

    # Code style
    indent_size: int = 4

    # Custom settings (unknown keys end up here)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = asdict(GeneratorConfig())

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration (defaults < file < overrides)
        """
        base_config = dict(self._defaults)
        base_config["custom"] = dict(base_config["custom"])

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get('custom', {}))
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        config = GeneratorConfig(**config_args)
        warnings = self.validate_config(config)
        if warnings:
            raise ConfigError("; ".join(warnings))
        return config

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors
        """
        errors = []

        if not isinstance(config.indent_size, int) or config.indent_size < 1:
            errors.append(f"Invalid indent_size: {config.indent_size}")

        for name in ("builder_suffix", "raw_builder_suffix", "translations_namespace"):
            value = getattr(config, name)
            if not isinstance(value, str) or not value.replace(".", "_").isidentifier():
                errors.append(f"Invalid {name}: {value!r}")

        if config.builder_suffix == config.raw_builder_suffix:
            errors.append("builder_suffix and raw_builder_suffix must differ")

        if not config.resource_extension.startswith("."):
            errors.append(f"Invalid resource_extension: {config.resource_extension}")

        return errors


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file)

