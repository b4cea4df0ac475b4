"""
Naming utilities for generated builders.

Handles snake_case conversion, keyword conflicts and the naming conventions
used for builder classes, backing members and fluent methods.
"""

import keyword
import re
from typing import Dict, Set


class NameSanitizer:
    """Handles snake_case conversion and keyword-safe identifiers."""

    def __init__(self, reserved_words: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Names that must not be used verbatim
        """
        self.reserved_words = reserved_words or set()
        self._name_cache: Dict[str, str] = {}

    def convert(self, name: str) -> str:
        """Convert a name to snake_case."""
        if name not in self._name_cache:
            self._name_cache[name] = self._to_snake_case(name)
        return self._name_cache[name]

    def safe_identifier(self, name: str, suffix_on_conflict: str = "_") -> str:
        """Append a suffix to names that clash with reserved words."""
        if name in self.reserved_words:
            return f"{name}{suffix_on_conflict}"
        return name

    def _to_snake_case(self, name: str) -> str:
        """Convert to snake_case."""
        name = name.replace('-', '_')

        # Insert underscore before uppercase letters
        name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)

        name = name.lower()
        name = re.sub(r'_+', '_', name)

        return name.strip('_')


def create_python_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for generated Python."""
    return NameSanitizer(set(keyword.kwlist) | {"self"})


_sanitizer = create_python_sanitizer()


def builder_class_name(type_name: str, suffix: str) -> str:
    """`User` + `Builder` -> `UserBuilder`."""
    return f"{type_name}{suffix}"


def protected_name(name: str) -> str:
    """Backing member name for a protected property."""
    return f"_{name}"


def parameter_name(name: str) -> str:
    return _sanitizer.safe_identifier(name)


def with_method_name(property_name: str) -> str:
    return f"with_{_sanitizer.convert(property_name)}"


def add_item_method_name(property_name: str) -> str:
    return f"add_{_sanitizer.convert(property_name)}_item"


def clear_method_name(property_name: str) -> str:
    return f"clear_{_sanitizer.convert(property_name)}"


def resource_class_name(path: str, extension: str) -> str:
    """
    Derive a class name from a resource path.

    `i18n/translations.en.json` -> `translations_en`. Only the final path
    segment is used and only a trailing extension is removed.
    """
    file_name = re.split(r"[\\/]", path)[-1]
    if extension and file_name.lower().endswith(extension.lower()):
        file_name = file_name[: -len(extension)]
    return file_name.replace(".", "_")
