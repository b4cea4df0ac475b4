"""
Built-in source generators.
"""

from .builder import BuilderGenerator
from .raw_builder import RawBuilderGenerator
from .translations import TranslationsGenerator

__all__ = [
    "BuilderGenerator",
    "RawBuilderGenerator",
    "TranslationsGenerator",
]
