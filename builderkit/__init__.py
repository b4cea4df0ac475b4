"""builderkit: fluent builder and translation constant generation."""

__version__ = "0.1.0"
