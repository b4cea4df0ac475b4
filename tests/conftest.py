"""Shared fixtures for builderkit tests."""

import pytest

from builderkit.codegen.core.config import GeneratorConfig
from builderkit.codegen.core.generator import GeneratorContext
from builderkit.codegen.core.metadata import (
    AdditionalText,
    Compilation,
    NamespaceSymbol,
    PropertySymbol,
    TypeRef,
    TypeSymbol,
)
from builderkit.codegen.core.reflection import compilation_from_package


def load_generated(text):
    """Execute generated source and return its module namespace."""
    namespace = {}
    exec(compile(text, "<generated>", "exec"), namespace)
    return namespace


def same_named_users():
    """Two distinct `User` types in sibling namespaces of the `shop` assembly."""
    text = TypeRef("str", "builtins")
    first = TypeSymbol("User", "shop.a", members=[PropertySymbol("name", text)])
    second = TypeSymbol("User", "shop.b", members=[PropertySymbol("email", text)])
    tree = NamespaceSymbol(
        "",
        children=[
            NamespaceSymbol(
                "shop",
                children=[
                    NamespaceSymbol("shop.a", types=[first]),
                    NamespaceSymbol("shop.b", types=[second]),
                ],
            )
        ],
    )
    return GeneratorContext(compilation=Compilation("shop", tree))


def public_methods(cls):
    return sorted(
        name
        for name, value in vars(cls).items()
        if callable(value) and not name.startswith("_")
    )


@pytest.fixture
def sample_config():
    """Configuration targeting the sample_domain fixture package."""
    return GeneratorConfig(
        target_assembly="sample_domain", target_namespace="sample_domain"
    )


@pytest.fixture
def sample_compilation():
    return compilation_from_package("sample_domain")


@pytest.fixture
def sample_context(sample_compilation):
    return GeneratorContext(compilation=sample_compilation)


@pytest.fixture
def broken_config():
    return GeneratorConfig(
        target_assembly="broken_domain", target_namespace="broken_domain"
    )


@pytest.fixture
def broken_context():
    return GeneratorContext(compilation=compilation_from_package("broken_domain"))


@pytest.fixture
def translation_texts():
    return (
        AdditionalText("i18n/translations.en.json", '{"greeting": "Hello"}'),
        AdditionalText(
            "i18n\\translations.de.JSON", '{"greeting": "Hallo", "farewell": "Tschuess"}'
        ),
        AdditionalText("i18n/readme.txt", "not a resource"),
    )
