"""
Tests for the object-model driven builder generator.
"""

import pytest
from conftest import load_generated, public_methods, same_named_users

from builderkit.codegen.core.config import GeneratorConfig
from builderkit.codegen.core.generator import DiagnosticSeverity, GeneratorContext
from builderkit.codegen.core.metadata import (
    Compilation,
    NamespaceSymbol,
    PropertySymbol,
    TypeRef,
    TypeSymbol,
)
from builderkit.codegen.generators.builder import BuilderGenerator

from sample_domain.models import Exercise, User


@pytest.fixture
def generator(sample_config):
    return BuilderGenerator(sample_config)


@pytest.fixture
def builders(generator, sample_context):
    result = generator.execute(sample_context)
    assert result.success, result.diagnostics
    return load_generated(result.artifact.text)


class TestBuilderGenerator:
    def test_artifact(self, generator, sample_context):
        result = generator.execute(sample_context)

        assert result.success
        assert len(result.artifacts) == 1
        assert result.artifact.file_name == "domain_model_builder.py"
        assert result.metadata == {
            "generator": "builder",
            "artifact_name": "domain_model_builder.py",
        }

    def test_module_header(self, generator, sample_context):
        text = generator.execute(sample_context).artifact.text
        lines = text.splitlines()

        assert lines[0] == "from __future__ import annotations"
        assert lines[1] == "from typing import final"
        assert "import sample_domain.models" in lines
        assert "# region sample_domain.models" in lines

    def test_output_is_deterministic(self, generator, sample_context):
        first = generator.execute(sample_context).artifact.text
        second = BuilderGenerator(generator.config).execute(sample_context).artifact.text
        assert first == second

    def test_one_builder_per_type(self, builders):
        for name in ["Exercise", "User", "Group", "Square", "Shape", "Catalog", "Point", "Invoice"]:
            assert f"{name}Builder" in builders
        assert "LevelBuilder" not in builders
        assert "RepositoryBuilder" not in builders

    def test_method_counts(self, builders):
        # N scalars, 3 methods per collection, plus build().
        assert len(public_methods(builders["ExerciseBuilder"])) == 3 + 1
        assert len(public_methods(builders["UserBuilder"])) == 3 + 3 + 1
        assert len(public_methods(builders["InvoiceBuilder"])) == 1 + 6 + 1
        assert public_methods(builders["PointBuilder"]) == ["build"]

    def test_exercise_scenario(self, builders):
        builder = builders["ExerciseBuilder"]()
        assert public_methods(type(builder)) == [
            "build",
            "with_description",
            "with_difficulty",
            "with_name",
        ]

        exercise = builder.with_name("x").with_description("y").with_difficulty(5).build()

        assert isinstance(exercise, Exercise)
        assert exercise == Exercise(name="x", description="y", difficulty=5)

    def test_group_scenario(self, builders):
        user = User(id=1, name="ada")
        builder = builders["GroupBuilder"]()
        assert public_methods(type(builder)) == [
            "add_users_item",
            "build",
            "clear_users",
            "with_name",
            "with_users",
        ]

        group = builder.clear_users().add_users_item(user).build()

        assert group.users == [user]

    def test_variadic_with_replaces_collection(self, builders):
        first, second, third = User(id=1), User(id=2), User(id=3)
        group = (
            builders["GroupBuilder"]()
            .add_users_item(first)
            .with_users(second, third)
            .build()
        )
        assert group.users == [second, third]

    def test_lazy_guard(self, builders):
        builder = builders["GroupBuilder"]()
        builder._users = None
        assert builder.add_users_item(User(id=7)).build().users == [User(id=7)]

        builder._users = None
        assert builder.clear_users().build().users == []

    def test_unset_scalar_is_none(self, builders):
        group = builders["GroupBuilder"]().build()
        assert group.name is None
        assert group.users == []

    def test_build_returns_fresh_instances(self, builders):
        builder = builders["ExerciseBuilder"]().with_name("a")
        assert builder.build() is not builder.build()

    def test_inherited_properties(self, builders):
        square = builders["SquareBuilder"]().with_size(2.5).with_label("sq").build()
        assert (square.size, square.label) == (2.5, "sq")

    def test_setter_property(self, builders):
        catalog = builders["CatalogBuilder"]().with_owner("ops").with_tags("a", "b").build()
        assert catalog.owner == "ops"
        assert catalog.tags == ["a", "b"]
        assert catalog.title is None

    def test_add_and_clear_are_overridable(self, generator, sample_context):
        text = generator.execute(sample_context).artifact.text
        assert "    @final\n    def with_users(self, *users: sample_domain.models.User)" in text
        assert "\n\n    def add_users_item(self, item: sample_domain.models.User)" in text
        assert "\n\n    def clear_users(self)" in text

    def test_keyword_property_name(self):
        type_symbol = TypeSymbol(
            "Flight",
            "air",
            members=[PropertySymbol("from", TypeRef("str", "builtins"))],
        )
        compilation = Compilation(
            "air", NamespaceSymbol("", children=[NamespaceSymbol("air", types=[type_symbol])])
        )
        generator = BuilderGenerator(GeneratorConfig(target_assembly="air", target_namespace="air"))

        text = generator.execute(GeneratorContext(compilation=compilation)).artifact.text

        assert "def with_from(self, from_: str) -> FlightBuilder:" in text
        assert "self._from = from_" in text


class TestPassGating:
    def test_other_assembly_emits_nothing(self, sample_context):
        generator = BuilderGenerator(GeneratorConfig(target_assembly="something_else"))
        result = generator.execute(sample_context)

        assert result.success
        assert result.artifacts == []
        assert result.diagnostics == []

    def test_no_compilation_emits_nothing(self, generator):
        result = generator.execute(GeneratorContext())
        assert result.artifacts == []

    def test_namespace_filter(self, sample_context):
        config = GeneratorConfig(
            target_assembly="sample_domain", target_namespace="SAMPLE_DOMAIN.BILLING"
        )
        builders = load_generated(BuilderGenerator(config).execute(sample_context).artifact.text)

        assert "InvoiceBuilder" in builders
        assert "ExerciseBuilder" not in builders

    def test_no_matching_types_still_emits_module(self, sample_context):
        config = GeneratorConfig(target_assembly="sample_domain", target_namespace="nowhere")
        result = BuilderGenerator(config).execute(sample_context)

        assert result.artifact.text == "from __future__ import annotations\nfrom typing import final\n"

    def test_duplicate_types_yield_one_builder(self):
        user = TypeSymbol("User", "shop", members=[PropertySymbol("name", TypeRef("str", "builtins"))])
        tree = NamespaceSymbol(
            "",
            children=[
                NamespaceSymbol("shop", types=[user]),
                NamespaceSymbol("shop", types=[user]),
            ],
        )
        generator = BuilderGenerator(GeneratorConfig(target_assembly="shop", target_namespace="shop"))

        text = generator.execute(GeneratorContext(compilation=Compilation("shop", tree))).artifact.text

        assert text.count("class UserBuilder:") == 1


class TestFailures:
    def test_collection_without_element_type(self, broken_config, broken_context):
        result = BuilderGenerator(broken_config).execute(broken_context)

        assert not result.success
        assert result.artifacts == []
        (diagnostic,) = result.diagnostics
        assert diagnostic.id == "BUILDER_ERROR"
        assert diagnostic.severity is DiagnosticSeverity.ERROR
        assert diagnostic.location is None
        assert "broken_domain.models.Inventory.items" in diagnostic.message
        assert diagnostic.title == diagnostic.message == diagnostic.category

    def test_failures_are_the_only_severity(self):
        assert list(DiagnosticSeverity) == [DiagnosticSeverity.ERROR]

    def test_same_named_types_in_sibling_namespaces(self):
        generator = BuilderGenerator(GeneratorConfig(target_assembly="shop", target_namespace="shop"))

        result = generator.execute(same_named_users())

        assert result.artifacts == []
        (diagnostic,) = result.diagnostics
        assert diagnostic.id == "BUILDER_ERROR"
        assert "shop.a.User" in diagnostic.message
        assert "shop.b.User" in diagnostic.message

    def test_properties_mapping_to_one_method_name(self):
        text = TypeRef("str", "builtins")
        account = TypeSymbol(
            "Account",
            "bank",
            members=[PropertySymbol("userName", text), PropertySymbol("user_name", text)],
        )
        compilation = Compilation(
            "bank", NamespaceSymbol("", children=[NamespaceSymbol("bank", types=[account])])
        )
        generator = BuilderGenerator(GeneratorConfig(target_assembly="bank", target_namespace="bank"))

        result = generator.execute(GeneratorContext(compilation=compilation))

        assert result.artifacts == []
        (diagnostic,) = result.diagnostics
        assert "with_user_name()" in diagnostic.message
        assert "'userName'" in diagnostic.message
