"""
Tests for the template driven builder generator and its equivalence with
the object-model driven one.
"""

import inspect

import pytest
from conftest import load_generated, public_methods, same_named_users

from builderkit.codegen.core.config import GeneratorConfig
from builderkit.codegen.generators.builder import BuilderGenerator
from builderkit.codegen.generators.raw_builder import RawBuilderGenerator

from sample_domain.models import Exercise, User

BUILT_TYPES = ["Exercise", "User", "Group", "Shape", "Square", "Catalog", "Point", "Invoice"]


@pytest.fixture
def raw_builders(sample_config, sample_context):
    result = RawBuilderGenerator(sample_config).execute(sample_context)
    assert result.success, result.diagnostics
    return load_generated(result.artifact.text)


@pytest.fixture
def ir_builders(sample_config, sample_context):
    result = BuilderGenerator(sample_config).execute(sample_context)
    return load_generated(result.artifact.text)


class TestRawBuilderGenerator:
    def test_artifact(self, sample_config, sample_context):
        result = RawBuilderGenerator(sample_config).execute(sample_context)

        assert result.artifact.file_name == "raw_domain_model_builder.py"
        assert result.artifact.text.startswith("from __future__ import annotations\n")

    def test_class_names_use_raw_suffix(self, raw_builders):
        for name in BUILT_TYPES:
            assert f"{name}RawBuilder" in raw_builders
            assert f"{name}Builder" not in raw_builders

    def test_exercise_scenario(self, raw_builders):
        exercise = (
            raw_builders["ExerciseRawBuilder"]()
            .with_name("x")
            .with_description("y")
            .with_difficulty(5)
            .build()
        )
        assert exercise == Exercise(name="x", description="y", difficulty=5)

    def test_group_scenario(self, raw_builders):
        user = User(id=1)
        group = raw_builders["GroupRawBuilder"]().clear_users().add_users_item(user).build()
        assert group.users == [user]

    def test_lazy_guard(self, raw_builders):
        builder = raw_builders["UserRawBuilder"]()
        builder._exercises = None
        assert builder.add_exercises_item(Exercise(name="a")).build().exercises == [
            Exercise(name="a")
        ]

    def test_indent_size(self, sample_context):
        config = GeneratorConfig(
            target_assembly="sample_domain", target_namespace="sample_domain", indent_size=2
        )
        text = RawBuilderGenerator(config).execute(sample_context).artifact.text
        assert "\n  def build(self) -> sample_domain.models.Exercise:\n" in text
        load_generated(text)

    def test_other_assembly_emits_nothing(self, sample_context):
        result = RawBuilderGenerator(GeneratorConfig()).execute(sample_context)
        assert result.success
        assert result.artifacts == []

    def test_collection_without_element_type(self, broken_config, broken_context):
        result = RawBuilderGenerator(broken_config).execute(broken_context)

        assert result.artifacts == []
        (diagnostic,) = result.diagnostics
        assert diagnostic.id == "RAW_BUILDER_ERROR"

    def test_same_named_types_in_sibling_namespaces(self):
        generator = RawBuilderGenerator(
            GeneratorConfig(target_assembly="shop", target_namespace="shop")
        )

        result = generator.execute(same_named_users())

        assert result.artifacts == []
        (diagnostic,) = result.diagnostics
        assert diagnostic.id == "RAW_BUILDER_ERROR"
        assert "shop.a.User" in diagnostic.message


class TestEquivalence:
    @pytest.mark.parametrize("type_name", BUILT_TYPES)
    def test_same_public_methods(self, ir_builders, raw_builders, type_name):
        ir_cls = ir_builders[f"{type_name}Builder"]
        raw_cls = raw_builders[f"{type_name}RawBuilder"]
        assert public_methods(ir_cls) == public_methods(raw_cls)

    @pytest.mark.parametrize("type_name", BUILT_TYPES)
    def test_same_signatures(self, ir_builders, raw_builders, type_name):
        ir_cls = ir_builders[f"{type_name}Builder"]
        raw_cls = raw_builders[f"{type_name}RawBuilder"]

        for method in public_methods(ir_cls):
            ir_params = inspect.signature(getattr(ir_cls, method)).parameters
            raw_params = inspect.signature(getattr(raw_cls, method)).parameters
            assert [(p.name, p.kind, p.annotation) for p in ir_params.values()] == [
                (p.name, p.kind, p.annotation) for p in raw_params.values()
            ]

    @pytest.mark.parametrize("type_name", BUILT_TYPES)
    def test_same_overridability(self, ir_builders, raw_builders, type_name):
        ir_cls = ir_builders[f"{type_name}Builder"]
        raw_cls = raw_builders[f"{type_name}RawBuilder"]

        for method in public_methods(ir_cls):
            ir_final = getattr(getattr(ir_cls, method), "__final__", False)
            raw_final = getattr(getattr(raw_cls, method), "__final__", False)
            assert ir_final == raw_final, method

    def test_same_built_objects(self, ir_builders, raw_builders):
        users = [User(id=1, name="a"), User(id=2, name="b")]

        def drive(builder):
            return (
                builder.with_name("team")
                .with_users(*users)
                .add_users_item(User(id=3))
                .build()
            )

        assert drive(ir_builders["GroupBuilder"]()) == drive(raw_builders["GroupRawBuilder"]())
