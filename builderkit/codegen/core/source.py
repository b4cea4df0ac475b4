"""
Object model for generated Python source.

A fluent builder API assembles a tree of imports, namespaces, classes,
properties, methods and statements. Every node renders itself and
delegates to its children, so building the same tree twice always yields
the same text.

Example:
    source = SourceBuilder()
    (source.with_import("__future__", "annotations")
        .with_namespace("shop")
        .with_partial_class("CartBuilder")
        .with_method("CartBuilder", "with_total")
        .with_parameter("int", "total")
        .with_statement("self._total = total")
        .with_statement("return self"))
    text = source.build()
"""

from typing import List, Optional, Tuple

DEFAULT_INDENT_SIZE = 4

PUBLIC = "public"
PROTECTED = "protected"


class _Node:
    """Base for nodes that know their nesting depth."""

    def __init__(self, depth: int, unit: str):
        self.depth = depth
        self.unit = unit

    @property
    def indentation(self) -> str:
        return self.unit * self.depth


# ----------------------------------------------------------------------------
# Nodes
# ----------------------------------------------------------------------------


class ImportStatement:
    """`import module` or `from module import a, b`."""

    def __init__(self, module: str, names: Tuple[str, ...] = ()):
        self.module = module
        self.names = list(names)

    def build(self) -> str:
        if self.names:
            return f"from {self.module} import {', '.join(self.names)}"
        return f"import {self.module}"


class Statement(_Node):
    """A single line of code."""

    def __init__(self, line: str, depth: int, unit: str):
        super().__init__(depth, unit)
        self.line = line

    def build(self) -> str:
        return f"{self.indentation}{self.line}"


class EmptyStatement(Statement):
    """A blank line."""

    def __init__(self, depth: int, unit: str):
        super().__init__("", depth, unit)

    def build(self) -> str:
        return ""


class BlockStatement(Statement):
    """A header line (`if ...`, `for ...`) owning an indented body."""

    def __init__(self, line: str, depth: int, unit: str):
        super().__init__(line, depth, unit)
        self.statements: List[Statement] = []

    def build(self) -> str:
        lines = [f"{self.indentation}{self.line}:"]
        if self.statements:
            lines.extend(statement.build() for statement in self.statements)
        else:
            lines.append(f"{self.indentation}{self.unit}pass")
        return "\n".join(lines)


class MethodParameter:
    def __init__(self, type_name: str, name: str):
        self.type_name = type_name
        self.name = name

    def build(self) -> str:
        return f"{self.name}: {self.type_name}"


class MethodParams(MethodParameter):
    """Variadic parameter collecting any number of positional arguments."""

    def build(self) -> str:
        return f"*{self.name}: {self.type_name}"


class MethodBlock(_Node):
    """
    An instance method.

    Non-virtual methods are decorated with `@final`; virtual ones are left
    open for subclasses to override.
    """

    def __init__(
        self,
        return_type: str,
        name: str,
        depth: int,
        unit: str,
        is_virtual: bool = False,
    ):
        super().__init__(depth, unit)
        self.return_type = return_type
        self.name = name
        self.is_virtual = is_virtual
        self.parameters: List[MethodParameter] = []
        self.statements: List[Statement] = []

    def build(self) -> str:
        lines = []
        if not self.is_virtual:
            lines.append(f"{self.indentation}@final")

        parameters = ", ".join(["self"] + [p.build() for p in self.parameters])
        lines.append(
            f"{self.indentation}def {self.name}({parameters}) -> {self.return_type}:"
        )

        if self.statements:
            lines.extend(statement.build() for statement in self.statements)
        else:
            lines.append(f"{self.indentation}{self.unit}pass")

        return "\n".join(lines)


class PropertyBlock(_Node):
    """
    A class member.

    Fields render as class-level annotated attributes. Everything else is
    a per-instance member assigned in the class's `__init__`, one level
    deeper than `depth`.
    """

    def __init__(self, access: str, type_name: str, name: str, depth: int, unit: str):
        super().__init__(depth, unit)
        self.access = access
        self.type_name = type_name
        self.name = name
        self.initializer: Optional[str] = None
        self.is_const = False
        self.is_field = False

    @property
    def member_name(self) -> str:
        if self.access == PROTECTED:
            return f"_{self.name}"
        return self.name

    @property
    def annotation(self) -> str:
        if self.is_const:
            return f"Final[{self.type_name}]"
        if not self.is_field and self.initializer is None:
            return f"{self.type_name} | None"
        return self.type_name

    def build(self) -> str:
        if self.is_field:
            line = f"{self.indentation}{self.member_name}: {self.annotation}"
            if self.initializer is not None:
                line += f" = {self.initializer}"
            return line

        value = self.initializer if self.initializer is not None else "None"
        return (
            f"{self.indentation}{self.unit}self.{self.member_name}: "
            f"{self.annotation} = {value}"
        )


class ClassBlock(_Node):
    """A class with its properties and methods."""

    def __init__(
        self,
        name: str,
        depth: int,
        unit: str,
        base: Optional[str] = None,
        is_partial: bool = False,
        is_sealed: bool = False,
    ):
        super().__init__(depth, unit)
        self.name = name
        self.base = base
        self.is_partial = is_partial
        self.is_sealed = is_sealed
        self.properties: List[PropertyBlock] = []
        self.methods: List[MethodBlock] = []

    def _build_initializer(self, members: List[PropertyBlock]) -> str:
        member_indent = self.indentation + self.unit
        lines = [f"{member_indent}def __init__(self) -> None:"]
        if self.base:
            lines.append(f"{member_indent}{self.unit}super().__init__()")
        lines.extend(member.build() for member in members)
        return "\n".join(lines)

    def build(self) -> str:
        header = []
        if self.is_sealed:
            header.append(f"{self.indentation}@final")
        if self.base:
            header.append(f"{self.indentation}class {self.name}({self.base}):")
        else:
            header.append(f"{self.indentation}class {self.name}:")

        sections = []

        fields = [p for p in self.properties if p.is_field]
        if fields:
            sections.append("\n".join(p.build() for p in fields))

        instance_members = [p for p in self.properties if not p.is_field]
        if instance_members:
            sections.append(self._build_initializer(instance_members))

        sections.extend(method.build() for method in self.methods)

        if not sections:
            sections.append(f"{self.indentation}{self.unit}pass")

        return "\n".join(header) + "\n" + "\n\n".join(sections)


class NamespaceBlock:
    """A region of the generated module holding the classes of one namespace."""

    def __init__(self, name: str):
        self.name = name
        self.classes: List[ClassBlock] = []

    def build(self) -> str:
        parts = [f"# region {self.name}"]
        parts.extend(class_block.build() for class_block in self.classes)
        parts.append(f"# endregion {self.name}")
        return "\n\n\n".join(parts)


# ----------------------------------------------------------------------------
# Fluent builders
# ----------------------------------------------------------------------------


class SourceBuilder:
    """Root of the tree: imports and namespaces of one generated module."""

    def __init__(self, indent_size: int = DEFAULT_INDENT_SIZE):
        self._unit = " " * indent_size
        self._imports: List[ImportStatement] = []
        self._namespaces: List[NamespaceBlock] = []

    @property
    def imports(self) -> List[ImportStatement]:
        return self._imports

    @property
    def namespaces(self) -> List[NamespaceBlock]:
        return self._namespaces

    def with_import(self, module: str, *names: str) -> "SourceBuilder":
        """Add an import, merging names into an existing `from` import."""
        for existing in self._imports:
            if existing.module != module or bool(existing.names) != bool(names):
                continue
            existing.names.extend(n for n in names if n not in existing.names)
            return self

        self._imports.append(ImportStatement(module, names))
        return self

    def with_namespace(self, name: str) -> "NamespaceBuilder":
        namespace = NamespaceBlock(name)
        self._namespaces.append(namespace)
        return NamespaceBuilder(self, namespace, self._unit)

    def build(self) -> str:
        sections = []
        if self._imports:
            sections.append("\n".join(i.build() for i in self._imports))
        sections.extend(namespace.build() for namespace in self._namespaces)
        return "\n\n\n".join(sections) + "\n"


class NamespaceBuilder:
    def __init__(self, parent: SourceBuilder, namespace: NamespaceBlock, unit: str):
        self._parent = parent
        self._namespace = namespace
        self._unit = unit

    @property
    def name(self) -> str:
        return self._namespace.name

    def _add_class(self, class_block: ClassBlock) -> "ClassBuilder":
        self._namespace.classes.append(class_block)
        return ClassBuilder(self, class_block)

    def with_partial_class(self, name: str, base: Optional[str] = None) -> "ClassBuilder":
        return self._add_class(
            ClassBlock(name, 0, self._unit, base=base, is_partial=True)
        )

    def with_sealed_class(self, name: str, base: Optional[str] = None) -> "ClassBuilder":
        return self._add_class(
            ClassBlock(name, 0, self._unit, base=base, is_sealed=True)
        )

    def finish(self) -> SourceBuilder:
        return self._parent


class ClassBuilder:
    def __init__(self, parent: NamespaceBuilder, class_block: ClassBlock):
        self._parent = parent
        self._class = class_block

    @property
    def name(self) -> str:
        return self._class.name

    def _add_property(self, access: str, type_name: str, name: str) -> "PropertyBuilder":
        block = PropertyBlock(
            access, type_name, name, self._class.depth + 1, self._class.unit
        )
        self._class.properties.append(block)
        return PropertyBuilder(self, block)

    def with_protected_property(self, type_name: str, name: str) -> "PropertyBuilder":
        return self._add_property(PROTECTED, type_name, name)

    def with_public_property(self, type_name: str, name: str) -> "PropertyBuilder":
        return self._add_property(PUBLIC, type_name, name)

    def with_method(
        self, return_type: str, name: str, is_virtual: bool = False
    ) -> "MethodBuilder":
        block = MethodBlock(
            return_type,
            name,
            self._class.depth + 1,
            self._class.unit,
            is_virtual=is_virtual,
        )
        self._class.methods.append(block)
        return MethodBuilder(self, block)

    def with_virtual_method(self, return_type: str, name: str) -> "MethodBuilder":
        return self.with_method(return_type, name, is_virtual=True)

    def end(self) -> NamespaceBuilder:
        return self._parent


class PropertyBuilder:
    def __init__(self, parent: ClassBuilder, block: PropertyBlock):
        self._parent = parent
        self._block = block

    def with_initializer(self, initializer: str) -> "PropertyBuilder":
        self._block.initializer = initializer
        return self

    def with_const(self) -> "PropertyBuilder":
        self._block.is_const = True
        return self

    def with_field(self) -> "PropertyBuilder":
        self._block.is_field = True
        return self

    def end(self) -> ClassBuilder:
        return self._parent


class _StatementScope:
    """Statement-appending operations shared by methods and blocks."""

    def __init__(self, statements: List[Statement], depth: int, unit: str):
        self._statements = statements
        self._depth = depth
        self._unit = unit

    def with_statement(self, line: str):
        self._statements.append(Statement(line, self._depth, self._unit))
        return self

    def with_empty_statement(self):
        self._statements.append(EmptyStatement(self._depth, self._unit))
        return self

    def with_block_statement(self, line: str) -> "BlockStatementBuilder":
        block = BlockStatement(line, self._depth, self._unit)
        self._statements.append(block)
        return BlockStatementBuilder(self, block)


class MethodBuilder(_StatementScope):
    def __init__(self, parent: ClassBuilder, block: MethodBlock):
        super().__init__(block.statements, block.depth + 1, block.unit)
        self._parent = parent
        self._block = block

    def with_parameter(self, type_name: str, name: str) -> "MethodBuilder":
        self._block.parameters.append(MethodParameter(type_name, name))
        return self

    def with_params(self, type_name: str, name: str) -> "MethodBuilder":
        self._block.parameters.append(MethodParams(type_name, name))
        return self

    def end(self) -> ClassBuilder:
        return self._parent


class BlockStatementBuilder(_StatementScope):
    def __init__(self, parent: _StatementScope, block: BlockStatement):
        super().__init__(block.statements, block.depth + 1, block.unit)
        self._parent = parent

    def end(self):
        return self._parent
