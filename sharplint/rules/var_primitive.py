# `var` with primitive types: detects inferred local declarations that hide a numeric/char type.

from __future__ import annotations

from typing import FrozenSet, Iterable, Optional

from sharplint.rules.base import Rule
from sharplint.syntax import NodeKind, SyntaxNode

# Built-in numeric and character keywords an explicit declaration should spell out
PRIMITIVE_TYPE_NAMES: FrozenSet[str] = frozenset(
    {
        "int",
        "uint",
        "short",
        "ushort",
        "long",
        "ulong",
        "byte",
        "sbyte",
        "char",
        "float",
        "double",
        "decimal",
    }
)


def is_primitive_type(type_name: str, names: FrozenSet[str] = PRIMITIVE_TYPE_NAMES) -> bool:
    """True if type_name is exactly one of the primitive keywords (case-sensitive)."""
    return type_name in names


class InferredPrimitiveTypeRule(Rule):
    """
    Flags variable declarations typed `var` whose placeholder resolves to a primitive.

    The parser names the `var` placeholder from the initializer's syntax
    (`var n = 5;` -> int, `var c = 'x';` -> char); this rule only compares
    that name against the primitive set. Anything the parser cannot name
    textually stays `var` and is never flagged.
    """

    id = "var-primitive-type"
    label = "var used with primitive type"
    kind = NodeKind.VARIABLE_DECLARATION

    def __init__(self, primitive_type_names: Optional[Iterable[str]] = None) -> None:
        if primitive_type_names is None:
            self.primitive_type_names = PRIMITIVE_TYPE_NAMES
        else:
            self.primitive_type_names = frozenset(primitive_type_names)

    def matches(self, node: SyntaxNode) -> bool:
        type_node = node.child_by_field("type")
        if type_node is None or not type_node.inferred:
            return False
        if type_node.kind is not NodeKind.IDENTIFIER or type_node.name is None:
            return False
        return is_primitive_type(type_node.name, self.primitive_type_names)
