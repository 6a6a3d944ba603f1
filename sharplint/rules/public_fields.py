# Public field detection: fields exposed as public, and public fields that stay mutable.

from __future__ import annotations

from sharplint.rules.base import Rule
from sharplint.syntax import NodeKind, SyntaxNode

PUBLIC = "public"
READONLY = "readonly"


class PublicFieldRule(Rule):
    """Flags every field declaration carrying the `public` modifier.

    A declaration with several declarators (`public int a, b;`) is one match.
    """

    id = "public-field"
    label = "Public field"
    kind = NodeKind.FIELD_DECLARATION

    def matches(self, node: SyntaxNode) -> bool:
        return PUBLIC in node.modifier_set


class PublicNonReadonlyFieldRule(Rule):
    """
    Flags public field declarations that are not `readonly`.

    Every match here is also a PublicFieldRule match; both are reported.
    """

    id = "public-non-readonly-field"
    label = "Public non-readonly field"
    kind = NodeKind.FIELD_DECLARATION

    def matches(self, node: SyntaxNode) -> bool:
        modifiers = node.modifier_set
        return PUBLIC in modifiers and READONLY not in modifiers
