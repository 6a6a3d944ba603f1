# Collapsible nested ifs: `if (a) { if (b) ... }` that could be `if (a && b) ...`.

from __future__ import annotations

from sharplint.rules.base import Rule
from sharplint.syntax import NodeKind, SyntaxNode


class CollapsibleNestedIfRule(Rule):
    """
    Flags an if-statement whose body is a block holding exactly one if-statement
    without an else branch. The outer if is reported.

    Not flagged: an inner if with an else, a block with other statements next
    to the inner if, or an inner if that is not wrapped in a block.
    """

    id = "collapsible-nested-if"
    label = "Nested if statement that can be simplified"
    kind = NodeKind.IF_STATEMENT

    def matches(self, node: SyntaxNode) -> bool:
        body = node.child_by_field("consequence")
        if body is None or body.kind is not NodeKind.BLOCK:
            return False
        if len(body.children) != 1:
            return False
        inner = body.children[0]
        return inner.kind is NodeKind.IF_STATEMENT and inner.child_by_field("alternative") is None
