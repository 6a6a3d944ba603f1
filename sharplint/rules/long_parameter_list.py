# Long parameter lists: methods taking more parameters than the configured limit.

from __future__ import annotations

from typing import Optional

from sharplint.rules.base import Rule
from sharplint.syntax import NodeKind, SyntaxNode

# A method may take this many parameters; one more is reported
MAX_PARAMETERS = 5


def parameter_count(method: SyntaxNode) -> int:
    """Number of declared parameters of a method declaration (0 if it has no list)."""
    parameters = method.child_by_field("parameters")
    if parameters is None:
        lists = method.children_of_kind(NodeKind.PARAMETER_LIST)
        if not lists:
            return 0
        parameters = lists[0]
    return len(parameters.children_of_kind(NodeKind.PARAMETER))


class LongParameterListRule(Rule):
    """Flags method declarations with more than max_parameters parameters."""

    id = "long-parameter-list"
    label = "Method with long parameter list"
    kind = NodeKind.METHOD_DECLARATION

    def __init__(self, max_parameters: Optional[int] = None) -> None:
        self.max_parameters = MAX_PARAMETERS if max_parameters is None else max_parameters

    def matches(self, node: SyntaxNode) -> bool:
        return parameter_count(node) > self.max_parameters
