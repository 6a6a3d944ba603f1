# Rule interface (abstract base class): defines the contract all rules must implement.
# Concrete rules pick the node kind they inspect and implement matches().

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from sharplint.findings.models import Finding, Location
from sharplint.syntax import NodeKind, SyntaxNode, SyntaxTree


class Rule(ABC):
    """
    Abstract base class for all analysis rules.

    Subclasses must define:
    - id: str, unique rule identifier (e.g. "public-field")
    - label: str, problem label printed in diagnostics (e.g. "Public field")
    - kind: NodeKind, the node kind the rule inspects
    - matches(node) -> bool: whether a node of that kind is a problem

    detect() walks the tree once per call and reports every matching node in
    document order. Rules keep no state between calls, so one instance can
    analyze any number of trees.
    """

    id: str
    label: str
    kind: NodeKind

    @abstractmethod
    def matches(self, node: SyntaxNode) -> bool:
        """
        Decide whether a node of self.kind is a problem.

        Args:
            node: A node whose kind is self.kind.

        Returns:
            True to report the node.
        """
        ...

    def detect(self, tree: SyntaxTree) -> List[Finding]:
        """Return one Finding per matching node, in pre-order."""
        return [self.finding(tree, node) for node in tree.descendants(self.kind, self.matches)]

    def finding(self, tree: SyntaxTree, node: SyntaxNode) -> Finding:
        """Build the Finding for a matched node: its start line/column and verbatim text."""
        return Finding(
            rule_id=self.id,
            label=self.label,
            location=Location(
                line=tree.line_of(node),
                column=tree.column_of(node),
                snippet=tree.text_of(node),
            ),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
