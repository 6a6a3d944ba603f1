"""
Syntax tree model: immutable C# nodes, spans, and the line index used for reporting.

The parser (sharplint.parser) converts the tree-sitter concrete tree into
SyntaxNode objects. Only named grammar nodes survive; punctuation, keywords
and comments are dropped. A handful of node kinds that rules care about get
their own NodeKind; everything else is NodeKind.OTHER and keeps its grammar
type name in `grammar_type`.

Typical usage:
    from sharplint.parser import parse
    from sharplint.syntax import NodeKind

    tree = parse(source_text)
    for method in tree.descendants(NodeKind.METHOD_DECLARATION):
        print(tree.line_of(method.span), tree.text_of(method))
"""

from __future__ import annotations

import re
from array import array
from dataclasses import dataclass
from enum import Enum
from itertools import repeat
from typing import Callable, Dict, FrozenSet, Iterable, Iterator, List, NamedTuple, Optional, Tuple, Union


class NodeKind(str, Enum):
    """Node kinds the rules dispatch on."""

    COMPILATION_UNIT = "compilation_unit"
    FIELD_DECLARATION = "field_declaration"
    VARIABLE_DECLARATION = "variable_declaration"
    METHOD_DECLARATION = "method_declaration"
    PARAMETER_LIST = "parameter_list"
    PARAMETER = "parameter"
    IF_STATEMENT = "if_statement"
    BLOCK = "block"
    IDENTIFIER = "identifier"
    MODIFIER_LIST = "modifier_list"
    OTHER = "other"


class Span(NamedTuple):
    """Byte range [start, end) into the UTF-8 encoded source."""

    start: int
    end: int

    def contains(self, other: "Span") -> bool:
        return self.start <= other.start and other.end <= self.end


KindFilter = Union[NodeKind, Iterable[NodeKind], None]
NodePredicate = Callable[["SyntaxNode"], bool]


@dataclass(frozen=True, eq=False)
class SyntaxNode:
    """
    One node of the syntax tree.

    A node exclusively owns its children. `field` is the role the node plays
    in its parent (e.g. "type", "parameters", "consequence"). `name` holds the
    identifier text for IDENTIFIER nodes; for the inferred `var` placeholder
    it holds the textually resolved type name and `inferred` is True.
    `modifiers` is only populated on MODIFIER_LIST nodes.
    """

    kind: NodeKind
    span: Span
    grammar_type: str
    children: Tuple["SyntaxNode", ...] = ()
    field: Optional[str] = None
    name: Optional[str] = None
    modifiers: FrozenSet[str] = frozenset()
    inferred: bool = False

    @property
    def start(self) -> int:
        return self.span.start

    @property
    def end(self) -> int:
        return self.span.end

    def child_by_field(self, field: str) -> Optional["SyntaxNode"]:
        """Return the first child playing the given role, or None."""
        for child in self.children:
            if child.field == field:
                return child
        return None

    def children_of_kind(self, kind: NodeKind) -> List["SyntaxNode"]:
        return [child for child in self.children if child.kind is kind]

    @property
    def modifier_set(self) -> FrozenSet[str]:
        """Modifiers of this declaration (union of its modifier lists)."""
        if self.kind is NodeKind.MODIFIER_LIST:
            return self.modifiers
        found: FrozenSet[str] = frozenset()
        for child in self.children_of_kind(NodeKind.MODIFIER_LIST):
            found = found | child.modifiers
        return found

    def descendants(
        self,
        kind: KindFilter = None,
        predicate: Optional[NodePredicate] = None,
    ) -> Iterator["SyntaxNode"]:
        """
        Lazily yield the descendants of this node (itself excluded) in pre-order.

        Args:
            kind: Keep only nodes of this kind (or of any kind in a collection).
            predicate: Keep only nodes for which predicate(node) is True.
                       Applied after the kind filter.
        """
        nodes = _preorder(self)
        next(nodes)  # skip self
        return _select(nodes, kind, predicate)


def _preorder(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """Yield node and every descendant in document order, without recursion."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _as_kinds(kind: KindFilter) -> Optional[FrozenSet[NodeKind]]:
    if kind is None:
        return None
    if isinstance(kind, NodeKind):
        return frozenset((kind,))
    return frozenset(kind)


def _select(
    nodes: Iterator[SyntaxNode],
    kind: KindFilter,
    predicate: Optional[NodePredicate],
) -> Iterator[SyntaxNode]:
    kinds = _as_kinds(kind)
    if kinds is not None:
        nodes = (n for n in nodes if n.kind in kinds)
    if predicate is not None:
        nodes = (n for n in nodes if predicate(n))
    return nodes


# \r\n counts once; U+0085, U+2028 and U+2029 are C# line terminators too
_LINE_BREAK = re.compile(rb"\r\n|[\r\n]|\xc2\x85|\xe2\x80[\xa8\xa9]")


class LineIndex:
    """
    Offset -> 1-based line table, built once in O(n).

    Every byte offset in [0, len(source)] maps to the line it sits on, so
    lookups are a single array index.
    """

    def __init__(self, source: bytes) -> None:
        starts = [0]
        starts.extend(m.end() for m in _LINE_BREAK.finditer(source))
        self._starts = starts

        lines = array("I")
        bounds = starts[1:] + [len(source) + 1]
        for line, (begin, end) in enumerate(zip(starts, bounds), start=1):
            lines.extend(repeat(line, end - begin))
        self._lines = lines

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def line_of(self, offset: int) -> int:
        if offset < 0 or offset >= len(self._lines):
            raise IndexError(f"offset {offset} outside source of {len(self._lines) - 1} bytes")
        return self._lines[offset]

    def line_start(self, line: int) -> int:
        """Byte offset where the given 1-based line starts."""
        return self._starts[line - 1]


class SyntaxTree:
    """
    A parsed compilation unit: root node, source bytes, line and parent indexes.

    Read-only after construction; rules may share one instance freely.
    """

    def __init__(self, root: SyntaxNode, source: bytes) -> None:
        self._root = root
        self._source = source
        self._lines = LineIndex(source)
        self._parents: Dict[SyntaxNode, SyntaxNode] = {}
        for node in _preorder(root):
            for child in node.children:
                self._parents[child] = node

    @property
    def root(self) -> SyntaxNode:
        return self._root

    @property
    def source(self) -> bytes:
        return self._source

    @property
    def text(self) -> str:
        return self._source.decode("utf-8", errors="replace")

    def descendants(
        self,
        kind: KindFilter = None,
        predicate: Optional[NodePredicate] = None,
    ) -> Iterator[SyntaxNode]:
        """Pre-order descendants of the root; see SyntaxNode.descendants."""
        return self._root.descendants(kind, predicate)

    def text_of(self, target: Union[SyntaxNode, Span]) -> str:
        """Verbatim source text of a node or span (trivia around it excluded)."""
        span = target.span if isinstance(target, SyntaxNode) else target
        return self._source[span.start : span.end].decode("utf-8", errors="replace")

    def line_of(self, target: Union[SyntaxNode, Span]) -> int:
        """1-based line on which the node or span starts."""
        span = target.span if isinstance(target, SyntaxNode) else target
        return self._lines.line_of(span.start)

    def column_of(self, target: Union[SyntaxNode, Span]) -> int:
        """1-based column (in characters) at which the node or span starts."""
        span = target.span if isinstance(target, SyntaxNode) else target
        line_start = self._lines.line_start(self._lines.line_of(span.start))
        prefix = self._source[line_start : span.start].decode("utf-8", errors="replace")
        return len(prefix) + 1

    def parent_of(self, node: SyntaxNode) -> Optional[SyntaxNode]:
        return self._parents.get(node)

    def ancestors(self, node: SyntaxNode) -> Iterator[SyntaxNode]:
        """Yield parent, grandparent, ... up to the root."""
        parent = self._parents.get(node)
        while parent is not None:
            yield parent
            parent = self._parents.get(parent)
