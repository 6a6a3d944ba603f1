# Tree-sitter setup and AST parsing: parse C# source into sharplint syntax trees.

import logging
from typing import List, Optional, Tuple

import tree_sitter
from tree_sitter import Language
from tree_sitter import Node as TSNode
from tree_sitter_c_sharp import language as _csharp_language_capsule

from sharplint.errors import ParseError
from sharplint.syntax import NodeKind, Span, SyntaxNode, SyntaxTree

logger = logging.getLogger(__name__)

# C# grammar: wrap tree-sitter-c-sharp capsule for use with tree_sitter.Parser
_CSHARP_LANGUAGE = Language(_csharp_language_capsule())

_KIND_BY_TYPE = {
    "compilation_unit": NodeKind.COMPILATION_UNIT,
    "field_declaration": NodeKind.FIELD_DECLARATION,
    "variable_declaration": NodeKind.VARIABLE_DECLARATION,
    "method_declaration": NodeKind.METHOD_DECLARATION,
    "parameter_list": NodeKind.PARAMETER_LIST,
    "parameter": NodeKind.PARAMETER,
    "if_statement": NodeKind.IF_STATEMENT,
    "block": NodeKind.BLOCK,
    "identifier": NodeKind.IDENTIFIER,
}

# Named grammar nodes that are trivia, not structure
_TRIVIA_TYPES = frozenset({"comment"})

_STRING_LITERAL_TYPES = frozenset(
    {
        "string_literal",
        "verbatim_string_literal",
        "raw_string_literal",
        "interpolated_string_expression",
    }
)

# Name given to the `var` placeholder when the initializer says nothing textual
UNRESOLVED_TYPE_NAME = "var"


def get_csharp_language() -> Language:
    """Return the Tree-sitter Language object for C#."""
    return _CSHARP_LANGUAGE


def create_parser() -> tree_sitter.Parser:
    """Create and return a Tree-sitter Parser configured for C#."""
    parser = tree_sitter.Parser(_CSHARP_LANGUAGE)
    return parser


def parse_bytes(
    source: bytes,
    parser: Optional[tree_sitter.Parser] = None,
) -> tree_sitter.Tree:
    """
    Parse C# source bytes into a tree-sitter concrete syntax tree.

    Args:
        source: UTF-8 encoded C# source code.
        parser: Optional parser instance; if None, a new one is created.

    Returns:
        The parse tree. Check tree.root_node.has_error for syntax errors;
        use parse() to get a validated SyntaxTree instead.
    """
    if parser is None:
        parser = create_parser()
    tree = parser.parse(source)
    if tree.root_node.has_error:
        logger.warning(
            "Parse completed with errors: root=%s",
            tree.root_node.type,
        )
    else:
        logger.debug(
            "Parse succeeded: root=%s",
            tree.root_node.type,
        )
    return tree


def parse(text: str, parser: Optional[tree_sitter.Parser] = None) -> SyntaxTree:
    """
    Parse C# source text into an immutable SyntaxTree.

    Args:
        text: C# source code. A leading byte-order mark is ignored.
        parser: Optional parser instance; if None, a new one is created.

    Returns:
        The syntax tree with its line index built.

    Raises:
        ParseError: If the text is not valid C#. No partial tree is returned.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    source = text.encode("utf-8")
    raw = parse_bytes(source, parser=parser)
    if raw.root_node.has_error:
        raise _parse_error(raw.root_node, source)
    root = _Converter(source).convert(raw.root_node)
    return SyntaxTree(root, source)


def _parse_error(root: TSNode, source: bytes) -> ParseError:
    """Build a ParseError describing the first ERROR or missing node."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_missing:
            row, col = node.start_point
            return ParseError(f"missing '{node.type}'", line=row + 1, column=col + 1)
        if node.type == "ERROR":
            row, col = node.start_point
            snippet = source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
            snippet = snippet.strip().splitlines()[0][:40] if snippet.strip() else ""
            message = f"unexpected '{snippet}'" if snippet else "unexpected input"
            return ParseError(message, line=row + 1, column=col + 1)
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return ParseError("source could not be parsed")


def _entries(node: TSNode) -> List[Tuple[Optional[str], TSNode]]:
    """All children of node (named or not) paired with their field names."""
    entries: List[Tuple[Optional[str], TSNode]] = []
    cursor = node.walk()
    if cursor.goto_first_child():
        while True:
            entries.append((cursor.field_name, cursor.node))
            if not cursor.goto_next_sibling():
                break
    return entries


def _is_structural(node: TSNode) -> bool:
    return node.is_named and node.type not in _TRIVIA_TYPES


def _integer_type(literal: str) -> str:
    suffix = literal.lower()
    if suffix.endswith(("ul", "lu")):
        return "ulong"
    if suffix.endswith("u"):
        return "uint"
    if suffix.endswith("l"):
        return "long"
    return "int"


def _real_type(literal: str) -> str:
    suffix = literal.lower()
    if suffix.endswith("f"):
        return "float"
    if suffix.endswith("m"):
        return "decimal"
    return "double"


class _Converter:
    """Turns a tree-sitter C# tree into SyntaxNode objects."""

    def __init__(self, source: bytes) -> None:
        self._source = source

    def _text(self, node: TSNode) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def convert(self, node: TSNode, field: Optional[str] = None) -> SyntaxNode:
        kind = _KIND_BY_TYPE.get(node.type, NodeKind.OTHER)
        if kind is NodeKind.PARAMETER_LIST:
            children = self._parameters(node)
        else:
            children = self._children(node)
        if kind is NodeKind.VARIABLE_DECLARATION:
            children = self._with_inferred_type(node, children)
        return SyntaxNode(
            kind=kind,
            span=Span(node.start_byte, node.end_byte),
            grammar_type=node.type,
            children=tuple(children),
            field=field,
            name=self._text(node) if kind is NodeKind.IDENTIFIER else None,
        )

    def _children(self, node: TSNode) -> List[SyntaxNode]:
        children: List[SyntaxNode] = []
        modifiers: List[TSNode] = []
        for field, child in _entries(node):
            if not _is_structural(child):
                continue
            if child.type == "modifier":
                modifiers.append(child)
                continue
            if modifiers:
                children.append(self._modifier_list(modifiers))
                modifiers = []
            children.append(self.convert(child, field))
        if modifiers:
            children.append(self._modifier_list(modifiers))
        return children

    def _modifier_list(self, modifiers: List[TSNode]) -> SyntaxNode:
        return SyntaxNode(
            kind=NodeKind.MODIFIER_LIST,
            span=Span(modifiers[0].start_byte, modifiers[-1].end_byte),
            grammar_type="modifier_list",
            children=tuple(self.convert(m) for m in modifiers),
            modifiers=frozenset(self._text(m).strip() for m in modifiers),
        )

    def _parameters(self, node: TSNode) -> List[SyntaxNode]:
        """Group the list's children by top-level commas, one PARAMETER per group."""
        groups: List[List[Tuple[Optional[str], TSNode]]] = [[]]
        for field, child in _entries(node):
            if not child.is_named:
                if child.type == ",":
                    groups.append([])
                continue
            if _is_structural(child):
                groups[-1].append((field, child))

        parameters: List[SyntaxNode] = []
        for group in groups:
            if not group:
                continue
            if len(group) == 1 and group[0][1].type == "parameter":
                parameters.append(self.convert(group[0][1]))
                continue
            # e.g. `params int[] values`, whose parts the grammar inlines
            parameters.append(
                SyntaxNode(
                    kind=NodeKind.PARAMETER,
                    span=Span(group[0][1].start_byte, group[-1][1].end_byte),
                    grammar_type="parameter",
                    children=tuple(self.convert(child, field) for field, child in group),
                )
            )
        return parameters

    def _with_inferred_type(self, node: TSNode, children: List[SyntaxNode]) -> List[SyntaxNode]:
        """Replace a `var` type child with an inferred identifier named after the initializer."""
        for index, child in enumerate(children):
            if child.field != "type":
                continue
            if child.grammar_type != "implicit_type" and not (
                child.kind is NodeKind.IDENTIFIER and child.name == "var"
            ):
                return children
            initializer = self._first_initializer(node)
            resolved = UNRESOLVED_TYPE_NAME if initializer is None else self._resolve(initializer)
            placeholder = SyntaxNode(
                kind=NodeKind.IDENTIFIER,
                span=child.span,
                grammar_type=child.grammar_type,
                field="type",
                name=resolved,
                inferred=True,
            )
            return children[:index] + [placeholder] + children[index + 1 :]
        return children

    def _first_initializer(self, declaration: TSNode) -> Optional[TSNode]:
        for _, declarator in _entries(declaration):
            if declarator.type != "variable_declarator":
                continue
            seen_equals = False
            for _, child in _entries(declarator):
                if child.type == "=":
                    seen_equals = True
                elif child.type == "equals_value_clause":
                    return next((c for _, c in _entries(child) if _is_structural(c)), None)
                elif seen_equals and _is_structural(child):
                    return child
            return None
        return None

    def _resolve(self, expression: TSNode) -> str:
        """Textual type name of an initializer expression; never consults symbols."""
        kind = expression.type
        if kind == "integer_literal":
            return _integer_type(self._text(expression))
        if kind == "real_literal":
            return _real_type(self._text(expression))
        if kind == "character_literal":
            return "char"
        if kind in _STRING_LITERAL_TYPES:
            return "string"
        if kind == "boolean_literal":
            return "bool"
        if kind in ("cast_expression", "object_creation_expression", "default_expression"):
            type_node = expression.child_by_field_name("type")
            if type_node is None:
                return UNRESOLVED_TYPE_NAME
            return self._text(type_node).strip()
        if kind in ("parenthesized_expression", "prefix_unary_expression"):
            operands = [c for _, c in _entries(expression) if _is_structural(c)]
            if operands:
                return self._resolve(operands[-1])
        return UNRESOLVED_TYPE_NAME
