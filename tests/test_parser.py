"""Tests for the tree-sitter C# parser wrapper and the syntax tree it builds."""

import logging
from pathlib import Path

import pytest

from sharplint.errors import ParseError
from sharplint.parser import (
    create_parser,
    get_csharp_language,
    parse,
    parse_bytes,
)
from sharplint.rules.long_parameter_list import parameter_count
from sharplint.syntax import NodeKind, SyntaxTree


def _method_body(body: str) -> str:
    return "class C\n{\n    void M()\n    {\n" + body + "\n    }\n}\n"


def _placeholder_name(declaration: str) -> str:
    """Parse one local declaration and return the name given to its `var` type."""
    tree = parse(_method_body(declaration))
    decl = next(tree.descendants(NodeKind.VARIABLE_DECLARATION))
    type_node = decl.child_by_field("type")
    assert type_node is not None
    assert type_node.inferred
    assert type_node.kind is NodeKind.IDENTIFIER
    return type_node.name


def test_get_csharp_language_returns_language():
    """get_csharp_language() returns a tree-sitter Language object."""
    lang = get_csharp_language()
    assert lang is not None
    assert lang


def test_create_parser_returns_parser():
    """create_parser() returns a configured Parser."""
    parser = create_parser()
    assert parser is not None
    assert parser.language is not None


def test_parse_bytes_success(caplog):
    """Parsing valid C# source succeeds and logs."""
    source = b"class C { void M() { } }"
    with caplog.at_level(logging.DEBUG):
        tree = parse_bytes(source, parser=create_parser())
    assert not tree.root_node.has_error
    assert tree.root_node.type == "compilation_unit"
    assert "Parse succeeded" in caplog.text


def test_parse_bytes_invalid_logs_warning(caplog):
    """Parsing invalid C# logs the failure but still returns the raw tree."""
    with caplog.at_level(logging.WARNING):
        tree = parse_bytes(b"class C { void M( { }")
    assert tree.root_node.has_error
    assert "Parse completed with errors" in caplog.text


def test_parse_returns_syntax_tree():
    tree = parse("class C { }")
    assert isinstance(tree, SyntaxTree)
    assert tree.root.kind is NodeKind.COMPILATION_UNIT
    assert tree.root.grammar_type == "compilation_unit"


def test_parse_empty_source():
    tree = parse("")
    assert tree.root.kind is NodeKind.COMPILATION_UNIT
    assert list(tree.descendants()) == []


def test_parse_sample_file():
    """Parser parses the C# sample file without errors."""
    sample_path = Path(__file__).parent / "sample.cs"
    assert sample_path.exists(), "tests/sample.cs must exist"
    tree = parse(sample_path.read_text(encoding="utf-8"))
    assert len(list(tree.descendants(NodeKind.METHOD_DECLARATION))) == 1
    assert len(list(tree.descendants(NodeKind.FIELD_DECLARATION))) == 3


def test_parse_ignores_leading_bom():
    tree = parse("\ufeffclass C { public int x; }")
    field = next(tree.descendants(NodeKind.FIELD_DECLARATION))
    assert tree.text_of(field) == "public int x;"


def test_unbalanced_braces_raise_parse_error():
    with pytest.raises(ParseError) as excinfo:
        parse("class C\n{\n    void M()\n    {\n    }\n")
    assert excinfo.value.line is not None
    assert excinfo.value.column is not None
    assert "Syntax error" in str(excinfo.value)


def test_garbage_raises_parse_error():
    with pytest.raises(ParseError):
        parse("class C { int = ; }")


def test_comments_are_not_nodes():
    tree = parse(_method_body("if (a) { /* only */ if (b) { } // trailing\n }"))
    outer = next(tree.descendants(NodeKind.IF_STATEMENT))
    block = outer.child_by_field("consequence")
    assert block is not None
    assert block.kind is NodeKind.BLOCK
    assert [c.kind for c in block.children] == [NodeKind.IF_STATEMENT]


def test_if_statement_roles():
    tree = parse(_method_body("if (a) x(); else y();"))
    node = next(tree.descendants(NodeKind.IF_STATEMENT))
    assert node.child_by_field("condition") is not None
    assert node.child_by_field("consequence") is not None
    assert node.child_by_field("alternative") is not None


def test_modifiers_grouped_into_one_list():
    tree = parse("class C { [Obsolete] public static readonly int X = 1; }")
    field = next(tree.descendants(NodeKind.FIELD_DECLARATION))
    lists = field.children_of_kind(NodeKind.MODIFIER_LIST)
    assert len(lists) == 1
    assert field.modifier_set == frozenset({"public", "static", "readonly"})
    assert "readonly" in lists[0].modifiers


def test_field_without_modifiers():
    tree = parse("class C { int x; }")
    field = next(tree.descendants(NodeKind.FIELD_DECLARATION))
    assert field.modifier_set == frozenset()


@pytest.mark.parametrize(
    "signature, expected",
    [
        ("void M() { }", 0),
        ("void M(int a) { }", 1),
        ("void M(int a, ref int b, out int c, params int[] rest) { c = 0; }", 4),
        ("void M<T>(T a, T b) where T : class { }", 2),
        ("int M(int a, string b, double c, bool d, object e, char f) => a;", 6),
    ],
)
def test_parameter_count(signature, expected):
    tree = parse("class C { " + signature + " }")
    method = next(tree.descendants(NodeKind.METHOD_DECLARATION))
    assert parameter_count(method) == expected


@pytest.mark.parametrize(
    "declaration, expected",
    [
        ("var x = 5;", "int"),
        ("var x = 0x1F;", "int"),
        ("var x = 5u;", "uint"),
        ("var x = 5L;", "long"),
        ("var x = 5UL;", "ulong"),
        ("var x = 1.5;", "double"),
        ("var x = 1.5f;", "float"),
        ("var x = 1.5m;", "decimal"),
        ("var x = 'c';", "char"),
        ('var x = "s";', "string"),
        ('var x = @"s";', "string"),
        ("var x = true;", "bool"),
        ("var x = (short)1;", "short"),
        ("var x = -1;", "int"),
        ("var x = (2.0);", "double"),
        ("var x = new Foo();", "Foo"),
        ("var x = default(byte);", "byte"),
        ("var x = Compute();", "var"),
        ("var x = y;", "var"),
    ],
)
def test_var_placeholder_resolution(declaration, expected):
    assert _placeholder_name(declaration) == expected


def test_explicit_type_is_not_inferred():
    tree = parse(_method_body("int x = 5;"))
    decl = next(tree.descendants(NodeKind.VARIABLE_DECLARATION))
    type_node = decl.child_by_field("type")
    assert type_node is not None
    assert not type_node.inferred


def test_var_placeholder_in_for_initializer():
    """The placeholder keeps its `var` text while carrying the resolved name."""
    tree = parse(_method_body("for (var i = 0; i < 3; i++) { }"))
    decl = next(tree.descendants(NodeKind.VARIABLE_DECLARATION))
    type_node = decl.child_by_field("type")
    assert type_node is not None
    assert type_node.name == "int"
    assert tree.text_of(type_node) == "var"
