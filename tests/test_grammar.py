"""
Unit tests for the Sprig grammar.
"""
import pytest
from lark import Lark, Tree
from lark.exceptions import UnexpectedInput

from sprig.grammar import sprig_grammar, create_parser


@pytest.fixture
def parser():
    """Create a parser instance for testing."""
    return Lark(sprig_grammar, parser='lalr', propagate_positions=True)


def node_children(tree):
    """Return the children of the first ``node`` rule in the tree."""
    return next(tree.find_data("node")).children


class TestIdentifierParsing:
    """Tests for identifiers and comments."""

    def test_identifier_with_dashes_and_comment(self, parser):
        """Identifiers may contain dashes and underscores; comments are ignored."""
        tree = parser.parse("_test-ABC_01 //comment")
        assert node_children(tree) == ["_test-ABC_01"]

    def test_identifier_starting_with_digit(self, parser):
        """Identifiers starting with a digit are not allowed."""
        with pytest.raises(UnexpectedInput):
            parser.parse("0test")

    def test_standalone_id(self, parser):
        """An id without a node name is undefined."""
        with pytest.raises(UnexpectedInput):
            parser.parse("#myid")

    def test_standalone_class(self, parser):
        """A class without a node name is undefined."""
        with pytest.raises(UnexpectedInput):
            parser.parse(".class")

    def test_comments_between_lines(self, parser):
        """Line comments may appear wherever whitespace is allowed."""
        tree = parser.parse("a // first\n> b // second\n+ c")
        assert len(list(tree.find_data("node"))) == 3


class TestNodeParsing:
    """Tests for node names, selectors and attribute lists."""

    def test_id_and_classes(self, parser):
        """Selectors follow the node name in source order."""
        children = node_children(parser.parse("hello#my-id.class1.class2"))
        assert children[0] == "hello"
        assert [c.data for c in children[1:]] == ["id_prop", "class_prop", "class_prop"]
        assert children[1].children == ["#my-id"]

    def test_attributes_before_selectors(self, parser):
        """Attribute list may come before id and class selectors."""
        children = node_children(parser.parse('hello[attr1=value attr2 = " value "]#id.class1.class2'))
        assert [c.data for c in children[1:]] == ["attrs_prop", "id_prop", "class_prop", "class_prop"]

        attrs = children[1].children
        assert [a.children[0] for a in attrs] == ["attr1", "attr2"]
        assert attrs[0].children[1].data == "text_value"
        assert attrs[1].children[1].data == "string_value"
        assert attrs[1].children[1].children == ['" value "']

    def test_attributes_between_selectors(self, parser):
        """Selectors may surround the attribute list."""
        children = node_children(parser.parse("a.x[y=1]#z"))
        assert [c.data for c in children[1:]] == ["class_prop", "attrs_prop", "id_prop"]

    def test_attribute_without_value(self, parser):
        """An attribute may omit '=value'."""
        attr = next(parser.parse("input[disabled]").find_data("attr"))
        assert attr.children == ["disabled"]

    def test_attribute_values(self, parser):
        """Attribute values may be identifiers, numbers, strings or bindings."""
        tree = parser.parse("a[a=b c=-12 d='e' f=@g%h]")
        kinds = [a.children[1].data for a in tree.find_data("attr")]
        assert kinds == ["text_value", "number_value", "string_value", "binding_value"]

    def test_two_attribute_lists(self, parser):
        """At most one attribute list is allowed per node."""
        with pytest.raises(UnexpectedInput):
            parser.parse("a[x][y]")

    def test_empty_attribute_list(self, parser):
        """Attribute list needs at least one attribute."""
        with pytest.raises(UnexpectedInput):
            parser.parse("a[]")


class TestContentParsing:
    """Tests for text nodes and node bindings."""

    def test_text_node_values(self, parser):
        """Text nodes hold a whitespace-separated sequence of values."""
        tree = parser.parse("{@test wow 123 'hi'}")
        text = next(tree.find_data("text_node"))
        assert [c.data for c in text.children] == ["binding_value", "text_value", "number_value", "string_value"]

    def test_empty_text_node(self, parser):
        """Text nodes need at least one value."""
        with pytest.raises(UnexpectedInput):
            parser.parse("{}")

    def test_node_binding(self, parser):
        """'$' introduces a subtree placeholder."""
        tree = parser.parse("$data%view + div")
        binding = next(tree.find_data("node_binding"))
        assert binding.children == ["$data%view"]

    def test_string_keeps_backslashes(self, parser):
        """Strings have no escape sequences."""
        tree = parser.parse(r"{'a\nb'}")
        value = next(tree.find_data("string_value"))
        assert value.children == [r"'a\nb'"]


class TestExpressionParsing:
    """Tests for operators, groups and multipliers."""

    def test_operators_are_kept(self, parser):
        """Child and sibling operators stay in the expression in order."""
        expr = next(parser.parse("a>b+c").find_data("expr"))
        operators = [c.type for c in expr.children if not isinstance(c, Tree)]
        assert operators == ["CHILD_OP", "SIBLING_OP"]

    def test_nested_groups(self, parser):
        """Each group is its own expression."""
        tree = parser.parse("html>(body+head>div+(a>b)+p>a)\n+footer")
        assert len(list(tree.find_data("expr"))) == 3

    def test_multipliers(self, parser):
        """Terms may be multiplied by a number or a binding."""
        tree = parser.parse("html*3+(a>b)*@collection")
        multipliers = [m.children[0] for m in tree.find_data("multiplier")]
        assert [m.type for m in multipliers] == ["NUMBER", "BINDING"]
        assert len(list(tree.find_data("term_list"))) == 2

    def test_negative_multiplier(self, parser):
        """Multiplier numbers may be negative."""
        tree = parser.parse("x*-3")
        assert next(tree.find_data("multiplier")).children == ["-3"]

    def test_spaced_binding_multiplier(self, parser):
        """Whitespace is allowed around '*'."""
        tree = parser.parse("html[ id=@collection%id ] * @collection")
        assert next(tree.find_data("multiplier")).children == ["@collection"]

    def test_smoke(self, parser):
        """A realistic page skeleton parses."""
        source = '''
            html
                >(head
                    >meta[charset="utf-8"]
                    +(title>{"My page!"})
                    +link[
                        rel=stylesheet
                        href=@css_styles
                        ]
                )
                + body>div#page-body>div#list
                    >$items%view * @items
        '''
        tree = parser.parse(source)
        assert len(list(tree.find_data("node"))) == 8
        assert len(list(tree.find_data("node_binding"))) == 1

    def test_spans(self, parser):
        """Parse tree nodes carry source positions."""
        tree = parser.parse("a + bb")
        second = list(tree.find_data("node"))[1]
        assert (second.meta.start_pos, second.meta.end_pos) == (4, 6)


class TestInvalidSyntax:
    """Tests for invalid syntax detection."""

    @pytest.mark.parametrize("source", ["", "a b", "a>", "a+", "(a", "a)", "a*", "a**2", "a>>b", "a[x=]"])
    def test_rejected(self, parser, source):
        """Malformed abbreviations fail to parse."""
        with pytest.raises(UnexpectedInput):
            parser.parse(source)


def test_create_parser_is_shared():
    """The module-level parser is built once."""
    assert create_parser() is create_parser()
