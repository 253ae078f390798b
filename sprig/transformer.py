"""
Sprig Tree Builder - Converts Lark parse trees into the Sprig AST.

This module contains the TreeBuilder class that reduces a parse tree produced
by the Sprig grammar into RootNode / NormalNode / ... values, applying child
and sibling composition, multipliers, grouping and binding resolution.
"""
from enum import Enum

from lark import Transformer

from sprig.errors import InvalidNumLiteral, NodeLimitError
from sprig.tree import (
    Attribute,
    Binding,
    CollectionNode,
    InnerContentNode,
    NoValue,
    NormalNode,
    Number,
    RootNode,
    SubtreeNode,
    Text,
    binding_from_segments,
)


class Operator(str, Enum):
    """Binary operators between the elements of an expression."""
    CHILD = "CHILD_OP"
    SIBLING = "SIBLING_OP"


def compose(elements, operators):
    """
    Apply child/sibling composition to one expression level.

    Args:
        elements: Node lists produced by each term or term list, in order.
        operators: The Operator between consecutive elements
            (``len(elements) - 1`` entries).

    Returns:
        The list of nodes at this nesting level.

    Only the last node produced by an element may receive children. A child
    operator takes the whole rest of the level as children of that node, so
    composition stops there.
    """
    nodes = []

    produced = list(elements[0])
    current = produced.pop() if produced else None
    nodes.extend(produced)

    for index, operator in enumerate(operators):
        if operator is Operator.SIBLING:
            siblings = list(elements[index + 1])
            if current is not None:
                nodes.append(current)
            current = siblings.pop() if siblings else None
            nodes.extend(siblings)
        else:
            children = compose(elements[index + 1:], operators[index + 1:])
            # A zero-repetition term has no copy left to hold the children
            if current is not None:
                nodes.append(current.with_children(children))
            return nodes

    if current is not None:
        nodes.append(current)
    return nodes


def count_nodes(nodes):
    """Count ``nodes`` and all of their descendants, templates included."""
    count = 0
    stack = list(nodes)
    while stack:
        node = stack.pop()
        count += 1
        stack.extend(getattr(node, "children", ()))
        stack.extend(getattr(node, "nodes", ()))
    return count


class TreeBuilder(Transformer):
    """
    Transforms Sprig parse trees into an immutable AST.

    Every callback returns typed values: terminals become ints, strings and
    bindings, nodes become TreeNode models and every element of an expression
    becomes a list of nodes, which ``expr`` then composes.
    """

    def __init__(self, integer_bits=64, max_nodes=100000):
        """
        Initialize the builder.

        Args:
            integer_bits: Width of the signed integer type number literals must fit.
            max_nodes: How many nodes numeric multipliers may copy in total.
        """
        super().__init__()
        self.integer_bits = integer_bits
        self._min_int = -(1 << (integer_bits - 1))
        self._max_int = (1 << (integer_bits - 1)) - 1
        self.max_nodes = max_nodes
        self._copied = 0

    def start(self, args):
        """Wrap the top level in the root pseudo-node."""
        return RootNode(children=tuple(args[0]))

    # --- Composition ---

    def expr(self, args):
        """Compose an operator-separated chain of elements."""
        elements = args[0::2]
        operators = [Operator(token.type) for token in args[1::2]]
        return compose(elements, operators)

    def term(self, args):
        """Normalize any term to the list of nodes it produces."""
        content = args[0]
        if isinstance(content, list):
            return content
        return [content]

    def term_list(self, args):
        """Expand a term by its multiplier."""
        nodes, multiplier = args
        if isinstance(multiplier, int):
            self._copied += count_nodes(nodes) * max(multiplier, 0)
            if self._copied > self.max_nodes:
                raise NodeLimitError(self._copied, self.max_nodes)
            # Clones must not share nested models
            return [node.model_copy(deep=True) for _ in range(multiplier) for node in nodes]
        return [CollectionNode(nodes=tuple(nodes), collection=multiplier)]

    def multiplier(self, args):
        return args[0]

    # --- Nodes ---

    def node(self, args):
        """Build a normal node, accumulating repeated attributes."""
        name, *parts = args
        attributes = {}
        for part in parts:
            for attr_name, value in part:
                if attr_name not in attributes:
                    attributes[attr_name] = NoValue() if value is None else NoValue().append(value)
                elif value is not None:
                    attributes[attr_name] = attributes[attr_name].append(value)

        return NormalNode(
            name=str(name),
            attributes=tuple(Attribute(name=n, value=v) for n, v in attributes.items()),
        )

    def id_prop(self, args):
        return [("id", Text(value=args[0]))]

    def class_prop(self, args):
        return [("class", Text(value=args[0]))]

    def attrs_prop(self, args):
        return args

    def attr(self, args):
        """Return ``(name, value)``; value is None when no ``=`` was given."""
        name = str(args[0])
        value = args[1] if len(args) > 1 else None
        return (name, value)

    def text_node(self, args):
        """Each token becomes its own content node, separated by a single space."""
        nodes = []
        for i, value in enumerate(args):
            if i:
                nodes.append(InnerContentNode(value=Text(value=" ")))
            nodes.append(InnerContentNode(value=value))
        return nodes

    def node_binding(self, args):
        return SubtreeNode(binding=args[0])

    # --- Values ---

    def text_value(self, args):
        return Text(value=str(args[0]))

    def number_value(self, args):
        return Number(value=args[0])

    def string_value(self, args):
        return Text(value=args[0])

    def binding_value(self, args):
        return Binding(binding=args[0])

    # --- Terminals ---

    def NUMBER(self, t):
        """Transform NUMBER token to a signed integer of the configured width."""
        try:
            value = int(str(t))
        except ValueError:
            raise InvalidNumLiteral(str(t), self.integer_bits, line_number=t.line, column=t.column)
        if not self._min_int <= value <= self._max_int:
            raise InvalidNumLiteral(str(t), self.integer_bits, line_number=t.line, column=t.column)
        return value

    def STRING(self, t):
        """Strip the quotes; backslashes are kept as written."""
        return str(t)[1:-1]

    def BINDING(self, t):
        """Transform ``@a%b`` to a property binding."""
        return binding_from_segments(str(t)[1:].split("%"))

    def NODE_BINDING(self, t):
        """Transform ``$a%b`` to a property binding."""
        return binding_from_segments(str(t)[1:].split("%"))

    def ID_PROP(self, t):
        return str(t)[1:]

    def CLASS_PROP(self, t):
        return str(t)[1:]
