"""
Sprig Introspection - Debug rendering and binding discovery for compiled trees.

This module renders a compiled AST as the line-oriented dump used in tests and
when inspecting abbreviations, and lists the data-model bindings a tree refers
to so that a binding evaluator knows what it has to resolve.
"""
from sprig.tree import (
    Binding,
    CollectionNode,
    InnerContentNode,
    MultipleValues,
    NormalNode,
    RootNode,
    SingleValue,
    SubtreeNode,
)


def render_tree(node):
    """
    Render a tree node as an indented, line-oriented dump.

    The root pseudo-node is not shown. Every other node gets its own line,
    indented two spaces per nesting level::

         - div[id="test"]
           - [SUBTREE] @sub%tree
           - [CONTENT] "hello"
    """
    lines = []
    _render(node, "", lines)
    return "".join(lines)


def _render(node, indent, lines):
    if isinstance(node, RootNode):
        for child in node.children:
            _render(child, "", lines)
    elif isinstance(node, NormalNode):
        label = node.name
        if node.attributes:
            label += "[" + " ".join(str(a) for a in node.attributes) + "]"
        lines.append(f"{indent} - {label}\n")
        for child in node.children:
            _render(child, indent + "  ", lines)
    elif isinstance(node, InnerContentNode):
        lines.append(f"{indent} - [CONTENT] {node.value}\n")
    elif isinstance(node, SubtreeNode):
        lines.append(f"{indent} - [SUBTREE] {node.binding}\n")
    elif isinstance(node, CollectionNode):
        lines.append(f"{indent} - [COLLECTION] {node.collection}\n")
        for template in node.nodes:
            _render(template, indent + "  ", lines)
    else:
        raise TypeError(f"Not a tree node: {node!r}")


def collect_bindings(node):
    """
    Return every property binding referenced by ``node``.

    The walk is depth-first, with attributes grouped by name. A collection's
    own binding comes before the bindings of its template.
    """
    bindings = []
    stack = [node]
    while stack:
        current = stack.pop()
        children = ()
        if isinstance(current, RootNode):
            children = current.children
        elif isinstance(current, NormalNode):
            for attr in current.attributes:
                if isinstance(attr.value, SingleValue):
                    values = (attr.value.value,)
                elif isinstance(attr.value, MultipleValues):
                    values = attr.value.values
                else:
                    values = ()
                bindings.extend(v.binding for v in values if isinstance(v, Binding))
            children = current.children
        elif isinstance(current, InnerContentNode):
            if isinstance(current.value, Binding):
                bindings.append(current.value.binding)
        elif isinstance(current, SubtreeNode):
            bindings.append(current.binding)
        elif isinstance(current, CollectionNode):
            bindings.append(current.collection)
            children = current.nodes
        stack.extend(reversed(children))
    return bindings
