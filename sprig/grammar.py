"""
Sprig Grammar Definition.

This module contains the Lark grammar for the Sprig abbreviation language.
"""
from functools import lru_cache

from lark import Lark

sprig_grammar = r"""
    start: expr

    // --- Composition ---
    // '>' captures everything after it, '+' chains siblings, '(' ')' scopes both
    expr: _element (_operator _element)*
    _operator: CHILD_OP | SIBLING_OP
    _element: term | term_list

    term: node
        | text_node
        | node_binding
        | "(" expr ")"

    term_list: term multiplier
    multiplier: "*" (NUMBER | BINDING)

    // --- Nodes ---
    // At most one attribute list, selectors on either side of it
    node: IDENT _selector* (attrs_prop _selector*)?
    _selector: id_prop | class_prop
    id_prop: ID_PROP
    class_prop: CLASS_PROP

    attrs_prop: "[" attr+ "]"
    attr: IDENT ("=" value)?

    text_node: "{" value+ "}"
    node_binding: NODE_BINDING

    // --- Values ---
    value: IDENT -> text_value
         | NUMBER -> number_value
         | STRING -> string_value
         | BINDING -> binding_value

    // --- Terminals ---
    _SEGMENT: /[A-Za-z_][A-Za-z0-9_\-]*/
    _PATH: _SEGMENT ("%" _SEGMENT)*

    IDENT: _SEGMENT
    ID_PROP: "#" _SEGMENT
    CLASS_PROP: "." _SEGMENT
    BINDING: "@" _PATH
    NODE_BINDING: "$" _PATH
    NUMBER: /-?[0-9]+/
    STRING: /"[^"]*"/ | /'[^']*'/

    CHILD_OP: ">"
    SIBLING_OP: "+"

    COMMENT: /\/\/[^\n]*/

    %import common.WS
    %ignore WS
    %ignore COMMENT
"""


@lru_cache(maxsize=None)
def create_parser():
    """Return the shared LALR parser; spans are kept on every tree's ``meta``."""
    return Lark(sprig_grammar, parser='lalr', propagate_positions=True)
