# Sprig - Abbreviation Compiler Components
"""
Core modules for the Sprig compiler:
- errors: Compile errors and syntax error hints
- grammar: Lark grammar definition for the abbreviation language
- tree: Immutable AST value types
- transformer: Parse tree to AST builder
- introspection: Debug rendering and binding discovery
- result: Ok/Err result wrapper
- config: Compiler limits and config loading
"""

from .errors import (
    SprigCompileError,
    AbbreviationSyntaxError,
    TreeBuildError,
    LeafNodeCantHaveChildren,
    NodeLimitError,
    InvalidNumLiteral,
    InputLimitError,
)
from .grammar import sprig_grammar, create_parser
from .transformer import TreeBuilder
from .introspection import render_tree, collect_bindings
from .result import Result, Ok, Err
from .config import CompilerConfig, load_config

__all__ = [
    'SprigCompileError',
    'AbbreviationSyntaxError',
    'TreeBuildError',
    'LeafNodeCantHaveChildren',
    'NodeLimitError',
    'InvalidNumLiteral',
    'InputLimitError',
    'sprig_grammar',
    'create_parser',
    'TreeBuilder',
    'render_tree',
    'collect_bindings',
    'Result',
    'Ok',
    'Err',
    'CompilerConfig',
    'load_config',
]
