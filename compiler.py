import sys

from lark import Tree
from lark.exceptions import UnexpectedInput, VisitError

from sprig.config import CompilerConfig
from sprig.errors import (
    AbbreviationSyntaxError,
    InputLimitError,
    SprigCompileError,
    TreeBuildError,
    get_line_context,
)
from sprig.grammar import create_parser
from sprig.result import Err, Ok
from sprig.transformer import TreeBuilder

# Global verbose flag
_VERBOSE = False

def set_verbose(value):
    """Set the global verbose flag."""
    global _VERBOSE
    _VERBOSE = value

def debug_log(message):
    """Log a debug message to stderr if verbose mode is enabled."""
    if _VERBOSE:
        print(f"\033[94mDEBUG:\033[0m {message}", file=sys.stderr)


def measure_depth(tree):
    """
    Weighted nesting depth of a parse tree.

    Every expression counts once for its group and once more for each '>'
    in it, since both recurse while the tree is built. Walks iteratively so
    that deep input cannot exhaust the stack here.
    """
    deepest = 0
    stack = [(tree, 0)]
    while stack:
        node, depth = stack.pop()
        if node.data == 'expr':
            depth += 1 + sum(
                1 for child in node.children
                if not isinstance(child, Tree) and child.type == 'CHILD_OP'
            )
            deepest = max(deepest, depth)
        stack.extend((child, depth) for child in node.children if isinstance(child, Tree))
    return deepest


def parse_source(source):
    """Apply the grammar to ``source`` and return the Lark parse tree."""
    try:
        return create_parser().parse(source)
    except UnexpectedInput as e:
        raise AbbreviationSyntaxError.from_lark(e, source) from None


def compile_source(source, config=None):
    """
    Compile an abbreviation into its AST.

    Returns:
        The RootNode holding the top-level nodes.

    Raises:
        InputLimitError: Input longer or deeper than the configured limits.
        AbbreviationSyntaxError: Input does not match the grammar.
        TreeBuildError: Input parsed but cannot form a valid tree.
    """
    config = config or CompilerConfig()

    # STEP 1: BOUNDARY CHECKS
    if len(source) > config.max_input_length:
        raise InputLimitError(
            f"Abbreviation is {len(source)} characters long, the limit is {config.max_input_length}",
            suggestion="Split the abbreviation or raise max_input_length",
        )

    debug_log(f"Compiling abbreviation ({len(source)} chars)")

    # STEP 2: PARSE
    tree = parse_source(source)

    depth = measure_depth(tree)
    debug_log(f"Parse tree depth: {depth}")
    if depth > config.max_depth:
        raise InputLimitError(
            f"Abbreviation nests {depth} levels deep, the limit is {config.max_depth}",
            suggestion="Flatten groups or '>' chains, or raise max_depth",
        )

    # STEP 3: BUILD TREE
    try:
        root = TreeBuilder(integer_bits=config.integer_bits, max_nodes=config.max_nodes).transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, TreeBuildError):
            error = e.orig_exc
            if error.context is None and error.line_number:
                error.context = get_line_context(source, error.line_number)
            raise error from None
        raise

    debug_log(f"Built {len(root.children)} top-level node(s)")
    return root


def try_compile_source(source, config=None):
    """Compile ``source``, returning Ok(RootNode) or Err(SprigCompileError)."""
    try:
        return Ok(compile_source(source, config))
    except SprigCompileError as e:
        debug_log(f"Compilation failed: {e.message}")
        return Err(e)
