"""
Error handling utilities for the Sprig compiler.
"""
import re

from lark.exceptions import UnexpectedCharacters, UnexpectedInput


class SprigCompileError(Exception):
    """Base exception for Sprig compilation errors with line numbers and hints."""
    def __init__(self, message, line_number=None, column=None, context=None, suggestion=None):
        self.message = message
        self.line_number = line_number
        self.column = column
        self.context = context  # The offending line
        self.suggestion = suggestion  # How to fix it
        super().__init__(self._format_error())

    def __str__(self):
        # Context may be attached after construction, once the source is known
        return self._format_error()

    def _format_error(self):
        """Format the error message with context and suggestion."""
        lines = ["\n❌ Compilation Error"]
        if self.line_number:
            lines.append(f" at line {self.line_number}")
            if self.column:
                lines.append(f", column {self.column}")
        lines.append(":\n")

        lines.append(f"   {self.message}\n")

        if self.context:
            lines.append(f"   > {self.context}\n")

        if self.suggestion:
            lines.append(f"   💡 {self.suggestion}\n")

        return "".join(lines)


class AbbreviationSyntaxError(SprigCompileError):
    """The grammar could not match the input at ``position``."""
    def __init__(self, message, position=None, expected=(), **kwargs):
        self.position = position
        self.expected = frozenset(expected)
        super().__init__(message, **kwargs)

    @classmethod
    def from_lark(cls, error: UnexpectedInput, source):
        """Build a syntax error from any of Lark's ``UnexpectedInput`` exceptions."""
        # Lark reports unknown positions as -1 or '?'
        line_number = error.line if isinstance(error.line, int) and error.line > 0 else None
        column = error.column if isinstance(error.column, int) and error.column > 0 else None
        position = error.pos_in_stream
        if not isinstance(position, int) or position < 0:
            position = None

        token = getattr(error, "token", None)
        if token is not None and token.type == "$END":
            # The end token copies its position from the last real token
            position = len(source)
            line_number = source.count("\n") + 1
            column = position - source.rfind("\n")

        if isinstance(error, UnexpectedCharacters):
            expected = error.allowed or ()
            found = repr(source[position]) if position is not None and position < len(source) else "end of input"
        else:
            expected = getattr(error, "expected", None) or ()
            found = "end of input" if token is None or token.type == "$END" else repr(str(token))

        message = f"Unexpected {found}"
        if expected:
            message += f", expected one of: {', '.join(sorted(expected))}"

        return cls(
            message,
            position=position,
            expected=expected,
            line_number=line_number,
            column=column,
            context=get_line_context(source, line_number),
            suggestion=detect_common_error_patterns(source) or "Check syntax around this position",
        )


class TreeBuildError(SprigCompileError):
    """Raised by the tree builder after a successful parse."""


class LeafNodeCantHaveChildren(TreeBuildError):
    def __init__(self, message="Leaf node can't have any children", **kwargs):
        kwargs.setdefault("suggestion", "Only named nodes can be followed by '>'")
        super().__init__(message, **kwargs)


class InvalidNumLiteral(TreeBuildError):
    def __init__(self, literal, bits=64, **kwargs):
        self.literal = literal
        kwargs.setdefault("suggestion", f"Numbers must fit a signed {bits}-bit integer")
        super().__init__(f"Invalid number: {literal}", **kwargs)


class NodeLimitError(TreeBuildError):
    """Multipliers would build more nodes than the configured limit."""
    def __init__(self, count, limit, **kwargs):
        self.count = count
        self.limit = limit
        kwargs.setdefault("suggestion", "Lower the repetition counts or raise max_nodes")
        super().__init__(f"Repetition would build {count} nodes, the limit is {limit}", **kwargs)


class InputLimitError(SprigCompileError):
    """Input rejected by the size or nesting guard before it reaches the builder."""


def get_line_context(source_code, line_number):
    """Extract the line of code from source by line number (1-based)."""
    if not source_code or line_number is None:
        return None
    source_lines = source_code.split('\n')
    if 0 < line_number <= len(source_lines):
        return source_lines[line_number - 1].strip()
    return None


def detect_common_error_patterns(source_code):
    """Detect common mistakes and return a helpful suggestion, or None."""
    # Quotes are checked first, an open string swallows every bracket after it
    stripped = re.sub(r'//[^\n]*', '', source_code)
    without_strings = re.sub(r'"[^"]*"|\'[^\']*\'', '', stripped)
    lone_quote = re.search(r'["\']', without_strings)
    if lone_quote:
        return f"Unterminated string: add the closing {lone_quote.group()}"

    for opening, closing, what in (('(', ')', 'parentheses'), ('[', ']', 'brackets'), ('{', '}', 'braces')):
        open_count = without_strings.count(opening)
        close_count = without_strings.count(closing)
        if open_count != close_count:
            return f"Unmatched {what}: found {open_count} '{opening}' but {close_count} '{closing}'"

    if re.search(r'[>+*]\s*$', without_strings):
        return "Operator at the end of the abbreviation needs a right-hand side"

    if re.search(r'[>+]\s*[>+)]', without_strings):
        return "Two operators in a row: put a node, text or group between them"

    return None
