"""
Literal Expression Evaluator
============================

This module converts the numeric-literal expressions that appear in 6502
operands, ``=`` definitions and ``.db`` items into host-language expression
text. Nothing is computed here: symbols stay symbolic and are resolved by the
host at run time through the constants the emitter declares.

Supported Syntax
----------------
- ``$1A``     hexadecimal literal      -> ``0x1a``
- ``%101``    binary literal           -> ``0x5``
- ``name``    identifier or decimal    -> passed through unchanged
- ``<atom``   low byte of atom         -> ``LO(atom)``
- ``>atom``   high byte of atom        -> ``HI(atom)``
- ``+ - * /`` binary operators

Expression Grammar
------------------
There is deliberately no operator precedence. The grammar is::

    atom := '<' atom | '>' atom | '$'hex | '%'bin | identifier
    expr := atom (operator expr)?

so an expression is one atom optionally followed by an operator and the
rest of the expression, parsed recursively. ``A+B*C`` therefore means
``A + (B * C)`` and ``A*B+C`` means ``A * (B + C)``. The output wraps every
nested chain in parentheses so the host language evaluates it with the same
grouping.

Example Usage
-------------
>>> from asm2host.translator.expressions import format_literal
>>> format_literal("<Table+$10")
'LO(Table) + 0x10'
>>> format_literal("A+B*C")
'A + (B * C)'
"""

import re
from typing import Optional

from asm2host.errors import ExpressionError, SourceLocation


_HEX_RE = re.compile(r"\$([0-9a-fA-F]+)")
_BIN_RE = re.compile(r"%([01]+)")
_IDENT_RE = re.compile(r"\w+")
_OPERATOR_RE = re.compile(r"\s*([+\-*/])")


class LiteralEvaluator:
    """
    Parses one literal expression into host-expression text.

    The evaluator is a small recursive descent parser over the literal
    string. It keeps a cursor into the text; every parse method either
    consumes input and returns the rendered text, or returns None without
    consuming anything past the failure point.

    Attributes:
        location: Source location attached to raised errors
        source_line: Source text attached to raised errors
    """

    LOW_BYTE = "LO"
    HIGH_BYTE = "HI"

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.location = location
        self.source_line = source_line
        self._text = ""
        self._pos = 0

    # =========================================================================
    # Main Interface
    # =========================================================================

    def format(self, literal: str) -> str:
        """
        Convert a literal expression into host-expression text.

        Args:
            literal: The literal text, e.g. ``"<Table+$10"``

        Returns:
            The equivalent host expression

        Raises:
            ExpressionError: If no expression could be parsed or input is
                left over after the parse
        """
        self._text = literal
        self._pos = 0

        parsed = self._parse_expr()
        remainder = self._text[self._pos:].strip()
        if parsed is None or remainder:
            raise ExpressionError(
                literal,
                remainder,
                location=self.location,
                source_line=self.source_line,
            )
        return parsed[0]

    # =========================================================================
    # Recursive Descent Parser
    # =========================================================================

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos].isspace():
            self._pos += 1

    def _parse_expr(self) -> Optional[tuple[str, bool]]:
        """
        Parse ``atom (operator expr)?``.

        Returns:
            (text, is_chain) where is_chain is True when the text contains
            a top-level binary operator, or None on failure
        """
        left = self._parse_atom()
        if left is None:
            return None

        m = _OPERATOR_RE.match(self._text, self._pos)
        if not m:
            return left, False
        self._pos = m.end()
        operator = m.group(1)

        right = self._parse_expr()
        if right is None:
            return None
        right_text, right_is_chain = right
        if right_is_chain:
            right_text = f"({right_text})"
        return f"{left} {operator} {right_text}", True

    def _parse_atom(self) -> Optional[str]:
        """Parse a single atom, including any byte-extraction prefixes."""
        self._skip_whitespace()
        if self._pos >= len(self._text):
            return None

        ch = self._text[self._pos]
        if ch == "<":
            self._pos += 1
            inner = self._parse_atom()
            return None if inner is None else f"{self.LOW_BYTE}({inner})"
        if ch == ">":
            self._pos += 1
            inner = self._parse_atom()
            return None if inner is None else f"{self.HIGH_BYTE}({inner})"

        m = _HEX_RE.match(self._text, self._pos)
        if m:
            self._pos = m.end()
            return f"0x{m.group(1).lower()}"

        m = _BIN_RE.match(self._text, self._pos)
        if m:
            self._pos = m.end()
            return f"0x{int(m.group(1), 2):x}"

        m = _IDENT_RE.match(self._text, self._pos)
        if m:
            self._pos = m.end()
            return m.group(0)

        return None


# =============================================================================
# Convenience Functions
# =============================================================================

def format_literal(
    literal: str,
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> str:
    """
    Convenience function to convert one literal expression.

    Args:
        literal: Literal expression text
        location: Source location for errors
        source_line: Source text for errors

    Returns:
        Host-expression text
    """
    return LiteralEvaluator(location, source_line).format(literal)
