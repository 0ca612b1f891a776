# =============================================================================
# test_expressions.py - Literal Expression Evaluator Unit Tests
# =============================================================================
# Tests for the literal expression evaluator that turns 6502 literals into
# host-expression text.
#
# Test coverage includes:
#   - Hex, binary and identifier atoms
#   - Low/high byte extraction (< and >)
#   - Right-recursive chaining without operator precedence
#   - Fatal errors naming the literal and the unparsed remainder
# =============================================================================

import pytest

from asm2host.errors import ExpressionError, SourceLocation
from asm2host.translator.expressions import LiteralEvaluator, format_literal


# =============================================================================
# Atom Tests
# =============================================================================

class TestAtoms:
    """Test single atoms."""

    def test_hex_literal(self):
        """Hex literal normalizes to lower-case 0x form."""
        assert format_literal("$1A") == "0x1a"

    def test_hex_keeps_digit_count(self):
        """Leading zeros of a hex literal are kept."""
        assert format_literal("$01") == "0x01"
        assert format_literal("$0200") == "0x0200"

    def test_binary_literal(self):
        """Binary literal converts to hex."""
        assert format_literal("%101") == "0x5"
        assert format_literal("%11111111") == "0xff"
        assert format_literal("%0") == "0x0"

    def test_identifier_passes_through(self):
        """Identifiers stay symbolic."""
        assert format_literal("PPU_CTRL") == "PPU_CTRL"

    def test_decimal_passes_through(self):
        """Decimal numbers are identifiers to the grammar."""
        assert format_literal("10") == "10"

    def test_surrounding_whitespace(self):
        """Whitespace around the literal is ignored."""
        assert format_literal("  $10  ") == "0x10"


# =============================================================================
# Byte Extraction Tests
# =============================================================================

class TestByteExtraction:
    """Test < and > byte extraction wrappers."""

    def test_low_byte(self):
        assert format_literal("<Label") == "LO(Label)"

    def test_high_byte(self):
        assert format_literal(">Label") == "HI(Label)"

    def test_low_byte_of_hex(self):
        assert format_literal("<$1234") == "LO(0x1234)"

    def test_nested_extraction(self):
        """Wrappers apply to the following atom and may nest."""
        assert format_literal("<>Label") == "LO(HI(Label))"

    def test_extraction_binds_to_atom_only(self):
        """< applies to one atom, not to the rest of the chain."""
        assert format_literal("<Table+$10") == "LO(Table) + 0x10"


# =============================================================================
# Chaining Tests
# =============================================================================

class TestChaining:
    """Test the non-precedence, right-recursive operator chain."""

    def test_single_operation(self):
        """A single operation is not parenthesized."""
        assert format_literal("A+B") == "A + B"

    def test_add_then_multiply(self):
        """A+B*C groups as A + (B * C)."""
        assert format_literal("A+B*C") == "A + (B * C)"

    def test_multiply_then_add(self):
        """No precedence: A*B+C groups as A * (B + C)."""
        assert format_literal("A*B+C") == "A * (B + C)"

    def test_subtraction_is_right_recursive(self):
        """A-B-C groups as A - (B - C)."""
        assert format_literal("A-B-C") == "A - (B - C)"

    def test_long_chain(self):
        assert format_literal("A+B*C-D") == "A + (B * (C - D))"

    def test_spaces_between_operators(self):
        assert format_literal("Table + $10 / 2") == "Table + (0x10 / 2)"

    def test_all_operators(self):
        assert format_literal("$10/%10") == "0x10 / 0x2"
        assert format_literal("X-1") == "X - 1"


# =============================================================================
# Error Tests
# =============================================================================

class TestErrors:
    """Test fatal parse errors."""

    def test_bad_hex_digit(self):
        """$1G parses $1 and leaves G unparsed."""
        with pytest.raises(ExpressionError) as exc_info:
            format_literal("$1G")
        assert exc_info.value.literal == "$1G"
        assert exc_info.value.remainder == "G"
        assert "$1G" in str(exc_info.value)

    def test_empty_literal(self):
        with pytest.raises(ExpressionError):
            format_literal("")

    def test_dangling_operator(self):
        with pytest.raises(ExpressionError):
            format_literal("A+")

    def test_parentheses_not_supported(self):
        """Grouping is not part of the literal grammar."""
        with pytest.raises(ExpressionError) as exc_info:
            format_literal("(A)")
        assert exc_info.value.remainder == "(A)"

    def test_two_atoms_without_operator(self):
        with pytest.raises(ExpressionError) as exc_info:
            format_literal("A B")
        assert exc_info.value.remainder == "B"

    def test_error_carries_location(self):
        """Errors are prefixed with the source location."""
        evaluator = LiteralEvaluator(location=SourceLocation("game.asm", 12))
        with pytest.raises(ExpressionError) as exc_info:
            evaluator.format("$")
        assert "game.asm:12:1" in str(exc_info.value)

    def test_evaluator_is_reusable(self):
        """One evaluator can format several literals."""
        evaluator = LiteralEvaluator()
        assert evaluator.format("$10") == "0x10"
        assert evaluator.format("<X") == "LO(X)"
