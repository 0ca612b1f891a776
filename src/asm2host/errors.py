"""
asm2host Error Hierarchy
========================

This module defines the exception hierarchy for the translator. All
exceptions inherit from Asm2HostError, allowing callers to catch every
translator-related error with a single except clause.

Exception Hierarchy
-------------------
Asm2HostError (base)
└── TranslatorError (source-related)
    ├── ExpressionError - literal expression could not be fully parsed (fatal)
    ├── UnknownLineError - source line matched no known form (diagnostic)
    └── ConfigurationError - invalid translator configuration

Fatal vs. Diagnostic
--------------------
ExpressionError aborts the whole translation: downstream addresses cannot
be trusted once a literal fails to parse. UnknownLineError is never raised
by the pipeline; instances are collected in a DiagnosticCollector, the line
is dropped and translation continues.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Asm2HostError(Exception):
    """
    Base exception for all asm2host errors.

        try:
            translator.translate_file("game.asm")
        except Asm2HostError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Translator Exceptions
# =============================================================================

class TranslatorError(Asm2HostError):
    """
    Base exception for errors tied to the assembly source.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    severity = "error"

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            game.asm:15:1: error: illegal expression '$1G' (unparsed: 'G')
                X = $1G
                ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: {self.severity}: {self.message}")
        else:
            parts.append(f"{self.severity}: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class ExpressionError(TranslatorError):
    """
    A literal expression failed to parse completely.

    Raised by the literal evaluator when an atom is missing or input is
    left over after the longest possible parse, e.g. ``$1G`` stops after
    ``$1`` and leaves ``G`` behind.

    Attributes:
        literal: The complete literal text that was being parsed
        remainder: The part of the literal that could not be consumed
    """

    def __init__(
        self,
        literal: str,
        remainder: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.literal = literal
        self.remainder = remainder
        super().__init__(
            f"illegal expression '{literal}' (unparsed: '{remainder}')",
            location=location,
            source_line=source_line,
        )


class UnknownLineError(TranslatorError):
    """
    A source line matched none of the recognized line forms.

    The translator records these as diagnostics and drops the line.
    """

    severity = "warning"

    def __init__(self, text: str, location: Optional[SourceLocation] = None):
        self.text = text
        super().__init__(
            f"unknown line: {text}",
            location=location,
        )


class ConfigurationError(TranslatorError):
    """
    Invalid translator configuration.

    Raised for an unknown host target or an unusable ROM data base address.
    """
    pass


# =============================================================================
# Diagnostic Collection
# =============================================================================

class DiagnosticCollector:
    """
    Collects non-fatal diagnostics for batch reporting.

    Unknown lines and symbol warnings do not stop translation; they are
    gathered here so the caller can report them after the output has been
    produced.

    Example:
        collector = DiagnosticCollector()
        collector.add(UnknownLineError("???", location))
        if collector.has_diagnostics():
            print(collector.report(), file=sys.stderr)
    """

    def __init__(self):
        self.errors: list[TranslatorError] = []
        self.warnings: list[str] = []

    def add(self, error: TranslatorError) -> None:
        """Record a line-level diagnostic."""
        self.errors.append(error)

    def add_warning(self, message: str) -> None:
        """Record a free-form warning message."""
        self.warnings.append(message)

    def has_diagnostics(self) -> bool:
        """Return True if anything has been collected."""
        return bool(self.errors or self.warnings)

    def error_count(self) -> int:
        return len(self.errors)

    def warning_count(self) -> int:
        return len(self.warnings)

    def report(self) -> str:
        """
        Format all diagnostics for display.

        Returns:
            One line per diagnostic followed by a summary line
        """
        lines = [str(error) for error in self.errors]
        lines.extend(f"warning: {warning}" for warning in self.warnings)

        dropped = len(self.errors)
        line_word = "line" if dropped == 1 else "lines"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"{dropped} unrecognized {line_word} dropped, "
            f"{len(self.warnings)} {warning_word}"
        )
        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected diagnostics."""
        self.errors.clear()
        self.warnings.clear()
