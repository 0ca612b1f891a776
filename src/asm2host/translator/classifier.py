"""
Line Classifier
===============

Pattern-matches single lines of 6502 assembly source into line records.

Recognized Forms
----------------
Tried in this order; the first match wins:

| # | Form                                      | Result                 |
|---|-------------------------------------------|------------------------|
| 1 | blank                                     | Comment("")            |
| 2 | ``; text``                                | Comment                |
| 3 | ``name = expr [;comment]``                | Definition             |
| 4 | indented ``.dir [operand] [;comment]``    | Directive              |
| 5 | ``name: [;comment]``                      | Label                  |
| 6 | ``name: MNEMONIC [operand] [;comment]``   | [Label, Instruction]   |
| 7 | ``name: .dir [operand] [;comment]``       | [Label, Directive]     |
| 8 | indented ``MNEMONIC [operand] [;comment]``| Instruction            |

Labels and definitions start in column 1; directives and instructions
without a label must be indented. A line matching none of the forms is
reported by returning None; the caller drops it and records a diagnostic.
"""

import logging
import re
from typing import Iterable, Optional

from asm2host.errors import SourceLocation, UnknownLineError
from asm2host.translator.lines import (
    Comment,
    Definition,
    Directive,
    Instruction,
    Label,
    Line,
    Program,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Line Patterns
# =============================================================================

_BLANK_RE = re.compile(r"\s*")
_COMMENT_RE = re.compile(r"\s*;(.*)")
_DEFINITION_RE = re.compile(r"(\w+)\s*=\s*([^;]*)(;(.*))?")
_DIRECTIVE_RE = re.compile(r"\s+(\.\w+)(\s+([^;]*))?(\s*;(.*))?")
_LABEL_RE = re.compile(r"(\w+):(\s*;(.*))?")
_LABEL_INSTRUCTION_RE = re.compile(r"(\w+):\s+(\w+)(\s+([^;]*))?(\s*;(.*))?")
_LABEL_DIRECTIVE_RE = re.compile(r"(\w+):\s+(\.\w+)(\s+([^;]*))?(\s*;(.*))?")
_INSTRUCTION_RE = re.compile(r"\s+(\w+)(\s+([^;]*))?(\s*;(.*))?")


def _comment(text: Optional[str]) -> Optional[str]:
    """Normalize captured comment text; absent or empty becomes None."""
    if text is None:
        return None
    text = text.strip()
    return text or None


def _operand(text: Optional[str]) -> str:
    return (text or "").strip()


# =============================================================================
# Classification
# =============================================================================

def classify_line(
    text: str,
    location: Optional[SourceLocation] = None,
) -> Optional[list[Line]]:
    """
    Classify one line of source text.

    Args:
        text: The source line (a trailing newline is ignored)
        location: Location stamped onto the produced records

    Returns:
        One or two line records, or None if the line is not recognized
    """
    text = text.rstrip()

    if _BLANK_RE.fullmatch(text):
        records = [Comment("")]

    elif m := _COMMENT_RE.fullmatch(text):
        records = [Comment(m.group(1).strip())]

    elif m := _DEFINITION_RE.fullmatch(text):
        records = [Definition(m.group(1), m.group(2).strip(), _comment(m.group(4)))]

    elif m := _DIRECTIVE_RE.fullmatch(text):
        records = [Directive(m.group(1), _operand(m.group(3)), _comment(m.group(5)))]

    elif m := _LABEL_RE.fullmatch(text):
        records = [Label(m.group(1), _comment(m.group(3)))]

    elif m := _LABEL_INSTRUCTION_RE.fullmatch(text):
        records = [
            Label(m.group(1)),
            Instruction(m.group(2), _operand(m.group(4)), _comment(m.group(6))),
        ]

    elif m := _LABEL_DIRECTIVE_RE.fullmatch(text):
        records = [
            Label(m.group(1)),
            Directive(m.group(2), _operand(m.group(4)), _comment(m.group(6))),
        ]

    elif m := _INSTRUCTION_RE.fullmatch(text):
        records = [Instruction(m.group(1), _operand(m.group(3)), _comment(m.group(5)))]

    else:
        return None

    for record in records:
        record.location = location
    return records


def parse_source(
    lines: Iterable[str],
    filename: str = "<input>",
) -> tuple[Program, list[UnknownLineError]]:
    """
    Classify every line of a source file.

    Unrecognized lines are logged, dropped, and returned as diagnostics;
    classification always continues to the end of the input.

    Args:
        lines: Source lines in order
        filename: Source filename for locations

    Returns:
        (program, diagnostics)
    """
    program = Program(filename=filename)
    diagnostics: list[UnknownLineError] = []

    for line_no, text in enumerate(lines, start=1):
        text = text.rstrip("\r\n")
        location = SourceLocation(filename, line_no)
        records = classify_line(text, location)
        if records is None:
            logger.warning(f"{location}: unknown line: {text}")
            diagnostics.append(UnknownLineError(text, location))
            continue
        program.lines.extend(records)

    logger.debug(
        f"Classified {len(program)} records from {filename} "
        f"({len(diagnostics)} unknown lines)"
    )
    return program, diagnostics
