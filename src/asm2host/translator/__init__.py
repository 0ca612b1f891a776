"""
6502 Assembly to Host-Language Translator
=========================================

This package statically translates 6502 assembly source into a flat,
dispatch-based procedure in a host language (JavaScript or Python). The
translated program is never executed here: every instruction gets a
sequential dispatch slot, every label a resolved value, and the output is
a set of constants, a ROM data table and a ``step(pc)`` procedure.

Main Components
---------------
- **Translator**: Main class that orchestrates the translation
- **classify_line / parse_source**: Line classifier
- **LiteralEvaluator**: Literal expression to host expression converter
- **RomDataAnalyzer**: Detects embedded ``.db`` data regions
- **Resolver**: Two-pass slot and label resolver
- **JavaScriptEmitter / PythonEmitter**: Host code emitters

Translation Process
-------------------
1. **Classification**: each line becomes a Comment, Definition, Directive,
   Label or Instruction record; unknown lines are dropped with a warning.
2. **ROM data analysis**: labels followed by ``.db`` become data labels with
   addresses counted up from the ROM base (default ``$8000``).
3. **Resolution** (two passes): pass 0 numbers instructions and resolves
   labels; pass 1 walks again while the dispatch procedure is emitted.
4. **Emission**: Labels, Definitions, Rom data addresses, Rom data and the
   dispatch procedure, always in that order.

Example Usage
-------------
>>> from asm2host.translator import translate
>>> print(translate('''
... Loop:
...     INX
...     BNE Loop
... ''', target="python"))
"""

from asm2host.translator.translator import (
    Translator,
    TranslationResult,
    translate,
    translate_file,
)
from asm2host.translator.lines import (
    Comment,
    Definition,
    Directive,
    Label,
    Instruction,
    Line,
    ByteData,
    Program,
    UNASSIGNED,
)
from asm2host.translator.classifier import classify_line, parse_source
from asm2host.translator.expressions import LiteralEvaluator, format_literal
from asm2host.translator.romdata import RomDataAnalyzer, collect_rom_data
from asm2host.translator.resolver import Resolver, SymbolTable
from asm2host.translator.mnemonics import (
    Family,
    MNEMONIC_FAMILIES,
    get_family,
    split_operand,
)
from asm2host.translator.emitter import (
    Emitter,
    JavaScriptEmitter,
    PythonEmitter,
    OutputBlocks,
    EMITTERS,
    get_emitter_class,
)

__all__ = [
    # Main class and functions
    "Translator",
    "TranslationResult",
    "translate",
    "translate_file",
    # Line records
    "Comment",
    "Definition",
    "Directive",
    "Label",
    "Instruction",
    "Line",
    "ByteData",
    "Program",
    "UNASSIGNED",
    # Classifier
    "classify_line",
    "parse_source",
    # Expressions
    "LiteralEvaluator",
    "format_literal",
    # ROM data
    "RomDataAnalyzer",
    "collect_rom_data",
    # Resolver
    "Resolver",
    "SymbolTable",
    # Mnemonics
    "Family",
    "MNEMONIC_FAMILIES",
    "get_family",
    "split_operand",
    # Emitters
    "Emitter",
    "JavaScriptEmitter",
    "PythonEmitter",
    "OutputBlocks",
    "EMITTERS",
    "get_emitter_class",
]
