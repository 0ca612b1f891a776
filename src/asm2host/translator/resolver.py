"""
Program-Counter / Label Resolver
================================

Assigns dispatch slots to instructions and resolves every label.

Slot Numbering
--------------
Instructions are numbered 0, 1, 2, ... in source order. Nothing else
consumes a slot: comments, definitions, directives and labels are stamped
with the current counter value, which is the slot of the next instruction.
A label therefore resolves to the instruction that follows it, skipping any
labels in between. Data labels keep the address given to them by the ROM
data analyzer and are left untouched.

Two Passes
----------
Label references may point forward, so resolution walks the program twice:

1. Pass 0: silent walk; stamps every slot and builds the symbol table.
2. Pass 1: identical walk, driven by the emitter; every label reference is
   already known by the time its instruction is rendered.

Both passes produce the same numbering; the walk is a pure function of the
line sequence.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional

from asm2host.errors import DiagnosticCollector
from asm2host.translator.lines import (
    Definition,
    Instruction,
    Label,
    Line,
    Program,
)

logger = logging.getLogger(__name__)


@dataclass
class SymbolTable:
    """
    Resolved names of one program.

    Attributes:
        code_labels: Non-data label name -> dispatch slot
        data_labels: Data label name -> ROM data address
        definitions: Definition name -> unevaluated literal
    """
    code_labels: dict[str, int] = field(default_factory=dict)
    data_labels: dict[str, int] = field(default_factory=dict)
    definitions: dict[str, str] = field(default_factory=dict)

    def slot_of(self, name: str) -> Optional[int]:
        """Return the dispatch slot of a code label, or None."""
        return self.code_labels.get(name)

    def __contains__(self, name: str) -> bool:
        return (
            name in self.code_labels
            or name in self.data_labels
            or name in self.definitions
        )


class Resolver:
    """
    Two-pass slot and label resolver.

    Usage:
        resolver = Resolver(program)
        symbols = resolver.resolve()          # pass 0
        for line, pc in resolver.walk(1):     # pass 1, used by the emitter
            ...

    Attributes:
        symbols: Symbol table built by resolve()
        slot_count: Number of instructions, i.e. the slot after the last one
    """

    def __init__(self, program: Program, diagnostics: Optional[DiagnosticCollector] = None):
        self._program = program
        self._diagnostics = diagnostics
        self.symbols = SymbolTable()
        self.slot_count = 0
        self._resolved = False

    @property
    def resolved(self) -> bool:
        return self._resolved

    def walk(self, pass_no: int) -> Iterator[tuple[Line, int]]:
        """
        Walk the program, stamping slots.

        Args:
            pass_no: 0 for the silent addressing pass, 1 for emission

        Yields:
            (line, pc) where pc is the slot of the line (for instructions)
            or of the next instruction (for everything else)
        """
        pc = 0
        for line in self._program:
            if not (isinstance(line, Label) and line.is_data_label):
                line.slot = pc
            yield line, pc
            if isinstance(line, Instruction):
                pc += 1

        if pass_no == 0:
            self.slot_count = pc
        elif pc != self.slot_count:
            raise RuntimeError(
                f"pass {pass_no} produced {pc} slots, pass 0 produced {self.slot_count}"
            )
        logger.debug(f"Pass {pass_no}: {pc} slots")

    def resolve(self) -> SymbolTable:
        """
        Run the silent pass and build the symbol table.

        Returns:
            The resolved SymbolTable
        """
        self.symbols = SymbolTable()
        for line, pc in self.walk(0):
            if isinstance(line, Label):
                self._define_label(line)
            elif isinstance(line, Definition):
                self.symbols.definitions[line.name] = line.literal

        self._resolved = True
        return self.symbols

    def _define_label(self, label: Label) -> None:
        if label.name in self.symbols.code_labels or label.name in self.symbols.data_labels:
            message = f"label '{label.name}' defined more than once"
            if label.location:
                message = f"{label.location}: {message}"
            logger.warning(message)
            if self._diagnostics is not None:
                self._diagnostics.add_warning(message)
            self.symbols.code_labels.pop(label.name, None)
            self.symbols.data_labels.pop(label.name, None)

        if label.is_data_label:
            self.symbols.data_labels[label.name] = label.slot
        else:
            self.symbols.code_labels[label.name] = label.slot
