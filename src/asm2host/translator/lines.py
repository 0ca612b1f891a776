"""
Source Line Records
===================

The classifier turns each line of assembly source into one of five record
types. Together they form a closed variant: ``Line`` is the Union of exactly
these dataclasses, and every consumer dispatches on the concrete type.

Record Types
------------
1. **Comment**: blank line or full-line ``;`` comment
2. **Definition**: ``name = expr`` constant
3. **Directive**: ``.db``, ``.org`` and other pseudo-ops
4. **Label**: ``name:``; may be flagged as a ROM data label
5. **Instruction**: mnemonic with optional operand

Every record carries a mutable ``slot``. For Instructions it is the dispatch
index; for Labels it is the resolved slot or, for data labels, the data
address; for the other records it is the slot of the next Instruction.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from asm2host.errors import SourceLocation


# Slot value of a record the resolver has not visited yet
UNASSIGNED = -1


@dataclass
class Comment:
    """Blank line (empty text) or full-line comment."""
    text: str = ""
    slot: int = field(default=UNASSIGNED, compare=False)
    location: Optional[SourceLocation] = field(default=None, compare=False)


@dataclass
class Definition:
    """
    Named constant, ``name = literal``.

    Attributes:
        name: Constant name
        literal: Unevaluated literal expression text
        comment: Trailing comment text, if any
    """
    name: str
    literal: str
    comment: Optional[str] = None
    slot: int = field(default=UNASSIGNED, compare=False)
    location: Optional[SourceLocation] = field(default=None, compare=False)


@dataclass
class Directive:
    """
    Assembler pseudo-op such as ``.db`` or ``.org``.

    Attributes:
        opcode: Directive name including the leading dot
        operand: Raw operand text ("" when absent)
        comment: Trailing comment text, if any
    """
    opcode: str
    operand: str = ""
    comment: Optional[str] = None
    slot: int = field(default=UNASSIGNED, compare=False)
    location: Optional[SourceLocation] = field(default=None, compare=False)

    @property
    def is_byte_data(self) -> bool:
        """True for ``.db`` directives (case-insensitive)."""
        return self.opcode.lower() == ".db"


@dataclass
class Label:
    """
    Label definition, ``name:``.

    Attributes:
        name: Label name
        comment: Trailing comment text, if any
        is_data_label: Set by the ROM data analyzer; data labels get a data
            address instead of a dispatch slot
    """
    name: str
    comment: Optional[str] = None
    is_data_label: bool = False
    slot: int = field(default=UNASSIGNED, compare=False)
    location: Optional[SourceLocation] = field(default=None, compare=False)


@dataclass
class Instruction:
    """
    Machine instruction.

    Attributes:
        mnemonic: Upper-case mnemonic
        operand: Raw operand text ("" for implied mode)
        comment: Trailing comment text, if any
    """
    mnemonic: str
    operand: str = ""
    comment: Optional[str] = None
    slot: int = field(default=UNASSIGNED, compare=False)
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def __post_init__(self):
        self.mnemonic = self.mnemonic.strip().upper()
        self.operand = (self.operand or "").strip()


Line = Union[Comment, Definition, Directive, Label, Instruction]

LINE_TYPES = (Comment, Definition, Directive, Label, Instruction)


@dataclass
class ByteData:
    """
    One ROM data region.

    Attributes:
        label: The data label that names the region
        items: Literal expressions of the region's bytes, in order
    """
    label: Label
    items: list[str] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.items)

    @property
    def address(self) -> int:
        return self.label.slot

    @classmethod
    def from_directives(cls, label: Label, directives: list[Directive]) -> "ByteData":
        """Build a region from the comma-separated operands of ``.db`` lines."""
        items = [
            item.strip()
            for directive in directives
            for item in directive.operand.split(",")
        ]
        return cls(label, items)


@dataclass
class Program:
    """
    Ordered sequence of classified lines.

    Source order is the only ordering guarantee and defines control-flow
    numbering. One Program is owned by each translation.
    """
    lines: list[Line] = field(default_factory=list)
    filename: str = "<input>"

    def __iter__(self):
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index):
        return self.lines[index]

    def instructions(self) -> list[Instruction]:
        return [line for line in self.lines if isinstance(line, Instruction)]

    def labels(self) -> list[Label]:
        return [line for line in self.lines if isinstance(line, Label)]

    def definitions(self) -> list[Definition]:
        return [line for line in self.lines if isinstance(line, Definition)]
