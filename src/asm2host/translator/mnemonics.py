"""
6502 Mnemonic Families
======================

Declarative table mapping each mnemonic to the emission rule family that
translates it. The emitter looks the mnemonic up here and falls back to
GENERIC for anything not listed (TAX, PHA, CLC, NOP, ...).

Families
--------
- **LOAD_STORE / ARITHMETIC**: plain call with an addressing-mode suffix,
  e.g. ``LDA #$01`` -> ``LDA_immediate(0x01)``
- **BRANCH**: conditional; the mnemonic names a boolean flag predicate
  (``BNE()`` tests the zero flag) and the target becomes the next slot
- **JUMP**: unconditional transfer, direct or ``(indirect)``
- **CALL**: ``JSR`` pushes the return slot and transfers in one helper call
- **RETURN**: ``RTS``/``RTI`` helper returns the next slot
- **ESCAPE**: operand text is host source, emitted verbatim
- **GENERIC**: bare call with the raw operand, no control-flow effect
"""

import re
from enum import Enum, auto


class Family(Enum):
    """Emission rule family of a mnemonic."""
    LOAD_STORE = auto()
    ARITHMETIC = auto()
    BRANCH = auto()
    JUMP = auto()
    CALL = auto()
    RETURN = auto()
    ESCAPE = auto()
    GENERIC = auto()


# =============================================================================
# Mnemonic Table
# =============================================================================

MNEMONIC_FAMILIES: dict[str, Family] = {
    # Loads and stores
    "LDA": Family.LOAD_STORE,
    "LDX": Family.LOAD_STORE,
    "LDY": Family.LOAD_STORE,
    "STA": Family.LOAD_STORE,
    "STX": Family.LOAD_STORE,
    "STY": Family.LOAD_STORE,

    # Compare, arithmetic, logic, shifts, increments
    "CMP": Family.ARITHMETIC,
    "CPX": Family.ARITHMETIC,
    "CPY": Family.ARITHMETIC,
    "ADC": Family.ARITHMETIC,
    "SBC": Family.ARITHMETIC,
    "AND": Family.ARITHMETIC,
    "ORA": Family.ARITHMETIC,
    "EOR": Family.ARITHMETIC,
    "INC": Family.ARITHMETIC,
    "INX": Family.ARITHMETIC,
    "INY": Family.ARITHMETIC,
    "DEC": Family.ARITHMETIC,
    "DEX": Family.ARITHMETIC,
    "DEY": Family.ARITHMETIC,
    "ROL": Family.ARITHMETIC,
    "ROR": Family.ARITHMETIC,
    "ASL": Family.ARITHMETIC,
    "LSR": Family.ARITHMETIC,
    "BIT": Family.ARITHMETIC,

    # Conditional branches (predicate named after the mnemonic)
    "BNE": Family.BRANCH,    # Z clear
    "BEQ": Family.BRANCH,    # Z set
    "BPL": Family.BRANCH,    # N clear
    "BMI": Family.BRANCH,    # N set
    "BCC": Family.BRANCH,    # C clear
    "BCS": Family.BRANCH,    # C set
    "BVC": Family.BRANCH,    # V clear
    "BVS": Family.BRANCH,    # V set

    # Control transfer
    "JMP": Family.JUMP,
    "JSR": Family.CALL,
    "RTS": Family.RETURN,
    "RTI": Family.RETURN,
}


def get_family(mnemonic: str, escape_mnemonic: str | None = None) -> Family:
    """
    Look up the emission family of a mnemonic.

    Args:
        mnemonic: Mnemonic (any case)
        escape_mnemonic: The host target's inline-escape mnemonic

    Returns:
        The family; GENERIC for unknown mnemonics
    """
    mnemonic = mnemonic.upper()
    if escape_mnemonic and mnemonic == escape_mnemonic.upper():
        return Family.ESCAPE
    return MNEMONIC_FAMILIES.get(mnemonic, Family.GENERIC)


# =============================================================================
# Addressing Mode Suffixes
# =============================================================================

_POST_INDEXED_RE = re.compile(r"\((.*)\)\s*,\s*(\w+)")
_PRE_INDEXED_RE = re.compile(r"\((.*?)\s*,\s*(\w+)\s*\)")
_INDIRECT_RE = re.compile(r"\((.*)\)")
_INDEXED_RE = re.compile(r"(.*?)\s*,\s*(\w+)")


def split_operand(operand: str) -> tuple[str, str | None]:
    """
    Split an operand into addressing-mode suffix and literal expression.

    | Operand         | Suffix            | Literal  |
    |-----------------|-------------------|----------|
    | (none)          | ""                | None     |
    | ``#expr``       | ``_immediate``    | expr     |
    | ``(expr),reg``  | ``_indirect_reg`` | expr     |
    | ``(expr,reg)``  | ``_indirect_reg`` | expr     |
    | ``(expr)``      | ``_indirect``     | expr     |
    | ``expr,reg``    | ``_reg``          | expr     |
    | ``expr``        | ``_absolute``     | expr     |

    Register names are lower-cased.

    Args:
        operand: Stripped operand text

    Returns:
        (suffix, literal) where literal is None for implied mode
    """
    operand = operand.strip()
    if not operand:
        return "", None

    if operand.startswith("#"):
        return "_immediate", operand[1:].strip()

    if m := _POST_INDEXED_RE.fullmatch(operand):
        return f"_indirect_{m.group(2).lower()}", m.group(1).strip()

    if m := _PRE_INDEXED_RE.fullmatch(operand):
        return f"_indirect_{m.group(2).lower()}", m.group(1).strip()

    if m := _INDIRECT_RE.fullmatch(operand):
        return "_indirect", m.group(1).strip()

    if m := _INDEXED_RE.fullmatch(operand):
        return f"_{m.group(2).lower()}", m.group(1).strip()

    return "_absolute", operand
