"""
Code Emitter
============

Renders a resolved program as host-language source in five fixed blocks:

1. **Labels**: one constant per code label, bound to its dispatch slot
2. **Definitions**: one constant per ``name = expr`` definition
3. **Rom data addresses**: one constant per data label
4. **Rom data**: flat table of every region's bytes, in region order
5. **Dispatch procedure**: ``step(pc)`` executing one instruction per call
   and returning the next slot

Instruction Translation
-----------------------
Each instruction is translated by the rule of its mnemonic family (see
``mnemonics.MNEMONIC_FAMILIES``):

| Source          | JavaScript                          | Python                      |
|-----------------|-------------------------------------|-----------------------------|
| ``LDA #$01``    | ``LDA_immediate(0x01)``             | ``LDA_immediate(0x01)``     |
| ``STA $20,X``   | ``STA_x(0x20)``                     | ``STA_x(0x20)``             |
| ``BNE Loop``    | ``if (BNE()) { pc=0; break }``      | ``if BNE(): return 0``      |
| ``JMP ($FFFC)`` | ``pc=JMP_indirect(0xfffc); break``  | ``return JMP_indirect(...)``|
| ``JSR Sub``     | ``pc=JSR(pc, 7); break``            | ``return JSR(pc, 7)``       |
| ``RTS``         | ``pc=RTS(); break``                 | ``return RTS()``            |
| ``TAX``         | ``TAX()``                           | ``TAX()``                   |

Control-transfer targets naming a code label are rendered as the label's
resolved slot number. Everything is rendered into memory before the blocks
are returned, so an ExpressionError leaves no partial output behind.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from asm2host.config import TranslatorConfig
from asm2host.errors import DiagnosticCollector
from asm2host.translator.expressions import format_literal
from asm2host.translator.lines import (
    ByteData,
    Comment,
    Definition,
    Directive,
    Instruction,
    Label,
    Line,
    Program,
)
from asm2host.translator.mnemonics import Family, get_family, split_operand
from asm2host.translator.resolver import Resolver

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"[A-Za-z_]\w*")


# =============================================================================
# Output Blocks
# =============================================================================

@dataclass(frozen=True)
class OutputBlocks:
    """The five rendered output blocks, in output order."""
    labels: str
    definitions: str
    rom_addresses: str
    rom_data: str
    dispatch: str

    def as_tuple(self) -> tuple[str, str, str, str, str]:
        return (self.labels, self.definitions, self.rom_addresses, self.rom_data, self.dispatch)

    @property
    def text(self) -> str:
        return "\n\n".join(self.as_tuple()) + "\n"


# =============================================================================
# Emitter Base Class
# =============================================================================

class Emitter:
    """
    Host-independent part of the code emitter.

    Subclasses supply the host syntax: constant declarations, comments,
    control transfer and the dispatch procedure skeleton.

    Usage:
        resolver = Resolver(program)
        emitter = JavaScriptEmitter(program, regions, resolver)
        blocks = emitter.emit()
    """

    target = ""
    comment_prefix = "//"
    escape_mnemonic = ""

    # Mnemonic family -> renderer method
    _FAMILY_RENDERERS = {
        Family.LOAD_STORE: "_render_addressed",
        Family.ARITHMETIC: "_render_addressed",
        Family.BRANCH: "_render_branch",
        Family.JUMP: "_render_jump",
        Family.CALL: "_render_call",
        Family.RETURN: "_render_return",
        Family.ESCAPE: "_render_escape",
        Family.GENERIC: "_render_generic",
    }

    def __init__(
        self,
        program: Program,
        regions: list[ByteData],
        resolver: Resolver,
        config: Optional[TranslatorConfig] = None,
        diagnostics: Optional[DiagnosticCollector] = None,
    ):
        self._program = program
        self._regions = regions
        self._resolver = resolver
        self._config = config or TranslatorConfig(target=self.target)
        self._diagnostics = diagnostics

    # =========================================================================
    # Main Interface
    # =========================================================================

    def emit(self) -> OutputBlocks:
        """
        Render all five blocks.

        Runs the resolver's silent pass first if it has not run yet; the
        dispatch block is rendered during pass 1.

        Raises:
            ExpressionError: If any literal fails to parse
        """
        if not self._resolver.resolved:
            self._resolver.resolve()

        return OutputBlocks(
            labels=self.render_labels(),
            definitions=self.render_definitions(),
            rom_addresses=self.render_rom_addresses(),
            rom_data=self.render_rom_data(),
            dispatch=self.render_dispatch(),
        )

    def render_labels(self) -> str:
        symbols = self._resolver.symbols
        out = [self._comment("Labels")]
        seen = set()
        for line in self._program.labels():
            slot = symbols.slot_of(line.name)
            if line.is_data_label or slot is None or line.name in seen:
                continue
            seen.add(line.name)
            out.append(self._constant(line.name, str(slot)))
        return "\n".join(out)

    def render_definitions(self) -> str:
        out = [self._comment("Definitions")]
        for line in self._program.definitions():
            value = self._evaluate(line.literal, line)
            out.append(self._constant(line.name, value, line.comment))
        return "\n".join(out)

    def render_rom_addresses(self) -> str:
        data_labels = self._resolver.symbols.data_labels
        out = [self._comment("Rom data addresses")]
        seen = set()
        for region in self._regions:
            name = region.label.name
            # A redefined name keeps only its last definition
            if data_labels.get(name) != region.address or name in seen:
                continue
            seen.add(name)
            out.append(self._constant(name, f"0x{region.address:x}"))
        return "\n".join(out)

    def render_rom_data(self) -> str:
        indent = self._indent(1)
        out = [self._comment("Rom data"), self._table_open(self._config.rom_table_name)]
        total_size = 0
        for region in self._regions:
            out.append(indent + self._comment(f"{region.label.name}: 0x{region.address:x}"))
            if region.size == 0:
                out.append(indent + self._comment("Empty"))
            else:
                items = [self._evaluate(item, region.label) for item in region.items]
                out.append(f"{indent}{', '.join(items)},")
            total_size += region.size
        out.append(f"]  {self._comment(f'Total size: {total_size}')}")
        return "\n".join(out)

    def render_dispatch(self) -> str:
        """Render the dispatch procedure during resolver pass 1."""
        raise NotImplementedError

    # =========================================================================
    # Host Syntax Hooks
    # =========================================================================

    def _indent(self, level: int) -> str:
        raise NotImplementedError

    def _constant(self, name: str, value: str, comment: Optional[str] = None) -> str:
        raise NotImplementedError

    def _table_open(self, name: str) -> str:
        raise NotImplementedError

    def _transfer(self, target: str) -> str:
        """Statement that ends the step with ``target`` as the next slot."""
        raise NotImplementedError

    def _conditional(self, predicate: str, target: str) -> list[str]:
        """Statements that transfer to ``target`` if ``predicate`` holds."""
        raise NotImplementedError

    # =========================================================================
    # Shared Helpers
    # =========================================================================

    def _comment(self, text: str) -> str:
        return f"{self.comment_prefix} {text}" if text else self.comment_prefix

    def _with_comment(self, text: str, comment: Optional[str]) -> str:
        if comment:
            return f"{text}  {self._comment(comment)}"
        return text

    def _evaluate(self, literal: str, line: Line) -> str:
        return format_literal(literal, location=line.location)

    def _warn(self, message: str, line: Line) -> None:
        if line.location:
            message = f"{line.location}: {message}"
        logger.warning(message)
        if self._diagnostics is not None:
            self._diagnostics.add_warning(message)

    def _render_line_comment(self, line: Line) -> str:
        """
        Render a non-instruction line inside the dispatch procedure.

        Returns:
            The comment text, or "" for a line that renders as blank
        """
        if isinstance(line, Comment):
            return self._comment(line.text) if line.text else ""
        if isinstance(line, Definition):
            return ""
        if isinstance(line, Directive):
            text = f"{line.opcode} {line.operand}".rstrip()
            return self._with_comment(self._comment(text), line.comment)
        if isinstance(line, Label):
            value = f"0x{line.slot:x}" if line.is_data_label else str(line.slot)
            return self._with_comment(self._comment(f"{line.name}: ({value})"), line.comment)
        raise TypeError(f"unexpected line record {line!r}")

    # =========================================================================
    # Instruction Translation
    # =========================================================================

    def translate_instruction(self, instruction: Instruction) -> tuple[list[str], bool]:
        """
        Translate one instruction by its mnemonic family.

        Args:
            instruction: A resolved instruction

        Returns:
            (statements, transfers) where transfers is True when the last
            statement always ends the step
        """
        family = get_family(instruction.mnemonic, self.escape_mnemonic)
        renderer = getattr(self, self._FAMILY_RENDERERS[family])
        statements, transfers = renderer(instruction)
        statements[0] = self._with_comment(statements[0], instruction.comment)
        return statements, transfers

    def _target(self, instruction: Instruction) -> str:
        """Resolve a control-transfer operand to a slot number or expression."""
        operand = instruction.operand
        slot = self._resolver.symbols.slot_of(operand)
        if slot is not None:
            return str(slot)
        if _IDENTIFIER_RE.fullmatch(operand) and operand not in self._resolver.symbols:
            self._warn(
                f"{instruction.mnemonic} target '{operand}' is not a defined label",
                instruction,
            )
        return self._evaluate(operand, instruction)

    def _render_addressed(self, instruction: Instruction) -> tuple[list[str], bool]:
        suffix, literal = split_operand(instruction.operand)
        if literal is None:
            return [f"{instruction.mnemonic}()"], False
        value = self._evaluate(literal, instruction)
        return [f"{instruction.mnemonic}{suffix}({value})"], False

    def _render_branch(self, instruction: Instruction) -> tuple[list[str], bool]:
        return self._conditional(f"{instruction.mnemonic}()", self._target(instruction)), False

    def _render_jump(self, instruction: Instruction) -> tuple[list[str], bool]:
        suffix, literal = split_operand(instruction.operand)
        if suffix == "_indirect":
            value = self._evaluate(literal, instruction)
            return [self._transfer(f"{instruction.mnemonic}_indirect({value})")], True
        return [self._transfer(self._target(instruction))], True

    def _render_call(self, instruction: Instruction) -> tuple[list[str], bool]:
        target = self._target(instruction)
        return [self._transfer(f"{instruction.mnemonic}(pc, {target})")], True

    def _render_return(self, instruction: Instruction) -> tuple[list[str], bool]:
        return [self._transfer(f"{instruction.mnemonic}({instruction.operand})")], True

    def _render_escape(self, instruction: Instruction) -> tuple[list[str], bool]:
        return [instruction.operand], False

    def _render_generic(self, instruction: Instruction) -> tuple[list[str], bool]:
        return [f"{instruction.mnemonic}({instruction.operand})"], False


# =============================================================================
# Host Targets
# =============================================================================

class JavaScriptEmitter(Emitter):
    """
    Emits JavaScript: ``const`` declarations and a ``switch`` dispatcher.

    Each case is entered by label ``case N:`` and left by ``pc=N+1; break``,
    so falling off an instruction returns the next slot. ``case -1`` is the
    entry point and yields slot 0.
    """

    target = "javascript"
    comment_prefix = "//"
    escape_mnemonic = "CALLJS"

    def _indent(self, level: int) -> str:
        return "  " * level

    def _constant(self, name: str, value: str, comment: Optional[str] = None) -> str:
        return self._with_comment(f"const {name} = {value}", comment)

    def _table_open(self, name: str) -> str:
        return f"const {name} = ["

    def _transfer(self, target: str) -> str:
        return f"pc={target}; break"

    def _conditional(self, predicate: str, target: str) -> list[str]:
        return [f"if ({predicate}) {{ pc={target}; break }}"]

    def render_dispatch(self) -> str:
        out = [
            f"function {self._config.step_name}(pc) {{",
            "  switch (pc) {",
            "  case -1:  // Dummy",
        ]
        body = []
        for line, pc in self._resolver.walk(1):
            if isinstance(line, Instruction):
                statements, _ = self.translate_instruction(line)
                body.append(f"  pc={pc}; break; case {pc}:")
                body.extend(f"    {statement}" for statement in statements)
            else:
                text = self._render_line_comment(line)
                body.append(f"  {text}" if text else "")
        out.extend(_collapse_blank_lines(body))
        end = self._resolver.slot_count
        out.extend([
            f"  pc={end}; case {end}: break",
            "  }",
            "  return pc",
            "}",
        ])
        return "\n".join(out)


class PythonEmitter(Emitter):
    """
    Emits Python: module-level constants and an ``if pc == N`` dispatcher.

    Every instruction block ends with ``return N+1`` unless it already
    ended in a control transfer. Unknown slots return ``pc`` unchanged.
    """

    target = "python"
    comment_prefix = "#"
    escape_mnemonic = "CALLPY"

    def _indent(self, level: int) -> str:
        return "    " * level

    def _constant(self, name: str, value: str, comment: Optional[str] = None) -> str:
        return self._with_comment(f"{name} = {value}", comment)

    def _table_open(self, name: str) -> str:
        return f"{name} = ["

    def _transfer(self, target: str) -> str:
        return f"return {target}"

    def _conditional(self, predicate: str, target: str) -> list[str]:
        return [f"if {predicate}:", f"    return {target}"]

    def render_dispatch(self) -> str:
        out = [f"def {self._config.step_name}(pc):"]
        body = []
        for line, pc in self._resolver.walk(1):
            if isinstance(line, Instruction):
                statements, transfers = self.translate_instruction(line)
                body.append(f"    if pc == {pc}:")
                body.extend(f"        {statement}" for statement in statements)
                if not transfers:
                    body.append(f"        return {pc + 1}")
            else:
                text = self._render_line_comment(line)
                body.append(f"    {text}" if text else "")
        out.extend(_collapse_blank_lines(body))
        out.append("    return pc")
        return "\n".join(out)


EMITTERS: dict[str, type[Emitter]] = {
    JavaScriptEmitter.target: JavaScriptEmitter,
    PythonEmitter.target: PythonEmitter,
}


def get_emitter_class(target: str) -> type[Emitter]:
    """Return the emitter class for a host target name."""
    return EMITTERS[target]


def _collapse_blank_lines(lines: list[str]) -> list[str]:
    """Drop leading blanks and collapse runs of blank lines to one."""
    out: list[str] = []
    for line in lines:
        if not line and (not out or not out[-1]):
            continue
        out.append(line)
    return out
