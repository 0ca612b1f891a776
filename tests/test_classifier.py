# =============================================================================
# test_classifier.py - Line Classifier Unit Tests
# =============================================================================
# Tests for classify_line() and parse_source().
#
# Test coverage includes:
#   - Each recognized line form, in priority order
#   - Combined label + body lines producing two records
#   - Unrecognized lines reported without stopping classification
# =============================================================================

import pytest

from asm2host.errors import UnknownLineError
from asm2host.translator.classifier import classify_line, parse_source
from asm2host.translator.lines import (
    Comment,
    Definition,
    Directive,
    Instruction,
    Label,
    UNASSIGNED,
)


# =============================================================================
# Single-Record Forms
# =============================================================================

class TestSingleForms:
    """Test lines that produce one record."""

    @pytest.mark.parametrize("text", ["", "   ", "\t", "\n"])
    def test_blank_line(self, text):
        assert classify_line(text) == [Comment("")]

    def test_full_line_comment(self):
        assert classify_line("; reset handler") == [Comment("reset handler")]

    def test_indented_comment(self):
        assert classify_line("    ;note") == [Comment("note")]

    def test_definition(self):
        assert classify_line("PPU_CTRL = $2000") == [Definition("PPU_CTRL", "$2000")]

    def test_definition_with_comment(self):
        assert classify_line("SPEED=$10 ; pixels") == [Definition("SPEED", "$10", "pixels")]

    def test_directive(self):
        assert classify_line("    .org $8000") == [Directive(".org", "$8000")]

    def test_directive_without_operand(self):
        assert classify_line("\t.end") == [Directive(".end", "")]

    def test_directive_with_comment(self):
        records = classify_line("    .db $01,$02 ; bytes")
        assert records == [Directive(".db", "$01,$02", "bytes")]

    def test_label(self):
        assert classify_line("Loop:") == [Label("Loop")]

    def test_label_with_comment(self):
        assert classify_line("Loop: ; main loop") == [Label("Loop", "main loop")]

    def test_label_with_trailing_whitespace(self):
        assert classify_line("Loop:   ") == [Label("Loop")]

    def test_instruction(self):
        assert classify_line("    LDA #$01") == [Instruction("LDA", "#$01")]

    def test_implied_instruction(self):
        assert classify_line("    INX") == [Instruction("INX")]

    def test_instruction_with_comment(self):
        records = classify_line("    STA $2000 ; write ctrl")
        assert records == [Instruction("STA", "$2000", "write ctrl")]

    def test_mnemonic_is_uppercased(self):
        assert classify_line("    lda #1")[0].mnemonic == "LDA"

    def test_indexed_operand_kept_whole(self):
        assert classify_line("    LDA ($20),Y")[0].operand == "($20),Y"

    def test_new_records_are_unresolved(self):
        assert classify_line("    NOP")[0].slot == UNASSIGNED


# =============================================================================
# Combined Forms
# =============================================================================

class TestCombinedForms:
    """Test label lines that carry an instruction or directive."""

    def test_label_with_instruction(self):
        records = classify_line("Start: LDX #$FF ; init stack")
        assert records == [Label("Start"), Instruction("LDX", "#$FF", "init stack")]

    def test_label_with_implied_instruction(self):
        assert classify_line("Done: RTS") == [Label("Done"), Instruction("RTS")]

    def test_label_with_directive(self):
        records = classify_line("Table: .db 1,2,3")
        assert records == [Label("Table"), Directive(".db", "1,2,3")]


# =============================================================================
# Unrecognized Lines
# =============================================================================

class TestUnknownLines:
    """Test lines that match no form."""

    @pytest.mark.parametrize("text", [
        "garbage here",       # not indented, no colon
        "  Loop:",            # labels must start in column 1
        "Loop",               # label without colon
    ])
    def test_unrecognized(self, text):
        assert classify_line(text) is None


# =============================================================================
# Whole-Source Parsing
# =============================================================================

class TestParseSource:
    """Test parse_source() over several lines."""

    def test_records_in_source_order(self):
        program, diagnostics = parse_source([
            "; demo",
            "Loop: INX",
            "    BNE Loop",
        ])
        assert diagnostics == []
        assert [type(line) for line in program] == [Comment, Label, Instruction, Instruction]

    def test_locations_are_stamped(self):
        program, _ = parse_source(["", "Loop: INX"], filename="demo.asm")
        label = program[1]
        assert label.location.filename == "demo.asm"
        assert label.location.line == 2
        assert program[2].location.line == 2

    def test_unknown_line_dropped_and_reported(self):
        program, diagnostics = parse_source([
            "    INX",
            "what is this",
            "    INY",
        ])
        assert len(program) == 2
        assert len(diagnostics) == 1
        assert isinstance(diagnostics[0], UnknownLineError)
        assert diagnostics[0].text == "what is this"
        assert diagnostics[0].location.line == 2

    def test_newlines_are_stripped(self):
        program, diagnostics = parse_source(["Loop:\n", "    INX\r\n"])
        assert diagnostics == []
        assert program[0] == Label("Loop")
        assert program[1] == Instruction("INX")
