# =============================================================================
# test_resolver.py - Slot and Label Resolver Unit Tests
# =============================================================================
# Tests for the two-pass Resolver.
#
# Test coverage includes:
#   - Gapless instruction numbering in source order
#   - Labels resolving to the next instruction, across other labels
#   - Data labels keeping their ROM addresses
#   - Identical numbering on both passes
#   - Duplicate label warnings
# =============================================================================

from asm2host.errors import DiagnosticCollector
from asm2host.translator.classifier import parse_source
from asm2host.translator.lines import Instruction
from asm2host.translator.resolver import Resolver, SymbolTable
from asm2host.translator.romdata import RomDataAnalyzer


def resolve(*lines, diagnostics=None):
    program, _ = parse_source(lines)
    RomDataAnalyzer(program).analyze()
    resolver = Resolver(program, diagnostics)
    resolver.resolve()
    return program, resolver


# =============================================================================
# Slot Numbering
# =============================================================================

class TestSlotNumbering:
    """Tests for instruction slot assignment."""

    def test_instructions_numbered_without_gaps(self):
        """Comments, definitions and directives consume no slot."""
        program, resolver = resolve(
            "; header",
            "X = 1",
            "    .org $8000",
            "    LDA #1",
            "",
            "    STA $20",
            "Here:",
            "    RTS",
        )
        slots = [line.slot for line in program.instructions()]
        assert slots == [0, 1, 2]
        assert resolver.slot_count == 3

    def test_non_instructions_take_next_slot(self):
        program, _ = resolve(
            "    NOP",
            "; between",
            "    NOP",
        )
        assert program[1].slot == 1

    def test_empty_program(self):
        _, resolver = resolve()
        assert resolver.slot_count == 0
        assert resolver.symbols == SymbolTable()

    def test_resolved_flag(self):
        program, _ = parse_source(["    NOP"])
        resolver = Resolver(program)
        assert not resolver.resolved
        resolver.resolve()
        assert resolver.resolved


# =============================================================================
# Label Resolution
# =============================================================================

class TestLabelResolution:
    """Tests for label slots and the symbol table."""

    def test_label_resolves_to_next_instruction(self):
        _, resolver = resolve(
            "    NOP",
            "Loop:",
            "    INX",
            "    BNE Loop",
        )
        assert resolver.symbols.slot_of("Loop") == 1

    def test_labels_skip_labels(self):
        """Adjacent labels share the slot of the following instruction."""
        _, resolver = resolve(
            "First:",
            "Second:",
            "; note",
            "Third:",
            "    NOP",
        )
        symbols = resolver.symbols
        assert symbols.slot_of("First") == 0
        assert symbols.slot_of("Second") == 0
        assert symbols.slot_of("Third") == 0

    def test_label_at_end(self):
        """A trailing label resolves to the end slot."""
        _, resolver = resolve("    NOP", "    NOP", "End:")
        assert resolver.symbols.slot_of("End") == 2

    def test_forward_reference(self):
        _, resolver = resolve(
            "    JMP Done",
            "    NOP",
            "Done:",
            "    RTS",
        )
        assert resolver.symbols.slot_of("Done") == 2

    def test_data_labels_keep_address(self):
        program, resolver = resolve(
            "Table:",
            "    .db 1,2",
            "Start:",
            "    LDA Table",
        )
        assert program[0].slot == 0x8000
        assert resolver.symbols.data_labels == {"Table": 0x8000}
        assert resolver.symbols.code_labels == {"Start": 0}
        assert resolver.symbols.slot_of("Table") is None
        assert "Table" in resolver.symbols

    def test_definitions_recorded(self):
        _, resolver = resolve("SPEED = $10")
        assert resolver.symbols.definitions == {"SPEED": "$10"}
        assert "SPEED" in resolver.symbols
        assert "Nothing" not in resolver.symbols


# =============================================================================
# Pass Consistency
# =============================================================================

class TestPasses:
    """Both walks must agree."""

    def test_pass_one_matches_pass_zero(self):
        program, resolver = resolve(
            "Start:",
            "    LDX #0",
            "Loop:",
            "    INX",
            "    BNE Loop",
        )
        first = [(type(line), pc) for line, pc in resolver.walk(0)]
        second = [(type(line), pc) for line, pc in resolver.walk(1)]
        assert first == second

    def test_pass_one_instruction_pcs(self):
        _, resolver = resolve("    NOP", "    NOP", "    NOP")
        pcs = [pc for line, pc in resolver.walk(1) if isinstance(line, Instruction)]
        assert pcs == [0, 1, 2]


# =============================================================================
# Duplicate Labels
# =============================================================================

class TestDuplicateLabels:
    """A label defined twice warns and keeps the last definition."""

    def test_duplicate_warns(self):
        diagnostics = DiagnosticCollector()
        _, resolver = resolve(
            "Loop:",
            "    NOP",
            "Loop:",
            "    NOP",
            diagnostics=diagnostics,
        )
        assert diagnostics.warning_count() == 1
        assert "Loop" in diagnostics.warnings[0]
        assert resolver.symbols.slot_of("Loop") == 1

    def test_no_warning_without_duplicates(self):
        diagnostics = DiagnosticCollector()
        resolve("A:", "    NOP", "B:", "    NOP", diagnostics=diagnostics)
        assert not diagnostics.has_diagnostics()
