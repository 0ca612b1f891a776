"""
ROM Data Segment Analyzer
=========================

Finds the read-only data regions embedded in the assembly source and gives
them addresses outside normal instruction numbering.

A Label starts a data region when either:

(a) one or more ``.db`` directives immediately follow it. The region holds
    the comma-separated items of those directives; its size is the item
    count.
(b) it is followed by further Labels and only then by a ``.db`` directive.
    The label is still a data label but gets an empty region of size 0.

Every label of a chain is examined, so in::

    Alias:
    Table:
        .db $01,$02

``Alias`` is case (b) with size 0 and ``Table`` is case (a) with size 2.
Both resolve to the same address. Aliases never carry the size of the data
they share.

Regions are numbered from a fixed base address (``0x8000`` by default):
each region starts at the previous region's address plus its size.
"""

import logging

from asm2host.config import DEFAULT_ROM_BASE
from asm2host.translator.lines import ByteData, Directive, Label, Program

logger = logging.getLogger(__name__)


def _is_byte_data(line) -> bool:
    return isinstance(line, Directive) and line.is_byte_data


class RomDataAnalyzer:
    """
    Single-walk detector of ROM data regions.

    Usage:
        analyzer = RomDataAnalyzer(program, base=0x8000)
        regions = analyzer.analyze()

    Attributes:
        base: Address of the first region
        regions: Regions found by the last analyze() call, in source order
    """

    def __init__(self, program: Program, base: int = DEFAULT_ROM_BASE):
        self._program = program
        self.base = base
        self.regions: list[ByteData] = []

    def analyze(self) -> list[ByteData]:
        """
        Flag data labels, assign their addresses and collect their regions.

        Returns:
            The ByteData regions in source order
        """
        lines = self._program.lines
        address = self.base
        self.regions = []

        for i, line in enumerate(lines):
            if not isinstance(line, Label):
                continue

            # Case (a): .db directives right after the label
            j = i + 1
            while j < len(lines) and _is_byte_data(lines[j]):
                j += 1
            if j > i + 1:
                region = ByteData.from_directives(line, lines[i + 1:j])
                self._mark(line, address)
                self.regions.append(region)
                logger.debug(
                    f"Data region '{line.name}' at 0x{address:x}, {region.size} bytes"
                )
                address += region.size
                continue

            # Case (b): a chain of labels, then .db
            j = i + 1
            while j < len(lines) and isinstance(lines[j], Label):
                j += 1
            if j > i + 1 and j < len(lines) and _is_byte_data(lines[j]):
                self._mark(line, address)
                self.regions.append(ByteData(line))
                logger.debug(f"Data alias '{line.name}' at 0x{address:x}")

        return self.regions

    @staticmethod
    def _mark(label: Label, address: int) -> None:
        label.is_data_label = True
        label.slot = address


def collect_rom_data(program: Program, base: int = DEFAULT_ROM_BASE) -> list[ByteData]:
    """Convenience function: analyze a program and return its data regions."""
    return RomDataAnalyzer(program, base).analyze()
