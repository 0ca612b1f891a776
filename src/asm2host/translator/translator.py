"""
Translator - Main Interface
===========================

This module provides the Translator class, the primary interface for
converting 6502 assembly source into host-language source. It coordinates
the classifier, ROM data analyzer, resolver and emitter.

Example Usage
-------------
>>> from asm2host.translator import Translator
>>>
>>> translator = Translator(target="python")
>>> result = translator.translate_string('''
... Loop:
...     INX
...     BNE Loop
... ''')
>>> print(result.text)
>>>
>>> # Unknown lines are dropped but reported
>>> if translator.has_diagnostics():
...     print(translator.get_diagnostic_report())

Command-Line Usage
------------------
    $ asm2host game.asm -o game.js
    $ asm2host -t python game.asm -o game_rom.py
    $ cat game.asm | asm2host --rom-base '$c000'
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, Optional

from asm2host.config import TranslatorConfig
from asm2host.errors import DiagnosticCollector, UnknownLineError
from asm2host.translator.classifier import parse_source
from asm2host.translator.emitter import OutputBlocks, get_emitter_class
from asm2host.translator.lines import ByteData, Program
from asm2host.translator.resolver import Resolver, SymbolTable
from asm2host.translator.romdata import RomDataAnalyzer

logger = logging.getLogger(__name__)


@dataclass
class TranslationResult:
    """
    Output of one translation.

    Attributes:
        blocks: The five rendered output blocks
        program: The classified and resolved program
        regions: ROM data regions in address order
        symbols: Resolved symbol table
        slot_count: Number of dispatch slots (instructions)
        diagnostics: Unknown lines that were dropped
    """
    blocks: OutputBlocks
    program: Program
    regions: list[ByteData]
    symbols: SymbolTable
    slot_count: int
    diagnostics: list[UnknownLineError] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.blocks.text

    def __str__(self) -> str:
        return self.text


class Translator:
    """
    Static 6502 assembly to host-language translator.

    Each translate_* call owns a fresh Program; diagnostics from the most
    recent call are kept on the translator for reporting.

    Attributes:
        config: Effective configuration (target, ROM base, names)
    """

    def __init__(
        self,
        config: Optional[TranslatorConfig] = None,
        target: Optional[str] = None,
        rom_base: Optional[int] = None,
        verbose: bool = False,
    ):
        """
        Initialize the translator.

        Args:
            config: Base configuration (default: TranslatorConfig())
            target: Host target, overrides config.target
            rom_base: ROM data base address, overrides config.rom_base
            verbose: Log pipeline progress at INFO level

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        config = config or TranslatorConfig()
        overrides = {}
        if target is not None:
            overrides["target"] = target.lower()
        if rom_base is not None:
            overrides["rom_base"] = rom_base
        self.config = replace(config, **overrides)
        self.config.validate()

        self._verbose = verbose
        self._diagnostics = DiagnosticCollector()

    # =========================================================================
    # Translation Methods
    # =========================================================================

    def translate_lines(self, lines: Iterable[str], filename: str = "<input>") -> TranslationResult:
        """
        Translate an ordered sequence of source lines.

        The pipeline is:
        1. Classify lines (unknown lines dropped and recorded)
        2. Detect ROM data regions and assign their addresses
        3. Resolver pass 0: assign slots, build symbol table
        4. Emit the five blocks (resolver pass 1 drives the dispatch block)

        Args:
            lines: Source lines in order
            filename: Source filename for diagnostics

        Returns:
            The TranslationResult

        Raises:
            ExpressionError: If a literal expression fails to parse
        """
        self._diagnostics.clear()

        program, unknown = parse_source(lines, filename)
        for error in unknown:
            self._diagnostics.add(error)

        regions = RomDataAnalyzer(program, self.config.rom_base).analyze()

        resolver = Resolver(program, self._diagnostics)
        symbols = resolver.resolve()

        emitter_class = get_emitter_class(self.config.target)
        emitter = emitter_class(program, regions, resolver, self.config, self._diagnostics)
        blocks = emitter.emit()

        self._log(
            f"Translated {filename}: {resolver.slot_count} slots, "
            f"{len(symbols.code_labels)} labels, {len(regions)} data regions "
            f"({sum(region.size for region in regions)} bytes)"
        )

        return TranslationResult(
            blocks=blocks,
            program=program,
            regions=regions,
            symbols=symbols,
            slot_count=resolver.slot_count,
            diagnostics=unknown,
        )

    def translate_string(self, source: str, filename: str = "<input>") -> TranslationResult:
        """Translate source held in a string."""
        return self.translate_lines(source.splitlines(), filename)

    def translate_file(self, filepath: str | Path) -> TranslationResult:
        """
        Translate a source file.

        Raises:
            FileNotFoundError: If the file does not exist
            ExpressionError: If a literal expression fails to parse
        """
        filepath = Path(filepath)
        source = filepath.read_text(encoding="utf-8")
        return self.translate_string(source, str(filepath))

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def has_diagnostics(self) -> bool:
        return self._diagnostics.has_diagnostics()

    def get_diagnostics(self) -> DiagnosticCollector:
        return self._diagnostics

    def get_diagnostic_report(self) -> str:
        return self._diagnostics.report()

    def _log(self, message: str) -> None:
        if self._verbose:
            logger.info(message)
        else:
            logger.debug(message)


# =============================================================================
# Convenience Functions
# =============================================================================

def translate(source: str, target: str = "javascript", rom_base: Optional[int] = None) -> str:
    """
    Translate assembly source to host-language text in one call.

    Args:
        source: Assembly source text
        target: Host target ("javascript" or "python")
        rom_base: ROM data base address (default 0x8000)

    Returns:
        The generated source text
    """
    return Translator(target=target, rom_base=rom_base).translate_string(source).text


def translate_file(filepath: str | Path, target: str = "javascript") -> str:
    """Translate an assembly file and return the generated source text."""
    return Translator(target=target).translate_file(filepath).text
