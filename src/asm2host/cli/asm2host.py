"""
asm2host - 6502 Assembly Translator Command-Line Interface
==========================================================

This module implements the command-line interface for the translator.

Usage Examples
--------------
Translate to JavaScript on stdout:
    $ asm2host game.asm

Translate to a Python module:
    $ asm2host -t python game.asm -o game_rom.py

Read from stdin, place ROM data at $C000:
    $ cat game.asm | asm2host --rom-base '$C000' -o game.js

Unknown source lines are reported on stderr and dropped; the output is
still written. A malformed literal expression aborts the translation and
nothing is written.
"""

import logging
from pathlib import Path
from typing import Optional, TextIO

import click

from asm2host import __version__
from asm2host.config import TARGETS, TranslatorConfig, parse_address
from asm2host.translator import Translator
from asm2host.cli.errors import handle_cli_exception


class EchoedDiagnosticsFilter(logging.Filter):
    """
    Drop WARNING records from the translator's loggers.

    Each of these warnings is also a collected diagnostic, which the
    command echoes to stderr itself.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return not (
            record.levelno == logging.WARNING
            and record.name.startswith("asm2host.")
        )


def _parse_rom_base(ctx, param, value: Optional[str]) -> Optional[int]:
    """Click callback: accept $8000, 0x8000 or decimal."""
    if value is None:
        return None
    try:
        return parse_address(value)
    except ValueError:
        raise click.BadParameter(f"invalid address '{value}'")


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.File("r", encoding="utf-8"),
    default="-",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-t", "--target",
    type=click.Choice(TARGETS, case_sensitive=False),
    default=None,
    help="Host language of the generated source. Default: javascript "
         "(or $ASM2HOST_TARGET).",
)
@click.option(
    "--rom-base",
    callback=_parse_rom_base,
    help="Address of the first ROM data region ($8000, 0x8000 or decimal). "
         "Default: $8000.",
)
@click.option(
    "--step-name",
    default=None,
    help="Name of the generated dispatch procedure. Default: step.",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="asm2host")
def main(
    input_file: TextIO,
    output: Optional[Path],
    target: Optional[str],
    rom_base: Optional[int],
    step_name: Optional[str],
    verbose: bool,
) -> None:
    """
    Translate 6502 assembly source into a dispatch-based host program.

    INPUT_FILE is the assembly source file; omit it or pass - to read stdin.

    \b
    Output blocks, in order:
        Labels, Definitions, Rom data addresses, Rom data, step(pc)

    \b
    Examples:
        asm2host game.asm                    # JavaScript on stdout
        asm2host -t python game.asm -o rom.py
        asm2host --rom-base '$C000' game.asm
    """
    handler = logging.StreamHandler()
    handler.addFilter(EchoedDiagnosticsFilter())
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
        handlers=[handler],
    )

    try:
        config = TranslatorConfig.from_env()
        if step_name is not None:
            config.step_name = step_name

        translator = Translator(config, target=target, rom_base=rom_base, verbose=verbose)

        if verbose:
            click.echo(f"Target: {translator.config.target}", err=True)
            click.echo(f"ROM base: 0x{translator.config.rom_base:x}", err=True)

        filename = getattr(input_file, "name", "<stdin>")
        result = translator.translate_lines(input_file, filename)

        # Diagnostics never stop the output
        for diagnostic in result.diagnostics:
            click.echo(str(diagnostic), err=True)
        for warning in translator.get_diagnostics().warnings:
            click.echo(f"warning: {warning}", err=True)

        if output is not None:
            output.write_text(result.text, encoding="utf-8")
            if verbose:
                click.echo(f"Wrote {result.slot_count} slots to {output}", err=True)
        else:
            click.echo(result.text, nl=False)

        if verbose:
            data_size = sum(region.size for region in result.regions)
            click.echo(
                f"Translation complete: {result.slot_count} slots, "
                f"{len(result.regions)} data regions ({data_size} bytes), "
                f"{len(result.diagnostics)} unknown lines",
                err=True,
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Translation")


if __name__ == "__main__":
    main()
