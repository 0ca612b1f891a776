"""
asm2host Configuration
======================

Translator settings: host target language, ROM data base address and the
names used in the generated source. Configuration can come from:
- Default values (defined here)
- Environment variables (TranslatorConfig.from_env)
- Command-line options (which override both)

Environment variables (all optional):
    ASM2HOST_TARGET: Host target ("javascript" or "python")
    ASM2HOST_ROM_BASE: ROM data base address ($8000, 0x8000 or decimal)
    ASM2HOST_STEP_NAME: Name of the generated dispatch procedure
"""

import os
from dataclasses import dataclass

from asm2host.errors import ConfigurationError


# Host targets understood by the emitter
TARGETS = ("javascript", "python")

# Data regions start here unless configured otherwise
DEFAULT_ROM_BASE = 0x8000


def parse_address(text: str) -> int:
    """
    Parse an address that may be hex ($8000 or 0x8000) or decimal.

    Raises:
        ValueError: If the text is not a valid number
    """
    text = text.strip()
    if text.startswith("$"):
        return int(text[1:], 16)
    if text.startswith("0x") or text.startswith("0X"):
        return int(text[2:], 16)
    return int(text)


@dataclass
class TranslatorConfig:
    """
    Configuration for one translation.

    Attributes:
        target: Host language of the generated source
        rom_base: Address assigned to the first ROM data region
        step_name: Name of the generated dispatch procedure
        rom_table_name: Name of the generated flat data table
    """

    target: str = "javascript"
    rom_base: int = DEFAULT_ROM_BASE
    step_name: str = "step"
    rom_table_name: str = "ROM_DATA"

    @classmethod
    def from_env(cls) -> "TranslatorConfig":
        """
        Create a TranslatorConfig from environment variables.

        Invalid values are ignored and the default is kept.
        """
        config = cls()

        if target := os.environ.get("ASM2HOST_TARGET"):
            if target.lower() in TARGETS:
                config.target = target.lower()

        if rom_base := os.environ.get("ASM2HOST_ROM_BASE"):
            try:
                config.rom_base = parse_address(rom_base)
            except ValueError:
                pass

        if step_name := os.environ.get("ASM2HOST_STEP_NAME"):
            if step_name.isidentifier():
                config.step_name = step_name

        return config

    def validate(self) -> None:
        """
        Check that the configuration can drive the emitter.

        Raises:
            ConfigurationError: On an unknown target, negative ROM base or
                an unusable identifier
        """
        if self.target not in TARGETS:
            raise ConfigurationError(
                f"unknown host target '{self.target}'",
                hint=f"valid targets: {', '.join(TARGETS)}",
            )
        if self.rom_base < 0:
            raise ConfigurationError(f"ROM base must not be negative ({self.rom_base})")
        for name in (self.step_name, self.rom_table_name):
            if not name.isidentifier():
                raise ConfigurationError(f"'{name}' is not a valid identifier")
