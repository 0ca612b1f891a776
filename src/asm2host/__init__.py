"""
asm2host - 6502 Assembly to Host-Language Translator
====================================================

This package converts 6502 assembly source into host-language source
(JavaScript or Python) without executing it. Each instruction becomes one
case of a generated ``step(pc)`` dispatch procedure that calls runtime
opcode helpers and returns the next slot; labels, ``=`` definitions and
``.db`` data become constants and a flat ROM data table.

Main Components
---------------
- **translator**: classifier, literal evaluator, ROM data analyzer,
  resolver and emitters
- **config**: translator settings and environment overrides
- **errors**: exception hierarchy and diagnostic collection
- **cli**: the ``asm2host`` command

Quick Start
-----------
    >>> from asm2host import Translator
    >>> result = Translator(target="javascript").translate_file("game.asm")
    >>> print(result.text)

Or from the command line:
    $ asm2host game.asm -o game.js

The runtime helpers the output calls (``LDA_immediate``, ``BNE``, ``JSR``,
``LO``, ``HI``, ...) are supplied by the embedding project.
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from asm2host.config import TranslatorConfig
from asm2host.translator import Translator, TranslationResult, translate, translate_file
from asm2host.errors import (
    Asm2HostError,
    TranslatorError,
    ExpressionError,
    UnknownLineError,
    ConfigurationError,
    SourceLocation,
    DiagnosticCollector,
)

__all__ = [
    "__version__",
    # Translator
    "Translator",
    "TranslationResult",
    "TranslatorConfig",
    "translate",
    "translate_file",
    # Exception hierarchy
    "Asm2HostError",
    "TranslatorError",
    "ExpressionError",
    "UnknownLineError",
    "ConfigurationError",
    "SourceLocation",
    "DiagnosticCollector",
]
