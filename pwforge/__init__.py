"""
PwForge - Random password generator with a strength meter.

Features:
- At least one character from every selected character type
- OS-backed secure randomness, with a logged fallback
- Fisher-Yates shuffling of the generated characters
- Simple 0-6 strength score with Weak/Medium/Strong/Excellent labels
- Clipboard copy with auto-clear
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .charsets import CharacterClass
from .generator import (
    GenerationRequest,
    NoClassesSelected,
    NO_CLASSES_SELECTED,
    generate,
    generate_password,
)
from .strength import StrengthLabel, StrengthResult, estimate
from .cli import cli

__all__ = [
    "CharacterClass",
    "GenerationRequest",
    "NoClassesSelected",
    "NO_CLASSES_SELECTED",
    "StrengthLabel",
    "StrengthResult",
    "generate",
    "generate_password",
    "estimate",
    "cli",
]


def get_version():
    """Get the current version string."""
    return __version__
