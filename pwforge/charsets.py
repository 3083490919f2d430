"""
charsets.py - Character classes and their fixed pools
"""
import string
from enum import Enum
from typing import Iterable, List


LOWERCASE_POOL = string.ascii_lowercase
UPPERCASE_POOL = string.ascii_uppercase
DIGIT_POOL = string.digits
SYMBOL_POOL = "!@#$%^&*()-_=+[]{};:,.<>/?|~"


class CharacterClass(Enum):
    """A named category of characters. Declaration order is the class order."""

    LOWERCASE = "lower"
    UPPERCASE = "upper"
    DIGIT = "digits"
    SYMBOL = "symbols"

    @property
    def pool(self) -> str:
        return _POOLS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_name(cls, name: str) -> "CharacterClass":
        """
        Look up a class by its value or member name, case-insensitively.

        Accepts "lower", "LOWERCASE", "digits", "symbol" and so on.

        Raises:
            ValueError: If the name matches no class
        """
        key = name.strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        # Accept singular forms like "digit" / "symbol"
        for member in cls:
            if member.value.rstrip("s") == key:
                return member
        raise ValueError(f"Unknown character class: {name!r}")


_POOLS = {
    CharacterClass.LOWERCASE: LOWERCASE_POOL,
    CharacterClass.UPPERCASE: UPPERCASE_POOL,
    CharacterClass.DIGIT: DIGIT_POOL,
    CharacterClass.SYMBOL: SYMBOL_POOL,
}

_LABELS = {
    CharacterClass.LOWERCASE: "Lowercase",
    CharacterClass.UPPERCASE: "Uppercase",
    CharacterClass.DIGIT: "Numbers",
    CharacterClass.SYMBOL: "Symbols",
}

ALL_CLASSES = frozenset(CharacterClass)


def ordered(classes: Iterable[CharacterClass]) -> List[CharacterClass]:
    """Return the given classes in the fixed class order, without duplicates"""
    wanted = set(classes)
    return [member for member in CharacterClass if member in wanted]


def combined_pool(classes: Iterable[CharacterClass]) -> str:
    """Concatenate the pools of the given classes in class order"""
    return "".join(member.pool for member in ordered(classes))
