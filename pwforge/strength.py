"""
strength.py - Password strength scoring

Score = length points (one each at 8, 12 and 16 characters) plus variety
points (one per character class present, at most 3). The 0-6 score maps to a
percentage and a label.
"""
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional

MAX_SCORE = 6
LENGTH_THRESHOLDS = (8, 12, 16)
MAX_VARIETY = 3
PLACEHOLDER = "—"

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SYMBOL = re.compile(r"[!@#$%^&*()_\-+=\[\]{};:,.<>/?\\|~]")


class StrengthLabel(Enum):
    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"
    EXCELLENT = "Excellent"


# (minimum percentage, label), checked top-down
LABEL_THRESHOLDS = (
    (80, StrengthLabel.EXCELLENT),
    (60, StrengthLabel.STRONG),
    (40, StrengthLabel.MEDIUM),
)


@dataclass(frozen=True)
class StrengthResult:
    score: int
    percentage: int
    label: Optional[StrengthLabel]

    @property
    def text(self) -> str:
        """Label for display, or a placeholder for the neutral result"""
        return self.label.value if self.label else PLACEHOLDER

    @property
    def is_neutral(self) -> bool:
        return self.label is None


NEUTRAL = StrengthResult(score=0, percentage=0, label=None)


def length_points(password: str) -> int:
    return sum(1 for threshold in LENGTH_THRESHOLDS if len(password) >= threshold)


def variety_points(password: str) -> int:
    present = sum(
        1 for pattern in (_LOWER, _UPPER, _DIGIT, _SYMBOL)
        if pattern.search(password)
    )
    return min(MAX_VARIETY, present)


def to_percentage(score: int) -> int:
    # round half up, not Python's banker's rounding
    value = Decimal(score * 100) / Decimal(MAX_SCORE)
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def label_for(percentage: int) -> StrengthLabel:
    for minimum, label in LABEL_THRESHOLDS:
        if percentage >= minimum:
            return label
    return StrengthLabel.WEAK


def estimate(password: Optional[str]) -> StrengthResult:
    """
    Estimate the strength of a password.

    Args:
        password: The password to score; empty or None gives the neutral result

    Returns:
        StrengthResult with score (0-6), percentage (0-100) and label
    """
    if not password:
        return NEUTRAL

    score = length_points(password) + variety_points(password)
    percentage = to_percentage(score)
    return StrengthResult(score=score, percentage=percentage, label=label_for(percentage))


def format_strength_bar(result: StrengthResult, width: int = 20) -> str:
    """Create a visual strength bar"""
    filled = int((result.percentage / 100) * width)
    bar = '█' * filled + '░' * (width - filled)

    # Color codes (for terminal)
    if result.label is StrengthLabel.EXCELLENT:
        color = '\033[92m'  # Bright green
    elif result.label is StrengthLabel.STRONG:
        color = '\033[32m'  # Green
    elif result.label is StrengthLabel.MEDIUM:
        color = '\033[93m'  # Yellow
    else:
        color = '\033[91m'  # Red

    reset = '\033[0m'
    return f"{color}{bar}{reset} {result.percentage}% {result.text}"
