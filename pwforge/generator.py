"""
generator.py - Password generation with guaranteed character class coverage
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, MutableSequence, Optional, Union

from .charsets import CharacterClass, combined_pool, ordered
from .exceptions import InvalidRequest
from .random_source import RandomSource, default_source

logger = logging.getLogger(__name__)

NO_SELECTION_MESSAGE = "Choose at least one character type"


@dataclass(frozen=True)
class NoClassesSelected:
    """Outcome of a request with no enabled character classes"""

    message: str = NO_SELECTION_MESSAGE

    def __bool__(self) -> bool:
        return False


NO_CLASSES_SELECTED = NoClassesSelected()


@dataclass(frozen=True)
class GenerationRequest:
    """
    What to generate: a target length and the enabled character classes.

    Raises:
        InvalidRequest: If length is not a positive integer
    """

    length: int
    enabled_classes: frozenset = frozenset()

    def __post_init__(self):
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise InvalidRequest(f"Password length must be an integer, got {self.length!r}")
        if self.length < 1:
            raise InvalidRequest("Password length must be at least 1")
        # Accept any iterable of classes, store it immutable
        object.__setattr__(self, "enabled_classes", frozenset(self.enabled_classes))

    @property
    def classes(self) -> List[CharacterClass]:
        """Enabled classes in the fixed class order"""
        return ordered(self.enabled_classes)

    @property
    def effective_length(self) -> int:
        """Requested length, raised so every enabled class gets one character"""
        return max(self.length, len(self.enabled_classes))


GenerationResult = Union[str, NoClassesSelected]


def shuffle(items: MutableSequence, source: RandomSource) -> None:
    """Fisher-Yates shuffle in place, driven by the given random source"""
    for i in range(len(items) - 1, 0, -1):
        j = source.next_int(i + 1)
        items[i], items[j] = items[j], items[i]


def generate(
    request: GenerationRequest,
    source: Optional[RandomSource] = None
) -> GenerationResult:
    """
    Generate a password for the request.

    One character is drawn from each enabled class's own pool, the rest come
    from the combined pool, and the whole sequence is shuffled so the
    guaranteed characters are not at predictable positions.

    Args:
        request: Length and enabled classes
        source: Random source (default: the process-wide secure source)

    Returns:
        The password, or NO_CLASSES_SELECTED if no class is enabled
    """
    classes = request.classes
    if not classes:
        return NO_CLASSES_SELECTED

    source = source or default_source()
    pool = combined_pool(classes)

    chars = [cls.pool[source.next_int(len(cls.pool))] for cls in classes]
    for _ in range(len(chars), request.effective_length):
        chars.append(pool[source.next_int(len(pool))])

    shuffle(chars, source)

    if request.effective_length > request.length:
        logger.debug(
            "Length %d raised to %d to fit %d character classes",
            request.length, request.effective_length, len(classes)
        )
    return "".join(chars)


def generate_password(
    length: int = 16,
    enabled_classes: Iterable[CharacterClass] = tuple(CharacterClass),
    source: Optional[RandomSource] = None
) -> GenerationResult:
    """
    Generate a password from a length and a set of classes.

    Raises:
        InvalidRequest: If length < 1
    """
    return generate(GenerationRequest(length, frozenset(enabled_classes)), source)


def generate_many(
    request: GenerationRequest,
    count: int,
    source: Optional[RandomSource] = None
) -> List[GenerationResult]:
    """Generate `count` independent passwords for the same request"""
    if count < 1:
        raise ValueError("count must be at least 1")
    return [generate(request, source) for _ in range(count)]
