"""
config.py - Settings for the PwForge command line

Values are layered: built-in defaults, then ~/.pwforge/config.json, then
PWFORGE_* environment variables. Command line options override all of them.
"""
import json
import logging
import os
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from .charsets import ALL_CLASSES, CharacterClass, ordered
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = os.path.expanduser("~/.pwforge/config.json")
CONFIG_ENV = "PWFORGE_CONFIG"

DEFAULT_LENGTH = 16
DEFAULT_CLIPBOARD_TIMEOUT = 30
DEFAULT_TOAST_SECONDS = 1.8


@dataclass(frozen=True)
class Settings:
    length: int = DEFAULT_LENGTH
    classes: FrozenSet[CharacterClass] = field(default_factory=lambda: ALL_CLASSES)
    clipboard_timeout: int = DEFAULT_CLIPBOARD_TIMEOUT
    toast_seconds: float = DEFAULT_TOAST_SECONDS

    def with_classes(self, classes: Iterable[CharacterClass]) -> "Settings":
        return replace(self, classes=frozenset(classes))

    def toggled(self, cls: CharacterClass) -> "Settings":
        """Copy of these settings with one class switched on or off"""
        return self.with_classes(self.classes ^ {cls})

    def as_dict(self) -> Dict:
        return {
            'length': self.length,
            'classes': [c.value for c in ordered(self.classes)],
            'clipboard_timeout': self.clipboard_timeout,
            'toast_seconds': self.toast_seconds,
        }


def _parse_int(key: str, value, minimum: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(key, f"expected an integer, got {value!r}") from None
    if number < minimum:
        raise ConfigError(key, f"must be at least {minimum}, got {number}")
    return number


def _parse_float(key: str, value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(key, f"expected a number, got {value!r}") from None
    if number < 0:
        raise ConfigError(key, f"must not be negative, got {number}")
    return number


def parse_classes(key: str, value) -> FrozenSet[CharacterClass]:
    """Parse a comma-separated string or a list of class names"""
    names = value.split(",") if isinstance(value, str) else value
    try:
        return frozenset(CharacterClass.from_name(name) for name in names if name.strip())
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigError(key, str(e)) from None


def apply_values(settings: Settings, values: Mapping, source: str) -> Settings:
    """Return settings updated with the recognised keys in `values`"""
    updates = {}
    if 'length' in values:
        updates['length'] = _parse_int(f"{source}:length", values['length'], 1)
    if 'classes' in values:
        updates['classes'] = parse_classes(f"{source}:classes", values['classes'])
    if 'clipboard_timeout' in values:
        updates['clipboard_timeout'] = _parse_int(
            f"{source}:clipboard_timeout", values['clipboard_timeout'], 0
        )
    if 'toast_seconds' in values:
        updates['toast_seconds'] = _parse_float(f"{source}:toast_seconds", values['toast_seconds'])

    unknown = set(values) - {'length', 'classes', 'clipboard_timeout', 'toast_seconds'}
    if unknown:
        logger.warning("Ignoring unknown settings in %s: %s", source, ", ".join(sorted(unknown)))
    return replace(settings, **updates)


def load_file(path: str) -> Dict:
    """Read a JSON settings file; a missing file is an empty mapping"""
    if not os.path.exists(path):
        return {}
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(path, f"could not read settings: {e}") from None
    if not isinstance(data, dict):
        raise ConfigError(path, "settings file must contain a JSON object")
    logger.debug("Loaded settings from %s", path)
    return data


def env_values(environ: Mapping[str, str]) -> Dict:
    values = {}
    if 'PWFORGE_LENGTH' in environ:
        values['length'] = environ['PWFORGE_LENGTH']
    if 'PWFORGE_CLASSES' in environ:
        values['classes'] = environ['PWFORGE_CLASSES']
    if 'PWFORGE_CLIPBOARD_TIMEOUT' in environ:
        values['clipboard_timeout'] = environ['PWFORGE_CLIPBOARD_TIMEOUT']
    return values


def load_settings(
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None
) -> Settings:
    """
    Build the effective settings.

    Args:
        path: Settings file (default: $PWFORGE_CONFIG or ~/.pwforge/config.json)
        environ: Environment mapping (default: os.environ)

    Raises:
        ConfigError: If any value is malformed
    """
    environ = os.environ if environ is None else environ
    path = path or environ.get(CONFIG_ENV) or DEFAULT_CONFIG_FILE

    settings = Settings()
    settings = apply_values(settings, load_file(path), path)
    settings = apply_values(settings, env_values(environ), "environment")
    return settings
