"""Declarative config schemas and their validation.

Each plugin describes its section with a `ConfigItems` list of `ConfigField`.
`ConfigValidator` reports missing required keys, type mismatches, invalid
choices and unknown keys (with a "did you mean" hint).
"""

import difflib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .config import BOOL_STRINGS

__all__ = [
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "format_config_error",
]


@dataclass
class ConfigField:
    """One key of a config section."""

    name: str
    field_type: type | tuple[type, ...] = str
    " expected type, a tuple accepts any of its types "
    required: bool = False
    default: Any = None
    " used by `Configuration` when the key is missing "
    description: str = ""
    choices: list | None = None
    " accepted values, any value if None "
    validator: Callable[[Any], list[str]] | None = None
    " extra check returning error messages "

    @property
    def type_name(self) -> str:
        """Readable type, e.g. "str or list"."""
        types = self.field_type if isinstance(self.field_type, tuple) else (self.field_type,)
        return " or ".join(typ.__name__ for typ in types)


class ConfigItems(list):
    """An ordered schema, `ConfigField` items looked up by name."""

    def __init__(self, *fields: ConfigField) -> None:
        super().__init__(fields)

    def get(self, name: str) -> ConfigField | None:
        """Return the field called `name`, if any."""
        return next((item for item in self if item.name == name), None)

    def __add__(self, other: list) -> "ConfigItems":  # type: ignore[override]
        return ConfigItems(*self, *other)


def _find_similar_key(unknown_key: str, known_keys: list[str]) -> str | None:
    matches = difflib.get_close_matches(unknown_key, known_keys, n=1)
    return matches[0] if matches else None


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Format an error as "[section] Config error for 'field': message -> suggestion"."""
    msg = f"[{section}] Config error for '{field}': {message}"
    return f"{msg} -> {suggestion}" if suggestion else msg


def _matches_type(expected: type, value: Any) -> bool:  # noqa: ANN401
    if expected is bool:
        return isinstance(value, bool) or (isinstance(value, str) and value.lower() in BOOL_STRINGS)
    if expected in {int, float}:
        # bool is a subclass of int
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            return False
        try:
            expected(value)
        except ValueError:
            return False
        return True
    return isinstance(value, expected)


_EXAMPLES = {
    str: '{name} = "value"',
    int: "{name} = 42",
    float: "{name} = 4.2",
    bool: "{name} = true",
    list: '{name} = ["item"]',
    dict: "[{section}.{name}]",
}


class ConfigValidator:
    """Checks one config section against a schema."""

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        """Create a validator for `config`, reported as `[section]`."""
        self.config = config
        self.section = section
        self.log = logger

    def _example(self, field_def: ConfigField) -> str:
        field_type = field_def.field_type[0] if isinstance(field_def.field_type, tuple) else field_def.field_type
        template = _EXAMPLES.get(field_type, "{name} = ...")
        return "Use " + template.format(name=field_def.name, section=self.section)

    def _check_field(self, field_def: ConfigField, value: Any) -> list[str]:  # noqa: ANN401
        def error(message: str, suggestion: str = "") -> str:
            return format_config_error(self.section, field_def.name, message, suggestion)

        if value is None:
            return [error("Missing required field", self._example(field_def))] if field_def.required else []

        types = field_def.field_type if isinstance(field_def.field_type, tuple) else (field_def.field_type,)
        if not any(_matches_type(typ, value) for typ in types):
            return [error(f"Expected {field_def.type_name}, got {type(value).__name__}", self._example(field_def))]

        errors = []
        if field_def.choices is not None and value not in field_def.choices:
            errors.append(error(f"Invalid value {value!r}", "Valid options: " + ", ".join(repr(c) for c in field_def.choices)))
        if field_def.validator:
            errors.extend(error(message) for message in field_def.validator(value))
        return errors

    def validate(self, schema: ConfigItems) -> list[str]:
        """Check the required fields, the types, the choices and the custom validators.

        Args:
            schema: the expected fields

        Returns:
            The error messages, empty if the section is valid
        """
        errors = []
        for field_def in schema:
            errors.extend(self._check_field(field_def, self.config.get(field_def.name)))
        return errors

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Log a warning for each key `schema` doesn't describe.

        Returns:
            The warnings
        """
        known_keys = [item.name for item in schema]
        warnings = []
        for key in self.config:
            if key in known_keys:
                continue
            similar = _find_similar_key(key, known_keys)
            hint = f"(did you mean '{similar}'?)" if similar else "- will be ignored"
            msg = f"[{self.section}] Unknown option '{key}' {hint}"
            self.log.warning(msg)
            warnings.append(msg)
        return warnings
