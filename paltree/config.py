"""Configuration sections with typed access and schema defaults."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

    from .validation import ConfigItems

__all__ = ["BOOL_FALSE_STRINGS", "BOOL_STRINGS", "BOOL_TRUE_STRINGS", "Configuration"]

ConfigValueType = float | bool | str | list | dict

BOOL_TRUE_STRINGS = frozenset({"true", "yes", "on", "1", "enabled"})
BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})
BOOL_STRINGS = BOOL_TRUE_STRINGS | BOOL_FALSE_STRINGS
" strings accepted for boolean fields "


class Configuration(dict):
    """One config section (e.g. `[clock]`) with typed accessors.

    Lookups fall back to the schema defaults, then to the default given by
    the caller.
    """

    def __init__(
        self,
        *args: Any,  # noqa: ANN401
        logger: logging.Logger,
        schema: ConfigItems | None = None,
        **kwargs: Any,  # noqa: ANN401
    ):
        """Create the section.

        Args:
            *args: Arguments for dict
            logger: Logger receiving the conversion warnings
            schema: Fields whose defaults are used for missing keys
            **kwargs: Keyword arguments for dict
        """
        super().__init__(*args, **kwargs)
        self.log = logger
        self._schema_defaults: dict[str, ConfigValueType] = {}
        if schema:
            self.set_schema(schema)

    def set_schema(self, schema: ConfigItems) -> None:
        """Use the defaults of `schema` for missing keys."""
        self._schema_defaults = {item.name: item.default for item in schema if item.default is not None}

    def get(self, name: str, default: ConfigValueType | None = None) -> ConfigValueType | None:  # type: ignore[override]
        """Return the value of `name`, its schema default or `default`."""
        if name in self:
            return self[name]  # type: ignore[no-any-return]
        return self._schema_defaults.get(name, default)

    def _convert(self, name: str, convert: Callable[[Any], Any], default: Any) -> Any:  # noqa: ANN401
        value = self.get(name)
        if value is None:
            return default
        try:
            return convert(value)
        except (ValueError, TypeError):
            self.log.warning("Invalid %s value for %s: %r", convert.__name__, name, value)
            return default

    def get_int(self, name: str, default: int = 0) -> int:
        """Get an integer value, `default` if missing or not a number."""
        return self._convert(name, int, default)  # type: ignore[no-any-return]

    def get_str(self, name: str, default: str = "") -> str:
        """Get a string value."""
        return self._convert(name, str, default)  # type: ignore[no-any-return]

    def get_list(self, name: str) -> list[Any]:
        """Get a list value, a single value is wrapped into a list."""
        value = self.get(name)
        if value is None:
            return []
        return value if isinstance(value, list) else [value]
