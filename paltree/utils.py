"""Utilities."""

import re
from typing import Any

__all__ = ["apply_variables", "merge"]


def merge(merged: dict[str, Any], obj2: dict[str, Any], replace: bool = False) -> dict[str, Any]:
    """Merge the content of obj2 into merged.

    Args:
        merged: Dictionary to merge into
        obj2: Dictionary to merge from
        replace: If True, lists from obj2 replace existing ones instead of being appended

    Returns:
        `merged` dictionary with the merged content

    Eg:
        merge({"a": {"b": 1}}, {"a": {"c": 2}}) == {"a": {"b": 1, "c": 2}}
    """
    for key, value in obj2.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merge(merged[key], value, replace)
        elif not replace and key in merged and isinstance(merged[key], list) and isinstance(value, list):
            merged[key] = merged[key] + value
        else:
            merged[key] = value
    return merged


def apply_variables(template: str, variables: dict[str, str]) -> str:
    """Replace [var_name] with content from supplied variables.

    Unknown variables are left untouched.

    Args:
        template: the string template
        variables: a dict containing the variables to replace

    Returns:
        The resulting string
    """
    pattern = r"\[([^\[\]]+)\]"

    def replace(match: re.Match[str]) -> str:
        var_name = match.group(1)
        return variables.get(var_name, match.group(0))

    return re.sub(pattern, replace, template)
