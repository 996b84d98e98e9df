"""Template formatting."""

from __future__ import annotations

from collections.abc import Mapping


def format_template(template: str, values: Mapping[str, str | int | float]) -> str:
    """Substitute `{key}` placeholders, first occurrence per key.

    Unknown placeholders are left untouched, unlike str.format.

    Example:
        >>> format_template("tiles/{z}/{x}/{y}.png", {"z": 12, "x": 2048, "y": 1361})
        'tiles/12/2048/1361.png'
    """
    for key, value in values.items():
        template = template.replace(f"{{{key}}}", str(value), 1)
    return template
