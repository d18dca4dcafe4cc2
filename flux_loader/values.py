"""Module for building helm chart values from override parameters.

Overrides are `name=value` pairs where a dotted name addresses a nested
value, similar to `helm install --set`:

```python
values = collect_values([ChartParam("image.tag", "1.2.3")])
assert values == {"image": {"tag": "1.2.3"}}
```
"""

from dataclasses import dataclass
import json
import logging
import re
from typing import Any

import yaml

from .exceptions import InvalidValuesException

__all__ = [
    "ChartParam",
    "collect_values",
    "render_values",
]

_LOGGER = logging.getLogger(__name__)

_LIST_VALUE = re.compile(r"^\[.*\]$")


@dataclass
class ChartParam:
    """A single chart value override."""

    name: str
    """Dotted path of the value to override."""

    value: str
    """The override value, a JSON list when wrapped in brackets."""

    @classmethod
    def from_str(cls, param: str) -> "ChartParam":
        """Parse a ChartParam from a name=value string."""
        if "=" not in param:
            raise InvalidValuesException(
                f"Expected name=value format but got '{param}'"
            )
        name, value = param.split("=", 1)
        return cls(name=name, value=value)


def _unwrap(name: str, value: str) -> Any:
    """Decode a JSON list value."""
    try:
        return json.loads(value)
    except ValueError as err:
        raise InvalidValuesException(
            f"Unable to parse list value for '{name}': {err}"
        ) from err


def _nest(name: str, value: Any) -> dict[str, Any]:
    """Build nested dicts for each part of a dotted name."""
    result: dict[str, Any] = {}
    inner = result
    parts = name.split(".")
    for part in parts[:-1]:
        inner[part] = {}
        inner = inner[part]
    inner[parts[-1]] = value
    return result


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two dictionaries.

    Values that are not dicts, including lists, are replaced.
    """
    result = base.copy()
    for key, override_value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = _deep_merge(base_value, override_value)
        else:
            result[key] = override_value
    return result


def collect_values(params: list[ChartParam] | None) -> dict[str, Any]:
    """Merge the override parameters, in order, into a single values dict."""
    values: dict[str, Any] = {}
    for param in params or ():
        name = param.name.strip()
        if not name:
            continue
        raw_value = param.value.strip()
        value: Any = raw_value
        if _LIST_VALUE.match(raw_value):
            value = _unwrap(name, raw_value)
        values = _deep_merge(values, _nest(name, value))
    _LOGGER.debug("Override parameters collected into values: %s", values)
    return values


def render_values(params: list[ChartParam] | None) -> str:
    """Return the merged override parameters as a YAML document."""
    return yaml.dump(collect_values(params), sort_keys=False)
