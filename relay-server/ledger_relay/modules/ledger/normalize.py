"""Type-directed conversion of contract return values for JSON transport.

Conversion follows the ABI output declaration of the function that was
called, so only values declared as integers are turned into decimal strings.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Sequence

_ARRAY_SUFFIX = re.compile(r"^(?P<inner>.+)\[(?P<size>\d*)\]$")


def normalize_value(spec: Mapping[str, Any], value: Any) -> Any:
    abi_type: str = spec["type"]

    array = _ARRAY_SUFFIX.match(abi_type)
    if array:
        inner = dict(spec, type=array.group("inner"))
        return [normalize_value(inner, item) for item in value]

    if abi_type == "tuple":
        components = spec.get("components") or []
        return normalize_outputs(components, value)
    if abi_type.startswith(("uint", "int")):
        return str(int(value))
    if abi_type == "bool":
        return bool(value)
    if abi_type.startswith("bytes"):
        raw = bytes(value)
        return f"0x{raw.hex()}"
    # address and string travel as-is
    return value


def normalize_outputs(outputs: Sequence[Mapping[str, Any]], value: Any) -> Any:
    """Normalize ``value`` as returned by a call whose ABI declares ``outputs``.

    A single unnamed output is unwrapped; named outputs and tuple components
    become dicts keyed by name, falling back to positional keys.
    """
    if len(outputs) == 1 and not outputs[0].get("name"):
        return normalize_value(outputs[0], value)

    if isinstance(value, Mapping):
        items = [value[spec["name"]] for spec in outputs]
    else:
        items = list(value) if len(outputs) != 1 else [value]

    normalized: dict[str, Any] = {}
    for position, (spec, item) in enumerate(zip(outputs, items)):
        key = spec.get("name") or str(position)
        normalized[key] = normalize_value(spec, item)
    return normalized


__all__ = ["normalize_outputs", "normalize_value"]
