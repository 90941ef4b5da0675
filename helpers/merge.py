"""Deep merge of configuration mappings."""

import copy
from collections.abc import Mapping
from typing import Any


def merge_configs(base: Mapping[str, Any], *overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge each of *overrides* into a copy of *base* and return the result.

    Dict values are merged recursively; all other types (lists included)
    are replaced wholesale. Later overrides win. Inputs are never mutated.
    """
    result: dict[str, Any] = copy.deepcopy(dict(base))
    for override in overrides:
        for key, value in override.items():
            if isinstance(value, Mapping):
                current = result.get(key)
                result[key] = merge_configs(current if isinstance(current, dict) else {}, value)
            else:
                result[key] = copy.deepcopy(value)
    return result
