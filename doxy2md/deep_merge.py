"""Logic for layering a user configuration over the defaults."""

from typing import Any

# List options whose user values extend the defaults instead of replacing them.
ADDITIVE_LIST_KEYS = frozenset({"keywords"})


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Return `base` overlaid with `update`; neither input is modified.

    Nested mappings are merged key by key. Lists replace the base list,
    except the additive ones, which keep the base entries first and
    append the new ones without duplicates.
    """
    result = base.copy()
    for key, value in update.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        elif (
            key in ADDITIVE_LIST_KEYS
            and isinstance(current, list)
            and isinstance(value, list)
        ):
            merged = list(current)
            for item in value:
                if item not in merged:
                    merged.append(item)
            result[key] = merged
        else:
            result[key] = value
    return result
