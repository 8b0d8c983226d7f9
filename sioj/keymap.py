"""Trimming and restoring of long, suffixed JSON key names.

Keys such as ``boolKey_8_EDBB36654CF43866C376DE921373AF23`` carry a
generated suffix after their second-to-last underscore.  These helpers
strip such suffixes, and put the long names back using a
:class:`TrimmedKeyMap`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

TMAP_KEY = "!__!INTERNAL_TMAP"
"""Sub-map key marking a map whose entries all share one value layout."""


@dataclass
class TrimmedKeyMap:
    """Maps trimmed key names to their long names, nested per sub-structure."""

    long_key: str = ""
    sub_map: dict[str, "TrimmedKeyMap"] = field(default_factory=dict)

    def __str__(self) -> str:
        entries = "".join(f"{{{key}:{sub}}}," for key, sub in self.sub_map.items())
        return f"{{{self.long_key}:{entries}}}"


def trim_key(long_key: str) -> Optional[str]:
    """Cut a key at its second-to-last underscore.

    Returns the trimmed key, or ``None`` when the key holds fewer than two
    underscores and so needs no trimming.
    """
    last = long_key.rfind("_")
    if last < 0:
        return None
    second = long_key.rfind("_", 0, last)
    if second < 0:
        return None
    return long_key[:second]


def trim_value_key_names(raw: Any) -> Any:
    """Trim every object key in a JSON value, recursing into containers.

    The value is changed in place and also returned.
    """
    if isinstance(raw, list):
        for item in raw:
            trim_value_key_names(item)
    elif isinstance(raw, dict):
        for key, sub_value in list(raw.items()):
            trimmed = trim_key(key)
            trim_value_key_names(sub_value)
            if trimmed is not None:
                raw[trimmed] = sub_value
                raw.pop(key, None)
    return raw


def replace_json_value_names_with_map(raw: Any, key_map: TrimmedKeyMap) -> Any:
    """Rename trimmed object keys back to the long names held in a key map.

    Keys not found in the map are left as they are.  The value is changed
    in place and also returned.
    """
    if isinstance(raw, dict):
        sub_map = key_map.sub_map
        for key, sub_value in list(raw.items()):
            if TMAP_KEY in sub_map:
                replace_json_value_names_with_map(sub_value, sub_map[TMAP_KEY])
            elif key in sub_map:
                entry = sub_map[key]
                replace_json_value_names_with_map(sub_value, entry)
                if key != entry.long_key:
                    raw[entry.long_key] = sub_value
                    raw.pop(key, None)
    elif isinstance(raw, list):
        for item in raw:
            replace_json_value_names_with_map(item, key_map)
    return raw