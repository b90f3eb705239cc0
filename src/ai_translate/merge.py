from __future__ import annotations

import copy
from typing import Any, Dict, Mapping


def merge_locale(base: Mapping[str, Any], delta: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge a delta document (added/changed keys only) into `base`.

    - mapping over mapping: merged recursively
    - anything else: the delta value wins outright (lists are not merged)
    - keys only in `base` stay where they were; keys only in `delta` are
      appended in delta's order

    Neither argument is modified; the result shares no mutable values with them.
    There are no delete semantics.
    """
    out: Dict[str, Any] = {}

    for k, old in base.items():
        if k not in delta:
            out[k] = copy.deepcopy(old)
            continue
        new = delta[k]
        if isinstance(new, Mapping) and isinstance(old, Mapping):
            out[k] = merge_locale(old, new)
        else:
            out[k] = copy.deepcopy(new)

    for k, new in delta.items():
        if k not in base:
            out[k] = copy.deepcopy(new)

    return out
