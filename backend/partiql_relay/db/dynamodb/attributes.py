from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

# Type code of a nested map. Every other code (S, N, B, BOOL, NULL, L, SS, NS, BS)
# is terminal: its payload is passed through exactly as the client returned it.
MAP = "M"


def decode_item(item: Mapping[str, Any]) -> dict[str, Any]:
    """
    Flatten one item in DynamoDB's typed-attribute format into a plain dict.

        {"id": {"S": "o-1"}, "total": {"N": "12.5"}, "meta": {"M": {"by": {"S": "ana"}}}}
        -> {"id": "o-1", "total": "12.5", "meta": {"by": "ana"}}

    Only maps recurse. Numbers stay numeric strings, binaries stay bytes and
    lists keep their typed elements.

    Malformed attributes degrade silently instead of raising:
    - a value that is not a mapping (already plain, or None) is skipped
    - an empty tagged union is skipped
    - a tagged union with several keys uses its first key
    """
    out: dict[str, Any] = {}
    for name, value in item.items():
        if not isinstance(value, Mapping) or not value:
            continue
        code = next(iter(value))
        payload = value[code]
        if code == MAP and isinstance(payload, Mapping):
            out[name] = decode_item(payload)
        else:
            out[name] = payload
    return out


def decode_items(items: Iterable[Mapping[str, Any]] | None) -> list[dict[str, Any]]:
    return [decode_item(i) for i in (items or [])]
