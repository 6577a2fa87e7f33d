"""Content digests for published records."""

from __future__ import annotations

import collections.abc as cabc
import hashlib
import json
import typing as typ


def content_digest(value: object) -> str:
    """Return an md5 hex digest of ``value``.

    Strings are hashed as UTF-8 text; anything else is serialized to canonical
    JSON (string keys, sorted, compact separators) first so equal payloads
    always share a digest.
    """
    if isinstance(value, str):
        text = value
    else:
        text = json.dumps(
            _string_keys(value), sort_keys=True, separators=(",", ":"), default=str
        )
    return hashlib.md5(text.encode("utf-8"), usedforsecurity=False).hexdigest()


def _string_keys(value: typ.Any) -> typ.Any:
    # YAML allows non-string keys; JSON cannot sort them alongside strings.
    if isinstance(value, cabc.Mapping):
        return {str(key): _string_keys(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_string_keys(item) for item in value]
    return value


__all__ = ["content_digest"]
