"""Short URL-safe identifiers for navigation entries."""

from __future__ import annotations

import typing as typ

import nanoid

DEFAULT_SIZE = 21

IdFactory = typ.Callable[[], str]


def generate_id(size: int = DEFAULT_SIZE) -> str:
    """Return a random nanoid of ``size`` URL-safe symbols."""
    if size <= 0:
        msg = f"Identifier size must be positive, got {size}."
        raise ValueError(msg)
    return nanoid.generate(size=size)


__all__ = ["DEFAULT_SIZE", "IdFactory", "generate_id"]
