"""Utility helpers shared by the docnav configuration loader."""

from __future__ import annotations

from pathlib import Path

from .models import RemoteSource, SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_path(value: object, root: Path) -> Path:
    """Return ``value`` as a path, anchored at ``root`` when relative."""
    path = Path(str(value))
    if path.is_absolute():
        return path
    return root / path


def _normalize_extensions(value: object | None) -> tuple[str, ...] | None:
    """Normalize extension lists into lower-case names without leading dots."""
    match value:
        case None:
            return None
        case str() as text:
            items: list[object] = text.split()
        case list() | tuple():
            items = list(value)
        case _:
            msg = "'extensions' must be a list of file extensions."
            raise SiteConfigError(msg)
    normalized: list[str] = []
    for item in items:
        text = str(item).strip().lstrip(".").lower()
        if text and text not in normalized:
            normalized.append(text)
    return tuple(normalized)


def _build_remotes(
    payload: object | None, root: Path
) -> tuple[RemoteSource, ...]:
    """Build RemoteSource entries from the ``remotes`` list."""
    if not payload:
        return ()
    if not isinstance(payload, list):
        msg = "'remotes' must be a list of mappings."
        raise SiteConfigError(msg)
    remotes: list[RemoteSource] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            msg = f"Remote #{index} must be a mapping."
            raise SiteConfigError(msg)
        name = _optional_str(item.get("name"))
        path = _optional_str(item.get("path"))
        web_link = _optional_str(item.get("web_link"))
        if not (name and path and web_link):
            msg = f"Remote #{index} requires 'name', 'path', and 'web_link'."
            raise SiteConfigError(msg)
        remotes.append(
            RemoteSource(
                name=name,
                path=_resolve_path(path, root),
                web_link=web_link.rstrip("/"),
            )
        )
    return tuple(remotes)


def _build_toc_sources(
    payload: object | None, root: Path
) -> tuple[Path, ...]:
    """Resolve the configured TOC source list against ``root``."""
    if payload is None:
        return ()
    if not isinstance(payload, list):
        msg = "'toc_sources' must be a list of paths."
        raise SiteConfigError(msg)
    return tuple(_resolve_path(item, root) for item in payload if item is not None)


__all__ = [
    "_build_remotes",
    "_build_toc_sources",
    "_normalize_extensions",
    "_optional_str",
    "_resolve_path",
]
