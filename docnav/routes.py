"""Resolve output routes for content documents from navigation data.

A document is published at its slug unless a top-level navigation entry
points at that slug and declares an ``index``; the index then becomes the
route. Only top-level entries take part in matching, and the first matching
entry wins.

Examples
--------
>>> from docnav.navigation import NavData, NavEntry
>>> from docnav.routes import resolve_path
>>> nav = NavData(
...     nav_items=(NavEntry(id="a", label="Guide", href="/guide", index="/"),),
...     content_digest="",
... )
>>> resolve_path(nav, "/guide")
'/'
>>> resolve_path(nav, "/unlisted")
'/unlisted'
"""

from __future__ import annotations

import dataclasses as dc
import types
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .navigation import NavData


class NoMatchingContentError(RuntimeError):
    """Raised when page creation receives no content documents."""


class RoutableDocument(typ.Protocol):
    """The document fields route resolution reads."""

    @property
    def id(self) -> str: ...

    @property
    def slug(self) -> str: ...


@dc.dataclass(frozen=True, slots=True)
class PageRoute:
    """Output path resolved for a single document."""

    path: str
    document_id: str


@dc.dataclass(frozen=True, slots=True)
class PageRequest:
    """A request for the publisher to render one page."""

    path: str
    component: Path
    context: cabc.Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "context", types.MappingProxyType(dict(self.context)))

    def as_payload(self) -> dict[str, typ.Any]:
        """Return the request as a JSON-serializable mapping."""
        return {
            "path": self.path,
            "component": str(self.component),
            "context": dict(self.context),
        }


def resolve_path(nav_data: NavData, slug: str) -> str:
    """Return the route path for ``slug``.

    The matched entry's ``index`` is used when set; an unmatched slug, or a
    match without an ``index``, keeps the slug itself.
    """
    entry = nav_data.find_by_href(slug)
    if entry is not None and entry.index:
        return entry.index
    return slug


def resolve_routes(
    nav_data: NavData, documents: cabc.Sequence[RoutableDocument]
) -> list[PageRoute]:
    """Resolve one route per document, in document order.

    Raises
    ------
    NoMatchingContentError
        If ``documents`` is empty, which means the content source is broken.
    """
    if not documents:
        msg = (
            "No content documents found while creating pages; "
            "check the content source."
        )
        raise NoMatchingContentError(msg)
    return [
        PageRoute(path=resolve_path(nav_data, document.slug), document_id=document.id)
        for document in documents
    ]


def build_page_requests(
    routes: cabc.Iterable[PageRoute], component: Path
) -> list[PageRequest]:
    """Wrap routes into page requests rendered with ``component``."""
    return [
        PageRequest(
            path=route.path, component=component, context={"id": route.document_id}
        )
        for route in routes
    ]


__all__ = [
    "NoMatchingContentError",
    "PageRequest",
    "PageRoute",
    "RoutableDocument",
    "build_page_requests",
    "resolve_path",
    "resolve_routes",
]
