"""Load table-of-contents YAML files into a single navigation record.

Each configured TOC source is a YAML list of navigation entries. Entries carry
a ``label`` and ``href`` and may declare an ``index`` route override and a
nested ``links`` list. :func:`load_nav_data` reads the sources in order,
assigns an identifier to every entry and link that lacks one, and flattens the
per-file lists into the ``nav_items`` of one frozen :class:`NavData`.

Missing files are reported and skipped; unparseable files abort the build with
:class:`MalformedTocError`.

Examples
--------
>>> from pathlib import Path
>>> from docnav.navigation import load_nav_data
>>> nav = load_nav_data([Path("toc/guide.yaml")])  # doctest: +SKIP
>>> [item.href for item in nav.nav_items]  # doctest: +SKIP
['/guide', '/api']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import types
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .digest import content_digest
from .ids import IdFactory, generate_id
from .reporter import Reporter

NAV_DATA_ID = "NavData"


class MalformedTocError(ValueError):
    """Raised when a TOC file exists but cannot be read as a list of entries."""


@dc.dataclass(frozen=True, slots=True)
class NavLink:
    """A leaf navigation link nested under a :class:`NavEntry`."""

    id: str
    label: str
    remote: str | None = None
    href: str | None = None
    extra: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", _freeze(self.extra))

    def as_payload(self) -> dict[str, typ.Any]:
        """Return the link as a plain mapping, omitting unset fields."""
        payload: dict[str, typ.Any] = _thaw(self.extra)
        payload.update({"id": self.id, "label": self.label})
        if self.remote is not None:
            payload["remote"] = self.remote
        if self.href is not None:
            payload["href"] = self.href
        return payload


@dc.dataclass(frozen=True, slots=True)
class NavEntry:
    """A top-level navigation entry.

    Attributes
    ----------
    id : str
        Identifier unique across the navigation tree.
    label : str
        Text shown in the navigation.
    href : str
        Slug of the document this entry points at.
    index : str or None
        Route path used instead of ``href`` for the matching document.
    links : tuple[NavLink, ...] or None
        Nested links in authored order; ``None`` when the entry has none.
    extra : Mapping
        Authored keys without a dedicated field, copied through as a
        read-only view.
    """

    id: str
    label: str
    href: str
    index: str | None = None
    links: tuple[NavLink, ...] | None = None
    extra: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", _freeze(self.extra))

    def as_payload(self) -> dict[str, typ.Any]:
        """Return the entry as a plain mapping, omitting unset fields."""
        payload: dict[str, typ.Any] = _thaw(self.extra)
        payload.update({"id": self.id, "label": self.label, "href": self.href})
        if self.index is not None:
            payload["index"] = self.index
        if self.links is not None:
            payload["links"] = [link.as_payload() for link in self.links]
        return payload


@dc.dataclass(frozen=True, slots=True)
class NavData:
    """Flattened navigation for one build."""

    nav_items: tuple[NavEntry, ...]
    content_digest: str
    id: str = NAV_DATA_ID

    def find_by_href(self, href: str) -> NavEntry | None:
        """Return the first top-level entry whose ``href`` equals ``href``."""
        return next((item for item in self.nav_items if item.href == href), None)

    def as_payload(self) -> dict[str, typ.Any]:
        """Return the record as a JSON-serializable mapping."""
        return {
            "id": self.id,
            "navItems": [item.as_payload() for item in self.nav_items],
            "contentDigest": self.content_digest,
        }


def load_nav_data(
    sources: cabc.Iterable[Path],
    *,
    root: Path | None = None,
    id_factory: IdFactory = generate_id,
    reporter: Reporter | None = None,
) -> NavData:
    """Read every TOC source and flatten the entries into one NavData record.

    Parameters
    ----------
    sources : Iterable[Path]
        TOC file paths in the order their entries should appear.
    root : Path, optional
        Directory used to anchor relative source paths. Relative paths are
        used as given when ``None``.
    id_factory : callable, optional
        Zero-argument callable returning a fresh identifier for entries and
        links without an authored ``id``. Defaults to :func:`generate_id`.
    reporter : Reporter, optional
        Diagnostics sink; a default :class:`Reporter` is used when ``None``.

    Returns
    -------
    NavData
        Entries ordered by source, then by position within each file.

    Raises
    ------
    MalformedTocError
        If a TOC file cannot be parsed or does not hold a list of mappings.
    """
    reporter = reporter or Reporter()
    nav_items: list[NavEntry] = []
    for source in sources:
        location = root / source if root is not None else source
        if not location.exists():
            reporter.error(f"Table of Contents file {location} missing.  Skipped.")
            continue
        entries = _read_toc(location)
        nav_items.extend(
            _build_entry(payload, location=location, id_factory=id_factory)
            for payload in entries
        )

    items = tuple(nav_items)
    nav_data = NavData(
        nav_items=items,
        content_digest=content_digest([item.as_payload() for item in items]),
    )
    reporter.success(f"nodes created: {NAV_DATA_ID}")
    return nav_data


def _read_toc(location: Path) -> list[typ.Any]:
    """Parse a TOC file and return its top-level list."""
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with location.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle)
    except (YAMLError, UnicodeDecodeError) as exc:
        msg = f"Table of Contents file {location} could not be parsed: {exc}"
        raise MalformedTocError(msg) from exc
    if loaded is None:
        return []
    if not isinstance(loaded, list):
        msg = f"Table of Contents file {location} must contain a list of entries."
        raise MalformedTocError(msg)
    return loaded


def _scalar(value: object | None) -> str | None:
    """Return ``value`` as a string, keeping ``None``."""
    if value is None:
        return None
    return str(value)


def _build_entry(
    payload: object, *, location: Path, id_factory: IdFactory
) -> NavEntry:
    """Map one authored entry to a NavEntry, generating ids where missing."""
    if not isinstance(payload, dict):
        msg = f"Table of Contents file {location} has a non-mapping entry: {payload!r}"
        raise MalformedTocError(msg)
    fields = dict(payload)
    entry_id = _scalar(fields.pop("id", None)) or id_factory()
    label = _scalar(fields.pop("label", None)) or ""
    href = _scalar(fields.pop("href", None)) or ""
    index = _scalar(fields.pop("index", None))
    links_payload = fields.pop("links", None)
    links = None
    if links_payload is not None:
        links = tuple(
            _build_link(link, location=location, id_factory=id_factory)
            for link in _as_list(links_payload, location=location)
        )
    return NavEntry(
        id=entry_id, label=label, href=href, index=index, links=links, extra=fields
    )


def _build_link(payload: object, *, location: Path, id_factory: IdFactory) -> NavLink:
    """Map one authored link to a NavLink, generating ids where missing."""
    if not isinstance(payload, dict):
        msg = f"Table of Contents file {location} has a non-mapping link: {payload!r}"
        raise MalformedTocError(msg)
    fields = dict(payload)
    link_id = _scalar(fields.pop("id", None)) or id_factory()
    label = _scalar(fields.pop("label", None)) or ""
    remote = _scalar(fields.pop("remote", None))
    href = _scalar(fields.pop("href", None))
    if "links" in fields and fields["links"] is not None:
        fields["links"] = [
            _build_link(child, location=location, id_factory=id_factory).as_payload()
            for child in _as_list(fields["links"], location=location)
        ]
    return NavLink(id=link_id, label=label, remote=remote, href=href, extra=fields)


def _as_list(value: object, *, location: Path) -> list[typ.Any]:
    """Return ``value`` when it is a list of links, else raise."""
    if not isinstance(value, list):
        msg = f"Table of Contents file {location} has a non-list 'links' value."
        raise MalformedTocError(msg)
    return value


def _freeze(value: typ.Any) -> typ.Any:
    """Return a read-only copy of ``value`` with mappings as proxies."""
    if isinstance(value, cabc.Mapping):
        frozen = {key: _freeze(item) for key, item in value.items()}
        return types.MappingProxyType(frozen)
    if isinstance(value, list | tuple):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: typ.Any) -> typ.Any:
    """Return a mutable, JSON-ready copy of a value built by :func:`_freeze`."""
    if isinstance(value, cabc.Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


__all__ = [
    "NAV_DATA_ID",
    "MalformedTocError",
    "NavData",
    "NavEntry",
    "NavLink",
    "load_nav_data",
]
