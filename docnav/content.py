"""Discover content documents and attach slug and source-link metadata.

Documents come from the local content directory and from every configured
remote checkout. Each one receives:

* a ``slug`` derived from its path: ``/<remote>`` for remote sources, then the
  directory path, then the file stem (dropped for ``index`` files), then the
  file extension for non-index files (``/guide/intro.mdx``, ``/guide``);
* a ``src_link`` pointing at the file in the browsable repository;
* front matter (``title`` and ``description``) parsed from a leading ``---``
  YAML block.

YAML files found in the same sources are exposed verbatim as
:class:`RawTextFile` records so templates can embed their text.

Examples
--------
>>> from docnav.content import build_slug
>>> build_slug("guide/intro.mdx")
'/guide/intro.mdx'
>>> build_slug("guide/index.mdx", remote_name="engine")
'/engine/guide'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
import uuid
from pathlib import Path, PurePosixPath

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .digest import content_digest
from .reporter import Reporter

if typ.TYPE_CHECKING:
    from .config import PipelineConfig, RemoteSource

FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)
RAW_TEXT_SUFFIXES = frozenset({".yaml", ".yml"})
LOCAL_SOURCE_KEY = "content"


class ContentError(ValueError):
    """Raised when a content document's front matter cannot be parsed."""


@dc.dataclass(frozen=True, slots=True)
class Frontmatter:
    """Front matter fields templates rely on."""

    title: str | None = None
    description: str | None = None


@dc.dataclass(frozen=True, slots=True)
class ContentDocument:
    """A content file with the metadata page creation needs."""

    id: str
    slug: str
    src_link: str | None
    relative_path: str
    source_path: Path
    extension: str
    remote: str | None = None
    frontmatter: Frontmatter = dc.field(default_factory=Frontmatter)
    body: str = ""


@dc.dataclass(frozen=True, slots=True)
class RawTextFile:
    """Verbatim text of a YAML file from a content source."""

    id: str
    name: str
    raw: str
    content_digest: str


@dc.dataclass(frozen=True, slots=True)
class _ContentSource:
    key: str
    directory: Path
    remote: RemoteSource | None = None


def build_file_path(relative_path: str) -> str:
    """Return the URL path for a file, collapsing ``index`` files to their folder."""
    path = PurePosixPath(relative_path)
    segments = [part for part in path.parent.parts if part not in ("", ".")]
    if path.stem != "index":
        segments.append(path.stem)
    return "/" + "/".join(segments)


def build_slug(relative_path: str, *, remote_name: str | None = None) -> str:
    """Return the document slug for ``relative_path``.

    Remote documents are namespaced under ``/<remote_name>``; non-index files
    keep their extension so sibling ``intro.md`` and ``intro.mdx`` stay apart.
    """
    path = PurePosixPath(relative_path)
    prefix = f"/{remote_name}" if remote_name else ""
    suffix = path.suffix if path.stem != "index" else ""
    return f"{prefix}{build_file_path(relative_path)}{suffix}"


def build_src_link(
    relative_path: str,
    *,
    branch: str,
    remote: RemoteSource | None = None,
    src_link_default: str | None = None,
    content_prefix: str = LOCAL_SOURCE_KEY,
) -> str | None:
    """Return the browsable repository URL for a document."""
    if remote is not None:
        return f"{remote.web_link}/blob/{branch}/{relative_path}"
    if not src_link_default:
        return None
    return f"{src_link_default}/blob/{branch}/{content_prefix}/{relative_path}"


def parse_frontmatter(
    text: str, *, source: Path | None = None
) -> tuple[Frontmatter, str]:
    """Split ``text`` into front matter and body.

    Raises
    ------
    ContentError
        If the front matter block is not valid YAML.
    """
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return Frontmatter(), text
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(match.group(1))
    except YAMLError as exc:
        msg = f"Front matter in {source or 'document'} could not be parsed: {exc}"
        raise ContentError(msg) from exc
    body = text[match.end() :]
    if not isinstance(loaded, dict):
        return Frontmatter(), body
    title = loaded.get("title")
    description = loaded.get("description")
    return (
        Frontmatter(
            title=str(title) if title is not None else None,
            description=str(description) if description is not None else None,
        ),
        body,
    )


def discover_documents(
    config: PipelineConfig, *, reporter: Reporter | None = None
) -> list[ContentDocument]:
    """Collect content documents from the local directory and remotes.

    Documents are ordered by source (local first, then remotes in config
    order) and by relative path within a source. Missing source directories
    are reported and skipped.
    """
    reporter = reporter or Reporter()
    content_prefix = _content_prefix(config)
    documents: list[ContentDocument] = []
    seen_slugs: set[str] = set()
    for source in _content_sources(config):
        if not source.directory.is_dir():
            reporter.error(f"Content directory {source.directory} missing.  Skipped.")
            continue
        for path in _iter_files(source.directory, config.extensions):
            relative = path.relative_to(source.directory).as_posix()
            frontmatter, body = parse_frontmatter(
                path.read_text(encoding="utf-8"), source=path
            )
            remote_name = source.remote.name if source.remote else None
            slug = build_slug(relative, remote_name=remote_name)
            if slug in seen_slugs:
                reporter.warning(f"duplicate slug {slug} from {path}")
            seen_slugs.add(slug)
            documents.append(
                ContentDocument(
                    id=_node_id(source.key, relative),
                    slug=slug,
                    src_link=build_src_link(
                        relative,
                        branch=config.branch,
                        remote=source.remote,
                        src_link_default=config.src_link_default,
                        content_prefix=content_prefix,
                    ),
                    relative_path=relative,
                    source_path=path,
                    extension=path.suffix.lstrip("."),
                    remote=remote_name,
                    frontmatter=frontmatter,
                    body=body,
                )
            )
            reporter.info(f"node created: {slug}")
    return documents


def collect_raw_text(
    config: PipelineConfig, *, reporter: Reporter | None = None
) -> list[RawTextFile]:
    """Return the raw text of every YAML file in the content sources."""
    reporter = reporter or Reporter()
    records: list[RawTextFile] = []
    for source in _content_sources(config):
        if not source.directory.is_dir():
            continue
        for path in _iter_files(source.directory, RAW_TEXT_SUFFIXES):
            relative = path.relative_to(source.directory).as_posix()
            raw = path.read_text(encoding="utf-8")
            records.append(
                RawTextFile(
                    id=_node_id(source.key, f"{relative}raw"),
                    name=relative,
                    raw=raw,
                    content_digest=content_digest(raw),
                )
            )
            reporter.info("raw text node created")
    return records


def _content_sources(config: PipelineConfig) -> list[_ContentSource]:
    sources = [_ContentSource(key=LOCAL_SOURCE_KEY, directory=config.content_dir)]
    sources.extend(
        _ContentSource(key=remote.name, directory=remote.path, remote=remote)
        for remote in config.remotes
    )
    return sources


def _iter_files(directory: Path, suffixes: typ.Collection[str]) -> list[Path]:
    """Return files under ``directory`` whose suffix is listed, sorted by path."""
    wanted = {suffix.lstrip(".").lower() for suffix in suffixes}
    files = [
        path
        for path in directory.rglob("*")
        if path.is_file() and path.suffix.lstrip(".").lower() in wanted
    ]
    return sorted(files, key=lambda path: path.relative_to(directory).as_posix())


def _content_prefix(config: PipelineConfig) -> str:
    """Return the content directory as seen from the repository root."""
    try:
        return config.content_dir.relative_to(config.root).as_posix()
    except ValueError:
        return config.content_dir.name


def _node_id(source_key: str, relative_path: str) -> str:
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"{source_key}:{relative_path}"))


__all__ = [
    "ContentDocument",
    "ContentError",
    "Frontmatter",
    "RawTextFile",
    "build_file_path",
    "build_slug",
    "build_src_link",
    "collect_raw_text",
    "discover_documents",
    "parse_frontmatter",
]
