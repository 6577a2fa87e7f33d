"""Render page requests to static HTML and write build manifests.

:class:`PagePublisher` takes the page requests produced by route resolution
and renders each one with the Jinja template named by its ``component``. The
document body is converted with Python-Markdown. Alongside the pages the
publisher writes ``nav-data.json``, ``pages.json``, and ``raw-text.json`` so
client-side navigation and later tooling can read the build's records.

Typical usage:

>>> from pathlib import Path
>>> from docnav.publisher import PagePublisher
>>> publisher = PagePublisher(Path("public"))  # doctest: +SKIP
>>> written = publisher.publish(requests, documents, nav_data)  # doctest: +SKIP
>>> written[0]  # doctest: +SKIP
PosixPath('public/index.html')

Side effects are limited to creating directories and writing UTF-8 files under
the output directory.
"""

from __future__ import annotations

import datetime as dt
import json
import typing as typ
from pathlib import Path, PurePosixPath

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape
from markdown import markdown

from ._constants import (
    NAV_DATA_FILENAME,
    PAGE_FILENAME,
    PAGES_MANIFEST_FILENAME,
    RAW_TEXT_FILENAME,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .content import ContentDocument, RawTextFile
    from .navigation import NavData
    from .routes import PageRequest


DEFAULT_MARKDOWN_EXTENSIONS = ("fenced_code", "tables", "sane_lists")


class PublishError(RuntimeError):
    """Raised when a page request cannot be rendered."""


class PagePublisher:
    """Write one HTML page per request plus JSON manifests."""

    def __init__(
        self,
        output_dir: Path,
        *,
        markdown_extensions: cabc.Sequence[str] = DEFAULT_MARKDOWN_EXTENSIONS,
    ) -> None:
        """Initialize the publisher.

        Parameters
        ----------
        output_dir : Path
            Directory receiving rendered pages and manifests.
        markdown_extensions : Sequence[str], optional
            Python-Markdown extensions used to render document bodies.
        """
        self.output_dir = output_dir
        self._markdown_extensions = list(markdown_extensions)
        self._templates: dict[Path, Template] = {}

    def publish(
        self,
        requests: cabc.Sequence[PageRequest],
        documents: cabc.Sequence[ContentDocument],
        nav_data: NavData,
        *,
        raw_text: cabc.Sequence[RawTextFile] = (),
    ) -> list[Path]:
        """Render every request and write the manifests.

        Returns
        -------
        list[Path]
            Rendered page paths in request order, followed by the manifests.

        Raises
        ------
        PublishError
            If a request refers to a document that was not supplied, or its
            path escapes the output directory.
        """
        by_id = {document.id: document for document in documents}
        generated_at = dt.datetime.now(dt.UTC)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        written: list[Path] = []
        for request in requests:
            document_id = request.context.get("id")
            document = by_id.get(document_id) if document_id else None
            if document is None:
                msg = (
                    f"Page '{request.path}' refers to unknown document "
                    f"'{document_id}'."
                )
                raise PublishError(msg)
            output_path = self._page_path(request.path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            html = self._template(request.component).render(
                page=request,
                document=document,
                nav_items=nav_data.nav_items,
                body_html=self._render_body(document.body),
                generated_at=generated_at,
            )
            if not html.endswith("\n"):
                html += "\n"
            output_path.write_text(html, encoding="utf-8")
            written.append(output_path)

        written.append(self._write_json(NAV_DATA_FILENAME, nav_data.as_payload()))
        written.append(
            self._write_json(
                PAGES_MANIFEST_FILENAME, [request.as_payload() for request in requests]
            )
        )
        written.append(
            self._write_json(
                RAW_TEXT_FILENAME,
                [
                    {
                        "id": record.id,
                        "name": record.name,
                        "raw": record.raw,
                        "contentDigest": record.content_digest,
                    }
                    for record in raw_text
                ],
            )
        )
        return written

    def _page_path(self, route_path: str) -> Path:
        """Return the HTML file for ``route_path`` inside the output directory."""
        relative = PurePosixPath(route_path.strip("/"))
        if ".." in relative.parts:
            msg = f"Route '{route_path}' escapes the output directory."
            raise PublishError(msg)
        if str(relative) in ("", "."):
            return self.output_dir / PAGE_FILENAME
        return self.output_dir.joinpath(*relative.parts) / PAGE_FILENAME

    def _template(self, component: Path) -> Template:
        if component not in self._templates:
            env = Environment(
                loader=FileSystemLoader(str(component.parent)),
                autoescape=select_autoescape(["html", "xml", "jinja"]),
                trim_blocks=True,
                lstrip_blocks=True,
            )
            self._templates[component] = env.get_template(component.name)
        return self._templates[component]

    def _render_body(self, text: str) -> str:
        if not text.strip():
            return ""
        return markdown(
            text, extensions=self._markdown_extensions, output_format="html5"
        )

    def _write_json(self, filename: str, payload: object) -> Path:
        path = self.output_dir / filename
        path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")
        return path


__all__ = ["PagePublisher", "PublishError"]
