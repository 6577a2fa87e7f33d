"""Run the docnav build stages in order.

:func:`build_site` composes the stages a build needs: load navigation data
from the TOC sources, discover content documents, collect raw YAML text,
resolve one route per document, wrap routes into page requests, and hand them
to the publisher. Each stage is an ordinary function, so callers may also run
them one by one.

>>> from pathlib import Path
>>> from docnav.config import load_pipeline_config
>>> from docnav.pipeline import build_site
>>> config = load_pipeline_config(Path("config/docnav.yaml"))  # doctest: +SKIP
>>> result = build_site(config)  # doctest: +SKIP
>>> [route.path for route in result.routes]  # doctest: +SKIP
['/', '/api']
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .content import collect_raw_text, discover_documents
from .ids import IdFactory, generate_id
from .navigation import load_nav_data
from .publisher import PagePublisher
from .reporter import Reporter
from .routes import build_page_requests, resolve_routes

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import PipelineConfig
    from .content import ContentDocument, RawTextFile
    from .navigation import NavData
    from .routes import PageRequest, PageRoute


@dc.dataclass(frozen=True, slots=True)
class BuildResult:
    """Records produced by one build."""

    nav_data: NavData
    documents: list[ContentDocument]
    raw_text: list[RawTextFile]
    routes: list[PageRoute]
    requests: list[PageRequest]
    written: list[Path]


def build_site(
    config: PipelineConfig,
    *,
    reporter: Reporter | None = None,
    id_factory: IdFactory = generate_id,
    publisher: PagePublisher | None = None,
) -> BuildResult:
    """Build every page described by ``config``.

    Parameters
    ----------
    config : PipelineConfig
        Resolved pipeline configuration.
    reporter : Reporter, optional
        Diagnostics sink shared by every stage.
    id_factory : callable, optional
        Identifier generator for navigation entries without an authored id.
    publisher : PagePublisher, optional
        Page publisher; defaults to one writing into ``config.output_dir``.

    Returns
    -------
    BuildResult
        Navigation data, documents, routes, requests, and written paths.

    Raises
    ------
    MalformedTocError
        If a TOC source cannot be parsed.
    ContentError
        If a document's front matter cannot be parsed.
    NoMatchingContentError
        If no content documents were found.
    """
    reporter = reporter or Reporter()
    publisher = publisher or PagePublisher(config.output_dir)

    nav_data = load_nav_data(
        config.toc_sources, id_factory=id_factory, reporter=reporter
    )
    documents = discover_documents(config, reporter=reporter)
    raw_text = collect_raw_text(config, reporter=reporter)
    routes = resolve_routes(nav_data, documents)
    requests = build_page_requests(routes, config.template)
    written = publisher.publish(requests, documents, nav_data, raw_text=raw_text)
    reporter.success(f"pages created: {len(requests)}")
    return BuildResult(
        nav_data=nav_data,
        documents=documents,
        raw_text=raw_text,
        routes=routes,
        requests=requests,
        written=written,
    )


__all__ = ["BuildResult", "build_site"]
