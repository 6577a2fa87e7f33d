"""End-to-end tests for the docnav build pipeline.

This module runs :func:`docnav.pipeline.build_site` against a temporary site
tree (TOC files, a content directory, and a remote checkout) and checks that:

* every content document is published exactly once, at its resolved route;
* the rendered HTML carries the navigation, front matter title, and source
  link for the document;
* ``nav-data.json``, ``pages.json``, and ``raw-text.json`` are written and
  agree with the in-memory build result;
* an empty content source aborts the build.

Fixtures
--------
``site_root`` writes the site tree; ``built`` runs the pipeline with
deterministic ids and returns the :class:`~docnav.pipeline.BuildResult`.

Run ``pytest tests/test_build.py`` to execute only this module.
"""

from __future__ import annotations

import itertools
from pathlib import Path

import msgspec.json as msgspec_json
import pytest
from bs4 import BeautifulSoup

from docnav._constants import NAV_DATA_FILENAME, PAGES_MANIFEST_FILENAME, RAW_TEXT_FILENAME
from docnav.config import load_pipeline_config
from docnav.pipeline import BuildResult, build_site
from docnav.publisher import PagePublisher, PublishError
from docnav.routes import NoMatchingContentError, PageRequest


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text.strip() + "\n", encoding="utf-8")


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Write a small documentation site and return its root."""
    _write(
        tmp_path / "config" / "docnav.yaml",
        """
root: ..
toc_sources:
  - toc/guide.yaml
  - toc/missing.yaml
  - toc/api.yaml
src_link_default: https://github.com/example/site
remotes:
  - name: engine
    path: vendor/engine
    web_link: https://github.com/example/engine
""",
    )
    _write(
        tmp_path / "toc" / "guide.yaml",
        """
- label: Guide
  href: /guide
  index: /
  links:
    - label: Intro
      href: /guide/intro.mdx
""",
    )
    _write(
        tmp_path / "toc" / "api.yaml",
        """
- id: api
  label: API
  href: /api.mdx
""",
    )
    _write(
        tmp_path / "content" / "guide" / "index.mdx",
        """
---
title: Welcome
description: Start here
---
# Guide

Read the [intro](/guide/intro.mdx).
""",
    )
    _write(tmp_path / "content" / "guide" / "intro.mdx", "Intro body.")
    _write(tmp_path / "content" / "api.mdx", "API body.")
    _write(tmp_path / "content" / "toc.yaml", "- label: Embedded\n  href: /embedded")
    _write(tmp_path / "vendor" / "engine" / "setup.md", "Engine setup.")
    return tmp_path


@pytest.fixture
def built(site_root: Path) -> BuildResult:
    """Run the pipeline with deterministic navigation ids."""
    config = load_pipeline_config(site_root / "config" / "docnav.yaml")
    counter = itertools.count(1)
    return build_site(config, id_factory=lambda: f"nav-{next(counter)}")


def test_every_document_gets_one_route(built: BuildResult) -> None:
    paths = {route.path for route in built.routes}
    assert [route.document_id for route in built.routes] == [
        document.id for document in built.documents
    ]
    assert paths == {"/api.mdx", "/", "/guide/intro.mdx", "/engine/setup.md"}, (
        f"unexpected routes {sorted(paths)!r}"
    )


def test_pages_written_at_resolved_routes(site_root: Path, built: BuildResult) -> None:
    public = site_root / "public"
    for relative in (
        "index.html",
        "api.mdx/index.html",
        "guide/intro.mdx/index.html",
        "engine/setup.md/index.html",
    ):
        assert (public / relative).exists(), f"expected {relative} to be written"
    assert not (public / "guide" / "index.html").exists(), (
        "the guide index should be published at / rather than /guide"
    )


def test_rendered_page_contents(site_root: Path, built: BuildResult) -> None:
    html = (site_root / "public" / "index.html").read_text(encoding="utf-8")
    soup = BeautifulSoup(html, "html.parser")

    assert soup.title is not None
    assert soup.title.string == "Welcome"
    nav_labels = [a.get_text() for a in soup.select(".site-nav > ul > li > a")]
    assert nav_labels == ["Guide", "API"]
    current = soup.select_one("a[aria-current='page']")
    assert current is not None
    assert current.get_text() == "Guide"
    assert soup.select_one("#nav-nav-2 a") is not None, "nested link should render"
    heading = soup.select_one("article.doc-body h1")
    assert heading is not None
    assert heading.get_text() == "Guide"
    src_link = soup.select_one("a.src-link")
    assert src_link is not None
    assert src_link.get("href") == (
        "https://github.com/example/site/blob/master/content/guide/index.mdx"
    )


def test_manifests_match_build(site_root: Path, built: BuildResult) -> None:
    public = site_root / "public"
    nav_payload = msgspec_json.decode((public / NAV_DATA_FILENAME).read_bytes())
    pages_payload = msgspec_json.decode((public / PAGES_MANIFEST_FILENAME).read_bytes())
    raw_payload = msgspec_json.decode((public / RAW_TEXT_FILENAME).read_bytes())

    assert nav_payload == built.nav_data.as_payload()
    assert [item["id"] for item in nav_payload["navItems"]] == ["nav-1", "api"]
    assert [page["path"] for page in pages_payload] == [
        route.path for route in built.routes
    ]
    assert {page["context"]["id"] for page in pages_payload} == {
        document.id for document in built.documents
    }
    assert [record["name"] for record in raw_payload] == ["toc.yaml"]


def test_empty_content_aborts(site_root: Path) -> None:
    for path in sorted(site_root.rglob("*.md*"), reverse=True):
        path.unlink()
    config = load_pipeline_config(site_root / "config" / "docnav.yaml")
    with pytest.raises(NoMatchingContentError):
        build_site(config)
    assert not (site_root / "public").exists(), "nothing should be published"


def test_publisher_rejects_unknown_document(tmp_path: Path, built: BuildResult) -> None:
    publisher = PagePublisher(tmp_path / "out")
    request = PageRequest(
        path="/ghost", component=built.requests[0].component, context={"id": "nope"}
    )
    with pytest.raises(PublishError, match="unknown document"):
        publisher.publish([request], built.documents, built.nav_data)


def test_publisher_rejects_escaping_routes(tmp_path: Path, built: BuildResult) -> None:
    publisher = PagePublisher(tmp_path / "out")
    request = PageRequest(
        path="/../escape",
        component=built.requests[0].component,
        context={"id": built.documents[0].id},
    )
    with pytest.raises(PublishError, match="escapes"):
        publisher.publish([request], built.documents, built.nav_data)
