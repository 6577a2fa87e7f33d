"""Typed dataclasses describing the docnav pipeline configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

DEFAULT_TEMPLATE = Path(__file__).resolve().parents[1] / "templates" / "page.jinja"


class SiteConfigError(ValueError):
    """Raised when the pipeline configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class RemoteSource:
    """A checked-out external repository that contributes content documents.

    Attributes
    ----------
    name : str
        Namespace prepended to every slug from this source (``/<name>/...``).
    path : Path
        Local directory holding the checkout.
    web_link : str
        Browsable repository URL used to build source links.
    """

    name: str
    path: Path
    web_link: str


@dc.dataclass(frozen=True, slots=True)
class PipelineConfig:
    """A fully resolved pipeline definition sourced from YAML config."""

    root: Path
    toc_sources: tuple[Path, ...] = ()
    content_dir: Path = Path("content")
    extensions: tuple[str, ...] = ("mdx", "md")
    output_dir: Path = Path("public")
    template: Path = DEFAULT_TEMPLATE
    src_link_default: str | None = None
    branch: str = "master"
    remotes: tuple[RemoteSource, ...] = ()


__all__ = ["DEFAULT_TEMPLATE", "PipelineConfig", "RemoteSource", "SiteConfigError"]
