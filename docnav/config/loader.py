"""Load pipeline configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_remotes,
    _build_toc_sources,
    _normalize_extensions,
    _optional_str,
    _resolve_path,
)
from .models import DEFAULT_TEMPLATE, PipelineConfig, SiteConfigError


def load_pipeline_config(path: Path) -> PipelineConfig:
    """Load the YAML configuration describing TOC sources and content layout.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/docnav.yaml``). The file holds either a bare list of TOC
        paths or a mapping of pipeline settings.

    Returns
    -------
    PipelineConfig
        Parsed configuration with every path resolved against the configured
        root directory. The root defaults to the directory containing the
        configuration file.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the top-level structure or one of its sections is invalid.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docnav.config import load_pipeline_config
    >>> config = load_pipeline_config(Path("config/docnav.yaml"))  # doctest: +SKIP
    >>> [source.name for source in config.toc_sources]  # doctest: +SKIP
    ['guide.yaml', 'reference.yaml']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle)

    config_dir = path.parent
    match loaded:
        case None:
            return PipelineConfig(root=config_dir)
        case list():
            return PipelineConfig(
                root=config_dir,
                toc_sources=_build_toc_sources(loaded, config_dir),
            )
        case dict():
            return _build_pipeline_config(dict(loaded), config_dir)
        case _:
            msg = "Top-level YAML structure must be a list of TOC paths or a mapping."
            raise SiteConfigError(msg)


def _build_pipeline_config(
    raw: dict[str, typ.Any], config_dir: Path
) -> PipelineConfig:
    """Build a PipelineConfig from a mapping payload using defaults."""
    root_value = _optional_str(raw.get("root"))
    root = _resolve_path(root_value, config_dir) if root_value else config_dir
    base = PipelineConfig(root=root)

    content_dir = _optional_str(raw.get("content_dir"))
    output_dir = _optional_str(raw.get("output_dir"))
    template = _optional_str(raw.get("template"))
    extensions = _normalize_extensions(raw.get("extensions"))
    if extensions == ():
        msg = "'extensions' must name at least one file extension."
        raise SiteConfigError(msg)
    src_link_default = _optional_str(raw.get("src_link_default"))

    return PipelineConfig(
        root=root,
        toc_sources=_build_toc_sources(raw.get("toc_sources"), root),
        content_dir=_resolve_path(content_dir or base.content_dir, root),
        extensions=extensions or base.extensions,
        output_dir=_resolve_path(output_dir or base.output_dir, root),
        template=_resolve_path(template, root) if template else DEFAULT_TEMPLATE,
        src_link_default=src_link_default.rstrip("/") if src_link_default else None,
        branch=_optional_str(raw.get("branch")) or base.branch,
        remotes=_build_remotes(raw.get("remotes"), root),
    )


__all__ = ["load_pipeline_config"]
