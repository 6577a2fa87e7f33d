"""Load and validate pipeline configuration YAML for docnav builds.

This subpackage parses the project's ``docnav.yaml`` file, resolves TOC
source paths, content directories, and remote checkouts against the
configured root, and produces a frozen :class:`PipelineConfig` that the
navigation, content, and publishing stages consume. The primary entry point is
:func:`load_pipeline_config`, which accepts either the legacy bare list of TOC
paths or a full mapping of settings.

Examples
--------
>>> from pathlib import Path
>>> from docnav.config import load_pipeline_config
>>> config = load_pipeline_config(Path("config/docnav.yaml"))  # doctest: +SKIP
>>> config.branch  # doctest: +SKIP
'master'
"""

from .loader import load_pipeline_config
from .models import DEFAULT_TEMPLATE, PipelineConfig, RemoteSource, SiteConfigError

__all__ = [
    "DEFAULT_TEMPLATE",
    "PipelineConfig",
    "RemoteSource",
    "SiteConfigError",
    "load_pipeline_config",
]
