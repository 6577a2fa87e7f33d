"""Cyclopts CLI entrypoint for building docnav sites.

The ``docnav`` console script defined here runs the full build pipeline
(navigation data, content metadata, route resolution, page publishing) or
prints the flattened navigation data for inspection. Every option can also be
supplied through ``INPUT_``-prefixed environment variables, which keeps CI
workflows terse.

Examples
--------
Build the site described by the default configuration:

>>> from docnav.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory:

>>> from docnav.cli import app
>>> app(["build", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_pipeline_config
from .navigation import load_nav_data
from .pipeline import build_site
from .publisher import PagePublisher
from .reporter import Reporter

DEFAULT_CONFIG = Path("config/docnav.yaml")

app = App(name="docnav", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )


@app.command(help="Build static pages from TOC files and content documents.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to pipeline config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log debug diagnostics", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Run the build pipeline and report the written files.

    Parameters
    ----------
    config : Path, optional
        Path to the ``docnav.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Override for the configured output directory.
    verbose : bool, optional
        Enable debug-level logging.

    Raises
    ------
    MalformedTocError
        If a TOC file cannot be parsed.
    NoMatchingContentError
        If the content sources hold no documents.
    """
    _configure_logging(verbose=verbose)
    pipeline_config = load_pipeline_config(config)
    if output_dir is not None:
        pipeline_config = dc.replace(pipeline_config, output_dir=output_dir)
    result = build_site(
        pipeline_config,
        reporter=Reporter(),
        publisher=PagePublisher(pipeline_config.output_dir),
    )
    for path in result.written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Print the flattened navigation data as JSON.")
def nav(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to pipeline config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Load the configured TOC sources and print NavData to stdout."""
    _configure_logging(verbose=False)
    pipeline_config = load_pipeline_config(config)
    nav_data = load_nav_data(pipeline_config.toc_sources, reporter=Reporter())
    print(json.dumps(nav_data.as_payload(), indent=2, default=str))


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docnav`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
