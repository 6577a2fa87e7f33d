"""Build-time navigation and page routing for documentation sites.

This package turns YAML table-of-contents files into one navigation record,
attaches slug and source-link metadata to content documents, resolves the
route each document is published under, and renders the pages. The CLI entry
points are used by ``uv run docnav`` in local builds and CI.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docnav import main
>>> main()  # doctest: +SKIP
>>> from docnav import app
>>> app(["build", "--config", "config/docnav.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
