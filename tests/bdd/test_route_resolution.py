"""Behaviour tests for page route resolution.

These pytest-bdd scenarios are backed by ``features/route_resolution.feature``
and exercise the documented routing rules: index substitution, slug fallback,
and the top-level-only search.

Usage:
    pytest tests/bdd/test_route_resolution.py -v
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from docnav.navigation import NavData, NavEntry, NavLink
from docnav.routes import resolve_routes

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "route_resolution.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


class _Doc(typ.NamedTuple):
    id: str
    slug: str


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given(parsers.parse('a TOC entry "{label}" at "{href}" with index "{index}"'))
def given_entry_with_index(
    scenario_state: ScenarioState, label: str, href: str, index: str
) -> None:
    entry = NavEntry(id="entry-1", label=label, href=href, index=index)
    scenario_state["nav"] = NavData(nav_items=(entry,), content_digest="")


@given(parsers.parse('a TOC entry "{label}" at "{href}" without an index'))
def given_entry_without_index(
    scenario_state: ScenarioState, label: str, href: str
) -> None:
    entry = NavEntry(id="entry-1", label=label, href=href)
    scenario_state["nav"] = NavData(nav_items=(entry,), content_digest="")


@given(
    parsers.parse(
        'a TOC entry "{label}" at "{href}" with a nested link "{child}" at "{child_href}"'
    )
)
def given_entry_with_link(
    scenario_state: ScenarioState, label: str, href: str, child: str, child_href: str
) -> None:
    entry = NavEntry(
        id="entry-1",
        label=label,
        href=href,
        links=(NavLink(id="link-1", label=child, href=child_href),),
    )
    scenario_state["nav"] = NavData(nav_items=(entry,), content_digest="")


@when(parsers.parse('the document "{slug}" is routed'))
def when_routed(scenario_state: ScenarioState, slug: str) -> None:
    scenario_state["routes"] = resolve_routes(
        scenario_state["nav"], [_Doc(id="doc-1", slug=slug)]
    )


@then(parsers.parse('the route path is "{path}"'))
def then_route_path(scenario_state: ScenarioState, path: str) -> None:
    (route,) = scenario_state["routes"]
    assert route.path == path, f"expected {path!r}, got {route.path!r}"
    assert route.document_id == "doc-1"
