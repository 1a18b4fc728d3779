from types import MappingProxyType

from facet_summary.contracts import FacetResult, FacetValue, QueryContext
from facet_summary.state import AggregateSnapshot, RoundToken
from facet_summary.view import build_facet_view, build_summary_view, compute_shares

TOKEN = RoundToken(generation=3, nonce="x")
BROWSER = FacetResult(
    key="browser",
    top_values=[FacetValue(value="chrome", count=10), FacetValue(value="firefox", count=5)],
)


def _snapshot(total=None, **facets) -> AggregateSnapshot:
    return AggregateSnapshot(round=TOKEN, facets=MappingProxyType(facets), total=total)


def test_compute_shares_rounds_percentages() -> None:
    assert compute_shares([10, 5], 30) == [33.3, 16.7]
    assert compute_shares([1, 2], 3, precision=0) == [33.0, 67.0]


def test_compute_shares_handles_zero_total_and_empty_counts() -> None:
    assert compute_shares([0, 0], 0) == [0.0, 0.0]
    assert compute_shares([], 10) == []


def test_facet_is_loading_without_total() -> None:
    view = build_facet_view(_snapshot(browser=BROWSER), "browser")

    assert view.loading is True
    assert view.segments == ()


def test_facet_is_loading_without_result() -> None:
    view = build_facet_view(_snapshot(total=20), "os")

    assert view.loading is True


def test_resolved_facet_has_segments_shares_and_other() -> None:
    view = build_facet_view(_snapshot(total=20, browser=BROWSER), "browser")

    assert view.loading is False
    assert [(segment.value, segment.count, segment.share) for segment in view.segments] == [
        ("chrome", 10, 50.0),
        ("firefox", 5, 25.0),
    ]
    assert view.other_count == 5
    assert all(segment.url is None for segment in view.segments)


def test_link_builder_decorates_every_segment() -> None:
    context = QueryContext(facets=["browser"], params={"query": "error"})
    calls = []

    def link_builder(ctx, facet, item):
        calls.append((ctx, facet, item.value))
        return f"/search?{facet}={item.value}"

    view = build_facet_view(_snapshot(total=15, browser=BROWSER), "browser", context, link_builder)

    assert [segment.url for segment in view.segments] == [
        "/search?browser=chrome",
        "/search?browser=firefox",
    ]
    assert calls[0] == (context, "browser", "chrome")


def test_summary_view_follows_context_order_and_exposes_pending_total() -> None:
    context = QueryContext(facets=["os", "browser"])
    view = build_summary_view(_snapshot(browser=BROWSER), context)

    assert view.round_generation == 3
    assert view.total_pending is True
    assert [facet.facet for facet in view.facets] == ["os", "browser"]
    assert all(facet.loading for facet in view.facets)


def test_summary_view_without_context_is_empty() -> None:
    view = build_summary_view(AggregateSnapshot(), None)

    assert view.round_generation is None
    assert view.facets == ()
