"""
목적:
- 저장소 스냅샷에서 렌더러용 읽기 뷰를 파생한다.

설명:
- 패싯 결과나 전체 건수 중 하나라도 없으면 해당 패싯은 로딩 상태다.
- 값별 비율은 전체 건수 대비 백분율로 numpy를 사용해 계산한다.
- 검색 링크는 주입된 링크 빌더가 값마다 계산한다(없으면 생략).
- 상태를 변경하지 않는 순수 파생 함수만 제공한다.

디자인 패턴:
- 프레젠터(Presenter).

참조:
- src_py/facet_summary/state/store.py
- src_py/facet_summary/contracts/view_models.py
- src_py/facet_summary/view/links.py
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np

from facet_summary.contracts.context_models import QueryContext
from facet_summary.contracts.result_models import FacetValue
from facet_summary.contracts.view_models import FacetSegment, FacetView, SummaryView
from facet_summary.state.store import AggregateSnapshot

LinkBuilder = Callable[[QueryContext, str, FacetValue], "str | None"]


def compute_shares(counts: Sequence[int], total: int, precision: int = 1) -> list[float]:
    """건수 목록을 전체 건수 대비 백분율로 변환한다."""
    if not counts:
        return []
    if total <= 0:
        return [0.0] * len(counts)

    shares = np.asarray(counts, dtype=np.float64) / float(total) * 100.0
    return [float(share) for share in np.round(shares, precision)]


def build_facet_view(
    snapshot: AggregateSnapshot,
    facet: str,
    context: QueryContext | None = None,
    link_builder: LinkBuilder | None = None,
    precision: int = 1,
) -> FacetView:
    """패싯 하나의 읽기 뷰를 만든다."""
    if snapshot.is_loading(facet):
        return FacetView(facet=facet, loading=True)

    result = snapshot.facets[facet]
    total = snapshot.total or 0
    counts = [item.count for item in result.top_values]
    shares = compute_shares(counts, total, precision)

    segments = tuple(
        FacetSegment(
            value=item.value,
            name=item.name,
            count=item.count,
            share=share,
            url=_build_url(link_builder, context, facet, item),
        )
        for item, share in zip(result.top_values, shares)
    )
    return FacetView(
        facet=facet,
        loading=False,
        segments=segments,
        other_count=max(total - sum(counts), 0),
    )


def build_summary_view(
    snapshot: AggregateSnapshot,
    context: QueryContext | None,
    link_builder: LinkBuilder | None = None,
    precision: int = 1,
) -> SummaryView:
    """컨텍스트의 패싯 순서대로 전체 요약 뷰를 만든다."""
    facets = context.facets if context is not None else ()
    return SummaryView(
        round_generation=None if snapshot.round is None else snapshot.round.generation,
        total=snapshot.total,
        facets=tuple(
            build_facet_view(snapshot, facet, context, link_builder, precision)
            for facet in facets
        ),
    )


def _build_url(
    link_builder: LinkBuilder | None,
    context: QueryContext | None,
    facet: str,
    item: FacetValue,
) -> str | None:
    if link_builder is None or context is None:
        return None
    return link_builder(context, facet, item)
