"""
목적:
- 질의 컨텍스트 변경에 반응하는 패싯 요약 집계 클래스를 제공한다.

설명:
- 컨텍스트 비교기, 라운드 조정자, 부분 결과 저장소, 장애 싱크를 조립한다.
- 최초 마운트(prev=None)나 비교기가 변경을 판정하면 새 라운드를 시작한다.
- 렌더러는 `view()`로 폴링하거나 `subscribe()`로 매 변경마다 뷰를 받는다.
- 조회 실패는 호출자에게 전파되지 않고 해당 항목이 로딩 상태로 남는다.

디자인 패턴:
- 서비스 레이어(Service Layer) + 퍼사드(Facade).

참조:
- src_py/facet_summary/comparison/comparator.py
- src_py/facet_summary/orchestration/coordinator.py
- src_py/facet_summary/state/store.py
- src_py/facet_summary/view/read_view.py
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from facet_summary.comparison.comparator import QueryContextComparator
from facet_summary.config.models import FacetSummaryConfig
from facet_summary.contracts.context_models import QueryContext
from facet_summary.contracts.view_models import FacetView, SummaryView
from facet_summary.exceptions import SummaryClosedError
from facet_summary.faults.sinks import FaultSink, LoggingFaultSink, RedisFaultSink
from facet_summary.orchestration.coordinator import FetchCoordinator
from facet_summary.runtime.bridge import FetchFacetDistribution, FetchTotal, TransportBridge
from facet_summary.state.store import AggregateSnapshot, PartialResultStore
from facet_summary.view.read_view import LinkBuilder, build_facet_view, build_summary_view

logger = logging.getLogger(__name__)

ViewListener = Callable[[SummaryView], None]


class FacetSummary:
    """컨텍스트 기반 패싯 분포 집계 클래스."""

    def __init__(
        self,
        identity: str,
        fetch_facet_distribution: FetchFacetDistribution,
        fetch_total: FetchTotal,
        config: FacetSummaryConfig | None = None,
        fault_sink: FaultSink | None = None,
        link_builder: LinkBuilder | None = None,
    ) -> None:
        self._config = config or FacetSummaryConfig()
        self._fault_sink = fault_sink or _default_fault_sink(self._config)
        self._link_builder = link_builder
        self._comparator = QueryContextComparator(self._config.rounds.fetch_param_keys)
        self._store = PartialResultStore(on_listener_error=self._report_listener_error)
        self._coordinator = FetchCoordinator(
            store=self._store,
            bridge=TransportBridge(identity, fetch_facet_distribution, fetch_total),
            fault_sink=self._fault_sink,
            config=self._config.rounds,
            derive_payload=self._comparator.derive_payload,
        )
        self._context: QueryContext | None = None
        self._closed = False

    async def __aenter__(self) -> FacetSummary:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    @property
    def context(self) -> QueryContext | None:
        return self._context

    @property
    def pending(self) -> int:
        return self._coordinator.pending

    def on_context_changed(self, prev: QueryContext | None, next_: QueryContext) -> bool:
        """컨텍스트 변경을 반영하고 새 라운드를 시작했으면 True를 반환한다."""
        self._ensure_open()
        previous = self._context
        self._context = next_

        if prev is not None and not self._comparator.should_refetch(prev, next_):
            logger.debug("context changed without fetch-relevant difference")
            return False

        try:
            self._coordinator.start_round(next_)
        except BaseException:
            # 라운드를 시작하지 못했으면 뷰가 이전 컨텍스트를 유지한다
            self._context = previous
            raise
        return True

    def snapshot(self) -> AggregateSnapshot:
        """저장소 스냅샷을 반환한다."""
        return self._store.snapshot()

    def view(self) -> SummaryView:
        """현재 라운드의 전체 요약 뷰를 반환한다."""
        return self._to_view(self._store.snapshot())

    def facet_view(self, facet: str) -> FacetView:
        """패싯 하나의 읽기 뷰를 반환한다."""
        return build_facet_view(
            self._store.snapshot(),
            facet,
            self._context,
            self._link_builder,
            self._config.rounds.share_precision,
        )

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        """저장소 변경마다 뷰를 전달받을 구독자를 등록한다."""
        self._ensure_open()
        return self._store.subscribe(lambda snapshot: listener(self._to_view(snapshot)))

    async def wait_idle(self) -> None:
        """진행 중인 조회가 모두 끝날 때까지 기다린다."""
        await self._coordinator.wait_idle()

    async def aclose(self) -> None:
        """조회를 정리하고 상태를 버린다."""
        if self._closed:
            return
        self._closed = True
        await self._coordinator.aclose()
        self._context = None

    def _to_view(self, snapshot: AggregateSnapshot) -> SummaryView:
        return build_summary_view(
            snapshot,
            self._context,
            self._link_builder,
            self._config.rounds.share_precision,
        )

    def _report_listener_error(self, error: BaseException) -> None:
        self._fault_sink.report(error, context={"target": "listener"})

    def _ensure_open(self) -> None:
        if self._closed:
            raise SummaryClosedError("이미 종료된 패싯 요약입니다")


def _default_fault_sink(config: FacetSummaryConfig) -> FaultSink:
    if config.fault_sink is None:
        return LoggingFaultSink()
    return RedisFaultSink(config.fault_sink)
