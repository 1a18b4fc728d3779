"""
목적:
- 도착하는 조회 결과를 병합하는 부분 결과 저장소를 제공한다.

설명:
- 현재 라운드 토큰, 패싯별 결과, 전체 건수를 하나의 잠금으로 보호한다.
- 모든 쓰기는 토큰이 현재 라운드와 일치할 때만 반영되는 지점 쓰기(point write)다.
- 읽기는 잠금 안에서 만든 불변 스냅샷을 반환하므로 병합 도중 상태가 보이지 않는다.
- 스냅샷마다 잠금 안에서 증가하는 순번을 붙인다.
- 구독자 호출은 저장소 잠금 밖에서 수행하되, 구독자별 재진입 잠금으로 순서를 보장한다.
  이미 더 새로운 순번을 받았거나 라운드가 바뀐 스냅샷은 전달하지 않는다.

디자인 패턴:
- 단일 작성자 버전 상태(Single-Writer Versioned State) + 옵저버(Observer).

참조:
- src_py/facet_summary/orchestration/coordinator.py
- src_py/facet_summary/view/read_view.py
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from facet_summary.contracts.result_models import FacetResult
from facet_summary.exceptions import SummaryClosedError

logger = logging.getLogger(__name__)

SnapshotListener = Callable[["AggregateSnapshot"], None]
ErrorReporter = Callable[[BaseException], None]


@dataclass(frozen=True, slots=True)
class RoundToken:
    """조회 라운드 식별 토큰. 같은 소유자 안에서 재사용되지 않는다."""

    generation: int
    nonce: str


@dataclass(frozen=True, slots=True)
class AggregateSnapshot:
    """저장소의 특정 시점 불변 스냅샷."""

    round: RoundToken | None = None
    facets: Mapping[str, FacetResult] = field(default_factory=lambda: MappingProxyType({}))
    total: int | None = None
    sequence: int = 0

    def is_loading(self, facet: str) -> bool:
        return facet not in self.facets or self.total is None


@dataclass(slots=True, eq=False)
class _Subscription:
    listener: SnapshotListener
    lock: threading.RLock = field(default_factory=threading.RLock)
    delivered: int = 0
    active: bool = True


class PartialResultStore:
    """라운드 토큰으로 보호되는 부분 결과 저장소."""

    def __init__(self, on_listener_error: ErrorReporter | None = None) -> None:
        self._lock = threading.Lock()
        self._round: RoundToken | None = None
        self._facets: dict[str, FacetResult] = {}
        self._total: int | None = None
        self._sequence = 0
        self._subscriptions: list[_Subscription] = []
        self._on_listener_error = on_listener_error
        self._closed = False

    @property
    def current_round(self) -> RoundToken | None:
        with self._lock:
            return self._round

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> AggregateSnapshot:
        """현재 상태의 불변 스냅샷을 반환한다."""
        with self._lock:
            return self._snapshot_locked()

    def reset(self, token: RoundToken) -> None:
        """새 라운드 시작: 결과를 비우고 현재 토큰을 교체한다."""
        with self._lock:
            self._ensure_open()
            self._round = token
            self._facets = {}
            self._total = None
            snapshot = self._advance_locked()
        self._notify(snapshot)

    def merge_facet(self, token: RoundToken, facet: str, result: FacetResult) -> bool:
        """현재 라운드 결과면 패싯 항목을 기록하고 True를 반환한다."""
        with self._lock:
            if self._closed or token != self._round:
                logger.debug("stale facet result discarded: facet=%s generation=%s", facet, token.generation)
                return False
            self._facets[facet] = result
            snapshot = self._advance_locked()
        self._notify(snapshot)
        return True

    def merge_total(self, token: RoundToken, total: int) -> bool:
        """현재 라운드 결과면 전체 건수를 기록하고 True를 반환한다."""
        with self._lock:
            if self._closed or token != self._round:
                logger.debug("stale total discarded: generation=%s", token.generation)
                return False
            self._total = total
            snapshot = self._advance_locked()
        self._notify(snapshot)
        return True

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """변경 알림 구독을 등록하고 해제 함수를 반환한다."""
        subscription = _Subscription(listener=listener)
        with self._lock:
            self._ensure_open()
            self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            with self._lock:
                subscription.active = False
                if subscription in self._subscriptions:
                    self._subscriptions.remove(subscription)

        return unsubscribe

    def discard(self) -> None:
        """소유 컨텍스트 종료 시 상태와 구독자를 모두 버린다."""
        with self._lock:
            self._closed = True
            self._round = None
            self._facets = {}
            self._total = None
            for subscription in self._subscriptions:
                subscription.active = False
            self._subscriptions.clear()

    def _advance_locked(self) -> AggregateSnapshot:
        self._sequence += 1
        return self._snapshot_locked()

    def _snapshot_locked(self) -> AggregateSnapshot:
        return AggregateSnapshot(
            round=self._round,
            facets=MappingProxyType(dict(self._facets)),
            total=self._total,
            sequence=self._sequence,
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise SummaryClosedError("이미 종료된 결과 저장소입니다")

    def _notify(self, snapshot: AggregateSnapshot) -> None:
        with self._lock:
            subscriptions = list(self._subscriptions)

        for subscription in subscriptions:
            with subscription.lock:
                if not self._claim(subscription, snapshot):
                    continue
                try:
                    subscription.listener(snapshot)
                except Exception as exc:  # noqa: BLE001
                    if self._on_listener_error is None:
                        logger.exception("snapshot listener failed")
                    else:
                        self._on_listener_error(exc)

    def _claim(self, subscription: _Subscription, snapshot: AggregateSnapshot) -> bool:
        # 구독자 잠금을 쥔 상태에서 호출한다
        with self._lock:
            if not subscription.active or snapshot.round != self._round:
                return False
            if snapshot.sequence <= subscription.delivered:
                return False
            subscription.delivered = snapshot.sequence
            return True
