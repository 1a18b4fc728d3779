"""
목적:
- 패싯 분포 조회 라운드의 수명주기를 조정한다.

설명:
- 라운드마다 고유 토큰을 발급하고, 저장소를 동기적으로 초기화한 뒤
  패싯 N개 + 전체 건수 1개 조회를 동시에 띄운다(fire-and-forget).
- 각 조회는 자기 토큰을 들고 완료되며, 저장소가 현재 토큰과 비교해
  오래된 결과를 버린다. 전송 계층 취소는 하지 않는 논리적 취소다.
- 조회 실패는 장애 싱크에 보고하고 재시도하지 않는다.
- `max_in_flight`가 설정되면 세마포어로 동시 조회 수를 제한한다.

디자인 패턴:
- 조정자(Coordinator).

참조:
- src_py/facet_summary/state/store.py
- src_py/facet_summary/runtime/bridge.py
- src_py/facet_summary/faults/sinks.py
"""

from __future__ import annotations

import asyncio
import contextlib
import itertools
import logging
from collections.abc import Callable, Coroutine
from typing import Any
from uuid import uuid4

from facet_summary.comparison.comparator import QueryContextComparator
from facet_summary.config.models import FetchRoundConfig
from facet_summary.contracts.context_models import QueryContext
from facet_summary.exceptions import SummaryClosedError, TransportFailureError
from facet_summary.faults.sinks import FaultSink
from facet_summary.runtime.bridge import TransportBridge
from facet_summary.state.store import PartialResultStore, RoundToken

logger = logging.getLogger(__name__)

TOTAL_FETCH_NAME = "total"


class FetchCoordinator:
    """조회 라운드 조정 클래스."""

    def __init__(
        self,
        store: PartialResultStore,
        bridge: TransportBridge,
        fault_sink: FaultSink,
        config: FetchRoundConfig | None = None,
        derive_payload: Callable[[QueryContext], dict[str, Any]] | None = None,
    ) -> None:
        self._config = config or FetchRoundConfig()
        self._store = store
        self._bridge = bridge
        self._fault_sink = fault_sink
        self._derive_payload = derive_payload or QueryContextComparator(
            self._config.fetch_param_keys
        ).derive_payload
        self._generations = itertools.count(1)
        self._tasks: set[asyncio.Task[None]] = set()
        self._slots = (
            None
            if self._config.max_in_flight is None
            else asyncio.Semaphore(self._config.max_in_flight)
        )
        self._closed = False

    @property
    def current_round(self) -> RoundToken | None:
        return self._store.current_round

    @property
    def pending(self) -> int:
        """아직 끝나지 않은 조회 태스크 수."""
        return len(self._tasks)

    def start_round(self, context: QueryContext) -> RoundToken:
        """새 라운드를 시작하고 조회를 띄운 뒤 즉시 반환한다."""
        if self._closed:
            raise SummaryClosedError("이미 종료된 조정자입니다")

        loop = asyncio.get_running_loop()
        token = RoundToken(generation=next(self._generations), nonce=uuid4().hex)

        # 조회를 띄우기 전에 초기화해야 이전 라운드의 늦은 결과가 새 토큰과 비교된다
        self._store.reset(token)
        payload = self._derive_payload(context)

        for facet in context.facets:
            self._spawn(
                loop,
                self._resolve_facet(token, facet, dict(payload)),
                name=f"facet-summary:{token.generation}:{facet}",
            )
        self._spawn(
            loop,
            self._resolve_total(token, dict(payload)),
            name=f"facet-summary:{token.generation}:{TOTAL_FETCH_NAME}",
        )

        logger.debug(
            "fetch round started: generation=%s facets=%s",
            token.generation,
            len(context.facets),
        )
        return token

    async def wait_idle(self) -> None:
        """현재까지 띄운 모든 조회 태스크가 끝날 때까지 기다린다."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """남은 조회를 취소하고 저장소를 버린다."""
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._store.discard()

    async def _resolve_facet(self, token: RoundToken, facet: str, payload: dict[str, Any]) -> None:
        async with self._slot():
            if not self._is_current(token):
                return
            try:
                result = await self._bridge.fetch_facet(facet, payload)
            except TransportFailureError as exc:
                self._report(exc, token, facet)
                return

        self._store.merge_facet(token, facet, result)

    async def _resolve_total(self, token: RoundToken, payload: dict[str, Any]) -> None:
        async with self._slot():
            if not self._is_current(token):
                return
            try:
                total = await self._bridge.fetch_total(payload)
            except TransportFailureError as exc:
                self._report(exc, token, TOTAL_FETCH_NAME)
                return

        self._store.merge_total(token, total)

    def _slot(self) -> contextlib.AbstractAsyncContextManager[Any]:
        if self._slots is None:
            return contextlib.nullcontext()
        return self._slots

    def _is_current(self, token: RoundToken) -> bool:
        return self._store.current_round == token

    def _report(self, error: BaseException, token: RoundToken, target: str) -> None:
        self._fault_sink.report(
            error,
            context={
                "round": token.generation,
                "target": target,
                "identity": self._bridge.identity,
            },
        )

    def _spawn(
        self,
        loop: asyncio.AbstractEventLoop,
        coro: Coroutine[Any, Any, None],
        name: str,
    ) -> None:
        task = loop.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._fault_sink.report(exc, context={"task": task.get_name()})
