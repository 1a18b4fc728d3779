"""
목적:
- 외부 비동기 전송 함수와 집계 코어 간 호출 경계를 제공한다.

설명:
- 주입된 패싯 분포/전체 건수 조회 함수에 조직 식별자와 payload를 전달한다.
- 원시 응답(dict/list/int)을 검증된 계약 모델로 변환한다.
- 전송 예외와 응답 형식 오류를 `TransportFailureError`로 통일한다.

디자인 패턴:
- 어댑터(Adapter).

참조:
- src_py/facet_summary/contracts/result_models.py
- src_py/facet_summary/orchestration/coordinator.py
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import ValidationError

from facet_summary.contracts.result_models import FacetResult, FacetValue
from facet_summary.exceptions import ConfigurationError, TransportFailureError

FetchFacetDistribution = Callable[[str, str, dict[str, Any]], Awaitable[Any]]
FetchTotal = Callable[[str, dict[str, Any]], Awaitable[Any]]


class TransportBridge:
    """외부 조회 함수 래퍼."""

    def __init__(
        self,
        identity: str,
        fetch_facet_distribution: FetchFacetDistribution,
        fetch_total: FetchTotal,
    ) -> None:
        if not identity or not identity.strip():
            raise ConfigurationError("identity는 비어 있을 수 없습니다")
        if not callable(fetch_facet_distribution) or not callable(fetch_total):
            raise ConfigurationError("fetch_facet_distribution/fetch_total은 호출 가능해야 합니다")

        self._identity = identity
        self._fetch_facet_distribution = fetch_facet_distribution
        self._fetch_total = fetch_total

    @property
    def identity(self) -> str:
        return self._identity

    async def fetch_facet(self, facet: str, payload: dict[str, Any]) -> FacetResult:
        """패싯 하나의 분포를 조회한다."""
        try:
            raw = await self._fetch_facet_distribution(self._identity, facet, payload)
        except Exception as exc:  # noqa: BLE001
            raise TransportFailureError(f"패싯 분포 조회 실패: facet={facet}, error={exc}") from exc

        try:
            return _to_facet_result(facet, raw)
        except (ValidationError, TypeError, ValueError) as exc:
            raise TransportFailureError(f"패싯 분포 응답 형식 오류: facet={facet}, error={exc}") from exc

    async def fetch_total(self, payload: dict[str, Any]) -> int:
        """전체 건수를 조회한다."""
        try:
            raw = await self._fetch_total(self._identity, payload)
        except Exception as exc:  # noqa: BLE001
            raise TransportFailureError(f"전체 건수 조회 실패: {exc}") from exc

        return _to_total(raw)


def _to_facet_result(facet: str, raw: Any) -> FacetResult:
    if isinstance(raw, FacetResult):
        return raw

    if isinstance(raw, Mapping):
        items = raw.get("topValues", raw.get("top_values"))
        key = str(raw.get("key") or facet)
    else:
        items = raw
        key = facet

    if not isinstance(items, (list, tuple)):
        raise TypeError("상위 값 목록은 배열이어야 합니다")

    values = [
        item if isinstance(item, FacetValue) else FacetValue.model_validate(item)
        for item in items
    ]
    return FacetResult(key=key, top_values=tuple(values))


def _to_total(raw: Any) -> int:
    value = raw.get("count") if isinstance(raw, Mapping) else raw

    # bool은 int의 하위 타입이므로 별도로 거른다
    if isinstance(value, bool) or not isinstance(value, int):
        raise TransportFailureError(f"전체 건수 응답은 정수여야 합니다: {value!r}")
    if value < 0:
        raise TransportFailureError(f"전체 건수 응답이 음수입니다: {value}")
    return value
