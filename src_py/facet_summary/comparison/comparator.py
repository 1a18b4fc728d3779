"""
목적:
- 이전/다음 질의 컨텍스트를 비교해 재조회 필요 여부를 판정한다.

설명:
- 패싯 집합이 다르면 다른 파라미터와 무관하게 즉시 재조회한다.
- 그 외에는 조회에 영향을 주는 파라미터 부분집합(투영)만 깊게 비교한다.
  정렬/커서 같은 표시 전용 값은 재조회를 일으키지 않는다.
- 비교 함수는 어떤 입력에도 예외를 던지지 않는다.

디자인 패턴:
- 순수 함수(Pure Function) + 전략 객체(Strategy).

참조:
- src_py/facet_summary/contracts/context_models.py
- src_py/facet_summary/orchestration/coordinator.py
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from facet_summary.config.models import DEFAULT_FETCH_PARAM_KEYS
from facet_summary.contracts.context_models import QueryContext


def derive_fetch_payload(
    context: QueryContext,
    keys: Sequence[str] = DEFAULT_FETCH_PARAM_KEYS,
) -> dict[str, Any]:
    """컨텍스트에서 조회 관련 파라미터만 골라낸다. 없는 키는 생략한다."""
    return {key: context.params[key] for key in keys if key in context.params}


def facets_changed(prev: QueryContext, next_: QueryContext) -> bool:
    """패싯 집합이 달라졌는지 여부를 반환한다."""
    return prev.facet_set != next_.facet_set


def should_refetch(
    prev: QueryContext,
    next_: QueryContext,
    keys: Sequence[str] = DEFAULT_FETCH_PARAM_KEYS,
) -> bool:
    """재조회가 필요하면 True를 반환한다."""
    if facets_changed(prev, next_):
        return True

    return not _deep_equal(
        derive_fetch_payload(prev, keys),
        derive_fetch_payload(next_, keys),
    )


class QueryContextComparator:
    """투영 키를 고정한 비교기."""

    def __init__(self, keys: Sequence[str] = DEFAULT_FETCH_PARAM_KEYS) -> None:
        self._keys = tuple(keys)

    @property
    def keys(self) -> tuple[str, ...]:
        return self._keys

    def derive_payload(self, context: QueryContext) -> dict[str, Any]:
        return derive_fetch_payload(context, self._keys)

    def should_refetch(self, prev: QueryContext, next_: QueryContext) -> bool:
        return should_refetch(prev, next_, self._keys)


def _deep_equal(left: Any, right: Any) -> bool:
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if left.keys() != right.keys():
            return False
        return all(_deep_equal(left[key], right[key]) for key in left)

    if _is_sequence(left) and _is_sequence(right):
        if type(left) is not type(right) or len(left) != len(right):
            return False
        return all(_deep_equal(a, b) for a, b in zip(left, right))

    if isinstance(left, float) and isinstance(right, float) and math.isnan(left) and math.isnan(right):
        return True

    try:
        return bool(left == right)
    except (TypeError, ValueError):
        # 진리값이 모호한 비교(예: 배열)는 변경된 것으로 본다
        return False


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
