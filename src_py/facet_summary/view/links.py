"""
목적:
- 패싯 값별 검색 링크를 생성한다.

설명:
- 현재 컨텍스트의 `query` 파라미터에 `facet:value` 조건을 덧붙인다.
- 공백/따옴표가 있는 값은 큰따옴표로 감싸고 내부 따옴표를 이스케이프한다.
- 필터가 바뀌므로 커서 같은 페이지 파라미터는 제거한다.

디자인 패턴:
- 빌더(Builder).

참조:
- src_py/facet_summary/view/read_view.py
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import urlencode

from facet_summary.contracts.context_models import QueryContext
from facet_summary.contracts.result_models import FacetValue

_NEEDS_QUOTES = re.compile(r'[\s"]')


def format_facet_condition(facet: str, value: str) -> str:
    """검색 질의용 `facet:value` 조건 문자열을 만든다."""
    if _NEEDS_QUOTES.search(value):
        escaped = value.replace('"', '\\"')
        return f'{facet}:"{escaped}"'
    return f"{facet}:{value}"


def append_facet_condition(query: str | None, facet: str, value: str) -> str:
    """기존 질의 뒤에 패싯 조건을 덧붙인다."""
    condition = format_facet_condition(facet, value)
    base = (query or "").strip()
    return f"{base} {condition}" if base else condition


class SearchLinkBuilder:
    """컨텍스트 기반 검색 URL 빌더."""

    def __init__(self, base_path: str, drop_keys: Sequence[str] = ("cursor",)) -> None:
        self._base_path = base_path
        self._drop_keys = frozenset(drop_keys)

    def __call__(self, context: QueryContext, facet: str, item: FacetValue) -> str:
        params: dict[str, Any] = {
            key: value for key, value in context.params.items() if key not in self._drop_keys
        }
        raw_query = params.get("query")
        params["query"] = append_facet_condition(
            raw_query if isinstance(raw_query, str) else None,
            facet,
            item.value,
        )
        return f"{self._base_path}?{urlencode(_flatten(params), doseq=True)}"


def _flatten(params: Mapping[str, Any]) -> list[tuple[str, Any]]:
    pairs: list[tuple[str, Any]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, item) for item in value)
        else:
            pairs.append((key, value))
    return pairs
