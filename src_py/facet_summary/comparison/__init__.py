"""
목적:
- 컨텍스트 비교 계층의 공개 심볼을 정의한다.

설명:
- 재조회 판정과 조회 파라미터 투영 함수를 외부에 노출한다.

디자인 패턴:
- 퍼사드(Facade).

참조:
- src_py/facet_summary/comparison/comparator.py
"""

from .comparator import (
    QueryContextComparator,
    derive_fetch_payload,
    facets_changed,
    should_refetch,
)

__all__ = [
    "QueryContextComparator",
    "derive_fetch_payload",
    "facets_changed",
    "should_refetch",
]
