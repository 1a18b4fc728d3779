"""
목적:
- 읽기 뷰 계층의 공개 심볼을 정의한다.

설명:
- 스냅샷 -> 뷰 변환 함수와 검색 링크 빌더를 노출한다.

디자인 패턴:
- 퍼사드(Facade).

참조:
- src_py/facet_summary/view/read_view.py
- src_py/facet_summary/view/links.py
"""

from .links import SearchLinkBuilder, append_facet_condition, format_facet_condition
from .read_view import LinkBuilder, build_facet_view, build_summary_view, compute_shares

__all__ = [
    "LinkBuilder",
    "SearchLinkBuilder",
    "append_facet_condition",
    "build_facet_view",
    "build_summary_view",
    "compute_shares",
    "format_facet_condition",
]
