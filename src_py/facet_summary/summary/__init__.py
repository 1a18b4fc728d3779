"""
목적:
- 패싯 요약 서비스 계층의 공개 진입점을 제공한다.

설명:
- 라이브러리 핵심 클래스 `FacetSummary`를 노출한다.

디자인 패턴:
- 파사드(Facade).

참조:
- src_py/facet_summary/summary/engine.py
"""

from .engine import FacetSummary

__all__ = ["FacetSummary"]
