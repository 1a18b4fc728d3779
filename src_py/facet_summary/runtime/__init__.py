"""
목적:
- 전송 브릿지 계층의 공개 진입점을 제공한다.

설명:
- 코어는 외부 조회 함수를 직접 호출하지 않고 본 래퍼를 통해 호출한다.

디자인 패턴:
- 파사드(Facade).

참조:
- src_py/facet_summary/runtime/bridge.py
"""

from .bridge import FetchFacetDistribution, FetchTotal, TransportBridge

__all__ = ["TransportBridge", "FetchFacetDistribution", "FetchTotal"]
