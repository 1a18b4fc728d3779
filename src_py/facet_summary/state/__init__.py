"""
목적:
- 부분 결과 저장소 계층의 공개 진입점을 제공한다.

설명:
- 라운드 토큰, 스냅샷, 저장소 클래스를 노출한다.

디자인 패턴:
- 파사드(Facade).

참조:
- src_py/facet_summary/state/store.py
"""

from .store import AggregateSnapshot, PartialResultStore, RoundToken

__all__ = ["AggregateSnapshot", "PartialResultStore", "RoundToken"]
