"""
목적:
- 조회 라운드 오케스트레이션 계층의 공개 심볼을 정의한다.

설명:
- 라운드 조정 클래스를 외부에 노출한다.

디자인 패턴:
- 퍼사드(Facade).

참조:
- src_py/facet_summary/orchestration/coordinator.py
"""

from .coordinator import TOTAL_FETCH_NAME, FetchCoordinator

__all__ = ["FetchCoordinator", "TOTAL_FETCH_NAME"]
