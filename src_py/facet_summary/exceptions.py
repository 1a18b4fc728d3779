"""
목적:
- Facet Summary 계층의 예외 타입을 표준화한다.

설명:
- 설정 오류, 전송 실패, 의존성 오류를 명시적으로 구분해
  라이브러리 소비자가 처리 전략을 선택할 수 있게 한다.
- 오래된 라운드의 결과(stale result)는 예외가 아니라 정상 경합으로 취급한다.

디자인 패턴:
- 계층형 예외(Hierarchical Exception).

참조:
- src_py/facet_summary/runtime/bridge.py
- src_py/facet_summary/orchestration/coordinator.py
"""


class FacetSummaryError(Exception):
    """Facet Summary 공통 베이스 예외."""


class ConfigurationError(FacetSummaryError):
    """설정값이나 생성 인자가 유효하지 않을 때 발생한다."""


class TransportFailureError(FacetSummaryError):
    """패싯 분포/전체 건수 조회가 실패하거나 응답 형식이 잘못되었을 때 사용한다."""


class DependencyUnavailableError(FacetSummaryError):
    """Redis 등 선택 의존성을 사용할 수 없을 때 발생한다."""


class SummaryClosedError(FacetSummaryError):
    """종료된 집계기를 다시 사용하려 할 때 발생한다."""
