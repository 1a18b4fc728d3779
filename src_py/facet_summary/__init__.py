"""
목적:
- Facet Summary Python 패키지의 공개 진입점을 제공한다.

설명:
- 라이브러리 핵심 클래스는 `FacetSummary` 하나다.
- 설정/계약 모델/비교 함수/장애 싱크/예외를 함께 노출한다.

디자인 패턴:
- 퍼사드(Facade).

참조:
- src_py/facet_summary/summary/engine.py
- src_py/facet_summary/orchestration/coordinator.py
"""

from .comparison import QueryContextComparator, derive_fetch_payload, should_refetch
from .config.models import FacetSummaryConfig, FetchRoundConfig, RedisFaultSinkConfig
from .contracts import (
    FacetResult,
    FacetSegment,
    FacetValue,
    FacetView,
    QueryContext,
    SummaryView,
)
from .exceptions import (
    ConfigurationError,
    DependencyUnavailableError,
    FacetSummaryError,
    SummaryClosedError,
    TransportFailureError,
)
from .faults import FaultSink, LoggingFaultSink, RedisFaultSink
from .orchestration import FetchCoordinator
from .state import AggregateSnapshot, PartialResultStore, RoundToken
from .summary import FacetSummary
from .view import SearchLinkBuilder
from .version import __version__

__all__ = [
    "__version__",
    "FacetSummary",
    "FetchCoordinator",
    "PartialResultStore",
    "AggregateSnapshot",
    "RoundToken",
    "QueryContextComparator",
    "derive_fetch_payload",
    "should_refetch",
    "FacetSummaryConfig",
    "FetchRoundConfig",
    "RedisFaultSinkConfig",
    "QueryContext",
    "FacetValue",
    "FacetResult",
    "FacetSegment",
    "FacetView",
    "SummaryView",
    "FaultSink",
    "LoggingFaultSink",
    "RedisFaultSink",
    "SearchLinkBuilder",
    "FacetSummaryError",
    "ConfigurationError",
    "TransportFailureError",
    "DependencyUnavailableError",
    "SummaryClosedError",
]
