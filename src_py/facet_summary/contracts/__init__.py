"""
목적:
- Python 계약 모델 계층의 공개 심볼을 제공한다.

설명:
- 질의 컨텍스트/조회 결과/뷰 모델을 하나의 네임스페이스에서 재노출한다.

디자인 패턴:
- 모듈 퍼사드(Module Facade).

참조:
- src_py/facet_summary/contracts/context_models.py
- src_py/facet_summary/contracts/result_models.py
- src_py/facet_summary/contracts/view_models.py
"""

from .context_models import QueryContext
from .result_models import FacetResult, FacetValue
from .view_models import FacetSegment, FacetView, SummaryView

__all__ = [
    "QueryContext",
    "FacetValue",
    "FacetResult",
    "FacetSegment",
    "FacetView",
    "SummaryView",
]
