"""
목적:
- 설정 모델 계층의 공개 진입점을 제공한다.

설명:
- 라이브러리는 `.env`를 직접 읽지 않고, 외부에서 생성된 설정 객체를 주입받는다.

디자인 패턴:
- 설정 객체(Configuration Object).

참조:
- src_py/facet_summary/config/models.py
"""

from .models import (
    DEFAULT_FETCH_PARAM_KEYS,
    FacetSummaryConfig,
    FetchRoundConfig,
    RedisFaultSinkConfig,
)

__all__ = [
    "DEFAULT_FETCH_PARAM_KEYS",
    "FetchRoundConfig",
    "RedisFaultSinkConfig",
    "FacetSummaryConfig",
]
