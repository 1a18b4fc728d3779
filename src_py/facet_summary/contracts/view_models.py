"""
목적:
- 렌더러에 노출하는 읽기 전용 뷰 모델을 정의한다.

설명:
- 로딩 여부, 값별 비율, 검색 링크를 포함한 패싯 단위 뷰와 전체 요약 뷰를 제공한다.

디자인 패턴:
- 뷰 모델(View Model).

참조:
- src_py/facet_summary/view/read_view.py
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FacetSegment(BaseModel):
    """분포 막대의 구간 하나에 해당하는 모델."""

    model_config = ConfigDict(frozen=True)

    value: str
    name: str | None = Field(default=None)
    count: int = Field(ge=0)
    share: float = Field(ge=0.0)
    url: str | None = Field(default=None)


class FacetView(BaseModel):
    """패싯 하나의 읽기 뷰 모델."""

    model_config = ConfigDict(frozen=True)

    facet: str = Field(min_length=1)
    loading: bool
    segments: tuple[FacetSegment, ...] = Field(default_factory=tuple)
    other_count: int = Field(default=0, ge=0)


class SummaryView(BaseModel):
    """현재 라운드 전체 요약 뷰 모델."""

    model_config = ConfigDict(frozen=True)

    round_generation: int | None = Field(default=None)
    total: int | None = Field(default=None)
    facets: tuple[FacetView, ...] = Field(default_factory=tuple)

    @property
    def total_pending(self) -> bool:
        """전체 건수가 아직 도착하지 않았는지 여부."""
        return self.total is None
