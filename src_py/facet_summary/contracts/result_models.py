"""
목적:
- 패싯 분포 조회 결과 모델을 정의한다.

설명:
- 전송 계층 응답을 검증된 불변 객체로 고정해 병합 이후 변경되지 않게 한다.

디자인 패턴:
- 값 객체(Value Object).

참조:
- src_py/facet_summary/runtime/bridge.py
- src_py/facet_summary/state/store.py
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FacetValue(BaseModel):
    """패싯 상위 값 하나와 건수 모델."""

    model_config = ConfigDict(frozen=True)

    value: str
    count: int = Field(ge=0)
    name: str | None = Field(default=None)


class FacetResult(BaseModel):
    """패싯 하나의 상위 K개 값 분포 모델."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1)
    top_values: tuple[FacetValue, ...] = Field(default_factory=tuple)

    @property
    def counted(self) -> int:
        """상위 값 건수 합계를 반환한다."""
        return sum(item.count for item in self.top_values)
