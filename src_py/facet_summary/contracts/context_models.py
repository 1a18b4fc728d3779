"""
목적:
- 질의 컨텍스트 입력 인터페이스 모델을 정의한다.

설명:
- 활성 패싯 목록과 필터/페이지 파라미터를 하나의 불변 객체로 묶는다.
- 패싯은 순서를 유지하되 중복은 첫 항목만 남긴다(비교 시에는 집합으로 취급한다).

디자인 패턴:
- DTO(Data Transfer Object).

참조:
- src_py/facet_summary/comparison/comparator.py
- src_py/facet_summary/orchestration/coordinator.py
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QueryContext(BaseModel):
    """패싯 조회용 질의 컨텍스트 모델."""

    model_config = ConfigDict(frozen=True)

    facets: tuple[str, ...] = Field(default_factory=tuple)
    params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("facets")
    @classmethod
    def validate_facets(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        unique: list[str] = []
        for facet in value:
            if not facet.strip():
                raise ValueError("facet 이름은 비어 있을 수 없습니다")
            if facet not in unique:
                unique.append(facet)
        return tuple(unique)

    @property
    def facet_set(self) -> frozenset[str]:
        """비교용 패싯 집합을 반환한다."""
        return frozenset(self.facets)
