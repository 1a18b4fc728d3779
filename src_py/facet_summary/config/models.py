"""
목적:
- Facet Summary 라이브러리의 설정 인터페이스를 정의한다.

설명:
- 라운드 제어 값(조회 파라미터 투영, 동시 조회 상한, 비율 정밀도)과
  Redis 장애 싱크 값을 단일 모델로 관리한다.
- 전송 함수는 설정 파일이 아닌 Python 인자 주입으로 전달한다.

디자인 패턴:
- 값 객체(Value Object).

참조:
- scripts/run-facets.py
- src_py/facet_summary/summary/engine.py
- src_py/facet_summary/faults/sinks.py
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

DEFAULT_FETCH_PARAM_KEYS: tuple[str, ...] = (
    "project",
    "environment",
    "start",
    "end",
    "statsPeriod",
    "query",
)


class FetchRoundConfig(BaseModel):
    """조회 라운드 제어 설정 모델."""

    fetch_param_keys: tuple[str, ...] = Field(default=DEFAULT_FETCH_PARAM_KEYS)
    max_in_flight: int | None = Field(default=None, ge=1)
    share_precision: int = Field(default=1, ge=0, le=6)

    @field_validator("fetch_param_keys")
    @classmethod
    def validate_fetch_param_keys(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("fetch_param_keys는 비어 있을 수 없습니다")
        if any(not key.strip() for key in value):
            raise ValueError("fetch_param_keys에 빈 키가 있습니다")
        if len(set(value)) != len(value):
            raise ValueError("fetch_param_keys에 중복 키가 있습니다")
        return value


class RedisFaultSinkConfig(BaseModel):
    """Redis Streams 장애 기록 싱크 설정 모델."""

    host: str = Field(min_length=1)
    port: int = Field(default=6379, ge=1, le=65535)
    db: int = Field(default=0, ge=0)
    username: str | None = Field(default=None)
    password: str | None = Field(default=None)
    use_ssl: bool = Field(default=False)
    stream_faults: str = Field(default="facet-summary:faults", min_length=1)
    stream_max_len: int = Field(default=1_000, ge=1)
    source: str = Field(default="facet-summary", min_length=1)


class FacetSummaryConfig(BaseModel):
    """패싯 집계기 설정 모델."""

    rounds: FetchRoundConfig = Field(default_factory=FetchRoundConfig)
    fault_sink: RedisFaultSinkConfig | None = Field(default=None)
