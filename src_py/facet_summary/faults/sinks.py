"""
목적:
- 조회 실패를 외부로 보고하는 장애 싱크(fault sink)를 제공한다.

설명:
- 싱크는 fire-and-forget 계약을 따른다. 보고 자체가 실패해도 예외를 올리지 않는다.
- `LoggingFaultSink`는 표준 logging으로, `RedisFaultSink`는 Redis Stream에
  길이 상한을 둔 장애 레코드로 기록한다.

디자인 패턴:
- 전략(Strategy) + 저장소 패턴(Repository Pattern).

참조:
- src_py/facet_summary/orchestration/coordinator.py
- src_py/facet_summary/config/models.py
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Protocol

from facet_summary.config.models import RedisFaultSinkConfig
from facet_summary.exceptions import DependencyUnavailableError

logger = logging.getLogger(__name__)


class FaultSink(Protocol):
    """장애 보고 인터페이스."""

    def report(self, error: BaseException, context: Mapping[str, object] | None = None) -> None: ...


class LoggingFaultSink:
    """장애를 WARNING 로그로 남기는 기본 싱크."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def report(self, error: BaseException, context: Mapping[str, object] | None = None) -> None:
        """장애를 로그로 보고한다."""
        self._logger.warning(
            "fetch fault: %s %s",
            error,
            _format_context(context),
            exc_info=(type(error), error, error.__traceback__),
        )


class RedisFaultSink:
    """장애 레코드를 Redis Stream에 적재하는 싱크."""

    def __init__(self, config: RedisFaultSinkConfig, client=None) -> None:
        self._config = config
        self._redis = client if client is not None else self._create_client(config)

    @staticmethod
    def _create_client(config: RedisFaultSinkConfig):
        try:
            import redis
        except Exception as exc:  # pragma: no cover - 런타임 환경 의존
            raise DependencyUnavailableError(f"redis 패키지를 불러오지 못했습니다: {exc}") from exc

        return redis.Redis(
            host=config.host,
            port=config.port,
            db=config.db,
            username=config.username,
            password=config.password,
            ssl=config.use_ssl,
            decode_responses=True,
        )

    @property
    def config(self) -> RedisFaultSinkConfig:
        """싱크 설정 객체를 반환한다."""
        return self._config

    def report(self, error: BaseException, context: Mapping[str, object] | None = None) -> None:
        """장애 레코드를 스트림에 추가한다."""
        fields = {
            "source": self._config.source,
            "error_type": type(error).__name__,
            "message": str(error),
            "reported_at": _utc_now(),
        }
        for key, value in (context or {}).items():
            fields[str(key)] = _normalize(value)

        try:
            self._redis.xadd(
                self._config.stream_faults,
                fields,
                maxlen=self._config.stream_max_len,
                approximate=True,
            )
        except Exception:  # noqa: BLE001
            logger.exception(
                "fault record write failed: stream=%s error=%s",
                self._config.stream_faults,
                error,
            )

    def recent(self, count: int = 10) -> list[dict[str, str]]:
        """최근 장애 레코드를 최신순으로 조회한다."""
        entries = self._redis.xrevrange(self._config.stream_faults, count=count)
        return [
            {str(key): str(value) for key, value in fields.items()}
            for _message_id, fields in entries
        ]


def _format_context(context: Mapping[str, object] | None) -> str:
    if not context:
        return ""
    return " ".join(f"{key}={value}" for key, value in context.items())


def _utc_now() -> str:
    return datetime.now(tz=UTC).isoformat()


def _normalize(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
