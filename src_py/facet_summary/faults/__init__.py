"""
목적:
- 장애 싱크 계층의 공개 심볼을 정의한다.

설명:
- 로깅 싱크와 Redis Stream 싱크를 노출한다.

디자인 패턴:
- 퍼사드(Facade).

참조:
- src_py/facet_summary/faults/sinks.py
"""

from .sinks import FaultSink, LoggingFaultSink, RedisFaultSink

__all__ = ["FaultSink", "LoggingFaultSink", "RedisFaultSink"]
