import pytest

from facet_summary.config import (
    DEFAULT_FETCH_PARAM_KEYS,
    FacetSummaryConfig,
    FetchRoundConfig,
    RedisFaultSinkConfig,
)


def test_defaults_are_unbounded_and_use_standard_keys() -> None:
    config = FacetSummaryConfig()

    assert config.rounds.fetch_param_keys == DEFAULT_FETCH_PARAM_KEYS
    assert config.rounds.max_in_flight is None
    assert config.fault_sink is None


def test_fetch_param_keys_must_not_be_empty() -> None:
    with pytest.raises(ValueError, match="fetch_param_keys는 비어 있을 수 없습니다"):
        FetchRoundConfig(fetch_param_keys=())


def test_fetch_param_keys_must_be_unique() -> None:
    with pytest.raises(ValueError, match="중복 키"):
        FetchRoundConfig(fetch_param_keys=("query", "query"))


def test_max_in_flight_must_be_positive() -> None:
    with pytest.raises(ValueError):
        FetchRoundConfig(max_in_flight=0)


def test_redis_fault_sink_config_defaults() -> None:
    config = RedisFaultSinkConfig(host="localhost")

    assert config.port == 6379
    assert config.stream_faults == "facet-summary:faults"
    assert config.stream_max_len == 1_000
