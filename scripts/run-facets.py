"""
목적:
- 루트 `.env`를 읽어 FacetSummary를 실행하는 드라이버 스크립트를 제공한다.

설명:
- 라이브러리 본체는 환경 파일을 직접 읽지 않는다.
- 이 스크립트는 컨텍스트 마운트 -> 라운드 완료 대기 -> 뷰 출력 흐름을 데모한다.
- 전송 함수는 팩토리 함수로 생성해 인자로 주입한다.
  팩토리는 `(fetch_facet_distribution, fetch_total)` 튜플을 반환해야 한다.

디자인 패턴:
- 드라이버(Driver Script).

참조:
- src_py/facet_summary/config/models.py
- src_py/facet_summary/summary/engine.py
"""

from __future__ import annotations

import argparse
import asyncio
import importlib
import logging
import os
import sys
from pathlib import Path

from facet_summary import (
    FacetSummary,
    FacetSummaryConfig,
    FetchRoundConfig,
    QueryContext,
    RedisFaultSinkConfig,
    SearchLinkBuilder,
)
from facet_summary.config import DEFAULT_FETCH_PARAM_KEYS

REQUIRED_ENV_KEYS = [
    "FACET_SUMMARY_IDENTITY",
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Facet Summary 드라이버")
    parser.add_argument("--facets", required=True, help="콤마로 구분된 패싯 목록 (예: browser,os)")
    parser.add_argument("--query", default="", help="검색 질의 문자열")
    parser.add_argument("--environment", default=None, help="환경 필터")
    parser.add_argument("--stats-period", default="24h", help="조회 기간 (예: 24h)")
    parser.add_argument(
        "--transport-factory",
        required=True,
        help="전송 함수 팩토리 경로 (예: app.transports:create_transport)",
    )
    parser.add_argument("--link-base", default=None, help="값별 검색 링크 기본 경로")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="루트 기준 환경 파일 경로 (기본: .env)",
    )
    parser.add_argument("--verbose", action="store_true", help="DEBUG 로그 출력")
    return parser.parse_args()


def load_env_file(path: Path) -> None:
    if not path.exists():
        raise RuntimeError(f"환경 파일이 존재하지 않습니다: {path}")

    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        os.environ[key] = value


def ensure_required_env() -> None:
    missing = [key for key in REQUIRED_ENV_KEYS if not os.environ.get(key)]
    if missing:
        raise RuntimeError(f"필수 환경 변수가 누락되었습니다: {', '.join(missing)}")


def build_config() -> FacetSummaryConfig:
    raw_keys = os.environ.get("FETCH_PARAM_KEYS", "")
    keys = tuple(token.strip() for token in raw_keys.split(",") if token.strip())
    raw_in_flight = os.environ.get("FETCH_MAX_IN_FLIGHT", "")

    rounds = FetchRoundConfig(
        fetch_param_keys=keys or DEFAULT_FETCH_PARAM_KEYS,
        max_in_flight=int(raw_in_flight) if raw_in_flight else None,
        share_precision=int(os.environ.get("SHARE_PRECISION", "1")),
    )

    fault_sink = None
    if os.environ.get("REDIS_HOST"):
        fault_sink = RedisFaultSinkConfig(
            host=os.environ["REDIS_HOST"],
            port=int(os.environ.get("REDIS_PORT", "6379")),
            db=int(os.environ.get("REDIS_DB", "0")),
            username=os.environ.get("REDIS_USERNAME") or None,
            password=os.environ.get("REDIS_PASSWORD") or None,
            use_ssl=parse_bool_env("REDIS_USE_SSL", "false"),
            stream_faults=os.environ.get("REDIS_STREAM_FAULTS", "facet-summary:faults"),
            stream_max_len=int(os.environ.get("REDIS_STREAM_FAULTS_MAX_LEN", "1000")),
        )

    return FacetSummaryConfig(rounds=rounds, fault_sink=fault_sink)


def parse_bool_env(key: str, default: str) -> bool:
    raw = os.environ.get(key, default).strip().lower()
    if raw in {"1", "true", "yes", "y"}:
        return True
    if raw in {"0", "false", "no", "n"}:
        return False
    raise RuntimeError(f"불리언 환경 변수 형식이 잘못되었습니다: {key}={raw}")


def load_factory(spec: str):
    if ":" not in spec:
        raise RuntimeError("--transport-factory 형식은 module:function 이어야 합니다")
    module_name, function_name = spec.split(":", 1)
    module = importlib.import_module(module_name)
    return getattr(module, function_name)


def build_context(args: argparse.Namespace) -> QueryContext:
    params: dict[str, object] = {"statsPeriod": args.stats_period}
    if args.query:
        params["query"] = args.query
    if args.environment:
        params["environment"] = args.environment

    facets = [token.strip() for token in args.facets.split(",") if token.strip()]
    return QueryContext(facets=facets, params=params)


async def main() -> int:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    repo_root = Path(__file__).resolve().parents[1]
    load_env_file(repo_root / args.env_file)
    ensure_required_env()

    config = build_config()
    factory = load_factory(args.transport_factory)
    fetch_facet_distribution, fetch_total = factory()
    link_builder = SearchLinkBuilder(args.link_base) if args.link_base else None

    async with FacetSummary(
        identity=os.environ["FACET_SUMMARY_IDENTITY"],
        fetch_facet_distribution=fetch_facet_distribution,
        fetch_total=fetch_total,
        config=config,
        link_builder=link_builder,
    ) as summary:
        context = build_context(args)
        started = summary.on_context_changed(None, context)
        print(f"[round] started={started}")

        await summary.wait_idle()
        view = summary.view()
        print("[view]", view.model_dump_json())

        loading = [facet.facet for facet in view.facets if facet.loading]
        if loading:
            print(f"[notice] 로딩 상태로 남은 패싯: {', '.join(loading)}")

    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(asyncio.run(main()))
    except Exception as exc:  # noqa: BLE001
        print(f"[error] {exc}", file=sys.stderr)
        raise SystemExit(1)
