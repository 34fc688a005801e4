"""
CLI do tobe_analytics.

Usage:
    tobe-analytics compare asis.json tobe.json [--from ISO] [--to ISO] [--user EMAIL]

Example:
    tobe-analytics compare asis.csv tobe.csv --user kim@example.com --output result.json
"""

import argparse
import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import structlog
from pydantic import ValidationError

from tobe_analytics.analysis.comparison import ComparisonOrchestrator
from tobe_analytics.config.phase_table import load_phase_table
from tobe_analytics.config.policies import RevisitPolicy, TotalDurationPolicy
from tobe_analytics.config.settings import ENV_LOG_LEVEL, AnalyticsSettings
from tobe_analytics.errors import AnalyticsError, InvalidInput
from tobe_analytics.log_config import configure_logging
from tobe_analytics.sources.base import EventQuery
from tobe_analytics.sources.fanout import fetch_both
from tobe_analytics.sources.files import source_for_path

logger = structlog.get_logger()


def _parse_datetime(value: str) -> datetime:
    """Aceita ISO-8601 (com 'Z') ou o formato datetime-local do navegador."""
    try:
        return datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid datetime: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tobe-analytics",
        description="As-Is vs To-Be usage comparison",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="Compare As-Is and To-Be event files")
    compare.add_argument("asis", type=Path, help="As-Is events (.json or .csv)")
    compare.add_argument("tobe", type=Path, help="To-Be events (.json or .csv)")
    compare.add_argument("--from", dest="start", type=_parse_datetime, help="Window start (ISO-8601)")
    compare.add_argument("--to", dest="end", type=_parse_datetime, help="Window end (ISO-8601)")
    compare.add_argument("--user", help="Exact user identifier filter")
    compare.add_argument(
        "--revisit-policy",
        choices=[p.value for p in RevisitPolicy],
        help="Backtrack definition (default: env or step_revisit)",
    )
    compare.add_argument(
        "--duration-policy",
        choices=[p.value for p in TotalDurationPolicy],
        help="Total duration definition (default: env or sum_of_durations)",
    )
    compare.add_argument("--phase-table", type=Path, help="YAML file extending the step/phase table")
    compare.add_argument("--lenient", action="store_true", help="Skip invalid rows instead of failing")
    compare.add_argument("--output", type=Path, help="Write JSON result to file instead of stdout")
    compare.add_argument("--log-level", help="Log level (default: env or INFO)")
    compare.add_argument("--json-logs", action="store_true", help="Render logs as JSON")

    return parser


def _settings_from_args(args: argparse.Namespace) -> AnalyticsSettings:
    """Combina settings do ambiente com as opções de linha de comando."""
    settings = AnalyticsSettings.from_env()

    overrides = {}
    if args.revisit_policy:
        overrides["revisit_policy"] = RevisitPolicy(args.revisit_policy)
    if args.duration_policy:
        overrides["duration_policy"] = TotalDurationPolicy(args.duration_policy)
    if args.phase_table:
        overrides["phase_table"] = load_phase_table(args.phase_table, base=settings.phase_table)

    return settings.model_copy(update=overrides) if overrides else settings


def run_compare(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)

    try:
        query = EventQuery(start=args.start, end=args.end, user=args.user)
    except ValidationError as e:
        raise InvalidInput(f"Invalid query: {e}") from e

    # Fontes filtram só a janela; o filtro de usuário fica no orquestrador
    # para que "users" liste todos os usuários do período
    baseline, redesigned = fetch_both(
        source_for_path(args.asis, strict=not args.lenient),
        source_for_path(args.tobe, strict=not args.lenient),
        query.model_copy(update={"user": None}),
    )

    result = ComparisonOrchestrator(settings).compare(baseline, redesigned, user=query.user)
    payload = json.dumps(result.to_dict(), indent=2, ensure_ascii=False, default=str)

    if args.output:
        try:
            args.output.write_text(payload + "\n", encoding="utf-8")
        except OSError as e:
            raise InvalidInput(f"Cannot write output file {args.output}: {e}") from e
        logger.info("[cli.run_compare] - result_saved", path=str(args.output))
    else:
        print(payload)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Logs em stderr antes de qualquer etapa; stdout fica só com o resultado
    configure_logging(args.log_level or os.getenv(ENV_LOG_LEVEL) or "INFO", json=args.json_logs)

    try:
        if args.command == "compare":
            return run_compare(args)
    except AnalyticsError as e:
        logger.error("[cli.main] - comparison_failed", error_type=type(e).__name__, error=str(e))
        print(json.dumps({"error": str(e)}), file=sys.stderr)
        return 1

    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
