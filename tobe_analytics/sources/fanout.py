"""
Leitura paralela das duas variantes.

Única concorrência do sistema: duas leituras independentes unidas
antes de entrar no núcleo. Qualquer falha invalida a comparação.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Tuple

import structlog

from tobe_analytics.errors import AnalyticsError, UpstreamFailure
from tobe_analytics.models.events import UsageEvent
from tobe_analytics.sources.base import EventQuery, EventSource

logger = structlog.get_logger()

ASIS = "As-Is"
TOBE = "To-Be"


def _result(variant: str, future: Future) -> Tuple[Optional[List[UsageEvent]], Optional[AnalyticsError]]:
    """Resolve um future, convertendo falhas da fonte em UpstreamFailure."""
    try:
        return list(future.result()), None
    except AnalyticsError as e:
        failure = e
    except Exception as e:  # noqa: BLE001
        failure = UpstreamFailure(variant, str(e))

    logger.error(
        "[fetch_both] - source_failed",
        variant=variant,
        error_type=type(failure).__name__,
        error=str(failure)
    )
    return None, failure


def fetch_both(
    baseline_source: EventSource,
    redesigned_source: EventSource,
    query: Optional[EventQuery] = None
) -> Tuple[List[UsageEvent], List[UsageEvent]]:
    """
    Busca As-Is e To-Be em paralelo.

    Args:
        baseline_source: Fonte As-Is
        redesigned_source: Fonte To-Be
        query: Janela e filtro de usuário (default: sem filtros)

    Returns:
        (eventos As-Is, eventos To-Be)

    Raises:
        UpstreamFailure: Se uma fonte falha (As-Is é reportada primeiro)
        AnalyticsError: Erros de dados da fonte são propagados sem conversão
    """
    query = query or EventQuery()

    logger.info(
        "[fetch_both] - fetch_started",
        start=query.start.isoformat() if query.start else None,
        end=query.end.isoformat() if query.end else None,
        user=query.user
    )

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="tobe-fetch") as pool:
        asis_future = pool.submit(baseline_source.fetch, query)
        tobe_future = pool.submit(redesigned_source.fetch, query)

        asis, asis_error = _result(ASIS, asis_future)
        tobe, tobe_error = _result(TOBE, tobe_future)

    if asis_error is not None:
        raise asis_error
    if tobe_error is not None:
        raise tobe_error

    logger.info("[fetch_both] - fetch_completed", asis_events=len(asis), tobe_events=len(tobe))

    return asis, tobe
