"""
Fontes de eventos locais (arquivos e memória).

Substituem o store remoto em execuções offline: aplicam a janela de
consulta e o filtro de usuário e, em seguida, anotam as transições
como a procedure remota faria.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import structlog

from tobe_analytics.models.events import UsageEvent
from tobe_analytics.parsers.row_parser import RowParser
from tobe_analytics.sources.base import EventQuery
from tobe_analytics.sources.window import annotate_transitions

logger = structlog.get_logger()


def _select(events: Iterable[UsageEvent], query: EventQuery) -> List[UsageEvent]:
    """Filtra pela consulta e anota transições dentro do resultado."""
    selected = [e for e in events if query.matches(e)]
    return annotate_transitions(selected)


class InMemorySource:
    """
    Fonte sobre eventos ou registros já materializados.

    Args:
        rows: UsageEvents ou dicionários no formato da fonte
    """

    def __init__(self, rows: Iterable[Union[UsageEvent, Dict[str, Any]]]):
        items = list(rows)
        raw = [r for r in items if not isinstance(r, UsageEvent)]
        parsed = RowParser(strict=True).parse_rows(raw) if raw else []
        self.events: List[UsageEvent] = [r for r in items if isinstance(r, UsageEvent)] + parsed

    def fetch(self, query: EventQuery) -> List[UsageEvent]:
        return _select(self.events, query)


class JsonFileSource:
    """
    Fonte baseada em arquivo JSON (lista de registros).

    O arquivo é lido a cada fetch, como uma consulta ao store.
    """

    def __init__(self, path: Union[str, Path], strict: bool = True):
        self.path = Path(path)
        self.strict = strict

    def fetch(self, query: EventQuery) -> List[UsageEvent]:
        events = RowParser(strict=self.strict).parse_json_file(self.path)
        selected = _select(events, query)

        logger.info(
            "[JsonFileSource.fetch] - events_fetched",
            file=str(self.path),
            loaded=len(events),
            selected=len(selected)
        )

        return selected


class CsvFileSource:
    """Fonte baseada em arquivo CSV com cabeçalho."""

    def __init__(self, path: Union[str, Path], strict: bool = True):
        self.path = Path(path)
        self.strict = strict

    def fetch(self, query: EventQuery) -> List[UsageEvent]:
        events = RowParser(strict=self.strict).parse_csv_file(self.path)
        selected = _select(events, query)

        logger.info(
            "[CsvFileSource.fetch] - events_fetched",
            file=str(self.path),
            loaded=len(events),
            selected=len(selected)
        )

        return selected


def source_for_path(path: Union[str, Path], strict: bool = True):
    """Escolhe a fonte pelo sufixo do arquivo (.csv → CSV, demais → JSON)."""
    path = Path(path)
    if path.suffix.lower() == ".csv":
        return CsvFileSource(path, strict=strict)
    return JsonFileSource(path, strict=strict)
