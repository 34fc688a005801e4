"""
Phase Aggregator - Comparação de duração por fase entre variantes.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import structlog

from tobe_analytics.analysis.numeric import coerce_seconds
from tobe_analytics.analysis.phases import PhaseClassifier
from tobe_analytics.models.events import UsageEvent
from tobe_analytics.models.summaries import PhaseRow

logger = structlog.get_logger()


@dataclass
class _PhaseBucket:
    """Acumulador mutável interno (soma em segundos e contagem)."""

    sum_seconds: float = 0.0
    count: int = 0

    @property
    def avg_min(self) -> float:
        if self.count == 0:
            return 0.0
        return self.sum_seconds / self.count / 60

    @property
    def total_min(self) -> float:
        return self.sum_seconds / 60


class PhaseAggregator:
    """
    Agrega durações por fase para As-Is e To-Be.

    A métrica principal é a média por evento (não o total), para comparar
    variantes com volumes de eventos diferentes. A saída sempre enumera
    todas as fases configuradas, com zero onde não há dados.

    Args:
        classifier: Classificador de fases
    """

    def __init__(self, classifier: Optional[PhaseClassifier] = None):
        self.classifier = classifier or PhaseClassifier()

    def fold(self, events: Iterable[UsageEvent]) -> Dict[str, _PhaseBucket]:
        """Acumula soma/contagem de duração por fase para uma variante."""
        buckets: Dict[str, _PhaseBucket] = {}
        for event in events:
            phase = self.classifier.classify(event.step_label, event.action_label)
            bucket = buckets.get(phase)
            if bucket is None:
                bucket = _PhaseBucket()
                buckets[phase] = bucket
            bucket.sum_seconds += coerce_seconds(event.duration_to_next_seconds)
            bucket.count += 1
        return buckets

    def aggregate(
        self,
        baseline_events: Iterable[UsageEvent],
        redesigned_events: Iterable[UsageEvent]
    ) -> List[PhaseRow]:
        """
        Calcula a comparação por fase.

        Args:
            baseline_events: Eventos As-Is
            redesigned_events: Eventos To-Be

        Returns:
            Uma PhaseRow por fase: primeiro as fases configuradas (na ordem
            da tabela), depois fases extras ordenadas por nome
        """
        asis = self.fold(baseline_events)
        tobe = self.fold(redesigned_events)

        configured = list(self.classifier.table.phases)
        extra = sorted((set(asis) | set(tobe)) - set(configured))

        empty = _PhaseBucket()
        rows = []
        for phase in configured + extra:
            a = asis.get(phase, empty)
            t = tobe.get(phase, empty)
            rows.append(PhaseRow(
                phase=phase,
                asis_avg_min=a.avg_min,
                asis_total_min=a.total_min,
                asis_events=a.count,
                tobe_avg_min=t.avg_min,
                tobe_total_min=t.total_min,
                tobe_events=t.count,
                color=self.classifier.color(phase),
            ))

        logger.debug(
            "[PhaseAggregator.aggregate] - phases_aggregated",
            phases=len(rows),
            asis_phases=len(asis),
            tobe_phases=len(tobe)
        )

        return rows


def aggregate_phases(
    baseline_events: Iterable[UsageEvent],
    redesigned_events: Iterable[UsageEvent],
    classifier: Optional[PhaseClassifier] = None
) -> List[PhaseRow]:
    """Atalho funcional para PhaseAggregator.aggregate."""
    return PhaseAggregator(classifier).aggregate(baseline_events, redesigned_events)
