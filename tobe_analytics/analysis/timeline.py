"""
Timeline Builder - Segmentos por usuário para visualização.

Cada evento vira um segmento [start, end], onde end é o início do
próximo evento do mesmo usuário (ou o próprio start no último evento).
"""

from typing import Dict, Iterable, List, Optional

import structlog

from tobe_analytics.analysis.grouping import group_by_user, sort_chronologically
from tobe_analytics.analysis.numeric import coerce_seconds
from tobe_analytics.analysis.phases import PhaseClassifier
from tobe_analytics.errors import MalformedTimestamp
from tobe_analytics.models.events import UsageEvent
from tobe_analytics.models.summaries import TimelineSegment

logger = structlog.get_logger()


class TimelineBuilder:
    """
    Constrói timelines por usuário.

    Args:
        classifier: Classificador de fases usado em cada segmento
    """

    def __init__(self, classifier: Optional[PhaseClassifier] = None):
        self.classifier = classifier or PhaseClassifier()

    def build(self, events: Iterable[UsageEvent]) -> Dict[str, List[TimelineSegment]]:
        """
        Agrupa por usuário e gera segmentos em ordem cronológica.

        Args:
            events: Eventos de uma variante

        Returns:
            Dict user → lista de segmentos

        Raises:
            MalformedTimestamp: Se next_occurred_at é anterior a occurred_at
        """
        timelines: Dict[str, List[TimelineSegment]] = {}

        for user, group in group_by_user(events).items():
            timelines[user] = [self._segment(user, e) for e in sort_chronologically(group)]

        logger.debug(
            "[TimelineBuilder.build] - timelines_built",
            users=len(timelines),
            segments=sum(len(s) for s in timelines.values())
        )

        return timelines

    def _segment(self, user: str, event: UsageEvent) -> TimelineSegment:
        """Converte um evento em segmento."""
        start = event.occurred_at

        if event.has_next:
            end = event.next_occurred_at
            if end < start:
                raise MalformedTimestamp(
                    f"next_occurred_at {end.isoformat()} precedes "
                    f"occurred_at {start.isoformat()} for user '{user}'",
                    field="next_occurred_at"
                )
            seconds = event.duration_to_next_seconds
            if seconds is None:
                seconds = (end - start).total_seconds()
            duration_min = coerce_seconds(seconds) / 60
        else:
            end = start
            duration_min = 0.0

        phase = self.classifier.classify(event.step_label, event.action_label)

        return TimelineSegment(
            email=user,
            step=event.step_label,
            action=event.action_label,
            phase=phase,
            start=start,
            end=end,
            duration_min=duration_min,
            color=self.classifier.color(phase),
            detail=event.detail,
        )


def build_timelines(
    events: Iterable[UsageEvent],
    classifier: Optional[PhaseClassifier] = None
) -> Dict[str, List[TimelineSegment]]:
    """Atalho funcional para TimelineBuilder.build."""
    return TimelineBuilder(classifier).build(events)
