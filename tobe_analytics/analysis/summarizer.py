"""
User Summarizer - Agregados por usuário.

Para cada usuário calcula tempo total, duração média por etapa,
número de transições e backtracks.
"""

from typing import Dict, Iterable, List, Sequence

import structlog

from tobe_analytics.analysis.grouping import group_by_user, sort_chronologically
from tobe_analytics.analysis.numeric import coerce_seconds
from tobe_analytics.analysis.revisits import count_backtracks
from tobe_analytics.config.policies import (
    DEFAULT_DURATION_POLICY,
    DEFAULT_REVISIT_POLICY,
    RevisitPolicy,
    TotalDurationPolicy,
)
from tobe_analytics.errors import InvalidInput
from tobe_analytics.models.events import UsageEvent
from tobe_analytics.models.summaries import UserSummary

logger = structlog.get_logger()


class UserSummarizer:
    """
    Resume eventos de um usuário em um UserSummary.

    Args:
        revisit_policy: Definição de backtrack
        duration_policy: Definição de tempo total
        missing_step_label: Rótulo usado para eventos sem etapa
    """

    def __init__(
        self,
        revisit_policy: RevisitPolicy = DEFAULT_REVISIT_POLICY,
        duration_policy: TotalDurationPolicy = DEFAULT_DURATION_POLICY,
        missing_step_label: str = "Other"
    ):
        self.revisit_policy = RevisitPolicy(revisit_policy)
        self.duration_policy = TotalDurationPolicy(duration_policy)
        self.missing_step_label = missing_step_label

    def summarize(self, events: Sequence[UsageEvent]) -> UserSummary:
        """
        Resume os eventos de um único usuário.

        Args:
            events: Eventos do usuário, em qualquer ordem

        Returns:
            UserSummary do usuário

        Raises:
            InvalidInput: Se a lista está vazia ou mistura usuários
        """
        if not events:
            raise InvalidInput("Cannot summarize an empty event group")

        ordered = sort_chronologically(events)

        users = {e.user_key for e in ordered}
        if len(users) > 1:
            raise InvalidInput(f"Event group mixes users: {sorted(users)}")

        return UserSummary(
            email=ordered[0].user_key,
            total_min=self._total_minutes(ordered),
            transitions=len(ordered) - 1,
            backtracks=count_backtracks(ordered, self.revisit_policy),
            step_avg_sec=self._step_averages(ordered),
            event_count=len(ordered),
            duration_policy=self.duration_policy.value,
            revisit_policy=self.revisit_policy.value,
        )

    def summarize_by_user(self, events: Iterable[UsageEvent]) -> List[UserSummary]:
        """
        Agrupa por usuário e resume cada grupo.

        Returns:
            Um UserSummary por usuário, na ordem de primeira aparição
        """
        groups = group_by_user(events)
        summaries = [self.summarize(group) for group in groups.values()]

        logger.debug(
            "[UserSummarizer.summarize_by_user] - users_summarized",
            users=len(summaries),
            revisit_policy=self.revisit_policy.value,
            duration_policy=self.duration_policy.value
        )

        return summaries

    def _total_minutes(self, ordered: Sequence[UsageEvent]) -> float:
        """Tempo total em minutos segundo a política configurada."""
        if self.duration_policy is TotalDurationPolicy.FIRST_TO_LAST:
            span = ordered[-1].occurred_at - ordered[0].occurred_at
            return span.total_seconds() / 60

        total_sec = sum(coerce_seconds(e.duration_to_next_seconds) for e in ordered)
        return total_sec / 60

    def _step_averages(self, ordered: Sequence[UsageEvent]) -> Dict[str, float]:
        """Média de duration_to_next_seconds por etapa (segundos)."""
        buckets: Dict[str, List[float]] = {}
        for event in ordered:
            key = event.step_label if event.step_label is not None else self.missing_step_label
            bucket = buckets.get(key)
            if bucket is None:
                bucket = [0.0, 0]
                buckets[key] = bucket
            bucket[0] += coerce_seconds(event.duration_to_next_seconds)
            bucket[1] += 1

        return {step: total / max(1, count) for step, (total, count) in buckets.items()}
