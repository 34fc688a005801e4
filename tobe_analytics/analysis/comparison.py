"""
Comparison Orchestrator - Comparação As-Is vs To-Be.

Único componente que sabe que existem exatamente duas variantes:
aplica summarizer, agregador de fases e timeline em cada uma e monta
a visão combinada.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

import structlog

from tobe_analytics.analysis.grouping import filter_by_user
from tobe_analytics.analysis.phase_aggregator import PhaseAggregator
from tobe_analytics.analysis.phases import PhaseClassifier
from tobe_analytics.analysis.summarizer import UserSummarizer
from tobe_analytics.analysis.timeline import TimelineBuilder
from tobe_analytics.config.settings import AnalyticsSettings
from tobe_analytics.models.events import UsageEvent
from tobe_analytics.models.summaries import (
    ComparisonKpis,
    PhaseRow,
    StepComparisonRow,
    TimelineSegment,
    UserSummary,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class ComparisonResult:
    """Resultado completo da comparação."""

    users: List[str]
    baseline_summaries: List[UserSummary]
    redesigned_summaries: List[UserSummary]
    phase_rows: List[PhaseRow]
    step_rows: List[StepComparisonRow]
    kpis: Optional[ComparisonKpis]
    baseline_timeline: Dict[str, List[TimelineSegment]] = field(default_factory=dict)
    redesigned_timeline: Dict[str, List[TimelineSegment]] = field(default_factory=dict)
    user_filter: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Converte para o formato de resposta JSON do endpoint de eventos.

        Timelines são achatadas na ordem usuário → tempo.
        """
        return {
            "users": list(self.users),
            "user": self.user_filter,
            "asisSummary": [s.to_dict() for s in self.baseline_summaries],
            "tobeSummary": [s.to_dict() for s in self.redesigned_summaries],
            "phaseSummary": [p.to_dict() for p in self.phase_rows],
            "stepSummary": [s.to_dict() for s in self.step_rows],
            "kpis": self.kpis.to_dict() if self.kpis else None,
            "timelinesAsIs": _flatten(self.baseline_timeline),
            "timelinesToBe": _flatten(self.redesigned_timeline),
        }


def _flatten(timeline: Dict[str, List[TimelineSegment]]) -> List[Dict[str, Any]]:
    return [segment.to_dict() for segments in timeline.values() for segment in segments]


class ComparisonOrchestrator:
    """
    Orquestra a comparação entre as duas variantes.

    Args:
        settings: Políticas e tabela de fases (default: AnalyticsSettings())
    """

    def __init__(self, settings: Optional[AnalyticsSettings] = None):
        self.settings = settings or AnalyticsSettings()

        self.classifier = PhaseClassifier(self.settings.phase_table)
        self.summarizer = UserSummarizer(
            revisit_policy=self.settings.revisit_policy,
            duration_policy=self.settings.duration_policy,
            missing_step_label=self.settings.missing_step_label,
        )
        self.phase_aggregator = PhaseAggregator(self.classifier)
        self.timeline_builder = TimelineBuilder(self.classifier)

    def compare(
        self,
        baseline_events: Iterable[UsageEvent],
        redesigned_events: Iterable[UsageEvent],
        user: Optional[str] = None
    ) -> ComparisonResult:
        """
        Compara eventos As-Is e To-Be.

        O filtro de usuário (match exato) é aplicado antes do agrupamento.
        A lista de usuários considera os eventos sem filtro.

        Args:
            baseline_events: Eventos As-Is
            redesigned_events: Eventos To-Be
            user: Identificador de usuário opcional

        Returns:
            ComparisonResult

        Raises:
            InvalidInput: Se algum grupo de eventos é inválido
            MalformedTimestamp: Se algum segmento tem timestamps inconsistentes
        """
        baseline = list(baseline_events)
        redesigned = list(redesigned_events)

        logger.info(
            "[ComparisonOrchestrator.compare] - comparison_started",
            asis_events=len(baseline),
            tobe_events=len(redesigned),
            user=user,
            revisit_policy=self.settings.revisit_policy.value,
            duration_policy=self.settings.duration_policy.value
        )

        users = sorted({
            e.user_identifier
            for e in baseline + redesigned
            if e.user_identifier
        })

        asis = filter_by_user(baseline, user)
        tobe = filter_by_user(redesigned, user)

        asis_summaries = self.summarizer.summarize_by_user(asis)
        tobe_summaries = self.summarizer.summarize_by_user(tobe)

        result = ComparisonResult(
            users=users,
            baseline_summaries=asis_summaries,
            redesigned_summaries=tobe_summaries,
            phase_rows=self.phase_aggregator.aggregate(asis, tobe),
            step_rows=compare_steps(asis_summaries, tobe_summaries),
            kpis=compute_kpis(asis_summaries, tobe_summaries),
            baseline_timeline=self.timeline_builder.build(asis),
            redesigned_timeline=self.timeline_builder.build(tobe),
            user_filter=user,
        )

        logger.info(
            "[ComparisonOrchestrator.compare] - comparison_completed",
            users=len(users),
            asis_users=len(asis_summaries),
            tobe_users=len(tobe_summaries),
            phases=len(result.phase_rows)
        )

        return result


def compare_steps(
    baseline_summaries: Sequence[UserSummary],
    redesigned_summaries: Sequence[UserSummary]
) -> List[StepComparisonRow]:
    """
    Média entre usuários da duração média por etapa, em minutos.

    Etapas aparecem na ordem em que surgem (As-Is primeiro); lado sem
    dados para a etapa vale zero.
    """
    steps: Dict[str, None] = {}

    def fold(summaries: Sequence[UserSummary]) -> Dict[str, float]:
        acc: Dict[str, List[float]] = {}
        for summary in summaries:
            for step, seconds in summary.step_avg_sec.items():
                steps.setdefault(step, None)
                bucket = acc.get(step)
                if bucket is None:
                    bucket = [0.0, 0]
                    acc[step] = bucket
                bucket[0] += seconds
                bucket[1] += 1
        return {step: total / max(1, n) / 60 for step, (total, n) in acc.items()}

    asis = fold(baseline_summaries)
    tobe = fold(redesigned_summaries)

    return [
        StepComparisonRow(step=step, asis_min=asis.get(step, 0.0), tobe_min=tobe.get(step, 0.0))
        for step in steps
    ]


def compute_kpis(
    baseline_summaries: Sequence[UserSummary],
    redesigned_summaries: Sequence[UserSummary]
) -> Optional[ComparisonKpis]:
    """
    Tempo total médio e soma de backtracks por variante.

    Returns:
        ComparisonKpis, ou None se nenhuma variante tem usuários
    """
    if not baseline_summaries and not redesigned_summaries:
        return None

    def avg_total(summaries: Sequence[UserSummary]) -> float:
        return sum(s.total_min for s in summaries) / max(1, len(summaries))

    return ComparisonKpis(
        asis_avg_total_min=avg_total(baseline_summaries),
        tobe_avg_total_min=avg_total(redesigned_summaries),
        asis_backtracks=sum(s.backtracks for s in baseline_summaries),
        tobe_backtracks=sum(s.backtracks for s in redesigned_summaries),
    )


def compare(
    baseline_events: Iterable[UsageEvent],
    redesigned_events: Iterable[UsageEvent],
    user: Optional[str] = None,
    settings: Optional[AnalyticsSettings] = None
) -> ComparisonResult:
    """Atalho funcional para ComparisonOrchestrator.compare."""
    return ComparisonOrchestrator(settings).compare(baseline_events, redesigned_events, user=user)
