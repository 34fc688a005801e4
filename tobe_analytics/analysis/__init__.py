"""
Núcleo de sumarização de eventos As-Is vs To-Be.

Transformações puras: classificação de fases, detecção de retrabalho,
resumo por usuário, agregação por fase, timelines e comparação.
"""

from .numeric import coerce_seconds
from .grouping import filter_by_user, group_by_user, sort_chronologically
from .phases import PhaseClassifier
from .revisits import (
    count_action_revisits,
    count_backtracks,
    count_consecutive_step_repeats,
    count_step_revisits,
)
from .summarizer import UserSummarizer
from .phase_aggregator import PhaseAggregator, aggregate_phases
from .timeline import TimelineBuilder, build_timelines
from .comparison import (
    ComparisonOrchestrator,
    ComparisonResult,
    compare,
    compare_steps,
    compute_kpis,
)

__all__ = [
    "coerce_seconds",
    "filter_by_user",
    "group_by_user",
    "sort_chronologically",
    "PhaseClassifier",
    "count_backtracks",
    "count_consecutive_step_repeats",
    "count_action_revisits",
    "count_step_revisits",
    "UserSummarizer",
    "PhaseAggregator",
    "aggregate_phases",
    "TimelineBuilder",
    "build_timelines",
    "ComparisonOrchestrator",
    "ComparisonResult",
    "compare",
    "compare_steps",
    "compute_kpis",
]
