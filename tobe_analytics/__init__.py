"""
tobe-analytics: Comparação de telemetria de uso As-Is vs To-Be.

Este pacote implementa o núcleo de sumarização de eventos (resumo por
usuário, detecção de retrabalho, agregação por fase e timelines) e as
peças de borda para executá-lo offline (parser, fontes locais e CLI).
"""

__version__ = "0.1.0"

# Facilitadores de importação para usuários do pacote
from tobe_analytics.errors import AnalyticsError, InvalidInput, MalformedTimestamp, UpstreamFailure
from tobe_analytics.models import (
    ComparisonKpis,
    PhaseRow,
    StepComparisonRow,
    TimelineSegment,
    UsageEvent,
    UserSummary,
)
from tobe_analytics.config import (
    AnalyticsSettings,
    PhaseTable,
    RevisitPolicy,
    TotalDurationPolicy,
    load_phase_table,
)
from tobe_analytics.analysis import (
    ComparisonOrchestrator,
    ComparisonResult,
    PhaseAggregator,
    PhaseClassifier,
    TimelineBuilder,
    UserSummarizer,
    compare,
    count_backtracks,
)
from tobe_analytics.parsers import RowParser
from tobe_analytics.sources import EventQuery, fetch_both

__all__ = [
    "__version__",
    "AnalyticsError",
    "InvalidInput",
    "MalformedTimestamp",
    "UpstreamFailure",
    "UsageEvent",
    "UserSummary",
    "PhaseRow",
    "TimelineSegment",
    "StepComparisonRow",
    "ComparisonKpis",
    "AnalyticsSettings",
    "PhaseTable",
    "RevisitPolicy",
    "TotalDurationPolicy",
    "load_phase_table",
    "PhaseClassifier",
    "UserSummarizer",
    "PhaseAggregator",
    "TimelineBuilder",
    "ComparisonOrchestrator",
    "ComparisonResult",
    "compare",
    "count_backtracks",
    "RowParser",
    "EventQuery",
    "fetch_both",
]
