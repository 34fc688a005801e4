"""
Modelos de dados do tobe_analytics.

Este pacote contém o modelo Pydantic dos eventos de uso e os objetos de
valor derivados da comparação.
"""

from tobe_analytics.models.events import UNKNOWN_USER, UsageEvent
from tobe_analytics.models.summaries import (
    ComparisonKpis,
    PhaseRow,
    StepComparisonRow,
    TimelineSegment,
    UserSummary,
)

__all__ = [
    "UNKNOWN_USER",
    "UsageEvent",
    "UserSummary",
    "PhaseRow",
    "TimelineSegment",
    "StepComparisonRow",
    "ComparisonKpis",
]
