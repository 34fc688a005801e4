"""
Configuração do tobe_analytics: tabela de fases, políticas e settings.
"""

from .policies import (
    DEFAULT_DURATION_POLICY,
    DEFAULT_REVISIT_POLICY,
    RevisitPolicy,
    TotalDurationPolicy,
)
from .phase_table import DEFAULT_PHASE_TABLE, FallbackRule, PhaseTable, load_phase_table
from .settings import AnalyticsSettings

__all__ = [
    "RevisitPolicy",
    "TotalDurationPolicy",
    "DEFAULT_REVISIT_POLICY",
    "DEFAULT_DURATION_POLICY",
    "PhaseTable",
    "FallbackRule",
    "DEFAULT_PHASE_TABLE",
    "load_phase_table",
    "AnalyticsSettings",
]
