"""
Estratégias nomeadas para agregados com semânticas divergentes.

As duas implementações observadas de "backtrack" e de "tempo total"
são preservadas lado a lado; o chamador escolhe explicitamente.
"""

from enum import Enum


class RevisitPolicy(str, Enum):
    """Definições de retrabalho (backtrack)."""

    # Policy A: mesma etapa do evento imediatamente anterior
    CONSECUTIVE_STEP = "consecutive_step"
    # Policy B: ação já concluída antes, ignorando repetições imediatas
    ACTION_REVISIT = "action_revisit"
    # Policy C: etapa já vista em qualquer ponto anterior
    STEP_REVISIT = "step_revisit"


class TotalDurationPolicy(str, Enum):
    """Definições de tempo total por usuário."""

    # Soma de duration_to_next_seconds
    SUM_OF_DURATIONS = "sum_of_durations"
    # Diferença entre o primeiro e o último evento
    FIRST_TO_LAST = "first_to_last"


DEFAULT_REVISIT_POLICY = RevisitPolicy.STEP_REVISIT
DEFAULT_DURATION_POLICY = TotalDurationPolicy.SUM_OF_DURATIONS
