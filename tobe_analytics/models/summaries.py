"""
Objetos de valor derivados da comparação As-Is vs To-Be.

Todos são imutáveis e recalculados a cada requisição; nenhum é persistido.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class UserSummary:
    """Resumo de um usuário em uma variante (As-Is ou To-Be)."""

    email: str
    total_min: float
    transitions: int
    backtracks: int
    step_avg_sec: Dict[str, float] = field(default_factory=dict)
    event_count: int = 0
    duration_policy: Optional[str] = None
    revisit_policy: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Converte para o formato JSON consumido pelo dashboard."""
        return {
            "email": self.email,
            "totalMin": self.total_min,
            "transitions": self.transitions,
            "backtracks": self.backtracks,
            "stepAvgSec": dict(self.step_avg_sec),
            "events": self.event_count,
        }


@dataclass(frozen=True)
class PhaseRow:
    """
    Linha de comparação por fase.

    Os campos *_avg_min são a média por evento (comparação justa entre
    variantes com volumes diferentes); *_total_min é a soma.
    """

    phase: str
    asis_avg_min: float = 0.0
    asis_total_min: float = 0.0
    asis_events: int = 0
    tobe_avg_min: float = 0.0
    tobe_total_min: float = 0.0
    tobe_events: int = 0
    color: Optional[str] = None

    @property
    def delta_min(self) -> float:
        """Diferença To-Be menos As-Is (negativo = melhoria)."""
        return self.tobe_avg_min - self.asis_avg_min

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase,
            "asisMin": self.asis_avg_min,
            "tobeMin": self.tobe_avg_min,
            "asisTotalMin": self.asis_total_min,
            "tobeTotalMin": self.tobe_total_min,
            "asisEvents": self.asis_events,
            "tobeEvents": self.tobe_events,
            "deltaMin": self.delta_min,
            "color": self.color,
        }


@dataclass(frozen=True)
class TimelineSegment:
    """Segmento de timeline: um por evento, agrupado por usuário."""

    email: str
    step: Optional[str]
    action: Optional[str]
    phase: str
    start: datetime
    end: datetime
    duration_min: float
    color: Optional[str] = None
    detail: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "step": self.step,
            "action": self.action,
            "detail": self.detail,
            "phase": self.phase,
            "color": self.color,
            "at": self.start.isoformat(),
            "nextAt": self.end.isoformat(),
            "durationMin": self.duration_min,
        }


@dataclass(frozen=True)
class StepComparisonRow:
    """Média (em minutos) por etapa, entre usuários, nas duas variantes."""

    step: str
    asis_min: float = 0.0
    tobe_min: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"step": self.step, "asis": self.asis_min, "tobe": self.tobe_min}


@dataclass(frozen=True)
class ComparisonKpis:
    """Indicadores de topo: tempo total médio e soma de retrabalho."""

    asis_avg_total_min: float
    tobe_avg_total_min: float
    asis_backtracks: int
    tobe_backtracks: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "asisAvgTotal": self.asis_avg_total_min,
            "tobeAvgTotal": self.tobe_avg_total_min,
            "asisBack": self.asis_backtracks,
            "tobeBack": self.tobe_backtracks,
        }
