"""
Modelagem Pydantic de eventos de uso.

Este módulo define o modelo de dados para as linhas de telemetria de uso
(As-Is e To-Be), com validação automática, coerção de tipos e aliases
compatíveis com os nomes de coluna da fonte de eventos.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_USER = "unknown"


class UsageEvent(BaseModel):
    """
    Evento de uso: uma linha por ação registrada.

    Os campos next_occurred_at e duration_to_next_seconds são
    pré-calculados pela fonte (janela por usuário ordenada por tempo).
    """

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
    )

    user_identifier: Optional[str] = Field(
        default=None,
        alias='user_email',
        description="Identificador opaco do usuário (e-mail)"
    )
    session_key: Optional[str] = Field(
        default=None,
        alias='treetable_id',
        description="Chave de contexto da fonte, não interpretada"
    )
    step_label: Optional[str] = Field(
        default=None,
        alias='step',
        description="Etapa do fluxo de trabalho"
    )
    action_label: Optional[str] = Field(
        default=None,
        alias='action',
        description="Ação específica executada"
    )
    detail: Any = Field(
        default=None,
        description="Payload opaco, repassado sem modificação"
    )
    occurred_at: datetime = Field(
        ...,
        alias='created_at',
        description="Timestamp do evento em formato ISO-8601"
    )
    next_occurred_at: Optional[datetime] = Field(
        default=None,
        alias='next_created_at',
        description="Timestamp do próximo evento do mesmo usuário"
    )
    duration_to_next_seconds: Optional[float] = Field(
        default=None,
        alias='duration_seconds_to_next',
        description="Segundos até o próximo evento (ausente no último)"
    )
    prev_step_label: Optional[str] = Field(default=None, alias='prev_step')
    next_step_label: Optional[str] = Field(default=None, alias='next_step')

    @field_validator('next_occurred_at', mode='before')
    @classmethod
    def blank_next_is_missing(cls, value: Any) -> Any:
        """Célula vazia (CSV) equivale a ausência do próximo evento."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator('occurred_at', 'next_occurred_at', mode='after')
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        """
        Timestamps sem fuso são interpretados como UTC.

        Garante que eventos naive e aware possam ser ordenados juntos.
        """
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator('duration_to_next_seconds', mode='before')
    @classmethod
    def loose_duration(cls, value: Any) -> Optional[float]:
        """
        Duração ilegível vira None em vez de invalidar a linha.

        A coerção para zero acontece na leitura (ver coerce_seconds).
        """
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, str) and not value.strip():
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    @property
    def user_key(self) -> str:
        """Chave de agrupamento do usuário ("unknown" se ausente)."""
        if self.user_identifier is None:
            return UNKNOWN_USER
        return self.user_identifier

    @property
    def has_next(self) -> bool:
        """True se existe um próximo evento para o mesmo usuário."""
        return self.next_occurred_at is not None
