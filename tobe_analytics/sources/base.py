"""
Contrato das fontes de eventos.

A fonte real (store remoto com procedure fixa) é um colaborador externo;
aqui fica apenas o contrato e a consulta já parseada.
"""

from datetime import datetime, timezone
from typing import List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from tobe_analytics.models.events import UsageEvent


class EventQuery(BaseModel):
    """
    Parâmetros de consulta (from, to, user) já convertidos.

    Attributes:
        start: Início da janela (inclusive)
        end: Fim da janela (inclusive)
        user: Identificador exato do usuário
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    start: Optional[datetime] = None
    end: Optional[datetime] = None
    user: Optional[str] = None

    @field_validator('start', 'end', mode='after')
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator('user', mode='after')
    @classmethod
    def blank_user_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @model_validator(mode='after')
    def window_is_ordered(self) -> 'EventQuery':
        if self.start and self.end and self.start > self.end:
            raise ValueError(f"start {self.start.isoformat()} is after end {self.end.isoformat()}")
        return self

    def matches(self, event: UsageEvent) -> bool:
        """True se o evento está na janela e pertence ao usuário filtrado."""
        if self.start is not None and event.occurred_at < self.start:
            return False
        if self.end is not None and event.occurred_at > self.end:
            return False
        if self.user is not None and event.user_identifier != self.user:
            return False
        return True


class EventSource(Protocol):
    """Fonte de eventos de uma variante."""

    def fetch(self, query: EventQuery) -> List[UsageEvent]:
        ...
