"""
Taxonomia de erros do tobe_analytics.

Todos os erros do núcleo herdam de AnalyticsError, para que a camada
externa (HTTP, CLI) possa mapear falhas para status/mensagens sem
inspecionar detalhes internos.
"""

from typing import Optional


class AnalyticsError(Exception):
    """Erro base do núcleo de análise."""
    pass


class InvalidInput(AnalyticsError):
    """Grupo de eventos vazio ou malformado."""
    pass


class MalformedTimestamp(AnalyticsError):
    """
    Timestamp que não pode ser convertido em datetime válido.

    Attributes:
        field: Nome do campo com problema (occurred_at, next_occurred_at)
        row_index: Índice da linha de origem, quando conhecido
    """

    def __init__(self, message: str, field: Optional[str] = None, row_index: Optional[int] = None):
        self.field = field
        self.row_index = row_index
        super().__init__(message)


class UpstreamFailure(AnalyticsError):
    """
    Falha reportada pela fonte externa de eventos.

    A mensagem original é propagada de forma opaca.
    """

    def __init__(self, variant: str, message: str):
        self.variant = variant
        self.message = message
        super().__init__(f"{variant} RPC error: {message}")
