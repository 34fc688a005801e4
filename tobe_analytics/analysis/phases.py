"""
Phase Classifier - Mapeia etapa/ação para uma fase.
"""

from typing import Optional

from tobe_analytics.config.phase_table import DEFAULT_PHASE_TABLE, PhaseTable


class PhaseClassifier:
    """
    Classificador de fases baseado em tabela.

    Função total: nunca lança exceção. Ordem de decisão:
    1. Etapa (sem espaços nas bordas) presente na tabela
    2. Regras de fallback (substring em etapa ou ação, case-insensitive)
    3. Fase default da tabela

    Args:
        table: Tabela de fases (default: DEFAULT_PHASE_TABLE)
    """

    def __init__(self, table: PhaseTable = DEFAULT_PHASE_TABLE):
        self.table = table

    def classify(self, step: Optional[str], action: Optional[str] = None) -> str:
        """
        Classifica um evento.

        Args:
            step: Rótulo da etapa (pode ser None)
            action: Rótulo da ação (pode ser None)

        Returns:
            Nome da fase
        """
        step_key = (step or "").strip()

        phase = self.table.phase_for_step(step_key)
        if phase is not None:
            return phase

        haystacks = (step_key.lower(), (action or "").strip().lower())
        for rule in self.table.fallback:
            needle = rule.contains.lower()
            if any(needle in text for text in haystacks):
                return rule.phase

        return self.table.default_phase

    def color(self, phase: str) -> Optional[str]:
        """Cor configurada para a fase."""
        return self.table.color_for(phase)
