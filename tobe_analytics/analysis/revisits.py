"""
Revisit Detector - Contagem de retrabalho ("backtrack").

Três definições convivem e são expostas como estratégias nomeadas
(ver RevisitPolicy):

- CONSECUTIVE_STEP: evento com a mesma etapa do evento imediatamente anterior
- ACTION_REVISIT: retorno a uma ação já concluída, ignorando repetições
  imediatas (registro duplicado)
- STEP_REVISIT: etapa que já apareceu em qualquer ponto anterior
"""

from typing import Callable, Dict, List, Optional, Sequence, Set

from tobe_analytics.analysis.grouping import sort_chronologically
from tobe_analytics.config.policies import RevisitPolicy
from tobe_analytics.models.events import UsageEvent

DEFAULT_STEP_LABEL = "Other"


def _normalize_action(action: Optional[str]) -> str:
    return (action or "").strip().lower()


def count_consecutive_step_repeats(events: Sequence[UsageEvent]) -> int:
    """
    Conta eventos cuja etapa é igual à do evento anterior.

    Etapas ausentes são comparadas como string vazia.

    Args:
        events: Eventos de um usuário, já em ordem cronológica
    """
    backtracks = 0
    for i in range(1, len(events)):
        prev = events[i - 1].step_label or ""
        cur = events[i].step_label or ""
        if prev == cur:
            backtracks += 1
    return backtracks


def count_action_revisits(events: Sequence[UsageEvent]) -> int:
    """
    Conta retornos a ações já vistas, ignorando repetições consecutivas.

    A ação é normalizada (trim, lower-case). Uma ação igual à última ação
    mantida é descartada; uma ação mantida que já estava no conjunto de
    ações vistas conta um backtrack. Ação ausente vale "" e participa
    como qualquer outra.

    Exemplo: [A, A, B, A] → 1

    Args:
        events: Eventos de um usuário, já em ordem cronológica
    """
    seen: Set[str] = set()
    last_kept: Optional[str] = None
    backtracks = 0

    for event in events:
        action = _normalize_action(event.action_label)
        if action == last_kept:
            continue

        if action in seen:
            backtracks += 1
        seen.add(action)
        last_kept = action

    return backtracks


def count_step_revisits(events: Sequence[UsageEvent]) -> int:
    """
    Conta eventos cuja etapa já apareceu antes (a qualquer distância).

    Etapas ausentes contam como "Other".

    Exemplo: [X, Y, X, X] → 2

    Args:
        events: Eventos de um usuário, já em ordem cronológica
    """
    seen: Set[str] = set()
    backtracks = 0

    for event in events:
        step = event.step_label if event.step_label is not None else DEFAULT_STEP_LABEL
        if step in seen:
            backtracks += 1
        seen.add(step)

    return backtracks


_STRATEGIES: Dict[RevisitPolicy, Callable[[Sequence[UsageEvent]], int]] = {
    RevisitPolicy.CONSECUTIVE_STEP: count_consecutive_step_repeats,
    RevisitPolicy.ACTION_REVISIT: count_action_revisits,
    RevisitPolicy.STEP_REVISIT: count_step_revisits,
}


def count_backtracks(events: Sequence[UsageEvent], policy: RevisitPolicy) -> int:
    """
    Calcula backtracks de um usuário segundo a política escolhida.

    Os eventos são reordenados cronologicamente (cópia) antes da contagem.

    Args:
        events: Eventos de um único usuário, em qualquer ordem
        policy: Estratégia de contagem

    Returns:
        Número de backtracks (>= 0)
    """
    ordered: List[UsageEvent] = sort_chronologically(events)
    return _STRATEGIES[RevisitPolicy(policy)](ordered)
