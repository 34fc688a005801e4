"""
Anotação de transições por usuário.

Reproduz a consulta em janela do banco de telemetria: para cada evento,
o próximo evento do mesmo usuário (por tempo) define next_occurred_at,
duration_to_next_seconds e as etapas vizinhas.
"""

from typing import Dict, Iterable, List

from tobe_analytics.analysis.grouping import group_by_user, sort_chronologically
from tobe_analytics.models.events import UsageEvent


def annotate_transitions(events: Iterable[UsageEvent]) -> List[UsageEvent]:
    """
    Preenche campos de transição ausentes.

    Campos já presentes são preservados. Retorna novas instâncias,
    em ordem cronológica global (estável).

    Args:
        events: Eventos de uma variante

    Returns:
        Eventos anotados
    """
    annotated: List[UsageEvent] = []

    for group in group_by_user(events).values():
        ordered = sort_chronologically(group)
        for i, event in enumerate(ordered):
            prev_event = ordered[i - 1] if i > 0 else None
            next_event = ordered[i + 1] if i + 1 < len(ordered) else None

            update: Dict[str, object] = {}
            if next_event is not None:
                if event.next_occurred_at is None:
                    update["next_occurred_at"] = next_event.occurred_at
                if event.duration_to_next_seconds is None:
                    gap = next_event.occurred_at - event.occurred_at
                    update["duration_to_next_seconds"] = gap.total_seconds()
                if event.next_step_label is None:
                    update["next_step_label"] = next_event.step_label
            if prev_event is not None and event.prev_step_label is None:
                update["prev_step_label"] = prev_event.step_label

            annotated.append(event.model_copy(update=update) if update else event)

    return sort_chronologically(annotated)
