"""
Agrupamento e ordenação de eventos por usuário.
"""

from typing import Dict, Iterable, List, Optional

from tobe_analytics.models.events import UsageEvent


def sort_chronologically(events: Iterable[UsageEvent]) -> List[UsageEvent]:
    """
    Retorna nova lista ordenada por occurred_at.

    A ordenação é estável: empates mantêm a ordem de entrada.
    A lista do chamador nunca é alterada.
    """
    return sorted(events, key=lambda e: e.occurred_at)


def group_by_user(events: Iterable[UsageEvent]) -> Dict[str, List[UsageEvent]]:
    """
    Agrupa eventos por user_key, na ordem de primeira aparição.

    Cada chave recebe sua própria lista (get-or-insert explícito).
    """
    groups: Dict[str, List[UsageEvent]] = {}
    for event in events:
        bucket = groups.get(event.user_key)
        if bucket is None:
            bucket = []
            groups[event.user_key] = bucket
        bucket.append(event)
    return groups


def filter_by_user(events: Iterable[UsageEvent], user: Optional[str]) -> List[UsageEvent]:
    """Mantém apenas eventos do usuário informado (match exato); sem filtro se None."""
    if not user:
        return list(events)
    return [e for e in events if e.user_identifier == user]
