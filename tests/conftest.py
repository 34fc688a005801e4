"""
Fixtures compartilhadas dos testes do tobe_analytics.
"""

import pytest
import structlog
from datetime import datetime, timedelta, timezone

from tobe_analytics.config.settings import (
    ENV_DURATION_POLICY,
    ENV_LOG_LEVEL,
    ENV_PHASE_TABLE,
    ENV_REVISIT_POLICY,
)
from tobe_analytics.models import UsageEvent


@pytest.fixture
def base_time():
    """Instante de referência (UTC)."""
    return datetime(2025, 3, 10, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_event(base_time):
    """
    Fábrica de UsageEvent.

    minute: deslocamento em minutos a partir de base_time
    next_minute: deslocamento do próximo evento (define duração)
    """
    def _make(
        user="kim@example.com",
        step=None,
        action=None,
        minute=0,
        next_minute=None,
        duration=None,
        detail=None,
    ):
        occurred_at = base_time + timedelta(minutes=minute)
        next_at = base_time + timedelta(minutes=next_minute) if next_minute is not None else None
        if duration is None and next_minute is not None:
            duration = (next_minute - minute) * 60
        return UsageEvent(
            user_identifier=user,
            step_label=step,
            action_label=action,
            occurred_at=occurred_at,
            next_occurred_at=next_at,
            duration_to_next_seconds=duration,
            detail=detail,
        )

    return _make


@pytest.fixture
def chain(make_event):
    """
    Cria sequência encadeada de um usuário a partir de (step, minute).

    O último evento não tem próximo.
    """
    def _chain(steps, user="kim@example.com", actions=None):
        events = []
        for i, (step, minute) in enumerate(steps):
            next_minute = steps[i + 1][1] if i + 1 < len(steps) else None
            action = actions[i] if actions else None
            events.append(make_event(
                user=user, step=step, action=action,
                minute=minute, next_minute=next_minute
            ))
        return events

    return _chain


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """
    Isola os testes das variáveis TOBE_* do ambiente.

    setenv antes de delenv garante que valores gravados por load_dotenv
    durante o teste também sejam removidos no teardown.
    """
    for name in (ENV_REVISIT_POLICY, ENV_DURATION_POLICY, ENV_PHASE_TABLE, ENV_LOG_LEVEL):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Desfaz configure_logging do CLI (stderr capturado é fechado ao fim do teste)."""
    yield
    structlog.reset_defaults()
