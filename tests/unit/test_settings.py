"""
Testes para AnalyticsSettings.
"""

import pytest

from tobe_analytics.config import (
    AnalyticsSettings,
    DEFAULT_PHASE_TABLE,
    RevisitPolicy,
    TotalDurationPolicy,
)
from tobe_analytics.errors import InvalidInput


class TestAnalyticsSettings:
    """Leitura de configuração do ambiente."""

    def test_defaults(self, tmp_path):
        settings = AnalyticsSettings.from_env(env_file=tmp_path / "absent.env")

        assert settings.revisit_policy is RevisitPolicy.STEP_REVISIT
        assert settings.duration_policy is TotalDurationPolicy.SUM_OF_DURATIONS
        assert settings.phase_table == DEFAULT_PHASE_TABLE

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TOBE_REVISIT_POLICY", "Action_Revisit")
        monkeypatch.setenv("TOBE_DURATION_POLICY", "first_to_last")

        settings = AnalyticsSettings.from_env(env_file=tmp_path / "absent.env")

        assert settings.revisit_policy is RevisitPolicy.ACTION_REVISIT
        assert settings.duration_policy is TotalDurationPolicy.FIRST_TO_LAST

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TOBE_REVISIT_POLICY=consecutive_step\n", encoding="utf-8")

        settings = AnalyticsSettings.from_env(env_file=env_file)

        assert settings.revisit_policy is RevisitPolicy.CONSECUTIVE_STEP

    def test_phase_table_path(self, monkeypatch, tmp_path):
        table = tmp_path / "phases.yaml"
        table.write_text("steps:\n  PLM SYNC: Integration\n", encoding="utf-8")
        monkeypatch.setenv("TOBE_PHASE_TABLE", str(table))

        settings = AnalyticsSettings.from_env(env_file=tmp_path / "absent.env")

        assert settings.phase_table.steps["PLM SYNC"] == "Integration"

    def test_invalid_policy(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TOBE_REVISIT_POLICY", "whatever")

        with pytest.raises(InvalidInput):
            AnalyticsSettings.from_env(env_file=tmp_path / "absent.env")
