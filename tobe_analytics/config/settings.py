"""
Configuração da análise.

Lê as escolhas de política e a tabela de fases de variáveis de ambiente,
carregando antes um arquivo .env quando presente.
"""

import os
from pathlib import Path
from typing import Optional, Union

import structlog
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError

from tobe_analytics.config.phase_table import DEFAULT_PHASE_TABLE, PhaseTable, load_phase_table
from tobe_analytics.config.policies import (
    DEFAULT_DURATION_POLICY,
    DEFAULT_REVISIT_POLICY,
    RevisitPolicy,
    TotalDurationPolicy,
)
from tobe_analytics.errors import InvalidInput

logger = structlog.get_logger()

ENV_REVISIT_POLICY = "TOBE_REVISIT_POLICY"
ENV_DURATION_POLICY = "TOBE_DURATION_POLICY"
ENV_PHASE_TABLE = "TOBE_PHASE_TABLE"
ENV_LOG_LEVEL = "TOBE_LOG_LEVEL"


class AnalyticsSettings(BaseModel):
    """
    Parâmetros do motor de comparação.

    Attributes:
        revisit_policy: Definição de backtrack usada pelo summarizer
        duration_policy: Definição de tempo total por usuário
        missing_step_label: Rótulo para eventos sem etapa
        phase_table: Tabela Step → Phase
    """

    model_config = ConfigDict(frozen=True)

    revisit_policy: RevisitPolicy = DEFAULT_REVISIT_POLICY
    duration_policy: TotalDurationPolicy = DEFAULT_DURATION_POLICY
    missing_step_label: str = "Other"
    phase_table: PhaseTable = DEFAULT_PHASE_TABLE

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> 'AnalyticsSettings':
        """
        Constrói settings a partir do ambiente.

        Args:
            env_file: Arquivo .env explícito (default: busca a partir do cwd)

        Returns:
            AnalyticsSettings validado

        Raises:
            InvalidInput: Se alguma variável tem valor inválido
        """
        if env_file is not None:
            load_dotenv(env_file)
        else:
            load_dotenv()

        overrides = {}

        revisit = os.getenv(ENV_REVISIT_POLICY)
        if revisit:
            overrides["revisit_policy"] = revisit.strip().lower()

        duration = os.getenv(ENV_DURATION_POLICY)
        if duration:
            overrides["duration_policy"] = duration.strip().lower()

        table_path = os.getenv(ENV_PHASE_TABLE)
        if table_path:
            overrides["phase_table"] = load_phase_table(table_path)

        try:
            settings = cls(**overrides)
        except ValidationError as e:
            raise InvalidInput(f"Invalid analytics settings: {e}") from e

        logger.info(
            "[AnalyticsSettings.from_env] - settings_loaded",
            revisit_policy=settings.revisit_policy.value,
            duration_policy=settings.duration_policy.value,
            custom_phase_table=bool(table_path)
        )

        return settings
