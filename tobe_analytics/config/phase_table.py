"""
Tabela Step → Phase.

A tabela é dado de configuração imutável, injetado no classificador.
Pode ser estendida por arquivo YAML sem alterar o algoritmo.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from tobe_analytics.errors import InvalidInput

logger = structlog.get_logger()


class FallbackRule(BaseModel):
    """Regra heurística: substring (case-insensitive) → fase."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    contains: str = Field(..., min_length=1)
    phase: str = Field(..., min_length=1)


class PhaseTable(BaseModel):
    """
    Configuração de fases.

    Attributes:
        phases: Fases conhecidas, na ordem de exibição
        steps: Mapeamento etapa (já sem espaços nas bordas) → fase
        colors: Cor de cada fase (timeline)
        fallback: Regras aplicadas em ordem quando a etapa não é conhecida
        default_phase: Fase quando nenhuma regra casa
    """

    model_config = ConfigDict(frozen=True)

    phases: Tuple[str, ...]
    steps: Dict[str, str] = Field(default_factory=dict)
    colors: Dict[str, str] = Field(default_factory=dict)
    fallback: Tuple[FallbackRule, ...] = ()
    default_phase: str = "Other"

    @model_validator(mode='after')
    def phases_are_known(self) -> 'PhaseTable':
        """
        Toda fase referenciada precisa estar em phases.

        Raises:
            ValueError: Se etapa, regra ou default apontam para fase desconhecida
        """
        known = set(self.phases)
        referenced = set(self.steps.values()) | {rule.phase for rule in self.fallback}
        referenced.add(self.default_phase)

        unknown = sorted(referenced - known)
        if unknown:
            raise ValueError(f"Phases not declared in 'phases': {unknown}")
        return self

    def phase_for_step(self, step: str) -> Optional[str]:
        """Consulta direta na tabela (sem heurística)."""
        return self.steps.get(step)

    def color_for(self, phase: str) -> Optional[str]:
        """Cor da fase, ou a cor da fase default, ou None."""
        return self.colors.get(phase, self.colors.get(self.default_phase))


DEFAULT_PHASE_TABLE = PhaseTable(
    phases=("Preparation", "Design", "Integration", "Verification", "Stage/Finish", "Other"),
    steps={
        "LOGIN": "Preparation",
        "EBOM": "Preparation",
        "LCA TARGET": "Preparation",
        "CATIA": "Design",
        "REVIEW": "Verification",
        "CHECK List": "Verification",
        "STAGE Change": "Stage/Finish",
        "PROCESS END": "Stage/Finish",
    },
    colors={
        "Preparation": "#6B7280",
        "Design": "#F59E0B",
        "Integration": "#06B6D4",
        "Verification": "#22C55E",
        "Stage/Finish": "#A855F7",
        "Other": "#9CA3AF",
    },
    fallback=(FallbackRule(contains="import", phase="Integration"),),
    default_phase="Other",
)


def _merge(base: PhaseTable, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina o conteúdo do YAML com a tabela base.

    Etapas e cores são sobrepostas; fases novas são acrescentadas ao fim;
    regras de fallback do arquivo vêm antes das regras da base.
    """
    phases = list(base.phases)
    for phase in data.get("phases") or []:
        if phase not in phases:
            phases.append(phase)

    fallback = list(data.get("fallback") or [])
    fallback.extend(rule.model_dump() for rule in base.fallback)

    return {
        "phases": phases,
        "steps": {**base.steps, **(data.get("steps") or {})},
        "colors": {**base.colors, **(data.get("colors") or {})},
        "fallback": fallback,
        "default_phase": data.get("default_phase", base.default_phase),
    }


def load_phase_table(
    path: Union[str, Path],
    base: PhaseTable = DEFAULT_PHASE_TABLE
) -> PhaseTable:
    """
    Carrega tabela de fases de um arquivo YAML.

    Por padrão o arquivo estende a tabela base; com `replace: true`
    o arquivo define a tabela inteira.

    Args:
        path: Caminho do arquivo YAML
        base: Tabela estendida quando replace não é informado

    Returns:
        PhaseTable validada

    Raises:
        InvalidInput: Se o arquivo não existe, não é YAML válido ou
                      descreve uma tabela inconsistente
    """
    path = Path(path)
    if not path.exists():
        raise InvalidInput(f"Phase table not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise InvalidInput(f"Invalid YAML in phase table {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidInput(f"Phase table {path} must be a mapping")

    replace = bool(data.pop("replace", False))
    payload = data if replace else _merge(base, data)

    try:
        table = PhaseTable.model_validate(payload)
    except ValidationError as e:
        raise InvalidInput(f"Invalid phase table {path}: {e}") from e

    logger.info(
        "[load_phase_table] - phase_table_loaded",
        path=str(path),
        replace=replace,
        phases=len(table.phases),
        steps=len(table.steps)
    )

    return table
