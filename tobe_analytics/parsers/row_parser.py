"""
Parser de linhas de eventos de uso.

Converte registros crus (JSON ou CSV) em modelos Pydantic validados,
traduzindo erros de validação para a taxonomia do tobe_analytics.
"""

import csv
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import structlog
from pydantic import ValidationError

from tobe_analytics.errors import AnalyticsError, InvalidInput, MalformedTimestamp
from tobe_analytics.models.events import UsageEvent

logger = structlog.get_logger()

_TIMESTAMP_FIELDS = {"created_at", "occurred_at", "next_created_at", "next_occurred_at"}


class RowParser:
    """
    Parser de linhas de telemetria de uso.

    Args:
        strict: Se True, lança exceção na primeira linha inválida.
                Se False, registra o erro e continua.
    """

    def __init__(self, strict: bool = True):
        self.strict = strict
        self.errors: List[AnalyticsError] = []

    def parse_rows(self, rows: Iterable[Dict[str, Any]]) -> List[UsageEvent]:
        """
        Converte uma sequência de dicionários em eventos.

        Args:
            rows: Registros com os nomes de coluna da fonte (ou nomes de campo)

        Returns:
            Lista de eventos na ordem de entrada

        Raises:
            MalformedTimestamp: Se strict=True e um timestamp é ilegível
            InvalidInput: Se strict=True e a linha é inválida por outro motivo
        """
        self.errors.clear()
        events = []

        for index, row in enumerate(rows):
            try:
                events.append(self.parse_row(row, index))
            except AnalyticsError as e:
                if self.strict:
                    raise
                logger.warning("[RowParser.parse_rows] - row_skipped", row_index=index, reason=str(e))
                self.errors.append(e)

        logger.info(
            "[RowParser.parse_rows] - parsing_complete",
            events=len(events),
            errors=len(self.errors)
        )

        return events

    def parse_row(self, row: Dict[str, Any], index: Optional[int] = None) -> UsageEvent:
        """
        Converte um registro em UsageEvent.

        Raises:
            MalformedTimestamp: Timestamp presente mas ilegível
            InvalidInput: Registro não é um objeto ou falta campo obrigatório
        """
        if not isinstance(row, dict):
            raise InvalidInput(f"Row {index}: expected an object, got {type(row).__name__}")

        try:
            return UsageEvent.model_validate(row)
        except ValidationError as e:
            raise _translate(e, index) from e

    def parse_json_file(self, filepath: Union[str, Path]) -> List[UsageEvent]:
        """
        Lê arquivo JSON com uma lista de registros.

        Aceita também {"data": [...]}, formato de resposta de RPC.

        Raises:
            FileNotFoundError: Se o arquivo não existe
            InvalidInput: Se o JSON é inválido ou não é uma lista
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        logger.info("[RowParser.parse_json_file] - parsing_json", file=str(filepath))

        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                payload = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidInput(f"Invalid JSON in {filepath}: {e}") from e

        if isinstance(payload, dict) and "data" in payload:
            payload = payload["data"] or []

        if not isinstance(payload, list):
            raise InvalidInput(f"JSON payload in {filepath} must be a list of objects")

        return self.parse_rows(payload)

    def parse_csv_file(self, filepath: Union[str, Path]) -> List[UsageEvent]:
        """
        Lê arquivo CSV com cabeçalho.

        Células vazias viram None; células de detail com objeto/lista
        JSON são decodificadas.

        Raises:
            FileNotFoundError: Se o arquivo não existe
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        logger.info("[RowParser.parse_csv_file] - parsing_csv", file=str(filepath))

        with open(filepath, 'r', encoding='utf-8', newline='') as f:
            reader = csv.DictReader(f)
            rows = [_clean_csv_row(row) for row in reader]

        return self.parse_rows(rows)


def _clean_csv_row(row: Dict[str, Optional[str]]) -> Dict[str, Any]:
    cleaned: Dict[str, Any] = {}
    for key, value in row.items():
        if key is None:
            continue
        if value is None or not value.strip():
            cleaned[key] = None
        else:
            cleaned[key] = value
    cleaned["detail"] = _decode_detail(cleaned.get("detail"))
    return cleaned


def _decode_detail(value: Any) -> Any:
    """Decodifica detail JSON quando possível; caso contrário mantém o texto."""
    if not isinstance(value, str):
        return value
    text = value.strip()
    if not text.startswith(("{", "[")):
        return value
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return value


def _translate(error: ValidationError, index: Optional[int]) -> AnalyticsError:
    """Mapeia ValidationError do Pydantic para a taxonomia de erros."""
    for detail in error.errors():
        loc = detail.get("loc") or ()
        field = str(loc[0]) if loc else ""
        if field in _TIMESTAMP_FIELDS and detail.get("type") != "missing":
            return MalformedTimestamp(
                f"Row {index}: malformed timestamp in '{field}': {detail.get('msg')}",
                field=field,
                row_index=index
            )

    return InvalidInput(f"Row {index}: {error}")


def parse_rows(rows: Iterable[Dict[str, Any]]) -> List[UsageEvent]:
    """Atalho: parse estrito de registros."""
    return RowParser(strict=True).parse_rows(rows)
