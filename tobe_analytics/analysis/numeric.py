"""
Coerção numérica das durações de telemetria.

Telemetria esparsa é tolerada: duração ausente ou não finita vale zero.
Esse é um default recuperável, distinto dos erros de timestamp.
"""

import math
from typing import Any

import structlog

logger = structlog.get_logger()


def coerce_seconds(value: Any) -> float:
    """
    Converte valor em número finito, com default zero.

    Args:
        value: Duração crua (None, int, float, str)

    Returns:
        float finito e não negativo; 0.0 se ausente, ilegível,
        NaN, infinito ou negativo
    """
    if value is None or isinstance(value, bool):
        return 0.0

    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug("[coerce_seconds] - unreadable_duration_defaulted", value=repr(value))
        return 0.0

    if not math.isfinite(number):
        logger.debug("[coerce_seconds] - non_finite_duration_defaulted", value=repr(value))
        return 0.0

    if number < 0:
        logger.debug("[coerce_seconds] - negative_duration_defaulted", value=number)
        return 0.0

    return number
