"""
Fontes de eventos: contrato, fontes locais e leitura paralela.
"""

from .base import EventQuery, EventSource
from .window import annotate_transitions
from .files import CsvFileSource, InMemorySource, JsonFileSource, source_for_path
from .fanout import ASIS, TOBE, fetch_both

__all__ = [
    "EventQuery",
    "EventSource",
    "annotate_transitions",
    "InMemorySource",
    "JsonFileSource",
    "CsvFileSource",
    "source_for_path",
    "fetch_both",
    "ASIS",
    "TOBE",
]
