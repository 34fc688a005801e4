"""
Parsers de linhas de telemetria de uso.
"""

from .row_parser import RowParser, parse_rows

__all__ = ["RowParser", "parse_rows"]
