"""
Testes para RowParser.
"""

import json

import pytest

from tobe_analytics.errors import InvalidInput, MalformedTimestamp
from tobe_analytics.parsers import RowParser, parse_rows


@pytest.fixture
def rows():
    return [
        {
            "user_email": "kim@example.com",
            "step": "EBOM",
            "action": "Open BOM",
            "created_at": "2025-03-10T09:00:00Z",
            "next_created_at": "2025-03-10T09:05:00Z",
            "duration_seconds_to_next": 300,
        },
        {
            "user_email": "kim@example.com",
            "step": "CATIA",
            "action": "Edit part",
            "created_at": "2025-03-10T09:05:00Z",
            "next_created_at": None,
            "duration_seconds_to_next": None,
        },
    ]


class TestParseRows:
    """Parse de registros em memória."""

    def test_parse_success(self, rows):
        events = parse_rows(rows)

        assert len(events) == 2
        assert events[0].step_label == "EBOM"
        assert events[1].has_next is False

    def test_malformed_timestamp(self, rows):
        rows[1]["created_at"] = "10/03/2025 9h"

        with pytest.raises(MalformedTimestamp) as exc_info:
            parse_rows(rows)

        assert exc_info.value.row_index == 1
        assert exc_info.value.field == "created_at"

    def test_malformed_next_timestamp(self, rows):
        rows[0]["next_created_at"] = "soon"

        with pytest.raises(MalformedTimestamp) as exc_info:
            parse_rows(rows)

        assert exc_info.value.field == "next_created_at"

    def test_missing_timestamp_is_invalid_input(self, rows):
        del rows[0]["created_at"]

        with pytest.raises(InvalidInput):
            parse_rows(rows)

    def test_non_object_row(self):
        with pytest.raises(InvalidInput):
            parse_rows(["not a row"])

    def test_lenient_mode_collects_errors(self, rows):
        rows.append({"user_email": "x", "created_at": "bad"})
        parser = RowParser(strict=False)

        events = parser.parse_rows(rows)

        assert len(events) == 2
        assert len(parser.errors) == 1
        assert isinstance(parser.errors[0], MalformedTimestamp)


class TestParseFiles:
    """Parse de arquivos JSON e CSV."""

    def test_json_list(self, tmp_path, rows):
        path = tmp_path / "asis.json"
        path.write_text(json.dumps(rows), encoding="utf-8")

        events = RowParser().parse_json_file(path)

        assert [e.step_label for e in events] == ["EBOM", "CATIA"]

    def test_json_rpc_envelope(self, tmp_path, rows):
        path = tmp_path / "asis.json"
        path.write_text(json.dumps({"data": rows, "error": None}), encoding="utf-8")

        assert len(RowParser().parse_json_file(path)) == 2

    def test_json_not_a_list(self, tmp_path):
        path = tmp_path / "asis.json"
        path.write_text(json.dumps({"rows": []}), encoding="utf-8")

        with pytest.raises(InvalidInput):
            RowParser().parse_json_file(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "asis.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(InvalidInput):
            RowParser().parse_json_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RowParser().parse_json_file(tmp_path / "missing.json")

    def test_csv(self, tmp_path):
        path = tmp_path / "tobe.csv"
        path.write_text(
            "user_email,step,action,detail,created_at,next_created_at,duration_seconds_to_next\n"
            'kim@example.com,EBOM,Open,"{""part"": ""A-1""}",2025-03-10T09:00:00Z,2025-03-10T09:02:00Z,120\n'
            "kim@example.com,,Close,plain text,2025-03-10T09:02:00Z,,\n",
            encoding="utf-8",
        )

        events = RowParser().parse_csv_file(path)

        assert len(events) == 2
        assert events[0].detail == {"part": "A-1"}
        assert events[0].duration_to_next_seconds == 120.0
        assert events[1].step_label is None
        assert events[1].detail == "plain text"
        assert events[1].next_occurred_at is None
        assert events[1].duration_to_next_seconds is None
