"""Tests for the CSV, table, and JSON reporters."""

import json

import pytest

from acautils.findings.models import ChangeRecord, MatchRecord
from acautils.output import csv_report, json_report, parse_mode, table


def _records():
    return [
        MatchRecord(ip_key="host.ip", ip_value="192.168.1.1", port_key="server.port",
                    port_value="8080", file_path="config/app.properties", line_no=42),
        MatchRecord(ip_value="10.0.0.1", file_path="notes, old.txt", line_no=3),
    ]


class TestParseMode:
    @pytest.mark.parametrize(
        "value,default,expected",
        [("csv", "table", "csv"), ("CSV", "table", "csv"), ("table", "json", "table"),
         ("json", "csv", "json"), (" Json ", "csv", "json"), ("invalid", "table", "table"),
         ("", "json", "json"), (None, "csv", "csv")],
    )
    def test_parse(self, value, default, expected):
        assert parse_mode(value, default) == expected


class TestCsvReport:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("simple", "simple"),
            ("with,comma", '"with,comma"'),
            ('with"quote', '"with""quote"'),
            ("with\nnewline", '"with\nnewline"'),
            ("with\rcarriage", '"with\rcarriage"'),
            ('multiple,"issues"\n', '"multiple,""issues""\n"'),
            ("", ""),
        ],
    )
    def test_escape(self, raw, expected):
        assert csv_report.csv_escape(raw) == expected

    def test_render(self):
        out = csv_report.render(_records())
        assert out.splitlines() == [
            "IP Key,IP Value,Port Key,Port Value,File Path,Line Number",
            "host.ip,192.168.1.1,server.port,8080,config/app.properties,42",
            ',10.0.0.1,,,"notes, old.txt",3',
        ]

    def test_render_empty(self):
        assert csv_report.render([]) == csv_report.HEADER + "\n"


class TestTable:
    def test_alignment(self):
        out = table.render(("Col1", "Column2", "Col3"), [("A", "BB", "CCC"), ("DDDD", "E", "FF")])
        assert out.splitlines() == [
            "Col1  Column2  Col3",
            "----  -------  ----",
            "A     BB       CCC",
            "DDDD  E        FF",
        ]

    def test_header_only(self):
        out = table.render(("Adapter", "Old"), [])
        assert out.splitlines() == ["Adapter  Old", "-------  ---"]

    def test_display_width(self):
        assert table.display_width("hello") == 5
        assert table.display_width("") == 0
        assert table.display_width("café") == 4

    def test_wide_characters_align(self):
        out = table.render(("K", "V"), [("日本", "x"), ("ab", "y")])
        lines = out.splitlines()
        assert lines[2] == "日本  x"
        assert lines[3] == "ab    y"

    def test_render_records(self):
        lines = table.render_records(_records()).splitlines()
        assert lines[0].split() == ["IP", "Key", "IP", "Value", "Port", "Key", "Port", "Value", "File", "Path", "Line"]
        assert set(lines[1]) <= {"-", " "}
        assert lines[2].endswith("42")

    def test_render_changes(self):
        out = table.render_changes([ChangeRecord("billing.adapter", "0", "1", "env/dev/parameters.properties")])
        lines = out.splitlines()
        assert lines[0] == "Adapter          Old  New  File"
        assert lines[2] == "billing.adapter  0    1    env/dev/parameters.properties"


class TestJsonReport:
    def test_records(self):
        data = json.loads(json_report.render_records(_records()))
        assert data[0] == {
            "ipKey": "host.ip",
            "ipValue": "192.168.1.1",
            "portKey": "server.port",
            "portValue": "8080",
            "filePath": "config/app.properties",
            "lineNumber": 42,
        }
        assert data[1]["ipKey"] == ""

    def test_indented(self):
        assert "\n  {" in json_report.render_records(_records())

    def test_changes(self):
        data = json.loads(json_report.render_changes([ChangeRecord("a", "1", "0", "p")]))
        assert data == [{"adapter": "a", "old": "1", "new": "0", "filePath": "p"}]

    def test_empty(self):
        assert json_report.render_records([]) == "[]"
        assert json_report.render_changes([]) == "[]"
