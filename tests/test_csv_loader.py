from __future__ import annotations

import pytest

from csv2gexf.errors import CellValueError, SchemaError, TableParseError, TableReadError
from csv2gexf.ingest.csv_loader import build_read_options, load_table, read_table, sniff_delimiter
from csv2gexf.ingest.models import TableConfig
from csv2gexf.schema.elements import TableKind


class TestSniffDelimiter:
    @pytest.mark.parametrize(
        "sample, expected",
        [
            ("a,b,c\n1,2,3\n", ","),
            ("a;b;c\n1;2;3\n", ";"),
            ("a\tb\tc\n1\t2\t3\n", "\t"),
            ("a|b|c\n1|2|3\n", "|"),
        ],
    )
    def test_detects_common_delimiters(self, sample, expected):
        assert sniff_delimiter(sample) == expected

    def test_falls_back_to_default(self):
        assert sniff_delimiter("id\nn1\n") == ","
        assert sniff_delimiter("") == ","


class TestReadOptions:
    def test_csv_parse_names_are_mapped(self):
        options = build_read_options({"delimiter": ";", "skip_empty_lines": False, "columns": True, "trim": True}, "")

        assert options["sep"] == ";"
        assert options["skip_blank_lines"] is False
        assert "columns" not in options and "trim" not in options
        assert options["header"] is None and options["dtype"] is str
        assert options["na_filter"] is True and options["keep_default_na"] is False

    def test_missing_delimiter_is_sniffed(self):
        assert build_read_options({}, "a;b\n1;2\n")["sep"] == ";"


class TestReadTable:
    def test_cells_are_trimmed_strings(self, write_csv):
        path = write_csv("nodes.csv", "id , label\n n1 ,  Node One \n\nn2,NA\n")

        table = read_table(path, TableKind.NODE)

        assert table.headers == ["id", "label"]
        assert table.records == [{"id": "n1", "label": "Node One"}, {"id": "n2", "label": "NA"}]
        assert table.raw_path == str(path.resolve())

    def test_trim_can_be_disabled(self, write_csv):
        path = write_csv("nodes.csv", "id,label\nn1, spaced \n")

        table = read_table(path, TableKind.NODE, {"trim": False, "delimiter": ","})

        assert table.records == [{"id": "n1", "label": " spaced "}]

    def test_iter_records_follows_file_order(self, write_csv):
        table = read_table(write_csv("nodes.csv", "id\nb\na\n"), TableKind.NODE, {"delimiter": ","})

        assert [r["id"] for r in table.iter_records()] == ["b", "a"]

    def test_header_only_table(self, write_csv):
        table = read_table(write_csv("nodes.csv", "id,label\n"), TableKind.NODE)

        assert table.headers == ["id", "label"]
        assert len(table) == 0

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.csv"

        with pytest.raises(TableReadError, match="Failed to read .*missing.csv") as excinfo:
            read_table(missing, TableKind.NODE)

        assert isinstance(excinfo.value, OSError)

    def test_empty_file(self, write_csv):
        with pytest.raises(TableParseError):
            read_table(write_csv("empty.csv", ""), TableKind.NODE)

    def test_ragged_rows(self, write_csv):
        with pytest.raises(TableParseError):
            read_table(write_csv("bad.csv", "id,label\nn1,one,extra\n"), TableKind.NODE, {"delimiter": ","})

    def test_short_rows_are_rejected(self, write_csv):
        path = write_csv("short.csv", "id,label,score\nn1,One,1\nn2,Two\n")

        with pytest.raises(TableParseError, match="Row 2 has 2 fields, expected 3"):
            read_table(path, TableKind.NODE, {"delimiter": ","})

    def test_trailing_empty_field_is_kept(self, write_csv):
        path = write_csv("nodes.csv", "id,label,score\nn1,One,\n")

        table = read_table(path, TableKind.NODE, {"delimiter": ","})

        assert table.records == [{"id": "n1", "label": "One", "score": ""}]


class TestLoadTable:
    def test_validates_and_coerces(self, node_csv):
        config = TableConfig(
            file=node_csv,
            schema=["id", "label", {"target": "attributes", "id": "score", "type": "float"}, {"target": "attributes", "type": "boolean"}, {"target": "viz", "id": "color"}],
            parseOptions={"delimiter": ","},
        )

        table, schema = load_table(config, TableKind.NODE)

        assert schema.kind is TableKind.NODE
        assert table.records[0] == {
            "id": "n1",
            "label": "Node One",
            "score": 3.14,
            "active": True,
            "color": "rgb(255,204,0)",
        }
        assert [r["active"] for r in table.records] == [True, False, True]

    def test_schema_errors_surface(self, edge_csv):
        config = TableConfig(file=edge_csv, schema=["source", "target", "weight"])

        with pytest.raises(SchemaError, match="4 columns and 3 schema elements in the edge schema"):
            load_table(config, TableKind.EDGE)

    def test_value_errors_surface(self, write_csv):
        path = write_csv("edges.csv", "source,target,weight\na,b,heavy\n")
        config = TableConfig(file=path, schema=["source", "target", "weight"])

        with pytest.raises(CellValueError):
            load_table(config, TableKind.EDGE)


def test_byte_order_mark_is_dropped(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_bytes("id,label\nn1,one\n".encode("utf-8-sig"))

    assert read_table(path, TableKind.NODE).headers == ["id", "label"]
