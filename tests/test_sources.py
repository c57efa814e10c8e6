import pytest

from popreport.errors import SourceParseError
from popreport.ir.model import Record
from popreport.sources.csv_source import CsvRecordSource, discover_sources


def test_reads_city_state_population(tmp_path, write_csv):
    write_csv("a.csv", ["Los Angeles,CA,5000", "", "New York, NY , 9000"])
    records = CsvRecordSource(str(tmp_path)).read("a.csv")
    assert records == [Record("CA", "Los Angeles", 5000), Record("NY", "New York", 9000)]


def test_bad_population_fails_whole_source(tmp_path, write_csv):
    write_csv("bad.csv", ["LA,CA,5000", "SF,CA,lots"])
    with pytest.raises(SourceParseError) as exc:
        CsvRecordSource(str(tmp_path)).read("bad.csv")
    assert exc.value.source_id == "bad.csv"
    assert "line 2" in exc.value.reason


def test_short_row_and_missing_file(tmp_path, write_csv):
    write_csv("short.csv", ["LA,CA"])
    source = CsvRecordSource(str(tmp_path))
    with pytest.raises(SourceParseError):
        source.read("short.csv")
    with pytest.raises(SourceParseError) as exc:
        source.read("missing.csv")
    assert isinstance(exc.value.cause, OSError)


def test_discover_sources_natural_order(tmp_path, write_csv):
    for name in ["cities10.csv", "cities2.csv", "cities1.csv", "notes.txt"]:
        write_csv(name, [])
    assert discover_sources(str(tmp_path)) == ["cities1.csv", "cities2.csv", "cities10.csv"]


def test_utf8_bom_and_non_ascii_labels(tmp_path):
    (tmp_path / "bom.csv").write_bytes(b"\xef\xbb\xbf" + "São Paulo,SP,12000000\nZürich,ZH,400000\n".encode("utf-8"))
    records = CsvRecordSource(str(tmp_path)).read("bom.csv")
    assert records == [Record("SP", "São Paulo", 12000000), Record("ZH", "Zürich", 400000)]
