import pytest
from typer.testing import CliRunner

from popreport.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_env(monkeypatch, tmp_path):
    monkeypatch.setenv("POPREPORT_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("POPREPORT_HOME", str(tmp_path / "home"))


def test_run_prints_report(tmp_path, write_csv):
    write_csv("cities1.csv", ["LA,CA,5000", "SF,CA,3000"])
    write_csv("cities2.csv", ["NYC,NY,9000"])
    result = runner.invoke(app, ["run", str(tmp_path), "1000", "--workers", "2"])
    assert result.exit_code == 0
    assert "CA: 2\n- LA, 5000\n- SF, 3000\nNY: 1\n- NYC, 9000\n" in result.output


def test_non_numeric_threshold_is_usage_error(tmp_path):
    result = runner.invoke(app, ["run", str(tmp_path), "lots"])
    assert result.exit_code == 2
    assert "Error" in result.output


def test_missing_directory_is_usage_error(tmp_path):
    result = runner.invoke(app, ["run", str(tmp_path / "nope"), "10"])
    assert result.exit_code == 2


def test_file_output_and_skip_report(tmp_path, write_csv):
    write_csv("cities1.csv", ["LA,CA,5000"])
    write_csv("cities2.csv", ["broken"])
    result = runner.invoke(app, ["run", str(tmp_path), "1", "--output", "file"])
    assert result.exit_code == 0
    assert "Skipped cities2.csv" in result.output
    reports = list((tmp_path / "home" / "outputs").rglob("report.txt"))
    assert len(reports) == 1
    assert reports[0].read_text() == "CA: 1\n- LA, 5000\n"


def test_compile_lists_partitions(tmp_path, write_csv):
    for i in range(1, 4):
        write_csv(f"cities{i}.csv", [])
    job = tmp_path / "job.yaml"
    job.write_text(f"job_id: t\ninput_dir: {tmp_path}\nthreshold: 5\nworkers: 4\n")
    result = runner.invoke(app, ["compile", str(job)])
    assert result.exit_code == 0
    assert "task 0: cities1.csv" in result.output
    assert "task 3: (empty)" in result.output


def test_zero_workers_is_rejected(tmp_path, write_csv):
    write_csv("cities1.csv", ["LA,CA,5000"])
    result = runner.invoke(app, ["run", str(tmp_path), "1000", "--workers", "0"])
    assert result.exit_code == 2
    assert "CA: 1" not in result.output
