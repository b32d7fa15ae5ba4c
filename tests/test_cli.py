"""Tests for the feedsheets CLI."""

import pytest
from conftest import rows_url

from feedsheets import cli


@pytest.fixture
def run(monkeypatch, client):
    """Run the CLI against the fake-backed client."""
    monkeypatch.setattr(cli, "_build_client", lambda args: client)

    def _run(*argv):
        return cli.main(list(argv))

    return _run


ARGS = ["--key", "K1", "--title", "Budget"]


class TestCommands:
    """Test subcommands."""

    def test_no_command_prints_help(self, run, capsys):
        assert run() == 0
        assert "usage" in capsys.readouterr().out

    def test_status(self, run, capsys):
        assert run("status") == 0
        assert "FEEDSHEETS CONFIGURATION" in capsys.readouterr().out

    def test_worksheets(self, run, capsys):
        assert run("worksheets", *ARGS) == 0
        out = capsys.readouterr().out
        assert "Feb\t1 rows" in out
        assert "Jan\t1 rows" in out

    def test_print(self, run, capsys):
        assert run("print", "Jan", "--format", "pipe", *ARGS) == 0
        assert capsys.readouterr().out == "amt\n10\n"

    def test_print_to_file(self, run, tmp_path):
        output = tmp_path / "jan.tsv"
        assert run("print", "Jan", "-o", str(output), *ARGS) == 0
        assert output.read_text() == "amt\n10\n"

    def test_print_unknown_worksheet(self, run, capsys):
        assert run("print", "Dec", *ARGS) == 1
        assert "Dec" in capsys.readouterr().err

    def test_add(self, run, service, capsys):
        assert run("add", "Mar", "--cols", "5", "--rows", "10", *ARGS) == 0
        assert service.calls("insert_worksheet")[0][2:] == ("Mar", 5, 10)

    def test_delete(self, run, service, capsys):
        assert run("delete", "Feb", *ARGS) == 0
        assert len(service.calls("delete")) == 1

    def test_write(self, run, service, tmp_path, capsys):
        source = tmp_path / "rows.txt"
        source.write_text("name|amt\nrent|10\nfood|5\n")

        assert run("write", "Jan", str(source), "--format", "pipe", *ARGS) == 0

        rows = [event[2] for event in service.calls("insert_row")]
        assert [row.cells for row in rows] == [
            {"name": "rent", "amt": "10"},
            {"name": "food", "amt": "5"},
        ]
        assert "Wrote 2 of 2 rows" in capsys.readouterr().out

    def test_write_ragged_file(self, run, service, tmp_path, capsys):
        """Should write nothing when a row does not match the header."""
        source = tmp_path / "rows.tsv"
        source.write_text("name\tamt\nrent\n")

        assert run("write", "Jan", str(source), *ARGS) == 1

        assert service.calls("insert_row") == []
        assert "row 1 has 1 fields" in capsys.readouterr().err

    def test_worksheets_lists_empty_worksheet(self, run, service, capsys):
        service.rows[rows_url("Feb")] = []
        assert run("worksheets", *ARGS) == 0
        assert "Feb\t0 rows" in capsys.readouterr().out

    def test_client_closed_after_command(self, run, monkeypatch, client):
        closed = []
        monkeypatch.setattr(client, "close", lambda: closed.append(True))
        assert run("delete", "Feb", *ARGS) == 0
        assert closed == [True]

    def test_write_missing_file(self, run, tmp_path, capsys):
        assert run("write", "Jan", str(tmp_path / "missing.tsv"), *ARGS) == 1
        assert "File not found" in capsys.readouterr().err

    def test_key_required(self, run, capsys, monkeypatch):
        monkeypatch.delenv("FEEDSHEETS_KEY", raising=False)
        assert run("worksheets") == 1
        assert "--key" in capsys.readouterr().err

    def test_service_error_reported(self, run, service, capsys):
        service.fail_delete = True
        assert run("delete", "Jan", *ARGS) == 1
        assert "delete rejected" in capsys.readouterr().err


class TestReadRows:
    """Test delimited input parsing."""

    def test_header_and_rows(self, tmp_path):
        source = tmp_path / "rows.tsv"
        source.write_text("name\tamt\nrent\t10\n\n")
        rows = cli.read_rows(source, "\t")
        assert [row.cells for row in rows] == [{"name": "rent", "amt": "10"}]

    def test_empty_file(self, tmp_path):
        source = tmp_path / "rows.tsv"
        source.write_text("")
        assert cli.read_rows(source, "\t") == []

    @pytest.mark.parametrize("line", ["rent", "rent\t10\textra"])
    def test_field_count_mismatch(self, tmp_path, line):
        """Should reject a row whose field count differs from the header."""
        source = tmp_path / "rows.tsv"
        source.write_text(f"name\tamt\nfood\t5\n{line}\n")
        with pytest.raises(ValueError, match="row 2 has"):
            cli.read_rows(source, "\t")
