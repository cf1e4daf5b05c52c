"""Tests for the pathgen command line."""

from pathgen.__main__ import main


class TestCommandLine:
    """python -m pathgen."""

    def test_generates_and_reports(self, capsys) -> None:
        exit_code = main(["--rows", "4", "--cols", "4", "--start-row", "3", "--start-col", "1",
                          "--end-row", "0", "--seed", "11"])
        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Paths generated: 1/1" in out
        assert "Path 0" in out
        assert "(3,1) ->" in out

    def test_defaults_to_top_row(self, capsys) -> None:
        assert main(["--seed", "2"]) == 0
        out = capsys.readouterr().out
        assert "end row=0 col=None" in out

    def test_reports_shortfall(self, capsys) -> None:
        exit_code = main(["--rows", "2", "--cols", "2", "--start-row", "0", "--start-col", "0",
                          "--end-row", "1", "--end-col", "1", "--paths", "2", "--seed", "0"])
        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Paths generated: 1/2" in out
        assert "No further path could be generated" in out

    def test_configuration_error(self, capsys) -> None:
        exit_code = main(["--rows", "3", "--start-row", "5"])
        err = capsys.readouterr().err
        assert exit_code == 2
        assert "Invalid start row" in err
