"""Tests for the command line interface."""

import io
import json
from unittest.mock import MagicMock, patch

import pytest

from amfi_nav.main import main, print_records
from amfi_nav.reader import BASE_URL, nav_from_lines


FEED = [
    "Open Ended Schemes(Equity Scheme - Large Cap Fund)",
    "Quant Mutual Fund",
    "1;INF966L01234;-;Quant Large Cap Fund - Direct Plan;12.3456;01-Apr-2024",
    "2;-;-;Quant Large Cap Fund;N.A.;01-Apr-2024",
]


class TestPrintRecords:
    """Tests for record printing."""

    def test_text_output(self):
        """Test fixed-width text rows and the summary."""
        out = io.StringIO()
        err = io.StringIO()

        count, errors = print_records(nav_from_lines(FEED), out=out, err=err)

        assert (count, errors) == (1, 1)
        lines = out.getvalue().splitlines()
        assert lines[0] == "   12.3456  2024-04-01  Quant Large Cap Fund - Direct Plan"
        assert lines[-1] == "Total: 1 Error: 1"
        assert "N.A." in err.getvalue()

    def test_json_output(self):
        """Test JSON lines output."""
        out = io.StringIO()

        print_records(nav_from_lines(FEED), as_json=True, out=out, err=io.StringIO())

        record = json.loads(out.getvalue().splitlines()[0])
        assert record["code"] == 1
        assert record["amc"] == "Quant Mutual Fund"
        assert record["maturity"] == "open_ended"
        assert record["plan"] == "direct"


class TestMain:
    """Tests for the CLI entry point."""

    def test_main_with_file(self, tmp_path, capsys):
        """Test parsing a local file."""
        nav_file = tmp_path / "NAVOpen.txt"
        nav_file.write_text("\n".join(FEED) + "\n", encoding="utf-8")

        main([str(nav_file), "-q"])

        captured = capsys.readouterr()
        assert "Total: 1 Error: 1" in captured.out

    def test_main_missing_file(self, tmp_path, capsys):
        """Test that an unreadable file exits with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.txt"), "-q"])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_main_requires_source(self):
        """Test that a file or URL is required."""
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2

    @patch("amfi_nav.main.nav_from_url")
    def test_main_online(self, mock_from_url, monkeypatch, capsys):
        """Test that --online uses the portal unless overridden."""
        monkeypatch.delenv("AMFI_NAV_URL", raising=False)
        mock_from_url.return_value = nav_from_lines(FEED)

        main(["--online", "-q"])

        mock_from_url.assert_called_once_with(BASE_URL, timeout=30)
        assert "Total: 1 Error: 1" in capsys.readouterr().out

    @patch("amfi_nav.main.nav_from_url")
    def test_main_online_env_override(self, mock_from_url, monkeypatch):
        """Test that AMFI_NAV_URL overrides the portal address."""
        monkeypatch.setenv("AMFI_NAV_URL", "http://localhost:8000/NAVAll.txt")
        mock_from_url.return_value = nav_from_lines([])

        main(["--online", "-q", "--timeout", "5"])

        mock_from_url.assert_called_once_with("http://localhost:8000/NAVAll.txt", timeout=5.0)
