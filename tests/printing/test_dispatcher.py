"""
Tests for printing.dispatcher

Test Coverage:
- print_file(): platform commands, error mapping
- print_files(): per-file outcomes, no early stop
"""

import subprocess
from unittest.mock import patch

import pytest

from label_slicer.printing.dispatcher import PrintOutcome, PrintReport, print_file, print_files


@pytest.fixture
def pdf_files(tmp_path):
    paths = []
    for i in (1, 4, 7):
        path = tmp_path / f"TextLabel_Part_{i}.pdf"
        path.write_bytes(b"%PDF-1.7")
        paths.append(path)
    return paths


class TestPrintFile:
    """Tests for print_file()."""

    @patch("label_slicer.printing.dispatcher.platform.system", return_value="Linux")
    @patch("label_slicer.printing.dispatcher.subprocess.run")
    def test_print_file_when_unix_then_uses_lp(self, mock_run, _system, pdf_files):
        # Act
        success, error = print_file(pdf_files[0], "Zebra_ZD420", timeout=5)

        # Assert
        assert (success, error) == (True, None)
        mock_run.assert_called_once_with(
            ["lp", "-d", "Zebra_ZD420", str(pdf_files[0])],
            check=True,
            capture_output=True,
            text=True,
            timeout=5,
        )

    @patch("label_slicer.printing.dispatcher.platform.system", return_value="Windows")
    def test_print_file_when_windows_then_uses_printto_verb(self, _system, pdf_files):
        with patch("label_slicer.printing.dispatcher.os.startfile", create=True) as mock_start:
            success, error = print_file(pdf_files[0], "Zebra ZD420")

        assert success is True
        mock_start.assert_called_once_with(str(pdf_files[0]), "printto", '"Zebra ZD420"')

    @patch("label_slicer.printing.dispatcher.platform.system", return_value="Windows")
    def test_print_file_when_windows_then_timeout_not_applied(self, _system, pdf_files):
        with patch("label_slicer.printing.dispatcher.os.startfile", create=True) as mock_start, \
                patch("label_slicer.printing.dispatcher.subprocess.run") as mock_run:
            success, error = print_file(pdf_files[0], "Zebra", timeout=0.001)

        assert success is True
        assert error is None
        mock_run.assert_not_called()
        assert "timeout" not in mock_start.call_args.kwargs

    def test_print_file_when_missing_then_fails_without_command(self, tmp_path):
        with patch("label_slicer.printing.dispatcher.subprocess.run") as mock_run:
            success, error = print_file(tmp_path / "gone.pdf", "Zebra")

        assert success is False
        assert "does not exist" in error
        mock_run.assert_not_called()

    @patch("label_slicer.printing.dispatcher.platform.system", return_value="Linux")
    def test_print_file_when_lp_missing_then_reports_error(self, _system, pdf_files):
        with patch("label_slicer.printing.dispatcher.subprocess.run", side_effect=FileNotFoundError):
            success, error = print_file(pdf_files[0], "Zebra")

        assert success is False
        assert "not found for Linux" in error

    @patch("label_slicer.printing.dispatcher.platform.system", return_value="Linux")
    def test_print_file_when_lp_rejects_then_reports_stderr(self, _system, pdf_files):
        failure = subprocess.CalledProcessError(1, ["lp"], stderr="lp: The printer or class does not exist.")
        with patch("label_slicer.printing.dispatcher.subprocess.run", side_effect=failure):
            success, error = print_file(pdf_files[0], "Nope")

        assert success is False
        assert "printer or class does not exist" in error

    @patch("label_slicer.printing.dispatcher.platform.system", return_value="Linux")
    def test_print_file_when_timeout_then_reports_error(self, _system, pdf_files):
        with patch(
            "label_slicer.printing.dispatcher.subprocess.run",
            side_effect=subprocess.TimeoutExpired(["lp"], 10),
        ):
            success, error = print_file(pdf_files[0], "Zebra", timeout=10)

        assert success is False
        assert "within 10s" in error


class TestPrintFiles:
    """Tests for print_files()."""

    def test_print_files_when_all_succeed_then_report_is_clean(self, pdf_files):
        with patch("label_slicer.printing.dispatcher.print_file", return_value=(True, None)):
            report = print_files(pdf_files, "Zebra")

        assert report.printer == "Zebra"
        assert [o.path for o in report.outcomes] == pdf_files
        assert report.all_succeeded

    def test_print_files_when_one_fails_then_continues_and_records(self, pdf_files):
        """A failed job does not stop the following jobs."""
        results = [(True, None), (False, "lp failed: offline"), (True, None)]
        with patch("label_slicer.printing.dispatcher.print_file", side_effect=results) as mock_print:
            report = print_files(pdf_files, "Zebra")

        assert mock_print.call_count == 3
        assert [o.success for o in report.outcomes] == [True, False, True]
        assert report.failed == [PrintOutcome(path=pdf_files[1], success=False, error="lp failed: offline")]
        assert len(report.succeeded) == 2
        assert not report.all_succeeded

    def test_print_files_when_empty_then_empty_report(self):
        report = print_files([], "Zebra")

        assert report == PrintReport(printer="Zebra", outcomes=[])
        assert report.all_succeeded
