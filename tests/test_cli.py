"""Tests for the command line interface."""

import json
import logging

import pytest
import structlog

import cli.main as cli_main
from pstattach.services.archive_reader.base import ArchiveOpenError


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo the logging configuration done by each CLI run."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def archive_path(tmp_path):
    """An existing, readable file standing in for a PST file."""
    path = tmp_path / "mailbox.pst"
    path.write_bytes(b"!BDN")
    return path


@pytest.fixture
def fake_open(monkeypatch, sample_archive):
    """Make the CLI open the in-memory sample archive."""
    opened = []

    def open_archive(path):
        opened.append(path)
        return sample_archive

    monkeypatch.setattr(cli_main, "open_archive", open_archive)
    return opened


class TestArgumentValidation:
    """Test usage errors exit with status 1."""

    def test_too_few_arguments(self, capsys):
        """Test fewer than three arguments prints usage and exits 1."""
        with pytest.raises(SystemExit) as exc_info:
            cli_main.run(["mailbox.pst", "ALL"])

        assert exc_info.value.code == 1
        assert "usage:" in capsys.readouterr().err

    def test_unreadable_archive(self, tmp_path, output_dir, capsys):
        """Test a missing archive file exits 1."""
        with pytest.raises(SystemExit) as exc_info:
            cli_main.run([str(tmp_path / "missing.pst"), "ALL", str(output_dir)])

        assert exc_info.value.code == 1
        assert "readable pst file" in capsys.readouterr().err

    def test_invalid_message_id(self, archive_path, output_dir, capsys):
        """Test a second argument that is neither ALL nor a number exits 1."""
        with pytest.raises(SystemExit) as exc_info:
            cli_main.run([str(archive_path), "some", str(output_dir)])

        assert exc_info.value.code == 1
        assert "is not a number" in capsys.readouterr().err

    def test_output_not_a_directory(self, archive_path, tmp_path, capsys):
        """Test an output path that is not a directory exits 1."""
        with pytest.raises(SystemExit) as exc_info:
            cli_main.run([str(archive_path), "ALL", str(tmp_path / "nope")])

        assert exc_info.value.code == 1
        assert "no directory" in capsys.readouterr().err

    def test_invalid_config(self, archive_path, output_dir, tmp_path):
        """Test an invalid config file exits 1."""
        config_path = tmp_path / "bad.json"
        config_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            cli_main.run([str(archive_path), "ALL", str(output_dir), "--config", str(config_path)])

        assert exc_info.value.code == 1


class TestRun:
    """Test successful and fatal extraction runs."""

    def test_extract_all(self, archive_path, output_dir, fake_open, sample_archive):
        """Test ALL extracts every attachment and closes the archive."""
        status = cli_main.run([str(archive_path), "ALL", str(output_dir)])

        assert status == 0
        assert fake_open == [archive_path]
        assert len(list(output_dir.iterdir())) == 6
        assert sample_archive.closed is True

    def test_all_is_case_insensitive(self, archive_path, output_dir, fake_open):
        """Test "all" with whitespace is accepted."""
        assert cli_main.run([str(archive_path), " all ", str(output_dir)]) == 0
        assert len(list(output_dir.iterdir())) == 6

    def test_extract_single_message(self, archive_path, output_dir, fake_open):
        """Test a numeric id extracts only that message."""
        status = cli_main.run([str(archive_path), "7", str(output_dir)])

        assert status == 0
        assert sorted(p.name for p in output_dir.iterdir()) == ["7_report.pdf", "7_report.pdf_2"]

    def test_missing_message_id_is_fatal(self, archive_path, output_dir, fake_open, sample_archive):
        """Test an unknown message id exits 1 without output."""
        status = cli_main.run([str(archive_path), "999", str(output_dir)])

        assert status == 1
        assert list(output_dir.iterdir()) == []
        assert sample_archive.closed is True

    def test_message_filter_option(self, archive_path, output_dir, fake_open):
        """Test -m restricts extraction to matching messages."""
        status = cli_main.run([str(archive_path), "ALL", str(output_dir), "-mholiday"])

        assert status == 0
        assert [p.name for p in output_dir.iterdir()] == ["200_photo.jpg"]

    def test_folder_filter_option(self, archive_path, output_dir, fake_open):
        """Test -f filters on the parent folder name.

        The root folder is named "Top of Personal Folders", so -fPersonal
        opens every top-level folder, while their own children stay closed
        unless their parent matches too.
        """
        status = cli_main.run([str(archive_path), "ALL", str(output_dir), "-fPersonal"])

        assert status == 0
        assert sorted(p.name for p in output_dir.iterdir()) == [
            "100_invoice.pdf",
            "200_photo.jpg",
            "201_kids.png",
            "7_report.pdf",
            "7_report.pdf_2",
        ]

    def test_bare_folder_option_matches_no_folder(self, archive_path, output_dir, fake_open):
        """Test -f without text enters no subfolder, leaving only the root's messages."""
        status = cli_main.run([str(archive_path), "ALL", str(output_dir), "-f"])

        assert status == 0
        assert sorted(p.name for p in output_dir.iterdir()) == ["7_report.pdf", "7_report.pdf_2"]

    def test_bare_message_option_matches_no_message(self, archive_path, output_dir, fake_open):
        """Test -m without text extracts nothing."""
        status = cli_main.run([str(archive_path), "ALL", str(output_dir), "-m"])

        assert status == 0
        assert list(output_dir.iterdir()) == []

    def test_config_file_applies(self, archive_path, output_dir, fake_open, tmp_path):
        """Test settings from a config file reach the engine."""
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"extraction": {"name_separator": "-"}, "logging": {"level": "warning"}}),
            encoding="utf-8",
        )

        status = cli_main.run(
            [str(archive_path), "7", str(output_dir), "--config", str(config_path)]
        )

        assert status == 0
        assert sorted(p.name for p in output_dir.iterdir()) == ["7-report.pdf", "7-report.pdf-2"]

    def test_open_failure_is_fatal(self, archive_path, output_dir, monkeypatch):
        """Test an archive that cannot be opened exits 1."""

        def open_archive(path):
            raise ArchiveOpenError("not a PST file")

        monkeypatch.setattr(cli_main, "open_archive", open_archive)

        assert cli_main.run([str(archive_path), "ALL", str(output_dir)]) == 1
