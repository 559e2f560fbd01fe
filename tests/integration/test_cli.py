"""
Integration tests for the command-line interface.
"""
import logging
import shutil
import sys

import pytest

from omemeta.__main__ import main
from omemeta.core.validator import validate_model
from omemeta.metadata.loader import create_metadata


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI attaches to the package logger."""
    yield
    logger = logging.getLogger("omemeta")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def run_cli(*args):
    """Run the CLI with the given arguments and return its exit code."""
    sys.argv = ["omemeta", *args]
    try:
        main()
        return 0
    except SystemExit as e:
        return e.code


class TestCommandLineInterface:
    """Test the command-line interface."""

    def test_cli_help(self, capsys):
        """Test the help output."""
        assert run_cli("--help") == 0

        captured = capsys.readouterr()
        assert "Check and correct the channel metadata" in captured.out
        assert "--correct" in captured.out
        assert "--output" in captured.out
        assert "--no-progress" in captured.out

    def test_check_valid_file(self, data_dir, capsys):
        """Test checking a consistent file."""
        code = run_cli(str(data_dir / "validchannels.ome"), "--no-progress")

        assert code == 0
        captured = capsys.readouterr()
        assert "5 image(s), schema 2013-06" in captured.out
        assert "Image #4 (Image:4): valid" in captured.out

    def test_check_broken_file(self, data_dir, capsys):
        """Test that inconsistent images are reported with a failing exit code."""
        code = run_cli(
            str(data_dir / "brokenchannels-correctable.ome"), "--no-progress"
        )

        assert code == 1
        captured = capsys.readouterr()
        assert "Image #0 (Image:0): correctable" in captured.out

    def test_correct_and_write(self, data_dir, temp_dir, capsys):
        """Test correcting a file and writing the result."""
        output_path = temp_dir / "corrected.ome.xml"

        code = run_cli(
            str(data_dir / "brokenchannels-correctable.ome"),
            "--correct",
            "--output",
            str(output_path),
            "--no-progress",
        )

        assert code == 0
        assert output_path.exists()
        captured = capsys.readouterr()
        assert "Image #7 (Image:7): corrected - changed SizeC from 7 to 4" in captured.out
        assert validate_model(create_metadata(output_path)) is True

    def test_correct_uncorrectable(self, data_dir, capsys):
        """Test that an image that cannot be repaired fails the run."""
        code = run_cli(
            str(data_dir / "brokenchannels-uncorrectable.ome"),
            "--correct",
            "--no-progress",
        )

        assert code == 1
        captured = capsys.readouterr()
        assert "Image #1 (Image:1): uncorrectable" in captured.out

    def test_multiple_inputs(self, data_dir, capsys):
        """Test that every input is processed."""
        code = run_cli(
            str(data_dir / "validchannels.ome"),
            str(data_dir / "2012-06" / "multi-channel-z-series-time-series.ome.xml"),
            "--no-progress",
        )

        assert code == 0
        captured = capsys.readouterr()
        assert "schema 2012-06" in captured.out
        assert "schema 2013-06" in captured.out

    def test_malformed_input(self, temp_dir, capsys):
        """Test that unreadable documents fail the run without a traceback."""
        broken = temp_dir / "broken.ome.xml"
        broken.write_text("<OME><Image></OME>")

        assert run_cli(str(broken), "--no-progress") == 1

    def test_cli_missing_args(self, capsys):
        """Test CLI behavior with missing arguments."""
        with pytest.raises(SystemExit):
            sys.argv = ["omemeta"]
            main()

        captured = capsys.readouterr()
        assert "error" in captured.err.lower()

    def test_missing_input(self, temp_dir, capsys):
        assert run_cli(str(temp_dir / "missing.ome")) == 2
        assert "does not exist" in capsys.readouterr().err

    def test_output_requires_correct(self, data_dir, temp_dir, capsys):
        code = run_cli(
            str(data_dir / "validchannels.ome"), "--output", str(temp_dir / "out.ome")
        )
        assert code == 2
        assert "--output requires --correct" in capsys.readouterr().err

    def test_output_must_not_exist(self, data_dir, temp_dir, capsys):
        existing = temp_dir / "existing.ome"
        shutil.copy(data_dir / "validchannels.ome", existing)

        code = run_cli(
            str(data_dir / "validchannels.ome"),
            "--correct",
            "--output",
            str(existing),
        )
        assert code == 2
        assert "already exists" in capsys.readouterr().err
