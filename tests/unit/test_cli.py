# ============================================================================
# tests/unit/test_cli.py
# ============================================================================
"""
Tests for the command-line entry point
"""

from pathlib import Path

import pytest

from sut_audit import cli
from sut_audit.config import base_settings


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Leave pytest's log capture alone"""
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)


def test_parser_defaults():
    args = cli.build_parser().parse_args([])
    assert args.input_dir == base_settings.INPUT_DIR
    assert args.output_dir == base_settings.OUTPUT_DIR
    assert args.sut_path is None


def test_parser_arguments():
    args = cli.build_parser().parse_args(
        ["scans", "--output-dir", "results", "--sut-path", "SUT.txt", "--json-logs"]
    )
    assert args.input_dir == Path("scans")
    assert args.output_dir == Path("results")
    assert args.sut_path == Path("SUT.txt")
    assert args.json_logs is True


def test_missing_sut_exits_nonzero(tmp_path):
    code = cli.main([
        str(tmp_path),
        "--output-dir", str(tmp_path / "out"),
        "--sut-path", str(tmp_path / "missing.pdf"),
    ])
    assert code == 1
    assert not (tmp_path / "out").exists()


def test_missing_input_dir_exits_nonzero(tmp_path, sut_file):
    code = cli.main([
        str(tmp_path / "nope"),
        "--output-dir", str(tmp_path / "out"),
        "--sut-path", str(sut_file),
    ])
    assert code == 1


def test_empty_input_dir_succeeds(tmp_path, sut_file):
    inputs = tmp_path / "inputs"
    inputs.mkdir()

    code = cli.main([
        str(inputs),
        "--output-dir", str(tmp_path / "out"),
        "--sut-path", str(sut_file),
    ])
    assert code == 0
