"""Tests for the cratepath command-line entry point."""

import json
import logging
from unittest.mock import patch

import pytest

from args import parse_args
from constants import ExitCodes
from crate_metadata.errors import (
    OutputDecodeError,
    PackageNotFoundError,
    ProcessLaunchError,
    SchemaParseError,
)
from crate_metadata.source import CargoMetadataSource, FileMetadataSource
from cratepath import build_source, exit_code_for, main


METADATA = {
    "packages": [
        {
            "name": "serde",
            "version": "1.0.200",
            "id": "registry+https://github.com/rust-lang/crates.io-index#serde@1.0.200",
            "manifest_path": "/reg/serde-1.0.200/Cargo.toml",
        },
        {
            "name": "serde_json",
            "version": "1.0.117",
            "id": "registry+https://github.com/rust-lang/crates.io-index#serde_json@1.0.117",
            "manifest_path": "/reg/serde_json-1.0.117/Cargo.toml",
        },
    ],
    "version": 1,
}


@pytest.fixture
def metadata_file(tmp_path):
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps(METADATA), encoding="utf-8")
    return str(path)


class TestArgParsing:
    """Tests for CLI argument parsing."""

    def test_defaults(self):
        ns = parse_args(["serde"])
        assert ns.PACKAGE == "serde"
        assert ns.OUTPUT_FORMAT == "text"
        assert ns.LOG_LEVEL == "INFO"
        assert ns.DIRECTORY is None
        assert ns.CARGO is None
        assert ns.INPUT_FILE is None
        assert ns.QUIET is False

    def test_all_options(self):
        ns = parse_args([
            "-d", "/work/demo",
            "--cargo", "/opt/cargo",
            "-f", "JSON",
            "--loglevel", "debug",
            "--logfile", "/tmp/cratepath.log",
            "-q",
            "tokio",
        ])
        assert ns.PACKAGE == "tokio"
        assert ns.DIRECTORY == "/work/demo"
        assert ns.CARGO == "/opt/cargo"
        assert ns.OUTPUT_FORMAT == "json"
        assert ns.LOG_LEVEL == "DEBUG"
        assert ns.LOG_FILE == "/tmp/cratepath.log"
        assert ns.QUIET is True

    def test_package_required(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_args([])
        assert exc_info.value.code == 2

    def test_bad_format_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["-f", "csv", "serde"])


class TestBuildSource:
    """Tests for source selection."""

    def test_cargo_source_by_default(self):
        source = build_source(parse_args(["--cargo", "/opt/cargo", "-d", "/work", "serde"]))
        assert isinstance(source, CargoMetadataSource)
        assert source.cargo == "/opt/cargo"
        assert source.cwd == "/work"

    def test_input_file_wins(self, metadata_file):
        source = build_source(parse_args(["-i", metadata_file, "--cargo", "x", "serde"]))
        assert isinstance(source, FileMetadataSource)
        assert source.path == metadata_file


class TestExitCodes:
    """Tests for error-to-exit-code mapping."""

    @pytest.mark.parametrize("exc,code", [
        (ProcessLaunchError("x"), ExitCodes.PROCESS_ERROR),
        (OutputDecodeError("x"), ExitCodes.DECODE_ERROR),
        (SchemaParseError("x"), ExitCodes.SCHEMA_ERROR),
        (PackageNotFoundError("x"), ExitCodes.NOT_FOUND),
    ])
    def test_mapping(self, exc, code):
        assert exit_code_for(exc) is code

    def test_codes_are_distinct(self):
        values = [c.value for c in ExitCodes]
        assert len(values) == len(set(values))


class TestMain:
    """Tests for the main() orchestration."""

    def test_prints_path(self, metadata_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-q", "-i", metadata_file, "serde"])
        assert exc_info.value.code == ExitCodes.SUCCESS.value
        assert capsys.readouterr().out.strip() == "/reg/serde-1.0.200/Cargo.toml"

    def test_json_output(self, metadata_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-q", "-f", "json", "-i", metadata_file, "serde_json"])
        assert exc_info.value.code == 0
        record = json.loads(capsys.readouterr().out)
        assert record == METADATA["packages"][1]

    def test_not_found_exit_code(self, metadata_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-q", "-i", metadata_file, "tokio"])
        assert exc_info.value.code == ExitCodes.NOT_FOUND.value
        assert capsys.readouterr().out == ""

    def test_schema_error_exit_code(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"version": 1}', encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["-q", "-i", str(path), "serde"])
        assert exc_info.value.code == ExitCodes.SCHEMA_ERROR.value

    def test_deeply_nested_metadata_exit_code(self, tmp_path):
        path = tmp_path / "deep.json"
        path.write_text('{"packages": [], "x": ' + "[" * 200000 + "]" * 200000 + "}", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["-q", "-i", str(path), "serde"])
        assert exc_info.value.code == ExitCodes.SCHEMA_ERROR.value

    def test_decode_error_exit_code(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_bytes(b"\xfe\xff")
        with pytest.raises(SystemExit) as exc_info:
            main(["-q", "-i", str(path), "serde"])
        assert exc_info.value.code == ExitCodes.DECODE_ERROR.value

    def test_error_logged_with_stage(self, metadata_file, caplog):
        with caplog.at_level(logging.ERROR):
            with pytest.raises(SystemExit):
                main(["-i", metadata_file, "tokio"])
        assert any("lookup failed" in r.getMessage() for r in caplog.records)

    @patch("crate_metadata.source.subprocess.run", side_effect=FileNotFoundError("cargo"))
    def test_missing_cargo_exit_code(self, _mock_run):
        with pytest.raises(SystemExit) as exc_info:
            main(["-q", "--cargo", "cargo", "serde"])
        assert exc_info.value.code == ExitCodes.PROCESS_ERROR.value

    def test_logfile(self, metadata_file, tmp_path):
        log_path = tmp_path / "cratepath.log"
        with pytest.raises(SystemExit):
            main(["-i", metadata_file, "--logfile", str(log_path), "tokio"])
        assert "tokio" in log_path.read_text(encoding="utf-8")
