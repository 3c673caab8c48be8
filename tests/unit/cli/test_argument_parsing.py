"""Test command line parsing and post-parse validation."""

import pytest
from unittest.mock import patch

from cvrf_writer.exceptions import ValidationError, ConfigurationError


class TestRenderCommand:
    def test_parse_render_defaults(self, arg_parser, mock_path_exists, monkeypatch):
        monkeypatch.delenv("CVRF_WRITER_LOG", raising=False)
        monkeypatch.delenv("CVRF_WRITER_ENCODING", raising=False)

        parsed = arg_parser(['cvrf-writer', 'render', '--input', 'advisory.json'])

        assert parsed.command == 'render'
        assert parsed.input == 'advisory.json'
        assert parsed.sbom is None
        assert parsed.output is None
        assert parsed.encoding is None
        assert parsed.ignore_exceptions is False
        assert parsed.log == 'INFO'
        assert parsed.verbose is False

    def test_parse_render_all_options(self, arg_parser, mock_path_exists):
        parsed = arg_parser([
            'cvrf-writer', '--log', 'DEBUG', '--verbose',
            'render', '--input', 'advisory.json', '--sbom', 'bom.json',
            '--output', 'out.xml', '--encoding', 'ISO-8859-1', '--ignore-exceptions',
        ])

        assert parsed.log == 'DEBUG'
        assert parsed.verbose is True
        assert parsed.sbom == 'bom.json'
        assert parsed.output == 'out.xml'
        assert parsed.encoding == 'ISO-8859-1'
        assert parsed.ignore_exceptions is True

    def test_encoding_from_environment(self, arg_parser, mock_path_exists, monkeypatch):
        monkeypatch.setenv("CVRF_WRITER_ENCODING", "UTF-16")

        parsed = arg_parser(['cvrf-writer', 'render', '--input', 'advisory.json'])

        assert parsed.encoding == 'UTF-16'

    def test_blank_encoding_rejected(self, arg_parser, mock_path_exists):
        with pytest.raises(ValidationError, match="Encoding must not be empty"):
            arg_parser(['cvrf-writer', 'render', '--input', 'advisory.json', '--encoding', '  '])

    def test_output_directory_rejected(self, arg_parser, advisory_path, tmp_path):
        with pytest.raises(ValidationError, match="Output path is a directory"):
            arg_parser(['cvrf-writer', 'render', '--input', advisory_path, '--output', str(tmp_path)])


class TestCheckCommand:
    def test_parse_check_command(self, arg_parser, mock_path_exists):
        parsed = arg_parser(['cvrf-writer', 'check', '--input', 'advisory.json'])

        assert parsed.command == 'check'
        assert parsed.input == 'advisory.json'
        assert not hasattr(parsed, 'output')


class TestPathValidation:
    def test_missing_input_rejected(self, arg_parser, tmp_path):
        missing = str(tmp_path / "missing.json")
        with pytest.raises(ValidationError, match="Input path does not exist"):
            arg_parser(['cvrf-writer', 'check', '--input', missing])

    def test_missing_sbom_rejected(self, arg_parser, advisory_path, tmp_path):
        missing = str(tmp_path / "bom.json")
        with pytest.raises(ValidationError, match="SBOM path does not exist"):
            arg_parser(['cvrf-writer', 'render', '--input', advisory_path, '--sbom', missing])


class TestArgparseErrors:
    def test_command_is_required(self, arg_parser):
        with pytest.raises(SystemExit):
            arg_parser(['cvrf-writer'])

    def test_input_is_required(self, arg_parser):
        with pytest.raises(SystemExit):
            arg_parser(['cvrf-writer', 'render'])

    def test_unknown_log_level_on_command_line(self, arg_parser, mock_path_exists):
        with pytest.raises(SystemExit):
            arg_parser(['cvrf-writer', '--log', 'TRACE', 'check', '--input', 'advisory.json'])


def test_unknown_log_level_from_environment(arg_parser, mock_path_exists, monkeypatch):
    monkeypatch.setenv("CVRF_WRITER_LOG", "trace")

    with pytest.raises(ConfigurationError, match="Invalid log level 'TRACE'"):
        arg_parser(['cvrf-writer', 'check', '--input', 'advisory.json'])


def test_log_level_from_environment_is_uppercased(arg_parser, mock_path_exists, monkeypatch):
    monkeypatch.setenv("CVRF_WRITER_LOG", "debug")

    parsed = arg_parser(['cvrf-writer', 'check', '--input', 'advisory.json'])

    assert parsed.log == 'DEBUG'
