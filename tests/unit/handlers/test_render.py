# tests/unit/handlers/test_render.py

import pytest
from unittest.mock import patch
from lxml import etree

from cvrf_writer.handlers.render import handle_render, save_xml_to_file
from cvrf_writer.exceptions import RenderViolationError, FileSystemError

CVRF_NS = "http://www.icasi.org/CVRF/schema/cvrf/1.1"
PROD_NS = "http://www.icasi.org/CVRF/schema/prod/1.1"


class TestHandleRender:
    def test_writes_output_file(self, mock_params, tmp_path):
        output = tmp_path / "out" / "advisory.xml"
        mock_params.output = str(output)

        assert handle_render(mock_params) is True

        root = etree.parse(str(output)).getroot()
        assert root.tag == f"{{{CVRF_NS}}}cvrfdoc"
        assert root.findtext(f"{{{CVRF_NS}}}DocumentTitle") == "Acme Widgets Remote Code Execution"

    @patch('builtins.print')
    def test_prints_xml_without_output(self, mock_print, mock_params):
        assert handle_render(mock_params) is True

        printed = [call.args[0] for call in mock_print.call_args_list if call.args]
        assert any(text.startswith("<?xml") for text in printed)

    def test_encoding_override(self, mock_params, tmp_path):
        output = tmp_path / "advisory.xml"
        mock_params.output = str(output)
        mock_params.encoding = "ISO-8859-1"

        handle_render(mock_params)

        assert output.read_bytes().startswith(b"<?xml version='1.0' encoding='ISO-8859-1'?>")

    def test_sbom_products_are_appended(self, mock_params, tmp_path, cyclonedx_sbom_path):
        output = tmp_path / "advisory.xml"
        mock_params.output = str(output)
        mock_params.sbom = cyclonedx_sbom_path

        handle_render(mock_params)

        leaves = etree.parse(str(output)).getroot().iter(f"{{{PROD_NS}}}FullProductName")
        assert [leaf.text for leaf in leaves] == [
            "Acme Widgets 3.2", "log4j-core 2.14.1", "requests 2.31.0", "openssl 3.0.7",
        ]

    @patch('cvrf_writer.utilities.error_handling.format_and_print_error')
    def test_strict_mode_raises_for_missing_title(self, mock_format, mock_params, incomplete_advisory_path):
        mock_params.input = incomplete_advisory_path

        with pytest.raises(RenderViolationError) as exc_info:
            handle_render(mock_params)

        assert exc_info.value.field == "document_title"
        mock_format.assert_called_once()

    @patch('builtins.print')
    def test_tolerant_mode_lists_violations(self, mock_print, mock_params, incomplete_advisory_path, tmp_path):
        mock_params.input = incomplete_advisory_path
        mock_params.ignore_exceptions = True
        mock_params.output = str(tmp_path / "partial.xml")

        assert handle_render(mock_params) is True

        printed = [call.args[0] for call in mock_print.call_args_list if call.args]
        assert any("1 required field(s) missing" in text for text in printed)
        assert any("document_title" in text for text in printed)
        root = etree.parse(mock_params.output).getroot()
        assert root.find(f"{{{CVRF_NS}}}DocumentTitle") is None


def test_save_xml_to_file_wraps_os_errors(tmp_path):
    with patch('builtins.open', side_effect=PermissionError("denied")):
        with pytest.raises(FileSystemError, match="Failed to write"):
            save_xml_to_file(str(tmp_path / "out.xml"), "<x/>", "UTF-8")
