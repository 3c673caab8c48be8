import os
import json
import argparse

import pytest

from cvrf_writer.document import Document

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), 'fixtures')


@pytest.fixture
def advisory_path():
    return os.path.join(FIXTURES_DIR, 'advisory.json')


@pytest.fixture
def cyclonedx_sbom_path():
    return os.path.join(FIXTURES_DIR, 'cyclonedx-bom.json')


@pytest.fixture
def advisory_data(advisory_path):
    with open(advisory_path, 'r', encoding='utf-8') as f:
        return json.load(f)


@pytest.fixture
def populated_document():
    """A Document with every field needed for a complete CVRF record."""
    document = Document()
    document.set_language("en")
    document.set_document_title("Acme Widgets Remote Code Execution")
    document.set_document_type("Security Advisory")
    document.set_document_publisher("vendor")
    document.set_identification("ACME-SA-2024-001")
    document.set_status("final")
    document.set_initial_release_date("2024-01-10T00:00:00Z")
    document.set_current_release_date("2024-02-01T00:00:00Z")
    document.set_revision_history([
        {"version": "1.0", "date": "2024-01-10T00:00:00Z", "description": "Initial release"},
        {"version": "1.1", "date": "2024-02-01T00:00:00Z", "description": "Added fixed versions"},
    ])
    document.set_document_notes([
        {"title": "Summary", "audience": "All", "type": "Summary", "text": "Remote code execution in Widgets."},
    ])
    document.set_products([
        {"name": "Acme Widgets 3.2", "branches": [
            {"type": "Vendor", "name": "Acme"},
            {"type": "Product Family", "name": "Widgets"},
        ]},
    ])
    document.set_vulnerabilities([
        {"title": "Deserialization of untrusted data", "notes": [
            {"title": "Details", "audience": "All", "type": "Description", "text": "Request bodies are deserialized."},
        ]},
    ])
    return document


@pytest.fixture
def mock_params(mocker, advisory_path):
    """Provides a mocked argparse.Namespace object for handler tests."""
    params = mocker.MagicMock(spec=argparse.Namespace)
    params.command = "render"
    params.input = advisory_path
    params.sbom = None
    params.output = None
    params.encoding = None
    params.ignore_exceptions = False
    params.log = "INFO"
    params.verbose = False
    return params
