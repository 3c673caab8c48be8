# tests/unit/handlers/conftest.py

import json

import pytest


@pytest.fixture
def incomplete_advisory_path(tmp_path, advisory_data):
    """Advisory file with the document title removed."""
    del advisory_data["document"]["title"]
    path = tmp_path / "incomplete.json"
    path.write_text(json.dumps(advisory_data), encoding="utf-8")
    return str(path)
