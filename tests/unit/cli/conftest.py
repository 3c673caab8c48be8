import logging

import pytest
from unittest.mock import patch


@pytest.fixture
def mock_path_exists():
    """Mock os.path.exists to return True by default."""
    with patch('os.path.exists', return_value=True) as mock:
        yield mock


@pytest.fixture
def arg_parser():
    """Parse an argument list without affecting sys.argv."""
    def _parse(args_list):
        from cvrf_writer.cli import parse_cmdline_args
        with patch('sys.argv', args_list):
            return parse_cmdline_args()
    return _parse


@pytest.fixture
def isolated_logging(tmp_path, monkeypatch):
    """Run main() from a scratch directory and restore the root logger afterwards."""
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield tmp_path
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def mock_handlers():
    """Mock the command handlers where main() imports them."""
    with patch("cvrf_writer.main.handle_render") as mock_render, \
         patch("cvrf_writer.main.handle_check") as mock_check:
        yield {"render": mock_render, "check": mock_check}
