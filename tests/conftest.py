"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to path for all tests
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wikia.client import Wikia


def make_response(data):
    """Build a mock requests response returning the given JSON body."""
    response = Mock()
    response.json.return_value = data
    response.raise_for_status = Mock()
    return response


@pytest.fixture
def temp_log_dir(tmp_path):
    """Provide a temporary directory for log files."""
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    return log_dir


@pytest.fixture
def cross_wiki():
    """Cross-wiki client whose session returns an empty JSON object."""
    api = Wikia()
    api.session.get = Mock(return_value=make_response({}))
    return api


@pytest.fixture
def starwars():
    """Client scoped to the starwars wiki, session mocked like cross_wiki."""
    api = Wikia(wiki="starwars")
    api.session.get = Mock(return_value=make_response({}))
    return api


@pytest.fixture
def sample_top_articles():
    """Sample /Articles/Top response."""
    return {
        "items": [
            {"id": 1, "title": "Luke Skywalker", "url": "/wiki/Luke_Skywalker"},
            {"id": 2, "title": "Category:Jedi", "url": "/wiki/Category:Jedi"},
        ],
        "basepath": "http://starwars.wikia.com",
    }
