import json
import pytest
from unittest.mock import MagicMock


# --- Interactions API sample data ---

SAMPLE_API_RESPONSE = {
    "device": {"country": "US", "os": "iOS"},
    "tag_verified": "true",
    "campaigns": {"id": 42, "name": "Spring Launch"},
    "location": {
        "name": "Flagship Store",
        "data": ["aisle-4"],
        "system": ["retail"],
    },
}

# Note: data/system are the wrong types and must come back as empty lists
SAMPLE_LOOSE_API_RESPONSE = {
    "device": "unknown",
    "tag_verified": 1,
    "campaigns": [],
    "location": {"name": "Pop-up", "data": "aisle-4", "system": [1, 2]},
}


def make_mock_response(data):
    """Create a mock urlopen response that works as a context manager."""
    mock_response = MagicMock()
    mock_response.__enter__.return_value = mock_response
    if isinstance(data, bytes):
        mock_response.read.return_value = data
    else:
        mock_response.read.return_value = json.dumps(data).encode()
    return mock_response


@pytest.fixture
def api_response():
    return make_mock_response(SAMPLE_API_RESPONSE)


# --- Flask test client ---

@pytest.fixture
def client():
    from app import app
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


# --- Temp config file ---

@pytest.fixture
def temp_config(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "api_url": "https://api.example.test/v2/interactions",
        "tech": "n",
        "debug": False,
    }))
    import app
    monkeypatch.setattr(app, "CONFIG_PATH", str(config_file))
    return config_file


@pytest.fixture
def recording_delegate():
    from interaction import LoggingDelegate
    return LoggingDelegate()


@pytest.fixture
def mock_urlopen(mocker):
    return mocker.patch("urllib.request.urlopen", return_value=make_mock_response(SAMPLE_API_RESPONSE))
