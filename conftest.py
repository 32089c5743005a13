import json
from unittest.mock import MagicMock

import pytest
import requests

from app import create_app
from met_client import MetCollectionClient
from rotator import ArtworkRotator


def make_response(status_code=200, payload=None, content=None):
    """Fake requests.Response carrying a JSON payload."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    if content is None:
        content = json.dumps(payload).encode('utf-8') if payload is not None else b''
    response.content = content
    response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def met_client():
    return MagicMock(spec=MetCollectionClient)


@pytest.fixture
def app(tmp_path, met_client):
    app = create_app({
        'TESTING': True,
        'ROTATION_ENABLED': False,
        'LOG_FILE': str(tmp_path / 'test.log'),
    })
    app.extensions['met_client'] = met_client
    app.extensions['rotator'] = ArtworkRotator(met_client, interval=app.config['ROTATION_INTERVAL'])
    return app


@pytest.fixture
def client(app):
    return app.test_client()
