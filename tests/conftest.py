"""
Shared fixtures for the renosite test suite.
Run with: pytest tests -v

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import json
import os
import shutil
import tempfile

import pytest
import requests
from flask import Flask
from requests.structures import CaseInsensitiveDict

from renosite import RenoSite

BACKEND = 'http://backend.test'
UPSTREAM = 'http://upstream.test'
REMOTE = 'http://remote.test'


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="renosite-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


def make_app(tmp_db_dir, **overrides):
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir
    app.config["LOG_DB"] = os.path.join(tmp_db_dir, "app_logs.db")
    app.config["BACKEND_API_URL"] = BACKEND
    app.config["IMAGE_UPSTREAM_URL"] = UPSTREAM
    app.config["IMAGE_REMOTE_URL"] = REMOTE
    app.config["IMAGE_PROXY_TIMEOUT"] = 15
    app.config["IMAGE_PROXY_FALLBACK_ON_TRANSPORT_ERROR"] = True
    app.config.update(overrides)
    RenoSite(app)
    return app


@pytest.fixture
def app(tmp_db_dir):
    """Fully initialised Flask app with every renosite module registered."""
    return make_app(tmp_db_dir)


@pytest.fixture
def app_factory(tmp_db_dir):
    """Build an extra app with config overrides, e.g. app_factory(PROJECTS_PER_PAGE=2)."""
    def _factory(**overrides):
        return make_app(tmp_db_dir, **overrides)
    return _factory


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    """Test client with an admin session already established."""
    client = app.test_client()
    with client.session_transaction() as sess:
        sess['admin_token'] = 'test-token'
        sess['admin_user'] = {'username': 'admin'}
    return client


@pytest.fixture
def fake_response():
    """Factory for real requests.Response objects with canned content."""
    def _make(status=200, json_body=None, content=b'', headers=None, url=''):
        headers = dict(headers or {})
        if json_body is not None:
            content = json.dumps(json_body).encode('utf-8')
            headers.setdefault('content-type', 'application/json')
        response = requests.Response()
        response.status_code = status
        response._content = content
        response.headers = CaseInsensitiveDict(headers)
        response.encoding = 'utf-8'
        response.url = url
        return response
    return _make
