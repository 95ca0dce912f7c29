import json
from unittest.mock import MagicMock

import pytest

from humclient.http import ApiClient
from humclient.logout import LogoutDispatcher
from humclient.session import PersistedState
from humclient.ui import Navigator, Notifier


def make_response(status=200, body=None, text=None, reason='OK'):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 400
    response.reason = reason
    if body is not None:
        response.content = json.dumps(body).encode()
        response.json.return_value = body
    else:
        response.content = (text or '').encode()
        response.json.side_effect = ValueError('not json')
    response.text = text if text is not None else response.content.decode()
    return response


class FakeScheduler:
    """Giữ callback lại thay vì chạy sau 1 giây"""

    def __init__(self):
        self.calls = []

    def __call__(self, delay, callback):
        self.calls.append((delay, callback))

    def run_all(self):
        for _, callback in self.calls:
            callback()


@pytest.fixture
def http_session():
    session = MagicMock()
    session.headers = {}
    session.request.return_value = make_response(200, {})
    return session


@pytest.fixture
def dispatcher():
    return LogoutDispatcher()


@pytest.fixture
def client(http_session, dispatcher):
    return ApiClient('http://hum.test', dispatcher, session=http_session)


@pytest.fixture
def state():
    return PersistedState()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def navigator():
    return Navigator('/admin')


@pytest.fixture
def scheduler():
    return FakeScheduler()
