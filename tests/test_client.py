import http.client
import io
import json
import socket
import urllib.error

import pytest
import requests

from zabbix_provider import client as client_module
from zabbix_provider.client import ZabbixAPI
from zabbix_provider.config import get_zabbix_api_url, set_config
from zabbix_provider.errors import ZabbixAPIError


class FakeResponse:
    def __init__(self, body):
        self._body = json.dumps(body).encode('utf-8')

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeLoginResponse:
    def __init__(self, body, status_code=200):
        self._body = body
        self.status_code = status_code
        self.ok = status_code < 400
        self.text = json.dumps(body)

    def json(self):
        return self._body


@pytest.fixture
def sent(monkeypatch):
    """Capture requests passed to urlopen and answer from a queue."""
    captured = {'requests': [], 'responses': []}

    def fake_urlopen(req, timeout=None, context=None):
        captured['requests'].append(req)
        return FakeResponse(captured['responses'].pop(0))

    monkeypatch.setattr(client_module.urllib.request, 'urlopen', fake_urlopen)
    return captured


def test_api_url_gets_endpoint_appended():
    set_config({'zabbix_url': 'https://zabbix.example.com/'})
    assert get_zabbix_api_url() == 'https://zabbix.example.com/api_jsonrpc.php'

    set_config({'zabbix_url': 'https://zabbix.example.com/api_jsonrpc.php'})
    assert get_zabbix_api_url() == 'https://zabbix.example.com/api_jsonrpc.php'


def test_missing_url_raises():
    with pytest.raises(ValueError, match='Zabbix URL not configured'):
        ZabbixAPI().request('user.get')


def test_request_uses_bearer_token(sent):
    set_config({'zabbix_url': 'http://zabbix.local', 'zabbix_token': 'tok'})
    sent['responses'].append({'jsonrpc': '2.0', 'result': [{'userid': '1'}], 'id': 1})

    result = ZabbixAPI().request('user.get', {'userids': '1'})

    assert result == [{'userid': '1'}]
    req = sent['requests'][0]
    assert req.full_url == 'http://zabbix.local/api_jsonrpc.php'
    assert req.get_header('Authorization') == 'Bearer tok'
    body = json.loads(req.data)
    assert body['method'] == 'user.get'
    assert body['params'] == {'userids': '1'}
    assert 'auth' not in body


def test_request_ids_increase(sent):
    set_config({'zabbix_url': 'http://zabbix.local', 'zabbix_token': 'tok'})
    sent['responses'].extend([{'result': []}, {'result': []}])

    api = ZabbixAPI()
    api.request('user.get')
    api.request('proxy.get')

    ids = [json.loads(req.data)['id'] for req in sent['requests']]
    assert ids == [1, 2]


def test_json_rpc_error_raises(sent):
    set_config({'zabbix_url': 'http://zabbix.local', 'zabbix_token': 'tok'})
    sent['responses'].append({'error': {
        'code': -32602,
        'message': 'Invalid params.',
        'data': 'User with username "jdoe" already exists.',
    }})

    with pytest.raises(ZabbixAPIError) as excinfo:
        ZabbixAPI().request('user.create', [{'username': 'jdoe'}])

    assert excinfo.value.code == -32602
    assert excinfo.value.data == 'User with username "jdoe" already exists.'


def test_http_error_raises(monkeypatch):
    set_config({'zabbix_url': 'http://zabbix.local', 'zabbix_token': 'tok'})

    def fail(req, timeout=None, context=None):
        raise urllib.error.HTTPError(req.full_url, 502, 'Bad Gateway', {}, io.BytesIO(b'upstream down'))

    monkeypatch.setattr(client_module.urllib.request, 'urlopen', fail)

    with pytest.raises(ZabbixAPIError, match='HTTP error 502: upstream down'):
        ZabbixAPI().request('user.get')


def test_no_credentials_raises():
    set_config({'zabbix_url': 'http://zabbix.local'})
    with pytest.raises(ValueError, match='No authentication method configured'):
        ZabbixAPI().request('user.get')


def test_login_once_with_user_and_password(monkeypatch, sent):
    set_config({
        'zabbix_url': 'http://zabbix.local',
        'zabbix_user': 'Admin',
        'zabbix_password': 'zabbix',
    })
    logins = []

    def fake_post(url, json=None, **kwargs):
        logins.append(json)
        return FakeLoginResponse({'jsonrpc': '2.0', 'result': 'session-1', 'id': 1})

    monkeypatch.setattr(requests, 'post', fake_post)
    sent['responses'].extend([{'result': []}, {'result': []}])

    api = ZabbixAPI()
    api.request('user.get')
    api.request('usergroup.get')

    assert len(logins) == 1
    assert logins[0]['method'] == 'user.login'
    assert logins[0]['params'] == {'username': 'Admin', 'password': 'zabbix'}
    assert all(req.get_header('Authorization') == 'Bearer session-1' for req in sent['requests'])


def test_failed_login_raises(monkeypatch):
    set_config({
        'zabbix_url': 'http://zabbix.local',
        'zabbix_user': 'Admin',
        'zabbix_password': 'wrong',
    })

    def fake_post(url, json=None, **kwargs):
        return FakeLoginResponse({'error': {
            'code': -32500,
            'message': 'Application error.',
            'data': 'Incorrect user name or password or account is temporarily blocked.',
        }})

    monkeypatch.setattr(requests, 'post', fake_post)

    with pytest.raises(ZabbixAPIError, match='Authentication failed'):
        ZabbixAPI().request('user.get')


@pytest.mark.parametrize('error', [
    socket.timeout('timed out'),
    ConnectionResetError(104, 'Connection reset by peer'),
    http.client.RemoteDisconnected('Remote end closed connection without response'),
])
def test_transport_failures_raise_api_error(monkeypatch, error):
    set_config({'zabbix_url': 'http://zabbix.local', 'zabbix_token': 'tok'})

    def fail(req, timeout=None, context=None):
        raise error

    monkeypatch.setattr(client_module.urllib.request, 'urlopen', fail)

    with pytest.raises(ZabbixAPIError, match='Failed to call user.get') as excinfo:
        ZabbixAPI().request('user.get')

    assert excinfo.value.code == -32000


@pytest.mark.parametrize('body', [['not', 'an', 'object'], 'maintenance'])
def test_non_object_response_raises(sent, body):
    set_config({'zabbix_url': 'http://zabbix.local', 'zabbix_token': 'tok'})
    sent['responses'].append(body)

    with pytest.raises(ZabbixAPIError, match='Unexpected response from user.get') as excinfo:
        ZabbixAPI().request('user.get')

    assert excinfo.value.code == -32700


class HTMLLoginResponse(FakeLoginResponse):
    def json(self):
        raise ValueError('Expecting value: line 1 column 1 (char 0)')


@pytest.mark.parametrize('response, message', [
    (HTMLLoginResponse({}), 'Invalid JSON response from user.login'),
    (FakeLoginResponse(['session-1']), 'Unexpected response from user.login'),
    (FakeLoginResponse({'jsonrpc': '2.0', 'id': 1}), 'no result'),
])
def test_malformed_login_response_raises(monkeypatch, response, message):
    set_config({
        'zabbix_url': 'http://zabbix.local',
        'zabbix_user': 'Admin',
        'zabbix_password': 'zabbix',
    })
    monkeypatch.setattr(requests, 'post', lambda url, **kwargs: response)

    with pytest.raises(ZabbixAPIError, match=message) as excinfo:
        ZabbixAPI().request('user.get')

    assert excinfo.value.code == -32700
