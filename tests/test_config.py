from zabbix_provider.config import (
    debug_log,
    get_config,
    get_session_token,
    reset_config,
    set_config,
    store_session_token,
    trace_log,
)


def test_defaults_come_from_environment(monkeypatch):
    monkeypatch.setenv('ZABBIX_URL', 'https://zabbix.example.com')
    monkeypatch.setenv('ZABBIX_TOKEN', 'tok')
    monkeypatch.setenv('REQUEST_TIMEOUT', '5')
    monkeypatch.setenv('VERIFY_SSL', 'false')
    reset_config()

    config = get_config()
    assert config['zabbix_url'] == 'https://zabbix.example.com'
    assert config['zabbix_token'] == 'tok'
    assert config['timeout'] == 5
    assert config['verify_ssl'] is False
    assert config['debug'] is False


def test_set_config_merges():
    set_config({'zabbix_url': 'https://a.example.com', 'timeout': 10})
    set_config({'timeout': 20})

    config = get_config()
    assert config['zabbix_url'] == 'https://a.example.com'
    assert config['timeout'] == 20


def test_credential_change_drops_session():
    store_session_token('session-1')

    set_config({'timeout': 15})
    assert get_session_token() == 'session-1'

    set_config({'zabbix_password': 'new'})
    assert get_session_token() is None


def test_debug_log_only_when_enabled(capsys):
    debug_log('hidden')
    assert capsys.readouterr().out == ''

    set_config({'debug': True})
    capsys.readouterr()
    debug_log('Calling user.get')
    assert capsys.readouterr().out == '[Zabbix Provider] Calling user.get\n'


def test_trace_log_needs_trace_level(capsys):
    set_config({'debug': True})
    capsys.readouterr()
    trace_log('created user: 5')
    assert capsys.readouterr().out == ''

    set_config({'debug': 'trace'})
    capsys.readouterr()
    trace_log('created user: 5')
    assert capsys.readouterr().out == '[Zabbix Provider] TRACE created user: 5\n'
