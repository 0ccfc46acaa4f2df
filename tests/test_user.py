import pytest

from zabbix_provider.errors import MultipleRecordsError, SchemaValidationError, ZabbixAPIError
from zabbix_provider.resources.user import build_user, data_user, resource_user

JDOE = {
    'userid': '5',
    'username': 'jdoe',
    'roleid': '1',
    'name': 'John',
    'surname': 'Doe',
    'usrgrps': [{'usrgrpid': '9'}, {'usrgrpid': '7'}],
}

CONFIG = {
    'username': 'jdoe',
    'password': 'secret123',
    'roleid': '1',
    'name': 'John',
    'surname': 'Doe',
    'groups': ['9', '7'],
}


def test_create_sends_user_and_reads_it_back(api):
    api.respond('user.create', {'userids': ['5']})
    api.respond('user.get', [JDOE])

    d = resource_user().create(api, CONFIG)

    assert d.id == '5'
    assert api.calls[0] == ('user.create', [{
        'username': 'jdoe',
        'passwd': 'secret123',
        'roleid': '1',
        'name': 'John',
        'surname': 'Doe',
        'usrgrps': [{'usrgrpid': '7'}, {'usrgrpid': '9'}],
    }])
    assert api.calls[1] == ('user.get', {
        'userids': '5',
        'output': 'extend',
        'selectUsrgrps': ['usrgrpid'],
    })
    assert d.state() == {
        'id': '5',
        'username': 'jdoe',
        'password': 'secret123',
        'roleid': '1',
        'name': 'John',
        'surname': 'Doe',
        'groups': ['7', '9'],
    }


def test_build_without_password_omits_passwd():
    d = resource_user().data({'username': 'svc', 'roleid': '2'})
    user = build_user(d)

    assert 'passwd' not in user
    assert 'userid' not in user
    assert user['usrgrps'] == []


def test_read_without_match_clears_id(api):
    d = resource_user().read(api, {'id': '5', 'username': 'jdoe', 'roleid': '1'})

    assert d.id == ''
    assert api.methods() == ['user.get']


def test_read_with_multiple_matches_fails(api):
    api.respond('user.get', [JDOE, dict(JDOE, userid='6')])

    with pytest.raises(MultipleRecordsError, match='multiple users found'):
        resource_user().read(api, {'id': '5'})


def test_read_keeps_password_from_state(api):
    api.respond('user.get', [dict(JDOE, name='Johnny')])

    d = resource_user().read(api, dict(CONFIG, id='5'))

    assert d.get('password') == 'secret123'
    assert d.get('name') == 'Johnny'


def test_update_sends_id_and_keeps_computed_groups(api):
    api.respond('user.get', [JDOE])
    state = dict(CONFIG, id='5')

    d = resource_user().update(api, state, {'username': 'jdoe', 'roleid': '3'})

    method, params = api.calls[0]
    assert method == 'user.update'
    assert params == [{
        'userid': '5',
        'username': 'jdoe',
        'roleid': '3',
        'name': '',
        'surname': '',
        'usrgrps': [{'usrgrpid': '7'}, {'usrgrpid': '9'}],
    }]
    assert d.id == '5'


def test_delete_by_id(api):
    resource_user().delete(api, {'id': '5'})

    assert api.calls == [('user.delete', ['5'])]


def test_api_errors_pass_through(api):
    error = ZabbixAPIError(-32602, 'Invalid params.', 'User "jdoe" already exists.')
    api.respond('user.create', error)

    with pytest.raises(ZabbixAPIError) as excinfo:
        resource_user().create(api, CONFIG)

    assert excinfo.value is error


def test_whitespace_username_is_rejected(api):
    with pytest.raises(SchemaValidationError, match='username'):
        resource_user().create(api, {'username': '  ', 'roleid': '1'})
    assert api.calls == []


def test_data_source_looks_up_by_username(api):
    api.respond('user.get', [JDOE])

    d = data_user().read_data_source(api, {'username': 'jdoe'})

    assert api.calls[0][1]['filter'] == {'username': 'jdoe'}
    assert d.id == '5'
    assert d.get('roleid') == '1'
    assert d.get('groups') == {'7', '9'}


def test_import_reads_the_imported_id(api):
    api.respond('user.get', [JDOE], [])

    imported = resource_user().import_state(api, '5')
    assert [d.id for d in imported] == ['5']
    assert imported[0].get('username') == 'jdoe'

    assert resource_user().import_state(api, '404') == []


def test_data_source_without_match_leaves_id_empty(api):
    d = data_user().read_data_source(api, {'username': 'ghost'})

    assert d.id == ''
    assert d.get('groups') == set()
