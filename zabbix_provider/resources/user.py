"""
zabbix_user resource and data source
"""

from typing import List

from ..client import ZabbixAPI
from ..config import debug_log, trace_log
from ..resource_data import ResourceData
from ..schema import Resource, Schema, TYPE_SET, TYPE_STRING, import_state_passthrough
from ..types import Params, User, UserGroupID
from ..user import users_create, users_delete_by_ids, users_get, users_update
from ..validation import string_is_not_whitespace
from .common import set_fields, single_record

# local field -> user object key
FIELDS = {
    'username': 'username',
    'roleid': 'roleid',
    'name': 'name',
    'surname': 'surname',
}


def resource_user() -> Resource:
    return Resource(
        create=resource_user_create,
        read=resource_user_read,
        update=resource_user_update,
        delete=resource_user_delete,
        importer=import_state_passthrough,
        schema={
            'username': Schema(
                TYPE_STRING,
                description="User's name.",
                validate_func=string_is_not_whitespace,
                required=True,
            ),
            'password': Schema(
                TYPE_STRING,
                description="User's password.",
                validate_func=string_is_not_whitespace,
                optional=True,
                sensitive=True,
            ),
            'roleid': Schema(
                TYPE_STRING,
                description='Role ID of the user.',
                validate_func=string_is_not_whitespace,
                required=True,
            ),
            'name': Schema(
                TYPE_STRING,
                description='Name of the user.',
                validate_func=string_is_not_whitespace,
                optional=True,
            ),
            'surname': Schema(
                TYPE_STRING,
                description='Surname of the user.',
                validate_func=string_is_not_whitespace,
                optional=True,
            ),
            'groups': Schema(
                TYPE_SET,
                description='IDs of the user groups the user belongs to.',
                optional=True,
                computed=True,
                elem=Schema(TYPE_STRING),
            ),
        },
    )


def data_user() -> Resource:
    return Resource(
        read=data_user_read,
        schema={
            'username': Schema(
                TYPE_STRING,
                description="User's name.",
                validate_func=string_is_not_whitespace,
                required=True,
            ),
            'roleid': Schema(TYPE_STRING, computed=True),
            'name': Schema(TYPE_STRING, computed=True),
            'surname': Schema(TYPE_STRING, computed=True),
            'groups': Schema(TYPE_SET, computed=True, elem=Schema(TYPE_STRING)),
        },
    )


def user_groups(d: ResourceData) -> List[UserGroupID]:
    return [{'usrgrpid': groupid} for groupid in sorted(d.get('groups'))]


def build_user(d: ResourceData) -> User:
    """Translate local fields into a user object"""
    user: User = {
        'username': d.get('username'),
        'roleid': d.get('roleid'),
        'name': d.get('name'),
        'surname': d.get('surname'),
        'usrgrps': user_groups(d),
    }
    if d.id:
        user['userid'] = d.id
    password, ok = d.get_ok('password')
    if ok:
        user['passwd'] = password
    return user


def resource_user_create(d: ResourceData, api: ZabbixAPI) -> None:
    users = [build_user(d)]
    ids = users_create(api, users)

    trace_log(f'created user: {ids[0]}')

    d.set_id(ids[0])
    resource_user_read(d, api)


def user_read(d: ResourceData, api: ZabbixAPI, params: Params) -> None:
    """Look up exactly one user and mirror it into d"""
    params = dict(params, output='extend', selectUsrgrps=['usrgrpid'])
    user = single_record(users_get(api, params), 'users')

    if user is None:
        d.set_id('')
        return

    debug_log(f"Got user: {user.get('userid')} {user.get('username')}")

    d.set_id(user['userid'])
    set_fields(d, user, FIELDS)
    if 'usrgrps' in user:
        d.set('groups', [g['usrgrpid'] for g in user['usrgrps']])


def data_user_read(d: ResourceData, api: ZabbixAPI) -> None:
    user_read(d, api, {'filter': {'username': d.get('username')}})


def resource_user_read(d: ResourceData, api: ZabbixAPI) -> None:
    debug_log(f'Lookup of user with id {d.id}')
    user_read(d, api, {'userids': d.id})


def resource_user_update(d: ResourceData, api: ZabbixAPI) -> None:
    users_update(api, [build_user(d)])
    resource_user_read(d, api)


def resource_user_delete(d: ResourceData, api: ZabbixAPI) -> None:
    users_delete_by_ids(api, [d.id])
