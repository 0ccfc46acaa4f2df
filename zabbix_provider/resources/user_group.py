"""
zabbix_user_group resource and data source
"""

from typing import List

from ..client import ZabbixAPI
from ..config import debug_log, trace_log
from ..resource_data import ResourceData
from ..schema import (
    Resource,
    Schema,
    TYPE_INT,
    TYPE_LIST,
    TYPE_STRING,
    import_state_passthrough,
)
from ..types import Params, UserGroup, UserGroupPermission
from ..usergroup import (
    user_groups_create,
    user_groups_delete_by_ids,
    user_groups_get,
    user_groups_update,
)
from ..validation import int_between, string_is_not_whitespace
from .common import set_fields, single_record

FIELDS = {
    'name': 'name',
    'debug_mode': 'debug_mode',
    'gui_access': 'gui_access',
    'status': 'users_status',
}


def host_permission_block() -> Resource:
    return Resource(schema={
        'id': Schema(TYPE_STRING, required=True),
        'permission': Schema(
            TYPE_INT,
            description='Access level: 0 - deny; 2 - read-only; 3 - read-write.',
            validate_func=int_between(0, 3),
            required=True,
        ),
    })


def resource_user_group() -> Resource:
    return Resource(
        create=resource_user_group_create,
        read=resource_user_group_read,
        update=resource_user_group_update,
        delete=resource_user_group_delete,
        importer=import_state_passthrough,
        schema={
            'name': Schema(
                TYPE_STRING,
                description='Name of the user group.',
                validate_func=string_is_not_whitespace,
                required=True,
            ),
            'debug_mode': Schema(
                TYPE_INT,
                description='Whether debug mode is enabled or disabled.',
                validate_func=int_between(0, 1),
                optional=True,
                default=0,
            ),
            'gui_access': Schema(
                TYPE_INT,
                description='Frontend authentication method of the users in the group.',
                validate_func=int_between(0, 3),
                optional=True,
                default=0,
            ),
            'status': Schema(
                TYPE_INT,
                description='Whether the user group is enabled or disabled. '
                            'For deprovisioned users, the user group cannot be enabled.',
                validate_func=int_between(0, 1),
                optional=True,
                default=0,
            ),
            'host_permission': Schema(
                TYPE_LIST,
                optional=True,
                computed=True,
                elem=host_permission_block(),
            ),
        },
    )


def data_user_group() -> Resource:
    return Resource(
        read=data_user_group_read,
        schema={
            'name': Schema(
                TYPE_STRING,
                description='Name of the user group.',
                validate_func=string_is_not_whitespace,
                required=True,
            ),
            'debug_mode': Schema(TYPE_INT, computed=True),
            'gui_access': Schema(TYPE_INT, computed=True),
            'status': Schema(TYPE_INT, computed=True),
            'host_permission': Schema(TYPE_LIST, computed=True, elem=host_permission_block()),
        },
    )


def host_group_permissions(d: ResourceData) -> List[UserGroupPermission]:
    """Map host_permission blocks to hostgroup_rights entries, keeping order"""
    permissions = []
    for permission in d.get('host_permission'):
        permissions.append({
            'id': permission['id'],
            'permission': permission['permission'],
        })
    return permissions


def build_user_group(d: ResourceData) -> UserGroup:
    group: UserGroup = {
        'name': d.get('name'),
        'debug_mode': d.get('debug_mode'),
        'gui_access': d.get('gui_access'),
        'users_status': d.get('status'),
        'hostgroup_rights': host_group_permissions(d),
    }
    if d.id:
        group['usrgrpid'] = d.id
    return group


def resource_user_group_create(d: ResourceData, api: ZabbixAPI) -> None:
    groups = [build_user_group(d)]
    ids = user_groups_create(api, groups)

    trace_log(f'created user group: {groups[0]}')

    d.set_id(ids[0])
    resource_user_group_read(d, api)


def user_group_read(d: ResourceData, api: ZabbixAPI, params: Params) -> None:
    params = dict(params, output='extend', selectHostGroupRights='extend')
    group = single_record(user_groups_get(api, params), 'user groups')

    if group is None:
        d.set_id('')
        return

    debug_log(f'Got user group: {group}')

    d.set_id(group['usrgrpid'])
    set_fields(d, group, FIELDS)
    if 'hostgroup_rights' in group:
        d.set('host_permission', group['hostgroup_rights'])


def data_user_group_read(d: ResourceData, api: ZabbixAPI) -> None:
    user_group_read(d, api, {'filter': {'name': d.get('name')}})


def resource_user_group_read(d: ResourceData, api: ZabbixAPI) -> None:
    debug_log(f'Lookup of user group with id {d.id}')
    user_group_read(d, api, {'usrgrpids': d.id})


def resource_user_group_update(d: ResourceData, api: ZabbixAPI) -> None:
    user_groups_update(api, [build_user_group(d)])
    resource_user_group_read(d, api)


def resource_user_group_delete(d: ResourceData, api: ZabbixAPI) -> None:
    user_groups_delete_by_ids(api, [d.id])
