"""
Zabbix Provider - declarative Zabbix users, user groups and proxies

Each resource type declares a validated field schema and translates between
that flat field map and Zabbix API records on create, read, update and
delete. Data sources look up an existing object by name.

Example - Managing a user group:
    from zabbix_provider import Provider

    provider = Provider()
    api = provider.configure({'url': 'https://zabbix.example.com', 'token': 'your-api-token'})

    groups = provider.resource('zabbix_user_group')
    group = groups.create(api, {
        'name': 'Operators',
        'gui_access': 1,
        'host_permission': [{'id': '2', 'permission': 3}],
    })

    # Refresh later from the saved state
    group = groups.read(api, group.state())
    if not group.id:
        print('Operators was deleted outside of the provider')

Example - Looking up a proxy:
    proxy = provider.data_source('zabbix_proxy').read_data_source(api, {'name': 'proxy-01'})
    print(proxy.get('operating_mode'))
"""

from .types import *

from .config import get_config, set_config, reset_config

from .client import ZabbixAPI

from .errors import (
    ZabbixAPIError,
    MultipleRecordsError,
    LookupAttributeError,
    SchemaValidationError,
)

from .provider import Provider

from .resource_data import ResourceData

from .schema import Resource, Schema

__all__ = [
    # Types
    'FilterCriteria',
    'Params',
    'User',
    'UserGroupID',
    'UserGroup',
    'UserGroupPermission',
    'Proxy',

    # Configuration
    'get_config',
    'set_config',
    'reset_config',

    # Client
    'ZabbixAPI',

    # Errors
    'ZabbixAPIError',
    'MultipleRecordsError',
    'LookupAttributeError',
    'SchemaValidationError',

    # Provider
    'Provider',
    'Resource',
    'ResourceData',
    'Schema',
]
