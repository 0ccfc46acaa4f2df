"""
User Group API calls

Example:
    from zabbix_provider.usergroup import user_groups_create

    user_groups_create(api, [{
        'name': 'Operators',
        'hostgroup_rights': [{'id': '2', 'permission': 3}],
    }])
"""

from typing import List

from .client import ZabbixAPI
from .types import Params, UserGroup


def user_groups_get(api: ZabbixAPI, params: Params) -> List[UserGroup]:
    """
    Get user groups from Zabbix

    Args:
        api: API client
        params: usergroup.get parameters

    Returns:
        List of user group records
    """
    return api.request('usergroup.get', params) or []


def user_groups_create(api: ZabbixAPI, groups: List[UserGroup]) -> List[str]:
    """
    Create user groups in Zabbix

    Returns:
        List of created user group ids
    """
    result = api.request('usergroup.create', groups)
    ids = [str(i) for i in result['usrgrpids']]
    for group, groupid in zip(groups, ids):
        group['usrgrpid'] = groupid
    return ids


def user_groups_update(api: ZabbixAPI, groups: List[UserGroup]) -> None:
    api.request('usergroup.update', groups)


def user_groups_delete_by_ids(api: ZabbixAPI, ids: List[str]) -> None:
    api.request('usergroup.delete', ids)
