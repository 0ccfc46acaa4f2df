"""
User API calls

Example:
    from zabbix_provider.client import ZabbixAPI
    from zabbix_provider.user import users_get, users_create

    api = ZabbixAPI()

    users = [{
        'username': 'jdoe',
        'passwd': 'secure_password',
        'roleid': '1',
        'usrgrps': [{'usrgrpid': '7'}],
    }]
    ids = users_create(api, users)

    found = users_get(api, {'userids': ids[0]})
"""

from typing import List

from .client import ZabbixAPI
from .types import Params, User


def users_get(api: ZabbixAPI, params: Params) -> List[User]:
    """
    Get users from Zabbix

    Args:
        api: API client
        params: user.get parameters

    Returns:
        List of user records
    """
    return api.request('user.get', params) or []


def users_create(api: ZabbixAPI, users: List[User]) -> List[str]:
    """
    Create users in Zabbix

    The new ids are also written back into the given records.

    Returns:
        List of created user ids
    """
    result = api.request('user.create', users)
    ids = [str(i) for i in result['userids']]
    for user, userid in zip(users, ids):
        user['userid'] = userid
    return ids


def users_update(api: ZabbixAPI, users: List[User]) -> None:
    """Update existing users in Zabbix"""
    api.request('user.update', users)


def users_delete_by_ids(api: ZabbixAPI, ids: List[str]) -> None:
    """Delete users from Zabbix"""
    api.request('user.delete', ids)
