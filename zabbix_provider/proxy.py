"""
Proxy API calls

Example:
    from zabbix_provider.proxy import proxies_create

    # Create an active proxy accepting PSK connections
    proxies_create(api, [{
        'name': 'proxy-01',
        'operating_mode': 0,
        'tls_accept': 2,
        'tls_psk_identity': 'proxy-01-psk',
        'tls_psk': '0123456789abcdef0123456789abcdef',
    }])
"""

from typing import List

from .client import ZabbixAPI
from .types import Params, Proxy


def proxies_get(api: ZabbixAPI, params: Params) -> List[Proxy]:
    """
    Get proxies from Zabbix

    Args:
        api: API client
        params: proxy.get parameters

    Returns:
        List of proxy records
    """
    return api.request('proxy.get', params) or []


def proxies_create(api: ZabbixAPI, proxies: List[Proxy]) -> List[str]:
    """
    Create proxies in Zabbix

    Returns:
        List of created proxy ids
    """
    result = api.request('proxy.create', proxies)
    ids = [str(i) for i in result['proxyids']]
    for proxy, proxyid in zip(proxies, ids):
        proxy['proxyid'] = proxyid
    return ids


def proxies_update(api: ZabbixAPI, proxies: List[Proxy]) -> None:
    api.request('proxy.update', proxies)


def proxies_delete_by_ids(api: ZabbixAPI, ids: List[str]) -> None:
    api.request('proxy.delete', ids)
