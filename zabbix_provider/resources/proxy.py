"""
zabbix_proxy resource and data source
"""

from ..client import ZabbixAPI
from ..config import debug_log, trace_log
from ..errors import LookupAttributeError
from ..proxy import proxies_create, proxies_delete_by_ids, proxies_get, proxies_update
from ..resource_data import ResourceData
from ..schema import Resource, Schema, TYPE_INT, TYPE_STRING, import_state_passthrough
from ..types import Params, Proxy
from ..validation import int_between, string_is_not_whitespace
from .common import lookup_filter, set_fields, single_record

# tls_psk is write-only and never comes back from proxy.get, so it is not mapped
FIELDS = {
    'name': 'name',
    'operating_mode': 'operating_mode',
    'description': 'description',
    'tls_connect': 'tls_connect',
    'tls_accept': 'tls_accept',
    'tls_issuer': 'tls_issuer',
    'tls_subject': 'tls_subject',
    'tls_psk_identity': 'tls_psk_identity',
    'proxy_address': 'allowed_addresses',
}

LOOKUPS = ['name']


def resource_proxy() -> Resource:
    return Resource(
        create=resource_proxy_create,
        read=resource_proxy_read,
        update=resource_proxy_update,
        delete=resource_proxy_delete,
        importer=import_state_passthrough,
        schema={
            'name': Schema(
                TYPE_STRING,
                description='Name of the proxy.',
                validate_func=string_is_not_whitespace,
                required=True,
            ),
            'operating_mode': Schema(
                TYPE_INT,
                description='Type of proxy. Possible values: 0 - active proxy; 1 - passive proxy.',
                validate_func=int_between(0, 1),
                required=True,
            ),
            'description': Schema(
                TYPE_STRING,
                description='Description of the proxy.',
                optional=True,
            ),
            'tls_connect': Schema(
                TYPE_INT,
                description='Connections to host. Possible values: '
                            '1 - (default) No encryption; 2 - PSK; 4 - certificate.',
                validate_func=int_between(1, 4),
                optional=True,
                default=1,
            ),
            'tls_accept': Schema(
                TYPE_INT,
                description='Connections from host. This is a bitmask field, any combination of '
                            'possible bitmap values is acceptable. Possible bitmap values: '
                            '1 - (default) No encryption; 2 - PSK; 4 - certificate.',
                validate_func=int_between(1, 7),
                optional=True,
                default=1,
            ),
            'tls_issuer': Schema(
                TYPE_STRING,
                description='Certificate issuer.',
                optional=True,
            ),
            'tls_subject': Schema(
                TYPE_STRING,
                description='Certificate subject.',
                optional=True,
            ),
            'tls_psk_identity': Schema(
                TYPE_STRING,
                description='PSK identity. Do not put sensitive information in the PSK identity, '
                            'it is transmitted unencrypted over the network to inform a receiver '
                            'which PSK to use. Required if tls_connect is set to "PSK", or '
                            'tls_accept contains the "PSK" bit.',
                optional=True,
            ),
            'tls_psk': Schema(
                TYPE_STRING,
                description='The preshared key, at least 32 hex digits. Required if tls_connect '
                            'is set to "PSK", or tls_accept contains the "PSK" bit.',
                optional=True,
                sensitive=True,
            ),
            'proxy_address': Schema(
                TYPE_STRING,
                description='Comma-delimited IP addresses or DNS names of active Zabbix proxy.',
                optional=True,
            ),
        },
    )


def data_proxy() -> Resource:
    return Resource(
        read=data_proxy_read,
        schema={
            'name': Schema(
                TYPE_STRING,
                description='Name of the proxy.',
                validate_func=string_is_not_whitespace,
                required=True,
            ),
            'operating_mode': Schema(TYPE_INT, computed=True),
            'description': Schema(TYPE_STRING, computed=True),
            'tls_connect': Schema(TYPE_INT, computed=True),
            'tls_accept': Schema(TYPE_INT, computed=True),
            'tls_issuer': Schema(TYPE_STRING, computed=True),
            'tls_subject': Schema(TYPE_STRING, computed=True),
            'tls_psk_identity': Schema(TYPE_STRING, computed=True),
            'proxy_address': Schema(TYPE_STRING, computed=True),
        },
    )


def build_proxy(d: ResourceData) -> Proxy:
    proxy: Proxy = {
        'name': d.get('name'),
        'operating_mode': d.get('operating_mode'),
        'description': d.get('description'),
        'tls_connect': d.get('tls_connect'),
        'tls_accept': d.get('tls_accept'),
        'tls_issuer': d.get('tls_issuer'),
        'tls_subject': d.get('tls_subject'),
        'tls_psk_identity': d.get('tls_psk_identity'),
        'allowed_addresses': d.get('proxy_address'),
    }
    if d.id:
        proxy['proxyid'] = d.id
    psk, ok = d.get_ok('tls_psk')
    if ok:
        proxy['tls_psk'] = psk
    return proxy


def data_proxy_read(d: ResourceData, api: ZabbixAPI) -> None:
    lookup = lookup_filter(d, LOOKUPS)
    if not lookup:
        raise LookupAttributeError('no proxy lookup attribute')

    debug_log(f'Performing data lookup with filter: {lookup}')

    proxy_read(d, api, {'filter': lookup})


def resource_proxy_create(d: ResourceData, api: ZabbixAPI) -> None:
    ids = proxies_create(api, [build_proxy(d)])

    trace_log(f'created proxy: {ids[0]}')

    d.set_id(ids[0])
    resource_proxy_read(d, api)


def proxy_read(d: ResourceData, api: ZabbixAPI, params: Params) -> None:
    """Look up exactly one proxy and mirror it into d"""
    debug_log(f'Lookup of proxy with params {params}')

    params = dict(params, output='extend')
    proxy = single_record(proxies_get(api, params), 'proxies')

    if proxy is None:
        d.set_id('')
        return

    debug_log(f"Got proxy: {proxy.get('proxyid')} {proxy.get('name')}")

    d.set_id(proxy['proxyid'])
    set_fields(d, proxy, FIELDS)


def resource_proxy_read(d: ResourceData, api: ZabbixAPI) -> None:
    debug_log(f'Lookup of proxy with id {d.id}')
    proxy_read(d, api, {'proxyids': d.id})


def resource_proxy_update(d: ResourceData, api: ZabbixAPI) -> None:
    proxies_update(api, [build_proxy(d)])
    resource_proxy_read(d, api)


def resource_proxy_delete(d: ResourceData, api: ZabbixAPI) -> None:
    proxies_delete_by_ids(api, [d.id])
