"""
Zabbix provider

Registers the resource types and data sources and turns the provider
configuration block into a ready API client.

Example:
    from zabbix_provider.provider import Provider

    provider = Provider()
    api = provider.configure({
        'url': 'https://zabbix.example.com',
        'token': 'your-api-token',
    })

    user = provider.resource('zabbix_user').create(api, {
        'username': 'jdoe',
        'password': 'secure_password',
        'roleid': '1',
        'groups': ['7'],
    })
    print(user.id)
"""

from typing import Any, Dict, Optional

from .client import ZabbixAPI
from .config import debug_log, get_config, set_config
from .resources.proxy import data_proxy, resource_proxy
from .resources.user import data_user, resource_user
from .resources.user_group import data_user_group, resource_user_group
from .schema import Resource, Schema, TYPE_BOOL, TYPE_INT, TYPE_STRING
from .validation import int_between, string_is_not_whitespace

# provider attribute -> config key
CONFIG_KEYS = {
    'url': 'zabbix_url',
    'token': 'zabbix_token',
    'user': 'zabbix_user',
    'password': 'zabbix_password',
    'timeout': 'timeout',
    'verify_ssl': 'verify_ssl',
    'debug': 'debug',
}


def provider_schema() -> Dict[str, Schema]:
    return {
        'url': Schema(
            TYPE_STRING,
            description='Zabbix frontend URL; /api_jsonrpc.php is appended when missing. '
                        'Defaults to ZABBIX_URL.',
            validate_func=string_is_not_whitespace,
            optional=True,
        ),
        'token': Schema(
            TYPE_STRING,
            description='API token. Defaults to ZABBIX_TOKEN.',
            optional=True,
            sensitive=True,
        ),
        'user': Schema(
            TYPE_STRING,
            description='Login used when no token is set. Defaults to ZABBIX_USER.',
            optional=True,
        ),
        'password': Schema(
            TYPE_STRING,
            description='Password used with user. Defaults to ZABBIX_PASSWORD.',
            optional=True,
            sensitive=True,
        ),
        'timeout': Schema(
            TYPE_INT,
            description='Request timeout in seconds.',
            validate_func=int_between(1, 3600),
            optional=True,
        ),
        'verify_ssl': Schema(
            TYPE_BOOL,
            description='Verify the server certificate.',
            optional=True,
        ),
        'debug': Schema(
            TYPE_BOOL,
            description='Print debug output.',
            optional=True,
        ),
    }


class Provider:
    """Registry of Zabbix resource types and data sources"""

    def __init__(self):
        self.schema = Resource(schema=provider_schema())
        self.resources_map: Dict[str, Resource] = {
            'zabbix_user': resource_user(),
            'zabbix_user_group': resource_user_group(),
            'zabbix_proxy': resource_proxy(),
        }
        self.data_sources_map: Dict[str, Resource] = {
            'zabbix_user': data_user(),
            'zabbix_user_group': data_user_group(),
            'zabbix_proxy': data_proxy(),
        }

    def resource(self, name: str) -> Resource:
        """
        Get a resource type by name

        Raises:
            KeyError: If the resource type is not provided
        """
        if name not in self.resources_map:
            raise KeyError(f'unknown resource type {name!r}')
        return self.resources_map[name]

    def data_source(self, name: str) -> Resource:
        if name not in self.data_sources_map:
            raise KeyError(f'unknown data source {name!r}')
        return self.data_sources_map[name]

    def configure(self, settings: Optional[Dict[str, Any]] = None) -> ZabbixAPI:
        """
        Apply the provider configuration block and build the API client

        Attributes left unset keep their environment defaults.

        Raises:
            SchemaValidationError: If settings do not match the provider schema
            ValueError: If no URL or credentials are available
        """
        settings = settings or {}
        self.schema.check(settings)

        d = self.schema.data(settings)
        set_config({
            CONFIG_KEYS[key]: d.get(key)
            for key in CONFIG_KEYS
            if settings.get(key) is not None
        })

        config = get_config()
        if not config['zabbix_url']:
            raise ValueError('Zabbix URL not configured. Set the url attribute or ZABBIX_URL')
        if not config['zabbix_token'] and not (config['zabbix_user'] and config['zabbix_password']):
            raise ValueError('Set token, or user and password, to authenticate with Zabbix')

        debug_log(f"Provider configured for {config['zabbix_url']}")
        return ZabbixAPI()
