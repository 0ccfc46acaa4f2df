"""
Zabbix JSON-RPC client

ZabbixAPI is the API handle passed to every resource handler. It issues
JSON-RPC 2.0 calls against the configured Zabbix frontend and returns the
decoded "result" member of the response.

Example:
    from zabbix_provider.client import ZabbixAPI

    api = ZabbixAPI()
    users = api.request('user.get', {'output': 'extend'})
"""

import http.client
import json
import ssl
import urllib.error
import urllib.request
from typing import Any, Dict, Optional

from .config import (
    debug_log,
    get_credentials,
    get_session_token,
    get_timeout,
    get_verify_ssl,
    get_zabbix_api_url,
    store_session_token,
)
from .errors import ZabbixAPIError


# Methods that must be called without an Authorization header
UNAUTHENTICATED_METHODS = ('user.login', 'apiinfo.version')


class ZabbixAPI:
    """Client for the Zabbix JSON-RPC API"""

    def __init__(self):
        self._request_id = 0

    def _next_request_id(self) -> int:
        """Get the next request ID"""
        self._request_id += 1
        return self._request_id

    def authenticate(self) -> str:
        """
        Log in with username/password and cache the session token

        Returns:
            Session token

        Raises:
            ValueError: If username/password not configured
            ZabbixAPIError: If authentication fails
        """
        cached = get_session_token()
        if cached:
            return cached

        credentials = get_credentials()
        if not credentials['user'] or not credentials['password']:
            raise ValueError('Zabbix username and password not configured')

        import requests

        body = {
            'jsonrpc': '2.0',
            'method': 'user.login',
            'params': {
                'username': credentials['user'],
                'password': credentials['password']
            },
            'id': self._next_request_id()
        }

        debug_log(f"Authenticating user: {credentials['user']}")

        try:
            response = requests.post(
                get_zabbix_api_url(),
                json=body,
                headers={'Content-Type': 'application/json-rpc'},
                verify=get_verify_ssl(),
                timeout=get_timeout()
            )
        except requests.RequestException as exc:
            raise ZabbixAPIError(-32000, f'Authentication request failed: {exc}')

        if not response.ok:
            raise ZabbixAPIError(-32000, f'Authentication failed: {response.status_code} {response.text}')

        try:
            result = response.json()
        except ValueError as exc:
            raise ZabbixAPIError(-32700, f"Invalid JSON response from user.login: {exc}")

        if not isinstance(result, dict):
            raise ZabbixAPIError(-32700, f"Unexpected response from user.login: {result!r}")

        if 'error' in result:
            error = result['error']
            raise ZabbixAPIError(
                error.get('code', -32000),
                f"Authentication failed: {error.get('message', 'Unknown error')}",
                error.get('data')
            )

        if 'result' not in result:
            raise ZabbixAPIError(-32700, 'Authentication response has no result')

        store_session_token(result['result'])
        debug_log('Authentication successful')
        return result['result']

    def get_auth(self) -> str:
        """
        Get the bearer token for authenticated calls

        Raises:
            ValueError: If no authentication method is configured
        """
        credentials = get_credentials()
        if credentials['token']:
            return credentials['token']

        if credentials['user'] and credentials['password']:
            return self.authenticate()

        raise ValueError(
            'No authentication method configured. '
            'Set ZABBIX_TOKEN or ZABBIX_USER/ZABBIX_PASSWORD'
        )

    def request(self, method: str, params: Any = None) -> Any:
        """
        Make a request to the Zabbix API

        Args:
            method: Zabbix API method (e.g., 'user.get', 'proxy.create')
            params: Parameters to pass to the method

        Returns:
            The decoded result of the call

        Raises:
            ZabbixAPIError: If the request fails or Zabbix returns an error
        """
        if params is None:
            params = {}

        url = get_zabbix_api_url()

        request_body: Dict[str, Any] = {
            'jsonrpc': '2.0',
            'method': method,
            'params': params,
            'id': self._next_request_id()
        }

        headers = {
            "Content-Type": "application/json-rpc",
        }
        if method not in UNAUTHENTICATED_METHODS:
            headers["Authorization"] = f"Bearer {self.get_auth()}"

        debug_log(f'Calling {method}')

        payload = json.dumps(request_body).encode("utf-8")
        req = urllib.request.Request(url, data=payload, headers=headers, method="POST")

        try:
            with urllib.request.urlopen(req, timeout=get_timeout(), context=self._ssl_context(url)) as response:
                resp_data = response.read()
        except urllib.error.HTTPError as exc:
            body = exc.read().decode("utf-8", errors="ignore")
            debug_log(f"{method} failed:", f"{exc.code} {body}")
            raise ZabbixAPIError(-32000, f"HTTP error {exc.code}: {body or exc.reason}")
        except urllib.error.URLError as exc:
            debug_log(f"{method} failed:", str(exc))
            raise ZabbixAPIError(-32000, f"Failed to call {method}: {exc}")
        except (OSError, http.client.HTTPException) as exc:
            debug_log(f"{method} failed:", str(exc))
            raise ZabbixAPIError(-32000, f"Failed to call {method}: {exc}")

        try:
            result = json.loads(resp_data)
        except json.JSONDecodeError as exc:
            raise ZabbixAPIError(-32700, f"Invalid JSON response from {method}: {exc}")

        if not isinstance(result, dict):
            raise ZabbixAPIError(-32700, f"Unexpected response from {method}: {result!r}")

        if "error" in result:
            error = result["error"]
            debug_log(f"{method} failed:", error)
            raise ZabbixAPIError(
                error.get("code", -32000),
                error.get("message", "Unknown error"),
                error.get("data")
            )

        debug_log(f"{method} completed successfully")
        return result.get("result")

    @staticmethod
    def _ssl_context(url: str) -> Optional[ssl.SSLContext]:
        if not url.lower().startswith("https"):
            return None
        context = ssl.create_default_context()
        if not get_verify_ssl():
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context
