"""
Zabbix Provider Configuration

This module manages the connection settings shared by every resource handler.
Configuration can be set via:
1. Environment variables (or a config.env file next to this package)
2. The provider configuration block, applied through set_config()

Example using environment variables:
    # Create config.env
    ZABBIX_URL=https://zabbix.example.com
    ZABBIX_TOKEN=your-api-token

Example direct configuration:
    from zabbix_provider.config import set_config

    set_config({
        'zabbix_url': 'https://zabbix.example.com',
        'zabbix_user': 'Admin',
        'zabbix_password': 'zabbix'
    })
"""

import os
from typing import Optional, Dict, Any
from pathlib import Path


LOG_PREFIX = '[Zabbix Provider]'


def _load_config_env():
    """Load environment variables from config.env file if it exists."""
    config_file = Path(__file__).parent / "config.env"
    if not config_file.exists():
        return

    with config_file.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            # Existing environment always wins
            os.environ.setdefault(key.strip(), value.strip())


_load_config_env()


def _parse_debug(value: str) -> str:
    """Map a DEBUG value to '', 'debug' or 'trace'."""
    value = (value or '').strip().lower()
    if value == 'trace':
        return 'trace'
    if value in ('true', '1', 'yes', 'debug'):
        return 'debug'
    return ''


class ZabbixConfig:
    """Zabbix connection configuration"""

    def __init__(self):
        self.zabbix_url: str = os.getenv('ZABBIX_URL', '')
        self.zabbix_token: Optional[str] = os.getenv('ZABBIX_TOKEN') or None
        self.zabbix_user: Optional[str] = os.getenv('ZABBIX_USER') or None
        self.zabbix_password: Optional[str] = os.getenv('ZABBIX_PASSWORD') or None
        self.timeout: int = int(os.getenv('REQUEST_TIMEOUT', '30'))
        self.log_level: str = _parse_debug(os.getenv('DEBUG', ''))
        self.verify_ssl: bool = os.getenv('VERIFY_SSL', 'true').lower() == 'true'

    @property
    def debug(self) -> bool:
        return self.log_level in ('debug', 'trace')


_config = ZabbixConfig()

# Session token obtained through user.login
_auth_token: Optional[str] = None


def get_config() -> Dict[str, Any]:
    """
    Get current configuration

    Returns:
        Dictionary containing current configuration
    """
    return {
        'zabbix_url': _config.zabbix_url,
        'zabbix_token': _config.zabbix_token,
        'zabbix_user': _config.zabbix_user,
        'zabbix_password': _config.zabbix_password,
        'timeout': _config.timeout,
        'debug': _config.debug,
        'verify_ssl': _config.verify_ssl
    }


def set_config(new_config: Dict[str, Any]) -> None:
    """
    Set configuration (merges with existing config)

    Args:
        new_config: Dictionary with configuration values to update.
            'debug' accepts a bool or the strings 'debug'/'trace'.
    """
    global _auth_token

    if 'zabbix_url' in new_config:
        _config.zabbix_url = new_config['zabbix_url']
    if 'zabbix_token' in new_config:
        _config.zabbix_token = new_config['zabbix_token'] or None
    if 'zabbix_user' in new_config:
        _config.zabbix_user = new_config['zabbix_user'] or None
    if 'zabbix_password' in new_config:
        _config.zabbix_password = new_config['zabbix_password'] or None
    if 'timeout' in new_config:
        _config.timeout = int(new_config['timeout'])
    if 'debug' in new_config:
        debug = new_config['debug']
        if isinstance(debug, bool):
            _config.log_level = 'debug' if debug else ''
        else:
            _config.log_level = _parse_debug(str(debug))
    if 'verify_ssl' in new_config:
        _config.verify_ssl = bool(new_config['verify_ssl'])

    # Drop the session when credentials change
    if any(k in new_config for k in ['zabbix_url', 'zabbix_user', 'zabbix_password', 'zabbix_token']):
        _auth_token = None

    debug_log('Configuration updated: '
              f'zabbix_url={_config.zabbix_url}, '
              f'has_token={bool(_config.zabbix_token)}, '
              f'has_user={bool(_config.zabbix_user)}, '
              f'timeout={_config.timeout}')


def reset_config() -> None:
    """Reset configuration to defaults (from environment variables)"""
    global _config, _auth_token
    _config = ZabbixConfig()
    _auth_token = None


def get_zabbix_api_url() -> str:
    """
    Get Zabbix API URL

    Returns:
        Full URL to Zabbix API endpoint

    Raises:
        ValueError: If Zabbix URL is not configured
    """
    if not _config.zabbix_url:
        raise ValueError(
            'Zabbix URL not configured. Set ZABBIX_URL environment variable '
            'or the provider url attribute'
        )

    base_url = _config.zabbix_url.rstrip('/')
    if base_url.endswith('/api_jsonrpc.php'):
        return base_url
    return f'{base_url}/api_jsonrpc.php'


def get_session_token() -> Optional[str]:
    return _auth_token


def store_session_token(token: Optional[str]) -> None:
    global _auth_token
    _auth_token = token


def get_credentials() -> Dict[str, Optional[str]]:
    return {
        'token': _config.zabbix_token,
        'user': _config.zabbix_user,
        'password': _config.zabbix_password,
    }


def debug_log(message: str, *args: Any) -> None:
    """
    Debug log helper

    Args:
        message: Log message
        *args: Additional arguments to print
    """
    if _config.debug:
        if args:
            print(f'{LOG_PREFIX} {message}', *args)
        else:
            print(f'{LOG_PREFIX} {message}')


def trace_log(message: str, *args: Any) -> None:
    """Like debug_log, but only when DEBUG=trace."""
    if _config.log_level == 'trace':
        debug_log(f'TRACE {message}', *args)


def get_timeout() -> int:
    """Get configured timeout in seconds"""
    return _config.timeout


def get_verify_ssl() -> bool:
    """Get SSL verification setting"""
    return _config.verify_ssl
