"""
Exceptions raised by the Zabbix provider.

Handlers pass ZabbixAPIError through unmodified; the lookup errors are the
only ones synthesized locally.
"""

from typing import Any, List


class ZabbixAPIError(Exception):
    """Exception raised for JSON-RPC errors and transport failures"""
    def __init__(self, code: int, message: str, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        detail = f", data: {data}" if data else ""
        super().__init__(f"Zabbix API error: {message} (code: {code}{detail})")


class MultipleRecordsError(Exception):
    """A lookup expected a single record and got more"""


class LookupAttributeError(Exception):
    """A data source lookup was attempted without any lookup attribute"""


class SchemaValidationError(ValueError):
    """Configuration does not satisfy a resource schema"""
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__('; '.join(self.errors))
