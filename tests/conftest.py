"""Shared fixtures: a recording fake of the Zabbix API client and a clean config."""

import copy
from typing import Any, Dict, List, Tuple

import pytest

from zabbix_provider.config import reset_config

ENV_VARS = [
    'ZABBIX_URL',
    'ZABBIX_TOKEN',
    'ZABBIX_USER',
    'ZABBIX_PASSWORD',
    'REQUEST_TIMEOUT',
    'DEBUG',
    'VERIFY_SSL',
]


class FakeZabbixAPI:
    """
    Stand-in for ZabbixAPI

    Records every (method, params) call and answers from per-method queues.
    The last queued answer of a method is repeated; an Exception instance
    is raised instead of returned.
    """

    def __init__(self):
        self.calls: List[Tuple[str, Any]] = []
        self._responses: Dict[str, List[Any]] = {}

    def respond(self, method: str, *results: Any) -> None:
        self._responses.setdefault(method, []).extend(results)

    def request(self, method: str, params: Any = None) -> Any:
        self.calls.append((method, copy.deepcopy(params)))
        queue = self._responses.get(method)
        if not queue:
            return [] if method.endswith('.get') else {}
        result = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(result, Exception):
            raise result
        return copy.deepcopy(result)

    def methods(self) -> List[str]:
        return [method for method, _ in self.calls]


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def api():
    return FakeZabbixAPI()
