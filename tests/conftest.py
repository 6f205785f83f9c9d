import json
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

import pytest
import requests

from arm_resource_adapters.client.arm_client import ArmResourceClient
from arm_resource_adapters.identity.token_credential import StaticTokenCredential
from arm_resource_adapters.manager.log_analytics.windows_performance_counter import WindowsPerformanceCounterDataSourceManager
from arm_resource_adapters.manager.recovery_services.replication_fabric import ReplicationFabricManager
from arm_resource_adapters.operations.operation_interfaces import ArmParams, CommonParams, HttpRetryHandler

ARM_ENDPOINT = "https://management.azure.com"
SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"

VAULT_PATH = f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/rg1/providers/Microsoft.RecoveryServices/vaults/vault1"
FABRIC_PATH = f"{VAULT_PATH}/replicationFabrics/fabric1"
WORKSPACE_PATH = f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/rg1/providers/Microsoft.OperationalInsights/workspaces/workspace1"
COUNTER_PATH = f"{WORKSPACE_PATH}/dataSources/counter1"


def make_response(status_code: int, body: Any = None, headers: dict[str, str] | None = None, url: str = ARM_ENDPOINT) -> requests.Response:
    """Build a real requests.Response, so raise_for_status and json behave as they do on the wire."""
    response = requests.Response()
    response.status_code = status_code
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    response.headers.update(headers or {})
    response.url = url
    return response


def not_found(path: str) -> requests.Response:
    return make_response(404, {"error": {"code": "ResourceNotFound", "message": f"The resource '{path}' was not found."}})


@dataclass
class RecordedRequest:
    method: str
    path: str
    body: Any
    headers: dict[str, str]


class FakeClock:
    """A monotonic clock that only moves when something sleeps."""

    def __init__(self, now: float = 1000.0):
        self.now = now
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeArmSession:
    """
    Stands in for requests.Session, answering from queued responses per method and path.

    The last queued response for a route keeps being served. Unknown routes answer 404.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], list[requests.Response]] = {}
        self.requests: list[RecordedRequest] = []

    def add(self, method: str, path: str, *responses: requests.Response) -> None:
        self.routes.setdefault((method, path), []).extend(responses)

    def mutating_requests(self) -> list[RecordedRequest]:
        return [request for request in self.requests if request.method != "GET"]

    def _handle(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        path = urlsplit(url).path
        self.requests.append(RecordedRequest(method, path, kwargs.get("json"), kwargs.get("headers", {})))
        queue = self.routes.get((method, path))
        if not queue:
            return not_found(path)
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        return self._handle("GET", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> requests.Response:
        return self._handle("PUT", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> requests.Response:
        return self._handle("POST", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> requests.Response:
        return self._handle("DELETE", url, **kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session() -> FakeArmSession:
    return FakeArmSession()


@pytest.fixture
def common_params() -> CommonParams:
    return CommonParams(arm=ArmParams(subscription_id=SUBSCRIPTION_ID, tenant_id="11111111-1111-1111-1111-111111111111", endpoint=ARM_ENDPOINT))


@pytest.fixture
def client(common_params, session, clock) -> ArmResourceClient:
    credential = StaticTokenCredential("test-token", int(time.time()) + 3600)
    http_retry_handler = HttpRetryHandler(max_attempts=3, sleep=clock.sleep, clock=clock)
    return ArmResourceClient(common_params, credential, http_retry_handler, session=session, sleep=clock.sleep, clock=clock)


@pytest.fixture
def fabric_manager(common_params, client) -> ReplicationFabricManager:
    return ReplicationFabricManager(common_params, client)


@pytest.fixture
def counter_manager(common_params, client) -> WindowsPerformanceCounterDataSourceManager:
    return WindowsPerformanceCounterDataSourceManager(common_params, client)
