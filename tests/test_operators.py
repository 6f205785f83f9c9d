import asyncio
import json
from unittest.mock import MagicMock

import pytest

from arm_resource_adapters.factories.management_factory import ManagementFactory
from arm_resource_adapters.operations.operation_interfaces import OperationParams
from arm_resource_adapters.operations.operators import CentralOperator
from conftest import COUNTER_PATH, FABRIC_PATH, SUBSCRIPTION_ID, make_response


@pytest.fixture
def factory(fabric_manager, counter_manager):
    factory = MagicMock(spec=ManagementFactory)
    factory.create_replication_fabric_manager.return_value = fabric_manager
    factory.create_windows_performance_counter_manager.return_value = counter_manager
    return factory


def operation_params(tmp_path, operation, **resources):
    path = tmp_path / "config.json"
    config = {"common": {"arm": {"subscriptionId": SUBSCRIPTION_ID, "tenantId": "tenant"}}, "resources": resources}
    path.write_text(json.dumps(config), encoding="utf-8")
    return OperationParams(str(path), operation)


def test_read_prints_states_of_every_resource(tmp_path, factory, session, capsys):
    session.add("GET", FABRIC_PATH, make_response(200, {"id": FABRIC_PATH, "name": "fabric1", "properties": {"customDetails": {"instanceType": "Azure", "location": "West US"}}}))
    params = operation_params(
        tmp_path,
        "read",
        replicationFabrics=[{"id": FABRIC_PATH}],
        windowsPerformanceCounters=[{"id": COUNTER_PATH}],
    )

    states = asyncio.run(CentralOperator(params, factory).execute())

    assert states[0].attributes.location == "westus"
    assert states[1] is None
    printed = json.loads(capsys.readouterr().out)
    assert printed[0]["id"] == FABRIC_PATH
    assert printed[0]["attributes"]["vault_name"] == "vault1"
    assert printed[1] is None


def test_dry_run_validates_without_remote_calls(tmp_path, factory, session):
    params = operation_params(
        tmp_path,
        "dryRun",
        replicationFabrics=[{"name": "fabric1", "resourceGroupName": "rg1", "vaultName": "vault1", "location": "westus"}],
    )

    states = asyncio.run(CentralOperator(params, factory).execute())

    assert states == [None]
    assert session.requests == []


def test_failures_of_any_resource_fail_the_operation(tmp_path, factory, session):
    params = operation_params(tmp_path, "import", windowsPerformanceCounters=[{"id": COUNTER_PATH}])

    with pytest.raises(Exception, match="counter1"):
        asyncio.run(CentralOperator(params, factory).execute())
