import json

import pytest

from arm_resource_adapters.operations.operation_interfaces import (
    DEFAULT_ARM_ENDPOINT,
    Operation,
    OperationKind,
    OperationParams,
    ResourceKind,
)
from conftest import FABRIC_PATH, SUBSCRIPTION_ID


def write_config(tmp_path, config, name="config.json"):
    path = tmp_path / name
    path.write_text(json.dumps(config), encoding="utf-8")
    return str(path)


def base_config(**resources):
    return {
        "common": {
            "arm": {"subscriptionId": "{subscription-id}", "tenantId": "{tenant-id}"},
            "timeouts": {"readMinutes": 2},
            "features": {"requireResourcesToBeImported": False},
        },
        "resources": resources,
    }


@pytest.fixture(autouse=True)
def arm_environment(monkeypatch):
    monkeypatch.setenv("ARM_SUBSCRIPTION_ID", SUBSCRIPTION_ID)
    monkeypatch.setenv("ARM_TENANT_ID", "tenant")


def test_parses_common_and_resources_with_placeholders(tmp_path):
    config = base_config(
        replicationFabrics=[{"name": "fabric1", "resourceGroupName": "rg1", "vaultName": "vault1", "location": "westus"}],
        windowsPerformanceCounters=[
            {
                "name": "counter1",
                "resourceGroupName": "rg1",
                "workspaceName": "workspace1",
                "counterName": "% Processor Time",
                "instanceName": "_Total",
                "intervalSeconds": 60,
                "objectName": "Processor",
                "id": "/subscriptions/{subscription-id}/resourceGroups/rg1/providers/Microsoft.OperationalInsights/workspaces/workspace1/dataSources/counter1",
            }
        ],
    )

    params = OperationParams(write_config(tmp_path, config), "create")

    assert params.operation == Operation.CREATE
    assert params.common.arm.subscription_id == SUBSCRIPTION_ID
    assert params.common.arm.endpoint == DEFAULT_ARM_ENDPOINT
    assert params.common.timeouts.seconds_for(OperationKind.READ) == 120
    assert params.common.timeouts.seconds_for(OperationKind.CREATE) == 30 * 60
    assert params.common.features.require_resources_to_be_imported is False
    assert [resource.kind for resource in params.resources.all()] == [ResourceKind.REPLICATION_FABRIC, ResourceKind.WINDOWS_PERFORMANCE_COUNTER]
    assert params.resources.windows_performance_counters[0].resource_id.startswith(f"/subscriptions/{SUBSCRIPTION_ID}/")
    assert params.validate()


def test_parses_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "common:\n"
        "  arm:\n"
        "    subscriptionId: sub\n"
        "    tenantId: tenant\n"
        "resources:\n"
        "  replicationFabrics:\n"
        "    - name: fabric1\n"
        "      resourceGroupName: rg1\n"
        "      vaultName: vault1\n"
        "      location: westus\n",
        encoding="utf-8",
    )

    params = OperationParams(str(path), "dryRun")

    assert params.resources.replication_fabrics[0].config.vault_name == "vault1"
    assert params.validate()


def test_schema_violations_fail_validation(tmp_path, caplog):
    config = base_config(
        windowsPerformanceCounters=[
            {"name": "counter1", "resourceGroupName": "rg1", "workspaceName": "workspace1", "counterName": "c", "instanceName": "i", "intervalSeconds": 5, "objectName": "o"}
        ]
    )

    params = OperationParams(write_config(tmp_path, config), "create")

    assert not params.validate()
    assert "interval_seconds" in caplog.text


def test_id_operations_need_an_id_or_enough_fields_to_build_one(tmp_path):
    config = base_config(replicationFabrics=[{"name": "fabric1", "resourceGroupName": "rg1"}])

    assert not OperationParams(write_config(tmp_path, config), "delete").validate()

    config = base_config(replicationFabrics=[{"id": FABRIC_PATH}])

    assert OperationParams(write_config(tmp_path, config), "import").validate()


def test_missing_required_field_is_a_value_error(tmp_path):
    with pytest.raises(ValueError, match="Missing required field"):
        OperationParams(write_config(tmp_path, {"common": {"arm": {"subscriptionId": "sub"}}}), "read")


def test_unknown_operation_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        OperationParams(write_config(tmp_path, base_config()), "deployEverything")


def test_unresolvable_placeholder_is_an_error(tmp_path, monkeypatch):
    monkeypatch.delenv("ARM_TENANT_ID")

    with pytest.raises(RuntimeError, match="ARM_TENANT_ID"):
        OperationParams(write_config(tmp_path, base_config()), "read")


def test_non_https_endpoint_fails_validation(tmp_path):
    config = base_config()
    config["common"]["arm"]["endpoint"] = "http://management.azure.com"

    assert not OperationParams(write_config(tmp_path, config), "dryRun").validate()
