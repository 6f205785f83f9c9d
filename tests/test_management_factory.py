import json
import time

import pytest
from azure.identity import AzureCliCredential

from arm_resource_adapters.client.arm_client import ArmResourceClient
from arm_resource_adapters.factories.management_factory import ContainerizedManagementFactory
from arm_resource_adapters.identity.token_credential import StaticTokenCredential
from arm_resource_adapters.operations.operation_interfaces import OperationParams


@pytest.fixture
def operation_params(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"common": {"arm": {"subscriptionId": "sub", "tenantId": "tenant"}}}), encoding="utf-8")
    return OperationParams(str(path), "dryRun")


def test_static_token_from_the_environment(operation_params, monkeypatch):
    monkeypatch.setenv("ARM_ACCESS_TOKEN", "abc")
    monkeypatch.setenv("ARM_ACCESS_TOKEN_EXPIRES_ON", "4102444800")

    credential = ContainerizedManagementFactory(operation_params).create_token_credential()

    assert isinstance(credential, StaticTokenCredential)
    access_token = credential.get_token("https://management.azure.com/.default")
    assert access_token.token == "abc"
    assert access_token.expires_on == 4102444800


def test_static_token_defaults_to_an_hour(monkeypatch):
    monkeypatch.setenv("ARM_ACCESS_TOKEN", "abc")
    monkeypatch.delenv("ARM_ACCESS_TOKEN_EXPIRES_ON", raising=False)

    credential = StaticTokenCredential.from_environment()

    assert credential.expires_on == pytest.approx(time.time() + 3600, abs=60)


def test_falls_back_to_the_azure_cli(operation_params, monkeypatch):
    monkeypatch.delenv("ARM_ACCESS_TOKEN", raising=False)

    credential = ContainerizedManagementFactory(operation_params).create_token_credential()

    assert isinstance(credential, AzureCliCredential)


def test_managers_share_one_client(operation_params, monkeypatch):
    monkeypatch.setenv("ARM_ACCESS_TOKEN", "abc")
    factory = ContainerizedManagementFactory(operation_params)

    fabric_manager = factory.create_replication_fabric_manager()
    counter_manager = factory.create_windows_performance_counter_manager()

    assert isinstance(fabric_manager.client, ArmResourceClient)
    assert fabric_manager.client is counter_manager.client


def test_empty_static_token_is_rejected():
    with pytest.raises(ValueError):
        StaticTokenCredential("", 0)
