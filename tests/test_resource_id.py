import pytest

from arm_resource_adapters.operations.exceptions import MalformedIdError
from arm_resource_adapters.static.resource_id import ResourceIdentifier, ResourceIdParser
from conftest import COUNTER_PATH, FABRIC_PATH, SUBSCRIPTION_ID


@pytest.mark.parametrize(
    "resource_id, parent_type, resource_type",
    [
        (FABRIC_PATH, "vaults", "replicationFabrics"),
        (COUNTER_PATH, "workspaces", "dataSources"),
        # ARM echoes some segments back in a different casing than they were sent with
        (f"/subscriptions/{SUBSCRIPTION_ID}/resourcegroups/RG-1/providers/microsoft.operationalinsights/workspaces/ws-1/datasources/c.1", "workspaces", "dataSources"),
    ],
)
def test_parse_then_format_reproduces_the_id(resource_id, parent_type, resource_type):
    identifier = ResourceIdParser.parse(resource_id, parent_type, resource_type)

    assert ResourceIdParser.format(identifier) == resource_id
    assert str(identifier) == resource_id


def test_parse_extracts_every_segment():
    identifier = ResourceIdParser.parse(FABRIC_PATH, "vaults", "replicationFabrics")

    assert identifier.subscription_id == SUBSCRIPTION_ID
    assert identifier.resource_group == "rg1"
    assert identifier.provider == "Microsoft.RecoveryServices"
    assert identifier.parent_name == "vault1"
    assert identifier.resource_name == "fabric1"


def test_identifiers_built_from_parts_format_with_canonical_keys():
    identifier = ResourceIdentifier(
        subscription_id=SUBSCRIPTION_ID,
        resource_group="rg1",
        provider="Microsoft.RecoveryServices",
        parent_type="vaults",
        parent_name="vault1",
        resource_type="replicationFabrics",
        resource_name="fabric1",
    )

    assert str(identifier) == FABRIC_PATH
    assert identifier == ResourceIdParser.parse(FABRIC_PATH, "vaults", "replicationFabrics")


@pytest.mark.parametrize(
    "resource_id",
    [
        "",
        "subscriptions/abc/resourceGroups/rg1",
        f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/rg1",
        f"/subscriptions/{SUBSCRIPTION_ID}//resourceGroups/rg1/providers/Microsoft.RecoveryServices/vaults/vault1/replicationFabrics/fabric1",
        f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/rg1/providers/Microsoft.RecoveryServices/vaults/vault1/replicationFabrics",
        f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/rg1/providers/Microsoft.RecoveryServices/vaults/vault1/replicationPolicies/policy1",
        f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/rg1/providers/Microsoft.RecoveryServices/vaults/vault1/replicationFabrics/fabric1/extra/segment",
        f"/Subscriptions/{SUBSCRIPTION_ID}/resourceGroups/rg1/providers/Microsoft.RecoveryServices/vaults/vault1/replicationFabrics/fabric1",
    ],
)
def test_parse_rejects_malformed_ids(resource_id):
    with pytest.raises(MalformedIdError):
        ResourceIdParser.parse(resource_id, "vaults", "replicationFabrics")


def test_malformed_id_error_is_a_value_error():
    with pytest.raises(ValueError):
        ResourceIdParser.parse("not-an-id", "vaults", "replicationFabrics")
