import pytest

from arm_resource_adapters.operations.exceptions import DecodeFailedError
from arm_resource_adapters.static.properties import (
    AzureFabricSpecificDetails,
    OtherFabricSpecificDetails,
    PropertyCodec,
    WindowsPerformanceCounterProperties,
)


def test_windows_performance_counter_round_trip():
    properties = WindowsPerformanceCounterProperties(
        counter_name="% Processor Time",
        instance_name="_Total",
        interval_seconds=60,
        object_name="Processor",
    )

    document = PropertyCodec.encode_data_source(properties)
    decoded = PropertyCodec.decode_data_source(document["properties"], document["kind"])

    assert decoded == properties


def test_encode_data_source_produces_the_wire_shape():
    properties = WindowsPerformanceCounterProperties(counter_name="Available MBytes", instance_name="*", interval_seconds=10, object_name="Memory")

    assert PropertyCodec.encode_data_source(properties) == {
        "kind": "WindowsPerformanceCounter",
        "properties": {
            "counterName": "Available MBytes",
            "instanceName": "*",
            "intervalSeconds": 10,
            "objectName": "Memory",
        },
    }


def test_decode_accepts_a_json_string_and_ignores_unknown_fields():
    document = '{"counterName": "% Processor Time", "instanceName": "_Total", "intervalSeconds": 60, "objectName": "Processor", "collectorType": "Default"}'

    decoded = PropertyCodec.decode_data_source(document, "WindowsPerformanceCounter")

    assert decoded.interval_seconds == 60
    assert decoded.counter_name == "% Processor Time"


def test_decode_trusts_server_values_outside_the_client_bounds():
    document = {"counterName": "c", "instanceName": "i", "intervalSeconds": 1, "objectName": "o"}

    assert PropertyCodec.decode_data_source(document, "WindowsPerformanceCounter").interval_seconds == 1


@pytest.mark.parametrize(
    "document",
    [
        {"counterName": "c", "instanceName": "i", "objectName": "o"},
        {"counterName": "c", "instanceName": "i", "intervalSeconds": "60", "objectName": "o"},
        ["counterName", "c"],
        "{not json",
        42,
    ],
)
def test_decode_fails_closed_on_unexpected_shapes(document):
    with pytest.raises(DecodeFailedError):
        PropertyCodec.decode_data_source(document, "WindowsPerformanceCounter")


@pytest.mark.parametrize("kind", ["WindowsEvent", None, ""])
def test_decode_rejects_unknown_kinds(kind):
    with pytest.raises(DecodeFailedError, match="Unsupported data source kind"):
        PropertyCodec.decode_data_source({"counterName": "c"}, kind)


def test_fabric_details_encode():
    assert PropertyCodec.encode_fabric_details(AzureFabricSpecificDetails(location="westus")) == {"instanceType": "Azure", "location": "westus"}


def test_fabric_details_decode_azure():
    details = PropertyCodec.decode_fabric_details({"instanceType": "Azure", "location": "West US", "containerIds": ["c1"]})

    assert details == AzureFabricSpecificDetails(location="West US", container_ids=["c1"])


def test_fabric_details_decode_other_instance_types():
    details = PropertyCodec.decode_fabric_details({"instanceType": "VMM", "vmmId": "abc"})

    assert details == OtherFabricSpecificDetails(instance_type="VMM")


def test_fabric_details_without_instance_type_fail():
    with pytest.raises(DecodeFailedError, match="instanceType"):
        PropertyCodec.decode_fabric_details({"location": "westus"})
