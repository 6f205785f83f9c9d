# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

import json
import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

import dacite

from arm_resource_adapters.operations.exceptions import DecodeFailedError
from arm_resource_adapters.static.transformers import StringTransformer

logger = logging.getLogger(__name__)


class DataSourceKind(Enum):
    """Enumeration of Log Analytics data source kinds."""

    WINDOWS_PERFORMANCE_COUNTER = "WindowsPerformanceCounter"


class FabricInstanceType(Enum):
    """Enumeration of replication fabric instance types."""

    AZURE = "Azure"


@dataclass(frozen=True)
class WindowsPerformanceCounterProperties:
    """Properties of a Windows performance counter data source."""

    counter_name: str
    instance_name: str
    interval_seconds: int
    object_name: str


@dataclass(frozen=True)
class AzureFabricSpecificDetails:
    """Custom details of a fabric with instance type Azure."""

    location: str | None = None
    container_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class OtherFabricSpecificDetails:
    """Custom details of a fabric that is not hosted in Azure, e.g. VMM or VMware sites."""

    instance_type: str


FabricSpecificDetails = AzureFabricSpecificDetails | OtherFabricSpecificDetails

DATA_SOURCE_PROPERTY_TYPES: dict[str, type] = {
    DataSourceKind.WINDOWS_PERFORMANCE_COUNTER.value: WindowsPerformanceCounterProperties,
}

DECODE_CONFIG = dacite.Config(check_types=True, strict=False)


class PropertyCodec:
    """
    Marshals kind-discriminated property documents to and from dataclasses.

    Decoding is a two step conversion: the loosely typed document is first
    normalized into a snake_case mapping, then strictly decoded with dacite,
    failing closed on missing fields or values of the wrong type.
    """

    @staticmethod
    def normalize(document: Any) -> dict[str, Any]:
        """
        Normalize a loosely typed property document into a snake_case mapping.

        Raises:
            DecodeFailedError: If the document is not a JSON object
        """
        if isinstance(document, (str, bytes)):
            try:
                document = json.loads(document)
            except json.JSONDecodeError as e:
                raise DecodeFailedError(f"Property document is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            raise DecodeFailedError(f"Property document must be a JSON object, got {type(document).__name__}")

        return StringTransformer.convert_keys_to_snake_case(document)

    @staticmethod
    def strict_decode(data_class: type, document: Any) -> Any:
        """
        Normalize then strictly decode a document into the given dataclass.

        Raises:
            DecodeFailedError: If the document does not match the dataclass
        """
        normalized = PropertyCodec.normalize(document)
        try:
            return dacite.from_dict(data_class=data_class, data=normalized, config=DECODE_CONFIG)
        except dacite.DaciteError as e:
            raise DecodeFailedError(f"Property document does not match {data_class.__name__}: {e}") from e

    # ---------------------------------------------------------------------------- #

    @staticmethod
    def encode_data_source(properties: WindowsPerformanceCounterProperties) -> dict[str, Any]:
        """
        Encode data source properties into the body ARM expects.

        Returns:
            dict[str, Any]: The kind tag and the camelCase properties document
        """
        kind = next((kind for kind, data_class in DATA_SOURCE_PROPERTY_TYPES.items() if isinstance(properties, data_class)), None)
        if kind is None:
            raise TypeError(f"Unsupported data source properties type: {type(properties).__name__}")

        return {
            "kind": kind,
            "properties": StringTransformer.convert_keys_to_camel_case(asdict(properties)),
        }

    @staticmethod
    def decode_data_source(document: Any, kind: str | None) -> WindowsPerformanceCounterProperties:
        """
        Decode the properties document of a data source of the given kind.

        Raises:
            DecodeFailedError: If the kind is unknown or the document does not match it
        """
        data_class = DATA_SOURCE_PROPERTY_TYPES.get(kind or "")
        if data_class is None:
            raise DecodeFailedError(f"Unsupported data source kind {kind!r}, expected one of {sorted(DATA_SOURCE_PROPERTY_TYPES)}")

        return PropertyCodec.strict_decode(data_class, document)

    # ---------------------------------------------------------------------------- #

    @staticmethod
    def encode_fabric_details(details: AzureFabricSpecificDetails) -> dict[str, Any]:
        """
        Encode the custom details of a fabric creation request.
        """
        custom_details: dict[str, Any] = {"instanceType": FabricInstanceType.AZURE.value}
        if details.location is not None:
            custom_details["location"] = details.location
        return custom_details

    @staticmethod
    def decode_fabric_details(document: Any) -> FabricSpecificDetails:
        """
        Decode the custom details of a fabric, discriminated by its instance type.

        Raises:
            DecodeFailedError: If the document is not an object or has no instance type
        """
        normalized = PropertyCodec.normalize(document)
        instance_type = normalized.get("instance_type")
        if not isinstance(instance_type, str) or not instance_type:
            raise DecodeFailedError("Fabric custom details are missing 'instanceType'")

        if instance_type != FabricInstanceType.AZURE.value:
            logger.debug(f"Fabric custom details have instance type {instance_type!r}, no Azure specific details to decode")
            return OtherFabricSpecificDetails(instance_type=instance_type)

        fields = {key: value for key, value in normalized.items() if key != "instance_type"}
        try:
            return dacite.from_dict(data_class=AzureFabricSpecificDetails, data=fields, config=DECODE_CONFIG)
        except dacite.DaciteError as e:
            raise DecodeFailedError(f"Property document does not match AzureFabricSpecificDetails: {e}") from e
