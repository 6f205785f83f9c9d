# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

from typing import Any

from arm_resource_adapters.manager.resource import ArmResourceManager
from arm_resource_adapters.operations.operation_interfaces import (
    LongRunningOperation,
    ReplicationFabricConfig,
    ResourceKind,
)
from arm_resource_adapters.static.properties import AzureFabricSpecificDetails, PropertyCodec
from arm_resource_adapters.static.resource_id import ResourceIdentifier
from arm_resource_adapters.static.schema import (
    Attribute,
    ResourceSchema,
    Validators,
    location_attribute,
    resource_group_name_attribute,
)
from arm_resource_adapters.static.transformers import StringTransformer

RECOVERY_SERVICES_NAME_PATTERN = r"^[a-zA-Z][-a-zA-Z0-9]{1,49}$"

REPLICATION_FABRIC_SCHEMA = ResourceSchema(
    resource_type=ResourceKind.REPLICATION_FABRIC.value,
    attributes=(
        Attribute(
            name="name",
            type=str,
            force_new=True,
            validators=(Validators.string_matches(RECOVERY_SERVICES_NAME_PATTERN, "Replication Fabric name must be 2 - 50 characters long, start with a letter, contain only letters, numbers and hyphens."),),
        ),
        resource_group_name_attribute(),
        Attribute(
            name="vault_name",
            type=str,
            force_new=True,
            validators=(Validators.string_matches(RECOVERY_SERVICES_NAME_PATTERN, "Recovery Service Vault name must be 2 - 50 characters long, start with a letter, contain only letters, numbers and hyphens."),),
        ),
        location_attribute(),
    ),
)


class ReplicationFabricManager(ArmResourceManager):
    """
    Manages Azure Site Recovery replication fabrics inside a Recovery Services vault.

    A fabric has no attribute that can change in place, every change means
    recreating it. Deletion goes through the `remove` action rather than an
    HTTP DELETE.
    """

    resource_kind = ResourceKind.REPLICATION_FABRIC
    schema = REPLICATION_FABRIC_SCHEMA
    provider = "Microsoft.RecoveryServices"
    parent_type = "vaults"
    resource_type = "replicationFabrics"
    api_version = "2018-01-10"
    parent_attribute = "vault_name"
    display_name = "Recovery Service Replication Fabric"

    def build_body(self, config: ReplicationFabricConfig) -> dict[str, Any]:
        details = AzureFabricSpecificDetails(location=config.location)
        return {"properties": {"customDetails": PropertyCodec.encode_fabric_details(details)}}

    def flatten(self, identifier: ResourceIdentifier, document: dict[str, Any]) -> ReplicationFabricConfig:
        location = None
        custom_details = (document.get("properties") or {}).get("customDetails")
        if custom_details is not None:
            details = PropertyCodec.decode_fabric_details(custom_details)
            if isinstance(details, AzureFabricSpecificDetails) and details.location:
                location = StringTransformer.normalize_location(details.location)

        return ReplicationFabricConfig(
            name=document.get("name") or identifier.resource_name,
            resource_group_name=identifier.resource_group,
            vault_name=identifier.parent_name,
            location=location,
        )

    def submit_delete(self, identifier: ResourceIdentifier, deadline: float) -> LongRunningOperation:
        return self.client.post(f"{identifier}/remove", self.api_version, deadline)
