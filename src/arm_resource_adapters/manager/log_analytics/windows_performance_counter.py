# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

from typing import Any

from arm_resource_adapters.manager.resource import ArmResourceManager
from arm_resource_adapters.operations.operation_interfaces import ResourceKind, WindowsPerformanceCounterConfig
from arm_resource_adapters.static.properties import DataSourceKind, PropertyCodec, WindowsPerformanceCounterProperties
from arm_resource_adapters.static.resource_id import ResourceIdentifier
from arm_resource_adapters.static.schema import (
    MAX_INT32,
    Attribute,
    ResourceSchema,
    Validators,
    case_insensitive,
    resource_group_name_attribute,
)

MIN_INTERVAL_SECONDS = 10

WINDOWS_PERFORMANCE_COUNTER_SCHEMA = ResourceSchema(
    resource_type=ResourceKind.WINDOWS_PERFORMANCE_COUNTER.value,
    attributes=(
        Attribute(name="name", type=str, force_new=True, validators=(Validators.string_is_not_empty(),)),
        resource_group_name_attribute(),
        Attribute(
            name="workspace_name",
            type=str,
            force_new=True,
            validators=(Validators.log_analytics_workspace_name(),),
            diff_suppress=case_insensitive,
        ),
        Attribute(name="counter_name", type=str, validators=(Validators.string_is_not_empty(),)),
        Attribute(name="instance_name", type=str, validators=(Validators.string_is_not_empty(),)),
        Attribute(name="interval_seconds", type=int, validators=(Validators.int_between(MIN_INTERVAL_SECONDS, MAX_INT32),)),
        Attribute(name="object_name", type=str, validators=(Validators.string_is_not_empty(),)),
    ),
)


class WindowsPerformanceCounterDataSourceManager(ArmResourceManager):
    """Manages Windows performance counter data sources of a Log Analytics workspace."""

    resource_kind = ResourceKind.WINDOWS_PERFORMANCE_COUNTER
    schema = WINDOWS_PERFORMANCE_COUNTER_SCHEMA
    provider = "Microsoft.OperationalInsights"
    parent_type = "workspaces"
    resource_type = "dataSources"
    api_version = "2015-11-01-preview"
    parent_attribute = "workspace_name"
    display_name = "Log Analytics DataSource Windows Performance Counter"

    def build_body(self, config: WindowsPerformanceCounterConfig) -> dict[str, Any]:
        properties = WindowsPerformanceCounterProperties(
            counter_name=config.counter_name,
            instance_name=config.instance_name,
            interval_seconds=config.interval_seconds,
            object_name=config.object_name,
        )
        return PropertyCodec.encode_data_source(properties)

    def flatten(self, identifier: ResourceIdentifier, document: dict[str, Any]) -> WindowsPerformanceCounterConfig:
        config = WindowsPerformanceCounterConfig(
            name=document.get("name") or identifier.resource_name,
            resource_group_name=identifier.resource_group,
            workspace_name=identifier.parent_name,
        )

        properties = document.get("properties")
        if properties is None:
            self.logger.debug(f"{self.display_name} '{identifier.resource_name}' has no properties")
            return config

        kind = document.get("kind") or DataSourceKind.WINDOWS_PERFORMANCE_COUNTER.value
        decoded = PropertyCodec.decode_data_source(properties, kind)
        return WindowsPerformanceCounterConfig(
            name=config.name,
            resource_group_name=config.resource_group_name,
            workspace_name=config.workspace_name,
            counter_name=decoded.counter_name,
            instance_name=decoded.instance_name,
            interval_seconds=decoded.interval_seconds,
            object_name=decoded.object_name,
        )
