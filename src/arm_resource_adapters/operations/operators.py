# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

import asyncio
import json
import logging

from arm_resource_adapters.factories.management_factory import ContainerizedManagementFactory, ManagementFactory
from arm_resource_adapters.operations.operation_interfaces import (
    ConfiguredResource,
    EntryPointOperator,
    Operation,
    OperationParams,
    ResourceManager,
    ResourceState,
)


class CentralOperator(EntryPointOperator):
    """Central operator that handles all operations."""

    def __init__(self, operation_params: "OperationParams", management_factory: ManagementFactory | None = None):
        """
        Creates a new instance of the CentralOperator.

        Args:
            operation_params: The operation parameters containing all configuration
            management_factory: Optional factory, the containerized one is used if omitted
        """
        super().__init__(operation_params)
        self.logger = logging.getLogger(__name__)
        self.management_factory: ManagementFactory = management_factory or ContainerizedManagementFactory(operation_params)
        self.replication_fabric_manager: ResourceManager = self.management_factory.create_replication_fabric_manager()
        self.windows_performance_counter_manager: ResourceManager = self.management_factory.create_windows_performance_counter_manager()

    async def execute(self) -> list[ResourceState | None]:
        """Execute the operation based on the operation type."""
        try:
            self.logger.info(f"Executing operation: {self.operation.value}")

            match self.operation:
                case Operation.DRY_RUN | Operation.CREATE | Operation.READ | Operation.UPDATE | Operation.DELETE | Operation.IMPORT | Operation.RECONCILE:
                    states = await self._execute_resources()

                case _:
                    error_message = f"Unknown operation: {self.operation}"
                    raise ValueError(error_message)

            self.logger.info(f"Successfully completed operation: {self.operation.value}")

        except Exception as e:
            self.logger.error(f"Failed to execute operation {self.operation.value}: {e}")
            raise

        if self.operation != Operation.DRY_RUN:
            print(self.to_pretty_json(states))
        return states

    @staticmethod
    def to_pretty_json(states: list[ResourceState | None]) -> str:
        """
        Render resulting states as JSON, resources removed from state render as null.
        """
        return json.dumps([state.to_dict() if state else None for state in states], indent=2, ensure_ascii=False)

    # ---------------------------------------------------------------------------- #

    async def _execute_resources(self) -> list[ResourceState | None]:
        """
        Execute the operation for every configured resource, one manager per resource kind.
        """
        resources = self.operation_params.resources
        work: list[tuple[ResourceManager, list[ConfiguredResource]]] = [
            (self.replication_fabric_manager, resources.replication_fabrics),
            (self.windows_performance_counter_manager, resources.windows_performance_counters),
        ]

        results = await asyncio.gather(*(manager.execute(self.operation, configured) for manager, configured in work), return_exceptions=True)

        errors = []
        states: list[ResourceState | None] = []
        for result in results:
            if isinstance(result, Exception):
                errors.append(str(result))
            else:
                states.extend(result)

        if errors:
            error = f"Failed to {self.operation.value} resources: {'; '.join(errors)}"
            raise Exception(error)

        return states
