# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

import logging
from abc import ABC, abstractmethod

from azure.core.credentials import TokenCredential
from azure.identity import AzureCliCredential

from arm_resource_adapters.client.arm_client import ArmResourceClient
from arm_resource_adapters.identity.token_credential import StaticTokenCredential
from arm_resource_adapters.manager.log_analytics.windows_performance_counter import WindowsPerformanceCounterDataSourceManager
from arm_resource_adapters.manager.recovery_services.replication_fabric import ReplicationFabricManager
from arm_resource_adapters.operations.operation_interfaces import HttpRetryHandler, OperationParams, ResourceClient


class ManagementFactory(ABC):
    """
    Factory for creating various managers.
    """

    @abstractmethod
    def create_token_credential(self) -> TokenCredential:
        """
        Create the credential used to authenticate against Azure Resource Manager.
        """
        pass

    @abstractmethod
    def create_resource_client(self) -> ResourceClient:
        """
        Create an Azure Resource Manager client instance.
        """
        pass

    @abstractmethod
    def create_replication_fabric_manager(self) -> ReplicationFabricManager:
        """
        Create a Replication Fabric Manager instance.
        """
        pass

    @abstractmethod
    def create_windows_performance_counter_manager(self) -> WindowsPerformanceCounterDataSourceManager:
        """
        Create a Windows Performance Counter Data Source Manager instance.
        """
        pass


class ContainerizedManagementFactory(ManagementFactory):
    """Containerized implementation of the ManagementFactory."""

    def __init__(self, operation_params: "OperationParams"):
        """
        Initialize the factory with operation parameters.

        Args:
            operation_params: The operation parameters containing all configuration
        """
        self.operation_params = operation_params
        self.logger = logging.getLogger(__name__)
        self.http_retry_handler = HttpRetryHandler(logger=self.logger)
        self._resource_client: ResourceClient | None = None

    def create_token_credential(self) -> TokenCredential:
        token_credential = StaticTokenCredential.from_environment()
        if token_credential is not None:
            self.logger.info("Using static access token from the environment")
            return token_credential

        self.logger.info("Using Azure CLI credential")
        return AzureCliCredential(tenant_id=self.operation_params.common.arm.tenant_id)

    def create_resource_client(self) -> ResourceClient:
        # One client per run so that both managers share the cached access token
        if self._resource_client is None:
            self._resource_client = ArmResourceClient(
                self.operation_params.common,
                self.create_token_credential(),
                self.http_retry_handler,
            )
        return self._resource_client

    def create_replication_fabric_manager(self) -> ReplicationFabricManager:
        return ReplicationFabricManager(self.operation_params.common, self.create_resource_client())

    def create_windows_performance_counter_manager(self) -> WindowsPerformanceCounterDataSourceManager:
        return WindowsPerformanceCounterDataSourceManager(self.operation_params.common, self.create_resource_client())
