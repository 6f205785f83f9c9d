# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

import asyncio
import logging
from abc import abstractmethod
from typing import Any

from arm_resource_adapters.operations.exceptions import (
    AlreadyExistsError,
    ArmAdapterError,
    ForceNewRequiredError,
    MalformedIdError,
    NotFoundError,
    RemoteOperationFailedError,
)
from arm_resource_adapters.operations.operation_interfaces import (
    CommonParams,
    ConfiguredResource,
    LongRunningOperation,
    Operation,
    OperationKind,
    ResourceClient,
    ResourceKind,
    ResourceLifecycleState,
    ResourceManager,
    ResourceState,
)
from arm_resource_adapters.static.resource_id import ResourceIdentifier, ResourceIdParser
from arm_resource_adapters.static.schema import ResourceSchema


class ArmResourceManager(ResourceManager):
    """
    Create, read, update and delete a child resource of a parent ARM resource.

    Subclasses declare where the resource lives (provider, parent and
    resource type segments, api-version), its schema, and how configuration
    records map onto request bodies and back. Every operation blocks until
    the remote side reaches a terminal state or the operation's deadline
    elapses.
    """

    resource_kind: ResourceKind
    schema: ResourceSchema
    provider: str
    parent_type: str
    resource_type: str
    api_version: str
    parent_attribute: str
    display_name: str

    def __init__(self, common_params: CommonParams, client: ResourceClient, logger: logging.Logger | None = None):
        """
        Initialize the resource manager.

        Args:
            common_params: Common configuration parameters
            client: Remote client for the management API
            logger: Optional logger instance
        """
        super().__init__(common_params)
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    @abstractmethod
    def build_body(self, config: Any) -> dict[str, Any]:
        """
        Build the create or update request body from a validated configuration record.
        """
        pass

    @abstractmethod
    def flatten(self, identifier: ResourceIdentifier, document: dict[str, Any]) -> Any:
        """
        Build a configuration record from a remote resource document.

        Raises:
            DecodeFailedError: If the nested properties do not have the expected shape
        """
        pass

    def submit_delete(self, identifier: ResourceIdentifier, deadline: float) -> LongRunningOperation:
        """
        Submit the delete request, an HTTP DELETE unless the provider says otherwise.
        """
        return self.client.delete(str(identifier), self.api_version, deadline)

    # ---------------------------------------------------------------------------- #

    async def execute(self, operation: Operation, resources: list[ConfiguredResource]) -> list[ResourceState | None]:
        self.logger.info(f"Executing {operation.value} for {len(resources)} {self.display_name} resource(s)")
        tasks = []
        for resource in resources:
            task = asyncio.create_task(asyncio.to_thread(self._execute_one, operation, resource), name=f"{operation.value}-{self.resource_kind.value}-{resource.config.name}")
            tasks.append(task)

        if not tasks:
            self.logger.info(f"No {self.display_name} resources found")
            return []

        results = await asyncio.gather(*tasks, return_exceptions=True)
        errors = []
        states: list[ResourceState | None] = []
        for i, result in enumerate(results):
            if isinstance(result, Exception):
                error_msg = f"Failed to {operation.value} {self.display_name} '{resources[i].config.name}': {result}"
                self.logger.error(error_msg)
                errors.append(error_msg)
                states.append(None)
            else:
                states.append(result)

        if errors:
            error = f"Failed to {operation.value} some {self.display_name} resources: {'; '.join(errors)}"
            raise Exception(error)

        self.logger.info(f"Finished executing {operation.value} for {self.display_name} resources")
        return states

    def _execute_one(self, operation: Operation, resource: ConfiguredResource) -> ResourceState | None:
        config = resource.config
        match operation:
            case Operation.DRY_RUN:
                self.schema.validate(config, **self._context(config))
                self.logger.info(f"{self.display_name} '{config.name}' is valid: {self.identifier_for(config)}")
                return None

            case Operation.CREATE:
                return self.create(config)

            case Operation.READ:
                return self.read(self._resource_id(resource))

            case Operation.UPDATE:
                return self.update(self._resource_id(resource), config)

            case Operation.DELETE:
                self.delete(self._resource_id(resource))
                return None

            case Operation.IMPORT:
                return self.import_resource(self._resource_id(resource))

            case Operation.RECONCILE:
                return self.reconcile(config)

            case _:
                error_message = f"Unknown operation: {operation}"
                raise ValueError(error_message)

    # ---------------------------------------------------------------------------- #

    def reconcile(self, config: Any, timeout_seconds: float | None = None) -> ResourceState:
        self.schema.validate(config, **self._context(config))
        self.logger.info(f"Reconciling {self.display_name}: {config.name}")
        if self.exists(config, timeout_seconds):
            self.logger.info(f"{self.display_name} '{config.name}' already exists. Updating.")
            return self.update(str(self.identifier_for(config)), config, timeout_seconds)

        self.logger.info(f"{self.display_name} '{config.name}' does not exist. Creating.")
        return self.create(config, timeout_seconds)

    def exists(self, config: Any, timeout_seconds: float | None = None) -> bool:
        context = self._context(config)
        self.schema.validate(config, **context)
        deadline = self.client.deadline_after(self._timeout(OperationKind.READ, timeout_seconds))
        try:
            return self._get_or_none(self.identifier_for(config), deadline) is not None
        except ArmAdapterError as e:
            raise e.with_context(**context)

    def create(self, config: Any, timeout_seconds: float | None = None) -> ResourceState:
        deadline = self.client.deadline_after(self._timeout(OperationKind.CREATE, timeout_seconds))
        context = self._context(config)
        self.schema.validate(config, **context)

        identifier = self.identifier_for(config)
        self.logger.info(f"Creating {self.display_name} '{config.name}' (resource group '{config.resource_group_name}', {self._parent_label()} '{context['parent']}')")

        try:
            if self.common_params.features.require_resources_to_be_imported:
                existing = self._get_or_none(identifier, deadline)
                if existing is not None:
                    raise AlreadyExistsError(self.resource_kind.value, existing.get("id") or str(identifier), **context)

            self._transition(identifier, ResourceLifecycleState.CREATING)
            operation = self.client.put(str(identifier), self.api_version, self.build_body(config), deadline)
            operation.wait_for_completion(deadline)

        except NotFoundError as e:
            raise RemoteOperationFailedError(f"Failed to create {self.display_name}: {e.message}", **context) from e

        except ArmAdapterError as e:
            raise e.with_context(**context)

        try:
            result = self.client.get(str(identifier), self.api_version, deadline)

        except NotFoundError as e:
            raise RemoteOperationFailedError(f"Failed to create {self.display_name}, it could not be found after creation: {e.message}", **context) from e

        except ArmAdapterError as e:
            raise e.with_context(**context)

        resource_id = result.get("id")
        if not resource_id:
            raise RemoteOperationFailedError(f"Cannot read ID for {self.display_name}", **context)

        self.logger.info(f"Successfully created {self.display_name} '{config.name}' with ID '{resource_id}'")
        state = self._read(resource_id, deadline)
        if state is None:
            raise RemoteOperationFailedError(f"{self.display_name} disappeared right after creation", **context)
        return state

    def read(self, resource_id: str, timeout_seconds: float | None = None) -> ResourceState | None:
        deadline = self.client.deadline_after(self._timeout(OperationKind.READ, timeout_seconds))
        return self._read(resource_id, deadline)

    def update(self, resource_id: str, config: Any, timeout_seconds: float | None = None) -> ResourceState:
        deadline = self.client.deadline_after(self._timeout(OperationKind.UPDATE, timeout_seconds))
        identifier = self.parse_id(resource_id)
        context = self._context_from_identifier(identifier)
        self.schema.validate(config, **context)

        self.logger.info(f"Updating {self.display_name} '{identifier.resource_name}' (resource group '{identifier.resource_group}', {self._parent_label()} '{identifier.parent_name}')")
        moved = [name for name, value in self._identity_attributes(identifier).items() if not self.schema.attribute(name).equivalent(value, getattr(config, name))]
        if moved:
            self.logger.error(f"{self.display_name} '{identifier.resource_name}' configuration addresses a different resource, changed attributes: {moved}")
            raise ForceNewRequiredError(moved, **context)

        current = self._read(resource_id, deadline)
        if current is None:
            raise NotFoundError(f"{self.display_name} cannot be updated, it no longer exists", **context)

        changed = self.schema.force_new_changes(current.attributes, config)
        if changed:
            self.logger.error(f"{self.display_name} '{identifier.resource_name}' cannot be updated in place, changed force-new attributes: {changed}")
            raise ForceNewRequiredError(changed, **context)

        if self.schema.updatable_attributes():
            self._transition(identifier, ResourceLifecycleState.UPDATING)
            try:
                operation = self.client.put(str(identifier), self.api_version, self.build_body(config), deadline)
                operation.wait_for_completion(deadline)
            except ArmAdapterError as e:
                raise e.with_context(**context)
            self.logger.info(f"Successfully updated {self.display_name} '{identifier.resource_name}'")
        else:
            self.logger.info(f"{self.display_name} has no attributes that can be updated in place, nothing to send")

        state = self._read(resource_id, deadline)
        if state is None:
            raise RemoteOperationFailedError(f"{self.display_name} disappeared right after the update", **context)
        return state

    def delete(self, resource_id: str, timeout_seconds: float | None = None) -> None:
        deadline = self.client.deadline_after(self._timeout(OperationKind.DELETE, timeout_seconds))
        identifier = self.parse_id(resource_id)
        context = self._context_from_identifier(identifier)

        self.logger.info(f"Deleting {self.display_name} '{identifier.resource_name}' (resource group '{identifier.resource_group}', {self._parent_label()} '{identifier.parent_name}')")
        self._transition(identifier, ResourceLifecycleState.DELETING)
        try:
            operation = self.submit_delete(identifier, deadline)
            operation.wait_for_completion(deadline)
        except NotFoundError:
            self.logger.info(f"{self.display_name} '{identifier.resource_name}' was already gone")
        except ArmAdapterError as e:
            raise e.with_context(**context)

        self._transition(identifier, ResourceLifecycleState.ABSENT)
        self.logger.info(f"Successfully deleted {self.display_name} '{identifier.resource_name}'")

    def import_resource(self, resource_id: str, timeout_seconds: float | None = None) -> ResourceState:
        identifier = self.parse_id(resource_id)
        self.logger.info(f"Importing {self.display_name} '{resource_id}'")
        state = self.read(resource_id, timeout_seconds)
        if state is None:
            raise NotFoundError("Cannot import non-existent remote object", **self._context_from_identifier(identifier))
        return state

    # ---------------------------------------------------------------------------- #

    def parse_id(self, resource_id: str) -> ResourceIdentifier:
        """
        Parse a resource id, requiring it to address this resource type.

        Raises:
            MalformedIdError: If the id cannot be parsed or addresses another resource type
        """
        identifier = ResourceIdParser.parse(resource_id, self.parent_type, self.resource_type)
        if identifier.provider.lower() != self.provider.lower():
            raise MalformedIdError(f"Resource id {resource_id!r} is not a {self.provider} resource")
        return identifier

    def identifier_for(self, config: Any) -> ResourceIdentifier:
        """
        Build the identifier a configuration record addresses.
        """
        return ResourceIdentifier(
            subscription_id=self.common_params.arm.subscription_id,
            resource_group=config.resource_group_name,
            provider=self.provider,
            parent_type=self.parent_type,
            parent_name=getattr(config, self.parent_attribute),
            resource_type=self.resource_type,
            resource_name=config.name,
        )

    def _read(self, resource_id: str, deadline: float) -> ResourceState | None:
        identifier = self.parse_id(resource_id)
        context = self._context_from_identifier(identifier)

        self.logger.info(f"Reading {self.display_name} '{identifier.resource_name}' (resource group '{identifier.resource_group}', {self._parent_label()} '{identifier.parent_name}')")
        try:
            document = self.client.get(str(identifier), self.api_version, deadline)
        except NotFoundError:
            self.logger.debug(f"{self.display_name} '{identifier.resource_name}' was not found in resource group '{identifier.resource_group}' in {self._parent_label()} '{identifier.parent_name}' - removing from state!")
            return None
        except ArmAdapterError as e:
            raise e.with_context(**context)

        try:
            attributes = self.flatten(identifier, document)
        except ArmAdapterError as e:
            raise e.with_context(**context)

        self._transition(identifier, ResourceLifecycleState.PRESENT)
        return ResourceState(id=resource_id, attributes=attributes)

    def _get_or_none(self, identifier: ResourceIdentifier, deadline: float) -> dict[str, Any] | None:
        try:
            return self.client.get(str(identifier), self.api_version, deadline)
        except NotFoundError:
            return None

    def _resource_id(self, resource: ConfiguredResource) -> str:
        return resource.resource_id or str(self.identifier_for(resource.config))

    def _timeout(self, operation_kind: OperationKind, timeout_seconds: float | None) -> float:
        if timeout_seconds is not None:
            return timeout_seconds
        return self.common_params.timeouts.seconds_for(operation_kind)

    def _context(self, config: Any) -> dict[str, str | None]:
        return {
            "resource_name": config.name,
            "resource_group": config.resource_group_name,
            "parent": getattr(config, self.parent_attribute),
        }

    def _identity_attributes(self, identifier: ResourceIdentifier) -> dict[str, str]:
        return {
            "name": identifier.resource_name,
            "resource_group_name": identifier.resource_group,
            self.parent_attribute: identifier.parent_name,
        }

    def _context_from_identifier(self, identifier: ResourceIdentifier) -> dict[str, str | None]:
        return {
            "resource_name": identifier.resource_name,
            "resource_group": identifier.resource_group,
            "parent": identifier.parent_name,
        }

    def _parent_label(self) -> str:
        return self.parent_attribute.removesuffix("_name")

    def _transition(self, identifier: ResourceIdentifier, state: ResourceLifecycleState) -> None:
        self.logger.debug(f"{self.display_name} '{identifier}' is {state.value}")
