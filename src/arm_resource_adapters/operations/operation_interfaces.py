# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

import json
import logging
import os
import random
import subprocess
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

import requests
import yaml

from arm_resource_adapters.operations.exceptions import OperationTimeoutError

# ---------------------------------------------------------------------------- #
# --------------------------- HTTP RETRY CONSTANTS --------------------------- #
# ---------------------------------------------------------------------------- #

HTTP_RETRYABLE_STATUS_CODES = frozenset(
    [
        408,  # Request Timeout
        429,  # Too Many Requests
        500,  # Internal Server Error
        502,  # Bad Gateway
        503,  # Service Unavailable
        504,  # Gateway Timeout
    ]
)

MAX_RETRY_ATTEMPTS = 10
MAX_RETRY_DELAY_SECONDS = 60
INITIAL_RETRY_DELAY_SECONDS = 1

# ---------------------------------------------------------------------------- #
# ------------------------------ ARM CONSTANTS ------------------------------- #
# ---------------------------------------------------------------------------- #

DEFAULT_ARM_ENDPOINT = "https://management.azure.com"
ARM_SCOPE_SUFFIX = "/.default"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 60
DEFAULT_POLL_INTERVAL_SECONDS = 10

DEFAULT_CREATE_TIMEOUT_MINUTES = 30
DEFAULT_READ_TIMEOUT_MINUTES = 5
DEFAULT_UPDATE_TIMEOUT_MINUTES = 30
DEFAULT_DELETE_TIMEOUT_MINUTES = 30


class HttpRetryHandler:
    """
    HTTP retry handler with exponential backoff for retryable errors.

    This class provides a reusable, dependency-injectable way to handle HTTP retries
    with exponential backoff and jitter for transient failures. Retries never
    sleep past an optional monotonic deadline.
    """

    def __init__(
        self,
        max_attempts: int = MAX_RETRY_ATTEMPTS,
        max_delay_seconds: float = MAX_RETRY_DELAY_SECONDS,
        initial_delay_seconds: float = INITIAL_RETRY_DELAY_SECONDS,
        retryable_status_codes: frozenset[int] = HTTP_RETRYABLE_STATUS_CODES,
        logger: logging.Logger | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the HTTP retry handler.

        Args:
            max_attempts: Maximum number of retry attempts
            max_delay_seconds: Maximum retry delay in seconds
            initial_delay_seconds: Initial retry delay in seconds
            retryable_status_codes: Set of HTTP status codes that should trigger retries
            logger: Optional logger for logging retry attempts
            sleep: Sleep function, replaceable in tests
            clock: Monotonic clock the deadline is measured against
        """
        self.max_attempts = max_attempts
        self.max_delay_seconds = max_delay_seconds
        self.initial_delay_seconds = initial_delay_seconds
        self.retryable_status_codes = retryable_status_codes
        self.logger = logger or logging.getLogger(__name__)
        self.sleep = sleep
        self.clock = clock

    def execute(self, func: Callable, *args, deadline: float | None = None, **kwargs) -> requests.Response:
        """
        Execute an HTTP request with retry logic.

        Args:
            func: The requests function to call (e.g., requests.get, requests.put)
            *args: Positional arguments to pass to the function
            deadline: Optional clock value after which no retry is attempted
            **kwargs: Keyword arguments to pass to the function

        Returns:
            requests.Response: The successful response

        Raises:
            requests.exceptions.HTTPError: For non-retryable status codes, immediately
            OperationTimeoutError: If the deadline leaves no room for another attempt
            The last exception encountered if all retries are exhausted
        """
        last_exception = None
        target = args[0] if args else "unknown URL"

        for attempt in range(1, self.max_attempts + 1):

            try:
                response = func(*args, **kwargs)
                response.raise_for_status()
                return response

            except requests.exceptions.HTTPError as e:
                last_exception = e
                if e.response is None or e.response.status_code not in self.retryable_status_codes:
                    raise

                delay = self._next_delay(attempt, deadline, e)
                if delay is None:
                    raise

                self.logger.warning(f"HTTP {e.response.status_code} error on attempt {attempt}/{self.max_attempts} for {func.__name__} to {target}. Retrying in {delay:.2f}s...")
                self.sleep(delay)

            except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as e:
                last_exception = e

                delay = self._next_delay(attempt, deadline, e)
                if delay is None:
                    raise

                self.logger.warning(f"Network error ({type(e).__name__}) on attempt {attempt}/{self.max_attempts} for {func.__name__} to {target}. Retrying in {delay:.2f}s...")
                self.sleep(delay)

        if last_exception:
            raise last_exception

        raise RuntimeError("Unexpected retry loop exit")

    def _next_delay(self, attempt: int, deadline: float | None, error: Exception) -> float | None:
        """
        Decide whether another attempt is allowed and how long to wait before it.

        Returns:
            float | None: The delay in seconds, or None when no attempt is left

        Raises:
            OperationTimeoutError: If waiting for the next attempt would pass the deadline
        """
        if attempt >= self.max_attempts:
            self.logger.error(f"Max retry attempts ({self.max_attempts}) exhausted. Last error: {error}")
            return None

        delay = self._calculate_delay(attempt)
        if deadline is not None and self.clock() + delay >= deadline:
            error_msg = f"Deadline reached before retry attempt {attempt + 1}. Last error: {error}"
            self.logger.error(error_msg)
            raise OperationTimeoutError(error_msg) from error

        return delay

    def _calculate_delay(self, attempt: int) -> float:
        """
        Calculate the delay for the next retry attempt with exponential backoff and jitter.

        Args:
            attempt: The current attempt number (1-indexed)

        Returns:
            float: The delay in seconds
        """
        delay = min(self.initial_delay_seconds * (2 ** (attempt - 1)), self.max_delay_seconds)
        jitter = random.uniform(0, delay * 0.25)
        return delay + jitter


# ---------------------------------------------------------------------------- #
# ------------------------------ DATA CLASSES -------------------------------- #
# ---------------------------------------------------------------------------- #


class Operation(Enum):
    """Enumeration of available operations."""

    CREATE = "create"
    DELETE = "delete"
    DRY_RUN = "dryRun"
    IMPORT = "import"
    READ = "read"
    RECONCILE = "reconcile"
    UPDATE = "update"


class OperationKind(Enum):
    """Enumeration of operation kinds that carry their own timeout budget."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class ResourceKind(Enum):
    """Enumeration of the resource types with an adapter."""

    REPLICATION_FABRIC = "azurerm_recovery_services_replication_fabric"
    WINDOWS_PERFORMANCE_COUNTER = "azurerm_log_analytics_datasource_windows_performance_counter"


class ResourceLifecycleState(Enum):
    """Lifecycle states of a single resource instance."""

    ABSENT = "Absent"
    CREATING = "Creating"
    PRESENT = "Present"
    UPDATING = "Updating"
    DELETING = "Deleting"


@dataclass
class ArmParams:
    """Azure Resource Manager parameters."""

    subscription_id: str
    tenant_id: str
    endpoint: str = DEFAULT_ARM_ENDPOINT

    @property
    def scope(self) -> str:
        return f"{self.endpoint.rstrip('/')}{ARM_SCOPE_SUFFIX}"


@dataclass
class TimeoutParams:
    """Timeout budget per operation kind, in minutes."""

    create_minutes: float = DEFAULT_CREATE_TIMEOUT_MINUTES
    read_minutes: float = DEFAULT_READ_TIMEOUT_MINUTES
    update_minutes: float = DEFAULT_UPDATE_TIMEOUT_MINUTES
    delete_minutes: float = DEFAULT_DELETE_TIMEOUT_MINUTES

    def seconds_for(self, operation_kind: OperationKind) -> float:
        minutes = {
            OperationKind.CREATE: self.create_minutes,
            OperationKind.READ: self.read_minutes,
            OperationKind.UPDATE: self.update_minutes,
            OperationKind.DELETE: self.delete_minutes,
        }[operation_kind]
        return minutes * 60


@dataclass
class FeatureParams:
    """Feature toggles."""

    require_resources_to_be_imported: bool = True


@dataclass
class CommonParams:
    """Common parameters shared across operations."""

    arm: ArmParams
    timeouts: TimeoutParams = field(default_factory=TimeoutParams)
    features: FeatureParams = field(default_factory=FeatureParams)


@dataclass(frozen=True)
class ReplicationFabricConfig:
    """Configuration of a Recovery Services replication fabric."""

    name: str | None = None
    resource_group_name: str | None = None
    vault_name: str | None = None
    location: str | None = None


@dataclass(frozen=True)
class WindowsPerformanceCounterConfig:
    """Configuration of a Log Analytics Windows performance counter data source."""

    name: str | None = None
    resource_group_name: str | None = None
    workspace_name: str | None = None
    counter_name: str | None = None
    instance_name: str | None = None
    interval_seconds: int | None = None
    object_name: str | None = None


@dataclass(frozen=True)
class ConfiguredResource:
    """A configuration record together with the identifier it is tracked under, if any."""

    kind: ResourceKind
    config: Any
    resource_id: str | None = None


@dataclass
class ResourcesParams:
    """All configured resources, per kind."""

    replication_fabrics: list[ConfiguredResource] = field(default_factory=list)
    windows_performance_counters: list[ConfiguredResource] = field(default_factory=list)

    def all(self) -> list[ConfiguredResource]:
        return [*self.replication_fabrics, *self.windows_performance_counters]


@dataclass(frozen=True)
class ResourceState:
    """The state handed back to the host: the permanent identifier and the populated attributes."""

    id: str
    attributes: Any

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "attributes": asdict(self.attributes)}


@dataclass
class LongRunningOperationStatus:
    """Status of a long-running operation as reported by ARM."""

    status: str
    error_code: str | None = None
    error_message: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status.lower() in ("succeeded", "failed", "canceled", "cancelled")

    @property
    def is_success(self) -> bool:
        return self.status.lower() == "succeeded"


# ---------------------------------------------------------------------------- #
# ----------------------------- INTERFACES ----------------------------------- #
# ---------------------------------------------------------------------------- #


class Manager(ABC):
    """Base interface for all managers."""

    def __init__(self, common_params: "CommonParams"):
        """Initialize the manager with common parameters."""
        self.common_params = common_params

    @abstractmethod
    async def execute(self) -> None:
        """Execute the manager's operation."""
        pass


class EntryPointOperator(Manager):
    """
    Interface for entry point operators.
    """

    def __init__(self, operation_params: "OperationParams"):
        """
        Initialize the entry point operator with operation parameters.
        """
        super().__init__(operation_params.common)
        self.operation_params = operation_params
        self.operation = operation_params.operation


class ResourceClient(ABC):
    """
    Interface for the remote management API.
    """

    def __init__(self, common_params: "CommonParams", clock: Callable[[], float] = time.monotonic):
        """
        Initialize the resource client with common parameters.

        Args:
            common_params: Common configuration parameters
            clock: Monotonic clock all deadlines are measured against
        """
        self.common_params = common_params
        self.clock = clock

    def deadline_after(self, seconds: float) -> float:
        """
        Turn a timeout budget into a deadline on this client's clock.
        """
        return self.clock() + seconds

    @abstractmethod
    def get(self, resource_path: str, api_version: str, deadline: float) -> dict[str, Any]:
        """
        Fetch a resource document.

        Args:
            resource_path: The resource path, starting with /subscriptions
            api_version: The ARM api-version of the resource provider
            deadline: time.monotonic() value after which the call is abandoned

        Returns:
            dict[str, Any]: The resource document

        Raises:
            NotFoundError: If the remote reports the resource missing
            RemoteOperationFailedError: For any other failure
        """
        pass

    @abstractmethod
    def put(self, resource_path: str, api_version: str, body: dict[str, Any], deadline: float) -> "LongRunningOperation":
        """
        Submit a create or update request.

        Returns:
            LongRunningOperation: Handle to poll until the operation completes
        """
        pass

    @abstractmethod
    def post(self, resource_path: str, api_version: str, deadline: float, body: dict[str, Any] | None = None) -> "LongRunningOperation":
        """
        Submit an action request, e.g. a fabric removal.

        Returns:
            LongRunningOperation: Handle to poll until the operation completes
        """
        pass

    @abstractmethod
    def delete(self, resource_path: str, api_version: str, deadline: float) -> "LongRunningOperation":
        """
        Submit a delete request.

        Returns:
            LongRunningOperation: Handle to poll until the operation completes
        """
        pass


class LongRunningOperation(ABC):
    """
    Interface for a handle to an asynchronous remote operation.
    """

    @abstractmethod
    def done(self) -> bool:
        """
        Whether the operation has reached a terminal state.
        """
        pass

    @abstractmethod
    def wait_for_completion(self, deadline: float) -> None:
        """
        Block until the operation reaches a terminal state.

        Args:
            deadline: time.monotonic() value after which the wait is abandoned

        Raises:
            RemoteOperationFailedError: If the operation completed with a failure
            NotFoundError: If the remote reported the target missing while polling
            OperationTimeoutError: If the deadline elapsed first
        """
        pass


class ResourceManager(ABC):
    """
    Interface for managing the lifecycle of one resource type.
    """

    def __init__(self, common_params: "CommonParams"):
        """
        Initialize the resource manager with common parameters.
        """
        self.common_params = common_params

    @abstractmethod
    async def execute(self, operation: Operation, resources: list[ConfiguredResource]) -> list[ResourceState | None]:
        """
        Execute an operation for all configured resources of this type in parallel.

        Args:
            operation: The operation to execute
            resources: The configured resources of this type

        Returns:
            list[ResourceState | None]: The resulting state per resource, None when removed
        """
        pass

    @abstractmethod
    def reconcile(self, config: Any, timeout_seconds: float | None = None) -> ResourceState:
        """
        Converge a resource to the desired configuration, creating it if absent.
        """
        pass

    @abstractmethod
    def exists(self, config: Any, timeout_seconds: float | None = None) -> bool:
        """
        Check if the resource described by the configuration exists.
        """
        pass

    @abstractmethod
    def create(self, config: Any, timeout_seconds: float | None = None) -> ResourceState:
        """
        Create a new resource.

        Raises:
            ValidationError: If the configuration is invalid
            AlreadyExistsError: If the import-safety guard finds an existing resource
            RemoteOperationFailedError: If the remote rejects the request
            OperationTimeoutError: If the deadline elapses
        """
        pass

    @abstractmethod
    def read(self, resource_id: str, timeout_seconds: float | None = None) -> ResourceState | None:
        """
        Read a resource.

        Returns:
            ResourceState | None: The current state, or None when it should be dropped from tracked state
        """
        pass

    @abstractmethod
    def update(self, resource_id: str, config: Any, timeout_seconds: float | None = None) -> ResourceState:
        """
        Update an existing resource in place.

        Raises:
            ForceNewRequiredError: If a force-new attribute would change
        """
        pass

    @abstractmethod
    def delete(self, resource_id: str, timeout_seconds: float | None = None) -> None:
        """
        Delete a resource, succeeding if it is already gone.
        """
        pass

    @abstractmethod
    def import_resource(self, resource_id: str, timeout_seconds: float | None = None) -> ResourceState:
        """
        Bring an existing resource under management.

        Raises:
            MalformedIdError: If the id is not an id of this resource type
            NotFoundError: If the resource does not exist
        """
        pass


# ---------------------------------------------------------------------------- #
# ---------------------------------------------------------------------------- #
# ---------------------------------------------------------------------------- #


class OperationParams:
    """
    Main operation parameters container with parsing and validation capabilities.
    """

    def __init__(self, config_file_absolute_path: str, operation: str, logger: logging.Logger | None = None):
        """
        Initialize OperationParams by parsing the configuration file.

        Args:
            config_file_absolute_path: Absolute path to the configuration file, JSON or YAML
            operation: The operation to execute

        Raises:
            FileNotFoundError: If the config file doesn't exist
            json.JSONDecodeError: If the JSON is malformed
            ValueError: If required fields are missing or invalid
        """
        self.logger = logger or logging.getLogger(__name__)

        try:
            self.config_data = self._load_and_process_config(config_file_absolute_path)
            self.operation = Operation(operation)
            self.common = self._parse_common_params(self.config_data["common"])
            self.resources = self._parse_resources_params(self.config_data.get("resources", {}))

        except FileNotFoundError:
            self.logger.error(f"Configuration file not found: {config_file_absolute_path}")
            raise

        except json.JSONDecodeError as e:
            self.logger.error(f"Invalid JSON in configuration file: {e}")
            raise

        except yaml.YAMLError as e:
            self.logger.error(f"Invalid YAML in configuration file: {e}")
            msg = f"Invalid YAML in configuration file: {e}"
            raise ValueError(msg) from e

        except KeyError as e:
            self.logger.error(f"Missing required field in configuration: {e}")
            msg = f"Missing required field in configuration: {e}"
            raise ValueError(msg) from e

        except Exception as e:
            self.logger.error(f"Unexpected error parsing configuration: {e}")
            raise

    def validate(self) -> bool:
        """
        Validate the operation parameters.

        Returns:
            bool: True if all parameters are valid, False otherwise
        """
        return self._validate_common_params() and self._validate_resources_params()

    def to_pretty_json(self) -> str:
        """
        Return a pretty formatted JSON representation of the configuration data.

        Returns:
            str: Pretty formatted JSON string of the substituted configuration data
        """
        return json.dumps(self.config_data, indent=2, ensure_ascii=False)

    # ---------------------------------------------------------------------------- #

    def _get_git_root(self) -> str:
        """
        Gets the git root directory.

        Returns:
            str: The git root.

        Raises:
            RuntimeError: If no git root is found
        """
        err_str = "No git root found. Please ensure you are in a git repository."

        git_root = os.getenv("GIT_ROOT")
        if git_root:
            return git_root

        try:
            result = subprocess.run(["git", "rev-parse", "--show-toplevel"], capture_output=True, text=True, check=True, timeout=10)  # fmt: skip # noqa: E501, S603, S607
            return result.stdout.strip()
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError) as e:
            self.logger.error(f"Failed to get git root: {e}")
            raise RuntimeError(err_str) from e

    def _get_placeholder_resolvers(self) -> dict[str, Callable[[], str]]:
        """
        Get the mapping of placeholder names to their resolver functions.

        Add new placeholders here by mapping the placeholder name (without braces)
        to a function that returns the replacement value.

        Returns:
            dict[str, Callable[[], str]]: Mapping of placeholder names to resolver functions
        """
        return {
            "timestamp": lambda: datetime.now().isoformat(),  # noqa: DTZ005
            "subscription-id": lambda: self._get_required_env("ARM_SUBSCRIPTION_ID"),
            "tenant-id": lambda: self._get_required_env("ARM_TENANT_ID"),
            "git-root": self._get_git_root,
        }

    def _get_required_env(self, name: str) -> str:
        value = os.getenv(name, "").strip()
        if not value:
            msg = f"Environment variable {name} is required to resolve a placeholder"
            raise RuntimeError(msg)
        return value

    def _replace_placeholders_in_value(self, value: Any) -> Any:
        """
        Replace placeholders in a single value (string, dict, list, or primitive).

        Args:
            value: The value to process

        Returns:
            Any: The value with placeholders replaced
        """
        if isinstance(value, str):
            result = value
            resolvers = self._get_placeholder_resolvers()

            for placeholder_name, resolver_func in resolvers.items():
                placeholder_pattern = f"{{{placeholder_name}}}"
                if placeholder_pattern in result:
                    replacement_value = resolver_func()
                    result = result.replace(placeholder_pattern, replacement_value)
                    self.logger.debug(f"Replaced {placeholder_pattern} with {replacement_value}")

            return result

        elif isinstance(value, dict):
            return {key: self._replace_placeholders_in_value(val) for key, val in value.items()}

        elif isinstance(value, list):
            return [self._replace_placeholders_in_value(item) for item in value]

        else:
            return value

    def _load_and_process_config(self, config_file_absolute_path: str) -> dict[str, Any]:
        """
        Load configuration from a JSON or YAML file and replace magic placeholders.

        Args:
            config_file_absolute_path: Absolute path to the configuration file

        Returns:
            dict[str, Any]: Configuration data with placeholders replaced

        Raises:
            FileNotFoundError: If the config file doesn't exist
            json.JSONDecodeError: If the JSON is malformed
            yaml.YAMLError: If the YAML is malformed
        """
        with open(config_file_absolute_path, encoding="utf-8") as file:
            if Path(config_file_absolute_path).suffix.lower() in (".yaml", ".yml"):
                config_data = yaml.safe_load(file)
            else:
                config_data = json.load(file)

        if not isinstance(config_data, dict):
            msg = f"Configuration root must be an object: {config_file_absolute_path}"
            raise ValueError(msg)

        return self._replace_placeholders_in_value(config_data)

    def _validate_common_params(self) -> bool:
        """Validate common parameters."""
        return self._validate_arm_params() and self._validate_timeout_params()

    def _validate_arm_params(self) -> bool:
        """Validate ARM parameters."""
        if not self.common.arm.subscription_id or not self.common.arm.tenant_id:
            self.logger.error(f"subscriptionId: {self.common.arm.subscription_id}, or tenantId: {self.common.arm.tenant_id} cannot be empty")
            return False
        if not self.common.arm.endpoint.startswith("https://"):
            self.logger.error(f"arm endpoint must be a valid HTTPS URL: {self.common.arm.endpoint}")
            return False
        return True

    def _validate_timeout_params(self) -> bool:
        """Validate timeout parameters."""
        for operation_kind in OperationKind:
            if self.common.timeouts.seconds_for(operation_kind) <= 0:
                self.logger.error(f"{operation_kind.value} timeout must be positive: {self.common.timeouts}")
                return False
        return True

    def _validate_resources_params(self) -> bool:
        """Validate resources against their schema, and require an id where the operation needs one."""
        # Imported lazily, the schemas import this module.
        from arm_resource_adapters.manager.log_analytics.windows_performance_counter import WINDOWS_PERFORMANCE_COUNTER_SCHEMA
        from arm_resource_adapters.manager.recovery_services.replication_fabric import REPLICATION_FABRIC_SCHEMA

        schemas = {
            ResourceKind.REPLICATION_FABRIC: REPLICATION_FABRIC_SCHEMA,
            ResourceKind.WINDOWS_PERFORMANCE_COUNTER: WINDOWS_PERFORMANCE_COUNTER_SCHEMA,
        }
        id_only_operations = (Operation.READ, Operation.DELETE, Operation.IMPORT)

        valid = True
        for index, resource in enumerate(self.resources.all()):
            if self.operation in id_only_operations:
                if not resource.resource_id and not self._can_format_id(resource):
                    self.logger.error(f"Resource {index} ({resource.kind.value}) needs an 'id' for operation {self.operation.value}")
                    valid = False
                continue

            if self.operation == Operation.DRY_RUN or self.operation in (Operation.CREATE, Operation.UPDATE, Operation.RECONCILE):
                violations = schemas[resource.kind].violations(resource.config)
                for violation in violations:
                    self.logger.error(f"Resource {index} ({resource.kind.value}): {violation}")
                valid = valid and not violations

        return valid

    def _can_format_id(self, resource: ConfiguredResource) -> bool:
        config = resource.config
        parent = getattr(config, "vault_name", None) or getattr(config, "workspace_name", None)
        return bool(config.name and config.resource_group_name and parent)

    def _parse_common_params(self, data: dict[str, Any]) -> CommonParams:
        """Parse common parameters."""
        return CommonParams(
            arm=self._parse_arm_params(data["arm"]),
            timeouts=self._parse_timeout_params(data.get("timeouts", {})),
            features=self._parse_feature_params(data.get("features", {})),
        )

    def _parse_arm_params(self, data: dict[str, Any]) -> ArmParams:
        """Parse ARM parameters."""
        return ArmParams(
            subscription_id=data["subscriptionId"],
            tenant_id=data["tenantId"],
            endpoint=data.get("endpoint", DEFAULT_ARM_ENDPOINT),
        )

    def _parse_timeout_params(self, data: dict[str, Any]) -> TimeoutParams:
        """Parse timeout parameters."""
        return TimeoutParams(
            create_minutes=data.get("createMinutes", DEFAULT_CREATE_TIMEOUT_MINUTES),
            read_minutes=data.get("readMinutes", DEFAULT_READ_TIMEOUT_MINUTES),
            update_minutes=data.get("updateMinutes", DEFAULT_UPDATE_TIMEOUT_MINUTES),
            delete_minutes=data.get("deleteMinutes", DEFAULT_DELETE_TIMEOUT_MINUTES),
        )

    def _parse_feature_params(self, data: dict[str, Any]) -> FeatureParams:
        """Parse feature parameters."""
        return FeatureParams(require_resources_to_be_imported=data.get("requireResourcesToBeImported", True))

    def _parse_resources_params(self, data: dict[str, Any]) -> ResourcesParams:
        """Parse resources parameters."""
        replication_fabrics = []
        for fabric_data in data.get("replicationFabrics", []):
            replication_fabrics.append(self._parse_replication_fabric(fabric_data))

        windows_performance_counters = []
        for counter_data in data.get("windowsPerformanceCounters", []):
            windows_performance_counters.append(self._parse_windows_performance_counter(counter_data))

        return ResourcesParams(
            replication_fabrics=replication_fabrics,
            windows_performance_counters=windows_performance_counters,
        )

    def _parse_replication_fabric(self, data: dict[str, Any]) -> ConfiguredResource:
        """Parse a replication fabric."""
        return ConfiguredResource(
            kind=ResourceKind.REPLICATION_FABRIC,
            config=ReplicationFabricConfig(
                name=data.get("name"),
                resource_group_name=data.get("resourceGroupName"),
                vault_name=data.get("vaultName"),
                location=data.get("location"),
            ),
            resource_id=data.get("id"),
        )

    def _parse_windows_performance_counter(self, data: dict[str, Any]) -> ConfiguredResource:
        """Parse a Windows performance counter data source."""
        return ConfiguredResource(
            kind=ResourceKind.WINDOWS_PERFORMANCE_COUNTER,
            config=WindowsPerformanceCounterConfig(
                name=data.get("name"),
                resource_group_name=data.get("resourceGroupName"),
                workspace_name=data.get("workspaceName"),
                counter_name=data.get("counterName"),
                instance_name=data.get("instanceName"),
                interval_seconds=data.get("intervalSeconds"),
                object_name=data.get("objectName"),
            ),
            resource_id=data.get("id"),
        )
