# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

from __future__ import annotations


class ArmAdapterError(Exception):
    """
    Base error for every resource adapter failure.

    Carries the identifying context of the resource the operation targeted so
    that callers can report which resource failed without parsing the message.
    """

    def __init__(
        self,
        message: str,
        *,
        resource_name: str | None = None,
        resource_group: str | None = None,
        parent: str | None = None,
    ):
        self.message = message
        self.resource_name = resource_name
        self.resource_group = resource_group
        self.parent = parent
        super().__init__(self._render())

    def with_context(self, *, resource_name: str | None = None, resource_group: str | None = None, parent: str | None = None) -> "ArmAdapterError":
        """
        Fill in resource context the raiser did not know about and return the same error.
        """
        self.resource_name = self.resource_name or resource_name
        self.resource_group = self.resource_group or resource_group
        self.parent = self.parent or parent
        self.args = (self._render(),)
        return self

    def _render(self) -> str:
        context = []
        if self.resource_name:
            context.append(f"name {self.resource_name!r}")
        if self.resource_group:
            context.append(f"resource group {self.resource_group!r}")
        if self.parent:
            context.append(f"parent {self.parent!r}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class MalformedIdError(ArmAdapterError, ValueError):
    """The resource identifier cannot be parsed."""


class ValidationError(ArmAdapterError, ValueError):
    """The configuration violates the resource schema."""

    def __init__(self, message: str, violations: list[str] | None = None, **context: str | None):
        self.violations = violations or []
        if self.violations:
            message = f"{message}: {'; '.join(self.violations)}"
        super().__init__(message, **context)


class AlreadyExistsError(ArmAdapterError):
    """A resource with the same identifier already exists and needs to be imported."""

    def __init__(self, resource_type: str, resource_id: str, **context: str | None):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"A resource with the ID {resource_id!r} already exists - to be managed it needs to be imported into the state. Please see the resource documentation for {resource_type!r} for more information."
        super().__init__(message, **context)


class ForceNewRequiredError(ArmAdapterError):
    """An update would change attributes that can only be set on creation."""

    def __init__(self, attributes: list[str], **context: str | None):
        self.attributes = attributes
        message = f"Cannot update {', '.join(attributes)} in place, the resource must be recreated"
        super().__init__(message, **context)


class RemoteOperationFailedError(ArmAdapterError):
    """The remote API rejected the request or the operation completed with a failure."""

    def __init__(self, message: str, *, status_code: int | None = None, error_code: str | None = None, **context: str | None):
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message, **context)


class NotFoundError(ArmAdapterError):
    """The remote API reports the resource as missing."""


class DecodeFailedError(ArmAdapterError):
    """A nested property document does not have the expected shape."""


class OperationTimeoutError(ArmAdapterError, TimeoutError):
    """The deadline elapsed before the remote operation reached a terminal state."""
