# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from arm_resource_adapters.operations.exceptions import ValidationError
from arm_resource_adapters.static.transformers import StringTransformer

MAX_INT32 = 2**31 - 1

Validator = Callable[[str, Any], list[str]]


# ---------------------------------------------------------------------------- #
# ------------------------------- VALIDATORS --------------------------------- #
# ---------------------------------------------------------------------------- #


class Validators:
    """
    Attribute validators.

    Each validator takes the attribute name and value and returns the list of
    violations, empty when the value is valid.
    """

    @staticmethod
    def string_is_not_empty() -> Validator:
        def validate(name: str, value: Any) -> list[str]:
            if not isinstance(value, str) or not value.strip():
                return [f"{name!r} must not be empty"]
            return []

        return validate

    @staticmethod
    def string_matches(pattern: str, message: str) -> Validator:
        regex = re.compile(pattern)

        def validate(name: str, value: Any) -> list[str]:
            if not isinstance(value, str) or not regex.match(value):
                return [f"{name!r}: {message}"]
            return []

        return validate

    @staticmethod
    def int_between(low: int, high: int) -> Validator:
        def validate(name: str, value: Any) -> list[str]:
            if isinstance(value, bool) or not isinstance(value, int):
                return [f"{name!r} must be an integer, got {type(value).__name__}"]
            if value < low or value > high:
                return [f"expected {name!r} to be in the range ({low} - {high}), got {value}"]
            return []

        return validate

    @staticmethod
    def resource_group_name() -> Validator:
        regex = re.compile(r"^[-\w._()]+$")

        def validate(name: str, value: Any) -> list[str]:
            if not isinstance(value, str):
                return [f"{name!r} must be a string"]
            errors = []
            if len(value) > 90:
                errors.append(f"{name!r} may not exceed 90 characters in length")
            if value.endswith("."):
                errors.append(f"{name!r} may not end with a period")
            if not regex.match(value):
                errors.append(f"{name!r} may only contain alphanumeric characters, dash, underscores, parentheses and periods")
            return errors

        return validate

    @staticmethod
    def log_analytics_workspace_name() -> Validator:
        regex = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]+[A-Za-z0-9]$")

        def validate(name: str, value: Any) -> list[str]:
            if not isinstance(value, str):
                return [f"{name!r} must be a string"]
            errors = []
            if not regex.match(value):
                errors.append("Workspace Name can only contain alphabet, number, and '-' character. You can not use '-' as the start and end of the name")
            if len(value) > 63 or len(value) < 4:
                errors.append("Workspace Name can only be between 4 and 63 letters")
            return errors

        return validate


# ---------------------------------------------------------------------------- #
# --------------------------- DIFF SUPPRESSION ------------------------------- #
# ---------------------------------------------------------------------------- #


def case_insensitive(old: Any, new: Any) -> bool:
    """Suppress differences that are only in casing."""
    return isinstance(old, str) and isinstance(new, str) and old.lower() == new.lower()


# ---------------------------------------------------------------------------- #
# --------------------------------- SCHEMA ----------------------------------- #
# ---------------------------------------------------------------------------- #


@dataclass(frozen=True)
class Attribute:
    """A single configurable attribute of a resource."""

    name: str
    type: type
    required: bool = True
    force_new: bool = False
    validators: tuple[Validator, ...] = ()
    diff_suppress: Callable[[Any, Any], bool] | None = None
    normalize: Callable[[Any], Any] | None = None

    def equivalent(self, old: Any, new: Any) -> bool:
        """
        Compare two values of this attribute after normalization and diff suppression.
        """
        if self.normalize is not None:
            old = self.normalize(old) if old is not None else None
            new = self.normalize(new) if new is not None else None
        if old == new:
            return True
        return self.diff_suppress is not None and self.diff_suppress(old, new)


@dataclass(frozen=True)
class ResourceSchema:
    """Declares the attributes of a resource type, their mutability and validation rules."""

    resource_type: str
    attributes: tuple[Attribute, ...] = field(default_factory=tuple)

    def attribute(self, name: str) -> Attribute:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        raise KeyError(name)

    def updatable_attributes(self) -> list[Attribute]:
        return [attribute for attribute in self.attributes if not attribute.force_new]

    def force_new_attributes(self) -> list[Attribute]:
        return [attribute for attribute in self.attributes if attribute.force_new]

    def violations(self, record: Any) -> list[str]:
        """
        Collect every schema violation of a configuration record.

        Args:
            record: A configuration record exposing one field per attribute

        Returns:
            list[str]: Violations, empty when the record is valid
        """
        violations = []
        for attribute in self.attributes:
            value = getattr(record, attribute.name, None)
            if value is None:
                if attribute.required:
                    violations.append(f"{attribute.name!r} is required")
                continue

            if (attribute.type is int and isinstance(value, bool)) or not isinstance(value, attribute.type):
                violations.append(f"{attribute.name!r} must be of type {attribute.type.__name__}, got {type(value).__name__}")
                continue

            for validator in attribute.validators:
                violations.extend(validator(attribute.name, value))

        return violations

    def validate(self, record: Any, **context: str | None) -> None:
        """
        Validate a configuration record.

        Raises:
            ValidationError: Listing every violation, if any
        """
        violations = self.violations(record)
        if violations:
            raise ValidationError(f"Invalid configuration for {self.resource_type}", violations, **context)

    def force_new_changes(self, current: Any, desired: Any) -> list[str]:
        """
        Name the force-new attributes whose values differ between two records.

        Attributes unset on the current record are not reported, the remote
        side simply did not tell us their value.
        """
        changed = []
        for attribute in self.force_new_attributes():
            old = getattr(current, attribute.name, None)
            new = getattr(desired, attribute.name, None)
            if old is None:
                continue
            if not attribute.equivalent(old, new):
                changed.append(attribute.name)
        return changed


def location_attribute() -> Attribute:
    """The location attribute shared by resources, always force-new and normalized."""
    return Attribute(
        name="location",
        type=str,
        force_new=True,
        validators=(Validators.string_is_not_empty(),),
        normalize=StringTransformer.normalize_location,
    )


def resource_group_name_attribute() -> Attribute:
    """The resource group name attribute shared by resources."""
    return Attribute(
        name="resource_group_name",
        type=str,
        force_new=True,
        validators=(Validators.resource_group_name(),),
    )
