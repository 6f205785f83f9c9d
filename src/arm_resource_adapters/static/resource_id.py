# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

from dataclasses import dataclass, field

from arm_resource_adapters.operations.exceptions import MalformedIdError

SUBSCRIPTIONS_KEY = "subscriptions"
RESOURCE_GROUPS_KEY = "resourceGroups"
PROVIDERS_KEY = "providers"


@dataclass(frozen=True)
class ResourceIdentifier:
    """
    Structured form of an ARM resource id for a child resource of a parent resource.

    >>> /subscriptions/{subscription_id}/resourceGroups/{resource_group}/providers/{provider}/{parent_type}/{parent_name}/{resource_type}/{resource_name}
    """

    subscription_id: str
    resource_group: str
    provider: str
    parent_type: str
    parent_name: str
    resource_type: str
    resource_name: str
    resource_groups_key: str = field(default=RESOURCE_GROUPS_KEY, compare=False, repr=False)

    def __str__(self) -> str:
        return ResourceIdParser.format(self)


class ResourceIdParser:
    """
    Parses and formats ARM resource ids.
    """

    @staticmethod
    def parse(resource_id: str, parent_type: str, resource_type: str) -> ResourceIdentifier:
        """
        Parse an ARM resource id into a ResourceIdentifier.

        The resource group and type keywords are matched case-insensitively
        because ARM does not always echo back the casing used on creation,
        e.g. `datasources` for `dataSources`. The spelling found in the id is
        kept so that formatting reproduces the original string.

        Args:
            resource_id: The slash-delimited resource id
            parent_type: The expected parent resource type segment, e.g. "vaults"
            resource_type: The expected child resource type segment, e.g. "replicationFabrics"

        Returns:
            ResourceIdentifier: The parsed identifier

        Raises:
            MalformedIdError: If the id is not a well formed id of the expected type
        """
        if not resource_id:
            raise MalformedIdError("Resource id cannot be empty")

        if not resource_id.startswith("/"):
            raise MalformedIdError(f"Resource id {resource_id!r} must start with '/'")

        segments = resource_id[1:].split("/")
        if any(not segment for segment in segments):
            raise MalformedIdError(f"Resource id {resource_id!r} contains an empty segment")

        if len(segments) % 2 != 0:
            raise MalformedIdError(f"Resource id {resource_id!r} must consist of key/value pairs")

        pairs = [(segments[i], segments[i + 1]) for i in range(0, len(segments), 2)]
        expected_keys = [SUBSCRIPTIONS_KEY, RESOURCE_GROUPS_KEY, PROVIDERS_KEY, parent_type, resource_type]
        keys = [key for key, _ in pairs]

        # ARM always emits "subscriptions" and "providers" in lower case
        mismatched = any(key.lower() != expected.lower() for key, expected in zip(keys, expected_keys))
        if len(pairs) != len(expected_keys) or mismatched or keys[0] != SUBSCRIPTIONS_KEY or keys[2] != PROVIDERS_KEY:
            expected_layout = "/".join(f"{key}/{{{key}}}" for key in expected_keys)
            raise MalformedIdError(f"Resource id {resource_id!r} does not match the expected layout /{expected_layout}")

        (_, subscription_id), (resource_groups_key, resource_group), (_, provider), (found_parent_type, parent_name), (found_resource_type, resource_name) = pairs

        return ResourceIdentifier(
            subscription_id=subscription_id,
            resource_group=resource_group,
            provider=provider,
            parent_type=found_parent_type,
            parent_name=parent_name,
            resource_type=found_resource_type,
            resource_name=resource_name,
            resource_groups_key=resource_groups_key,
        )

    @staticmethod
    def format(identifier: ResourceIdentifier) -> str:
        """
        Format a ResourceIdentifier back into its string form.
        """
        return (
            f"/{SUBSCRIPTIONS_KEY}/{identifier.subscription_id}"
            f"/{identifier.resource_groups_key}/{identifier.resource_group}"
            f"/{PROVIDERS_KEY}/{identifier.provider}"
            f"/{identifier.parent_type}/{identifier.parent_name}"
            f"/{identifier.resource_type}/{identifier.resource_name}"
        )
