# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

import re
from typing import Any


class StringTransformer:
    """
    String transformation operations.
    """

    @staticmethod
    def camel_to_snake(name: str) -> str:
        """
        Convert camelCase string to snake_case.
        """

        s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
        return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()

    @staticmethod
    def snake_to_camel(name: str) -> str:
        """
        Convert snake_case string to camelCase.
        """

        head, *tail = name.split("_")
        return head + "".join(part[:1].upper() + part[1:] for part in tail)

    @staticmethod
    def convert_keys_to_snake_case(obj: Any) -> Any:
        """
        Recursively convert all dictionary keys from camelCase to snake_case.
        """

        if isinstance(obj, dict):
            return {StringTransformer.camel_to_snake(k): StringTransformer.convert_keys_to_snake_case(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [StringTransformer.convert_keys_to_snake_case(item) for item in obj]
        else:
            return obj

    @staticmethod
    def convert_keys_to_camel_case(obj: Any) -> Any:
        """
        Recursively convert all dictionary keys from snake_case to camelCase.
        """

        if isinstance(obj, dict):
            return {StringTransformer.snake_to_camel(k): StringTransformer.convert_keys_to_camel_case(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [StringTransformer.convert_keys_to_camel_case(item) for item in obj]
        else:
            return obj

    @staticmethod
    def normalize_location(location: str) -> str:
        """
        Normalize an Azure location display name, e.g. "West US" becomes "westus".
        """

        return location.replace(" ", "").lower()
