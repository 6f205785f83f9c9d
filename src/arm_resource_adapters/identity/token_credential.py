# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

import logging
import os
import time
from typing import Any

from azure.core.credentials import AccessToken, TokenCredential

ACCESS_TOKEN_ENV_VAR = "ARM_ACCESS_TOKEN"
ACCESS_TOKEN_EXPIRES_ON_ENV_VAR = "ARM_ACCESS_TOKEN_EXPIRES_ON"
DEFAULT_TOKEN_LIFETIME_SECONDS = 60 * 60


class StaticTokenCredential(TokenCredential):
    """A bearer token handed to us from outside, e.g. by a pipeline that already logged in."""

    def __init__(self, token: str, expires_on: int):
        if not token:
            raise ValueError("Token cannot be None or empty")

        self._token = token
        self.expires_on = expires_on
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_environment(cls) -> "StaticTokenCredential | None":
        """
        Build a credential from ARM_ACCESS_TOKEN, if set.

        ARM_ACCESS_TOKEN_EXPIRES_ON (epoch seconds) overrides the assumed one hour lifetime.
        """
        token = os.getenv(ACCESS_TOKEN_ENV_VAR, "").strip()
        if not token:
            return None

        expires_on = os.getenv(ACCESS_TOKEN_EXPIRES_ON_ENV_VAR, "").strip()
        if expires_on:
            return cls(token, int(expires_on))
        return cls(token, int(time.time()) + DEFAULT_TOKEN_LIFETIME_SECONDS)

    def get_token(self, *scopes: str, **kwargs: Any) -> AccessToken:
        self.logger.debug(f"Static token credential - getting token for scopes: {scopes}")
        if self.expires_on <= time.time():
            self.logger.warning(f"Static token expired at {self.expires_on}, requests will likely be rejected")
        return AccessToken(self._token, self.expires_on)
