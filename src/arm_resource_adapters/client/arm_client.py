# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

import requests
from azure.core.credentials import TokenCredential

from arm_resource_adapters.client.long_running_operation import ArmLongRunningOperation
from arm_resource_adapters.operations.exceptions import (
    NotFoundError,
    OperationTimeoutError,
    RemoteOperationFailedError,
)
from arm_resource_adapters.operations.operation_interfaces import (
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    CommonParams,
    HttpRetryHandler,
    ResourceClient,
)

TOKEN_REFRESH_MARGIN_SECONDS = 300


class ArmResourceClient(ResourceClient):
    """
    Concrete implementation of ResourceClient against the Azure Resource Manager REST API.
    """

    def __init__(
        self,
        common_params: CommonParams,
        credential: TokenCredential,
        http_retry_handler: HttpRetryHandler,
        session: requests.Session | None = None,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the ARM resource client.

        Args:
            common_params: Common configuration parameters
            credential: Token credential for the ARM scope
            http_retry_handler: HTTP retry handler with exponential backoff
            session: Optional requests session, one is created if omitted
            poll_interval_seconds: Poll interval when ARM sends no Retry-After header
            sleep: Sleep function used while polling long-running operations
            clock: Monotonic clock all deadlines are measured against
        """
        super().__init__(common_params, clock)
        self.credential = credential
        self.http_retry = http_retry_handler
        self.session = session or requests.Session()
        self.poll_interval_seconds = poll_interval_seconds
        self.sleep = sleep
        self.logger = logging.getLogger(__name__)
        self._token: str | None = None
        self._token_expires_on = 0

    def get(self, resource_path: str, api_version: str, deadline: float) -> dict[str, Any]:
        response = self.send("GET", self._url(resource_path, api_version), deadline)
        return self._json(response)

    def put(self, resource_path: str, api_version: str, body: dict[str, Any], deadline: float) -> ArmLongRunningOperation:
        response = self.send("PUT", self._url(resource_path, api_version), deadline, body=body)
        return ArmLongRunningOperation(self, response)

    def post(self, resource_path: str, api_version: str, deadline: float, body: dict[str, Any] | None = None) -> ArmLongRunningOperation:
        response = self.send("POST", self._url(resource_path, api_version), deadline, body=body)
        return ArmLongRunningOperation(self, response)

    def delete(self, resource_path: str, api_version: str, deadline: float) -> ArmLongRunningOperation:
        response = self.send("DELETE", self._url(resource_path, api_version), deadline)
        return ArmLongRunningOperation(self, response)

    # ---------------------------------------------------------------------------- #

    def send(self, method: str, url: str, deadline: float, body: dict[str, Any] | None = None) -> requests.Response:
        """
        Send a request with retries, mapping failures onto the adapter error taxonomy.

        Args:
            method: The HTTP method
            url: The absolute URL
            deadline: Clock value after which the request is not attempted
            body: Optional JSON body

        Returns:
            requests.Response: The successful response

        Raises:
            OperationTimeoutError: If the deadline has already elapsed
            NotFoundError: If ARM answers 404
            RemoteOperationFailedError: For any other failure
        """
        remaining = deadline - self.clock()
        if remaining <= 0:
            raise OperationTimeoutError(f"Deadline elapsed before {method} {url}")

        func = {
            "GET": self.session.get,
            "PUT": self.session.put,
            "POST": self.session.post,
            "DELETE": self.session.delete,
        }[method]

        kwargs: dict[str, Any] = {
            "headers": {
                "Authorization": f"Bearer {self._get_access_token()}",
                "Content-Type": "application/json",
            },
            "timeout": min(DEFAULT_REQUEST_TIMEOUT_SECONDS, remaining),
        }
        if body is not None:
            kwargs["json"] = body

        self.logger.debug(f"{method} {url}")
        try:
            response = self.http_retry.execute(func, url, deadline=deadline, **kwargs)
        except requests.exceptions.HTTPError as e:
            raise self._map_http_error(method, url, e) from e
        except requests.exceptions.RequestException as e:
            error_msg = f"{method} {url} failed: {e}"
            self.logger.error(error_msg)
            raise RemoteOperationFailedError(error_msg) from e

        self.logger.debug(f"{method} {url} returned {response.status_code}")
        return response

    def _map_http_error(self, method: str, url: str, error: requests.exceptions.HTTPError) -> Exception:
        response = error.response
        status_code = response.status_code if response is not None else None
        error_code, error_message = self._parse_error_body(response)

        if status_code == 404:
            return NotFoundError(f"{method} {url} returned 404: {error_message or 'not found'}")

        error_msg = f"{method} {url} returned {status_code}: {error_code or 'UnknownError'}: {error_message or error}"
        self.logger.error(error_msg)
        return RemoteOperationFailedError(error_msg, status_code=status_code, error_code=error_code)

    @staticmethod
    def _parse_error_body(response: requests.Response | None) -> tuple[str | None, str | None]:
        """
        Extract the ARM error code and message from an error response.

        >>> {"error": {"code": "InvalidParameter", "message": "..."}}
        """
        if response is None:
            return None, None
        try:
            body = response.json()
        except ValueError:
            return None, response.text or None
        error = body.get("error", body) if isinstance(body, dict) else {}
        if not isinstance(error, dict):
            return None, str(error)
        return error.get("code"), error.get("message")

    def _json(self, response: requests.Response) -> dict[str, Any]:
        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as e:
            raise RemoteOperationFailedError(f"Response from {response.url} is not valid JSON: {e}") from e
        if not isinstance(body, dict):
            raise RemoteOperationFailedError(f"Response from {response.url} is not a JSON object")
        return body

    def _url(self, resource_path: str, api_version: str) -> str:
        return f"{self.common_params.arm.endpoint.rstrip('/')}{resource_path}?api-version={api_version}"

    def _get_access_token(self) -> str:
        """
        Get a bearer token for the ARM scope, reusing it until shortly before it expires.
        """
        if self._token and time.time() < self._token_expires_on - TOKEN_REFRESH_MARGIN_SECONDS:
            return self._token

        access_token = self.credential.get_token(self.common_params.arm.scope)
        if not access_token.token:
            raise RuntimeError("Access token is empty")

        self._token = access_token.token
        self._token_expires_on = access_token.expires_on
        return self._token
