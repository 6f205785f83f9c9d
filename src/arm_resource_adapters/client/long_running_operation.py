# SPDX-FileCopyrightText: 2025-present Raki Rahman <mdrakiburrahman@gmail.com>
#
# SPDX-License-Identifier: MIT

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

from arm_resource_adapters.operations.exceptions import OperationTimeoutError, RemoteOperationFailedError
from arm_resource_adapters.operations.operation_interfaces import LongRunningOperation, LongRunningOperationStatus

if TYPE_CHECKING:
    from arm_resource_adapters.client.arm_client import ArmResourceClient

AZURE_ASYNC_OPERATION_HEADER = "Azure-AsyncOperation"
LOCATION_HEADER = "Location"
RETRY_AFTER_HEADER = "Retry-After"


class ArmLongRunningOperation(LongRunningOperation):
    """
    Polls an ARM long-running operation to a terminal state.

    ARM signals an asynchronous operation by answering 201 or 202 with an
    `Azure-AsyncOperation` header (a status document to poll) and/or a
    `Location` header (202 while running, 200 or 204 once done). Any other
    success answer is terminal on arrival.
    """

    def __init__(self, client: ArmResourceClient, response: requests.Response):
        """
        Initialize the operation handle from the initial response.

        Args:
            client: The client that submitted the request, used for polling
            response: The initial response to the submitted request
        """
        self.client = client
        self.logger = logging.getLogger(__name__)
        self.initial_status_code = response.status_code
        self.async_operation_url = response.headers.get(AZURE_ASYNC_OPERATION_HEADER)
        self.location_url = response.headers.get(LOCATION_HEADER)
        self.retry_after = self._parse_retry_after(response)
        self.status: LongRunningOperationStatus | None = None

        pollable = response.status_code in (201, 202) and bool(self.async_operation_url or self.location_url)
        self._done = not pollable
        if self._done:
            self.status = LongRunningOperationStatus(status="Succeeded")

    def done(self) -> bool:
        return self._done

    def wait_for_completion(self, deadline: float) -> None:
        self.logger.debug(f"Waiting for long-running operation (async operation: {self.async_operation_url}, location: {self.location_url})")

        while not self._done:
            remaining = deadline - self.client.clock()
            if remaining <= 0:
                error_msg = "Timeout waiting for long-running operation to complete, abandoning the wait"
                self.logger.error(error_msg)
                raise OperationTimeoutError(error_msg)

            interval = self.retry_after if self.retry_after is not None else self.client.poll_interval_seconds
            self.logger.debug(f"Long-running operation still running, waiting {min(interval, remaining):.1f}s...")
            self.client.sleep(min(interval, remaining))
            self._poll(deadline)

        self.logger.debug(f"Long-running operation completed with status: {self.status.status if self.status else 'unknown'}")

    # ---------------------------------------------------------------------------- #

    def _poll(self, deadline: float) -> None:
        if self.async_operation_url:
            self._poll_async_operation(deadline)
        else:
            self._poll_location(deadline)

    def _poll_async_operation(self, deadline: float) -> None:
        response = self.client.send("GET", self.async_operation_url, deadline)
        self.retry_after = self._parse_retry_after(response)
        body = self._body(response)

        status = body.get("status")
        if not isinstance(status, str) or not status:
            raise RemoteOperationFailedError(f"Async operation status document has no status: {body}")

        error = body.get("error") if isinstance(body.get("error"), dict) else {}
        self.status = LongRunningOperationStatus(status=status, error_code=error.get("code"), error_message=error.get("message"))
        if not self.status.is_terminal:
            return

        self._done = True
        if not self.status.is_success:
            error_msg = f"Long-running operation finished with status {self.status.status}: {self.status.error_code or 'UnknownError'}: {self.status.error_message or 'no details'}"
            self.logger.error(error_msg)
            raise RemoteOperationFailedError(error_msg, error_code=self.status.error_code)

    def _poll_location(self, deadline: float) -> None:
        response = self.client.send("GET", self.location_url, deadline)
        self.retry_after = self._parse_retry_after(response)

        if response.status_code == 202:
            self.location_url = response.headers.get(LOCATION_HEADER, self.location_url)
            self.status = LongRunningOperationStatus(status="InProgress")
            return

        self._done = True
        self.status = LongRunningOperationStatus(status="Succeeded")

    @staticmethod
    def _body(response: requests.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise RemoteOperationFailedError(f"Async operation status document is not valid JSON: {e}") from e
        if not isinstance(body, dict):
            raise RemoteOperationFailedError("Async operation status document is not a JSON object")
        return body

    @staticmethod
    def _parse_retry_after(response: requests.Response) -> float | None:
        value = response.headers.get(RETRY_AFTER_HEADER)
        if value is None:
            return None
        try:
            return max(float(value), 0.0)
        except ValueError:
            return None
