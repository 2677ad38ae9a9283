"""Polling of Google long-running operations."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from firebase_cli.client.api import ApiClient
from firebase_cli.client.errors import OperationError
from firebase_cli.config.constants import OPERATION_POLL_INTERVAL, OPERATION_TIMEOUT

logger = logging.getLogger(__name__)


class OperationPoller:
    """Poll ``GET /<operation name>`` on the API that started the operation."""

    def __init__(
        self,
        client: ApiClient,
        *,
        interval: float = OPERATION_POLL_INTERVAL,
        timeout: float = OPERATION_TIMEOUT,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = client
        self.interval = interval
        self.timeout = timeout
        self._sleep = sleep
        self._clock = clock

    def poll(self, operation_name: str, *, poller_name: str = "Operation Poller") -> Any:
        """Wait for the operation to finish and return its ``response`` payload.

        Raises OperationError if the operation reports an error or does not
        finish within ``timeout`` seconds.
        """
        deadline = self._clock() + self.timeout
        path = "/" + operation_name.lstrip("/")
        while True:
            operation = self.client.get_json(path)
            if operation.get("done"):
                break
            if self._clock() >= deadline:
                raise OperationError(
                    f"{poller_name}: operation {operation_name} timed out "
                    f"after {self.timeout:g}s"
                )
            logger.debug("[%s] %s not done yet", poller_name, operation_name)
            self._sleep(self.interval)

        error = operation.get("error")
        if error:
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise OperationError(f"{poller_name}: operation {operation_name} failed: {message}")
        logger.debug("[%s] %s finished", poller_name, operation_name)
        return operation.get("response", {})
