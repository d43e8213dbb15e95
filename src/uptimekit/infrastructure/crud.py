"""Generic CRUD operations over one API collection."""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import Any, Callable, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from uptimekit.domain.config.polling import PollingConfig
from uptimekit.infrastructure.errors import (
    APIError,
    DeleteCancelledError,
    DeleteTimeoutError,
    ResponseDecodeError,
    describe_error,
    is_not_found,
)
from uptimekit.infrastructure.http_client import APIClient

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

ResourceID = Union[int, str]


class DeletionState(str, Enum):
    """States of a delete-confirmation wait"""

    POLLING = "polling"
    CONFIRMED = "confirmed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


def decode_model(model: Type[ModelT], payload: bytes, what: str) -> ModelT:
    """Decode a JSON response body into a model

    Raises:
        ResponseDecodeError: If the body does not match the model
    """
    try:
        return model.model_validate_json(payload)
    except ValidationError as e:
        raise ResponseDecodeError(what, e, payload) from e


class CRUDResource(Generic[ModelT]):
    """Create/get/update/delete for the collection under ``endpoint``.

    Responses are decoded into ``model``. Deletion is idempotent: a resource that
    is already gone counts as deleted.
    """

    def __init__(
        self,
        client: APIClient,
        endpoint: str,
        model: Type[ModelT],
        polling: Optional[PollingConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize CRUD resource

        Args:
            client: Request executor
            endpoint: Collection path prefix (e.g. "/monitors")
            model: Response model for a single resource
            polling: Delete-confirmation polling configuration
            clock: Monotonic clock in seconds (injectable for tests)
        """
        self.client = client
        self.endpoint = endpoint.rstrip("/")
        self.model = model
        self.polling = polling or PollingConfig()
        self._clock = clock

    def path(self, resource_id: ResourceID) -> str:
        return f"{self.endpoint}/{resource_id}"

    def create(self, request: Any) -> ModelT:
        resp = self.client.execute("POST", self.endpoint, request)
        return decode_model(self.model, resp, self.endpoint)

    def get(self, resource_id: ResourceID) -> ModelT:
        resp = self.client.execute("GET", self.path(resource_id))
        return decode_model(self.model, resp, self.path(resource_id))

    def update(self, resource_id: ResourceID, request: Any) -> ModelT:
        resp = self.client.execute("PATCH", self.path(resource_id), request)
        return decode_model(self.model, resp, self.path(resource_id))

    def delete(self, resource_id: ResourceID) -> None:
        """Delete a resource; 404/410 is treated as success"""
        try:
            self.client.execute("DELETE", self.path(resource_id))
        except APIError as e:
            if not is_not_found(e):
                raise
            logger.debug(f"{self.path(resource_id)} already deleted: {describe_error(e)}")

    def wait_deleted(
        self,
        resource_id: ResourceID,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        """Poll until the resource reports 404/410, the timeout elapses or ``cancel`` is set

        The delay between polls starts at ``polling.initial_interval`` and doubles
        up to ``polling.max_interval``. Sleeps are cut short by the deadline and by
        the cancel event. Errors other than not-found are treated as transient:
        the backend may still be mid-deletion.

        Args:
            resource_id: Resource identifier
            timeout: Time budget in seconds (default: polling.delete_timeout)
            cancel: Event that aborts the wait when set

        Raises:
            DeleteTimeoutError: Deadline passed before deletion was confirmed
            DeleteCancelledError: Cancel event was set before deletion was confirmed
        """
        if timeout is None:
            timeout = self.polling.delete_timeout
        if cancel is None:
            cancel = threading.Event()

        path = self.path(resource_id)
        deadline = self._clock() + timeout
        interval = self.polling.initial_interval
        polls = 0
        state = DeletionState.POLLING

        while state is DeletionState.POLLING:
            if cancel.is_set():
                state = DeletionState.CANCELLED
                break
            remaining = deadline - self._clock()
            if remaining <= 0:
                state = DeletionState.TIMED_OUT
                break

            polls += 1
            try:
                self.client.execute("GET", path)
            except APIError as e:
                if is_not_found(e):
                    state = DeletionState.CONFIRMED
                    break
                logger.debug(f"Poll {polls} of {path} failed, still waiting: {describe_error(e)}")
            else:
                logger.debug(f"Poll {polls}: {path} still exists")

            remaining = deadline - self._clock()
            if remaining <= 0:
                continue
            if cancel.wait(min(interval, remaining)):
                continue
            interval = min(interval * 2, self.polling.max_interval)

        if state is DeletionState.CONFIRMED:
            logger.info(f"Deletion of {path} confirmed after {polls} polls")
            return
        if state is DeletionState.CANCELLED:
            raise DeleteCancelledError(path, polls)
        raise DeleteTimeoutError(path, polls)
