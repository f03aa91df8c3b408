"""Submit-time orchestration shared by every form.

A form moves ``EDITING -> VALIDATING -> SUBMITTING -> SUCCESS | FAILED``.
Validation is synchronous and fail-fast: the first failing rule becomes the
form's error and the backend is never called. A backend failure leaves the
form in ``FAILED`` with the server message; ``FAILED`` is editable and can be
resubmitted. There is no automatic retry.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Generic, Hashable, TypeVar

from ..clients.base import BackendClient
from ..validation.errors import BackendError, ValidationError

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT")
ResultT = TypeVar("ResultT")


class FormState(str, Enum):
    EDITING = "editing"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


EDITABLE_STATES = (FormState.EDITING, FormState.FAILED)


class CancellationToken:
    """Cancelled when the owning form goes away.

    Results that arrive after cancellation are dropped instead of being
    applied to a form nobody is looking at.
    """

    def __init__(self):
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        for callback in self._callbacks:
            callback()

    def on_cancel(self, callback: Callable[[], None]) -> None:
        if self._cancelled:
            callback()
        else:
            self._callbacks.append(callback)


class KeyedCooldown:
    """Blocks a key for a fixed window after it is triggered.

    Used to disable a quick-add chip for a few seconds so repeated taps do
    not create duplicate entries.
    """

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic):
        self.seconds = seconds
        self._clock = clock
        self._until: dict[Hashable, float] = {}

    def is_blocked(self, key: Hashable) -> bool:
        until = self._until.get(key)
        if until is None:
            return False
        if self._clock() >= until:
            del self._until[key]
            return False
        return True

    def trigger(self, key: Hashable) -> bool:
        """Start the window for ``key``. Returns False if it was already blocked."""
        if self.is_blocked(key):
            return False
        self._until[key] = self._clock() + self.seconds
        return True


class Form(ABC, Generic[PayloadT, ResultT]):
    """Base class for a submit-gated form.

    Subclasses implement ``build_payload`` (validation, raising
    ``ValidationError`` on the first failure in field order) and ``send``
    (the single backend call).
    """

    timeout: float | None = 10.0

    def __init__(self, backend: BackendClient, token: CancellationToken | None = None):
        self.backend = backend
        self.token = token or CancellationToken()
        self.state = FormState.EDITING
        self.error: ValidationError | BackendError | None = None
        self.result: ResultT | None = None

    @property
    def is_editable(self) -> bool:
        return self.state in EDITABLE_STATES

    @property
    def closed(self) -> bool:
        return self.token.cancelled

    @abstractmethod
    def build_payload(self) -> PayloadT:
        """Validate the draft and return what ``send`` needs."""

    @abstractmethod
    async def send(self, payload: PayloadT) -> ResultT:
        """Issue the backend call."""

    def validate(self) -> PayloadT | None:
        """Run validation only. Returns the payload or None with ``error`` set."""
        try:
            payload = self.build_payload()
        except ValidationError as e:
            self.error = e
            return None
        self.error = None
        return payload

    async def submit(self) -> FormState:
        """Validate, then issue the backend call if validation passed."""
        if self.closed:
            logger.debug("%s is closed; submit ignored", type(self).__name__)
            return self.state
        if not self.is_editable:
            logger.debug("%s already %s; submit ignored", type(self).__name__, self.state.value)
            return self.state

        self.state = FormState.VALIDATING
        payload = self.validate()
        if payload is None:
            logger.debug("%s failed validation on %s", type(self).__name__, self.error.field)
            self.state = FormState.EDITING
            return self.state

        self.state = FormState.SUBMITTING
        try:
            result = await self._send_with_timeout(payload)
        except BackendError as e:
            if self._discard_if_cancelled():
                return self.state
            logger.info("%s backend call failed: %s", type(self).__name__, e.message)
            self.error = e
            self.state = FormState.FAILED
            return self.state

        if self._discard_if_cancelled():
            return self.state
        self.result = result
        self.state = FormState.SUCCESS
        return self.state

    async def _send_with_timeout(self, payload: PayloadT) -> ResultT:
        if self.timeout is None:
            return await self.send(payload)
        try:
            return await asyncio.wait_for(self.send(payload), self.timeout)
        except asyncio.TimeoutError:
            raise BackendError(f"Request timed out after {self.timeout:g} seconds") from None

    def close(self) -> None:
        """Cancel the form's token. Later results are discarded."""
        self.token.cancel()

    def _discard_if_cancelled(self) -> bool:
        if self.token.cancelled:
            logger.debug("%s closed while submitting; result discarded", type(self).__name__)
            return True
        return False
