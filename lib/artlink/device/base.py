"""
Capability-gated NFC device abstraction.

A device either supports tag scanning and writing or it does not; the
answer is fixed when the adapter is constructed so call sites never query
the platform themselves.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from artlink.catalog.models import TagDiscovered, TagWriteRecord
from artlink.constants import UNSUPPORTED_DEVICE_MESSAGE
from artlink.exceptions import ArtLinkError, CapabilityError

logger = logging.getLogger(__name__)

# Wakes a pending reader after stop()
_STOP = object()


class ScanStream:
    """
    Cancellable async stream of TagDiscovered events.

    The stream never ends by itself. stop() ends it, is idempotent, and wakes
    a reader blocked in __anext__. Platform failures pushed with fail() are
    raised from __anext__.
    """

    def __init__(self, on_stop: Callable[["ScanStream"], None] | None = None) -> None:
        self._queue: asyncio.Queue = asyncio.Queue()
        self._stopped = False
        self._on_stop = on_stop

    @property
    def stopped(self) -> bool:
        return self._stopped

    def push(self, event: TagDiscovered) -> None:
        """Deliver a discovery. Ignored once the stream is stopped."""
        if self._stopped:
            logger.debug("Discarding tag event on stopped scan stream")
            return
        self._queue.put_nowait(event)

    def fail(self, error: ArtLinkError) -> None:
        """Deliver a platform failure to the reader."""
        if not self._stopped:
            self._queue.put_nowait(error)

    def stop(self) -> None:
        """End the stream and release the platform scan."""
        if self._stopped:
            return
        self._stopped = True
        self._queue.put_nowait(_STOP)
        if self._on_stop is not None:
            self._on_stop(self)

    def __aiter__(self) -> "ScanStream":
        return self

    async def __anext__(self) -> TagDiscovered:
        if self._stopped:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _STOP or self._stopped:
            raise StopAsyncIteration
        if isinstance(item, ArtLinkError):
            raise item
        return item


class NFCDeviceAdapter(ABC):
    """Platform tag scanning and writing primitives."""

    name = "nfc"

    @property
    @abstractmethod
    def supported(self) -> bool:
        """Whether the host exposes tag scanning/writing."""

    def ensure_supported(self) -> None:
        """Raise CapabilityError before any I/O when the capability is absent."""
        if not self.supported:
            raise CapabilityError(UNSUPPORTED_DEVICE_MESSAGE)

    @abstractmethod
    def scan(self) -> ScanStream:
        """
        Start scanning for tags.

        Returns:
            A new ScanStream; the caller must stop() it

        Raises:
            CapabilityError: If the device is unsupported
        """

    @abstractmethod
    async def write(self, record: TagWriteRecord) -> None:
        """
        Write a record to the most recently discovered tag.

        Raises:
            CapabilityError: If the device is unsupported
            DeviceError: On permission denial, missing tag or transport failure
        """


class UnsupportedDevice(NFCDeviceAdapter):
    """Host without NFC capability: every operation fails immediately."""

    name = "unsupported"

    def __init__(self, reason: str = UNSUPPORTED_DEVICE_MESSAGE) -> None:
        self.reason = reason

    @property
    def supported(self) -> bool:
        return False

    def ensure_supported(self) -> None:
        raise CapabilityError(self.reason)

    def scan(self) -> ScanStream:
        raise CapabilityError(self.reason)

    async def write(self, record: TagWriteRecord) -> None:
        raise CapabilityError(self.reason)
