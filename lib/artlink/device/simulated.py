"""Simulated NFC device for development without a reader."""

import logging

from artlink.catalog.models import TagDiscovered, TagWriteRecord
from artlink.device.base import NFCDeviceAdapter, ScanStream
from artlink.exceptions import CapabilityError, DeviceError

logger = logging.getLogger(__name__)


class SimulatedNFCDevice(NFCDeviceAdapter):
    """
    In-process NFC device.

    present_tag() plays the role of a tag bump; written records are kept in
    `written` instead of reaching hardware.
    """

    name = "simulated"

    def __init__(self) -> None:
        self._supported = True
        self._streams: list[ScanStream] = []
        self._last_serial: str | None = None
        self._next_write_failure: str | None = None
        self.written: list[tuple[str, TagWriteRecord]] = []
        self.scan_count = 0

    @property
    def supported(self) -> bool:
        return self._supported

    @property
    def active_streams(self) -> list[ScanStream]:
        return list(self._streams)

    def scan(self) -> ScanStream:
        self.ensure_supported()
        stream = ScanStream(on_stop=self._release)
        self._streams.append(stream)
        self.scan_count += 1
        logger.info("Simulated scan started")
        return stream

    def _release(self, stream: ScanStream) -> None:
        if stream in self._streams:
            self._streams.remove(stream)
            logger.info("Simulated scan stopped")

    def present_tag(self, serial_id: str) -> TagDiscovered:
        """Bring a tag into range of every active scan."""
        event = TagDiscovered(serial_id=serial_id)
        self._last_serial = serial_id
        for stream in list(self._streams):
            stream.push(event)
        return event

    def fail_next_write(self, diagnostic: str = "simulated write failure") -> None:
        self._next_write_failure = diagnostic

    def revoke(self, reason: str = "NFC capability revoked") -> None:
        """Drop the capability; active scans fail with CapabilityError."""
        self._supported = False
        for stream in list(self._streams):
            stream.fail(CapabilityError(reason))

    async def write(self, record: TagWriteRecord) -> None:
        self.ensure_supported()
        if self._last_serial is None:
            raise DeviceError("Tag write failed", diagnostic="no tag in range")
        if self._next_write_failure is not None:
            diagnostic, self._next_write_failure = self._next_write_failure, None
            raise DeviceError("Tag write failed", diagnostic=diagnostic)

        self.written.append((self._last_serial, record))
        logger.info(f"[Simulated] Wrote {record.record_type} record: {record.data}")
