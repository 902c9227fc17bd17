"""
NFC reader backed by nfcpy.

nfcpy is blocking, so the reader loop runs in a worker thread and hands
discoveries to the event loop with call_soon_threadsafe. The worker never
touches pairing state directly.
"""

import asyncio
import logging
import threading

import ndef
import nfc
import nfc.tag

from artlink.catalog.models import TagDiscovered, TagWriteRecord
from artlink.constants import DEFAULT_DEVICE_PATH
from artlink.device.base import NFCDeviceAdapter, ScanStream
from artlink.exceptions import DeviceError

logger = logging.getLogger(__name__)

# Seconds between presence checks while a tag stays on the reader
PRESENCE_POLL_INTERVAL = 0.2

# Seconds to wait for a stopped scan thread to leave connect()
JOIN_TIMEOUT = 2.0


class NfcpyDevice(NFCDeviceAdapter):
    """USB/serial contactless reader driven through nfcpy."""

    name = "nfcpy"

    def __init__(self, path: str = DEFAULT_DEVICE_PATH) -> None:
        self.path = path
        self._clf: nfc.ContactlessFrontend | None = None
        self._tag = None
        self._worker: threading.Thread | None = None
        self._stop_event: threading.Event | None = None
        # Scan thread and writes share one frontend
        self._lock = threading.Lock()

    @property
    def supported(self) -> bool:
        return True

    def _frontend(self) -> nfc.ContactlessFrontend:
        with self._lock:
            if self._clf is None:
                try:
                    self._clf = nfc.ContactlessFrontend(self.path)
                except OSError as e:
                    raise DeviceError(f"Cannot open NFC reader at {self.path}", diagnostic=str(e)) from e
            return self._clf

    def _join_worker(self) -> None:
        """
        Stop the previous scan thread and wait for it to exit.

        Raises:
            DeviceError: If the thread is still inside connect() after JOIN_TIMEOUT
        """
        worker, self._worker = self._worker, None
        if self._stop_event is not None:
            self._stop_event.set()
            self._stop_event = None
        if worker is None:
            return

        worker.join(timeout=JOIN_TIMEOUT)
        if worker.is_alive():
            self._worker = worker
            raise DeviceError("NFC reader busy", diagnostic="previous scan did not stop")

    def scan(self) -> ScanStream:
        self.ensure_supported()
        # One thread at a time may drive the frontend
        self._join_worker()
        loop = asyncio.get_running_loop()
        stop_event = threading.Event()
        stream = ScanStream(on_stop=lambda _stream: stop_event.set())

        worker = threading.Thread(
            target=self._scan_loop,
            args=(loop, stream, stop_event),
            name="nfcpy-scan",
            daemon=True,
        )
        worker.start()
        self._worker = worker
        self._stop_event = stop_event
        logger.info(f"NFC scan started on {self.path}")
        return stream

    def _scan_loop(
        self,
        loop: asyncio.AbstractEventLoop,
        stream: ScanStream,
        stop_event: threading.Event,
    ) -> None:
        while not stop_event.is_set():
            try:
                clf = self._frontend()
                tag = clf.connect(
                    rdwr={"on-connect": lambda tag: False},
                    terminate=stop_event.is_set,
                )
            except (OSError, DeviceError, nfc.tag.TagCommandError) as e:
                logger.error(f"NFC scan failed: {e}")
                loop.call_soon_threadsafe(
                    stream.fail, DeviceError("Tag scan failed", diagnostic=str(e))
                )
                return

            if not tag:
                continue

            with self._lock:
                self._tag = tag
            event = TagDiscovered(serial_id=tag.identifier.hex())
            loop.call_soon_threadsafe(stream.push, event)

            # Report each bump once: wait for the tag to leave before reconnecting
            while not stop_event.is_set():
                with self._lock:
                    present = tag.is_present
                if not present:
                    break
                stop_event.wait(PRESENCE_POLL_INTERVAL)

        logger.info("NFC scan stopped")

    async def write(self, record: TagWriteRecord) -> None:
        self.ensure_supported()
        await asyncio.to_thread(self._write_blocking, record)

    def _write_blocking(self, record: TagWriteRecord) -> None:
        with self._lock:
            tag = self._tag
            if tag is None:
                raise DeviceError("Tag write failed", diagnostic="no tag in range")
            if tag.ndef is None:
                raise DeviceError("Tag write failed", diagnostic="tag is not NDEF formatted")
            if not tag.ndef.is_writeable:
                raise DeviceError("Tag write failed", diagnostic="tag is read-only")
            try:
                tag.ndef.records = [ndef.UriRecord(record.data)]
            except (nfc.tag.TagCommandError, OSError) as e:
                raise DeviceError("Tag write failed", diagnostic=str(e)) from e

        logger.info(f"Wrote URL record to tag {tag.identifier.hex()}")

    def close(self) -> None:
        """Stop scanning and release the reader."""
        try:
            self._join_worker()
        except DeviceError as e:
            # Closing the frontend below aborts a connect() that ignored the stop request
            logger.warning(f"Closing NFC reader with scan still running: {e}")
        with self._lock:
            if self._clf is not None:
                self._clf.close()
                self._clf = None
            self._tag = None
