"""
Async pairing session.

Sequences one pairing attempt: fetch detail -> extract certificate URL ->
scan for a tag -> write the URL record -> mark the artwork verified.

All state changes go through transition(). The session owns the device scan
stream and releases it whenever the machine leaves Scanning/Encoding, so a
stale tag bump can never write against a newer selection.
"""

import asyncio
import logging
import time
from collections.abc import Callable

from artlink.catalog.extractor import extract_certificate_url, extract_listing
from artlink.catalog.fetcher import CatalogFetcher
from artlink.catalog.models import Artwork, CertificateLink, TagDiscovered, TagWriteRecord
from artlink.catalog.store import CatalogStore
from artlink.config import ArtLinkConfig
from artlink.constants import DEFAULT_WRITE_TIMEOUT
from artlink.device import NFCDeviceAdapter, ScanStream, detect_device
from artlink.exceptions import (
    ArtLinkError,
    ArtworkNotFoundError,
    DeviceError,
    ExtractionError,
    NetworkError,
)
from artlink.logging_utils import log_summary, safe_log_event
from artlink.pairing.state import (
    ArtworkSelected,
    Failed,
    PairingEvent,
    PairingPhase,
    PairingState,
    Reset,
    ScanStarted,
    TagDetected,
    WriteSucceeded,
    transition,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[PairingState], None]


class PairingSession:
    """Drives the pairing state machine against a fetcher, store and device."""

    def __init__(
        self,
        fetcher: CatalogFetcher,
        store: CatalogStore,
        device: NFCDeviceAdapter,
        write_timeout: float = DEFAULT_WRITE_TIMEOUT,
    ):
        """
        Initialize pairing session.

        Args:
            fetcher: Upstream page fetcher
            store: Catalog the session verifies records in
            device: NFC device adapter
            write_timeout: Seconds before a tag write fails with DeviceError
        """
        self.fetcher = fetcher
        self.store = store
        self.device = device
        self.write_timeout = write_timeout

        self._state = PairingState()
        self._listeners: list[StateListener] = []
        self._stream: ScanStream | None = None
        self._consumer: asyncio.Task | None = None
        self._settled = asyncio.Event()
        # Bumped on every reset so superseded selections and writes are discarded
        self._generation = 0
        self._started_at: float | None = None

    @classmethod
    def from_config(
        cls, config: ArtLinkConfig, device: NFCDeviceAdapter | None = None
    ) -> "PairingSession":
        """Build a session with a fresh fetcher and empty catalog."""
        fetcher = CatalogFetcher(config.base_url, timeout=config.fetch_timeout)
        if device is None:
            device = detect_device(simulate=config.simulate_device, path=config.device_path)
        return cls(fetcher, CatalogStore(), device, write_timeout=config.write_timeout)

    @property
    def state(self) -> PairingState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a callback for every new state.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------

    async def load_catalog(self) -> list[Artwork]:
        """
        Fetch the listing and replace the catalog.

        Any selection is reset first, including a settled Success or Error,
        since its record may not survive the replacement.

        Raises:
            NetworkError: If the listing cannot be fetched
        """
        await self.reset()

        markup = await self.fetcher.fetch_listing()
        records = extract_listing(markup, base_url=self.fetcher.base_url)
        self.store.replace_all(records)
        logger.info(log_summary("load_catalog", item_count=len(self.store), **self.store.counts()))
        return self.store.all()

    # -------------------------------------------------------------------------
    # Pairing attempt
    # -------------------------------------------------------------------------

    async def select(self, artwork_id: str) -> PairingState:
        """
        Select an artwork and resolve its certificate URL.

        Any attempt in flight is cancelled first. Fetch or extraction failures
        move the machine to Error with the artwork left unselected.

        Raises:
            ArtworkNotFoundError: If the id is not in the catalog
        """
        await self.reset()
        if artwork_id not in self.store:
            raise ArtworkNotFoundError(artwork_id)

        generation = self._generation
        self._started_at = time.perf_counter()
        try:
            markup = await self.fetcher.fetch_detail(artwork_id)
            url = extract_certificate_url(markup)
            link = CertificateLink(artwork_id=artwork_id, url=url)
        except (NetworkError, ExtractionError) as e:
            if generation != self._generation:
                return self._state
            logger.warning(f"Certificate lookup failed for {artwork_id}: {e}")
            return self._fail(e)

        if generation != self._generation:
            logger.info(f"Selection of {artwork_id} superseded; discarding certificate URL")
            return self._state

        return self._apply(ArtworkSelected(link))

    async def start_scan(self) -> PairingState:
        """
        Move from Idle to Scanning and start consuming tag discoveries.

        Raises:
            CapabilityError: If the device lacks NFC capability (state stays Idle)
            MissingCertificateError: If no certificate URL is resolved (state stays Idle)
            InvalidTransitionError: If not Idle
        """
        event = ScanStarted(device_supported=self.device.supported)
        # Guard only; rejection leaves the state untouched
        transition(self._state, event)

        try:
            stream = self.device.scan()
        except DeviceError as e:
            return self._fail(e)

        self._stream = stream
        state = self._apply(event)
        self._consumer = asyncio.create_task(self._consume(stream), name="artlink-scan")
        return state

    async def pair(self, artwork_id: str, timeout: float | None = None) -> PairingState:
        """
        Run a whole attempt: select, scan and wait for Success or Error.

        Raises:
            ArtworkNotFoundError: If the id is not in the catalog
            CapabilityError: If scanning cannot start
            TimeoutError: If no tag is written within timeout
        """
        state = await self.select(artwork_id)
        if state.phase is PairingPhase.ERROR:
            return state
        await self.start_scan()
        return await self.wait_until_settled(timeout)

    async def handle_tag(self, event: TagDiscovered) -> PairingState:
        """
        Process one tag discovery to completion.

        Only the first discovery while Scanning writes; later ones are ignored.
        """
        if self._state.phase is not PairingPhase.SCANNING:
            logger.debug(f"Ignoring tag discovery while {self._state.phase.value}")
            return self._state

        generation = self._generation
        state = self._apply(TagDetected(event.serial_id))
        record = TagWriteRecord.for_url(state.link.url)

        error: ArtLinkError | None = None
        try:
            await asyncio.wait_for(self.device.write(record), timeout=self.write_timeout)
        except TimeoutError:
            error = DeviceError("Tag write timed out", diagnostic=f"no completion after {self.write_timeout}s")
        except ArtLinkError as e:
            error = e
        except Exception as e:
            logger.exception("Unexpected device failure during tag write")
            error = DeviceError("Tag write failed", diagnostic=str(e))

        if generation != self._generation or self._state.phase is not PairingPhase.ENCODING:
            logger.warning("Pairing attempt reset during write; catalog left unchanged")
            return self._state

        if error is not None:
            return self._fail(error)

        self.store.mark_verified(state.artwork_id)
        return self._apply(WriteSucceeded())

    async def reset(self) -> PairingState:
        """Return to Idle, clearing the error, selection and pending scan."""
        self._generation += 1
        task = self._release_scan()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)
        if self._state != PairingState():
            self._apply(Reset())
        return self._state

    async def wait_until_settled(self, timeout: float | None = None) -> PairingState:
        """
        Wait for Success or Error.

        Raises:
            TimeoutError: If the attempt does not settle within timeout
        """
        await asyncio.wait_for(self._settled.wait(), timeout=timeout)
        return self._state

    async def close(self) -> None:
        """Stop scanning and release the fetcher; the last state is kept."""
        self._generation += 1
        task = self._release_scan()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)
        await self.fetcher.aclose()
        close_device = getattr(self.device, "close", None)
        if close_device is not None:
            close_device()

    async def __aenter__(self) -> "PairingSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _consume(self, stream: ScanStream) -> None:
        """Feed discoveries to handle_tag one at a time until the stream stops."""
        try:
            async for event in stream:
                await self.handle_tag(event)
        except ArtLinkError as e:
            logger.warning(f"Tag scan failed: {e}")
            self._fail(e)

    def _fail(self, error: ArtLinkError) -> PairingState:
        return self._apply(Failed(error))

    def _apply(self, event: PairingEvent) -> PairingState:
        previous = self._state
        state = transition(previous, event)
        if state is previous:
            return previous

        self._state = state
        logger.info(
            f"Pairing {previous.phase.value} -> {state.phase.value}: {safe_log_event(state.to_dict())}"
        )

        if previous.is_active and not state.is_active:
            self._release_scan()

        if state.is_settled:
            self._settled.set()
            self._log_outcome(state)
        else:
            self._settled.clear()

        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.warning(f"Pairing state listener failed: {e}")

        return state

    def _release_scan(self) -> asyncio.Task | None:
        """
        Stop the scan stream and cancel its consumer.

        Returns:
            The cancelled consumer task, for callers that can await it
        """
        if self._stream is not None:
            self._stream.stop()
            self._stream = None

        task, self._consumer = self._consumer, None
        if task is None or task.done() or task is asyncio.current_task():
            return None
        task.cancel()
        return task

    def _log_outcome(self, state: PairingState) -> None:
        duration_ms = None
        if self._started_at is not None:
            duration_ms = (time.perf_counter() - self._started_at) * 1000
        summary = log_summary(
            "pairing",
            success=state.phase is PairingPhase.SUCCESS,
            duration_ms=duration_ms,
            error=state.error_message,
            artwork_id=state.artwork_id or "",
        )
        if state.phase is PairingPhase.SUCCESS:
            logger.info(summary)
        else:
            logger.warning(summary)
