"""
Pairing state record and transition function.

PairingState is immutable. Every change goes through transition(), a pure
function of (state, event); the session performs the I/O and side effects
around it.

Phases:
    Idle -> Scanning -> Encoding -> Success
    Idle | Scanning | Encoding -> Error
    any -> Idle (Reset)
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from artlink.catalog.models import CertificateLink
from artlink.constants import UNSUPPORTED_DEVICE_MESSAGE
from artlink.exceptions import (
    ArtLinkError,
    CapabilityError,
    InvalidTransitionError,
    MissingCertificateError,
)


class PairingPhase(str, Enum):
    """Pairing state machine phases."""

    IDLE = "Idle"
    SCANNING = "Scanning"
    ENCODING = "Encoding"
    SUCCESS = "Success"
    ERROR = "Error"


ACTIVE_PHASES = frozenset({PairingPhase.SCANNING, PairingPhase.ENCODING})
SETTLED_PHASES = frozenset({PairingPhase.SUCCESS, PairingPhase.ERROR})
FAILABLE_PHASES = frozenset({PairingPhase.IDLE, PairingPhase.SCANNING, PairingPhase.ENCODING})


@dataclass(frozen=True)
class PairingState:
    """
    Snapshot of one pairing attempt.

    Attributes:
        phase: Current phase
        artwork_id: Selected artwork (None until its certificate URL resolves)
        link: Resolved certificate link
        tag_serial: Serial of the tag being written
        error: Error that moved the machine to Error
    """

    phase: PairingPhase = PairingPhase.IDLE
    artwork_id: str | None = None
    link: CertificateLink | None = None
    tag_serial: str | None = None
    error: ArtLinkError | None = None

    @property
    def certificate_url(self) -> str | None:
        return self.link.url if self.link else None

    @property
    def is_active(self) -> bool:
        """Scanning or Encoding: a device scan is held open."""
        return self.phase in ACTIVE_PHASES

    @property
    def is_settled(self) -> bool:
        return self.phase in SETTLED_PHASES

    @property
    def error_message(self) -> str | None:
        return str(self.error) if self.error else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging and display."""
        return {
            "phase": self.phase.value,
            "artwork_id": self.artwork_id,
            "certificate_url": self.certificate_url,
            "tag_serial": self.tag_serial,
            "error": self.error_message,
            "error_kind": type(self.error).__name__ if self.error else None,
        }


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class ArtworkSelected:
    """Detail fetch and certificate extraction succeeded."""

    link: CertificateLink


@dataclass(frozen=True)
class ScanStarted:
    device_supported: bool = True


@dataclass(frozen=True)
class TagDetected:
    serial_id: str


@dataclass(frozen=True)
class WriteSucceeded:
    pass


@dataclass(frozen=True)
class Failed:
    error: ArtLinkError


@dataclass(frozen=True)
class Reset:
    pass


PairingEvent = ArtworkSelected | ScanStarted | TagDetected | WriteSucceeded | Failed | Reset


def transition(state: PairingState, event: PairingEvent) -> PairingState:
    """
    Compute the next pairing state.

    Events a phase does not accept are ignored (the same state is returned),
    except selection and scan start, whose rejection the caller must see.

    Args:
        state: Current state
        event: Event to apply

    Returns:
        Next state (the same object when the event is ignored)

    Raises:
        CapabilityError: Scan start without device capability
        MissingCertificateError: Scan start without a resolved certificate URL
        InvalidTransitionError: Selection or scan start outside Idle
    """
    if isinstance(event, Reset):
        return PairingState()

    if isinstance(event, ArtworkSelected):
        if state.phase is not PairingPhase.IDLE:
            raise InvalidTransitionError(f"cannot select an artwork while {state.phase.value}")
        return PairingState(artwork_id=event.link.artwork_id, link=event.link)

    if isinstance(event, ScanStarted):
        if state.phase is not PairingPhase.IDLE:
            raise InvalidTransitionError(f"cannot start scanning while {state.phase.value}")
        if not event.device_supported:
            raise CapabilityError(UNSUPPORTED_DEVICE_MESSAGE)
        if state.link is None:
            raise MissingCertificateError()
        return replace(state, phase=PairingPhase.SCANNING)

    if isinstance(event, TagDetected):
        # Only the first bump while Scanning triggers a write
        if state.phase is not PairingPhase.SCANNING:
            return state
        return replace(state, phase=PairingPhase.ENCODING, tag_serial=event.serial_id)

    if isinstance(event, WriteSucceeded):
        if state.phase is not PairingPhase.ENCODING:
            return state
        return replace(state, phase=PairingPhase.SUCCESS)

    if isinstance(event, Failed):
        if state.phase not in FAILABLE_PHASES:
            return state
        return replace(state, phase=PairingPhase.ERROR, error=event.error)

    raise TypeError(f"Unknown pairing event: {event!r}")
