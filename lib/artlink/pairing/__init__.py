"""
Tag pairing state machine.

Architecture:
- State: immutable PairingState and the pure transition() reducer
- Session: async orchestration of fetch, extraction, scanning and writing
"""

from artlink.pairing.session import PairingSession
from artlink.pairing.state import (
    ArtworkSelected,
    Failed,
    PairingPhase,
    PairingState,
    Reset,
    ScanStarted,
    TagDetected,
    WriteSucceeded,
    transition,
)

__all__ = [
    "ArtworkSelected",
    "Failed",
    "PairingPhase",
    "PairingSession",
    "PairingState",
    "Reset",
    "ScanStarted",
    "TagDetected",
    "WriteSucceeded",
    "transition",
]
