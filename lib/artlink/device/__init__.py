"""
NFC device adapters.

detect_device() decides the capability once, up front:
- SimulatedNFCDevice when simulation is requested
- NfcpyDevice when the nfcpy reader library is installed
- UnsupportedDevice otherwise (every operation raises CapabilityError)
"""

import importlib.util
import logging

from artlink.constants import DEFAULT_DEVICE_PATH
from artlink.device.base import NFCDeviceAdapter, ScanStream, UnsupportedDevice
from artlink.device.simulated import SimulatedNFCDevice

logger = logging.getLogger(__name__)


def detect_device(simulate: bool = False, path: str = DEFAULT_DEVICE_PATH) -> NFCDeviceAdapter:
    """
    Select the device adapter for this host.

    Args:
        simulate: Use the in-process simulated device
        path: nfcpy reader path

    Returns:
        Device adapter; UnsupportedDevice when no reader support is installed
    """
    if simulate:
        logger.info("Using simulated NFC device")
        return SimulatedNFCDevice()

    if importlib.util.find_spec("nfc") is None:
        logger.warning("nfcpy not installed; NFC pairing unavailable")
        return UnsupportedDevice("unsupported on this device: nfcpy is not installed")

    from artlink.device.nfcpy_device import NfcpyDevice

    logger.info(f"Using nfcpy reader at {path}")
    return NfcpyDevice(path)


__all__ = [
    "NFCDeviceAdapter",
    "ScanStream",
    "SimulatedNFCDevice",
    "UnsupportedDevice",
    "detect_device",
]
