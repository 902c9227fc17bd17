"""ArtLink

Artwork certificate catalog extraction and NFC tag pairing.
"""

from artlink import constants
from artlink.config import ArtLinkConfig
from artlink.logging_utils import log_summary, safe_log_event

__all__ = [
    "ArtLinkConfig",
    "constants",
    "log_summary",
    "safe_log_event",
]

__version__ = "0.1.0"
