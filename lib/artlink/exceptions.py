"""
Custom exceptions for artlink catalog extraction and tag pairing.

Every error is recoverable: the pairing session records it in the Error
state and the user returns to Idle to retry.
"""


class ArtLinkError(Exception):
    """Base exception for artlink errors."""


class NetworkError(ArtLinkError):
    """Transport or status failure fetching a listing or detail page."""

    def __init__(self, resource: str, message: str, status_code: int | None = None):
        self.resource = resource
        self.status_code = status_code
        super().__init__(f"Failed to fetch {resource}: {message}")


class ExtractionError(ArtLinkError):
    """A required structural element is missing from detail markup."""


class CapabilityError(ArtLinkError):
    """The platform lacks tag capability or a scan precondition is unmet."""


class MissingCertificateError(CapabilityError):
    """Scanning was requested before a certificate URL was resolved."""

    def __init__(self, message: str = "no certificate URL resolved for the selected artwork"):
        super().__init__(message)


class DeviceError(ArtLinkError):
    """Scan or write failure at the platform layer."""

    def __init__(self, message: str, diagnostic: str | None = None):
        self.diagnostic = diagnostic
        if diagnostic:
            message = f"{message} ({diagnostic})"
        super().__init__(message)


class ArtworkNotFoundError(ArtLinkError, LookupError):
    """The requested artwork id is not in the current catalog."""

    def __init__(self, artwork_id: str):
        self.artwork_id = artwork_id
        super().__init__(f"Artwork not found in catalog: {artwork_id}")


class InvalidTransitionError(ArtLinkError):
    """A pairing event was applied in a phase that does not accept it."""
