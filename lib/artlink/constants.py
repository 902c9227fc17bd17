"""
Constants used throughout the artlink package.

Centralizes upstream markup selectors, certificate prefixes and timeouts
so they can be tuned in one place when the upstream layout changes.
"""

# =============================================================================
# Upstream Service
# =============================================================================

# Storefront path that proxies the certification service
DEFAULT_BASE_URL = "https://www.thestreetlamp.com/apps/verisart"

# Resource suffix for a single artwork detail page
DETAIL_PATH_TEMPLATE = "items/{artwork_id}"

# Identifies the client to the upstream service
USER_AGENT = "ArtLink-Pairing/1.0"

ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

# Anchors must start with one of these to count as a certificate link
CERTIFICATE_URL_PREFIXES = (
    "https://verisart.com/works/",
    "https://www.verisart.com/works/",
)


# =============================================================================
# Listing Markup Selectors
# =============================================================================

PREVIEW_CARD_SELECTOR = 'article[data-test="previewCard"]'
TITLE_SELECTOR = ".ver-text-lg .ver-truncate"
ARTIST_SELECTOR = ".ver-text-base.ver-font-bold"
YEAR_SELECTOR = ".ver-text-lg .ver-inline"
IMAGE_SELECTOR = "img"

# Characters trimmed from the end of the year field ("2019," -> "2019")
YEAR_TRAILING_SEPARATORS = ",;·| \t\n"


# =============================================================================
# Detail Markup Selectors
# =============================================================================

# Searched in order; the first present container is used
CERTIFICATE_CONTAINER_SELECTORS = (
    '[data-test="certificate"]',
    ".verisart-certificate",
    "main",
    "article",
    "body",
)


# =============================================================================
# Timeouts (in seconds)
# =============================================================================

# Listing and detail requests
DEFAULT_FETCH_TIMEOUT = 30.0

# A single tag write
DEFAULT_WRITE_TIMEOUT = 10.0


# =============================================================================
# Device
# =============================================================================

# nfcpy reader path ("usb", "tty:USB0:pn532", ...)
DEFAULT_DEVICE_PATH = "usb"

# Only record type that may be written to a tag
URL_RECORD_TYPE = "url"

# CapabilityError message when the host has no tag support
UNSUPPORTED_DEVICE_MESSAGE = "unsupported on this device"
