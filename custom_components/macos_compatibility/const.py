"""Constants and helpers."""

DOMAIN = "macos_compatibility"

SOFA_URL = "https://sofafeed.macadmins.io/v1/macos_data_feed.json"
USER_AGENT = "SOFA-osquery-macOSCompatibilityCheck/1.0"

CACHE_DIR = "/private/var/tmp/sofa"
CACHE_DIR_MODE = 0o755
BODY_FILE = "macos_data_feed.json"
VALIDATOR_FILE = "macos_data_feed_etag.txt"

# seconds
REQUEST_TIMEOUT = 30.0
# seconds, covers waiting for the shared fetch lock plus the request
FETCH_DEADLINE = 60.0

# Virtualized Macs are not tracked upstream, M1 Mac mini is the reference model.
VIRTUAL_MAC_MARKER = "VirtualMac"
VIRTUAL_MAC_REFERENCE_MODEL = "Macmini9,1"

STATUS_PASS = "Pass"
STATUS_FAIL = "Fail"
STATUS_UNSUPPORTED = "Unsupported Hardware"
STATUS_NO_DATA = "Could not obtain data"
STATUS_PARSE_ERROR = "Error parsing data: {cause}"

VERSION_UNKNOWN = "Unknown"
VERSION_ERROR = "Error"
VERSION_UNSUPPORTED = "Unsupported"

INTEGRATION_DEFAULTS = {
    "username": "admin",
    "ssh_key_path": "ssh_keys/id_ed25519",
    "scan_interval_hours": 6,
}


def get_device_info(name: str, host: str) -> dict:
    """Return device info for all platforms based on host."""
    return {
        "identifiers": {(DOMAIN, host)},
        "name": f"{name} {host}",
        "manufacturer": "Apple",
        "model": "Mac",
    }
