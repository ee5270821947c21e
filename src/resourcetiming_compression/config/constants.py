"""
Constants for ResourceTiming compression.

The tables below form the wire contract between the encoder and any
decoder of the compressed trie. Changing them breaks existing payloads.
"""

# =============================================================================
# Initiator Types
# =============================================================================

# Maps PerformanceResourceTiming.initiatorType to a single-digit code.
# Unknown initiator types encode as "other".
INITIATOR_TYPES = {
    "other": 0,
    "img": 1,
    "link": 2,
    "script": 3,
    "css": 4,
    "xmlhttprequest": 5,
}

DEFAULT_INITIATOR_CODE = INITIATOR_TYPES["other"]

# Reverse lookup used when decoding
INITIATOR_NAMES = {code: name for name, code in INITIATOR_TYPES.items()}

# =============================================================================
# Timing Field Order
# =============================================================================

# Reverse chronological order. Fields that are most often zero
# (redirect*, domainLookup*, secureConnectionStart) sit at the end so the
# trailing-comma strip removes them.
TIMING_FIELDS = [
    "startTime",
    "responseEnd",
    "responseStart",
    "requestStart",
    "connectEnd",
    "secureConnectionStart",
    "connectStart",
    "domainLookupEnd",
    "domainLookupStart",
    "redirectEnd",
    "redirectStart",
]

# =============================================================================
# Separators
# =============================================================================

# Separates multiple records for one URL, and keys a terminal leaf in a trie
# branch. Must never appear inside a URL.
RESERVED_SEPARATOR = "|"

# Separates timing fields inside one encoded record
FIELD_SEPARATOR = ","

BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

# =============================================================================
# Entry Filtering
# =============================================================================

# Pseudo-resources with no network timing worth sending
DEFAULT_SKIPPED_SCHEMES = ["about:", "javascript:"]
