"""Domain Types — shared constants and enums for the Pokedex core.

Invariants:
    - Upstream lookup failures encoded as an Enum — never raw strings in logs

Design Decisions:
    - str Enums: serialize to JSON log fields without custom encoders
"""

from enum import Enum


# ─── Constants ───────────────────────────────────────────────────

ENGLISH_LANGUAGE = "en"


# ─── Enums ───────────────────────────────────────────────────────

class LookupFailure(str, Enum):
    """Why an ability description could not be resolved (logged, never returned)."""
    BLANK_KEY = "blank_key"
    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    PARSE = "parse"
    NO_ENGLISH_ENTRY = "no_english_entry"
