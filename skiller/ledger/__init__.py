"""Persisted JSON ledgers: skill provenance and quarantine state"""

from .lock import (
    LockEntry,
    LockLedger,
    LockStore,
    find_lock_entry,
    get_skill_source,
    lock_entries,
    recent_entries,
)
from .disabled import AgentLink, DisabledEntry, DisabledLedger, DisableManifestStore

__all__ = [
    "LockEntry",
    "LockLedger",
    "LockStore",
    "find_lock_entry",
    "get_skill_source",
    "lock_entries",
    "recent_entries",
    "AgentLink",
    "DisabledEntry",
    "DisabledLedger",
    "DisableManifestStore",
]
