"""In-memory analysis history and review status."""

from emailshield.history.store import (
    HistoryEntry,
    HistoryStore,
    ReviewStatus,
    sample_entries,
    verdict_label,
)

__all__ = ["HistoryEntry", "HistoryStore", "ReviewStatus", "sample_entries", "verdict_label"]
