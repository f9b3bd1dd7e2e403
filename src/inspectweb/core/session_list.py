"""Sidebar session list: search filtering and recency partitioning."""

from typing import Iterable, NamedTuple, Optional

from inspectweb.models.session import Session
from inspectweb.utils.datetime import DAY_MS, now_ms

# Sessions untouched for longer than this are listed under "Inactive"
INACTIVE_THRESHOLD_MS = 7 * DAY_MS


class SessionListView(NamedTuple):
    active: list[Session]
    inactive: list[Session]

    @property
    def total(self) -> int:
        return len(self.active) + len(self.inactive)


def matches_query(session: Session, query: str) -> bool:
    """Case-insensitive substring match on the title or owner/name."""
    if not query:
        return True
    needle = query.lower()
    title = (session.title or "").lower()
    return needle in title or needle in session.repo_full_name.lower()


def is_inactive_session(timestamp: int, now: Optional[int] = None) -> bool:
    if now is None:
        now = now_ms()
    return now - timestamp > INACTIVE_THRESHOLD_MS


def reconcile_sessions(
    sessions: Iterable[Session], query: str = "", now: Optional[int] = None
) -> SessionListView:
    """
    Filter by query, order newest first, split into active and inactive.

    Sorting is stable on the effective timestamp (updatedAt, else createdAt),
    so equal timestamps keep their input order. Both partitions keep the
    sorted order. Depends only on the arguments; pass `now` to pin the clock.
    """
    if now is None:
        now = now_ms()

    filtered = [session for session in sessions if matches_query(session, query)]
    ordered = sorted(filtered, key=lambda session: session.effective_timestamp, reverse=True)

    active: list[Session] = []
    inactive: list[Session] = []
    for session in ordered:
        if is_inactive_session(session.effective_timestamp, now):
            inactive.append(session)
        else:
            active.append(session)

    return SessionListView(active=active, inactive=inactive)
