"""Engagement value types: anonymous like ledger and day-bucketed counters.

Day keys are ISO calendar dates (``YYYY-MM-DD``) in UTC, so lexicographic
order is chronological order and eviction never depends on insertion order.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Iterator

DEFAULT_HISTORY_DAYS = 7


def day_key(value: date | datetime) -> str:
    """Return the UTC ``YYYY-MM-DD`` key for a date or (aware) datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    return value.isoformat()


def _retain_recent(buckets: dict[str, Any], max_days: int) -> None:
    """Evict the oldest day keys until at most *max_days* remain."""
    for key in sorted(buckets)[: max(len(buckets) - max_days, 0)]:
        del buckets[key]


class DailyAttemptCounter:
    """Bounded ordered table of like attempts per calendar day."""

    def __init__(
        self,
        buckets: dict[str, int] | None = None,
        max_days: int = DEFAULT_HISTORY_DAYS,
    ):
        self.max_days = max_days
        self._buckets: dict[str, int] = {k: int(v) for k, v in (buckets or {}).items()}
        _retain_recent(self._buckets, max_days)

    def record(self, day: date | datetime) -> int:
        """Increment the bucket for *day* and return its new value."""
        key = day_key(day)
        self._buckets[key] = self._buckets.get(key, 0) + 1
        value = self._buckets[key]
        _retain_recent(self._buckets, self.max_days)
        return value

    def count(self, day: date | datetime) -> int:
        return self._buckets.get(day_key(day), 0)

    @property
    def days(self) -> list[str]:
        return sorted(self._buckets)

    def to_dict(self) -> dict[str, int]:
        return {key: self._buckets[key] for key in self.days}

    def __len__(self) -> int:
        return len(self._buckets)


class IdentifierDailyTally:
    """Successful like additions per identifier per calendar day."""

    def __init__(
        self,
        buckets: dict[str, dict[str, int]] | None = None,
        max_days: int = DEFAULT_HISTORY_DAYS,
    ):
        self.max_days = max_days
        self._buckets: dict[str, dict[str, int]] = {
            day: {ident: int(n) for ident, n in per_day.items()}
            for day, per_day in (buckets or {}).items()
        }
        _retain_recent(self._buckets, max_days)

    def record(self, day: date | datetime, identifier: str) -> int:
        per_day = self._buckets.setdefault(day_key(day), {})
        per_day[identifier] = per_day.get(identifier, 0) + 1
        value = per_day[identifier]
        _retain_recent(self._buckets, self.max_days)
        return value

    def count(self, day: date | datetime, identifier: str) -> int:
        return self._buckets.get(day_key(day), {}).get(identifier, 0)

    @property
    def days(self) -> list[str]:
        return sorted(self._buckets)

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {day: dict(self._buckets[day]) for day in self.days}


@dataclass
class LikeEntry:
    """One anonymous like, keyed by a caller-supplied opaque identifier."""

    identifier: str
    user_agent: str | None = None
    fingerprint: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "identifier": self.identifier,
            "user_agent": self.user_agent,
            "fingerprint": self.fingerprint,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "LikeEntry":
        updated = raw.get("updated_at")
        return cls(
            identifier=raw["identifier"],
            user_agent=raw.get("user_agent"),
            fingerprint=raw.get("fingerprint"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(updated) if updated else None,
        )


class LikeLedger:
    """Append/remove list of like entries, at most one per identifier."""

    def __init__(self, entries: list[LikeEntry] | None = None):
        self._entries: list[LikeEntry] = list(entries or [])

    def find(self, identifier: str) -> LikeEntry | None:
        return next((e for e in self._entries if e.identifier == identifier), None)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and self.find(identifier) is not None

    def add(self, entry: LikeEntry) -> None:
        if entry.identifier in self:
            raise ValueError(f"Identifier '{entry.identifier}' already liked")
        self._entries.append(entry)

    def remove(self, identifier: str) -> bool:
        """Drop the entry for *identifier*. Returns False when there was none."""
        entry = self.find(identifier)
        if entry is None:
            return False
        self._entries.remove(entry)
        return True

    def to_list(self) -> list[dict[str, Any]]:
        return [e.to_dict() for e in self._entries]

    @classmethod
    def from_list(cls, raw: list[dict[str, Any]] | None) -> "LikeLedger":
        return cls([LikeEntry.from_dict(item) for item in raw or []])

    def __iter__(self) -> Iterator[LikeEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
