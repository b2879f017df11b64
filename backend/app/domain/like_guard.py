"""Anonymous like toggling with heuristic anti-abuse checks.

The guard mutates an :class:`~app.domain.entities.Article` in memory; the
caller persists it. Checks run in a fixed order and the first failure wins:

1. an identifier that already liked is simply removed (un-like),
2. the per-article attempt bucket for today is incremented,
3. the identifier's additions today must stay below the daily limit,
4. the user agent must be present and long enough,
5. the user agent must not carry a known bot signature.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone

from app.domain.entities import Article, LikeEntry
from app.domain.exceptions import BotDetectedError, InvalidInputError, RateLimitedError

BOT_SIGNATURES: tuple[str, ...] = (
    "bot",
    "crawl",
    "spider",
    "headless",
    "scrape",
    "python",
    "http",
    "request",
    "curl",
    "wget",
)

_BOT_PATTERN = re.compile("|".join(BOT_SIGNATURES), re.IGNORECASE)


@dataclass(frozen=True)
class LikeOutcome:
    liked: bool
    count: int


def looks_like_bot(user_agent: str) -> bool:
    return _BOT_PATTERN.search(user_agent) is not None


class AnonymousLikeGuard:
    """Toggle-like state machine for anonymous visitors."""

    def __init__(self, daily_limit: int = 10, min_user_agent_length: int = 20):
        self.daily_limit = daily_limit
        self.min_user_agent_length = min_user_agent_length

    def toggle(
        self,
        article: Article,
        identifier: str,
        user_agent: str | None,
        fingerprint: str | None = None,
        now: datetime | None = None,
    ) -> LikeOutcome:
        now = now or datetime.now(timezone.utc)

        if article.likes.remove(identifier):
            return LikeOutcome(liked=False, count=article.sync_like_count())

        article.like_attempts.record(now)

        # The ledger keeps one entry per identifier; the tally also counts
        # additions that were toggled off again.
        if article.like_tally.count(now, identifier) >= self.daily_limit:
            raise RateLimitedError("Daily interaction limit reached")

        if not user_agent or len(user_agent) < self.min_user_agent_length:
            raise InvalidInputError("Invalid user agent")

        if looks_like_bot(user_agent):
            raise BotDetectedError("Potential bot detected")

        article.likes.add(
            LikeEntry(
                identifier=identifier,
                user_agent=user_agent,
                fingerprint=fingerprint,
                created_at=now,
                updated_at=now,
            )
        )
        article.like_tally.record(now, identifier)
        return LikeOutcome(liked=True, count=article.sync_like_count())
