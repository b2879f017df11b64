"""Unit tests for anonymous like toggling and its abuse heuristics."""

from datetime import datetime, timedelta, timezone

import pytest

from app.domain.entities import Article
from app.domain.exceptions import BotDetectedError, InvalidInputError, RateLimitedError
from app.domain.like_guard import AnonymousLikeGuard, looks_like_bot

BROWSER_UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Gecko/20100101 Firefox/125.0"
NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def article() -> Article:
    return Article(
        title="Rosa canina",
        description="Wild dog rose",
        primary_category_id="5b7d6c1e-2c1e-4a8e-9f61-0d6f7b9f4a10",
        published=True,
    )


@pytest.fixture
def guard() -> AnonymousLikeGuard:
    return AnonymousLikeGuard(daily_limit=10, min_user_agent_length=20)


def test_first_toggle_adds_a_like(guard, article):
    outcome = guard.toggle(article, "visitor-1", BROWSER_UA, fingerprint="fp-1", now=NOW)

    assert outcome.liked is True
    assert outcome.count == 1
    assert article.like_count == 1
    assert article.likes.find("visitor-1").fingerprint == "fp-1"
    assert article.like_attempts.count(NOW) == 1
    assert article.like_tally.count(NOW, "visitor-1") == 1


def test_second_toggle_removes_the_like_without_further_checks(guard, article):
    guard.toggle(article, "visitor-1", BROWSER_UA, now=NOW)
    # A bot user agent would be rejected on an add, but removal skips the checks.
    outcome = guard.toggle(article, "visitor-1", "curl/8.0", now=NOW)

    assert outcome.liked is False
    assert outcome.count == 0
    assert article.like_count == 0
    assert article.like_attempts.count(NOW) == 1


def test_count_tracks_distinct_identifiers(guard, article):
    for n in range(3):
        guard.toggle(article, f"visitor-{n}", BROWSER_UA, now=NOW)
    assert article.like_count == 3
    assert len(article.likes) == 3


@pytest.mark.parametrize("user_agent", [None, "", "Mozilla/5.0"])
def test_missing_or_short_user_agent_is_rejected(guard, article, user_agent):
    with pytest.raises(InvalidInputError):
        guard.toggle(article, "visitor-1", user_agent, now=NOW)
    assert article.like_count == 0
    # The attempt is still counted.
    assert article.like_attempts.count(NOW) == 1


@pytest.mark.parametrize(
    "user_agent",
    [
        "Mozilla/5.0 (compatible; Googlebot/2.1)",
        "Mozilla/5.0 HeadlessChrome/120.0.0.0",
        "python-requests/2.31.0 something",
        "Wget/1.21.4 (linux-gnu) fetcher",
    ],
)
def test_bot_user_agents_are_rejected(guard, article, user_agent):
    with pytest.raises(BotDetectedError):
        guard.toggle(article, "visitor-1", user_agent, now=NOW)
    assert article.like_count == 0


def test_daily_limit_is_enforced_per_identifier(guard, article):
    for _ in range(10):
        assert guard.toggle(article, "visitor-1", BROWSER_UA, now=NOW).liked is True
        assert guard.toggle(article, "visitor-1", BROWSER_UA, now=NOW).liked is False

    with pytest.raises(RateLimitedError, match="Daily interaction limit reached"):
        guard.toggle(article, "visitor-1", BROWSER_UA, now=NOW)

    # Other identifiers are unaffected.
    assert guard.toggle(article, "visitor-2", BROWSER_UA, now=NOW).liked is True


def test_rate_limit_runs_before_user_agent_checks(article):
    guard = AnonymousLikeGuard(daily_limit=1)
    guard.toggle(article, "visitor-1", BROWSER_UA, now=NOW)
    guard.toggle(article, "visitor-1", BROWSER_UA, now=NOW)

    with pytest.raises(RateLimitedError):
        guard.toggle(article, "visitor-1", None, now=NOW)


def test_daily_limit_resets_on_the_next_utc_day(article):
    guard = AnonymousLikeGuard(daily_limit=1)
    guard.toggle(article, "visitor-1", BROWSER_UA, now=NOW)
    guard.toggle(article, "visitor-1", BROWSER_UA, now=NOW)
    with pytest.raises(RateLimitedError):
        guard.toggle(article, "visitor-1", BROWSER_UA, now=NOW)

    tomorrow = NOW + timedelta(days=1)
    assert guard.toggle(article, "visitor-1", BROWSER_UA, now=tomorrow).liked is True


def test_attempt_buckets_keep_seven_days(guard, article):
    for offset in range(9):
        guard.toggle(article, f"visitor-{offset}", BROWSER_UA, now=NOW + timedelta(days=offset))
    assert len(article.like_attempts) == 7


def test_looks_like_bot_is_case_insensitive():
    assert looks_like_bot("Mozilla/5.0 (compatible; BingBOT/2.0)")
    assert looks_like_bot("Some-Crawler/1.0")
    assert not looks_like_bot(BROWSER_UA)
