"""Vote ledger for forum posts.

Applies a voter's upvote or downvote intent to a post's aggregate counters
and per-voter state. Every change is committed through a single
version-guarded update, so concurrent calls on the same post behave as if
they ran one after another:

- casting the same polarity twice changes nothing the second time
- switching polarity moves exactly one unit from one counter to the other
- calls from different voters never lose each other's increments

Contention is retried a bounded number of times and every call is bounded
by a deadline.
"""

from __future__ import annotations

import logging
import random
import sqlite3
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy import exc as sa_exc

from fitpulse.models import VotePolarity
from fitpulse.repositories.forum_repo import ForumPostRepository, PostSnapshot, VoteMutation
from fitpulse.utils.identity import normalize_identity

# Configure logger for this module
logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 5
DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_BACKOFF_SECONDS = 0.01
MAX_BACKOFF_SECONDS = 0.25

SQLITE_BUSY_CODES = frozenset({sqlite3.SQLITE_BUSY, sqlite3.SQLITE_LOCKED})
# SQLSTATE query_canceled, raised when statement_timeout fires.
PG_QUERY_CANCELED = "57014"


class VoteLedgerError(RuntimeError):
    """Base exception raised for vote ledger failures."""


class PostNotFoundError(VoteLedgerError):
    """Raised when the target post does not exist."""

    def __init__(self, post_id: int) -> None:
        super().__init__(f"Post {post_id} not found")
        self.post_id = post_id


class InvalidVoteError(VoteLedgerError, ValueError):
    """Raised for a malformed voter identity or an unknown polarity."""


class VoteConflictError(VoteLedgerError):
    """Raised when concurrent writers kept winning until retries ran out."""


class VoteTimeoutError(VoteLedgerError):
    """Raised when the store did not answer within the configured bound."""


@dataclass(frozen=True)
class VoteTally:
    """Counters of a post after a vote, and the caller's recorded polarity."""

    post_id: int
    upvotes: int
    downvotes: int
    polarity: VotePolarity | None = None


def plan_transition(current: VotePolarity | None, requested: VotePolarity) -> VoteMutation | None:
    """Return the mutation moving ``current`` to ``requested``, or None for a repeat vote."""
    if current is requested:
        return None
    if current is None:
        if requested is VotePolarity.UP:
            return VoteMutation(upvotes_delta=1, downvotes_delta=0, polarity=requested)
        return VoteMutation(upvotes_delta=0, downvotes_delta=1, polarity=requested)
    if requested is VotePolarity.UP:
        return VoteMutation(upvotes_delta=1, downvotes_delta=-1, polarity=requested)
    return VoteMutation(upvotes_delta=-1, downvotes_delta=1, polarity=requested)


def is_store_timeout(err: BaseException) -> bool:
    """Return True if ``err`` means the store did not answer in time.

    Covers pool checkout timeouts, SQLite lock waits running out and
    PostgreSQL statements cancelled by ``statement_timeout``. Anything else
    (missing tables, refused connections, disk errors) is a real fault.
    """
    if isinstance(err, sa_exc.TimeoutError):
        return True
    if not isinstance(err, sa_exc.OperationalError):
        return False

    orig = err.orig
    if isinstance(orig, sqlite3.Error):
        if getattr(orig, "sqlite_errorcode", None) in SQLITE_BUSY_CODES:
            return True
        message = str(orig).lower()
        return "database is locked" in message or "database table is locked" in message
    return getattr(orig, "sqlstate", None) == PG_QUERY_CANCELED


def parse_polarity(value: VotePolarity | str) -> VotePolarity:
    """Coerce ``value`` to a :class:`VotePolarity`."""
    if isinstance(value, VotePolarity):
        return value
    try:
        return VotePolarity(str(value).strip().lower())
    except ValueError as err:
        raise InvalidVoteError(f"Unknown vote polarity: {value!r}") from err


class VoteLedger:
    """Casts votes on forum posts through optimistic concurrency.

    Each attempt reads the post's counters, its version and the voter's
    recorded polarity, then writes the transition guarded on that version.
    A lost race re-reads and tries again, up to ``max_retries`` times.
    """

    def __init__(
        self,
        repository: ForumPostRepository,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        backoff_seconds: float = DEFAULT_BACKOFF_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the ledger.

        Args:
            repository: Store access for posts and votes.
            max_retries: Extra attempts allowed after a version conflict.
            timeout_seconds: Upper bound for one ``cast_vote`` call.
            backoff_seconds: Base delay before a retry, doubled per attempt.
            clock: Monotonic time source.
            sleep: Function used to wait between retries.
        """
        self.repository = repository
        self.max_retries = max_retries
        self.timeout_seconds = timeout_seconds
        self.backoff_seconds = backoff_seconds
        self._clock = clock
        self._sleep = sleep

    @contextmanager
    def _store_call(self, post_id: int) -> Iterator[None]:
        """Translate store timeouts into :class:`VoteTimeoutError` and undo the attempt."""
        try:
            yield
        except sa_exc.SQLAlchemyError as err:
            self.repository.session.rollback()
            if not is_store_timeout(err):
                raise
            logger.warning("Store timed out while voting on post %s: %s", post_id, err)
            raise VoteTimeoutError(f"Store did not respond while voting on post {post_id}") from err

    def _backoff(self, attempt: int, deadline: float) -> None:
        if self.backoff_seconds <= 0:
            return
        delay = min(self.backoff_seconds * (2 ** attempt), MAX_BACKOFF_SECONDS)
        delay = random.uniform(0, delay)
        remaining = deadline - self._clock()
        if remaining > 0:
            self._sleep(min(delay, remaining))

    def cast_vote(
        self,
        post_id: int,
        voter_identity: str,
        polarity: VotePolarity | str,
    ) -> VoteTally:
        """Apply ``voter_identity``'s ``polarity`` vote to ``post_id``.

        Returns:
            The post's counters after the vote.

        Raises:
            InvalidVoteError: Malformed identity or polarity; the store is not touched.
            PostNotFoundError: No post has ``post_id``; nothing is created.
            VoteConflictError: Retries exhausted under contention.
            VoteTimeoutError: The store or the overall deadline timed out.
        """
        requested = parse_polarity(polarity)
        try:
            voter_key = normalize_identity(voter_identity)
        except ValueError as err:
            raise InvalidVoteError(str(err)) from err

        deadline = self._clock() + self.timeout_seconds
        for attempt in range(self.max_retries + 1):
            if self._clock() >= deadline:
                raise VoteTimeoutError(f"Voting on post {post_id} exceeded {self.timeout_seconds}s")

            with self._store_call(post_id):
                snapshot = self.repository.find_one(post_id, voter_key)
            if snapshot is None:
                raise PostNotFoundError(post_id)

            mutation = plan_transition(snapshot.prior, requested)
            if mutation is None:
                logger.debug("Repeat %s vote by %s on post %s", requested.value, voter_key, post_id)
                return _tally(snapshot)

            with self._store_call(post_id):
                updated = self.repository.atomic_update(snapshot, voter_key, mutation)
            if updated is not None:
                logger.info(
                    "Vote on post %s by %s: %s -> %s",
                    post_id,
                    voter_key,
                    snapshot.prior.value if snapshot.prior else "none",
                    requested.value,
                )
                return _tally(updated)

            logger.warning(
                "Version conflict voting on post %s (attempt %d/%d)",
                post_id,
                attempt + 1,
                self.max_retries + 1,
            )
            if attempt < self.max_retries:
                self._backoff(attempt, deadline)

        raise VoteConflictError(
            f"Post {post_id} is too busy; vote not applied after {self.max_retries + 1} attempts"
        )

    def get_vote(self, post_id: int, voter_identity: str) -> VotePolarity | None:
        """Return the voter's current polarity on ``post_id`` or None."""
        try:
            voter_key = normalize_identity(voter_identity)
        except ValueError as err:
            raise InvalidVoteError(str(err)) from err

        with self._store_call(post_id):
            snapshot = self.repository.find_one(post_id, voter_key)
        if snapshot is None:
            raise PostNotFoundError(post_id)
        return snapshot.prior


def _tally(snapshot: PostSnapshot) -> VoteTally:
    return VoteTally(
        post_id=snapshot.post_id,
        upvotes=snapshot.upvotes,
        downvotes=snapshot.downvotes,
        polarity=snapshot.prior,
    )
