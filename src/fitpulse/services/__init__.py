"""Service layer for the FitPulse forum."""

from .vote_ledger import (
    InvalidVoteError,
    PostNotFoundError,
    VoteConflictError,
    VoteLedger,
    VoteLedgerError,
    VoteTally,
    VoteTimeoutError,
)

__all__ = [
    "InvalidVoteError",
    "PostNotFoundError",
    "VoteConflictError",
    "VoteLedger",
    "VoteLedgerError",
    "VoteTally",
    "VoteTimeoutError",
]
