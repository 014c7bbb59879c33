"""Tests for voter identity normalization."""

import pytest

from fitpulse.utils.identity import MAX_IDENTITY_LENGTH, normalize_identity


def test_normalization_is_stable() -> None:
    assert normalize_identity("a@x.com") == "a@x.com"
    assert normalize_identity("  A@X.Com\n") == "a@x.com"
    assert normalize_identity(normalize_identity("Coach.Kim@Gym.io")) == "coach.kim@gym.io"


@pytest.mark.parametrize(
    ("left", "right"),
    [
        ("a.b@x.com", "ab@x.com"),
        ("a.b@x.com", "a_b@x.com"),
        ("a@x.com", "a_x_com@x.com"),
        ("a+tag@x.com", "a@x.com"),
    ],
)
def test_distinct_emails_keep_distinct_keys(left: str, right: str) -> None:
    assert normalize_identity(left) != normalize_identity(right)


@pytest.mark.parametrize(
    "identity",
    ["", "  ", "plainaddress", "@x.com", "a@", "a@b@c.com", "a b@x.com"],
)
def test_rejects_malformed_identity(identity: str) -> None:
    with pytest.raises(ValueError):
        normalize_identity(identity)


def test_rejects_overlong_identity() -> None:
    with pytest.raises(ValueError):
        normalize_identity("a" * MAX_IDENTITY_LENGTH + "@x.com")
