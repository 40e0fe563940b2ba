"""Unit tests for timestamp validation (pure functions)."""

import pytest

from paygate_verifier.application.timestamp_validator import (
    U64_MAX,
    TimestampPolicy,
    validate_timestamp,
)
from paygate_verifier.domain.errors import (
    FutureTimestampError,
    MissingTimestampError,
    SignatureExpiredError,
    TimestampError,
)

NOW = 1_760_000_000

WINDOWS = [
    (300, 60),
    (0, 0),
    (1, 1),
    (86_400, 5),
    (10, 3_600),
]

NOWS = [NOW, 1_000_000, 86_401, U64_MAX - 10]


class TestValidateTimestamp:
    """Test validate_timestamp function."""

    def test_current_timestamp_is_valid(self) -> None:
        validate_timestamp(NOW, max_age=300, max_skew=60, now=NOW)
        # Should not raise

    def test_expired_timestamp_raises(self) -> None:
        with pytest.raises(SignatureExpiredError) as exc_info:
            validate_timestamp(NOW - 1000, max_age=300, max_skew=60, now=NOW)
        assert exc_info.value.age == 1000
        assert exc_info.value.max_age == 300

    def test_future_timestamp_beyond_skew_raises(self) -> None:
        """120s ahead with a 60s grace period is rejected."""
        with pytest.raises(FutureTimestampError) as exc_info:
            validate_timestamp(NOW + 120, max_age=300, max_skew=60, now=NOW)
        assert exc_info.value.timestamp == NOW + 120
        assert exc_info.value.now == NOW

    def test_future_timestamp_within_skew_is_valid(self) -> None:
        validate_timestamp(NOW + 30, max_age=300, max_skew=60, now=NOW)
        # Should not raise

    def test_missing_timestamp_raises(self) -> None:
        with pytest.raises(MissingTimestampError):
            validate_timestamp(None, max_age=300, max_skew=60, now=NOW)

    def test_age_boundary_is_inclusive(self) -> None:
        validate_timestamp(NOW - 300, max_age=300, max_skew=60, now=NOW)
        with pytest.raises(SignatureExpiredError):
            validate_timestamp(NOW - 301, max_age=300, max_skew=60, now=NOW)

    def test_skew_boundary_is_inclusive(self) -> None:
        validate_timestamp(NOW + 60, max_age=300, max_skew=60, now=NOW)
        with pytest.raises(FutureTimestampError):
            validate_timestamp(NOW + 61, max_age=300, max_skew=60, now=NOW)

    def test_timestamp_zero_is_expired_not_underflowed(self) -> None:
        with pytest.raises(SignatureExpiredError) as exc_info:
            validate_timestamp(0, max_age=300, max_skew=60, now=NOW)
        assert exc_info.value.age == NOW

    def test_skew_near_u64_max_does_not_overflow(self) -> None:
        validate_timestamp(U64_MAX, max_age=300, max_skew=U64_MAX, now=NOW)
        # Should not raise

    def test_errors_share_timestamp_base(self) -> None:
        with pytest.raises(TimestampError):
            validate_timestamp(None, max_age=0, max_skew=0, now=0)


class TestTimestampWindowProperties:
    """Window properties that must hold for any configuration."""

    @pytest.mark.parametrize("now", NOWS)
    @pytest.mark.parametrize("max_age,max_skew", WINDOWS)
    def test_age_zero_always_valid(self, now: int, max_age: int, max_skew: int) -> None:
        validate_timestamp(now, max_age, max_skew, now)

    @pytest.mark.parametrize("now", NOWS)
    @pytest.mark.parametrize("max_age,max_skew", WINDOWS)
    def test_oldest_accepted_age(self, now: int, max_age: int, max_skew: int) -> None:
        validate_timestamp(now - max_age, max_age, max_skew, now)
        with pytest.raises(SignatureExpiredError):
            validate_timestamp(now - max_age - 1, max_age, max_skew, now)

    @pytest.mark.parametrize("now", NOWS[:3])
    @pytest.mark.parametrize("max_age,max_skew", WINDOWS)
    def test_furthest_accepted_skew(
        self, now: int, max_age: int, max_skew: int
    ) -> None:
        validate_timestamp(now + max_skew, max_age, max_skew, now)
        with pytest.raises(FutureTimestampError):
            validate_timestamp(now + max_skew + 1, max_age, max_skew, now)

    @pytest.mark.parametrize("now", NOWS)
    @pytest.mark.parametrize("max_age,max_skew", WINDOWS)
    def test_missing_always_rejected(
        self, now: int, max_age: int, max_skew: int
    ) -> None:
        with pytest.raises(MissingTimestampError):
            validate_timestamp(None, max_age, max_skew, now)


class TestTimestampPolicy:
    """Test TimestampPolicy wrapper."""

    def test_defaults(self) -> None:
        policy = TimestampPolicy()
        assert policy.max_age == 300
        assert policy.max_skew == 60

    def test_custom_window_is_applied(self) -> None:
        policy = TimestampPolicy(max_age=10, max_skew=0)
        policy.validate(NOW - 10, now=NOW)
        with pytest.raises(SignatureExpiredError):
            policy.validate(NOW - 11, now=NOW)
        with pytest.raises(FutureTimestampError):
            policy.validate(NOW + 1, now=NOW)
