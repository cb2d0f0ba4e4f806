"""Unit tests for the crispness decay functions."""

import pytest

from totem.domain.model import EndorsementRecord
from totem.domain.service.decay import DECAY_WINDOW_MS, crispness_of, freshness_of
from totem.domain.value import WEEK_MS, YEAR_MS, DecayModel, UserId
from tests.conftest import DAY_MS, T0


def _record(user: str, original: int, active: bool = True) -> EndorsementRecord:
    return EndorsementRecord(
        user_id=UserId(user),
        original_timestamp=original,
        last_updated_at=original,
        is_active=active,
    )


class TestFreshnessOf:
    """Tests for freshness of a single endorsement."""

    def test_fresh_endorsement_is_worth_100(self):
        """An endorsement made now is at full strength."""
        assert freshness_of(T0, T0) == 100.0

    def test_half_window_is_worth_50(self):
        """Freshness falls linearly with age."""
        assert freshness_of(T0, T0 + WEEK_MS // 2) == pytest.approx(50.0)

    def test_expired_endorsement_is_floored_at_zero(self):
        """Past the window freshness stays at 0, never negative."""
        assert freshness_of(T0, T0 + WEEK_MS) == 0.0
        assert freshness_of(T0, T0 + 8 * DAY_MS) == 0.0

    def test_future_timestamp_is_clamped_to_100(self):
        """Clock skew cannot push freshness above 100."""
        assert freshness_of(T0 + DAY_MS, T0) == 100.0

    def test_infinite_window_never_decays(self):
        """The NONE model keeps every endorsement fresh."""
        assert freshness_of(T0, T0 + 10 * YEAR_MS, DecayModel.NONE.window_ms) == 100.0

    def test_default_window_is_one_week(self):
        """The default window matches the FAST model."""
        assert DECAY_WINDOW_MS == DecayModel.FAST.window_ms == float(WEEK_MS)


class TestCrispnessOf:
    """Tests for label crispness."""

    def test_no_active_records_means_zero(self):
        """A label nobody likes has no crispness."""
        assert crispness_of([], T0) == 0.0

    def test_single_fresh_like_is_100(self):
        """One fresh like gives full crispness."""
        assert crispness_of([_record("u1", T0)], T0) == 100.0

    def test_mean_over_active_records(self):
        """Crispness is the mean freshness of the active endorsements."""
        # Arrange - one fresh like, one half-decayed like
        records = [_record("u1", T0), _record("u2", T0 - WEEK_MS // 2)]

        # Act
        result = crispness_of(records, T0)

        # Assert
        assert result == pytest.approx(75.0)

    def test_result_is_rounded_to_two_decimals(self):
        """Crispness is reported with two decimals."""
        result = crispness_of([_record("u1", T0 - DAY_MS)], T0)

        assert result == round(100.0 * 6 / 7, 2)

    def test_result_stays_in_range(self):
        """Crispness always stays within [0, 100]."""
        records = [_record("u1", T0 + DAY_MS), _record("u2", T0 - 3 * WEEK_MS)]

        result = crispness_of(records, T0)

        assert 0.0 <= result <= 100.0
        assert result == 50.0

    def test_medium_model_decays_over_a_year(self):
        """A week-old like is still almost fresh under the MEDIUM model."""
        result = crispness_of(
            [_record("u1", T0 - WEEK_MS)], T0, DecayModel.MEDIUM.window_ms
        )

        assert result == round(100.0 * (1 - WEEK_MS / YEAR_MS), 2)
