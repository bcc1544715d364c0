"""Tests for review scoring, address rating and review deduplication."""

from datetime import UTC, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from porchlight.services.scoring import (
    AddressRating,
    ScoredReview,
    compute_address_rating,
    compute_review_score,
    dedup_key,
    deduplicate_reviews,
    round_score,
    summarize_address_reviews,
)


def _answers(*scores: int) -> list[SimpleNamespace]:
    return [SimpleNamespace(score=score) for score in scores]


def _review(
    scores: list[int],
    *,
    email: str | None = None,
    anonymous: bool = False,
    created_at: datetime,
    label: str = "",
) -> SimpleNamespace:
    return SimpleNamespace(
        label=label,
        answers=_answers(*scores),
        user_email=email,
        is_anonymous=anonymous,
        created_at=created_at,
    )


JAN_5 = datetime(2024, 1, 5, 12, 0, tzinfo=UTC)
FEB_1 = datetime(2024, 2, 1, 12, 0, tzinfo=UTC)


class TestComputeReviewScore:
    """Per-review averages."""

    def test_empty_answers_score_zero(self):
        assert compute_review_score([]) == 0

    def test_unrated_answers_score_zero(self):
        assert compute_review_score(_answers(0, 0)) == 0

    def test_zero_scores_are_excluded(self):
        assert compute_review_score(_answers(4, 5, 0)) == 4.5

    def test_mean_rounds_to_one_decimal(self):
        assert compute_review_score(_answers(3, 4, 4)) == 3.7

    def test_half_rounds_up(self):
        # 17 / 4 = 4.25
        assert compute_review_score(_answers(4, 5, 4, 4)) == 4.3

    def test_single_answer(self):
        assert compute_review_score(_answers(2)) == 2.0

    def test_accepts_generators(self):
        assert compute_review_score(SimpleNamespace(score=s) for s in (5, 5)) == 5.0


class TestComputeAddressRating:
    """Per-address ratings."""

    def test_no_reviews(self):
        assert compute_address_rating([]) == AddressRating(average_rating=0, review_count=0)

    def test_unrated_reviews_count_but_do_not_average(self):
        rating = compute_address_rating(
            [SimpleNamespace(average_score=0), SimpleNamespace(average_score=4)]
        )
        assert rating == AddressRating(average_rating=4.0, review_count=2)

    def test_mean_of_review_scores(self):
        rating = compute_address_rating(
            [SimpleNamespace(average_score=4.7), SimpleNamespace(average_score=1.5)]
        )
        assert rating.average_rating == 3.1
        assert rating.review_count == 2

    def test_all_unrated(self):
        rating = compute_address_rating([SimpleNamespace(average_score=0)] * 3)
        assert rating == AddressRating(average_rating=0, review_count=3)


class TestDedupKey:
    """Identity and calendar-day keys."""

    def test_email_and_day(self):
        review = _review([5], email="a@x.com", created_at=JAN_5)
        assert dedup_key(review, UTC) == "a@x.com-2024-01-05"

    def test_missing_email_is_anonymous(self):
        review = _review([5], created_at=JAN_5)
        assert dedup_key(review, UTC) == "anonymous-2024-01-05"

    def test_anonymous_flag_hides_email(self):
        review = _review([5], email="a@x.com", anonymous=True, created_at=JAN_5)
        assert dedup_key(review, UTC) == "anonymous-2024-01-05"

    def test_naive_timestamps_are_read_as_utc(self):
        review = _review([5], email="a@x.com", created_at=datetime(2024, 1, 5, 23, 30))
        minus_two = timezone(timedelta(hours=-2))
        assert dedup_key(review, UTC) == "a@x.com-2024-01-05"
        assert dedup_key(review, minus_two) == "a@x.com-2024-01-05"
        plus_two = timezone(timedelta(hours=2))
        assert dedup_key(review, plus_two) == "a@x.com-2024-01-06"


class TestDeduplicateReviews:
    """Read-time duplicate filtering."""

    @pytest.mark.parametrize("fuller_first", [True, False])
    def test_same_identity_same_day_keeps_more_answers(self, fuller_first):
        short = _review([5, 4], email="a@x.com", created_at=JAN_5, label="short")
        full = _review([5, 4, 3, 2, 1], email="a@x.com", created_at=JAN_5 + timedelta(minutes=5), label="full")
        ordered = [full, short] if fuller_first else [short, full]

        result = deduplicate_reviews(ordered, UTC)

        assert len(result) == 1
        assert result[0] is full

    def test_different_emails_are_kept(self):
        first = _review([5], email="a@x.com", created_at=JAN_5)
        second = _review([3], email="b@x.com", created_at=JAN_5)

        result = deduplicate_reviews([first, second], UTC)

        assert result == [first, second]
        assert result[0] is first and result[1] is second

    def test_different_days_are_kept(self):
        first = _review([5], email="a@x.com", created_at=JAN_5)
        second = _review([3], email="a@x.com", created_at=FEB_1)

        assert deduplicate_reviews([first, second], UTC) == [first, second]

    def test_tie_keeps_first_seen(self):
        newer = _review([5, 5], email="a@x.com", created_at=JAN_5 + timedelta(hours=1), label="newer")
        older = _review([1, 1], email="a@x.com", created_at=JAN_5, label="older")

        result = deduplicate_reviews([newer, older], UTC)

        assert [review.label for review in result] == ["newer"]

    def test_keeps_first_occurrence_order(self):
        a_short = _review([1], email="a@x.com", created_at=JAN_5, label="a-short")
        b = _review([2], email="b@x.com", created_at=JAN_5, label="b")
        a_full = _review([3, 3], email="a@x.com", created_at=JAN_5, label="a-full")

        result = deduplicate_reviews([a_short, b, a_full], UTC)

        assert [review.label for review in result] == ["a-full", "b"]

    def test_day_boundary_follows_timezone(self):
        late = _review([5], email="a@x.com", created_at=datetime(2024, 1, 5, 23, 30, tzinfo=UTC))
        early = _review([4, 4], email="a@x.com", created_at=datetime(2024, 1, 6, 0, 30, tzinfo=UTC))

        assert len(deduplicate_reviews([late, early], UTC)) == 2
        assert deduplicate_reviews([late, early], timezone(timedelta(hours=-2))) == [early]

    def test_idempotent(self):
        reviews = [
            _review([5, 5], created_at=JAN_5),
            _review([5, 5, 4], created_at=JAN_5),
            _review([1, 2], email="a@x.com", created_at=FEB_1),
            _review([3], email="a@x.com", created_at=FEB_1),
            _review([2], email="b@x.com", created_at=FEB_1),
        ]

        once = deduplicate_reviews(reviews, UTC)

        assert deduplicate_reviews(once, UTC) == once

    def test_empty_input(self):
        assert deduplicate_reviews([], UTC) == []


class TestSummarizeAddressReviews:
    """The single entry point used by every endpoint."""

    def test_end_to_end_scenario(self):
        a = _review([5, 5], created_at=JAN_5, label="a")
        b = _review([5, 5, 4], created_at=JAN_5 + timedelta(minutes=10), label="b")
        c = _review([1, 2], email="a@x.com", created_at=FEB_1, label="c")

        summary = summarize_address_reviews([a, b, c], UTC)

        assert [scored.review.label for scored in summary.reviews] == ["b", "c"]
        assert [scored.average_score for scored in summary.reviews] == [4.7, 1.5]
        assert summary.review_count == 2
        assert summary.average_rating == 3.1

    def test_reviews_are_wrapped_with_scores(self):
        review = _review([4, 0], email="a@x.com", created_at=JAN_5)

        summary = summarize_address_reviews([review], UTC)

        assert summary.reviews == [ScoredReview(review=review, average_score=4.0)]
        assert summary.reviews[0].answers is review.answers

    def test_fuller_unrated_duplicate_wins_and_rates_zero(self):
        rated = _review([5], email="a@x.com", created_at=JAN_5)
        unrated = _review([0, 0, 0], email="a@x.com", created_at=JAN_5)

        summary = summarize_address_reviews([rated, unrated], UTC)

        assert summary.review_count == 1
        assert summary.reviews[0].review is unrated
        assert summary.average_rating == 0

    def test_no_reviews(self):
        summary = summarize_address_reviews([], UTC)
        assert summary.reviews == []
        assert summary.review_count == 0
        assert summary.average_rating == 0


@pytest.mark.parametrize(
    ("value", "expected"),
    [(3.6666666666666665, 3.7), (4.25, 4.3), (4.24, 4.2), (0, 0.0), (5, 5.0)],
)
def test_round_score(value, expected):
    assert round_score(value) == expected
