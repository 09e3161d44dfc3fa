import pytest
from protean.exceptions import ValidationError

from storefront.reviews.engine import summarize
from storefront.reviews.review.review import Rating


class TestRating:
    @pytest.mark.parametrize("score", [1, 3, 5])
    def test_accepts_one_to_five(self, score):
        assert Rating(score=score).score == score

    @pytest.mark.parametrize("score", [0, 6, -1])
    def test_rejects_out_of_range(self, score):
        with pytest.raises(ValidationError) as exc:
            Rating(score=score)
        assert "rating" in exc.value.messages


class TestSummarize:
    def test_no_reviews(self):
        assert summarize([]) == (0.0, 0)

    def test_single_review(self):
        assert summarize([4]) == (4.0, 1)

    def test_rounds_to_one_decimal(self):
        assert summarize([5, 4, 4]) == (4.3, 3)

    def test_rounds_half_up(self):
        # 17 / 4 = 4.25
        assert summarize([4, 4, 4, 5]) == (4.3, 4)

    def test_half_up_on_low_ratings(self):
        # 9 / 4 = 2.25
        assert summarize([2, 2, 2, 3]) == (2.3, 4)

    def test_rounds_down_below_half(self):
        # 4 / 3 = 1.333...
        assert summarize([1, 1, 2]) == (1.3, 3)
