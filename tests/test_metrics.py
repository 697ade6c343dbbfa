import pytest

from metrics import compute_scores, score_test, tokenize


class TestTokenize:
    def test_splits_on_runs_of_whitespace(self):
        assert tokenize("  the  quick\tbrown\n\nfox ") == ["the", "quick", "brown", "fox"]

    def test_blank_text_has_no_tokens(self):
        assert tokenize("   \n\t ") == []
        assert tokenize("") == []

    def test_keeps_punctuation_and_case(self):
        assert tokenize("Hello, World.") == ["Hello,", "World."]


class TestComputeScores:
    def test_reference_scoring_scenario(self):
        scores = compute_scores(typed_count=50, errors=5, elapsed_minutes=2.0)
        assert scores == {"gross_wpm": 25.0, "net_wpm": 22.5, "accuracy": 90.0}

    def test_rounds_to_two_decimals(self):
        scores = compute_scores(typed_count=10, errors=1, elapsed_minutes=3.0)
        assert scores["gross_wpm"] == 3.33
        assert scores["net_wpm"] == 3.0
        assert scores["accuracy"] == 90.0

    def test_nothing_typed_has_zero_accuracy(self):
        scores = compute_scores(typed_count=0, errors=4, elapsed_minutes=1.0)
        assert scores["accuracy"] == 0.0
        assert scores["gross_wpm"] == 0.0

    @pytest.mark.parametrize("elapsed", [0.0, -1.0, 0.001])
    def test_elapsed_time_is_floored(self, elapsed):
        scores = compute_scores(typed_count=1, errors=0, elapsed_minutes=elapsed)
        assert scores["gross_wpm"] == 100.0


class TestScoreTest:
    def test_scores_a_partial_attempt(self):
        score = score_test("the quick brown fox", "the quikc brown", elapsed_minutes=0.5)
        assert score.typed_count == 3
        assert score.errors == 2
        assert score.gross_wpm == 6.0
        assert score.net_wpm == 2.0
        assert score.accuracy == 33.33
        assert score.alignment.reference_marks == (False, True, False, True)

    def test_keeps_tokens_for_rendering(self):
        score = score_test(" a  b ", "a b", elapsed_minutes=1.0)
        assert score.reference_words == ("a", "b")
        assert score.typed_words == ("a", "b")
        assert score.errors == 0
        assert score.accuracy == 100.0

    def test_records_floored_elapsed_time(self):
        score = score_test("a", "a", elapsed_minutes=0.0)
        assert score.elapsed_minutes == 0.01
