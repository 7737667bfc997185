"""Tests for AnswerJudge."""

import pytest

from englishquest.engine.answer_judge import AnswerJudge
from englishquest.models.session import SpellingOutcome


class TestAnswerJudge:
    """Test suite for AnswerJudge."""

    def test_normalize(self):
        """Test normalization of case, width and whitespace."""
        assert AnswerJudge.normalize("  Apple ") == "apple"
        assert AnswerJudge.normalize("ＡＰＰＬＥ") == "apple"
        assert AnswerJudge.normalize("look\tup\n") == "look up"

    def test_normalize_rejects_non_strings(self):
        """Test non-string input raises TypeError."""
        with pytest.raises(TypeError):
            AnswerJudge.normalize(None)

    @pytest.mark.parametrize(
        "a,b,expected",
        [("", "", 0), ("abc", "", 3), ("", "ab", 2), ("kitten", "sitting", 3), ("accommodate", "acommodate", 1)],
    )
    def test_levenshtein(self, a, b, expected):
        """Test edit distance."""
        assert AnswerJudge.levenshtein(a, b) == expected

    @pytest.mark.parametrize(
        "answer,expected,outcome",
        [
            ("necessary", "necessary", SpellingOutcome.PERFECT),
            ("Necessary ", "necessary", SpellingOutcome.PERFECT),
            ("neccessary", "necessary", SpellingOutcome.NEAR),
            ("necesary", "necessary", SpellingOutcome.NEAR),
            ("necessery", "necessary", SpellingOutcome.NEAR),
            ("nesesary", "necessary", SpellingOutcome.FAIL),
            ("", "necessary", SpellingOutcome.FAIL),
            ("   ", "necessary", SpellingOutcome.FAIL),
        ],
    )
    def test_judge_spelling(self, answer, expected, outcome):
        """Test spelling grades."""
        assert AnswerJudge.judge_spelling(answer, expected) == outcome

    def test_judge_choice(self):
        """Test quiz answers compare normalized text."""
        assert AnswerJudge.judge_choice(" B ", "b") is True
        assert AnswerJudge.judge_choice("a", "b") is False
        assert AnswerJudge.judge_choice("", "") is False

    def test_long_answers_differing_after_the_cap(self):
        """Test answers matching only within the length cap are not accepted."""
        expected = "a" * 250
        answer = "a" * 249 + "b"
        assert AnswerJudge.judge_spelling(answer, expected) == SpellingOutcome.FAIL
        assert AnswerJudge.judge_choice(answer, expected) is False
        assert AnswerJudge.normalize(answer) == "a" * AnswerJudge.MAX_ANSWER_LENGTH
        assert AnswerJudge.normalize(answer, max_length=None) == answer
