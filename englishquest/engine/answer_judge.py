"""Judging of free-text answers into session outcomes."""

import re
import unicodedata
from typing import Optional

from englishquest.models.session import SpellingOutcome


class AnswerJudge:
    """Compares player input against answer keys."""

    # Edit distance still counted as a near miss
    NEAR_DISTANCE = 1

    # Maximum answer length considered (characters)
    MAX_ANSWER_LENGTH = 200

    @staticmethod
    def normalize(text: str, max_length: Optional[int] = MAX_ANSWER_LENGTH) -> str:
        """
        Normalize an answer for comparison by:
        1. Normalizing unicode (NFKC, so full-width input matches)
        2. Removing control characters
        3. Truncating to max_length (None keeps the full text)
        4. Collapsing inner whitespace and stripping the ends
        5. Lowercasing
        """
        if not isinstance(text, str):
            raise TypeError(f"Answer must be a string, got {type(text)}")

        normalized = unicodedata.normalize("NFKC", text)
        normalized = re.sub(r"[\x00-\x1F\x7F]", " ", normalized)
        if max_length is not None:
            normalized = normalized[:max_length]
        normalized = re.sub(r"\s+", " ", normalized).strip()
        return normalized.lower()

    @staticmethod
    def levenshtein(a: str, b: str) -> int:
        """Edit distance between two strings."""
        if not a:
            return len(b)
        if not b:
            return len(a)

        previous = list(range(len(b) + 1))
        for i, char_a in enumerate(a, start=1):
            current = [i]
            for j, char_b in enumerate(b, start=1):
                cost = 0 if char_a == char_b else 1
                current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
            previous = current
        return previous[-1]

    @staticmethod
    def judge_spelling(answer: str, expected: str) -> SpellingOutcome:
        """
        Grade a typed spelling.

        Args:
            answer: Player input
            expected: Correct spelling

        Returns:
            PERFECT on an exact match, NEAR within one edit, FAIL otherwise
        """
        answer = AnswerJudge.normalize(answer)
        expected = AnswerJudge.normalize(expected, max_length=None)
        if not answer or not expected:
            return SpellingOutcome.FAIL
        if answer == expected:
            return SpellingOutcome.PERFECT
        if abs(len(answer) - len(expected)) > AnswerJudge.NEAR_DISTANCE:
            return SpellingOutcome.FAIL
        if AnswerJudge.levenshtein(answer, expected) <= AnswerJudge.NEAR_DISTANCE:
            return SpellingOutcome.NEAR
        return SpellingOutcome.FAIL

    @staticmethod
    def judge_choice(answer: str, expected: str) -> bool:
        """Check a quiz answer (choice label or typed text) against its key."""
        answer = AnswerJudge.normalize(answer)
        return bool(answer) and answer == AnswerJudge.normalize(expected, max_length=None)
