"""
Scorer - Grades recorded quiz answers and maps scores to motivational feedback.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Sequence, Tuple

from .quiz import QuizQuestion

READY_THRESHOLD = 70


class Motivation(Enum):
    """Feedback tiers, highest first. Value is (lower bound, message, accent colour)."""
    MASTERED = (90, "Outstanding! You've mastered this topic! 🌟", "yellow")
    ON_TRACK = (70, "Great job! You're on the right track! 💪", "green")
    GOOD_EFFORT = (50, "Good effort! Keep practicing to improve! 📚", "blue")
    DONT_GIVE_UP = (0, "Don't give up! Review the material and try again! 🚀", "orange")

    @property
    def lower_bound(self) -> int:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]

    @property
    def color(self) -> str:
        return self.value[2]


@dataclass(frozen=True)
class ScoreReport:
    """Outcome of grading one quiz attempt."""
    correct_count: int
    total: int
    score: int
    results: Tuple[bool, ...]  # per-question correctness, in quiz order

    @property
    def motivation(self) -> Motivation:
        return motivation_for(self.score)

    @property
    def is_ready(self) -> bool:
        return self.score >= READY_THRESHOLD

    @property
    def readiness(self) -> str:
        """Whether to move on ("Ready") or go back over the slides ("Review")."""
        return "Ready" if self.is_ready else "Review"

    def topics_mastered(self, slide_count: int) -> int:
        """Share of the session's slides covered by the score, rounded."""
        return round_half_up(self.score / 100 * slide_count)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return int(math.floor(value + 0.5))


def score_quiz(answers: Mapping[int, int], quiz: Sequence[QuizQuestion]) -> ScoreReport:
    """
    Grade an answer record against the quiz keys.

    Args:
        answers: Question index -> selected option index; may be sparse
        quiz: The questions in order

    Returns:
        ScoreReport with the rounded percentage score
    """
    if not quiz:
        raise ValueError("Cannot score an empty quiz")

    results = tuple(
        index in answers and question.is_correct(answers[index])
        for index, question in enumerate(quiz)
    )
    correct_count = sum(results)

    return ScoreReport(
        correct_count=correct_count,
        total=len(quiz),
        score=round_half_up(correct_count / len(quiz) * 100),
        results=results,
    )


def motivation_for(score: int) -> Motivation:
    """Map a 0-100 score onto its feedback tier."""
    if not 0 <= score <= 100:
        raise ValueError(f"Score must be between 0 and 100, got {score}")

    for tier in Motivation:
        if score >= tier.lower_bound:
            return tier
    raise AssertionError("Motivation tiers must cover 0-100")
