"""
Quiz Generator - Produces the fixed three-question review quiz attached to every session.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

QUIZ_LENGTH = 3
OPTIONS_PER_QUESTION = 4


@dataclass(frozen=True)
class QuizQuestion:
    """A multiple-choice question with exactly four options."""
    question: str
    options: Tuple[str, ...]
    correct_answer: int
    explanation: str

    def __post_init__(self):
        if len(self.options) != OPTIONS_PER_QUESTION:
            raise ValueError(f"Quiz questions need {OPTIONS_PER_QUESTION} options, got {len(self.options)}")
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError(f"correct_answer {self.correct_answer} is not an option index")

    def is_correct(self, option: int) -> bool:
        """Whether the given option index is the right answer."""
        return option == self.correct_answer

    def to_dict(self) -> Dict:
        """Convert question to dictionary."""
        return {
            "question": self.question,
            "options": list(self.options),
            "correct_answer": self.correct_answer,
            "explanation": self.explanation,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'QuizQuestion':
        """Create QuizQuestion from dictionary."""
        return cls(
            question=data['question'],
            options=tuple(data['options']),
            correct_answer=data['correct_answer'],
            explanation=data.get('explanation', ""),
        )


_FIXED_QUIZ: Tuple[QuizQuestion, ...] = (
    QuizQuestion(
        question="What is the main concept discussed in this material?",
        options=(
            "Basic fundamentals and core principles",
            "Advanced theoretical frameworks",
            "Practical applications only",
            "Historical background information",
        ),
        correct_answer=0,
        explanation=(
            "The material focuses on fundamental concepts and core principles "
            "as the foundation for understanding."
        ),
    ),
    QuizQuestion(
        question="Which learning approach is most effective for this topic?",
        options=(
            "Memorization only",
            "Active engagement and practice",
            "Passive reading",
            "Group discussions only",
        ),
        correct_answer=1,
        explanation=(
            "Active engagement and practice help reinforce learning and "
            "improve retention of the material."
        ),
    ),
    QuizQuestion(
        question="What is the key benefit of visual learning aids?",
        options=(
            "They look attractive",
            "They replace text completely",
            "They enhance comprehension and memory retention",
            "They are easier to create",
        ),
        correct_answer=2,
        explanation=(
            "Visual learning aids significantly enhance comprehension and "
            "help with long-term memory retention."
        ),
    ),
)


class QuizGenerator:
    """Generate the session quiz."""

    def generate(self, topic: str = "") -> Tuple[QuizQuestion, ...]:
        """
        Return the review quiz for a session.

        The questions do not depend on the material; the topic is only
        attached to the session alongside them.
        """
        return _FIXED_QUIZ
