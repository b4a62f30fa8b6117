"""
Study Session - Combines segmented slides and the review quiz into one artifact.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .segmenter import Segmenter, Slide, split_sentences, derive_topic
from .quiz import QuizGenerator, QuizQuestion, QUIZ_LENGTH

logger = logging.getLogger(__name__)


class EmptyMaterialError(ValueError):
    """Raised when study material yields nothing to present."""


@dataclass(frozen=True)
class StudySession:
    """Slides, quiz and topic derived from one piece of study material."""
    slides: Tuple[Slide, ...]
    quiz: Tuple[QuizQuestion, ...]
    topic: str

    def __post_init__(self):
        if not self.slides:
            raise EmptyMaterialError("A study session needs at least one slide")
        if len(self.quiz) != QUIZ_LENGTH:
            raise ValueError(f"A study session quiz has exactly {QUIZ_LENGTH} questions, got {len(self.quiz)}")

    @property
    def last_slide_index(self) -> int:
        return len(self.slides) - 1

    @property
    def last_question_index(self) -> int:
        return len(self.quiz) - 1

    def to_dict(self) -> Dict:
        """Convert session to dictionary."""
        return {
            "topic": self.topic,
            "slides": [slide.to_dict() for slide in self.slides],
            "quiz": [question.to_dict() for question in self.quiz],
        }


def create_study_session(
    material: str,
    segmenter: Optional[Segmenter] = None,
    quiz_generator: Optional[QuizGenerator] = None
) -> StudySession:
    """
    Build a study session from raw material.

    Args:
        material: Pasted or loaded study text
        segmenter: Segmenter to use (default instance if omitted)
        quiz_generator: Quiz generator to use (default instance if omitted)

    Returns:
        A StudySession with at least one slide

    Raises:
        EmptyMaterialError: If the material is blank or has no sentence
            longer than ten characters
    """
    if not material or not material.strip():
        raise EmptyMaterialError("Study material is empty")

    segmenter = segmenter or Segmenter()
    quiz_generator = quiz_generator or QuizGenerator()

    sentences = split_sentences(material)
    if not sentences:
        raise EmptyMaterialError("Study material has no sentences long enough to build slides")

    topic = derive_topic(sentences)
    slides = segmenter.segment(material)
    quiz = quiz_generator.generate(topic)

    logger.info("Created study session '%s' with %d slides from %d sentences", topic, len(slides), len(sentences))

    return StudySession(slides=tuple(slides), quiz=tuple(quiz), topic=topic)
