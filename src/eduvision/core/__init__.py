# Core module initialization
from .segmenter import Segmenter, Slide, split_sentences, derive_topic
from .quiz import QuizGenerator, QuizQuestion
from .scorer import Motivation, ScoreReport, score_quiz, motivation_for
from .session import StudySession, EmptyMaterialError, create_study_session
from .narration import (
    NarrationController,
    NarrationEvent,
    NarrationState,
    SpeechBackend,
    Utterance,
)
from .navigator import (
    View,
    SessionState,
    InteractionType,
    InteractionEvent,
    Effect,
    Rejection,
    RejectionReason,
    Transition,
    transition,
)
from .interaction_handler import InteractionHandler

__all__ = [
    "Segmenter",
    "Slide",
    "split_sentences",
    "derive_topic",
    "QuizGenerator",
    "QuizQuestion",
    "Motivation",
    "ScoreReport",
    "score_quiz",
    "motivation_for",
    "StudySession",
    "EmptyMaterialError",
    "create_study_session",
    "NarrationController",
    "NarrationEvent",
    "NarrationState",
    "SpeechBackend",
    "Utterance",
    "View",
    "SessionState",
    "InteractionType",
    "InteractionEvent",
    "Effect",
    "Rejection",
    "RejectionReason",
    "Transition",
    "transition",
    "InteractionHandler",
]
