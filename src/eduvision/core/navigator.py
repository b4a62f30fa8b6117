"""
Session Navigator - Pure state transitions for the study session.

Every transition takes the current SessionState and an InteractionEvent and
returns a Transition: either a new state plus the narration effects the
caller must apply, or the unchanged state with a typed Rejection.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, Mapping, Optional, Tuple

from .quiz import QuizQuestion
from .scorer import ScoreReport, score_quiz
from .segmenter import Slide
from .session import StudySession, EmptyMaterialError, create_study_session


class View(Enum):
    """Screens of the study flow."""
    UPLOAD = "upload"
    PRESENTATION = "presentation"
    QUIZ = "quiz"
    RESULTS = "results"


class InteractionType(Enum):
    """Types of user interactions."""
    CREATE_SESSION = "create_session"
    NEXT_SLIDE = "next"
    PREVIOUS_SLIDE = "previous"
    GO_TO_SLIDE = "goto"
    SPEAK = "speak"
    TOGGLE_MUTE = "toggle_mute"
    START_QUIZ = "start_quiz"
    SELECT_ANSWER = "select_answer"
    NEXT_QUESTION = "next_question"
    REVIEW_SLIDES = "review_slides"
    RETAKE_QUIZ = "retake_quiz"
    RESET = "reset"


@dataclass(frozen=True)
class InteractionEvent:
    """Represents a user interaction event."""
    interaction_type: InteractionType
    data: Optional[dict] = None

    def get(self, key: str, default=None):
        return (self.data or {}).get(key, default)


class Effect(Enum):
    """Narration side effects requested by a transition."""
    CANCEL_NARRATION = "cancel_narration"
    RESET_NARRATION = "reset_narration"
    SPEAK_SLIDE = "speak_slide"
    TOGGLE_MUTE = "toggle_mute"


class RejectionReason(Enum):
    """Why an interaction was refused."""
    WRONG_VIEW = "wrong_view"
    EMPTY_MATERIAL = "empty_material"
    INVALID_SLIDE_INDEX = "invalid_slide_index"
    NOT_ON_LAST_SLIDE = "not_on_last_slide"
    WRONG_QUESTION = "wrong_question"
    INVALID_OPTION = "invalid_option"
    ANSWER_REQUIRED = "answer_required"


@dataclass(frozen=True)
class Rejection:
    """A refused interaction and the reason for it."""
    reason: RejectionReason
    message: str


@dataclass(frozen=True)
class SessionState:
    """Everything the study flow tracks for the active session."""
    view: View = View.UPLOAD
    session: Optional[StudySession] = None
    current_slide: int = 0
    current_question_index: int = 0
    answers: Mapping[int, int] = field(default_factory=dict)
    score_report: Optional[ScoreReport] = None

    @property
    def slide(self) -> Optional[Slide]:
        if self.session is None:
            return None
        return self.session.slides[self.current_slide]

    @property
    def question(self) -> Optional[QuizQuestion]:
        if self.session is None:
            return None
        return self.session.quiz[self.current_question_index]

    @property
    def score(self) -> int:
        return self.score_report.score if self.score_report else 0

    @property
    def is_last_slide(self) -> bool:
        return self.session is not None and self.current_slide == self.session.last_slide_index

    @property
    def is_last_question(self) -> bool:
        return self.session is not None and self.current_question_index == self.session.last_question_index

    @property
    def current_answer(self) -> Optional[int]:
        return self.answers.get(self.current_question_index)


@dataclass(frozen=True)
class Transition:
    """Result of applying one interaction to a state."""
    state: SessionState
    effects: Tuple[Effect, ...] = ()
    rejection: Optional[Rejection] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


def _reject(state: SessionState, reason: RejectionReason, message: str) -> Transition:
    return Transition(state=state, rejection=Rejection(reason, message))


def _require_view(state: SessionState, *views: View) -> Optional[Transition]:
    if state.view in views:
        return None
    expected = " or ".join(v.value for v in views)
    return _reject(state, RejectionReason.WRONG_VIEW, f"Not available in {state.view.value} view (needs {expected})")


def create_session(state: SessionState, event: InteractionEvent) -> Transition:
    """Upload -> Presentation once the material yields a session."""
    rejected = _require_view(state, View.UPLOAD)
    if rejected:
        return rejected

    try:
        session = create_study_session(event.get("material", ""))
    except EmptyMaterialError as e:
        return _reject(state, RejectionReason.EMPTY_MATERIAL, str(e))

    return Transition(SessionState(view=View.PRESENTATION, session=session))


def next_slide(state: SessionState, event: InteractionEvent) -> Transition:
    """Advance one slide, staying put on the last one."""
    rejected = _require_view(state, View.PRESENTATION)
    if rejected:
        return rejected

    index = min(state.current_slide + 1, state.session.last_slide_index)
    return Transition(replace(state, current_slide=index), (Effect.CANCEL_NARRATION,))


def previous_slide(state: SessionState, event: InteractionEvent) -> Transition:
    """Go back one slide, staying put on the first one."""
    rejected = _require_view(state, View.PRESENTATION)
    if rejected:
        return rejected

    index = max(state.current_slide - 1, 0)
    return Transition(replace(state, current_slide=index), (Effect.CANCEL_NARRATION,))


def go_to_slide(state: SessionState, event: InteractionEvent) -> Transition:
    """Jump to any slide by index."""
    rejected = _require_view(state, View.PRESENTATION)
    if rejected:
        return rejected

    index = event.get("slide_index")
    if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index <= state.session.last_slide_index:
        return _reject(state, RejectionReason.INVALID_SLIDE_INDEX, f"No slide at index {index!r}")

    return Transition(replace(state, current_slide=index), (Effect.CANCEL_NARRATION,))


def speak(state: SessionState, event: InteractionEvent) -> Transition:
    """Narrate (or stop narrating) the visible slide."""
    rejected = _require_view(state, View.PRESENTATION)
    if rejected:
        return rejected
    return Transition(state, (Effect.SPEAK_SLIDE,))


def toggle_mute(state: SessionState, event: InteractionEvent) -> Transition:
    return Transition(state, (Effect.TOGGLE_MUTE,))


def start_quiz(state: SessionState, event: InteractionEvent) -> Transition:
    """Presentation -> Quiz, only from the last slide."""
    rejected = _require_view(state, View.PRESENTATION)
    if rejected:
        return rejected

    if not state.is_last_slide:
        return _reject(state, RejectionReason.NOT_ON_LAST_SLIDE, "The quiz starts from the last slide")

    return Transition(
        replace(state, view=View.QUIZ, current_question_index=0, answers={}, score_report=None),
        (Effect.CANCEL_NARRATION,)
    )


def select_answer(state: SessionState, event: InteractionEvent) -> Transition:
    """Record (or overwrite) the answer to the visible question."""
    rejected = _require_view(state, View.QUIZ)
    if rejected:
        return rejected

    question_index = event.get("question_index", state.current_question_index)
    if question_index != state.current_question_index:
        return _reject(
            state, RejectionReason.WRONG_QUESTION,
            f"Question {question_index!r} is not the visible question ({state.current_question_index})"
        )

    option = event.get("option")
    if not isinstance(option, int) or isinstance(option, bool) or not 0 <= option < len(state.question.options):
        return _reject(state, RejectionReason.INVALID_OPTION, f"No option at index {option!r}")

    answers = {**state.answers, question_index: option}
    return Transition(replace(state, answers=answers))


def next_question(state: SessionState, event: InteractionEvent) -> Transition:
    """Advance the quiz; past the last question the attempt is scored."""
    rejected = _require_view(state, View.QUIZ)
    if rejected:
        return rejected

    if state.current_answer is None:
        return _reject(state, RejectionReason.ANSWER_REQUIRED, "Answer the question before continuing")

    if not state.is_last_question:
        return Transition(replace(state, current_question_index=state.current_question_index + 1))

    report = score_quiz(state.answers, state.session.quiz)
    return Transition(replace(state, view=View.RESULTS, score_report=report))


def review_slides(state: SessionState, event: InteractionEvent) -> Transition:
    """Results -> Presentation from the first slide; answers are kept."""
    rejected = _require_view(state, View.RESULTS)
    if rejected:
        return rejected
    return Transition(replace(state, view=View.PRESENTATION, current_slide=0))


def retake_quiz(state: SessionState, event: InteractionEvent) -> Transition:
    """Results -> Quiz with a clean attempt."""
    rejected = _require_view(state, View.RESULTS)
    if rejected:
        return rejected
    return Transition(replace(state, view=View.QUIZ, current_question_index=0, answers={}, score_report=None))


def reset(state: SessionState, event: InteractionEvent) -> Transition:
    """Any view -> Upload, discarding the session."""
    return Transition(SessionState(), (Effect.RESET_NARRATION,))


TRANSITIONS: Dict[InteractionType, Callable[[SessionState, InteractionEvent], Transition]] = {
    InteractionType.CREATE_SESSION: create_session,
    InteractionType.NEXT_SLIDE: next_slide,
    InteractionType.PREVIOUS_SLIDE: previous_slide,
    InteractionType.GO_TO_SLIDE: go_to_slide,
    InteractionType.SPEAK: speak,
    InteractionType.TOGGLE_MUTE: toggle_mute,
    InteractionType.START_QUIZ: start_quiz,
    InteractionType.SELECT_ANSWER: select_answer,
    InteractionType.NEXT_QUESTION: next_question,
    InteractionType.REVIEW_SLIDES: review_slides,
    InteractionType.RETAKE_QUIZ: retake_quiz,
    InteractionType.RESET: reset,
}


def transition(state: SessionState, event: InteractionEvent) -> Transition:
    """Apply one interaction to a state."""
    return TRANSITIONS[event.interaction_type](state, event)
