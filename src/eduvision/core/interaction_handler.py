"""
Interaction Handler - Owns the session state and routes user interactions.
Navigator transitions are applied here together with their narration effects.
"""

import logging
from typing import Callable, Optional

from ..utils.benchmark import get_benchmark_tracker
from .narration import NarrationController, SpeechBackend
from .navigator import (
    Effect,
    InteractionEvent,
    InteractionType,
    Rejection,
    SessionState,
    Transition,
    View,
    transition,
)

logger = logging.getLogger(__name__)


class InteractionHandler:
    """Central handler for all user interactions."""

    def __init__(
        self,
        narration: Optional[NarrationController] = None,
        speech_backend: Optional[SpeechBackend] = None
    ):
        """
        Initialize interaction handler.

        Args:
            narration: Narration controller to drive (built from speech_backend if omitted)
            speech_backend: Speech capability for a new controller; None disables narration
        """
        self.narration = narration or NarrationController(speech_backend)
        self.state = SessionState()

        # Callbacks for UI updates
        self.on_state_change: Optional[Callable[[SessionState], None]] = None
        self.on_rejected: Optional[Callable[[Rejection], None]] = None

    def handle_interaction(self, event: InteractionEvent) -> Transition:
        """
        Handle a user interaction event.

        Args:
            event: The interaction event to handle

        Returns:
            The transition that was applied or rejected
        """
        result = transition(self.state, event)

        if not result.accepted:
            logger.info("Rejected %s: %s", event.interaction_type.value, result.rejection.message)
            if self.on_rejected:
                self.on_rejected(result.rejection)
            return result

        previous_view = self.state.view
        self.state = result.state
        for effect in result.effects:
            self._apply_effect(effect)

        if previous_view is not self.state.view:
            logger.info("View %s -> %s", previous_view.value, self.state.view.value)
        if self.state.view is View.RESULTS and previous_view is not View.RESULTS:
            logger.info("Quiz scored %d%%", self.state.score)
            get_benchmark_tracker().log_summary()

        # Notify UI of state change
        if self.on_state_change:
            self.on_state_change(self.state)
        return result

    def _apply_effect(self, effect: Effect) -> None:
        if effect is Effect.CANCEL_NARRATION:
            self.narration.cancel_on_navigate()
        elif effect is Effect.RESET_NARRATION:
            self.narration.reset()
        elif effect is Effect.SPEAK_SLIDE:
            self.narration.speak(self.state.slide)
        elif effect is Effect.TOGGLE_MUTE:
            self.narration.toggle_mute()

    def _dispatch(self, interaction_type: InteractionType, **data) -> Transition:
        return self.handle_interaction(InteractionEvent(interaction_type, data or None))

    def create_session(self, material: str) -> Transition:
        return self._dispatch(InteractionType.CREATE_SESSION, material=material)

    def next_slide(self) -> Transition:
        return self._dispatch(InteractionType.NEXT_SLIDE)

    def previous_slide(self) -> Transition:
        return self._dispatch(InteractionType.PREVIOUS_SLIDE)

    def go_to_slide(self, slide_index: int) -> Transition:
        return self._dispatch(InteractionType.GO_TO_SLIDE, slide_index=slide_index)

    def speak(self) -> Transition:
        return self._dispatch(InteractionType.SPEAK)

    def toggle_mute(self) -> Transition:
        return self._dispatch(InteractionType.TOGGLE_MUTE)

    def start_quiz(self) -> Transition:
        return self._dispatch(InteractionType.START_QUIZ)

    def select_answer(self, option: int) -> Transition:
        return self._dispatch(InteractionType.SELECT_ANSWER, option=option)

    def next_question(self) -> Transition:
        return self._dispatch(InteractionType.NEXT_QUESTION)

    def review_slides(self) -> Transition:
        return self._dispatch(InteractionType.REVIEW_SLIDES)

    def retake_quiz(self) -> Transition:
        return self._dispatch(InteractionType.RETAKE_QUIZ)

    def reset(self) -> Transition:
        return self._dispatch(InteractionType.RESET)

    def get_current_state(self) -> SessionState:
        """Get current session state."""
        return self.state

    def close(self) -> None:
        """Tear down: stop any narration still in flight."""
        self.narration.reset()
