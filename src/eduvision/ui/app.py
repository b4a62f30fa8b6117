"""
EduVision - Streamlit UI
Turns pasted or uploaded study material into narrated slides and a scored quiz.
"""

import logging
import sys
import time
from pathlib import Path

import streamlit as st

# Add src to path
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from eduvision.core import InteractionHandler, View
from eduvision.core.tts_engine import create_speech_backend
from eduvision.utils import Config, decode_study_material

logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger("eduvision.ui")

# Page config
st.set_page_config(
    page_title="EduVision",
    page_icon="📘",
    layout="centered",
)

# Initialize session state
if 'handler' not in st.session_state:
    st.session_state.handler = InteractionHandler(speech_backend=create_speech_backend())
if 'study_material' not in st.session_state:
    st.session_state.study_material = ""
if 'last_rejection' not in st.session_state:
    st.session_state.last_rejection = None


def _record_rejection(rejection):
    st.session_state.last_rejection = rejection.message


def act(action, *args):
    """Run a handler action and rerun the script so the new view renders."""
    handler: InteractionHandler = st.session_state.handler
    handler.on_rejected = _record_rejection
    st.session_state.last_rejection = None
    result = action(*args)
    if result.accepted:
        st.rerun()


def main():
    """Main application."""
    try:
        Config.validate()
    except ValueError as e:
        st.error(f"Configuration Error: {e}")
        st.info("Set up your API key in the .env file, or turn narration off with TTS_PROVIDER=none.")
        st.code("""
# Create .env file with:
OPENAI_API_KEY=sk-your-key-here
TTS_PROVIDER=openai
TTS_VOICE=alloy
PROCESSING_DELAY=2.0
        """, language="bash")
        return

    handler: InteractionHandler = st.session_state.handler
    state = handler.get_current_state()

    col1, col2 = st.columns([4, 1])
    with col1:
        st.title("📘 EduVision")
        st.caption("Interactive learning from your own study material")
    with col2:
        if state.view is not View.UPLOAD and st.button("New Session", width="stretch"):
            st.session_state.study_material = ""
            act(handler.reset)

    if st.session_state.last_rejection:
        st.warning(st.session_state.last_rejection)

    if state.view is View.UPLOAD:
        show_upload_page()
    elif state.view is View.PRESENTATION:
        show_presentation_page()
    elif state.view is View.QUIZ:
        show_quiz_page()
    else:
        show_results_page()


def show_upload_page():
    """Show material entry and processing."""
    handler: InteractionHandler = st.session_state.handler

    st.header("Transform Your Study Materials")

    uploaded_file = st.file_uploader("Upload a text file", type=["txt", "md"])
    if uploaded_file is not None:
        st.session_state.study_material = decode_study_material(uploaded_file.getvalue())

    material = st.text_area(
        "Paste your study material or upload a text file:",
        value=st.session_state.study_material,
        placeholder="Paste your textbook content, lecture notes, or any study material here...",
        height=250,
    )
    st.session_state.study_material = material

    if st.button(
        "Create Interactive Presentation",
        type="primary",
        width="stretch",
        disabled=not material.strip(),
    ):
        with st.spinner("Processing your material..."):
            time.sleep(Config.PROCESSING_DELAY)
        act(handler.create_session, material)


def show_presentation_page():
    """Show the current slide with narration and navigation controls."""
    handler: InteractionHandler = st.session_state.handler
    state = handler.get_current_state()
    session = state.session
    slide = state.slide

    st.subheader(session.topic)
    st.caption(f"Slide {state.current_slide + 1} of {len(session.slides)}")

    with st.container(border=True):
        st.markdown(f"### {slide.title}")
        for line in slide.content:
            st.markdown(f"- {line}")
        st.caption(f"🖼️ {slide.image_prompt}")

    narration = handler.narration
    col1, col2 = st.columns(2)
    with col1:
        # Playback state changes on the audio thread; the label catches up on the next rerun
        if narration.is_playing:
            label = "⏸ Stop narration"
        elif narration.active_request:
            label = "⏳ Cancel narration"
        else:
            label = "▶ Narrate slide"
        if st.button(label, width="stretch", disabled=not narration.available):
            act(handler.speak)
    with col2:
        if st.button("🔇 Unmute" if narration.is_muted else "🔊 Mute", width="stretch"):
            act(handler.toggle_mute)
    if not narration.available:
        st.caption("Narration is not available in this environment.")
    elif narration.active_request:
        status = "Narrating" if narration.is_playing else "Preparing narration"
        st.caption(f"🔊 {status}... status refreshes on your next interaction.")

    prev_col, dots_col, next_col = st.columns([1, 3, 1])
    with prev_col:
        if st.button("◀ Previous", width="stretch", disabled=state.current_slide == 0):
            act(handler.previous_slide)
    with dots_col:
        dots = st.columns(len(session.slides))
        for index, dot in enumerate(dots):
            with dot:
                marker = "●" if index == state.current_slide else "○"
                if st.button(marker, key=f"slide_dot_{index}"):
                    act(handler.go_to_slide, index)
    with next_col:
        if state.is_last_slide:
            if st.button("Start Quiz", type="primary", width="stretch"):
                act(handler.start_quiz)
        elif st.button("Next ▶", width="stretch"):
            act(handler.next_slide)


def show_quiz_page():
    """Show the visible quiz question."""
    handler: InteractionHandler = st.session_state.handler
    state = handler.get_current_state()
    question = state.question
    total = len(state.session.quiz)

    st.progress((state.current_question_index + 1) / total)
    st.caption(f"Question {state.current_question_index + 1} of {total}")
    st.markdown(f"### {question.question}")

    for index, option in enumerate(question.options):
        selected = state.current_answer == index
        if st.button(
            f"{'✅ ' if selected else ''}{option}",
            key=f"q{state.current_question_index}_opt{index}",
            width="stretch",
            type="primary" if selected else "secondary",
        ):
            act(handler.select_answer, index)

    label = "Finish Quiz" if state.is_last_question else "Next Question"
    if st.button(label, disabled=state.current_answer is None):
        act(handler.next_question)


def show_results_page():
    """Show score, motivation and per-question review."""
    handler: InteractionHandler = st.session_state.handler
    state = handler.get_current_state()
    report = state.score_report
    motivation = report.motivation

    st.header("Quiz Complete!")
    st.metric("Score", f"{report.score}%", help=f"{report.correct_count} of {report.total} correct")
    st.markdown(f":{motivation.color}[**{motivation.message}**]")

    st.subheader("Performance Insights")
    slide_count = len(state.session.slides)
    col1, col2, col3 = st.columns(3)
    col1.metric("Questions Correct", f"{report.correct_count}/{report.total}")
    col2.metric("Topics Mastered", f"{report.topics_mastered(slide_count)}/{slide_count}")
    col3.metric("Readiness", report.readiness)

    for index, (question, correct) in enumerate(zip(state.session.quiz, report.results)):
        with st.expander(f"{'✅' if correct else '❌'} {question.question}"):
            answer = state.answers.get(index)
            if answer is not None:
                st.write(f"Your answer: {question.options[answer]}")
            st.write(f"Correct answer: {question.options[question.correct_answer]}")
            st.caption(question.explanation)

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Review Slides", width="stretch"):
            act(handler.review_slides)
    with col2:
        if st.button("Retake Quiz", type="primary", width="stretch"):
            act(handler.retake_quiz)


if __name__ == "__main__":
    main()
