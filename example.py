"""
Example script demonstrating the EduVision workflow.
This shows how to use all the components together without the UI.
"""

import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from eduvision.core import InteractionHandler
from eduvision.core.tts_engine import create_speech_backend
from eduvision.utils import Config, get_benchmark_tracker, get_timestamp, read_study_material

SAMPLE_MATERIAL = """
Photosynthesis is the process plants use to turn light into chemical energy.
It takes place mainly in the chloroplasts of leaf cells.
Chlorophyll absorbs red and blue light while reflecting green light.
The light-dependent reactions split water and release oxygen.
The Calvin cycle uses carbon dioxide to build sugar molecules.
Temperature and light intensity both affect the rate of photosynthesis.
"""


def main():
    """Run example EduVision workflow."""
    logging.basicConfig(level=Config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    print("📘 EduVision Example Workflow\n")

    # Study material from a file argument, or the built-in sample
    if len(sys.argv) > 1:
        material = read_study_material(Path(sys.argv[1]))
    else:
        material = SAMPLE_MATERIAL

    handler = InteractionHandler(speech_backend=create_speech_backend())

    # Step 1: Build the session
    print("1️⃣ Creating study session...")
    result = handler.create_session(material)
    if not result.accepted:
        print(f"❌ {result.rejection.message}")
        return

    state = handler.get_current_state()
    print(f"✅ Topic: {state.session.topic}")
    print(f"✅ {len(state.session.slides)} slides\n")

    # Step 2: Walk the slides
    print("2️⃣ Presenting slides...")
    while True:
        slide = handler.get_current_state().slide
        print(f"   {slide.title}")
        for line in slide.content:
            print(f"     - {line}")
        if handler.get_current_state().is_last_slide:
            break
        handler.next_slide()
    print()

    # Step 3: Answer the quiz with the correct keys
    print("3️⃣ Taking the quiz...")
    handler.start_quiz()
    for question in handler.get_current_state().session.quiz:
        handler.select_answer(question.correct_answer)
        print(f"   Q: {question.question}")
        print(f"   A: {question.options[question.correct_answer]}")
        handler.next_question()
    print()

    # Step 4: Results
    report = handler.get_current_state().score_report
    print(f"4️⃣ Score: {report.score}% ({report.correct_count}/{report.total})")
    print(f"   {report.motivation.message}")
    print(f"   Topics mastered: {report.topics_mastered(len(state.session.slides))}/{len(state.session.slides)}, {report.readiness}\n")

    handler.close()
    Config.ensure_directories()
    get_benchmark_tracker().save_json(Config.BENCHMARK_DIR / f"example_{get_timestamp()}.json")
    print("✨ Example completed!")


if __name__ == "__main__":
    main()
