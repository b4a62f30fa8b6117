"""Tests for the fixed quiz, grading and motivation tiers."""

import pytest

from eduvision.core.quiz import QuizGenerator, QuizQuestion
from eduvision.core.scorer import Motivation, ScoreReport, motivation_for, round_half_up, score_quiz

EXPECTED_QUIZ = [
    {
        "question": "What is the main concept discussed in this material?",
        "options": [
            "Basic fundamentals and core principles",
            "Advanced theoretical frameworks",
            "Practical applications only",
            "Historical background information",
        ],
        "correct_answer": 0,
        "explanation": "The material focuses on fundamental concepts and core principles as the foundation for understanding.",
    },
    {
        "question": "Which learning approach is most effective for this topic?",
        "options": [
            "Memorization only",
            "Active engagement and practice",
            "Passive reading",
            "Group discussions only",
        ],
        "correct_answer": 1,
        "explanation": "Active engagement and practice help reinforce learning and improve retention of the material.",
    },
    {
        "question": "What is the key benefit of visual learning aids?",
        "options": [
            "They look attractive",
            "They replace text completely",
            "They enhance comprehension and memory retention",
            "They are easier to create",
        ],
        "correct_answer": 2,
        "explanation": "Visual learning aids significantly enhance comprehension and help with long-term memory retention.",
    },
]


@pytest.fixture
def quiz():
    return QuizGenerator().generate("Any topic...")


class TestQuizGenerator:
    def test_quiz_is_the_fixed_fixture(self, quiz):
        assert [q.to_dict() for q in quiz] == EXPECTED_QUIZ

    def test_quiz_does_not_depend_on_topic(self):
        generator = QuizGenerator()
        assert generator.generate("Photosynthesis...") == generator.generate("Study Topic")

    def test_question_needs_four_options(self):
        with pytest.raises(ValueError):
            QuizQuestion(question="Q?", options=("a", "b", "c"), correct_answer=0, explanation="")

    def test_correct_answer_must_be_an_option(self):
        with pytest.raises(ValueError):
            QuizQuestion(question="Q?", options=("a", "b", "c", "d"), correct_answer=4, explanation="")

    def test_from_dict(self):
        question = QuizQuestion.from_dict(EXPECTED_QUIZ[1])
        assert question.is_correct(1)
        assert not question.is_correct(0)


class TestScoreQuiz:
    def test_all_correct(self, quiz):
        report = score_quiz({0: 0, 1: 1, 2: 2}, quiz)
        assert report.score == 100
        assert report.correct_count == 3
        assert report.results == (True, True, True)

    def test_two_of_three(self, quiz):
        report = score_quiz({0: 1, 1: 1, 2: 2}, quiz)
        assert report.score == 67
        assert report.results == (False, True, True)

    def test_no_answers(self, quiz):
        report = score_quiz({}, quiz)
        assert report.score == 0
        assert report.results == (False, False, False)

    def test_missing_answers_never_match(self, quiz):
        report = score_quiz({0: 0}, quiz)
        assert report.score == 33
        assert report.total == 3

    def test_empty_quiz_is_an_error(self):
        with pytest.raises(ValueError):
            score_quiz({}, [])

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(66.6667) == 67
        assert round_half_up(33.3333) == 33


class TestMotivation:
    @pytest.mark.parametrize("score, tier", [
        (100, Motivation.MASTERED),
        (90, Motivation.MASTERED),
        (89, Motivation.ON_TRACK),
        (70, Motivation.ON_TRACK),
        (69, Motivation.GOOD_EFFORT),
        (50, Motivation.GOOD_EFFORT),
        (49, Motivation.DONT_GIVE_UP),
        (0, Motivation.DONT_GIVE_UP),
    ])
    def test_band_boundaries(self, score, tier):
        assert motivation_for(score) is tier

    def test_every_score_has_a_tier(self):
        assert all(isinstance(motivation_for(score), Motivation) for score in range(0, 101))

    @pytest.mark.parametrize("score", [-1, 101])
    def test_out_of_range(self, score):
        with pytest.raises(ValueError):
            motivation_for(score)

    def test_report_motivation(self, quiz):
        assert score_quiz({0: 0, 1: 1, 2: 2}, quiz).motivation is Motivation.MASTERED
        assert score_quiz({0: 0, 1: 1}, quiz).motivation is Motivation.GOOD_EFFORT
        assert score_quiz({0: 0}, quiz).motivation is Motivation.DONT_GIVE_UP
        assert "mastered" in Motivation.MASTERED.message


def report_with_score(score: int) -> ScoreReport:
    return ScoreReport(correct_count=0, total=3, score=score, results=(False, False, False))


class TestInsights:
    @pytest.mark.parametrize("score, readiness", [
        (100, "Ready"),
        (70, "Ready"),
        (69, "Review"),
        (0, "Review"),
    ])
    def test_readiness_threshold(self, score, readiness):
        report = report_with_score(score)
        assert report.readiness == readiness
        assert report.is_ready is (readiness == "Ready")

    @pytest.mark.parametrize("score, slide_count, mastered", [
        (100, 4, 4),
        (67, 4, 3),   # 2.68
        (67, 5, 3),   # 3.35
        (33, 5, 2),   # 1.65
        (50, 3, 2),   # 1.5 rounds up
        (0, 4, 0),
    ])
    def test_topics_mastered(self, score, slide_count, mastered):
        assert report_with_score(score).topics_mastered(slide_count) == mastered

    def test_questions_correct_from_scored_attempt(self, quiz):
        report = score_quiz({0: 0, 1: 1}, quiz)
        assert (report.correct_count, report.total) == (2, 3)
        assert report.readiness == "Review"
        assert report.topics_mastered(4) == 3
