"""EduVision - narrated study slides and review quizzes from plain text."""

__version__ = "0.1.0"
