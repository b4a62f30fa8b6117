"""
Utility helper functions for EduVision.
"""

from pathlib import Path
from typing import Union
from datetime import datetime

SUPPORTED_MATERIAL_SUFFIXES = (".txt", ".md")


def read_study_material(file_path: Union[str, Path]) -> str:
    """
    Read a local study-material file as UTF-8 text.

    Args:
        file_path: Path to a .txt or .md file

    Returns:
        The file contents
    """
    path = Path(file_path)
    if path.suffix.lower() not in SUPPORTED_MATERIAL_SUFFIXES:
        raise ValueError(
            f"Unsupported material format: {path.suffix or '<none>'}. "
            f"Supported: {', '.join(SUPPORTED_MATERIAL_SUFFIXES)}"
        )
    return path.read_text(encoding="utf-8")


def decode_study_material(data: bytes) -> str:
    """Decode uploaded file bytes as UTF-8, replacing undecodable bytes."""
    return data.decode("utf-8", errors="replace")


def estimate_audio_duration(text: str, words_per_minute: int = 150, rate: float = 1.0) -> float:
    """Estimate spoken duration in seconds based on word count and speaking rate."""
    word_count = len(text.split())
    duration_minutes = word_count / words_per_minute
    return duration_minutes * 60 / rate


def get_timestamp() -> str:
    """Get current timestamp string."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")
